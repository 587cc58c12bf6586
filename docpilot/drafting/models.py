"""Executive summary schema returned by the remote summarization service."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

Trend = Literal["up", "down", "stable"]
Confidence = Literal["Strong", "Incomplete"]
Impact = Literal["High", "Medium", "Low"]


class _WireModel(BaseModel):
    # The remote schema uses camelCase keys
    model_config = ConfigDict(populate_by_name=True)


class BulletPoint(_WireModel):
    text: str = Field(description="The summary sentence.")
    source_snippet: str = Field(
        alias="sourceSnippet",
        description="A short text snippet from the document that supports this bullet.",
    )
    page_number: int = Field(
        alias="pageNumber",
        description="The page number where this information was found based on the [PAGE X] markers.",
    )


class Metric(_WireModel):
    label: str
    value: str
    trend: Trend
    confidence: Confidence
    source: str = Field(
        description="A snippet from the document justifying this metric."
    )


class Risk(_WireModel):
    impact: Impact
    description: str
    mitigation: Optional[str] = None


class ExecutiveSummary(_WireModel):
    bullets: List[BulletPoint] = Field(
        description="A structured list of 5 key highlights with source verification."
    )
    metrics: List[Metric]
    risks: List[Risk]
    source_reference: str = Field(
        alias="sourceReference",
        description="Main source page or section reference.",
    )


@dataclass(slots=True)
class SourceContext:
    """The citation currently open in the source viewer."""

    title: str
    snippet: str
    page: Union[int, str]
