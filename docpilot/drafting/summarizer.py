"""Executive summary generation through the remote summarization service."""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from pydantic import ValidationError

from docpilot.config import Settings
from docpilot.drafting.models import ExecutiveSummary
from docpilot.errors import (
    DocumentTooShortError,
    ProviderNotConfiguredError,
    SummaryGenerationError,
)
from docpilot.llm.providers import LLMProvider

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = """You are a financial document analyst preparing executive summaries for an institutional asset manager.

Your output must be valid JSON matching the provided schema."""


def build_user_prompt(content: str) -> str:
    return f"""Analyze the following document and provide a structured executive summary for an asset manager.
The document contains page markers like [PAGE X]. Use these to identify the page number for each point.
Focus on key financial performance metrics, trends, and risk factors.

Extract:
- exactly 5 key highlights, each with a short supporting snippet and its page number
- financial metrics with trend (up, down, stable), confidence (Strong, Incomplete) and a justifying snippet
- risk factors with impact (High, Medium, Low) and mitigation where the document gives one
- one overall source reference (main page or section)

Document content: {content}"""


def summary_response_format() -> Dict[str, Any]:
    return ExecutiveSummary.model_json_schema(by_alias=True)


def ensure_summarizable(content: str, min_chars: int) -> None:
    if not content or len(content.strip()) < min_chars:
        raise DocumentTooShortError(
            "The document appears to be empty or contains too little text to analyze."
        )


async def generate_executive_summary(
    content: str,
    provider: Optional[LLMProvider],
    settings: Settings,
) -> ExecutiveSummary:
    """
    Ask the remote model for an executive summary of ``content``.

    A single attempt is made. Transport failures, undecodable JSON and
    schema violations all surface as ``SummaryGenerationError``.
    """
    ensure_summarizable(content, settings.min_document_chars)

    if provider is None:
        raise ProviderNotConfiguredError(
            "No LLM provider is configured. Set LLM_PROVIDER and its API key."
        )

    try:
        raw = await provider.generate(
            SYSTEM_PROMPT,
            build_user_prompt(content),
            response_format=summary_response_format(),
            max_tokens=settings.llm_max_tokens,
        )
    except Exception as exc:
        logger.error(f"Summary request to {provider.name} failed: {exc}")
        raise SummaryGenerationError(
            "Error generating summary. Please try again with a different document."
        ) from exc

    try:
        summary = ExecutiveSummary.model_validate(raw)
    except ValidationError as exc:
        logger.error(f"Failed to parse summary response: {exc}")
        raise SummaryGenerationError("Invalid response format from AI") from exc

    logger.info(
        f"Summary generated: {len(summary.bullets)} bullets, "
        f"{len(summary.metrics)} metrics, {len(summary.risks)} risks"
    )
    return summary
