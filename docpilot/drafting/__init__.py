"""Document drafting: ingestion, executive summaries, citations and export."""

from docpilot.drafting.citations import CitationIndex
from docpilot.drafting.models import (
    BulletPoint,
    ExecutiveSummary,
    Metric,
    Risk,
    SourceContext,
)
from docpilot.drafting.workspace import DraftingWorkspace

__all__ = [
    "BulletPoint",
    "CitationIndex",
    "DraftingWorkspace",
    "ExecutiveSummary",
    "Metric",
    "Risk",
    "SourceContext",
]
