"""Single-slot source viewer for verifying summary claims."""

from __future__ import annotations

from typing import Optional

from docpilot.drafting.models import BulletPoint, ExecutiveSummary, Metric, SourceContext

HIGHLIGHT_TITLE = "Executive Highlight"
UNKNOWN_REFERENCE = "Unknown"


class CitationIndex:
    """
    Holds at most one active citation; no history is kept.

    Bullets cite their own page. Metrics carry no page of their own, so they
    cite the summary's overall source reference instead.
    """

    def __init__(self) -> None:
        self._active: Optional[SourceContext] = None

    @property
    def active(self) -> Optional[SourceContext]:
        return self._active

    def select_bullet(self, bullet: BulletPoint) -> SourceContext:
        self._active = SourceContext(
            title=HIGHLIGHT_TITLE,
            snippet=bullet.source_snippet,
            page=bullet.page_number,
        )
        return self._active

    def select_metric(
        self, metric: Metric, summary: Optional[ExecutiveSummary]
    ) -> SourceContext:
        reference = summary.source_reference if summary else ""
        self._active = SourceContext(
            title=metric.label,
            snippet=metric.source,
            page=reference or UNKNOWN_REFERENCE,
        )
        return self._active

    def dismiss(self) -> None:
        self._active = None
