"""State and orchestration for the drafting view."""

from __future__ import annotations

import logging
from typing import Optional, Tuple

import anyio

from docpilot.config import Settings
from docpilot.drafting.citations import CitationIndex
from docpilot.drafting.export import export_filename, render_summary_markdown
from docpilot.drafting.ingestion import ingest_document
from docpilot.drafting.models import ExecutiveSummary, SourceContext
from docpilot.drafting.summarizer import ensure_summarizable, generate_executive_summary
from docpilot.errors import IngestionError, OperationInFlightError
from docpilot.llm.providers import LLMProvider

logger = logging.getLogger(__name__)


class DraftingWorkspace:
    """
    One uploaded document, its executive summary and the open citation.

    ``is_reading`` and ``is_analyzing`` serialize the view's own operations:
    while either is set, new uploads and summary requests are refused.
    """

    def __init__(self, provider: Optional[LLMProvider], settings: Settings) -> None:
        self.provider = provider
        self.settings = settings
        self.file_name = ""
        self.content = ""
        self.summary: Optional[ExecutiveSummary] = None
        self.citations = CitationIndex()
        self.is_reading = False
        self.is_analyzing = False

    @property
    def busy(self) -> bool:
        return self.is_reading or self.is_analyzing

    @property
    def preview(self) -> str:
        if not self.content:
            return ""
        return self.content[: self.settings.preview_chars] + "..."

    @property
    def active_source(self) -> Optional[SourceContext]:
        return self.citations.active

    def _guard(self, operation: str) -> None:
        if self.busy:
            raise OperationInFlightError(
                f"Cannot {operation} while another drafting operation is pending."
            )

    async def ingest(
        self, filename: str, data: bytes, content_type: Optional[str] = None
    ) -> str:
        self._guard("upload a document")
        self.file_name = filename
        self.is_reading = True
        self.summary = None
        self.citations.dismiss()
        try:
            self.content = await anyio.to_thread.run_sync(
                ingest_document, filename, data, content_type
            )
        except IngestionError:
            self.file_name = ""
            self.content = ""
            raise
        finally:
            self.is_reading = False

        logger.info(f"Ingested {filename}: {len(self.content)} characters")
        return self.content

    async def generate(self) -> ExecutiveSummary:
        self._guard("generate a summary")
        ensure_summarizable(self.content, self.settings.min_document_chars)
        self.is_analyzing = True
        try:
            summary = await generate_executive_summary(
                self.content, self.provider, self.settings
            )
        finally:
            self.is_analyzing = False
        self.summary = summary
        return summary

    def clear(self) -> None:
        self._guard("clear the workspace")
        self.file_name = ""
        self.content = ""
        self.summary = None
        self.citations.dismiss()

    def _summary_or_raise(self) -> ExecutiveSummary:
        if self.summary is None:
            raise LookupError("No summary has been generated.")
        return self.summary

    def cite_bullet(self, index: int) -> SourceContext:
        summary = self._summary_or_raise()
        if not 0 <= index < len(summary.bullets):
            raise LookupError(f"No highlight at index {index}.")
        return self.citations.select_bullet(summary.bullets[index])

    def cite_metric(self, index: int) -> SourceContext:
        summary = self._summary_or_raise()
        if not 0 <= index < len(summary.metrics):
            raise LookupError(f"No metric at index {index}.")
        return self.citations.select_metric(summary.metrics[index], summary)

    def export(self) -> Optional[Tuple[str, str]]:
        """Return ``(download_name, markdown)`` or ``None`` without a summary."""
        if self.summary is None:
            return None
        return (
            export_filename(self.file_name),
            render_summary_markdown(self.summary, self.file_name),
        )
