"""Exception hierarchy shared by the view controllers and the HTTP layer."""

from __future__ import annotations


class DocPilotError(Exception):
    """Base class for every error raised deliberately by DocPilot."""

    code = "docpilot_error"


class IngestionError(DocPilotError):
    """The uploaded file could not be read or parsed."""

    code = "ingestion_failed"


class UnsupportedDocumentError(IngestionError):
    """The uploaded file is not a .txt, .md or .pdf document."""

    code = "unsupported_document"


class DocumentTooShortError(DocPilotError):
    """The ingested text is too short to be worth summarizing."""

    code = "document_too_short"


class SummaryGenerationError(DocPilotError):
    """The remote model failed or answered outside the summary schema."""

    code = "summary_failed"


class ProviderNotConfiguredError(SummaryGenerationError):
    code = "provider_not_configured"


class OperationInFlightError(DocPilotError):
    """A view was asked to start an operation while one is still pending."""

    code = "operation_in_flight"
