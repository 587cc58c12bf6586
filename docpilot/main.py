"""FastAPI application factory and global exception handling."""

from __future__ import annotations

from typing import Any, Dict, Optional, Type

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.requests import Request
from starlette.responses import JSONResponse

from docpilot import __version__ as app_version
from docpilot.api.routes import router
from docpilot.config import Settings, get_settings
from docpilot.copilot.assistant import CopilotAssistant
from docpilot.copilot.chat import CopilotChat
from docpilot.copilot.session import ChatSession
from docpilot.copilot.store import JsonFileStore
from docpilot.drafting.workspace import DraftingWorkspace
from docpilot.errors import (
    DocPilotError,
    DocumentTooShortError,
    IngestionError,
    OperationInFlightError,
    ProviderNotConfiguredError,
    SummaryGenerationError,
    UnsupportedDocumentError,
)
from docpilot.llm.providers import LLMProvider
from docpilot.llm.registry import build_provider
from docpilot.portfolio.catalog import ASSETS
from docpilot.portfolio.lookup import default_matcher

# Most specific first; the first isinstance match wins
ERROR_STATUS: tuple[tuple[Type[DocPilotError], int], ...] = (
    (UnsupportedDocumentError, 415),
    (IngestionError, 422),
    (DocumentTooShortError, 400),
    (ProviderNotConfiguredError, 503),
    (SummaryGenerationError, 502),
    (OperationInFlightError, 409),
)


def status_for(exc: DocPilotError) -> int:
    for error_cls, status_code in ERROR_STATUS:
        if isinstance(exc, error_cls):
            return status_code
    return 500


def create_application(
    settings: Optional[Settings] = None,
    summary_provider: Optional[LLMProvider] = None,
    chat_provider: Optional[LLMProvider] = None,
) -> FastAPI:
    """
    Create and configure the FastAPI application instance.

    Providers not passed explicitly are built from settings; each view
    controller is created once and kept on ``app.state``.
    """
    settings = settings or get_settings()
    if summary_provider is None:
        summary_provider = build_provider(settings, settings.llm_summary_model)
    if chat_provider is None:
        chat_provider = build_provider(settings, settings.llm_chat_model)

    app = FastAPI(
        title=settings.app_name,
        description="Portfolio dashboard, document drafting and copilot chat.",
        version=app_version,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allow_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.state.settings = settings
    app.state.workspace = DraftingWorkspace(summary_provider, settings)
    app.state.chat = CopilotChat(
        ChatSession(JsonFileStore(settings.chat_store_path), settings.chat_storage_key),
        CopilotAssistant(chat_provider, settings, ASSETS, default_matcher()),
    )

    @app.exception_handler(DocPilotError)
    async def docpilot_exception_handler(
        request: Request, exc: DocPilotError
    ) -> JSONResponse:
        return JSONResponse(
            status_code=status_for(exc),
            content={"error": exc.code, "details": str(exc)},
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        return JSONResponse(
            status_code=400,
            content={"error": "validation_error", "details": exc.errors()},
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(
        request: Request, exc: StarletteHTTPException
    ) -> JSONResponse:
        detail = exc.detail
        if isinstance(detail, dict) and "error" in detail:
            payload = detail
        else:
            payload = {"error": "http_error", "details": detail}
        return JSONResponse(status_code=exc.status_code, content=payload)

    @app.get("/healthz", tags=["health"])
    async def healthz() -> Dict[str, Any]:
        return {
            "status": "ok",
            "version": app_version,
            "llm_provider": settings.llm_provider,
            "summary_model": getattr(summary_provider, "model", None),
            "chat_model": getattr(chat_provider, "model", None),
        }

    app.include_router(router)
    return app


app = create_application()
