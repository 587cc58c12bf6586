"""HTTP route handlers for the dashboard, drafting and copilot views."""

from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, Depends, File, HTTPException, Path, Request, UploadFile, status
from fastapi.responses import Response

from docpilot.config import Settings, get_settings
from docpilot.copilot.chat import SUGGESTED_PROMPTS, CopilotChat
from docpilot.drafting.export import MARKDOWN_MEDIA_TYPE
from docpilot.drafting.models import ExecutiveSummary
from docpilot.drafting.workspace import DraftingWorkspace
from docpilot.portfolio.catalog import ASSETS, get_asset
from docpilot.portfolio.dashboard import build_overview

from .schemas import (
    AssetModel,
    ChatMessageModel,
    ChatTurnResponseModel,
    DashboardResponseModel,
    DraftingStateModel,
    SendMessageRequestModel,
    SourceContextModel,
    SuggestionsResponseModel,
    TranscriptResponseModel,
)


router = APIRouter()


def get_workspace(request: Request) -> DraftingWorkspace:
    return request.app.state.workspace


def get_chat(request: Request) -> CopilotChat:
    return request.app.state.chat


def get_app_settings(request: Request) -> Settings:
    return getattr(request.app.state, "settings", None) or get_settings()


def _not_found(details: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail={"error": "not_found", "details": details},
    )


# Dashboard


@router.get("/v1/dashboard", response_model=DashboardResponseModel)
async def dashboard(settings: Settings = Depends(get_app_settings)):
    overview = build_overview(ASSETS, active_drafts=settings.active_drafts)
    return DashboardResponseModel.from_domain(overview)


@router.get("/v1/assets", response_model=List[AssetModel])
async def list_assets():
    return [AssetModel.from_domain(asset) for asset in ASSETS]


@router.get("/v1/assets/{asset_id}", response_model=AssetModel)
async def read_asset(asset_id: str):
    asset = get_asset(asset_id)
    if asset is None:
        raise _not_found(f"Unknown asset '{asset_id}'.")
    return AssetModel.from_domain(asset)


# Drafting workspace


@router.get("/v1/drafting", response_model=DraftingStateModel)
async def drafting_state(workspace: DraftingWorkspace = Depends(get_workspace)):
    return DraftingStateModel.from_workspace(workspace)


@router.post("/v1/drafting/document", response_model=DraftingStateModel)
async def upload_document(
    file: UploadFile = File(...),
    workspace: DraftingWorkspace = Depends(get_workspace),
    settings: Settings = Depends(get_app_settings),
):
    data = await file.read()
    if len(data) > settings.max_upload_bytes:
        raise HTTPException(
            status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
            detail={
                "error": "payload_too_large",
                "limit_bytes": settings.max_upload_bytes,
            },
        )
    await workspace.ingest(file.filename or "document.txt", data, file.content_type)
    return DraftingStateModel.from_workspace(workspace)


@router.delete("/v1/drafting", response_model=DraftingStateModel)
async def clear_drafting(workspace: DraftingWorkspace = Depends(get_workspace)):
    workspace.clear()
    return DraftingStateModel.from_workspace(workspace)


@router.post("/v1/drafting/summary", response_model=ExecutiveSummary)
async def generate_summary(workspace: DraftingWorkspace = Depends(get_workspace)):
    return await workspace.generate()


@router.get("/v1/drafting/export")
async def export_summary(workspace: DraftingWorkspace = Depends(get_workspace)):
    exported = workspace.export()
    if exported is None:
        raise _not_found("Generate a summary before exporting.")
    download_name, markdown = exported
    return Response(
        content=markdown,
        media_type=MARKDOWN_MEDIA_TYPE,
        headers={"Content-Disposition": f'attachment; filename="{download_name}"'},
    )


@router.get("/v1/drafting/citation", response_model=Optional[SourceContextModel])
async def active_citation(workspace: DraftingWorkspace = Depends(get_workspace)):
    return SourceContextModel.from_domain(workspace.active_source)


@router.post(
    "/v1/drafting/citation/bullets/{index}", response_model=SourceContextModel
)
async def cite_bullet(
    index: int = Path(..., ge=0),
    workspace: DraftingWorkspace = Depends(get_workspace),
):
    try:
        source = workspace.cite_bullet(index)
    except LookupError as exc:
        raise _not_found(str(exc)) from exc
    return SourceContextModel.from_domain(source)


@router.post(
    "/v1/drafting/citation/metrics/{index}", response_model=SourceContextModel
)
async def cite_metric(
    index: int = Path(..., ge=0),
    workspace: DraftingWorkspace = Depends(get_workspace),
):
    try:
        source = workspace.cite_metric(index)
    except LookupError as exc:
        raise _not_found(str(exc)) from exc
    return SourceContextModel.from_domain(source)


@router.delete("/v1/drafting/citation", status_code=status.HTTP_204_NO_CONTENT)
async def dismiss_citation(workspace: DraftingWorkspace = Depends(get_workspace)):
    workspace.citations.dismiss()
    return Response(status_code=status.HTTP_204_NO_CONTENT)


# Copilot chat


@router.get("/v1/copilot/messages", response_model=TranscriptResponseModel)
async def transcript(chat: CopilotChat = Depends(get_chat)):
    return TranscriptResponseModel(
        is_sending=chat.is_sending,
        messages=[ChatMessageModel.from_domain(m) for m in chat.messages],
    )


@router.post("/v1/copilot/messages", response_model=ChatTurnResponseModel)
async def send_message(
    body: SendMessageRequestModel,
    chat: CopilotChat = Depends(get_chat),
):
    turn = await chat.send(body.content)
    if turn is None:
        return ChatTurnResponseModel()
    user_message, reply = turn
    return ChatTurnResponseModel(
        user_message=ChatMessageModel.from_domain(user_message),
        reply=ChatMessageModel.from_domain(reply),
    )


@router.delete("/v1/copilot/messages", response_model=TranscriptResponseModel)
async def reset_session(chat: CopilotChat = Depends(get_chat)):
    chat.reset()
    return TranscriptResponseModel(
        is_sending=chat.is_sending,
        messages=[ChatMessageModel.from_domain(m) for m in chat.messages],
    )


@router.get("/v1/copilot/suggestions", response_model=SuggestionsResponseModel)
async def suggestions():
    return SuggestionsResponseModel(suggestions=list(SUGGESTED_PROMPTS))
