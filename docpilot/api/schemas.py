# docpilot/api/schemas.py
from datetime import datetime
from typing import Any, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from docpilot.copilot.formatter import TableBlock, format_message, render_html
from docpilot.drafting.models import ExecutiveSummary


class PerformancePointModel(BaseModel):
    month: str
    value: float


class AssetModel(BaseModel):
    id: str
    name: str
    type: str
    value: float
    change_24h: float
    change_quarter: float
    risk_profile: str
    performance: List[PerformancePointModel]

    @classmethod
    def from_domain(cls, asset) -> "AssetModel":
        return cls(
            id=asset.id,
            name=asset.name,
            type=asset.type,
            value=asset.value,
            change_24h=asset.change_24h,
            change_quarter=asset.change_quarter,
            risk_profile=asset.risk_profile,
            performance=[
                PerformancePointModel(month=p.month, value=p.value)
                for p in asset.performance
            ],
        )


class QuarterlyShiftModel(BaseModel):
    name: str
    value: float


class InventoryRowModel(BaseModel):
    id: str
    name: str
    type: str
    risk_profile: str
    value: str
    change_quarter: float


class DashboardResponseModel(BaseModel):
    total_aum: float
    total_aum_display: str
    active_drafts: int
    risk_weighted_average: str
    quarterly_shift: List[QuarterlyShiftModel]
    inventory: List[InventoryRowModel]

    @classmethod
    def from_domain(cls, overview) -> "DashboardResponseModel":
        return cls(
            total_aum=overview.total_aum,
            total_aum_display=overview.total_aum_display,
            active_drafts=overview.active_drafts,
            risk_weighted_average=overview.risk_weighted_average,
            quarterly_shift=[
                QuarterlyShiftModel(name=s.name, value=s.value)
                for s in overview.quarterly_shift
            ],
            inventory=[
                InventoryRowModel(
                    id=row.id,
                    name=row.name,
                    type=row.type,
                    risk_profile=row.risk_profile,
                    value=row.value,
                    change_quarter=row.change_quarter,
                )
                for row in overview.inventory
            ],
        )


class SourceContextModel(BaseModel):
    title: str
    snippet: str
    page: Union[int, str]

    @classmethod
    def from_domain(cls, source) -> Optional["SourceContextModel"]:
        if source is None:
            return None
        return cls(title=source.title, snippet=source.snippet, page=source.page)


class DraftingStateModel(BaseModel):
    file_name: str
    characters: int
    preview: str
    is_reading: bool
    is_analyzing: bool
    summary: Optional[ExecutiveSummary] = None
    active_source: Optional[SourceContextModel] = None

    @classmethod
    def from_workspace(cls, workspace) -> "DraftingStateModel":
        return cls(
            file_name=workspace.file_name,
            characters=len(workspace.content),
            preview=workspace.preview,
            is_reading=workspace.is_reading,
            is_analyzing=workspace.is_analyzing,
            summary=workspace.summary,
            active_source=SourceContextModel.from_domain(workspace.active_source),
        )


class TableCellModel(BaseModel):
    text: str
    is_value: bool


class TableBlockModel(BaseModel):
    kind: Literal["table"] = "table"
    header: List[str]
    rows: List[List[TableCellModel]]


class TextLineModel(BaseModel):
    html: str = ""
    spacer: bool = False


class TextBlockModel(BaseModel):
    kind: Literal["text"] = "text"
    lines: List[TextLineModel]


BlockModel = Union[TableBlockModel, TextBlockModel]


def _block_model(block) -> BlockModel:
    if isinstance(block, TableBlock):
        return TableBlockModel(
            header=list(block.header),
            rows=[
                [TableCellModel(text=c.text, is_value=c.is_value) for c in row]
                for row in block.rows
            ],
        )
    return TextBlockModel(
        lines=[TextLineModel(html=line.html, spacer=line.spacer) for line in block.lines]
    )


class ChatMessageModel(BaseModel):
    id: str
    role: Literal["user", "assistant"]
    content: str
    timestamp: datetime
    data: Optional[List[Dict[str, Any]]] = None
    sources: Optional[List[str]] = None
    blocks: List[BlockModel] = Field(default_factory=list)
    html: Optional[str] = None

    @classmethod
    def from_domain(cls, message) -> "ChatMessageModel":
        blocks: List[BlockModel] = []
        html = None
        # User text is shown as typed; only assistant replies are formatted
        if message.role == "assistant":
            parsed = format_message(message.content)
            blocks = [_block_model(block) for block in parsed]
            html = render_html(parsed)
        return cls(
            id=message.id,
            role=message.role,
            content=message.content,
            timestamp=message.timestamp,
            data=message.data,
            sources=message.sources,
            blocks=blocks,
            html=html,
        )


class TranscriptResponseModel(BaseModel):
    is_sending: bool
    messages: List[ChatMessageModel]


class SendMessageRequestModel(BaseModel):
    model_config = ConfigDict(extra="forbid")

    content: str

    @field_validator("content", mode="before")
    @classmethod
    def coerce_content(cls, value: Any) -> str:
        if value is None:
            return ""
        return str(value)


class ChatTurnResponseModel(BaseModel):
    user_message: Optional[ChatMessageModel] = None
    reply: Optional[ChatMessageModel] = None


class SuggestionsResponseModel(BaseModel):
    suggestions: List[str]
