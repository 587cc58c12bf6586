"""Chat transcript entries."""

from __future__ import annotations

import uuid
from datetime import datetime, timezone
from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, Field

Role = Literal["user", "assistant"]


def _now() -> datetime:
    return datetime.now(timezone.utc)


def _new_id() -> str:
    return uuid.uuid4().hex


class ChatMessage(BaseModel):
    id: str = Field(default_factory=_new_id)
    role: Role
    content: str
    timestamp: datetime = Field(default_factory=_now)
    data: Optional[List[Dict[str, Any]]] = None
    sources: Optional[List[str]] = None
