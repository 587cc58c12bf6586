"""Chat transcript state with explicit load and save against durable storage."""

from __future__ import annotations

import logging
from typing import Any, List

from pydantic import TypeAdapter, ValidationError

from docpilot.copilot.models import ChatMessage
from docpilot.copilot.store import JsonFileStore

logger = logging.getLogger(__name__)

WELCOME_MESSAGE_ID = "welcome"
WELCOME_TEXT = (
    "Hello! I'm your Asset Manager Copilot. Once you've uploaded your portfolio "
    "data in the Dashboard, I can provide detailed analysis and performance trends.."
)

_transcript_adapter = TypeAdapter(List[ChatMessage])


def welcome_message() -> ChatMessage:
    return ChatMessage(id=WELCOME_MESSAGE_ID, role="assistant", content=WELCOME_TEXT)


def serialize_transcript(messages: List[ChatMessage]) -> List[dict[str, Any]]:
    return _transcript_adapter.dump_python(messages, mode="json", exclude_none=True)


def deserialize_transcript(raw: Any) -> List[ChatMessage]:
    """Rebuild messages from storage; ISO timestamps become datetimes again."""
    return _transcript_adapter.validate_python(raw)


class ChatSession:
    """Append-only transcript persisted under a single storage key."""

    def __init__(self, store: JsonFileStore, storage_key: str) -> None:
        self.store = store
        self.storage_key = storage_key
        self.messages: List[ChatMessage] = []

    def load(self) -> List[ChatMessage]:
        try:
            raw = self.store.get(self.storage_key)
            messages = deserialize_transcript(raw) if raw else []
        except (OSError, ValueError, ValidationError) as exc:
            # orjson.JSONDecodeError is a ValueError
            logger.error(f"Failed to load chat history from storage: {exc}")
            messages = []
        self.messages = messages or [welcome_message()]
        return self.messages

    def save(self) -> None:
        self.store.set(self.storage_key, serialize_transcript(self.messages))

    def append(self, message: ChatMessage) -> ChatMessage:
        self.messages.append(message)
        self.save()
        return message

    def reset(self) -> None:
        self.messages = [welcome_message()]
        self.save()
