"""Conversational turns against the remote model, with a local fallback."""

from __future__ import annotations

import json
import logging
from typing import Dict, List, Optional, Sequence

from docpilot.config import Settings
from docpilot.copilot.models import ChatMessage
from docpilot.llm.providers import LLMProvider
from docpilot.portfolio.catalog import Asset
from docpilot.portfolio.lookup import AssetMatcher

logger = logging.getLogger(__name__)

SYSTEM_INSTRUCTION = """You are an Asset Manager AI Copilot.
IMPORTANT RULES:
1. When presenting data lists (like monthly performance), ALWAYS use Markdown tables.
2. Keep descriptions concise.
3. Use bolding for key figures.
4. If the user asks for "trends", provide a table and then a summary.
5. Your tone should be professional and institutional.
6. Cite 'Internal Portfolio API' as the source for all numerical data."""

EMPTY_REPLY = "I'm sorry, I couldn't process that request."
FALLBACK_REPLY = (
    "I'm having trouble connecting to the data server right now. Please try again."
)
REPLY_SOURCES = ["Internal Portfolio API", "Institutional Risk Engine"]


def context_message(assets: Sequence[Asset]) -> Dict[str, str]:
    asset_data = json.dumps([asset.to_context() for asset in assets])
    return {
        "role": "user",
        "content": (
            "You are an Asset Manager AI Copilot. "
            f"You have access to the following asset data: {asset_data}"
        ),
    }


def history_window(messages: Sequence[ChatMessage], size: int) -> List[Dict[str, str]]:
    """The last ``size`` transcript entries as provider conversation turns."""
    if size <= 0:
        return []
    return [
        {"role": message.role, "content": message.content}
        for message in messages[-size:]
    ]


class CopilotAssistant:
    """
    Produces the assistant reply for one user query.

    ``reply`` never raises: any provider failure becomes the fixed fallback
    message so the conversation stays usable.
    """

    def __init__(
        self,
        provider: Optional[LLMProvider],
        settings: Settings,
        assets: Sequence[Asset],
        matcher: AssetMatcher,
    ) -> None:
        self.provider = provider
        self.settings = settings
        self.assets = tuple(assets)
        self.matcher = matcher

    def build_conversation(
        self, query: str, history: Sequence[ChatMessage]
    ) -> List[Dict[str, str]]:
        return [
            context_message(self.assets),
            *history_window(history, self.settings.chat_history_window),
            {"role": "user", "content": query},
        ]

    async def reply(self, query: str, history: Sequence[ChatMessage]) -> ChatMessage:
        try:
            if self.provider is None:
                raise RuntimeError("No LLM provider is configured")
            text = await self.provider.converse(
                SYSTEM_INSTRUCTION,
                self.build_conversation(query, history),
                max_tokens=self.settings.llm_max_tokens,
            )
        except Exception as exc:
            logger.warning(f"Copilot turn failed, answering with fallback: {exc}")
            return ChatMessage(role="assistant", content=FALLBACK_REPLY)

        asset = self.matcher.match(query)
        return ChatMessage(
            role="assistant",
            content=text or EMPTY_REPLY,
            data=asset.performance_data() if asset else None,
            sources=list(REPLY_SOURCES),
        )
