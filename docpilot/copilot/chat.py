"""State and orchestration for the copilot chat view."""

from __future__ import annotations

import logging
from typing import List, Optional, Tuple

from docpilot.copilot.assistant import CopilotAssistant
from docpilot.copilot.models import ChatMessage
from docpilot.copilot.session import ChatSession
from docpilot.errors import OperationInFlightError

logger = logging.getLogger(__name__)

SUGGESTED_PROMPTS = (
    "Show performance table for the Vanguard fund over last 6 months",
    "Analyze risk trends for BlackRock portfolio",
    "Identify assets with highest quarterly volatility",
    "Which assets declined the most this quarter?",
    "Show trends for Vanguard over the last 6 months",
    "Analyze risk profile for the Manhattan REIT",
)


class CopilotChat:
    """
    Owns the transcript for the chat view.

    The transcript is loaded once at construction and written back after
    every mutation. ``is_sending`` refuses a second send while one is pending.
    """

    def __init__(self, session: ChatSession, assistant: CopilotAssistant) -> None:
        self.session = session
        self.assistant = assistant
        self.is_sending = False
        self.session.load()

    @property
    def messages(self) -> List[ChatMessage]:
        return self.session.messages

    async def send(self, text: str) -> Optional[Tuple[ChatMessage, ChatMessage]]:
        """
        Append the user's message and the assistant's reply.

        Returns the ``(user_message, reply)`` pair, or ``None`` for blank input.
        """
        if not text.strip():
            return None
        if self.is_sending:
            raise OperationInFlightError("A message is already being answered.")

        history = list(self.session.messages)
        user_message = self.session.append(ChatMessage(role="user", content=text))
        self.is_sending = True
        try:
            reply = await self.assistant.reply(user_message.content, history)
        finally:
            self.is_sending = False
        return user_message, self.session.append(reply)

    def reset(self) -> None:
        if self.is_sending:
            raise OperationInFlightError(
                "Cannot reset the conversation while a message is being answered."
            )
        logger.info("Resetting copilot session")
        self.session.reset()
