"""Pytest configuration for tests."""

from typing import Any, Dict, List, Optional

import anyio
import pytest

from docpilot.config import Settings
from docpilot.llm.providers import LLMProvider


@pytest.fixture(scope="session")
def anyio_backend():
    """Configure anyio to use only asyncio backend."""
    return "asyncio"


SAMPLE_SUMMARY: Dict[str, Any] = {
    "bullets": [
        {
            "text": "Revenue grew 10% year over year.",
            "sourceSnippet": "Revenue grew 10%",
            "pageNumber": 1,
        },
        {
            "text": "Portfolio risk increased in the period.",
            "sourceSnippet": "Risk increased",
            "pageNumber": 2,
        },
    ],
    "metrics": [
        {
            "label": "Revenue Growth",
            "value": "10%",
            "trend": "up",
            "confidence": "Strong",
            "source": "Revenue grew 10%",
        }
    ],
    "risks": [
        {
            "impact": "High",
            "description": "Rising portfolio risk",
            "mitigation": "Rebalance toward fixed income",
        },
        {"impact": "Low", "description": "Reporting delays"},
    ],
    "sourceReference": "Pages 1-2",
}


class ScriptedProvider(LLMProvider):
    """Provider double that replays canned answers and records every call."""

    name = "scripted"

    def __init__(
        self,
        summary: Optional[Any] = None,
        reply: str = "",
        error: Optional[Exception] = None,
        model: str = "scripted-model",
    ) -> None:
        self.summary = summary
        self.reply = reply
        self.error = error
        self.model = model
        self.generate_calls: List[Dict[str, Any]] = []
        self.converse_calls: List[Dict[str, Any]] = []

    async def generate(
        self, system_prompt, user_prompt, response_format=None, max_tokens=1000
    ):
        self.generate_calls.append(
            {
                "system_prompt": system_prompt,
                "user_prompt": user_prompt,
                "response_format": response_format,
            }
        )
        if self.error is not None:
            raise self.error
        return self.summary

    async def converse(self, system_prompt, messages, max_tokens=1000):
        self.converse_calls.append(
            {"system_prompt": system_prompt, "messages": list(messages)}
        )
        if self.error is not None:
            raise self.error
        return self.reply


class GatedProvider(ScriptedProvider):
    """Holds every remote call open until ``release`` is set."""

    def __init__(self, summary: Optional[Any] = None, reply: str = "") -> None:
        super().__init__(summary=summary, reply=reply)
        self.started = anyio.Event()
        self.release = anyio.Event()

    async def generate(
        self, system_prompt, user_prompt, response_format=None, max_tokens=1000
    ):
        self.started.set()
        await self.release.wait()
        return await super().generate(
            system_prompt, user_prompt, response_format, max_tokens
        )

    async def converse(self, system_prompt, messages, max_tokens=1000):
        self.started.set()
        await self.release.wait()
        return await super().converse(system_prompt, messages, max_tokens)


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(
        llm_provider="none",
        chat_store_path=str(tmp_path / "storage.json"),
    )


@pytest.fixture
def sample_summary() -> Dict[str, Any]:
    return SAMPLE_SUMMARY
