# docpilot/llm/providers.py
"""
Thin async clients for the remote generative models.

Two call shapes are supported: a single structured-output request used for
executive summaries, and a multi-turn conversation used by the copilot.
"""

from typing import Any, Dict, List, Optional
import json
import logging
from abc import ABC, abstractmethod

logger = logging.getLogger(__name__)

ConversationTurn = Dict[str, str]


def _extract_json(content: str) -> Any:
    """Parse a JSON document, tolerating a surrounding markdown code fence."""
    text = content.strip()
    if "```json" in text:
        start = text.find("```json") + 7
        end = text.find("```", start)
        text = text[start:end].strip()
    elif text.startswith("```"):
        start = text.find("```") + 3
        end = text.find("```", start)
        text = text[start:end].strip()
    return json.loads(text)


def _schema_instruction(response_format: Dict[str, Any]) -> str:
    return "\n\nRespond with valid JSON matching this schema:\n" + json.dumps(
        response_format, indent=2
    )


class LLMProvider(ABC):
    """Abstract base class for LLM providers."""

    name: str = "llm"
    model: str

    @abstractmethod
    async def generate(
        self,
        system_prompt: str,
        user_prompt: str,
        response_format: Optional[Dict[str, Any]] = None,
        max_tokens: int = 1000,
    ) -> Dict[str, Any]:
        """Generate a single response; parsed JSON when a format is given."""
        pass

    @abstractmethod
    async def converse(
        self,
        system_prompt: str,
        messages: List[ConversationTurn],
        max_tokens: int = 1000,
    ) -> str:
        """Continue a conversation of role-tagged turns and return plain text."""
        pass


class OpenAIProvider(LLMProvider):
    """OpenAI API provider."""

    name = "openai"

    def __init__(
        self,
        api_key: str,
        model: str = "gpt-4o-mini",
        temperature: float = 0.1,
        timeout: float = 120.0,
    ):
        from openai import AsyncOpenAI

        self.client = AsyncOpenAI(api_key=api_key, timeout=timeout)
        self.model = model
        self.temperature = temperature

    async def generate(
        self,
        system_prompt: str,
        user_prompt: str,
        response_format: Optional[Dict[str, Any]] = None,
        max_tokens: int = 1000,
    ) -> Dict[str, Any]:
        """Generate response from OpenAI API."""
        if response_format:
            system_prompt += _schema_instruction(response_format)

        kwargs: Dict[str, Any] = {
            "model": self.model,
            "messages": [
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": user_prompt},
            ],
            "max_tokens": max_tokens,
            "temperature": self.temperature,
        }

        # JSON mode keeps the reply parseable
        if response_format:
            kwargs["response_format"] = {"type": "json_object"}

        response = await self.client.chat.completions.create(**kwargs)
        content = response.choices[0].message.content or ""

        if response_format:
            return _extract_json(content)
        return {"text": content}

    async def converse(
        self,
        system_prompt: str,
        messages: List[ConversationTurn],
        max_tokens: int = 1000,
    ) -> str:
        response = await self.client.chat.completions.create(
            model=self.model,
            messages=[{"role": "system", "content": system_prompt}, *messages],
            max_tokens=max_tokens,
            temperature=self.temperature,
        )
        return response.choices[0].message.content or ""


class AnthropicProvider(LLMProvider):
    """Anthropic Claude API provider."""

    name = "anthropic"

    def __init__(
        self,
        api_key: str,
        model: str = "claude-3-haiku-20240307",
        temperature: float = 0.1,
        timeout: float = 120.0,
    ):
        from anthropic import AsyncAnthropic

        self.client = AsyncAnthropic(api_key=api_key, timeout=timeout)
        self.model = model
        self.temperature = temperature

    async def generate(
        self,
        system_prompt: str,
        user_prompt: str,
        response_format: Optional[Dict[str, Any]] = None,
        max_tokens: int = 1000,
    ) -> Dict[str, Any]:
        """Generate response from Anthropic API."""
        if response_format:
            system_prompt += _schema_instruction(response_format)

        response = await self.client.messages.create(
            model=self.model,
            max_tokens=max_tokens,
            temperature=self.temperature,
            system=system_prompt,
            messages=[{"role": "user", "content": user_prompt}],
        )

        content = "".join(
            block.text for block in response.content if block.type == "text"
        )

        if response_format:
            return _extract_json(content)
        return {"text": content}

    async def converse(
        self,
        system_prompt: str,
        messages: List[ConversationTurn],
        max_tokens: int = 1000,
    ) -> str:
        response = await self.client.messages.create(
            model=self.model,
            max_tokens=max_tokens,
            temperature=self.temperature,
            system=system_prompt,
            messages=messages,
        )
        return "".join(
            block.text for block in response.content if block.type == "text"
        )


class OllamaProvider(LLMProvider):
    """Ollama local LLM provider."""

    name = "ollama"

    def __init__(
        self,
        model: str = "llama3.2",
        base_url: str = "http://localhost:11434",
        temperature: float = 0.1,
        timeout: float = 120.0,
    ):
        """
        Initialize Ollama provider.

        Args:
            model: Ollama model name (e.g., llama3.2, mistral)
            base_url: Ollama server URL (default: http://localhost:11434)
            temperature: Sampling temperature
            timeout: Seconds to wait for the server before giving up
        """
        self.model = model
        self.base_url = base_url.rstrip("/")
        self.temperature = temperature
        self.timeout = timeout
        logger.info(f"Initialized Ollama provider with model: {model} at {base_url}")

    async def _post(self, endpoint: str, payload: Dict[str, Any]) -> Dict[str, Any]:
        import httpx

        async with httpx.AsyncClient(timeout=self.timeout) as client:
            response = await client.post(f"{self.base_url}{endpoint}", json=payload)
            response.raise_for_status()
            return response.json()

    async def generate(
        self,
        system_prompt: str,
        user_prompt: str,
        response_format: Optional[Dict[str, Any]] = None,
        max_tokens: int = 1000,
    ) -> Dict[str, Any]:
        """Generate response from Ollama API."""
        if response_format:
            system_prompt += _schema_instruction(response_format)

        payload: Dict[str, Any] = {
            "model": self.model,
            "system": system_prompt,
            "prompt": user_prompt,
            "stream": False,
            "options": {
                "temperature": self.temperature,
                "num_predict": max_tokens,
            },
        }
        if response_format:
            payload["format"] = "json"

        result = await self._post("/api/generate", payload)
        content = result.get("response", "")

        if response_format:
            return _extract_json(content)
        return {"text": content}

    async def converse(
        self,
        system_prompt: str,
        messages: List[ConversationTurn],
        max_tokens: int = 1000,
    ) -> str:
        payload = {
            "model": self.model,
            "messages": [{"role": "system", "content": system_prompt}, *messages],
            "stream": False,
            "options": {
                "temperature": self.temperature,
                "num_predict": max_tokens,
            },
        }
        result = await self._post("/api/chat", payload)
        return result.get("message", {}).get("content", "")
