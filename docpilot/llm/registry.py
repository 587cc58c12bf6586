"""Provider construction from application settings."""

from __future__ import annotations

from typing import Optional
import logging

from docpilot.config import Settings
from docpilot.llm.providers import (
    AnthropicProvider,
    LLMProvider,
    OllamaProvider,
    OpenAIProvider,
)

logger = logging.getLogger(__name__)

DEFAULT_MODELS = {
    "openai": "gpt-4o-mini",
    "anthropic": "claude-3-haiku-20240307",
    "ollama": "llama3.2",
}


def build_provider(
    settings: Settings, model: Optional[str] = None
) -> Optional[LLMProvider]:
    """
    Create the configured provider, or ``None`` when no provider is usable.

    Missing credentials are logged and treated as "not configured" so the
    application still starts; the drafting view then reports the problem and
    the copilot answers with its fallback message.
    """
    provider_name = settings.llm_provider.lower()
    if provider_name == "none":
        return None

    model = model or DEFAULT_MODELS.get(provider_name)
    try:
        if provider_name == "openai":
            if not settings.openai_api_key:
                logger.warning("OpenAI API key not configured, skipping provider")
                return None
            provider: LLMProvider = OpenAIProvider(
                api_key=settings.openai_api_key,
                model=model,
                temperature=settings.llm_temperature,
                timeout=settings.llm_timeout_seconds,
            )

        elif provider_name == "anthropic":
            if not settings.anthropic_api_key:
                logger.warning("Anthropic API key not configured, skipping provider")
                return None
            provider = AnthropicProvider(
                api_key=settings.anthropic_api_key,
                model=model,
                temperature=settings.llm_temperature,
                timeout=settings.llm_timeout_seconds,
            )

        elif provider_name == "ollama":
            provider = OllamaProvider(
                model=model,
                base_url=settings.ollama_base_url or "http://localhost:11434",
                temperature=settings.llm_temperature,
                timeout=settings.llm_timeout_seconds,
            )

        else:
            logger.warning(f"Unknown LLM provider: {settings.llm_provider}")
            return None

    except ImportError as e:
        logger.error(f"Failed to import client library for {provider_name}: {e}")
        return None

    logger.info(f"Initialized {provider.name} provider with model: {model}")
    return provider
