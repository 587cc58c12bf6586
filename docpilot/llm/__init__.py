"""Remote generative model providers."""

from docpilot.llm.providers import (
    AnthropicProvider,
    LLMProvider,
    OllamaProvider,
    OpenAIProvider,
)
from docpilot.llm.registry import build_provider

__all__ = [
    "AnthropicProvider",
    "LLMProvider",
    "OllamaProvider",
    "OpenAIProvider",
    "build_provider",
]
