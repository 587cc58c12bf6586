from functools import lru_cache
from typing import List, Optional

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """
    Centralized application settings leveraging environment overrides.
    """

    app_name: str = "DocPilot"
    environment: str = Field("local", validation_alias="ENVIRONMENT")
    allow_origins: List[str] = Field(default_factory=lambda: ["*"])
    log_level: str = Field("INFO", description="Root log level for the server")
    host: str = "0.0.0.0"
    port: int = Field(8000, ge=1, le=65535)

    # Drafting workspace
    max_upload_bytes: int = Field(25 * 1024 * 1024, ge=1024)  # 25 MB soft limit
    min_document_chars: int = Field(10, ge=1)
    preview_chars: int = Field(1000, ge=1)
    active_drafts: int = Field(12, ge=0)

    # Copilot chat
    chat_history_window: int = Field(6, ge=0)
    chat_store_path: str = Field(".docpilot/storage.json")
    chat_storage_key: str = "docpilot_chat_history"

    # LLM settings
    llm_provider: str = Field(
        "none", description="LLM provider: none, openai, anthropic, ollama"
    )
    llm_summary_model: Optional[str] = Field(
        None, description="Model used for executive summaries"
    )
    llm_chat_model: Optional[str] = Field(
        None, description="Model used for copilot conversations"
    )
    openai_api_key: Optional[str] = Field(None, validation_alias="OPENAI_API_KEY")
    anthropic_api_key: Optional[str] = Field(None, validation_alias="ANTHROPIC_API_KEY")
    ollama_base_url: Optional[str] = Field(None, validation_alias="OLLAMA_BASE_URL")
    llm_max_tokens: int = Field(4000, ge=100, le=16000)
    llm_temperature: float = Field(0.1, ge=0.0, le=2.0)
    llm_timeout_seconds: float = Field(120.0, gt=0)

    class Config:
        env_file = ".env"
        case_sensitive = False


@lru_cache
def get_settings() -> Settings:
    return Settings()
