from functools import lru_cache
from pathlib import Path
from typing import List, Optional

from pydantic import Field
from pydantic_settings import BaseSettings

DEFAULT_PROFILES_DIR = Path(__file__).parent / "prompts" / "profiles"


class Settings(BaseSettings):
    """
    Centralized application settings leveraging environment overrides.
    """

    app_name: str = "Learning Assistant"
    allow_origins: List[str] = Field(default_factory=lambda: ["*"])
    log_level: str = Field("INFO", description="Level for the package logger")
    max_payload_bytes: int = Field(2 * 1024 * 1024, ge=1024)  # JSON bodies
    max_upload_bytes: int = Field(20 * 1024 * 1024, ge=1024)  # uploaded documents

    # LLM settings
    llm_provider: str = Field(
        "gemini", description="LLM provider: gemini, openai, anthropic, ollama, none"
    )
    llm_model: Optional[str] = Field(None, description="Model name for LLM provider")
    gemini_api_key: Optional[str] = Field(None, validation_alias="GEMINI_API_KEY")
    openai_api_key: Optional[str] = Field(None, validation_alias="OPENAI_API_KEY")
    anthropic_api_key: Optional[str] = Field(None, validation_alias="ANTHROPIC_API_KEY")
    ollama_base_url: str = "http://localhost:11434"
    llm_max_tokens: int = Field(2048, ge=100, le=8192)

    # Video input
    youtube_data_api_key: Optional[str] = Field(
        None, validation_alias="YOUTUBE_DATA_API_KEY"
    )
    youtube_data_api_url: str = "https://www.googleapis.com/youtube/v3/videos"
    transcript_languages: List[str] = Field(default_factory=lambda: ["en"])
    http_timeout_seconds: float = Field(30.0, gt=0)

    # Result persistence
    supabase_url: Optional[str] = Field(None, validation_alias="SUPABASE_URL")
    supabase_key: Optional[str] = Field(None, validation_alias="SUPABASE_ANON_KEY")
    supabase_table: str = "processing_results"

    prompt_profiles_dir: Path = DEFAULT_PROFILES_DIR

    @property
    def persistence_enabled(self) -> bool:
        return bool(self.supabase_url and self.supabase_key)

    class Config:
        env_file = ".env"
        case_sensitive = False


@lru_cache
def get_settings() -> Settings:
    return Settings()
