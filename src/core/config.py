"""
Centralized configuration using Pydantic Settings.

Values are read once from the environment (and an optional ``.env`` file)
and frozen for the rest of the run. Components receive the ``Settings``
instance explicitly instead of looking it up themselves.
"""
from typing import List
from functools import lru_cache
from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


# Values shipped in sample .env files that must never reach the API
PLACEHOLDER_API_KEYS = {
    "your_api_key_here",
    "your_openrouter_api_key_here",
}


class Settings(BaseSettings):
    """
    Run configuration.
    Field names double as environment variable names (case-insensitive),
    e.g. BATCH_SIZE=10 or OPENROUTER_API_KEY=sk-...
    """
    app_name: str = "ResumeHarvest"
    app_version: str = "1.0.0"

    # AI completion endpoint (OpenAI-compatible)
    openrouter_api_key: str = "your_api_key_here"
    ai_model: str = "deepseek/deepseek-chat-v3-0324"
    ai_base_url: str = "https://openrouter.ai/api/v1"
    ai_referer_url: str | None = None
    ai_temperature: float = 0.1
    ai_max_tokens: int = 500
    request_timeout: float = 60.0

    # Batching and retries
    batch_size: int = 100
    max_retries: int = 3
    delay_between_batches: int = 2000  # milliseconds
    retry_base_delay: float = 1.0  # seconds, multiplied by the attempt index

    # File paths
    resume_dir: str = "./resumes"
    output_csv: str = "./extracted_data.csv"
    success_dir: str = "./resumes/success"
    failed_dir: str = "./resumes/failed"
    organize_files: bool = True
    supported_extensions: str = ".pdf,.doc,.docx"

    # Text limits
    max_text_length: int = 8000
    min_text_length: int = 50

    # Logging
    log_level: str = "INFO"
    log_json: bool = False
    log_file: str | None = None

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
        frozen=True,
    )

    @field_validator("batch_size", "max_retries")
    @classmethod
    def _at_least_one(cls, value: int) -> int:
        if value < 1:
            raise ValueError("must be at least 1")
        return value

    @field_validator("delay_between_batches")
    @classmethod
    def _not_negative(cls, value: int) -> int:
        if value < 0:
            raise ValueError("must not be negative")
        return value

    @property
    def supported_extensions_list(self) -> List[str]:
        exts = []
        for ext in self.supported_extensions.split(","):
            ext = ext.strip().lower()
            if not ext:
                continue
            exts.append(ext if ext.startswith(".") else f".{ext}")
        return exts

    @property
    def batch_delay_seconds(self) -> float:
        return self.delay_between_batches / 1000

    @property
    def has_valid_api_key(self) -> bool:
        key = self.openrouter_api_key.strip()
        return bool(key) and key not in PLACEHOLDER_API_KEYS


@lru_cache()
def get_settings() -> Settings:
    return Settings()
