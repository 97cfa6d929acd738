"""Application configuration management."""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # API Configuration
    app_name: str = "BCut Subtitle Converter"
    app_version: str = "0.1.0"
    app_description: str = "Convert BCut project JSON exports into SRT, ASS, TXT and CSV files"

    # Environment
    environment: str = "development"  # development, staging, production

    # Server Configuration
    host: str = "0.0.0.0"
    port: int = 8000
    allowed_hosts: list[str] = ["*"]

    # Authentication
    api_key: str | None = None

    # CORS Configuration
    cors_enabled: bool = True
    cors_origins: list[str] = ["*"]
    cors_allow_credentials: bool = True
    cors_allow_methods: list[str] = ["*"]
    cors_allow_headers: list[str] = ["*"]

    # Extraction Configuration
    caption_item_name: str = "SubttCaption"

    # Upload Limits
    max_upload_size: int = 50 * 1024 * 1024  # 50MB in bytes
    allowed_upload_formats: set[str] = {".json"}

    # Conversion sessions (each owns its generated export buffers)
    max_active_conversions: int = 100

    # User-facing messages
    processing_failed_message: str = (
        "File processing failed. Please make sure you uploaded a valid JSON file."
    )
    no_results_message: str = "No subtitles found"

    # Logging
    log_level: str = "INFO"
    log_dir: str = "./logs"
    enable_log_redaction: bool = True  # Redact sensitive data from logs

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", case_sensitive=False, extra="ignore"
    )


@lru_cache
def get_settings() -> Settings:
    """Return the cached settings instance."""
    return Settings()


# Global settings instance
# Pydantic Settings loads from environment variables automatically
settings = get_settings()
