"""Application configuration using Pydantic BaseSettings."""

from functools import lru_cache
from pathlib import Path

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Clipscribe configuration loaded from environment variables."""

    model_config = {"env_prefix": "CLIPSCRIBE_", "env_file": ".env", "extra": "ignore"}

    service_name: str = "Video Clip Transcription Service"

    # Cloudinary
    cloudinary_cloud_name: str = ""
    cloudinary_api_key: str = ""
    cloudinary_api_secret: str = ""
    upload_folder: str = "processed_clips"
    raw_convert: str = "google_speech:srt:vtt"

    # Webhook
    webhook_url: str = ""
    webhook_timeout_seconds: float = 30.0

    # Fetch / upload (None disables the timeout)
    http_timeout_seconds: float | None = None

    # Transcript polling
    transcript_max_attempts: int = 15
    transcript_poll_interval_seconds: float = 5.0

    # Directories
    temp_dir: Path = Path("temp_clips")
    temp_file_ttl_seconds: int = 3600

    # Server
    host: str = "0.0.0.0"
    port: int = 3000
    max_body_size_mb: int = 50
    max_batch_clips: int = 100
    log_level: str = "INFO"


@lru_cache
def get_settings() -> Settings:
    """Return cached settings instance."""
    return Settings()
