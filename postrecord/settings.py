from pathlib import Path
from typing import Set

from pydantic_settings import BaseSettings, SettingsConfigDict


def choose_env_file() -> str:
    return ".env.local" if Path(".env.local").exists() else ".env"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=choose_env_file(),
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",  # tolerate unrelated env vars
    )

    # Posts
    POSTS_DIR: Path = Path("_posts")
    ALLOWED_LAYOUTS: Set[str] = {"post"}
    DEFAULT_LAYOUT: str = "post"

    # Batch processing
    MAX_WORKERS: int = 4

    # Logging
    LOG_LEVEL: str = "INFO"

    # Our own API Key. Every API request is rejected with 403 until this is set.
    POSTRECORD_API_KEY: str = ""
