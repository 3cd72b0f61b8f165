"""Application settings, read from the environment and ``.env``."""
from __future__ import annotations

from pathlib import Path

from pydantic import SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict

_REPO_ROOT = Path(__file__).resolve().parents[2]


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="BLUEMOON_",
        env_file=str(_REPO_ROOT / ".env"),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Backend
    API_URL: str = "http://localhost:5000"
    REQUEST_TIMEOUT: float = 30.0

    # Logging
    LOG_LEVEL: str = "INFO"

    # Dashboard: fill the trend chart with derived values when the backend
    # sends no monthlyTrend. Off means the chart is left empty.
    SYNTHETIC_TREND_FALLBACK: bool = True

    # Credentials for the CLI `stats` command
    USERNAME: str = ""
    PASSWORD: SecretStr | None = None


settings = Settings()
