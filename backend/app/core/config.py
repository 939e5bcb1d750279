"""Application configuration using pydantic-settings."""

from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from backend.app.schemas.network import AlertSeverity

DEFAULT_DATA_PATH = Path(__file__).resolve().parent.parent / "data" / "network_data.json"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore", # Allow extra env vars without failing
    )

    # Server bind (used by the uvicorn entry point)
    backend_host: str = "0.0.0.0"
    backend_port: int = 4000

    # App
    app_name: str = "Telecom KPI Monitoring API"
    app_version: str = "1.0.0"
    debug: bool = False
    log_level: str = "INFO"

    # API
    api_prefix: str = "/api"
    # Dashboard is served from a separate origin (Vite dev server / static host)
    allowed_origins: list[str] = ["*"]

    # Base data fixture
    data_path: Path = DEFAULT_DATA_PATH

    # Simulation
    simulation_seed: Optional[int] = None  # None = fresh OS entropy per request
    alert_probability: float = Field(0.3, ge=0.0, le=1.0)
    alert_severities: list[AlertSeverity] = Field(
        default=[AlertSeverity.INFO, AlertSeverity.WARNING], min_length=1
    )
    alert_history_limit: int = Field(3, ge=1)

    # Re-apply KPI clamp ranges after the per-station bias
    station_bias_reclamp: bool = False


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
