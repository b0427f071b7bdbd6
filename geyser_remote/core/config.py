# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Core configuration: all env-driven, zero hardcode.
Single source of truth for every tunable parameter.
"""

import os
from typing import Optional


def _optional_float(raw: Optional[str]) -> Optional[float]:
    if raw is None or not raw.strip():
        return None
    return float(raw)


class Settings:
    """Application settings loaded from environment variables."""

    SERVICE_NAME: str = os.getenv("SERVICE_NAME", "geyser-remote")
    SERVICE_VERSION: str = os.getenv("SERVICE_VERSION", "1.0.0")
    SERVICE_PORT: int = int(os.getenv("SERVICE_PORT", "8090"))

    # Controller box on the local network
    GEYSER_BASE_URL: str = os.getenv("GEYSER_BASE_URL", "http://172.20.10.6")
    # Unset means requests never time out; a stalled call stays pending
    GEYSER_HTTP_TIMEOUT: Optional[float] = _optional_float(os.getenv("GEYSER_HTTP_TIMEOUT"))

    STATUS_POLL_INTERVAL: float = float(os.getenv("STATUS_POLL_INTERVAL", "3.0"))
    STATUS_POLL_ENABLED: bool = (
        os.getenv("STATUS_POLL_ENABLED", "true").lower() == "true"
    )
    FETCH_ON_STARTUP: bool = os.getenv("FETCH_ON_STARTUP", "true").lower() == "true"

    MAX_NOTIFICATIONS: int = int(os.getenv("MAX_NOTIFICATIONS", "100"))
    DEFAULT_NOTIFICATION_LIMIT: int = int(os.getenv("DEFAULT_NOTIFICATION_LIMIT", "20"))

    CORS_ORIGINS: list[str] = os.getenv("CORS_ORIGINS", "*").split(",")
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")


settings = Settings()
