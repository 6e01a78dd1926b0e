# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Core configuration — all env-driven, zero hardcode.
Single source of truth for every tunable parameter.
"""

import os


class Settings:
    """Application settings loaded from environment variables."""

    SERVICE_NAME: str = os.getenv("SERVICE_NAME", "rota-service")
    SERVICE_VERSION: str = os.getenv("SERVICE_VERSION", "1.0.0")
    SERVICE_PORT: int = int(os.getenv("SERVICE_PORT", "8005"))

    NOTIFICATION_SERVICE_URL: str = os.getenv(
        "NOTIFICATION_SERVICE_URL", "http://notification-service:8004"
    )
    NOTIFICATION_TIMEOUT: float = float(os.getenv("NOTIFICATION_TIMEOUT", "3.0"))

    # Empty URL disables the enhancement transform entirely.
    ENHANCER_URL: str = os.getenv("ENHANCER_URL", "")
    ENHANCER_TIMEOUT: float = float(os.getenv("ENHANCER_TIMEOUT", "30.0"))
    ENHANCER_API_KEY: str = os.getenv("ENHANCER_API_KEY", "")

    DEFAULT_HORIZON_DAYS: int = int(os.getenv("DEFAULT_HORIZON_DAYS", "30"))
    ENHANCED_HORIZON_DAYS: int = int(os.getenv("ENHANCED_HORIZON_DAYS", "14"))
    MAX_HORIZON_DAYS: int = int(os.getenv("MAX_HORIZON_DAYS", "366"))

    DEFAULT_HISTORY_LIMIT: int = int(os.getenv("DEFAULT_HISTORY_LIMIT", "100"))
    MAX_HISTORY_SIZE: int = int(os.getenv("MAX_HISTORY_SIZE", "10000"))
    MAX_NOTIFICATIONS: int = int(os.getenv("MAX_NOTIFICATIONS", "500"))

    CORS_ORIGINS: list[str] = os.getenv("CORS_ORIGINS", "*").split(",")
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
    SEED_DEFAULT_ROSTER: bool = (
        os.getenv("SEED_DEFAULT_ROSTER", "true").lower() == "true"
    )


settings = Settings()
