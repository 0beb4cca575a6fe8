"""
Core settings and environment variables for HaitiAlertNet.
Uses pydantic-settings for type-safe environment variable loading.
"""

from pydantic_settings import BaseSettings
from typing import Optional


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.
    Create a .env file in the root directory to configure these.
    """

    # Application
    APP_NAME: str = "HaitiAlertNet"
    APP_VERSION: str = "0.1.0"
    DEBUG: bool = False
    LANGUAGE: str = "en"

    # CORS - Frontend URLs allowed to access this API
    CORS_ORIGINS: str = "http://localhost:3000,http://localhost:5173"

    # Report submission pipeline
    SUBMISSION_DELAY_SECONDS: float = 10.0  # Simulated network/validation latency
    ADMIN_ALERT_RECIPIENT: str = "7675072828"  # Simulated SMS recipient (never actually contacted)
    VOICE_ANNOUNCEMENTS_ENABLED: bool = True

    # Notifications
    NOTIFICATION_DISMISS_SECONDS: float = 7.0
    NOTIFICATION_HISTORY_SIZE: int = 50
    ALERT_HISTORY_SIZE: int = 20  # Simulated SMS alerts and voice confirmations kept for the feeds

    # Map view
    DEFAULT_USER_REPORT_ZONE_RADIUS: float = 500.0  # Meters, derived zones only
    RECENT_ENTITY_WINDOW_SECONDS: float = 10.0  # Camera attention window for new entities
    ARRIVAL_ANIMATION_MS: int = 600

    # News feed
    NEWS_REFRESH_SECONDS: float = 30.0  # <= 0 disables the periodic refresh

    # AI Configuration
    AI_ENABLED: bool = True  # If False, uses mock provider only
    GEMINI_API_KEY: Optional[str] = None
    GEMINI_MODEL: str = "gemini-2.5-flash"
    AI_TIMEOUT_SECONDS: float = 10.0

    # Geo-position source
    # - GEO_PROVIDER: "static" (DEVICE_LATITUDE/DEVICE_LONGITUDE), "ip" (IP lookup) or "none"
    GEO_PROVIDER: str = "static"
    DEVICE_LATITUDE: Optional[float] = None
    DEVICE_LONGITUDE: Optional[float] = None
    GEO_TIMEOUT_SECONDS: float = 3.0

    class Config:
        env_file = ".env"
        case_sensitive = True
        extra = "allow"  # Allow extra env vars to prevent crashes


# Global settings instance
settings = Settings()
