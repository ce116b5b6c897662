from pydantic import field_validator

from atams import AtamsBaseSettings


class Settings(AtamsBaseSettings):
    """
    Application Settings

    Inherits from AtamsBaseSettings which includes:
    - DATABASE_URL (required)
    - ATLAS_SSO_URL, ATLAS_APP_CODE, ATLAS_ENCRYPTION_KEY, ATLAS_ENCRYPTION_IV
    - ENCRYPTION_ENABLED, ENCRYPTION_KEY, ENCRYPTION_IV (response encryption)
    - LOGGING_ENABLED, LOG_LEVEL, LOG_TO_FILE, LOG_FILE_PATH
    - CORS_ORIGINS, CORS_ALLOW_CREDENTIALS, CORS_ALLOW_METHODS, CORS_ALLOW_HEADERS
    - RATE_LIMIT_ENABLED, RATE_LIMIT_REQUESTS, RATE_LIMIT_WINDOW
    - DEBUG

    All settings can be overridden via .env file or by redefining them here.
    """
    APP_NAME: str
    APP_VERSION: str
    DEBUG: bool = False

    # Wall clock used for time windows and "today" projections
    APP_TIMEZONE: str = "Asia/Manila"

    # Time window settings (HH:MM, local time, inclusive)
    TIME_WINDOW_BYPASS: bool = False
    TIME_IN_START: str = "06:00"
    TIME_IN_END: str = "08:30"
    TIME_OUT_START: str = "20:30"
    TIME_OUT_END: str = "21:00"

    # Geofence settings
    DEFAULT_GEOFENCE_RADIUS_M: int = 200

    # Monitoring projections
    ON_DUTY_WINDOW_HOURS: int = 12
    ACTIVE_THRESHOLD_HOURS: int = 4
    HISTORY_DEFAULT_LIMIT: int = 50

    # Upper bound for a single statement against the database
    DB_STATEMENT_TIMEOUT_SECONDS: int = 10

    @field_validator("TIME_IN_START", "TIME_IN_END", "TIME_OUT_START", "TIME_OUT_END")
    @classmethod
    def validate_clock_time(cls, v: str) -> str:
        """Accept HH:MM in 24-hour format"""
        parts = v.strip().split(":")
        if len(parts) != 2 or not all(p.isdigit() for p in parts):
            raise ValueError(f"Invalid time '{v}', expected HH:MM")
        hour, minute = int(parts[0]), int(parts[1])
        if hour > 23 or minute > 59:
            raise ValueError(f"Invalid time '{v}', expected HH:MM")
        return f"{hour:02d}:{minute:02d}"


settings = Settings()
