"""Application configuration."""
from pydantic_settings import BaseSettings
from typing import Optional


class Settings(BaseSettings):
    """Application settings."""

    # Database
    DATABASE_URL: str = "sqlite+aiosqlite:///./courtdesk.db"

    # API
    API_HOST: str = "0.0.0.0"
    API_PORT: int = 8000
    DEBUG: bool = True

    # Club
    CLUB_TIMEZONE: str = "America/Argentina/Buenos_Aires"
    DEFAULT_OPERATOR: str = "admin"
    SEED_DEFAULTS: bool = True

    # Booking grid
    PUBLIC_GRID_START_HOUR: int = 8
    PUBLIC_GRID_END_HOUR: int = 23
    BOOKING_LEAD_MINUTES: int = 15
    SLOT_GRANULARITY_MINUTES: int = 30
    DEFAULT_BOOKING_DURATION: int = 90

    # Ledger maintenance
    LEDGER_RETENTION_DAYS: int = 15
    COMPACTION_BATCH_LIMIT: int = 500
    MAINTENANCE_SCHEDULE_ENABLED: bool = False
    MAINTENANCE_INTERVAL_HOURS: int = 24

    # Mercado Pago
    MERCADOPAGO_API_BASE_URL: str = "https://api.mercadopago.com"
    MERCADOPAGO_ACCESS_TOKEN: Optional[str] = None
    PAYMENT_SUCCESS_URL: str = "https://www.google.com"
    PAYMENT_FAILURE_URL: str = "https://www.google.com"
    PAYMENT_PENDING_URL: str = "https://www.google.com"
    REQUEST_TIMEOUT_SECONDS: float = 30.0
    MAX_RETRIES: int = 3

    class Config:
        env_file = ".env"
        case_sensitive = True


settings = Settings()
