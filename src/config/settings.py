"""
Application settings using Pydantic BaseSettings.
"""

from decimal import Decimal
from typing import List, Optional, Union

from pydantic import Field, ValidationInfo, field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings."""

    # Application
    APP_NAME: str = "Land Clearing Proposal Service"
    APP_VERSION: str = "0.1.0"
    DEBUG: bool = False
    ENVIRONMENT: str = "production"
    LOG_LEVEL: str = "INFO"

    # API Configuration
    API_HOST: str = "0.0.0.0"
    API_PORT: int = 8000
    API_PREFIX: str = "/api/v1"
    CORS_ORIGINS: Union[str, List[str]] = "*"
    PUBLIC_BASE_URL: str = "http://localhost:3000"
    OPERATOR_API_KEY: Optional[str] = None

    # Database
    POSTGRES_USER: Optional[str] = None
    POSTGRES_PASSWORD: Optional[str] = None
    POSTGRES_SERVER: Optional[str] = None
    POSTGRES_DB: Optional[str] = None
    DATABASE_URL: Optional[str] = Field(default=None, validate_default=True)
    DATABASE_POOL_SIZE: int = 10
    DATABASE_MAX_OVERFLOW: int = 20
    DATABASE_ECHO: bool = False
    DATABASE_POOL_TIMEOUT: int = 30
    DATABASE_POOL_RECYCLE: int = 3600

    # Redis / Celery
    REDIS_URL: str = "redis://localhost:6379/0"
    CELERY_BROKER_URL: Optional[str] = None
    CELERY_RESULT_BACKEND: Optional[str] = None
    EXPIRY_SWEEP_INTERVAL_SECONDS: int = 3600
    EXPIRY_SWEEP_BATCH_SIZE: int = 200

    # Pricing
    TRANSPORT_HOURLY_RATE: Decimal = Decimal("350")
    TAX_RATE: Decimal = Decimal("0.07")
    DEPOSIT_RATE: Decimal = Decimal("0.20")
    QUOTE_VALIDITY_DAYS: int = 30
    DEFAULT_PRICING_CONFIDENCE: Decimal = Decimal("0.85")

    # Approval tokens
    APPROVAL_TOKEN_SECRET: str = "your-approval-token-secret-change-in-production"
    APPROVAL_TOKEN_ALGORITHM: str = "HS256"
    APPROVAL_TOKEN_TTL_DAYS: int = 30

    # Location verification
    LOCATION_PROVIDER: str = "mock"
    GOOGLE_MAPS_BASE_URL: str = "https://maps.googleapis.com/maps/api"
    GOOGLE_MAPS_API_KEY: Optional[str] = None
    BASE_LATITUDE: float = 28.5383
    BASE_LONGITUDE: float = -81.3792
    SERVICE_AREA_RADIUS_MILES: float = 60.0

    # Payments
    PAYMENT_PROVIDER: str = "mock"
    PAYMENT_CURRENCY: str = "usd"
    STRIPE_BASE_URL: str = "https://api.stripe.com/v1"
    STRIPE_SECRET_KEY: Optional[str] = None
    PAYMENT_WEBHOOK_SECRET: str = "your-payment-webhook-secret-change-in-production"
    PAYMENT_WEBHOOK_TOLERANCE_SECONDS: int = 300

    # Proposal delivery
    MAIL_PROVIDER: str = "mock"
    RESEND_BASE_URL: str = "https://api.resend.com"
    RESEND_API_KEY: Optional[str] = None
    PROPOSAL_FROM_EMAIL: str = "Proposals <proposals@example.com>"

    # Monitoring
    ENABLE_METRICS: bool = True
    PROMETHEUS_MULTIPROC_DIR: Optional[str] = None

    # External Services
    HTTP_TIMEOUT: int = 30
    HTTP_MAX_RETRIES: int = 3
    HTTP_BACKOFF_FACTOR: float = 0.5

    # Development
    ENABLE_SWAGGER: bool = True

    @field_validator("CORS_ORIGINS", mode="before")
    @classmethod
    def assemble_cors_origins(cls, v: Union[str, List[str]]) -> List[str]:
        if isinstance(v, str):
            if v == "*":
                return ["*"]
            return [i.strip() for i in v.split(",")]
        elif isinstance(v, list):
            return v
        return ["*"]

    @field_validator("DATABASE_URL", mode="before")
    @classmethod
    def assemble_db_connection(cls, v: Optional[str], info: ValidationInfo) -> str:
        if isinstance(v, str) and v:
            return v
        # Build from individual components if DATABASE_URL is not provided
        user = info.data.get("POSTGRES_USER") or "proposals_user"
        password = info.data.get("POSTGRES_PASSWORD") or "proposals_pass"
        host = info.data.get("POSTGRES_SERVER") or "localhost"
        db = info.data.get("POSTGRES_DB") or "proposals"
        return f"postgresql+asyncpg://{user}:{password}@{host}:5432/{db}"

    @field_validator("TAX_RATE", "DEPOSIT_RATE", "DEFAULT_PRICING_CONFIDENCE")
    @classmethod
    def validate_fraction(cls, v: Decimal) -> Decimal:
        if not Decimal("0") <= v <= Decimal("1"):
            raise ValueError("Rate must be between 0 and 1")
        return v

    @field_validator("TRANSPORT_HOURLY_RATE")
    @classmethod
    def validate_hourly_rate(cls, v: Decimal) -> Decimal:
        if v < 0:
            raise ValueError("Transport hourly rate cannot be negative")
        return v

    @field_validator("PUBLIC_BASE_URL")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")

    @field_validator("ENVIRONMENT")
    @classmethod
    def validate_environment(cls, v: str) -> str:
        if v not in ["development", "staging", "production", "test"]:
            raise ValueError(
                "Environment must be one of: development, staging, production, test"
            )
        return v

    @field_validator("LOG_LEVEL")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in valid_levels:
            raise ValueError(f"Log level must be one of: {valid_levels}")
        return v.upper()

    model_config = {"env_file": ".env", "case_sensitive": True, "extra": "ignore"}


# Global settings instance
settings = Settings()
