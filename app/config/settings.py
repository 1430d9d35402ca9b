"""
Application settings.

Loads configuration from environment variables using pydantic-settings.
"""

from decimal import Decimal

from loguru import logger
from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Database
    database_url: str
    database_echo: bool = False

    # Redis (for Dramatiq)
    redis_host: str = "localhost"
    redis_port: int = 6379
    redis_password: str | None = None
    redis_db: int = 0

    # Security
    encryption_key: str | None = None

    # Application
    environment: str = "production"
    debug: bool = False
    log_level: str = "INFO"
    log_file: str = "logs/forty_acres.log"

    # Withdrawal fees
    withdrawal_processing_fee_percent: Decimal = Field(
        default=Decimal("0.5"),
        ge=0,
        le=100,
        decimal_places=2,
        description="Processing fee as percentage of the withdrawal amount",
    )
    withdrawal_min_processing_fee: Decimal = Field(
        default=Decimal("10"),
        ge=0,
        decimal_places=2,
        description="Minimum flat processing fee (USD)",
    )

    # Emergency stop for all new withdrawal requests
    emergency_stop_withdrawals: bool = Field(
        default=False,
        description="Reject every new withdrawal request",
    )

    # Background jobs
    withdrawal_batch_size: int = Field(
        default=50,
        gt=0,
        le=1000,
        description="Approved withdrawals completed per job run",
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @model_validator(mode='after')
    def validate_production(self) -> 'Settings':
        """Validate production-specific requirements."""
        if self.environment == 'production':
            # DEBUG must be False in production
            if self.debug:
                raise ValueError(
                    'DEBUG must be False in production environment. '
                    'Set DEBUG=false in your .env file.'
                )

            # Bank details are stored encrypted
            if not self.encryption_key:
                raise ValueError(
                    "ENCRYPTION_KEY is required in production environment. "
                    "Generate a key with: python -c 'from cryptography.fernet import Fernet; "
                    "print(Fernet.generate_key().decode())'"
                )

            if self.emergency_stop_withdrawals:
                logger.warning(
                    'EMERGENCY_STOP_WITHDRAWALS is enabled: '
                    'new withdrawal requests will be rejected.'
                )

        return self

    @field_validator('database_url')
    @classmethod
    def validate_database_url(cls, v: str) -> str:
        """Validate database URL."""
        if not v.startswith(('postgresql://', 'postgresql+asyncpg://')):
            raise ValueError(
                'DATABASE_URL must start with postgresql:// or postgresql+asyncpg://'
            )
        return v

    @field_validator('log_level')
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level name."""
        level = v.upper()
        allowed = {'TRACE', 'DEBUG', 'INFO', 'SUCCESS', 'WARNING', 'ERROR', 'CRITICAL'}
        if level not in allowed:
            raise ValueError(f'Invalid LOG_LEVEL: {v}')
        return level

    @property
    def async_database_url(self) -> str:
        """Database URL with the asyncpg driver."""
        if self.database_url.startswith('postgresql://'):
            return self.database_url.replace('postgresql://', 'postgresql+asyncpg://', 1)
        return self.database_url


# Global settings instance
settings = Settings()
