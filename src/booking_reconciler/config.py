"""
Configuration management for booking reconciliation service
"""

from typing import List

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .utils.validators import validate_email


class ServerConfig(BaseSettings):
    """Server configuration"""
    port: int = Field(default=8000)
    host: str = Field(default="0.0.0.0")
    environment: str = Field(default="development")
    debug: bool = Field(default=False)

    model_config = SettingsConfigDict(env_prefix="SERVER_")


class ReservationAPIConfig(BaseSettings):
    """Reservation API configuration"""
    token_url: str = Field(default="https://reservations.example.com/api/v1/token")
    lookup_url: str = Field(default="https://reservations.example.com/api/v1/booking/retrieve")
    timeout: float = Field(default=30.0)  # seconds
    token_max_attempts: int = Field(default=10, ge=1)
    token_transport_attempts: int = Field(default=30, ge=1)
    retry_delay: int = Field(default=0, ge=0)  # ms between token attempts
    identities: List[str] = Field(
        default_factory=lambda: [
            "airlines@example.com",
            "info.bookings@example.com",
            "accounts@example.com",
        ]
    )

    model_config = SettingsConfigDict(env_prefix="RESERVATION_API_")

    @field_validator("identities")
    @classmethod
    def check_identities(cls, value: List[str]) -> List[str]:
        if not value:
            raise ValueError("At least one lookup identity is required")
        invalid = [identity for identity in value if not validate_email(identity)]
        if invalid:
            raise ValueError(f"Invalid lookup identities: {invalid}")
        return value


class ReconciliationConfig(BaseSettings):
    """Reconciliation rules configuration"""
    timezone: str = Field(default="Asia/Kolkata")
    sheet_name: str = Field(default="Sheet1")
    max_rows: int = Field(default=2999, ge=1)

    model_config = SettingsConfigDict(env_prefix="RECONCILIATION_")


class ResultsLogConfig(BaseSettings):
    """Append-only results log configuration"""
    enabled: bool = Field(default=True)
    path: str = Field(default="downloads/data.txt")

    model_config = SettingsConfigDict(env_prefix="RESULTS_LOG_")


class LoggingConfig(BaseSettings):
    """Logging configuration"""
    level: str = Field(default="INFO")
    log_format: str = Field(default="json")  # json or text

    model_config = SettingsConfigDict(env_prefix="LOGGING_")


class Config:
    """Main configuration class"""

    def __init__(self):
        self.server = ServerConfig()
        self.reservation_api = ReservationAPIConfig()
        self.reconciliation = ReconciliationConfig()
        self.results_log = ResultsLogConfig()
        self.logging = LoggingConfig()

    @property
    def is_development(self) -> bool:
        """Check if running in development mode"""
        return self.server.environment.lower() == "development"

    @property
    def is_production(self) -> bool:
        """Check if running in production mode"""
        return self.server.environment.lower() == "production"


# Global configuration instance
config = Config()
