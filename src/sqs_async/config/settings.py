"""
Module: settings.py
Description: Client configuration using pydantic-settings.

Loads credentials, target region and logging options from environment
variables prefixed with SQS_ (and an optional .env file).
"""

from typing import Optional

from pydantic import Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .regions import DEFAULT_REGION, DEFAULT_REGIONS


class Settings(BaseSettings):
    """Client settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="SQS_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    # Credentials
    access_key: str = Field(default="", description="Access key id sent as AWSAccessKeyId")
    secret_key: SecretStr = Field(default=SecretStr(""), description="Secret used to sign requests")

    # Endpoint settings
    region: str = Field(default=DEFAULT_REGION, description="Symbolic region id")
    host: Optional[str] = Field(default=None, description="Explicit API host, overrides region")
    scheme: str = Field(default="https", pattern=r"^https?$", description="Endpoint URL scheme")

    # Request settings
    timeout_seconds: float = Field(
        default=30.0,
        gt=0,
        le=300,
        description="HTTP timeout in seconds"
    )
    expires_in_seconds: int = Field(
        default=30 * 60,
        ge=1,
        description="Lifetime of a signed request (Expires parameter)"
    )

    # Logging settings
    log_level: str = Field(default="WARNING", description="Logging level")
    log_path: Optional[str] = Field(default=None, description="Append logs to this file")

    @field_validator('region')
    @classmethod
    def validate_region(cls, v: str) -> str:
        """Validate region is a known region id."""
        if v not in DEFAULT_REGIONS:
            raise ValueError(f"region must be one of: {', '.join(DEFAULT_REGIONS)}")
        return v

    @field_validator('log_level')
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level is a valid logging level."""
        valid_levels = ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']
        if v.upper() not in valid_levels:
            raise ValueError(f"log_level must be one of: {', '.join(valid_levels)}")
        return v.upper()
