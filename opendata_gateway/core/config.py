"""
Core configuration module for OpenData Gateway.

This module provides centralized configuration management using Pydantic Settings.
All configuration is loaded from environment variables with the OPENDATA_GATEWAY_
prefix.

The resilience constants (3 attempts, 15 minute cache TTL, 5 failure / 30 second
circuit breaker, 30 second per-attempt timeout) are the compatibility defaults
shared by every upstream Parliament API client.
"""

from functools import lru_cache
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings


# =============================================================================
# Resilience Defaults
# =============================================================================

DEFAULT_REQUEST_TIMEOUT_SECONDS = 30.0
DEFAULT_RETRY_MAX_ATTEMPTS = 3
DEFAULT_RETRY_BASE_DELAY_SECONDS = 0.2
DEFAULT_CIRCUIT_BREAKER_FAILURE_THRESHOLD = 5
DEFAULT_CIRCUIT_BREAKER_RECOVERY_TIMEOUT_SECONDS = 30.0
DEFAULT_CACHE_TTL_SECONDS = 15 * 60


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    All fields use the OPENDATA_GATEWAY_ prefix for environment variables.
    Example: OPENDATA_GATEWAY_CACHE_TTL_SECONDS=300
    """

    # =========================================================================
    # Service Configuration
    # =========================================================================
    service_name: str = Field(
        default="opendata-gateway",
        description="Name of the service for logging and identification",
    )
    environment: Literal["development", "staging", "production"] = Field(
        default="development",
        description="Deployment environment",
    )
    log_level: str = Field(
        default="INFO",
        description="Log level for structured logging",
    )
    cors_origins: str = Field(
        default="",
        description="Comma-separated CORS origins (ignored in development)",
    )

    # =========================================================================
    # Upstream HTTP Configuration
    # =========================================================================
    request_timeout_seconds: float = Field(
        default=DEFAULT_REQUEST_TIMEOUT_SECONDS,
        gt=0.0,
        le=300.0,
        description="Hard timeout for a single upstream attempt",
    )
    max_connections: int = Field(
        default=100,
        ge=1,
        le=1000,
        description="Maximum pooled connections per upstream client",
    )
    max_keepalive: int = Field(
        default=20,
        ge=0,
        le=1000,
        description="Maximum keepalive connections per upstream client",
    )

    # =========================================================================
    # Retry Configuration
    # =========================================================================
    retry_max_attempts: int = Field(
        default=DEFAULT_RETRY_MAX_ATTEMPTS,
        ge=1,
        le=10,
        description="Total attempts (first try included) for transient failures",
    )
    retry_base_delay_seconds: float = Field(
        default=DEFAULT_RETRY_BASE_DELAY_SECONDS,
        gt=0.0,
        le=60.0,
        description="Base delay for exponential backoff between attempts",
    )

    # =========================================================================
    # Circuit Breaker Configuration
    # =========================================================================
    circuit_breaker_failure_threshold: int = Field(
        default=DEFAULT_CIRCUIT_BREAKER_FAILURE_THRESHOLD,
        ge=1,
        le=100,
        description="Number of consecutive failures before circuit opens",
    )
    circuit_breaker_recovery_timeout_seconds: float = Field(
        default=DEFAULT_CIRCUIT_BREAKER_RECOVERY_TIMEOUT_SECONDS,
        gt=0.0,
        le=600.0,
        description="Seconds to wait before attempting circuit recovery",
    )

    # =========================================================================
    # Cache Configuration
    # =========================================================================
    cache_ttl_seconds: float = Field(
        default=DEFAULT_CACHE_TTL_SECONDS,
        gt=0.0,
        description="Default time-to-live for cached upstream responses",
    )

    # =========================================================================
    # Context Resources
    # =========================================================================
    context_directory: str = Field(
        default="context",
        description="Directory holding static JSON context documents",
    )

    model_config = {
        "env_prefix": "OPENDATA_GATEWAY_",
        "case_sensitive": False,
        "extra": "ignore",
    }

    # =========================================================================
    # Field Validators
    # =========================================================================
    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate and normalize log level."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        level = v.upper()
        if level not in valid_levels:
            raise ValueError(f"Log level must be one of: {valid_levels}")
        return level

    def get_cors_origins(self) -> list[str]:
        """
        Get CORS allowed origins based on environment.

        Development allows all origins; other environments use the
        comma-separated cors_origins value (empty blocks cross-origin requests).
        """
        if self.environment == "development":
            return ["*"]
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]


# =============================================================================
# Settings Singleton
# =============================================================================


@lru_cache
def get_settings() -> Settings:
    """
    Get the application settings singleton.

    Uses functools.lru_cache to ensure only one Settings instance is created.
    Call get_settings.cache_clear() in tests after changing the environment.

    Returns:
        Settings: The application settings instance.
    """
    return Settings()
