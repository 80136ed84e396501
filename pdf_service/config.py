"""
PDF Service Configuration Module

Settings are validated with pydantic-settings when the service starts, so a
bad MAX_CONCURRENT_PDFS or timeout fails fast instead of at the first render.
"""

import logging
from functools import lru_cache
from typing import List

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)


class PDFServiceSettings(BaseSettings):
    """
    PDF service configuration with validation.

    All settings can be overridden via environment variables
    (MAX_CONCURRENT_PDFS, PLAYWRIGHT_TIMEOUT_MS, ...).
    """

    model_config = SettingsConfigDict(env_prefix="", case_sensitive=False)

    # === Concurrency & Limits ===
    max_concurrent_pdfs: int = Field(
        default=5,
        ge=1,
        le=20,
        description="Maximum concurrent renders (1-20)"
    )
    playwright_timeout_ms: int = Field(
        default=30000,
        ge=1000,
        le=120000,
        description="Per-render browser timeout in milliseconds (1000-120000)"
    )
    playwright_headless: bool = Field(
        default=True,
        description="Run Chromium headless"
    )

    # === Environment ===
    environment: str = Field(
        default="development",
        description="Environment: development, staging, production"
    )

    # === Logging ===
    log_level: str = Field(default="INFO", description="DEBUG, INFO, WARNING or ERROR")
    log_format: str = Field(default="simple", description="simple or json")

    @field_validator("environment")
    @classmethod
    def validate_environment(cls, v: str) -> str:
        """Validate environment is a known value."""
        allowed = {"development", "staging", "production"}
        v_lower = v.lower()
        if v_lower not in allowed:
            raise ValueError(f"environment must be one of: {', '.join(sorted(allowed))}")
        return v_lower

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        v_upper = v.upper()
        if v_upper not in {"DEBUG", "INFO", "WARNING", "ERROR"}:
            raise ValueError(f"Invalid log_level: {v}")
        return v_upper

    @field_validator("log_format")
    @classmethod
    def validate_log_format(cls, v: str) -> str:
        v_lower = v.lower()
        if v_lower not in {"simple", "json"}:
            raise ValueError("log_format must be 'simple' or 'json'")
        return v_lower

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.environment == "production"

    @property
    def playwright_timeout_seconds(self) -> float:
        return self.playwright_timeout_ms / 1000

    def validate_production_config(self) -> List[str]:
        """
        Check settings that are legal but unwise in production.

        Returns list of warning messages.
        """
        issues = []
        if self.is_production:
            if not self.playwright_headless:
                issues.append("WARNING: PLAYWRIGHT_HEADLESS is off in production")
            if self.log_level == "DEBUG":
                issues.append("WARNING: DEBUG logging in production")
        return issues


@lru_cache()
def get_settings() -> PDFServiceSettings:
    """
    Get cached settings instance.

    Settings are loaded once; tests call get_settings.cache_clear() after
    changing the environment.
    """
    return PDFServiceSettings()


def validate_config_on_startup() -> PDFServiceSettings:
    """
    Load settings and log any production warnings.

    Raises ValueError with details if config is invalid.
    """
    try:
        settings = get_settings()
    except Exception as e:
        raise ValueError(f"Configuration validation failed: {e}")

    for issue in settings.validate_production_config():
        logger.warning(issue)
    return settings
