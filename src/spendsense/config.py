"""Configuration for spendsense.

Settings are read from environment variables and an optional ``.env`` file.
"""

from functools import lru_cache
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class GeminiSettings(BaseSettings):
    """Gemini text-extraction configuration."""

    model_config = SettingsConfigDict(env_prefix="GEMINI_", env_file=".env", extra="ignore")

    api_key: Optional[str] = Field(default=None, description="Gemini API key")
    model_name: str = Field(default="gemini-1.5-flash", description="Gemini model to use")
    temperature: float = Field(default=0.1, ge=0.0, le=1.0)
    max_output_tokens: int = Field(default=512, ge=64, le=8192)


class AppSettings(BaseSettings):
    """Application settings."""

    model_config = SettingsConfigDict(env_prefix="SPENDSENSE_", env_file=".env", extra="ignore")

    daily_series_days: int = Field(default=7, ge=1, le=90, description="Days shown in the dashboard chart")
    currency_symbol: str = Field(default="₹", description="Symbol used when printing amounts")


@lru_cache()
def get_app_settings() -> AppSettings:
    """Get application settings (cached).

    Call get_app_settings.cache_clear() to reload.
    """
    return AppSettings()


@lru_cache()
def get_gemini_settings() -> GeminiSettings:
    return GeminiSettings()
