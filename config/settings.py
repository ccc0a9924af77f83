"""Centralised configuration handling for the forecasting core."""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_CURRENCY = "USD"


class Settings(BaseSettings):
    """Application settings sourced from ``FINANCE_*`` environment variables."""

    forecast_months: int = Field(default=12, ge=1)
    long_tail_threshold: float = Field(default=0.01, ge=0.0, le=1.0)
    other_label: str = "Other"
    default_monthly_income: float = Field(default=18000.0, ge=0.0)
    default_monthly_cost: float = Field(default=10000.0, ge=0.0)
    base_currency: str = DEFAULT_CURRENCY

    model_config = SettingsConfigDict(env_prefix="FINANCE_", extra="ignore")


@lru_cache
def get_settings() -> Settings:
    """Load and cache application settings."""

    return Settings()
