"""
Settings and environment management module for the Ads Dashboard backend.

This module provides centralized configuration management using pydantic-settings,
which automatically loads settings from environment variables and .env files.

Key Features:
- Environment variable validation and type coercion
- Sensible defaults for development
- Singleton pattern via @lru_cache for efficient access

Analytics Defaults:
- default_margin_pct: 25 (Margin used to scale the DRR band)
- default_min_clicks_for_cr: 30 (Reserved, not used by any status rule)
- default_lookback_days: 3 (Default filter range is today-3 .. today)

Usage:
    from ads_dashboard.core.config import get_settings

    settings = get_settings()
    margin = settings.default_margin_pct
"""

from functools import lru_cache
from typing import List, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Attributes:
        app_name: Title reported by the API.
        cors_origins: Origins allowed to call the API from a browser.
        default_margin_pct: Margin percent for a fresh AnalyticsConfig.
        default_min_clicks_for_cr: Reserved click threshold for a fresh AnalyticsConfig.
        default_lookback_days: Days before today where the default date range starts.
        placeholder_product_name: Name used when a product row carries no name.
        currency_symbol: Suffix appended to money display values.
        analysis_cache_size: Maximum number of memoized analyses.
        preferences_path: JSON file for saved preferences; in-memory when unset.
    """

    model_config = SettingsConfigDict(
        env_file='.env',
        env_file_encoding='utf-8',
        extra='ignore',
        case_sensitive=False,
    )

    # =========================================================================
    # Service
    # =========================================================================

    app_name: str = 'Ads Dashboard API'

    # Next.js dev server and its loopback alias
    cors_origins: List[str] = [
        'http://localhost:3000',
        'http://127.0.0.1:3000',
    ]

    # =========================================================================
    # Analytics Defaults
    # =========================================================================

    # DRR green band is 0.7 * margin, yellow band is up to the margin itself
    default_margin_pct: float = 25

    # Carried in AnalyticsConfig but not consumed by any status rule
    default_min_clicks_for_cr: int = 30

    default_lookback_days: int = 3

    placeholder_product_name: str = 'Product name (placeholder)'

    currency_symbol: str = '₽'

    # =========================================================================
    # Caching and Persistence
    # =========================================================================

    analysis_cache_size: int = 32

    preferences_path: Optional[str] = None


@lru_cache()
def get_settings() -> Settings:
    """
    Get the application settings singleton.

    Returns:
        Settings: The application settings instance with all configuration values.

    Note:
        To refresh settings in tests, you can clear the cache:
        >>> get_settings.cache_clear()
    """
    return Settings()
