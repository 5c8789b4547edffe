"""
Package initialization file for backend models.

This module exports all Pydantic schemas and enumerations from schemas.py and enums.py,
making them importable from ads_dashboard.models directly.

Usage:
    from ads_dashboard.models import (
        RawRow,
        Filters,
        AnalyticsConfig,
        AnalysisResult,
        Status,
        # ... etc
    )
"""

# =============================================================================
# Enums - Import and re-export all enumerations from enums.py
# =============================================================================

from ads_dashboard.models.enums import (
    Status,
    MetricName,
    MetricUnit,
    BannerLabel,
    TrendDirection,
)


# =============================================================================
# Schemas - Import and re-export all Pydantic models from schemas.py
# =============================================================================

from ads_dashboard.models.schemas import (
    ALL_SELECTOR,
    Amount,
    # Inputs
    RawRow,
    Filters,
    AnalyticsConfig,
    # Aggregates and metrics
    Totals,
    Metric,
    MetricSet,
    DailyMetricSet,
    Banner,
    AnalysisResult,
    # Trends
    MetricTrend,
    DayTrends,
    ProductTrends,
    # Supporting
    FilterOptions,
    PreferencesState,
    ValidationError,
)


__all__ = [
    # Enums
    "Status",
    "MetricName",
    "MetricUnit",
    "BannerLabel",
    "TrendDirection",
    # Schemas
    "ALL_SELECTOR",
    "Amount",
    "RawRow",
    "Filters",
    "AnalyticsConfig",
    "Totals",
    "Metric",
    "MetricSet",
    "DailyMetricSet",
    "Banner",
    "AnalysisResult",
    "MetricTrend",
    "DayTrends",
    "ProductTrends",
    "FilterOptions",
    "PreferencesState",
    "ValidationError",
]
