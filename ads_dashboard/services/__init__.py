"""
Backend Services Module

This module contains the business logic of the Ads Dashboard backend.
Analytics services are pure functions of their inputs.

Services:
- aggregation: Sum raw rows into Totals
- metrics: Derive the fourteen metrics with safe division and display formatting
- classification: Threshold-based metric statuses
- recommendation: Overall product status and recommendation banner
- analytics: Filtering, grouping and per-product analysis (orchestrator)
- trends: Day-over-day metric trends
- ingestion: Advertising report CSV parsing
- cache: Memoization of analyses
- datasets: In-process registry of uploaded datasets
- preferences: Load/save of last-used filters and configuration

All services are designed to be consumed by the API layer (ads_dashboard/api/).
"""

# =============================================================================
# Analytics Pipeline Exports
# =============================================================================

from ads_dashboard.services.aggregation import (
    aggregate_rows,
    combine_totals,
)

from ads_dashboard.services.classification import (
    classify_metric,
    classify_drr,
    evaluate_threshold_status,
    apply_status_overrides,
    DEFAULT_THRESHOLDS,
)

from ads_dashboard.services.metrics import (
    safe_divide,
    calculate_metric,
    calculate_metrics_set,
    format_display_value,
    build_tooltip,
    METRIC_DEFINITIONS,
    NOT_CALCULABLE_PLACEHOLDER,
)

from ads_dashboard.services.recommendation import (
    derive_banner,
    determine_overall_status,
    build_recommendation_text,
)

from ads_dashboard.services.analytics import (
    analyze,
    analyze_product,
    filter_rows,
    filter_and_group,
    group_by_product,
    group_by_day,
    parse_row_datetime,
)

from ads_dashboard.services.trends import (
    compute_metric_trend,
    compute_daily_trends,
    compute_product_trends,
    HIGHER_IS_BETTER,
)

# =============================================================================
# Supporting Service Exports
# =============================================================================

from ads_dashboard.services.ingestion import (
    parse_ads_csv,
    extract_filter_options,
    validate_columns,
)

from ads_dashboard.services.cache import AnalysisCache

from ads_dashboard.services.datasets import DatasetRegistry

from ads_dashboard.services.preferences import (
    PreferencesStore,
    InMemoryPreferencesStore,
    JsonFilePreferencesStore,
    create_preferences_store,
    default_preferences,
)


__all__ = [
    # aggregation
    "aggregate_rows",
    "combine_totals",
    # classification
    "classify_metric",
    "classify_drr",
    "evaluate_threshold_status",
    "apply_status_overrides",
    "DEFAULT_THRESHOLDS",
    # metrics
    "safe_divide",
    "calculate_metric",
    "calculate_metrics_set",
    "format_display_value",
    "build_tooltip",
    "METRIC_DEFINITIONS",
    "NOT_CALCULABLE_PLACEHOLDER",
    # recommendation
    "derive_banner",
    "determine_overall_status",
    "build_recommendation_text",
    # analytics
    "analyze",
    "analyze_product",
    "filter_rows",
    "filter_and_group",
    "group_by_product",
    "group_by_day",
    "parse_row_datetime",
    # trends
    "compute_metric_trend",
    "compute_daily_trends",
    "compute_product_trends",
    "HIGHER_IS_BETTER",
    # ingestion
    "parse_ads_csv",
    "extract_filter_options",
    "validate_columns",
    # supporting
    "AnalysisCache",
    "DatasetRegistry",
    "PreferencesStore",
    "InMemoryPreferencesStore",
    "JsonFilePreferencesStore",
    "create_preferences_store",
    "default_preferences",
]
