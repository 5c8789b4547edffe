"""
Pydantic models for the Ads Dashboard backend.

This module provides type-safe data validation and serialization for the analytics
pipeline and the API contracts built on top of it:

- RawRow: one parsed advertising-report row (produced by ingestion)
- Filters / AnalyticsConfig: the query inputs (frozen, so they can key a cache)
- Totals: summed counters for a group of rows
- Metric / MetricSet / DailyMetricSet: derived and classified metrics
- Banner / AnalysisResult: the per-product output
- MetricTrend / DayTrends / ProductTrends: day-over-day changes
- FilterOptions / PreferencesState / ValidationError: supporting models

Money amounts are Decimal so that summing partitions of rows is exact; they are
serialized as JSON numbers.

All models use Pydantic v2 syntax.
"""

from datetime import date as DateType
from decimal import Decimal
from typing import Annotated, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, PlainSerializer

from ads_dashboard.models.enums import MetricName, Status, TrendDirection


# Decimal in Python, number in JSON
Amount = Annotated[Decimal, PlainSerializer(float, return_type=float, when_used="json")]

# Selector value meaning "no filter on this dimension"
ALL_SELECTOR = "all"


# =============================================================================
# Input Models
# =============================================================================


class RawRow(BaseModel):
    """
    One observation from the advertising report.

    Produced by the ingestion layer with numbers already coerced from
    locale-formatted text and dates normalized to ISO form. Immutable.
    """
    model_config = ConfigDict(
        frozen=True,
        json_schema_extra={
            "example": {
                "campaign_id": "18234501",
                "traffic_source": "search",
                "product_id": "123456789",
                "product_name": "Linen shirt",
                "date": "2024-01-01",
                "impressions": 1000,
                "clicks": 20,
                "cart_adds": 5,
                "orders": 1,
                "spend": 200.0,
                "revenue": 2000.0,
            }
        }
    )

    campaign_id: str = Field(default="", description="Advertising campaign identifier")
    traffic_source: str = Field(default="", description="Traffic source (app type) identifier")
    product_id: str = Field(..., description="Marketplace product identifier (SKU)")
    product_name: str = Field(default="", description="Product display name")
    date: str = Field(
        ...,
        description="Observation date in ISO form, optionally with a time part"
    )
    impressions: int = Field(default=0, description="Ad impressions")
    clicks: int = Field(default=0, description="Ad clicks")
    cart_adds: int = Field(default=0, description="Add-to-cart events")
    orders: int = Field(default=0, description="Ordered items")
    spend: Amount = Field(default=Decimal(0), description="Ad spend")
    revenue: Amount = Field(default=Decimal(0), description="Revenue of ordered items")


class Filters(BaseModel):
    """
    Query filters: an inclusive date range plus equality selectors.

    Each selector is either a concrete value or "all". The date_to bound is
    extended to the end of that day when rows are matched.
    """
    model_config = ConfigDict(
        frozen=True,
        json_schema_extra={
            "example": {
                "campaign_id": "all",
                "product_id": "all",
                "traffic_source": "all",
                "date_from": "2024-01-01",
                "date_to": "2024-01-04",
            }
        }
    )

    campaign_id: str = Field(default=ALL_SELECTOR, description="Campaign selector")
    product_id: str = Field(default=ALL_SELECTOR, description="Product selector")
    traffic_source: str = Field(default=ALL_SELECTOR, description="Traffic source selector")
    date_from: DateType = Field(..., description="First day of the range (inclusive)")
    date_to: DateType = Field(..., description="Last day of the range (inclusive)")


class AnalyticsConfig(BaseModel):
    """
    User-tunable analytics parameters.

    margin_pct scales the acceptable DRR band. min_clicks_for_cr is reserved
    and not consulted by any status rule.
    """
    model_config = ConfigDict(frozen=True)

    margin_pct: Optional[float] = Field(
        default=25,
        le=100,
        description="Product margin in percent (0-100); <= 0 or null uses fixed DRR bands"
    )
    min_clicks_for_cr: int = Field(
        default=30,
        ge=0,
        description="Reserved minimum click volume for conversion rate"
    )


# =============================================================================
# Aggregate and Metric Models
# =============================================================================


class Totals(BaseModel):
    """
    Summed counters for a group of rows.

    Addition is exact (integer counts and Decimal amounts), so totals of
    disjoint partitions add up to the totals of their union.
    """
    model_config = ConfigDict(frozen=True)

    impressions: int = Field(default=0, description="Total impressions")
    clicks: int = Field(default=0, description="Total clicks")
    cart_adds: int = Field(default=0, description="Total add-to-cart events")
    orders: int = Field(default=0, description="Total ordered items")
    spend: Amount = Field(default=Decimal(0), description="Total ad spend")
    revenue: Amount = Field(default=Decimal(0), description="Total revenue")

    def __add__(self, other: "Totals") -> "Totals":
        if not isinstance(other, Totals):
            return NotImplemented
        return Totals(
            impressions=self.impressions + other.impressions,
            clicks=self.clicks + other.clicks,
            cart_adds=self.cart_adds + other.cart_adds,
            orders=self.orders + other.orders,
            spend=self.spend + other.spend,
            revenue=self.revenue + other.revenue,
        )


class Metric(BaseModel):
    """
    A single derived metric.

    value is None when the metric is not calculable (an undefined ratio).
    """
    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "value": 0.02,
                "status": "warn",
                "display_value": "2.0%",
                "tooltip": "CTR is average: the cover photo or title can be improved.\nFormula: CTR = Clicks / Impressions x 100%",
                "is_calculable": True,
            }
        }
    )

    value: Optional[float] = Field(default=None, description="Raw metric value or null")
    status: Status = Field(default=Status.NEUTRAL, description="Traffic-light status")
    display_value: str = Field(..., description="Formatted value for display")
    tooltip: str = Field(default="", description="Status explanation followed by the formula")
    is_calculable: bool = Field(default=True, description="False when the ratio is undefined")


class MetricSet(BaseModel):
    """Totals together with the fourteen metrics derived from them."""
    totals: Totals = Field(..., description="Aggregated counters")
    metrics: Dict[str, Metric] = Field(
        ...,
        description="Metric name to Metric, in display order"
    )

    def metric(self, name: MetricName) -> Metric:
        return self.metrics[MetricName(name).value]


class DailyMetricSet(MetricSet):
    """MetricSet for one calendar day."""
    date: str = Field(..., description="Calendar day (YYYY-MM-DD)")


class Banner(BaseModel):
    """Overall product status with a short label and a multi-line recommendation."""
    status: Status = Field(..., description="Overall product status")
    short_text: str = Field(..., description="Short recommendation label")
    tooltip: str = Field(..., description="Multi-line recommendation text")


class AnalysisResult(BaseModel):
    """
    Analysis of one product over the filtered period.

    daily is ordered ascending by date and re-aggregates exactly to
    period_totals.totals.
    """
    product_id: str = Field(..., description="Product identifier")
    product_name: str = Field(..., description="Product display name")
    banner: Banner = Field(..., description="Overall recommendation")
    period_totals: MetricSet = Field(..., description="Metrics for the whole period")
    daily: List[DailyMetricSet] = Field(
        default_factory=list,
        description="Per-day metrics, ascending by date"
    )


# =============================================================================
# Trend Models
# =============================================================================


class MetricTrend(BaseModel):
    """Change of one metric relative to the previous day."""
    direction: TrendDirection = Field(..., description="Up or down")
    is_favorable: bool = Field(..., description="Whether the change is an improvement")


class DayTrends(BaseModel):
    """Trends for every metric that changed on a given day."""
    date: str = Field(..., description="Calendar day (YYYY-MM-DD)")
    trends: Dict[str, MetricTrend] = Field(default_factory=dict)


class ProductTrends(BaseModel):
    """Day-over-day trends for one product."""
    product_id: str = Field(..., description="Product identifier")
    days: List[DayTrends] = Field(default_factory=list)


# =============================================================================
# Supporting Models
# =============================================================================


class FilterOptions(BaseModel):
    """Distinct selector values found in a dataset, in encounter order."""
    campaign_ids: List[str] = Field(default_factory=list)
    product_ids: List[str] = Field(default_factory=list)
    traffic_sources: List[str] = Field(default_factory=list)


class PreferencesState(BaseModel):
    """Last-used filters and analytics configuration."""
    filters: Filters = Field(..., description="Last-used filters")
    config: AnalyticsConfig = Field(
        default_factory=AnalyticsConfig,
        description="Last-used analytics configuration"
    )


class ValidationError(BaseModel):
    """
    Validation error detail.

    Used for reporting data validation issues during ingestion.
    """
    field: str = Field(
        ...,
        description="Field with validation error"
    )
    message: str = Field(
        ...,
        description="Error message"
    )
    row_number: Optional[int] = Field(
        default=None,
        ge=1,
        description="Row number where error occurred"
    )
