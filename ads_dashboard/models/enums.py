"""
Enumeration definitions for the Ads Dashboard backend.

All enums inherit from both `str` and `Enum` to ensure JSON serialization compatibility
with Pydantic models, enabling automatic serialization/deserialization in API responses.
"""

from enum import Enum


class Status(str, Enum):
    """
    Traffic-light status assigned to a metric or to a whole product.

    - good: Metric is in the healthy band
    - warn: Metric is acceptable but needs attention
    - bad: Metric is outside the acceptable band
    - neutral: Not classifiable (undefined value or informational metric)
    - info: Reserved for informational highlights
    """
    GOOD = "good"
    WARN = "warn"
    BAD = "bad"
    NEUTRAL = "neutral"
    INFO = "info"


class MetricName(str, Enum):
    """
    The fourteen metrics computed for every totals record, in display order.

    Simple metrics are pass-throughs of a Totals counter; all others are ratios.
    """
    # Traffic
    IMPRESSIONS = "impressions"
    CLICKS = "clicks"
    CTR = "ctr"
    CPC = "cpc"
    CPM = "cpm"
    # Conversions
    CART_RATE = "cart_rate"
    ORDERS = "orders"
    CR = "cr"
    # Finance
    SPEND = "spend"
    REVENUE = "revenue"
    AVG_CHECK = "avg_check"
    CPA = "cpa"
    ROAS = "roas"
    DRR = "drr"


class MetricUnit(str, Enum):
    """Display unit of a metric."""
    PERCENT = "%"
    CURRENCY = "currency"
    NUMBER = ""


class BannerLabel(str, Enum):
    """
    Short recommendation label shown on the product banner.

    Maps from the overall status; NOT_DELIVERING overrides everything when
    the product had no impressions in the period.
    """
    SCALE_UP = "scale up"
    NEEDS_ATTENTION = "needs attention"
    INEFFECTIVE = "ineffective"
    NEEDS_REVIEW = "needs review"
    NOT_DELIVERING = "ad not delivering"


class TrendDirection(str, Enum):
    """Direction of a day-over-day change of a metric value."""
    UP = "up"
    DOWN = "down"
