"""
Day-over-day Trend Service

Compares each day's metric values with the previous day of the same product.
A trend is reported only when both values are defined, finite and different;
it is favorable when the metric moved in its "better" direction.
"""

import math
from typing import Dict, List, Optional, Sequence

from ads_dashboard.models import (
    AnalysisResult,
    DailyMetricSet,
    DayTrends,
    Metric,
    MetricName,
    MetricTrend,
    ProductTrends,
    TrendDirection,
)


# Metrics where an increase is an improvement; every other metric improves by falling
HIGHER_IS_BETTER = frozenset({
    MetricName.IMPRESSIONS,
    MetricName.CLICKS,
    MetricName.CTR,
    MetricName.CART_RATE,
    MetricName.CR,
    MetricName.ORDERS,
    MetricName.AVG_CHECK,
    MetricName.REVENUE,
    MetricName.ROAS,
})


def _is_defined(value: Optional[float]) -> bool:
    return value is not None and math.isfinite(value)


def compute_metric_trend(
    metric_name: MetricName,
    current: Metric,
    previous: Metric
) -> Optional[MetricTrend]:
    """
    Compare one metric between two consecutive days.

    Returns:
        MetricTrend, or None when either value is undefined or nothing changed
    """
    if not _is_defined(current.value) or not _is_defined(previous.value):
        return None
    if current.value == previous.value:
        return None

    is_up = current.value > previous.value
    is_favorable = is_up if MetricName(metric_name) in HIGHER_IS_BETTER else not is_up

    return MetricTrend(
        direction=TrendDirection.UP if is_up else TrendDirection.DOWN,
        is_favorable=is_favorable,
    )


def compute_day_trends(current: DailyMetricSet, previous: DailyMetricSet) -> DayTrends:
    """Trends of every metric of a day relative to the previous day."""
    trends: Dict[str, MetricTrend] = {}
    for metric_key, metric in current.metrics.items():
        previous_metric = previous.metrics.get(metric_key)
        if previous_metric is None:
            continue
        trend = compute_metric_trend(MetricName(metric_key), metric, previous_metric)
        if trend is not None:
            trends[metric_key] = trend
    return DayTrends(date=current.date, trends=trends)


def compute_daily_trends(daily: Sequence[DailyMetricSet]) -> List[DayTrends]:
    """Trends for each day after the first, in date order."""
    return [
        compute_day_trends(current, previous)
        for previous, current in zip(daily, daily[1:])
    ]


def compute_product_trends(results: Sequence[AnalysisResult]) -> List[ProductTrends]:
    """Day-over-day trends for every analyzed product, in result order."""
    return [
        ProductTrends(product_id=result.product_id, days=compute_daily_trends(result.daily))
        for result in results
    ]
