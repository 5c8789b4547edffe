"""
Status Classification Service

This module assigns a traffic-light Status to every metric value. Each actionable
metric has two thresholds and a direction:

- higher-is-better: good if value >= good, warn if value >= warn, else bad
- lower-is-better:  good if value <  good, warn if value <= warn, else bad

DRR is banded against the configured margin: good up to 70% of the margin,
warn up to the margin itself, bad above it. Without a positive margin the
fixed DRR bands apply.

CPM, average check, spend and revenue are informational and always neutral.
Undefined (None) or non-finite values are always neutral.

Boundaries are deliberately asymmetric for the lower-is-better metrics: a CPC
of exactly 10 is not good (good requires < 10) but is warn (warn allows <= 15).
"""

import math
from typing import Dict, Optional, Union

from ads_dashboard.models import AnalyticsConfig, MetricName, Status, Totals


# =============================================================================
# Default Thresholds
# Structure: { metric: { good, warn, higher_is_better } }
# =============================================================================

Threshold = Dict[str, Union[float, bool]]

DEFAULT_THRESHOLDS: Dict[MetricName, Threshold] = {
    # Traffic volume
    MetricName.IMPRESSIONS: {"good": 5000, "warn": 2000, "higher_is_better": True},
    MetricName.CLICKS: {"good": 150, "warn": 50, "higher_is_better": True},
    # Engagement
    MetricName.CTR: {"good": 0.025, "warn": 0.015, "higher_is_better": True},
    MetricName.CPC: {"good": 10, "warn": 15, "higher_is_better": False},
    # Conversions
    MetricName.CR: {"good": 0.05, "warn": 0.02, "higher_is_better": True},
    MetricName.CART_RATE: {"good": 0.10, "warn": 0.05, "higher_is_better": True},
    MetricName.ORDERS: {"good": 10, "warn": 3, "higher_is_better": True},
    # Finance
    MetricName.CPA: {"good": 200, "warn": 400, "higher_is_better": False},
    MetricName.ROAS: {"good": 8, "warn": 4, "higher_is_better": True},
    # Used only when no positive margin is configured
    MetricName.DRR: {"good": 0.10, "warn": 0.25, "higher_is_better": False},
}

# Share of the margin below which DRR is good
DRR_GREEN_SHARE_OF_MARGIN: float = 0.7

# Never classified against thresholds
INFORMATIONAL_METRICS = frozenset({
    MetricName.CPM,
    MetricName.AVG_CHECK,
    MetricName.SPEND,
    MetricName.REVENUE,
})

# Meaningless when the campaign never ran (no impressions and no spend)
SPEND_DEPENDENT_METRICS = frozenset({
    MetricName.CPA,
    MetricName.ROAS,
    MetricName.DRR,
})


def evaluate_threshold_status(
    value: float,
    good_threshold: float,
    warn_threshold: float,
    higher_is_better: bool
) -> Status:
    """
    Evaluate status for a value against a two-threshold band.

    Higher-is-better bands are closed on both thresholds (>=). Lower-is-better
    bands are open on the good threshold (<) and closed on the warn threshold (<=).

    Args:
        value: Finite metric value
        good_threshold: Boundary of the good band
        warn_threshold: Boundary of the warn band
        higher_is_better: Direction of the metric

    Returns:
        Status.GOOD, Status.WARN or Status.BAD
    """
    if higher_is_better:
        if value >= good_threshold:
            return Status.GOOD
        if value >= warn_threshold:
            return Status.WARN
        return Status.BAD

    if value < good_threshold:
        return Status.GOOD
    if value <= warn_threshold:
        return Status.WARN
    return Status.BAD


def classify_drr(value: float, margin_pct: Optional[float]) -> Status:
    """
    Classify the ad-spend-to-revenue ratio against the product margin.

    Args:
        value: DRR as a fraction (spend / revenue)
        margin_pct: Margin in percent; None or <= 0 selects the fixed bands

    Returns:
        Status for the DRR value
    """
    if margin_pct is None or margin_pct <= 0:
        threshold = DEFAULT_THRESHOLDS[MetricName.DRR]
        return evaluate_threshold_status(
            value,
            threshold["good"],
            threshold["warn"],
            threshold["higher_is_better"],
        )

    margin_fraction = margin_pct / 100
    green_threshold = DRR_GREEN_SHARE_OF_MARGIN * margin_fraction

    if value <= green_threshold:
        return Status.GOOD
    if value <= margin_fraction:
        return Status.WARN
    return Status.BAD


def classify_metric(
    metric_name: MetricName,
    value: Optional[float],
    config: AnalyticsConfig
) -> Status:
    """
    Classify a single metric value.

    Pure function of (metric name, value, config).

    Args:
        metric_name: Which metric the value belongs to
        value: Raw metric value, None when not calculable
        config: Analytics configuration (margin for DRR)

    Returns:
        Status for the metric
    """
    if value is None or not math.isfinite(value):
        return Status.NEUTRAL

    metric_name = MetricName(metric_name)

    if metric_name in INFORMATIONAL_METRICS:
        return Status.NEUTRAL

    if metric_name == MetricName.DRR:
        return classify_drr(value, config.margin_pct)

    threshold = DEFAULT_THRESHOLDS.get(metric_name)
    if threshold is None:
        return Status.NEUTRAL

    return evaluate_threshold_status(
        value,
        threshold["good"],
        threshold["warn"],
        threshold["higher_is_better"],
    )


def apply_status_overrides(
    metric_name: MetricName,
    status: Status,
    totals: Totals
) -> Status:
    """
    Apply totals-dependent overrides to a classified status.

    CPA, ROAS and DRR are neutral when the product had neither impressions
    nor spend: the campaign never ran, so their thresholds say nothing.
    """
    if (
        totals.impressions == 0
        and totals.spend == 0
        and MetricName(metric_name) in SPEND_DEPENDENT_METRICS
    ):
        return Status.NEUTRAL
    return status
