"""
Recommendation (Banner) Engine

Combines a product's period totals and classified metrics into one overall Status,
a short label and a multi-line recommendation.

Overall status, in priority order:
1. Spend > 0 with zero orders -> bad (money spent, nothing sold)
2. Any of CTR, CR, CPA, ROAS, DRR is bad -> bad
3. Any of them is warn -> warn
4. CPA, ROAS, DRR and CR all good -> good
5. Otherwise -> neutral

A product without impressions is reported as "ad not delivering" with status warn,
whatever the rules above decided.
"""

import logging
from typing import Dict, List, Tuple

from ads_dashboard.models import Banner, BannerLabel, MetricName, MetricSet, Status, Totals


logger = logging.getLogger(__name__)


# Metrics that drive the overall status
KEY_METRICS: Tuple[MetricName, ...] = (
    MetricName.CPA,
    MetricName.ROAS,
    MetricName.DRR,
    MetricName.CTR,
    MetricName.CR,
)

# All of these must be good for a "scale up" recommendation
SCALE_UP_METRICS: Tuple[MetricName, ...] = (
    MetricName.CPA,
    MetricName.ROAS,
    MetricName.DRR,
    MetricName.CR,
)

STATUS_LABELS: Dict[Status, BannerLabel] = {
    Status.GOOD: BannerLabel.SCALE_UP,
    Status.WARN: BannerLabel.NEEDS_ATTENTION,
    Status.BAD: BannerLabel.INEFFECTIVE,
}

# Targeted tips for metrics in the yellow or red zone, in display order
ATTENTION_TIPS: Dict[MetricName, str] = {
    MetricName.CTR: "Low click-through. Check the first photo and the title (price, selling point).",
    MetricName.CPC: "Clicks are expensive. Try lowering CPM or moving the product to a separate campaign.",
    MetricName.CR: "Conversion is average. Improve the card: full-length photos, size chart, reviews, size availability.",
    MetricName.CPA: "Cost per order is high. Lower the bid or strengthen the card to convert faster.",
    MetricName.ROAS: "Return is borderline. Lower CPC or raise the average check (bundles, accessories).",
    MetricName.DRR: "DRR is close to the margin. Do not scale until the card is improved.",
}

GENERIC_ATTENTION_TIP = "There is room to grow. Check the bid, the creative and the product card."

ATTENTION_HEADER = "Optimization needed: some metrics are in the yellow or red zone."

NOT_DELIVERING_LINES: List[str] = [
    "The ad is not running: there are no impressions.",
    "Check the daily budget, the CPM bid and the campaign status (is it paused?).",
]
ORGANIC_SALES_LINE = "Sales in the report came organically, not from advertising."

INEFFECTIVE_LINES: List[str] = [
    "There is spend but no sales, or advertising does not pay off.",
    "Action: stop advertising this SKU.",
    "Before relaunching, improve the card: photos, reviews, price, size availability, offer packaging.",
]
WASTED_SPEND_LINE = "Money is being spent with zero orders: this is a drain."

SCALE_UP_LINES: List[str] = [
    "Advertising pays off. The product card sells steadily.",
    "Action: increase the budget or CPM by 10-20%, but keep ROAS and DRR under control.",
    "Make sure CPA does not grow and ACoS stays within the margin.",
]

UNDETERMINED_TEXT = "Status is undetermined. Check the data."


def determine_overall_status(totals: Totals, metrics_set: MetricSet) -> Status:
    """
    Apply the priority rules to derive a product's overall status.

    The no-impressions override is not applied here; see derive_banner.
    """
    if totals.spend > 0 and totals.orders == 0:
        return Status.BAD

    key_statuses = [metrics_set.metric(name).status for name in KEY_METRICS]

    if Status.BAD in key_statuses:
        return Status.BAD
    if Status.WARN in key_statuses:
        return Status.WARN
    if all(metrics_set.metric(name).status == Status.GOOD for name in SCALE_UP_METRICS):
        return Status.GOOD
    return Status.NEUTRAL


def build_attention_tips(metrics_set: MetricSet) -> List[str]:
    """Collect a tip for every flagged (warn or bad) metric, or the generic tip."""
    tips = [
        tip for metric_name, tip in ATTENTION_TIPS.items()
        if metrics_set.metric(metric_name).status in (Status.WARN, Status.BAD)
    ]
    if not tips:
        tips.append(GENERIC_ATTENTION_TIP)
    return tips


def build_recommendation_text(status: Status, metrics_set: MetricSet, totals: Totals) -> str:
    """
    Assemble the multi-line recommendation for the final status.

    Args:
        status: Final overall status
        metrics_set: Period metrics of the product
        totals: Period totals of the product

    Returns:
        Newline-joined recommendation text
    """
    if totals.impressions == 0:
        lines = list(NOT_DELIVERING_LINES)
        if totals.revenue > 0:
            lines.append(ORGANIC_SALES_LINE)
        return "\n".join(lines)

    if status == Status.BAD:
        lines = list(INEFFECTIVE_LINES)
        if totals.spend > 0 and totals.orders == 0:
            lines[0] = WASTED_SPEND_LINE
        return "\n".join(lines)

    if status == Status.GOOD:
        return "\n".join(SCALE_UP_LINES)

    if status == Status.WARN:
        return "\n".join([ATTENTION_HEADER] + build_attention_tips(metrics_set))

    return UNDETERMINED_TEXT


def derive_banner(totals: Totals, metrics_set: MetricSet) -> Banner:
    """
    Derive the banner (overall status, label, recommendation) for a product.

    Args:
        totals: Period totals of the product
        metrics_set: Period metrics derived from those totals

    Returns:
        Banner for the product
    """
    status = determine_overall_status(totals, metrics_set)

    if totals.impressions == 0:
        status = Status.WARN
        label = BannerLabel.NOT_DELIVERING
    else:
        label = STATUS_LABELS.get(status, BannerLabel.NEEDS_REVIEW)

    logger.debug(f"Banner derived: status={status.value} label={label.value}")

    return Banner(
        status=status,
        short_text=label.value,
        tooltip=build_recommendation_text(status, metrics_set, totals),
    )
