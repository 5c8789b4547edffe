"""
Metric Calculation Service

Turns a Totals record into the fourteen named metrics shown for a product or a day.
Every metric carries its raw value (None when not calculable), its Status, a
formatted display string and a tooltip built from a status explanation and the
metric formula.

Division Policy (safe_divide):
- 0 / 0 -> 0 (calculable)
- n / 0 -> None for n != 0 (an undefined ratio, not infinity)
- non-finite numerator or denominator -> None
- otherwise numerator / denominator

The per-metric definitions live in METRIC_DEFINITIONS as inert data; the
calculator itself only dispatches over that registry.
"""

import math
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Callable, Dict, Optional, Union

from ads_dashboard.core.config import get_settings
from ads_dashboard.models import (
    AnalyticsConfig,
    Metric,
    MetricName,
    MetricSet,
    MetricUnit,
    Status,
    Totals,
)
from ads_dashboard.services.classification import apply_status_overrides, classify_metric


Number = Union[int, float, Decimal]

# Shown instead of a value that cannot be calculated
NOT_CALCULABLE_PLACEHOLDER = "—"

# Money metrics render with thousands separators and a currency suffix
CURRENCY_DECIMALS = 1
ROAS_DECIMALS = 2
PERCENT_DECIMALS = 1


def safe_divide(numerator: Number, denominator: Number) -> Optional[float]:
    """
    Divide with explicit zero and non-finite handling.

    Args:
        numerator: Dividend
        denominator: Divisor

    Returns:
        The quotient, 0.0 for 0/0, or None when the ratio is undefined
    """
    numerator = float(numerator)
    denominator = float(denominator)

    if denominator == 0:
        return 0.0 if numerator == 0 else None
    if not math.isfinite(numerator) or not math.isfinite(denominator):
        return None
    return numerator / denominator


def _cpm(totals: Totals) -> Optional[float]:
    if totals.impressions > 0:
        return safe_divide(totals.spend, totals.impressions / 1000)
    return safe_divide(totals.spend, 0)


@dataclass(frozen=True)
class MetricDefinition:
    """Static description of one metric."""
    formula: str
    compute: Callable[[Totals], Optional[float]]
    status_texts: Dict[Status, str] = field(default_factory=dict)
    null_tooltip: str = ""
    unit: MetricUnit = MetricUnit.NUMBER
    is_simple: bool = False


# =============================================================================
# Metric Registry (display order)
# =============================================================================

CART_RATE_TEXT = "Shows how many people added the product to the cart after clicking."
CART_RATE_LOW_TEXT = (
    CART_RATE_TEXT
    + " If low: the price, stock or available sizes may not suit buyers."
)

METRIC_DEFINITIONS: Dict[MetricName, MetricDefinition] = {
    # Traffic
    MetricName.IMPRESSIONS: MetricDefinition(
        formula="Sum of impressions over the period.",
        compute=lambda t: float(t.impressions),
        status_texts={
            Status.GOOD: "Enough impressions.",
            Status.WARN: "Too few impressions for representative statistics.",
            Status.BAD: "Few impressions: the product is losing the auction. Check CPM, limits and the bid.",
        },
        is_simple=True,
    ),
    MetricName.CLICKS: MetricDefinition(
        formula="Sum of clicks over the period.",
        compute=lambda t: float(t.clicks),
        status_texts={
            Status.GOOD: "Enough clicks.",
            Status.WARN: "Too few clicks to make decisions.",
            Status.BAD: "Low engagement. If CTR is fine, raise CPM; if CTR is low, rework the photo and title.",
        },
        is_simple=True,
    ),
    MetricName.CTR: MetricDefinition(
        formula="CTR = Clicks / Impressions x 100%",
        compute=lambda t: safe_divide(t.clicks, t.impressions),
        status_texts={
            Status.GOOD: "CTR is high: the product card attracts attention well.",
            Status.WARN: "CTR is average: the cover photo or title can be improved.",
            Status.BAD: "CTR is low: nobody clicks the ad. Update the cover, price and text.",
        },
        null_tooltip="No impressions, so CTR cannot be calculated.",
        unit=MetricUnit.PERCENT,
    ),
    MetricName.CPC: MetricDefinition(
        formula="CPC = Spend / Clicks",
        compute=lambda t: safe_divide(t.spend, t.clicks),
        status_texts={
            Status.GOOD: "Cost per click is low.",
            Status.WARN: "Cost per click is average.",
            Status.BAD: "Clicks are expensive. The bid or the auction is high.",
        },
        null_tooltip="No clicks, so CPC cannot be calculated.",
        unit=MetricUnit.CURRENCY,
    ),
    MetricName.CPM: MetricDefinition(
        formula="CPM = Spend / (Impressions / 1000)",
        compute=_cpm,
        status_texts={
            Status.NEUTRAL: "Cost of 1000 impressions. Helps to judge competition and the auction bid.",
        },
        null_tooltip="No impressions, so CPM cannot be calculated.",
        unit=MetricUnit.CURRENCY,
    ),
    # Conversions
    MetricName.CART_RATE: MetricDefinition(
        formula="Cart rate = Cart adds / Clicks x 100%",
        compute=lambda t: safe_divide(t.cart_adds, t.clicks),
        status_texts={
            Status.GOOD: CART_RATE_TEXT,
            Status.WARN: CART_RATE_LOW_TEXT,
            Status.BAD: CART_RATE_LOW_TEXT,
        },
        null_tooltip="No clicks, so interest after the click cannot be judged.",
        unit=MetricUnit.PERCENT,
    ),
    MetricName.ORDERS: MetricDefinition(
        formula="Sum of ordered items over the period.",
        compute=lambda t: float(t.orders),
        status_texts={
            Status.GOOD: "Enough orders for analysis.",
            Status.WARN: "Too few orders for confident conclusions.",
            Status.BAD: "Too little data: avoid hard conclusions, widen the reach or extend the test.",
        },
        is_simple=True,
    ),
    MetricName.CR: MetricDefinition(
        formula="CR = Orders / Clicks x 100%",
        compute=lambda t: safe_divide(t.orders, t.clicks),
        status_texts={
            Status.GOOD: "The product card converts well into orders.",
            Status.WARN: "Conversion is average.",
            Status.BAD: "Low conversion to order: the card does not convince (price, reviews, photos, sizes).",
        },
        null_tooltip="No clicks, so CR cannot be calculated.",
        unit=MetricUnit.PERCENT,
    ),
    # Finance
    MetricName.SPEND: MetricDefinition(
        formula="Spend = sum of advertising costs.",
        compute=lambda t: float(t.spend),
        status_texts={
            Status.NEUTRAL: "How much was spent on advertising in the selected period.",
        },
        unit=MetricUnit.CURRENCY,
        is_simple=True,
    ),
    MetricName.REVENUE: MetricDefinition(
        formula="Sum of order revenue over the period.",
        compute=lambda t: float(t.revenue),
        status_texts={
            Status.NEUTRAL: "Total revenue of orders attributed to advertising.",
        },
        unit=MetricUnit.CURRENCY,
        is_simple=True,
    ),
    MetricName.AVG_CHECK: MetricDefinition(
        formula="Average check = Revenue / Orders",
        compute=lambda t: safe_divide(t.revenue, t.orders),
        status_texts={
            Status.NEUTRAL: "Average amount of one order for this product.",
        },
        null_tooltip="No orders, so the average check cannot be calculated.",
        unit=MetricUnit.CURRENCY,
    ),
    MetricName.CPA: MetricDefinition(
        formula="CPA = Spend / Orders",
        compute=lambda t: safe_divide(t.spend, t.orders),
        status_texts={
            Status.GOOD: "Cost per order is low.",
            Status.WARN: "Cost per order is at the edge of normal.",
            Status.BAD: "Orders are too expensive.",
            Status.NEUTRAL: "No orders from ads or the ads did not run, so CPA cannot be calculated.",
        },
        null_tooltip="No orders from ads or the ads did not run, so CPA cannot be calculated.",
        unit=MetricUnit.CURRENCY,
    ),
    MetricName.ROAS: MetricDefinition(
        formula="ROAS = Revenue / Spend",
        compute=lambda t: safe_divide(t.revenue, t.spend),
        status_texts={
            Status.GOOD: "Return on ad spend is healthy.",
            Status.WARN: "Return on ad spend is borderline, keep an eye on bids.",
            Status.BAD: "Advertising does not pay for itself.",
            Status.NEUTRAL: "The ads did not run or nothing was spent, so ROAS cannot be calculated.",
        },
        null_tooltip="The ads did not run or nothing was spent, so ROAS cannot be calculated.",
    ),
    MetricName.DRR: MetricDefinition(
        formula="DRR = Spend / Revenue x 100%",
        compute=lambda t: safe_divide(t.spend, t.revenue),
        status_texts={
            Status.GOOD: "The share of ad spend is low: advertising is profitable.",
            Status.WARN: "DRR is acceptable but needs optimization.",
            Status.BAD: "DRR is too high: advertising eats the margin.",
            Status.NEUTRAL: "No sales from ads or the ads did not run, so DRR cannot be calculated.",
        },
        null_tooltip="No sales from ads or the ads did not run, so DRR cannot be calculated.",
        unit=MetricUnit.PERCENT,
    ),
}


# =============================================================================
# Formatting
# =============================================================================

def format_percent(value: float) -> str:
    return f"{value * 100:.{PERCENT_DECIMALS}f}%"


def format_currency(value: float, currency_symbol: str) -> str:
    return f"{value:,.{CURRENCY_DECIMALS}f} {currency_symbol}"


def format_count(value: float) -> str:
    if float(value).is_integer():
        return f"{int(value):,}"
    return f"{value:,}"


def format_display_value(
    metric_name: MetricName,
    value: Optional[float],
    totals: Totals,
    currency_symbol: str
) -> str:
    """
    Render a metric value for display.

    Args:
        metric_name: Metric being rendered
        value: Raw value, None when not calculable
        totals: Totals the metric was derived from (cart rate shows the raw count)
        currency_symbol: Suffix for money values

    Returns:
        Display string; the placeholder for undefined values
    """
    definition = METRIC_DEFINITIONS[metric_name]
    is_defined = value is not None and math.isfinite(value)

    if metric_name == MetricName.CART_RATE:
        percent = format_percent(value) if is_defined else NOT_CALCULABLE_PLACEHOLDER
        return f"{format_count(totals.cart_adds)} ({percent})"

    if not is_defined:
        return NOT_CALCULABLE_PLACEHOLDER

    if metric_name == MetricName.ROAS:
        return f"{value:,.{ROAS_DECIMALS}f}"
    if definition.unit == MetricUnit.PERCENT:
        return format_percent(value)
    if definition.unit == MetricUnit.CURRENCY:
        return format_currency(value, currency_symbol)
    return format_count(value)


def build_tooltip(metric_name: MetricName, status: Status, is_calculable: bool) -> str:
    """Compose the status explanation and the formula text for a metric."""
    definition = METRIC_DEFINITIONS[metric_name]

    if not is_calculable:
        return f"{definition.null_tooltip}\nFormula: {definition.formula}"

    status_text = definition.status_texts.get(status, "")
    if definition.is_simple:
        return f"{status_text}\n{definition.formula}"
    return f"{status_text}\nFormula: {definition.formula}"


# =============================================================================
# Calculator
# =============================================================================

def calculate_metric(
    metric_name: MetricName,
    totals: Totals,
    config: AnalyticsConfig,
    currency_symbol: str
) -> Metric:
    """Compute, classify and format a single metric."""
    definition = METRIC_DEFINITIONS[metric_name]
    value = definition.compute(totals)
    is_calculable = value is not None

    status = classify_metric(metric_name, value, config)
    status = apply_status_overrides(metric_name, status, totals)

    return Metric(
        value=value,
        status=status,
        display_value=format_display_value(metric_name, value, totals, currency_symbol),
        tooltip=build_tooltip(metric_name, status, is_calculable),
        is_calculable=is_calculable,
    )


def calculate_metrics_set(
    totals: Totals,
    config: AnalyticsConfig,
    currency_symbol: Optional[str] = None
) -> MetricSet:
    """
    Derive all fourteen metrics from a Totals record.

    Args:
        totals: Aggregated counters
        config: Analytics configuration
        currency_symbol: Money suffix (defaults to the configured symbol)

    Returns:
        MetricSet holding the totals and the metrics in display order
    """
    if currency_symbol is None:
        currency_symbol = get_settings().currency_symbol

    metrics = {
        metric_name.value: calculate_metric(metric_name, totals, config, currency_symbol)
        for metric_name in METRIC_DEFINITIONS
    }
    return MetricSet(totals=totals, metrics=metrics)
