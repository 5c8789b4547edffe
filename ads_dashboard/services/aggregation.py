"""
Row Aggregation Service

Reduces a collection of RawRow records into a single Totals record by summing
the six counters (impressions, clicks, cart adds, orders, spend, revenue).

Summation is exact: counts are integers and money amounts are Decimal, so
aggregating two disjoint partitions and adding the results equals aggregating
their union. The daily/period reconciliation of an AnalysisResult relies on this.
"""

from decimal import Decimal
from typing import Iterable

from ads_dashboard.models import RawRow, Totals


def aggregate_rows(rows: Iterable[RawRow]) -> Totals:
    """
    Sum the counters of the given rows.

    Args:
        rows: Rows to aggregate (may be empty)

    Returns:
        Totals with the six summed counters; all zero for empty input
    """
    impressions = clicks = cart_adds = orders = 0
    spend = revenue = Decimal(0)

    for row in rows:
        impressions += row.impressions
        clicks += row.clicks
        cart_adds += row.cart_adds
        orders += row.orders
        spend += row.spend
        revenue += row.revenue

    return Totals(
        impressions=impressions,
        clicks=clicks,
        cart_adds=cart_adds,
        orders=orders,
        spend=spend,
        revenue=revenue,
    )


def combine_totals(parts: Iterable[Totals]) -> Totals:
    """Add up several Totals records, e.g. the daily totals of one product."""
    result = Totals()
    for part in parts:
        result = result + part
    return result
