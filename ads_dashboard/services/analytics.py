"""
Analytics Orchestration Service

Drives the full per-product analysis for one query:

    raw rows -> filtered rows -> grouped by product -> grouped by day
             -> totals -> metrics -> statuses -> banner -> sorted results

Filtering Rules:
- The row date must parse as an ISO date or datetime; unparseable rows are skipped
- Dates are matched against [date_from 00:00, date_to 23:59:59.999] inclusive
- Campaign, product and traffic-source selectors match by exact string equality,
  "all" matches everything
- A range with date_from after date_to yields no results, not an error

Every function here is a pure function of its inputs. analyze returns None only
when no dataset was supplied at all; a dataset that filters down to nothing
returns an empty list.
"""

import logging
from collections import defaultdict
from datetime import datetime, time
from typing import Dict, List, Optional, Sequence, Tuple

from ads_dashboard.core.config import get_settings
from ads_dashboard.models import (
    ALL_SELECTOR,
    AnalysisResult,
    AnalyticsConfig,
    DailyMetricSet,
    Filters,
    RawRow,
    Totals,
)
from ads_dashboard.services.aggregation import aggregate_rows
from ads_dashboard.services.metrics import calculate_metrics_set
from ads_dashboard.services.recommendation import derive_banner


logger = logging.getLogger(__name__)

# Inclusive end of the date_to day
END_OF_DAY = time(23, 59, 59, 999000)


# =============================================================================
# Row Filtering
# =============================================================================

def parse_row_datetime(value: str) -> Optional[datetime]:
    """
    Parse a row date in ISO form ("2024-01-01" or "2024-01-01T10:30:00").

    Returns:
        Naive datetime (wall-clock time kept for offset-aware values),
        or None when the value is not a valid calendar date
    """
    if not value:
        return None
    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        return None
    return parsed.replace(tzinfo=None)


def get_date_bounds(filters: Filters) -> Tuple[datetime, datetime]:
    """Return the inclusive datetime bounds of the filter range."""
    start = datetime.combine(filters.date_from, time.min)
    end = datetime.combine(filters.date_to, END_OF_DAY)
    return start, end


def _selector_matches(selector: str, value: str) -> bool:
    return selector == ALL_SELECTOR or value == selector


def row_matches(row: RawRow, filters: Filters, start: datetime, end: datetime) -> bool:
    """Check a single row against the date range and all selectors."""
    row_datetime = parse_row_datetime(row.date)
    if row_datetime is None or not (start <= row_datetime <= end):
        return False
    return (
        _selector_matches(filters.campaign_id, row.campaign_id)
        and _selector_matches(filters.product_id, row.product_id)
        and _selector_matches(filters.traffic_source, row.traffic_source)
    )


def filter_rows(rows: Sequence[RawRow], filters: Filters) -> List[RawRow]:
    """
    Keep the rows that fall in the date range and match every selector.

    Args:
        rows: Parsed dataset rows
        filters: Date range and selectors

    Returns:
        Matching rows in their original order
    """
    start, end = get_date_bounds(filters)
    if start > end:
        return []
    return [row for row in rows if row_matches(row, filters, start, end)]


# =============================================================================
# Grouping
# =============================================================================

def group_by_product(rows: Sequence[RawRow]) -> Dict[str, List[RawRow]]:
    """
    Group rows by product id, in order of first appearance.

    Rows without a product id are skipped.
    """
    groups: Dict[str, List[RawRow]] = {}
    for row in rows:
        if not row.product_id:
            continue
        groups.setdefault(row.product_id, []).append(row)
    return groups


def day_key(row: RawRow) -> str:
    """Calendar day of a row (time of day ignored)."""
    parsed = parse_row_datetime(row.date)
    if parsed is not None:
        return parsed.date().isoformat()
    return row.date.split("T")[0]


def group_by_day(rows: Sequence[RawRow]) -> List[Tuple[str, List[RawRow]]]:
    """
    Group one product's rows by calendar day.

    Returns:
        (day, rows) pairs sorted ascending by day
    """
    days: Dict[str, List[RawRow]] = defaultdict(list)
    for row in rows:
        days[day_key(row)].append(row)
    return sorted(days.items(), key=lambda item: item[0])


def filter_and_group(rows: Sequence[RawRow], filters: Filters) -> Dict[str, List[RawRow]]:
    """Filter rows and group the survivors by product id."""
    return group_by_product(filter_rows(rows, filters))


# =============================================================================
# Analysis
# =============================================================================

def build_daily_metrics(
    rows: Sequence[RawRow],
    config: AnalyticsConfig,
    currency_symbol: Optional[str] = None
) -> List[DailyMetricSet]:
    """Build one DailyMetricSet per day with rows, ascending by date."""
    daily: List[DailyMetricSet] = []
    for day, day_rows in group_by_day(rows):
        metrics_set = calculate_metrics_set(aggregate_rows(day_rows), config, currency_symbol)
        daily.append(DailyMetricSet(date=day, **dict(metrics_set)))
    return daily


def analyze_product(
    product_id: str,
    rows: Sequence[RawRow],
    config: AnalyticsConfig,
    placeholder_name: Optional[str] = None,
    currency_symbol: Optional[str] = None
) -> AnalysisResult:
    """
    Analyze all surviving rows of one product.

    Args:
        product_id: Product being analyzed
        rows: The product's filtered rows, in dataset order
        config: Analytics configuration
        placeholder_name: Name to use when the first row has none
        currency_symbol: Money suffix for display values

    Returns:
        AnalysisResult with banner, period metrics and daily breakdown
    """
    if placeholder_name is None:
        placeholder_name = get_settings().placeholder_product_name

    period_totals: Totals = aggregate_rows(rows)
    period_metrics = calculate_metrics_set(period_totals, config, currency_symbol)

    return AnalysisResult(
        product_id=product_id,
        product_name=(rows[0].product_name if rows else "") or placeholder_name,
        banner=derive_banner(period_totals, period_metrics),
        period_totals=period_metrics,
        daily=build_daily_metrics(rows, config, currency_symbol),
    )


def analyze(
    rows: Optional[Sequence[RawRow]],
    filters: Filters,
    config: AnalyticsConfig
) -> Optional[List[AnalysisResult]]:
    """
    Run the full analysis for a dataset, filters and configuration.

    Args:
        rows: Parsed dataset, or None when nothing has been loaded
        filters: Date range and selectors
        config: Analytics configuration

    Returns:
        None when rows is None; otherwise one AnalysisResult per product,
        sorted descending by period revenue (ties keep first-seen order)
    """
    if rows is None:
        return None

    settings = get_settings()
    groups = filter_and_group(rows, filters)
    logger.debug(f"Analyzing {len(groups)} products from {len(rows)} rows")

    results = [
        analyze_product(
            product_id,
            product_rows,
            config,
            placeholder_name=settings.placeholder_product_name,
            currency_symbol=settings.currency_symbol,
        )
        for product_id, product_rows in groups.items()
    ]

    return sorted(results, key=lambda result: result.period_totals.totals.revenue, reverse=True)
