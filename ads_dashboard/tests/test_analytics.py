"""
Analytics Pipeline Test Module

Tests for ads_dashboard/services/aggregation.py and
ads_dashboard/services/analytics.py.

Test Coverage:
- Exact aggregation of counters and Decimal amounts
- Date range and selector filtering, including the end-of-day bound
- Grouping by product (first-seen order) and by day (ascending)
- End-to-end analysis: sorting, placeholder names, daily reconciliation
"""

from datetime import date
from decimal import Decimal

import pytest

from ads_dashboard.models import Filters, MetricName, Status, Totals
from ads_dashboard.services.aggregation import aggregate_rows, combine_totals
from ads_dashboard.services.analytics import (
    analyze,
    day_key,
    filter_rows,
    get_date_bounds,
    group_by_day,
    group_by_product,
    parse_row_datetime,
)


def single_day(day: date, **selectors) -> Filters:
    return Filters(date_from=day, date_to=day, **selectors)


# =============================================================================
# Test Class: TestAggregation
# =============================================================================

class TestAggregation:

    def test_empty_input_is_all_zero(self):
        assert aggregate_rows([]) == Totals()

    def test_sums_all_counters(self, sample_rows):
        totals = aggregate_rows(sample_rows)
        assert totals.impressions == 3500
        assert totals.clicks == 65
        assert totals.orders == 5
        assert totals.spend == Decimal("165.75")
        assert totals.revenue == Decimal("600")

    def test_money_is_summed_exactly(self, make_row):
        rows = [make_row(spend="0.1") for _ in range(3)]
        assert aggregate_rows(rows).spend == Decimal("0.3")

    def test_partitions_add_up_to_union(self, sample_rows):
        first, second = sample_rows[:2], sample_rows[2:]
        combined = combine_totals([aggregate_rows(first), aggregate_rows(second)])
        assert combined == aggregate_rows(sample_rows)


# =============================================================================
# Test Class: TestDateParsing
# =============================================================================

class TestDateParsing:

    @pytest.mark.parametrize("value", [
        "2024-01-01",
        "2024-01-01T10:30:00",
        "2024-01-01T10:30:00Z",
        "2024-01-01T10:30:00+03:00",
    ])
    def test_valid_dates(self, value):
        parsed = parse_row_datetime(value)
        assert parsed is not None
        assert parsed.date() == date(2024, 1, 1)
        assert parsed.tzinfo is None

    @pytest.mark.parametrize("value", ["", "not-a-date", "2024-02-30", "01.01.2024"])
    def test_invalid_dates(self, value):
        assert parse_row_datetime(value) is None

    def test_bounds_cover_whole_days(self):
        start, end = get_date_bounds(single_day(date(2024, 1, 1)))
        assert start.isoformat() == "2024-01-01T00:00:00"
        assert end.isoformat() == "2024-01-01T23:59:59.999000"

    def test_day_key_drops_time(self, make_row):
        assert day_key(make_row(date="2024-03-05T22:15:00")) == "2024-03-05"


# =============================================================================
# Test Class: TestFiltering
# =============================================================================

class TestFiltering:

    def test_end_day_is_inclusive(self, sample_rows):
        kept = filter_rows(sample_rows, single_day(date(2024, 1, 1)))
        assert [row.date for row in kept] == ["2024-01-01", "2024-01-01", "2024-01-01T18:30:00"]

    def test_inverted_range_is_empty(self, sample_rows):
        filters = Filters(date_from=date(2024, 1, 2), date_to=date(2024, 1, 1))
        assert filter_rows(sample_rows, filters) == []

    def test_product_selector(self, sample_rows, wide_filters):
        filters = wide_filters.model_copy(update={"product_id": "123"})
        kept = filter_rows(sample_rows, filters)
        assert len(kept) == 3
        assert {row.product_id for row in kept} == {"123"}

    def test_campaign_and_source_selectors(self, make_row, wide_filters):
        rows = [
            make_row(campaign_id="c1", traffic_source="search"),
            make_row(campaign_id="c2", traffic_source="search"),
            make_row(campaign_id="c1", traffic_source="catalog"),
        ]
        filters = wide_filters.model_copy(update={"campaign_id": "c1", "traffic_source": "catalog"})
        kept = filter_rows(rows, filters)
        assert kept == [rows[2]]

    def test_selectors_match_exact_strings(self, make_row, wide_filters):
        rows = [make_row(product_id="123"), make_row(product_id="1234")]
        filters = wide_filters.model_copy(update={"product_id": "123"})
        assert filter_rows(rows, filters) == [rows[0]]

    def test_unparseable_dates_are_skipped(self, make_row, wide_filters):
        rows = [make_row(date="garbage"), make_row(date="2024-06-01")]
        assert filter_rows(rows, wide_filters) == [rows[1]]


# =============================================================================
# Test Class: TestGrouping
# =============================================================================

class TestGrouping:

    def test_products_in_first_seen_order(self, sample_rows):
        groups = group_by_product(sample_rows)
        assert list(groups) == ["123", "456", "789"]
        assert len(groups["123"]) == 3

    def test_rows_without_product_are_skipped(self, make_row):
        groups = group_by_product([make_row(product_id=""), make_row(product_id="A")])
        assert list(groups) == ["A"]

    def test_days_sorted_ascending(self, make_row):
        rows = [
            make_row(date="2024-01-03"),
            make_row(date="2024-01-01T09:00:00"),
            make_row(date="2024-01-01"),
        ]
        days = group_by_day(rows)
        assert [day for day, _ in days] == ["2024-01-01", "2024-01-03"]
        assert len(days[0][1]) == 2


# =============================================================================
# Test Class: TestAnalyze
# =============================================================================

class TestAnalyze:

    def test_no_dataset_returns_none(self, wide_filters, default_config):
        assert analyze(None, wide_filters, default_config) is None

    def test_empty_dataset_returns_empty_list(self, wide_filters, default_config):
        assert analyze([], wide_filters, default_config) == []

    def test_nothing_matches_returns_empty_list(self, sample_rows, default_config):
        filters = single_day(date(2023, 1, 1))
        assert analyze(sample_rows, filters, default_config) == []

    def test_sorted_by_revenue_descending(self, sample_rows, wide_filters, default_config):
        results = analyze(sample_rows, wide_filters, default_config)
        assert [result.product_id for result in results] == ["123", "789", "456"]

    def test_revenue_ties_keep_first_seen_order(self, make_row, wide_filters, default_config):
        rows = [
            make_row(product_id="B", revenue="50"),
            make_row(product_id="A", revenue="50"),
            make_row(product_id="C", revenue="70"),
        ]
        results = analyze(rows, wide_filters, default_config)
        assert [result.product_id for result in results] == ["C", "B", "A"]

    def test_period_totals(self, sample_rows, wide_filters, default_config):
        result = analyze(sample_rows, wide_filters, default_config)[0]
        totals = result.period_totals.totals
        assert totals.impressions == 2200
        assert totals.clicks == 39
        assert totals.orders == 2
        assert totals.spend == Decimal("105.75")
        assert totals.revenue == Decimal("300")

    def test_daily_breakdown_reconciles_with_period(self, sample_rows, wide_filters, default_config):
        for result in analyze(sample_rows, wide_filters, default_config):
            daily_sum = combine_totals(day.totals for day in result.daily)
            assert daily_sum == result.period_totals.totals

    def test_daily_is_ascending(self, sample_rows, wide_filters, default_config):
        result = analyze(sample_rows, wide_filters, default_config)[0]
        assert [day.date for day in result.daily] == ["2024-01-01", "2024-01-02"]
        assert result.daily[0].totals.clicks == 25

    def test_product_name_from_first_row(self, sample_rows, wide_filters, default_config):
        result = analyze(sample_rows, wide_filters, default_config)[0]
        assert result.product_name == "Shirt"

    def test_placeholder_name_when_missing(self, make_row, wide_filters, default_config):
        results = analyze([make_row(product_name="")], wide_filters, default_config)
        assert results[0].product_name == "Product name (placeholder)"

    @pytest.mark.parity
    def test_reference_scenario_end_to_end(self, make_row, wide_filters, default_config):
        rows = [make_row(impressions=1000, clicks=20, cart_adds=5, orders=1, spend="200", revenue="2000")]
        result = analyze(rows, wide_filters, default_config)[0]

        metrics = result.period_totals
        assert metrics.metric(MetricName.CTR).status == Status.WARN
        assert metrics.metric(MetricName.CPC).display_value == "10.0 ₽"
        assert metrics.metric(MetricName.CART_RATE).display_value == "5 (25.0%)"
        assert metrics.metric(MetricName.ROAS).display_value == "10.00"
        assert metrics.metric(MetricName.DRR).status == Status.GOOD
        assert result.banner.status == Status.WARN
        assert result.banner.short_text == "needs attention"

    def test_analysis_is_deterministic(self, sample_rows, wide_filters, default_config):
        first = analyze(sample_rows, wide_filters, default_config)
        second = analyze(sample_rows, wide_filters, default_config)
        assert first == second
