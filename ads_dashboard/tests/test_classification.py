"""
Classification Test Module

Tests for ads_dashboard/services/classification.py.

Test Coverage:
- Two-threshold bands for higher-is-better and lower-is-better metrics
- Boundary behavior (closed >= bands, open < good band, closed <= warn band)
- DRR banding against the configured margin and the fixed fallback bands
- Informational metrics and undefined values are always neutral
- The "campaign never ran" override for CPA, ROAS and DRR
"""

import math

import pytest

from ads_dashboard.models import AnalyticsConfig, MetricName, Status, Totals
from ads_dashboard.services.classification import (
    DEFAULT_THRESHOLDS,
    INFORMATIONAL_METRICS,
    apply_status_overrides,
    classify_drr,
    classify_metric,
    evaluate_threshold_status,
)


# =============================================================================
# Test Class: TestEvaluateThresholdStatus
# =============================================================================

class TestEvaluateThresholdStatus:
    """Generic band evaluation."""

    @pytest.mark.parametrize("value,expected", [
        (0.03, Status.GOOD),
        (0.025, Status.GOOD),
        (0.02, Status.WARN),
        (0.015, Status.WARN),
        (0.0149, Status.BAD),
        (0.0, Status.BAD),
    ])
    def test_higher_is_better(self, value, expected):
        assert evaluate_threshold_status(value, 0.025, 0.015, True) == expected

    @pytest.mark.parametrize("value,expected", [
        (5, Status.GOOD),
        (9.99, Status.GOOD),
        (10, Status.WARN),
        (15, Status.WARN),
        (15.01, Status.BAD),
    ])
    def test_lower_is_better(self, value, expected):
        assert evaluate_threshold_status(value, 10, 15, False) == expected


# =============================================================================
# Test Class: TestClassifyMetric
# =============================================================================

class TestClassifyMetric:
    """Per-metric classification with the default thresholds."""

    def test_ctr_bands(self, default_config):
        assert classify_metric(MetricName.CTR, 0.025, default_config) == Status.GOOD
        assert classify_metric(MetricName.CTR, 0.02, default_config) == Status.WARN
        assert classify_metric(MetricName.CTR, 0.01, default_config) == Status.BAD

    def test_cpc_exactly_ten_is_warn(self, default_config):
        assert classify_metric(MetricName.CPC, 10, default_config) == Status.WARN

    def test_cpa_boundaries(self, default_config):
        assert classify_metric(MetricName.CPA, 199.99, default_config) == Status.GOOD
        assert classify_metric(MetricName.CPA, 200, default_config) == Status.WARN
        assert classify_metric(MetricName.CPA, 400, default_config) == Status.WARN
        assert classify_metric(MetricName.CPA, 400.01, default_config) == Status.BAD

    def test_roas_boundaries(self, default_config):
        assert classify_metric(MetricName.ROAS, 8, default_config) == Status.GOOD
        assert classify_metric(MetricName.ROAS, 4, default_config) == Status.WARN
        assert classify_metric(MetricName.ROAS, 3.99, default_config) == Status.BAD

    def test_volume_metrics(self, default_config):
        assert classify_metric(MetricName.IMPRESSIONS, 5000, default_config) == Status.GOOD
        assert classify_metric(MetricName.IMPRESSIONS, 2000, default_config) == Status.WARN
        assert classify_metric(MetricName.IMPRESSIONS, 1999, default_config) == Status.BAD
        assert classify_metric(MetricName.CLICKS, 150, default_config) == Status.GOOD
        assert classify_metric(MetricName.CLICKS, 49, default_config) == Status.BAD
        assert classify_metric(MetricName.ORDERS, 10, default_config) == Status.GOOD
        assert classify_metric(MetricName.ORDERS, 3, default_config) == Status.WARN
        assert classify_metric(MetricName.ORDERS, 1, default_config) == Status.BAD

    def test_conversion_metrics(self, default_config):
        assert classify_metric(MetricName.CR, 0.05, default_config) == Status.GOOD
        assert classify_metric(MetricName.CR, 0.02, default_config) == Status.WARN
        assert classify_metric(MetricName.CR, 0.0, default_config) == Status.BAD
        assert classify_metric(MetricName.CART_RATE, 0.25, default_config) == Status.GOOD
        assert classify_metric(MetricName.CART_RATE, 0.05, default_config) == Status.WARN
        assert classify_metric(MetricName.CART_RATE, 0.04, default_config) == Status.BAD

    def test_accepts_plain_metric_key(self, default_config):
        assert classify_metric("ctr", 0.03, default_config) == Status.GOOD

    @pytest.mark.parametrize("metric_name", sorted(INFORMATIONAL_METRICS, key=lambda m: m.value))
    def test_informational_metrics_are_neutral(self, metric_name, default_config):
        assert classify_metric(metric_name, 1_000_000, default_config) == Status.NEUTRAL
        assert classify_metric(metric_name, 0, default_config) == Status.NEUTRAL

    @pytest.mark.parametrize("value", [None, math.inf, -math.inf, math.nan])
    def test_undefined_values_are_neutral(self, value, default_config):
        for metric_name in DEFAULT_THRESHOLDS:
            assert classify_metric(metric_name, value, default_config) == Status.NEUTRAL


# =============================================================================
# Test Class: TestClassifyDrr
# =============================================================================

@pytest.mark.parity
class TestClassifyDrr:
    """DRR against the margin: good up to 70% of it, warn up to the margin."""

    @pytest.mark.parametrize("value,expected", [
        (0.0, Status.GOOD),
        (0.175, Status.GOOD),
        (0.176, Status.WARN),
        (0.25, Status.WARN),
        (0.2501, Status.BAD),
    ])
    def test_margin_bands(self, value, expected):
        assert classify_drr(value, 25) == expected

    @pytest.mark.parametrize("margin", [None, 0, -5])
    def test_fixed_bands_without_positive_margin(self, margin):
        assert classify_drr(0.05, margin) == Status.GOOD
        assert classify_drr(0.10, margin) == Status.WARN
        assert classify_drr(0.25, margin) == Status.WARN
        assert classify_drr(0.30, margin) == Status.BAD

    def test_classify_metric_uses_config_margin(self):
        assert classify_metric(MetricName.DRR, 0.1, AnalyticsConfig(margin_pct=25)) == Status.GOOD
        assert classify_metric(MetricName.DRR, 0.1, AnalyticsConfig(margin_pct=10)) == Status.WARN
        assert classify_metric(MetricName.DRR, 0.1, AnalyticsConfig(margin_pct=5)) == Status.BAD
        assert classify_metric(MetricName.DRR, 0.1, AnalyticsConfig(margin_pct=None)) == Status.WARN

    def test_higher_margin_never_worsens_status(self):
        order = [Status.GOOD, Status.WARN, Status.BAD]
        previous = None
        for margin in (5, 10, 15, 20, 30, 50, 80, 100):
            status = classify_drr(0.12, margin)
            if previous is not None:
                assert order.index(status) <= order.index(previous)
            previous = status


# =============================================================================
# Test Class: TestStatusOverrides
# =============================================================================

class TestStatusOverrides:
    """CPA, ROAS and DRR are neutral when the campaign never ran."""

    @pytest.mark.parametrize("metric_name", [MetricName.CPA, MetricName.ROAS, MetricName.DRR])
    def test_never_ran_forces_neutral(self, metric_name):
        assert apply_status_overrides(metric_name, Status.BAD, Totals()) == Status.NEUTRAL

    def test_other_metrics_untouched(self):
        assert apply_status_overrides(MetricName.CTR, Status.BAD, Totals()) == Status.BAD
        assert apply_status_overrides(MetricName.CR, Status.BAD, Totals()) == Status.BAD

    def test_override_needs_both_zero(self):
        spend_only = Totals(impressions=0, spend=10)
        impressions_only = Totals(impressions=100, spend=0)
        assert apply_status_overrides(MetricName.CPA, Status.BAD, spend_only) == Status.BAD
        assert apply_status_overrides(MetricName.CPA, Status.BAD, impressions_only) == Status.BAD
