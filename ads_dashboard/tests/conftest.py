"""
Pytest Configuration and Shared Fixtures for Ads Dashboard Backend Tests.

This module provides fixtures and configuration for all backend tests, supporting:
- Row factories producing RawRow records with sensible zero defaults
- Default analytics configuration and a wide date-range filter
- A sample advertising report in CSV form (Russian headers, decimal commas)
- Fresh, isolated API collaborators (dataset registry, analysis cache, preferences)
"""

from datetime import date
from typing import Any, Callable, Dict, List

import pytest

from ads_dashboard.models import AnalyticsConfig, Filters, RawRow, Totals


# ============================================================
# PYTEST HOOKS
# ============================================================

def pytest_configure(config) -> None:
    """
    Configure custom pytest markers for test organization.

    Custom markers defined:
    - parity: Marks tests pinning exact dashboard outputs (bands, texts, formatting)
    - integration: Marks tests exercising the HTTP API end to end

    Args:
        config: Pytest configuration object
    """
    config.addinivalue_line(
        'markers',
        'parity: marks tests pinning exact dashboard outputs (bands, texts, formatting)'
    )
    config.addinivalue_line(
        'markers',
        'integration: marks tests exercising the HTTP API end to end'
    )


# ============================================================
# ROW AND CONFIG FIXTURES
# ============================================================

@pytest.fixture
def make_row() -> Callable[..., RawRow]:
    """
    Factory for RawRow records.

    Example:
        row = make_row(product_id="A", date="2024-01-01", spend="200")
    """
    def _make_row(**overrides: Any) -> RawRow:
        values: Dict[str, Any] = {
            "campaign_id": "c1",
            "traffic_source": "search",
            "product_id": "A",
            "product_name": "Linen shirt",
            "date": "2024-01-01",
            "impressions": 0,
            "clicks": 0,
            "cart_adds": 0,
            "orders": 0,
            "spend": "0",
            "revenue": "0",
        }
        values.update(overrides)
        return RawRow(**values)

    return _make_row


@pytest.fixture
def default_config() -> AnalyticsConfig:
    """Margin of 25% and the reserved click threshold of 30."""
    return AnalyticsConfig(margin_pct=25, min_clicks_for_cr=30)


@pytest.fixture
def wide_filters() -> Filters:
    """All selectors open, covering the whole of 2024."""
    return Filters(date_from=date(2024, 1, 1), date_to=date(2024, 12, 31))


@pytest.fixture
def scenario_totals() -> Totals:
    """
    Totals of the reference scenario.

    1000 impressions, 20 clicks, 5 cart adds, 1 order, 200 spend, 2000 revenue.
    """
    return Totals(
        impressions=1000,
        clicks=20,
        cart_adds=5,
        orders=1,
        spend=200,
        revenue=2000,
    )


@pytest.fixture
def sample_rows(make_row) -> List[RawRow]:
    """
    Three products over two days.

    - "123": two rows on 2024-01-01 and one on 2024-01-02, revenue 300
    - "456": one row on 2024-01-01, revenue 100
    - "789": one row on 2024-01-02, revenue 200
    """
    return [
        make_row(product_id="123", product_name="Shirt", date="2024-01-01",
                 impressions=1000, clicks=20, orders=1, spend="50", revenue="100"),
        make_row(product_id="456", product_name="Dress", date="2024-01-01",
                 impressions=500, clicks=10, orders=1, spend="20", revenue="100"),
        make_row(product_id="123", product_name="Shirt", date="2024-01-01T18:30:00",
                 impressions=500, clicks=5, orders=0, spend="25.5", revenue="0"),
        make_row(product_id="789", product_name="Scarf", date="2024-01-02",
                 impressions=800, clicks=16, orders=2, spend="40", revenue="200"),
        make_row(product_id="123", product_name="Shirt", date="2024-01-02",
                 impressions=700, clicks=14, orders=1, spend="30.25", revenue="200"),
    ]


# ============================================================
# CSV FIXTURES
# ============================================================

CSV_HEADER = (
    'ID кампании,Источник трафика,Артикул WB,Название товара,Дата,Показы,Клики,'
    'CTR %,"Затраты, ₽",Добавления в корзину,"Заказано товаров, шт","Заказано на сумму, ₽"'
)


@pytest.fixture
def csv_header() -> str:
    return CSV_HEADER


@pytest.fixture
def sample_csv() -> str:
    """
    A report with four data lines; two of them are unusable.

    - line 1: valid, dotted date and decimal commas
    - line 2: valid, ISO date, group-separated impressions
    - line 3: missing product id (dropped)
    - line 4: missing date (dropped)
    """
    lines = [
        CSV_HEADER,
        '101,search,123,Shirt,01.01.2024,1000,20,"2,0","200,5",5,1,"2000,75"',
        '102,catalog,456,Dress,2024-01-02,1 234,10,"0,8",100,2,0,0',
        '101,search,,Nameless,01.01.2024,10,1,"10,0",5,0,0,0',
        '101,search,789,Scarf,,10,1,"10,0",5,0,0,0',
    ]
    return "\n".join(lines)
