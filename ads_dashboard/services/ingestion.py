"""
Advertising Report Ingestion Service

Parses the marketplace advertising report (CSV export) into RawRow records for the
analytics pipeline.

Key Features:
- Required header validation (all missing headers reported at once)
- Leading byte-order mark removal
- Locale-formatted numbers: decimal comma and space group separators accepted,
  unparseable or missing numbers become 0
- DD.MM.YYYY dates normalized to ISO YYYY-MM-DD; other date text is passed through
  and left to the analytics filter
- Rows without a date or product id are dropped
- Distinct selector values for filter drop-downs
"""

import io
import logging
from decimal import Decimal, InvalidOperation
from typing import Dict, List, Optional, Sequence, Tuple

import numpy as np
import pandas as pd

from ads_dashboard.models import FilterOptions, RawRow, ValidationError


# Configure module logger
logger = logging.getLogger(__name__)

# =============================================================================
# CONSTANTS - Report Headers
# =============================================================================

# RawRow field -> report header
HEADER_MAP: Dict[str, str] = {
    'campaign_id': 'ID кампании',
    'traffic_source': 'Источник трафика',
    'product_id': 'Артикул WB',
    'product_name': 'Название товара',
    'date': 'Дата',
    'impressions': 'Показы',
    'clicks': 'Клики',
    'spend': 'Затраты, ₽',
    'cart_adds': 'Добавления в корзину',
    'orders': 'Заказано товаров, шт',
    'revenue': 'Заказано на сумму, ₽',
}

REQUIRED_FIELDS: List[str] = [
    'campaign_id',
    'traffic_source',
    'product_id',
    'date',
    'impressions',
    'clicks',
    'spend',
    'revenue',
]

TEXT_FIELDS: List[str] = ['campaign_id', 'traffic_source', 'product_id', 'product_name', 'date']

COUNT_FIELDS: List[str] = ['impressions', 'clicks', 'cart_adds', 'orders']

AMOUNT_FIELDS: List[str] = ['spend', 'revenue']

BYTE_ORDER_MARK = '\ufeff'

# DD.MM.YYYY -> YYYY-MM-DD
DOTTED_DATE_PATTERN = r'^(\d{2})\.(\d{2})\.(\d{4})$'

# Group separators used by locale-formatted numbers (incl. no-break spaces)
GROUP_SEPARATOR_PATTERN = r'\s'


# =============================================================================
# VALIDATION FUNCTIONS
# =============================================================================

def validate_columns(df: pd.DataFrame) -> List[ValidationError]:
    """
    Validate that the report contains every required header.

    Args:
        df: DataFrame read from the report

    Returns:
        A single header error naming all missing headers, or an empty list
    """
    present = set(df.columns)
    missing = [HEADER_MAP[name] for name in REQUIRED_FIELDS if HEADER_MAP[name] not in present]

    if not missing:
        return []

    logger.warning(f"Report is missing required headers: {missing}")
    return [ValidationError(
        field='header',
        message=f"CSV must contain headers: {', '.join(missing)}",
        row_number=None
    )]


# =============================================================================
# NORMALIZATION FUNCTIONS
# =============================================================================

def _clean_number_text(series: pd.Series) -> pd.Series:
    return (
        series.astype(str)
        .str.replace(GROUP_SEPARATOR_PATTERN, '', regex=True)
        .str.replace(',', '.', regex=False)
    )


def parse_count_series(series: pd.Series) -> pd.Series:
    """Parse locale-formatted counts; invalid values become 0."""
    numbers = pd.to_numeric(_clean_number_text(series), errors='coerce')
    numbers = numbers.where(np.isfinite(numbers), 0)
    return numbers.round().astype(int)


def parse_amount(text: str) -> Decimal:
    """Parse a cleaned money value exactly; invalid or non-finite values become 0."""
    try:
        amount = Decimal(text)
    except InvalidOperation:
        return Decimal(0)
    return amount if amount.is_finite() else Decimal(0)


def parse_amount_series(series: pd.Series) -> pd.Series:
    """Parse locale-formatted money values into Decimals."""
    return _clean_number_text(series).map(parse_amount)


def normalize_dates(series: pd.Series) -> pd.Series:
    """Rewrite DD.MM.YYYY dates as YYYY-MM-DD; leave everything else as is."""
    return series.str.strip().str.replace(DOTTED_DATE_PATTERN, r'\3-\2-\1', regex=True)


def _normalize_dataframe(df: pd.DataFrame) -> pd.DataFrame:
    """
    Map report headers to RawRow fields and coerce every column.

    Optional columns that are absent are filled with empty text or zero.
    """
    normalized = pd.DataFrame(index=df.index)

    for name in TEXT_FIELDS + COUNT_FIELDS + AMOUNT_FIELDS:
        header = HEADER_MAP[name]
        column = df[header] if header in df.columns else pd.Series('', index=df.index)

        if name in COUNT_FIELDS:
            normalized[name] = parse_count_series(column)
        elif name in AMOUNT_FIELDS:
            normalized[name] = parse_amount_series(column)
        else:
            normalized[name] = column.astype(str).str.strip()

    normalized['date'] = normalize_dates(normalized['date'])
    return normalized


# =============================================================================
# INGESTION FUNCTIONS
# =============================================================================

def parse_ads_csv(csv_text: str) -> Tuple[Optional[List[RawRow]], List[ValidationError]]:
    """
    Parse and validate an advertising report.

    Performs the following steps:
    1. Strip the byte-order mark and read the CSV using pandas
    2. Validate required headers
    3. Normalize numbers and dates
    4. Drop rows without a date or product id

    Args:
        csv_text: Report contents

    Returns:
        Tuple of (parsed rows or None, list of validation errors). A report
        with no data rows yields an empty list and no errors.
    """
    errors: List[ValidationError] = []
    text = csv_text.lstrip(BYTE_ORDER_MARK).strip()

    if not text:
        return [], errors

    try:
        df = pd.read_csv(
            io.StringIO(text),
            dtype=str,
            keep_default_na=False,
        )
    except pd.errors.EmptyDataError:
        return [], errors
    except pd.errors.ParserError as e:
        errors.append(ValidationError(
            field='file',
            message=f'Failed to parse CSV file: {str(e)}',
            row_number=None
        ))
        return None, errors

    df.columns = [str(column).strip() for column in df.columns]

    if df.empty:
        return [], errors

    errors.extend(validate_columns(df))
    if errors:
        return None, errors

    normalized = _normalize_dataframe(df)
    normalized = normalized[(normalized['date'] != '') & (normalized['product_id'] != '')]

    rows = [RawRow(**record) for record in normalized.to_dict(orient='records')]
    logger.info(f"Parsed report with {len(df)} rows, {len(rows)} usable")

    return rows, errors


def extract_filter_options(rows: Sequence[RawRow]) -> FilterOptions:
    """
    Collect distinct non-empty selector values in order of first appearance.

    Args:
        rows: Parsed rows

    Returns:
        FilterOptions for campaign, product and traffic-source selectors
    """
    return FilterOptions(
        campaign_ids=list(dict.fromkeys(row.campaign_id for row in rows if row.campaign_id)),
        product_ids=list(dict.fromkeys(row.product_id for row in rows if row.product_id)),
        traffic_sources=list(dict.fromkeys(row.traffic_source for row in rows if row.traffic_source)),
    )
