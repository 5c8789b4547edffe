"""
FastAPI router module for advertising analytics.

Implements POST /analytics/datasets (upload and parse a report),
POST /analytics/datasets/{dataset_id}/analyze (memoized analysis of an uploaded
dataset) and POST /analytics/analyze (stateless analysis of inline rows).

Response shape for analyses: { results, trends }. results is null only when no
dataset was supplied; a dataset that filters down to nothing returns [].
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel, Field

from ads_dashboard.core.dependencies import (
    AnalysisCacheDep,
    DatasetRegistryDep,
    PreferencesStoreDep,
)
from ads_dashboard.models import (
    AnalysisResult,
    AnalyticsConfig,
    FilterOptions,
    Filters,
    ProductTrends,
    RawRow,
    ValidationError,
)
from ads_dashboard.services.analytics import analyze
from ads_dashboard.services.ingestion import extract_filter_options, parse_ads_csv
from ads_dashboard.services.trends import compute_product_trends


# Configure logging
logger = logging.getLogger(__name__)

router = APIRouter(prefix="/analytics")


# =============================================================================
# Local Pydantic Models for API Requests and Responses
# =============================================================================

class DatasetUploadRequest(BaseModel):
    """Request model for uploading an advertising report."""
    csv_text: str = Field(..., description="Report contents in CSV form")


class DatasetUploadResponse(BaseModel):
    """Response model for a parsed and registered report."""
    dataset_id: str = Field(..., description="Identifier for later analyses")
    row_count: int = Field(..., ge=0, description="Usable rows in the report")
    options: FilterOptions = Field(..., description="Selector values found in the report")


class DatasetAnalyzeRequest(BaseModel):
    """Request model for analyzing an uploaded dataset; saved preferences fill the gaps."""
    filters: Optional[Filters] = Field(default=None, description="Query filters")
    config: Optional[AnalyticsConfig] = Field(default=None, description="Analytics configuration")


class AnalyzeRequest(BaseModel):
    """Request model for a stateless analysis of inline rows."""
    rows: Optional[List[RawRow]] = Field(
        default=None,
        description="Parsed rows; null means no dataset has been loaded"
    )
    filters: Filters = Field(..., description="Query filters")
    config: AnalyticsConfig = Field(
        default_factory=AnalyticsConfig,
        description="Analytics configuration"
    )


class AnalyzeResponse(BaseModel):
    """Response model for analyses."""
    results: Optional[List[AnalysisResult]] = Field(
        default=None,
        description="Per-product analyses sorted by revenue, or null"
    )
    trends: List[ProductTrends] = Field(
        default_factory=list,
        description="Day-over-day trends per product"
    )


class UploadErrorDetail(BaseModel):
    """Error body returned when a report cannot be ingested."""
    message: str
    errors: List[ValidationError] = Field(default_factory=list)


def _build_response(results: Optional[List[AnalysisResult]]) -> AnalyzeResponse:
    if results is None:
        return AnalyzeResponse(results=None, trends=[])
    return AnalyzeResponse(results=results, trends=compute_product_trends(results))


# =============================================================================
# Endpoints
# =============================================================================

@router.post("/datasets", response_model=DatasetUploadResponse)
async def upload_dataset(
    request: DatasetUploadRequest,
    registry: DatasetRegistryDep,
) -> DatasetUploadResponse:
    """
    Parse an advertising report and register it for analysis.

    Raises:
        HTTPException 400: When the report is missing required headers or
            cannot be parsed
    """
    rows, errors = parse_ads_csv(request.csv_text)

    if rows is None:
        logger.warning(f"POST /analytics/datasets rejected: {len(errors)} validation errors")
        raise HTTPException(
            status_code=400,
            detail=UploadErrorDetail(
                message="Report validation failed",
                errors=errors,
            ).model_dump(),
        )

    dataset_id = registry.register(rows)

    return DatasetUploadResponse(
        dataset_id=dataset_id,
        row_count=len(rows),
        options=extract_filter_options(rows),
    )


@router.post("/datasets/{dataset_id}/analyze", response_model=AnalyzeResponse)
async def analyze_dataset(
    dataset_id: str,
    registry: DatasetRegistryDep,
    cache: AnalysisCacheDep,
    store: PreferencesStoreDep,
    request: Optional[DatasetAnalyzeRequest] = None,
) -> AnalyzeResponse:
    """
    Analyze an uploaded dataset, reusing a cached result for identical queries.

    Missing filters or config are taken from the saved preferences.

    Raises:
        HTTPException 404: When the dataset id is unknown
    """
    rows = registry.get(dataset_id)
    if rows is None:
        logger.warning(f"Analyze rejected: unknown dataset {dataset_id}")
        raise HTTPException(status_code=404, detail=f"Dataset {dataset_id} not found")

    request = request or DatasetAnalyzeRequest()
    saved = store.load()
    filters = request.filters or saved.filters
    config = request.config or saved.config

    results = cache.get_or_compute(dataset_id, rows, filters, config)
    return _build_response(results)


@router.post("/analyze", response_model=AnalyzeResponse)
async def analyze_rows(request: AnalyzeRequest) -> AnalyzeResponse:
    """Analyze rows sent with the request; nothing is stored or cached."""
    return _build_response(analyze(request.rows, request.filters, request.config))
