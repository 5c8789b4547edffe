"""
Ads Dashboard Backend Package.

FastAPI service layer for marketplace advertising analytics: per-product metrics,
traffic-light statuses and recommendations computed from advertising reports.

Subpackages:
    - api: FastAPI route handlers
    - core: Configuration and dependencies
    - models: Pydantic schemas and enums
    - services: Business logic services
"""

__version__ = "1.0.0"
