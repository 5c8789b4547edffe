"""
Backend API package initialization.

This package contains FastAPI router modules for the Ads Dashboard backend:
- analytics: Report upload, dataset analysis and stateless analysis
- preferences: Last-used filters and analytics configuration
"""

from fastapi import APIRouter

# Import router modules
from ads_dashboard.api.analytics import router as analytics_router
from ads_dashboard.api.preferences import router as preferences_router

# Create main API router
api_router = APIRouter()

# Include all sub-routers (each router carries its own prefix)
api_router.include_router(analytics_router, tags=["analytics"])
api_router.include_router(preferences_router, tags=["preferences"])

# Export all routers for selective imports
__all__ = [
    "api_router",
    "analytics_router",
    "preferences_router",
]
