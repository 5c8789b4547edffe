"""
FastAPI dependency injection utilities for the Ads Dashboard backend.

Provides the shared, process-wide collaborators of the API as injectable
dependencies:

- SettingsDep: the cached Settings instance
- AnalysisCacheDep: memoized analysis results
- DatasetRegistryDep: uploaded datasets by id
- PreferencesStoreDep: saved filters and analytics configuration

Each provider is a thin wrapper so tests can swap it through
`app.dependency_overrides[provider] = lambda: replacement`.

Usage:
    @router.post("/datasets/{dataset_id}/analyze")
    async def analyze_dataset(
        dataset_id: str,
        registry: DatasetRegistryDep,
        cache: AnalysisCacheDep,
    ) -> AnalyzeResponse:
        ...
"""

from functools import lru_cache
from typing import Annotated

from fastapi import Depends

from ads_dashboard.core.config import Settings, get_settings
from ads_dashboard.services.cache import AnalysisCache
from ads_dashboard.services.datasets import DatasetRegistry
from ads_dashboard.services.preferences import PreferencesStore, create_preferences_store


# =============================================================================
# Settings Dependency
# =============================================================================

def get_settings_dependency() -> Settings:
    """
    Return the Settings singleton instance.

    This is a thin wrapper around get_settings() to enable FastAPI's
    dependency override mechanism for testing.
    """
    return get_settings()


# =============================================================================
# Shared Service Dependencies
# =============================================================================

@lru_cache()
def get_analysis_cache() -> AnalysisCache:
    """Return the process-wide analysis cache, sized from settings."""
    return AnalysisCache(max_entries=get_settings().analysis_cache_size)


@lru_cache()
def get_dataset_registry() -> DatasetRegistry:
    """Return the process-wide dataset registry."""
    return DatasetRegistry()


@lru_cache()
def get_preferences_store() -> PreferencesStore:
    """Return the preferences store selected by settings.preferences_path."""
    return create_preferences_store(get_settings())


# =============================================================================
# Type Aliases for Dependency Injection
# =============================================================================

# Usage: async def endpoint(settings: SettingsDep)
SettingsDep = Annotated[Settings, Depends(get_settings_dependency)]

AnalysisCacheDep = Annotated[AnalysisCache, Depends(get_analysis_cache)]

DatasetRegistryDep = Annotated[DatasetRegistry, Depends(get_dataset_registry)]

PreferencesStoreDep = Annotated[PreferencesStore, Depends(get_preferences_store)]
