"""
Core infrastructure package for the FastAPI backend.

Provides:
- Configuration management via pydantic-settings (core.config)
- FastAPI dependency injection utilities (core.dependencies)

Only the configuration is re-exported here, since the services themselves read
settings; import dependencies from ads_dashboard.core.dependencies directly:

    from ads_dashboard.core import get_settings
    from ads_dashboard.core.dependencies import SettingsDep, AnalysisCacheDep
"""

# =============================================================================
# Re-exports from ads_dashboard.core.config
# =============================================================================
from ads_dashboard.core.config import Settings, get_settings


__all__ = [
    'Settings',
    'get_settings',
]
