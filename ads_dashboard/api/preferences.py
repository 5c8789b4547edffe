"""
FastAPI router module for user preferences.

Implements GET /preferences (last-used filters and analytics configuration, or
defaults) and PUT /preferences (replace them).
"""

import logging

from fastapi import APIRouter

from ads_dashboard.core.dependencies import PreferencesStoreDep
from ads_dashboard.models import PreferencesState


# Configure logging
logger = logging.getLogger(__name__)

router = APIRouter(prefix="/preferences")


@router.get("", response_model=PreferencesState)
async def get_preferences(store: PreferencesStoreDep) -> PreferencesState:
    """Return the saved preferences, or the defaults when none were saved."""
    return store.load()


@router.put("", response_model=PreferencesState)
async def put_preferences(
    state: PreferencesState,
    store: PreferencesStoreDep,
) -> PreferencesState:
    """Replace the saved preferences."""
    store.save(state)
    logger.info(
        f"Preferences updated: {state.filters.date_from}..{state.filters.date_to}, "
        f"margin={state.config.margin_pct}"
    )
    return state
