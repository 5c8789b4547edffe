"""
Preferences Persistence Service

Stores the last-used Filters and AnalyticsConfig behind a small load/save interface,
so the storage medium can be swapped without touching the analytics code.

Stores:
- InMemoryPreferencesStore: process-local, used when no path is configured
- JsonFilePreferencesStore: a JSON document on disk

A missing, unreadable or corrupt preferences document never fails a request:
the problem is logged and the defaults are returned instead.
"""

import logging
from abc import ABC, abstractmethod
from datetime import date, timedelta
from pathlib import Path
from typing import Optional

from pydantic import ValidationError as PydanticValidationError

from ads_dashboard.core.config import Settings, get_settings
from ads_dashboard.models import AnalyticsConfig, Filters, PreferencesState


logger = logging.getLogger(__name__)


def default_preferences(
    settings: Optional[Settings] = None,
    today: Optional[date] = None
) -> PreferencesState:
    """
    Build the preferences used when nothing has been saved yet.

    The date range covers the last default_lookback_days days up to today and
    every selector is "all".
    """
    settings = settings or get_settings()
    today = today or date.today()

    return PreferencesState(
        filters=Filters(
            date_from=today - timedelta(days=settings.default_lookback_days),
            date_to=today,
        ),
        config=AnalyticsConfig(
            margin_pct=settings.default_margin_pct,
            min_clicks_for_cr=settings.default_min_clicks_for_cr,
        ),
    )


class PreferencesStore(ABC):
    """Load/save interface for user preferences."""

    @abstractmethod
    def load(self) -> PreferencesState:
        """Return the saved preferences, or the defaults when none are saved."""

    @abstractmethod
    def save(self, state: PreferencesState) -> None:
        """Persist the preferences."""


class InMemoryPreferencesStore(PreferencesStore):
    """Keeps preferences for the lifetime of the process."""

    def __init__(self, settings: Optional[Settings] = None):
        self._settings = settings
        self._state: Optional[PreferencesState] = None

    def load(self) -> PreferencesState:
        if self._state is None:
            return default_preferences(self._settings)
        return self._state

    def save(self, state: PreferencesState) -> None:
        self._state = state


class JsonFilePreferencesStore(PreferencesStore):
    """Keeps preferences in a JSON file."""

    def __init__(self, path: str, settings: Optional[Settings] = None):
        self.path = Path(path)
        self._settings = settings

    def load(self) -> PreferencesState:
        if not self.path.exists():
            return default_preferences(self._settings)
        try:
            return PreferencesState.model_validate_json(self.path.read_text(encoding="utf-8"))
        except (OSError, PydanticValidationError) as e:
            logger.warning(f"Ignoring unreadable preferences file {self.path}: {e}")
            return default_preferences(self._settings)

    def save(self, state: PreferencesState) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(state.model_dump_json(indent=2), encoding="utf-8")
        logger.info(f"Saved preferences to {self.path}")


def create_preferences_store(settings: Optional[Settings] = None) -> PreferencesStore:
    """Create the store selected by settings.preferences_path."""
    settings = settings or get_settings()
    if settings.preferences_path:
        return JsonFilePreferencesStore(settings.preferences_path, settings)
    return InMemoryPreferencesStore(settings)
