"""
In-memory memoization of analysis results.

Analyses are pure functions of (dataset, filters, config), so a result can be reused
whenever the same dataset is queried with the same filters and configuration.
Filters and AnalyticsConfig are frozen pydantic models and hash by value; the
dataset is identified by a caller-supplied key (a dataset id from the registry).

Thread-safety is NOT guaranteed; the API runs analyses on a single event loop.
"""

import logging
from collections import OrderedDict
from typing import Callable, Hashable, List, Optional, Sequence, Tuple

from ads_dashboard.models import AnalysisResult, AnalyticsConfig, Filters, RawRow
from ads_dashboard.services.analytics import analyze


logger = logging.getLogger(__name__)

CacheKey = Tuple[Hashable, Filters, AnalyticsConfig]


class AnalysisCache:
    """
    Least-recently-used cache of analysis results.
    """

    def __init__(self, max_entries: int = 32):
        """
        Initialize cache.

        Args:
            max_entries: Maximum number of cached analyses (oldest evicted first)
        """
        self._cache: "OrderedDict[CacheKey, Optional[List[AnalysisResult]]]" = OrderedDict()
        self.max_entries = max_entries
        self.hits = 0
        self.misses = 0

    def get_or_compute(
        self,
        dataset_key: Hashable,
        rows: Optional[Sequence[RawRow]],
        filters: Filters,
        config: AnalyticsConfig,
        compute: Callable[..., Optional[List[AnalysisResult]]] = analyze
    ) -> Optional[List[AnalysisResult]]:
        """
        Return the cached analysis for this query, computing it on a miss.

        Args:
            dataset_key: Identity of the dataset the rows belong to
            rows: Dataset rows (only read on a miss)
            filters: Query filters
            config: Analytics configuration
            compute: Analysis function, analyze by default

        Returns:
            The analysis result, identical to an uncached call
        """
        key: CacheKey = (dataset_key, filters, config)

        if key in self._cache:
            self.hits += 1
            self._cache.move_to_end(key)
            return self._cache[key]

        self.misses += 1
        result = compute(rows, filters, config)
        self._cache[key] = result

        while len(self._cache) > self.max_entries:
            evicted, _ = self._cache.popitem(last=False)
            logger.debug(f"Evicted cached analysis for dataset {evicted[0]}")

        return result

    def invalidate(self, dataset_key: Hashable):
        """Drop every cached analysis of one dataset."""
        for key in [key for key in self._cache if key[0] == dataset_key]:
            del self._cache[key]

    def clear(self):
        """Clear all cached values."""
        self._cache.clear()

    def size(self) -> int:
        """Get number of cached items."""
        return len(self._cache)
