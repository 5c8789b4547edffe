"""
In-process registry of uploaded datasets.

Each uploaded report is parsed once and kept under a generated dataset id, so
repeated analyses of the same dataset can be memoized by that id. Registering a
dataset never mutates an existing one; rows are treated as read-only.
"""

import logging
from collections import OrderedDict
from typing import List, Optional
from uuid import uuid4

from ads_dashboard.models import RawRow


logger = logging.getLogger(__name__)


class DatasetRegistry:
    """Holds the most recently uploaded datasets by id."""

    def __init__(self, max_datasets: int = 8):
        self._datasets: "OrderedDict[str, List[RawRow]]" = OrderedDict()
        self.max_datasets = max_datasets

    def register(self, rows: List[RawRow]) -> str:
        """
        Store a parsed dataset.

        Args:
            rows: Parsed rows of one report

        Returns:
            The new dataset id
        """
        dataset_id = uuid4().hex
        self._datasets[dataset_id] = list(rows)

        while len(self._datasets) > self.max_datasets:
            evicted_id, _ = self._datasets.popitem(last=False)
            logger.info(f"Dropped dataset {evicted_id} from registry")

        logger.info(f"Registered dataset {dataset_id} with {len(rows)} rows")
        return dataset_id

    def get(self, dataset_id: str) -> Optional[List[RawRow]]:
        """Return the rows of a dataset, or None when the id is unknown."""
        return self._datasets.get(dataset_id)

    def __contains__(self, dataset_id: str) -> bool:
        return dataset_id in self._datasets

    def __len__(self) -> int:
        return len(self._datasets)
