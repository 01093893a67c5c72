"""
Latest-sample store shared between pollers and the metrics collector.
"""

import logging
import threading
from typing import Dict, Optional

from ..models.stats import StatCategory

logger = logging.getLogger(__name__)


class SampleStore:
    """
    Holds the most recent raw jstat line per statistic category.

    Every poller writes only its own category; scrapes read all of them.
    A single lock covers the whole mapping, so a reader always sees either
    the previous or the new complete line of a category. Older lines are
    overwritten and never kept.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._samples: Dict[StatCategory, str] = {}

    def put(self, category: StatCategory, line: str) -> None:
        """Replace the sample of a category."""
        with self._lock:
            self._samples[category] = line

    def get(self, category: StatCategory) -> Optional[str]:
        """Return the latest sample of a category, or None if none arrived yet."""
        with self._lock:
            return self._samples.get(category)

    def snapshot(self) -> Dict[StatCategory, str]:
        """Return a copy of all current samples taken under one lock acquisition."""
        with self._lock:
            return dict(self._samples)

    def __contains__(self, category: StatCategory) -> bool:
        with self._lock:
            return category in self._samples
