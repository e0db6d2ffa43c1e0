"""
Viewport-aware fetch bookkeeping.

For every survey type the cache remembers the bounds of each completed
fetch, in the order they completed.  A viewport needs no fetch when one of
those rectangles wholly contains it.  Overlap is not enough: a viewport that
straddles two fetched rectangles is fetched again.

Regions are only appended after a fetch succeeds and are never merged or
pruned, so the union of a survey's regions is exactly the area whose data
the store holds in full.

Usage
-----
    cache = SpatialFetchCache()
    if cache.needs_fetch("quality", viewport):
        ...  # fetch, then
        cache.mark_fetched("quality", viewport)
"""
from __future__ import annotations

import logging
import threading
from typing import Dict, Iterable, List

from .bounds import LatLngBounds

log = logging.getLogger(__name__)


class SpatialFetchCache:
    """Per-survey list of already-requested bounds (append-only)."""

    def __init__(self) -> None:
        self._regions: Dict[str, List[LatLngBounds]] = {}
        self._lock = threading.Lock()

    def is_covered(self, survey: str, bounds: LatLngBounds) -> bool:
        """True if a previously fetched region contains *bounds*."""
        with self._lock:
            regions = list(self._regions.get(survey, ()))
        return any(region.contains(bounds) for region in regions)

    def needs_fetch(self, survey: str, bounds: LatLngBounds) -> bool:
        return not self.is_covered(survey, bounds)

    def to_fetch(self, surveys: Iterable[str], bounds: LatLngBounds) -> List[str]:
        """Surveys among *surveys* whose data does not yet cover *bounds*."""
        return [s for s in surveys if self.needs_fetch(s, bounds)]

    def mark_fetched(self, survey: str, bounds: LatLngBounds) -> None:
        """Record a completed fetch of *bounds* for *survey*."""
        with self._lock:
            regions = self._regions.setdefault(survey, [])
            regions.append(bounds)
            count = len(regions)
        log.debug("%s: %d requested regions", survey, count)

    def regions(self, survey: str) -> List[LatLngBounds]:
        with self._lock:
            return list(self._regions.get(survey, ()))

    def region_count(self) -> int:
        with self._lock:
            return sum(len(r) for r in self._regions.values())
