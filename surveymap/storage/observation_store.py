"""
In-memory observation store.

Maps survey type → observation id → :class:`Observation` for the lifetime
of a session.  Incoming records replace stored ones with the same id as a
whole (last write wins); nothing is ever evicted.

Usage
-----
    store = ObservationStore()
    added = store.add("quality", records)
    for obs in store.observations("quality"):
        ...
"""
from __future__ import annotations

import logging
import threading
from typing import Dict, Iterable, List, Optional

from ..geo.observation import Observation

log = logging.getLogger(__name__)


class ObservationStore:
    """Session-wide observation data, keyed by survey and id.

    Thread-safe: fetch workers and the redraw path share one lock.
    """

    def __init__(self) -> None:
        self._data: Dict[str, Dict[str, Observation]] = {}
        self._lock = threading.Lock()

    def add(self, survey: str, records: Iterable[object]) -> int:
        """Merge raw API records (or Observations) into *survey*.

        Returns the number of records stored; unparseable records are
        skipped.
        """
        parsed: List[Observation] = []
        skipped = 0
        for rec in records:
            obs = rec if isinstance(rec, Observation) else Observation.from_record(rec)
            if obs is None:
                skipped += 1
                continue
            parsed.append(obs)

        with self._lock:
            bucket = self._data.setdefault(survey, {})
            for obs in parsed:
                bucket[obs.obs_id] = obs
            total = len(bucket)

        if skipped:
            log.warning("%s: skipped %d unparseable records", survey, skipped)
        log.info("%s: stored %d observations (%d total)", survey, len(parsed), total)
        return len(parsed)

    def has_survey(self, survey: str) -> bool:
        with self._lock:
            return survey in self._data

    def get(self, survey: str, obs_id: str) -> Optional[Observation]:
        with self._lock:
            return self._data.get(survey, {}).get(obs_id)

    def observations(self, survey: str) -> List[Observation]:
        """Snapshot of every stored observation for *survey*."""
        with self._lock:
            return list(self._data.get(survey, {}).values())

    def count(self, survey: Optional[str] = None) -> int:
        with self._lock:
            if survey is not None:
                return len(self._data.get(survey, {}))
            return sum(len(b) for b in self._data.values())
