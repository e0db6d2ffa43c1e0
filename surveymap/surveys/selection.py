"""
Per-survey set of active parts.

Mirrors the part buttons of the map: toggling one part flips it, toggling
with no part is the "All" button (select every part unless all are already
selected, in which case clear the selection).
"""
from __future__ import annotations

import logging
import threading
from typing import Dict, List, Optional

from .registry import SurveyRegistry

log = logging.getLogger(__name__)


class PartSelection:
    """Active part ids for each survey type."""

    def __init__(self, registry: SurveyRegistry):
        self._registry = registry
        self._active: Dict[str, List[str]] = {name: [] for name in registry.names()}
        self._lock = threading.Lock()

    def active(self, survey: str) -> List[str]:
        self._registry.get(survey)
        with self._lock:
            return list(self._active.get(survey, ()))

    def all_selected(self, survey: str) -> bool:
        parts = self._registry.get(survey).list_parts()
        with self._lock:
            return len(self._active.get(survey, ())) == len(parts)

    def toggle(self, survey: str, part: Optional[str] = None) -> List[str]:
        """Toggle *part* (or all parts) of *survey*; returns the new selection."""
        survey_type = self._registry.get(survey)
        part_keys = survey_type.list_parts()

        with self._lock:
            active = self._active.setdefault(survey, [])
            if part is not None:
                if not survey_type.has_part(part):
                    log.warning("Ignoring unknown part %s for survey %s", part, survey)
                elif part in active:
                    active.remove(part)
                else:
                    active.append(part)
            elif not active or len(active) != len(part_keys):
                self._active[survey] = list(part_keys)
            else:
                self._active[survey] = []
            result = list(self._active[survey])

        log.debug("%s parts: %s", survey, result)
        return result

    def set(self, survey: str, parts: List[str]) -> None:
        """Replace the selection of *survey*; every part must exist."""
        survey_type = self._registry.get(survey)
        for p in parts:
            survey_type.part(p)
        with self._lock:
            self._active[survey] = list(dict.fromkeys(parts))
