"""
Ratings: the ordinal scores every survey part maps its readings onto.

Scores are shared by all survey types: a single part's score and the
aggregate of several parts use the same ranks, so one rating filter and one
score → colour table serve every layer.
"""
from __future__ import annotations

import enum
import logging
import math
import threading
from typing import Callable, Iterable, List, Optional, Set, Tuple

log = logging.getLogger(__name__)

HSL = Tuple[int, int, int]


class Score(enum.IntEnum):
    BAD = 1
    GOOD = 2
    EXCELLENT = 3

    @property
    def label(self) -> str:
        return self.name.lower()


# Representative colour per score, used when several parts are combined
_SCORE_COLORS = {
    Score.BAD: (358, 80, 51),
    Score.GOOD: (52, 94, 50),
    Score.EXCELLENT: (120, 55, 45),
}


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves towards +infinity."""
    return int(math.floor(value + 0.5))


def score_color(score: Optional[Score]) -> Optional[HSL]:
    """Colour for an aggregate score, or None for no score."""
    if score is None:
        return None
    return _SCORE_COLORS.get(Score(score))


class RatingFilter:
    """User-selected set of scores to display.

    With nothing selected the filter is open and every point passes,
    including points without a score.  Once a score is selected only points
    with a selected score pass.
    """

    def __init__(self, selected: Iterable[Score] = ()):
        self._selected: Set[Score] = set(selected)
        self._listeners: List[Callable[[], None]] = []
        self._lock = threading.Lock()

    def selected(self, score: Optional[Score]) -> bool:
        with self._lock:
            if not self._selected:
                return True
            return score is not None and Score(score) in self._selected

    def selection(self) -> Set[Score]:
        with self._lock:
            return set(self._selected)

    def toggle(self, score: Score) -> None:
        with self._lock:
            if score in self._selected:
                self._selected.discard(score)
            else:
                self._selected.add(score)
            current = sorted(s.label for s in self._selected)
        log.info("Rating filter: %s", ", ".join(current) or "all")
        self._notify()

    def add_listener(self, callback: Callable[[], None]) -> None:
        self._listeners.append(callback)

    def _notify(self) -> None:
        for cb in list(self._listeners):
            cb()
