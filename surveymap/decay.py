"""
Age-based colour decay.

Older observations fade towards an "expired" look.  An age → fraction
mapping (0 = fresh, 1 = fully expired) drives three independently enabled
adjustments:

    saturation = s - (s - expired_saturation) * fraction
    lightness  = l - (l - expired_lightness) * fraction
    opacity    = 1 - fraction

Decay only applies while the time mode is ``decaying``; in any other mode
the fraction is 0 and colours pass through unchanged.
"""
from __future__ import annotations

import enum
import logging
from typing import Callable, List, Optional, Tuple

from .config import MapConfig
from .surveys.ratings import HSL, round_half_up

log = logging.getLogger(__name__)

HSLA = Tuple[int, int, int, float]

DecayFn = Callable[[float], float]


class TimeType(str, enum.Enum):
    DECAYING = "decaying"
    ALL = "all"


def halflife_decay(halflife_ms: float) -> DecayFn:
    """Monotone age → fraction mapping reaching 0.5 after *halflife_ms*."""
    if halflife_ms <= 0:
        raise ValueError("halflife must be positive")

    def _decay(age_ms: float) -> float:
        if age_ms <= 0:
            return 0.0
        return min(1.0, 1.0 - 0.5 ** (age_ms / halflife_ms))

    return _decay


class TimeMode:
    """Currently selected time display mode, with change listeners."""

    def __init__(self, selected: TimeType = TimeType.DECAYING):
        self._selected = TimeType(selected)
        self._listeners: List[Callable[[], None]] = []

    @property
    def selected(self) -> TimeType:
        return self._selected

    @property
    def decaying(self) -> bool:
        return self._selected is TimeType.DECAYING

    def select(self, time_type: TimeType) -> None:
        time_type = TimeType(time_type)
        if time_type is self._selected:
            return
        self._selected = time_type
        log.info("Time mode: %s", time_type.value)
        for cb in list(self._listeners):
            cb()

    def add_listener(self, callback: Callable[[], None]) -> None:
        self._listeners.append(callback)


class DecayEngine:
    """Fades colours by observation age."""

    def __init__(
        self,
        config: MapConfig,
        decay_fn: Optional[DecayFn] = None,
        mode: Optional[TimeMode] = None,
    ):
        self.config = config
        self.decay_fn = decay_fn or halflife_decay(config.decay_halflife_ms)
        self.mode = mode or TimeMode()

    def fraction(self, age_ms: float) -> float:
        if not self.mode.decaying or age_ms <= 0:
            return 0.0
        return max(0.0, min(1.0, self.decay_fn(age_ms)))

    def apply(self, color: HSL, age_ms: float) -> HSLA:
        h, s, l = color
        o = 1.0
        if self.mode.decaying:
            decay = self.fraction(age_ms)
            cfg = self.config
            if cfg.decay_saturation:
                s = round_half_up(s - (s - cfg.expired_saturation) * decay)
            if cfg.decay_lightness:
                l = round_half_up(l - (l - cfg.expired_lightness) * decay)
            if cfg.decay_opacity:
                o = 1.0 - decay
        return (h, s, l, o)
