"""
Render selection and marker sinks.

``select_points`` turns the stored observations of one survey type into
marker directives: score → rating filter → decayed colour → style.  Points
rejected by the rating filter or without a colour are dropped.

A :class:`RenderSink` is the map layer the directives are drawn on.  Each
redraw is a full rebuild (clear, then add every directive) rather than a
diff.
"""
from __future__ import annotations

import logging
import threading
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence

from .decay import HSLA, DecayEngine
from .geo.observation import Observation
from .surveys.ratings import RatingFilter, Score
from .surveys.registry import SurveyType
from .surveys.scoring import aggregate_score, point_color

log = logging.getLogger(__name__)

APPROVED_STROKE = "#ffffff"
UNAPPROVED_STROKE = "#666666"


@dataclass(frozen=True)
class MarkerStyle:
    color: str              # stroke
    fill_color: str         # css hsl()
    opacity: float          # stroke opacity
    fill_opacity: float
    options: Dict[str, Any] = field(default_factory=dict)

    def as_dict(self) -> Dict[str, Any]:
        style = dict(self.options)
        style.update({
            "color": self.color,
            "fillColor": self.fill_color,
            "opacity": self.opacity,
            "fillOpacity": self.fill_opacity,
        })
        return style


@dataclass(frozen=True)
class RenderDirective:
    """One marker to draw."""
    obs_id: str
    lat: float
    lng: float
    style: MarkerStyle
    time_ms: float
    score: Optional[Score] = None

    def as_dict(self) -> Dict[str, Any]:
        return {
            "id": self.obs_id,
            "lat": self.lat,
            "lng": self.lng,
            "time": self.time_ms,
            "score": self.score.label if self.score is not None else None,
            "style": self.style.as_dict(),
        }


def marker_style(
    observation: Observation,
    color: HSLA,
    options: Optional[Mapping[str, Any]] = None,
) -> MarkerStyle:
    h, s, l, o = color
    return MarkerStyle(
        color=APPROVED_STROKE if observation.approved else UNAPPROVED_STROKE,
        fill_color=f"hsl({h}, {s}%, {l}%)",
        opacity=1 - (1 - o) ** 2,
        fill_opacity=o,
        options=dict(options or {}),
    )


def select_points(
    survey_type: SurveyType,
    observations: Iterable[Observation],
    parts: Sequence[str],
    rating_filter: RatingFilter,
    engine: DecayEngine,
    marker_options: Optional[Mapping[str, Any]] = None,
    now_ms: Optional[float] = None,
) -> List[RenderDirective]:
    """Directives for every observation that should be drawn."""
    directives: List[RenderDirective] = []
    for obs in observations:
        score = aggregate_score(survey_type, obs, parts)
        if not rating_filter.selected(score):
            continue

        color = point_color(survey_type, obs, parts, engine, now_ms)
        if color is None:
            continue

        directives.append(RenderDirective(
            obs_id=obs.obs_id,
            lat=obs.lat,
            lng=obs.lng,
            style=marker_style(obs, color, marker_options),
            time_ms=obs.timestamp_ms,
            score=score,
        ))
    return directives


class RenderSink(ABC):
    """A map with one marker layer per survey type."""

    @abstractmethod
    def clear(self, survey: str) -> None:
        ...

    @abstractmethod
    def add(self, survey: str, directive: RenderDirective) -> None:
        ...

    @abstractmethod
    def show(self, survey: str) -> None:
        ...

    @abstractmethod
    def hide(self, survey: str) -> None:
        ...

    @abstractmethod
    def is_shown(self, survey: str) -> bool:
        ...


class MemorySink(RenderSink):
    """Keeps layers in memory; used headless and in tests."""

    def __init__(self) -> None:
        self._layers: Dict[str, List[RenderDirective]] = {}
        self._shown: set = set()
        self._lock = threading.Lock()

    def clear(self, survey: str) -> None:
        with self._lock:
            self._layers[survey] = []

    def add(self, survey: str, directive: RenderDirective) -> None:
        with self._lock:
            self._layers.setdefault(survey, []).append(directive)

    def show(self, survey: str) -> None:
        with self._lock:
            self._shown.add(survey)

    def hide(self, survey: str) -> None:
        with self._lock:
            self._shown.discard(survey)

    def is_shown(self, survey: str) -> bool:
        with self._lock:
            return survey in self._shown

    def markers(self, survey: str) -> List[RenderDirective]:
        with self._lock:
            return list(self._layers.get(survey, ()))
