"""
Survey types and survey parts.

A :class:`SurveyType` is a named category of observations served from one
API endpoint.  It owns a fixed, ordered set of :class:`SurveyPart` objects,
each able to score and colour an observation from its own raw reading.

Parts answer ``None`` ("no opinion") instead of raising when the reading is
absent, not numeric, or outside the part's domain.

Usage
-----
    registry = default_registry(config)
    quality = registry.get("quality")
    ph = quality.part("thames21Ph")
    ph.score(observation), ph.color(observation)
"""
from __future__ import annotations

import logging
import math
from abc import ABC, abstractmethod
from numbers import Real
from typing import Dict, Iterable, List, Mapping, Optional

from ..errors import UnknownSurveyError, UnknownSurveyPartError
from ..geo.observation import Observation
from .ratings import HSL, Score, round_half_up

log = logging.getLogger(__name__)


class SurveyPart(ABC):
    """One measurable aspect of a survey type."""

    part_id: str = ""
    label: str = ""
    description: str = ""

    @abstractmethod
    def score(self, observation: Observation) -> Optional[Score]:
        ...

    @abstractmethod
    def color(self, observation: Observation) -> Optional[HSL]:
        ...


class TablePart(SurveyPart):
    """Part scored and coloured from per-bucket lookup tables.

    The raw reading is rounded half-up to an integer bucket; the two tables
    are independent and are never interpolated.
    """

    def __init__(
        self,
        part_id: str,
        label: str,
        scores: Mapping[int, Score],
        colors: Mapping[int, HSL],
        description: str = "",
    ):
        self.part_id = part_id
        self.label = label
        self.description = description
        self._scores = dict(scores)
        self._colors = dict(colors)

    def bucket(self, observation: Observation) -> Optional[int]:
        value = observation.raw(self.part_id)
        # bool is an int subclass but never a reading
        if isinstance(value, bool) or not isinstance(value, Real):
            return None
        if math.isnan(value) or math.isinf(value):
            return None
        return round_half_up(float(value))

    def score(self, observation: Observation) -> Optional[Score]:
        return self._scores.get(self.bucket(observation))

    def color(self, observation: Observation) -> Optional[HSL]:
        return self._colors.get(self.bucket(observation))


class SurveyType:
    """A category of survey parts fetched from one endpoint."""

    def __init__(
        self,
        name: str,
        label: str,
        url: str,
        parts: Iterable[SurveyPart],
        get_params: Optional[Mapping[str, str]] = None,
    ):
        self.name = name
        self.label = label
        self.url = url
        self.get_params: Dict[str, str] = dict(get_params or {})
        self._parts: Dict[str, SurveyPart] = {}
        for p in parts:
            if p.part_id in self._parts:
                raise ValueError(f"Duplicate part {p.part_id} in survey {name}")
            self._parts[p.part_id] = p

    def list_parts(self) -> List[str]:
        return list(self._parts)

    def has_part(self, part_id: str) -> bool:
        return part_id in self._parts

    def part(self, part_id: str) -> SurveyPart:
        try:
            return self._parts[part_id]
        except KeyError:
            raise UnknownSurveyPartError(self.name, part_id) from None

    def __repr__(self) -> str:
        return f"SurveyType({self.name!r}, parts={self.list_parts()})"


class SurveyRegistry:
    """Static name → SurveyType lookup, built once at startup."""

    def __init__(self, survey_types: Iterable[SurveyType] = ()):
        self._types: Dict[str, SurveyType] = {}
        for st in survey_types:
            self.register(st)

    def register(self, survey_type: SurveyType) -> None:
        if survey_type.name in self._types:
            raise ValueError(f"Survey {survey_type.name} already registered")
        self._types[survey_type.name] = survey_type
        log.debug("Registered survey %s with parts %s",
                  survey_type.name, survey_type.list_parts())

    def get(self, name: str) -> SurveyType:
        try:
            return self._types[name]
        except KeyError:
            raise UnknownSurveyError(name) from None

    def __contains__(self, name: object) -> bool:
        return name in self._types

    def names(self) -> List[str]:
        return list(self._types)


def default_registry(config) -> SurveyRegistry:
    """Registry with every built-in survey type."""
    from .quality import build_quality_survey

    return SurveyRegistry([build_quality_survey(config.api_url)])
