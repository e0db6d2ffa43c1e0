"""
Score aggregation and point colouring.

Aggregation is "soft": a selected part with no opinion on an observation is
left out of the mean instead of counting as zero.  Parts scoring
{excellent, no opinion, good} aggregate to round(5 / 2) = excellent.

Colour comes straight from the part when exactly one part is selected, and
from the shared score → colour table when several are.  The chosen colour
is then faded by the decay engine.  No colour means the point is hidden.
"""
from __future__ import annotations

from typing import Optional, Sequence

from ..decay import HSLA, DecayEngine
from ..geo.observation import Observation
from .ratings import HSL, Score, round_half_up, score_color
from .registry import SurveyType


def aggregate_score(
    survey_type: SurveyType,
    observation: Observation,
    parts: Sequence[str],
) -> Optional[Score]:
    """Rounded mean rank of the selected parts that have an opinion."""
    if not parts:
        return None

    total = 0
    counted = 0
    for part_id in parts:
        score = survey_type.part(part_id).score(observation)
        if score is None:
            continue
        total += int(score)
        counted += 1

    if not counted:
        return None
    return Score(round_half_up(total / counted))


def base_color(
    survey_type: SurveyType,
    observation: Observation,
    parts: Sequence[str],
) -> Optional[HSL]:
    """Undecayed colour for *observation* given the selected *parts*."""
    if not parts:
        return None
    if len(parts) == 1:
        return survey_type.part(parts[0]).color(observation)
    return score_color(aggregate_score(survey_type, observation, parts))


def point_color(
    survey_type: SurveyType,
    observation: Observation,
    parts: Sequence[str],
    engine: DecayEngine,
    now_ms: Optional[float] = None,
) -> Optional[HSLA]:
    """Decayed HSLA colour, or None when the point should not be drawn."""
    color = base_color(survey_type, observation, parts)
    if color is None:
        return None
    return engine.apply(color, observation.age_ms(now_ms))
