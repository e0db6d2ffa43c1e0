from __future__ import annotations

import pytest

from surveymap.config import MapConfig
from surveymap.geo.observation import Observation
from surveymap.surveys.quality import build_quality_survey
from surveymap.surveys.ratings import Score
from surveymap.surveys.registry import SurveyRegistry, SurveyType, TablePart

NOW_MS = 1_700_000_000_000.0


def _flat(score: Score, color) -> tuple:
    return {v: score for v in range(0, 11)}, {v: color for v in range(0, 11)}


def build_river_survey() -> SurveyType:
    """Three-part survey whose parts score every reading 0-10 the same way."""
    parts = []
    for part_id, score, color in [
        ("clarity", Score.EXCELLENT, (120, 50, 50)),
        ("nitrate", Score.GOOD, (60, 50, 50)),
        ("oxygen", Score.BAD, (0, 50, 50)),
    ]:
        scores, colors = _flat(score, color)
        parts.append(TablePart(part_id, part_id.title(), scores, colors))
    return SurveyType(
        name="river",
        label="River",
        url="http://test/api/river",
        parts=parts,
        get_params={"project": "thames"},
    )


def make_obs(
    obs_id: str = "a",
    lat: float = 51.5,
    lng: float = -0.1,
    timestamp_ms: float = NOW_MS,
    status: str = "approved",
    **attributes,
) -> Observation:
    return Observation(
        obs_id=obs_id,
        lat=lat,
        lng=lng,
        timestamp_ms=timestamp_ms,
        status=status,
        attributes=attributes,
    )


def make_record(
    obs_id: str = "a",
    lat: float = 51.5,
    lng: float = -0.1,
    epoch: float = NOW_MS,
    status: str = "approved",
    **attributes,
) -> dict:
    return {
        "_id": {"$oid": obs_id},
        "location": {"_wgs84": [lng, lat]},
        "timestamp": {"_epoch": epoch},
        "status": status,
        "attributes": attributes,
    }


@pytest.fixture
def config() -> MapConfig:
    return MapConfig(api_url="http://test/api")


@pytest.fixture
def quality() -> SurveyType:
    return build_quality_survey("http://test/api")


@pytest.fixture
def river() -> SurveyType:
    return build_river_survey()


@pytest.fixture
def registry(quality, river) -> SurveyRegistry:
    return SurveyRegistry([quality, river])
