from __future__ import annotations

import pytest

from conftest import NOW_MS, make_obs
from surveymap.config import MapConfig
from surveymap.decay import DecayEngine, TimeMode, TimeType
from surveymap.render import MemorySink, marker_style, select_points
from surveymap.surveys.ratings import RatingFilter, Score


def _engine(mode: TimeType = TimeType.ALL, fraction: float = 0.0) -> DecayEngine:
    cfg = MapConfig(decay_opacity=True)
    return DecayEngine(cfg, lambda age: fraction, TimeMode(mode))


def test_stroke_color_follows_approval() -> None:
    color = (65, 68, 51, 1.0)

    assert marker_style(make_obs(status="approved"), color).color == "#ffffff"
    assert marker_style(make_obs(status="pending"), color).color == "#666666"
    assert marker_style(make_obs(status=""), color).color == "#666666"


def test_style_carries_hsl_fill_and_opacity() -> None:
    style = marker_style(make_obs(), (65, 68, 51, 0.5), {"radius": 6})

    assert style.fill_color == "hsl(65, 68%, 51%)"
    assert style.fill_opacity == 0.5
    assert style.opacity == pytest.approx(0.75)
    assert style.as_dict()["radius"] == 6
    assert style.as_dict()["fillColor"] == "hsl(65, 68%, 51%)"


def test_select_points_drops_points_without_color(quality) -> None:
    observations = [
        make_obs("good", thames21Ph=7),
        make_obs("missing"),
        make_obs("out-of-range", thames21Ph=15),
    ]

    directives = select_points(quality, observations, ["thames21Ph"],
                               RatingFilter(), _engine(), now_ms=NOW_MS)

    assert [d.obs_id for d in directives] == ["good"]
    assert directives[0].score is Score.EXCELLENT
    assert directives[0].time_ms == NOW_MS


def test_select_points_applies_rating_filter(quality) -> None:
    observations = [make_obs("neutral", thames21Ph=7), make_obs("acid", thames21Ph=2)]

    directives = select_points(quality, observations, ["thames21Ph"],
                               RatingFilter([Score.BAD]), _engine(), now_ms=NOW_MS)

    assert [d.obs_id for d in directives] == ["acid"]


def test_select_points_without_parts_draws_nothing(quality) -> None:
    directives = select_points(quality, [make_obs(thames21Ph=7)], [],
                               RatingFilter(), _engine(), now_ms=NOW_MS)

    assert directives == []


def test_select_points_fades_old_observations(quality) -> None:
    old = make_obs("old", thames21Ph=7, timestamp_ms=NOW_MS - 1000)

    directives = select_points(quality, [old], ["thames21Ph"], RatingFilter(),
                               _engine(TimeType.DECAYING, 0.25), now_ms=NOW_MS)

    assert directives[0].style.fill_opacity == pytest.approx(0.75)


def test_rating_filter_open_until_a_rating_is_chosen() -> None:
    ratings = RatingFilter()
    changes = []
    ratings.add_listener(lambda: changes.append(ratings.selection()))

    assert ratings.selected(None)
    assert ratings.selected(Score.BAD)

    ratings.toggle(Score.GOOD)

    assert not ratings.selected(None)
    assert not ratings.selected(Score.BAD)
    assert ratings.selected(Score.GOOD)
    assert changes == [{Score.GOOD}]


def test_memory_sink_rebuilds_layers(quality) -> None:
    sink = MemorySink()
    directives = select_points(quality, [make_obs(thames21Ph=7)], ["thames21Ph"],
                               RatingFilter(), _engine(), now_ms=NOW_MS)

    sink.add("quality", directives[0])
    sink.clear("quality")
    sink.show("quality")

    assert sink.markers("quality") == []
    assert sink.is_shown("quality")
