from __future__ import annotations

import pytest

from surveymap.errors import UnknownSurveyError, UnknownSurveyPartError
from surveymap.surveys.selection import PartSelection


def test_selection_starts_empty(registry) -> None:
    selection = PartSelection(registry)

    assert selection.active("river") == []
    assert not selection.all_selected("river")


def test_toggle_single_part_flips_membership(registry) -> None:
    selection = PartSelection(registry)

    assert selection.toggle("river", "oxygen") == ["oxygen"]
    assert selection.toggle("river", "clarity") == ["oxygen", "clarity"]
    assert selection.toggle("river", "oxygen") == ["clarity"]


def test_toggle_all_selects_then_clears(registry) -> None:
    selection = PartSelection(registry)
    selection.toggle("river", "nitrate")

    assert selection.toggle("river") == ["clarity", "nitrate", "oxygen"]
    assert selection.all_selected("river")
    assert selection.toggle("river") == []


def test_unknown_part_is_ignored(registry) -> None:
    selection = PartSelection(registry)

    assert selection.toggle("river", "turbidity") == []


def test_unknown_survey_raises(registry) -> None:
    selection = PartSelection(registry)

    with pytest.raises(UnknownSurveyError):
        selection.toggle("rivr", "oxygen")


def test_set_validates_parts(registry) -> None:
    selection = PartSelection(registry)
    selection.set("river", ["oxygen", "oxygen", "clarity"])

    assert selection.active("river") == ["oxygen", "clarity"]
    with pytest.raises(UnknownSurveyPartError):
        selection.set("river", ["turbidity"])
