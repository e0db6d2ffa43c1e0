"""pH part of the water quality survey."""
from __future__ import annotations

from ..ratings import Score
from ..registry import TablePart

PART_ID = "thames21Ph"

LABEL = "pH"

DESCRIPTION = """For the Thames to support a variety of wildlife, the water
must not be too acid or alkali.  Volunteers measure the pH of the water; a
neutral reading (neither acid nor alkali) is best for wildlife."""

# Rounded pH → HSL, one entry per bucket
COLORS = {
    1: (358, 80, 51),
    2: (26, 85, 53),
    3: (35, 90, 54),
    4: (45, 91, 52),
    5: (52, 94, 50),
    6: (58, 90, 51),
    7: (65, 68, 51),
    8: (74, 51, 54),
    9: (170, 22, 57),
    10: (202, 54, 50),
    11: (211, 52, 51),
    12: (217, 48, 48),
    13: (251, 34, 47),
    14: (264, 40, 43),
}

SCORES = {
    1: Score.BAD,
    2: Score.BAD,
    3: Score.BAD,
    4: Score.BAD,
    5: Score.BAD,
    6: Score.GOOD,
    7: Score.EXCELLENT,
    8: Score.EXCELLENT,
    9: Score.GOOD,
    10: Score.BAD,
    11: Score.BAD,
    12: Score.BAD,
    13: Score.BAD,
    14: Score.BAD,
}


def ph_part() -> TablePart:
    return TablePart(PART_ID, LABEL, SCORES, COLORS, description=DESCRIPTION)
