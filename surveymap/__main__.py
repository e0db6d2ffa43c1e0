"""
Headless survey map: fetch one viewport and print its markers.

    python -m surveymap --bbox 51.4 -0.3 51.6 0.1
    python -m surveymap --survey quality --parts thames21Ph --rating excellent

Exits 1 when the survey endpoint gave no usable answer, 2 on bad input.
"""
from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

from .config import load_config
from .controller import SurveyMap
from .decay import TimeMode, TimeType
from .errors import SurveyMapError
from .geo.bounds import LatLngBounds
from .logger import setup_logging
from .render import MemorySink
from .surveys.ratings import RatingFilter, Score
from .surveys.registry import default_registry

log = logging.getLogger("surveymap")


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Survey observation map (headless)")
    parser.add_argument("--survey", default="quality", help="survey type to show")
    parser.add_argument(
        "--bbox", nargs=4, type=float, required=True,
        metavar=("SOUTH", "WEST", "NORTH", "EAST"),
        help="viewport bounds in degrees",
    )
    parser.add_argument("--parts", nargs="*", help="survey parts to combine (default: all)")
    parser.add_argument(
        "--rating", action="append", default=[],
        choices=[s.label for s in Score],
        help="only show points with this rating (repeatable)",
    )
    parser.add_argument("--config", type=Path, help="JSON config file")
    parser.add_argument("--no-decay", action="store_true", help="disable age fading")
    parser.add_argument("-v", "--verbose", action="store_true")
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    setup_logging(logging.DEBUG if args.verbose else logging.WARNING)

    try:
        cfg = load_config(args.config)
        registry = default_registry(cfg)
        sink = MemorySink()
        session = SurveyMap(
            registry,
            cfg,
            sink=sink,
            rating_filter=RatingFilter(Score[r.upper()] for r in args.rating),
            time_mode=TimeMode(TimeType.ALL if args.no_decay else TimeType.DECAYING),
            runner=lambda fn: fn(),
        )

        if args.parts:
            session.selection.set(args.survey, args.parts)
        else:
            session.toggle_survey_part(args.survey)

        session.set_viewport(LatLngBounds(*args.bbox))
        session.toggle_survey(args.survey)
    except (SurveyMapError, ValueError) as exc:
        log.error("%s", exc)
        return 2

    if not session.cache.regions(args.survey):
        log.warning("No data received for %s", args.survey)
        return 1

    for marker in sink.markers(args.survey):
        print(json.dumps(marker.as_dict()))
    return 0


if __name__ == "__main__":
    sys.exit(main())
