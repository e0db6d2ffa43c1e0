"""
Survey API client.

Requests the observations of one survey type inside a viewport:

    GET {survey.url}?ne=<north>,<east>&sw=<south>,<west>&<static params>

and expects ``200`` with ``{"results": [<record>, ...]}``.  Anything else
is logged and reported as ``None`` so callers can tell "no usable answer"
apart from "this area has no observations" (an empty list).

Usage
-----
    results = fetch_observations(survey_type, viewport)
    if results is not None:
        store.add(survey_type.name, results)
"""
from __future__ import annotations

import logging
from typing import Dict, List, Optional

from ..geo.bounds import LatLngBounds
from ..surveys.registry import SurveyType
from . import fetch_json

log = logging.getLogger(__name__)


def build_params(survey_type: SurveyType, bounds: LatLngBounds) -> Dict[str, str]:
    """Viewport corners merged with the survey's static parameters."""
    params = bounds.query_params()
    params.update(survey_type.get_params)
    return params


def fetch_observations(
    survey_type: SurveyType,
    bounds: LatLngBounds,
    timeout: Optional[float] = None,
) -> Optional[List[dict]]:
    """Fetch raw observation records for *survey_type* within *bounds*.

    Returns the ``results`` list, or None when the request failed or the
    response did not have the expected shape.
    """
    params = build_params(survey_type, bounds)
    data = fetch_json(survey_type.url, params=params, timeout=timeout)
    if data is None:
        return None

    results = data.get("results") if isinstance(data, dict) else None
    if not isinstance(results, list):
        log.error("Unknown data received from %s (%s)", survey_type.url, type(data).__name__)
        return None

    log.info("%s: %d results for ne=%s sw=%s",
             survey_type.name, len(results), params["ne"], params["sw"])
    return results
