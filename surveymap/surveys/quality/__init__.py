"""Water quality survey."""
from __future__ import annotations

from ..registry import SurveyType
from .ph import ph_part

NAME = "quality"
LABEL = "Water Quality"


def build_quality_survey(api_url: str) -> SurveyType:
    return SurveyType(
        name=NAME,
        label=LABEL,
        url=f"{api_url.rstrip('/')}/{NAME}",
        parts=[ph_part()],
    )
