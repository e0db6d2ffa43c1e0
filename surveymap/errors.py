"""Exception types raised by surveymap."""
from __future__ import annotations


class SurveyMapError(Exception):
    """Base class for all surveymap errors."""


class UnknownSurveyError(SurveyMapError, KeyError):
    """A survey type identifier is not registered."""

    def __init__(self, survey: str):
        super().__init__(survey)
        self.survey = survey

    def __str__(self) -> str:
        return f"Unknown survey {self.survey}"


class UnknownSurveyPartError(SurveyMapError, KeyError):
    """A survey part identifier does not belong to its survey type."""

    def __init__(self, survey: str, part: str):
        super().__init__(part)
        self.survey = survey
        self.part = part

    def __str__(self) -> str:
        return f"Unknown part {self.part} for survey {self.survey}"


class ConfigError(SurveyMapError, ValueError):
    """Configuration file or environment override is invalid."""
