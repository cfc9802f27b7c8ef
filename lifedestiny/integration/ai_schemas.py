"""Pydantic schema for the model's JSON reply.

The endpoint is only asked for a JSON object (response_format=json_object),
so nothing constrains the shape server-side. Every field except chartPoints
is optional and falls back to a placeholder. Falsy values (empty strings,
null, 0) count as absent.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..core.constants import DEFAULT_SCORE, NO_SUMMARY_TEXT, NOT_PROVIDED_TEXT
from ..core.models import LifeAnalysis, LifeDestinyResult

_TEXT_FIELDS = ("industry", "wealth", "marriage", "health", "family")
_SCORE_FIELDS = (
    "summaryScore",
    "industryScore",
    "wealthScore",
    "marriageScore",
    "healthScore",
    "familyScore",
)


class AILifeDestinyResponse(BaseModel):
    """Life chart and scored analysis as produced by the model."""

    model_config = ConfigDict(extra="allow")

    chartPoints: list[Any]
    """One entry per year of age. Passed through without inspection."""

    bazi: list[Any] = Field(default_factory=list)

    summary: str = NO_SUMMARY_TEXT
    summaryScore: float = DEFAULT_SCORE
    industry: str = NOT_PROVIDED_TEXT
    industryScore: float = DEFAULT_SCORE
    wealth: str = NOT_PROVIDED_TEXT
    wealthScore: float = DEFAULT_SCORE
    marriage: str = NOT_PROVIDED_TEXT
    marriageScore: float = DEFAULT_SCORE
    health: str = NOT_PROVIDED_TEXT
    healthScore: float = DEFAULT_SCORE
    family: str = NOT_PROVIDED_TEXT
    familyScore: float = DEFAULT_SCORE

    @field_validator("bazi", mode="before")
    @classmethod
    def _default_bazi(cls, v: Any) -> Any:
        return v if isinstance(v, list) and v else []

    @field_validator("summary", mode="before")
    @classmethod
    def _default_summary(cls, v: Any) -> Any:
        return str(v) if v else NO_SUMMARY_TEXT

    @field_validator(*_TEXT_FIELDS, mode="before")
    @classmethod
    def _default_text(cls, v: Any) -> Any:
        return str(v) if v else NOT_PROVIDED_TEXT

    @field_validator(*_SCORE_FIELDS, mode="before")
    @classmethod
    def _default_score(cls, v: Any) -> Any:
        if isinstance(v, bool) or not v:
            return DEFAULT_SCORE
        try:
            return float(v)
        except (TypeError, ValueError):
            return DEFAULT_SCORE

    def to_result(self) -> LifeDestinyResult:
        """Convert to the caller-facing result."""
        return LifeDestinyResult(
            chart_data=list(self.chartPoints),
            analysis=LifeAnalysis(
                bazi=[str(pillar) for pillar in self.bazi],
                summary=self.summary,
                summary_score=_as_number(self.summaryScore),
                industry=self.industry,
                industry_score=_as_number(self.industryScore),
                wealth=self.wealth,
                wealth_score=_as_number(self.wealthScore),
                marriage=self.marriage,
                marriage_score=_as_number(self.marriageScore),
                health=self.health,
                health_score=_as_number(self.healthScore),
                family=self.family,
                family_score=_as_number(self.familyScore),
            ),
        )


def _as_number(value: float) -> float:
    """Whole scores come back as ints (7.0 -> 7)."""
    return int(value) if float(value).is_integer() else value
