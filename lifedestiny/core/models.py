"""Core domain models for life destiny analysis.

These models represent the inputs supplied by the caller, the request sent to
the chat-completion endpoint, and the normalized result handed back. None of
them outlive a single call."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from .constants import DEFAULT_SCORE, NO_SUMMARY_TEXT, NOT_PROVIDED_TEXT, RESPONSE_FORMAT, TEMPERATURE


class Gender(Enum):
    """Gender of the chart subject"""

    MALE = "male"
    FEMALE = "female"


class StemPolarity(Enum):
    """Yin/yang polarity of a heavenly stem"""

    YANG = "yang"
    YIN = "yin"

    @property
    def label(self) -> str:
        return "阳" if self is StemPolarity.YANG else "阴"


class DaYunDirection(Enum):
    """Order in which the Da Yun steps advance through the sixty-cycle"""

    FORWARD = "forward"
    BACKWARD = "backward"

    @property
    def label(self) -> str:
        return "顺行 (Forward)" if self is DaYunDirection.FORWARD else "逆行 (Backward)"


@dataclass(frozen=True)
class UserInput:
    """Birth-chart data and credentials supplied by the caller.

    Pillars are pre-computed strings such as "甲子". Only the credentials are
    checked before a request is made.
    """

    api_key: str
    api_base_url: str
    gender: Gender
    year_pillar: str
    month_pillar: str
    day_pillar: str
    hour_pillar: str
    start_age: str
    first_da_yun: str
    birth_year: str = ""
    name: str = ""
    model_name: str = ""


@dataclass(frozen=True)
class RequestPayload:
    """Chat-completion request derived from a UserInput"""

    model: str
    system_instruction: str
    user_prompt: str
    response_format: dict[str, str] = field(default_factory=lambda: dict(RESPONSE_FORMAT))
    temperature: float = TEMPERATURE

    def messages(self) -> list[dict[str, str]]:
        """Render the system and user messages in chat order."""
        return [
            {"role": "system", "content": self.system_instruction},
            {"role": "user", "content": self.user_prompt},
        ]

    def to_body(self) -> dict[str, Any]:
        """Render the JSON request body."""
        return {
            "model": self.model,
            "messages": self.messages(),
            "response_format": dict(self.response_format),
            "temperature": self.temperature,
        }


@dataclass
class LifeAnalysis:
    """Scored analysis report returned by the model"""

    bazi: list[str] = field(default_factory=list)
    summary: str = NO_SUMMARY_TEXT
    summary_score: float = DEFAULT_SCORE
    industry: str = NOT_PROVIDED_TEXT
    industry_score: float = DEFAULT_SCORE
    wealth: str = NOT_PROVIDED_TEXT
    wealth_score: float = DEFAULT_SCORE
    marriage: str = NOT_PROVIDED_TEXT
    marriage_score: float = DEFAULT_SCORE
    health: str = NOT_PROVIDED_TEXT
    health_score: float = DEFAULT_SCORE
    family: str = NOT_PROVIDED_TEXT
    family_score: float = DEFAULT_SCORE

    def to_dict(self) -> dict[str, Any]:
        return {
            "bazi": list(self.bazi),
            "summary": self.summary,
            "summaryScore": self.summary_score,
            "industry": self.industry,
            "industryScore": self.industry_score,
            "wealth": self.wealth,
            "wealthScore": self.wealth_score,
            "marriage": self.marriage,
            "marriageScore": self.marriage_score,
            "health": self.health,
            "healthScore": self.health_score,
            "family": self.family,
            "familyScore": self.family_score,
        }


@dataclass
class LifeDestinyResult:
    """Chart points plus the analysis report.

    chart_data is passed through exactly as the model produced it.
    """

    chart_data: list[Any]
    analysis: LifeAnalysis

    def to_dict(self) -> dict[str, Any]:
        """Render the caller-facing camelCase shape."""
        return {"chartData": list(self.chart_data), "analysis": self.analysis.to_dict()}
