"""Core domain types and pillar metadata for life destiny analysis."""

from __future__ import annotations

from .models import (
    DaYunDirection,
    Gender,
    LifeAnalysis,
    LifeDestinyResult,
    RequestPayload,
    StemPolarity,
    UserInput,
)
from .pillars import get_stem_polarity, is_forward, parse_start_age, resolve_direction

__all__ = [
    # Models
    "DaYunDirection",
    "Gender",
    "LifeAnalysis",
    "LifeDestinyResult",
    "RequestPayload",
    "StemPolarity",
    "UserInput",
    # Pillar metadata
    "get_stem_polarity",
    "is_forward",
    "parse_start_age",
    "resolve_direction",
]
