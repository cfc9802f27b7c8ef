"""Pillar metadata used to word the prompt.

Nothing here computes a calendar. The polarity of the year stem and the
subject's gender only decide which direction the prompt tells the model to
walk the Da Yun sequence.
"""

from __future__ import annotations

import re

from .constants import DEFAULT_START_AGE, YANG_STEMS, YIN_STEMS
from .models import DaYunDirection, Gender, StemPolarity

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


def get_stem_polarity(pillar: str | None) -> StemPolarity:
    """Classify the first character of a pillar as yang or yin.

    Empty or unrecognised input falls back to YANG.
    """
    if not pillar:
        return StemPolarity.YANG
    stripped = pillar.strip()
    if not stripped:
        return StemPolarity.YANG

    first_char = stripped[0]
    if first_char in YANG_STEMS:
        return StemPolarity.YANG
    if first_char in YIN_STEMS:
        return StemPolarity.YIN
    return StemPolarity.YANG


def is_forward(gender: Gender, year_polarity: StemPolarity) -> bool:
    """Yang-year males and yin-year females run forward."""
    if gender is Gender.MALE:
        return year_polarity is StemPolarity.YANG
    return year_polarity is StemPolarity.YIN


def resolve_direction(gender: Gender, year_polarity: StemPolarity) -> DaYunDirection:
    """Da Yun direction for a subject, from the polarity of the year stem."""
    if is_forward(gender, year_polarity):
        return DaYunDirection.FORWARD
    return DaYunDirection.BACKWARD


def parse_start_age(value: str | int | None) -> int:
    """Parse the starting age the way a lenient form field would.

    Leading digits are used ("8岁" -> 8). Non-numeric, empty, or zero input
    gives the default of 1.
    """
    if isinstance(value, int):
        return value or DEFAULT_START_AGE
    if not value:
        return DEFAULT_START_AGE

    match = _LEADING_INT.match(value)
    if not match:
        return DEFAULT_START_AGE
    return int(match.group(1)) or DEFAULT_START_AGE
