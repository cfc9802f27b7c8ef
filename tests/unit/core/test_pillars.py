"""Tests for stem polarity, Da Yun direction and starting-age parsing."""

from __future__ import annotations

import pytest

from lifedestiny.core.models import DaYunDirection, Gender, StemPolarity
from lifedestiny.core.pillars import get_stem_polarity, is_forward, parse_start_age, resolve_direction


class TestStemPolarity:
    @pytest.mark.parametrize("pillar", ["甲子", "丙寅", "戊辰", "庚午", "壬申"])
    def test_yang_stems(self, pillar):
        assert get_stem_polarity(pillar) is StemPolarity.YANG

    @pytest.mark.parametrize("pillar", ["乙丑", "丁卯", "己巳", "辛未", "癸酉"])
    def test_yin_stems(self, pillar):
        assert get_stem_polarity(pillar) is StemPolarity.YIN

    def test_empty_defaults_to_yang(self):
        assert get_stem_polarity("") is StemPolarity.YANG
        assert get_stem_polarity(None) is StemPolarity.YANG
        assert get_stem_polarity("   ") is StemPolarity.YANG

    def test_unrecognized_character_falls_back_to_yang(self):
        assert get_stem_polarity("子丑") is StemPolarity.YANG
        assert get_stem_polarity("abc") is StemPolarity.YANG

    def test_leading_whitespace_is_ignored(self):
        assert get_stem_polarity("  乙丑") is StemPolarity.YIN


class TestDirection:
    @pytest.mark.parametrize(
        ("gender", "year_pillar", "expected"),
        [
            (Gender.MALE, "甲子", DaYunDirection.FORWARD),
            (Gender.MALE, "乙丑", DaYunDirection.BACKWARD),
            (Gender.FEMALE, "乙丑", DaYunDirection.FORWARD),
            (Gender.FEMALE, "甲子", DaYunDirection.BACKWARD),
        ],
    )
    def test_direction_by_gender_and_year_stem(self, gender, year_pillar, expected):
        assert resolve_direction(gender, get_stem_polarity(year_pillar)) is expected

    def test_malformed_year_pillar_treated_as_yang(self):
        assert resolve_direction(Gender.MALE, get_stem_polarity("")) is DaYunDirection.FORWARD
        assert resolve_direction(Gender.FEMALE, get_stem_polarity("??")) is DaYunDirection.BACKWARD

    def test_direction_from_polarity(self):
        assert resolve_direction(Gender.MALE, StemPolarity.YIN) is DaYunDirection.BACKWARD
        assert resolve_direction(Gender.FEMALE, StemPolarity.YIN) is DaYunDirection.FORWARD

    def test_is_forward(self):
        assert is_forward(Gender.MALE, StemPolarity.YANG)
        assert not is_forward(Gender.MALE, StemPolarity.YIN)
        assert is_forward(Gender.FEMALE, StemPolarity.YIN)
        assert not is_forward(Gender.FEMALE, StemPolarity.YANG)


class TestParseStartAge:
    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            ("8", 8),
            (" 12 ", 12),
            ("8岁", 8),
            ("abc", 1),
            ("", 1),
            (None, 1),
            ("0", 1),
            (7, 7),
        ],
    )
    def test_parse(self, value, expected):
        assert parse_start_age(value) == expected
