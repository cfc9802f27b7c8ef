"""Tests for core models."""

from __future__ import annotations

import dataclasses

import pytest

from lifedestiny.core.models import LifeAnalysis, LifeDestinyResult, RequestPayload


def test_user_input_is_immutable(sample_user_input):
    with pytest.raises(dataclasses.FrozenInstanceError):
        sample_user_input.api_key = "other"  # type: ignore[misc]


def test_request_payload_body_shape():
    payload = RequestPayload(model="m", system_instruction="sys", user_prompt="user")

    assert payload.to_body() == {
        "model": "m",
        "messages": [
            {"role": "system", "content": "sys"},
            {"role": "user", "content": "user"},
        ],
        "response_format": {"type": "json_object"},
        "temperature": 0.7,
    }


def test_analysis_defaults():
    analysis = LifeAnalysis()

    assert analysis.bazi == []
    assert analysis.summary == "无摘要"
    assert analysis.industry == "无"
    assert analysis.family_score == 5


def test_result_to_dict_uses_camel_case():
    result = LifeDestinyResult(chart_data=[{"age": 1}], analysis=LifeAnalysis(summary="好", summary_score=9))

    rendered = result.to_dict()

    assert rendered["chartData"] == [{"age": 1}]
    assert rendered["analysis"]["summary"] == "好"
    assert rendered["analysis"]["summaryScore"] == 9
    assert set(rendered["analysis"]) == {
        "bazi",
        "summary",
        "summaryScore",
        "industry",
        "industryScore",
        "wealth",
        "wealthScore",
        "marriage",
        "marriageScore",
        "health",
        "healthScore",
        "family",
        "familyScore",
    }
