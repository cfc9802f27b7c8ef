"""Tests for the command-line entry point."""

from __future__ import annotations

import json
from unittest.mock import AsyncMock, patch

import pytest

from lifedestiny.cli import build_parser, input_from_args, main
from lifedestiny.core.models import Gender, LifeAnalysis, LifeDestinyResult
from lifedestiny.integration.errors import HttpError
from lifedestiny.settings import Settings

ARGS = [
    "--gender",
    "female",
    "--birth-year",
    "1991",
    "--pillars",
    "辛未",
    "甲午",
    "丙子",
    "戊戌",
    "--start-age",
    "6",
    "--first-da-yun",
    "乙未",
]


@pytest.fixture
def env_settings():
    return Settings(_env_file=None, api_key="sk-env", api_base_url="https://env.example.com/v1", model_name="env-model")


@pytest.fixture
def mock_runtime(env_settings):
    """Patch settings, logging and the orchestrator used by main()."""
    with (
        patch("lifedestiny.cli.get_settings", return_value=env_settings),
        patch("lifedestiny.cli.configure_logging"),
        patch("lifedestiny.cli.RequestOrchestrator") as orchestrator_class,
    ):
        orchestrator_class.return_value.generate = AsyncMock()
        yield orchestrator_class


class TestInputFromArgs:
    def test_credentials_fall_back_to_settings(self, env_settings):
        args = build_parser().parse_args(ARGS)

        user_input = input_from_args(args, env_settings)

        assert user_input.api_key == "sk-env"
        assert user_input.api_base_url == "https://env.example.com/v1"
        assert user_input.model_name == "env-model"
        assert user_input.gender is Gender.FEMALE
        assert (user_input.year_pillar, user_input.hour_pillar) == ("辛未", "戊戌")
        assert user_input.start_age == "6"

    def test_flags_override_settings(self, env_settings):
        args = build_parser().parse_args([*ARGS, "--api-key", "sk-flag", "--base-url", "https://flag", "--model", ""])

        user_input = input_from_args(args, env_settings)

        assert user_input.api_key == "sk-flag"
        assert user_input.api_base_url == "https://flag"
        assert user_input.model_name == ""


class TestMain:
    def test_prints_result_json(self, mock_runtime, env_settings, capsys):
        mock_runtime.return_value.generate.return_value = LifeDestinyResult(
            chart_data=[{"age": 1}], analysis=LifeAnalysis(summary="平稳")
        )

        exit_code = main(ARGS)

        assert exit_code == 0
        mock_runtime.assert_called_once_with(timeout=env_settings.request_timeout)
        output = json.loads(capsys.readouterr().out)
        assert output["chartData"] == [{"age": 1}]
        assert output["analysis"]["summary"] == "平稳"

    def test_writes_output_file(self, mock_runtime, tmp_path):
        mock_runtime.return_value.generate.return_value = LifeDestinyResult(chart_data=[], analysis=LifeAnalysis())
        target = tmp_path / "result.json"

        assert main([*ARGS, "--output", str(target)]) == 0
        assert json.loads(target.read_text(encoding="utf-8"))["analysis"]["summary"] == "无摘要"

    def test_error_exit_code(self, mock_runtime, capsys):
        mock_runtime.return_value.generate.side_effect = HttpError(401, "bad key")

        exit_code = main(ARGS)

        assert exit_code == 1
        assert "401" in capsys.readouterr().err
