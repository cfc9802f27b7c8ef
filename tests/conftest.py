"""
Root test configuration and fixtures for the life destiny project.

Provides sample inputs and builders for SDK objects so unit tests never
touch the network:
- completions: real ChatCompletion objects with chosen content
- status/connection errors: the exceptions the OpenAI SDK raises
- mock clients: stand-ins returned by an injected client factory

Note: sys.path manipulation is handled here to ensure imports work correctly.
"""

from __future__ import annotations

import json
import sys
from pathlib import Path
from unittest.mock import AsyncMock, Mock

import httpx
import openai
import pytest
from openai.types.chat import ChatCompletion

# Add project root to path to allow imports
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from lifedestiny.core.models import Gender, UserInput  # noqa: E402
from lifedestiny.prompts.loader import clear_cache  # noqa: E402

CHAT_URL = "https://api.example.com/v1/chat/completions"


def create_completion(content: str | None) -> ChatCompletion:
    """Build a ChatCompletion whose first choice carries the given content."""
    return ChatCompletion.model_validate(
        {
            "id": "chatcmpl-test",
            "object": "chat.completion",
            "created": 1767225600,
            "model": "test-model",
            "choices": [
                {
                    "index": 0,
                    "finish_reason": "stop",
                    "message": {"role": "assistant", "content": content},
                }
            ],
        }
    )


def create_status_error(status_code: int, body: str) -> openai.APIStatusError:
    """Build the error the SDK raises for a non-2xx response."""
    request = httpx.Request("POST", CHAT_URL)
    response = httpx.Response(status_code, request=request, text=body)
    return openai.APIStatusError(f"Error code: {status_code}", response=response, body=None)


def create_connection_error() -> openai.APIConnectionError:
    """Build the error the SDK raises when the transport fails."""
    return openai.APIConnectionError(request=httpx.Request("POST", CHAT_URL))


def create_mock_client(side_effect: object) -> Mock:
    """Mock AsyncOpenAI client whose completions.create follows side_effect."""
    client = Mock()
    client.chat.completions.create = AsyncMock(side_effect=side_effect)
    client.close = AsyncMock()
    return client


@pytest.fixture
def make_completion():
    return create_completion


@pytest.fixture
def make_status_error():
    return create_status_error


@pytest.fixture
def make_connection_error():
    return create_connection_error


@pytest.fixture
def make_mock_client():
    return create_mock_client


@pytest.fixture
def sample_user_input() -> UserInput:
    """Male subject born in a 庚 (yang) year."""
    return UserInput(
        api_key="sk-test",
        api_base_url="https://api.example.com/v1",
        model_name="test-model",
        name="张三",
        gender=Gender.MALE,
        birth_year="1990",
        year_pillar="庚午",
        month_pillar="辛巳",
        day_pillar="甲子",
        hour_pillar="丙寅",
        start_age="8",
        first_da_yun="壬午",
    )


@pytest.fixture
def valid_payload() -> dict:
    """A complete reply as the system instruction asks for it."""
    return {
        "bazi": ["庚午", "辛巳", "甲子", "丙寅"],
        "chartPoints": [
            {
                "age": 1,
                "year": 1990,
                "ganZhi": "庚午",
                "daYun": "童限",
                "open": 50,
                "close": 55,
                "high": 60,
                "low": 45,
                "score": 55,
                "reason": "童年平顺",
            }
        ],
        "summary": "身弱用印",
        "summaryScore": 7,
        "industry": "宜从事文教",
        "industryScore": 6,
        "wealth": "中年渐丰",
        "wealthScore": 7,
        "marriage": "晚婚为宜",
        "marriageScore": 6,
        "health": "注意肝胆",
        "healthScore": 8,
        "family": "父母得力",
        "familyScore": 7,
    }


@pytest.fixture
def valid_completion(valid_payload) -> ChatCompletion:
    return create_completion(json.dumps(valid_payload, ensure_ascii=False))


@pytest.fixture(autouse=True)
def fresh_prompt_cache():
    """Reload prompt templates for every test."""
    clear_cache()
    yield
    clear_cache()
