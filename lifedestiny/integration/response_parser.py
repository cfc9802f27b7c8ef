"""Normalize a chat-completion reply into a LifeDestinyResult.

Models do not always honour json_object mode: some wrap the reply in
Markdown fences or add commentary around it. Parsing runs as separate
stages so each can be exercised on its own:

    extract_message_content -> strip_code_fences -> slice_json_object
    -> parse_json_payload -> validate_payload -> to_result
"""

from __future__ import annotations

import json
import logging
import re
from typing import Any

from ..core.constants import RAW_PREVIEW_LENGTH
from ..core.models import LifeDestinyResult
from .ai_schemas import AILifeDestinyResponse
from .errors import EmptyResponseError, MalformedResponseError, MissingFieldError

logger = logging.getLogger(__name__)

_JSON_FENCE = re.compile(r"```json", re.IGNORECASE)
_FENCE = "```"


def extract_message_content(completion: Any) -> str:
    """Return choices[0].message.content from a completion.

    Accepts the SDK's ChatCompletion object or a plain dict envelope.

    Raises:
        EmptyResponseError: If there is no content to parse.
    """
    if isinstance(completion, dict):
        choices = completion.get("choices") or []
        message = choices[0].get("message") if choices and isinstance(choices[0], dict) else None
        content = message.get("content") if isinstance(message, dict) else None
    else:
        choices = getattr(completion, "choices", None) or []
        message = getattr(choices[0], "message", None) if choices else None
        content = getattr(message, "content", None) if message is not None else None

    if not content:
        raise EmptyResponseError("模型未返回任何内容。")
    return str(content)


def strip_code_fences(content: str) -> str:
    """Remove ```json and ``` markers anywhere in the text."""
    return _JSON_FENCE.sub("", content).replace(_FENCE, "")


def slice_json_object(content: str) -> str:
    """Cut the text down to the outermost {...} span.

    Left unchanged unless both braces exist and the last '}' follows the
    first '{'.
    """
    first_brace = content.find("{")
    last_brace = content.rfind("}")
    if first_brace != -1 and last_brace != -1 and last_brace > first_brace:
        return content[first_brace : last_brace + 1]
    return content


def parse_json_payload(text: str, raw_content: str) -> Any:
    """Parse JSON text.

    Args:
        text: Cleaned text to parse
        raw_content: Content as the model sent it, echoed in the error

    Raises:
        MalformedResponseError: If the text is not valid JSON.
    """
    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        logger.error(f"JSON parse error ({e}). Raw content: {raw_content}")
        raise MalformedResponseError(raw_content[:RAW_PREVIEW_LENGTH]) from e


def validate_payload(data: Any) -> dict[str, Any]:
    """Require an object with a chartPoints array.

    Raises:
        MissingFieldError: If chartPoints is missing or not a list.
    """
    if not isinstance(data, dict) or not isinstance(data.get("chartPoints"), list):
        raise MissingFieldError("模型返回的数据缺少关键字段 chartPoints。")
    return data


def to_result(data: dict[str, Any]) -> LifeDestinyResult:
    """Map a validated payload onto the result, filling defaults."""
    return AILifeDestinyResponse.model_validate(data).to_result()


def parse_life_destiny_content(raw_content: str) -> LifeDestinyResult:
    """Run the text stages of the pipeline on message content."""
    cleaned = slice_json_object(strip_code_fences(raw_content))
    data = parse_json_payload(cleaned, raw_content)
    return to_result(validate_payload(data))


def parse_completion(completion: Any) -> LifeDestinyResult:
    """Run the full pipeline on a completion envelope."""
    return parse_life_destiny_content(extract_message_content(completion))
