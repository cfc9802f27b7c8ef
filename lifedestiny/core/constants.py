"""Constants for the life destiny request flow.

The attempt budget and backoff delays are fixed; they are not exposed
through settings."""

from __future__ import annotations

# Used when the caller leaves the model name blank
DEFAULT_MODEL_NAME = "gemini-3-pro-preview"

# Retry policy
MAX_ATTEMPTS = 3
SERVICE_UNAVAILABLE_STATUS = 503
SERVICE_UNAVAILABLE_BACKOFF_SECONDS = 2.0  # Multiplied by the attempt number
NETWORK_RETRY_DELAY_SECONDS = 2.0

# Request body
RESPONSE_FORMAT = {"type": "json_object"}
TEMPERATURE = 0.7

# Heavenly stems by polarity (first character of a pillar)
YANG_STEMS = frozenset("甲丙戊庚壬")
YIN_STEMS = frozenset("乙丁己辛癸")

DEFAULT_START_AGE = 1

# Response defaults
DEFAULT_SCORE = 5
NO_SUMMARY_TEXT = "无摘要"
NOT_PROVIDED_TEXT = "无"
ANONYMOUS_NAME = "未提供"

# Number of raw content characters echoed back in parse errors
RAW_PREVIEW_LENGTH = 50

# Transport timeout per request, in seconds
DEFAULT_REQUEST_TIMEOUT_SECONDS = 120.0
