"""Prompt templates and request payload construction."""

from __future__ import annotations

from .builder import build_request_payload, build_user_prompt
from .loader import clear_cache, format_prompt, load_prompt

__all__ = [
    "build_request_payload",
    "build_user_prompt",
    "clear_cache",
    "format_prompt",
    "load_prompt",
]
