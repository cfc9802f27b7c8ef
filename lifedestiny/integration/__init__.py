"""Integration layer for the chat-completion endpoint.

Provides the request orchestrator, the error taxonomy and response parsing."""

from __future__ import annotations

from .errors import (
    ConfigurationError,
    EmptyResponseError,
    ErrorKind,
    HttpError,
    LifeDestinyError,
    MalformedResponseError,
    MissingFieldError,
    NetworkError,
    RequestCancelledError,
    ServiceUnavailableError,
    UnknownError,
)
from .orchestrator import RequestOrchestrator, generate_life_analysis, validate_credentials
from .response_parser import parse_completion

__all__ = [
    # Orchestrator
    "RequestOrchestrator",
    "generate_life_analysis",
    "parse_completion",
    "validate_credentials",
    # Errors
    "ConfigurationError",
    "EmptyResponseError",
    "ErrorKind",
    "HttpError",
    "LifeDestinyError",
    "MalformedResponseError",
    "MissingFieldError",
    "NetworkError",
    "RequestCancelledError",
    "ServiceUnavailableError",
    "UnknownError",
]
