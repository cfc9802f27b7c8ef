"""Error taxonomy for the life analysis request flow.

Every error carries a structured ``kind`` so callers can branch on the
failure without inspecting message text. Messages are meant to be shown
to the end user as-is.
"""

from __future__ import annotations

from enum import Enum


class ErrorKind(Enum):
    """Failure categories surfaced to callers"""

    CONFIGURATION = "configuration"
    SERVICE_UNAVAILABLE = "service_unavailable"
    HTTP = "http"
    NETWORK = "network"
    EMPTY_RESPONSE = "empty_response"
    MALFORMED_RESPONSE = "malformed_response"
    MISSING_FIELD = "missing_field"
    CANCELLED = "cancelled"
    UNKNOWN = "unknown"


class LifeDestinyError(Exception):
    """Base class for all life analysis failures"""

    kind: ErrorKind = ErrorKind.UNKNOWN

    def __init__(self, message: str, *, status_code: int | None = None, attempts: int | None = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.attempts = attempts


class ConfigurationError(LifeDestinyError):
    """Missing or blank credentials"""

    kind = ErrorKind.CONFIGURATION


class ServiceUnavailableError(LifeDestinyError):
    """HTTP 503 on the last attempt of the budget"""

    kind = ErrorKind.SERVICE_UNAVAILABLE

    def __init__(self, body: str, attempts: int):
        super().__init__(
            f"API 请求失败 (503 Service Unavailable) - 已重试 {attempts} 次: {body}",
            status_code=503,
            attempts=attempts,
        )
        self.body = body


class HttpError(LifeDestinyError):
    """Any other non-success HTTP status"""

    kind = ErrorKind.HTTP

    def __init__(self, status_code: int, body: str):
        super().__init__(f"API 请求失败: {status_code} - {body}", status_code=status_code)
        self.body = body


class NetworkError(LifeDestinyError):
    """Transport failure before an HTTP status was received"""

    kind = ErrorKind.NETWORK


class EmptyResponseError(LifeDestinyError):
    """Reply carried no message content"""

    kind = ErrorKind.EMPTY_RESPONSE


class MalformedResponseError(LifeDestinyError):
    """Model content could not be parsed as JSON"""

    kind = ErrorKind.MALFORMED_RESPONSE

    def __init__(self, raw_preview: str):
        super().__init__(f"模型返回的数据格式无法解析。请重试。\n原始数据片段: {raw_preview}...")
        self.raw_preview = raw_preview


class MissingFieldError(LifeDestinyError):
    """Parsed reply lacks the chartPoints array"""

    kind = ErrorKind.MISSING_FIELD


class RequestCancelledError(LifeDestinyError):
    """Caller cancelled before the request completed"""

    kind = ErrorKind.CANCELLED


class UnknownError(LifeDestinyError):
    """Failure outside every other category"""

    kind = ErrorKind.UNKNOWN
