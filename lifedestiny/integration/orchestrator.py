"""Request orchestrator - validate, request with retries, normalize.

Sends the life analysis prompt to an OpenAI-compatible chat-completion
endpoint through the OpenAI SDK. The SDK's own retries are disabled so the
retry policy below is the only one in effect:

- 503: retry after 2s * attempt number
- transport failure: retry after a fixed 2s
- any other non-2xx: fail immediately

At most MAX_ATTEMPTS requests are sent per call.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from enum import Enum
from typing import Any

from openai import APIConnectionError, APIError, APIStatusError, AsyncOpenAI

from ..core.constants import (
    DEFAULT_MODEL_NAME,
    DEFAULT_REQUEST_TIMEOUT_SECONDS,
    MAX_ATTEMPTS,
    NETWORK_RETRY_DELAY_SECONDS,
    SERVICE_UNAVAILABLE_BACKOFF_SECONDS,
    SERVICE_UNAVAILABLE_STATUS,
)
from ..core.models import LifeDestinyResult, RequestPayload, UserInput
from ..logging_config import TRACE
from ..prompts.builder import build_request_payload
from .errors import (
    ConfigurationError,
    HttpError,
    LifeDestinyError,
    NetworkError,
    RequestCancelledError,
    ServiceUnavailableError,
    UnknownError,
)
from .response_parser import parse_completion

logger = logging.getLogger(__name__)

ClientFactory = Callable[..., Any]
SleepFunc = Callable[[float], Awaitable[Any]]


class AttemptState(Enum):
    """Outcome of a single request attempt"""

    SUCCESS = "success"
    RETRYABLE_FAILURE = "retryable_failure"
    FATAL_FAILURE = "fatal_failure"


@dataclass
class AttemptOutcome:
    """Result of one attempt, with the wait before the next one"""

    state: AttemptState
    completion: Any = None
    error: LifeDestinyError | None = None
    retry_delay: float = 0.0


def validate_credentials(user_input: UserInput) -> tuple[str, str, str]:
    """Check credentials and normalize them for the request.

    Returns:
        (api_key, base_url, model) with trailing slashes removed from the
        base URL and the default model substituted for a blank one.

    Raises:
        ConfigurationError: If the API key or base URL is blank.
    """
    api_key = (user_input.api_key or "").strip()
    if not api_key:
        raise ConfigurationError("请在表单中填写有效的 API Key")

    base_url = (user_input.api_base_url or "").strip()
    if not base_url:
        raise ConfigurationError("请在表单中填写有效的 API Base URL")

    model = (user_input.model_name or "").strip() or DEFAULT_MODEL_NAME
    return api_key, base_url.rstrip("/"), model


def default_client_factory(*, api_key: str, base_url: str, timeout: float) -> AsyncOpenAI:
    """Create an SDK client with built-in retries turned off."""
    return AsyncOpenAI(api_key=api_key, base_url=base_url, timeout=timeout, max_retries=0)


class RequestOrchestrator:
    """Runs one life analysis request from UserInput to LifeDestinyResult.

    Holds no per-call state, so a single instance can serve concurrent calls.
    """

    def __init__(
        self,
        timeout: float = DEFAULT_REQUEST_TIMEOUT_SECONDS,
        client_factory: ClientFactory | None = None,
        sleep: SleepFunc | None = None,
    ):
        """Initialize the orchestrator.

        Args:
            timeout: Per-request transport timeout in seconds
            client_factory: Builds the chat client; keyword args api_key, base_url, timeout
            sleep: Coroutine used for backoff waits (defaults to asyncio.sleep)
        """
        if timeout <= 0:
            raise ValueError("timeout must be positive")
        self.timeout = timeout
        self._client_factory = client_factory or default_client_factory
        self._sleep = sleep or asyncio.sleep

    async def generate(
        self,
        user_input: UserInput,
        *,
        cancel_event: asyncio.Event | None = None,
    ) -> LifeDestinyResult:
        """Generate the life chart and analysis for a subject.

        Args:
            user_input: Chart data and credentials
            cancel_event: Optional event; once set, the call stops before the
                next attempt or during a backoff wait

        Returns:
            Parsed result

        Raises:
            LifeDestinyError: Any failure, with a message suitable for display
        """
        api_key, base_url, model = validate_credentials(user_input)
        payload = build_request_payload(user_input, model)

        logger.info(f"Requesting life analysis from {base_url} with model {model}")
        logger.log(TRACE, f"User prompt: {payload.user_prompt}")

        try:
            completion = await self._execute(payload, api_key, base_url, cancel_event)
            result = parse_completion(completion)
        except LifeDestinyError as e:
            logger.error(f"Life analysis failed ({e.kind.value}): {e}")
            raise

        logger.info(f"Received {len(result.chart_data)} chart points")
        return result

    async def _execute(
        self,
        payload: RequestPayload,
        api_key: str,
        base_url: str,
        cancel_event: asyncio.Event | None,
    ) -> Any:
        """Run the attempt loop and return the successful completion."""
        client = self._client_factory(api_key=api_key, base_url=base_url, timeout=self.timeout)
        completion: Any = None
        try:
            attempt = 0
            while attempt < MAX_ATTEMPTS:
                self._check_cancelled(cancel_event)
                attempt += 1
                outcome = await self._attempt(client, payload, attempt)

                if outcome.state is AttemptState.SUCCESS:
                    completion = outcome.completion
                    break

                error = outcome.error or UnknownError("API 请求发生未知错误")
                if outcome.state is AttemptState.FATAL_FAILURE:
                    raise error
                if attempt >= MAX_ATTEMPTS:
                    raise self._exhausted(error, attempt)

                logger.warning(
                    f"Attempt {attempt} failed ({error.kind.value}): {error}. "
                    f"Retrying in {outcome.retry_delay:g}s..."
                )
                await self._wait(outcome.retry_delay, cancel_event)
        finally:
            await client.close()

        if completion is None:
            raise UnknownError("API 请求发生未知错误")
        return completion

    async def _attempt(self, client: Any, payload: RequestPayload, attempt: int) -> AttemptOutcome:
        """Send one request and classify the outcome."""
        try:
            completion = await client.chat.completions.create(**payload.to_body())
        except APIStatusError as e:
            body = e.response.text
            if e.status_code == SERVICE_UNAVAILABLE_STATUS:
                return AttemptOutcome(
                    state=AttemptState.RETRYABLE_FAILURE,
                    error=HttpError(e.status_code, body),
                    retry_delay=SERVICE_UNAVAILABLE_BACKOFF_SECONDS * attempt,
                )
            return AttemptOutcome(state=AttemptState.FATAL_FAILURE, error=HttpError(e.status_code, body))
        except APIConnectionError as e:
            return AttemptOutcome(
                state=AttemptState.RETRYABLE_FAILURE,
                error=NetworkError(f"网络请求失败: {e}", attempts=attempt),
                retry_delay=NETWORK_RETRY_DELAY_SECONDS,
            )
        except (APIError, ValueError) as e:
            # Includes a 2xx reply whose body is not valid JSON
            return AttemptOutcome(
                state=AttemptState.FATAL_FAILURE,
                error=UnknownError(f"API 返回了无法识别的响应: {e}", attempts=attempt),
            )

        return AttemptOutcome(state=AttemptState.SUCCESS, completion=completion)

    @staticmethod
    def _exhausted(error: LifeDestinyError, attempts: int) -> LifeDestinyError:
        """Error to raise once the last retryable attempt has failed."""
        if isinstance(error, HttpError) and error.status_code == SERVICE_UNAVAILABLE_STATUS:
            return ServiceUnavailableError(error.body, attempts=attempts)
        return error

    async def _wait(self, delay: float, cancel_event: asyncio.Event | None) -> None:
        """Back off before the next attempt, waking early on cancellation."""
        if cancel_event is None:
            await self._sleep(delay)
            return

        sleep_task = asyncio.ensure_future(self._sleep(delay))
        cancel_task = asyncio.ensure_future(cancel_event.wait())
        try:
            done, _ = await asyncio.wait({sleep_task, cancel_task}, return_when=asyncio.FIRST_COMPLETED)
        finally:
            for task in (sleep_task, cancel_task):
                task.cancel()
            await asyncio.gather(sleep_task, cancel_task, return_exceptions=True)

        if cancel_event.is_set():
            raise RequestCancelledError("请求已取消")
        if sleep_task in done:
            # Surface a failure from the injected sleep
            sleep_task.result()

    @staticmethod
    def _check_cancelled(cancel_event: asyncio.Event | None) -> None:
        if cancel_event is not None and cancel_event.is_set():
            raise RequestCancelledError("请求已取消")


async def generate_life_analysis(
    user_input: UserInput,
    *,
    cancel_event: asyncio.Event | None = None,
    timeout: float | None = None,
) -> LifeDestinyResult:
    """Generate a life analysis with the default client.

    The request timeout defaults to the configured LIFE_DESTINY_REQUEST_TIMEOUT.
    """
    if timeout is None:
        from ..settings import get_settings

        timeout = get_settings().request_timeout
    return await RequestOrchestrator(timeout=timeout).generate(user_input, cancel_event=cancel_event)
