"""Resilient Fetch — drop-in request function with per-attempt timeout and bounded retry.

Invariants:
    - At most max_retries + 1 attempts per logical call; attempts strictly sequential
    - Every attempt has its own deadline (timeout_seconds); the clock resets on retry
    - A 2xx/3xx response is returned at once and never retried
    - Retryable non-ok response + budget left: closed unread, next attempt starts immediately
    - Transient error + budget left: fixed retry_delay_ms sleep, then next attempt
    - Non-transient errors propagate on the first attempt without spending budget
    - No state shared between calls (budget, deadline and attempt live in the call frame)

Design Decisions:
    - Wrapper over the raw httpx client: call sites use fetch(url, **options) exactly
      like client.request and never see retries
    - Only 5xx, 408 and 429 are retried by default; 4xx answers are deterministic
      (retry_client_errors=True restores retry-on-any-non-ok)
    - Application errors inside a 2xx body are not this layer's concern
    - sleep is injectable so tests can drive a fake clock
"""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass

import httpx

from seminary_site.core.error_messages import TRANSIENT_ERRORS

logger = logging.getLogger(__name__)

MAX_RETRIES = 3
TIMEOUT_SECONDS = 15.0
RETRY_DELAY_MS = 1000

_RETRYABLE_CLIENT_STATUSES = frozenset({408, 429})


@dataclass(frozen=True)
class FetchAttempt:
    """One outbound request attempt within a logical call."""
    method: str
    url: str
    index: int
    retries_left: int
    deadline: float

    def log_extra(self) -> dict:
        return {
            "method": self.method,
            "url": self.url,
            "attempt": self.index + 1,
            "retries_left": self.retries_left,
        }


class ResilientFetch:
    """Wraps an httpx.AsyncClient request with timeout and bounded retry."""

    def __init__(
        self,
        client: httpx.AsyncClient,
        max_retries: int = MAX_RETRIES,
        timeout_seconds: float = TIMEOUT_SECONDS,
        retry_delay_ms: int = RETRY_DELAY_MS,
        retry_client_errors: bool = False,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        self.client = client
        self.max_retries = max_retries
        self.timeout_seconds = timeout_seconds
        self.retry_delay_ms = retry_delay_ms
        self.retry_client_errors = retry_client_errors
        self._sleep = sleep

    async def __call__(
        self, url: str, method: str = "GET", **options,
    ) -> httpx.Response:
        """Send one logical request, retrying transient failures."""
        loop = asyncio.get_running_loop()
        retries_left = self.max_retries
        index = 0
        while True:
            attempt = FetchAttempt(
                method=method, url=str(url), index=index,
                retries_left=retries_left,
                deadline=loop.time() + self.timeout_seconds,
            )
            try:
                response = await self._send(attempt, options)
            except TRANSIENT_ERRORS as e:
                if retries_left <= 0:
                    logger.error(
                        f"Fetch failed after {index + 1} attempts: {e!r}",
                        extra=attempt.log_extra(),
                    )
                    raise
                logger.warning(
                    f"Fetch failed, retrying... {retries_left} retries left: {e!r}",
                    extra=attempt.log_extra(),
                )
                await self._sleep(self.retry_delay_ms / 1000)
                retries_left -= 1
                index += 1
                continue

            if not response.is_error:
                return response
            if retries_left > 0 and self._is_retryable_status(response.status_code):
                logger.warning(
                    f"Retrying fetch, {retries_left} retries left",
                    extra={**attempt.log_extra(), "status_code": response.status_code},
                )
                await response.aclose()
                retries_left -= 1
                index += 1
                continue
            return response

    async def _send(
        self, attempt: FetchAttempt, options: dict,
    ) -> httpx.Response:
        """Run a single attempt; the deadline cancels the in-flight request."""
        remaining = attempt.deadline - asyncio.get_running_loop().time()
        try:
            return await asyncio.wait_for(
                self.client.request(attempt.method, attempt.url, **options),
                timeout=max(0.0, remaining),
            )
        except asyncio.TimeoutError as e:
            raise httpx.TimeoutException(
                f"Request exceeded {self.timeout_seconds}s deadline",
                request=self.client.build_request(attempt.method, attempt.url),
            ) from e

    def _is_retryable_status(self, status_code: int) -> bool:
        if status_code >= 500:
            return True
        if self.retry_client_errors:
            return True
        return status_code in _RETRYABLE_CLIENT_STATUSES
