"""
Bounded poll-until-done helper shared by the scraper operations.
"""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Generic, TypeVar

from tenacity import (
    AsyncRetrying,
    RetryCallState,
    RetryError,
    retry_if_exception,
    retry_if_result,
    stop_after_attempt,
    wait_exponential,
    wait_fixed,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class PollPolicy:
    """How often and how long to poll."""

    interval: float = 5.0
    max_attempts: int = 20
    backoff: float = 1.0  # interval multiplier per attempt
    max_interval: float = 60.0

    def wait(self):
        if self.backoff == 1:
            return wait_fixed(self.interval)
        return wait_exponential(multiplier=self.interval, exp_base=self.backoff, max=self.max_interval)


class PollFailed(Exception):
    """The failure predicate matched; carries the offending status."""

    def __init__(self, status):
        super().__init__(f"Polling stopped on failure status: {status!r}")
        self.status = status


class PollExhausted(Exception):
    """max_attempts reached without a result."""

    def __init__(self, attempts: int):
        super().__init__(f"No result after {attempts} attempts")
        self.attempts = attempts


@dataclass
class Poller(Generic[T]):
    """
    Sleep-then-check loop with a fixed attempt budget, driven by tenacity.

    The first check happens one interval after ``run`` starts. Each attempt
    calls ``fetch_result`` and returns it when ``is_done`` accepts it;
    otherwise ``fetch_status`` (if given) is checked against ``is_failed``.
    Exceptions matching ``retry_on`` spend an attempt; a failure status
    stops polling at once with PollFailed.
    """

    fetch_result: Callable[[], Awaitable[T]]
    is_done: Callable[[T], bool]
    policy: PollPolicy
    fetch_status: Callable[[], Awaitable[object]] | None = None
    is_failed: Callable[[object], bool] = lambda status: False
    sleep: Callable[[float], Awaitable[None]] = asyncio.sleep
    retry_on: tuple[type[BaseException], ...] = (Exception,)
    label: str = "poll"

    async def _attempt(self) -> T:
        result = await self.fetch_result()
        if self.is_done(result):
            return result

        if self.fetch_status is not None:
            status = await self.fetch_status()
            if self.is_failed(status):
                raise PollFailed(status)
        return result

    def _retryable(self, exc: BaseException) -> bool:
        return isinstance(exc, self.retry_on) and not isinstance(exc, PollFailed)

    def _log_retry(self, state: RetryCallState) -> None:
        outcome = state.outcome
        if outcome is not None and outcome.failed:
            logger.warning(f"[{self.label}] attempt {state.attempt_number} errored: {outcome.exception()}")
        else:
            logger.debug(f"[{self.label}] attempt {state.attempt_number}: not ready")

    async def run(self) -> T:
        retrying = AsyncRetrying(
            stop=stop_after_attempt(self.policy.max_attempts),
            wait=self.policy.wait(),
            retry=retry_if_result(lambda result: not self.is_done(result)) | retry_if_exception(self._retryable),
            before_sleep=self._log_retry,
            sleep=self.sleep,
        )

        await self.sleep(self.policy.interval)
        try:
            result = await retrying(self._attempt)
        except RetryError as e:
            raise PollExhausted(e.last_attempt.attempt_number) from e

        logger.info(f"[{self.label}] done")
        return result
