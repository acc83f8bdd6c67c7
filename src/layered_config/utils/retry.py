"""Retry state machine and retry loop for remote configuration fetches."""
import asyncio
import logging
import math
from typing import Awaitable, Callable, Optional, Tuple, Type, TypeVar

from src.layered_config.exceptions import RetryExhaustedError


logger = logging.getLogger(__name__)

T = TypeVar("T")

DEFAULT_INITIAL_INTERVAL_MS = 1000
DEFAULT_MAX_INTERVAL_MS = 1500
DEFAULT_MAX_ATTEMPTS = 6
DEFAULT_MULTIPLIER = 1.1


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


class RetryState:
    """Tracks attempts and back-off interval for one retry sequence.

    States: idle (``active`` False, no attempts), active (retrying) and
    exhausted. Exhaustion resets the state to idle before raising, so a
    state object can be reused for a fresh sequence.

    ``max_attempts`` counts every fetch, including the first one made
    before any retry is registered. With ``max_attempts=3`` the first two
    ``register_retry()`` calls authorize attempts 2 and 3 and the third
    call raises.

    Intervals are in milliseconds. The first retry waits
    ``initial_interval``; each later one multiplies the previous interval
    by ``multiplier``, rounds half-up and clamps to ``max_interval``.

    Args:
        max_attempts: Total fetch attempts allowed
        max_interval: Upper bound for the back-off interval (ms)
        initial_interval: Interval before the first retry (ms)
        multiplier: Growth factor between retries
    """

    def __init__(
        self,
        max_attempts: Optional[int] = None,
        max_interval: Optional[int] = None,
        initial_interval: Optional[int] = None,
        multiplier: Optional[float] = None,
    ):
        self.max_attempts = max_attempts or DEFAULT_MAX_ATTEMPTS
        self.max_interval = max_interval or DEFAULT_MAX_INTERVAL_MS
        self.initial_interval = initial_interval or DEFAULT_INITIAL_INTERVAL_MS
        self.multiplier = multiplier or DEFAULT_MULTIPLIER

        self.active = False
        self.attempts = 0
        self.current_interval = 0

    def register_retry(self) -> int:
        """Record one more retry and compute its back-off interval.

        Returns:
            Interval to wait before the retry (ms)

        Raises:
            RetryExhaustedError: If the retry would exceed ``max_attempts``;
                the state is reset first
        """
        if self.attempts + 1 >= self.max_attempts:
            attempts = self.attempts + 1
            self.reset()
            raise RetryExhaustedError(attempts=attempts)

        if self.attempts == 0:
            self.active = True
            self.current_interval = self.initial_interval
        else:
            next_interval = _round_half_up(self.current_interval * self.multiplier)
            self.current_interval = min(next_interval, self.max_interval)

        self.attempts += 1
        return self.current_interval

    def reset(self) -> None:
        """Return to idle."""
        self.active = False
        self.attempts = 0
        self.current_interval = 0


async def retry_with_state(
    operation: Callable[[], Awaitable[T]],
    state: RetryState,
    sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    retry_on: Tuple[Type[Exception], ...] = (Exception,),
) -> T:
    """Re-run a failed operation until it succeeds or retries run out.

    Call this after the first attempt has already failed. Each iteration
    registers a retry, waits the state's current interval and invokes the
    operation again. Attempts never overlap.

    Args:
        operation: Zero-argument coroutine factory to retry
        state: Retry state driving attempts and back-off
        sleep: Awaitable sleep taking seconds (injectable for tests)
        retry_on: Exception types that trigger another attempt; anything
            else propagates immediately

    Returns:
        Result of the first successful attempt

    Raises:
        RetryExhaustedError: If every allowed attempt failed
    """
    last_error: Optional[Exception] = None

    while True:
        try:
            interval_ms = state.register_retry()
        except RetryExhaustedError as exhausted:
            logger.error(
                f"Retries exhausted after {exhausted.attempts} attempts",
                extra={"attempts": exhausted.attempts, "max_attempts": state.max_attempts},
            )
            exhausted.original = last_error
            raise

        logger.warning(
            f"Retrying in {interval_ms}ms (attempt {state.attempts + 1}/{state.max_attempts})",
            extra={
                "attempt": state.attempts + 1,
                "max_attempts": state.max_attempts,
                "interval_ms": interval_ms,
            },
        )
        await sleep(interval_ms / 1000.0)

        try:
            result = await operation()
        except retry_on as e:
            last_error = e
            logger.warning(
                f"Retry attempt {state.attempts + 1} failed: {type(e).__name__}",
                extra={
                    "attempt": state.attempts + 1,
                    "exception_type": type(e).__name__,
                    "exception_message": str(e),
                },
            )
            continue

        logger.info(
            f"Retry successful after {state.attempts + 1} attempts",
            extra={"attempts": state.attempts + 1},
        )
        state.reset()
        return result
