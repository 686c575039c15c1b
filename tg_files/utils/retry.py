"""
Retry utilities for Bot API method calls.

Provides an async decorator with exponential backoff, configurable
exceptions, and logging. File transfers are never retried here; whether to
try a download again is up to the caller.
"""

import asyncio
import functools
import logging
import random
from typing import Any, Callable, Dict, Optional, Sequence, Type, TypeVar

logger = logging.getLogger(__name__)

# Type variable for generic return types
T = TypeVar("T")

# Default exceptions to retry on
DEFAULT_RETRY_EXCEPTIONS: tuple = (
    ConnectionError,
    TimeoutError,
)


class RetryableError(Exception):
    """Signal a transient failure that should be retried.

    ``response`` keeps the Bot API envelope that triggered the retry, so the
    caller can still return it once attempts run out.
    """

    def __init__(self, message: str, response: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.response = response


class RetryConfig:
    """Configuration for retry behavior."""

    def __init__(
        self,
        max_attempts: int = 3,
        base_delay: float = 1.0,
        max_delay: float = 30.0,
        exponential_base: float = 2.0,
        jitter: bool = True,
        jitter_max: float = 0.5,
        exceptions: Sequence[Type[Exception]] = DEFAULT_RETRY_EXCEPTIONS,
        on_retry: Optional[Callable[[Exception, int], None]] = None,
    ):
        """
        Initialize retry configuration.

        Args:
            max_attempts: Maximum number of attempts (including first try)
            base_delay: Initial delay between retries in seconds
            max_delay: Maximum delay between retries in seconds
            exponential_base: Base for exponential backoff (delay * base^attempt)
            jitter: Whether to add random jitter to delays
            jitter_max: Maximum jitter as fraction of delay (0.0 to 1.0)
            exceptions: Tuple of exception types to retry on
            on_retry: Optional callback called on each retry with (exception, attempt)
        """
        self.max_attempts = max_attempts
        self.base_delay = base_delay
        self.max_delay = max_delay
        self.exponential_base = exponential_base
        self.jitter = jitter
        self.jitter_max = jitter_max
        self.exceptions = tuple(exceptions)
        self.on_retry = on_retry

    def calculate_delay(self, attempt: int) -> float:
        """
        Calculate delay for a given attempt number.

        Args:
            attempt: The attempt number (0-indexed)

        Returns:
            Delay in seconds with optional jitter
        """
        delay = self.base_delay * (self.exponential_base**attempt)
        delay = min(delay, self.max_delay)

        if self.jitter:
            jitter_amount = delay * random.uniform(0, self.jitter_max)
            delay += jitter_amount

        return delay


def async_retry(
    max_attempts: int = 3,
    base_delay: float = 1.0,
    max_delay: float = 30.0,
    exponential_base: float = 2.0,
    jitter: bool = True,
    exceptions: Sequence[Type[Exception]] = DEFAULT_RETRY_EXCEPTIONS,
    on_retry: Optional[Callable[[Exception, int], None]] = None,
) -> Callable:
    """
    Decorator for retrying async functions with exponential backoff.

    Usage:
        @async_retry(max_attempts=3, base_delay=1.0)
        async def call_method():
            async with httpx.AsyncClient() as client:
                return await client.post(url)

    Args:
        max_attempts: Maximum number of attempts
        base_delay: Initial delay between retries
        max_delay: Maximum delay between retries
        exponential_base: Base for exponential backoff
        jitter: Whether to add random jitter
        exceptions: Exception types to retry on
        on_retry: Callback on each retry

    Returns:
        Decorated async function with retry logic
    """
    config = RetryConfig(
        max_attempts=max_attempts,
        base_delay=base_delay,
        max_delay=max_delay,
        exponential_base=exponential_base,
        jitter=jitter,
        exceptions=exceptions,
        on_retry=on_retry,
    )

    def decorator(func: Callable[..., T]) -> Callable[..., T]:
        @functools.wraps(func)
        async def wrapper(*args: Any, **kwargs: Any) -> T:
            last_exception: Optional[Exception] = None

            for attempt in range(config.max_attempts):
                try:
                    return await func(*args, **kwargs)
                except config.exceptions as e:
                    last_exception = e

                    if attempt < config.max_attempts - 1:
                        delay = config.calculate_delay(attempt)
                        logger.warning(
                            f"Retry {attempt + 1}/{config.max_attempts} for {func.__name__}: "
                            f"{type(e).__name__}: {e}. Waiting {delay:.2f}s"
                        )

                        if config.on_retry:
                            config.on_retry(e, attempt + 1)

                        await asyncio.sleep(delay)
                    else:
                        logger.error(
                            f"All {config.max_attempts} attempts failed for {func.__name__}: "
                            f"{type(e).__name__}: {e}"
                        )

            # All retries exhausted
            if last_exception:
                raise last_exception
            raise RuntimeError(f"Retry failed for {func.__name__}")

        return wrapper

    return decorator
