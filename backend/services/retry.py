"""Retry with exponential backoff for overloaded model calls.

Only service-unavailable / overload signals are retried; every other
error is raised on the first attempt.
"""

import logging

from tenacity import (
    before_sleep_log,
    retry,
    retry_if_exception,
    stop_after_attempt,
    wait_exponential_jitter,
)

from config import settings

logger = logging.getLogger(__name__)

RETRYABLE_STATUS_CODES = frozenset({503})
RETRYABLE_STATUSES = frozenset({"UNAVAILABLE", "Service Unavailable"})
RETRYABLE_MESSAGES = ("overloaded", "service unavailable")


def is_retryable_error(exc: BaseException) -> bool:
    """True for transient unavailability of the model service."""
    if getattr(exc, "code", None) in RETRYABLE_STATUS_CODES:
        return True
    if getattr(exc, "status", None) in RETRYABLE_STATUSES:
        return True
    message = str(getattr(exc, "message", None) or exc).lower()
    return any(marker in message for marker in RETRYABLE_MESSAGES)


def with_backoff(
    max_attempts: int | None = None,
    base_delay: float | None = None,
    max_delay: float | None = None,
):
    """Decorate an async callable with the retry policy.

    Defaults come from settings. The last error is re-raised once the
    attempts are exhausted.
    """
    initial = settings.retry_base_delay if base_delay is None else base_delay
    return retry(
        retry=retry_if_exception(is_retryable_error),
        stop=stop_after_attempt(settings.retry_max_attempts if max_attempts is None else max_attempts),
        wait=wait_exponential_jitter(
            initial=initial,
            max=settings.retry_max_delay if max_delay is None else max_delay,
            jitter=initial,
        ),
        before_sleep=before_sleep_log(logger, logging.WARNING),
        reraise=True,
    )
