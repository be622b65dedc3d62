"""Retry utilities with exponential backoff."""

import logging
from typing import Callable

import structlog
from tenacity import (
    RetryError,
    before_sleep_log,
    retry,
    retry_if_exception_type,
    retry_if_result,
    stop_after_attempt,
    stop_after_delay,
    wait_exponential,
    wait_fixed,
)

logger = structlog.stdlib.get_logger(__name__)


def llm_retry(
    max_attempts: int = 3,
    min_wait: float = 1.0,
    max_wait: float = 8.0,
    exceptions: tuple = (Exception,),
):
    """Retry decorator for remote mood-scoring calls.

    Args:
        max_attempts: Max retry attempts
        min_wait: Min wait between retries (seconds)
        max_wait: Max wait between retries (seconds)
        exceptions: Exception types to retry on
    """
    return retry(
        stop=stop_after_attempt(max_attempts),
        wait=wait_exponential(multiplier=1, min=min_wait, max=max_wait),
        retry=retry_if_exception_type(exceptions),
        before_sleep=before_sleep_log(logger, logging.WARNING),
        reraise=True,
    )


def retry_from_config(config: dict, exceptions: tuple = (Exception,)):
    """Create retry decorator from config dict (``retry`` section)."""
    retry_config = config.get("retry", {})
    return llm_retry(
        max_attempts=retry_config.get("max_attempts", 3),
        min_wait=retry_config.get("min_wait", 1.0),
        max_wait=retry_config.get("max_wait", 8.0),
        exceptions=exceptions,
    )


def wait_until_ready(check: Callable[[], bool], timeout: float = 10.0, interval: float = 0.1) -> bool:
    """Block until ``check()`` returns True or ``timeout`` seconds pass.

    Exceptions raised by ``check`` count as "not ready yet".

    Returns:
        True if ready, False on timeout.
    """

    def _safe_check() -> bool:
        try:
            return bool(check())
        except Exception as e:
            logger.debug("readiness.check_failed", error=str(e))
            return False

    waiter = retry(
        stop=stop_after_delay(timeout),
        wait=wait_fixed(interval),
        retry=retry_if_result(lambda ok: not ok),
    )(_safe_check)
    try:
        return waiter()
    except RetryError:
        logger.warning("readiness.timeout", timeout=timeout)
        return False
