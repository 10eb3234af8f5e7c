"""
Retry policy for GitHub GraphQL requests.

This module classifies client errors as transient or permanent and drives the
exponential backoff loop used by the GraphQL client. Only infrastructure
failures are retried; a well-formed rejection from the API is returned to the
caller on the first attempt.
"""

from __future__ import annotations

import asyncio
import logging
import random
from dataclasses import dataclass
from enum import Enum
from typing import Awaitable, Callable, Optional, TypeVar

from ..exceptions import (
    EmptyResponseError,
    GraphQLAPIError,
    HTTPStatusError,
    ResponseDecodeError,
    TransportError,
    VkError,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")


class ErrorCategory(Enum):
    """Categories of request errors for retry decisions."""

    NETWORK_ERROR = "network_error"         # Connection/timeout errors
    SERVER_ERROR = "server_error"           # 5xx or HTML error pages
    RATE_LIMIT_ERROR = "rate_limit_error"   # 429
    CLIENT_ERROR = "client_error"           # Other non-2xx statuses
    API_ERROR = "api_error"                 # GraphQL ``errors`` array
    EMPTY_RESPONSE = "empty_response"       # Neither data nor errors
    DECODE_ERROR = "decode_error"           # Body or data shape mismatch
    UNKNOWN_ERROR = "unknown_error"         # Everything else


@dataclass(frozen=True)
class RetryConfig:
    """
    Configuration for retrying failed GraphQL requests.

    Attributes:
        attempts: Total number of attempts including the first request
        base_delay: Initial backoff delay in seconds
        request_timeout: Per-request timeout in seconds
        jitter: Add a random delay in ``[0, backoff)`` to each sleep
        max_delay: Upper bound for the exponential backoff in seconds
    """

    attempts: int = 5
    base_delay: float = 0.2
    request_timeout: float = 30.0
    jitter: bool = True
    max_delay: float = 60.0

    def __post_init__(self) -> None:
        if self.attempts < 1:
            raise ValueError("attempts must be at least 1")
        if self.base_delay < 0:
            raise ValueError("base_delay must not be negative")
        if self.request_timeout <= 0:
            raise ValueError("request_timeout must be positive")


@dataclass
class ErrorInfo:
    """Classification of an error for retry decisions."""

    category: ErrorCategory
    is_retryable: bool = False
    status_code: Optional[int] = None


def is_transient_response(status: int, snippet: str) -> bool:
    """
    Check whether a response looks like a temporary infrastructure fault.

    Server errors, rate limiting and HTML pages served by proxies in front of
    the JSON endpoint are treated as transient.
    """
    return status >= 500 or status == 429 or snippet.lstrip().startswith("<")


def categorize_error(error: BaseException) -> ErrorInfo:
    """
    Categorize an error raised by the request pipeline.

    Args:
        error: Exception raised by a single request attempt

    Returns:
        ErrorInfo with the category and retry recommendation
    """
    if isinstance(error, TransportError):
        return ErrorInfo(ErrorCategory.NETWORK_ERROR, True, error.status)

    if isinstance(error, EmptyResponseError):
        return ErrorInfo(ErrorCategory.EMPTY_RESPONSE, True, error.status)

    if isinstance(error, HTTPStatusError):
        transient = is_transient_response(error.status, error.snippet)
        if error.status == 429:
            category = ErrorCategory.RATE_LIMIT_ERROR
        elif transient:
            category = ErrorCategory.SERVER_ERROR
        else:
            category = ErrorCategory.CLIENT_ERROR
        return ErrorInfo(category, transient, error.status)

    if isinstance(error, ResponseDecodeError):
        transient = is_transient_response(error.status, error.snippet)
        return ErrorInfo(ErrorCategory.DECODE_ERROR, transient, error.status)

    if isinstance(error, GraphQLAPIError):
        return ErrorInfo(ErrorCategory.API_ERROR, False)

    return ErrorInfo(ErrorCategory.UNKNOWN_ERROR, False)


def should_retry(error: BaseException) -> bool:
    """Return ``True`` when ``error`` is worth another attempt."""
    return categorize_error(error).is_retryable


class RetryPolicy:
    """Exponential backoff retry loop driven by :class:`RetryConfig`."""

    def __init__(self, config: Optional[RetryConfig] = None):
        """
        Initialize retry policy.

        Args:
            config: Retry configuration, defaults to :class:`RetryConfig`
        """
        self.config = config or RetryConfig()

    def calculate_delay(self, attempt: int) -> float:
        """
        Calculate the sleep before the retry following ``attempt``.

        Args:
            attempt: Number of the attempt that just failed (1-based)

        Returns:
            Delay in seconds
        """
        config = self.config
        delay = min(config.base_delay * (2 ** max(attempt - 1, 0)), config.max_delay)

        if config.jitter and delay > 0:
            delay += random.uniform(0, delay)

        return delay

    async def run(self, operation: str, call: Callable[[], Awaitable[T]]) -> T:
        """
        Await ``call`` until it succeeds or retrying is pointless.

        Args:
            operation: Operation label used in log messages
            call: Zero-argument coroutine factory performing one attempt

        Returns:
            Result of the first successful attempt

        Raises:
            VkError: The last error observed, unchanged
        """
        attempts = self.config.attempts
        attempt = 0

        while True:
            attempt += 1
            try:
                return await call()
            except VkError as e:
                if attempt >= attempts or not should_retry(e):
                    raise

                delay = self.calculate_delay(attempt)
                logger.warning(
                    "retrying GraphQL query %s after %.3fs (attempt %d/%d): %s",
                    operation,
                    delay,
                    attempt,
                    attempts,
                    e,
                )
                await asyncio.sleep(delay)
