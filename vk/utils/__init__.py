"""
Utility helpers for vk.
"""

from .error_handler import (
    ErrorCategory,
    ErrorInfo,
    RetryConfig,
    RetryPolicy,
    categorize_error,
    is_transient_response,
    should_retry,
)
from .text import (
    BODY_SNIPPET_LEN,
    REQUEST_SNIPPET_LEN,
    VALUE_SNIPPET_LEN,
    snippet,
)

__all__ = [
    "ErrorCategory",
    "ErrorInfo",
    "RetryConfig",
    "RetryPolicy",
    "categorize_error",
    "is_transient_response",
    "should_retry",
    "BODY_SNIPPET_LEN",
    "REQUEST_SNIPPET_LEN",
    "VALUE_SNIPPET_LEN",
    "snippet",
]
