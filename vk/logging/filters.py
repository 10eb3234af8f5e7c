"""
Logging filters and redaction helpers for vk.

This module masks credentials in log records and provides the key-based
redaction used for request transcripts and error contexts.
"""

from __future__ import annotations

import logging
import re
from typing import Any, FrozenSet, List, Pattern

REDACTED = "<redacted>"

SENSITIVE_KEYS: FrozenSet[str] = frozenset(
    {
        "token",
        "authorization",
        "password",
        "secret",
        "access_token",
        "refresh_token",
        "api_key",
        "apikey",
        "bearer",
        "auth",
        "credentials",
        "credential",
        "private_key",
    }
)


def is_sensitive_key(key: str) -> bool:
    """Check whether ``key`` names a credential (case-insensitive)."""
    return key.lower() in SENSITIVE_KEYS


def redact_sensitive(value: Any) -> Any:
    """
    Return a copy of a JSON value with sensitive fields replaced.

    Objects are walked recursively, including objects nested in arrays. The
    value of every key listed in :data:`SENSITIVE_KEYS` becomes
    ``"<redacted>"`` whatever its type. The input is left untouched.

    Args:
        value: Decoded JSON value (dict, list or scalar)

    Returns:
        Redacted copy of ``value``
    """
    if isinstance(value, dict):
        return {
            key: REDACTED if is_sensitive_key(str(key)) else redact_sensitive(item)
            for key, item in value.items()
        }
    if isinstance(value, (list, tuple)):
        return [redact_sensitive(item) for item in value]
    return value


class SensitiveDataFilter(logging.Filter):
    """Filter to mask credentials in log messages."""

    def __init__(self) -> None:
        """Initialize sensitive data filter."""
        super().__init__()

        self.patterns: List[Pattern[str]] = [
            # GitHub tokens (classic and fine-grained)
            re.compile(r"\b(gh[pousr]_|github_pat_)[A-Za-z0-9_]{16,}"),
            re.compile(r"(bearer\s+)([A-Za-z0-9_\-+/=.]{8,})", re.IGNORECASE),
            re.compile(
                r'((?:api[_-]?key|access[_-]?token|token|secret|password)["\']?\s*[:=]\s*["\']?)([^\s"\',}]+)',
                re.IGNORECASE,
            ),
        ]

        self.replacements = [
            "***MASKED***",
            r"\1***MASKED***",
            r"\1***MASKED***",
        ]

    def filter(self, record: logging.LogRecord) -> bool:
        """Filter log record to mask sensitive data."""
        try:
            message = record.getMessage()
        except (TypeError, ValueError):
            # Leave badly formatted records for the handler to report
            return True

        masked = message
        for pattern, replacement in zip(self.patterns, self.replacements):
            masked = pattern.sub(replacement, masked)

        if masked != message:
            record.msg = masked
            record.args = ()

        return True
