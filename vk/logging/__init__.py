"""
Logging system for vk.

This module provides console and file logging with credential masking, and
the redaction helpers used for request transcripts.
"""

from .filters import REDACTED, SENSITIVE_KEYS, SensitiveDataFilter, redact_sensitive
from .formatters import ColoredFormatter, StructuredFormatter
from .manager import LoggingManager, cleanup_logging, setup_logging

__all__ = [
    "LoggingManager",
    "setup_logging",
    "cleanup_logging",
    "StructuredFormatter",
    "ColoredFormatter",
    "SensitiveDataFilter",
    "SENSITIVE_KEYS",
    "REDACTED",
    "redact_sensitive",
]
