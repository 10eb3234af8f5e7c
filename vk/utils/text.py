"""
Text helpers for error messages and transcripts.
"""

from __future__ import annotations

# Response bodies kept in error messages and transcripts
BODY_SNIPPET_LEN = 500
# Redacted request payloads kept in transport errors
REQUEST_SNIPPET_LEN = 1024
# Pretty-printed ``data`` values kept in schema mismatch errors
VALUE_SNIPPET_LEN = 200


def snippet(text: str, max_chars: int) -> str:
    """
    Trim ``text`` to ``max_chars`` characters, appending ``...`` when cut.

    Returns an empty string when ``max_chars`` is zero.
    """
    if max_chars <= 0:
        return ""
    if len(text) <= max_chars:
        return text
    return text[:max_chars] + "..."
