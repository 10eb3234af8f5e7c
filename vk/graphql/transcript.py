"""
Request transcript for troubleshooting GraphQL exchanges.

Each exchange is appended to the transcript file as one JSON line holding the
operation name, the HTTP status, the redacted request payload and a truncated
response body. Writing is best effort: failures are logged and never reach the
request path.
"""

from __future__ import annotations

import json
import logging
import threading
from pathlib import Path
from typing import Any, Optional, TextIO, Union

from ..exceptions import TranscriptError
from ..logging.filters import redact_sensitive
from ..utils.text import BODY_SNIPPET_LEN, snippet
from .models import HttpResponse

logger = logging.getLogger(__name__)


class TranscriptWriter:
    """Append-only JSON lines sink shared by all requests of a client."""

    def __init__(self, path: Union[str, Path]):
        """
        Create the transcript file, truncating any previous content.

        Args:
            path: Transcript file path

        Raises:
            TranscriptError: If the file cannot be created
        """
        self.path = Path(path)
        self._lock = threading.Lock()
        try:
            self._file: Optional[TextIO] = open(self.path, "w", encoding="utf-8")
        except OSError as e:
            raise TranscriptError(self.path, e) from e

    @property
    def closed(self) -> bool:
        return self._file is None

    def record(self, operation: str, payload: Any, response: HttpResponse) -> None:
        """
        Append one exchange to the transcript.

        Args:
            operation: Operation label
            payload: Request payload as sent (redacted before writing)
            response: Status and body returned by the server
        """
        entry = {
            "operation": operation,
            "status": response.status,
            "request": redact_sensitive(payload),
            "response": snippet(response.body, BODY_SNIPPET_LEN),
        }
        try:
            line = json.dumps(entry, ensure_ascii=False)
        except (TypeError, ValueError) as e:
            logger.warning("failed to serialise transcript for op=%s: %s", operation, e)
            return

        with self._lock:
            if self._file is None:
                logger.warning("transcript closed; dropping entry for op=%s", operation)
                return
            try:
                self._file.write(line + "\n")
            except OSError as e:
                logger.warning("failed to write transcript for op=%s: %s", operation, e)
                return
            try:
                self._file.flush()
            except OSError as e:
                logger.warning("failed to flush transcript for op=%s: %s", operation, e)

    def close(self) -> None:
        """Close the transcript file."""
        with self._lock:
            if self._file is None:
                return
            try:
                self._file.close()
            except OSError as e:
                logger.warning("failed to close transcript %s: %s", self.path, e)
            finally:
                self._file = None
