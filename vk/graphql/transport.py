"""
HTTP transport for GraphQL requests.

The transport performs exactly one POST per call. It never retries and never
interprets the GraphQL envelope; it only reports what the server returned.
"""

from __future__ import annotations

import asyncio
import json
import logging
from typing import Any, Dict, Optional

import aiohttp

from ..exceptions import HTTPStatusError, TransportError
from ..logging.filters import redact_sensitive
from ..utils.text import BODY_SNIPPET_LEN, REQUEST_SNIPPET_LEN, snippet
from .models import ACCEPT, DEFAULT_ENDPOINT, USER_AGENT, HttpResponse
from .transcript import TranscriptWriter

logger = logging.getLogger(__name__)


def build_headers(token: str) -> Dict[str, str]:
    """
    Build the standard GitHub headers.

    ``Authorization`` is only sent when ``token`` is non-empty.
    """
    headers = {
        "User-Agent": USER_AGENT,
        "Accept": ACCEPT,
    }
    if token:
        headers["Authorization"] = f"Bearer {token}"
    return headers


def payload_snippet(payload: Any) -> str:
    """Serialize a redacted copy of ``payload`` and trim it for error messages."""
    try:
        text = json.dumps(redact_sensitive(payload), ensure_ascii=False)
    except (TypeError, ValueError) as e:
        logger.warning("Failed to serialise redacted payload: %s", e)
        text = "<failed to serialise payload>"
    return snippet(text, REQUEST_SNIPPET_LEN)


class GraphQLTransport:
    """Single-shot HTTP POST of GraphQL payloads over a pooled aiohttp session."""

    def __init__(
        self,
        endpoint: str = DEFAULT_ENDPOINT,
        token: str = "",
        request_timeout: float = 30.0,
        transcript: Optional[TranscriptWriter] = None,
        session: Optional[aiohttp.ClientSession] = None,
    ):
        """
        Initialize transport.

        Args:
            endpoint: GraphQL endpoint URL
            token: GitHub token, empty for anonymous access
            request_timeout: Per-request timeout in seconds
            transcript: Optional sink receiving every exchange
            session: Externally managed session; created lazily when omitted
        """
        self.endpoint = endpoint
        self.headers = build_headers(token)
        self.request_timeout = request_timeout
        self.transcript = transcript
        self._session = session
        self._owns_session = session is None

    async def _get_session(self) -> aiohttp.ClientSession:
        """Return the session, creating a pooled one on first use."""
        if self._session is None or self._session.closed:
            connector = aiohttp.TCPConnector(
                limit=10,
                ttl_dns_cache=300,
                keepalive_timeout=30,
            )
            self._session = aiohttp.ClientSession(
                connector=connector,
                raise_for_status=False,
            )
            self._owns_session = True
        return self._session

    async def execute(self, operation: str, payload: Dict[str, Any]) -> HttpResponse:
        """
        POST ``payload`` once and capture the response.

        Args:
            operation: Operation label for errors and the transcript
            payload: JSON request body

        Returns:
            HttpResponse for any 2xx status

        Raises:
            TransportError: If the request cannot be sent or the body cannot be read
            HTTPStatusError: If the server answers with a non-2xx status
        """
        session = await self._get_session()
        timeout = aiohttp.ClientTimeout(total=self.request_timeout)
        status: Optional[int] = None

        try:
            async with session.post(
                self.endpoint,
                json=payload,
                headers=self.headers,
                timeout=timeout,
            ) as response:
                status = response.status
                body = await response.text(errors="replace")
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise TransportError(
                operation, payload_snippet(payload), cause=e, status=status
            ) from e

        result = HttpResponse(status=status, body=body)
        logger.debug("GraphQL %s answered with status %d", operation, status)

        if self.transcript is not None:
            self.transcript.record(operation, payload, result)

        if not 200 <= status < 300:
            raise HTTPStatusError(status, operation, snippet(body, BODY_SNIPPET_LEN))

        return result

    async def close(self) -> None:
        """Close the session if this transport created it."""
        if self._session is not None and self._owns_session and not self._session.closed:
            await self._session.close()
        self._session = None
