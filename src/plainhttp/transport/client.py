"""Blocking transport backed by requests."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from typing import Optional
from urllib.parse import urlparse

import requests

from ..errors import TransportError
from .protocols import TransportRequest

logger = logging.getLogger(__name__)


def parse_charset(content_type: str) -> Optional[str]:
    """
    Extract the charset parameter from a Content-Type header value.

    Args:
        content_type: Content-Type header value (may be empty)

    Returns:
        Declared charset, or None if the header declares none
    """
    for part in content_type.split(";"):
        part = part.strip()
        if part.lower().startswith("charset="):
            return part.split("=", 1)[1].strip().strip("\"'") or None
    return None


class RequestsResponseStream:
    """ResponseStream over a streamed requests.Response."""

    def __init__(self, response: requests.Response, chunk_size: int = 8192) -> None:
        self._response = response
        self._chunks: Iterator[bytes] = response.iter_content(chunk_size=chunk_size)
        self._eof = False
        self.status_code = response.status_code
        self.charset = parse_charset(response.headers.get("Content-Type", ""))

    def read(self, size: int) -> bytes:
        # iter_content already yields chunk_size pieces; size is advisory here
        if self._eof:
            return b""
        try:
            chunk = next(self._chunks)
        except StopIteration:
            self._eof = True
            return b""
        except requests.RequestException as e:
            logger.warning(f"Connection broke while reading {self._response.url}: {e}")
            raise TransportError(f"Failed reading response from {self._response.url}: {e}") from e
        return chunk

    def at_eof(self) -> bool:
        return self._eof

    def close(self) -> None:
        self._response.close()


class RequestsTransport:
    """
    Plain-HTTP transport built on requests.

    Each open() issues exactly one request on a fresh connection: no
    session reuse, no redirects followed, no retries. HTTP error statuses
    come back as ordinary responses.

    Example:
        transport = RequestsTransport()
        stream = transport.open(TransportRequest(url="http://example.com/", method="GET", timeout=10))
        try:
            body = stream.read(8192)
        finally:
            stream.close()
    """

    ALLOWED_SCHEMES = frozenset({"http"})
    FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"

    def __init__(self, chunk_size: int = 8192, user_agent: Optional[str] = None) -> None:
        """
        Initialize the transport.

        Args:
            chunk_size: Size of the chunks the response body is read in
            user_agent: User-Agent sent when the request does not set one
        """
        self._chunk_size = chunk_size
        self._user_agent = user_agent

    def _build_headers(self, request: TransportRequest) -> dict[str, str]:
        headers = request.headers
        names = {name.lower() for name in headers}

        if self._user_agent and "user-agent" not in names:
            headers["User-Agent"] = self._user_agent

        # Form-encoded parameters travel in the body without a declared type
        if request.body is not None and "content-type" not in names:
            headers["Content-Type"] = self.FORM_CONTENT_TYPE

        return headers

    def open(self, request: TransportRequest) -> RequestsResponseStream:
        """
        Send the request and return a stream over its response body.

        Args:
            request: The request to send

        Returns:
            RequestsResponseStream over the response

        Raises:
            TransportError: On non-HTTP URLs, unusable timeouts and any requests failure
        """
        scheme = urlparse(request.url).scheme
        if scheme not in self.ALLOWED_SCHEMES:
            raise TransportError(f"Scheme '{scheme}' not supported by this transport")

        try:
            response = requests.request(
                request.method,
                request.url,
                headers=self._build_headers(request),
                data=request.body.encode("utf-8") if request.body is not None else None,
                timeout=request.timeout,
                allow_redirects=False,
                stream=True,
            )
        except (requests.RequestException, ValueError) as e:
            # urllib3 rejects non-positive timeouts with a bare ValueError
            logger.warning(f"{request.method} {request.url} failed: {e}")
            raise TransportError(f"Failed to open {request.url}: {e}") from e

        logger.debug(f"Got {response.status_code} for {request.method} {request.url}")
        return RequestsResponseStream(response, chunk_size=self._chunk_size)
