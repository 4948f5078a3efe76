"""Request builder and executor for single-shot plain HTTP requests."""

from __future__ import annotations

import logging
from enum import Enum
from typing import Any, Optional, Union
from urllib.parse import quote_plus, urlsplit

from charset_normalizer import from_bytes as detect_encoding

from .errors import InvalidArgumentError, InvalidStateError, UnexpectedSchemeError
from .transport.protocols import ResponseStream, Transport, TransportRequest

logger = logging.getLogger(__name__)

Scalar = Union[str, int, float, bool]


class HttpMethod(str, Enum):
    """Standard HTTP/1.1 methods (RFC 2616 section 9)."""

    CONNECT = "CONNECT"
    DELETE = "DELETE"
    GET = "GET"
    HEAD = "HEAD"
    OPTIONS = "OPTIONS"
    POST = "POST"
    PUT = "PUT"
    TRACE = "TRACE"


def is_scalar(value: Any) -> bool:
    """Return True for atomic values a header or parameter may hold."""
    return isinstance(value, (str, int, float, bool))


def format_scalar(value: Scalar) -> str:
    """Render a scalar for the wire; booleans render as "1" and ""."""
    if isinstance(value, bool):
        return "1" if value else ""
    return str(value)


def _is_integer(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _host_from_netloc(netloc: str) -> str:
    """Strip user info and port from a netloc, keeping the host's case."""
    host = netloc.rpartition("@")[2]
    if host.startswith("["):
        return host[1 : host.index("]")]
    return host.partition(":")[0]


class HttpRequest:
    """
    Builds and executes plain HTTP requests against a single host.

    Headers and query parameters accumulate through setters; initialize()
    fixes the target; execute() serializes the state into one transport
    call and returns the response body as text. Instances are reusable:
    every execute() is independent and only path and method vary.

    Example:
        request = HttpRequest()
        request.initialize("http://example.com:8080")
        request.add_header("Accept", "text/plain")
        request.set_param("q", "search terms")
        body = request.execute("/search")
    """

    DEFAULT_PORT = 80
    DEFAULT_TIMEOUT = 60
    READ_SIZE = 8192

    CONNECT = HttpMethod.CONNECT
    DELETE = HttpMethod.DELETE
    GET = HttpMethod.GET
    HEAD = HttpMethod.HEAD
    OPTIONS = HttpMethod.OPTIONS
    POST = HttpMethod.POST
    PUT = HttpMethod.PUT
    TRACE = HttpMethod.TRACE

    # Methods whose parameters travel in the URL instead of the body
    QUERY_METHODS = frozenset({HttpMethod.GET.value, HttpMethod.HEAD.value})

    def __init__(self, transport: Optional[Transport] = None) -> None:
        """
        Create an empty, uninitialized request.

        Args:
            transport: Transport used by execute(); defaults to RequestsTransport
        """
        if transport is None:
            from .transport.client import RequestsTransport

            transport = RequestsTransport()

        self.transport = transport
        self._hostname: Optional[str] = None
        self._port: Optional[int] = None
        self._timeout: Optional[int] = None
        self._initialized = False
        # lowercase name -> (declared name, value)
        self._headers: dict[str, tuple[Scalar, Scalar]] = {}
        self._params: dict[Scalar, Optional[Scalar]] = {}

    def initialize(
        self,
        hostname: str,
        port: Optional[int] = None,
        timeout: Optional[int] = None,
    ) -> None:
        """
        Set the target host.

        A port embedded in the URL is adopted only when neither port nor
        timeout is passed; an explicit port always wins.

        Args:
            hostname: Absolute http:// URL naming the host
            port: Port number (default 80)
            timeout: Timeout in seconds (default 60)

        Raises:
            InvalidArgumentError: If the URL is malformed or port/timeout are not ints
            UnexpectedSchemeError: If the URL scheme is not http
        """
        url = self._parse_target(hostname)

        if port is None and timeout is None and url.port is not None:
            port = url.port
        if port is None:
            port = self.DEFAULT_PORT
        if timeout is None:
            timeout = self.DEFAULT_TIMEOUT

        if not _is_integer(port) or not _is_integer(timeout):
            raise InvalidArgumentError("Port number and timeout must be integer values")

        # urlsplit lowercases the scheme; the check is on the text as given
        if hostname[: len(url.scheme)] != "http":
            raise UnexpectedSchemeError("Unexpected scheme. Only HTTP requests permitted.")

        self._hostname = _host_from_netloc(url.netloc)
        self._port = port
        self._timeout = timeout
        self._initialized = True

    @staticmethod
    def _parse_target(hostname: Any):
        if not isinstance(hostname, str) or not hostname or any(c.isspace() for c in hostname):
            raise InvalidArgumentError("Invalid hostname")

        try:
            url = urlsplit(hostname)
            # port is parsed lazily and raises on garbage like "host:abc"
            url.port
        except ValueError as e:
            raise InvalidArgumentError("Invalid hostname") from e

        if not url.scheme or not url.hostname:
            raise InvalidArgumentError("Invalid hostname")

        return url

    def add_header(self, name: Scalar, value: Scalar, override: bool = True) -> bool:
        """
        Add a request header.

        Args:
            name: Header name; lookups ignore case, serialization keeps it
            value: Header value
            override: Replace an existing header with the same name

        Returns:
            True if the header was stored, False if an existing one was kept

        Raises:
            InvalidArgumentError: If name or value is not scalar
        """
        if not is_scalar(name) or not is_scalar(value):
            raise InvalidArgumentError("Name and value MUST be scalar")

        key = format_scalar(name).lower()
        if not override and key in self._headers:
            return False

        self._headers[key] = (name, value)
        return True

    def get_header(self, name: Any) -> Optional[Scalar]:
        """Return a header value by case-insensitive name, or None."""
        if not is_scalar(name):
            return None
        entry = self._headers.get(format_scalar(name).lower())
        return entry[1] if entry is not None else None

    def set_param(self, name: Scalar, value: Optional[Scalar] = None) -> None:
        """
        Set a query parameter; a None value serializes as a bare name.

        Raises:
            InvalidArgumentError: If name is not scalar or value is neither scalar nor None
        """
        if not is_scalar(name) or not (value is None or is_scalar(value)):
            raise InvalidArgumentError("Name and value MUST be scalar")

        self._params[name] = value

    def get_param(self, name: Any) -> Optional[Scalar]:
        """Return a parameter value by exact name, or None."""
        try:
            return self._params.get(name)
        except TypeError:
            # unhashable names can never have been stored
            return None

    def get_hostname(self) -> str:
        """
        Return the target hostname.

        Raises:
            InvalidStateError: If initialize() has not been called
        """
        if not self._initialized:
            raise InvalidStateError("Request must be initialized before use")
        return self._hostname

    def get_port(self) -> Optional[int]:
        return self._port

    def get_timeout(self) -> Optional[int]:
        return self._timeout

    def build_headers(self) -> Optional[str]:
        """Serialize headers as CRLF-separated "Name: value" lines, or None."""
        if not self._headers:
            return None
        return "\r\n".join(
            f"{format_scalar(name)}: {format_scalar(value)}" for name, value in self._headers.values()
        )

    def build_query(self) -> Optional[str]:
        """Serialize parameters as a form-encoded query string, or None."""
        if not self._params:
            return None

        pairs = []
        for name, value in self._params.items():
            pair = quote_plus(format_scalar(name))
            if value is not None:
                pair += "=" + quote_plus(format_scalar(value))
            pairs.append(pair)
        return "&".join(pairs)

    def build_url(self, path: str = "/") -> str:
        """
        Build the base URL for a path, without the query string.

        Raises:
            InvalidStateError: If initialize() has not been called
        """
        host = self.get_hostname()
        if ":" in host:
            host = f"[{host}]"

        url = f"http://{host}"
        if self._port != self.DEFAULT_PORT:
            url += f":{self._port}"
        return url + path

    def execute(self, path: str = "/", method: Union[HttpMethod, str] = HttpMethod.GET) -> str:
        """
        Send the request and return the response body.

        GET and HEAD carry parameters in the URL; every other method sends
        them as the request body. HTTP error statuses are not inspected:
        their bodies are returned like any other.

        Args:
            path: Request path, leading slash included
            method: HTTP method; any string is forwarded verbatim

        Returns:
            Response body as text

        Raises:
            InvalidStateError: If initialize() has not been called
            TransportError: If the transport could not complete the request
        """
        method_name = method.value if isinstance(method, HttpMethod) else method
        url = self.build_url(path)
        body = None

        query = self.build_query()
        if query:
            if method_name in self.QUERY_METHODS:
                url += "?" + query
            else:
                body = query

        transport_request = TransportRequest(
            url=url,
            method=method_name,
            timeout=self._timeout,
            header_block=self.build_headers(),
            body=body,
        )

        logger.debug(f"{method_name} {url}")
        stream = self.transport.open(transport_request)
        try:
            content = self._read_body(stream)
        finally:
            stream.close()

        logger.debug(f"Read {len(content)} bytes from {url}")
        return self._decode_body(content, getattr(stream, "charset", None))

    def _read_body(self, stream: ResponseStream) -> bytes:
        chunks = []
        while not stream.at_eof():
            chunk = stream.read(self.READ_SIZE)
            if not chunk:
                break
            chunks.append(chunk)
        return b"".join(chunks)

    @staticmethod
    def _decode_body(content: bytes, charset: Optional[str]) -> str:
        """
        Decode the body with intelligent charset detection.

        Fallback chain:
        1. Charset declared by the response
        2. Strict UTF-8
        3. charset-normalizer detection
        4. UTF-8 with replacement

        Args:
            content: Raw body bytes
            charset: Charset declared by the response, if any

        Returns:
            Decoded text
        """
        if charset:
            try:
                return content.decode(charset)
            except (UnicodeDecodeError, LookupError):
                logger.debug(f"Failed to decode with declared charset: {charset}")

        try:
            return content.decode("utf-8")
        except UnicodeDecodeError:
            logger.debug("Body is not UTF-8, detecting encoding")

        best_match = detect_encoding(content).best()
        if best_match is not None:
            logger.debug(f"Detected encoding: {best_match.encoding}")
            return str(best_match)

        return content.decode("utf-8", errors="replace")
