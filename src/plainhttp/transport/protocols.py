"""Protocol definitions for the transport abstraction."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Protocol


@dataclass(frozen=True)
class TransportRequest:
    """
    Immutable description of one request handed to a Transport.

    Attributes:
        url: Fully-formed URL, query string included for GET/HEAD
        method: HTTP method, passed through verbatim
        timeout: Timeout in seconds
        header_block: CRLF-separated "Name: value" lines, or None
        body: Raw request body, or None when no body is sent
    """

    url: str
    method: str
    timeout: int
    header_block: Optional[str] = None
    body: Optional[str] = None

    @property
    def headers(self) -> dict[str, str]:
        """Header block split into a name -> value mapping."""
        headers: dict[str, str] = {}
        if not self.header_block:
            return headers

        for line in self.header_block.splitlines():
            name, _, value = line.partition(":")
            headers[name] = value[1:] if value.startswith(" ") else value
        return headers


class ResponseStream(Protocol):
    """
    Protocol for an open response whose body is read in chunks.

    The stream reports end-of-data through at_eof(); a read() returning
    empty bytes also ends the body.
    """

    charset: Optional[str]

    def read(self, size: int) -> bytes:
        """
        Read up to size bytes of the response body.

        Raises:
            TransportError: If the connection breaks mid-body
        """
        ...

    def at_eof(self) -> bool:
        """Return True once the whole body has been read."""
        ...

    def close(self) -> None:
        """Release the underlying connection."""
        ...


class Transport(Protocol):
    """
    Protocol for byte-level HTTP transports.

    This abstraction allows for:
    - Recording doubles in tests
    - Different backends behind the same request builder

    Implementations must treat HTTP error statuses as ordinary responses.
    """

    def open(self, request: TransportRequest) -> ResponseStream:
        """
        Send the request and return a stream over the response body.

        Args:
            request: The request to send

        Returns:
            ResponseStream positioned at the start of the body

        Raises:
            TransportError: On name resolution, connection or timeout failures
        """
        ...
