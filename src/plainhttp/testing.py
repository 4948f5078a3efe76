"""
In-memory transport for tests.

RecordingTransport stands in for a real transport: it records every
TransportRequest it is asked to open and answers with scripted responses.

Example:
    transport = RecordingTransport()
    transport.add_response(b"hello ", b"world")

    request = HttpRequest(transport=transport)
    request.initialize("http://example.com")
    assert request.execute() == "hello world"
    assert transport.last_request.url == "http://example.com/"
"""

from __future__ import annotations

from collections import deque
from typing import Optional, Union

from .errors import TransportError
from .transport.protocols import TransportRequest


class ScriptedStream:
    """ResponseStream that delivers a fixed list of chunks."""

    def __init__(self, chunks: list[bytes], charset: Optional[str] = None) -> None:
        self._chunks = deque(chunks)
        self.charset = charset
        self.closed = False
        self.reads = 0

    def read(self, size: int) -> bytes:
        self.reads += 1
        if not self._chunks:
            return b""
        return self._chunks.popleft()

    def at_eof(self) -> bool:
        return not self._chunks

    def close(self) -> None:
        self.closed = True


class RecordingTransport:
    """
    Transport double that records requests and replays scripted responses.

    Responses are consumed in the order they were added; once the script
    runs out every request gets an empty body.
    """

    def __init__(self) -> None:
        self.requests: list[TransportRequest] = []
        self.streams: list[ScriptedStream] = []
        self._script: deque[Union[ScriptedStream, Exception]] = deque()

    def add_response(self, *chunks: Union[bytes, str], charset: Optional[str] = None) -> None:
        """
        Queue a response delivered as the given chunks.

        Args:
            chunks: Body pieces; str pieces are encoded with charset or UTF-8
            charset: Charset the response declares
        """
        encoded = [c.encode(charset or "utf-8") if isinstance(c, str) else c for c in chunks]
        self._script.append(ScriptedStream(encoded, charset=charset))

    def add_failure(self, error: Optional[Exception] = None) -> None:
        """Queue a transport failure, raised instead of the next response."""
        self._script.append(error or TransportError("Connection refused"))

    @property
    def last_request(self) -> Optional[TransportRequest]:
        return self.requests[-1] if self.requests else None

    def open(self, request: TransportRequest) -> ScriptedStream:
        self.requests.append(request)

        scripted = self._script.popleft() if self._script else ScriptedStream([])
        if isinstance(scripted, Exception):
            raise scripted

        self.streams.append(scripted)
        return scripted
