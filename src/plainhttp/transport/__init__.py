"""Transport abstraction and the requests-backed implementation."""

from .client import RequestsResponseStream, RequestsTransport
from .protocols import ResponseStream, Transport, TransportRequest

__all__ = [
    "RequestsResponseStream",
    "RequestsTransport",
    "ResponseStream",
    "Transport",
    "TransportRequest",
]
