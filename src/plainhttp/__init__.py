"""
plainhttp - Build and send single-shot plain HTTP requests.

Usage:
    from plainhttp import HttpRequest, HttpMethod

    request = HttpRequest()
    request.initialize("http://example.com:8080")
    request.add_header("Accept", "text/plain")
    request.set_param("name", "value")

    body = request.execute("/submit", HttpMethod.POST)
"""

__version__ = "1.0.0"

from .errors import (
    HttpRequestError,
    InvalidArgumentError,
    InvalidStateError,
    TransportError,
    UnexpectedSchemeError,
)
from .request import HttpMethod, HttpRequest
from .transport import RequestsTransport, ResponseStream, Transport, TransportRequest

__all__ = [
    "__version__",
    # Core
    "HttpRequest",
    "HttpMethod",
    # Transport
    "Transport",
    "ResponseStream",
    "TransportRequest",
    "RequestsTransport",
    # Errors
    "HttpRequestError",
    "InvalidArgumentError",
    "UnexpectedSchemeError",
    "InvalidStateError",
    "TransportError",
]
