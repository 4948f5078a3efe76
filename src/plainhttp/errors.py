"""Exception hierarchy for plainhttp."""


class HttpRequestError(Exception):
    """Base class for every error raised by plainhttp."""


class InvalidArgumentError(HttpRequestError, ValueError):
    """A header, parameter or target argument has the wrong shape."""


class UnexpectedSchemeError(HttpRequestError, ValueError):
    """The target URL uses a scheme other than plain HTTP."""


class InvalidStateError(HttpRequestError, RuntimeError):
    """The request was used before it was initialized with a target."""


class TransportError(HttpRequestError, ConnectionError):
    """The transport could not deliver the request or read the response."""
