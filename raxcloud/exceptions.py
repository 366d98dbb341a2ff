"""
Error taxonomy for the Rackspace cloud client.
Every error raised by the library derives from RaxCloudError.
"""

from typing import Optional


class RaxCloudError(Exception):
    """Base class for all client errors."""


class TransportError(RaxCloudError):
    """Network or connection failure before a response was received."""

    def __init__(self, method: str, url: str, reason: str):
        self.method = method
        self.url = url
        self.reason = reason
        super().__init__(f"{method} {url} failed: {reason}")


class UnexpectedStatus(RaxCloudError):
    """Response status outside the set the caller accepts."""

    def __init__(self, status: int, method: str, url: str, body: str = ""):
        self.status = status
        self.method = method
        self.url = url
        self.body = body
        super().__init__(f"{method} {url} -> unexpected status {status}")


class NotFound(UnexpectedStatus):
    """The server reported that the resource does not exist (404)."""


class DecodeError(RaxCloudError):
    """Response body is not JSON or does not have the expected shape."""

    def __init__(self, url: str, reason: str):
        self.url = url
        self.reason = reason
        super().__init__(f"Cannot decode response from {url}: {reason}")


class UnsupportedEndpoint(RaxCloudError):
    """Logical endpoint name is not in the allow-list."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Unsupported endpoint: {name}")


class InvalidArgument(RaxCloudError, ValueError):
    """Caller passed a value the client cannot act on."""

    def __init__(self, argument: str, value, reason: str = ""):
        self.argument = argument
        self.value = value
        message = f"Invalid {argument}: {value!r}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)


class PaginationLoopDetected(RaxCloudError):
    """Server kept handing out markers past a repeat or the page cap."""

    def __init__(self, path: str, marker: Optional[str], pages: int):
        self.path = path
        self.marker = marker
        self.pages = pages
        super().__init__(
            f"Pagination of {path} stopped after {pages} pages (marker {marker!r})"
        )


class AuthError(RaxCloudError):
    """Identity service rejected the credentials or answered nonsense."""

    def __init__(self, message: str, status: Optional[int] = None):
        self.status = status
        super().__init__(message)
