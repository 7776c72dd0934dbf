"""Exceptions raised by the Picasa client."""


class PicasaError(Exception):
    """Base class for all client errors."""


class RequestError(PicasaError):
    """An API call failed."""


class TransportError(RequestError):
    """The request never produced an HTTP response."""


class RemoteApiError(RequestError):
    """The remote service answered with a non-success status."""

    def __init__(self, status_code: int, message: str) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.message = message


class AuthError(PicasaError):
    """Token exchange or refresh failed."""


class ParseError(PicasaError):
    """A response body or entry had an unexpected shape."""


class UploadError(PicasaError):
    """A resumable upload step failed."""

    def __init__(
        self, message: str, status_code: int | None = None, detail: str | None = None
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.detail = detail


class UploadCancelledError(UploadError):
    """The caller cancelled an upload in progress."""


class UploadStateError(PicasaError):
    """An upload session was driven out of order."""
