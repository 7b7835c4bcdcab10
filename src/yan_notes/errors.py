"""Error taxonomy for the yan-notes client."""

from http import HTTPStatus


class YanError(Exception):
    """Base class for every error raised by this package."""


class NetworkFailure(YanError):
    """The request never completed (connection refused, timeout, ...)."""

    def __init__(self, method: str, path: str, cause: Exception) -> None:
        self.method = method
        self.path = path
        self.cause = cause
        super().__init__(f"{method} {path} failed: {cause}")


class HttpError(YanError):
    """The server answered with a non-2xx status."""

    def __init__(self, status: int, detail: str) -> None:
        self.status = status
        self.detail = detail
        super().__init__(detail)

    @classmethod
    def from_response(cls, status: int, body: str) -> "HttpError":
        """Build the error, falling back to the reason phrase when the body is empty."""
        detail = body
        if not detail:
            try:
                detail = HTTPStatus(status).phrase
            except ValueError:
                detail = f"HTTP {status}"
        return cls(status, detail)


class AuthExpired(HttpError):
    """HTTP 401. Raised after local session state has been cleared."""


class DecodeFailure(YanError):
    """The response body could not be turned into a result."""

    def __init__(self, content_type: str, reason: str) -> None:
        self.content_type = content_type
        super().__init__(f"Cannot decode response ({content_type!r}): {reason}")


class ApplicationError(YanError):
    """Raised by the resource clients, the scheduler or session handling."""


class SyncFailure(ApplicationError):
    """A flush of edited content did not reach the server."""

    def __init__(self, note_id: int, cause: Exception) -> None:
        self.note_id = note_id
        self.cause = cause
        super().__init__(f"Failed to sync note {note_id}: {cause}")
