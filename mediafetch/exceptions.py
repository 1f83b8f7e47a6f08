"""
Defines custom exceptions for the engine to allow for more specific error handling.

The Supervisor is the only place that decides whether an error is retried.
Errors deriving from `FatalTransferError` are never retried.
"""


class MediaFetchError(Exception):
    """Base exception for all application-specific errors."""

    retryable = False


class ConnectFailed(MediaFetchError):
    """Raised when a socket or TLS connection cannot be established or breaks."""

    retryable = True


class TimedOut(MediaFetchError):
    """Raised when no bytes arrive on a connection within the idle timeout."""

    retryable = True

    def __init__(self, message: str, bytes_received: int = 0):
        super().__init__(message)
        self.bytes_received = bytes_received


class HttpError(MediaFetchError):
    """Raised for a non-2xx response that is worth retrying."""

    retryable = True

    def __init__(self, status: int, status_line: str, url: str, body: bytes = b""):
        super().__init__(f"{status_line}: {url}")
        self.status = status
        self.status_line = status_line
        self.url = url
        self.body = body


class UnexpectedRange(MediaFetchError):
    """Raised when a 206 reply starts somewhere other than the requested byte."""

    retryable = True

    def __init__(self, message: str, requested: int, received: int):
        super().__init__(message)
        self.requested = requested
        self.received = received


class FatalTransferError(MediaFetchError):
    """Base for errors that end a transfer immediately."""


class ProxyError(FatalTransferError):
    """Raised when the upstream proxy refuses a CONNECT tunnel."""


class RateLimited(HttpError, FatalTransferError):
    """Raised on HTTP 429 or an explicit rate-limit response body."""

    retryable = False


class CaptchaRedirect(HttpError, FatalTransferError):
    """Raised when the origin redirects to a CAPTCHA or verification page."""

    retryable = False


class TooManyRedirects(FatalTransferError):
    """Raised when the redirect hop limit is exceeded."""


class TruncatedTransfer(FatalTransferError):
    """Raised when a transfer keeps ending short after the resume budget is spent."""

    def __init__(self, message: str, bytes_received: int, expected: int | None):
        super().__init__(message)
        self.bytes_received = bytes_received
        self.expected = expected


class RetriesExhausted(FatalTransferError):
    """Raised when the error budget runs out; wraps the last error seen."""

    def __init__(self, message: str, last_error: Exception | None = None):
        super().__init__(message)
        self.last_error = last_error


class SegmentFailed(FatalTransferError):
    """Raised when one segment of a parallel transfer fails."""

    def __init__(self, message: str, index: int):
        super().__init__(message)
        self.index = index


class CipherMismatch(MediaFetchError):
    """
    Diagnostic for a deciphered signature whose shape looks wrong.

    Returned by the resolver rather than raised, since the shape heuristic is
    not universally reliable.
    """


class UnknownCipherError(MediaFetchError):
    """Raised when a version key is not in the cipher table and cannot be synthesized."""


class SynthesisError(MediaFetchError):
    """Describes why a cipher program could not be derived from a player script."""


class ConfigurationError(MediaFetchError):
    """Raised for issues related to configuration loading or validation."""
