"""Completion client exceptions."""


class CompletionClientError(Exception):
    """Base exception for completion client errors."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class ConfigurationError(CompletionClientError):
    """Missing credential or invalid settings."""

    pass


class TransportError(CompletionClientError):
    """Connection, DNS, TLS failure or transport timeout."""

    pass


class ServiceError(CompletionClientError):
    """Remote service answered with a non-2xx status."""

    def __init__(self, message: str, status_code: int) -> None:
        super().__init__(message, status_code=status_code)


class AuthenticationError(ServiceError):
    """Authentication failed (401)."""

    def __init__(self, message: str) -> None:
        super().__init__(message, status_code=401)


class RateLimitError(ServiceError):
    """Rate limit exceeded (429)."""

    def __init__(self, message: str, retry_after: float | None = None) -> None:
        super().__init__(message, status_code=429)
        self.retry_after = retry_after


class ServerError(ServiceError):
    """Server error (5xx)."""

    pass


class DecodeError(CompletionClientError):
    """Response body is not valid JSON or does not match the expected shape."""

    pass
