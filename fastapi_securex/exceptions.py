from typing import Any


class SecureXError(Exception):
    """Base class for all exceptions in FastAPI-SecureX."""


class ConfigurationError(SecureXError):
    """Exception raised for invalid or incomplete configuration."""


class SessionError(SecureXError):
    """Exception raised for session-related errors."""


class SessionNotStartedError(SessionError):
    """Exception raised when the session payload is used before start()."""


class SessionBackendError(SessionError):
    """Exception raised when the session storage backend fails."""


class CsrfMismatchError(SecureXError):
    """Exception raised when a state-changing request fails CSRF validation.

    Args:
        message: Human readable reason
        context: Audit context with ``ip``, ``user_agent``, ``path`` and ``method``
        status_code: HTTP status the error should be rendered with
    """

    def __init__(
        self,
        message: str = "CSRF token mismatch",
        context: dict[str, Any] | None = None,
        status_code: int = 403,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.context = context or {}
        self.status_code = status_code
