"""Custom exception classes for structured error handling."""

from typing import Any


class LinguaflowError(Exception):
    """Base exception for all request-level errors.

    ``message`` is always safe to show to the caller; raw upstream
    error text never goes here.
    """

    def __init__(
        self,
        code: str,
        message: str,
        status_code: int = 500,
        headers: dict[str, str] | None = None,
    ) -> None:
        self.code = code
        self.message = message
        self.status_code = status_code
        self.headers = headers or {}
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        return {"error": self.message}


class MissingInputError(LinguaflowError):
    def __init__(
        self,
        message: str = "A message is required. Provide the 'message' query parameter.",
    ) -> None:
        super().__init__(code="MISSING_INPUT", message=message, status_code=400)


class InvalidInputError(LinguaflowError):
    def __init__(self, message: str = "The message is not valid.") -> None:
        super().__init__(code="INVALID_INPUT", message=message, status_code=400)


class UnsupportedLanguageError(LinguaflowError):
    def __init__(self, message: str = "Unsupported language") -> None:
        super().__init__(code="UNSUPPORTED_LANGUAGE", message=message, status_code=400)


class RateLimitExceededError(LinguaflowError):
    def __init__(
        self,
        message: str = "Too many requests. Please try again later.",
        retry_after: int = 60,
    ) -> None:
        self.retry_after = retry_after
        super().__init__(
            code="RATE_LIMIT_EXCEEDED",
            message=message,
            status_code=429,
            headers={"Retry-After": str(retry_after)},
        )


class ExternalServiceError(LinguaflowError):
    def __init__(self, message: str = "Processing failed.") -> None:
        super().__init__(code="EXTERNAL_SERVICE_ERROR", message=message, status_code=500)


class StartupConfigError(RuntimeError):
    """Fatal configuration problem detected while the app is starting."""


class RedisConnectionError(LinguaflowError):
    def __init__(self, message: str = "Rate limit store unavailable") -> None:
        super().__init__(code="REDIS_CONNECTION_ERROR", message=message, status_code=503)
