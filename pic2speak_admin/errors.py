from __future__ import annotations


class ConsoleError(Exception):
    pass


class ConfigError(ConsoleError):
    pass


class ValidationWarning(ConsoleError):
    """Client-side check failed; the request was never sent."""


class ApiError(ConsoleError):
    def __init__(self, message: str, status: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.status = status


class UnauthorizedError(ApiError):
    pass
