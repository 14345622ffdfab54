from __future__ import annotations

from typing import Any, TypeVar

__all__ = [
    "ApiError",
    "BotError",
    "HttpError",
    "MissingContext",
    "RequestAborted",
    "require",
]

T = TypeVar("T")


class BotError(Exception):
    pass


class MissingContext(BotError):
    """The update carries no value an operation needs (chat, message, sender...)."""

    def __init__(self, operation: str) -> None:
        super().__init__(f"Missing information for API call to {operation}")
        self.operation = operation


class ApiError(BotError):
    def __init__(
        self,
        method: str,
        *,
        error_code: int | None = None,
        description: str | None = None,
        parameters: dict[str, Any] | None = None,
    ) -> None:
        detail = description or "unknown error"
        if error_code is not None:
            detail = f"{error_code}: {detail}"
        super().__init__(f"Call to {method} failed! ({detail})")
        self.method = method
        self.error_code = error_code
        self.description = description
        self.parameters = parameters or {}

    @property
    def retry_after(self) -> float | None:
        value = self.parameters.get("retry_after")
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return float(value)
        return None


class HttpError(BotError):
    def __init__(self, method: str, reason: str) -> None:
        super().__init__(f"Network request for {method} failed: {reason}")
        self.method = method
        self.reason = reason


class RequestAborted(BotError):
    def __init__(self, method: str) -> None:
        super().__init__(f"Request to {method} was aborted")
        self.method = method


def require(value: T | None, operation: str) -> T:
    if value is None:
        raise MissingContext(operation)
    return value
