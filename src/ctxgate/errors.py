# src/ctxgate/errors.py
from enum import Enum
from typing import Optional


class ErrorCategory(Enum):
    UNKNOWN = "unknown"
    INVALID_REQUEST = "invalid_request"
    NOT_FOUND = "not_found"


class CtxGateError(Exception):
    """Base class for all ctxgate errors."""


class ConfigurationError(CtxGateError):
    pass


class APIError(CtxGateError):
    """
    Error raised by a tokenizer client that carries a user-facing message,
    a category and an optional suggestion.
    """

    def __init__(
        self,
        message: str,
        category: ErrorCategory = ErrorCategory.UNKNOWN,
        suggestion: str = "",
        original: Optional[BaseException] = None,
    ):
        super().__init__(message)
        self.message = message
        self.category = category
        self.suggestion = suggestion
        self.original = original

    def __str__(self) -> str:
        if self.original is not None:
            return f"{self.message}: {self.original}"
        return self.message

    def user_facing_error(self) -> str:
        text = self.message
        if self.suggestion:
            text += f"\n\nSuggestion: {self.suggestion}"
        return text


class TokenCheckError(CtxGateError):
    pass


class TokenLimitExceededError(CtxGateError):
    pass


def find_api_error(exc: Optional[BaseException]) -> Optional[APIError]:
    """Returns the first APIError in the exception's cause/context chain."""
    seen = set()
    while exc is not None and id(exc) not in seen:
        if isinstance(exc, APIError):
            return exc
        seen.add(id(exc))
        exc = exc.__cause__ or exc.__context__
    return None
