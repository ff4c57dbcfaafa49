"""Resolution error types and codes."""

from __future__ import annotations

from enum import Enum


class ResolveErrorCode(str, Enum):
    PARSE_ERROR = "PARSE_ERROR"
    NOT_FOUND = "NOT_FOUND"
    ANCHOR_NOT_FOUND = "ANCHOR_NOT_FOUND"
    BACKEND_ERROR = "BACKEND_ERROR"
    INVALID_SELECTOR = "INVALID_SELECTOR"
    DEADLINE_EXCEEDED = "DEADLINE_EXCEEDED"


class ResolveError(Exception):
    """Base class for selector resolution failures.

    Retryable errors are swallowed by the poll loop until the deadline; the
    rest abort the resolution immediately. ``internal`` marks a message that
    carries transport or server text, which is left out of the final error
    shown to the caller.
    """

    code = ResolveErrorCode.NOT_FOUND
    retryable = True
    internal = False

    def __init__(self, message: str, internal: bool | None = None) -> None:
        super().__init__(message)
        self.message = message
        if internal is not None:
            self.internal = internal

    def with_context(self, description: str, timeout_ms: int) -> "ResolveError":
        """Return a copy of this error worded for the caller."""
        summary = f"Element not found: {description} (timeout {timeout_ms}ms)"
        if self.internal:
            return type(self)(summary, internal=True)
        return type(self)(f"{summary}: {self.message}")


class ParseError(ResolveError):
    """The hierarchy dump is not a well-formed UI hierarchy."""

    code = ResolveErrorCode.PARSE_ERROR


class NotFoundError(ResolveError):
    """No element matched the selector in this attempt."""

    code = ResolveErrorCode.NOT_FOUND


class AnchorNotFoundError(ResolveError):
    """The anchor of a relative selector is absent in this attempt."""

    code = ResolveErrorCode.ANCHOR_NOT_FOUND


class BackendError(ResolveError):
    """The automation server failed to answer a query."""

    code = ResolveErrorCode.BACKEND_ERROR
    internal = True


class InvalidSelectorError(ResolveError):
    """The selector cannot be resolved no matter how long we wait."""

    code = ResolveErrorCode.INVALID_SELECTOR
    retryable = False


class DeadlineExceededError(ResolveError):
    code = ResolveErrorCode.DEADLINE_EXCEEDED
    retryable = False


class SelectorSchemaError(ValueError):
    def __init__(self, message: str, errors: list[str] | None = None) -> None:
        super().__init__(message)
        self.errors = errors or []
