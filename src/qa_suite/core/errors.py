# src/qa_suite/core/errors.py
from __future__ import annotations

from typing import Optional


class QaSuiteError(Exception):
    """Base class for errors raised by the suite's helpers."""


class ConfigError(QaSuiteError):
    """Raised when project configuration cannot be resolved."""


class ParseError(QaSuiteError):
    """
    Response body was expected to be JSON but could not be parsed.

    `cause` is the underlying decoder message.
    """

    def __init__(self, cause: str, *, response_text: Optional[str] = None) -> None:
        self.cause = cause
        self.response_text = response_text
        super().__init__(f"Failed to parse JSON response: {cause}")


class StatusMismatchError(QaSuiteError):
    def __init__(self, *, expected_status: int, actual_status: int, response_text: str) -> None:
        self.expected_status = expected_status
        self.actual_status = actual_status
        self.response_text = response_text
        super().__init__(
            f"Expected status {expected_status}, got {actual_status}. Response: {response_text}"
        )


class ConditionTimeoutError(QaSuiteError, TimeoutError):
    """
    A poll loop ran past its deadline without the condition becoming true.
    Subclasses the builtin TimeoutError so callers can catch either.
    """

    def __init__(self, timeout_ms: int) -> None:
        self.timeout_ms = timeout_ms
        super().__init__(f"Condition not met within {timeout_ms}ms")
