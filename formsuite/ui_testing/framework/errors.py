"""
================================================================================
Harness Errors
================================================================================

Error taxonomy for form-field interactions.

Every error is terminal for the operation that raised it. The only retries
in the framework are the single readback retries of `set_value` and `clear`,
and those happen before any of these errors is raised.

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING, Optional, Sequence, Tuple

if TYPE_CHECKING:
    from .reporter import VerificationReport


def redact(value: Optional[str], masked: bool) -> Optional[str]:
    """Star out a secret value for messages; None and plain values pass through."""
    if masked and value is not None:
        return "*" * len(value)
    return value


class ErrorKind(str, Enum):
    """Machine-readable failure category carried by every harness error."""

    TIMEOUT = "timeout"
    NAVIGATION = "navigation"
    INPUT_MISMATCH = "input_mismatch"
    CLEAR = "clear"
    VERIFICATION = "verification"
    LOCATOR_AMBIGUITY = "locator_ambiguity"
    STALE_ELEMENT = "stale_element"


class HarnessError(Exception):
    """Base class for all harness failures."""

    kind: ErrorKind


class WaitTimeoutError(HarnessError, TimeoutError):
    """Raised when a wait condition is not satisfied before its deadline."""

    kind = ErrorKind.TIMEOUT

    def __init__(
        self,
        condition: str,
        timeout: float,
        reason: str,
        locator_name: Optional[str] = None,
    ):
        self.condition = condition
        self.timeout = timeout
        self.reason = reason
        self.locator_name = locator_name
        target = f" for '{locator_name}'" if locator_name else ""
        super().__init__(
            f"Timed out after {timeout:.1f}s waiting{target} to be {condition}: {reason}"
        )


class NavigationError(HarnessError):
    """Raised when navigation does not land on the expected, ready page."""

    kind = ErrorKind.NAVIGATION

    def __init__(
        self,
        url: str,
        reason: str,
        expected_path: Optional[str] = None,
        current_url: Optional[str] = None,
    ):
        self.url = url
        self.reason = reason
        self.expected_path = expected_path
        self.current_url = current_url
        message = f"Navigation to {url} failed: {reason}"
        if current_url is not None:
            message += f" (current URL: {current_url})"
        super().__init__(message)


class InputMismatchError(HarnessError):
    """Raised when a written value still reads back wrong after the retry."""

    kind = ErrorKind.INPUT_MISMATCH

    def __init__(
        self,
        field: str,
        expected: str,
        actual: Optional[str],
        masked: bool = False,
    ):
        self.field = field
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"Field '{field}' did not accept input: expected '{redact(expected, masked)}', "
            f"read back '{redact(actual, masked)}'"
        )


class ClearError(HarnessError):
    """Raised when a field still holds a value after clear and its retry."""

    kind = ErrorKind.CLEAR

    def __init__(self, field: str, residual_value: Optional[str], masked: bool = False):
        self.field = field
        self.residual_value = residual_value
        super().__init__(
            f"Field '{field}' was not cleared: "
            f"residual value '{redact(residual_value, masked)}'"
        )


class VerificationFailure(HarnessError, AssertionError):
    """
    Raised when an assertion on page state fails.

    Subclasses AssertionError so pytest reports it as a plain test failure.
    The attached report carries expected/actual values and page context.
    With `masked`, the message stars both values; `report` keeps them.
    """

    kind = ErrorKind.VERIFICATION

    def __init__(self, report: "VerificationReport", masked: bool = False):
        self.report = report
        super().__init__(
            f"{report.message}: expected '{redact(report.expected, masked)}', "
            f"actual '{redact(report.actual, masked)}' "
            f"[url={report.url}, title={report.title}]"
        )


class LocatorAmbiguityError(HarnessError):
    """
    Raised when no strategy of a locator matches exactly one element.

    `match_counts` holds the number of matches per strategy, in order.
    A total of zero means the element is absent.
    """

    kind = ErrorKind.LOCATOR_AMBIGUITY

    def __init__(self, locator_name: str, match_counts: Sequence[Tuple[str, int]]):
        self.locator_name = locator_name
        self.match_counts = tuple(match_counts)
        details = ", ".join(f"{strategy}={count}" for strategy, count in self.match_counts)
        if self.match_count == 0:
            summary = "no element matched"
        else:
            summary = "no strategy matched exactly one element"
        super().__init__(f"Locator '{locator_name}': {summary} ({details})")

    @property
    def match_count(self) -> int:
        return sum(count for _, count in self.match_counts)


class StaleElementError(HarnessError):
    """Raised by a browser session when a resolved element left the DOM."""

    kind = ErrorKind.STALE_ELEMENT

    def __init__(self, message: str = "Element is no longer attached to the DOM"):
        super().__init__(message)


__all__ = [
    "ErrorKind",
    "HarnessError",
    "WaitTimeoutError",
    "NavigationError",
    "InputMismatchError",
    "ClearError",
    "VerificationFailure",
    "LocatorAmbiguityError",
    "StaleElementError",
]
