"""
================================================================================
Verification Reporter
================================================================================

Turns a failed assertion into a diagnostic payload:
    {message, expected, actual, url, title}

The reporter only builds data. Logging and Allure attachment are done by
the caller (see `attach_report`).

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import json
from dataclasses import asdict, dataclass
from typing import TYPE_CHECKING, Any, Callable, Dict, Optional

import allure
from loguru import logger

if TYPE_CHECKING:
    from .browser_session import BrowserSession


UNAVAILABLE = "<unavailable>"


@dataclass(frozen=True)
class VerificationReport:
    """Diagnostic payload for a failed verification."""

    message: str
    expected: Optional[str]
    actual: Optional[str]
    url: str
    title: str

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def _page_context(read: Callable[[], str], what: str) -> str:
    # Context is best-effort: a dead page must not hide the original failure
    try:
        return read()
    except Exception as e:
        logger.warning(f"Unable to read page {what} for failure report: {e}")
        return UNAVAILABLE


def build_verification_report(
    message: str,
    expected: Optional[str],
    actual: Optional[str],
    session: "BrowserSession",
) -> VerificationReport:
    """
    Build a verification report enriched with current page context.

    Args:
        message: What was being verified
        expected: Expected value
        actual: Observed value
        session: Browser session to read URL and title from

    Returns:
        VerificationReport
    """
    return VerificationReport(
        message=message,
        expected=expected,
        actual=actual,
        url=_page_context(session.current_url, "URL"),
        title=_page_context(session.current_title, "title"),
    )


def attach_report(report: VerificationReport, name: str = "Verification Failure") -> None:
    """Attach a report to the Allure results as JSON."""
    allure.attach(
        json.dumps(report.to_dict(), indent=2, default=str),
        name=name,
        attachment_type=allure.attachment_type.JSON,
    )


__all__ = [
    "VerificationReport",
    "build_verification_report",
    "attach_report",
    "UNAVAILABLE",
]
