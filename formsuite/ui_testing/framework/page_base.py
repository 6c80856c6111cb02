"""
================================================================================
Page Session
================================================================================

Foundation class for Page Object Model implementation.

A PageSession binds one logical page to:
    - a browser session (provisioned and closed by the caller)
    - a fixed map of logical field name -> Locator
    - an InteractionEngine performing verified, synchronized operations

Mutating and verifying calls return the same session so scenarios read as
a chain. The session itself never changes: the field map is frozen at
construction and no operation result is stored on it.

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import os
from types import MappingProxyType
from typing import Dict, Mapping, Optional

from loguru import logger

from .browser_session import BrowserSession
from .interaction_engine import InteractionEngine
from .smart_locator import Locator, LocatorResolver
from .sync_policy import SyncPolicy


class PageSession:
    """
    Base class for all page objects.

    Usage:
        class InputsPage(PageSession):
            URL_PATH = "/inputs"
            READY_FIELD = "page_header"
            FIELDS = {
                "page_header": Locator.of("page_header", ("css", "h3")),
                "number_input": Locator.of("number_input", ("css", "input[type='number']")),
            }

        page = InputsPage(session, base_url="https://the-internet.herokuapp.com")
        page.open().set_value("number_input", "123").assert_equals("number_input", "123")
    """

    # Override in subclasses
    URL_PATH: str = "/"
    READY_FIELD: Optional[str] = None
    FIELDS: Dict[str, Locator] = {}

    def __init__(
        self,
        session: BrowserSession,
        fields: Optional[Mapping[str, Locator]] = None,
        *,
        base_url: str = "",
        policy: Optional[SyncPolicy] = None,
        path: Optional[str] = None,
        ready_field: Optional[str] = None,
    ):
        """
        Initialize page session.

        Args:
            session: Browser session (externally owned)
            fields: Logical field name -> Locator; defaults to class FIELDS
            base_url: Base URL for the application (UI_BASE_URL env if empty)
            policy: Wait configuration shared by every operation
            path: URL path of this page; defaults to class URL_PATH
            ready_field: Field marking the page as loaded; defaults to READY_FIELD
        """
        self.session = session
        if not base_url:
            base_url = os.getenv("UI_BASE_URL", "https://the-internet.herokuapp.com")
        self.base_url = base_url.rstrip("/")
        self.path = path if path is not None else self.URL_PATH
        self.ready_field = ready_field if ready_field is not None else self.READY_FIELD

        field_map = dict(self.FIELDS if fields is None else fields)
        if self.ready_field is not None and self.ready_field not in field_map:
            raise ValueError(
                f"{type(self).__name__}: ready field '{self.ready_field}' is not a declared field"
            )
        self._fields: Mapping[str, Locator] = MappingProxyType(field_map)

        self.resolver = LocatorResolver(session)
        self.engine = InteractionEngine(session, policy or SyncPolicy(), self.resolver)

    @property
    def fields(self) -> Mapping[str, Locator]:
        """Read-only view of the field map."""
        return self._fields

    @property
    def url(self) -> str:
        """Get full page URL."""
        return f"{self.base_url}{self.path}"

    def locator(self, field: str) -> Locator:
        """
        Look up the locator of a logical field.

        Raises:
            KeyError: Field is not declared on this page
        """
        try:
            return self._fields[field]
        except KeyError:
            raise KeyError(
                f"{type(self).__name__} has no field '{field}'. "
                f"Known fields: {', '.join(sorted(self._fields))}"
            ) from None

    # =========================================================================
    # Navigation
    # =========================================================================

    def open(self) -> "PageSession":
        """Navigate to this page and wait until its ready field is present."""
        return self.navigate(self.url, expected_path=self.path)

    def navigate(
        self,
        url: str,
        ready_field: Optional[str] = None,
        expected_path: Optional[str] = None,
    ) -> "PageSession":
        """
        Navigate to a URL and wait for a ready field.

        Args:
            url: Absolute URL
            ready_field: Field marking the page as loaded; defaults to the page's
            expected_path: Segment the resulting URL must contain
        """
        ready_field = ready_field or self.ready_field
        if ready_field is None:
            raise ValueError(f"{type(self).__name__}: no ready field to wait for after navigation")
        self.engine.navigate(url, self.locator(ready_field), expected_path=expected_path)
        return self

    # =========================================================================
    # Field Operations
    # =========================================================================

    def set_value(self, field: str, text: str) -> "PageSession":
        """Write a value and confirm it by readback."""
        self.engine.set_value(self.locator(field), text)
        return self

    def clear(self, field: str) -> "PageSession":
        """Clear a field and confirm it is empty."""
        self.engine.clear(self.locator(field))
        return self

    def click(self, field: str) -> "PageSession":
        """Click an element once it is clickable."""
        self.engine.click(self.locator(field))
        return self

    def read_value(self, field: str) -> str:
        """Current value of a field ('' when it has none)."""
        return self.engine.read_value(self.locator(field))

    def read_text(self, field: str) -> str:
        """Visible text of an element."""
        return self.engine.read_text(self.locator(field))

    def is_displayed(self, field: str) -> bool:
        """Whether an element is visible right now (no waiting)."""
        return self.engine.is_displayed(self.locator(field))

    # =========================================================================
    # Verifications
    # =========================================================================

    def assert_equals(self, field: str, expected: str) -> "PageSession":
        self.engine.assert_equals(self.locator(field), expected)
        return self

    def assert_empty(self, field: str) -> "PageSession":
        self.engine.assert_empty(self.locator(field))
        return self

    def assert_field_type(self, field: str, expected_type: str) -> "PageSession":
        self.engine.assert_field_type(self.locator(field), expected_type)
        return self

    def assert_text_contains(self, field: str, fragment: str) -> "PageSession":
        self.engine.assert_text_contains(self.locator(field), fragment)
        return self

    # =========================================================================
    # Page Context
    # =========================================================================

    @property
    def current_url(self) -> str:
        return self.session.current_url()

    @property
    def title(self) -> str:
        return self.session.current_title()

    def locator_health_report(self) -> str:
        """Get locator health report for this page's resolutions."""
        report = self.resolver.get_health_report()
        logger.debug(report)
        return report


__all__ = [
    "PageSession",
]
