"""
================================================================================
Browser Session Provider
================================================================================

The narrow browser interface the interaction core depends on, and its
Playwright implementation.

The core never launches or closes a browser. A session is provisioned by
the caller (test fixture, script) and handed in; its lifetime is managed
outside this package.

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import json
from contextlib import contextmanager
from typing import Any, Iterator, List, Optional, Protocol, runtime_checkable

from loguru import logger
from playwright.sync_api import Error as PlaywrightError
from playwright.sync_api import Page

from .errors import NavigationError, StaleElementError
from .smart_locator import Strategy


@runtime_checkable
class BrowserSession(Protocol):
    """
    Browser operations consumed by the interaction core.

    Element references are opaque to the core; they are only passed back
    to the same session. `find_elements` returns every match so callers can
    tell "absent", "unique" and "ambiguous" apart.
    """

    def navigate_to(self, url: str) -> None: ...

    def find_elements(self, strategy: Strategy, selector: str) -> List[Any]: ...

    def get_attribute(self, ref: Any, name: str) -> Optional[str]: ...

    def get_text(self, ref: Any) -> Optional[str]: ...

    def send_input(self, ref: Any, text: str) -> None: ...

    def clear_input(self, ref: Any) -> None: ...

    def click(self, ref: Any) -> None: ...

    def is_displayed(self, ref: Any) -> bool: ...

    def is_enabled(self, ref: Any) -> bool: ...

    def current_url(self) -> str: ...

    def current_title(self) -> str: ...


# Playwright selector engine per strategy
SELECTOR_ENGINES = {
    Strategy.CSS: "css={}",
    Strategy.XPATH: "xpath={}",
    Strategy.ID: "id={}",
    Strategy.TEST_ID: "data-testid={}",
    Strategy.TEXT: "text={}",
    Strategy.TAG: "css={}",
}

# Fragments of Playwright error messages raised for detached elements
_DETACHED_MARKERS = (
    "not attached to the dom",
    "element is detached",
    "handle is disposed",
)

_FORM_CONTROLS = ("input", "textarea", "select")


def to_playwright_selector(strategy: Strategy, selector: str) -> str:
    """
    Convert a (strategy, selector) pair to a Playwright selector string.

    Examples:
        >>> to_playwright_selector(Strategy.XPATH, "//h3")
        'xpath=//h3'
        >>> to_playwright_selector(Strategy.NAME, "username")
        'css=[name="username"]'
    """
    strategy = Strategy(strategy)
    if strategy is Strategy.NAME:
        return f"css=[name={json.dumps(selector)}]"
    return SELECTOR_ENGINES[strategy].format(selector)


@contextmanager
def _element_errors() -> Iterator[None]:
    """Translate Playwright detached-element errors to StaleElementError."""
    try:
        yield
    except PlaywrightError as e:
        message = str(e).lower()
        if any(marker in message for marker in _DETACHED_MARKERS):
            raise StaleElementError(str(e).splitlines()[0]) from e
        raise


class PlaywrightBrowserSession:
    """
    BrowserSession backed by a Playwright sync-API page.

    Element references are Playwright ElementHandles: live pointers to DOM
    nodes that go stale when the page re-renders them.

    Usage:
        with sync_playwright() as p:
            page = p.chromium.launch().new_page()
            session = PlaywrightBrowserSession(page, navigation_timeout=30)
            InputsPage(session, base_url="https://the-internet.herokuapp.com").open()
    """

    def __init__(
        self,
        page: Page,
        navigation_timeout: float = 30.0,
        action_timeout: float = 5.0,
        wait_until: str = "load",
    ):
        """
        Args:
            page: Playwright Page object (owned by the caller)
            navigation_timeout: goto() timeout in seconds
            action_timeout: click() timeout in seconds
            wait_until: Load state goto() waits for
        """
        self.page = page
        self.navigation_timeout = navigation_timeout
        self.action_timeout = action_timeout
        self.wait_until = wait_until

    def navigate_to(self, url: str) -> None:
        try:
            self.page.goto(
                url,
                wait_until=self.wait_until,
                timeout=self.navigation_timeout * 1000,
            )
        except PlaywrightError as e:
            raise NavigationError(url, reason=str(e).splitlines()[0]) from e
        logger.debug(f"Navigated to: {url}")

    def find_elements(self, strategy: Strategy, selector: str) -> List[Any]:
        return self.page.query_selector_all(to_playwright_selector(strategy, selector))

    def get_attribute(self, ref: Any, name: str) -> Optional[str]:
        with _element_errors():
            # The live value of a form control is a property, not the attribute
            if name == "value":
                tag = ref.evaluate("el => el.tagName.toLowerCase()")
                if tag in _FORM_CONTROLS:
                    return ref.input_value()
            return ref.get_attribute(name)

    def get_text(self, ref: Any) -> Optional[str]:
        with _element_errors():
            return ref.text_content()

    def send_input(self, ref: Any, text: str) -> None:
        with _element_errors():
            ref.focus()
            self.page.keyboard.type(text)

    def clear_input(self, ref: Any) -> None:
        with _element_errors():
            ref.fill("")

    def click(self, ref: Any) -> None:
        with _element_errors():
            ref.click(timeout=self.action_timeout * 1000)

    def is_displayed(self, ref: Any) -> bool:
        with _element_errors():
            return ref.is_visible()

    def is_enabled(self, ref: Any) -> bool:
        with _element_errors():
            return ref.is_enabled()

    def current_url(self) -> str:
        return self.page.url

    def current_title(self) -> str:
        return self.page.title()


__all__ = [
    "BrowserSession",
    "PlaywrightBrowserSession",
    "to_playwright_selector",
    "SELECTOR_ENGINES",
]
