"""
Element handle: a resolved, live reference to one DOM node.

A handle is only valid for the engine call that resolved it. The page may
destroy and recreate the node between operations, so callers re-resolve
through the locator every time instead of keeping handles around.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Optional

if TYPE_CHECKING:
    from .browser_session import BrowserSession
    from .smart_locator import Locator, Strategy


@dataclass(frozen=True)
class ElementHandle:
    """
    Transient element reference bound to a browser session.

    Attributes:
        session: Browser session the element lives in
        ref: Provider-specific element reference
        locator: Locator that produced this handle
        strategy: Strategy that matched
        selector: Selector that matched
    """

    session: "BrowserSession"
    ref: Any
    locator: "Locator"
    strategy: "Strategy"
    selector: str

    @property
    def name(self) -> str:
        return self.locator.name

    @property
    def value(self) -> str:
        """Current value of the element; a missing value reads as ''."""
        value = self.session.get_attribute(self.ref, "value")
        return value if value is not None else ""

    @property
    def text(self) -> str:
        return self.session.get_text(self.ref) or ""

    def get_attribute(self, name: str) -> Optional[str]:
        return self.session.get_attribute(self.ref, name)

    def is_displayed(self) -> bool:
        return self.session.is_displayed(self.ref)

    def is_enabled(self) -> bool:
        return self.session.is_enabled(self.ref)

    def clear(self) -> None:
        self.session.clear_input(self.ref)

    def send_input(self, text: str) -> None:
        self.session.send_input(self.ref, text)

    def click(self) -> None:
        self.session.click(self.ref)

    def __str__(self) -> str:
        return f"{self.locator.name} ({self.strategy.value}={self.selector})"


__all__ = ["ElementHandle"]
