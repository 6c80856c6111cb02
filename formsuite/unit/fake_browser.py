"""
In-memory BrowserSession for browser-free unit tests.

Elements are registered per (strategy, selector). A selector can be given
a sequence of snapshots: each find call consumes one snapshot and the last
one sticks, which models elements appearing late, being re-rendered
(stale references) or matching several nodes.

Misbehaving controls are modelled on the element:
    - write_failures: number of leading send_input calls silently ignored
    - clear_failures: number of leading clear_input calls silently ignored
    - transform: rewrites the value after each write (masked inputs)
"""

from __future__ import annotations

from typing import Callable, Dict, List, Optional, Sequence, Tuple

from formsuite.ui_testing.framework.errors import StaleElementError
from formsuite.ui_testing.framework.smart_locator import Strategy

NEVER = 10**6

BASE_URL = "https://forms.test"
INPUTS_URL = f"{BASE_URL}/inputs"
FIELD_SELECTOR = "input[type='number']"


class FakeElement:
    """A DOM node with just enough behaviour for form interactions."""

    def __init__(
        self,
        tag: str = "input",
        value: Optional[str] = "",
        text: str = "",
        attributes: Optional[Dict[str, str]] = None,
        displayed: bool = True,
        enabled: bool = True,
        write_failures: int = 0,
        clear_failures: int = 0,
        transform: Optional[Callable[[str], str]] = None,
        detach_on_send: bool = False,
    ):
        self.tag = tag
        self.value = value
        self.text = text
        self.attributes = dict(attributes or {})
        self.displayed = displayed
        self.enabled = enabled
        self.write_failures = write_failures
        self.clear_failures = clear_failures
        self.transform = transform
        self.detach_on_send = detach_on_send
        self.attached = True
        self.send_calls = 0
        self.clear_calls = 0
        self.clicks = 0

    def _ensure_attached(self) -> None:
        if not self.attached:
            raise StaleElementError("Element is not attached to the DOM")

    def detach(self) -> None:
        self.attached = False

    def get_attribute(self, name: str) -> Optional[str]:
        self._ensure_attached()
        if name == "value":
            return self.value
        return self.attributes.get(name)

    def send(self, text: str) -> None:
        self._ensure_attached()
        self.send_calls += 1
        if self.detach_on_send:
            self.detach()
            raise StaleElementError("Element is not attached to the DOM")
        if self.write_failures > 0:
            self.write_failures -= 1
            return
        value = (self.value or "") + text
        self.value = self.transform(value) if self.transform else value

    def clear(self) -> None:
        self._ensure_attached()
        self.clear_calls += 1
        if self.clear_failures > 0:
            self.clear_failures -= 1
            return
        self.value = ""

    def click(self) -> None:
        self._ensure_attached()
        self.clicks += 1


class FakePage:
    """A routable page: title plus its element registry."""

    def __init__(self, title: str = ""):
        self.title = title
        self.elements: Dict[Tuple[Strategy, str], List[List[FakeElement]]] = {}

    def add(self, strategy: str, selector: str, *elements: FakeElement) -> "FakePage":
        """Register elements a selector matches on every find."""
        self.elements[(Strategy(strategy), selector)] = [list(elements)]
        return self

    def add_sequence(
        self,
        strategy: str,
        selector: str,
        snapshots: Sequence[Sequence[FakeElement]],
    ) -> "FakePage":
        """Register successive find results; the last snapshot sticks."""
        self.elements[(Strategy(strategy), selector)] = [list(s) for s in snapshots]
        return self


class FakeBrowserSession:
    """
    BrowserSession implementation over FakePage objects.

    Usage:
        session = FakeBrowserSession()
        page = session.route("https://example.test/inputs", title="The Internet")
        page.add("css", "input[type='number']", FakeElement(attributes={"type": "number"}))
        session.navigate_to("https://example.test/inputs")
    """

    def __init__(self):
        self.pages: Dict[str, FakePage] = {}
        self.redirects: Dict[str, str] = {}
        self.url = "about:blank"
        self.page = FakePage()
        self.navigations: List[str] = []
        self.find_calls: List[Tuple[Strategy, str]] = []

    def route(self, url: str, title: str = "") -> FakePage:
        page = FakePage(title)
        self.pages[url] = page
        return page

    def redirect(self, source: str, target: str) -> None:
        self.redirects[source] = target

    # BrowserSession interface -------------------------------------------

    def navigate_to(self, url: str) -> None:
        self.navigations.append(url)
        self.url = self.redirects.get(url, url)
        self.page = self.pages.get(self.url, FakePage("Not Found"))

    def find_elements(self, strategy: Strategy, selector: str) -> List[FakeElement]:
        key = (Strategy(strategy), selector)
        self.find_calls.append(key)
        snapshots = self.page.elements.get(key)
        if not snapshots:
            return []
        if len(snapshots) > 1:
            return list(snapshots.pop(0))
        return list(snapshots[0])

    def get_attribute(self, ref: FakeElement, name: str) -> Optional[str]:
        return ref.get_attribute(name)

    def get_text(self, ref: FakeElement) -> Optional[str]:
        ref._ensure_attached()
        return ref.text

    def send_input(self, ref: FakeElement, text: str) -> None:
        ref.send(text)

    def clear_input(self, ref: FakeElement) -> None:
        ref.clear()

    def click(self, ref: FakeElement) -> None:
        ref.click()

    def is_displayed(self, ref: FakeElement) -> bool:
        ref._ensure_attached()
        return ref.displayed

    def is_enabled(self, ref: FakeElement) -> bool:
        ref._ensure_attached()
        return ref.enabled

    def current_url(self) -> str:
        return self.url

    def current_title(self) -> str:
        return self.page.title


class FakeClock:
    """Monotonic clock whose sleep advances time instantly."""

    def __init__(self, start: float = 0.0):
        self.now = start
        self.sleeps: List[float] = []

    def __call__(self) -> float:
        return self.now

    def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.now += seconds
