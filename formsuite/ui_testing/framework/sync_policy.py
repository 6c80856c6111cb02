# ================================================================================
# Sync Policy Module
# ================================================================================
#
# The single synchronization point of the framework. Every interaction first
# waits here until its element condition holds, which absorbs rendering
# latency (asynchronous DOM updates, re-renders, late enabling).
#
# Key Features:
#   - Element / page-load timeouts and poll interval as one explicit value
#   - Present / visible / clickable conditions with failure reasons
#   - Bounded sleep-and-recheck polling with a hard deadline
#   - Injectable clock and sleep for deterministic tests
#
# Usage:
#   policy = SyncPolicy(element_timeout=10)
#   handle = policy.wait_until(ElementClickable(resolver, number_input))
#
# ================================================================================

from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Callable, Optional

from loguru import logger

from .element_handle import ElementHandle
from .errors import LocatorAmbiguityError, StaleElementError, WaitTimeoutError
from .smart_locator import Locator, LocatorResolver

if TYPE_CHECKING:
    from .config_loader import HarnessConfig


# Failure reasons reported by conditions
REASON_ABSENT = "element absent"
REASON_NOT_VISIBLE = "present but not visible"
REASON_DISABLED = "present but disabled"
REASON_STALE = "element went stale"


@dataclass(frozen=True)
class CheckResult:
    """
    Result of a single condition check.

    Attributes:
        satisfied: Whether the condition holds
        handle: Resolved element when satisfied
        reason: Why the condition does not hold (empty when satisfied)
    """

    satisfied: bool
    handle: Optional[ElementHandle] = None
    reason: str = ""


class ElementPresent:
    """Condition: the locator resolves to exactly one element."""

    name = "present"

    def __init__(self, resolver: LocatorResolver, locator: Locator):
        self.resolver = resolver
        self.locator = locator

    def __call__(self) -> CheckResult:
        try:
            handle = self.resolver.resolve(self.locator)
            return self._check(handle)
        except LocatorAmbiguityError as e:
            # Several matches is a locator bug, not latency: surface it now
            if e.match_count > 0:
                raise
            return CheckResult(False, reason=REASON_ABSENT)
        except StaleElementError:
            return CheckResult(False, reason=REASON_STALE)

    def _check(self, handle: ElementHandle) -> CheckResult:
        return CheckResult(True, handle=handle)


class ElementVisible(ElementPresent):
    """Condition: the element is present and displayed."""

    name = "visible"

    def _check(self, handle: ElementHandle) -> CheckResult:
        if not handle.is_displayed():
            return CheckResult(False, reason=REASON_NOT_VISIBLE)
        return CheckResult(True, handle=handle)


class ElementClickable(ElementVisible):
    """Condition: the element is displayed and enabled."""

    name = "clickable"

    def _check(self, handle: ElementHandle) -> CheckResult:
        check = super()._check(handle)
        if not check.satisfied:
            return check
        if not handle.is_enabled():
            return CheckResult(False, reason=REASON_DISABLED)
        return check


@dataclass
class SyncPolicy:
    """
    Wait configuration and polling loop.

    Attributes:
        element_timeout: Default deadline for element conditions, in seconds
        page_load_timeout: Deadline for the page-ready element after navigation
        poll_interval: Sleep between condition checks, in seconds
    """

    element_timeout: float = 15.0
    page_load_timeout: float = 30.0
    poll_interval: float = 0.5
    clock: Callable[[], float] = field(default=time.monotonic, repr=False)
    sleep: Callable[[float], None] = field(default=time.sleep, repr=False)

    def __post_init__(self) -> None:
        for name in ("element_timeout", "page_load_timeout", "poll_interval"):
            value = getattr(self, name)
            if value <= 0:
                raise ValueError(f"{name} must be positive, got {value}")

    @classmethod
    def from_config(cls, config: "HarnessConfig", **overrides) -> "SyncPolicy":
        """
        Build a policy from harness configuration.

        Keyword overrides (timeouts, clock, sleep) win over config values.
        """
        values = {
            "element_timeout": config.element_timeout,
            "page_load_timeout": config.page_load_timeout,
            "poll_interval": config.poll_interval,
        }
        values.update(overrides)
        return cls(**values)

    def wait_until(
        self,
        condition: Callable[[], CheckResult],
        timeout: Optional[float] = None,
    ) -> ElementHandle:
        """
        Poll a condition until it holds or the deadline passes.

        The condition is always checked at least once, so a zero-latency page
        never sleeps.

        Args:
            condition: Callable returning a CheckResult (ElementPresent etc.)
            timeout: Deadline in seconds; defaults to element_timeout

        Returns:
            The resolved ElementHandle

        Raises:
            WaitTimeoutError: Deadline passed; carries the last failure reason
            LocatorAmbiguityError: The locator matched several elements
        """
        timeout = self.element_timeout if timeout is None else timeout
        condition_name = getattr(condition, "name", "satisfied")
        locator = getattr(condition, "locator", None)
        locator_name = locator.name if locator is not None else None

        deadline = self.clock() + timeout
        attempt = 0

        while True:
            attempt += 1
            check = condition()

            if check.satisfied:
                if attempt > 1:
                    logger.debug(
                        f"'{locator_name}' became {condition_name} after {attempt} checks"
                    )
                return check.handle

            remaining = deadline - self.clock()
            if remaining <= 0:
                error = WaitTimeoutError(
                    condition=condition_name,
                    timeout=timeout,
                    reason=check.reason,
                    locator_name=locator_name,
                )
                logger.error(str(error))
                raise error

            logger.debug(
                f"Check {attempt}: '{locator_name}' not {condition_name} "
                f"({check.reason}). Waiting {self.poll_interval:.2f}s..."
            )
            self.sleep(min(self.poll_interval, remaining))


__all__ = [
    "CheckResult",
    "ElementPresent",
    "ElementVisible",
    "ElementClickable",
    "SyncPolicy",
    "REASON_ABSENT",
    "REASON_NOT_VISIBLE",
    "REASON_DISABLED",
    "REASON_STALE",
]
