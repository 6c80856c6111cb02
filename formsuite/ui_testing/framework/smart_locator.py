"""
================================================================================
Smart Locator with Ordered Fallback Strategies
================================================================================

Element location for form-field interactions:
    - Immutable locators with an ordered list of (strategy, selector) pairs
    - Fallback to the next strategy when one does not match exactly one element
    - Zero or several matches reported as a distinguishable failure
    - Locator health tracking for maintenance insights

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Dict, List, Optional, Tuple, Union

from loguru import logger

from .element_handle import ElementHandle
from .errors import LocatorAmbiguityError

if TYPE_CHECKING:
    from .browser_session import BrowserSession


class Strategy(str, Enum):
    """
    Supported locator strategies.

    Recommended priority order:
        1. test_id (data-testid, most stable)
        2. id / name
        3. css
        4. text
        5. xpath (last resort)
    """

    CSS = "css"
    XPATH = "xpath"
    ID = "id"
    NAME = "name"
    TEST_ID = "test_id"
    TEXT = "text"
    TAG = "tag"


StrategyLike = Union[Strategy, str]


@dataclass(frozen=True)
class Locator:
    """
    Immutable description of how to find one element.

    Attributes:
        name: Human-readable element name used in logs and errors
        strategies: Ordered (strategy, selector) pairs, primary first

    Usage:
        >>> number_input = Locator.of(
        ...     "number_input",
        ...     ("xpath", "//input[@type='number']"),
        ...     ("css", "input[type='number']"),
        ... )
    """

    name: str
    strategies: Tuple[Tuple[Strategy, str], ...]

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("Locator name must not be empty")
        if not self.strategies:
            raise ValueError(f"Locator '{self.name}' needs at least one strategy")

        normalized = []
        for strategy, selector in self.strategies:
            try:
                strategy = Strategy(strategy)
            except ValueError:
                raise ValueError(
                    f"Locator '{self.name}': unknown strategy '{strategy}'. "
                    f"Supported: {', '.join(s.value for s in Strategy)}"
                ) from None
            if not selector:
                raise ValueError(
                    f"Locator '{self.name}': empty selector for strategy '{strategy.value}'"
                )
            normalized.append((strategy, selector))
        # Frozen dataclass: normalise through object.__setattr__
        object.__setattr__(self, "strategies", tuple(normalized))

    @classmethod
    def of(cls, name: str, *strategies: Tuple[StrategyLike, str]) -> "Locator":
        """Build a locator from (strategy, selector) pairs, primary first."""
        return cls(name=name, strategies=tuple(strategies))

    @property
    def primary(self) -> Tuple[Strategy, str]:
        return self.strategies[0]

    def __str__(self) -> str:
        return self.name


@dataclass
class LocatorHealth:
    """A resolution that skipped the primary strategy (maintenance candidate)."""

    element_name: str
    primary_selector: str
    used_fallback: bool = False
    fallback_strategy: Optional[str] = None
    fallback_selector: Optional[str] = None


class LocatorResolver:
    """
    Resolves locators against a browser session.

    Each call queries the page afresh; nothing is cached between calls.
    Strategies are tried in order and the first one that matches exactly
    one element wins. When none does, `LocatorAmbiguityError` carries the
    match count of every strategy.

    Usage:
        >>> resolver = LocatorResolver(session)
        >>> handle = resolver.resolve(number_input)
        >>> handle.value
        '123'
    """

    def __init__(self, session: "BrowserSession"):
        self.session = session
        self._fallback_used: Dict[str, LocatorHealth] = {}

    def resolve(self, locator: Locator) -> ElementHandle:
        """
        Resolve a locator to exactly one live element.

        Args:
            locator: Locator to resolve

        Returns:
            ElementHandle for the single matched element

        Raises:
            LocatorAmbiguityError: When no strategy matches exactly one element
        """
        match_counts: List[Tuple[str, int]] = []

        for index, (strategy, selector) in enumerate(locator.strategies):
            refs = self.session.find_elements(strategy, selector)
            match_counts.append((f"{strategy.value}:{selector}", len(refs)))
            if len(refs) != 1:
                continue

            self._record(locator, index, strategy, selector)
            return ElementHandle(
                session=self.session,
                ref=refs[0],
                locator=locator,
                strategy=strategy,
                selector=selector,
            )

        raise LocatorAmbiguityError(locator.name, match_counts)

    def _record(self, locator: Locator, index: int, strategy: Strategy, selector: str) -> None:
        if index == 0:
            logger.debug(f"✅ Element '{locator.name}' found: {strategy.value}={selector}")
            return

        primary_strategy, primary_selector = locator.primary
        logger.warning(
            f"⚠️ Element '{locator.name}' used fallback: "
            f"{strategy.value} -> {selector}"
        )
        # One entry per element: waits resolve the same locator on every poll
        self._fallback_used[locator.name] = LocatorHealth(
            element_name=locator.name,
            primary_selector=f"{primary_strategy.value}={primary_selector}",
            used_fallback=True,
            fallback_strategy=strategy.value,
            fallback_selector=selector,
        )

    @property
    def fallback_records(self) -> List[LocatorHealth]:
        """Latest fallback resolution per element name."""
        return list(self._fallback_used.values())

    def get_health_report(self) -> str:
        """Human-readable list of locators whose primary strategy missed."""
        if not self._fallback_used:
            return "✅ Every locator resolved on its primary strategy."

        report_lines = [
            "⚠️ Locators resolved through a fallback strategy:",
            "",
        ]

        for element_name, health in self._fallback_used.items():
            report_lines.extend([
                f"  [{element_name}]",
                f"    primary missed: {health.primary_selector}",
                f"    resolved by:    {health.fallback_strategy}={health.fallback_selector}",
                "",
            ])

        return "\n".join(report_lines)


__all__ = [
    "Strategy",
    "Locator",
    "LocatorHealth",
    "LocatorResolver",
]
