# ================================================================================
# Interaction Engine Module
# ================================================================================
#
# Verified form-field operations on top of SyncPolicy and ElementHandle.
#
# Every mutation is confirmed by a readback before the engine reports
# success: browser controls may not reflect a write immediately (debounced
# input handlers, masked inputs), so a blind write is never trusted.
#
# Key Features:
#   - navigate with page-ready wait and redirect detection
#   - set_value / clear with readback and exactly one silent retry
#   - read_value normalising a missing value to ''
#   - assertions enriched with page context on failure
#   - Allure step integration and Loguru logging
#
# ================================================================================

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Optional
from urllib.parse import urlparse

import allure
from loguru import logger

from .browser_session import BrowserSession
from .element_handle import ElementHandle
from .errors import (
    ClearError,
    ErrorKind,
    InputMismatchError,
    LocatorAmbiguityError,
    NavigationError,
    StaleElementError,
    VerificationFailure,
    WaitTimeoutError,
    redact,
)
from .reporter import attach_report, build_verification_report
from .smart_locator import Locator, LocatorResolver
from .sync_policy import ElementClickable, ElementPresent, ElementVisible, SyncPolicy


@dataclass(frozen=True)
class InteractionResult:
    """
    Uniform outcome of a mutating or verifying operation.

    Attributes:
        success: Whether the operation was confirmed
        observed_value: Value read back from the page, if any
        error: Failure category when not successful
    """

    success: bool
    observed_value: Optional[str] = None
    error: Optional[ErrorKind] = None


def _is_secret(locator: Locator) -> bool:
    return "password" in locator.name.lower()


def _masked(locator: Locator, text: Optional[str]) -> Optional[str]:
    """Hide values of password-like fields in logs, report steps and errors."""
    return redact(text, _is_secret(locator))


def _lands_on(current_url: str, expected_path: str) -> bool:
    """Whether the path of `current_url` matches `expected_path`; '/' means the site root only."""
    current_path = urlparse(current_url).path or "/"
    if not expected_path.strip("/"):
        return current_path == "/"
    return expected_path in current_path


class InteractionEngine:
    """
    Synchronized, verified form-field operations.

    Each call resolves its element afresh through the SyncPolicy wait, acts
    on it, and drops the handle. Operations must not run concurrently on
    the same browser session.

    Example:
        engine = InteractionEngine(session, SyncPolicy(element_timeout=10))
        engine.navigate("https://the-internet.herokuapp.com/inputs", page_header)
        engine.set_value(number_input, "123")
        engine.assert_equals(number_input, "123")
    """

    def __init__(
        self,
        session: BrowserSession,
        policy: Optional[SyncPolicy] = None,
        resolver: Optional[LocatorResolver] = None,
    ):
        """
        Args:
            session: Browser session (owned by the caller)
            policy: Wait configuration; defaults to SyncPolicy()
            resolver: Locator resolver; defaults to one bound to `session`
        """
        self.session = session
        self.policy = policy or SyncPolicy()
        self.resolver = resolver or LocatorResolver(session)

    # =========================================================================
    # Navigation
    # =========================================================================

    def navigate(
        self,
        url: str,
        ready_locator: Locator,
        expected_path: Optional[str] = None,
    ) -> InteractionResult:
        """
        Navigate and confirm the intended page is loaded.

        Args:
            url: Absolute URL to open
            ready_locator: Element whose presence marks the page as ready
            expected_path: Segment the resulting URL path must contain.
                Defaults to the path of `url`; '/' requires the site root.

        Returns:
            InteractionResult with the resulting URL as observed value

        Raises:
            NavigationError: Ready element never appeared within
                page_load_timeout, or the browser landed elsewhere
        """
        if expected_path is None:
            expected_path = urlparse(url).path or "/"

        with allure.step(f"Navigate to {url}"):
            logger.info(f"🔄 Navigating to: {url}")
            self.session.navigate_to(url)

            ready_error: Optional[WaitTimeoutError] = None
            try:
                self.policy.wait_until(
                    ElementPresent(self.resolver, ready_locator),
                    timeout=self.policy.page_load_timeout,
                )
            except WaitTimeoutError as e:
                ready_error = e

            current_url = self.session.current_url()

            if not _lands_on(current_url, expected_path):
                error = NavigationError(
                    url,
                    reason=f"resulting URL path does not match '{expected_path}'",
                    expected_path=expected_path,
                    current_url=current_url,
                )
                logger.error(f"❌ {error}")
                raise error from ready_error

            if ready_error is not None:
                error = NavigationError(
                    url,
                    reason=(
                        f"page-ready element '{ready_locator.name}' not present "
                        f"within {self.policy.page_load_timeout:.1f}s ({ready_error.reason})"
                    ),
                    expected_path=expected_path,
                    current_url=current_url,
                )
                logger.error(f"❌ {error}")
                raise error from ready_error

            logger.info(f"✅ Page ready: {current_url}")
            return InteractionResult(success=True, observed_value=current_url)

    # =========================================================================
    # Verified Mutations
    # =========================================================================

    def set_value(self, locator: Locator, text: str) -> InteractionResult:
        """
        Clear a field, write `text`, and confirm it by readback.

        A mismatching readback triggers exactly one more clear+write cycle.

        Raises:
            InputMismatchError: Readback still differs after the retry
            StaleElementError: The element went stale on the retry attempt
            WaitTimeoutError: The field never became clickable
        """
        shown = _masked(locator, text)

        with allure.step(f"Set value: {locator.name} = '{shown}'"):
            logger.info(f"🔄 Entering '{shown}' into {locator.name}")

            result = self._write_once(locator, text)
            if not result.success:
                logger.warning(
                    f"Write to '{locator.name}' not confirmed ({result.error.value}): "
                    f"expected '{shown}', got '{_masked(locator, result.observed_value)}'. "
                    f"Retrying once..."
                )
                result = self._write_once(locator, text)

            if not result.success:
                if result.error is ErrorKind.STALE_ELEMENT:
                    error = StaleElementError(
                        f"Field '{locator.name}' went stale on the retried write"
                    )
                else:
                    error = InputMismatchError(
                        locator.name, text, result.observed_value, masked=_is_secret(locator)
                    )
                logger.error(f"❌ {error}")
                raise error

            logger.debug(f"✅ Entered '{shown}' into {locator.name}")
            return result

    def clear(self, locator: Locator) -> InteractionResult:
        """
        Clear a field and confirm by readback that it is empty.

        A residual value triggers exactly one more clear.

        Raises:
            ClearError: Field still holds a value after the retry
            StaleElementError: The element went stale on the retry attempt
            WaitTimeoutError: The field never became clickable
        """
        with allure.step(f"Clear field: {locator.name}"):
            logger.info(f"🔄 Clearing {locator.name}")

            result = self._clear_once(locator)
            if not result.success:
                logger.warning(
                    f"'{locator.name}' not empty after clear "
                    f"('{_masked(locator, result.observed_value)}'). Retrying once..."
                )
                result = self._clear_once(locator)

            if not result.success:
                if result.error is ErrorKind.STALE_ELEMENT:
                    error = StaleElementError(
                        f"Field '{locator.name}' went stale on the retried clear"
                    )
                else:
                    error = ClearError(
                        locator.name, result.observed_value, masked=_is_secret(locator)
                    )
                logger.error(f"❌ {error}")
                raise error

            logger.debug(f"✅ Cleared {locator.name}")
            return result

    def click(self, locator: Locator) -> InteractionResult:
        """Wait for an element to be clickable and click it."""
        with allure.step(f"Click: {locator.name}"):
            logger.info(f"Clicking element: {locator.name}")
            handle = self.policy.wait_until(ElementClickable(self.resolver, locator))
            handle.click()
            return InteractionResult(success=True)

    # =========================================================================
    # Reads
    # =========================================================================

    def read_value(self, locator: Locator) -> str:
        """
        Read the current value of a field.

        Waits for presence only: reading must not require interactability.
        A missing value is returned as ''.
        """
        handle = self.policy.wait_until(ElementPresent(self.resolver, locator))
        value = handle.value
        logger.debug(f"ℹ️ Current value of {locator.name}: '{_masked(locator, value)}'")
        return value

    def read_text(self, locator: Locator) -> str:
        """Wait for an element to be visible and return its text content."""
        handle = self.policy.wait_until(ElementVisible(self.resolver, locator))
        text = handle.text
        logger.debug(f"Got text from {locator.name}: '{text}'")
        return text

    def is_displayed(self, locator: Locator) -> bool:
        """
        Check visibility once, without waiting.

        Absent or stale elements count as not displayed. A locator matching
        several elements still raises LocatorAmbiguityError.
        """
        try:
            return self.resolver.resolve(locator).is_displayed()
        except LocatorAmbiguityError as e:
            if e.match_count > 0:
                raise
            return False
        except StaleElementError:
            return False

    # =========================================================================
    # Assertions
    # =========================================================================

    def assert_equals(self, locator: Locator, expected: str) -> InteractionResult:
        """
        Verify a field's value equals `expected`.

        String equality is authoritative: '007' does not equal '7'.

        Raises:
            VerificationFailure: Values differ
        """
        with allure.step(f"Verify {locator.name} equals '{_masked(locator, expected)}'"):
            actual = self.read_value(locator)
            if actual != expected:
                self._fail(
                    f"Field '{locator.name}' value should match entered value",
                    expected,
                    actual,
                    masked=_is_secret(locator),
                )
            logger.info(f"✅ Verification passed: {locator.name} value is correct")
            return InteractionResult(success=True, observed_value=actual)

    def assert_empty(self, locator: Locator) -> InteractionResult:
        """
        Verify a field is empty.

        Raises:
            VerificationFailure: Field holds a value
        """
        with allure.step(f"Verify {locator.name} is empty"):
            actual = self.read_value(locator)
            if actual != "":
                self._fail(
                    f"Field '{locator.name}' should be empty",
                    "",
                    actual,
                    masked=_is_secret(locator),
                )
            logger.info(f"✅ Verification passed: {locator.name} is empty")
            return InteractionResult(success=True, observed_value=actual)

    def assert_field_type(self, locator: Locator, expected_type: str) -> InteractionResult:
        """
        Verify the declared `type` attribute of a field.

        The attribute is compared literally; behaviour is not inspected.

        Raises:
            VerificationFailure: Declared type differs
        """
        with allure.step(f"Verify {locator.name} has type '{expected_type}'"):
            handle = self.policy.wait_until(ElementPresent(self.resolver, locator))
            declared = handle.get_attribute("type")
            if declared != expected_type:
                self._fail(
                    f"Field '{locator.name}' should be of type '{expected_type}'",
                    expected_type,
                    declared,
                )
            logger.info(f"✅ Verification passed: {locator.name} is of type '{expected_type}'")
            return InteractionResult(success=True, observed_value=declared)

    def assert_text_contains(self, locator: Locator, fragment: str) -> InteractionResult:
        """
        Verify an element's visible text contains `fragment`.

        Raises:
            VerificationFailure: Fragment not found
        """
        with allure.step(f"Verify {locator.name} text contains '{fragment}'"):
            text = self.read_text(locator)
            if fragment not in text:
                self._fail(f"Element '{locator.name}' text should contain fragment", fragment, text)
            return InteractionResult(success=True, observed_value=text)

    # =========================================================================
    # Internals
    # =========================================================================

    def _write_once(self, locator: Locator, text: str) -> InteractionResult:
        handle = self._clickable(locator)
        try:
            handle.clear()
            handle.send_input(text)
            observed = handle.value
        except StaleElementError as e:
            logger.warning(f"'{locator.name}' went stale during input: {e}")
            return InteractionResult(success=False, error=ErrorKind.STALE_ELEMENT)

        if observed != text:
            return InteractionResult(
                success=False,
                observed_value=observed,
                error=ErrorKind.INPUT_MISMATCH,
            )
        return InteractionResult(success=True, observed_value=observed)

    def _clear_once(self, locator: Locator) -> InteractionResult:
        handle = self._clickable(locator)
        try:
            handle.clear()
            residual = handle.value
        except StaleElementError as e:
            logger.warning(f"'{locator.name}' went stale during clear: {e}")
            return InteractionResult(success=False, error=ErrorKind.STALE_ELEMENT)

        if residual != "":
            return InteractionResult(
                success=False,
                observed_value=residual,
                error=ErrorKind.CLEAR,
            )
        return InteractionResult(success=True, observed_value=residual)

    def _clickable(self, locator: Locator) -> ElementHandle:
        return self.policy.wait_until(ElementClickable(self.resolver, locator))

    def _fail(
        self,
        message: str,
        expected: Optional[str],
        actual: Optional[str],
        masked: bool = False,
    ) -> None:
        report = build_verification_report(message, expected, actual, self.session)
        shown = replace(
            report,
            expected=redact(expected, masked),
            actual=redact(actual, masked),
        )
        attach_report(shown)
        logger.error(
            f"❌ Verification failed: {message}. "
            f"Expected '{shown.expected}' but found '{shown.actual}' (url={report.url})"
        )
        raise VerificationFailure(report, masked=masked)


__all__ = [
    "InteractionEngine",
    "InteractionResult",
]
