"""
================================================================================
UI Testing Pytest Configuration
================================================================================

This module configures pytest for live UI tests, providing fixtures for the
browser, the BrowserSession the framework drives, and page objects.

Key Features:
- Browser and page lifecycle management (Playwright, sync API)
- Harness configuration from config/config.yaml + environment
- InputsPage / LoginPage fixtures sharing one SyncPolicy
- Failure screenshots attached to Allure

================================================================================
"""

from pathlib import Path
from typing import Generator

import allure
import pytest
from loguru import logger
from playwright.sync_api import Browser, BrowserContext, Page, Playwright, sync_playwright

from formsuite.ui_testing.framework.browser_session import PlaywrightBrowserSession
from formsuite.ui_testing.framework.config_loader import ConfigLoader, HarnessConfig
from formsuite.ui_testing.framework.sync_policy import SyncPolicy
from formsuite.ui_testing.pages.inputs_page import InputsPage
from formsuite.ui_testing.pages.login_page import LoginPage


# ================================================================================
# Configuration Fixtures
# ================================================================================

@pytest.fixture(scope="session")
def harness_config(project_root: Path) -> HarnessConfig:
    """Resolved harness settings (YAML + environment overrides)."""
    return ConfigLoader(project_root / "config" / "config.yaml").harness_config()


@pytest.fixture(scope="session")
def sync_policy(harness_config: HarnessConfig) -> SyncPolicy:
    return SyncPolicy.from_config(harness_config)


# ================================================================================
# Browser Fixtures
# ================================================================================

@pytest.fixture(scope="session")
def playwright() -> Generator[Playwright, None, None]:
    with sync_playwright() as p:
        yield p


@pytest.fixture(scope="session")
def browser(playwright: Playwright, harness_config: HarnessConfig) -> Generator[Browser, None, None]:
    """One browser process per run, type and headless mode from config."""
    launcher = getattr(playwright, harness_config.browser)
    logger.info(f"Launching {harness_config.browser} (headless={harness_config.headless})")
    browser = launcher.launch(headless=harness_config.headless)
    yield browser
    browser.close()


@pytest.fixture(scope="function")
def context(browser: Browser) -> Generator[BrowserContext, None, None]:
    """Fresh context per test: no cookies or storage leak between scenarios."""
    context = browser.new_context(
        viewport={"width": 1920, "height": 1080},
        ignore_https_errors=True,
    )
    yield context
    context.close()


@pytest.fixture(scope="function")
def page(context: BrowserContext) -> Generator[Page, None, None]:
    """Playwright page for the test; also read by the screenshot hook."""
    page = context.new_page()
    yield page
    page.close()


@pytest.fixture(scope="function")
def browser_session(page: Page, harness_config: HarnessConfig) -> PlaywrightBrowserSession:
    """BrowserSession over the test's page; the page stays owned by its fixture."""
    return PlaywrightBrowserSession(page, navigation_timeout=harness_config.page_load_timeout)


# ================================================================================
# Page Object Fixtures
# ================================================================================

@pytest.fixture
def inputs_page(
    browser_session: PlaywrightBrowserSession,
    harness_config: HarnessConfig,
    sync_policy: SyncPolicy,
) -> InputsPage:
    """Provides InputsPage instance (not yet opened)."""
    return InputsPage(browser_session, base_url=harness_config.base_url, policy=sync_policy)


@pytest.fixture
def login_page(
    browser_session: PlaywrightBrowserSession,
    harness_config: HarnessConfig,
    sync_policy: SyncPolicy,
) -> LoginPage:
    """Provides LoginPage instance (not yet opened)."""
    return LoginPage(browser_session, base_url=harness_config.base_url, policy=sync_policy)


# ================================================================================
# Test Lifecycle Hooks
# ================================================================================

@pytest.hookimpl(hookwrapper=True)
def pytest_runtest_makereport(item, call):
    """Attach a full-page screenshot to Allure when a live test fails."""
    outcome = yield
    report = outcome.get_result()

    if report.when == "call" and report.failed:
        if hasattr(item, "funcargs") and "page" in item.funcargs:
            page = item.funcargs["page"]
            try:
                allure.attach(
                    page.screenshot(full_page=True),
                    name="failure_screenshot",
                    attachment_type=allure.attachment_type.PNG,
                )
            except Exception as e:
                # A dead page must not replace the test failure
                logger.warning(f"Failed to capture screenshot on failure: {e}")


# ================================================================================
# Utility Fixtures
# ================================================================================

@pytest.fixture
def test_data():
    """Values used by the live form scenarios."""
    return {
        "valid_number": "123",
        "alternate_number": "456",
        "zero": "0",
        "large_number": "999999",
        "boundary_values": ["0", "999", "1", "12345", "100"],
        "rapid_sequence": ["111", "222", "333"],
        "valid_user": {
            "username": "tomsmith",
            "password": "SuperSecretPassword!",
        },
        "invalid_user": {
            "username": "nobody",
            "password": "not-the-password",
        },
        "login_success_flash": "You logged into a secure area!",
        "login_failure_flash": "Your username is invalid!",
    }
