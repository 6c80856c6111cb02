"""
================================================================================
Suite Pytest Configuration
================================================================================

Registers project-wide markers and tags collected tests by location.

Live browser suites under ui_testing/tests run only when UI_E2E=1, so the
default run needs neither a browser nor network access.

================================================================================
"""

import os

import pytest


def pytest_configure(config):
    """Configure pytest with project-wide custom markers."""

    # Priority markers
    config.addinivalue_line(
        "markers", "P0: Critical priority tests - must pass for deployment"
    )
    config.addinivalue_line(
        "markers", "P1: High priority tests - important functionality"
    )
    config.addinivalue_line(
        "markers", "P2: Medium priority tests - edge cases and boundary values"
    )
    config.addinivalue_line(
        "markers", "P3: Low priority tests - extensive validation"
    )

    # Test type markers
    config.addinivalue_line(
        "markers", "smoke: Quick verification tests"
    )
    config.addinivalue_line(
        "markers", "regression: Full regression test suite"
    )
    config.addinivalue_line(
        "markers", "e2e: End-to-end tests against a live browser"
    )

    # Domain markers
    config.addinivalue_line(
        "markers", "ui: UI-specific tests"
    )
    config.addinivalue_line(
        "markers", "unit: Browser-free framework tests"
    )


def pytest_collection_modifyitems(config, items):
    """
    Modify collected test items.

    Adds domain markers by directory and skips live suites unless enabled.
    """
    run_live = os.getenv("UI_E2E", "").lower() in ("1", "true", "yes")
    skip_live = pytest.mark.skip(reason="live UI suite disabled (set UI_E2E=1 to run)")

    for item in items:
        path = str(item.fspath)

        if "ui_testing" in path:
            item.add_marker(pytest.mark.ui)
            item.add_marker(pytest.mark.e2e)
            if not run_live:
                item.add_marker(skip_live)

        if f"{os.sep}unit{os.sep}" in path:
            item.add_marker(pytest.mark.unit)


def pytest_report_header(config):
    """Add custom header to pytest output."""
    return [
        "",
        "=" * 60,
        "Form Interaction Harness",
        "=" * 60,
        "",
    ]
