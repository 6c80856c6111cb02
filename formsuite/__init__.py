"""
Form interaction harness.

Synchronized, verified form-field automation for browser UI tests:
    - ui_testing/framework: locators, waits, verified interactions, reporting
    - ui_testing/pages: page objects built on PageSession
    - ui_testing/tests: live end-to-end suites (Playwright)
    - unit: browser-free tests against an in-memory session
"""

__version__ = "1.0.0"
