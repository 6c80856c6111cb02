"""
================================================================================
Inputs Page Object
================================================================================

Number input practice page (`/inputs`).

Supports the basic form-field interaction flow:
    navigate -> enter number -> clear -> verify empty -> enter -> verify value

================================================================================
"""

from __future__ import annotations

import allure

from formsuite.ui_testing.framework.errors import NavigationError
from formsuite.ui_testing.framework.page_base import PageSession
from formsuite.ui_testing.framework.smart_locator import Locator


NUMBER_INPUT = Locator.of(
    "number_input",
    ("xpath", "//input[@type='number']"),
    ("css", "input[type='number']"),
)

PAGE_HEADER = Locator.of(
    "page_header",
    ("xpath", "//h3[contains(text(),'Inputs')]"),
    ("css", "h3"),
)

HEADER_TEXT = "Inputs"


class InputsPage(PageSession):
    """Inputs page object."""

    URL_PATH = "/inputs"
    READY_FIELD = "page_header"
    FIELDS = {
        "number_input": NUMBER_INPUT,
        "page_header": PAGE_HEADER,
    }

    @allure.step("Open inputs page")
    def open(self) -> "InputsPage":
        """Navigate to the inputs page and check its header."""
        super().open()
        header = self.read_text("page_header")
        if HEADER_TEXT not in header:
            raise NavigationError(
                self.url,
                reason=f"header '{header}' does not mention '{HEADER_TEXT}'",
                expected_path=self.path,
                current_url=self.current_url,
            )
        return self

    def enter_number(self, number: str) -> "InputsPage":
        return self.set_value("number_input", number)

    def clear_input_field(self) -> "InputsPage":
        return self.clear("number_input")

    def input_value(self) -> str:
        return self.read_value("number_input")

    def verify_field_is_empty(self) -> "InputsPage":
        return self.assert_empty("number_input")

    def verify_field_value(self, expected: str) -> "InputsPage":
        return self.assert_equals("number_input", expected)

    def verify_numeric_input_acceptance(self) -> "InputsPage":
        """The input declares type 'number'."""
        return self.assert_field_type("number_input", "number")
