"""
================================================================================
Login Page Object
================================================================================

Form authentication page (`/login`).

Design goals:
  - Every credential write is verified by readback before submitting
  - Password values are masked in logs and report steps
  - Selectors carry fallbacks; prefer stable ids where the page has them

================================================================================
"""

from __future__ import annotations

import os
from typing import Optional

import allure
from loguru import logger

from formsuite.ui_testing.framework.page_base import PageSession
from formsuite.ui_testing.framework.smart_locator import Locator


class LoginPage(PageSession):
    """Login page object."""

    URL_PATH = "/login"
    READY_FIELD = "username"
    FIELDS = {
        "username": Locator.of(
            "username",
            ("id", "username"),
            ("name", "username"),
        ),
        "password": Locator.of(
            "password",
            ("id", "password"),
            ("css", "input[type='password']"),
        ),
        "login_button": Locator.of(
            "login_button",
            ("xpath", "//button[@type='submit']"),
            ("text", "Login"),
        ),
        "flash": Locator.of(
            "flash",
            ("id", "flash"),
            ("css", ".flash"),
        ),
    }

    @allure.step("Login (username={username})")
    def login(
        self,
        username: Optional[str] = None,
        password: Optional[str] = None,
    ) -> "LoginPage":
        """
        Fill the credentials, verify them, and submit.

        Args:
            username: Username to login. Defaults to `UI_USERNAME` env var.
            password: Password to login. Defaults to `UI_PASSWORD` env var.
        """
        if username is None:
            username = os.getenv("UI_USERNAME", "tomsmith")
        if password is None:
            password = os.getenv("UI_PASSWORD", "SuperSecretPassword!")

        self.set_value("username", username)
        self.set_value("password", password)
        self.click("login_button")
        logger.info("✅ Login form submitted")
        return self

    def flash_message(self) -> str:
        """Text of the flash banner shown after submitting."""
        return self.read_text("flash")
