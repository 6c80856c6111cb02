"""
================================================================================
Page Objects
================================================================================

PageSession implementations for application pages.

Each page class declares:
    - Its URL path and page-ready field
    - A fixed map of logical field name -> Locator
    - Page-specific flows built from verified operations

Author: Automation Team
License: MIT
================================================================================
"""

from .inputs_page import InputsPage
from .login_page import LoginPage

__all__ = [
    "InputsPage",
    "LoginPage",
]
