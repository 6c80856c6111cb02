"""
================================================================================
UI Interaction Framework
================================================================================

Synchronized, verified form-field interactions over a browser session.

Components:
    - smart_locator: Immutable locators with ordered fallback strategies
    - sync_policy: Wait timeouts and present/visible/clickable conditions
    - element_handle: Transient reference to one resolved element
    - interaction_engine: Verified navigate/type/clear/read/assert operations
    - page_base: PageSession composing a field map with the engine
    - reporter: Diagnostic payloads for failed verifications
    - browser_session: Browser interface and its Playwright implementation

Author: Automation Team
License: MIT
================================================================================
"""

from .browser_session import BrowserSession, PlaywrightBrowserSession
from .config_loader import ConfigLoader, ConfigurationError, HarnessConfig
from .element_handle import ElementHandle
from .errors import (
    ClearError,
    ErrorKind,
    HarnessError,
    InputMismatchError,
    LocatorAmbiguityError,
    NavigationError,
    StaleElementError,
    VerificationFailure,
    WaitTimeoutError,
)
from .interaction_engine import InteractionEngine, InteractionResult
from .page_base import PageSession
from .reporter import VerificationReport, build_verification_report
from .smart_locator import Locator, LocatorResolver, Strategy
from .sync_policy import ElementClickable, ElementPresent, ElementVisible, SyncPolicy

__all__ = [
    "BrowserSession",
    "PlaywrightBrowserSession",
    "ConfigLoader",
    "ConfigurationError",
    "HarnessConfig",
    "ElementHandle",
    "ErrorKind",
    "HarnessError",
    "WaitTimeoutError",
    "NavigationError",
    "InputMismatchError",
    "ClearError",
    "VerificationFailure",
    "LocatorAmbiguityError",
    "StaleElementError",
    "InteractionEngine",
    "InteractionResult",
    "PageSession",
    "VerificationReport",
    "build_verification_report",
    "Locator",
    "LocatorResolver",
    "Strategy",
    "ElementPresent",
    "ElementVisible",
    "ElementClickable",
    "SyncPolicy",
]
