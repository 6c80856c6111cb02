"""Shared fixtures for browser-free framework tests."""

import pytest

from formsuite.ui_testing.framework.interaction_engine import InteractionEngine
from formsuite.ui_testing.framework.smart_locator import Locator
from formsuite.ui_testing.framework.sync_policy import SyncPolicy
from formsuite.unit.fake_browser import FIELD_SELECTOR, FakeBrowserSession, FakeClock


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def policy(clock: FakeClock) -> SyncPolicy:
    return SyncPolicy(
        element_timeout=5.0,
        page_load_timeout=10.0,
        poll_interval=0.5,
        clock=clock,
        sleep=clock.sleep,
    )


@pytest.fixture
def session() -> FakeBrowserSession:
    return FakeBrowserSession()


@pytest.fixture
def engine(session: FakeBrowserSession, policy: SyncPolicy) -> InteractionEngine:
    return InteractionEngine(session, policy)


@pytest.fixture
def field() -> Locator:
    return Locator.of("number_input", ("css", FIELD_SELECTOR))
