"""
Repository-level pytest configuration.

Responsibilities:
  - Provide safe defaults for the public demo site the UI suite targets
  - Initialize Loguru once per run from config/config.yaml

Values below are defaults only; CI or the caller's shell may override any of
them through environment variables.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Generator

import pytest

from formsuite.ui_testing.framework.config_loader import ConfigLoader
from formsuite.ui_testing.framework.logging_config import init_logger


@pytest.fixture(scope="session")
def project_root() -> Path:
    """Return repo root path."""
    return Path(__file__).parent


@pytest.fixture(scope="session", autouse=True)
def _demo_safe_env_defaults() -> Generator[None, None, None]:
    """
    Set environment defaults if not already provided by the user/CI.

    Keeps local runs predictable without editing the YAML config.
    """
    defaults = {
        "UI_BASE_URL": "https://the-internet.herokuapp.com",
        "UI_USERNAME": "tomsmith",
        "UI_PASSWORD": "SuperSecretPassword!",
    }

    for k, v in defaults.items():
        os.environ.setdefault(k, v)

    yield


@pytest.fixture(scope="session", autouse=True)
def _configure_logging(project_root: Path) -> None:
    """Route framework logs through one Loguru configuration."""
    config = ConfigLoader(project_root / "config" / "config.yaml").harness_config()
    init_logger(level=config.log_level, log_file=config.log_file)
