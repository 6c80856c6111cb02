"""
================================================================================
Configuration Loader
================================================================================

Harness settings: YAML file, per-key environment overrides, documented
defaults.

    - `ConfigLoader.get("ui.base_url")` checks UI_BASE_URL, then the YAML
    - `harness_config()` resolves everything into a frozen HarnessConfig
    - No process-wide singleton: every loader is an independent value

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import os
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import yaml
from loguru import logger


# Default configuration file path (repo root / config / config.yaml)
DEFAULT_CONFIG_PATH = Path(__file__).parent.parent.parent.parent / "config" / "config.yaml"


class ConfigurationError(Exception):
    """Config file exists but cannot be used."""


@dataclass(frozen=True)
class HarnessConfig:
    """
    Harness settings with documented defaults.

    Attributes:
        base_url: Base URL of the application under test
        browser: Browser for live UI runs - 'chromium', 'firefox', 'webkit'
        headless: Run the browser headless
        element_timeout: Element wait deadline in seconds
        page_load_timeout: Page-ready wait deadline in seconds
        poll_interval: Wait poll interval in seconds
        log_level: Loguru level
        log_file: Optional log file path
    """

    base_url: str = "https://the-internet.herokuapp.com"
    browser: str = "chromium"
    headless: bool = True
    element_timeout: float = 15.0
    page_load_timeout: float = 30.0
    poll_interval: float = 0.5
    log_level: str = "INFO"
    log_file: Optional[str] = None

    # Dot-notation config key for each field
    KEYS = {
        "base_url": "ui.base_url",
        "browser": "ui.browser",
        "headless": "ui.headless",
        "element_timeout": "sync.element_timeout",
        "page_load_timeout": "sync.page_load_timeout",
        "poll_interval": "sync.poll_interval",
        "log_level": "logging.level",
        "log_file": "logging.file",
    }

    @classmethod
    def from_mapping(cls, values: Mapping[str, Any]) -> "HarnessConfig":
        """
        Build from a plain key-value mapping.

        Accepts either field names (`element_timeout`) or dot-notation keys
        (`sync.element_timeout`). Unknown keys are ignored.
        """
        kwargs: Dict[str, Any] = {}
        for f in fields(cls):
            key = cls.KEYS[f.name]
            if f.name in values:
                kwargs[f.name] = values[f.name]
            elif key in values:
                kwargs[f.name] = values[key]
        return cls(**kwargs)


class ConfigLoader:
    """
    Harness settings from a YAML file, overridable per key from the environment.

    Lookup order for a dot-notation key:
        1. Environment variable (`sync.element_timeout` -> `SYNC_ELEMENT_TIMEOUT`),
           converted to the type of the supplied default
        2. The YAML document
        3. The supplied default

    Usage:
        >>> loader = ConfigLoader(Path("config/config.yaml"))
        >>> loader.get("ui.base_url")
        'https://the-internet.herokuapp.com'
        >>> loader.harness_config().poll_interval
        0.5
    """

    def __init__(self, config_path: Optional[Path] = None) -> None:
        """
        Args:
            config_path: YAML file to read; DEFAULT_CONFIG_PATH when omitted.
        """
        self._config_path = Path(config_path) if config_path else DEFAULT_CONFIG_PATH
        self._config: Dict[str, Any] = self._read()

    @property
    def path(self) -> Path:
        return self._config_path

    def _read(self) -> Dict[str, Any]:
        if not self._config_path.is_file():
            logger.warning(
                f"No config file at {self._config_path}; "
                f"falling back to defaults and environment variables"
            )
            return {}

        try:
            document = yaml.safe_load(self._config_path.read_text(encoding="utf-8"))
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Cannot parse {self._config_path}: {e}") from e

        if document is None:
            return {}
        if not isinstance(document, dict):
            raise ConfigurationError(
                f"Top level of {self._config_path} must be a mapping, "
                f"got {type(document).__name__}"
            )
        logger.debug(f"Config read from {self._config_path}")
        return document

    def get(self, key: str, default: Any = None) -> Any:
        """Resolve a dot-notation key (see class docstring for precedence)."""
        raw = os.environ.get(self.env_name(key))
        if raw is not None:
            return self._coerce(raw, default)

        node: Any = self._config
        for part in key.split("."):
            node = node.get(part) if isinstance(node, dict) else None
            if node is None:
                return default
        return node

    @staticmethod
    def env_name(key: str) -> str:
        """Environment variable overriding `key`."""
        return key.replace(".", "_").upper()

    def get_section(self, section: str) -> Dict[str, Any]:
        """Top-level section as a dict ({} when absent)."""
        value = self._config.get(section)
        return value if isinstance(value, dict) else {}

    def reload(self) -> None:
        """Re-read the YAML file."""
        self._config = self._read()
        logger.info(f"Config re-read from {self._config_path}")

    def harness_config(self) -> HarnessConfig:
        """Resolve every harness setting into a HarnessConfig value."""
        defaults = HarnessConfig()
        values = {
            name: self.get(key, getattr(defaults, name))
            for name, key in HarnessConfig.KEYS.items()
        }
        return HarnessConfig.from_mapping(values)

    @staticmethod
    def _coerce(raw: str, default: Any) -> Any:
        # Environment values are strings; follow the default's type when known
        if isinstance(default, bool):
            return raw.strip().lower() in ("1", "true", "yes", "on")
        for kind in (int, float):
            if isinstance(default, kind):
                try:
                    return kind(raw)
                except ValueError:
                    return raw
        return raw


__all__ = [
    "ConfigLoader",
    "ConfigurationError",
    "HarnessConfig",
    "DEFAULT_CONFIG_PATH",
]
