"""
fieldrules Configuration
========================

Hierarchical configuration for the rule provider.

Configuration Loading Priority (highest to lowest):
1. Runtime overrides (`Config.set`)
2. Environment variables (FIELDRULES_*)
3. Sources added with `add_source`
4. Default values

Keys read by the package:
    logging.level           "debug" | "info" | "warning" | "error"
    logging.format          "text" | "json"
    validation.messages     {"greater_than": "...", "price.currency": "..."}
    validation.attributes   {"first_name": "given name"}
    database.url            "sqlite:///app.db"

Example:
    config = Config({"validation": {"attributes": {"dob": "date of birth"}}})
    config.set("logging.level", "debug")

    config.get("logging.level")          # "debug"
    config.get("database.url", None)     # None
"""

from __future__ import annotations

import json
import os
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional, TypeVar, Union

T = TypeVar("T")

ENV_PREFIX = "FIELDRULES_"

DEFAULTS: Dict[str, Any] = {
    "logging": {
        "level": "warning",
        "format": "text",
    },
    "validation": {
        "messages": {},
        "attributes": {},
    },
    "database": {
        "url": None,
    },
}


@dataclass
class ConfigSource:
    """Represents a configuration source with priority."""
    name: str
    data: Dict[str, Any]
    priority: int = 0


class Config:
    """
    Configuration container with dot-notation access.

    Sources are deep-merged by priority; higher priorities win.
    """

    def __init__(self, data: Optional[Dict[str, Any]] = None) -> None:
        self._sources: List[ConfigSource] = []
        self._cache: Dict[str, Any] = {}
        self._merged: Dict[str, Any] = {}
        self._dirty = True

        self.add_source("defaults", _copy(DEFAULTS), priority=0)
        if data:
            self.add_source("app", data, priority=10)

    @classmethod
    def from_env(
        cls,
        data: Optional[Dict[str, Any]] = None,
        environ: Optional[Mapping[str, str]] = None,
    ) -> Config:
        """Create config and apply FIELDRULES_* environment overrides."""
        config = cls(data)
        config.load_env(environ)
        return config

    def load_env(self, environ: Optional[Mapping[str, str]] = None) -> None:
        """
        Load overrides from FIELDRULES_* environment variables.

        The first underscore after the prefix separates the section:
        FIELDRULES_LOGGING_LEVEL -> logging.level,
        FIELDRULES_DATABASE_URL -> database.url.
        """
        environ = os.environ if environ is None else environ
        overrides: Dict[str, Any] = {}

        for key, value in environ.items():
            if not key.startswith(ENV_PREFIX):
                continue
            section, _, name = key[len(ENV_PREFIX):].lower().partition("_")
            if not name:
                continue
            overrides.setdefault(section, {})[name] = self._parse_env_value(value)

        if overrides:
            self.add_source("env_vars", overrides, priority=100)

    def _parse_env_value(self, value: str) -> Any:
        """Parse environment variable value to appropriate type."""
        if value.lower() in ("true", "yes"):
            return True
        if value.lower() in ("false", "no"):
            return False

        try:
            return int(value)
        except ValueError:
            pass

        # JSON (for message / attribute maps)
        if value.startswith(("{", "[")):
            try:
                return json.loads(value)
            except json.JSONDecodeError:
                pass

        return value

    def add_source(
        self,
        name: str,
        data: Dict[str, Any],
        priority: int = 0,
    ) -> None:
        """Add a configuration source."""
        self._sources.append(ConfigSource(name=name, data=data, priority=priority))
        self._dirty = True
        self._cache.clear()

    def _merge(self) -> None:
        """Merge all sources into single configuration."""
        if not self._dirty:
            return

        self._merged = {}
        for source in sorted(self._sources, key=lambda s: s.priority):
            self._deep_merge(self._merged, source.data)

        self._dirty = False
        self._cache.clear()

    def _deep_merge(self, base: Dict, override: Dict) -> None:
        for key, value in override.items():
            if key in base and isinstance(base[key], dict) and isinstance(value, dict):
                self._deep_merge(base[key], value)
            else:
                base[key] = _copy(value)

    def get(self, key: str, default: T = None) -> Union[Any, T]:
        """
        Get configuration value using dot notation.

        Args:
            key: Configuration key (e.g., "logging.level")
            default: Default value if key not found
        """
        self._merge()

        if key in self._cache:
            return self._cache[key]

        current: Any = self._merged
        for part in key.split("."):
            if not isinstance(current, dict) or part not in current:
                return default
            current = current[part]

        self._cache[key] = current
        return current

    def get_dict(self, key: str) -> Dict[str, Any]:
        """Get configuration value as dict (empty when unset)."""
        value = self.get(key)
        return dict(value) if isinstance(value, dict) else {}

    def set(self, key: str, value: Any) -> None:
        """
        Set a runtime configuration value.

        Runtime values have the highest priority.
        """
        runtime = next((s for s in self._sources if s.name == "runtime"), None)
        if runtime is None:
            runtime = ConfigSource(name="runtime", data={}, priority=1000)
            self._sources.append(runtime)

        parts = key.split(".")
        current = runtime.data
        for part in parts[:-1]:
            current = current.setdefault(part, {})
        current[parts[-1]] = value

        self._dirty = True
        self._cache.clear()

    def has(self, key: str) -> bool:
        """Check if configuration key exists."""
        return self.get(key) is not None

    def all(self) -> Dict[str, Any]:
        """Get all configuration as dict."""
        self._merge()
        return _copy(self._merged)


def _copy(value: Any) -> Any:
    if isinstance(value, dict):
        return {k: _copy(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_copy(v) for v in value]
    return value
