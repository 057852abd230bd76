"""
Onboarding configuration.

Loaded from ``<config_dir>/config.json``; command-line flags override
file values. The config directory defaults to
``$ONBOARDING_CONFIG_DIR``, then ``$XDG_CONFIG_HOME/onboarding``, then
``~/.config/onboarding``.
"""

from __future__ import annotations

import json
import logging
import os
import shlex
from dataclasses import dataclass, field, fields, replace
from pathlib import Path
from typing import Any, Dict, List, Optional

from common.exceptions import InvalidConfigError

from .store import DEFAULT_COMPLETION_KEY

logger = logging.getLogger(__name__)

CONFIG_FILENAME = "config.json"
TOOLKITS = ("auto", "gtk", "qt")


def default_config_dir() -> Path:
    """Resolve the per-user config directory."""
    override = os.environ.get("ONBOARDING_CONFIG_DIR")
    if override:
        return Path(override).expanduser()

    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg).expanduser() / "onboarding"

    return Path.home() / ".config" / "onboarding"


@dataclass
class OnboardingConfig:
    """Settings for one onboarding run."""
    config_dir: Path = field(default_factory=default_config_dir)
    prefs_namespace: str = "prefs"
    completion_key: str = DEFAULT_COMPLETION_KEY
    main_command: Optional[List[str]] = None
    slides_file: Optional[Path] = None
    toolkit: str = "auto"
    window_title: str = "Welcome"

    @property
    def prefs_path(self) -> Path:
        return self.config_dir / f"{self.prefs_namespace}.json"

    def validate(self) -> "OnboardingConfig":
        """Check values, raising InvalidConfigError on the first bad one."""
        if self.toolkit not in TOOLKITS:
            raise InvalidConfigError(
                "toolkit", self.toolkit, f"must be one of {', '.join(TOOLKITS)}"
            )

        for name in ("prefs_namespace", "completion_key", "window_title"):
            value = getattr(self, name)
            if not isinstance(value, str) or not value.strip():
                raise InvalidConfigError(name, value, "must be a non-empty string")

        if "/" in self.prefs_namespace or self.prefs_namespace.startswith("."):
            raise InvalidConfigError(
                "prefs_namespace", self.prefs_namespace, "must be a plain file name"
            )

        if self.main_command is not None and not self.main_command:
            raise InvalidConfigError("main_command", self.main_command, "must not be empty")

        return self

    def with_overrides(self, **overrides: Any) -> "OnboardingConfig":
        """Return a copy with every non-None override applied."""
        changes = {}
        for key, value in overrides.items():
            if value is None:
                continue
            changes[key] = _coerce(key, value)
        return replace(self, **changes).validate()


def _coerce(name: str, value: Any) -> Any:
    """Convert a raw file or CLI value to the field's type."""
    if name in ("config_dir", "slides_file"):
        if not isinstance(value, (str, Path)):
            raise InvalidConfigError(name, value, "must be a path")
        return Path(value).expanduser()

    if name == "main_command":
        if isinstance(value, str):
            try:
                return shlex.split(value)
            except ValueError as e:
                raise InvalidConfigError(name, value, str(e))
        if isinstance(value, list) and all(isinstance(part, str) for part in value):
            return list(value)
        raise InvalidConfigError(name, value, "must be a string or a list of strings")

    return value


def load_config(config_dir: Optional[Path] = None) -> OnboardingConfig:
    """
    Load configuration from ``config.json``.

    Args:
        config_dir: Directory holding config.json and the preferences file

    Returns:
        Validated OnboardingConfig (defaults if no file exists)

    Raises:
        InvalidConfigError: If the file is malformed or a value is invalid
    """
    config_dir = Path(config_dir).expanduser() if config_dir else default_config_dir()
    config = OnboardingConfig(config_dir=config_dir)
    config_path = config_dir / CONFIG_FILENAME

    if not config_path.exists():
        logger.debug(f"No config file at {config_path}, using defaults")
        return config.validate()

    try:
        raw = json.loads(config_path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError, UnicodeDecodeError) as e:
        raise InvalidConfigError(str(config_path), "<file>", str(e))

    if not isinstance(raw, dict):
        raise InvalidConfigError(str(config_path), "<file>", "expected a JSON object")

    known = {f.name for f in fields(OnboardingConfig)} - {"config_dir"}
    values: Dict[str, Any] = {}
    for key, value in raw.items():
        if key not in known:
            logger.warning(f"Ignoring unknown config key: {key}")
            continue
        values[key] = value

    slides_file = values.get("slides_file")
    if isinstance(slides_file, str) and not Path(slides_file).expanduser().is_absolute():
        values["slides_file"] = str(config_dir / slides_file)

    logger.debug(f"Loaded config from {config_path}")
    return config.with_overrides(**values)
