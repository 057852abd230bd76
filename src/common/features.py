"""
Feature Management with Graceful Degradation

Used to pick a GUI toolkit: GTK is preferred, Qt is the fallback.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Callable, Any, Dict

logger = logging.getLogger(__name__)


@dataclass
class Feature:
    """
    Feature with fallback behavior.

    Attributes:
        name: Feature name
        check: Function to check if feature is available
        primary: Primary implementation
        fallback: Fallback implementation (optional)
        error_message: Message to show when feature unavailable
    """
    name: str
    check: Callable[[], bool]
    primary: Callable[..., Any]
    fallback: Optional[Callable[..., Any]] = None
    error_message: str = ""


class FeatureManager:
    """
    Manages features with graceful degradation.

    Example:
        manager = FeatureManager()

        manager.register(Feature(
            name="gui",
            check=check_gtk_available,
            primary=run_gtk,
            fallback=run_qt,
            error_message="GTK unavailable, using Qt",
        ))

        manager.execute("gui", config, store)
    """

    def __init__(self):
        self._features: Dict[str, Feature] = {}
        self._availability_cache: Dict[str, bool] = {}

    def register(self, feature: Feature):
        """Register a feature."""
        self._features[feature.name] = feature
        self._availability_cache.pop(feature.name, None)

    def is_available(self, name: str, use_cache: bool = True) -> bool:
        """
        Check if a feature is available.

        Args:
            name: Feature name
            use_cache: Use cached result if available
        """
        if name not in self._features:
            return False

        if use_cache and name in self._availability_cache:
            return self._availability_cache[name]

        feature = self._features[name]
        try:
            available = feature.check()
        except Exception as e:
            logger.debug(f"Feature check failed for {name}: {e}")
            available = False

        self._availability_cache[name] = available
        return available

    def execute(self, name: str, *args, **kwargs) -> Any:
        """
        Execute a feature, falling back if unavailable.

        Raises:
            KeyError: If feature not registered
            RuntimeError: If feature unavailable and no fallback
        """
        if name not in self._features:
            raise KeyError(f"Feature not registered: {name}")

        feature = self._features[name]

        if self.is_available(name):
            return feature.primary(*args, **kwargs)

        if feature.fallback:
            if feature.error_message:
                logger.warning(feature.error_message)
            return feature.fallback(*args, **kwargs)

        raise RuntimeError(
            f"Feature '{name}' is unavailable and has no fallback. "
            f"{feature.error_message}"
        )


def check_gtk_available() -> bool:
    """Check if GTK 4 and libadwaita are importable."""
    try:
        import gi
        gi.require_version("Gtk", "4.0")
        gi.require_version("Adw", "1")
        from gi.repository import Gtk, Adw  # noqa: F401
        return True
    except (ImportError, ValueError):
        return False


def check_qt_available() -> bool:
    """Check if PyQt6 widgets are importable."""
    try:
        from PyQt6 import QtWidgets  # noqa: F401
        return True
    except ImportError:
        return False
