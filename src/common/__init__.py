"""
Onboarding Common Utilities

Shared exceptions, decorators, logging and feature selection.
"""

from .exceptions import (
    OnboardingError, PreferencesError, PreferencesReadError,
    PreferencesWriteError, SlidesError, InvalidSlidesError,
    OnboardingStateError, LaunchError, ToolkitUnavailableError,
    ConfigError, InvalidConfigError, MissingConfigError,
)
from .decorators import handle_errors, retry
from .logging_config import setup_logging, get_logger
from .features import (
    Feature, FeatureManager, check_gtk_available, check_qt_available,
)

__all__ = [
    # Exceptions
    "OnboardingError", "PreferencesError", "PreferencesReadError",
    "PreferencesWriteError", "SlidesError", "InvalidSlidesError",
    "OnboardingStateError", "LaunchError", "ToolkitUnavailableError",
    "ConfigError", "InvalidConfigError", "MissingConfigError",
    # Decorators
    "handle_errors", "retry",
    # Logging
    "setup_logging", "get_logger",
    # Features
    "Feature", "FeatureManager", "check_gtk_available", "check_qt_available",
]
