"""
Onboarding Exception Hierarchy

Provides clear, actionable error messages with structured information
for logging, CLI feedback, and programmatic error handling.
"""

from typing import Optional, Dict, Any


class OnboardingError(Exception):
    """
    Base exception for all onboarding errors.

    Attributes:
        message: Human-readable error message
        code: Machine-readable error code
        details: Additional context as key-value pairs
        cause: Original exception that caused this error
        recoverable: Whether the error is recoverable
    """

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
        cause: Optional[Exception] = None,
        recoverable: bool = True,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = details or {}
        self.cause = cause
        self.recoverable = recoverable

    def __str__(self):
        s = f"[{self.code}] {self.message}"
        if self.details:
            s += f" (details: {self.details})"
        if self.cause:
            s += f" caused by: {self.cause}"
        return s

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "error": self.code,
            "message": self.message,
            "details": self.details,
            "recoverable": self.recoverable,
        }


# =============================================================================
# Preference storage errors
# =============================================================================

class PreferencesError(OnboardingError):
    """Base for preference storage errors."""
    pass


class PreferencesReadError(PreferencesError):
    """Preferences file exists but cannot be read or parsed."""
    def __init__(self, path: str, reason: str, cause: Optional[Exception] = None):
        super().__init__(
            f"Cannot read preferences from {path}: {reason}",
            code="PREFS_READ_FAILED",
            details={"path": path, "reason": reason},
            cause=cause,
        )


class PreferencesWriteError(PreferencesError):
    """Preferences could not be written."""
    def __init__(self, path: str, cause: Optional[Exception] = None):
        super().__init__(
            f"Cannot write preferences to {path}",
            code="PREFS_WRITE_FAILED",
            details={"path": path},
            cause=cause,
        )


# =============================================================================
# Slide errors
# =============================================================================

class SlidesError(OnboardingError):
    """Base for slide definition errors."""
    pass


class InvalidSlidesError(SlidesError):
    """Slide definitions are missing or malformed."""
    def __init__(self, source: str, reason: str):
        super().__init__(
            f"Invalid slides in {source}: {reason}",
            code="INVALID_SLIDES",
            details={"source": source, "reason": reason},
            recoverable=False,
        )


# =============================================================================
# Flow errors
# =============================================================================

class OnboardingStateError(OnboardingError):
    """Action not allowed in the current onboarding state."""
    def __init__(self, action: str, current_state: str, required_state: str):
        super().__init__(
            f"Cannot {action} while {current_state}, requires {required_state}",
            code="INVALID_STATE",
            details={
                "action": action,
                "current_state": current_state,
                "required_state": required_state,
            },
        )


class LaunchError(OnboardingError):
    """Main application could not be started."""
    def __init__(self, command: str, cause: Optional[Exception] = None):
        super().__init__(
            f"Failed to launch main application: {command}",
            code="LAUNCH_FAILED",
            details={"command": command},
            cause=cause,
            recoverable=False,
        )


class ToolkitUnavailableError(OnboardingError):
    """No usable GUI toolkit."""
    def __init__(self, toolkit: str):
        super().__init__(
            f"GUI toolkit '{toolkit}' is not available",
            code="TOOLKIT_UNAVAILABLE",
            details={
                "toolkit": toolkit,
                "gtk_package": "PyGObject (with GTK 4 and libadwaita)",
                "qt_package": "PyQt6",
            },
            recoverable=False,
        )


# =============================================================================
# Configuration errors
# =============================================================================

class ConfigError(OnboardingError):
    """Base for configuration errors."""
    pass


class InvalidConfigError(ConfigError):
    """Invalid configuration."""
    def __init__(self, field: str, value: Any, reason: str):
        super().__init__(
            f"Invalid configuration: {field}={value}: {reason}",
            code="INVALID_CONFIG",
            details={"field": field, "value": str(value), "reason": reason},
        )


class MissingConfigError(ConfigError):
    """Required configuration missing."""
    def __init__(self, field: str, hint: str = ""):
        message = f"Missing required configuration: {field}"
        if hint:
            message += f". {hint}"
        super().__init__(
            message,
            code="MISSING_CONFIG",
            details={"field": field},
        )
