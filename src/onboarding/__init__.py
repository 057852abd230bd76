"""
First-Run Onboarding Flow

Shows a few introductory slides on first launch, records completion in a
per-user preferences file, and hands off to the main application:
- Completion store (JSON preferences, or in-memory)
- Toolkit-independent controller (Browsing / Final)
- GTK4/Adwaita view with a PyQt6 fallback
"""

from .controller import OnboardingController, SlideRenderer, UIState
from .launcher import MainEntry, CommandLauncher, CallbackEntry
from .slides import ScreenItem, DEFAULT_SLIDES, load_slides
from .store import CompletionStore, PreferencesStore, MemoryCompletionStore
from .config import OnboardingConfig, load_config

__all__ = [
    "OnboardingController",
    "SlideRenderer",
    "UIState",
    "MainEntry",
    "CommandLauncher",
    "CallbackEntry",
    "ScreenItem",
    "DEFAULT_SLIDES",
    "load_slides",
    "CompletionStore",
    "PreferencesStore",
    "MemoryCompletionStore",
    "OnboardingConfig",
    "load_config",
]
