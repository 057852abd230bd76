#!/usr/bin/env python3
"""
Onboarding CLI

Shows the first-run slides, or hands straight off to the main application
when onboarding was completed before.

Run with:
    onboarding --main-command "my-app"
    python -m onboarding --status
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Callable, List, Optional

from common.exceptions import (
    MissingConfigError, OnboardingError, ToolkitUnavailableError,
)
from common.features import (
    Feature, FeatureManager, check_gtk_available, check_qt_available,
)
from common.logging_config import setup_logging

from .config import TOOLKITS, OnboardingConfig, load_config
from .controller import OnboardingController, SlideRenderer
from .launcher import CommandLauncher
from .slides import DEFAULT_SLIDES, ScreenItem, load_slides
from .store import CompletionStore, PreferencesStore

logger = logging.getLogger(__name__)

ControllerFactory = Callable[[SlideRenderer], OnboardingController]


def build_store(config: OnboardingConfig) -> CompletionStore:
    """Preferences-file store for the configured namespace and key."""
    return PreferencesStore(config.prefs_path, key=config.completion_key)


def build_slides(config: OnboardingConfig) -> List[ScreenItem]:
    """Slides from the configured file, or the built-in set."""
    if config.slides_file:
        return load_slides(config.slides_file)
    return list(DEFAULT_SLIDES)


def _run_gtk(factory: ControllerFactory, title: str) -> int:
    from .wizard import run_gtk
    return run_gtk(factory, title=title)


def _run_qt(factory: ControllerFactory, title: str) -> int:
    from .wizard_qt import run_qt
    return run_qt(factory, title=title)


def _unavailable(toolkit: str) -> Callable[..., int]:
    def fail(*args, **kwargs) -> int:
        raise ToolkitUnavailableError(toolkit)
    return fail


def build_toolkits(toolkit: str) -> FeatureManager:
    """Register the "gui" feature for the requested toolkit."""
    manager = FeatureManager()

    if toolkit == "gtk":
        feature = Feature("gui", check_gtk_available, _run_gtk, _unavailable("gtk"))
    elif toolkit == "qt":
        feature = Feature("gui", check_qt_available, _run_qt, _unavailable("qt"))
    else:
        qt_fallback = _run_qt if check_qt_available() else _unavailable("gtk or qt")
        feature = Feature(
            "gui",
            check_gtk_available,
            _run_gtk,
            qt_fallback,
            error_message="GTK 4 / libadwaita not available, falling back to Qt",
        )

    manager.register(feature)
    return manager


def run_onboarding(config: OnboardingConfig, force: bool = False) -> int:
    """Run the onboarding screen with the configured toolkit."""
    if not config.main_command:
        raise MissingConfigError(
            "main_command", "Pass --main-command or set it in config.json"
        )

    store = build_store(config)
    slides = build_slides(config)
    main_entry = CommandLauncher(config.main_command)

    def factory(renderer: SlideRenderer) -> OnboardingController:
        return OnboardingController(slides, store, renderer, main_entry, force=force)

    logger.debug(f"Using {store!r} and {main_entry!r}")
    return build_toolkits(config.toolkit).execute("gui", factory, config.window_title)


def cmd_status(config: OnboardingConfig) -> int:
    """Print whether onboarding was completed."""
    completed = build_store(config).get_completed()
    print(f"Onboarding completed: {'yes' if completed else 'no'}")
    print(f"Preferences: {config.prefs_path}")
    return 0


def cmd_reset(config: OnboardingConfig) -> int:
    """Clear the completion flag so the slides show again."""
    build_store(config).clear()
    print("Onboarding reset; slides will show on next launch.")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="onboarding",
        description="First-run onboarding slides",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Enable verbose output"
    )
    parser.add_argument("--log-file", type=Path, help="Also log to this file")
    parser.add_argument(
        "--json-logs", action="store_true", help="Write the log file as JSON lines"
    )
    parser.add_argument(
        "--config-dir", type=Path, help="Directory holding config.json and preferences"
    )
    parser.add_argument("--slides", type=Path, help="Slides JSON file")
    parser.add_argument(
        "--main-command", help="Command that starts the main application"
    )
    parser.add_argument(
        "--toolkit", choices=TOOLKITS, help="GUI toolkit (default: auto)"
    )
    parser.add_argument(
        "--force", action="store_true",
        help="Show the slides even if onboarding was completed",
    )

    actions = parser.add_mutually_exclusive_group()
    actions.add_argument(
        "--status", action="store_true", help="Print completion status and exit"
    )
    actions.add_argument(
        "--reset", action="store_true", help="Clear the completion flag and exit"
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    setup_logging(
        level=logging.DEBUG if args.verbose else logging.INFO,
        log_file=args.log_file,
        json_logs=args.json_logs,
    )

    try:
        config = load_config(args.config_dir).with_overrides(
            slides_file=args.slides,
            main_command=args.main_command,
            toolkit=args.toolkit,
        )

        if args.status:
            return cmd_status(config)
        if args.reset:
            return cmd_reset(config)

        return run_onboarding(config, force=args.force)

    except OnboardingError as e:
        logger.debug("Onboarding failed", exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
