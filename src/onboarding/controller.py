"""
Onboarding Controller

Drives the slide sequence and the completion flag. Toolkit independent:
rendering goes through a SlideRenderer and the hand-off through a MainEntry.

States:
    BROWSING  current_index < N-1; Next, Skip and the indicator are shown
    FINAL     current_index == N-1; only Get Started is shown, terminal
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from enum import Enum
from typing import List, Sequence

from common.exceptions import OnboardingStateError, PreferencesWriteError

from .launcher import MainEntry
from .slides import ScreenItem, validate_slides
from .store import CompletionStore

logger = logging.getLogger(__name__)


class UIState(Enum):
    """UI states of the onboarding screen."""
    BROWSING = "browsing"
    FINAL = "final"


class SlideRenderer(ABC):
    """Rendering collaborator for the onboarding screen."""

    @abstractmethod
    def show_slides(self, items: Sequence[ScreenItem]) -> None:
        """Build the paged view and the tab indicator."""

    @abstractmethod
    def show_slide(self, index: int) -> None:
        """Move the paged view and the indicator to ``index``.

        Must be a no-op when both already show ``index``.
        """

    @abstractmethod
    def present(self, state: UIState) -> None:
        """Apply control visibility for ``state``."""

    @abstractmethod
    def close(self) -> None:
        """Terminate the onboarding screen."""


class OnboardingController:
    """
    First-run onboarding flow.

    Args:
        items: Ordered slides, at least one
        store: Completion flag persistence
        renderer: Rendering collaborator
        main_entry: Main application entry point
        force: Show the slides even if onboarding was completed
    """

    def __init__(
        self,
        items: Sequence[ScreenItem],
        store: CompletionStore,
        renderer: SlideRenderer,
        main_entry: MainEntry,
        force: bool = False,
    ):
        self._items: List[ScreenItem] = validate_slides(items)
        self._store = store
        self._renderer = renderer
        self._main_entry = main_entry
        self._force = force

        self._index = 0
        self._state = UIState.BROWSING
        self._started = False
        self._finished = False
        self.completion_persisted = False

    @property
    def items(self) -> List[ScreenItem]:
        return list(self._items)

    @property
    def current_index(self) -> int:
        return self._index

    @property
    def state(self) -> UIState:
        return self._state

    @property
    def last_index(self) -> int:
        return len(self._items) - 1

    @property
    def finished(self) -> bool:
        """True once the screen has handed off to the main application."""
        return self._finished

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def start(self) -> bool:
        """
        Run the startup check.

        Returns:
            True if the slides are shown, False if the screen handed off
            straight to the main application.
        """
        if self._started:
            logger.debug("start() called twice, ignoring")
            return not self._finished
        self._started = True

        if not self._force and self._store.get_completed():
            logger.info("Onboarding already completed, skipping slides")
            self._hand_off()
            return False

        self._index = 0
        self._state = UIState.BROWSING
        self._renderer.show_slides(self._items)
        self._renderer.show_slide(0)

        if self._index == self.last_index:
            self._enter_final()
        else:
            self._renderer.present(UIState.BROWSING)

        logger.info(f"Showing onboarding: {len(self._items)} slides")
        return True

    # ------------------------------------------------------------------
    # User actions
    # ------------------------------------------------------------------

    def advance(self) -> bool:
        """Move to the next slide. Returns False if nothing changed."""
        if not self._accepts_navigation("advance"):
            return False

        if self._index >= self.last_index:
            return False

        self._index += 1
        logger.debug(f"Advanced to slide {self._index}")
        self._renderer.show_slide(self._index)

        if self._index == self.last_index:
            self._enter_final()
        return True

    def skip(self) -> bool:
        """Jump to the last slide and enter FINAL without persisting."""
        if not self._accepts_navigation("skip"):
            return False

        # Requests past the end clamp to the last slide
        self._index = self.last_index
        logger.info("Skipped to the last slide")
        self._renderer.show_slide(self._index)
        self._enter_final()
        return True

    def confirm(self) -> bool:
        """
        Record completion and hand off to the main application.

        Returns:
            True on the first effective call, False once already handed off

        Raises:
            OnboardingStateError: If called before the last slide is reached
        """
        if self._finished:
            logger.debug("confirm() after hand-off, ignoring")
            return False

        if self._state is not UIState.FINAL:
            raise OnboardingStateError(
                "confirm", self._state.value, UIState.FINAL.value
            )

        try:
            self._store.set_completed(True)
            self.completion_persisted = True
        except PreferencesWriteError as e:
            logger.error(f"Onboarding completion was not saved, it will show again: {e}")

        self._hand_off()
        return True

    # ------------------------------------------------------------------
    # Rendering events
    # ------------------------------------------------------------------

    def on_page_changed(self, index: int) -> None:
        """Paged view reports that ``index`` is now showing (e.g. a swipe)."""
        self._select(index, "page")

    def on_tab_selected(self, index: int) -> None:
        """Tab indicator reports that ``index`` was selected."""
        self._select(index, "tab")

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _accepts_navigation(self, action: str) -> bool:
        if not self._started or self._finished:
            logger.debug(f"{action} ignored, screen not active")
            return False
        if self._state is UIState.FINAL:
            logger.debug(f"{action} ignored on the last slide")
            return False
        return True

    def _select(self, index: int, source: str) -> None:
        if not self._started or self._finished:
            return

        if self._state is UIState.FINAL:
            if index != self.last_index:
                # FINAL is terminal, keep the last slide pinned
                self._renderer.show_slide(self.last_index)
            return

        index = max(0, min(index, self.last_index))
        if index == self._index:
            return

        logger.debug(f"Slide {index} selected via {source}")
        self._index = index
        # Keep the pager and the indicator in step with each other
        self._renderer.show_slide(index)
        if index == self.last_index:
            self._enter_final()

    def _enter_final(self) -> None:
        self._state = UIState.FINAL
        logger.info("Reached the last slide")
        self._renderer.present(UIState.FINAL)

    def _hand_off(self) -> None:
        if self._finished:
            return
        self._finished = True

        try:
            self._main_entry.launch()
        finally:
            self._renderer.close()
