#!/usr/bin/env python3
"""
Onboarding Wizard - GTK4/Adwaita view

Swipeable slides in an Adw.Carousel with a dot indicator, Next/Skip
controls and a Get Started button on the last slide.
"""

from __future__ import annotations

import logging
import sys
from typing import Callable, List, Optional, Sequence

import gi

gi.require_version("Gtk", "4.0")
gi.require_version("Adw", "1")
from gi.repository import Gtk, Adw, Gio  # noqa: E402

from common.exceptions import OnboardingError  # noqa: E402

from .controller import OnboardingController, SlideRenderer, UIState  # noqa: E402
from .pages import SlidePage  # noqa: E402
from .slides import ScreenItem  # noqa: E402

logger = logging.getLogger(__name__)

APPLICATION_ID = "io.github.onboarding.Flow"
GET_STARTED_ANIMATION_MS = 500


class OnboardingView(SlideRenderer):
    """
    GTK rendering collaborator for the onboarding controller.

    Owns the application window; user events are forwarded to the
    bound controller.
    """

    def __init__(self, application: Adw.Application, title: str = "Welcome"):
        self.window = Adw.ApplicationWindow(application=application)
        self.window.set_title(title)
        self.window.set_default_size(420, 760)

        self._controller: Optional[OnboardingController] = None
        self.on_error: Optional[Callable[[OnboardingError], None]] = None
        self._pages: List[SlidePage] = []
        self._dots: List[Gtk.ToggleButton] = []
        self._syncing = False
        self._final_animated = False

        self._build_ui()

    def bind(self, controller: OnboardingController):
        """Attach the controller that receives user events."""
        self._controller = controller

    def _build_ui(self):
        """Build the window layout."""
        main_box = Gtk.Box(orientation=Gtk.Orientation.VERTICAL, spacing=0)
        self.window.set_content(main_box)

        header = Adw.HeaderBar()
        header.add_css_class("flat")
        main_box.append(header)

        # Paged view
        self._carousel = Adw.Carousel()
        self._carousel.set_vexpand(True)
        self._carousel.set_allow_long_swipes(False)
        self._carousel.connect("page-changed", self._on_page_changed)
        main_box.append(self._carousel)

        # Navigation bar at bottom
        nav_box = Gtk.Box(orientation=Gtk.Orientation.HORIZONTAL, spacing=12)
        nav_box.set_margin_start(24)
        nav_box.set_margin_end(24)
        nav_box.set_margin_top(12)
        nav_box.set_margin_bottom(24)

        self._indicator = Gtk.Box(orientation=Gtk.Orientation.HORIZONTAL, spacing=4)
        self._indicator.set_valign(Gtk.Align.CENTER)
        nav_box.append(self._indicator)

        spacer = Gtk.Box()
        spacer.set_hexpand(True)
        nav_box.append(spacer)

        self._skip_button = Gtk.Button(label="Skip")
        self._skip_button.add_css_class("flat")
        self._skip_button.connect("clicked", self._on_skip_clicked)
        nav_box.append(self._skip_button)

        self._next_button = Gtk.Button(label="Next")
        self._next_button.add_css_class("suggested-action")
        self._next_button.connect("clicked", self._on_next_clicked)
        nav_box.append(self._next_button)

        main_box.append(nav_box)

        # Hidden until the last slide
        self._get_started_button = Gtk.Button(label="Get Started")
        self._get_started_button.add_css_class("suggested-action")
        self._get_started_button.add_css_class("pill")
        self._get_started_button.set_halign(Gtk.Align.CENTER)
        self._get_started_button.set_margin_bottom(32)
        self._get_started_button.set_visible(False)
        self._get_started_button.connect("clicked", self._on_get_started_clicked)
        main_box.append(self._get_started_button)

    # ------------------------------------------------------------------
    # SlideRenderer
    # ------------------------------------------------------------------

    def show_slides(self, items: Sequence[ScreenItem]) -> None:
        for item in items:
            page = SlidePage(item)
            self._carousel.append(page)
            self._pages.append(page)

        group = None
        for index, item in enumerate(items):
            dot = Gtk.ToggleButton()
            dot.set_tooltip_text(item.title)
            dot.add_css_class("circular")
            dot.add_css_class("flat")
            dot.set_child(Gtk.Image.new_from_icon_name("media-record-symbolic"))
            if group is None:
                group = dot
            else:
                dot.set_group(group)
            dot.connect("toggled", self._on_dot_toggled, index)
            self._indicator.append(dot)
            self._dots.append(dot)

    def show_slide(self, index: int) -> None:
        self._syncing = True
        try:
            if round(self._carousel.get_position()) != index:
                self._carousel.scroll_to(self._pages[index], True)
            if not self._dots[index].get_active():
                self._dots[index].set_active(True)
        finally:
            self._syncing = False

    def present(self, state: UIState) -> None:
        browsing = state is UIState.BROWSING
        self._next_button.set_visible(browsing)
        self._skip_button.set_visible(browsing)
        self._indicator.set_visible(browsing)
        self._get_started_button.set_visible(not browsing)

        if not browsing and not self._final_animated:
            self._final_animated = True
            self._animate_get_started()

    def close(self) -> None:
        logger.debug("Closing onboarding window")
        self.window.close()

    def _animate_get_started(self):
        """Fade the Get Started button in, once."""
        target = Adw.PropertyAnimationTarget.new(self._get_started_button, "opacity")
        animation = Adw.TimedAnimation.new(
            self._get_started_button, 0.0, 1.0, GET_STARTED_ANIMATION_MS, target
        )
        animation.set_easing(Adw.Easing.EASE_OUT_CUBIC)
        animation.play()

    # ------------------------------------------------------------------
    # Signal handlers
    # ------------------------------------------------------------------

    def _on_next_clicked(self, button: Gtk.Button):
        if self._controller:
            self._controller.advance()

    def _on_skip_clicked(self, button: Gtk.Button):
        if self._controller:
            self._controller.skip()

    def _on_get_started_clicked(self, button: Gtk.Button):
        if not self._controller:
            return
        try:
            self._controller.confirm()
        except OnboardingError as e:
            logger.error(f"Hand-off failed: {e}")
            if self.on_error:
                self.on_error(e)

    def _on_page_changed(self, carousel: Adw.Carousel, index: int):
        if self._controller and not self._syncing:
            self._controller.on_page_changed(index)

    def _on_dot_toggled(self, dot: Gtk.ToggleButton, index: int):
        if self._controller and not self._syncing and dot.get_active():
            self._controller.on_tab_selected(index)


class OnboardingApplication(Adw.Application):
    """Application wrapper for the onboarding view."""

    def __init__(
        self,
        controller_factory: Callable[[SlideRenderer], OnboardingController],
        title: str = "Welcome",
    ):
        super().__init__(
            application_id=APPLICATION_ID,
            flags=Gio.ApplicationFlags.NON_UNIQUE,
        )
        self._controller_factory = controller_factory
        self._title = title
        self.controller: Optional[OnboardingController] = None
        self.error: Optional[OnboardingError] = None

    def do_activate(self):
        """Run the startup check, then show the window if needed."""
        view = OnboardingView(self, title=self._title)
        view.on_error = self._record_error
        self.controller = self._controller_factory(view)
        view.bind(self.controller)

        try:
            started = self.controller.start()
        except OnboardingError as e:
            logger.error(f"Onboarding startup failed: {e}")
            self._record_error(e)
            return

        if started:
            view.window.present()

    def _record_error(self, error: OnboardingError):
        self.error = error
        self.quit()


def run_gtk(
    controller_factory: Callable[[SlideRenderer], OnboardingController],
    title: str = "Welcome",
) -> int:
    """
    Run the GTK main loop until the onboarding screen closes.

    Raises:
        OnboardingError: If the hand-off to the main application failed
    """
    app = OnboardingApplication(controller_factory, title=title)
    status = app.run(sys.argv[:1])
    if app.error:
        raise app.error
    return status
