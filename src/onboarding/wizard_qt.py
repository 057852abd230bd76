#!/usr/bin/env python3
"""
Onboarding Wizard - Qt view

PyQt6 fallback for systems without GTK 4 / libadwaita.
"""
from __future__ import annotations

import sys
import logging
from typing import Callable, List, Optional, Sequence

from PyQt6.QtWidgets import (
    QApplication, QWidget, QVBoxLayout, QHBoxLayout, QLabel, QPushButton,
    QStackedWidget, QButtonGroup, QGraphicsOpacityEffect,
)
from PyQt6.QtCore import Qt, QPropertyAnimation, QEasingCurve
from PyQt6.QtGui import QFont, QIcon, QPixmap

from common.exceptions import OnboardingError

from .controller import OnboardingController, SlideRenderer, UIState
from .slides import ScreenItem

logger = logging.getLogger(__name__)

IMAGE_SIZE = 192
GET_STARTED_ANIMATION_MS = 500


class SlideWidget(QWidget):
    """A single onboarding slide."""

    def __init__(self, item: ScreenItem):
        super().__init__()
        self.item = item

        layout = QVBoxLayout(self)
        layout.setContentsMargins(48, 24, 48, 24)
        layout.setSpacing(24)
        layout.addStretch()

        image = QLabel()
        image.setAlignment(Qt.AlignmentFlag.AlignCenter)
        if item.image_is_file:
            pixmap = QPixmap(item.image)
        else:
            pixmap = QIcon.fromTheme(item.image).pixmap(IMAGE_SIZE // 2, IMAGE_SIZE // 2)
        if not pixmap.isNull():
            image.setPixmap(pixmap.scaled(
                IMAGE_SIZE, IMAGE_SIZE,
                Qt.AspectRatioMode.KeepAspectRatio,
                Qt.TransformationMode.SmoothTransformation,
            ))
        layout.addWidget(image)

        title = QLabel(item.title)
        title.setFont(QFont("", 20, QFont.Weight.Bold))
        title.setAlignment(Qt.AlignmentFlag.AlignCenter)
        layout.addWidget(title)

        desc = QLabel(item.description)
        desc.setWordWrap(True)
        desc.setAlignment(Qt.AlignmentFlag.AlignCenter)
        desc.setStyleSheet("color: #888888;")
        layout.addWidget(desc)

        layout.addStretch()


class OnboardingViewQt(SlideRenderer):
    """Qt rendering collaborator for the onboarding controller."""

    def __init__(self, title: str = "Welcome"):
        self.window = QWidget()
        self.window.setWindowTitle(title)
        self.window.resize(420, 760)

        self._controller: Optional[OnboardingController] = None
        self.error: Optional[OnboardingError] = None
        self._dots: List[QPushButton] = []
        self._syncing = False
        self._final_animated = False
        self._animation: Optional[QPropertyAnimation] = None

        self._build_ui()

    def bind(self, controller: OnboardingController):
        """Attach the controller that receives user events."""
        self._controller = controller

    def _build_ui(self):
        layout = QVBoxLayout(self.window)

        self._stack = QStackedWidget()
        layout.addWidget(self._stack, stretch=1)

        nav = QHBoxLayout()
        nav.setContentsMargins(24, 12, 24, 24)

        self._indicator = QWidget()
        self._indicator_layout = QHBoxLayout(self._indicator)
        self._indicator_layout.setContentsMargins(0, 0, 0, 0)
        self._indicator_layout.setSpacing(4)
        self._dot_group = QButtonGroup(self.window)
        self._dot_group.setExclusive(True)
        self._dot_group.idClicked.connect(self._on_dot_clicked)
        nav.addWidget(self._indicator)

        nav.addStretch()

        self._skip_button = QPushButton("Skip")
        self._skip_button.setFlat(True)
        self._skip_button.clicked.connect(self._on_skip_clicked)
        nav.addWidget(self._skip_button)

        self._next_button = QPushButton("Next")
        self._next_button.setDefault(True)
        self._next_button.clicked.connect(self._on_next_clicked)
        nav.addWidget(self._next_button)

        layout.addLayout(nav)

        self._get_started_button = QPushButton("Get Started")
        self._get_started_button.setStyleSheet("""
            QPushButton {
                background-color: #0078d4;
                color: white;
                border: none;
                border-radius: 18px;
                padding: 8px 32px;
                font-weight: bold;
            }
            QPushButton:hover {
                background-color: #1084d8;
            }
        """)
        self._get_started_button.clicked.connect(self._on_get_started_clicked)
        self._get_started_button.setVisible(False)
        layout.addWidget(self._get_started_button, alignment=Qt.AlignmentFlag.AlignHCenter)

    # ------------------------------------------------------------------
    # SlideRenderer
    # ------------------------------------------------------------------

    def show_slides(self, items: Sequence[ScreenItem]) -> None:
        for index, item in enumerate(items):
            self._stack.addWidget(SlideWidget(item))

            dot = QPushButton("●")
            dot.setCheckable(True)
            dot.setFlat(True)
            dot.setToolTip(item.title)
            dot.setFixedSize(20, 20)
            self._dot_group.addButton(dot, index)
            self._indicator_layout.addWidget(dot)
            self._dots.append(dot)

    def show_slide(self, index: int) -> None:
        self._syncing = True
        try:
            if self._stack.currentIndex() != index:
                self._stack.setCurrentIndex(index)
            if not self._dots[index].isChecked():
                self._dots[index].setChecked(True)
        finally:
            self._syncing = False

    def present(self, state: UIState) -> None:
        browsing = state is UIState.BROWSING
        self._next_button.setVisible(browsing)
        self._skip_button.setVisible(browsing)
        self._indicator.setVisible(browsing)
        self._get_started_button.setVisible(not browsing)

        if not browsing and not self._final_animated:
            self._final_animated = True
            self._animate_get_started()

    def close(self) -> None:
        logger.debug("Closing onboarding window")
        self.window.close()

    def _animate_get_started(self):
        """Fade the Get Started button in, once."""
        effect = QGraphicsOpacityEffect(self._get_started_button)
        self._get_started_button.setGraphicsEffect(effect)

        self._animation = QPropertyAnimation(effect, b"opacity")
        self._animation.setDuration(GET_STARTED_ANIMATION_MS)
        self._animation.setStartValue(0.0)
        self._animation.setEndValue(1.0)
        self._animation.setEasingCurve(QEasingCurve.Type.OutCubic)
        self._animation.start()

    # ------------------------------------------------------------------
    # Slots
    # ------------------------------------------------------------------

    def _on_next_clicked(self):
        if self._controller:
            self._controller.advance()

    def _on_skip_clicked(self):
        if self._controller:
            self._controller.skip()

    def _on_get_started_clicked(self):
        if not self._controller:
            return
        try:
            self._controller.confirm()
        except OnboardingError as e:
            logger.error(f"Hand-off failed: {e}")
            self.error = e

    def _on_dot_clicked(self, index: int):
        if self._controller and not self._syncing:
            self._controller.on_tab_selected(index)


def run_qt(
    controller_factory: Callable[[SlideRenderer], OnboardingController],
    title: str = "Welcome",
) -> int:
    """
    Run the Qt event loop until the onboarding screen closes.

    Raises:
        OnboardingError: If the hand-off to the main application failed
    """
    app = QApplication.instance() or QApplication(sys.argv[:1])
    app.setApplicationName("onboarding")

    view = OnboardingViewQt(title=title)
    controller = controller_factory(view)
    view.bind(controller)

    if not controller.start():
        return 0

    view.window.show()
    status = app.exec()
    if view.error:
        raise view.error
    return status
