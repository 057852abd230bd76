"""
Pytest configuration and shared fixtures for onboarding tests.

Provides a fake renderer and main entry so the controller runs without
any GUI toolkit.
"""

import os
import pytest
from pathlib import Path
from typing import Generator, List, Tuple
import sys

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from onboarding.controller import SlideRenderer, UIState  # noqa: E402
from onboarding.launcher import MainEntry  # noqa: E402
from onboarding.slides import ScreenItem  # noqa: E402


# ============ Environment Fixtures ============

@pytest.fixture
def temp_home(tmp_path: Path, monkeypatch) -> Generator[Path, None, None]:
    """Provide a temporary home directory with no config overrides."""
    monkeypatch.setenv("HOME", str(tmp_path))
    monkeypatch.delenv("XDG_CONFIG_HOME", raising=False)
    monkeypatch.delenv("ONBOARDING_CONFIG_DIR", raising=False)

    (tmp_path / ".config").mkdir(parents=True)

    yield tmp_path


@pytest.fixture
def config_dir(tmp_path: Path) -> Path:
    """Provide a temporary onboarding config directory."""
    path = tmp_path / "config" / "onboarding"
    path.mkdir(parents=True)
    return path


@pytest.fixture
def prefs_path(config_dir: Path) -> Path:
    return config_dir / "prefs.json"


# ============ Collaborator Fakes ============

class RecordingRenderer(SlideRenderer):
    """Records every call the controller makes on the rendering boundary."""

    def __init__(self):
        self.calls: List[Tuple] = []
        self.items: List[ScreenItem] = []
        self.shown_index = None
        self.ui_state = None
        self.closed = False

    def show_slides(self, items):
        self.items = list(items)
        self.calls.append(("show_slides", len(self.items)))

    def show_slide(self, index):
        self.shown_index = index
        self.calls.append(("show_slide", index))

    def present(self, state):
        self.ui_state = state
        self.calls.append(("present", state))

    def close(self):
        self.closed = True
        self.calls.append(("close",))

    # Control visibility as a real view would apply it
    @property
    def next_visible(self) -> bool:
        return self.ui_state is UIState.BROWSING

    @property
    def skip_visible(self) -> bool:
        return self.ui_state is UIState.BROWSING

    @property
    def indicator_visible(self) -> bool:
        return self.ui_state is UIState.BROWSING

    @property
    def get_started_visible(self) -> bool:
        return self.ui_state is UIState.FINAL

    @property
    def rendered_anything(self) -> bool:
        return any(call[0] != "close" for call in self.calls)


class RecordingEntry(MainEntry):
    """Counts launches of the main application."""

    def __init__(self):
        self.launches = 0

    def launch(self):
        self.launches += 1


@pytest.fixture
def renderer() -> RecordingRenderer:
    return RecordingRenderer()


@pytest.fixture
def main_entry() -> RecordingEntry:
    return RecordingEntry()


@pytest.fixture
def sample_slides() -> List[ScreenItem]:
    return [
        ScreenItem("Fresh Food", "Food description", "img1.png"),
        ScreenItem("Fast Delivery", "Delivery description", "img2.png"),
        ScreenItem("Easy Payment", "Payment description", "img3.png"),
    ]


# ============ Marker Configuration ============

def pytest_configure(config):
    """Configure custom markers."""
    config.addinivalue_line(
        "markers", "unit: fast unit tests with no external deps"
    )
    config.addinivalue_line(
        "markers", "gui: tests that need a GUI toolkit and a display"
    )


def pytest_collection_modifyitems(config, items):
    """Skip GUI tests when no display is available."""
    skip_gui = pytest.mark.skip(reason="No display available")
    has_display = bool(os.environ.get("DISPLAY") or os.environ.get("WAYLAND_DISPLAY"))

    for item in items:
        if "gui" in item.keywords and not has_display:
            item.add_marker(skip_gui)
