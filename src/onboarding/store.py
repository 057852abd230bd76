"""
Completion store for the onboarding flow.

Persists a single boolean, "onboarding completed", in a namespaced JSON
preferences file under the per-user config directory.
"""

from __future__ import annotations

import json
import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, Union

from common.decorators import handle_errors, retry
from common.exceptions import PreferencesReadError, PreferencesWriteError
from utils.atomic_write import atomic_write_json

logger = logging.getLogger(__name__)

DEFAULT_COMPLETION_KEY = "intro_opened"


class CompletionStore(ABC):
    """Persistence for the onboarding completion flag."""

    @abstractmethod
    def get_completed(self) -> bool:
        """Return True if onboarding was completed before."""

    @abstractmethod
    def set_completed(self, value: bool) -> None:
        """Persist the completion flag."""

    def clear(self) -> None:
        """Forget the completion flag."""
        self.set_completed(False)


class MemoryCompletionStore(CompletionStore):
    """Process-local store, used for tests and dry runs."""

    def __init__(self, completed: bool = False):
        self._values: Dict[str, bool] = {DEFAULT_COMPLETION_KEY: completed}

    def get_completed(self) -> bool:
        return self._values.get(DEFAULT_COMPLETION_KEY, False)

    def set_completed(self, value: bool) -> None:
        self._values[DEFAULT_COMPLETION_KEY] = bool(value)

    def clear(self) -> None:
        self._values.pop(DEFAULT_COMPLETION_KEY, None)


class PreferencesStore(CompletionStore):
    """
    JSON-file backed completion store.

    The file holds a flat object; only ``key`` is owned by this store and
    other keys are preserved on write.

    Args:
        path: Preferences file, e.g. ~/.config/onboarding/prefs.json
        key: Name of the completion marker
    """

    def __init__(self, path: Union[str, Path], key: str = DEFAULT_COMPLETION_KEY):
        self.path = Path(path)
        self.key = key

    def __repr__(self):
        return f"PreferencesStore(path={str(self.path)!r}, key={self.key!r})"

    def _load(self) -> Dict[str, Any]:
        """Read the preferences object; a missing file is an empty object."""
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (FileNotFoundError, NotADirectoryError):
            return {}
        except (OSError, UnicodeDecodeError) as e:
            raise PreferencesReadError(str(self.path), "unreadable", cause=e)
        except json.JSONDecodeError as e:
            raise PreferencesReadError(str(self.path), "invalid JSON", cause=e)

        if not isinstance(data, dict):
            raise PreferencesReadError(
                str(self.path), f"expected an object, got {type(data).__name__}"
            )
        return data

    @handle_errors(
        PreferencesReadError,
        default=False,
        log_level=logging.WARNING,
        message="Treating onboarding as not completed",
    )
    def get_completed(self) -> bool:
        return self._load().get(self.key) is True

    def set_completed(self, value: bool) -> None:
        try:
            data = self._load()
        except PreferencesReadError as e:
            logger.warning(f"Overwriting unreadable preferences: {e}")
            data = {}

        data[self.key] = bool(value)
        self._write(data)
        logger.info(f"Saved {self.key}={bool(value)} to {self.path}")

    def clear(self) -> None:
        try:
            data = self._load()
        except PreferencesReadError as e:
            logger.warning(f"Discarding unreadable preferences: {e}")
            data = {}

        if self.key not in data:
            logger.debug(f"{self.key} not set in {self.path}")
            return

        del data[self.key]
        self._write(data)
        logger.info(f"Cleared {self.key} in {self.path}")

    def _write(self, data: Dict[str, Any]) -> None:
        try:
            _write_preferences(self.path, data)
        except OSError as e:
            raise PreferencesWriteError(str(self.path), cause=e)


@retry(max_attempts=3, delay=0.05, backoff=2.0, exceptions=(OSError,))
def _write_preferences(path: Path, data: Dict[str, Any]) -> None:
    atomic_write_json(path, data)
