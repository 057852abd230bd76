"""
Main application entry points.

The onboarding screen hands off to the main application exactly once,
fire-and-forget, then closes itself.
"""

from __future__ import annotations

import logging
import shlex
import shutil
import subprocess
from abc import ABC, abstractmethod
from typing import Callable, List, Sequence, Union

from common.exceptions import LaunchError

logger = logging.getLogger(__name__)


class MainEntry(ABC):
    """Something that starts the main application."""

    @abstractmethod
    def launch(self) -> None:
        """Start the main application without waiting for it."""


class CommandLauncher(MainEntry):
    """
    Start the main application as a detached process.

    Args:
        command: argv list, or a shell-style string split with shlex
    """

    def __init__(self, command: Union[str, Sequence[str]]):
        if isinstance(command, str):
            command = shlex.split(command)
        self.argv: List[str] = list(command)
        if not self.argv:
            raise ValueError("Main command must not be empty")

    def __repr__(self):
        return f"CommandLauncher({shlex.join(self.argv)!r})"

    def launch(self) -> None:
        executable = shutil.which(self.argv[0])
        if executable is None:
            raise LaunchError(shlex.join(self.argv), cause=FileNotFoundError(self.argv[0]))

        try:
            process = subprocess.Popen(
                [executable] + self.argv[1:],
                stdin=subprocess.DEVNULL,
                stdout=subprocess.DEVNULL,
                stderr=subprocess.DEVNULL,
                start_new_session=True,
            )
        except OSError as e:
            raise LaunchError(shlex.join(self.argv), cause=e)

        logger.info(f"Launched main application (pid {process.pid}): {shlex.join(self.argv)}")


class CallbackEntry(MainEntry):
    """Run an in-process callable as the main entry point."""

    def __init__(self, callback: Callable[[], None]):
        self.callback = callback

    def launch(self) -> None:
        logger.info(f"Handing off to {getattr(self.callback, '__name__', self.callback)!s}")
        self.callback()
