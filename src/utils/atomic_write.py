"""
Atomic file writes for preference files.

A write either lands completely or leaves the previous file untouched:
content goes to a hidden sibling temp file which is then renamed over the
destination.
"""

from __future__ import annotations

import json
import os
import tempfile
from pathlib import Path
from typing import Any, Union

PRIVATE_MODE = 0o600


def _sync_directory(directory: Path) -> None:
    """Flush a directory entry so a completed rename survives a crash."""
    if not hasattr(os, "O_DIRECTORY"):
        return
    try:
        fd = os.open(directory, os.O_RDONLY | os.O_DIRECTORY)
    except OSError:
        return
    try:
        os.fsync(fd)
    except OSError:
        pass
    finally:
        os.close(fd)


def atomic_write_text(
    path: Union[str, Path], content: str, mode: int = PRIVATE_MODE
) -> None:
    """
    Replace ``path`` with ``content`` in one rename.

    Missing parent directories are created. The temp file is removed if
    anything fails before the rename.
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    with tempfile.NamedTemporaryFile(
        "w",
        encoding="utf-8",
        dir=path.parent,
        prefix=f".{path.name}.",
        suffix=".tmp",
        delete=False,
    ) as tmp:
        tmp_path = Path(tmp.name)
        try:
            tmp.write(content)
            tmp.flush()
            os.fsync(tmp.fileno())
        except BaseException:
            tmp.close()
            tmp_path.unlink(missing_ok=True)
            raise

    try:
        tmp_path.chmod(mode)
        tmp_path.replace(path)
    except BaseException:
        tmp_path.unlink(missing_ok=True)
        raise

    _sync_directory(path.parent)


def atomic_write_json(
    path: Union[str, Path], data: Any, mode: int = PRIVATE_MODE
) -> None:
    """Write ``data`` as stable, sorted, indented JSON via atomic_write_text."""
    content = json.dumps(data, indent=2, ensure_ascii=False, sort_keys=True)
    atomic_write_text(path, content + "\n", mode)
