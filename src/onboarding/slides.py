"""
Onboarding slide definitions.

The built-in slides can be replaced by a JSON file:

    {"slides": [{"title": "...", "description": "...", "image": "..."}]}

Relative image paths are resolved against the slides file's directory;
anything else is kept as a themed icon name.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import List, Sequence, Union

from common.exceptions import InvalidSlidesError

logger = logging.getLogger(__name__)

_PLACEHOLDER_TEXT = (
    "Lorem ipsum dolor sit amet, consectetur adipiscing elit, sed do eiusmod "
    "tempor incididunt ut labore et dolore magna aliqua, consectetur "
    "adipiscing elit"
)


@dataclass(frozen=True)
class ScreenItem:
    """One slide: title, description and an image handle.

    ``image`` is either a path to an image file or a themed icon name.
    """
    title: str
    description: str
    image: str

    @property
    def image_is_file(self) -> bool:
        return Path(self.image).is_file()


IMAGE_SUFFIXES = frozenset({
    ".png", ".jpg", ".jpeg", ".svg", ".gif", ".webp", ".bmp", ".tif", ".tiff",
})

DEFAULT_SLIDES: tuple = (
    ScreenItem("Fresh Food", _PLACEHOLDER_TEXT, "emoji-food-symbolic"),
    ScreenItem("Fast Delivery", _PLACEHOLDER_TEXT, "mail-send-symbolic"),
    ScreenItem("Easy Payment", _PLACEHOLDER_TEXT, "emblem-ok-symbolic"),
)


def validate_slides(slides: Sequence[ScreenItem], source: str = "<memory>") -> List[ScreenItem]:
    """Return slides as a list, raising InvalidSlidesError if empty."""
    items = list(slides)
    if not items:
        raise InvalidSlidesError(source, "at least one slide is required")
    return items


def _resolve_image(image: str, base: Path) -> str:
    """Resolve a relative image file against base; leave icon names alone.

    Reverse-DNS icon names such as ``org.gnome.Maps`` contain dots, so only
    values with a directory part, a known image suffix, or an existing file
    under base are treated as paths.
    """
    candidate = Path(image)
    if candidate.is_absolute():
        return image
    if ("/" in image or candidate.suffix.lower() in IMAGE_SUFFIXES
            or (base / candidate).is_file()):
        return str(base / candidate)
    return image


def load_slides(path: Union[str, Path]) -> List[ScreenItem]:
    """
    Load slides from a JSON file.

    Args:
        path: Path to the slides file

    Returns:
        Ordered list of ScreenItem

    Raises:
        InvalidSlidesError: If the file is missing, unparseable or malformed
    """
    path = Path(path)
    source = str(path)

    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        raise InvalidSlidesError(source, "file not found")
    except (OSError, json.JSONDecodeError, UnicodeDecodeError) as e:
        raise InvalidSlidesError(source, str(e))

    if not isinstance(data, dict) or not isinstance(data.get("slides"), list):
        raise InvalidSlidesError(source, "expected an object with a 'slides' list")

    items = []
    for position, entry in enumerate(data["slides"]):
        if not isinstance(entry, dict):
            raise InvalidSlidesError(source, f"slide {position} is not an object")

        fields = {}
        for name in ("title", "description", "image"):
            value = entry.get(name)
            if not isinstance(value, str) or (name != "description" and not value):
                raise InvalidSlidesError(
                    source, f"slide {position} needs a non-empty string '{name}'"
                )
            fields[name] = value

        image = _resolve_image(fields["image"], path.parent)
        items.append(ScreenItem(fields["title"], fields["description"], image))

    items = validate_slides(items, source)
    logger.info(f"Loaded {len(items)} slides from {path}")
    return items
