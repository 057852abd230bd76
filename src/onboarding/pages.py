#!/usr/bin/env python3
"""
Onboarding slide pages (GTK4/Adwaita).

One page per ScreenItem: image, title and description, centered.
"""

from __future__ import annotations

import logging

import gi

gi.require_version("Gtk", "4.0")
from gi.repository import Gtk, Pango  # noqa: E402

from .slides import ScreenItem  # noqa: E402

logger = logging.getLogger(__name__)

IMAGE_SIZE = 192


class SlidePage(Gtk.Box):
    """A single full-size onboarding slide."""

    def __init__(self, item: ScreenItem):
        super().__init__(orientation=Gtk.Orientation.VERTICAL, spacing=24)
        self.item = item
        self.set_margin_start(48)
        self.set_margin_end(48)
        self.set_margin_top(24)
        self.set_margin_bottom(24)
        self.set_valign(Gtk.Align.CENTER)
        self.set_hexpand(True)
        self.set_vexpand(True)

        self.append(self._build_image(item))

        title = Gtk.Label(label=item.title)
        title.add_css_class("title-1")
        self.append(title)

        desc = Gtk.Label(label=item.description)
        desc.set_wrap(True)
        desc.set_wrap_mode(Pango.WrapMode.WORD_CHAR)
        desc.set_max_width_chars(48)
        desc.set_justify(Gtk.Justification.CENTER)
        desc.add_css_class("dim-label")
        self.append(desc)

    @staticmethod
    def _build_image(item: ScreenItem) -> Gtk.Widget:
        if item.image_is_file:
            picture = Gtk.Picture.new_for_filename(item.image)
            picture.set_content_fit(Gtk.ContentFit.CONTAIN)
            picture.set_size_request(IMAGE_SIZE, IMAGE_SIZE)
            return picture

        icon = Gtk.Image.new_from_icon_name(item.image)
        icon.set_pixel_size(IMAGE_SIZE // 2)
        icon.add_css_class("dim-label")
        return icon
