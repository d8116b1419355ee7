#!/usr/bin/env python3
# Copyright (C) 2026 Alex Stoyanov
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation; either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License along with this program.
# If not, see <https://www.gnu.org/licenses/>.

from __future__ import annotations

import io
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any, cast

from fpdf import FPDF
from PIL import Image
from pypdf import PageObject, PdfReader

from ..core.models import ReasonCode
from .layout import (
    CHECKBOX_FONT_SIZE,
    CHECKBOX_MARK,
    FONT_FAMILY,
    GRID_COARSE_COLOR,
    GRID_COARSE_STEP,
    GRID_FINE_COLOR,
    GRID_FINE_STEP,
    TEXT_FONT_SIZE,
    TextField,
)


class PageRenderer:
    """Draws on an overlay the size of one template page.

    Positions are PDF user-space points with the origin at the bottom-left,
    so callers can use the coordinates read off the template directly.
    """

    def __init__(self, pdf: FPDF, *, width: float, height: float) -> None:
        self._pdf = pdf
        self.width = width
        self.height = height
        self.closed = False

    def write_text(self, value: str, x: float, y: float) -> None:
        self._draw_string(value, x, y, size=TEXT_FONT_SIZE)

    def write_checkbox(self, reason: ReasonCode) -> None:
        x, y = reason.checkbox
        self._draw_string(CHECKBOX_MARK, x, y, size=CHECKBOX_FONT_SIZE)

    def embed_qr(self, image: Image.Image, x: float, y: float) -> None:
        """Place ``image`` with its bottom-left corner at (x, y), one point per pixel."""
        self._ensure_open()
        width, height = image.size
        self._pdf.image(image, x=x, y=self.height - y - height, w=width, h=height)

    def write_field(self, field: TextField, value: str) -> None:
        self.write_text(value, field.x, field.y)

    def write_full_name(self, value: str) -> None:
        self.write_field(TextField.FULL_NAME, value)

    def write_birth_date(self, value: str) -> None:
        self.write_field(TextField.BIRTH_DATE, value)

    def write_birth_place(self, value: str) -> None:
        self.write_field(TextField.BIRTH_PLACE, value)

    def write_address(self, value: str) -> None:
        self.write_field(TextField.ADDRESS, value)

    def write_sign_city(self, value: str) -> None:
        self.write_field(TextField.SIGN_CITY, value)

    def write_exit_date(self, value: str) -> None:
        self.write_field(TextField.EXIT_DATE, value)

    def write_exit_time(self, value: str) -> None:
        self.write_field(TextField.EXIT_TIME, value)

    def draw_grid(self) -> None:
        """Overlay a calibration grid used to read positions off a new template."""
        self._ensure_open()
        self._pdf.set_line_width(0.2)
        self._grid_lines(GRID_FINE_STEP, GRID_FINE_COLOR)
        self._grid_lines(GRID_COARSE_STEP, GRID_COARSE_COLOR)

    def _grid_lines(self, step: int, color: tuple[int, int, int]) -> None:
        self._pdf.set_draw_color(*color)
        for offset_x in range(0, int(self.width) + 1, step):
            self._pdf.line(offset_x, 0, offset_x, self.height)
        for offset_y in range(0, int(self.height) + 1, step):
            top = self.height - offset_y
            self._pdf.line(0, top, self.width, top)

    def _draw_string(self, value: str, x: float, y: float, *, size: int) -> None:
        self._ensure_open()
        self._pdf.set_font(FONT_FAMILY, size=size)
        self._pdf.text(x, self.height - y, value)

    def _ensure_open(self) -> None:
        if self.closed:
            raise RuntimeError("drawing surface is already closed")


def _new_overlay(width: float, height: float) -> FPDF:
    pdf = FPDF(unit="pt", format=cast(Any, (width, height)))
    pdf.set_auto_page_break(False)
    pdf.set_margin(0)
    pdf.set_text_color(0, 0, 0)
    pdf.add_page()
    return pdf


@contextmanager
def open_surface(page: PageObject) -> Iterator[PageRenderer]:
    """Open a drawing surface over ``page``.

    Drawing goes to a transparent overlay that is merged on top of the
    existing page content when the block exits normally. If the block raises,
    the overlay is dropped and the page is left as it was.
    """
    box = page.mediabox
    width = float(box.width)
    height = float(box.height)
    pdf = _new_overlay(width, height)
    renderer = PageRenderer(pdf, width=width, height=height)
    try:
        yield renderer
    finally:
        renderer.closed = True
    overlay = PdfReader(io.BytesIO(bytes(pdf.output())))
    page.merge_translated_page(overlay.pages[0], float(box.left), float(box.bottom))
