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
from dataclasses import dataclass
from typing import Any

import segno
from PIL import Image, ImageDraw

from ..core.errors import EncodingOverflow

DARK = 0
LIGHT = 255


@dataclass(frozen=True)
class QrConfig:
    error: str = "L"
    boost_error: bool = True
    encoding: str | None = None
    small_size: int = 120
    large_size: int = 300


def make_qr(
    data: str,
    *,
    error: str = "L",
    boost_error: bool = True,
    encoding: str | None = None,
) -> Any:
    try:
        return segno.make(
            data,
            error=error,
            encoding=encoding,
            micro=False,
            boost_error=boost_error,
        )
    except segno.DataOverflowError as exc:
        raise EncodingOverflow(f"QR payload too large ({len(data)} chars): {exc}") from exc


def qr_image(content: str, size: int, *, config: QrConfig | None = None) -> Image.Image:
    """Render ``content`` as a ``size`` x ``size`` grayscale QR image.

    No quiet zone is added. Modules are scaled by the largest whole factor
    that fits and any leftover pixels are split evenly around the symbol.
    """
    if size <= 0:
        raise ValueError("size must be a positive integer")
    config = config or QrConfig()
    qr = make_qr(
        content,
        error=config.error,
        boost_error=config.boost_error,
        encoding=config.encoding,
    )
    modules, _ = qr.symbol_size(scale=1, border=0)
    scale = size // modules
    if scale < 1:
        raise EncodingOverflow(
            f"QR symbol needs {modules} modules but only {size} pixels are available"
        )
    offset = (size - modules * scale) // 2

    image = Image.new("L", (size, size), LIGHT)
    draw = ImageDraw.Draw(image)
    for row_idx, row in enumerate(qr.matrix_iter(scale=1, border=0)):
        top = offset + row_idx * scale
        for col_idx, is_dark in enumerate(row):
            if not is_dark:
                continue
            left = offset + col_idx * scale
            draw.rectangle((left, top, left + scale - 1, top + scale - 1), fill=DARK)
    return image


def qr_png(content: str, size: int, *, config: QrConfig | None = None) -> bytes:
    image = qr_image(content, size, config=config)
    buf = io.BytesIO()
    image.save(buf, format="PNG")
    return buf.getvalue()
