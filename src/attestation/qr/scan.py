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
from pathlib import Path

import pypdf
import zxingcpp
from PIL import Image, ImageOps
from pypdf.errors import PdfReadError

# Embedded symbols have no quiet zone; scanners want one.
_SCAN_BORDER = 16


class QrScanError(RuntimeError):
    pass


def decode_image(image: Image.Image) -> list[str]:
    padded = ImageOps.expand(image.convert("L"), border=_SCAN_BORDER, fill=255)
    return [result.text for result in zxingcpp.read_barcodes(padded) if result.text]


def decode_image_bytes(data: bytes) -> list[str]:
    with Image.open(io.BytesIO(data)) as image:
        return decode_image(image)


def scan_pdf_payloads(source: str | Path | bytes) -> list[list[str]]:
    """Decode the QR codes embedded in each page of a PDF.

    Returns one list of payloads per page, in page order.
    """
    try:
        if isinstance(source, bytes):
            reader = pypdf.PdfReader(io.BytesIO(source))
        else:
            reader = pypdf.PdfReader(str(source))
    except (OSError, PdfReadError) as exc:
        raise QrScanError(f"failed to read PDF: {exc}") from exc

    pages: list[list[str]] = []
    for page in reader.pages:
        payloads: list[str] = []
        for embedded in page.images:
            try:
                payloads.extend(decode_image(embedded.image))
            except OSError:
                continue
        pages.append(payloads)
    return pages
