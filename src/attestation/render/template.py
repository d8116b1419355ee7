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
from pathlib import Path

from pypdf import PdfReader, PdfWriter
from pypdf.errors import PyPdfError

from ..core.errors import TemplateUnavailable

PACKAGE_ROOT = Path(__file__).resolve().parents[1]
DEFAULT_TEMPLATE_PATH = PACKAGE_ROOT / "templates" / "attestation_empty.pdf"


def load_template(path: str | Path | None = None) -> PdfWriter:
    """Load the one-page template into a writable document.

    The caller owns the returned writer and the in-memory copy of the file
    behind it. Use ``open_template`` to have the copy released on exit.
    """
    source = io.BytesIO(_read_template(path))
    return _clone_template(source, label=str(path or DEFAULT_TEMPLATE_PATH))


@contextmanager
def open_template(path: str | Path | None = None) -> Iterator[PdfWriter]:
    """Yield the template as a writable document, releasing its source on exit."""
    source = io.BytesIO(_read_template(path))
    try:
        yield _clone_template(source, label=str(path or DEFAULT_TEMPLATE_PATH))
    finally:
        source.close()


def _read_template(path: str | Path | None) -> bytes:
    template_path = Path(path) if path is not None else DEFAULT_TEMPLATE_PATH
    if not template_path.is_file():
        raise TemplateUnavailable(f"template not found: {template_path}")
    try:
        return template_path.read_bytes()
    except OSError as exc:
        raise TemplateUnavailable(f"failed to read template {template_path}: {exc}") from exc


def _clone_template(source: io.BytesIO, *, label: str) -> PdfWriter:
    try:
        reader = PdfReader(source, strict=False)
        page_count = len(reader.pages)
        writer = PdfWriter(clone_from=reader)
    except (PyPdfError, ValueError, KeyError) as exc:
        raise TemplateUnavailable(f"template is not a readable PDF: {label}") from exc
    if page_count != 1:
        raise TemplateUnavailable(f"template must have exactly one page, found {page_count}")
    return writer
