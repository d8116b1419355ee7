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

import concurrent.futures
import io
import os
from collections.abc import Callable, Iterable
from datetime import datetime
from pathlib import Path
from typing import Literal

from pypdf import PdfWriter
from pypdf.errors import PyPdfError
from pypdf.generic import RectangleObject

from ..core.errors import SerializationFailure
from ..core.models import AttestationRequest, RenderedDocument
from ..qr.codec import QrConfig, qr_image
from .content import (
    format_content,
    format_date,
    format_time,
    full_address,
    full_name,
    local_exit,
    suggested_filename,
)
from .layout import FULL_PAGE_QR, SIGNATURE_QR
from .pages import PageRenderer, open_surface
from .template import open_template

_RENDER_JOBS_ENV = "ATTESTATION_RENDER_JOBS"
_DEFAULT_WORKERS_CAP = 4

Clock = Callable[[], datetime]


def assemble(
    request: AttestationRequest,
    *,
    template_path: str | Path | None = None,
    generated_at: datetime | None = None,
    qr_config: QrConfig | None = None,
    grid: bool = False,
) -> RenderedDocument:
    """Render the filled form and the full-page QR code as one PDF.

    Either a complete two-page document is returned or an exception is
    raised; nothing is written anywhere else.
    """
    generated_at = generated_at or datetime.now()
    qr_config = qr_config or QrConfig()
    content = format_content(request, generated_at)

    with open_template(template_path) as document:
        form_page = document.pages[0]
        with open_surface(form_page) as surface:
            if grid:
                surface.draw_grid()
            _fill_form(surface, request)
            signature_qr = qr_image(content, qr_config.small_size, config=qr_config)
            surface.embed_qr(signature_qr, SIGNATURE_QR.x, SIGNATURE_QR.y)

        box = form_page.mediabox
        qr_page = document.add_blank_page(width=box.width, height=box.height)
        qr_page.mediabox = RectangleObject(box)
        with open_surface(qr_page) as surface:
            large_qr = qr_image(content, qr_config.large_size, config=qr_config)
            surface.embed_qr(large_qr, FULL_PAGE_QR.x, FULL_PAGE_QR.y)

        data = _serialize(document)

    return RenderedDocument(
        data=data,
        filename=suggested_filename(generated_at),
        generated_at=generated_at,
        content=content,
    )


def _fill_form(surface: PageRenderer, request: AttestationRequest) -> None:
    exit_at = local_exit(request)
    surface.write_full_name(full_name(request))
    surface.write_birth_date(format_date(request.birth_date))
    surface.write_birth_place(request.birth_place)
    surface.write_address(full_address(request))
    surface.write_sign_city(request.city)
    surface.write_exit_date(format_date(exit_at))
    surface.write_exit_time(format_time(exit_at))
    for reason in request.ordered_reasons():
        surface.write_checkbox(reason)


def _serialize(document: PdfWriter) -> bytes:
    buf = io.BytesIO()
    try:
        document.write(buf)
    except (PyPdfError, OSError, ValueError, TypeError) as exc:
        raise SerializationFailure(f"failed to write attestation PDF: {exc}") from exc
    return buf.getvalue()


class AttestationRenderer:
    """Runs each ``assemble`` call as an isolated job on a thread pool."""

    def __init__(
        self,
        *,
        template_path: str | Path | None = None,
        qr_config: QrConfig | None = None,
        render_jobs: int | Literal["auto"] | None = None,
        clock: Clock = datetime.now,
    ) -> None:
        self.template_path = template_path
        self.qr_config = qr_config or QrConfig()
        self.clock = clock
        self.workers = resolve_render_workers(render_jobs)
        self._executor = concurrent.futures.ThreadPoolExecutor(
            max_workers=self.workers,
            thread_name_prefix="attestation-render",
        )

    def __enter__(self) -> AttestationRenderer:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.shutdown()

    def render(self, request: AttestationRequest, *, grid: bool = False) -> RenderedDocument:
        return assemble(
            request,
            template_path=self.template_path,
            generated_at=self.clock(),
            qr_config=self.qr_config,
            grid=grid,
        )

    def submit(
        self,
        request: AttestationRequest,
        *,
        grid: bool = False,
    ) -> concurrent.futures.Future[RenderedDocument]:
        return self._executor.submit(self.render, request, grid=grid)

    def render_many(self, requests: Iterable[AttestationRequest]) -> list[RenderedDocument]:
        futures = [self.submit(request) for request in requests]
        return [future.result() for future in futures]

    def shutdown(self, *, wait: bool = True) -> None:
        self._executor.shutdown(wait=wait)


def resolve_render_workers(requested: int | Literal["auto"] | None = None) -> int:
    if requested is None:
        raw = os.environ.get(_RENDER_JOBS_ENV, "").strip().lower()
        if raw and raw != "auto":
            try:
                requested = int(raw)
            except ValueError:
                raise ValueError(
                    f"{_RENDER_JOBS_ENV} must be a positive integer or 'auto'"
                ) from None
            if requested <= 0:
                raise ValueError(f"{_RENDER_JOBS_ENV} must be a positive integer or 'auto'")
    if isinstance(requested, int):
        if requested <= 0:
            raise ValueError("render_jobs must be a positive integer or 'auto'")
        return requested
    cpu = os.cpu_count() or 1
    return max(1, min(cpu, _DEFAULT_WORKERS_CAP))
