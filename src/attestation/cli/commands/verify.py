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

from pathlib import Path

import typer

from ...qr.scan import QrScanError, scan_pdf_payloads
from ..core.common import _ctx_value, _run_cli
from ..core.log import _info
from ..ui import console_err

_VERIFY_HELP = (
    "Decode the QR codes of a generated attestation and check they agree.\n\n"
    "Exits with status 1 when the payloads differ."
)


def register(app: typer.Typer) -> None:
    app.command(help=_VERIFY_HELP)(verify)


def verify(
    ctx: typer.Context,
    pdf: Path = typer.Argument(..., help="Attestation PDF to check."),
) -> None:
    debug_value = bool(_ctx_value(ctx, "debug"))

    def _run() -> int:
        pages = scan_pdf_payloads(pdf)
        payloads = [payload for page in pages for payload in page]
        if not payloads:
            raise QrScanError(f"no QR codes found in {pdf}")
        distinct = set(payloads)
        if len(distinct) != 1:
            console_err.print(
                f"[error]Mismatch:[/error] {len(distinct)} different payloads "
                f"across {len(payloads)} QR codes"
            )
            return 1
        _info(f"[success]OK[/success] {len(payloads)} QR codes on {len(pages)} pages")
        _info(payloads[0])
        return 0

    _run_cli(_run, debug=debug_value)
