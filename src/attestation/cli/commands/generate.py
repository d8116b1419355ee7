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

import sys
from pathlib import Path

import typer

from ...config import load_app_config
from ...core.models import RenderedDocument
from ...core.validation import load_request
from ...render.service import AttestationRenderer
from ..core.common import _ctx_value, _run_cli
from ..core.log import _debug, _info, _warn

_GENERATE_HELP = (
    "Fill the attestation form from JSON request files.\n\n"
    "Examples:\n"
    "  attestation generate request.json\n"
    "  attestation generate request.json -o out.pdf\n"
    "  cat request.json | attestation generate - -o out/\n"
)


def register(app: typer.Typer) -> None:
    app.command(help=_GENERATE_HELP)(generate)


def generate(
    ctx: typer.Context,
    requests: list[str] = typer.Argument(
        ...,
        help="Request JSON files ('-' reads one request from stdin).",
    ),
    output: Path | None = typer.Option(
        None,
        "--output",
        "-o",
        help="Output file, or directory when several requests are given.",
        rich_help_panel="Outputs",
    ),
    template: Path | None = typer.Option(
        None,
        "--template",
        help="Use this one-page PDF instead of the configured template.",
        rich_help_panel="Inputs",
    ),
    grid: bool = typer.Option(
        False,
        "--grid",
        help="Draw a calibration grid over the form.",
        rich_help_panel="Debug",
    ),
) -> None:
    if requests.count("-") > 1:
        raise typer.BadParameter("stdin ('-') can only be read once", param_hint="REQUESTS")
    debug_value = bool(_ctx_value(ctx, "debug"))
    quiet_value = bool(_ctx_value(ctx, "quiet"))

    def _run() -> None:
        if grid:
            _warn(
                "calibration grid enabled; the output is not a valid attestation",
                quiet=quiet_value,
            )
        config = load_app_config(_ctx_value(ctx, "config"))
        parsed = [
            load_request(source, text=sys.stdin.read() if source == "-" else None)
            for source in requests
        ]
        with AttestationRenderer(
            template_path=template or config.template_path,
            qr_config=config.qr_config,
            render_jobs=config.runtime.render_jobs,
        ) as renderer:
            futures = [renderer.submit(request, grid=grid) for request in parsed]
            documents = [future.result() for future in futures]

        targets = _output_paths(output, documents)
        for document, target in zip(documents, targets):
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_bytes(document.data)
            _debug(f"QR content for {target.name}:\n{document.content}", debug=debug_value)
            _info(str(target))

    _run_cli(_run, debug=debug_value)


def _output_paths(output: Path | None, documents: list[RenderedDocument]) -> list[Path]:
    if output is not None and len(documents) == 1 and not output.is_dir():
        if output.suffix.lower() == ".pdf":
            return [output]
    directory = output if output is not None else Path.cwd()
    if directory.suffix.lower() == ".pdf":
        raise ValueError("--output must be a directory when several requests are given")
    used: set[Path] = set()
    paths: list[Path] = []
    for document in documents:
        path = _unique_path(directory / document.filename, used)
        used.add(path)
        paths.append(path)
    return paths


def _unique_path(path: Path, used: set[Path]) -> Path:
    candidate = path
    counter = 2
    while candidate in used or candidate.exists():
        candidate = path.with_name(f"{path.stem}-{counter}{path.suffix}")
        counter += 1
    return candidate
