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

import typer
from rich.table import Table

from ...core.models import ReasonCode
from ..ui import console


def register(app: typer.Typer) -> None:
    app.command(help="List travel reasons with their QR tokens and form positions.")(reasons)


def reasons() -> None:
    table = Table(title="Travel reasons")
    table.add_column("Name", style="accent")
    table.add_column("Token")
    table.add_column("Checkbox (x, y)", justify="right")
    for reason in ReasonCode:
        x, y = reason.checkbox
        table.add_row(reason.name, reason.code, f"{x:g}, {y:g}")
    console.print(table)
