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

from datetime import date, datetime

from ..core.models import AttestationRequest

LINE_SEPARATOR = ";\n "
REASON_SEPARATOR = ", "


def format_date(value: date) -> str:
    return f"{value.day:02d}/{value.month:02d}/{value.year:04d}"


def format_time(value: datetime) -> str:
    return f"{value.hour:02d}:{value.minute:02d}"


def format_stamp_time(value: datetime) -> str:
    return f"{value.hour:02d}h{value.minute:02d}"


def local_exit(request: AttestationRequest) -> datetime:
    """Return the exit wall-clock time in the request's own offset."""
    return request.exit_datetime.replace(tzinfo=None)


def full_name(request: AttestationRequest) -> str:
    return " ".join(part for part in (request.first_name, request.last_name) if part)


def full_address(request: AttestationRequest) -> str:
    parts = (request.address, request.postal_code, request.city)
    return " ".join(part for part in parts if part)


def format_reasons(request: AttestationRequest) -> str:
    return REASON_SEPARATOR.join(reason.code for reason in request.ordered_reasons())


def format_content(request: AttestationRequest, generated_at: datetime) -> str:
    """Build the text embedded in both QR codes.

    The first line stamps ``generated_at``, so two calls with the same request
    only agree when they share the same minute.
    """
    exit_at = local_exit(request)
    lines = (
        f"Cree le: {format_date(generated_at)} a {format_stamp_time(generated_at)}",
        f"Nom: {request.last_name}",
        f"Prenom: {request.first_name}",
        f"Naissance: {format_date(request.birth_date)} a {request.birth_place}",
        f"Adresse: {full_address(request)}",
        f"Sortie: {format_date(exit_at)} a {format_time(exit_at)}",
        f"Motifs: {format_reasons(request)}",
    )
    return LINE_SEPARATOR.join(lines)


def suggested_filename(generated_at: datetime) -> str:
    return (
        f"attestation-{generated_at.year:04d}-{generated_at.month:02d}-{generated_at.day:02d}"
        f"_{generated_at.hour:02d}-{generated_at.minute:02d}.pdf"
    )
