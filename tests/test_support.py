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

import json
import os
from collections.abc import Iterable
from contextlib import contextmanager
from datetime import date, datetime, timedelta, timezone
from pathlib import Path
from unittest import mock

from pypdf import PageObject

from attestation.core.models import AttestationRequest, ReasonCode

# =============================================================================
# Test Constants
# =============================================================================

TEST_GENERATED_AT = datetime(2021, 4, 5, 14, 2)
TEST_EXIT_AT = datetime(2021, 4, 5, 14, 30, tzinfo=timezone(timedelta(hours=2)))

TEST_REQUEST_JSON: dict[str, object] = {
    "firstname": "Jean",
    "lastname": "Dupont",
    "birthDate": "1970-01-01",
    "birthPlace": "Lyon",
    "city": "Paris",
    "postalCode": "75001",
    "address": "1 rue de Rivoli",
    "exitDateTime": "2021-04-05T14:30:00+02:00",
    "reasons": ["HEALTH", "WORK"],
}


# =============================================================================
# Environment Helpers
# =============================================================================


@contextmanager
def temp_env(overrides: dict[str, str], *, clear: bool = False):
    with mock.patch.dict(os.environ, overrides, clear=clear):
        yield


# =============================================================================
# Request Builders
# =============================================================================


def make_test_request(
    *,
    reasons: Iterable[ReasonCode] = (ReasonCode.HEALTH, ReasonCode.WORK),
    first_name: str = "Jean",
    last_name: str = "Dupont",
    exit_datetime: datetime = TEST_EXIT_AT,
) -> AttestationRequest:
    return AttestationRequest(
        first_name=first_name,
        last_name=last_name,
        birth_date=date(1970, 1, 1),
        birth_place="Lyon",
        city="Paris",
        postal_code="75001",
        address="1 rue de Rivoli",
        exit_datetime=exit_datetime,
        reasons=frozenset(reasons),
    )


def write_request_json(path: Path, **overrides: object) -> Path:
    data = dict(TEST_REQUEST_JSON)
    data.update(overrides)
    path.write_text(json.dumps(data), encoding="utf-8")
    return path


# =============================================================================
# PDF Helpers
# =============================================================================


def text_runs(page: PageObject) -> list[tuple[str, float, float, float]]:
    """Return (text, x, y, font size) for every string shown on ``page``.

    Only handles what the form uses: absolute Td/Tm inside BT blocks.
    """
    runs: list[tuple[str, float, float, float]] = []
    font_size = 0.0
    x = y = 0.0
    for operands, operator in page.get_contents().operations:
        if operator == b"BT":
            x = y = 0.0
        elif operator == b"Tf":
            font_size = float(operands[1])
        elif operator == b"Td":
            x += float(operands[0])
            y += float(operands[1])
        elif operator == b"Tm":
            x, y = float(operands[4]), float(operands[5])
        elif operator == b"Tj":
            runs.append((_as_text(operands[0]), x, y, font_size))
        elif operator == b"TJ":
            text = "".join(_as_text(item) for item in operands[0] if not _is_number(item))
            runs.append((text, x, y, font_size))
    return runs


def checkbox_marks(page: PageObject) -> set[tuple[float, float]]:
    return {
        (round(x, 1), round(y, 1))
        for text, x, y, size in text_runs(page)
        if text == "x" and size == 20
    }


def _as_text(value: object) -> str:
    if isinstance(value, bytes):
        return value.decode("latin-1")
    return str(value)


def _is_number(value: object) -> bool:
    return isinstance(value, (int, float))
