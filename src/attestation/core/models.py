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

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum


class ReasonCode(Enum):
    """Travel reasons, in the order they appear on the form.

    Each member carries the token written in the QR payload and the baseline
    position of its checkbox mark on page 1.
    """

    WORK = ("travail", (77.0, 577.0))
    SHOPPING = ("achats", (77.0, 532.0))
    HEALTH = ("sante", (77.0, 476.0))
    FAMILY = ("famille", (77.0, 435.0))
    DISABILITY = ("handicap", (77.0, 395.0))
    SPORT_ANIMALS = ("sport_animaux", (77.0, 356.0))
    CONVOCATION = ("convocation", (77.0, 292.0))
    MISSIONS = ("missions", (77.0, 254.0))
    CHILDREN = ("enfants", (77.0, 209.0))

    def __init__(self, code: str, checkbox: tuple[float, float]) -> None:
        self.code = code
        self.checkbox = checkbox

    @classmethod
    def from_token(cls, value: str) -> ReasonCode:
        """Look up a reason by member name or code token, case-insensitively."""
        token = value.strip()
        lowered = token.lower()
        for member in cls:
            if member.name.lower() == lowered or member.code == lowered:
                return member
        raise LookupError(f"unknown reason: {value}")

    @classmethod
    def ordered(cls, reasons: Iterable[ReasonCode]) -> list[ReasonCode]:
        selected = set(reasons)
        return [member for member in cls if member in selected]


@dataclass(frozen=True)
class AttestationRequest:
    first_name: str
    last_name: str
    birth_date: date
    birth_place: str
    city: str
    postal_code: str
    address: str
    exit_datetime: datetime
    reasons: frozenset[ReasonCode]

    def ordered_reasons(self) -> list[ReasonCode]:
        return ReasonCode.ordered(self.reasons)


@dataclass(frozen=True)
class RenderedDocument:
    data: bytes
    filename: str
    generated_at: datetime
    content: str

    @property
    def size(self) -> int:
        return len(self.data)
