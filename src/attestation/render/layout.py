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

"""Fixed positions on the bundled template, in PDF points from the bottom-left.

Checkbox positions live on ``ReasonCode`` itself. Any change to
``templates/attestation_empty.pdf`` must be mirrored here.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

FONT_FAMILY = "helvetica"
TEXT_FONT_SIZE = 12
CHECKBOX_FONT_SIZE = 20
CHECKBOX_MARK = "x"


class TextField(Enum):
    FULL_NAME = (120.0, 695.0)
    BIRTH_DATE = (120.0, 673.0)
    BIRTH_PLACE = (300.0, 673.0)
    ADDRESS = (130.0, 651.0)
    SIGN_CITY = (110.0, 175.0)
    EXIT_DATE = (95.0, 152.0)
    EXIT_TIME = (255.0, 152.0)

    @property
    def x(self) -> float:
        return self.value[0]

    @property
    def y(self) -> float:
        return self.value[1]


@dataclass(frozen=True)
class QrSlot:
    x: float
    y: float


SIGNATURE_QR = QrSlot(x=430.0, y=95.0)
FULL_PAGE_QR = QrSlot(x=50.0, y=500.0)

GRID_FINE_STEP = 10
GRID_COARSE_STEP = 50
GRID_FINE_COLOR = (255, 200, 200)
GRID_COARSE_COLOR = (0, 0, 0)
