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


class AttestationError(RuntimeError):
    """Base class for failures raised while producing an attestation."""


class InputInvalid(AttestationError, ValueError):
    """A request field is missing or malformed."""

    def __init__(self, field: str, message: str) -> None:
        super().__init__(f"{field}: {message}")
        self.field = field


class TemplateUnavailable(AttestationError):
    """The template PDF cannot be loaded."""


class EncodingOverflow(AttestationError):
    """The QR payload does not fit in the requested symbol."""


class SerializationFailure(AttestationError):
    """The filled document could not be written out."""
