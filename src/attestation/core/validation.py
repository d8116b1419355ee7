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

import json
import unicodedata
from collections.abc import Mapping
from datetime import date, datetime
from pathlib import Path
from typing import Any

from .errors import InputInvalid
from .models import AttestationRequest, ReasonCode

TEXT_FIELDS = ("firstname", "lastname", "birthPlace", "city", "postalCode", "address")
REQUIRED_FIELDS = (*TEXT_FIELDS, "birthDate", "exitDateTime", "reasons")


def require_text(value: object, *, label: str) -> str:
    """Validate that value is a non-blank string and normalize it to NFC."""
    if not isinstance(value, str):
        raise InputInvalid(label, "must be a string")
    text = unicodedata.normalize("NFC", value.strip())
    if not text:
        raise InputInvalid(label, "must not be blank")
    # The form is drawn with a core PDF font.
    try:
        text.encode("latin-1")
    except UnicodeEncodeError as exc:
        raise InputInvalid(label, "must only use Latin-1 characters") from exc
    return text


def require_date(value: object, *, label: str) -> date:
    if isinstance(value, datetime):
        raise InputInvalid(label, "must be a calendar date without time")
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        raise InputInvalid(label, "must be an ISO date (YYYY-MM-DD)")
    try:
        return date.fromisoformat(value.strip())
    except ValueError as exc:
        raise InputInvalid(label, "must be an ISO date (YYYY-MM-DD)") from exc


def require_offset_datetime(value: object, *, label: str) -> datetime:
    """Validate an ISO date-time that carries an explicit UTC offset."""
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, str):
        try:
            parsed = datetime.fromisoformat(value.strip())
        except ValueError as exc:
            raise InputInvalid(label, "must be an ISO date-time with offset") from exc
    else:
        raise InputInvalid(label, "must be an ISO date-time with offset")
    if parsed.tzinfo is None or parsed.utcoffset() is None:
        raise InputInvalid(label, "must carry an explicit UTC offset")
    return parsed


def require_reasons(value: object, *, label: str) -> frozenset[ReasonCode]:
    if isinstance(value, str) or not isinstance(value, (list, tuple, set, frozenset)):
        raise InputInvalid(label, "must be a list of reasons")
    reasons: set[ReasonCode] = set()
    for item in value:
        if isinstance(item, ReasonCode):
            reasons.add(item)
            continue
        if not isinstance(item, str):
            raise InputInvalid(label, f"unsupported reason: {item!r}")
        try:
            reasons.add(ReasonCode.from_token(item))
        except LookupError as exc:
            raise InputInvalid(label, str(exc)) from exc
    if not reasons:
        raise InputInvalid(label, "must contain at least one reason")
    return frozenset(reasons)


def parse_request(data: Mapping[str, Any]) -> AttestationRequest:
    """Build a request from the JSON field names used by the public API."""
    if not isinstance(data, Mapping):
        raise InputInvalid("request", "must be an object")
    for key in REQUIRED_FIELDS:
        if key not in data or data[key] is None:
            raise InputInvalid(key, "is required")
    return AttestationRequest(
        first_name=require_text(data["firstname"], label="firstname"),
        last_name=require_text(data["lastname"], label="lastname"),
        birth_date=require_date(data["birthDate"], label="birthDate"),
        birth_place=require_text(data["birthPlace"], label="birthPlace"),
        city=require_text(data["city"], label="city"),
        postal_code=require_text(data["postalCode"], label="postalCode"),
        address=require_text(data["address"], label="address"),
        exit_datetime=require_offset_datetime(data["exitDateTime"], label="exitDateTime"),
        reasons=require_reasons(data["reasons"], label="reasons"),
    )


def load_request(source: str | Path, *, text: str | None = None) -> AttestationRequest:
    """Parse a request from a JSON file, or from ``text`` when already read."""
    raw = text if text is not None else Path(source).read_text(encoding="utf-8")
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise InputInvalid("request", f"invalid JSON ({exc.msg})") from exc
    return parse_request(data)
