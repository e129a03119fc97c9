"""Field resolution and validation shared by every surface.

``resolve_fields`` turns a flat, string-keyed input mapping into
``{field_key: value}`` for one option, stopping at the first invalid field in
declaration order. Non-string values count as "not provided".
"""

from __future__ import annotations

import json

from collections.abc import Iterable, Mapping
from typing import Any

from yeahno.errors import FieldTooLong, InvalidFormat, InvalidValue, MalformedInput, MissingRequiredField
from yeahno.formats import validate_format
from yeahno.models import Input

MAX_FIELD_LENGTH = 10_000


def check_value(field: Input, value: str) -> str:
    """Apply the length, format and custom checks of *field* to one provided value."""
    key = field.resolved_key
    limit = field.char_limit or MAX_FIELD_LENGTH
    if len(value) > limit:
        raise FieldTooLong(key, limit)
    if field.format:
        try:
            validate_format(field.format, value)
        except ValueError as e:
            raise InvalidFormat(key, str(e)) from None
    if field.validator is not None:
        try:
            field.validator(value)
        except ValueError as e:
            raise InvalidValue(key, str(e)) from None
    return value


def resolve_fields(fields: Iterable[Input], raw: Any) -> dict[str, str]:
    if not isinstance(raw, Mapping):
        raise MalformedInput()

    resolved: dict[str, str] = {}
    for field in fields:
        key = field.resolved_key
        value = raw.get(key)
        if not isinstance(value, str):
            if field.required:
                raise MissingRequiredField(key)
            continue
        resolved[key] = check_value(field, value)
    return resolved


def parse_arguments(payload: Any) -> Mapping[str, Any]:
    """Decode a request payload into a flat mapping.

    ``None`` and empty payloads mean "no arguments". JSON text or bytes must
    decode to an object.
    """
    if payload is None:
        return {}
    if isinstance(payload, Mapping):
        return payload
    if isinstance(payload, (bytes, bytearray)):
        try:
            payload = payload.decode("utf-8")
        except UnicodeDecodeError:
            raise MalformedInput() from None
    if isinstance(payload, str):
        if not payload.strip():
            return {}
        try:
            payload = json.loads(payload)
        except json.JSONDecodeError:
            raise MalformedInput() from None
        if isinstance(payload, dict):
            return payload
    raise MalformedInput()
