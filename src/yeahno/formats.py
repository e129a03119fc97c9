"""Registry of semantic string formats.

Each entry pairs a validation predicate with the ``format`` label advertised in
tool schemas. Unknown format tags are accepted and validate nothing, so an
unregistered tag degrades to a plain string.
"""

from __future__ import annotations

import re

from collections.abc import Callable
from dataclasses import dataclass
from urllib.parse import urlsplit

ALLOWED_URI_SCHEMES = frozenset({"http", "https"})

_HOSTNAME_PATTERN = re.compile(r"([a-zA-Z0-9]([a-zA-Z0-9-]{0,61}[a-zA-Z0-9])?\.)+[a-zA-Z]{2,}")
_CONTROL_CHARS = re.compile(r"[\x00-\x1f\x7f]")
_BROKEN_ESCAPE = re.compile(r"%(?![0-9A-Fa-f]{2})")
# In a host only %25 and escapes of non-ASCII bytes are allowed.
_ASCII_HOST_ESCAPE = re.compile(r"%(?!25)[0-7][0-9A-Fa-f]")


@dataclass(frozen=True)
class FormatValidator:
    schema_format: str
    validate: Callable[[str], None]


def _validate_uri(value: str) -> None:
    value = value.strip()
    if not value:
        return
    # urlsplit silently drops tabs and newlines, so reject them up front.
    if _CONTROL_CHARS.search(value) or _BROKEN_ESCAPE.search(value):
        raise ValueError("invalid URI format")
    try:
        parsed = urlsplit(value)
        if not parsed.scheme:
            parsed = urlsplit("https://" + value)
    except ValueError:
        raise ValueError("invalid URI format") from None
    if parsed.scheme.lower() not in ALLOWED_URI_SCHEMES:
        raise ValueError("invalid URI scheme: only http and https are allowed")
    host = parsed.netloc.rpartition("@")[2]
    if any(c.isspace() for c in parsed.netloc) or _ASCII_HOST_ESCAPE.search(host):
        raise ValueError("invalid URI format")
    if not parsed.hostname:
        raise ValueError("invalid URI format")


def _validate_domain(value: str) -> None:
    value = value.strip()
    if not value:
        return
    value = value.removeprefix("https://").removeprefix("http://")
    value = value.split("/", 1)[0]
    if not _HOSTNAME_PATTERN.fullmatch(value):
        raise ValueError("invalid domain format")


FORMAT_VALIDATORS: dict[str, FormatValidator] = {
    "uri": FormatValidator(schema_format="uri", validate=_validate_uri),
    "domain": FormatValidator(schema_format="hostname", validate=_validate_domain),
}


def validate_format(format_tag: str, value: str) -> None:
    """Validate *value* against *format_tag*, raising ``ValueError`` with a caller-safe reason."""
    validator = FORMAT_VALIDATORS.get(format_tag)
    if validator is not None:
        validator.validate(value)


def schema_format(format_tag: str | None) -> str | None:
    """Return the schema ``format`` label for *format_tag*, or None when it is not registered."""
    if not format_tag:
        return None
    validator = FORMAT_VALIDATORS.get(format_tag)
    return validator.schema_format if validator is not None else None
