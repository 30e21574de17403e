"""Timestamp helpers shared by the source adapters and article validation."""

from __future__ import annotations

import re
from datetime import datetime, timezone

CANONICAL_FORMAT = "%Y-%m-%d %H:%M:%S"

_ISO8601_FORMAT = "%Y-%m-%dT%H:%M:%S%z"
_UTC_SUFFIX_RE = re.compile(r"[Zz]$")
_COMPACT_OFFSET_RE = re.compile(r"([+-]\d{2})(\d{2})$")
_FRACTION_RE = re.compile(r"\.(\d+)")


def is_iso8601(value: str) -> bool:
    """Return True if value is a full ISO 8601 timestamp with a numeric offset.

    Only the exact ``YYYY-MM-DDTHH:MM:SS+HH:MM`` shape is accepted: a value
    must survive a parse and re-format unchanged, so ``Z`` suffixes,
    fractional seconds and compact offsets are all rejected.
    """
    if not value:
        return False
    try:
        parsed = datetime.strptime(value, _ISO8601_FORMAT)
    except ValueError:
        return False
    return parsed.isoformat() == value


def parse_timestamp(value: str) -> datetime | None:
    """Parse an upstream timestamp into an aware UTC datetime.

    Accepts ISO 8601 dates and date-times with ``Z``, ``+HH:MM`` or ``+HHMM``
    offsets and any fractional-second precision. Naive values are taken as
    UTC. Returns None when the value cannot be parsed.
    """
    if not value or not isinstance(value, str):
        return None
    text = value.strip()
    text = _UTC_SUFFIX_RE.sub("+00:00", text)
    text = _COMPACT_OFFSET_RE.sub(r"\1:\2", text) if "T" in text else text
    text = _FRACTION_RE.sub(lambda m: "." + m.group(1)[:6].ljust(6, "0"), text)
    try:
        parsed = datetime.fromisoformat(text)
        if parsed.tzinfo is None:
            return parsed.replace(tzinfo=timezone.utc)
        # Offsets near year 1 or 9999 can push the UTC value out of range
        return parsed.astimezone(timezone.utc)
    except (ValueError, OverflowError):
        return None


def to_canonical(value: str) -> str:
    """Convert an upstream timestamp to ``YYYY-MM-DD HH:MM:SS`` in UTC.

    Returns an empty string when the value is missing or unparseable, so the
    caller's validation rejects the article instead of the adapter raising.
    """
    parsed = parse_timestamp(value)
    if parsed is None:
        return ""
    return parsed.strftime(CANONICAL_FORMAT)
