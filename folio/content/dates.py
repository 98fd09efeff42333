"""Parse and format the loosely-typed publication dates found in front matter."""

from __future__ import annotations

from datetime import date, datetime, timezone

_FALLBACK_FORMATS = ("%Y/%m/%d", "%B %d, %Y", "%b %d, %Y", "%d %B %Y")


def parse_date(value: str | None) -> datetime | None:
    """Return an aware UTC datetime for ``value`` or ``None`` when it cannot be parsed."""
    if value is None:
        return None
    text = value.strip()
    if not text:
        return None

    parsed: datetime | None = None
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        for pattern in _FALLBACK_FORMATS:
            try:
                parsed = datetime.strptime(text, pattern)
            except ValueError:
                continue
            break

    if parsed is None:
        return None
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=timezone.utc)
    try:
        return parsed.astimezone(timezone.utc)
    except OverflowError:
        # Offsets on 0001-01-01 or 9999-12-31 can fall outside datetime's range.
        return None


def format_date(value: str | None) -> str | None:
    """Format a date string for display, e.g. ``January 1, 2024``."""
    parsed = parse_date(value)
    if parsed is None:
        return None
    return f"{parsed:%B} {parsed.day}, {parsed.year}"


def to_iso_string(value: date | datetime) -> str:
    """Render YAML-decoded dates back into the string form they were written in."""
    return value.isoformat()
