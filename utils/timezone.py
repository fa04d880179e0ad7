"""UTC-everywhere time handling, plus the free-text display dates blog posts use."""

from datetime import date, datetime, timezone


def now_utc() -> datetime:
    """
    Current time in UTC.

    Use this instead of datetime.now() everywhere.
    """
    return datetime.now(timezone.utc)


def format_display_date(value: date) -> str:
    """Human display date, e.g. 'January 5, 2025'."""
    return f"{value:%B} {value.day}, {value.year}"


def parse_display_date(text: str) -> date | None:
    """
    Parse a display date back to a date.

    Accepts 'January 5, 2025', 'Jan 5, 2025' and ISO 'YYYY-MM-DD'.
    Returns None for anything else - display dates are free text.
    """
    text = text.strip()
    for fmt in ("%B %d, %Y", "%b %d, %Y", "%Y-%m-%d"):
        try:
            return datetime.strptime(text, fmt).date()
        except ValueError:
            continue
    return None


def parse_timestamp(value: str | datetime | None) -> datetime | None:
    """
    Parse a stored ISO 8601 timestamp into an aware UTC datetime.

    Accepts a trailing 'Z' and timestamps with or without fractional
    seconds. Naive values are taken as UTC. Returns None for None or
    anything unparseable.
    """
    if value is None:
        return None
    if isinstance(value, str):
        text = value.strip()
        if text.endswith(("Z", "z")):
            text = text[:-1] + "+00:00"
        try:
            value = datetime.fromisoformat(text)
        except ValueError:
            return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)
