"""Display helpers shared by the profile pages."""

from __future__ import annotations

from datetime import UTC, datetime

FALLBACK_INITIALS = "??"

# Fixed en-US abbreviations so output never depends on the host locale.
_MONTHS = ("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")


def get_initials(name: str | None) -> str:
    """Return up to two upper-cased initials for an avatar placeholder.

    >>> get_initials("Jane Doe")
    'JD'
    >>> get_initials("Cher")
    'C'
    >>> get_initials("")
    '??'
    """
    if not name:
        return FALLBACK_INITIALS
    initials = "".join(part[0] for part in name.split(" ") if part)
    return initials.upper()[:2] or FALLBACK_INITIALS


def parse_timestamp(value: str | datetime) -> datetime:
    """Parse an API timestamp; naive values are taken to be UTC."""
    moment = value if isinstance(value, datetime) else datetime.fromisoformat(value)
    if moment.tzinfo is None:
        return moment.replace(tzinfo=UTC)
    return moment.astimezone(UTC)


def format_date(value: str | datetime) -> str:
    """Render a timestamp as ``"<Mon> <YYYY>"`` in UTC, e.g. ``"Mar 2024"``."""
    moment = parse_timestamp(value)
    return f"{_MONTHS[moment.month - 1]} {moment.year}"


def pluralize(count: int, singular: str, plural: str | None = None) -> str:
    """Return ``"<count> <noun>"`` with the noun agreeing with the count."""
    noun = singular if count == 1 else (plural or f"{singular}s")
    return f"{count} {noun}"
