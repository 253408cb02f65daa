from __future__ import annotations

from datetime import datetime, time

from .models import Place


def format_time_of_day(value: time | datetime | str | None = None) -> str:
    """Return ``value`` as a zero-padded ``HH:MM`` string (now when ``None``)."""
    if value is None:
        value = datetime.now()
    if isinstance(value, str):
        # Raises ValueError for anything that is not a valid HH:MM
        value = datetime.strptime(value.strip(), "%H:%M")
    return f"{value.hour:02d}:{value.minute:02d}"


def is_open_now(place: Place, now: time | datetime | str | None = None) -> bool:
    """
    Whether ``now`` falls within the place's opening hours.

    Places missing either bound are always open. ``HH:MM`` strings are
    fixed-width, so string order is chronological order within a day.
    Both endpoints are inclusive; an opening time later than the closing
    time means the interval crosses midnight.
    """
    opening = place.opening_time
    closing = place.closing_time
    if not opening or not closing:
        return True

    current = format_time_of_day(now)

    if opening <= closing:
        return opening <= current <= closing
    return current >= opening or current <= closing
