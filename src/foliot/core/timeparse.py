"""
Current-time normalization and parsing of user supplied times and spans.

All returned datetimes carry the local UTC offset and are minute aligned
where they come from the clock.
"""

import re
from datetime import datetime, time, timedelta

from foliot.core.errors import ParseError

DATETIME_FORMATS = (
    "%Y-%m-%dT%H:%M:%S",
    "%d.%m.%Y-%H:%M",
    "%d.%m.%Y %H:%M",
)

TIME_FORMATS = (
    "%H:%M",
    "%H:%Mh",
    "%H%M",
    "%H%Mh",
)

_SPAN_PATTERN = re.compile(r"^\s*(?P<value>\d+(?:\.\d*)?|\.\d+)\s*(?P<unit>[hm]?)\s*$", re.IGNORECASE)


def now() -> datetime:
    """Return the current local time, rounded down to the start of the minute."""
    return datetime.now().astimezone().replace(second=0, microsecond=0)


def parse_starting_value(text: str, current: datetime | None = None) -> datetime:
    """
    Parse a starting value given on the command line.

    Accepts, in order: ``2015-09-18T23:56:04``, ``18.09.2015-23:56``,
    ``18.09.2015 23:56`` and finally a bare time (see ``parse_time_only``).

    Args:
        text: User input
        current: Reference "now" for bare times (defaults to ``now()``)

    Raises:
        ParseError: None of the formats match
    """
    for fmt in DATETIME_FORMATS:
        try:
            return datetime.strptime(text, fmt).astimezone()
        except ValueError:
            continue

    try:
        return parse_time_only(text, current)
    except ParseError:
        raise ParseError(text) from None


def parse_time_only(text: str, current: datetime | None = None) -> datetime:
    """
    Parse a bare time as today or yesterday.

    The result is today at that time if it lies strictly before ``current``,
    otherwise yesterday, so a bare time never points into the future.
    """
    parsed = None
    for fmt in TIME_FORMATS:
        try:
            parsed = datetime.strptime(text, fmt).time()
            break
        except ValueError:
            continue
    if parsed is None:
        raise ParseError(text, what="time")

    current = current or now()
    day = current.date()
    if current.time() <= parsed:
        day -= timedelta(days=1)

    return datetime.combine(day, time(parsed.hour, parsed.minute)).astimezone()


def parse_span(text: str) -> timedelta:
    """
    Parse the length of an arbitrary clock entry.

    A bare number or a number with an ``h`` suffix is hours (``1.5``,
    ``2h``), an ``m`` suffix means minutes (``90m``). Truncated to whole
    minutes.
    """
    match = _SPAN_PATTERN.match(text)
    if not match:
        raise ParseError(text, what="duration")

    value = float(match.group("value"))
    minutes = value if match.group("unit").lower() == "m" else value * 60
    return timedelta(minutes=int(minutes))
