# SPDX-License-Identifier: LGPL-3.0-only
# Copyright (c) 2026 Mirrowel

"""
Parsing for Twitter's ``created_at`` timestamps.

Twitter uses ``Sat Sep 04 16:10:54 +0000 2010`` rather than ISO 8601.
Day and month names are always English, so they are matched against
fixed tables instead of going through the locale-dependent ``%a``/``%b``.
"""

import re
from datetime import datetime, timedelta, timezone

_MONTHS = {
    "Jan": 1, "Feb": 2, "Mar": 3, "Apr": 4, "May": 5, "Jun": 6,
    "Jul": 7, "Aug": 8, "Sep": 9, "Oct": 10, "Nov": 11, "Dec": 12,
}
_DAYS = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")

_TIME_RE = re.compile(
    r"^(?P<dow>[A-Z][a-z]{2}) (?P<mon>[A-Z][a-z]{2}) (?P<day>\d{2}) "
    r"(?P<h>\d{2}):(?P<m>\d{2}):(?P<s>\d{2}) "
    r"(?P<sign>[+-])(?P<oh>\d{2})(?P<om>\d{2}) (?P<year>\d{4})$"
)


def parse_twitter_time(value: str) -> datetime:
    """
    Parse a Twitter timestamp into an aware UTC datetime.

    Raises:
        ValueError: If ``value`` does not match the layout
    """
    match = _TIME_RE.match(value.strip())
    if not match or match["dow"] not in _DAYS or match["mon"] not in _MONTHS:
        raise ValueError(f"time data {value!r} does not match Twitter layout")

    offset = timedelta(hours=int(match["oh"]), minutes=int(match["om"]))
    if match["sign"] == "-":
        offset = -offset

    parsed = datetime(
        int(match["year"]),
        _MONTHS[match["mon"]],
        int(match["day"]),
        int(match["h"]),
        int(match["m"]),
        int(match["s"]),
        tzinfo=timezone(offset),
    )
    return parsed.astimezone(timezone.utc)


__all__ = ["parse_twitter_time"]
