"""Resolve the partial date strings found within bulletins.

Most timestamps in these products are partial, a day of month and a time
or just a time.  The missing year, month or day come from a context
instant, which is usually a previously resolved timestamp within the
same bulletin.
"""

import re
from datetime import datetime, timezone
from typing import Optional, Union

from pywmo.models.common import WMODate
from pywmo.reference import offsets
from pywmo.util import utc

# Longest first so that AKDT wins over KDT and friends
ZONE_RE = re.compile(
    r"\b(" + "|".join(sorted(offsets, key=len, reverse=True)) + r")\b"
)
MONTH_DIRECTIVES = ("%m", "%b", "%B")
YEAR_DIRECTIVES = ("%Y", "%y")

Context = Optional[Union[datetime, WMODate]]


def zone2offset(text: str) -> str:
    """Replace time zone abbreviations with fixed numeric offsets.

    No daylight saving logic is done here, EDT is simply -0400.
    """

    def _repl(match):
        hours = 0 - offsets[match.group(1)]
        sign = "-" if hours < 0 else "+"
        return f"{sign}{abs(hours):02.0f}00"

    return ZONE_RE.sub(_repl, text)


def _context_datetime(context: Context) -> datetime:
    """Get a UTC datetime from what we were given."""
    if isinstance(context, WMODate):
        context = context.valid
    if context is None:
        return utc()
    if context.tzinfo is None:
        return context.replace(tzinfo=timezone.utc)
    return context.astimezone(timezone.utc)


def parse_date(text: str, fmt: str, context: Context = None) -> WMODate:
    """Resolve a date string into an absolute timestamp.

    Args:
      text (str): the date string, for example `26 1358Z`.
      fmt (str): a `datetime.strptime` format, for example `%d %H%M%z`.
      context (datetime or WMODate, optional): supplies the year, month and
        day when `fmt` does not have them, defaults to now.

    Returns:
      WMODate

    Raises:
      ValueError: when the text does not satisfy the format or the result
        is not a valid calendar date.
    """
    ctx = _context_datetime(context)
    dstr = zone2offset(text.strip())
    sfmt = fmt
    if not any(d in fmt for d in YEAR_DIRECTIVES):
        dstr += f" {ctx.year}"
        sfmt += " %Y"
    if not any(d in fmt for d in MONTH_DIRECTIVES):
        dstr += f" {ctx.month}"
        sfmt += " %m"
    if "%d" not in fmt:
        dstr += f" {ctx.day}"
        sfmt += " %d"
    try:
        valid = datetime.strptime(dstr, sfmt)
    except ValueError as exp:
        raise ValueError(
            f"Failed to parse date `{text}` to format `{fmt}` with context "
            f"`{ctx:%Y-%m-%dT%H:%MZ}`"
        ) from exp
    if valid.tzinfo is None:
        valid = valid.replace(tzinfo=timezone.utc)
    return WMODate(valid=valid.astimezone(timezone.utc), text=text, fmt=fmt)
