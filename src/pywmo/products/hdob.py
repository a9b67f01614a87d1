"""High Density Observations (HDOB), URNT15 and URPN15.

See https://www.nhc.noaa.gov/abouthdobs_2007.shtml for the format, which
is a header line followed by thirty second observations::

    URNT15 KNHC 091956
    AF303 1414A MILTON HDOB 22 20241009
    194700 2656N 08305W 6967 03109 9985 +110 +093 186078 079 076 006 00
    $$
"""

import re
from datetime import timedelta
from typing import Optional

from pywmo.cursor import LineCursor
from pywmo.models.common import Coordinates, WMODate
from pywmo.models.hdob import (
    HDOBHeader,
    HDOBMessage,
    HDOBRecord,
    MetricQuality,
    PositionQuality,
)
from pywmo.util import LOG, int_or_none, is_missing, reinstate_thousand
from pywmo.wmo import WMOFile
from pywmo.wmodate import parse_date

HEADER_RE = re.compile(
    r"^\s*(?P<agency>[A-Z]+)(?P<aircraft>\d+)\s+"
    r"(?P<mission>W[A-Z]|\d{2})(?P<storm>\d{2}|[A-Z]{2})(?P<loc>[AECW])\s+"
    r"(?P<name>\w+?)\s+HDOB\s+(?P<obno>\d{2})\s+(?P<date>\d{8})\s*$"
)
RECORD_RE = re.compile(
    r"^\s*(?P<time>\d{6})\s+"
    r"(?P<latd>\d{2})(?P<latm>\d{2})(?P<ns>[NS])\s+"
    r"(?P<lond>\d{3})(?P<lonm>\d{2})(?P<ew>[EW])\s+"
    r"(?P<acpr>\d{4}|/{4})\s+(?P<acal>\d{5}|/{5})\s+"
    r"(?P<extrap>\d{4}|/{4})\s+"
    r"(?P<temp>[+-]\d{3}|/{4})\s+(?P<dewp>[+-]\d{3}|/{4})\s+"
    r"(?P<wdir>\d{3}|/{3})(?P<wspd>\d{3}|/{3})\s+"
    r"(?P<wmax>\d{3}|/{3})\s+(?P<sfmrw>\d{3}|/{3})\s+"
    r"(?P<sfmrr>\d{3}|/{3})\s+(?P<pqal>\d)(?P<mqal>\d)$"
)
END_RE = re.compile(r"\$\$")

# Above this flight level pressure, the extrapolated value is surface
# pressure, otherwise it is a D-value
SURFACE_PRESSURE_THRESHOLD = 550


def _tenths(val: str) -> Optional[float]:
    """Signed tenths of a degree."""
    return None if is_missing(val) else int(val) / 10.0


def _dvalue(val: str) -> Optional[int]:
    """D-value in meters, negative values have 5000 added."""
    res = int_or_none(val)
    if res is not None and res >= 5000:
        res = 5000 - res
    return res


def _position_quality(raw: int) -> PositionQuality:
    """Table of the position and pressure/altitude flag."""
    return PositionQuality(raw=raw, pos=raw not in (1, 3), pral=raw in (0, 1))


def _metric_quality(raw: int) -> MetricQuality:
    """Table of the meteorological flag."""
    return MetricQuality(
        raw=raw,
        temp=raw not in (1, 4, 5, 9),
        wind=raw not in (2, 4, 6, 9),
        sfmr=raw != 3 and raw < 5,
    )


def parse_header(cursor: LineCursor) -> HDOBHeader:
    """Consume the HDOB header line."""
    match = cursor.require_consume("Expected HDOB header line.", HEADER_RE)
    return HDOBHeader(
        agency=match["agency"],
        aircraft=match["aircraft"],
        mission_no=match["mission"],
        storm_no=match["storm"],
        location=match["loc"],
        storm_name=match["name"],
        obs_no=match["obno"],
        date=parse_date(f"{match['date']}Z", "%Y%m%d%z"),
    )


def parse_record(
    cursor: LineCursor, date: WMODate, previous: Optional[WMODate] = None
) -> HDOBRecord:
    """Consume one observation line.

    Args:
      cursor (LineCursor): positioned at the observation.
      date (WMODate): the header date, which provides the day.
      previous (WMODate, optional): the prior observation time, used to
        detect that the flight crossed 00 UTC.
    """
    match = cursor.require_consume(
        "Expected a data line, $$ end literal, or end of file", RECORD_RE
    )
    gdict = match.groupdict()
    valid = parse_date(f"{gdict['time']}Z", "%H%M%S%z", date)
    if previous is not None and valid.valid < previous.valid - timedelta(
        hours=12
    ):
        valid = WMODate(
            valid=valid.valid + timedelta(days=1),
            text=valid.text,
            fmt=valid.fmt,
        )
    lat = int(gdict["latd"]) + int(gdict["latm"]) / 60.0
    lon = int(gdict["lond"]) + int(gdict["lonm"]) / 60.0
    loc = Coordinates(
        lat=round(lat if gdict["ns"] == "N" else 0 - lat, 3),
        lon=round(lon if gdict["ew"] == "E" else 0 - lon, 3),
    )
    acpr = reinstate_thousand(gdict["acpr"])
    espr = None
    dval = None
    if acpr is not None and acpr > SURFACE_PRESSURE_THRESHOLD:
        espr = reinstate_thousand(gdict["extrap"])
    else:
        dval = _dvalue(gdict["extrap"])
    return HDOBRecord(
        time=valid,
        loc=loc,
        acpr=acpr,
        acal=int_or_none(gdict["acal"]),
        espr=espr,
        dval=dval,
        temp=_tenths(gdict["temp"]),
        dewp=_tenths(gdict["dewp"]),
        wdir=int_or_none(gdict["wdir"], missing="999"),
        wspd=int_or_none(gdict["wspd"], missing="999"),
        wmax=int_or_none(gdict["wmax"], missing="999"),
        sfmrw=int_or_none(gdict["sfmrw"], missing="999"),
        sfmrr=int_or_none(gdict["sfmrr"], missing="999"),
        pqal=_position_quality(int(gdict["pqal"])),
        mqal=_metric_quality(int(gdict["mqal"])),
    )


def parse_message(prod: WMOFile) -> HDOBMessage:
    """Decode the body of a HDOB bulletin."""
    cursor = prod.cursor
    header = parse_header(cursor)
    data = []
    previous = None
    while True:
        line = cursor.peek()
        if line is None or END_RE.search(line):
            break
        record = parse_record(cursor, header.date, previous)
        data.append(record)
        previous = record.time
    LOG.debug("%s has %s records", prod.get_product_id(), len(data))
    return HDOBMessage(header=header, data=data)


def parser(text, utcnow=None) -> WMOFile:
    """Parse a HDOB bulletin."""
    return WMOFile(text, utcnow=utcnow, decoder=parse_message)
