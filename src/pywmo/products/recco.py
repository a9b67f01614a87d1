"""Recon Observation (RECCO), URNT10 / URNT11 and the URPN variants.

Details of the code form are in Appendix G of the National Hurricane
Operations Plan, an observation looks like::

    URNT11 KNHC 261758
    97779 17554 21221 78400 20800 04012 2522/ /0003
    41010
    RMK AF307 0914A HELENE OB 13
    LAST REPORT
    ;

"""

import re
from datetime import timedelta
from typing import Optional

from pywmo.cursor import LineCursor
from pywmo.models.common import Coordinates, WMODate
from pywmo.models.recco import (
    ReconMessage,
    ReconMission,
    ReconObservation,
    ReconRemarks,
)
from pywmo.reference import radar_capability
from pywmo.util import LOG, int_or_none, is_missing
from pywmo.wmo import WMOFile
from pywmo.wmodate import parse_date

# 9XXX9 GGggi YQLLL LLLBf hhhdd dddff TTddw /jHHH [mssss] [sttt]
OBSERVATION_RE = re.compile(
    r"^9(?P<radar>222|555|777)9\s+"
    r"(?P<time>\d{4})(?P<dewcap>[0-7/])\s+"
    r"(?P<day>[1-7/])(?P<quad>[0-35-8/])(?P<lat>[\d/]{3})\s+"
    r"(?P<lon>[\d/]{3})(?P<turb>[\d/])(?P<flight>[089/])\s+"
    r"(?P<alt>[\d/]{3})(?P<wtype>[01/])(?P<wmethod>[01/])\s+"
    r"(?P<wdir>[\d/]{3})(?P<wspd>[\d/]{2})\s+"
    r"(?P<temp>[\d/]{2})(?P<dew>[\d/]{2})(?P<weather>[\d/])\s+"
    r"/(?P<plvl>[\d/])(?P<pval>[\d/]{3})"
    r"(?:\s+(?P<smethod>[\d/])(?P<sdir>[\d/]{2})(?P<sspd>[\d/]{2}))?"
    r"(?:\s+(?P<stemp>[\d/])(?P<vis>[\d/])(?P<stval>[\d/]{3}))?$"
)
SURFACE_WIND_RE = re.compile(r"^(?P<method>\d)(?P<dir>\d{2})(?P<spd>\d{2})$")
MISSION_RE = re.compile(
    r"^RMK\s+(?P<agency>NOAA|AF|UAS)(?P<aircraft>\w+)\s+"
    r"(?P<seq>\d{2}|[A-Z]{2})(?P<storm>\d{2}|[A-Z]{2})(?P<basin>[AECW])\s+"
    r"(?P<name>\w+)\s+OB\s+(?P<obno>\d+).*$"
)
TERMINATOR_RE = re.compile(r"^;$")
LAST_REPORT_RE = re.compile(r"^LAST REPORT$")
SWS_RE = re.compile(r"^SWS\s*=\s*(?P<sws>\d+)\s*KTS$")
INOUT_RE = re.compile(r"(?P<dir>IN|OUT)BOUND:?\s*(?P<text>.*)$")
OVERLAND_RE = re.compile(r"^OVERLAND$")


def compute_observation_time(hhmm: str, valid: WMODate) -> WMODate:
    """Resolve the observation time against the bulletin timestamp.

    The observation is taken prior to the bulletin being sent, so a time
    that ends up well after the bulletin is from the previous day.
    """
    res = parse_date(f"{hhmm}Z", "%H%M%z", valid)
    if res.valid > valid.valid + timedelta(hours=1):
        res = WMODate(
            valid=res.valid - timedelta(days=1), text=res.text, fmt=res.fmt
        )
    return res


def compute_position(quad: int, lat: str, lon: str) -> Optional[Coordinates]:
    """Apply the quadrant rules to the encoded tenths of degrees.

    Quadrants 0-3 are north and 5-8 south.  0/5 are 0-90W, 1/6 are
    90W-180, 2/7 are 180-90E and 3/8 are 90E-0.
    """
    if is_missing(lat) or is_missing(lon):
        return None
    latitude = int(lat) / 10.0
    longitude = int(lon) / 10.0
    if quad > 4:
        latitude = 0 - latitude
    # The hundreds digit is not sent
    if quad in (1, 2, 6, 7) and longitude < 90:
        longitude += 100
    if quad in (0, 1, 5, 6):
        longitude = 0 - longitude
    return Coordinates(lat=latitude, lon=round(longitude, 1))


def _tens_of_degrees(val: Optional[str]) -> Optional[int]:
    """Surface wind direction is sent in tens of degrees."""
    res = int_or_none(val)
    return None if res is None else res * 10


def parse_observation(cursor: LineCursor, valid: WMODate) -> ReconObservation:
    """Consume the observation line and the optional surface wind line."""
    match = cursor.require_consume(
        "Expected RECCO observation line.", OBSERVATION_RE
    )
    gdict = match.groupdict()
    quad = int_or_none(gdict["quad"]) or 0
    surf_dir = None
    surf_spd = None
    # KNHC places the surface wind on its own line, KWBC trails it
    sfc = cursor.try_consume(SURFACE_WIND_RE)
    if sfc is not None:
        surf_dir = _tens_of_degrees(sfc["dir"])
        surf_spd = int_or_none(sfc["spd"])
    elif gdict["smethod"] is not None:
        surf_dir = _tens_of_degrees(gdict["sdir"])
        surf_spd = int_or_none(gdict["sspd"])
    return ReconObservation(
        radar=radar_capability[gdict["radar"]],
        time=compute_observation_time(gdict["time"], valid),
        dew_cap=int_or_none(gdict["dewcap"]),
        day=int_or_none(gdict["day"]),
        quadrant=quad,
        pos=compute_position(quad, gdict["lat"], gdict["lon"]),
        turb=int_or_none(gdict["turb"]),
        flight_cond=int_or_none(gdict["flight"]),
        alt=int_or_none(gdict["alt"]),
        wind_type=int_or_none(gdict["wtype"]),
        wind_method=int_or_none(gdict["wmethod"]),
        wind_dir=int_or_none(gdict["wdir"]),
        wind_speed=int_or_none(gdict["wspd"]),
        temp=int_or_none(gdict["temp"]),
        dew=int_or_none(gdict["dew"]),
        weather_cond=int_or_none(gdict["weather"]),
        psur_lvl=int_or_none(gdict["plvl"]),
        psur_val=int_or_none(gdict["pval"]),
        surf_win_dir=surf_dir,
        surf_win_spd=surf_spd,
    )


def parse_mission(cursor: LineCursor) -> ReconMission:
    """Consume the mission identifier line."""
    match = cursor.require_consume(
        "Expected mission identifier line", MISSION_RE
    )
    return ReconMission(
        agency=match["agency"],
        aircraft=match["aircraft"],
        mission_seq=match["seq"],
        storm_id=match["storm"],
        basin=match["basin"],
        name=match["name"],
        obs_no=int(match["obno"]),
    )


def parse_remarks(cursor: LineCursor) -> ReconRemarks:
    """Consume remark lines until the `;` terminator."""
    lines = []
    attrs = {}
    while True:
        match = cursor.try_consume()
        if match is None or match.group(0) == ";":
            break
        line = match.group(0)
        lines.append(line)
        if LAST_REPORT_RE.match(line):
            attrs["last"] = True
            cursor.try_consume(TERMINATOR_RE)
            break
        sws = SWS_RE.match(line)
        if sws is not None:
            attrs["sws"] = int(sws["sws"])
            continue
        inout = INOUT_RE.search(line)
        if inout is not None:
            key = "inbound" if inout["dir"] == "IN" else "outbound"
            attrs[key] = inout["text"].strip()
            continue
        if OVERLAND_RE.match(line):
            attrs["overland"] = True
            continue
        if "ESTIMATED" in line and "AREA" in line:
            attrs["estimated"] = True
    return ReconRemarks(text="\n".join(lines) if lines else None, **attrs)


def parse_message(prod: WMOFile) -> ReconMessage:
    """Decode the body of a Recon Observation."""
    cursor = prod.cursor
    observation = parse_observation(cursor, prod.header.datetime)
    mission = parse_mission(cursor)
    remarks = parse_remarks(cursor)
    if cursor.remaining_lines() > 0:
        cursor.fail("Expected end of the observation after a ;")
    LOG.debug(
        "%s decoded observation %s", prod.get_product_id(), mission.obs_no
    )
    return ReconMessage(
        observation=observation, mission=mission, remarks=remarks
    )


def parser(text, utcnow=None) -> WMOFile:
    """Parse a Recon Observation bulletin."""
    return WMOFile(text, utcnow=utcnow, decoder=parse_message)
