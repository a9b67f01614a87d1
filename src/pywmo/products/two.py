"""Tropical Weather Outlook (TWO), ABNT20 / ABPZ20 and friends."""

import re

from pywmo.cursor import LineCursor, StopCondition, any_of
from pywmo.models.two import AreaOfInterest, FormationChance, TWOMessage
from pywmo.util import LOG
from pywmo.wmo import WMOFile
from pywmo.wmodate import parse_date

AWIPS_RE = re.compile(r"^[A-Z0-9]{4,6}$")
TITLE_RE = re.compile(r"Tropical Weather Outlook")
ISSUED_BY_RE = re.compile(r"Issued by (?P<by>.*?)$")
DATE_RE = re.compile(r"^(?P<hhmi>\d{3,4})\s+(?P<rest>.+)$")
FOR_RE = re.compile(r"^For the.*$")
ACTIVE_RE = re.compile(r"Active Systems:")
BLANK_RE = re.compile(r"^$")
AREA_RE = re.compile(
    r"^\s*\d+\.\s+(?P<title>.*?)(?:\s+\((?P<id>.*?)\))?:?\s*$"
)
TWO_DAY_RE = re.compile(
    r"\s*\*.*48\s+hours\.+(?P<level>.*?)\.+\s*(?:near\s+)?"
    r"(?P<chance>\d+)\s+percent"
)
SEVEN_DAY_RE = re.compile(
    r"\s*\*.*?(?P<days>\d+)\s+days\.+(?P<level>.*?)\.+\s*(?:near\s+)?"
    r"(?P<chance>\d+)\s+percent"
)
AREA = StopCondition("area", r"^\s*\d+\.")
FORMATION = StopCondition("formation", r"\*\s*Formation")
END = StopCondition("end", r"\$\$")
PREFACE_DONE = any_of(AREA, END)
TEXT_DONE = any_of(FORMATION, END)


def _chance(cursor: LineCursor, pattern, label: str) -> FormationChance:
    """Consume a formation chance bullet."""
    match = cursor.require_consume(f"Expected {label} chance line", pattern)
    return FormationChance(
        level=match["level"].strip() or "unknown",
        chance=int(match["chance"]),
    )


def parse_area(cursor: LineCursor) -> AreaOfInterest:
    """Consume a numbered area of interest."""
    match = cursor.require_consume("Expected storm title line", AREA_RE)
    text = cursor.consume_until(TEXT_DONE)
    return AreaOfInterest(
        title=match["title"],
        id=match["id"],
        text=text or None,
        two_day=_chance(cursor, TWO_DAY_RE, "2-day"),
        seven_day=_chance(cursor, SEVEN_DAY_RE, "7-day"),
    )


def parse_message(prod: WMOFile) -> TWOMessage:
    """Decode the body of a Tropical Weather Outlook."""
    cursor = prod.cursor
    awips = None
    match = cursor.try_consume(AWIPS_RE)
    if match is not None:
        awips = match.group(0)
    cursor.try_consume(TITLE_RE)
    issued_by = cursor.require_consume("Expected TWO issued by line").group(0)
    match = cursor.try_consume(ISSUED_BY_RE)
    if match is not None and match["by"]:
        issued_by = match["by"]
    match = cursor.require_consume("Expected date line", DATE_RE)
    hhmi = match["hhmi"]
    issued_on = parse_date(
        f"{int(hhmi[:-2]):02d}{hhmi[-2:]} {match['rest']}",
        "%I%M %p %z %a %b %d %Y",
    )

    valid_for = cursor.consume_until(FOR_RE)
    match = cursor.require_consume('Expected TWO "for" line', FOR_RE)
    valid_for = " ".join(p for p in (valid_for, match.group(0)) if p)

    active = None
    if cursor.try_consume(ACTIVE_RE) is not None:
        active = cursor.consume_until(BLANK_RE, skip_blanks=False) or None
    cursor.skip_blanks()

    remark = cursor.consume_until(PREFACE_DONE)
    areas = []
    while True:
        line = cursor.peek()
        if line is None or not AREA(line):
            break
        areas.append(parse_area(cursor))
    extra = cursor.consume_until(END)
    remark = " ".join(p for p in (remark, extra) if p)
    LOG.debug("%s has %s areas", prod.get_product_id(), len(areas))
    return TWOMessage(
        awips=awips,
        issued_by=issued_by,
        issued_on=issued_on,
        valid_for=valid_for,
        active=active,
        areas=areas,
        remark=remark or None,
    )


def parser(text, utcnow=None) -> WMOFile:
    """Parse a Tropical Weather Outlook bulletin."""
    return WMOFile(text, utcnow=utcnow, decoder=parse_message)
