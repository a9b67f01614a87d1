"""Tropical Cyclone Plan of the Day (TCPOD), NOUS42 KNHC.

The CARCAH issues a daily plan of reconnaissance flights, for example::

    NOUS42 KNHC 181400
    REPRPD
    WEATHER RECONNAISSANCE FLIGHTS
    CARCAH, NATIONAL HURRICANE CENTER, MIAMI, FL.
    1000 AM EDT FRI 18 OCTOBER 2024
    SUBJECT: TROPICAL CYCLONE PLAN OF THE DAY (TCPOD)
             VALID 19/1100Z TO 20/1100Z OCTOBER 2024
             TCPOD NUMBER.....24-148

    I.  ATLANTIC REQUIREMENTS
        1. HURRICANE OSCAR
           FLIGHT ONE - TEAL 71       FLIGHT TWO - NOAA 43
           A. 19/1800Z,20/0000Z       A. 20/0600Z
           ...

The missions of a storm are laid out in side by side columns, so each
lettered line is matched repeatedly and the columns are zipped together.
"""

import re
from datetime import timedelta
from typing import List, Optional

from pywmo.cursor import LineCursor, StopCondition, any_of
from pywmo.models.common import Coordinates, WMODate, WMODateRange
from pywmo.models.tcpod import (
    Altitude,
    Basin,
    Cancellation,
    Mission,
    Outlook,
    Storm,
    TCPODHeader,
    TCPODMessage,
    TCPODNumber,
)
from pywmo.reference import storm_classifications
from pywmo.util import LOG, next_month_start, previous_month_end
from pywmo.wmo import WMOFile
from pywmo.wmodate import parse_date

AWIPS_RE = re.compile(r"^[A-Z0-9]{4,6}$")
FLIGHTS_RE = re.compile(r"^WEATHER RECONNAISSANCE FLIGHTS")
CARCAH_RE = re.compile(r"NATIONAL HURRICANE CENTER")
ISSUED_RE = re.compile(
    r"^(?P<hhmm>\d{1,4})\s+(?P<ampm>AM|PM)\s+(?P<rest>.+)$"
)
SUBJECT_RE = re.compile(r"^SUBJECT:")
VALID_RE = re.compile(
    r"VALID\s+(?P<d1>\d{2})/(?P<t1>\d{4})Z?(?:\s+\w+)?\s+TO\s+"
    r"(?P<d2>\d{2})/(?P<t2>\d{4})Z?\s+(?P<month>\w+)\s+(?P<year>\d{4})"
)
NUMBER_RE = re.compile(
    r"(?:(?P<kind>WS|TC)POD\s+)?NUMBER\.*\s*"
    r"(?P<full>(?P<yr>\d+)-(?P<seq>\d+))"
    r"(?P<cor>\s+CORRECTION)?(?P<amd>\s+AMENDMENT)?"
)

NEGATIVE_RE = re.compile(r"^\d+\.\s+NEGATIVE RECONNAISSANCE REQUIREMENTS")
STORM_RE = re.compile(r"^\d+\.\s+(?P<name>.+)$")
STORMS_END_RE = re.compile(r"^\s*\d+\.\s.*OUTLOOK")
SUSPECT_RE = re.compile(r"^SUSPECT AREA\s+\((?P<name>.+)\)$")
CLASSIFIED_RE = re.compile(
    rf"^(?:{'|'.join(storm_classifications)})\s+(?P<name>.+)$"
)

FLIGHT_RE = re.compile(r"(?<!\S)FLIGHT[^-]+-\s+(?P<name>.+?)(?:$|\s{2})")
A_RE = re.compile(
    r"(?<!\S)A\.\s(?P<d1>\d+)/(?P<t1>\d+)Z?"
    r"(?:,\s*(?:(?P<d2>\d+)/)?(?P<t2>\d+)Z?)?\S*(?:$|\s{2})"
)
B_RE = re.compile(r"(?<!\S)B\.\s(?P<text>.*?)(?:$|\s{2})")
C_RE = re.compile(
    r"(?<!\S)C\.\s(?P<dd>\d{2})/(?P<hhmm>\d{4})Z"
    r"(?:\s\(CHANGED\))?(?:$|\s{2})"
)
D_RE = re.compile(
    r"(?<!\S)D\.\s(?:(?P<lat>\d+\.\d+)(?P<ns>[NS])\s"
    r"(?P<lon>\d+\.\d+)(?P<ew>[EW])"
    r"|(?P<na>NA))(?:$|\s{2})"
)
D_START_RE = re.compile(r"^D\.\s")
E_RE = re.compile(
    r"(?<!\S)E\.\s(?:(?P<d1>\d{2})/(?P<t1>\d{4})Z\sTO\s"
    r"(?P<d2>\d{2})/(?P<t2>\d{4})Z"
    r"|(?P<na>NA))(?:\s\(CORRECT(?:ED|ION)\))?(?:$|\s{2})"
)
E_START_RE = re.compile(r"^E\.\s")
F_RE = re.compile(
    r"(?<!\S)F\.\s(?P<lower>SFC|[\d,]+)\sTO\s(?P<upper>[\d,]+)\sFT"
    r"(?:\s\(CORRECT(?:ED|ION)\))?(?:$|\s{2})"
)
G_RE = re.compile(r"(?<!\S)G\.\s(?P<text>.*?)(?:$|\s{2})")
H_RE = re.compile(r"(?<!\S)H\.\s(?P<no>NO)?\s?(?P<text>.*?)(?:$|\s{2})")
I_RE = re.compile(r"(?<!\S)I\.\s(?P<text>.*?)(?:$|\s{2})")
COORD_RE = re.compile(
    r"(?P<lat>\d+\.\d+)(?P<ns>[NS])\s+(?P<lon>\d+\.\d+)(?P<ew>[EW])"
)

OUTLOOK_RE = re.compile(
    r"^\d+\.\s+(?:(?:ADDITIONAL|SUCCEEDING)\s+DAY\s+OUTLOOK|"
    r"OUTLOOK\s+FOR\s+SUCCEEDING\s+DAY)(?::|\.+)(?P<text>.*)$"
)
REMARKS_RE = re.compile(
    r"^\d+\.\s+.*?REMARKS?(?:\s*\(CHANGED\))?:(?P<text>.*)$"
)
LETTERED_ITEM_RE = re.compile(r"^[A-Z]\.\s+(?P<text>.+)$")
REMARK_ITEM_RE = re.compile(r"^(?:[A-Z]|\d+)\.\s+(?P<text>.+)$")
NOTE_RE = re.compile(r"NOTE:\s*(?P<text>.*)$")

BLANKET_RE = re.compile(
    r"^ALL REMAINING TASK(?:INGS?|S) .*? IN TCPODS?\s*(?P<first>\d+-\d+)"
    r"(?: AND (?P<second>\d+-\d+))? WAS CANCELED BY .*? AT "
    r"(?P<dd>\d+)/(?P<hhmm>\d+)Z",
    re.IGNORECASE,
)
SPECIFIC_RE = re.compile(
    r"THE (?P<mission>.*?) MISSIONS? .*?\s"
    r"(?=.*IN TCPOD\s*(?P<tcpod>(?P<yr>\d+)-(?P<seq>\d+)))"
    r"(?=.*FOR.*? (?P<d1>\d+)/(?P<t1>\d+)Z"
    r"(?:(?:,|\s+AND\s+)(?:(?P<d2>\d+)/)?(?P<t2>\d+)Z)?)"
    r".*CANCELED BY .*? AT (?P<dd>\d+)/(?P<hhmm>\d+)Z",
    re.IGNORECASE,
)

LETTERED = StopCondition("lettered", r"^\s*[A-Z]\. ")
NUMBERED = StopCondition("numbered", r"^\s*\d+\. ")
BASIN = StopCondition("basin", r"^\s*I+\.\s+.*REQUIREMENTS")
NOTE = StopCondition("note", r"^\s*NOTES?:")
END = StopCondition("end", r"^\s*\$\$")

HEADER_DONE = any_of(LETTERED, NUMBERED, BASIN, NOTE, END)
ITEM_DONE = any_of(LETTERED, NUMBERED, BASIN, NOTE, END)
STORM_DONE = any_of(NUMBERED, BASIN, NOTE, END)
OUTLOOK_DONE = any_of(NUMBERED, BASIN, NOTE, END)
REMARKS_DONE = any_of(BASIN, NOTE, END)


def _join(*pieces) -> str:
    """Space join the non-empty pieces."""
    return " ".join(p for p in pieces if p)


def _fix_issued_time(hhmm: str, prod: WMOFile) -> str:
    """Correct the hour found on the issuance line.

    The product has been seen with `030 AM` meaning 12:30 AM and with 24
    hour clock values like `1300 PM`.  The result is always four digits
    so that `%I%M` can not split `115` into 11 and 5.
    """
    minute = hhmm[-2:]
    hour = int(hhmm[:-2] or 0)
    msg = None
    if hour == 0:
        msg = f"Issuance time `{hhmm}` has a zero hour, assuming 12"
        hour = 12
    elif hour > 12:
        msg = f"Issuance time `{hhmm}` is not a 12 hour clock value"
        hour -= 12
    if msg is not None:
        LOG.info(msg)
        prod.warnings.append(msg)
    return f"{hour:02d}{minute}"


def _dayhour(dd: str, hhmm: str, context) -> WMODate:
    """Resolve a `dd/HHMMZ` group, allowing for a month boundary."""
    ctx = context.valid if isinstance(context, WMODate) else context
    day = int(dd)
    if day < 5 and ctx.day > 25:
        ctx = next_month_start(ctx)
    elif day > 25 and ctx.day < 5:
        ctx = previous_month_end(ctx)
    return parse_date(f"{dd} {hhmm}Z", "%d %H%M%z", ctx)


def _range(d1, t1, d2, t2, context) -> WMODateRange:
    """Resolve a start and optional end, the end relative to the start."""
    start = _dayhour(d1, t1, context)
    if t2 is None:
        return WMODateRange(start=start)
    if d2 is None:
        end = parse_date(f"{d1} {t2}Z", "%d %H%M%z", start)
        if end.valid < start.valid:
            end = WMODate(
                valid=end.valid + timedelta(days=1), text=end.text, fmt=end.fmt
            )
    else:
        end = _dayhour(d2, t2, start)
    return WMODateRange(start=start, end=end)


def parse_tcpod_number(match: re.Match) -> TCPODNumber:
    """Build the plan identifier."""
    kind = match["kind"] or "TC"
    return TCPODNumber(
        full=f"{kind}POD-{match['full']}",
        tc=kind != "WS",
        yr=match["yr"],
        seq=match["seq"],
    )


def _parse_header(prod: WMOFile) -> TCPODHeader:
    """Consume the lines ahead of the first basin."""
    cursor = prod.cursor
    awips = None
    match = cursor.try_consume(AWIPS_RE)
    if match is not None:
        awips = match.group(0)
    cursor.try_consume(FLIGHTS_RE)
    cursor.try_consume(CARCAH_RE)
    match = cursor.require_consume("Expected issuance date line", ISSUED_RE)
    hhmm = _fix_issued_time(match["hhmm"], prod)
    issued = parse_date(
        f"{hhmm} {match['ampm']} {match['rest']}",
        "%I%M %p %z %a %d %B %Y",
    )
    cursor.try_consume(SUBJECT_RE)
    match = cursor.require_consume("Expected VALID date range", VALID_RE)
    end = parse_date(
        f"{match['t2']} {match['d2']} {match['month']} {match['year']}",
        "%H%M %d %B %Y",
    )
    context = end.valid
    if int(match["d1"]) > int(match["d2"]):
        context = previous_month_end(end.valid)
    start = parse_date(f"{match['d1']} {match['t1']}", "%d %H%M", context)
    match = cursor.require_consume("Expected TCPOD NUMBER line", NUMBER_RE)
    tcpod = parse_tcpod_number(match)
    remark = cursor.consume_until(HEADER_DONE)
    return TCPODHeader(
        awips=awips,
        issued=issued,
        start=start,
        end=end,
        tcpod=tcpod,
        correction=match["cor"] is not None,
        amendment=match["amd"] is not None,
        remark=remark or None,
    )


def normalize_storm_name(raw: str) -> str:
    """Strip the classification or the suspect area wrapper."""
    match = SUSPECT_RE.match(raw) or CLASSIFIED_RE.match(raw)
    return match["name"].strip() if match else raw


def _check_count(cursor: LineCursor, letter: str, found, count: int):
    """Ensure a lettered field repeats once per flight."""
    if len(found) != count:
        cursor.fail(
            f"Found {len(found)} Flight {letter}. entries, but expected "
            f"{count} to match the flights"
        )


def _coordinates(match) -> Optional[Coordinates]:
    """Convert a coordinate match."""
    if match is None or match["lat"] is None:
        return None
    lat = float(match["lat"]) * (1 if match["ns"] == "N" else -1)
    lon = float(match["lon"]) * (1 if match["ew"] == "E" else -1)
    return Coordinates(lat=lat, lon=lon)


def _altitude(match) -> Altitude:
    """Convert the F line."""

    def _feet(val):
        return 0 if val == "SFC" else int(val.replace(",", ""))

    return Altitude(lower=_feet(match["lower"]), upper=_feet(match["upper"]))


def _parse_missions(
    cursor: LineCursor, tcpod: TCPODNumber, issued: WMODate
) -> List[Mission]:
    """Consume one block of side by side mission columns."""
    flights = cursor.try_consume_all(FLIGHT_RE) or []
    count = len(flights) if flights else 1

    def _letter(letter, pattern, optional=False):
        found = cursor.try_consume_all(pattern) or []
        if optional:
            if len(found) > count:
                cursor.fail(
                    f"Found {len(found)} Flight {letter}. entries, but only "
                    f"{count} flights"
                )
        else:
            _check_count(cursor, letter, found, count)
        return found

    required = _letter("A", A_RE)
    ids = _letter("B", B_RE)
    departures = _letter("C", C_RE)
    coords = cursor.try_consume_all(D_RE)
    if coords is not None:
        _check_count(cursor, "D", coords, count)
        coords = [_coordinates(m) for m in coords]
    else:
        # Buoy deployments list their coordinates over several lines
        line = cursor.peek()
        if line is None or not D_START_RE.search(line.strip()):
            cursor.fail("Expected Flight D. coordinates line")
        found = list(COORD_RE.finditer(cursor.consume_until(E_START_RE)))
        if len(found) == count:
            coords = [_coordinates(m) for m in found]
        elif count == 1:
            coords = [_coordinates(found[0] if found else None)]
        else:
            cursor.fail(
                f"Found {len(found)} Flight D. coordinates, but expected "
                f"{count} to match the flights"
            )
    windows = _letter("E", E_RE)
    altitudes = _letter("F", F_RE)
    profiles = _letter("G", G_RE)
    activations = _letter("H", H_RE)
    remarks = _letter("I", I_RE, optional=True)

    missions = []
    for idx in range(count):
        window = None
        if windows[idx]["na"] is None:
            window = _range(
                windows[idx]["d1"],
                windows[idx]["t1"],
                windows[idx]["d2"],
                windows[idx]["t2"],
                issued,
            )
        missions.append(
            Mission(
                tcpod=tcpod,
                name=flights[idx]["name"].strip() if flights else None,
                required=_range(
                    required[idx]["d1"],
                    required[idx]["t1"],
                    required[idx]["d2"],
                    required[idx]["t2"],
                    issued,
                ),
                id=ids[idx]["text"].strip(),
                departure=_dayhour(
                    departures[idx]["dd"], departures[idx]["hhmm"], issued
                ),
                coordinates=coords[idx],
                window=window,
                altitude=_altitude(altitudes[idx]),
                profile=profiles[idx]["text"].strip(),
                wra=activations[idx]["no"] is None,
                remarks=(
                    remarks[idx]["text"].strip()
                    if idx < len(remarks)
                    else None
                ),
            )
        )
    return missions


def _parse_storm(
    cursor: LineCursor, tcpod: TCPODNumber, issued: WMODate
) -> Storm:
    """Consume one numbered storm section."""
    line = cursor.peek()
    match = STORM_RE.match(line.strip()) if line is not None else None
    if match is None:
        cursor.fail("Expected a storm name, but it was not found.")
    raw = match["name"].strip()
    if "FLIGHT" in raw:
        # Training and other flights that are not tied to a storm
        cursor.try_consume()
        return Storm(
            text=_join(match.group(0), cursor.consume_until(STORM_DONE))
        )
    cursor.try_consume()
    name = normalize_storm_name(raw)
    if "MISSION REQUEST" in raw:
        return Storm(
            name=name,
            text=_join(match.group(0), cursor.consume_until(STORM_DONE)),
        )
    if not tcpod.tc:
        return Storm(name=name, text=cursor.consume_until(STORM_DONE) or None)
    missions = []
    while True:
        missions.extend(_parse_missions(cursor, tcpod, issued))
        line = cursor.peek()
        if line is None or STORM_DONE(line.strip()):
            break
    return Storm(name=name, missions=missions)


def _parse_storms(
    cursor: LineCursor, tcpod: TCPODNumber, issued: WMODate
) -> List[Storm]:
    """Consume the storms of a basin."""
    if cursor.try_consume(NEGATIVE_RE) is not None:
        return []
    storms = []
    while True:
        storms.append(_parse_storm(cursor, tcpod, issued))
        line = cursor.peek()
        if line is None or STORMS_END_RE.search(line):
            break
    return storms


def _collect_items(cursor: LineCursor, text: str, start_re, done) -> List[str]:
    """Accumulate free text items that begin on a lettered/numbered line."""
    items = []
    while True:
        text = _join(text, cursor.consume_until(ITEM_DONE))
        if text:
            items.append(text)
        line = cursor.peek()
        if line is None or done(line.strip()):
            break
        match = cursor.require_consume("Expected a new list item", start_re)
        text = match["text"].strip()
    return items


def _parse_outlook(cursor: LineCursor, optional: bool) -> List[Outlook]:
    """Consume an outlook section."""
    match = cursor.try_consume(OUTLOOK_RE)
    if match is None:
        if not optional:
            cursor.fail("Expected basin outlook line")
        return []
    text = match["text"].strip()
    if "NEGATIVE" in text:
        return [Outlook(negative=True, text=text)]
    items = _collect_items(cursor, text, LETTERED_ITEM_RE, OUTLOOK_DONE)
    return [Outlook(text=item) for item in items or [""]]


def parse_cancellations(text: str, issued: WMODate) -> List[Cancellation]:
    """Find the cancellations mentioned within a remark."""
    match = BLANKET_RE.search(text)
    if match is not None:
        canceled_at = _dayhour(match["dd"], match["hhmm"], issued)
        res = []
        for full in (match["first"], match["second"]):
            if full is None:
                continue
            yr, seq = full.split("-")
            res.append(
                Cancellation(
                    tcpod=full,
                    tcpod_yr=yr,
                    tcpod_seq=seq,
                    canceled_at=canceled_at,
                )
            )
        return res
    match = SPECIFIC_RE.search(text)
    if match is None:
        return []
    return [
        Cancellation(
            tcpod=match["tcpod"],
            mission=match["mission"].strip(),
            tcpod_yr=match["yr"],
            tcpod_seq=match["seq"],
            required=_range(
                match["d1"], match["t1"], match["d2"], match["t2"], issued
            ),
            canceled_at=_dayhour(match["dd"], match["hhmm"], issued),
        )
    ]


def _parse_basin(
    cursor: LineCursor, basin_id: str, header: TCPODHeader
) -> Basin:
    """Consume a basin, which can be missing entirely."""
    line = cursor.peek()
    if line is None or END(line.strip()) or "NOTE:" in line:
        return Basin()
    cursor.require_consume(
        f'Expected basin with ID "{basin_id}".',
        re.compile(
            rf"^{basin_id}\.\s+(.*?)\s*REQUIREMENTS"
            r"(?:\s*\((?:NO\s*)?CHANGE[DS]\))?$"
        ),
    )
    storms = _parse_storms(cursor, header.tcpod, header.issued)
    outlook = _parse_outlook(cursor, optional=False)
    outlook.extend(_parse_outlook(cursor, optional=True))
    remarks = []
    canceled = []
    match = cursor.try_consume(REMARKS_RE)
    if match is not None:
        items = _collect_items(
            cursor, match["text"].strip(), REMARK_ITEM_RE, REMARKS_DONE
        )
        remarks = items
        for remark in remarks:
            canceled.extend(parse_cancellations(remark, header.issued))
    return Basin(
        storms=storms, outlook=outlook, remarks=remarks, canceled=canceled
    )


def parse_message(prod: WMOFile) -> TCPODMessage:
    """Decode the body of a Plan of the Day."""
    cursor = prod.cursor
    header = _parse_header(prod)
    atlantic = _parse_basin(cursor, "I", header)
    pacific = _parse_basin(cursor, "II", header)
    note = None
    match = cursor.try_consume(NOTE_RE)
    if match is not None:
        note = _join(match["text"].strip(), cursor.consume_until(END))
        note = note or None
    cursor.try_consume(END.pattern)
    if cursor.remaining_lines() > 0:
        LOG.info(
            "%s has %s unparsed lines",
            prod.get_product_id(),
            cursor.remaining_lines(),
        )
    return TCPODMessage(
        header=header, atlantic=atlantic, pacific=pacific, note=note
    )


def parser(text, utcnow=None) -> WMOFile:
    """Parse a Plan of the Day bulletin."""
    return WMOFile(text, utcnow=utcnow, decoder=parse_message)
