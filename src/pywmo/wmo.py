"""Very light weight WMO header parser and bulletin frontend."""

import json
import re
from datetime import datetime
from typing import Callable, Optional

from pydantic import BaseModel

from pywmo.cursor import LineCursor
from pywmo.exceptions import WMOParseError
from pywmo.models.header import FlagType, HeaderFlag, Segment, WMOHeader
from pywmo.util import LOG
from pywmo.wmodate import parse_date

# It is supposed to have a blank space, but alas
LDM_SEQUENCE_RE = re.compile(r"^\s*(?P<seq>\d{3})\s*$")

WMO_RE = re.compile(
    r"^(?P<ttaaii>[A-Z]{4}\d\d)\s+(?P<cccc>[A-Z]{4})\s+"
    r"(?P<dd>\d\d)(?P<hh>\d\d)(?P<mi>\d\d)"
    r"(?:\s+(?:(?P<bbb>RR|CC|AA)(?P<bbbseq>[A-X])|"
    r"P(?P<major>[A-Z])(?P<minor>[A-Z])))?$"
)

Decoder = Callable[["WMOFile"], BaseModel]


def parse_header(cursor: LineCursor) -> WMOHeader:
    """Consume the starting line and the abbreviated heading.

    Args:
      cursor (LineCursor): positioned at the start of the bulletin.

    Returns:
      WMOHeader
    """
    match = cursor.try_consume(LDM_SEQUENCE_RE)
    sequence = int(match["seq"]) if match else None
    # A starting line must be followed by the heading
    if sequence is not None and cursor.remaining_lines() <= 0:
        cursor.fail(
            "Invalid WMO message: Missing Abbreviated Heading. First line "
            "was detected as the starting line, which is optional, so the "
            "second line should be the Abbreviated Heading."
        )
    match = cursor.require_consume(
        "Invalid WMO message: Missing Abbreviated Heading, expected "
        "`TTAAii CCCC DDHHMM [BBB]`.",
        WMO_RE,
    )
    gdict = match.groupdict()
    flag = None
    if gdict["bbb"] is not None:
        flag = HeaderFlag(ftype=FlagType(gdict["bbb"]), value=gdict["bbbseq"])
    elif gdict["major"] is not None:
        flag = Segment(
            major=gdict["major"],
            minor=gdict["minor"],
            last=gdict["major"] == "Z",
        )
    valid = parse_date(
        f"{gdict['dd']} {gdict['hh']}:{gdict['mi']}Z",
        "%d %H:%M%z",
        cursor.utcnow,
    )
    return WMOHeader(
        sequence=sequence,
        designator=gdict["ttaaii"],
        station=gdict["cccc"],
        datetime=valid,
        flag=flag,
    )


class WMOFile:
    """A decoded bulletin, header plus designator specific message."""

    def __init__(
        self,
        text: str,
        utcnow: Optional[datetime] = None,
        decoder: Optional[Decoder] = None,
    ):
        """Constructor.

        Args:
          text (str): The bulletin text.
          utcnow (datetime, optional): The context instant used to resolve
            the heading timestamp, defaults to now.
          decoder (callable, optional): Decode the message body with this
            instead of the designator registry.
        """
        self.warnings = []
        self.text = text
        self.cursor = None
        self.header = None
        self.message = None
        try:
            self.cursor = LineCursor(text, utcnow)
            self.header = parse_header(self.cursor)
            if decoder is None:
                # Lazy import as the grammars import this module
                from pywmo.products import get_decoder

                decoder = get_decoder(self.header.designator)
            if decoder is None:
                self.cursor.fail(
                    "No message parser found for designator "
                    f'"{self.header.designator}". Please specify the '
                    "decoder to use."
                )
            self.message = decoder(self)
        except WMOParseError:
            raise
        except Exception as exp:
            if self.cursor is None:
                raise
            LOG.info("Wrapping %s at line %s", exp, self.cursor.position)
            # The error happened before the next line was consumed
            if self.cursor.position > 0:
                self.cursor.seek(-1)
            self.cursor.fail(str(exp), exp)

    @property
    def utcnow(self) -> datetime:
        """The context instant."""
        return self.cursor.utcnow

    def get_product_id(self) -> str:
        """Get an identifier of this bulletin."""
        pid = (
            f"{self.header.datetime.valid:%Y%m%d%H%M}-{self.header.station}-"
            f"{self.header.designator}"
        )
        if self.header.flag is not None and not isinstance(
            self.header.flag, Segment
        ):
            pid += f"-{self.header.flag.ftype}{self.header.flag.value}"
        return pid

    def to_dict(self) -> dict:
        """Return the JSON compatible representation."""

        def _dump(obj):
            if obj is None:
                return None
            return obj.model_dump(mode="json", by_alias=True)

        return {"header": _dump(self.header), "message": _dump(self.message)}

    def to_json(self, indent: Optional[int] = None) -> str:
        """Return this bulletin as a JSON document."""
        return json.dumps(self.to_dict(), indent=indent)
