"""Test the abbreviated heading and the bulletin frontend."""

import json

import pytest

from pywmo.exceptions import WMOParseError
from pywmo.models.common import WMODateRange
from pywmo.models.header import FlagType, HeaderFlag, Segment
from pywmo.products import XREF, get_decoder, parser
from pywmo.util import utc
from pywmo.wmo import WMOFile


def _range_decoder(prod):
    """A trivial message decoder."""
    prod.cursor.consume_until(lambda line: False)
    return WMODateRange(start=prod.header.datetime)


def test_header():
    """Test the decoding of a simple heading with a starting line."""
    prod = WMOFile(
        "000 \nNOUS42 KNHC 261530\nBODY",
        utcnow=utc(2024, 10, 26, 16),
        decoder=_range_decoder,
    )
    assert prod.header.sequence == 0
    assert prod.header.designator == "NOUS42"
    assert prod.header.station == "KNHC"
    assert prod.header.datetime.valid == utc(2024, 10, 26, 15, 30)
    assert prod.header.flag is None
    assert prod.utcnow == utc(2024, 10, 26, 16)
    assert prod.get_product_id() == "202410261530-KNHC-NOUS42"


def test_header_no_sequence():
    """Test that the starting line is optional."""
    prod = WMOFile(
        "NOUS42 KNHC 261530", utcnow=utc(2024, 10, 26), decoder=_range_decoder
    )
    assert prod.header.sequence is None


@pytest.mark.parametrize(
    "bbb,attr",
    [
        ("RRA", "delay"),
        ("CCB", "correction"),
        ("AAC", "amendment"),
    ],
)
def test_header_flags(bbb, attr):
    """Test that exactly one of the flags is set."""
    prod = WMOFile(
        f"URNT15 KNHC 092356 {bbb}",
        utcnow=utc(2024, 10, 9),
        decoder=_range_decoder,
    )
    assert isinstance(prod.header.flag, HeaderFlag)
    assert prod.header.flag.ftype == FlagType(bbb[:2])
    for key in ["delay", "correction", "amendment"]:
        expected = bbb[2] if key == attr else None
        assert getattr(prod.header, key) == expected
    assert prod.header.segment is None
    assert prod.get_product_id() == f"202410092356-KNHC-URNT15-{bbb}"


def test_header_segment():
    """Test the segmented bulletin indicator."""
    prod = WMOFile(
        "URNT15 KNHC 092356 PZB",
        utcnow=utc(2024, 10, 9),
        decoder=_range_decoder,
    )
    assert prod.header.segment == Segment(major="Z", minor="B", last=True)
    assert prod.header.correction is None
    res = prod.to_dict()["header"]
    assert res["segment"] == {"major": "Z", "minor": "B", "last": True}
    assert "flag" not in res
    prod = WMOFile(
        "URNT15 KNHC 092356 PAA",
        utcnow=utc(2024, 10, 9),
        decoder=_range_decoder,
    )
    assert not prod.header.segment.last


def test_header_month_from_context():
    """Test that the month and year come from utcnow."""
    prod = WMOFile(
        "NOUS42 KNHC 011530", utcnow=utc(2023, 12, 1), decoder=_range_decoder
    )
    assert prod.header.datetime.valid == utc(2023, 12, 1, 15, 30)


def test_missing_heading():
    """Test that a bulletin without a heading fails."""
    with pytest.raises(WMOParseError, match="Missing Abbreviated Heading"):
        WMOFile("HELLO WORLD\nNOUS42 KNHC 261530")


def test_sequence_without_heading():
    """Test that a lonely starting line fails."""
    with pytest.raises(WMOParseError, match="detected as the starting line"):
        WMOFile("000")


def test_invalid_heading_date():
    """Test that an impossible day is wrapped with context."""
    with pytest.raises(WMOParseError, match="Failed to parse date") as exp:
        WMOFile("NOUS42 KNHC 311530", utcnow=utc(2024, 2, 1))
    assert isinstance(exp.value.cause, ValueError)
    assert "--> 1 | NOUS42 KNHC 311530" in exp.value.message


def test_unknown_designator():
    """Test that we name the designator when we have no decoder."""
    with pytest.raises(WMOParseError, match='designator "FXUS61"'):
        WMOFile("FXUS61 KBOX 261530\nAREA FORECAST DISCUSSION")


def test_decoder_exception_wrapped():
    """Test that a non parse exception is wrapped with context."""

    def _bad(prod):
        prod.cursor.try_consume()
        raise KeyError("boom")

    with pytest.raises(WMOParseError, match="boom") as exp:
        WMOFile("NOUS42 KNHC 261530\nLINE ONE\nLINE TWO", decoder=_bad)
    assert isinstance(exp.value.__cause__, KeyError)
    # the cursor was rewound onto the line being decoded
    assert "--> 2 | LINE ONE" in exp.value.message


def test_to_json():
    """Test the JSON document."""
    prod = WMOFile(
        "NOUS42 KNHC 261530 CCA",
        utcnow=utc(2024, 10, 26),
        decoder=_range_decoder,
    )
    res = json.loads(prod.to_json())
    assert res["header"] == {
        "sequence": None,
        "designator": "NOUS42",
        "station": "KNHC",
        "datetime": {"iso": "2024-10-26T15:30:00.000Z", "time": 1729956600000},
        "delay": None,
        "correction": "A",
        "amendment": None,
        "segment": None,
    }
    assert res["message"]["start"]["iso"] == "2024-10-26T15:30:00.000Z"
    assert res["message"]["end"] is None
    assert "\n" in prod.to_json(indent=2)


def test_registry():
    """Test the designator registry."""
    assert get_decoder("NOUS42") is XREF["NOUS42"]
    assert get_decoder("URPN15") is XREF["URNT15"]
    assert get_decoder("ABPZ20") is XREF["ABNT20"]
    assert get_decoder("FXUS61") is None
    prod = parser("FXUS61 KBOX 261530", decoder=_range_decoder)
    assert prod.header.designator == "FXUS61"


def test_heading_minutes():
    """Test a heading that is not on the half hour."""
    prod = WMOFile(
        "000 \nNOUS42 KNHC 261358",
        utcnow=utc(2024, 10, 26),
        decoder=_range_decoder,
    )
    assert prod.header.designator == "NOUS42"
    assert prod.header.station == "KNHC"
    assert prod.header.datetime.valid == utc(2024, 10, 26, 13, 58)
