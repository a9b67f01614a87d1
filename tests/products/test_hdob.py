"""High Density Observations."""

import pytest

from pywmo.exceptions import WMOParseError
from pywmo.models.hdob import HDOBMessage
from pywmo.products import parser as omnibus
from pywmo.products.hdob import (
    _metric_quality,
    _position_quality,
    parser,
)
from pywmo.util import get_test_file, utc


@pytest.fixture
def milton():
    """A bulletin that crosses 00 UTC."""
    return parser(
        get_test_file("HDOB/milton.txt"), utcnow=utc(2024, 10, 10)
    )


def test_header(milton):
    """Test the mission header line."""
    header = milton.message.header
    assert header.agency == "AF"
    assert header.aircraft == "303"
    assert header.mission_no == "14"
    assert header.storm_no == "14"
    assert header.location == "A"
    assert header.storm_name == "MILTON"
    assert header.obs_no == "22"
    assert header.date.valid == utc(2024, 10, 9)
    res = milton.to_dict()["message"]["header"]
    assert res["stormName"] == "MILTON"
    assert res["obsNo"] == "22"


def test_records(milton):
    """Test the decoding of the thirty second records."""
    data = milton.message.data
    assert len(data) == 4
    rec = data[0]
    assert rec.time.valid == utc(2024, 10, 9, 23, 54)
    assert rec.loc.lat == 26.933
    assert rec.loc.lon == -83.083
    assert rec.acpr == 696.7
    assert rec.acal == 3109
    assert rec.espr == 998.5
    assert rec.dval is None
    assert rec.temp == 11.0
    assert rec.dewp == 9.3
    assert rec.wdir == 186
    assert rec.wspd == 78
    assert rec.wmax == 79
    assert rec.sfmrw == 76
    assert rec.sfmrr == 6
    assert rec.pqal.pos and rec.pqal.pral
    assert rec.mqal.temp and rec.mqal.wind and rec.mqal.sfmr

    rec = data[1]
    assert rec.sfmrw is None
    assert rec.sfmrr is None
    assert rec.mqal.raw == 3
    assert not rec.mqal.sfmr
    assert rec.mqal.temp


def test_dvalue_and_flags(milton):
    """Test a record flown below the surface pressure threshold."""
    rec = milton.message.data[2]
    assert rec.acpr == 543.2
    assert rec.acal == 4980
    assert rec.espr is None
    assert rec.dval == -42
    assert rec.temp == -1.2
    assert rec.dewp is None
    assert rec.wmax is None
    assert rec.sfmrw == 70
    assert not rec.pqal.pos
    assert rec.pqal.pral
    assert not rec.mqal.temp
    assert rec.mqal.wind
    assert not rec.mqal.sfmr


def test_day_rollover(milton):
    """Test that the record after 00 UTC is on the next day."""
    rec = milton.message.data[3]
    assert rec.time.valid == utc(2024, 10, 10, 0, 0, 30)
    assert rec.espr == 1001.2


def test_dataframe(milton):
    """Test the DataFrame representation."""
    df = milton.message.to_dataframe()
    assert len(df.index) == 4
    assert list(df.columns[:3]) == ["valid", "lat", "lon"]
    assert df["pqal"].tolist() == [0, 0, 1, 0]
    assert df["dval"].isna().sum() == 3


def test_track(milton):
    """Test the flight track."""
    track = milton.message.track()
    assert len(track.coords) == 4
    assert track.coords[0] == (-83.083, 26.933)
    assert milton.message.data[0].loc.to_point().x == -83.083


def test_omnibus():
    """Test that URPN15 uses the same grammar."""
    text = get_test_file("HDOB/milton.txt").replace("URNT15", "URPN15")
    prod = omnibus(text, utcnow=utc(2024, 10, 10))
    assert isinstance(prod.message, HDOBMessage)


def test_no_records():
    """Test a header without any records."""
    prod = parser(
        "URNT15 KNHC 092356\nAF303 1414A MILTON HDOB 22 20241009\n$$",
        utcnow=utc(2024, 10, 10),
    )
    assert prod.message.data == []
    assert prod.message.track() is None
    assert prod.message.to_dataframe().empty


def test_bad_record():
    """Test that a garbled record names the expectation."""
    text = (
        "URNT15 KNHC 092356\nAF303 1414A MILTON HDOB 22 20241009\n"
        "235400 2656N 08305W GARBAGE\n$$"
    )
    with pytest.raises(WMOParseError, match="Expected a data line"):
        parser(text, utcnow=utc(2024, 10, 10))


def test_bad_header():
    """Test that the HDOB header line is mandatory."""
    with pytest.raises(WMOParseError, match="Expected HDOB header line"):
        parser("URNT15 KNHC 092356\nHELLO\n$$", utcnow=utc(2024, 10, 10))


@pytest.mark.parametrize(
    "raw,pos,pral",
    [
        (0, True, True),
        (1, False, True),
        (2, True, False),
        (3, False, False),
        (4, True, False),
        (5, True, False),
        (6, True, False),
        (7, True, False),
        (8, True, False),
        (9, True, False),
    ],
)
def test_position_quality_table(raw, pos, pral):
    """Test every position and pressure/altitude quality code."""
    res = _position_quality(raw)
    assert res.raw == raw
    assert (res.pos, res.pral) == (pos, pral)


@pytest.mark.parametrize(
    "raw,temp,wind,sfmr",
    [
        (0, True, True, True),
        (1, False, True, True),
        (2, True, False, True),
        (3, True, True, False),
        (4, False, False, True),
        (5, False, True, False),
        (6, True, False, False),
        (7, True, True, False),
        (8, True, True, False),
        (9, False, False, False),
    ],
)
def test_metric_quality_table(raw, temp, wind, sfmr):
    """Test every meteorological quality code."""
    res = _metric_quality(raw)
    assert res.raw == raw
    assert (res.temp, res.wind, res.sfmr) == (temp, wind, sfmr)


def test_deterministic():
    """Test that decoding the same text twice gives the same result."""
    text = get_test_file("HDOB/milton.txt")
    first = parser(text, utcnow=utc(2024, 10, 10))
    second = parser(text, utcnow=utc(2024, 10, 10))
    assert first.to_dict() == second.to_dict()
    assert first.to_json() == second.to_json()
