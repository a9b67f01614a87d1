"""Testing of util."""

import logging

import mock
import pytest

from pywmo import util


def test_logger_level():
    """That that we get the right logger level when running a tty."""
    # Mock sys.stdout.isatty
    with mock.patch("sys.stdout.isatty", return_value=True):
        log = util.logger()
        assert log.level == logging.INFO


def test_logger_explicit_level():
    """Test that an explicit level wins."""
    log = util.logger(name="pywmo.testing", level=logging.DEBUG)
    assert log.level == logging.DEBUG


def test_custom_formatter():
    """Test that the formatter includes the location."""
    record = logging.LogRecord(
        "pywmo", logging.INFO, "/tmp/wmo.py", 42, "hello %s", ("world",), None
    )
    record.funcName = "main"
    res = util.CustomFormatter().format(record)
    assert res.endswith("wmo.py:42 main] hello world")


def test_utc():
    """Does the utc() function work as expected."""
    answer = util.utc(2017, 2, 1, 2, 20).replace(tzinfo=None)
    assert answer.isoformat() == "2017-02-01T02:20:00"
    assert util.utc().tzinfo is not None


def test_get_test_file():
    """Test that we can read a bundled example."""
    assert util.get_test_filepath("HDOB/milton.txt").endswith(
        "data/product_examples/HDOB/milton.txt"
    )
    assert "HDOB" in util.get_test_file("HDOB/milton.txt")


def test_condition_text():
    """Test the removal of the control characters."""
    assert util.condition_text("\001\r\r\n000 \r\r\nABC\r\r\n\003") == (
        "000 \nABC"
    )
    assert util.condition_text("\x00\x00AB\x00C ") == "ABC"


@pytest.mark.parametrize(
    "val,missing,expected",
    [
        ("123", None, 123),
        ("+012", None, 12),
        ("///", None, None),
        ("", None, None),
        (None, None, None),
        ("999", "999", None),
        ("998", "999", 998),
    ],
)
def test_int_or_none(val, missing, expected):
    """Test the conversion of encoded groups."""
    assert util.int_or_none(val, missing=missing) == expected


def test_reinstate_thousand():
    """Test the pressure thousands digit."""
    assert util.reinstate_thousand("0123") == 1012.3
    assert util.reinstate_thousand("3999") == 1399.9
    assert util.reinstate_thousand("9985") == 998.5
    assert util.reinstate_thousand("6967") == 696.7
    assert util.reinstate_thousand("////") is None


def test_previous_month_end():
    """Test the end of the prior month."""
    assert util.previous_month_end(util.utc(2024, 3, 1, 11)) == util.utc(
        2024, 2, 29, 11
    )
    assert util.previous_month_end(util.utc(2024, 1, 15)) == util.utc(
        2023, 12, 31
    )


def test_next_month_start():
    """Test the start of the following month."""
    assert util.next_month_start(util.utc(2024, 1, 31, 6)) == util.utc(
        2024, 2, 1, 6
    )
    assert util.next_month_start(util.utc(2024, 12, 5)) == util.utc(2025, 1, 1)
