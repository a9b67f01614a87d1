# -*- coding: utf-8 -*-
"""Utility functions for pyWMO package

This module contains utility functions used by various parts of the codebase.
"""

import logging
import os
import sys
import time
from datetime import datetime, timedelta, timezone
from typing import Optional

# Setup a default logging instance for this module
LOG = logging.getLogger("pywmo")
LOG.addHandler(logging.NullHandler())


class CustomFormatter(logging.Formatter):
    """A custom log formatter class."""

    def format(self, record):
        """Return a string!"""
        return (
            f"[{time.strftime('%H:%M:%S', time.localtime(record.created))} "
            f"{(record.relativeCreated / 1000.0):6.3f} "
            f"{record.filename}:{record.lineno} {record.funcName}] "
            f"{record.getMessage()}"
        )


def get_test_filepath(name: str) -> str:
    """Helper to get a testing filename, full path."""
    return f"{os.getcwd()}/data/product_examples/{name}"


def get_test_file(name):
    """Helper to get data for test usage."""
    with open(get_test_filepath(name), "rb") as fp:
        return fp.read().decode("utf-8")


def logger(name="pywmo", level=None):
    """Get pywmo's logger with a stream handler attached.

    Args:
      name (str): The name of the logger to get, default pywmo
      level (logging.LEVEL): The log level for this pywmo logger, default is
        WARNING for non interactive sessions, INFO otherwise

    Returns:
      logger instance
    """
    ch = logging.StreamHandler()
    ch.setFormatter(CustomFormatter())
    log = logging.getLogger(name)
    log.addHandler(ch)
    if level is None and sys.stdout.isatty():
        level = logging.INFO
    log.setLevel(level if level is not None else logging.WARNING)
    return log


def utc(year=None, month=1, day=1, hour=0, minute=0, second=0, microsecond=0):
    """Create a datetime instance with tzinfo=timezone.utc

    When no arguments are provided, returns `datetime.now(timezone.utc)`.

    Returns:
      datetime with tzinfo set
    """
    if year is None:
        return datetime.now(timezone.utc)
    return datetime(
        year, month, day, hour, minute, second, microsecond
    ).replace(tzinfo=timezone.utc)


def condition_text(text: str) -> str:
    """Remove the NOAAPort control characters and outer whitespace."""
    text = text.replace("\x00", "").replace("\003", "").replace("\r", "")
    return text.replace("\001", "", 1).strip()


def is_missing(val: Optional[str]) -> bool:
    """Is this encoded group empty or a run of slashes?"""
    return val is None or val == "" or val.startswith("/")


def int_or_none(val: Optional[str], missing=None) -> Optional[int]:
    """Convert an encoded group to int, honoring the missing sentinels.

    Args:
      val (str): the raw digits, possibly `///`
      missing (str, optional): an additional literal meaning not reported,
        for example `999`.

    Returns:
      int or None
    """
    if is_missing(val) or (missing is not None and val == missing):
        return None
    return int(val)


def reinstate_thousand(val: Optional[str]) -> Optional[float]:
    """Decode a pressure in tenths of hPa that has the leading 1 dropped.

    Values at or above 1000 hPa are transmitted without the thousands
    digit, so a first digit of 0-3 gets the 1 put back.
    """
    if is_missing(val):
        return None
    if int(val[0]) <= 3:
        val = f"1{val}"
    return int(val) / 10.0


def previous_month_end(valid: datetime) -> datetime:
    """Return the last day of the month prior to the given timestamp."""
    return valid - timedelta(days=valid.day)


def next_month_start(valid: datetime) -> datetime:
    """Return the first day of the month after the given timestamp."""
    return (valid.replace(day=1) + timedelta(days=32)).replace(day=1)
