"""Test the command line interface."""

import json

from click.testing import CliRunner

from pywmo.cli import main
from pywmo.util import get_test_file, get_test_filepath


def test_file_argument():
    """Test decoding a file with an explicit utcnow."""
    runner = CliRunner()
    result = runner.invoke(
        main,
        [
            get_test_filepath("HDOB/milton.txt"),
            "--utcnow",
            "2024-10-10T00:00Z",
        ],
    )
    assert result.exit_code == 0
    res = json.loads(result.stdout)
    assert res["header"]["designator"] == "URNT15"
    assert len(res["message"]["data"]) == 4
    assert res["message"]["data"][3]["time"]["iso"] == (
        "2024-10-10T00:00:30.000Z"
    )


def test_stdin_indent():
    """Test reading the bulletin from stdin."""
    runner = CliRunner()
    result = runner.invoke(
        main,
        ["--utcnow", "2024-10-24T18:00:00", "--indent", "2"],
        input=get_test_file("TWO/oscar.txt"),
    )
    assert result.exit_code == 0
    assert "\n  " in result.stdout
    res = json.loads(result.stdout)
    assert res["message"]["issuedBy"] == (
        "NWS National Hurricane Center Miami FL"
    )


def test_warnings_verbose():
    """Test that a bulletin with warnings still decodes."""
    runner = CliRunner()
    result = runner.invoke(
        main,
        [
            get_test_filepath("TCPOD/training.txt"),
            "--utcnow",
            "2025-10-15T05:00Z",
            "--verbose",
        ],
    )
    assert result.exit_code == 0
    res = json.loads(result.stdout)
    assert res["message"]["header"]["tcpod"]["full"] == "TCPOD-25-150"


def test_empty_input():
    """Test that we complain about nothing to decode."""
    runner = CliRunner()
    result = runner.invoke(main, [], input="  \n")
    assert result.exit_code == 1
    assert "No bulletin text was provided" in result.output


def test_parse_error():
    """Test that a decode failure is reported with context."""
    runner = CliRunner()
    result = runner.invoke(main, [], input="FXUS61 KBOX 261530\nHELLO\n")
    assert result.exit_code == 1
    assert 'designator "FXUS61"' in result.output


def test_bad_utcnow():
    """Test that a garbled utcnow is a usage error."""
    runner = CliRunner()
    result = runner.invoke(
        main, ["--utcnow", "yesterday"], input="URNT15 KNHC 092356\n"
    )
    assert result.exit_code == 2
    assert "not ISO8601" in result.output
