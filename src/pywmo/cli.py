"""Command line interface, decode a bulletin to JSON.

    wmo2json NOUS42_KNHC.txt --indent 2
    cat URNT15_KNHC.txt | wmo2json --utcnow 2024-10-09T20:00Z
"""

import logging
from datetime import datetime, timezone

import click

from pywmo.exceptions import WMOParseError
from pywmo.products import parser
from pywmo.util import logger

LOG = logger()


def _parse_utcnow(val):
    """Convert the --utcnow option into an aware datetime."""
    if val is None:
        return None
    try:
        res = datetime.fromisoformat(val.replace("Z", "+00:00"))
    except ValueError as exp:
        raise click.BadParameter(f"`{val}` is not ISO8601") from exp
    if res.tzinfo is None:
        res = res.replace(tzinfo=timezone.utc)
    return res


@click.command()
@click.argument("infile", type=click.File("rb"), default="-")
@click.option(
    "--utcnow",
    default=None,
    help="ISO8601 timestamp used to resolve the partial dates.",
)
@click.option("--indent", type=int, default=None, help="JSON indentation.")
@click.option("--verbose", is_flag=True, default=False)
def main(infile, utcnow, indent, verbose):
    """Decode the WMO bulletin found in INFILE (or stdin) and print JSON."""
    if verbose:
        LOG.setLevel(logging.DEBUG)
    text = infile.read().decode("utf-8", errors="replace")
    if text.strip() == "":
        raise click.ClickException("No bulletin text was provided")
    try:
        prod = parser(text, utcnow=_parse_utcnow(utcnow))
    except WMOParseError as exp:
        raise click.ClickException(exp.message) from exp
    for warning in prod.warnings:
        LOG.warning(warning)
    click.echo(prod.to_json(indent=indent))


if __name__ == "__main__":
    main()
