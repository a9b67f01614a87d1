"""A generalized parser frontend."""

from datetime import datetime
from typing import Optional

from pywmo.products import hdob, recco, tcpod, two
from pywmo.wmo import Decoder, WMOFile

# Designators share a grammar where the bulletin format is the same
XREF = {
    "NOUS42": tcpod.parse_message,
    "URNT10": recco.parse_message,
    "URNT11": recco.parse_message,
    "URPN10": recco.parse_message,
    "URPN11": recco.parse_message,
    "URNT15": hdob.parse_message,
    "URPN15": hdob.parse_message,
    "ABNT20": two.parse_message,
    "ABPZ20": two.parse_message,
    "ACPN50": two.parse_message,
    "TTAA00": two.parse_message,
}


def get_decoder(designator: str) -> Optional[Decoder]:
    """Lookup the message decoder for this designator, if any."""
    return XREF.get(designator)


def parser(
    text: str,
    utcnow: Optional[datetime] = None,
    decoder: Optional[Decoder] = None,
) -> WMOFile:
    """Omnibus parser of WMO bulletins.

    Args:
      text (str): The actual bulletin text, this can have the <cntr>-a
        character to start the string.
      utcnow (datetime, optional): What is the current time, this is useful
        for when ingesting old data.  The abbreviated heading only carries
        a day of month, so we need to know the current timestamp to do the
        relative computation.
      decoder (callable, optional): Use this message decoder instead of the
        one registered for the designator.

    Returns:
      WMOFile: A WMOFile instance

    """
    return WMOFile(text, utcnow=utcnow, decoder=decoder)
