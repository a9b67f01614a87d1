"""Tropical Cyclone Plan of the Day Data Model."""
# pylint: disable=too-few-public-methods

from typing import List, Optional

# third party
from pydantic import BaseModel, ConfigDict, Field

from pywmo.models.common import Coordinates, WMODate, WMODateRange


class TCPODNumber(BaseModel):
    """The plan identifier, TCPOD 25-148 or WSPOD 25-012."""

    model_config = ConfigDict(frozen=True)

    full: str
    tc: bool = True
    yr: Optional[str] = None
    seq: Optional[str] = None


class TCPODHeader(BaseModel):
    """The lines before the first basin."""

    model_config = ConfigDict(frozen=True)

    awips: Optional[str] = None
    issued: WMODate
    start: WMODate
    end: WMODate
    tcpod: TCPODNumber
    correction: bool = False
    amendment: bool = False
    remark: Optional[str] = None


class Altitude(BaseModel):
    """Flight altitudes in feet."""

    model_config = ConfigDict(frozen=True)

    upper: Optional[int] = Field(None, ge=0, le=100000)
    lower: Optional[int] = Field(None, ge=0, le=100000)


class Mission(BaseModel):
    """One tasked flight."""

    model_config = ConfigDict(frozen=True)

    tcpod: TCPODNumber
    name: Optional[str] = None
    required: Optional[WMODateRange] = None
    id: Optional[str] = None
    departure: Optional[WMODate] = None
    coordinates: Optional[Coordinates] = None
    window: Optional[WMODateRange] = None
    altitude: Optional[Altitude] = None
    profile: Optional[str] = None
    wra: bool = False
    remarks: Optional[str] = None


class Storm(BaseModel):
    """A storm, suspect area or non-storm container of missions."""

    model_config = ConfigDict(frozen=True)

    name: Optional[str] = None
    text: Optional[str] = None
    missions: List[Mission] = Field(default_factory=list)


class Outlook(BaseModel):
    """An outlook statement."""

    model_config = ConfigDict(frozen=True)

    negative: bool = False
    text: str = ""


class Cancellation(BaseModel):
    """A cancellation found within a basin remark."""

    model_config = ConfigDict(frozen=True)

    tcpod: Optional[str] = None
    mission: Optional[str] = None
    tcpod_yr: Optional[str] = Field(None, serialization_alias="tcpodYr")
    tcpod_seq: Optional[str] = Field(None, serialization_alias="tcpodSeq")
    required: Optional[WMODateRange] = None
    canceled_at: Optional[WMODate] = Field(
        None, serialization_alias="canceledAt"
    )


class Basin(BaseModel):
    """The requirements for one basin."""

    model_config = ConfigDict(frozen=True)

    storms: List[Storm] = Field(default_factory=list)
    outlook: List[Outlook] = Field(default_factory=list)
    remarks: List[str] = Field(default_factory=list)
    canceled: List[Cancellation] = Field(default_factory=list)


class TCPODMessage(BaseModel):
    """A NOUS42 Plan of the Day."""

    model_config = ConfigDict(frozen=True)

    header: TCPODHeader
    atlantic: Basin = Field(default_factory=Basin)
    pacific: Basin = Field(default_factory=Basin)
    note: Optional[str] = None
