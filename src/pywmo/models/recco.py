"""Recon Observation (RECCO) Data Model."""
# pylint: disable=too-few-public-methods

from typing import Optional

# third party
from pydantic import BaseModel, ConfigDict, Field

from pywmo.models.common import Coordinates, WMODate


class ReconObservation(BaseModel):
    """The `9XXX9 GGggi YQLLL ...` observation line."""

    model_config = ConfigDict(frozen=True)

    radar: Optional[int] = Field(None, ge=-1, le=1)
    time: Optional[WMODate] = None
    dew_cap: Optional[int] = Field(None, serialization_alias="dewCap")
    day: Optional[int] = Field(None, ge=1, le=7)
    quadrant: Optional[int] = Field(None, serialization_alias="qaud")
    pos: Optional[Coordinates] = None
    turb: Optional[int] = None
    flight_cond: Optional[int] = Field(None, serialization_alias="flightCond")
    alt: Optional[int] = None
    wind_type: Optional[int] = Field(None, serialization_alias="windType")
    wind_method: Optional[int] = Field(
        None, serialization_alias="windMethod"
    )
    wind_dir: Optional[int] = Field(None, serialization_alias="windDir")
    wind_speed: Optional[int] = Field(None, serialization_alias="windSpeed")
    temp: Optional[int] = None
    dew: Optional[int] = None
    weather_cond: Optional[int] = Field(
        None, serialization_alias="weatherCond"
    )
    psur_lvl: Optional[int] = Field(None, serialization_alias="psurLvl")
    psur_val: Optional[int] = Field(None, serialization_alias="psurVal")
    surf_win_dir: Optional[int] = Field(
        None, serialization_alias="surfWinDir"
    )
    surf_win_spd: Optional[int] = Field(
        None, serialization_alias="surfWinSpd"
    )


class ReconMission(BaseModel):
    """The `RMK AF305 1511A JOAQUIN OB 13` line."""

    model_config = ConfigDict(frozen=True)

    agency: str
    aircraft: str
    mission_seq: str = Field(..., serialization_alias="missionSeq")
    storm_id: str = Field(..., serialization_alias="stormId")
    basin: str
    name: str
    obs_no: int = Field(..., serialization_alias="obsNo")


class ReconRemarks(BaseModel):
    """Free text remarks and the flags found within them."""

    model_config = ConfigDict(frozen=True)

    text: Optional[str] = None
    sws: Optional[int] = None
    inbound: Optional[str] = Field(None, serialization_alias="in")
    outbound: Optional[str] = Field(None, serialization_alias="out")
    overland: bool = False
    estimated: bool = False
    last: bool = False


class ReconMessage(BaseModel):
    """A URNT10 / URNT11 Recon Observation."""

    model_config = ConfigDict(frozen=True)

    observation: ReconObservation
    mission: ReconMission
    remarks: ReconRemarks = Field(default_factory=ReconRemarks)
