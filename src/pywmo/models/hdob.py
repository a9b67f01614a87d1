"""High Density Observation (HDOB) Data Model."""
# pylint: disable=too-few-public-methods

from typing import List, Optional

# third party
import pandas as pd
from pydantic import BaseModel, ConfigDict, Field
from shapely.geometry import LineString

from pywmo.models.common import Coordinates, WMODate


class HDOBHeader(BaseModel):
    """The `AF303 1414A MILTON HDOB 22 20241009` line."""

    model_config = ConfigDict(frozen=True)

    agency: str
    aircraft: str
    mission_no: str = Field(..., serialization_alias="missionNo")
    storm_no: str = Field(..., serialization_alias="stormNo")
    location: str
    storm_name: str = Field(..., serialization_alias="stormName")
    obs_no: str = Field(..., serialization_alias="obsNo")
    date: WMODate


class PositionQuality(BaseModel):
    """Position and pressure/altitude quality control flag."""

    model_config = ConfigDict(frozen=True)

    raw: int = Field(..., ge=0, le=9)
    pos: bool
    pral: bool


class MetricQuality(BaseModel):
    """Meteorological quality control flag."""

    model_config = ConfigDict(frozen=True)

    raw: int = Field(..., ge=0, le=9)
    temp: bool
    wind: bool
    sfmr: bool


class HDOBRecord(BaseModel):
    """A thirty second observation."""

    model_config = ConfigDict(frozen=True)

    time: WMODate
    loc: Coordinates
    acpr: Optional[float] = None
    acal: Optional[int] = None
    espr: Optional[float] = None
    dval: Optional[int] = None
    temp: Optional[float] = None
    dewp: Optional[float] = None
    wdir: Optional[int] = Field(None, ge=0, le=360)
    wspd: Optional[int] = None
    wmax: Optional[int] = None
    sfmrw: Optional[int] = None
    sfmrr: Optional[int] = None
    pqal: PositionQuality
    mqal: MetricQuality


class HDOBMessage(BaseModel):
    """A URNT15 High Density Observation bulletin."""

    model_config = ConfigDict(frozen=True)

    header: HDOBHeader
    data: List[HDOBRecord] = Field(default_factory=list)

    def to_dataframe(self) -> pd.DataFrame:
        """Return the observations as a DataFrame, one row per record."""
        rows = []
        for rec in self.data:
            rows.append(
                {
                    "valid": rec.time.valid,
                    "lat": rec.loc.lat,
                    "lon": rec.loc.lon,
                    "acpr": rec.acpr,
                    "acal": rec.acal,
                    "espr": rec.espr,
                    "dval": rec.dval,
                    "temp": rec.temp,
                    "dewp": rec.dewp,
                    "wdir": rec.wdir,
                    "wspd": rec.wspd,
                    "wmax": rec.wmax,
                    "sfmrw": rec.sfmrw,
                    "sfmrr": rec.sfmrr,
                    "pqal": rec.pqal.raw,
                    "mqal": rec.mqal.raw,
                }
            )
        return pd.DataFrame(
            rows,
            columns=[
                "valid",
                "lat",
                "lon",
                "acpr",
                "acal",
                "espr",
                "dval",
                "temp",
                "dewp",
                "wdir",
                "wspd",
                "wmax",
                "sfmrw",
                "sfmrr",
                "pqal",
                "mqal",
            ],
        )

    def track(self) -> Optional[LineString]:
        """The flight track, None when there are fewer than two records."""
        if len(self.data) < 2:
            return None
        return LineString([(rec.loc.lon, rec.loc.lat) for rec in self.data])
