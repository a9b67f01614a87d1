"""Shared Data Models."""
# pylint: disable=too-few-public-methods
from datetime import datetime, timedelta, timezone
from typing import Optional

# third party
from pydantic import BaseModel, ConfigDict, Field, model_serializer
from shapely.geometry import Point

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


class WMODate(BaseModel):
    """An absolute timestamp resolved from a partial date string."""

    model_config = ConfigDict(frozen=True)

    valid: datetime
    text: str = ""
    fmt: str = ""

    @model_serializer
    def _serialize(self) -> dict:
        """Emit the ISO8601 and epoch milliseconds representation."""
        ms = (self.valid - EPOCH) // timedelta(milliseconds=1)
        return {
            "iso": (
                f"{self.valid:%Y-%m-%dT%H:%M:%S}."
                f"{self.valid.microsecond // 1000:03d}Z"
            ),
            "time": ms,
        }


class WMODateRange(BaseModel):
    """A start and end pair."""

    model_config = ConfigDict(frozen=True)

    start: Optional[WMODate] = None
    end: Optional[WMODate] = None


class Coordinates(BaseModel):
    """A latitude and longitude in decimal degrees."""

    model_config = ConfigDict(frozen=True)

    lat: float = Field(..., ge=-90, le=90)
    lon: float = Field(..., ge=-180, le=180)

    def to_point(self) -> Point:
        """Return a shapely Point (lon, lat)."""
        return Point(self.lon, self.lat)
