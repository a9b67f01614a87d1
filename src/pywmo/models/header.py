"""WMO Abbreviated Heading Data Model."""
# pylint: disable=too-few-public-methods

from enum import Enum
from typing import Optional, Union

# third party
from pydantic import BaseModel, ConfigDict, Field, computed_field

from pywmo.models.common import WMODate


class FlagType(str, Enum):
    """The BBB indicator types."""

    def __str__(self):
        """When we want the str repr."""
        return str(self.value)

    DELAY = "RR"
    CORRECTION = "CC"
    AMENDMENT = "AA"


class HeaderFlag(BaseModel):
    """A delay, correction or amendment with its sequence letter."""

    model_config = ConfigDict(frozen=True)

    ftype: FlagType
    value: str = Field(..., min_length=1, max_length=1)


class Segment(BaseModel):
    """A segmented bulletin indicator, Pxx."""

    model_config = ConfigDict(frozen=True)

    major: str
    minor: str
    last: bool = False


class WMOHeader(BaseModel):
    """The first line(s) of every bulletin."""

    model_config = ConfigDict(frozen=True)

    sequence: Optional[int] = Field(None, ge=0, le=999)
    designator: str = Field(..., min_length=6, max_length=6)
    station: str = Field(..., min_length=4, max_length=4)
    datetime: WMODate
    flag: Optional[Union[HeaderFlag, Segment]] = Field(None, exclude=True)

    def _flag_value(self, ftype: FlagType) -> Optional[str]:
        """Get the flag letter when the flag is of the given type."""
        if isinstance(self.flag, HeaderFlag) and self.flag.ftype == ftype:
            return self.flag.value
        return None

    @computed_field
    @property
    def delay(self) -> Optional[str]:
        """RRx"""
        return self._flag_value(FlagType.DELAY)

    @computed_field
    @property
    def correction(self) -> Optional[str]:
        """CCx"""
        return self._flag_value(FlagType.CORRECTION)

    @computed_field
    @property
    def amendment(self) -> Optional[str]:
        """AAx"""
        return self._flag_value(FlagType.AMENDMENT)

    @computed_field
    @property
    def segment(self) -> Optional[Segment]:
        """Pxx"""
        return self.flag if isinstance(self.flag, Segment) else None
