"""Tropical Weather Outlook Data Model."""
# pylint: disable=too-few-public-methods

from typing import List, Optional

# third party
from pydantic import BaseModel, ConfigDict, Field

from pywmo.models.common import WMODate


class FormationChance(BaseModel):
    """Categorical and percent chance of formation."""

    model_config = ConfigDict(frozen=True)

    level: str
    chance: int = Field(..., ge=0, le=100)


class AreaOfInterest(BaseModel):
    """A numbered disturbance."""

    model_config = ConfigDict(frozen=True)

    title: str
    id: Optional[str] = None
    text: Optional[str] = None
    two_day: FormationChance = Field(..., serialization_alias="twoDay")
    seven_day: FormationChance = Field(..., serialization_alias="sevenDay")


class TWOMessage(BaseModel):
    """An ABNT20 / ABPZ20 Tropical Weather Outlook."""

    model_config = ConfigDict(frozen=True)

    awips: Optional[str] = Field(None, exclude=True)
    issued_by: str = Field(..., serialization_alias="issuedBy")
    issued_on: WMODate = Field(..., serialization_alias="issuedOn")
    valid_for: str = Field(..., serialization_alias="for")
    active: Optional[str] = None
    areas: List[AreaOfInterest] = Field(default_factory=list)
    remark: Optional[str] = None
