"""Topology switching schemas."""

from datetime import datetime
from typing import Literal, Optional

from pydantic import Field, field_validator

from outage_journal.schemas.base import CamelModel, empty_to_none


class TopologySwitchRequest(CamelModel):
    """Re-point a TP's feeder or a line's source."""

    object_id: int
    object_type: Literal["TP", "LINE"]
    to_source_id: Optional[int] = None
    source_type: Literal["CELL", "TP"] = Field("CELL", description="Only used for lines")
    comment: Optional[str] = None

    @field_validator("to_source_id", mode="before")
    @classmethod
    def blank_source(cls, v):
        return empty_to_none(v)


class TopologySwitch(CamelModel):
    id: int
    object_id: int
    object_type: str
    source_type: Optional[str] = None
    from_source_id: Optional[int] = None
    to_source_id: Optional[int] = None
    event_id: Optional[int] = None
    created_at: Optional[datetime] = None


class TopologySwitchResult(CamelModel):
    switch: TopologySwitch
    event_id: int
