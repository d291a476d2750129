"""Transformer point schemas."""

from typing import Optional

from pydantic import Field, field_validator

from outage_journal.schemas.base import CamelModel, empty_to_none, not_null


class TpBase(CamelModel):
    name: str = Field(..., min_length=1, max_length=255)
    voltage_class: Optional[str] = Field(None, max_length=50)
    capacity: Optional[str] = Field(None, max_length=50)
    feeder_id: Optional[int] = None
    normal_feeder_id: Optional[int] = None

    @field_validator("feeder_id", "normal_feeder_id", mode="before")
    @classmethod
    def blank_feeder(cls, v):
        return empty_to_none(v)


class TpCreate(TpBase):
    pass


class TpUpdate(CamelModel):
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    voltage_class: Optional[str] = Field(None, max_length=50)
    capacity: Optional[str] = Field(None, max_length=50)
    feeder_id: Optional[int] = None
    normal_feeder_id: Optional[int] = None

    @field_validator("feeder_id", "normal_feeder_id", mode="before")
    @classmethod
    def blank_feeder(cls, v):
        return empty_to_none(v)

    @field_validator("name", mode="before")
    @classmethod
    def name_not_null(cls, v):
        return not_null(v)


class TpSummary(CamelModel):
    """TP fields inlined into events."""

    id: int
    name: str
    voltage_class: Optional[str] = None
    capacity: Optional[str] = None


class Tp(TpBase):
    id: int
