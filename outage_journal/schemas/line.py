"""Line (feeder) schemas."""

from typing import Optional

from pydantic import Field, field_validator, model_validator

from outage_journal.schemas.base import CamelModel, empty_to_none, not_null

_SOURCE_FIELDS = (
    "source_cell_id",
    "source_tp_id",
    "normal_source_cell_id",
    "normal_source_tp_id",
)


class LineBase(CamelModel):
    name: str = Field(..., min_length=1, max_length=255)
    voltage_class: Optional[str] = Field(None, max_length=50)
    line_type: Optional[str] = Field(None, max_length=50)
    source_cell_id: Optional[int] = None
    source_tp_id: Optional[int] = None
    normal_source_cell_id: Optional[int] = None
    normal_source_tp_id: Optional[int] = None

    @field_validator(*_SOURCE_FIELDS, mode="before")
    @classmethod
    def blank_source(cls, v):
        return empty_to_none(v)

    @model_validator(mode="after")
    def single_source(self):
        if self.source_cell_id is not None and self.source_tp_id is not None:
            raise ValueError("A line can be sourced from a cell or a TP, not both")
        if self.normal_source_cell_id is not None and self.normal_source_tp_id is not None:
            raise ValueError("A line's normal source can be a cell or a TP, not both")
        return self


class LineCreate(LineBase):
    pass


class LineUpdate(CamelModel):
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    voltage_class: Optional[str] = Field(None, max_length=50)
    line_type: Optional[str] = Field(None, max_length=50)
    source_cell_id: Optional[int] = None
    source_tp_id: Optional[int] = None
    normal_source_cell_id: Optional[int] = None
    normal_source_tp_id: Optional[int] = None

    @field_validator(*_SOURCE_FIELDS, mode="before")
    @classmethod
    def blank_source(cls, v):
        return empty_to_none(v)

    @field_validator("name", mode="before")
    @classmethod
    def name_not_null(cls, v):
        return not_null(v)


class LineSummary(CamelModel):
    """Line fields inlined into events."""

    id: int
    name: str
    voltage_class: Optional[str] = None
    line_type: Optional[str] = None


class Line(LineBase):
    id: int
