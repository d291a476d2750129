"""Substation and cell schemas."""

from datetime import datetime
from typing import List, Optional

from pydantic import Field, field_validator

from outage_journal.schemas.base import CamelModel, not_null


class CellBase(CamelModel):
    name: str = Field(..., min_length=1, max_length=255)
    voltage_class: Optional[str] = Field(None, max_length=50)


class CellCreate(CellBase):
    substation_id: int


class CellUpdate(CamelModel):
    """Cells cannot be moved to another substation."""

    name: Optional[str] = Field(None, min_length=1, max_length=255)
    voltage_class: Optional[str] = Field(None, max_length=50)

    @field_validator("name", mode="before")
    @classmethod
    def name_not_null(cls, v):
        return not_null(v)


class Cell(CellBase):
    id: int
    substation_id: int


class SubstationBase(CamelModel):
    name: str = Field(..., min_length=1, max_length=255)
    voltage_class: Optional[str] = Field(None, max_length=50)
    district: Optional[str] = Field(None, max_length=255)


class SubstationCreate(SubstationBase):
    pass


class SubstationUpdate(CamelModel):
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    voltage_class: Optional[str] = Field(None, max_length=50)
    district: Optional[str] = Field(None, max_length=255)

    @field_validator("name", mode="before")
    @classmethod
    def name_not_null(cls, v):
        return not_null(v)


class SubstationSummary(SubstationBase):
    """Substation without its cells, as inlined into events."""

    id: int


class Substation(SubstationSummary):
    cells: List[Cell] = []
    created_at: Optional[datetime] = None
