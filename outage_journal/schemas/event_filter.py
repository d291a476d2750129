"""Journal filter state schemas."""

from datetime import date
from typing import List, Literal, Optional

from pydantic import Field, field_validator

from outage_journal.schemas.base import CamelModel, empty_to_none
from outage_journal.schemas.outage_event import OutageEvent

StatusFilter = Literal["", "active", "completed"]


class FilterState(CamelModel):
    """Every journal filter; blank values mean "not set"."""

    search_query: str = ""
    date_start: Optional[date] = None
    date_end: Optional[date] = None

    # Object filters, independent of each other
    substation_id: Optional[int] = None
    cell_id: Optional[int] = None
    line_id: Optional[int] = None
    tp_id: Optional[int] = None

    # Object properties
    voltage_class: str = ""
    district: str = ""
    line_type: str = ""

    # Event properties
    type: str = ""
    category: str = ""
    subcategory: str = ""

    status: StatusFilter = ""
    show_overdue_only: bool = False

    duration_min: Optional[int] = Field(None, description="Minimum duration in minutes")
    duration_max: Optional[int] = Field(None, description="Maximum duration in minutes")

    @field_validator("date_start", "date_end", "duration_min", "duration_max", mode="before")
    @classmethod
    def blank_value(cls, v):
        return None if v == "" else v

    @field_validator("substation_id", "cell_id", "line_id", "tp_id", mode="before")
    @classmethod
    def blank_reference(cls, v):
        return empty_to_none(v)

    @field_validator(
        "search_query", "voltage_class", "district", "line_type", "type", "category", "subcategory",
        mode="before",
    )
    @classmethod
    def none_to_blank(cls, v):
        return "" if v is None else v


class FilteredEvents(CamelModel):
    """Result of applying a filter state to the journal."""

    events: List[OutageEvent]
    total: int
    active_filter_count: int
