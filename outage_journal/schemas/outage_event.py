"""Outage event schemas."""

from datetime import datetime
from typing import List, Optional

from pydantic import Field, field_serializer, field_validator, model_validator

from outage_journal.core.timeutils import from_storage, to_storage
from outage_journal.schemas.base import CamelModel, empty_to_none
from outage_journal.schemas.line import LineSummary
from outage_journal.schemas.substation import SubstationSummary
from outage_journal.schemas.tp import TpSummary

_TIME_FIELDS = ("time_start", "time_end", "deadline_date")


def _date_only_to_midnight(value):
    # "YYYY-MM-DD" from a date picker means the start of that local day
    if isinstance(value, str) and len(value) == 10:
        return f"{value}T00:00:00"
    return value


def _unique(ids: List[int]) -> List[int]:
    return list(dict.fromkeys(ids))


class CellSummary(CamelModel):
    id: int
    name: str
    voltage_class: Optional[str] = None
    substation_id: Optional[int] = None


class OutageEventWrite(CamelModel):
    """Payload for creating or fully replacing an event."""

    type: str = Field(..., min_length=1, max_length=100)
    reason_category: str = Field(..., min_length=1, max_length=255)
    reason_subcategory: str = Field(..., min_length=1, max_length=500)
    time_start: datetime
    time_end: Optional[datetime] = None
    deadline_date: Optional[datetime] = None
    measures_planned: Optional[str] = None
    measures_taken: Optional[str] = None
    comment: Optional[str] = None
    is_completed: bool = False

    substation_id: Optional[int] = None
    cell_id: Optional[int] = None
    tp_id: Optional[int] = None
    line_ids: List[int] = []
    tp_ids: List[int] = []

    @field_validator("substation_id", "cell_id", "tp_id", mode="before")
    @classmethod
    def blank_reference(cls, v):
        return empty_to_none(v)

    @field_validator("time_end", "deadline_date", mode="before")
    @classmethod
    def blank_time(cls, v):
        if v == "":
            return None
        return _date_only_to_midnight(v)

    @field_validator("time_start", mode="before")
    @classmethod
    def date_only_start(cls, v):
        return _date_only_to_midnight(v)

    @field_validator(*_TIME_FIELDS, mode="after")
    @classmethod
    def normalize_time(cls, v):
        return to_storage(v)

    @field_serializer(*_TIME_FIELDS)
    def serialize_time(self, v):
        return from_storage(v)

    @field_validator("line_ids", "tp_ids", mode="after")
    @classmethod
    def dedupe_ids(cls, v):
        return _unique(v)

    @model_validator(mode="after")
    def open_event_has_no_end(self):
        if not self.is_completed and self.time_end is not None:
            raise ValueError("timeEnd must be empty while the event is not completed")
        return self


class OutageEventCreate(OutageEventWrite):
    pass


class OutageEventReplace(OutageEventWrite):
    pass


class OutageEventPatch(CamelModel):
    """Status patch: only these fields may change."""

    is_completed: Optional[bool] = None
    measures_taken: Optional[str] = None
    comment: Optional[str] = None
    time_end: Optional[datetime] = None

    @field_validator("time_end", mode="before")
    @classmethod
    def blank_time(cls, v):
        if v == "":
            return None
        return _date_only_to_midnight(v)

    @field_validator("time_end", mode="after")
    @classmethod
    def normalize_time(cls, v):
        return to_storage(v)

    @field_serializer("time_end")
    def serialize_time(self, v):
        return from_storage(v)


class OutageEvent(CamelModel):
    """Event as served to clients: assets inlined, completion as a boolean."""

    id: int
    type: str
    reason_category: Optional[str] = None
    reason_subcategory: Optional[str] = None
    time_start: datetime
    time_end: Optional[datetime] = None
    deadline_date: Optional[datetime] = None
    measures_planned: Optional[str] = None
    measures_taken: Optional[str] = None
    comment: Optional[str] = None
    is_completed: bool = False
    is_switching: bool = False
    switching_details: Optional[str] = None

    substation_id: Optional[int] = None
    cell_id: Optional[int] = None
    tp_id: Optional[int] = None
    substation: Optional[SubstationSummary] = None
    cell: Optional[CellSummary] = None
    tp: Optional[TpSummary] = None
    lines: List[LineSummary] = []
    tps: List[TpSummary] = []

    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @field_validator("is_completed", "is_switching", mode="before")
    @classmethod
    def int_flag(cls, v):
        return bool(v)

    @field_validator(*_TIME_FIELDS, "created_at", "updated_at", mode="after")
    @classmethod
    def attach_utc(cls, v):
        return from_storage(v)

    @classmethod
    def from_orm_event(cls, event) -> "OutageEvent":
        """Build the denormalized view from an eagerly loaded ORM event."""
        lines = sorted((link.line for link in event.event_lines), key=lambda line: line.id)
        tps = sorted((link.tp for link in event.event_tps), key=lambda tp: tp.id)
        return cls(
            id=event.id,
            type=event.type,
            reason_category=event.reason_category,
            reason_subcategory=event.reason_subcategory,
            time_start=event.time_start,
            time_end=event.time_end,
            deadline_date=event.deadline_date,
            measures_planned=event.measures_planned,
            measures_taken=event.measures_taken,
            comment=event.comment,
            is_completed=event.is_completed,
            is_switching=event.is_switching,
            switching_details=event.switching_details,
            substation_id=event.substation_id,
            cell_id=event.cell_id,
            tp_id=event.tp_id,
            substation=SubstationSummary.model_validate(event.substation) if event.substation else None,
            cell=CellSummary.model_validate(event.cell) if event.cell else None,
            tp=TpSummary.model_validate(event.tp) if event.tp else None,
            lines=[LineSummary.model_validate(line) for line in lines],
            tps=[TpSummary.model_validate(tp) for tp in tps],
            created_at=event.created_at,
            updated_at=event.updated_at,
        )

    @property
    def line_ids(self) -> List[int]:
        return [line.id for line in self.lines]
