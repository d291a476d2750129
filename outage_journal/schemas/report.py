"""Report schemas."""

from datetime import datetime
from typing import List, Literal, Optional

from outage_journal.schemas.base import CamelModel
from outage_journal.schemas.outage_event import OutageEvent

DateRangePreset = Literal["today", "yesterday", "week", "month", "year", "all"]


class DailyCount(CamelModel):
    date: str
    count: int


class NamedCount(CamelModel):
    name: str
    count: int


class DailyAverage(CamelModel):
    date: str
    avg_time: int


class PlannedEmergencyRatio(CamelModel):
    emergency: int
    planned: int


class OperationalSummary(CamelModel):
    total: int
    emergency: int
    planned: int
    active: int
    completed: int


class AnalyticalReport(CamelModel):
    dynamics: List[DailyCount]
    top_substations: List[NamedCount]
    causes: List[NamedCount]


class EfficiencyReport(CamelModel):
    mttr: int
    mttr_trend: List[DailyAverage]
    ratio: PlannedEmergencyRatio
    feeder_frequency: List[NamedCount]


class OperationalReport(CamelModel):
    summary: OperationalSummary
    current_outages: List[OutageEvent]
    deadline_control: List[OutageEvent]


class ReportBundle(CamelModel):
    preset: DateRangePreset
    range_start: Optional[datetime] = None
    range_end: Optional[datetime] = None
    operational: OperationalReport
    analytical: AnalyticalReport
    efficiency: EfficiencyReport
