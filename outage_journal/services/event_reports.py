"""Report derivations over an already loaded event list.

Everything here is a pure function of its inputs: the event list, the
reference instant and the timezone used to bucket events into days.
"""

import math
from datetime import datetime, time, timedelta, timezone
from typing import Iterable, List, Optional, Tuple
from zoneinfo import ZoneInfo

import pandas as pd
from dateutil.relativedelta import relativedelta

from outage_journal.core.config import get_settings
from outage_journal.core.constants import (
    EVENT_TYPE_EMERGENCY,
    EVENT_TYPE_PLANNED,
    UNSPECIFIED_CAUSE,
)
from outage_journal.core.timeutils import get_timezone, utcnow
from outage_journal.schemas.outage_event import OutageEvent
from outage_journal.schemas.report import (
    AnalyticalReport,
    DailyAverage,
    DailyCount,
    DateRangePreset,
    EfficiencyReport,
    NamedCount,
    OperationalReport,
    OperationalSummary,
    PlannedEmergencyRatio,
    ReportBundle,
)
from outage_journal.services.event_filter import END_OF_DAY, duration_minutes

_COLUMNS = ["day", "type", "substation", "category", "completed", "minutes", "lines"]


def _aware(value: datetime) -> datetime:
    return value.replace(tzinfo=timezone.utc) if value.tzinfo is None else value


def round_half_up(value: float) -> int:
    """Round .5 away from zero for positive values, like a dashboard would."""
    return int(math.floor(value + 0.5))


def preset_interval(
    preset: DateRangePreset, now: Optional[datetime] = None, tz: Optional[ZoneInfo] = None
) -> Tuple[Optional[datetime], Optional[datetime]]:
    """Inclusive interval for a date-range preset; ``all`` is unbounded."""
    tz = tz or get_timezone()
    local_now = _aware(now or utcnow()).astimezone(tz)
    today = local_now.date()

    def start_of(day):
        return datetime.combine(day, time.min, tzinfo=tz)

    def end_of(day):
        return datetime.combine(day, END_OF_DAY, tzinfo=tz)

    if preset == "today":
        return start_of(today), end_of(today)
    if preset == "yesterday":
        yesterday = today - timedelta(days=1)
        return start_of(yesterday), end_of(yesterday)
    if preset == "week":
        return local_now - timedelta(days=7), end_of(today)
    if preset == "month":
        first = today.replace(day=1)
        return start_of(first), end_of(first + relativedelta(months=1) - timedelta(days=1))
    if preset == "year":
        return start_of(today.replace(month=1, day=1)), end_of(today)
    if preset == "all":
        return None, None
    raise ValueError(f"Unknown date range preset: {preset}")


def events_in_range(
    events: Iterable[OutageEvent], start: Optional[datetime], end: Optional[datetime]
) -> List[OutageEvent]:
    """Events whose start falls inside ``[start, end]``."""
    selected = []
    for event in events:
        started = _aware(event.time_start)
        if start is not None and started < start:
            continue
        if end is not None and started > end:
            continue
        selected.append(event)
    return selected


def events_frame(events: Iterable[OutageEvent], tz: Optional[ZoneInfo] = None) -> pd.DataFrame:
    """One row per event with the columns the derivations group on."""
    tz = tz or get_timezone()
    rows = []
    for event in events:
        finished = bool(event.is_completed and event.time_end)
        rows.append(
            {
                "day": _aware(event.time_start).astimezone(tz).strftime("%Y-%m-%d"),
                "type": event.type,
                "substation": event.substation.name if event.substation and event.substation.name else None,
                "category": event.reason_category or UNSPECIFIED_CAUSE,
                "completed": bool(event.is_completed),
                "minutes": float(duration_minutes(event)) if finished else float("nan"),
                "lines": [line.name for line in event.lines if line.name],
            }
        )
    frame = pd.DataFrame(rows, columns=_COLUMNS)
    return frame.astype({"completed": bool, "minutes": float})


def _emergencies(frame: pd.DataFrame) -> pd.DataFrame:
    return frame[frame["type"] == EVENT_TYPE_EMERGENCY]


def _top(counts: pd.Series, limit: Optional[int]) -> List[NamedCount]:
    # Stable sort keeps first-seen order between equal counts
    counts = counts.sort_values(ascending=False, kind="stable")
    if limit is not None:
        counts = counts.head(limit)
    return [NamedCount(name=str(name), count=int(count)) for name, count in counts.items()]


def dynamics(frame: pd.DataFrame) -> List[DailyCount]:
    """Emergency events per day, oldest first."""
    counts = _emergencies(frame).groupby("day").size().sort_index()
    return [DailyCount(date=day, count=int(count)) for day, count in counts.items()]


def top_substations(frame: pd.DataFrame, limit: int = 5) -> List[NamedCount]:
    """Substations with the most emergency events."""
    emergencies = _emergencies(frame).dropna(subset=["substation"])
    return _top(emergencies.groupby("substation", sort=False).size(), limit)


def cause_distribution(frame: pd.DataFrame) -> List[NamedCount]:
    """Emergency events per reason category, in first-seen order."""
    counts = _emergencies(frame).groupby("category", sort=False).size()
    return [NamedCount(name=str(name), count=int(count)) for name, count in counts.items()]


def _recovered(frame: pd.DataFrame) -> pd.DataFrame:
    emergencies = _emergencies(frame)
    return emergencies[emergencies["completed"]].dropna(subset=["minutes"])


def mttr(frame: pd.DataFrame) -> int:
    """Mean time to recovery in minutes over completed emergency events, 0 if none."""
    recovered = _recovered(frame)
    if recovered.empty:
        return 0
    return round_half_up(recovered["minutes"].mean())


def mttr_trend(frame: pd.DataFrame) -> List[DailyAverage]:
    """Daily MTTR keyed by the day the outage started."""
    means = _recovered(frame).groupby("day")["minutes"].mean().sort_index()
    return [DailyAverage(date=day, avg_time=round_half_up(value)) for day, value in means.items()]


def planned_vs_emergency(frame: pd.DataFrame) -> PlannedEmergencyRatio:
    return PlannedEmergencyRatio(
        emergency=int((frame["type"] == EVENT_TYPE_EMERGENCY).sum()),
        planned=int((frame["type"] == EVENT_TYPE_PLANNED).sum()),
    )


def feeder_frequency(frame: pd.DataFrame, limit: int = 5) -> List[NamedCount]:
    """Emergency events per line; an event counts once for every line it touches."""
    names = _emergencies(frame)["lines"].explode().dropna()
    if names.empty:
        return []
    return _top(names.groupby(names, sort=False).size(), limit)


def operational_summary(events: List[OutageEvent]) -> OperationalSummary:
    return OperationalSummary(
        total=len(events),
        emergency=sum(1 for e in events if e.type == EVENT_TYPE_EMERGENCY),
        planned=sum(1 for e in events if e.type == EVENT_TYPE_PLANNED),
        active=sum(1 for e in events if not e.is_completed),
        completed=sum(1 for e in events if e.is_completed),
    )


def deadline_control(
    events: Iterable[OutageEvent],
    now: Optional[datetime] = None,
    warning_hours: float = 2,
) -> List[OutageEvent]:
    """Open events whose deadline is under ``warning_hours`` away or already past."""
    now = _aware(now or utcnow())
    due = [
        e
        for e in events
        if not e.is_completed
        and e.deadline_date
        and (_aware(e.deadline_date) - now) < timedelta(hours=warning_hours)
    ]
    return sorted(due, key=lambda e: _aware(e.deadline_date))


def build_report(
    all_events: List[OutageEvent],
    preset: DateRangePreset = "month",
    now: Optional[datetime] = None,
    tz: Optional[ZoneInfo] = None,
) -> ReportBundle:
    """Derive every report view for ``preset``.

    Current outages and deadline control always look at ``all_events``; the
    rest is computed over the events that started inside the preset range.
    """
    settings = get_settings()
    tz = tz or get_timezone()
    now = _aware(now or utcnow())
    start, end = preset_interval(preset, now, tz)
    ranged = events_in_range(all_events, start, end)
    frame = events_frame(ranged, tz)

    return ReportBundle(
        preset=preset,
        range_start=start,
        range_end=end,
        operational=OperationalReport(
            summary=operational_summary(ranged),
            current_outages=[e for e in all_events if not e.is_completed],
            deadline_control=deadline_control(all_events, now, settings.DEADLINE_WARNING_HOURS),
        ),
        analytical=AnalyticalReport(
            dynamics=dynamics(frame),
            top_substations=top_substations(frame, settings.TOP_LIMIT),
            causes=cause_distribution(frame),
        ),
        efficiency=EfficiencyReport(
            mttr=mttr(frame),
            mttr_trend=mttr_trend(frame),
            ratio=planned_vs_emergency(frame),
            feeder_frequency=feeder_frequency(frame, settings.TOP_LIMIT),
        ),
    )
