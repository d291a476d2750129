"""Journal filter engine.

Narrows an in-memory event list with a :class:`FilterState`. Predicates run
in a fixed order (cheap checks first) and short-circuit on the first miss;
since they are AND-ed, the order never changes the result.
"""

from dataclasses import dataclass
from datetime import datetime, time, timezone
from typing import Callable, Iterable, List, Optional, Tuple
from zoneinfo import ZoneInfo

from outage_journal.core.timeutils import get_timezone, utcnow
from outage_journal.schemas.event_filter import FilterState
from outage_journal.schemas.outage_event import OutageEvent

END_OF_DAY = time(23, 59, 59, 999000)


@dataclass(frozen=True)
class FilterContext:
    """Values shared by every predicate during one filtering pass."""

    now: datetime
    range_start: Optional[datetime] = None
    range_end: Optional[datetime] = None


def _aware(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def duration_minutes(event: OutageEvent, now: Optional[datetime] = None) -> int:
    """Whole minutes from start to end, or to ``now`` while the event is open."""
    start = _aware(event.time_start)
    end = _aware(event.time_end) if event.time_end else _aware(now or utcnow())
    # Truncate toward zero
    return int((end - start).total_seconds() / 60)


def is_overdue(event: OutageEvent, now: Optional[datetime] = None) -> bool:
    """Whether the event missed its control deadline."""
    if not event.deadline_date:
        return False
    deadline = _aware(event.deadline_date)
    if event.is_completed:
        if not event.time_end:
            return False
        return _aware(event.time_end) > deadline
    return _aware(now or utcnow()) > deadline


def _contains(value: Optional[str], query: str) -> bool:
    return bool(value) and query in value.lower()


def matches_search(event: OutageEvent, query: str) -> bool:
    """Case-insensitive substring search across the event's text fields."""
    q = query.lower()
    substation = event.substation
    fields = (
        substation.name if substation else None,
        substation.district if substation else None,
        event.cell.name if event.cell else None,
        event.tp.name if event.tp else None,
        event.reason_category,
        event.reason_subcategory,
        event.measures_taken,
        event.measures_planned,
        event.comment,
    )
    if any(_contains(value, q) for value in fields):
        return True
    return any(_contains(line.name, q) for line in event.lines)


def day_bounds(
    date_start, date_end, tz: Optional[ZoneInfo] = None
) -> Tuple[Optional[datetime], Optional[datetime]]:
    """Inclusive local-day bounds: 00:00:00.000 of the start, 23:59:59.999 of the end."""
    tz = tz or get_timezone()
    start = datetime.combine(date_start, time.min, tzinfo=tz) if date_start else None
    end = datetime.combine(date_end, END_OF_DAY, tzinfo=tz) if date_end else None
    return start, end


# Predicates


def _match_status(event: OutageEvent, f: FilterState, ctx: FilterContext) -> bool:
    if f.status == "active":
        return not event.is_completed
    if f.status == "completed":
        return event.is_completed
    return True


def _match_overdue(event: OutageEvent, f: FilterState, ctx: FilterContext) -> bool:
    if not f.show_overdue_only:
        return True
    return is_overdue(event, ctx.now)


def _match_search(event: OutageEvent, f: FilterState, ctx: FilterContext) -> bool:
    if not f.search_query:
        return True
    return matches_search(event, f.search_query)


def _match_date_range(event: OutageEvent, f: FilterState, ctx: FilterContext) -> bool:
    started = _aware(event.time_start)
    if ctx.range_start is not None and started < ctx.range_start:
        return False
    if ctx.range_end is not None and started > ctx.range_end:
        return False
    return True


def _match_objects(event: OutageEvent, f: FilterState, ctx: FilterContext) -> bool:
    if f.substation_id is not None and event.substation_id != f.substation_id:
        return False
    if f.cell_id is not None and event.cell_id != f.cell_id:
        return False
    if f.line_id is not None and not any(line.id == f.line_id for line in event.lines):
        return False
    if f.tp_id is not None and event.tp_id != f.tp_id:
        return False
    return True


def _match_properties(event: OutageEvent, f: FilterState, ctx: FilterContext) -> bool:
    if f.voltage_class:
        classes = [
            event.substation.voltage_class if event.substation else None,
            event.cell.voltage_class if event.cell else None,
            event.tp.voltage_class if event.tp else None,
        ]
        classes.extend(line.voltage_class for line in event.lines)
        if f.voltage_class not in classes:
            return False
    if f.district:
        if not event.substation or event.substation.district != f.district:
            return False
    if f.line_type and not any(line.line_type == f.line_type for line in event.lines):
        return False
    return True


def _match_type(event: OutageEvent, f: FilterState, ctx: FilterContext) -> bool:
    return not f.type or event.type == f.type


def _match_reason(event: OutageEvent, f: FilterState, ctx: FilterContext) -> bool:
    if f.category and event.reason_category != f.category:
        return False
    if f.subcategory and event.reason_subcategory != f.subcategory:
        return False
    return True


def _match_duration(event: OutageEvent, f: FilterState, ctx: FilterContext) -> bool:
    if f.duration_min is None and f.duration_max is None:
        return True
    minutes = duration_minutes(event, ctx.now)
    if f.duration_min is not None and minutes < f.duration_min:
        return False
    if f.duration_max is not None and minutes > f.duration_max:
        return False
    return True


Predicate = Callable[[OutageEvent, FilterState, FilterContext], bool]

PREDICATES: Tuple[Tuple[str, Predicate], ...] = (
    ("status", _match_status),
    ("overdue", _match_overdue),
    ("search", _match_search),
    ("date_range", _match_date_range),
    ("objects", _match_objects),
    ("properties", _match_properties),
    ("type", _match_type),
    ("reason", _match_reason),
    ("duration", _match_duration),
)


def event_matches(event: OutageEvent, filters: FilterState, ctx: FilterContext) -> bool:
    return all(predicate(event, filters, ctx) for _, predicate in PREDICATES)


def filter_events(
    events: Iterable[OutageEvent],
    filters: Optional[FilterState] = None,
    now: Optional[datetime] = None,
    tz: Optional[ZoneInfo] = None,
) -> List[OutageEvent]:
    """Return the events that satisfy every filter, preserving input order.

    ``now`` fixes the instant used for open-event durations and overdue
    checks; ``tz`` is the zone the date-range days are taken in.
    """
    filters = filters or FilterState()
    range_start, range_end = day_bounds(filters.date_start, filters.date_end, tz)
    ctx = FilterContext(now=_aware(now or utcnow()), range_start=range_start, range_end=range_end)
    return [event for event in events if event_matches(event, filters, ctx)]


def active_filter_count(filters: FilterState) -> int:
    """Number of filters set, for the badge next to the filter toggle.

    Related fields count once (either date bound, either duration bound).
    """
    flags = (
        bool(filters.search_query),
        filters.date_start is not None or filters.date_end is not None,
        filters.substation_id is not None,
        filters.cell_id is not None,
        filters.line_id is not None,
        filters.tp_id is not None,
        bool(filters.voltage_class),
        bool(filters.district),
        bool(filters.line_type),
        bool(filters.type),
        bool(filters.category),
        bool(filters.status),
        filters.duration_min is not None or filters.duration_max is not None,
    )
    return sum(flags)
