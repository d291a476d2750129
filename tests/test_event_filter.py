"""Tests for the journal filter engine."""

from datetime import date, datetime, timezone

import pytest

from outage_journal.schemas.event_filter import FilterState
from outage_journal.schemas.line import LineSummary
from outage_journal.schemas.outage_event import CellSummary, OutageEvent
from outage_journal.schemas.substation import SubstationSummary
from outage_journal.schemas.tp import TpSummary
from outage_journal.services.event_filter import (
    active_filter_count,
    duration_minutes,
    filter_events,
    is_overdue,
)

NOW = datetime(2025, 6, 10, 12, 0, tzinfo=timezone.utc)

NORTH = SubstationSummary(id=1, name="PS North", voltage_class="110 kV", district="Northern")
SOUTH = SubstationSummary(id=2, name="PS South", voltage_class="35 kV", district="Southern")
FEEDER_101 = LineSummary(id=1, name="Feeder 101", voltage_class="10 kV", line_type="overhead")
FEEDER_6 = LineSummary(id=3, name="Feeder 6", voltage_class="6 kV", line_type="cable")


def utc(*args) -> datetime:
    return datetime(*args, tzinfo=timezone.utc)


def make_event(event_id: int, **overrides) -> OutageEvent:
    fields = {
        "id": event_id,
        "type": "Emergency",
        "reason_category": "Overhead line failures",
        "reason_subcategory": "Falling trees",
        "time_start": utc(2025, 6, 1, 10, 0),
        "is_completed": False,
    }
    fields.update(overrides)
    return OutageEvent(**fields)


@pytest.fixture
def journal():
    """A small mixed journal."""
    return [
        make_event(
            1,
            substation_id=1,
            substation=NORTH,
            cell_id=1,
            cell=CellSummary(id=1, name="Cell 1", voltage_class="10 kV", substation_id=1),
            lines=[FEEDER_101],
            time_end=utc(2025, 6, 1, 13, 30),
            is_completed=True,
            comment="Tree on conductor",
        ),
        make_event(
            2,
            type="Planned",
            reason_category="TP failures",
            reason_subcategory="Equipment wear",
            tp_id=2,
            tp=TpSummary(id=2, name="TP-205", voltage_class="6/0.4 kV"),
            lines=[FEEDER_6],
            time_start=utc(2025, 6, 5, 8, 0),
            deadline_date=utc(2025, 6, 6),
        ),
        make_event(
            3,
            substation_id=2,
            substation=SOUTH,
            time_start=utc(2025, 6, 9, 23, 0),
            measures_planned="Replace insulators",
        ),
    ]


def test_default_filter_returns_everything(journal):
    """An empty filter state keeps every event in order."""
    assert filter_events(journal, FilterState(), now=NOW) == journal
    assert filter_events(journal, None, now=NOW) == journal


@pytest.mark.parametrize(
    "filters",
    [
        FilterState(status="active"),
        FilterState(search_query="feeder"),
        FilterState(date_start=date(2025, 6, 5)),
        FilterState(voltage_class="6 kV"),
        FilterState(type="Emergency", duration_max=300),
    ],
)
def test_filter_is_subset_and_idempotent(journal, filters):
    """Filtering never invents events and applying it twice changes nothing."""
    once = filter_events(journal, filters, now=NOW)
    assert all(event in journal for event in once)
    assert filter_events(once, filters, now=NOW) == once


@pytest.mark.parametrize(
    "field,value",
    [
        ("search_query", "north"),
        ("substation_id", 1),
        ("line_id", 3),
        ("district", "Southern"),
        ("line_type", "cable"),
        ("category", "TP failures"),
        ("status", "completed"),
        ("show_overdue_only", True),
        ("duration_min", 60),
    ],
)
def test_adding_a_filter_never_grows_the_result(journal, field, value):
    """Narrowing any single field keeps the result size the same or smaller."""
    base = FilterState(type="Emergency")
    narrowed = base.model_copy(update={field: value})
    assert len(filter_events(journal, narrowed, now=NOW)) <= len(filter_events(journal, base, now=NOW))


def test_duration_of_completed_event():
    """10:00 to 13:30 is 210 minutes."""
    event = make_event(1, time_end=utc(2025, 6, 1, 13, 30), is_completed=True)
    assert duration_minutes(event, NOW) == 210


def test_duration_of_open_event_runs_to_now():
    """Open events are measured up to the reference instant, truncated."""
    event = make_event(1, time_start=utc(2025, 6, 10, 11, 0, 30))
    assert duration_minutes(event, NOW) == 59


def test_duration_bounds_are_inclusive(journal):
    """Both duration bounds include the boundary value."""
    result = filter_events(journal, FilterState(duration_min=210, duration_max=210), now=NOW)
    assert [event.id for event in result] == [1]


def test_overdue_open_event():
    """An open event is overdue strictly after its deadline."""
    event = make_event(1, deadline_date=utc(2025, 6, 1))
    assert is_overdue(event, utc(2025, 6, 2, 0, 0, 1))
    assert not is_overdue(event, utc(2025, 5, 31, 23, 59, 59))


def test_overdue_completed_event_uses_end_time():
    """A completed event is overdue only if it ended after its deadline."""
    late = make_event(1, deadline_date=utc(2025, 6, 1, 12), time_end=utc(2025, 6, 1, 13), is_completed=True)
    on_time = make_event(2, deadline_date=utc(2025, 6, 1, 12), time_end=utc(2025, 6, 1, 11), is_completed=True)
    assert is_overdue(late, NOW)
    assert not is_overdue(on_time, NOW)


def test_event_without_deadline_is_never_overdue():
    assert not is_overdue(make_event(1), NOW)


def test_overdue_filter(journal):
    """Only the open event past its deadline is kept."""
    result = filter_events(journal, FilterState(show_overdue_only=True), now=NOW)
    assert [event.id for event in result] == [2]


@pytest.mark.parametrize(
    "query,expected",
    [
        ("FEEDER 101", [1]),
        ("northern", [1]),
        ("tp-205", [2]),
        ("insulators", [3]),
        ("conductor", [1]),
        ("falling", [1, 3]),
        ("equipment wear", [2]),
        ("nothing like this", []),
    ],
)
def test_search_is_case_insensitive_substring(journal, query, expected):
    result = filter_events(journal, FilterState(search_query=query), now=NOW)
    assert [event.id for event in result] == expected


def test_date_range_includes_whole_end_day(journal):
    """The end date covers the day up to 23:59:59.999."""
    result = filter_events(
        journal, FilterState(date_start=date(2025, 6, 5), date_end=date(2025, 6, 9)), now=NOW
    )
    assert [event.id for event in result] == [2, 3]


def test_date_range_uses_local_days(journal):
    """Day bounds are taken in the given timezone."""
    from zoneinfo import ZoneInfo

    # 2025-06-09 23:00 UTC is already June 10th in Moscow
    result = filter_events(
        journal, FilterState(date_start=date(2025, 6, 10)), now=NOW, tz=ZoneInfo("Europe/Moscow")
    )
    assert [event.id for event in result] == [3]


def test_voltage_class_matches_any_asset(journal):
    """The voltage class may come from the substation, cell, TP or any line."""
    assert [e.id for e in filter_events(journal, FilterState(voltage_class="10 kV"), now=NOW)] == [1]
    assert [e.id for e in filter_events(journal, FilterState(voltage_class="6 kV"), now=NOW)] == [2]
    assert [e.id for e in filter_events(journal, FilterState(voltage_class="35 kV"), now=NOW)] == [3]


def test_object_filters_are_independent(journal):
    """Cell and substation filters are both applied as given."""
    assert [e.id for e in filter_events(journal, FilterState(cell_id=1), now=NOW)] == [1]
    assert filter_events(journal, FilterState(cell_id=1, substation_id=2), now=NOW) == []
    assert [e.id for e in filter_events(journal, FilterState(tp_id=2), now=NOW)] == [2]


def test_status_filter(journal):
    assert [e.id for e in filter_events(journal, FilterState(status="active"), now=NOW)] == [2, 3]
    assert [e.id for e in filter_events(journal, FilterState(status="completed"), now=NOW)] == [1]


def test_subcategory_filter(journal):
    result = filter_events(journal, FilterState(subcategory="Equipment wear"), now=NOW)
    assert [event.id for event in result] == [2]


def test_blank_form_values_mean_unset():
    """Empty strings and zero ids coming from form controls are ignored."""
    filters = FilterState.model_validate(
        {"substationId": "", "cellId": 0, "dateStart": "", "durationMin": "", "voltageClass": None}
    )
    assert filters.substation_id is None
    assert filters.cell_id is None
    assert filters.date_start is None
    assert filters.duration_min is None
    assert filters.voltage_class == ""
    assert active_filter_count(filters) == 0


def test_active_filter_count_groups_related_fields():
    """Date and duration bounds count once each; subcategory and overdue are not counted."""
    filters = FilterState(
        date_start=date(2025, 6, 1),
        date_end=date(2025, 6, 30),
        duration_min=10,
        duration_max=100,
        subcategory="Equipment wear",
        show_overdue_only=True,
    )
    assert active_filter_count(filters) == 2


def test_active_filter_count_all_fields():
    filters = FilterState(
        search_query="x",
        date_end=date(2025, 6, 30),
        substation_id=1,
        cell_id=2,
        line_id=3,
        tp_id=4,
        voltage_class="10 kV",
        district="Northern",
        line_type="cable",
        type="Emergency",
        category="TP failures",
        status="active",
        duration_min=5,
    )
    assert active_filter_count(filters) == 13
