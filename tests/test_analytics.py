"""Tests for dashboard analytics."""

from datetime import datetime

import pytest
from sqlalchemy.exc import SQLAlchemyError

from outage_journal.core.constants import Role
from outage_journal.models import EventLine, OutageEvent
from outage_journal.schemas.analytics import HazardousObject
from outage_journal.services.analytics import AnalyticsService, bucket_type_stats, merge_hazardous


def test_bucket_type_stats():
    rows = [
        ("Emergency", 5, 2),
        (" Planned ", 3, 1),
        ("Preventive measures", 2, 0),
        ("Preventive inspection", 1, 1),
        ("Operative switching", 4, None),
        ("SWITCHING", 7, 0),
        (None, 1, 1),
    ]
    breakdown = bucket_type_stats(rows)
    assert (breakdown.emergency.total, breakdown.emergency.active) == (5, 2)
    assert (breakdown.planned.total, breakdown.planned.active) == (3, 1)
    assert (breakdown.preventive.total, breakdown.preventive.active) == (3, 1)
    assert (breakdown.operative.total, breakdown.operative.active) == (4, 0)


def test_bucket_type_stats_exact_match_for_emergency():
    breakdown = bucket_type_stats([("Emergency repair", 9, 9)])
    assert breakdown.emergency.total == 0


def test_merge_hazardous_orders_and_truncates():
    cells = [HazardousObject(substation="PS", cell=f"Cell {i}", count=i, type="PS") for i in range(40)]
    feeders = [HazardousObject(substation="TP", cell=f"Line {i}", count=i, type="TP") for i in range(40)]
    merged = merge_hazardous(cells, feeders, limit=50)
    assert len(merged) == 50
    counts = [row.count for row in merged]
    assert counts == sorted(counts, reverse=True)
    assert counts[0] == 39


@pytest.fixture
async def journal(test_session, network):
    """Events spread over two years, types and assets."""

    def event(event_type, start, completed=False, **fields):
        return OutageEvent(type=event_type, time_start=start, is_completed=int(completed), **fields)

    events = [
        event("Emergency", datetime(2025, 1, 15, 8), True, substation_id=1, cell_id=1,
              reason_category="Cable failures", reason_subcategory="Insulation breakdown"),
        event("Emergency", datetime(2025, 1, 20, 8), substation_id=1, cell_id=1,
              reason_category="Cable failures", reason_subcategory="Insulation breakdown"),
        event("Emergency", datetime(2025, 2, 3, 8), tp_id=2,
              reason_category="TP failures", reason_subcategory="Fuse blown"),
        event("Planned", datetime(2025, 2, 10, 8), True, substation_id=2, cell_id=3,
              reason_category="Maintenance", reason_subcategory="Scheduled repair"),
        event("Emergency", datetime(2024, 12, 30, 8), True, substation_id=2, cell_id=3,
              reason_category="Cable failures", reason_subcategory="Insulation breakdown"),
    ]
    test_session.add_all(events)
    await test_session.flush()
    test_session.add(EventLine(event_id=events[2].id, line_id=3))
    await test_session.commit()
    return events


async def test_global_stats(test_session, journal):
    stats = await AnalyticsService(test_session).global_stats()
    assert stats.total == 5
    assert stats.active == 2
    assert (stats.by_type.emergency.total, stats.by_type.emergency.active) == (4, 2)
    assert (stats.by_type.planned.total, stats.by_type.planned.active) == (1, 0)


async def test_timeline_starts_in_2025(test_session, journal):
    timeline = await AnalyticsService(test_session).timeline()
    assert [(p.date, p.emergency, p.planned) for p in timeline] == [
        ("2025-01", 2, 0),
        ("2025-02", 1, 1),
    ]


async def test_by_category(test_session, journal):
    rows = await AnalyticsService(test_session).by_category()
    counts = {(row.category, row.subcategory): row.value for row in rows}
    assert counts[("Cable failures", "Insulation breakdown")] == 3
    assert counts[("TP failures", "Fuse blown")] == 1


async def test_by_asset(test_session, journal):
    rows = await AnalyticsService(test_session).by_asset()
    assert [row.count for row in rows] == [2, 2, 1]
    assert sorted((row.name, row.count, row.type) for row in rows) == [
        ("PS North", 2, "PS"),
        ("PS South", 2, "PS"),
        ("TP-205", 1, "TP"),
    ]


async def test_top_hazardous(test_session, journal):
    rows = await AnalyticsService(test_session).top_hazardous()
    assert [(r.substation, r.cell, r.count, r.type) for r in rows] == [
        ("PS North", "Cell 1", 2, "PS"),
        ("PS South", "Cell 5", 1, "PS"),
        ("TP-205", "Feeder 6", 1, "TP"),
    ]


async def test_analytics_endpoint(client, journal, auth_headers):
    response = await client.get("/api/v1/analytics", headers=auth_headers(Role.READER))
    assert response.status_code == 200
    body = response.json()
    assert set(body) == {"byCategory", "bySubstation", "stats", "timeline", "topHazardous"}
    assert body["stats"]["byType"]["emergency"] == {"total": 4, "active": 2}
    assert body["timeline"][0] == {"date": "2025-01", "emergency": 2, "planned": 0}


async def test_analytics_on_empty_journal(client, network, auth_headers):
    response = await client.get("/api/v1/analytics", headers=auth_headers(Role.READER))
    assert response.status_code == 200
    body = response.json()
    assert body["stats"]["total"] == 0
    assert body["timeline"] == []
    assert body["topHazardous"] == []


async def test_analytics_database_error(client, network, auth_headers, monkeypatch):
    async def locked(self):
        raise SQLAlchemyError("database is locked")

    monkeypatch.setattr(AnalyticsService, "by_category", locked)
    response = await client.get("/api/v1/analytics", headers=auth_headers(Role.READER))
    assert response.status_code == 500
    body = response.json()
    assert body["error"] == "database is locked"
    assert body["type"] == "DatabaseError"
    assert body["requestId"] == response.headers["X-Request-ID"]
