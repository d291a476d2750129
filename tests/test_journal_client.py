"""Tests for the journal HTTP client, run against the app in-process."""

from datetime import datetime, timezone

import pytest
from httpx import ASGITransport

from outage_journal.core.constants import Role
from outage_journal.schemas.event_filter import FilterState
from outage_journal.schemas.outage_event import OutageEventCreate, OutageEventPatch
from outage_journal.schemas.substation import SubstationCreate
from outage_journal.schemas.topology import TopologySwitchRequest
from outage_journal.services.journal_client import JournalClient, JournalClientError, RequestContext

NOW = datetime(2025, 6, 10, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def journal_client(app):
    return JournalClient(base_url="http://test", transport=ASGITransport(app=app))


def new_event(**overrides) -> OutageEventCreate:
    fields = {
        "type": "Emergency",
        "reason_category": "Cable failures",
        "reason_subcategory": "Insulation breakdown",
        "time_start": datetime(2025, 6, 1, 10, 0, tzinfo=timezone.utc),
        "substation_id": 1,
        "line_ids": [2],
    }
    fields.update(overrides)
    return OutageEventCreate(**fields)


async def test_login_returns_context(journal_client, users, user_password):
    ctx = await journal_client.login("senior", user_password)
    assert ctx.token
    assert ctx.user.role == Role.SENIOR
    assert ctx.headers() == {"Authorization": f"Bearer {ctx.token}"}

    me = await journal_client.me(ctx)
    assert me.username == "senior"


async def test_bad_login_raises(journal_client, users):
    with pytest.raises(JournalClientError) as exc_info:
        await journal_client.login("senior", "wrong")
    assert exc_info.value.status_code == 401
    assert exc_info.value.message == "Invalid credentials"


async def test_calls_without_credentials_fail(journal_client, users):
    with pytest.raises(JournalClientError) as exc_info:
        await journal_client.events(RequestContext())
    assert exc_info.value.status_code == 401


async def test_contexts_are_independent(journal_client, network, users, user_password):
    """A reader and an editor share one client without leaking credentials."""
    reader = await journal_client.login("reader", user_password)
    editor = await journal_client.login("editor", user_password)

    with pytest.raises(JournalClientError) as exc_info:
        await journal_client.create_event(reader, new_event())
    assert exc_info.value.status_code == 403

    created = await journal_client.create_event(editor, new_event())
    assert created.substation.name == "PS North"
    assert created.line_ids == [2]
    assert created.time_start == datetime(2025, 6, 1, 10, 0, tzinfo=timezone.utc)

    events = await journal_client.events(reader)
    assert [event.id for event in events] == [created.id]


async def test_event_lifecycle(journal_client, network, users, user_password):
    ctx = await journal_client.login("editor", user_password)
    created = await journal_client.create_event(ctx, new_event())

    closed = await journal_client.patch_event(
        ctx,
        created.id,
        OutageEventPatch(is_completed=True, time_end=datetime(2025, 6, 1, 11, 30, tzinfo=timezone.utc)),
    )
    assert closed.is_completed is True
    assert closed.time_end == datetime(2025, 6, 1, 11, 30, tzinfo=timezone.utc)

    report = await journal_client.report(ctx, "all")
    assert report.efficiency.mttr == 90

    await journal_client.delete_event(ctx, created.id)
    assert await journal_client.events(ctx) == []


async def test_local_and_remote_filtering_agree(journal_client, network, users, user_password):
    ctx = await journal_client.login("editor", user_password)
    await journal_client.create_event(ctx, new_event())
    await journal_client.create_event(ctx, new_event(type="Planned", substation_id=2, line_ids=[]))

    filters = FilterState(substation_id=2)
    local = await journal_client.fetch_filtered(ctx, filters, now=NOW)
    remote = await journal_client.filter_events(ctx, filters)

    assert [event.id for event in local.events] == [event.id for event in remote.events]
    assert local.total == remote.total == 2
    assert local.active_filter_count == remote.active_filter_count == 1


async def test_reference_writes(journal_client, network, users, user_password):
    ctx = await journal_client.login("admin", user_password)
    created = await journal_client.create_reference(ctx, "substations", SubstationCreate(name="PS East"))
    assert created["name"] == "PS East"

    data = await journal_client.reference_data(ctx)
    assert [s.name for s in data.substations][-1] == "PS East"

    await journal_client.delete_reference(ctx, "substations", created["id"])
    data = await journal_client.reference_data(ctx)
    assert "PS East" not in [s.name for s in data.substations]

    with pytest.raises(ValueError):
        await journal_client.delete_reference(ctx, "reasons", 1)


async def test_switch_topology_and_analytics(journal_client, network, users, user_password):
    ctx = await journal_client.login("senior", user_password)
    result = await journal_client.switch_topology(
        ctx, TopologySwitchRequest(object_id=2, object_type="TP", to_source_id=1)
    )
    assert result.switch.from_source_id == 3
    assert result.switch.to_source_id == 1

    analytics = await journal_client.analytics(ctx)
    assert analytics.stats.total == 1
    assert analytics.stats.active == 0
