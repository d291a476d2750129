"""Tests for reference data and network asset endpoints."""

import pytest

from outage_journal.core.constants import Role
from outage_journal.models import OutageReason
from outage_journal.services.reference_data import group_reasons

API = "/api/v1"


def test_group_reasons_keeps_first_seen_order():
    pairs = [
        ("Cable failures", "Insulation breakdown"),
        ("TP failures", "Fuse blown"),
        ("Cable failures", "Mechanical damage"),
        ("Cable failures", "Insulation breakdown"),
    ]
    assert group_reasons(pairs) == {
        "Cable failures": ["Insulation breakdown", "Mechanical damage"],
        "TP failures": ["Fuse blown"],
    }


async def test_reference_data_payload(client, test_session, network, auth_headers):
    test_session.add_all(
        [
            OutageReason(category="Overhead line failures", subcategory="Falling trees"),
            OutageReason(category="Cable failures", subcategory="Insulation breakdown"),
            OutageReason(category="Overhead line failures", subcategory="Wire break"),
        ]
    )
    await test_session.commit()

    response = await client.get(f"{API}/reference-data", headers=auth_headers(Role.READER))
    assert response.status_code == 200
    body = response.json()
    assert [s["name"] for s in body["substations"]] == ["PS North", "PS South"]
    assert [c["name"] for c in body["substations"][0]["cells"]] == ["Cell 1", "Cell 2"]
    assert [line["name"] for line in body["lines"]] == ["Feeder 101", "Feeder 102", "Feeder 6"]
    assert body["tps"][0]["feederId"] == 1
    assert list(body["reasons"]) == ["Overhead line failures", "Cable failures"]
    assert body["reasons"]["Overhead line failures"] == ["Falling trees", "Wire break"]


async def test_reference_data_requires_token(client):
    response = await client.get(f"{API}/reference-data")
    assert response.status_code == 401


async def test_senior_creates_substation(client, network, auth_headers):
    response = await client.post(
        f"{API}/substations",
        json={"name": "PS East", "voltageClass": "35 kV", "district": "Eastern"},
        headers=auth_headers(Role.SENIOR),
    )
    assert response.status_code == 201
    body = response.json()
    assert body["name"] == "PS East"
    assert body["cells"] == []


async def test_editor_cannot_write_reference_data(client, network, auth_headers):
    response = await client.post(
        f"{API}/substations", json={"name": "PS East"}, headers=auth_headers(Role.EDITOR)
    )
    assert response.status_code == 403


async def test_update_substation(client, network, auth_headers):
    response = await client.put(
        f"{API}/substations/1", json={"district": "Central"}, headers=auth_headers(Role.ADMIN)
    )
    assert response.status_code == 200
    assert response.json()["district"] == "Central"
    assert response.json()["name"] == "PS North"


async def test_get_missing_substation(client, network, auth_headers):
    response = await client.get(f"{API}/substations/99", headers=auth_headers(Role.READER))
    assert response.status_code == 404


async def test_cells_filtered_by_substation(client, network, auth_headers):
    response = await client.get(f"{API}/cells?substationId=2", headers=auth_headers(Role.READER))
    assert response.status_code == 200
    assert [cell["name"] for cell in response.json()] == ["Cell 5"]


async def test_create_cell_under_missing_substation(client, network, auth_headers):
    response = await client.post(
        f"{API}/cells", json={"name": "Cell 9", "substationId": 99}, headers=auth_headers(Role.SENIOR)
    )
    assert response.status_code == 404


async def test_cell_update_cannot_move_cell(client, network, auth_headers):
    response = await client.put(
        f"{API}/cells/1",
        json={"name": "Cell 1A", "substationId": 2},
        headers=auth_headers(Role.SENIOR),
    )
    assert response.status_code == 200
    assert response.json()["name"] == "Cell 1A"
    assert response.json()["substationId"] == 1


async def test_line_with_two_sources_is_rejected(client, network, auth_headers):
    response = await client.post(
        f"{API}/lines",
        json={"name": "Feeder 7", "sourceCellId": 1, "sourceTpId": 1},
        headers=auth_headers(Role.SENIOR),
    )
    assert response.status_code == 400


async def test_line_update_with_two_sources_is_rejected(client, network, auth_headers):
    response = await client.put(
        f"{API}/lines/1",
        json={"sourceCellId": 2, "sourceTpId": 1},
        headers=auth_headers(Role.SENIOR),
    )
    assert response.status_code == 400


async def test_line_normal_source_defaults_to_current(client, network, auth_headers):
    response = await client.post(
        f"{API}/lines",
        json={"name": "Feeder 7", "lineType": "cable", "sourceTpId": 2},
        headers=auth_headers(Role.SENIOR),
    )
    assert response.status_code == 201
    body = response.json()
    assert body["normalSourceTpId"] == 2
    assert body["normalSourceCellId"] is None


async def test_line_source_switch_clears_other_kind(client, network, auth_headers):
    response = await client.put(
        f"{API}/lines/1", json={"sourceTpId": 2}, headers=auth_headers(Role.SENIOR)
    )
    assert response.status_code == 200
    assert response.json()["sourceTpId"] == 2
    assert response.json()["sourceCellId"] is None


async def test_tp_normal_feeder_defaults_to_feeder(client, network, auth_headers):
    response = await client.post(
        f"{API}/tps",
        json={"name": "TP-300", "capacity": "250 kVA", "feederId": 2},
        headers=auth_headers(Role.SENIOR),
    )
    assert response.status_code == 201
    assert response.json()["normalFeederId"] == 2


async def test_delete_line_clears_tp_feeder(client, network, auth_headers):
    headers = auth_headers(Role.SENIOR)
    response = await client.delete(f"{API}/lines/1", headers=headers)
    assert response.status_code == 200
    assert response.json() == {"success": True}

    response = await client.get(f"{API}/tps/1", headers=headers)
    assert response.json()["feederId"] is None


async def test_delete_substation_endpoint(client, network, auth_headers):
    headers = auth_headers(Role.ADMIN)
    response = await client.delete(f"{API}/substations/2", headers=headers)
    assert response.status_code == 200

    response = await client.get(f"{API}/cells", headers=headers)
    assert [cell["id"] for cell in response.json()] == [1, 2]


@pytest.mark.parametrize("kind", ["substations", "cells", "lines", "tps"])
async def test_delete_missing_asset(client, network, auth_headers, kind):
    response = await client.delete(f"{API}/{kind}/99", headers=auth_headers(Role.SENIOR))
    assert response.status_code == 404


@pytest.mark.parametrize("kind", ["substations", "cells", "lines", "tps"])
async def test_update_cannot_clear_name(client, network, auth_headers, kind):
    response = await client.put(
        f"{API}/{kind}/1", json={"name": None}, headers=auth_headers(Role.SENIOR)
    )
    assert response.status_code == 400
    assert response.json()["type"] == "ValidationError"


@pytest.mark.parametrize(
    "payload",
    [
        {"name": "Feeder 7", "sourceCellId": 999},
        {"name": "Feeder 7", "sourceTpId": 999},
        {"name": "Feeder 7", "sourceCellId": 1, "normalSourceTpId": 999},
    ],
)
async def test_line_with_unknown_source_is_rejected(client, network, auth_headers, payload):
    response = await client.post(f"{API}/lines", json=payload, headers=auth_headers(Role.SENIOR))
    assert response.status_code == 400
    assert "999" in response.json()["error"]

    response = await client.get(f"{API}/lines", headers=auth_headers(Role.SENIOR))
    assert [line["name"] for line in response.json()] == ["Feeder 101", "Feeder 102", "Feeder 6"]


async def test_line_update_with_unknown_source_is_rejected(client, network, auth_headers):
    headers = auth_headers(Role.SENIOR)
    response = await client.put(f"{API}/lines/1", json={"sourceTpId": 999}, headers=headers)
    assert response.status_code == 400

    response = await client.get(f"{API}/lines/1", headers=headers)
    assert response.json()["sourceCellId"] == 1
    assert response.json()["sourceTpId"] is None


@pytest.mark.parametrize("field", ["feederId", "normalFeederId"])
async def test_tp_with_unknown_feeder_is_rejected(client, network, auth_headers, field):
    response = await client.post(
        f"{API}/tps", json={"name": "TP-300", field: 999}, headers=auth_headers(Role.SENIOR)
    )
    assert response.status_code == 400
    assert response.json()["error"] == "Unknown feeder id: 999"


async def test_tp_update_with_unknown_feeder_is_rejected(client, network, auth_headers):
    headers = auth_headers(Role.SENIOR)
    response = await client.put(f"{API}/tps/1", json={"normalFeederId": 999}, headers=headers)
    assert response.status_code == 400

    response = await client.get(f"{API}/tps/1", headers=headers)
    assert response.json()["normalFeederId"] is None
