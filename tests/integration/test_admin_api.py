import uuid
from datetime import date

import pytest

from core.db import schemas
from core.db.repositories import issues as issue_repo
from core.db.repositories import pickups as pickup_repo


@pytest.mark.parametrize("path", ["/api/admin/users", "/api/admin/stats", "/api/admin/pickups", "/api/admin/settings"])
def test_admin_routes_require_admin_role(client, citizen, staff, headers_for, path):
    assert client.get(path).status_code == 401
    assert client.get(path, headers=headers_for(citizen)).status_code == 403
    r = client.get(path, headers=headers_for(staff))
    assert r.status_code == 403
    assert r.json()["message"] == "Admin access required"


def test_list_users_and_change_role(client, admin, citizen, headers_for):
    h = headers_for(admin)
    r = client.get("/api/admin/users", headers=h)
    assert r.status_code == 200
    assert {u["email"] for u in r.json()} == {admin.email, citizen.email}

    r = client.patch(f"/api/admin/users/{citizen.id}/role", json={"role": "staff"}, headers=h)
    assert r.status_code == 200
    assert r.json()["role"] == "staff"


def test_change_role_validation(client, admin, headers_for):
    h = headers_for(admin)
    r = client.patch(f"/api/admin/users/{admin.id}/role", json={"role": "citizen"}, headers=h)
    assert r.status_code == 409

    r = client.patch(f"/api/admin/users/{uuid.uuid4()}/role", json={"role": "staff"}, headers=h)
    assert r.status_code == 404

    r = client.patch(f"/api/admin/users/{admin.id}/role", json={"role": "overlord"}, headers=h)
    assert r.status_code == 422


def test_stats_counts(client, admin, citizen, headers_for, db_session):
    issue_repo.create_issue(
        db_session, reporter_id=citizen.id, payload=schemas.IssueCreate(title="Pothole", description="Deep")
    )
    pickup_repo.create_pickup(
        db_session,
        requester_id=citizen.id,
        payload=schemas.PickupCreate(waste_type="bulky", address="1 Main St", preferred_date=date(2026, 11, 2)),
    )
    r = client.get("/api/admin/stats", headers=headers_for(admin))
    assert r.status_code == 200
    data = r.json()
    assert data["users"] == {"total": 2, "by_role": {"admin": 1, "citizen": 1}}
    assert data["issues"] == {"total": 1, "by_status": {"open": 1}}
    assert data["pickups"] == {"total": 1, "by_status": {"pending": 1}}


def test_settings_roundtrip_records_updater(client, admin, headers_for):
    h = headers_for(admin)
    r = client.get("/api/admin/settings", headers=h)
    assert r.status_code == 200
    assert r.json()["maintenance_mode"] is False

    r = client.put("/api/admin/settings", json={"maintenance_mode": True, "maintenance_message": "Upgrading"}, headers=h)
    assert r.status_code == 200
    data = r.json()
    assert data["maintenance_mode"] is True
    assert data["maintenance_message"] == "Upgrading"
    assert data["updated_by"] == str(admin.id)


def test_admin_pickup_scheduling(client, admin, citizen, headers_for, db_session):
    pickup = pickup_repo.create_pickup(
        db_session,
        requester_id=citizen.id,
        payload=schemas.PickupCreate(waste_type="organic", address="2 Elm St", preferred_date=date(2026, 11, 3)),
    )
    h = headers_for(admin)

    r = client.patch(f"/api/admin/pickups/{pickup.id}", json={"status": "scheduled"}, headers=h)
    assert r.status_code == 422

    r = client.patch(
        f"/api/admin/pickups/{pickup.id}",
        json={"status": "scheduled", "scheduled_date": "2026-11-05"},
        headers=h,
    )
    assert r.status_code == 200
    assert r.json()["status"] == "scheduled"
    assert r.json()["scheduled_date"] == "2026-11-05"

    r = client.get("/api/admin/pickups", params={"status": "scheduled"}, headers=h)
    assert [p["id"] for p in r.json()] == [str(pickup.id)]
    r = client.get("/api/admin/pickups", params={"status": "pending"}, headers=h)
    assert r.json() == []

    r = client.patch(f"/api/admin/pickups/{uuid.uuid4()}", json={"status": "completed"}, headers=h)
    assert r.status_code == 404
