import uuid

import pytest

ISSUE = {"title": "Broken streetlight", "description": "Out since Monday", "category": "streetlight", "location": "5th & Main"}


@pytest.fixture
def citizen_h(citizen, headers_for):
    return headers_for(citizen)


def _create(client, headers, **overrides):
    body = dict(ISSUE, **overrides)
    r = client.post("/api/issues", json=body, headers=headers)
    assert r.status_code == 201, r.text
    return r.json()


def test_create_and_fetch_issue(client, citizen, citizen_h):
    issue = _create(client, citizen_h)
    assert issue["status"] == "open"
    assert issue["reporter_id"] == str(citizen.id)

    r = client.get(f"/api/issues/{issue['id']}", headers=citizen_h)
    assert r.status_code == 200
    assert r.json()["title"] == ISSUE["title"]


def test_citizens_only_see_their_own_issues(client, make_user, headers_for, citizen_h, staff):
    mine = _create(client, citizen_h)
    other_h = headers_for(make_user("citizen"))
    theirs = _create(client, other_h, title="Overflowing bin")

    r = client.get("/api/issues", headers=citizen_h)
    assert [i["id"] for i in r.json()] == [mine["id"]]

    r = client.get(f"/api/issues/{theirs['id']}", headers=citizen_h)
    assert r.status_code == 404

    r = client.get("/api/issues", headers=headers_for(staff))
    assert {i["id"] for i in r.json()} == {mine["id"], theirs["id"]}


def test_status_filter(client, citizen_h, staff, headers_for):
    issue = _create(client, citizen_h)
    _create(client, citizen_h, title="Another one")
    r = client.patch(f"/api/issues/{issue['id']}", json={"status": "resolved"}, headers=headers_for(staff))
    assert r.status_code == 200

    r = client.get("/api/issues", params={"status": "resolved"}, headers=citizen_h)
    assert [i["id"] for i in r.json()] == [issue["id"]]


def test_reporter_edits_open_issue_but_not_status(client, citizen_h):
    issue = _create(client, citizen_h)
    r = client.patch(f"/api/issues/{issue['id']}", json={"description": "Still broken"}, headers=citizen_h)
    assert r.status_code == 200
    assert r.json()["description"] == "Still broken"

    r = client.patch(f"/api/issues/{issue['id']}", json={"status": "resolved"}, headers=citizen_h)
    assert r.status_code == 403


def test_staff_moves_status_but_cannot_edit_text(client, citizen_h, staff, headers_for):
    issue = _create(client, citizen_h)
    staff_h = headers_for(staff)
    r = client.patch(f"/api/issues/{issue['id']}", json={"status": "in_progress"}, headers=staff_h)
    assert r.status_code == 200
    assert r.json()["status"] == "in_progress"

    r = client.patch(f"/api/issues/{issue['id']}", json={"title": "Rewritten"}, headers=staff_h)
    assert r.status_code == 403

    r = client.patch(f"/api/issues/{issue['id']}", json={"title": "Too late"}, headers=citizen_h)
    assert r.status_code == 409


def test_delete_rules(client, citizen_h, admin, headers_for, staff):
    issue = _create(client, citizen_h)
    r = client.delete(f"/api/issues/{issue['id']}", headers=citizen_h)
    assert r.status_code == 204
    assert client.get(f"/api/issues/{issue['id']}", headers=citizen_h).status_code == 404

    issue = _create(client, citizen_h)
    client.patch(f"/api/issues/{issue['id']}", json={"status": "resolved"}, headers=headers_for(staff))
    assert client.delete(f"/api/issues/{issue['id']}", headers=citizen_h).status_code == 409
    assert client.delete(f"/api/issues/{issue['id']}", headers=headers_for(admin)).status_code == 204


def test_unknown_and_malformed_ids(client, citizen_h):
    assert client.get(f"/api/issues/{uuid.uuid4()}", headers=citizen_h).status_code == 404
    assert client.get("/api/issues/not-a-uuid", headers=citizen_h).status_code == 422


def test_create_validates_body(client, citizen_h):
    r = client.post("/api/issues", json={"title": "x", "description": ""}, headers=citizen_h)
    assert r.status_code == 422
    assert r.json()["stack"] is not None
