from __future__ import annotations

import sqlite3

OWNER = "owner@b.com"

DESCRIPTION = {
    "projectTitle": "Campus map",
    "notes": "first pass",
    "colleagueName": "Sam",
    "colleaguePhone": "555-0100",
    "colleagueEmail": "sam@b.com",
    "colleagueAddress1": "1 Main St",
    "colleagueAddress2": "Suite 2",
    "colleagueAddress3": "Springfield",
    "yourName": "Alex",
    "yourPhone": "555-0199",
    "yourEmail": OWNER,
    "yourAddress1": "2 Elm St",
    "yourAddress2": "",
    "yourAddress3": "Shelbyville",
    "objectives": "Wayfinding",
    "timeline": "Spring",
    "primaryAudience": "Students",
    "secondaryAudience": "Visitors",
    "callAction": "Visit",
    "competition": "None",
    "graphics": "Icons",
    "photography": "Drone",
    "multimedia": "Video",
    "otherInfo": "n/a",
    "clientName": "Facilities",
    "clientComments": "Looks good",
    "approvalDate": "2026-02-02",
    "approvalSignature": "F.M.",
    "idea": "3D",
    "careerGoals": "Portfolio",
    "futureWork": "Mobile app",
    "deadlines": "June",
}


def _create_project(client, **overrides):
    payload = {"name": "Map", "owner_email": OWNER}
    payload.update(overrides)
    resp = client.post("/projects", json=payload)
    assert resp.status_code == 200
    return resp.json()


def test_create_project_defaults_colleagues_to_empty_list(client):
    project = _create_project(client)
    assert project == {"id": project["id"], "name": "Map", "owner_email": OWNER, "colleagues": []}

    [listed] = client.get(f"/projects/{OWNER}").json()
    assert listed["id"] == project["id"]
    assert listed["colleagues"] == []


def test_create_project_accepts_list_or_json_text(client):
    as_list = _create_project(client, colleagues=["x@b.com", "y@b.com"])
    as_text = _create_project(client, name="Other", colleagues='["z@b.com"]')
    assert as_list["colleagues"] == ["x@b.com", "y@b.com"]
    assert as_text["colleagues"] == ["z@b.com"]

    listed = {row["name"]: row["colleagues"] for row in client.get(f"/projects/{OWNER}").json()}
    assert listed == {"Map": ["x@b.com", "y@b.com"], "Other": ["z@b.com"]}


def test_create_project_rejects_non_list_colleagues(client):
    resp = client.post("/projects", json={"name": "Map", "owner_email": OWNER, "colleagues": "not json"})
    assert resp.status_code == 400
    assert resp.json() == {"error": "colleagues must be a JSON list."}

    resp = client.post("/projects", json={"name": "Map", "owner_email": OWNER, "colleagues": '{"a": 1}'})
    assert resp.status_code == 400


def test_create_project_requires_name_and_owner(client):
    for payload in ({"name": "Map"}, {"owner_email": OWNER}, {"name": " ", "owner_email": OWNER}):
        resp = client.post("/projects", json=payload)
        assert resp.status_code == 400
        assert resp.json() == {"error": "Project name and owner email are required."}


def test_update_project_keeps_colleagues_valid_json(client, sqlite_env):
    project = _create_project(client, colleagues=["x@b.com"])

    resp = client.put(f"/projects/{project['id']}", json={"name": "Renamed"})
    assert resp.json() == {"updated": 1}

    with sqlite3.connect(sqlite_env) as conn:
        stored = conn.execute("SELECT name, colleagues FROM projects WHERE id = ?", (project["id"],)).fetchone()
    assert stored == ("Renamed", "[]")


def test_update_and_delete_unknown_project(client):
    assert client.put("/projects/424242", json={"name": "x"}).json() == {"updated": 0}
    assert client.delete("/projects/424242").json() == {"deleted": 0}


def test_delete_project(client):
    project = _create_project(client)
    assert client.delete(f"/projects/{project['id']}").json() == {"deleted": 1}
    assert client.get(f"/projects/{OWNER}").json() == []


def test_description_round_trips_camel_case(client):
    project = _create_project(client)

    resp = client.put(f"/projects/{project['id']}/description", json=DESCRIPTION)
    assert resp.status_code == 200
    assert resp.json() == {"updated": 1}

    fetched = client.get(f"/projects/{project['id']}/description")
    assert fetched.status_code == 200
    assert fetched.json() == DESCRIPTION


def test_description_is_stored_snake_case(client, sqlite_env):
    project = _create_project(client)
    client.put(f"/projects/{project['id']}/description", json=DESCRIPTION)

    with sqlite3.connect(sqlite_env) as conn:
        row = conn.execute(
            "SELECT project_title, colleague_address1, call_action, career_goals FROM projects WHERE id = ?",
            (project["id"],),
        ).fetchone()
    assert row == ("Campus map", "1 Main St", "Visit", "Portfolio")


def test_description_put_is_full_replace(client):
    project = _create_project(client)
    client.put(f"/projects/{project['id']}/description", json=DESCRIPTION)
    client.put(f"/projects/{project['id']}/description", json={"projectTitle": "Only title"})

    fetched = client.get(f"/projects/{project['id']}/description").json()
    assert fetched["projectTitle"] == "Only title"
    assert fetched["objectives"] is None
    assert set(fetched) == set(DESCRIPTION)


def test_description_of_unknown_project_is_empty(client):
    assert client.get("/projects/424242/description").json() == {}
    assert client.put("/projects/424242/description", json=DESCRIPTION).json() == {"updated": 0}


def test_project_list_nests_description(client):
    project = _create_project(client)
    client.put(f"/projects/{project['id']}/description", json=DESCRIPTION)

    [listed] = client.get(f"/projects/{OWNER}").json()
    assert listed["description"] == DESCRIPTION
