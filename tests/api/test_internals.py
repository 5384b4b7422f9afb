from datetime import datetime, timedelta

from guardian.config import config


def test_obligations_due_lists_active_within_horizon(api_client, auth_headers, create_obligation):
    now = datetime.utcnow()
    soon = create_obligation(auth_headers, now + timedelta(days=7), title="Due soon")
    create_obligation(auth_headers, now + timedelta(days=40), title="Far away")

    response = api_client.get("/internals/obligations-due", params={"horizon_days": 31})

    assert response.status_code == 200
    data = response.json()
    assert [o["id"] for o in data] == [soon["id"]]
    assert data[0]["status"] == "ACTIVE"
    assert data[0]["owner_email"].endswith("@example.com")
    assert data[0]["owner_name"] == "Auth User"


def test_obligations_due_excludes_handled(api_client, auth_headers, create_obligation):
    created = create_obligation(auth_headers, datetime.utcnow() + timedelta(days=1))
    api_client.post(f"/obligations/{created['id']}/handled", headers=auth_headers)

    assert api_client.get("/internals/obligations-due").json() == []


def test_notification_record_roundtrip(api_client, auth_headers, create_obligation):
    created = create_obligation(auth_headers, datetime.utcnow() + timedelta(days=7))

    exists = api_client.get(f"/internals/notifications/{created['id']}/7")
    assert exists.json() == {"exists": False}

    response = api_client.post("/internals/notifications", json={
        "obligation_id": created["id"],
        "user_id": created["user_id"],
        "type": "EMAIL",
        "days_before_deadline": 7,
        "success": False,
        "error_message": "mailbox full",
    })
    assert response.status_code == 201

    assert api_client.get(f"/internals/notifications/{created['id']}/7").json() == {"exists": True}
    assert api_client.get(f"/internals/notifications/{created['id']}/1").json() == {"exists": False}


def test_append_for_unknown_obligation(api_client):
    response = api_client.post("/internals/notifications", json={
        "obligation_id": 9999,
        "user_id": 1,
        "days_before_deadline": 7,
        "success": True,
    })
    assert response.status_code == 404


def test_touch_sets_last_notification(api_client, auth_headers, create_obligation):
    created = create_obligation(auth_headers, datetime.utcnow() + timedelta(days=7))

    response = api_client.post(
        f"/internals/obligations/{created['id']}/touch",
        json={"notified_at": "2025-03-01T12:00:00+00:00"},
    )
    assert response.status_code == 200

    data = api_client.get(f"/obligations/{created['id']}", headers=auth_headers).json()
    assert data["last_notification_at"].startswith("2025-03-01T12:00:00")


def test_internals_require_secret_when_configured(api_client, monkeypatch):
    monkeypatch.setattr(config, "CRON_SECRET", "worker-secret")

    assert api_client.get("/internals/obligations-due").status_code == 401
    ok = api_client.get("/internals/obligations-due", headers={"Authorization": "Bearer worker-secret"})
    assert ok.status_code == 200
