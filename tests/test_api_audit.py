from app.models import AttendanceEvent, AuditLog

AUDIT_URL = "/api/v1/audit/"


def scan(client):
    return client.post("/api/v1/monitoring/scan", json={
        "employeeId": "EMP-001",
        "latitude": 14.60,
        "longitude": 120.98,
    })


def test_list_audit_logs_newest_first(client, make_employee):
    make_employee()
    scan(client)
    client.post("/api/v1/monitoring/scan", json={"employeeId": "EMP-001"})

    response = client.get(AUDIT_URL)

    assert response.status_code == 200
    body = response.json()
    assert body["total"] == 2
    assert [log["al_action"] for log in body["data"]] == ["SCAN_ALERT", "SCAN"]


def test_filter_audit_logs_by_action(client, make_employee):
    make_employee()
    scan(client)
    client.post("/api/v1/monitoring/scan", json={"employeeId": "EMP-001"})

    response = client.get(AUDIT_URL, params={"action": "SCAN"})

    assert response.json()["total"] == 1


def test_get_audit_log(client, db, make_employee):
    make_employee()
    scan(client)
    entry = db.query(AuditLog).one()

    response = client.get(f"{AUDIT_URL}{entry.al_id}")

    assert response.status_code == 200
    assert response.json()["data"]["al_changes"]["name"] == "Juan Dela Cruz"
    assert client.get(f"{AUDIT_URL}999").status_code == 404


def test_audit_requires_admin(client, current_user):
    current_user["role_level"] = 10
    assert client.get(AUDIT_URL).status_code == 403


def test_clear_keeps_attendance_events(client, db, make_employee):
    make_employee()
    scan(client)
    scan(client)

    response = client.delete(AUDIT_URL)

    assert response.status_code == 200
    assert response.json()["data"]["deleted_count"] == 2
    assert db.query(AuditLog).count() == 0
    assert db.query(AttendanceEvent).count() == 2


def test_clear_older_than_keeps_recent_entries(client, db, make_employee):
    make_employee()
    scan(client)

    response = client.delete(AUDIT_URL, params={"older_than_days": 30})

    assert response.json()["data"]["deleted_count"] == 0
    assert db.query(AuditLog).count() == 1


def test_clear_requires_super_admin(client, current_user):
    current_user["role_level"] = 50
    assert client.delete(AUDIT_URL).status_code == 403
