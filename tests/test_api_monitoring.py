from app.models import AuditLog
from tests.conftest import manila_time

SCAN_URL = "/api/v1/monitoring/scan"


def test_scan_out_of_range_is_recorded(client, db, make_employee):
    make_employee()

    response = client.post(SCAN_URL, json={
        "employeeId": "EMP-001",
        "latitude": 14.70,
        "longitude": 120.98,
        "status": "Active",
    })

    assert response.status_code == 201
    body = response.json()
    assert body["message"] == "Scan recorded with alert: Location Alert"
    assert body["data"]["alert"] == "Location Alert"
    assert body["data"]["distance"] == 11119

    audit = db.query(AuditLog).one()
    assert audit.al_action == "SCAN_ALERT"
    assert audit.al_user_id == 1


def test_scan_without_gps_uses_base_location(client, make_employee):
    make_employee()

    response = client.post(SCAN_URL, json={"employeeId": "EMP-001"})

    assert response.status_code == 201
    data = response.json()["data"]
    assert data["alert"] == "No GPS"
    assert data["attendance"]["ae_lat"] == 14.60


def test_scan_requires_minimum_role(client, current_user, make_employee):
    make_employee()
    current_user["role_level"] = 0

    response = client.post(SCAN_URL, json={"employeeId": "EMP-001"})

    assert response.status_code == 403


def test_daily_map_and_on_duty(client, clock, make_employee):
    make_employee()
    make_employee(em_employee_id="EMP-002", em_full_name="Ana Reyes")
    clock.set(manila_time(9, 0))
    client.post(SCAN_URL, json={"employeeId": "EMP-001", "latitude": 14.60, "longitude": 120.98})
    clock.set(manila_time(9, 5))
    client.post(SCAN_URL, json={"employeeId": "EMP-001", "latitude": 14.60, "longitude": 120.98, "status": "Inactive"})
    clock.set(manila_time(9, 10))

    response = client.get("/api/v1/monitoring/daily-map", params={"include_pending": "true"})

    assert response.status_code == 200
    data = response.json()["data"]
    assert len(data["locations"]) == 1
    assert data["locations"][0]["map_status"] == "inactive"
    assert [p["employee"]["em_employee_id"] for p in data["pending"]] == ["EMP-002"]

    on_duty = client.get("/api/v1/monitoring/on-duty").json()["data"]
    assert len(on_duty) == 1
    assert on_duty[0]["ae_status"] == "Inactive"


def test_history_limit_and_source(client, make_employee):
    make_employee()
    for _ in range(3):
        client.post(SCAN_URL, json={"employeeId": "EMP-001", "latitude": 14.60, "longitude": 120.98})
    client.post("/api/v1/attendance/clock-in", json={"employeeId": "EMP-001", "latitude": 14.60, "longitude": 120.98})

    limited = client.get("/api/v1/monitoring/history", params={"limit": 2}).json()["data"]
    monitoring_only = client.get(
        "/api/v1/monitoring/history", params={"source": "kiosk_monitoring"}
    ).json()["data"]

    assert len(limited) == 2
    assert len(monitoring_only) == 3
    assert all(e["ae_scan_source"] == "kiosk_monitoring" for e in monitoring_only)


def test_unknown_source_is_rejected(client):
    response = client.get("/api/v1/monitoring/history", params={"source": "elsewhere"})
    assert response.status_code == 422
