from __future__ import annotations

import logging

from src.attendance_auth.attendance_auth.core.exceptions import ProjectionSyncError


def _create_employee(client, catalogs, *, code="EMP001", phone="+15551230001"):
    person = client.post(
        "/api/persons",
        json={"full_name": "Jane Doe", "birth_date": "1990-01-01", "phone_number": phone},
    )
    assert person.status_code == 201
    employee = client.post(
        "/api/employees",
        json={
            "person_id": person.get_json()["person"]["id"],
            "employee_id": code,
            "position_id": catalogs.trimmer,
            "status_id": catalogs.active,
            "hire_date": "2024-03-01",
        },
    )
    assert employee.status_code == 201
    return employee.get_json()["employee"]


def test_login_flow_with_first_time_enrollment(client, catalogs):
    _create_employee(client, catalogs)

    identify = client.post("/api/auth/identify", json={"employee_id": "EMP001"})
    assert identify.status_code == 200
    challenge = identify.get_json()["challenge"]
    assert challenge["full_name"] == "Jane Doe"
    assert challenge["enrollment_required"] is True

    bad = client.post("/api/auth/verify-birth-date", json={"employee_id": "EMP001", "birth_date": "1991-01-01"})
    assert bad.status_code == 401

    not_enrolled = client.post(
        "/api/auth/verify-security-image", json={"employee_id": "EMP001", "security_image_identifier": "img_42"}
    )
    assert not_enrolled.status_code == 403
    assert not_enrolled.get_json()["enrollment_required"] is True

    enroll = client.post(
        "/api/auth/enroll",
        json={"employee_id": "EMP001", "birth_date": "1990-01-01", "security_image_identifier": "img_42"},
    )
    assert enroll.status_code == 200
    assert enroll.get_json()["challenge"]["enrollment_required"] is False

    again = client.post(
        "/api/auth/enroll",
        json={"employee_id": "EMP001", "birth_date": "1990-01-01", "security_image_identifier": "img_7"},
    )
    assert again.status_code == 409

    ok = client.post(
        "/api/auth/verify-security-image", json={"employee_id": "EMP001", "security_image_identifier": "img_42"}
    )
    assert ok.status_code == 200


def test_unknown_employee_code_is_401(client):
    resp = client.post("/api/auth/identify", json={"employee_id": "NOPE"})
    assert resp.status_code == 401
    assert resp.get_json()["success"] is False


def test_duplicate_check_in_reports_constraint(client, catalogs):
    _create_employee(client, catalogs)

    first = client.post("/api/attendance/checkin", json={"employee_id": "EMP001", "status_id": catalogs.present})
    assert first.status_code == 201

    second = client.post("/api/attendance/checkin", json={"employee_id": "EMP001", "status_id": catalogs.present})
    assert second.status_code == 409
    body = second.get_json()
    assert body["constraint"] == "uq_attendance_employee_date"
    assert body["kind"] == "DuplicateAttendanceError"

    out = client.post("/api/attendance/checkout", json={"employee_id": "EMP001"})
    assert out.status_code == 200
    assert out.get_json()["record"]["check_out"] is not None

    history = client.get("/api/attendance/EMP001?limit=5")
    assert len(history.get_json()["items"]) == 1


def test_patch_employee_resyncs_and_delete_removes_login(client, catalogs):
    _create_employee(client, catalogs)

    resp = client.patch("/api/employees/EMP001", json={"status_id": catalogs.inactive})
    assert resp.status_code == 200
    assert client.post("/api/auth/identify", json={"employee_id": "EMP001"}).status_code == 401

    immutable = client.patch("/api/employees/EMP001", json={"employee_id": "EMP002"})
    assert immutable.status_code == 400

    assert client.delete("/api/employees/EMP001").status_code == 200
    assert client.get("/api/employees/EMP001").status_code == 404


def test_catalog_endpoints(client):
    listing = client.get("/api/catalogs/positions")
    assert [i["name"] for i in listing.get_json()["items"]] == ["Trimmer", "Field Manager"]

    assert client.get("/api/catalogs/unknown").status_code == 404
    assert client.post("/api/catalogs/positions", json={"name": "Trimmer"}).status_code == 409
    assert client.post("/api/catalogs/positions", json={"name": "Packer"}).status_code == 201


def test_rebuild_endpoint_after_rename(client, container, catalogs):
    _create_employee(client, catalogs)
    client.patch(f"/api/catalogs/positions/{catalogs.trimmer}", json={"name": "Harvester"})

    resp = client.post("/api/admin/auth-users/rebuild")

    assert resp.status_code == 200
    assert resp.get_json()["report"] == {"synced": 1, "pruned": 0, "failed": []}
    assert container.auth_users_repo.get("EMP001").position_name == "Harvester"


def test_admin_token_guards_writes(app, client, catalogs):
    app.config["ADMIN_API_TOKEN"] = "s3cret"

    denied = client.post("/api/catalogs/positions", json={"name": "Packer"})
    assert denied.status_code == 403

    allowed = client.post("/api/catalogs/positions", json={"name": "Packer"}, headers={"X-Admin-Token": "s3cret"})
    assert allowed.status_code == 201


def test_bad_request_bodies(client):
    assert client.post("/api/persons", data="nope", content_type="text/plain").status_code == 400
    assert client.post("/api/persons", json={"full_name": "Sam", "birth_date": "01/02/2000"}).status_code == 400
    assert (
        client.post(
            "/api/persons", json={"full_name": "Sam", "birth_date": "2000-01-02", "phone_number": "12345"}
        ).status_code
        == 400
    )


def test_non_text_fields_are_rejected_as_bad_requests(client, catalogs):
    employee = _create_employee(client, catalogs)

    cases = [
        client.post("/api/persons", json={"full_name": 42, "birth_date": "2000-01-02"}),
        client.post("/api/persons", json={"full_name": "Sam", "birth_date": "2000-01-02", "phone_number": 15551230002}),
        client.patch(f"/api/persons/{employee['person_id']}", json={"full_name": 42}),
        client.patch(f"/api/persons/{employee['person_id']}", json={"avatar_url": ["x"]}),
        client.patch("/api/employees/EMP001", json={"security_image_identifier": 42}),
        client.post(
            "/api/auth/enroll",
            json={"employee_id": "EMP001", "birth_date": "1990-01-01", "security_image_identifier": 42},
        ),
    ]

    assert [resp.status_code for resp in cases] == [400] * len(cases)
    assert all(resp.get_json()["success"] is False for resp in cases)


def test_sync_failure_is_logged_once(client, container, catalogs, caplog, monkeypatch):
    _create_employee(client, catalogs)

    def _corrupt(employee):
        raise ProjectionSyncError(f"{employee.employee_id}: position {employee.position_id} not found")

    monkeypatch.setattr(container.auth_sync, "build", _corrupt)

    with caplog.at_level(logging.ERROR):
        resp = client.patch("/api/employees/EMP001", json={"is_biometric_enabled": True})

    assert resp.status_code == 500
    assert len([r for r in caplog.records if r.levelno >= logging.ERROR]) == 1
    assert client.get("/api/employees/EMP001").get_json()["employee"]["is_biometric_enabled"] is False


def test_rebuild_failure_is_logged_once(client, db, catalogs, caplog):
    _create_employee(client, catalogs)
    del db.tables["positions"][catalogs.trimmer]

    with caplog.at_level(logging.ERROR):
        resp = client.post("/api/admin/auth-users/rebuild")

    assert resp.get_json() == {"success": False, "report": {"synced": 0, "pruned": 0, "failed": ["EMP001"]}}
    assert len([r for r in caplog.records if r.levelno >= logging.ERROR]) == 1
