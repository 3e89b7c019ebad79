from __future__ import annotations

import pytest


def _vendor(client, **overrides):
    data = {"name": "台積電", "tax_id": "22099131"}
    data.update(overrides)
    return client.post("/api/vendors", json=data).get_json()


def test_endpoints_require_session(anon_client):
    for path in ("/api/vendors", "/api/vouchers", "/api/employees", "/api/payroll", "/api/reports/dashboard"):
        resp = anon_client.get(path)
        assert resp.status_code == 401
        assert resp.get_json()["success"] is False


def test_login_me_logout(anon_client):
    resp = anon_client.post("/api/auth/login", json={"username": "admin", "password": "admin123"})
    assert resp.status_code == 200
    assert resp.get_json()["user"]["role"] == "admin"

    me = anon_client.get("/api/auth/me").get_json()
    assert me["username"] == "admin"

    anon_client.post("/api/auth/logout")
    assert anon_client.get("/api/auth/me").status_code == 401


def test_login_with_wrong_password_is_401(anon_client):
    resp = anon_client.post("/api/auth/login", json={"username": "admin", "password": "nope"})
    assert resp.status_code == 401


def test_non_admin_cannot_create_accounts(anon_client):
    anon_client.post("/api/auth/login", json={"username": "clerk", "password": "clerk123"})
    resp = anon_client.post("/api/auth/users", json={"username": "z", "password": "secret1"})
    assert resp.status_code == 403


def test_vendor_crud_and_absent_lookup(client):
    created = _vendor(client)

    vendor_id = created["vendor_id"]
    assert client.get(f"/api/vendors/{vendor_id}").get_json()["name"] == "台積電"

    patched = client.patch(f"/api/vendors/{vendor_id}", json={"phone": "03-5636688"}).get_json()
    assert patched["phone"] == "03-5636688"

    missing = client.get("/api/vendors/999")
    assert missing.status_code == 200
    assert missing.get_json() is None

    assert client.delete(f"/api/vendors/{vendor_id}").get_json() == {"success": True}


def test_voucher_flow_and_error_mapping(client):
    vendor_id = _vendor(client)["vendor_id"]

    resp = client.post(
        "/api/vouchers",
        json={"vendor_id": vendor_id, "amount": "150000.00", "date": "2025-01-03", "description": "設備維護費"},
    )
    assert resp.status_code == 201
    voucher = resp.get_json()
    assert voucher["status"] == "pending"
    assert voucher["amount"] == "150000.00"

    done = client.post(f"/api/vouchers/{voucher['voucher_id']}/status", json={"status": "completed"})
    assert done.get_json()["status"] == "completed"

    again = client.post(f"/api/vouchers/{voucher['voucher_id']}/status", json={"status": "void"})
    assert again.status_code == 409

    locked = client.patch(f"/api/vouchers/{voucher['voucher_id']}", json={"amount": "1.00"})
    assert locked.status_code == 409

    blocked = client.delete(f"/api/vendors/{vendor_id}")
    assert blocked.status_code == 409
    assert blocked.get_json()["success"] is False

    listed = client.get(f"/api/vendors/{vendor_id}/vouchers").get_json()
    assert [v["voucher_id"] for v in listed] == [voucher["voucher_id"]]


def test_validation_error_is_400(client):
    resp = client.post("/api/vouchers", json={"vendor_id": 1, "amount": 10.5, "date": "2025-01-03"})
    assert resp.status_code == 400
    assert "amount" in resp.get_json()["message"]


def test_non_integer_ids_are_400(client, employee_payload):
    vendor_id = _vendor(client)["vendor_id"]
    resp = client.post("/api/vouchers", json={"vendor_id": vendor_id + 0.9, "amount": "10.00", "date": "2025-01-03"})
    assert resp.status_code == 400
    assert "vendor_id" in resp.get_json()["message"]
    assert client.get("/api/vouchers").get_json() == []

    emp = client.post("/api/employees", json=employee_payload()).get_json()
    line = {
        "employee_id": True,
        "employee_name": emp["name"],
        "department": emp["department"],
        "position": emp["position"],
        "period": "2025-03",
        "base_salary": "50000.00",
    }
    assert client.post("/api/payroll/batch", json=[line]).status_code == 400
    assert client.get("/api/payroll").get_json() == []


def test_non_object_body_is_400(client):
    resp = client.post("/api/vendors", json=["not", "an", "object"])
    assert resp.status_code == 400


def test_payroll_endpoints(client, employee_payload):
    emp = client.post("/api/employees", json=employee_payload()).get_json()
    assert client.get("/api/employees/active").get_json()[0]["employee_id"] == emp["employee_id"]

    init = client.get("/api/payroll/periods/2025-03/init").get_json()
    assert init["persisted"] is False
    assert init["records"][0]["net_pay"] == "55000.00"

    saved = client.post("/api/payroll/batch", json=[{**init["records"][0], "bonus": "1000.00"}])
    assert saved.status_code == 200
    assert saved.get_json()[0]["net_pay"] == "56000.00"

    summary = client.get("/api/payroll/periods/2025-03/summary").get_json()
    assert summary == {"period": "2025-03", "total_amount": "56000.00", "employee_count": 1, "status": "draft"}

    final = client.post("/api/payroll/periods/2025-03/finalize").get_json()
    assert final == {"success": True, "updated_count": 1}

    record_id = saved.get_json()[0]["record_id"]
    assert client.patch(f"/api/payroll/{record_id}", json={"bonus": "1.00"}).status_code == 409

    export = client.get("/api/payroll/periods/2025-03/export.xlsx")
    assert export.status_code == 200
    assert export.mimetype.endswith("spreadsheetml.sheet")


def test_bad_period_is_400(client):
    assert client.get("/api/payroll/periods/2025-3/init").status_code == 400


@pytest.mark.parametrize("months,status", [("3", 200), ("12", 200), ("5", 400)])
def test_monthly_report_months(client, months, status):
    resp = client.get(f"/api/reports/monthly?months={months}")
    assert resp.status_code == status
    if status == 200:
        assert len(resp.get_json()) == int(months)


def test_dashboard_shape(client):
    _vendor(client)
    data = client.get("/api/reports/dashboard").get_json()
    assert data["vendor_count"] == 1
    assert data["pending_amount"] == "0.00"
    assert data["recent_vouchers"] == []


def test_unexpected_error_is_logged_and_500(client, container, monkeypatch, caplog):
    def boom(**_kwargs):
        raise RuntimeError("disk on fire")

    monkeypatch.setattr(container.vendor_service, "list_vendors", boom)

    resp = client.get("/api/vendors")

    assert resp.status_code == 500
    assert resp.get_json() == {"success": False, "message": "Internal server error"}
    assert "disk on fire" in caplog.text
