from datetime import datetime, timezone


def _today():
    return datetime.now(timezone.utc).strftime("%Y%m%d")


def _confirm(client, form, **overrides):
    response = client.post("/api/confirm-payment", json=dict(form, **overrides))
    assert response.status_code == 200, response.text
    return response.json()["payment"]


class TestPublicFlow:

    def test_initiate_returns_upi_link(self, client, payment_form):
        response = client.post("/api/initiate-payment", json=payment_form)

        assert response.status_code == 200
        data = response.json()
        assert data["upi_url"].startswith("upi://pay?pa=9511648488@ybl")
        assert data["amount"] == 250.0
        assert data["note"] == "Payment from Ravi Kumar"

    def test_initiate_rejects_low_amount(self, client, payment_form):
        response = client.post("/api/initiate-payment", json=dict(payment_form, amount=99))

        assert response.status_code == 400
        assert response.json() == {"error": "Minimum payment amount is ₹100"}

    def test_confirm_persists_payment(self, client, payment_form):
        response = client.post("/api/confirm-payment", json=payment_form)

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "success"
        assert data["transaction_id"] == f"REC-{_today()}-0001"
        assert data["payment"]["transaction_id"] == data["transaction_id"]
        assert data["payment"]["is_trashed"] is False

    def test_confirm_rejects_bad_phone(self, client, payment_form):
        response = client.post("/api/confirm-payment", json=dict(payment_form, phone="12345"))

        assert response.status_code == 400
        assert "10-digit" in response.json()["error"]

    def test_confirm_accepts_numeric_phone(self, client, payment_form):
        payment = _confirm(client, payment_form, phone=9876543210)

        assert payment["phone"] == "9876543210"

    def test_malformed_body_gets_error_shape(self, client, payment_form):
        response = client.post("/api/confirm-payment", json=dict(payment_form, name=["Ravi"]))

        assert response.status_code == 400
        assert response.json()["error"].startswith("Invalid name")
        assert "detail" not in response.json()

    def test_gate_status_defaults_to_active(self, client):
        response = client.get("/api/payment-gate-status")

        assert response.status_code == 200
        assert response.json() == {"value": "active"}


class TestAdminAuth:

    def test_login_with_wrong_password(self, client):
        response = client.post("/api/admin/login", json={"username": "Abhay", "password": "nope"})

        assert response.status_code == 401
        assert response.json()["success"] is False

    def test_login_returns_token(self, client):
        response = client.post("/api/admin/login", json={"username": "Abhay", "password": "Abhay123"})

        assert response.status_code == 200
        assert response.json()["success"] is True
        assert response.json()["token"]

    def test_admin_routes_require_token(self, client):
        assert client.get("/api/admin/payments").status_code == 401
        assert client.post("/api/admin/trash-all").status_code == 401
        assert client.post(
            "/api/admin/set-gate-status", json={"status": "paused"}, headers={"admin-token": "forged"}
        ).status_code == 401


class TestGateControl:

    def test_paused_gate_blocks_submissions(self, client, admin_headers, payment_form):
        response = client.post("/api/admin/set-gate-status", json={"status": "paused"}, headers=admin_headers)
        assert response.json() == {"success": True, "status": "paused"}
        assert client.get("/api/payment-gate-status").json() == {"value": "paused"}

        for path in ("/api/initiate-payment", "/api/confirm-payment"):
            blocked = client.post(path, json=payment_form)
            assert blocked.status_code == 403
            assert blocked.json() == {"error": "Payments are currently paused by the administrator."}

        assert client.get("/api/admin/payments", headers=admin_headers).json() == []

    def test_invalid_gate_value(self, client, admin_headers):
        response = client.post("/api/admin/set-gate-status", json={"status": "closed"}, headers=admin_headers)

        assert response.status_code == 400
        assert response.json() == {"error": "Invalid status"}


class TestTrashManagement:

    def test_listings_newest_first_and_search(self, client, admin_headers, payment_form):
        _confirm(client, payment_form, name="Asha")
        _confirm(client, payment_form, name="Bhavesh", phone="9123456789")

        payments = client.get("/api/admin/payments", headers=admin_headers).json()
        assert [p["name"] for p in payments] == ["Bhavesh", "Asha"]

        found = client.get("/api/admin/payments", params={"search": "91234"}, headers=admin_headers).json()
        assert [p["name"] for p in found] == ["Bhavesh"]

    def test_trash_restore_purge(self, client, admin_headers, payment_form):
        payment = _confirm(client, payment_form)
        pid = payment["id"]

        # Active records cannot be purged directly
        assert client.post(f"/api/admin/purge/{pid}", headers=admin_headers).json()["success"] is False

        assert client.post(f"/api/admin/trash/{pid}", headers=admin_headers).json()["success"] is True
        assert client.post(f"/api/admin/trash/{pid}", headers=admin_headers).json()["success"] is True
        assert client.get("/api/admin/payments", headers=admin_headers).json() == []
        trashed = client.get("/api/admin/trash", headers=admin_headers).json()
        assert [p["id"] for p in trashed] == [pid]

        assert client.post(f"/api/admin/restore/{pid}", headers=admin_headers).json()["success"] is True
        restored = client.get("/api/admin/payments", headers=admin_headers).json()
        assert restored == [payment]

        client.post(f"/api/admin/trash/{pid}", headers=admin_headers)
        assert client.post(f"/api/admin/purge/{pid}", headers=admin_headers).json()["success"] is True
        assert client.get("/api/admin/payments", headers=admin_headers).json() == []
        assert client.get("/api/admin/trash", headers=admin_headers).json() == []

    def test_actions_on_missing_id(self, client, admin_headers):
        for action in ("trash", "restore", "purge"):
            response = client.post(f"/api/admin/{action}/4040", headers=admin_headers)
            assert response.status_code == 200
            assert response.json()["success"] is False

    def test_bulk_actions(self, client, admin_headers, payment_form):
        first = _confirm(client, payment_form, name="Asha")
        second = _confirm(client, payment_form, name="Bhavesh")
        before = client.get("/api/admin/payments", headers=admin_headers).json()

        response = client.post("/api/admin/trash-all", headers=admin_headers)
        assert response.json() == {"success": True, "affected": 2}

        response = client.post("/api/admin/restore-all", headers=admin_headers)
        assert response.json() == {"success": True, "affected": 2}
        assert client.get("/api/admin/payments", headers=admin_headers).json() == before

        client.post(f"/api/admin/trash/{first['id']}", headers=admin_headers)
        response = client.post("/api/admin/purge-trashed", headers=admin_headers)
        assert response.json() == {"success": True, "affected": 1}

        remaining = client.get("/api/admin/payments", headers=admin_headers).json()
        assert [p["id"] for p in remaining] == [second["id"]]

    def test_summary(self, client, admin_headers, payment_form):
        first = _confirm(client, payment_form, amount=100)
        _confirm(client, payment_form, amount=150.5)
        client.post(f"/api/admin/trash/{first['id']}", headers=admin_headers)

        summary = client.get("/api/admin/summary", headers=admin_headers).json()

        assert summary == {
            "active_count": 1,
            "trashed_count": 1,
            "active_total_amount": 150.5,
            "today_count": 2,
            "gate": "active",
        }


def test_health(client):
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json()["status"] == "healthy"
    assert response.json()["gate"] == "active"


def test_error_responses_are_documented(client):
    spec = client.get("/openapi.json").json()
    confirm = spec["paths"]["/api/confirm-payment"]["post"]["responses"]

    assert set(confirm) >= {"200", "400", "403", "409", "503"}
    assert confirm["409"]["content"]["application/json"]["schema"]["$ref"].endswith("/ErrorResponse")
    assert spec["components"]["schemas"]["ErrorResponse"]["required"] == ["error"]
