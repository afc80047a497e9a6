"""
Unit tests for the admin login and bearer-token guard.
"""

from datetime import timedelta

from mentor_booking.security_utils import constant_time_compare, create_jwt_token, verify_jwt_token


class TestLogin:
    def test_login_success_returns_admin_token(self, client):
        response = client.post("/api/login", json={"username": "admin", "password": "s3cret-pass"})

        assert response.status_code == 200
        payload = verify_jwt_token(response.json()["token"])
        assert payload["role"] == "admin"
        assert "exp" in payload

    def test_login_missing_fields(self, client):
        response = client.post("/api/login", json={"username": "admin"})

        assert response.status_code == 400
        assert response.json()["detail"] == "Missing fields."

    def test_login_wrong_password(self, client):
        response = client.post("/api/login", json={"username": "admin", "password": "nope"})

        assert response.status_code == 401
        assert response.json()["detail"] == "Invalid credentials."


class TestAdminGuard:
    def test_missing_header_is_rejected(self, client):
        response = client.get("/api/admin/slots")

        assert response.status_code == 401
        assert response.json()["detail"] == "Not authorized."

    def test_garbage_token_is_rejected(self, client):
        response = client.get("/api/admin/slots", headers={"Authorization": "Bearer not-a-jwt"})

        assert response.status_code == 401
        assert response.json()["detail"] == "Invalid or expired token."

    def test_expired_token_is_rejected(self, client):
        token = create_jwt_token({"role": "admin"}, expires_delta=timedelta(minutes=-5))
        response = client.get("/api/admin/slots", headers={"Authorization": f"Bearer {token}"})

        assert response.status_code == 401

    def test_non_admin_role_is_rejected(self, client):
        token = create_jwt_token({"role": "customer"})
        response = client.get("/api/admin/reservations", headers={"Authorization": f"Bearer {token}"})

        assert response.status_code == 401

    def test_admin_token_is_accepted(self, client, admin_headers):
        response = client.get("/api/admin/slots", headers=admin_headers)

        assert response.status_code == 200


def test_constant_time_compare_rejects_empty_values():
    assert constant_time_compare("admin", "admin")
    assert not constant_time_compare("admin", "Admin")
    assert not constant_time_compare("", "")
    assert not constant_time_compare(None, "admin")
