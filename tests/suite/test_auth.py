"""Authentication and authorization against the booking service."""

from bookingprobe.client import basic_auth_header, token_cookie
from bookingprobe.data import ADMIN_PASSWORD, ADMIN_USERNAME, generate_booking, get_auth_credentials


class TestAuthToken:
    """Tests for POST /auth."""

    def test_valid_credentials_create_token(self, api_client):
        response = api_client.post("/auth", get_auth_credentials().to_payload())

        assert response.status == 200
        assert "token" in response.body
        assert isinstance(response.body["token"], str)
        assert len(response.body["token"]) > 0

    def test_invalid_credentials_rejected(self, api_client):
        """Bad credentials come back as 200 with a reason, not an error status."""
        response = api_client.post("/auth", {"username": "wronguser", "password": "wrongpass"})

        assert response.status == 200
        assert "reason" in response.body
        assert "token" not in response.body


class TestAuthorizedWrites:
    """Updates and deletes require a token cookie or Basic auth."""

    def test_update_with_token(self, api_client, created_booking, auth_headers):
        response = api_client.put(
            f"/booking/{created_booking.booking_id}",
            generate_booking().to_payload(),
            auth_headers,
        )
        assert response.status == 200

    def test_delete_with_token(self, api_client, created_booking, auth_token):
        response = api_client.delete(
            f"/booking/{created_booking.booking_id}",
            {"headers": token_cookie(auth_token)},
        )
        assert response.status == 201

    def test_update_without_token(self, api_client, created_booking):
        response = api_client.put(
            f"/booking/{created_booking.booking_id}",
            generate_booking().to_payload(),
        )
        assert response.status == 403

    def test_delete_without_token(self, api_client, created_booking):
        response = api_client.delete(f"/booking/{created_booking.booking_id}")
        assert response.status == 403

    def test_update_with_basic_auth(self, api_client, created_booking):
        response = api_client.put(
            f"/booking/{created_booking.booking_id}",
            generate_booking().to_payload(),
            {"headers": basic_auth_header(ADMIN_USERNAME, ADMIN_PASSWORD)},
        )
        assert response.status == 200
