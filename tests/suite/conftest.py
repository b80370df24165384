"""Fixtures for the booking-service suite.

Offline by default: each test talks to its own in-memory service. With
``--run-live`` the same tests run against the configured base URL.
"""

from typing import NamedTuple

import pytest

from bookingprobe.client import BookingApiClient, token_cookie
from bookingprobe.data import Booking, generate_booking, get_auth_credentials

from fake_booker import OFFLINE_BASE_URL, FakeBooker


class CreatedBooking(NamedTuple):
    booking_id: int
    booking: Booking


@pytest.fixture
def api_client(request):
    """Client for the service under test (live or in-memory)."""
    if request.config.getoption("--run-live"):
        harness_config = request.getfixturevalue("harness_config")
        return BookingApiClient.from_config(harness_config)
    return BookingApiClient(OFFLINE_BASE_URL, transport=FakeBooker().transport())


@pytest.fixture
def auth_token(api_client):
    """Fresh token from POST /auth with the admin credentials."""
    response = api_client.post("/auth", get_auth_credentials().to_payload())
    assert response.status == 200
    return response.body["token"]


@pytest.fixture
def auth_headers(auth_token):
    return {"headers": token_cookie(auth_token)}


@pytest.fixture
def created_booking(api_client):
    """A newly created booking and its id."""
    booking = generate_booking()
    response = api_client.post("/booking", booking.to_payload())
    assert response.status == 200
    return CreatedBooking(response.body["bookingid"], booking)


@pytest.fixture
def post_booking(api_client):
    """POST a generated booking with some fields replaced."""

    def _post(**overrides):
        payload = generate_booking().to_payload()
        payload.update(overrides)
        return api_client.post("/booking", payload)

    return _post
