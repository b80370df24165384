"""In-process stand-in for the restful-booker service.

Served through httpx.MockTransport so the suite runs without a network.
It reproduces the real service's known weaknesses on purpose (no input
sanitising, no rate limiting, negative prices accepted, no security
headers) so the security tests have something to report.

DO NOT use this as a reference for a correct booking API.
"""

from __future__ import annotations

import base64
import json
import re
import secrets
import threading
from typing import Any, Optional

import httpx

OFFLINE_BASE_URL = "https://booker.test"

ADMIN_USERNAME = "admin"
ADMIN_PASSWORD = "password123"

BOOKING_FIELDS = ("firstname", "lastname", "totalprice", "depositpaid", "bookingdates")

SEED_BOOKINGS = [
    {
        "firstname": "Sally",
        "lastname": "Brown",
        "totalprice": 111,
        "depositpaid": True,
        "bookingdates": {"checkin": "2024-01-01", "checkout": "2024-01-04"},
        "additionalneeds": "Breakfast",
    },
    {
        "firstname": "Jim",
        "lastname": "Wilson",
        "totalprice": 240,
        "depositpaid": False,
        "bookingdates": {"checkin": "2024-02-10", "checkout": "2024-02-12"},
        "additionalneeds": "Parking",
    },
    {
        "firstname": "Mark",
        "lastname": "Jones",
        "totalprice": 563,
        "depositpaid": True,
        "bookingdates": {"checkin": "2024-03-05", "checkout": "2024-03-09"},
    },
]

_BOOKING_PATH = re.compile(r"^/booking/(?P<id>[^/]+)$")


def _text(status: int, text: str) -> httpx.Response:
    return httpx.Response(status, text=text, headers={"X-Powered-By": "Express"})


def _json(status: int, data: Any) -> httpx.Response:
    return httpx.Response(status, json=data, headers={"X-Powered-By": "Express"})


def _clean_booking(data: dict[str, Any]) -> dict[str, Any]:
    """Keep only the fields the service stores; everything else is dropped."""
    dates = data.get("bookingdates")
    if not isinstance(dates, dict):
        dates = {}
    booking = {
        "firstname": data["firstname"],
        "lastname": data["lastname"],
        "totalprice": data["totalprice"],
        "depositpaid": data["depositpaid"],
        "bookingdates": {
            "checkin": dates.get("checkin"),
            "checkout": dates.get("checkout"),
        },
    }
    if "additionalneeds" in data:
        booking["additionalneeds"] = data["additionalneeds"]
    return booking


class FakeBooker:
    """Callable MockTransport handler holding bookings and tokens in memory."""

    def __init__(self, seed: bool = True) -> None:
        self._lock = threading.Lock()
        self._bookings: dict[int, dict[str, Any]] = {}
        self._tokens: set[str] = set()
        self._next_id = 1
        self.requests: list[httpx.Request] = []
        if seed:
            for booking in SEED_BOOKINGS:
                self._store(json.loads(json.dumps(booking)))

    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self)

    def _store(self, booking: dict[str, Any]) -> int:
        booking_id = self._next_id
        self._next_id += 1
        self._bookings[booking_id] = booking
        return booking_id

    def __call__(self, request: httpx.Request) -> httpx.Response:
        with self._lock:
            self.requests.append(request)
            return self._route(request)

    def _route(self, request: httpx.Request) -> httpx.Response:
        path = request.url.path.rstrip("/") or "/"
        method = request.method

        if path == "/ping" and method == "GET":
            return _text(201, "Created")
        if path == "/auth" and method == "POST":
            return self._auth(request)
        if path == "/booking":
            if method == "GET":
                return self._list(request)
            if method == "POST":
                return self._create(request)
            return _text(404, "Not Found")

        match = _BOOKING_PATH.match(path)
        if match is None:
            return _text(404, "Not Found")

        try:
            booking_id: Optional[int] = int(match.group("id"))
        except ValueError:
            booking_id = None

        if method == "GET":
            booking = self._bookings.get(booking_id) if booking_id else None
            if booking is None:
                return _text(404, "Not Found")
            return _json(200, booking)

        if method in ("PUT", "PATCH", "DELETE"):
            if not self._authorized(request):
                return _text(403, "Forbidden")
            if booking_id not in self._bookings:
                return _text(405, "Method Not Allowed")
            if method == "DELETE":
                del self._bookings[booking_id]
                return _text(201, "Created")
            return self._update(request, booking_id, partial=method == "PATCH")

        return _text(404, "Not Found")

    def _body(self, request: httpx.Request) -> Any:
        try:
            return json.loads(request.content or b"null")
        except ValueError:
            return None

    def _auth(self, request: httpx.Request) -> httpx.Response:
        body = self._body(request) or {}
        if (
            isinstance(body, dict)
            and body.get("username") == ADMIN_USERNAME
            and body.get("password") == ADMIN_PASSWORD
        ):
            token = secrets.token_hex(8)[:15]
            self._tokens.add(token)
            return _json(200, {"token": token})
        return _json(200, {"reason": "Bad credentials"})

    def _authorized(self, request: httpx.Request) -> bool:
        cookie = request.headers.get("cookie", "")
        for part in cookie.split(";"):
            name, _, value = part.strip().partition("=")
            if name == "token" and value in self._tokens:
                return True

        auth = request.headers.get("authorization", "")
        if auth.startswith("Basic "):
            try:
                decoded = base64.b64decode(auth[6:]).decode("utf-8")
            except ValueError:
                return False
            return decoded == f"{ADMIN_USERNAME}:{ADMIN_PASSWORD}"
        return False

    def _list(self, request: httpx.Request) -> httpx.Response:
        params = request.url.params
        ids = []
        for booking_id, booking in self._bookings.items():
            if "firstname" in params and booking["firstname"] != params["firstname"]:
                continue
            if "lastname" in params and booking["lastname"] != params["lastname"]:
                continue
            ids.append({"bookingid": booking_id})
        return _json(200, ids)

    def _create(self, request: httpx.Request) -> httpx.Response:
        body = self._body(request)
        if not isinstance(body, dict) or any(f not in body for f in BOOKING_FIELDS):
            return _text(500, "Internal Server Error")
        booking = _clean_booking(body)
        booking_id = self._store(booking)
        return _json(200, {"bookingid": booking_id, "booking": booking})

    def _update(self, request: httpx.Request, booking_id: int, partial: bool) -> httpx.Response:
        body = self._body(request)
        if not isinstance(body, dict):
            return _text(400, "Bad Request")

        if partial:
            merged = {**self._bookings[booking_id], **body}
            booking = _clean_booking(merged)
        else:
            if any(f not in body for f in BOOKING_FIELDS):
                return _text(400, "Bad Request")
            booking = _clean_booking(body)

        self._bookings[booking_id] = booking
        return _json(200, booking)
