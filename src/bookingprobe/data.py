"""Test data generation for booking-service tests."""

from __future__ import annotations

import random
import string
from dataclasses import asdict, dataclass
from datetime import date, timedelta
from typing import Any, Final, Optional

FIRSTNAMES: Final[tuple[str, ...]] = ("John", "Jane", "Bob", "Alice", "Charlie", "Diana")
LASTNAMES: Final[tuple[str, ...]] = ("Smith", "Doe", "Johnson", "Williams", "Brown", "Davis")
ADDITIONAL_NEEDS: Final[tuple[str, ...]] = ("Breakfast", "Lunch", "Dinner", "Parking", "Wi-Fi")

MIN_PRICE: Final[int] = 50
MAX_PRICE: Final[int] = 549
CHECKIN_WINDOW_DAYS: Final[int] = 30
MAX_STAY_DAYS: Final[int] = 14

ADMIN_USERNAME: Final[str] = "admin"
ADMIN_PASSWORD: Final[str] = "password123"


@dataclass(frozen=True)
class BookingDates:
    """Stay dates as ISO-8601 strings."""

    checkin: str
    checkout: str


@dataclass(frozen=True)
class Booking:
    """Booking payload accepted by POST /booking and PUT /booking/{id}."""

    firstname: str
    lastname: str
    totalprice: int
    depositpaid: bool
    bookingdates: BookingDates
    additionalneeds: str

    def to_payload(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class Credentials:
    """Username/password pair for POST /auth."""

    username: str
    password: str

    def to_payload(self) -> dict[str, str]:
        return asdict(self)


def generate_booking(
    rng: Optional[random.Random] = None,
    today: Optional[date] = None,
) -> Booking:
    """Generate a valid booking with random guest, price and dates.

    Check-in falls within the next 30 days and checkout is 1-14 days
    after it, so checkin < checkout always holds.
    """
    rng = rng or random  # module-level source
    today = today or date.today()

    checkin = today + timedelta(days=rng.randrange(CHECKIN_WINDOW_DAYS))
    checkout = checkin + timedelta(days=rng.randint(1, MAX_STAY_DAYS))

    return Booking(
        firstname=rng.choice(FIRSTNAMES),
        lastname=rng.choice(LASTNAMES),
        totalprice=rng.randint(MIN_PRICE, MAX_PRICE),
        depositpaid=rng.random() > 0.5,
        bookingdates=BookingDates(
            checkin=checkin.isoformat(),
            checkout=checkout.isoformat(),
        ),
        additionalneeds=rng.choice(ADDITIONAL_NEEDS),
    )


def get_auth_credentials() -> Credentials:
    """Return the service's admin credentials."""
    return Credentials(username=ADMIN_USERNAME, password=ADMIN_PASSWORD)


def generate_invalid_booking() -> dict[str, Any]:
    """Malformed booking for negative-path tests.

    Returned as a plain dict because the values deliberately break the
    Booking types.
    """
    return {
        "firstname": "",
        "lastname": "",
        "totalprice": -100,
        "depositpaid": "invalid",
        "bookingdates": {
            "checkin": "invalid-date",
            "checkout": "invalid-date",
        },
    }


def generate_partial_booking_update() -> dict[str, str]:
    """Body for PATCH /booking/{id}."""
    return {
        "firstname": "Updated",
        "lastname": "Name",
    }


def random_string(length: int = 10, rng: Optional[random.Random] = None) -> str:
    """Generate random alphanumeric string"""
    rng = rng or random
    chars = string.ascii_letters + string.digits
    return "".join(rng.choice(chars) for _ in range(length))
