"""Pytest fixtures for bookingprobe tests."""

import json

import pytest

from bookingprobe.client import BookingApiClient
from bookingprobe.findings import Finding, Severity

from fake_booker import OFFLINE_BASE_URL, FakeBooker


@pytest.fixture
def fake_booker():
    """Fresh in-memory booking service."""
    return FakeBooker()


@pytest.fixture
def offline_client(fake_booker):
    """Client wired to the in-memory booking service."""
    return BookingApiClient(base_url=OFFLINE_BASE_URL, transport=fake_booker.transport())


@pytest.fixture
def sample_findings():
    """One finding per severity, in logging order."""
    return [
        Finding(
            test="tests/suite/test_security.py::test_rate_limiting",
            severity=Severity.CRITICAL,
            message="No rate limiting detected - API vulnerable to DoS attacks",
            timestamp="2024-01-01T10:00:00.000Z",
        ),
        Finding(
            test="tests/suite/test_security.py::test_security_headers",
            severity=Severity.WARNING,
            message="Missing security headers: x-frame-options",
            timestamp="2024-01-01T10:00:01.000Z",
        ),
        Finding(
            test="tests/suite/test_security.py::test_cors_policy",
            severity=Severity.INFO,
            message="No CORS headers present",
            timestamp="2024-01-01T10:00:02.000Z",
        ),
    ]


@pytest.fixture
def findings_file(sample_findings, tmp_path):
    """Findings JSON file as written by --findings-output."""
    path = tmp_path / "findings.json"
    data = {
        "summary": {"total": 3, "INFO": 1, "WARNING": 1, "CRITICAL": 1},
        "findings": [f.to_dict() for f in sample_findings],
    }
    with open(path, "w", encoding="utf-8") as f:
        json.dump(data, f)
    return path


@pytest.fixture
def empty_findings_file(tmp_path):
    """Findings file from a run that logged nothing."""
    path = tmp_path / "empty_findings.json"
    with open(path, "w", encoding="utf-8") as f:
        json.dump({"summary": {"total": 0}, "findings": []}, f)
    return path
