"""
Pytest configuration and fixtures for hchk testing.

This module provides:
- Sample service payloads
- Mocked HTTP layer (no network access in any test)
- Helper for building fake responses
"""

import copy
import logging
import pytest
from unittest.mock import patch, MagicMock

TEST_API_KEY = "test-key-0123456789abcdef"
TEST_BASE_URL = "https://hc.example.com/api/v3/checks/"

SAMPLE_CHECK = {
    "uuid": "abc123-def456",
    "slug": "test-check",
    "name": "test-check",
    "ping_url": "https://hc-ping.com/abc123-def456",
    "pause_url": "https://healthchecks.io/api/v3/checks/abc123-def456/pause",
    "last_ping": "2024-01-01T12:00:00+00:00",
    "next_ping": "2024-01-01T13:00:00+00:00",
    "grace": 3600,
    "n_pings": 10,
    "tags": "test",
    "timeout": 86400,
    "tz": "UTC",
    "schedule": "0 * * * *",
    "status": "up",
    "update_url": "https://healthchecks.io/api/v3/checks/abc123-def456",
}


# ============================================================
# PAYLOAD FIXTURES
# ============================================================

@pytest.fixture
def check_payload():
    """One check as the service returns it."""
    return copy.deepcopy(SAMPLE_CHECK)


@pytest.fixture
def make_check_payload():
    """Factory for check payloads with overridden fields."""
    def _make(**overrides):
        payload = copy.deepcopy(SAMPLE_CHECK)
        payload.update(overrides)
        return payload
    return _make


@pytest.fixture
def checks_listing(make_check_payload):
    """Listing envelope with two checks, in service order."""
    return {"checks": [
        make_check_payload(
            uuid="abc123-def456", name="test-check-1", slug="test-check-1",
            ping_url="https://hc-ping.com/abc123-def456", last_ping=None, next_ping=None,
        ),
        make_check_payload(
            uuid="xyz789-ghi012", name="other-check", slug="other-check",
            ping_url="https://hc-ping.com/xyz789-ghi012", last_ping=None, next_ping=None,
            status="down",
        ),
    ]}


# ============================================================
# HTTP FIXTURES
# ============================================================

def make_response(status_code=200, json_data=None, text=None, invalid_json=False):
    """
    Build a fake requests.Response.

    Args:
        status_code: HTTP status
        json_data: Value returned by .json()
        text: Body text (defaults to "")
        invalid_json: Make .json() raise like requests does on bad bodies
    """
    response = MagicMock()
    response.status_code = status_code
    response.text = text if text is not None else ""
    if invalid_json:
        response.json.side_effect = ValueError("Expecting value: line 1 column 1 (char 0)")
    else:
        response.json.return_value = json_data
    return response


@pytest.fixture
def mock_request():
    """Patch the HTTP layer used by ApiClient."""
    with patch("hchk.api.client.requests.request") as mocked:
        yield mocked


@pytest.fixture(autouse=True)
def hchk_logger():
    """Restore the hchk logger after configure_logging() touches it."""
    logger = logging.getLogger("hchk")
    level, handlers = logger.level, list(logger.handlers)
    yield logger
    logger.setLevel(level)
    logger.handlers = handlers


@pytest.fixture
def client():
    """ApiClient pointed at a fake base URL."""
    from hchk.api.client import ApiClient
    return ApiClient(TEST_API_KEY, base_url=TEST_BASE_URL)
