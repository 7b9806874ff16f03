"""Shared test fixtures."""

import json
from unittest.mock import MagicMock

import pytest
import requests

from src.api.client import ApiClient
from src.config.schema import ApiSettings

BASE_URL = "http://fleet.test/api/v1"


def _response(status_code=200, payload=None, text="", reason="OK"):
    response = requests.Response()
    response.status_code = status_code
    response.reason = reason
    response.encoding = "utf-8"
    if payload is not None:
        response._content = json.dumps(payload).encode("utf-8")
        response.headers["Content-Type"] = "application/json"
    else:
        response._content = text.encode("utf-8")
    return response


@pytest.fixture
def make_response():
    """Build a real ``requests.Response`` with a canned body."""
    return _response


@pytest.fixture
def session():
    return MagicMock(spec=requests.Session)


@pytest.fixture
def settings():
    return ApiSettings(base_url=BASE_URL, timeout_seconds=5.0, page_limit=50)


@pytest.fixture
def client(settings, session):
    return ApiClient(settings, token="secret-token", session=session)


@pytest.fixture
def truck_data():
    return {
        "id": "123",
        "truck_number": "TRK001",
        "vin": "1HGCM82633A123456",
        "make": "Freightliner",
        "model": "Cascadia",
        "year": 2020,
        "license_plate": {"number": "ABC123", "state": "CA"},
        "mileage": 50000,
        "status": "AVAILABLE",
        "trailer_type": "DRY_VAN",
        "capacity_tons": 25,
        "fuel_type": "DIESEL",
        "last_maintenance": "2023-01-01",
        "created_at": "2023-01-01T00:00:00Z",
        "updated_at": "2023-01-01T00:00:00Z",
    }


@pytest.fixture
def driver_data():
    return {
        "id": "d-1",
        "first_name": "Jane",
        "last_name": "Doe",
        "dob": "1985-04-12",
        "license_number": "D1234567",
        "license_state": "IL",
        "license_expiration": "2027-04-12",
        "phone": "312-555-0100",
        "email": "jane.doe@example.com",
        "address": {"street": "1 Main St", "city": "Chicago", "state": "IL", "zip": "60601"},
        "employment_status": "ACTIVE",
        "created_at": "2023-01-01T00:00:00Z",
        "updated_at": "2023-01-01T00:00:00Z",
    }


@pytest.fixture
def trip_data():
    return {
        "id": "t-1",
        "trip_number": "TRIP-001",
        "departure_time": {"scheduled": "2024-03-01T08:00:00Z", "actual": "2024-03-01T08:15:00Z"},
        "arrival_time": {"scheduled": "2024-03-01T16:00:00Z", "actual": "2024-03-01T15:45:00Z"},
        "status": "COMPLETED",
        "cargo": {"description": "Pallets", "weight": 12000, "hazmat": False},
        "fuel_usage_gallons": 50,
        "distance_miles": 400,
        "notes": [{"note_timestamp": "2024-03-01T12:00:00Z", "content": "Fuel stop"}],
        "driver": "d-1",
        "truck": {"id": "123"},
        "created_at": "2024-02-28T10:00:00Z",
        "updated_at": "2024-03-01T16:00:00Z",
    }


@pytest.fixture
def url(settings):
    """Absolute fleet API URL for a resource path."""
    return settings.url_for
