"""Tests for the dashboard fan-out and its failure handling."""

import pytest
import requests

from src.api.errors import ApiError, AuthenticationRequired
from src.api.loader import DASHBOARD_KINDS, fetch_dashboard_inputs, fetch_pages, load_dashboard
from src.config.constants import DATA_LOAD_ERROR, DATA_LOAD_MESSAGE, TRIP


@pytest.fixture
def route(session, make_response):
    """Serve canned list pages keyed by resource path; unknown paths are empty."""
    pages = {}

    def _request(method, url, **kwargs):
        for path, outcome in pages.items():
            if url.endswith(path):
                if isinstance(outcome, Exception):
                    raise outcome
                status, payload = outcome
                return make_response(status_code=status, payload=payload)
        return make_response(payload={"items": [], "total": 0})

    session.request.side_effect = _request
    return pages


def test_all_kinds_requested(client, session, route):
    pages = fetch_pages(client)

    assert set(pages) == set(DASHBOARD_KINDS)
    assert session.request.call_count == len(DASHBOARD_KINDS)


def test_inputs_carry_totals(client, route, trip_data, truck_data):
    route["/trips"] = (200, {"items": [trip_data], "total": 87})
    route["/trucks"] = (200, {"items": [truck_data], "total": 1})

    inputs = fetch_dashboard_inputs(client)

    assert inputs.trips[0].id == "t-1"
    assert inputs.trips_total == 87
    assert inputs.trucks_total == 1
    assert inputs.drivers == []


def test_load_dashboard_success(client, route, trip_data, truck_data, driver_data):
    route["/trips"] = (200, {"items": [trip_data], "total": 1})
    route["/trucks"] = (200, {"items": [truck_data], "total": 1})
    route["/drivers"] = (200, {"items": [driver_data], "total": 1})
    route["/maintenance-logs"] = (200, {"items": [
        {"id": "m-1", "service_type": "REPAIR", "cost": 100.0, "date": "2024-03-01"},
        {"id": "m-2", "service_type": "ROUTINE_MAINTENANCE", "cost": 250.505, "date": "2024-03-02"},
    ], "total": 2})

    report = load_dashboard(client)

    assert report.error is None
    assert report.delivery.on_time_rate == "100.0"
    assert report.efficiency.avg_mpg == "8.0"
    assert report.efficiency.maintenance_cost == "350.51"
    assert report.fleet.available == 1
    assert report.drivers.active == 1
    assert [m.id for m in report.recent_maintenance] == ["m-2", "m-1"]


def test_one_failure_degrades_to_empty_report(client, route, trip_data):
    """Any non-auth failure yields a zeroed report flagged with the load error."""
    route["/trips"] = (200, {"items": [trip_data], "total": 1})
    route["/incident-reports"] = (500, {"detail": "boom"})

    report = load_dashboard(client)

    assert report.error.code == DATA_LOAD_ERROR
    assert report.error.message == DATA_LOAD_MESSAGE
    assert report.delivery.on_time_rate == "0.0"
    assert report.fleet.total == 0
    assert [s.value for s in report.fleet_status] == [0, 0, 0, 0]


def test_transport_failure_degrades(client, route):
    route["/drivers"] = requests.ConnectionError("refused")

    report = load_dashboard(client)

    assert report.error is not None
    assert report.efficiency.maintenance_cost == "0.00"


def test_malformed_envelope_degrades(client, route):
    route["/trucks"] = (200, {"trucks": []})
    assert load_dashboard(client).error.code == DATA_LOAD_ERROR


def test_authentication_wins_over_other_failures(client, route):
    """A 401 anywhere in the fan-out is raised so the caller can re-authenticate."""
    route["/trips"] = (500, {"detail": "boom"})
    route["/maintenance-logs"] = (401, {"detail": "expired"})

    with pytest.raises(AuthenticationRequired):
        load_dashboard(client)


def test_fetch_pages_raises_first_failure(client, route):
    route["/trips"] = (503, {"detail": "down"})

    with pytest.raises(ApiError) as excinfo:
        fetch_pages(client, [TRIP])
    assert excinfo.value.status_code == 503


def test_infinite_total_falls_back_to_page_length(client, route, truck_data):
    """A non-finite reported total must not break the dashboard load."""
    route["/trucks"] = (200, {"items": [truck_data], "total": float("inf")})

    report = load_dashboard(client)

    assert report.error is None
    assert report.fleet.total == 1
