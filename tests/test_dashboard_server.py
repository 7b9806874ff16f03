"""Tests for the dashboard JSON routes."""

import json
from http import HTTPStatus

import requests

from src.web.dashboard_server import bearer_token, route_get, route_post


def test_bearer_token():
    assert bearer_token("Bearer abc") == "abc"
    assert bearer_token("Basic abc") is None
    assert bearer_token("Bearer ") is None
    assert bearer_token(None) is None


def test_health(client):
    status, payload = route_get("/api/health", {}, client)
    assert status == HTTPStatus.OK
    assert payload["status"] == "ok"


def test_enums(client):
    status, payload = route_get("/api/enums", {}, client)
    assert status == HTTPStatus.OK
    assert "maintenance_log" in payload["kinds"]
    assert payload["fields"]["truck"]["status"] == ["AVAILABLE", "IN_TRANSIT", "UNDER_MAINTENANCE", "RETIRED"]
    assert "REFRIGERATED" in payload["fields"]["truck"]["trailer_type"]
    assert payload["fields"]["maintenance_log"]["service_type"][-1] == "EMERGENCY"


def test_unknown_route(client):
    status, payload = route_get("/api/nope", {}, client)
    assert status == HTTPStatus.NOT_FOUND


class TestTransitionRoutes:
    def test_static_lookup(self, client, session):
        status, payload = route_get("/api/transitions/trucks/AVAILABLE", {}, client)

        assert status == HTTPStatus.OK
        assert payload["terminal"] is False
        assert [t["target"] for t in payload["transitions"]] == ["IN_TRANSIT", "UNDER_MAINTENANCE", "RETIRED"]
        session.request.assert_not_called()

    def test_static_lookup_terminal(self, client):
        _, payload = route_get("/api/transitions/driver/TERMINATED", {}, client)
        assert payload["terminal"] is True
        assert payload["transitions"] == []

    def test_kind_without_lifecycle(self, client):
        status, payload = route_get("/api/transitions/facilities/OPEN", {}, client)
        assert status == HTTPStatus.BAD_REQUEST
        assert payload["error"] == "bad_request"

    def test_live_entity(self, client, session, make_response, driver_data):
        session.request.return_value = make_response(payload={"data": {**driver_data, "employment_status": "SUSPENDED"}})

        status, payload = route_get("/api/drivers/d-1/transitions", {}, client)

        assert status == HTTPStatus.OK
        assert payload["id"] == "d-1"
        assert payload["status"] == "SUSPENDED"
        assert [t["target"] for t in payload["transitions"]] == ["ACTIVE", "TERMINATED"]

    def test_live_entity_not_found(self, client, session, make_response):
        session.request.return_value = make_response(status_code=404, payload={"detail": "Truck not found"})

        status, payload = route_get("/api/trucks/404/transitions", {}, client)

        assert status == HTTPStatus.NOT_FOUND
        assert payload["message"] == "Truck not found"

    def test_execute(self, client, session, make_response, truck_data):
        session.request.return_value = make_response(payload={"data": {**truck_data, "status": "IN_TRANSIT"}})

        status, payload = route_post("/api/trucks/123/transitions", {"target": "IN_TRANSIT"}, client)

        assert status == HTTPStatus.OK
        assert payload["data"]["status"] == "IN_TRANSIT"
        assert session.request.call_args.args[0] == "PATCH"
        json.dumps(payload)

    def test_execute_missing_target(self, client, session):
        status, _ = route_post("/api/trucks/123/transitions", {}, client)
        assert status == HTTPStatus.BAD_REQUEST
        session.request.assert_not_called()

    def test_execute_unauthorized(self, client, session, make_response):
        session.request.return_value = make_response(status_code=401, payload={"detail": "expired"})

        status, payload = route_post("/api/trips/t-1/transitions", {"target": "CANCELED"}, client)

        assert status == HTTPStatus.UNAUTHORIZED
        assert payload["error"] == "authentication_required"


class TestDashboardRoute:
    def test_degraded_report_is_served(self, client, session, make_response):
        session.request.return_value = make_response(status_code=500, reason="Internal Server Error")

        status, payload = route_get("/api/dashboard", {}, client)

        assert status == HTTPStatus.OK
        assert payload["error"]["code"] == "DATA_LOAD_ERROR"
        assert payload["delivery"]["on_time_rate"] == "0.0"
        json.dumps(payload)

    def test_unauthorized(self, client, session, make_response):
        session.request.return_value = make_response(status_code=401, payload={"detail": "expired"})
        status, _ = route_get("/api/dashboard", {}, client)
        assert status == HTTPStatus.UNAUTHORIZED

    def test_upstream_unreachable_degrades(self, client, session):
        session.request.side_effect = requests.ConnectionError("refused")
        status, payload = route_get("/api/dashboard", {}, client)
        assert status == HTTPStatus.OK
        assert payload["error"] is not None

    def test_bad_policy(self, client):
        status, _ = route_get("/api/dashboard", {"on_time": ["sometimes"]}, client)
        assert status == HTTPStatus.BAD_REQUEST
