"""Tests for the fleet API client envelope handling."""

import pytest
import requests

from src.api.client import ApiClient
from src.api.errors import ApiError, AuthenticationRequired, EnvelopeError
from src.fleet.truck import Truck


class TestRequests:
    def test_bearer_header_and_params(self, client, url, session, make_response, truck_data):
        session.request.return_value = make_response(
            payload={"items": [truck_data], "total": 12, "limit": 1, "offset": 3}
        )
        page = client.get_page("/trucks", Truck.from_dict, limit=1, offset=3)

        args, kwargs = session.request.call_args
        assert args == ("GET", url("/trucks"))
        assert kwargs["headers"]["Authorization"] == "Bearer secret-token"
        assert kwargs["params"] == {"limit": 1, "offset": 3}
        assert kwargs["timeout"] == 5.0
        assert page.total == 12
        assert page.items[0].truck_number == "TRK001"

    def test_no_token_no_header(self, settings, session, make_response):
        session.request.return_value = make_response(payload={"items": []})
        ApiClient(settings, session=session).get_page("/trucks", Truck.from_dict)

        headers = session.request.call_args.kwargs["headers"]
        assert "Authorization" not in headers

    def test_default_page_limit(self, client, session, make_response):
        session.request.return_value = make_response(payload={"items": []})
        page = client.get_page("/trucks", Truck.from_dict)

        assert session.request.call_args.kwargs["params"] == {"limit": 50, "offset": 0}
        assert page.total == 0

    def test_single_item(self, client, session, make_response, truck_data):
        session.request.return_value = make_response(payload={"data": truck_data})
        truck = client.get_item("/trucks/123", Truck.from_dict)
        assert truck.id == "123"

    def test_post_sends_json_body(self, client, session, make_response, truck_data):
        session.request.return_value = make_response(status_code=201, payload={"data": truck_data})
        client.post_item("/trucks", {"vin": "X"}, Truck.from_dict)

        args, kwargs = session.request.call_args
        assert args[0] == "POST"
        assert kwargs["json"] == {"vin": "X"}


class TestEnvelopes:
    def test_missing_data_rejected(self, client, session, make_response):
        session.request.return_value = make_response(payload={"truck": {}})
        with pytest.raises(EnvelopeError) as excinfo:
            client.get_item("/trucks/1", Truck.from_dict)
        assert excinfo.value.status_code == 200

    def test_missing_items_rejected(self, client, session, make_response):
        session.request.return_value = make_response(payload=[{"id": "1"}])
        with pytest.raises(EnvelopeError):
            client.get_page("/trucks", Truck.from_dict)

    def test_non_json_body_rejected(self, client, session, make_response):
        session.request.return_value = make_response(text="<html>oops</html>")
        with pytest.raises(EnvelopeError):
            client.get_page("/trucks", Truck.from_dict)


class TestErrors:
    def test_unauthorized(self, client, session, make_response):
        session.request.return_value = make_response(
            status_code=401, payload={"detail": "Token expired"}, reason="Unauthorized"
        )
        with pytest.raises(AuthenticationRequired) as excinfo:
            client.get_page("/trucks", Truck.from_dict)
        assert excinfo.value.status_code == 401
        assert excinfo.value.message == "Token expired"

    def test_server_error_with_empty_body(self, client, session, make_response):
        """A bodiless non-2xx still becomes a typed error carrying the status."""
        session.request.return_value = make_response(status_code=500, reason="Internal Server Error")
        with pytest.raises(ApiError) as excinfo:
            client.get_page("/trucks", Truck.from_dict)
        assert excinfo.value.status_code == 500
        assert excinfo.value.message == "Internal Server Error"
        assert "500" in str(excinfo.value)

    def test_error_message_from_body(self, client, session, make_response):
        session.request.return_value = make_response(status_code=422, payload={"message": "bad vin"})
        with pytest.raises(ApiError) as excinfo:
            client.post_item("/trucks", {}, Truck.from_dict)
        assert excinfo.value.message == "bad vin"
        assert not isinstance(excinfo.value, AuthenticationRequired)

    def test_transport_error_propagates(self, client, session):
        session.request.side_effect = requests.ConnectionError("refused")
        with pytest.raises(requests.ConnectionError):
            client.get_page("/trucks", Truck.from_dict)
