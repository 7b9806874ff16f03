"""Minimal JSON backend for the fleet dashboard.

Serves:
- GET  /api/health
- GET  /api/dashboard                       aggregated metrics (fan-out + report)
- GET  /api/enums                           entity kinds and form select options
- GET  /api/transitions/<kind>/<status>     offered moves for a status
- GET  /api/<resource>/<id>/transitions     offered moves for a live entity
- POST /api/<resource>/<id>/transitions     execute {"target": ...}

The caller's ``Authorization: Bearer`` header is forwarded to the fleet API
on every request; nothing is cached between requests.
"""

from __future__ import annotations

import json
import logging
from dataclasses import asdict
from http import HTTPStatus
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from typing import Any, Dict, Mapping, Optional, Tuple
from urllib.parse import parse_qs, urlparse

import requests

from src.api.client import ApiClient
from src.api.errors import ApiError, AuthenticationRequired
from src.api.loader import load_dashboard
from src.api.resources import ResourceEndpoint
from src.config.constants import ENTITY_KINDS, FIELD_ENUMS, RESOURCE_PATHS
from src.config.schema import AggregationPolicy, ApiSettings, OnTimePolicy
from src.fleet.transitions import REGISTRY

logger = logging.getLogger(__name__)

Response = Tuple[HTTPStatus, Dict[str, Any]]

KIND_BY_SEGMENT = {path.strip("/"): kind for kind, path in RESOURCE_PATHS.items()}


def bearer_token(header: Optional[str]) -> Optional[str]:
    if not header or not header.startswith("Bearer "):
        return None
    return header[len("Bearer "):].strip() or None


def _kind(segment: str) -> str:
    """Accept a resource segment ("trucks") or a kind name ("truck")."""
    kind = KIND_BY_SEGMENT.get(segment, segment.replace("-", "_"))
    if kind not in RESOURCE_PATHS:
        raise ValueError(f"Unknown entity kind {segment!r}")
    return kind


def _status_of(entity: Any) -> Optional[str]:
    return getattr(entity, "status", None) or getattr(entity, "employment_status", None)


def _policy(query: Mapping[str, list]) -> AggregationPolicy:
    values = query.get("on_time")
    if not values:
        return AggregationPolicy()
    return AggregationPolicy(on_time=OnTimePolicy(values[0]))


def _transitions_payload(kind: str, entity_id: Optional[str], status: Optional[str]) -> Dict[str, Any]:
    return {
        "kind": kind,
        "id": entity_id,
        "status": status,
        "terminal": REGISTRY.is_terminal(kind, status),
        "transitions": [o.to_dict() for o in REGISTRY.transitions_for(kind, status)],
    }


def _guard(handler) -> Response:
    """Map client-side and upstream failures onto HTTP responses."""
    try:
        return handler()
    except AuthenticationRequired as exc:
        return HTTPStatus.UNAUTHORIZED, {"error": "authentication_required", "message": exc.message}
    except ApiError as exc:
        status = HTTPStatus.NOT_FOUND if exc.status_code == 404 else HTTPStatus.BAD_GATEWAY
        return status, {"error": "upstream_error", "status_code": exc.status_code, "message": exc.message}
    except requests.RequestException as exc:
        logger.warning(f"Fleet API unreachable: {exc}")
        return HTTPStatus.BAD_GATEWAY, {"error": "upstream_unavailable", "message": str(exc)}
    except ValueError as exc:
        return HTTPStatus.BAD_REQUEST, {"error": "bad_request", "message": str(exc)}


def route_get(path: str, query: Mapping[str, list], client: ApiClient) -> Response:
    parts = [p for p in path.split("/") if p]

    if parts == ["api", "health"]:
        return HTTPStatus.OK, {"status": "ok", "service": "fleet-dashboard"}

    if parts == ["api", "enums"]:
        return HTTPStatus.OK, {"kinds": ENTITY_KINDS, "fields": FIELD_ENUMS}

    if parts == ["api", "dashboard"]:
        return _guard(lambda: (HTTPStatus.OK, load_dashboard(client, _policy(query)).to_dict()))

    if len(parts) == 4 and parts[:2] == ["api", "transitions"]:
        return _guard(lambda: (HTTPStatus.OK, _transitions_payload(_kind(parts[2]), None, parts[3])))

    if len(parts) == 4 and parts[0] == "api" and parts[3] == "transitions":
        def lookup() -> Response:
            kind = _kind(parts[1])
            entity = ResourceEndpoint(client, kind).get(parts[2])
            return HTTPStatus.OK, _transitions_payload(kind, entity.id, _status_of(entity))
        return _guard(lookup)

    return HTTPStatus.NOT_FOUND, {"error": "not_found"}


def route_post(path: str, body: Mapping[str, Any], client: ApiClient) -> Response:
    parts = [p for p in path.split("/") if p]

    if len(parts) == 4 and parts[0] == "api" and parts[3] == "transitions":
        def execute() -> Response:
            target = body.get("target")
            if not target:
                raise ValueError("Missing 'target'")
            kind = _kind(parts[1])
            updated = ResourceEndpoint(client, kind).transition(parts[2], str(target))
            return HTTPStatus.OK, {"data": asdict(updated)}
        return _guard(execute)

    return HTTPStatus.NOT_FOUND, {"error": "not_found"}


class DashboardHandler(BaseHTTPRequestHandler):
    """Serve the dashboard API."""

    def _send_json(self, payload: dict, status: HTTPStatus = HTTPStatus.OK) -> None:
        body = json.dumps(payload).encode("utf-8")
        self.send_response(status)
        self.send_header("Content-Type", "application/json; charset=utf-8")
        self.send_header("Content-Length", str(len(body)))
        self.end_headers()
        self.wfile.write(body)

    def _client(self) -> ApiClient:
        settings = getattr(self.server, "api_settings", None) or ApiSettings()
        return ApiClient(settings, token=bearer_token(self.headers.get("Authorization")))

    def do_GET(self) -> None:  # noqa: N802
        parsed = urlparse(self.path)
        status, payload = route_get(parsed.path, parse_qs(parsed.query), self._client())
        self._send_json(payload, status)

    def do_POST(self) -> None:  # noqa: N802
        parsed = urlparse(self.path)
        length = int(self.headers.get("Content-Length") or 0)
        try:
            body = json.loads(self.rfile.read(length) or b"{}")
        except ValueError:
            self._send_json({"error": "bad_request", "message": "Body is not JSON"},
                            HTTPStatus.BAD_REQUEST)
            return
        if not isinstance(body, dict):
            body = {}
        status, payload = route_post(parsed.path, body, self._client())
        self._send_json(payload, status)


def run_server(
    host: str = "127.0.0.1", port: int = 8787, settings: Optional[ApiSettings] = None,
) -> None:
    """Run the dashboard HTTP server."""
    server = ThreadingHTTPServer((host, port), DashboardHandler)
    server.api_settings = settings or ApiSettings()

    logger.info(f"Dashboard API running at http://{host}:{port}/api/")
    logger.info(f"Fleet API: {server.api_settings.base_url}")
    try:
        server.serve_forever()
    except KeyboardInterrupt:
        pass
    finally:
        server.server_close()


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    run_server()
