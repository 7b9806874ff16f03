"""HTTP client for the remote fleet REST API.

Every response body is checked against one of two envelopes:

- list endpoints:   ``{"items": [...], "total": n, "limit": n, "offset": n}``
- single resources: ``{"data": {...}}``

Anything else is rejected with :class:`EnvelopeError` rather than guessed at.
The bearer token is passed in explicitly; the client never looks it up.
"""

import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, Generic, List, Mapping, Optional, Tuple, TypeVar

import requests

from src.api.errors import ApiError, AuthenticationRequired, EnvelopeError
from src.config.schema import ApiSettings
from src.fleet.common import as_int

logger = logging.getLogger(__name__)

T = TypeVar("T")
Parser = Callable[[Mapping[str, Any]], T]


@dataclass(frozen=True)
class Page(Generic[T]):
    """One page of a list endpoint. ``total`` may exceed ``len(items)``."""

    items: List[T]
    total: int
    limit: int
    offset: int


def _error_message(response: requests.Response) -> str:
    """Best-effort error text from a failed response."""
    try:
        body = response.json()
    except ValueError:
        body = None

    if isinstance(body, Mapping):
        for key in ("detail", "message", "error"):
            if body.get(key):
                return str(body[key])

    text = (response.text or "").strip()
    if text:
        return text[:500]
    return response.reason or f"HTTP {response.status_code}"


class ApiClient:
    """Thin request/response marshaling over a ``requests.Session``."""

    def __init__(
        self,
        settings: Optional[ApiSettings] = None,
        token: Optional[str] = None,
        session: Optional[requests.Session] = None,
    ):
        self.settings = settings or ApiSettings()
        self.token = token
        self.session = session or requests.Session()

    def _headers(self) -> Dict[str, str]:
        headers = {"Content-Type": "application/json", "Accept": "application/json"}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        return headers

    def _request(
        self,
        method: str,
        path: str,
        params: Optional[Dict[str, Any]] = None,
        body: Optional[Mapping[str, Any]] = None,
    ) -> Tuple[int, Any]:
        url = self.settings.url_for(path)
        logger.debug(f"{method} {url} params={params}")

        response = self.session.request(
            method,
            url,
            headers=self._headers(),
            params=params,
            json=body,
            timeout=self.settings.timeout_seconds,
        )

        if response.status_code == 401:
            logger.warning(f"{method} {url}: authentication required")
            raise AuthenticationRequired(_error_message(response), url=url)

        if not 200 <= response.status_code < 300:
            message = _error_message(response)
            logger.warning(f"{method} {url} failed: {response.status_code} {message}")
            raise ApiError(response.status_code, message, url=url)

        try:
            return response.status_code, response.json()
        except ValueError:
            raise EnvelopeError(response.status_code, "Response body is not JSON", url=url)

    def _single(self, status: int, payload: Any, parser: Parser, url: str) -> T:
        data = payload.get("data") if isinstance(payload, Mapping) else None
        if not isinstance(data, Mapping):
            raise EnvelopeError(status, "Invalid response format: missing 'data'", url=url)
        return parser(data)

    def get_page(
        self,
        path: str,
        parser: Parser,
        limit: Optional[int] = None,
        offset: int = 0,
    ) -> Page:
        """GET a list endpoint and parse each item."""
        params = {"limit": limit or self.settings.page_limit, "offset": offset}
        status, payload = self._request("GET", path, params=params)

        items = payload.get("items") if isinstance(payload, Mapping) else None
        if not isinstance(items, list) or not all(isinstance(i, Mapping) for i in items):
            raise EnvelopeError(status, "Invalid response format: missing 'items'",
                                url=self.settings.url_for(path))

        return Page(
            items=[parser(item) for item in items],
            total=as_int(payload.get("total"), len(items)),
            limit=as_int(payload.get("limit"), params["limit"]),
            offset=as_int(payload.get("offset"), offset),
        )

    def get_item(self, path: str, parser: Parser) -> T:
        status, payload = self._request("GET", path)
        return self._single(status, payload, parser, self.settings.url_for(path))

    def post_item(self, path: str, body: Mapping[str, Any], parser: Parser) -> T:
        status, payload = self._request("POST", path, body=body)
        return self._single(status, payload, parser, self.settings.url_for(path))

    def patch_item(self, path: str, parser: Parser, body: Optional[Mapping[str, Any]] = None) -> T:
        status, payload = self._request("PATCH", path, body=body)
        return self._single(status, payload, parser, self.settings.url_for(path))
