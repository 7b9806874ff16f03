"""Parallel fan-out of the dashboard reads, joined before aggregation.

The five list requests are issued together on a thread pool. Each returns an
independent page, so nothing is shared between workers. Requests are not
retried or cancelled: every one runs to completion or error.
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Dict, Sequence

import requests

from src.analytics.aggregation import DEFAULT_POLICY, DashboardInputs, build_report, empty_report
from src.analytics.report import DashboardReport, LoadError
from src.api.client import ApiClient, Page
from src.api.errors import ApiError, AuthenticationRequired
from src.api.resources import ResourceEndpoint
from src.config.constants import (
    DATA_LOAD_ERROR,
    DATA_LOAD_MESSAGE,
    DRIVER,
    INCIDENT_REPORT,
    MAINTENANCE_LOG,
    TRIP,
    TRUCK,
)
from src.config.schema import AggregationPolicy

logger = logging.getLogger(__name__)

DASHBOARD_KINDS = [TRIP, TRUCK, INCIDENT_REPORT, MAINTENANCE_LOG, DRIVER]


def fetch_pages(client: ApiClient, kinds: Sequence[str] = DASHBOARD_KINDS) -> Dict[str, Page]:
    """Fetch the first page of each kind concurrently.

    Waits for every request. If any failed, an authentication failure wins
    over other errors so the caller can re-authenticate; otherwise the first
    failure in ``kinds`` order is raised.
    """
    with ThreadPoolExecutor(max_workers=len(kinds)) as pool:
        futures = {kind: pool.submit(ResourceEndpoint(client, kind).list) for kind in kinds}

    failures = [(kind, f.exception()) for kind, f in futures.items() if f.exception() is not None]
    for kind, exc in failures:
        logger.error(f"Failed to load {kind} list: {exc}")

    auth = next((exc for _, exc in failures if isinstance(exc, AuthenticationRequired)), None)
    if auth is not None:
        raise auth
    if failures:
        raise failures[0][1]

    return {kind: f.result() for kind, f in futures.items()}


def fetch_dashboard_inputs(client: ApiClient) -> DashboardInputs:
    pages = fetch_pages(client)
    return DashboardInputs(
        trips=pages[TRIP].items,
        trucks=pages[TRUCK].items,
        incidents=pages[INCIDENT_REPORT].items,
        maintenance_logs=pages[MAINTENANCE_LOG].items,
        drivers=pages[DRIVER].items,
        trips_total=pages[TRIP].total,
        trucks_total=pages[TRUCK].total,
        incidents_total=pages[INCIDENT_REPORT].total,
        drivers_total=pages[DRIVER].total,
    )


def load_dashboard(
    client: ApiClient, policy: AggregationPolicy = DEFAULT_POLICY,
) -> DashboardReport:
    """Fetch and aggregate the dashboard.

    Load failures degrade to a zero-valued report carrying ``error``.
    ``AuthenticationRequired`` is raised instead, since only the caller can
    obtain a new credential.
    """
    try:
        inputs = fetch_dashboard_inputs(client)
    except AuthenticationRequired:
        raise
    except (ApiError, requests.RequestException) as exc:
        logger.error(f"Error loading analytics data: {exc}")
        return empty_report(LoadError(message=DATA_LOAD_MESSAGE, code=DATA_LOAD_ERROR), policy)

    return build_report(inputs, policy)
