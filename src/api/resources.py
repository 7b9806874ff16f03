"""Per-entity endpoints of the fleet API.

Each entity kind gets one :class:`ResourceEndpoint` built from the resource
path table; kinds with a lifecycle status also get ``transition``.
"""

import logging
from typing import Any, Callable, Dict, Mapping, Optional

from src.api.client import ApiClient, Page
from src.config.constants import (
    DRIVER,
    FACILITY,
    INCIDENT_REPORT,
    MAINTENANCE_LOG,
    RESOURCE_PATHS,
    TRIP,
    TRUCK,
)
from src.fleet.common import creation_payload
from src.fleet.driver import Driver
from src.fleet.facility import Facility
from src.fleet.records import IncidentReport, MaintenanceLog
from src.fleet.transitions import REGISTRY, TransitionRegistry
from src.fleet.trip import Trip
from src.fleet.truck import Truck

logger = logging.getLogger(__name__)

PARSERS: Dict[str, Callable[[Mapping[str, Any]], Any]] = {
    TRUCK: Truck.from_dict,
    DRIVER: Driver.from_dict,
    TRIP: Trip.from_dict,
    FACILITY: Facility.from_dict,
    INCIDENT_REPORT: IncidentReport.from_dict,
    MAINTENANCE_LOG: MaintenanceLog.from_dict,
}


class ResourceEndpoint:
    """List/get/create for one entity kind."""

    def __init__(self, client: ApiClient, kind: str, registry: TransitionRegistry = REGISTRY):
        if kind not in RESOURCE_PATHS:
            raise ValueError(f"Unknown entity kind {kind!r}")
        self.client = client
        self.kind = kind
        self.path = RESOURCE_PATHS[kind]
        self.parser = PARSERS[kind]
        self.registry = registry

    def list(self, limit: Optional[int] = None, offset: int = 0) -> Page:
        return self.client.get_page(self.path, self.parser, limit=limit, offset=offset)

    def get(self, entity_id: str) -> Any:
        return self.client.get_item(f"{self.path}/{entity_id}", self.parser)

    def create(self, payload: Mapping[str, Any]) -> Any:
        body = creation_payload(payload)
        logger.info(f"Creating {self.kind}")
        return self.client.post_item(self.path, body, self.parser)

    def transition(self, entity_id: str, target: str) -> Any:
        """Ask the API to move an entity to ``target``.

        Only checks that ``target`` is a known destination for this kind; the
        API decides whether the move is legal from the entity's current state.
        """
        path = self.registry.action_path(self.kind, entity_id, target)
        logger.info(f"{self.kind} {entity_id} -> {target}")
        return self.client.patch_item(path, self.parser)


def endpoint(client: ApiClient, kind: str) -> ResourceEndpoint:
    return ResourceEndpoint(client, kind)


# Truck status actions

def set_truck_available(client: ApiClient, truck_id: str) -> Truck:
    return endpoint(client, TRUCK).transition(truck_id, "AVAILABLE")


def set_truck_in_transit(client: ApiClient, truck_id: str) -> Truck:
    return endpoint(client, TRUCK).transition(truck_id, "IN_TRANSIT")


def set_truck_in_maintenance(client: ApiClient, truck_id: str) -> Truck:
    return endpoint(client, TRUCK).transition(truck_id, "UNDER_MAINTENANCE")


def retire_truck(client: ApiClient, truck_id: str) -> Truck:
    return endpoint(client, TRUCK).transition(truck_id, "RETIRED")


# Driver employment actions

def activate_driver(client: ApiClient, driver_id: str) -> Driver:
    return endpoint(client, DRIVER).transition(driver_id, "ACTIVE")


def suspend_driver(client: ApiClient, driver_id: str) -> Driver:
    return endpoint(client, DRIVER).transition(driver_id, "SUSPENDED")


def terminate_driver(client: ApiClient, driver_id: str) -> Driver:
    return endpoint(client, DRIVER).transition(driver_id, "TERMINATED")


# Trip lifecycle actions

def begin_trip(client: ApiClient, trip_id: str) -> Trip:
    return endpoint(client, TRIP).transition(trip_id, "IN_TRANSIT")


def finish_trip(client: ApiClient, trip_id: str, success: bool = True) -> Trip:
    target = "COMPLETED" if success else "FAILED_DELIVERY"
    return endpoint(client, TRIP).transition(trip_id, target)


def cancel_trip(client: ApiClient, trip_id: str) -> Trip:
    return endpoint(client, TRIP).transition(trip_id, "CANCELED")
