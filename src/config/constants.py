"""Entity enums, status-transition tables, API paths and dashboard defaults."""

# =============================================================================
# Remote API
# =============================================================================

API_BASE_URL = "http://localhost:8000/api/v1"
REQUEST_TIMEOUT_SECONDS = 10.0
DEFAULT_PAGE_LIMIT = 100

# Entity kinds
TRUCK = "truck"
DRIVER = "driver"
TRIP = "trip"
FACILITY = "facility"
INCIDENT_REPORT = "incident_report"
MAINTENANCE_LOG = "maintenance_log"

ENTITY_KINDS = [TRUCK, DRIVER, TRIP, FACILITY, INCIDENT_REPORT, MAINTENANCE_LOG]

RESOURCE_PATHS = {
    TRUCK: "/trucks",
    DRIVER: "/drivers",
    TRIP: "/trips",
    FACILITY: "/facilities",
    INCIDENT_REPORT: "/incident-reports",
    MAINTENANCE_LOG: "/maintenance-logs",
}

# Fields assigned by the server; stripped from create payloads
SERVER_ASSIGNED_FIELDS = ("id", "created_at", "updated_at", "status", "employment_status")

# =============================================================================
# Lifecycle Enums
# =============================================================================

TRUCK_STATUSES = ["AVAILABLE", "IN_TRANSIT", "UNDER_MAINTENANCE", "RETIRED"]

# ON_LEAVE belonged to an earlier driver schema and has no canonical mapping.
DRIVER_EMPLOYMENT_STATUSES = ["ACTIVE", "SUSPENDED", "TERMINATED"]

TRIP_STATUSES = ["SCHEDULED", "IN_TRANSIT", "COMPLETED", "FAILED_DELIVERY", "CANCELED"]

MAINTENANCE_SERVICE_TYPES = ["ROUTINE_MAINTENANCE", "REPAIR", "EMERGENCY"]

INCIDENT_TYPES = [
    "TRAFFIC_ACCIDENT",
    "MECHANICAL_FAILURE",
    "WEATHER_DELAY",
    "CARGO_ISSUE",
    "OTHER",
]

TRAILER_TYPES = [
    "DRY_VAN", "REFRIGERATED", "FLAT_BED", "TANKER", "AUTO_CARRIER",
    "LIVE_STOCK", "INTERMODAL", "LOGGING", "PNEUMATIC_TANK",
]

FUEL_TYPES = ["DIESEL", "GASOLINE", "ELECTRIC", "HYBRID"]

FACILITY_TYPES = [
    "WAREHOUSE", "DISTRIBUTION_CENTER", "CROSS_DOCK",
    "MAINTENANCE_SHOP", "TRUCK_STOP", "PARKING_LOT",
]

FACILITY_SERVICES = [
    "LOADING", "UNLOADING", "STORAGE", "MAINTENANCE", "FUEL",
    "PARKING", "WASHING", "SECURITY", "CUSTOMS_CLEARANCE",
]

STATUS_ENUMS = {
    TRUCK: TRUCK_STATUSES,
    DRIVER: DRIVER_EMPLOYMENT_STATUSES,
    TRIP: TRIP_STATUSES,
}

# Select options per entity field, served to form clients
FIELD_ENUMS = {
    TRUCK: {"status": TRUCK_STATUSES, "trailer_type": TRAILER_TYPES, "fuel_type": FUEL_TYPES},
    DRIVER: {"employment_status": DRIVER_EMPLOYMENT_STATUSES},
    TRIP: {"status": TRIP_STATUSES},
    FACILITY: {"type": FACILITY_TYPES, "services_available": FACILITY_SERVICES},
    INCIDENT_REPORT: {"type": INCIDENT_TYPES},
    MAINTENANCE_LOG: {"service_type": MAINTENANCE_SERVICE_TYPES},
}

# Superseded spellings from older API revisions -> canonical value
STATUS_ALIASES = {
    TRUCK: {"MAINTENANCE": "UNDER_MAINTENANCE"},
    DRIVER: {},
    TRIP: {"IN_PROGRESS": "IN_TRANSIT", "CANCELLED": "CANCELED"},
}

SERVICE_TYPE_ALIASES = {"EMERGENCY_REPAIR": "EMERGENCY"}

# =============================================================================
# Status Transitions
# =============================================================================

# Rows: current status -> ordered (target, action label) pairs.
# Terminal states map to an empty list.
TRANSITION_TABLE = {
    TRUCK: {
        "AVAILABLE": [
            ("IN_TRANSIT", "Set In Transit"),
            ("UNDER_MAINTENANCE", "Set Under Maintenance"),
            ("RETIRED", "Retire Truck"),
        ],
        "IN_TRANSIT": [
            ("AVAILABLE", "Mark as Available"),
            ("UNDER_MAINTENANCE", "Set Under Maintenance"),
        ],
        "UNDER_MAINTENANCE": [
            ("AVAILABLE", "Mark as Available"),
            ("RETIRED", "Retire Truck"),
        ],
        "RETIRED": [],
    },
    DRIVER: {
        "ACTIVE": [
            ("SUSPENDED", "Suspend Driver"),
            ("TERMINATED", "Terminate Driver"),
        ],
        "SUSPENDED": [
            ("ACTIVE", "Reactivate Driver"),
            ("TERMINATED", "Terminate Driver"),
        ],
        "TERMINATED": [],
    },
    TRIP: {
        "SCHEDULED": [
            ("IN_TRANSIT", "Begin Trip"),
            ("CANCELED", "Cancel Trip"),
        ],
        "IN_TRANSIT": [
            ("COMPLETED", "Finish Trip"),
            ("FAILED_DELIVERY", "Mark Delivery Failed"),
        ],
        "COMPLETED": [],
        "FAILED_DELIVERY": [],
        "CANCELED": [],
    },
}

# PATCH path suffix (relative to /<resource>/{id}) that moves an entity to a target
TRANSITION_ACTIONS = {
    TRUCK: {
        "AVAILABLE": "status/available",
        "IN_TRANSIT": "status/in-transit",
        "UNDER_MAINTENANCE": "status/maintenance",
        "RETIRED": "status/retire",
    },
    DRIVER: {
        "ACTIVE": "employment-status/activate",
        "SUSPENDED": "employment-status/suspend",
        "TERMINATED": "employment-status/terminate",
    },
    TRIP: {
        "IN_TRANSIT": "begin",
        "COMPLETED": "finish/success",
        "FAILED_DELIVERY": "finish/failure",
        "CANCELED": "cancel",
    },
}

# =============================================================================
# Dashboard
# =============================================================================

RECENT_ACTIVITY_LIMIT = 5
TOP_DRIVERS_LIMIT = 3

FLEET_STATUS_CHART = [
    ("AVAILABLE", "Available", "#10b981"),
    ("IN_TRANSIT", "In Transit", "#6366f1"),
    ("UNDER_MAINTENANCE", "Maintenance", "#f59e0b"),
    ("RETIRED", "Retired", "#ef4444"),
]

MAINTENANCE_TYPE_CHART = [
    ("ROUTINE_MAINTENANCE", "Routine", "#10b981"),
    ("REPAIR", "Repair", "#f59e0b"),
    ("EMERGENCY", "Emergency", "#ef4444"),
]

UNKNOWN_BUCKET = "UNKNOWN"

DATA_LOAD_ERROR = "DATA_LOAD_ERROR"
DATA_LOAD_MESSAGE = "Unable to load analytics data. Please try refreshing the page."
