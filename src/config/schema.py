"""Dataclasses for client and aggregation configuration."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Tuple

from src.config.constants import (
    API_BASE_URL,
    DEFAULT_PAGE_LIMIT,
    RECENT_ACTIVITY_LIMIT,
    REQUEST_TIMEOUT_SECONDS,
)


@dataclass(frozen=True)
class ApiSettings:
    """Connection parameters for the remote fleet API."""

    base_url: str = API_BASE_URL
    timeout_seconds: float = REQUEST_TIMEOUT_SECONDS
    page_limit: int = DEFAULT_PAGE_LIMIT

    def url_for(self, path: str) -> str:
        return f"{self.base_url.rstrip('/')}/{path.lstrip('/')}"


class OnTimePolicy(str, Enum):
    """Which finished trips form the on-time rate denominator."""

    COMPLETED_ONLY = "completed_only"
    COMPLETED_AND_FAILED = "completed_and_failed"

    @property
    def statuses(self) -> Tuple[str, ...]:
        if self is OnTimePolicy.COMPLETED_AND_FAILED:
            return ("COMPLETED", "FAILED_DELIVERY")
        return ("COMPLETED",)


@dataclass(frozen=True)
class AggregationPolicy:
    """Tunable choices for dashboard metrics."""

    on_time: OnTimePolicy = OnTimePolicy.COMPLETED_ONLY
    failed_statuses: Tuple[str, ...] = ("CANCELED", "FAILED_DELIVERY")
    recent_limit: int = RECENT_ACTIVITY_LIMIT
