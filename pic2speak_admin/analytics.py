from __future__ import annotations

import logging

from .errors import ApiError
from .gateway import Gateway
from .models import HealthSnapshot, StatsSnapshot


LOGGER = logging.getLogger(__name__)

STATS_RANGES = ("today", "week", "month", "year")


class AnalyticsStore:
    """Latest dashboard statistics and health check, each replaced wholesale."""

    def __init__(self, gateway: Gateway) -> None:
        self.gateway = gateway
        self.stats = StatsSnapshot()
        self.health = HealthSnapshot()
        self.loading = False
        self.error: str | None = None

    def fetch_stats(self, time_range: str = "year") -> StatsSnapshot:
        if time_range not in STATS_RANGES:
            raise ValueError(f"range must be one of {', '.join(STATS_RANGES)}")
        self.loading = True
        self.error = None
        try:
            data = self.gateway.send(
                "GET",
                "/admin/stats-summary",
                params={"range": time_range},
                fallback="Failed to fetch dashboard data",
            )
        except ApiError as exc:
            self.loading = False
            self.error = exc.message
            raise
        self.loading = False
        self.stats = StatsSnapshot.from_api(data.get("stats"))
        return self.stats

    def fetch_health(self) -> HealthSnapshot:
        try:
            data = self.gateway.send("GET", "/admin/health", fallback="System health check failed")
        except ApiError as exc:
            LOGGER.warning("Health check failed: %s", exc.message)
            self.health = HealthSnapshot.unhealthy()
            return self.health
        self.health = HealthSnapshot(
            status=str(data.get("status") or "Unknown"),
            details=dict(data.get("details") or {}),
        )
        return self.health

    def reset(self) -> None:
        self.stats = StatsSnapshot()
        self.health = HealthSnapshot()

    def clear_error(self) -> None:
        self.error = None
