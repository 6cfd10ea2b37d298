"""Fleet service: every rider's summary plus the fleet-wide rollup."""

import logging
from datetime import datetime

from src.core.logging import span
from src.models.service_models import FleetOverview
from src.services import activity_aggregator, activity_service, rider_service


logger = logging.getLogger(__name__)


async def get_fleet_overview(*, now: datetime | None = None) -> FleetOverview:
    """Summarize every rider and roll the summaries up into fleet stats.

    Args:
        now: Reference instant for the week window and active-rider check

    Returns:
        FleetOverview with per-rider summaries (newest rider first) and FleetStats

    Raises:
        DatabaseError: If either store read fails
    """
    with span("fleet_service.get_fleet_overview"):
        profiles = await rider_service.fetch_rider_profiles()
        if not profiles:
            return FleetOverview(stats=activity_aggregator.get_rider_stats([], now), riders=[])

        activities = await activity_service.fetch_all_activities()
        summaries = activity_aggregator.summarize_fleet(profiles, activities, now)
        stats = activity_aggregator.get_rider_stats(summaries, now)

        logger.info(
            "Fleet overview computed",
            extra={"total_riders": stats.total_riders, "active_riders": stats.active_riders},
        )
        return FleetOverview(stats=stats, riders=summaries)
