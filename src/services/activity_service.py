"""Activity service for recording daily activity and reading it back.

Store reads return records most recent first. Inserts pass through the
validation gate before anything is written; store failures propagate to the
caller unchanged.
"""

import logging
from datetime import date, datetime
from typing import Any

from pydantic import ValidationError

from src.core import db_client
from src.core.config import constants
from src.core.db_client import sanitize_param
from src.core.errors import RecordValidationError
from src.core.logging import log_with_rider_context, span
from src.domain.activity import ActivityCreate, ActivityRecord
from src.models.service_models import RiderDashboard, WeeklyStats
from src.services import activity_aggregator, rider_service


logger = logging.getLogger(__name__)

_COLLECTION = "daily_activities"


def _to_records(rows: list[dict[str, Any]]) -> list[ActivityRecord]:
    """Convert store rows to typed records, skipping rows that don't parse."""
    records = []
    for row in rows:
        try:
            records.append(ActivityRecord.model_validate(row))
        except ValidationError as e:
            logger.error("Failed to create ActivityRecord for row %s: %s", row.get("id"), e)
            continue
    return records


async def fetch_activities(*, rider_profile_id: str) -> list[ActivityRecord]:
    """Fetch one rider's activity records, most recent date first.

    Raises:
        DatabaseError: If the store read fails
    """
    with span("activity_service.fetch_activities"):
        rows = await db_client.list_records(
            collection=_COLLECTION,
            filter_query=f'rider_profile_id = "{sanitize_param(rider_profile_id)}"',
            sort="-activity_date",
            per_page=constants.FLEET_PER_PAGE_LIMIT,
        )
        records = _to_records(rows)
        log_with_rider_context(logger, "debug", "Fetched activities", rider_profile_id, count=len(records))
        return records


async def fetch_all_activities() -> list[ActivityRecord]:
    """Fetch every rider's activity records, most recent date first."""
    with span("activity_service.fetch_all_activities"):
        rows = await db_client.list_records(
            collection=_COLLECTION,
            sort="-activity_date",
            per_page=constants.FLEET_PER_PAGE_LIMIT,
        )
        return _to_records(rows)


async def insert_activity(
    *,
    rider_profile_id: str,
    earnings: float,
    hours_worked: float,
    primary_platform: str,
    satisfaction_rating: int,
    activity_date: date | None = None,
) -> ActivityRecord:
    """Validate and store one day's activity for a rider.

    Args:
        rider_profile_id: Owning rider profile
        earnings: Earnings for the day, >= 0
        hours_worked: Hours worked, in (0, 24]
        primary_platform: Platform label
        satisfaction_rating: Integer rating in [1, 5]
        activity_date: Day the activity covers (default: today)

    Returns:
        The stored record

    Raises:
        RecordValidationError: If a field fails validation (nothing is written)
        DatabaseError: If the store rejects the insert
    """
    with span("activity_service.insert_activity"):
        fields: dict[str, Any] = {
            "rider_profile_id": rider_profile_id,
            "earnings": earnings,
            "hours_worked": hours_worked,
            "primary_platform": primary_platform,
            "satisfaction_rating": satisfaction_rating,
        }
        if activity_date is not None:
            fields["activity_date"] = activity_date

        try:
            payload = ActivityCreate.model_validate(fields)
        except ValidationError as e:
            error = RecordValidationError.from_pydantic(e)
            log_with_rider_context(logger, "warning", "Rejected activity", rider_profile_id, field=error.field)
            raise error from e

        record = await db_client.create_record(collection=_COLLECTION, data=payload.model_dump(mode="json"))
        log_with_rider_context(
            logger,
            "info",
            "Stored activity",
            rider_profile_id,
            activity_date=payload.activity_date.isoformat(),
        )
        return ActivityRecord.model_validate(record)


async def get_rider_weekly_stats(*, rider_profile_id: str, now: datetime | None = None) -> WeeklyStats:
    """Fetch a rider's records and compute this week's statistics."""
    with span("activity_service.get_rider_weekly_stats"):
        records = await fetch_activities(rider_profile_id=rider_profile_id)
        return activity_aggregator.get_weekly_stats(records, now)


async def get_rider_dashboard(*, rider_profile_id: str, now: datetime | None = None) -> RiderDashboard:
    """Weekly stats, goal progress, top platform and today's entry for one rider.

    Raises:
        RecordNotFoundError: If the rider profile doesn't exist
    """
    with span("activity_service.get_rider_dashboard"):
        profile = await rider_service.get_rider_profile(rider_profile_id=rider_profile_id)
        records = await fetch_activities(rider_profile_id=rider_profile_id)
        weekly_stats = activity_aggregator.get_weekly_stats(records, now)

        return RiderDashboard(
            rider_profile_id=profile.id,
            weekly_stats=weekly_stats,
            goal_progress=activity_aggregator.get_goal_progress(profile.weekly_goal, weekly_stats.total_earnings),
            top_platform=activity_aggregator.get_top_platform(records),
            today=activity_aggregator.get_today_activity(records, now),
            avg_daily_earnings=activity_aggregator.get_avg_daily_earnings(weekly_stats),
        )
