"""Pure aggregation over daily activity records.

Everything here is synchronous and side-effect free. Each function takes an
explicit snapshot of records (and a reference `now`) and returns a fresh
result, so callers can recompute on demand without shared state.

Key Concepts:
- Week window: starts at local midnight on the most recent Sunday. It is
  derived from calendar fields, never by subtracting 7x24h, so it stays right
  across daylight-saving changes.
- Current earnings: the weekly total, compared against each rider's weekly
  goal in the fleet view. It is not a lifetime figure.
- Active rider: last activity strictly newer than now minus 3 days, compared
  as wall-clock instants rather than calendar days.
- Empty input yields zero-valued statistics; nothing in here raises on it.
"""

import logging
from collections.abc import Iterable, Sequence
from datetime import date, datetime, time, timedelta

from src.core.config import constants
from src.domain.activity import ActivityRecord
from src.domain.rider import RiderProfile
from src.models.service_models import (
    FleetStats,
    GoalProgress,
    PlatformEarnings,
    RiderSummary,
    WeeklyStats,
)


logger = logging.getLogger(__name__)


def _now(now: datetime | None) -> datetime:
    return now if now is not None else datetime.now()


def _mean(values: Sequence[float]) -> float:
    """Arithmetic mean, defined as 0 for an empty sequence."""
    if not values:
        return 0.0
    return sum(values) / len(values)


def _start_of_day(day: date, now: datetime) -> datetime:
    """Local midnight of `day`, in the same timezone (or naivety) as `now`."""
    return datetime.combine(day, time.min, tzinfo=now.tzinfo)


def _local_date(value: datetime, now: datetime) -> date:
    """Calendar date of `value` as seen from `now`'s timezone."""
    if value.tzinfo is None:
        return value.date()
    if now.tzinfo is None:
        return value.astimezone().date()
    return value.astimezone(now.tzinfo).date()


def week_start(now: datetime | None = None) -> datetime:
    """Return local midnight of the most recent Sunday (today, if today is Sunday)."""
    now = _now(now)
    today = now.date()
    days_since_week_start = (today.weekday() - constants.WEEK_START_WEEKDAY) % 7
    return _start_of_day(today - timedelta(days=days_since_week_start), now)


def is_in_current_week(record: ActivityRecord, now: datetime | None = None) -> bool:
    """True iff the record's day starts on or after the current week boundary."""
    now = _now(now)
    return _start_of_day(record.activity_date, now) >= week_start(now)


def filter_current_week(records: Iterable[ActivityRecord], now: datetime | None = None) -> list[ActivityRecord]:
    """Keep records in the current week, preserving the order they were supplied in."""
    now = _now(now)
    return [record for record in records if is_in_current_week(record, now)]


def get_weekly_stats(records: Iterable[ActivityRecord], now: datetime | None = None) -> WeeklyStats:
    """Compute a rider's statistics for the current week window.

    Args:
        records: The rider's activity records, most recent first
        now: Reference instant (defaults to the local wall clock)

    Returns:
        WeeklyStats with totals, mean rating (0 when empty), day count and the
        filtered records themselves
    """
    weekly = filter_current_week(records, now)

    return WeeklyStats(
        total_earnings=sum(record.earnings for record in weekly),
        total_hours=sum(record.hours_worked for record in weekly),
        avg_rating=_mean([record.satisfaction_rating for record in weekly]),
        days_worked=len(weekly),
        activities=weekly,
    )


def summarize_rider(
    profile: RiderProfile,
    records: Sequence[ActivityRecord],
    now: datetime | None = None,
) -> RiderSummary:
    """Build the fleet-view summary for one rider.

    `current_earnings` is the weekly total; the other figures cover all of the
    rider's records.
    """
    now = _now(now)
    weekly = get_weekly_stats(records, now)

    if records:
        last_active = max(record.activity_date for record in records)
    else:
        last_active = _local_date(profile.created, now)

    return RiderSummary(
        profile=profile,
        current_earnings=weekly.total_earnings,
        avg_daily_hours=_mean([record.hours_worked for record in records]),
        last_active=last_active,
        satisfaction_rating=_mean([record.satisfaction_rating for record in records]),
        activities=list(records),
    )


def group_by_rider(activities: Iterable[ActivityRecord]) -> dict[str, list[ActivityRecord]]:
    """Group activities by rider, keeping each rider's records in supplied order."""
    grouped: dict[str, list[ActivityRecord]] = {}
    for activity in activities:
        grouped.setdefault(activity.rider_profile_id, []).append(activity)
    return grouped


def summarize_fleet(
    profiles: Iterable[RiderProfile],
    activities: Iterable[ActivityRecord],
    now: datetime | None = None,
) -> list[RiderSummary]:
    """Summarize every rider profile against the fleet-wide activity list.

    Activities whose rider has no profile are ignored.
    """
    now = _now(now)
    grouped = group_by_rider(activities)
    return [summarize_rider(profile, grouped.get(profile.id, []), now) for profile in profiles]


def is_active_rider(summary: RiderSummary, now: datetime | None = None) -> bool:
    """True iff the rider's last activity falls after now minus the active window.

    The comparison is between instants: a day recorded 71 hours ago counts,
    73 hours ago does not.
    """
    now = _now(now)
    cutoff = now - timedelta(days=constants.ACTIVE_RIDER_WINDOW_DAYS)
    return _start_of_day(summary.last_active, now) > cutoff


def get_rider_stats(summaries: Sequence[RiderSummary], now: datetime | None = None) -> FleetStats:
    """Roll rider summaries up into fleet statistics."""
    now = _now(now)
    active_riders = sum(1 for summary in summaries if is_active_rider(summary, now))

    stats = FleetStats(
        total_riders=len(summaries),
        active_riders=active_riders,
        total_earnings=sum(summary.current_earnings for summary in summaries),
        avg_satisfaction=_mean([summary.satisfaction_rating for summary in summaries]),
    )
    logger.debug("Computed fleet stats", extra=stats.model_dump())
    return stats


def get_platform_breakdown(records: Iterable[ActivityRecord]) -> list[PlatformEarnings]:
    """Sum earnings per platform, highest first.

    Ties keep the order in which each platform first appears in `records`.
    """
    totals: dict[str, float] = {}
    for record in records:
        totals[record.primary_platform] = totals.get(record.primary_platform, 0.0) + record.earnings

    # sorted() is stable, so equal totals stay in first-appearance order
    ranked = sorted(totals.items(), key=lambda item: item[1], reverse=True)
    return [PlatformEarnings(platform=platform, earnings=earnings) for platform, earnings in ranked]


def get_top_platform(records: Iterable[ActivityRecord]) -> PlatformEarnings | None:
    """Return the highest-earning platform, or None when there are no records."""
    breakdown = get_platform_breakdown(records)
    return breakdown[0] if breakdown else None


def get_today_activity(records: Iterable[ActivityRecord], now: datetime | None = None) -> ActivityRecord | None:
    """Return the first supplied record dated today, or None if nothing was logged today."""
    today = _now(now).date()
    return next((record for record in records if record.activity_date == today), None)


def get_avg_daily_earnings(stats: WeeklyStats) -> float:
    """Mean earnings per worked day in the week window, 0 when no day was worked."""
    if stats.days_worked == 0:
        return 0.0
    return stats.total_earnings / stats.days_worked


def get_goal_progress(weekly_goal: float, current_earnings: float) -> GoalProgress:
    """Progress towards the weekly goal, capped at 100% with remaining floored at 0."""
    if weekly_goal > 0:
        percentage = min(current_earnings / weekly_goal * 100, constants.MAX_PROGRESS_PERCENTAGE)
    else:
        percentage = 0.0

    return GoalProgress(
        weekly_goal=weekly_goal,
        current_earnings=current_earnings,
        progress_percentage=percentage,
        remaining_amount=max(weekly_goal - current_earnings, 0.0),
    )
