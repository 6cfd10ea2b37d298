"""Pydantic models for service layer return types.

These are derived views: recomputed on demand from activity records and never
persisted.
"""

from datetime import date

from pydantic import BaseModel, Field

from src.domain.activity import ActivityRecord
from src.domain.rider import RiderProfile


class WeeklyStats(BaseModel):
    """One rider's statistics for the current week window."""

    total_earnings: float = 0.0
    total_hours: float = 0.0
    avg_rating: float = 0.0
    days_worked: int = 0
    activities: list[ActivityRecord] = Field(default_factory=list)


class RiderSummary(BaseModel):
    """Rider profile enriched with derived stats for the fleet view."""

    profile: RiderProfile
    current_earnings: float = Field(description="Earnings in the current week window, compared against the weekly goal")
    avg_daily_hours: float = Field(description="Lifetime mean hours per recorded day")
    last_active: date = Field(description="Most recent activity date, or registration date without activity")
    satisfaction_rating: float = Field(description="Lifetime mean satisfaction rating")
    activities: list[ActivityRecord] = Field(default_factory=list)


class FleetStats(BaseModel):
    """Aggregate statistics across all riders."""

    total_riders: int = 0
    active_riders: int = 0
    total_earnings: float = 0.0
    avg_satisfaction: float = 0.0


class GoalProgress(BaseModel):
    """Progress towards a rider's weekly earnings goal."""

    weekly_goal: float
    current_earnings: float
    progress_percentage: float
    remaining_amount: float


class PlatformEarnings(BaseModel):
    """Earnings attributed to one delivery platform."""

    platform: str
    earnings: float


class RiderDashboard(BaseModel):
    """Everything the rider dashboard shows for the current week."""

    rider_profile_id: str
    weekly_stats: WeeklyStats
    goal_progress: GoalProgress
    top_platform: PlatformEarnings | None = None
    today: ActivityRecord | None = Field(default=None, description="Entry logged for today, if any")
    avg_daily_earnings: float = Field(default=0.0, description="Mean earnings per worked day this week")


class FleetOverview(BaseModel):
    """Fleet rollup plus the per-rider summaries it was computed from."""

    stats: FleetStats
    riders: list[RiderSummary]
