"""HTTP API for rider clients and the fleet operator view."""

import logging
from datetime import date

from fastapi import APIRouter, HTTPException, status
from pydantic import BaseModel, Field

from src.domain.activity import ActivityRecord
from src.domain.rider import DeliveryPlatform, RiderProfile, ServiceArea
from src.models.service_models import FleetOverview, FleetStats, RiderDashboard, WeeklyStats
from src.services import activity_service, fleet_service, rider_service


logger = logging.getLogger(__name__)

router = APIRouter(tags=["riders"])


class RiderRegistration(BaseModel):
    """Onboarding form body. Field rules are enforced by the rider service."""

    name: str
    age: int
    phone: str
    weekly_goal: float
    hours_per_day: float
    areas: list[str] = Field(default_factory=list)
    platforms: list[str] = Field(default_factory=list)


class ActivitySubmission(BaseModel):
    """Daily entry form body. Field rules are enforced by the activity service."""

    earnings: float
    hours_worked: float
    primary_platform: str
    satisfaction_rating: int
    activity_date: date | None = None


@router.post("/riders", status_code=status.HTTP_201_CREATED)
async def create_rider(body: RiderRegistration) -> RiderProfile:
    """Register a new rider profile."""
    return await rider_service.create_profile(**body.model_dump())


@router.get("/riders")
async def list_riders() -> list[RiderProfile]:
    """All rider profiles, newest first."""
    return await rider_service.fetch_rider_profiles()


@router.get("/riders/first")
async def get_first_rider() -> RiderProfile:
    """The earliest registered rider, for single-rider deployments."""
    profile = await rider_service.get_first_profile()
    if profile is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="No rider profile registered")
    return profile


@router.get("/riders/{rider_profile_id}")
async def get_rider(rider_profile_id: str) -> RiderProfile:
    return await rider_service.get_rider_profile(rider_profile_id=rider_profile_id)


@router.get("/riders/{rider_profile_id}/activities")
async def list_activities(rider_profile_id: str) -> list[ActivityRecord]:
    """A rider's activity records, most recent first."""
    await rider_service.get_rider_profile(rider_profile_id=rider_profile_id)
    return await activity_service.fetch_activities(rider_profile_id=rider_profile_id)


@router.post("/riders/{rider_profile_id}/activities", status_code=status.HTTP_201_CREATED)
async def add_activity(rider_profile_id: str, body: ActivitySubmission) -> ActivityRecord:
    """Record one day's activity for a rider."""
    await rider_service.get_rider_profile(rider_profile_id=rider_profile_id)
    return await activity_service.insert_activity(rider_profile_id=rider_profile_id, **body.model_dump())


@router.get("/riders/{rider_profile_id}/weekly-stats")
async def get_weekly_stats(rider_profile_id: str) -> WeeklyStats:
    await rider_service.get_rider_profile(rider_profile_id=rider_profile_id)
    return await activity_service.get_rider_weekly_stats(rider_profile_id=rider_profile_id)


@router.get("/riders/{rider_profile_id}/dashboard")
async def get_dashboard(rider_profile_id: str) -> RiderDashboard:
    """Weekly stats with goal progress and top platform."""
    return await activity_service.get_rider_dashboard(rider_profile_id=rider_profile_id)


@router.get("/fleet", tags=["fleet"])
async def get_fleet() -> FleetOverview:
    """Every rider's summary plus the fleet rollup."""
    return await fleet_service.get_fleet_overview()


@router.get("/fleet/stats", tags=["fleet"])
async def get_fleet_stats() -> FleetStats:
    overview = await fleet_service.get_fleet_overview()
    return overview.stats


@router.get("/catalog/platforms", tags=["catalog"])
async def get_platforms() -> list[DeliveryPlatform]:
    return await rider_service.list_platforms()


@router.get("/catalog/service-areas", tags=["catalog"])
async def get_service_areas() -> list[ServiceArea]:
    return await rider_service.list_service_areas()
