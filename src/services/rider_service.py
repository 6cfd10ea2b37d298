"""Rider service for onboarding, profile lookup and the platform/area catalog."""

import logging
from typing import Any

from pydantic import BaseModel, ValidationError

from src.core import db_client
from src.core.config import constants
from src.core.errors import RecordValidationError
from src.core.logging import span
from src.domain.rider import DeliveryPlatform, RiderProfile, RiderProfileCreate, ServiceArea


logger = logging.getLogger(__name__)


def _parse_rows(model: type[BaseModel], rows: list[dict[str, Any]]) -> list[Any]:
    parsed = []
    for row in rows:
        try:
            parsed.append(model.model_validate(row))
        except ValidationError as e:
            logger.error("Failed to create %s for row %s: %s", model.__name__, row.get("id"), e)
            continue
    return parsed


async def create_profile(
    *,
    name: str,
    age: int,
    phone: str,
    weekly_goal: float,
    hours_per_day: float,
    areas: list[str] | None = None,
    platforms: list[str] | None = None,
) -> RiderProfile:
    """Register a rider and link the chosen service areas and platforms.

    Area and platform names that aren't in the catalog are skipped.

    Returns:
        Created rider profile

    Raises:
        RecordValidationError: If a profile field is invalid (nothing is written)
        DatabaseError: If a store write fails
    """
    with span("rider_service.create_profile"):
        try:
            payload = RiderProfileCreate(
                name=name,
                age=age,
                phone=phone,
                weekly_goal=weekly_goal,
                hours_per_day=hours_per_day,
                areas=areas or [],
                platforms=platforms or [],
            )
        except ValidationError as e:
            error = RecordValidationError.from_pydantic(e)
            logger.warning("Rejected rider profile: %s", error)
            raise error from e

        record = await db_client.create_record(
            collection="rider_profiles",
            data=payload.model_dump(exclude={"areas", "platforms"}),
        )
        profile = RiderProfile.model_validate(record)

        if payload.areas:
            known_areas = {area.name: area for area in await list_service_areas()}
            for area_name in payload.areas:
                area = known_areas.get(area_name)
                if area is None:
                    logger.warning("Unknown service area %s, not linked", area_name)
                    continue
                await db_client.create_record(
                    collection="rider_service_areas",
                    data={"rider_profile_id": profile.id, "service_area_id": area.id},
                )

        if payload.platforms:
            known_platforms = {platform.name: platform for platform in await list_platforms()}
            for platform_name in payload.platforms:
                platform = known_platforms.get(platform_name)
                if platform is None:
                    logger.warning("Unknown platform %s, not linked", platform_name)
                    continue
                await db_client.create_record(
                    collection="rider_platforms",
                    data={"rider_profile_id": profile.id, "platform_id": platform.id},
                )

        logger.info("Created rider profile %s", profile.id, extra={"rider_profile_id": profile.id})
        return profile


async def get_rider_profile(*, rider_profile_id: str) -> RiderProfile:
    """Fetch one rider profile.

    Raises:
        RecordNotFoundError: If the profile doesn't exist
    """
    with span("rider_service.get_rider_profile"):
        record = await db_client.get_record(collection="rider_profiles", record_id=rider_profile_id)
        return RiderProfile.model_validate(record)


async def get_first_profile() -> RiderProfile | None:
    """Return the earliest registered profile, used for single-rider anonymous access."""
    with span("rider_service.get_first_profile"):
        record = await db_client.get_first_record(collection="rider_profiles", sort="created")
        return RiderProfile.model_validate(record) if record else None


async def fetch_rider_profiles() -> list[RiderProfile]:
    """Fetch all rider profiles, newest first."""
    with span("rider_service.fetch_rider_profiles"):
        rows = await db_client.list_records(
            collection="rider_profiles",
            sort="-created",
            per_page=constants.FLEET_PER_PAGE_LIMIT,
        )
        return _parse_rows(RiderProfile, rows)


async def list_platforms() -> list[DeliveryPlatform]:
    """Platform catalog ordered by category, then name."""
    rows = await db_client.list_records(
        collection="delivery_platforms",
        per_page=constants.DEFAULT_PER_PAGE_LIMIT,
    )
    return sorted(_parse_rows(DeliveryPlatform, rows), key=lambda p: (p.category, p.name))


async def list_service_areas() -> list[ServiceArea]:
    """Service area catalog ordered by name."""
    rows = await db_client.list_records(
        collection="service_areas",
        per_page=constants.DEFAULT_PER_PAGE_LIMIT,
    )
    return sorted(_parse_rows(ServiceArea, rows), key=lambda a: a.name)
