"""Rider-side client: device session, current view, and calls to the API.

The client keeps its own view state and device identity. Nothing here is
trusted by the server; the session only remembers which rider profile this
device registered.
"""

import logging
from datetime import date
from typing import Any

import httpx

from src.core.errors import RecordValidationError, SessionRequiredError
from src.domain.activity import ActivityRecord
from src.domain.rider import RiderProfile
from src.domain.view_state import ViewEvent, ViewState, next_view, resolve_initial_view
from src.models.service_models import RiderDashboard
from src.services.device_identity import DeviceIdentity


logger = logging.getLogger(__name__)


class RiderClient:
    """Drives the rider screens against the HTTP API."""

    def __init__(self, http: httpx.AsyncClient, identity: DeviceIdentity):
        self._http = http
        self._identity = identity
        self.view = ViewState.ONBOARDING

    @property
    def rider_profile_id(self) -> str | None:
        session = self._identity.get_session()
        return session.rider_profile_id if session else None

    def start(self) -> ViewState:
        """Pick the first screen from the persisted session."""
        self.view = resolve_initial_view(self._identity.get_session())
        logger.info("Rider client started", extra={"view": self.view, "device_id": self._identity.get_device_id()})
        return self.view

    def dispatch(self, event: ViewEvent) -> ViewState:
        self.view = next_view(self.view, event)
        return self.view

    async def register(self, **profile: Any) -> RiderProfile:
        """Create a rider profile and link it to this device.

        Raises:
            RecordValidationError: If the mobile number is malformed (checked before any request)
            httpx.HTTPStatusError: If the API rejects the profile
        """
        if not self._identity.is_valid_mobile(profile.get("phone")):
            raise RecordValidationError("phone", "Mobile number must be exactly 10 digits")

        response = await self._http.post("/riders", json=profile)
        response.raise_for_status()
        rider = RiderProfile.model_validate(response.json())

        self._identity.set_session(rider_profile_id=rider.id)
        self.dispatch(ViewEvent.PROFILE_CREATED)
        return rider

    def _require_rider(self) -> str:
        rider_profile_id = self.rider_profile_id
        if rider_profile_id is None:
            self.view = next_view(self.view, ViewEvent.SESSION_EXPIRED)
            raise SessionRequiredError("No rider session on this device")
        return rider_profile_id

    async def submit_activity(
        self,
        *,
        earnings: float,
        hours_worked: float,
        primary_platform: str,
        satisfaction_rating: int,
        activity_date: date | None = None,
    ) -> ActivityRecord:
        """Send one day's entry for the registered rider."""
        rider_profile_id = self._require_rider()
        body: dict[str, Any] = {
            "earnings": earnings,
            "hours_worked": hours_worked,
            "primary_platform": primary_platform,
            "satisfaction_rating": satisfaction_rating,
        }
        if activity_date is not None:
            body["activity_date"] = activity_date.isoformat()

        response = await self._http.post(f"/riders/{rider_profile_id}/activities", json=body)
        response.raise_for_status()
        if self.view == ViewState.DAILY_ENTRY:
            self.dispatch(ViewEvent.ACTIVITY_SAVED)
        return ActivityRecord.model_validate(response.json())

    async def dashboard(self) -> RiderDashboard:
        rider_profile_id = self._require_rider()
        response = await self._http.get(f"/riders/{rider_profile_id}/dashboard")
        response.raise_for_status()
        return RiderDashboard.model_validate(response.json())

    def sign_out(self) -> None:
        """Forget the rider on this device; the device id itself is kept."""
        self._identity.clear_session()
        self.view = next_view(self.view, ViewEvent.SESSION_EXPIRED)
