"""Integration tests for the rider client driving the API in-process."""

from collections.abc import AsyncIterator

import httpx
import pytest

from src.core.errors import RecordValidationError, SessionRequiredError
from src.domain.view_state import ViewEvent, ViewState
from src.interface.rider_client import RiderClient
from src.main import app
from src.services.device_identity import ClientEnvironment, DeviceIdentity, FileStorage


@pytest.fixture
async def http(initialized_db) -> AsyncIterator[httpx.AsyncClient]:
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://ridertrack.test") as client:
        yield client


@pytest.fixture
def device_identity(tmp_path) -> DeviceIdentity:
    env = ClientEnvironment(user_agent="Mozilla/5.0 (Linux; Android 14) Mobile", screen_width=412, screen_height=915)
    return DeviceIdentity(FileStorage(tmp_path / "device.json"), env)


@pytest.mark.integration
class TestRiderClient:
    async def test_new_device_starts_at_onboarding(self, http, device_identity):
        client = RiderClient(http, device_identity)

        assert client.start() == ViewState.ONBOARDING
        assert client.rider_profile_id is None

    async def test_register_links_session_and_opens_dashboard(self, http, device_identity, rider_payload):
        client = RiderClient(http, device_identity)
        client.start()

        rider = await client.register(**rider_payload)

        assert client.view == ViewState.DASHBOARD
        assert client.rider_profile_id == rider.id
        # A fresh client on the same device resumes at the dashboard
        assert RiderClient(http, device_identity).start() == ViewState.DASHBOARD

    async def test_bad_mobile_rejected_before_request(self, http, device_identity, rider_payload):
        client = RiderClient(http, device_identity)
        client.start()

        with pytest.raises(RecordValidationError):
            await client.register(**{**rider_payload, "phone": "98765"})

        assert client.view == ViewState.ONBOARDING
        assert (await http.get("/riders")).json() == []

    async def test_daily_entry_round_trip(self, http, device_identity, rider_payload):
        client = RiderClient(http, device_identity)
        client.start()
        await client.register(**rider_payload)

        client.dispatch(ViewEvent.ADD_DAILY_DATA)
        record = await client.submit_activity(
            earnings=650, hours_worked=8, primary_platform="Swiggy", satisfaction_rating=4
        )
        dashboard = await client.dashboard()

        assert client.view == ViewState.DASHBOARD
        assert record.earnings == 650
        assert dashboard.weekly_stats.total_earnings == 650
        assert dashboard.top_platform.platform == "Swiggy"

    async def test_invalid_entry_surfaces_http_error(self, http, device_identity, rider_payload):
        client = RiderClient(http, device_identity)
        client.start()
        await client.register(**rider_payload)

        with pytest.raises(httpx.HTTPStatusError) as exc_info:
            await client.submit_activity(earnings=-5, hours_worked=8, primary_platform="Swiggy", satisfaction_rating=4)

        assert exc_info.value.response.status_code == 422

    async def test_sign_out_returns_to_onboarding_and_keeps_device(self, http, device_identity, rider_payload):
        client = RiderClient(http, device_identity)
        client.start()
        await client.register(**rider_payload)
        device_id = device_identity.get_device_id()

        client.sign_out()

        assert client.view == ViewState.ONBOARDING
        assert device_identity.get_device_id() == device_id
        with pytest.raises(SessionRequiredError):
            await client.dashboard()
