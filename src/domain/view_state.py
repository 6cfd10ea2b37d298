"""Client view states and the transitions between them."""

from enum import StrEnum

from src.domain.session import DeviceSession


class ViewState(StrEnum):
    """Which screen the rider client is showing."""

    ONBOARDING = "onboarding"
    DASHBOARD = "dashboard"
    DAILY_ENTRY = "daily_entry"
    ADMIN = "admin"


class ViewEvent(StrEnum):
    """User or system events that move the client between views."""

    PROFILE_CREATED = "profile_created"
    ADD_DAILY_DATA = "add_daily_data"
    ACTIVITY_SAVED = "activity_saved"
    CANCEL = "cancel"
    OPEN_ADMIN = "open_admin"
    BACK = "back"
    SESSION_EXPIRED = "session_expired"


_TRANSITIONS: dict[tuple[ViewState, ViewEvent], ViewState] = {
    (ViewState.ONBOARDING, ViewEvent.PROFILE_CREATED): ViewState.DASHBOARD,
    (ViewState.ONBOARDING, ViewEvent.OPEN_ADMIN): ViewState.ADMIN,
    (ViewState.DASHBOARD, ViewEvent.ADD_DAILY_DATA): ViewState.DAILY_ENTRY,
    (ViewState.DASHBOARD, ViewEvent.OPEN_ADMIN): ViewState.ADMIN,
    (ViewState.DAILY_ENTRY, ViewEvent.ACTIVITY_SAVED): ViewState.DASHBOARD,
    (ViewState.DAILY_ENTRY, ViewEvent.CANCEL): ViewState.DASHBOARD,
    (ViewState.ADMIN, ViewEvent.BACK): ViewState.DASHBOARD,
}


def resolve_initial_view(session: DeviceSession | None) -> ViewState:
    """Pick the first screen: riders without a linked profile go to onboarding."""
    if session is None or not session.rider_profile_id:
        return ViewState.ONBOARDING
    return ViewState.DASHBOARD


def next_view(current: ViewState, event: ViewEvent) -> ViewState:
    """Return the view after `event`, raising ValueError for transitions that don't exist."""
    if event == ViewEvent.SESSION_EXPIRED:
        return ViewState.ONBOARDING

    target = _TRANSITIONS.get((current, event))
    if target is None:
        msg = f"Cannot handle {event} while in {current} view"
        raise ValueError(msg)
    return target
