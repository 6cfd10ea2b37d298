"""Domain models and DTOs."""

from src.domain.activity import ActivityCreate, ActivityRecord
from src.domain.rider import DeliveryPlatform, RiderProfile, RiderProfileCreate, ServiceArea
from src.domain.session import DeviceSession
from src.domain.view_state import ViewEvent, ViewState


__all__ = [
    "ActivityCreate",
    "ActivityRecord",
    "DeliveryPlatform",
    "DeviceSession",
    "RiderProfile",
    "RiderProfileCreate",
    "ServiceArea",
    "ViewEvent",
    "ViewState",
]
