from src.services import (
    activity_aggregator,
    activity_service,
    device_identity,
    fleet_service,
    rider_service,
)


__all__ = [
    "activity_aggregator",
    "activity_service",
    "device_identity",
    "fleet_service",
    "rider_service",
]
