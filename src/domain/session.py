"""Device session domain model."""

from pydantic import BaseModel, ConfigDict, Field


class DeviceSession(BaseModel):
    """Client-persisted session layered on top of the device id.

    Serialized with camelCase keys so the stored JSON matches what browser
    clients write to local storage. Extra keys are kept as-is.
    """

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    device_id: str = Field(..., alias="deviceId", description="Stable per-client device id")
    rider_profile_id: str | None = Field(
        default=None,
        alias="riderProfileId",
        description="Rider profile linked to this device, once onboarded",
    )
    timestamp: int = Field(..., description="Epoch milliseconds of the last session write")
