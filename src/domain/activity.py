"""Daily activity domain models."""

from datetime import date, datetime

from pydantic import BaseModel, Field, field_validator

from src.core.config import constants


class ActivityRecord(BaseModel):
    """One rider's reported outcome for a single calendar day."""

    id: str = Field(..., description="Unique activity ID from database")
    rider_profile_id: str = Field(..., description="ID of the owning rider profile")
    activity_date: date = Field(..., description="Calendar day the activity covers")
    earnings: float = Field(..., description="Earnings for the day in currency units")
    hours_worked: float = Field(..., description="Hours worked that day")
    primary_platform: str = Field(..., description="Delivery platform used most that day")
    satisfaction_rating: int = Field(..., description="Rider's satisfaction with the day (1-5)")
    created: datetime | None = Field(default=None, description="Creation timestamp")

    @field_validator("activity_date", mode="before")
    @classmethod
    def parse_activity_date(cls, v: object) -> object:
        """Accept full ISO timestamps by keeping only the date part."""
        if isinstance(v, str) and "T" in v:
            return v.split("T", 1)[0]
        if isinstance(v, datetime):
            return v.date()
        return v


class ActivityCreate(BaseModel):
    """Validated payload for inserting a daily activity.

    Validation happens here, before anything reaches the store.
    """

    rider_profile_id: str = Field(..., description="ID of the owning rider profile")
    activity_date: date = Field(default_factory=date.today, description="Calendar day, defaults to today")
    earnings: float = Field(..., allow_inf_nan=False, description="Earnings for the day")
    hours_worked: float = Field(..., allow_inf_nan=False, description="Hours worked that day")
    primary_platform: str = Field(..., description="Delivery platform label")
    satisfaction_rating: int = Field(..., description="Satisfaction rating (1-5)")

    @field_validator("earnings")
    @classmethod
    def validate_earnings(cls, v: float) -> float:
        """Earnings cannot be negative."""
        if v < constants.MIN_EARNINGS:
            raise ValueError("Earnings cannot be negative")
        return v

    @field_validator("hours_worked")
    @classmethod
    def validate_hours_worked(cls, v: float) -> float:
        """Hours must be in (0, 24]."""
        if not 0 < v <= constants.MAX_HOURS_PER_DAY:
            raise ValueError(f"Hours worked must be greater than 0 and at most {constants.MAX_HOURS_PER_DAY:g}")
        return v

    @field_validator("satisfaction_rating")
    @classmethod
    def validate_satisfaction_rating(cls, v: int) -> int:
        """Rating must be in [1, 5]."""
        if not constants.MIN_RATING <= v <= constants.MAX_RATING:
            raise ValueError(f"Rating must be between {constants.MIN_RATING} and {constants.MAX_RATING}")
        return v

    @field_validator("primary_platform")
    @classmethod
    def validate_primary_platform(cls, v: str) -> str:
        """Platform label must be present."""
        v = v.strip()
        if not v:
            raise ValueError("Primary platform is required")
        return v
