"""Rider profile domain models."""

from datetime import datetime

from pydantic import BaseModel, Field, field_validator

from src.core.config import constants
from src.core.validators import is_valid_mobile


# Constants for validation
MAX_NAME_LENGTH = 50


class RiderProfile(BaseModel):
    """Rider profile data transfer object."""

    id: str = Field(..., description="Unique rider profile ID from database")
    name: str = Field(..., description="Display name of the rider")
    age: int = Field(..., description="Rider age in years")
    phone: str = Field(..., description="10-digit mobile number")
    weekly_goal: float = Field(..., description="Target earnings for the current week")
    hours_per_day: float = Field(..., description="Hours the rider is available per day")
    created: datetime = Field(..., description="Registration timestamp")
    user_id: str | None = Field(default=None, description="Linked verified identity, if any")


class RiderProfileCreate(BaseModel):
    """Onboarding payload for a new rider."""

    name: str = Field(..., description="Display name of the rider")
    age: int = Field(..., description="Rider age in years")
    phone: str = Field(..., description="10-digit mobile number")
    weekly_goal: float = Field(..., allow_inf_nan=False, description="Target earnings per week")
    hours_per_day: float = Field(..., allow_inf_nan=False, description="Available hours per day")
    areas: list[str] = Field(default_factory=list, description="Service area names to link")
    platforms: list[str] = Field(default_factory=list, description="Delivery platform names to link")

    @field_validator("name")
    @classmethod
    def validate_name_usable(cls, v: str) -> str:
        """Validate name is non-empty and reasonably short."""
        v = v.strip()
        if not v:
            raise ValueError("Name cannot be empty")
        if len(v) > MAX_NAME_LENGTH:
            raise ValueError(f"Name too long (max {MAX_NAME_LENGTH} characters)")
        return v

    @field_validator("age")
    @classmethod
    def validate_age(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("Age must be a positive number")
        return v

    @field_validator("phone")
    @classmethod
    def validate_phone(cls, v: str) -> str:
        """Validate the mobile number is exactly 10 digits."""
        if not is_valid_mobile(v):
            raise ValueError("Mobile number must be exactly 10 digits")
        return v

    @field_validator("weekly_goal")
    @classmethod
    def validate_weekly_goal(cls, v: float) -> float:
        if v < 0:
            raise ValueError("Weekly goal cannot be negative")
        return v

    @field_validator("hours_per_day")
    @classmethod
    def validate_hours_per_day(cls, v: float) -> float:
        if not 0 < v <= constants.MAX_HOURS_PER_DAY:
            raise ValueError(f"Hours per day must be greater than 0 and at most {constants.MAX_HOURS_PER_DAY:g}")
        return v


class DeliveryPlatform(BaseModel):
    """Delivery platform catalog entry."""

    id: str
    name: str
    category: str


class ServiceArea(BaseModel):
    """Service area catalog entry."""

    id: str
    name: str
