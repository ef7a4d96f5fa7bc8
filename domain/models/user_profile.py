"""
User profile: scheduling-relevant user settings.
"""

from typing import Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import BaseModel, ConfigDict, Field, field_validator


class UserProfile(BaseModel):
    """Per-user scheduling state."""

    model_config = ConfigDict(frozen=True)

    user_id: str = Field(..., min_length=1)
    selected_gym_id: Optional[str] = None
    current_pass_number: int = Field(
        default=1,
        ge=1,
        description="Sequential session counter, used as a cyclic schedule pointer",
    )
    timezone: str = Field(default="UTC", description="IANA time zone name")

    @field_validator("timezone")
    @classmethod
    def validate_timezone(cls, v: str) -> str:
        try:
            ZoneInfo(v)
        except (ZoneInfoNotFoundError, ValueError):
            raise ValueError(f"Unknown time zone '{v}'")
        return v

    @property
    def zone(self) -> ZoneInfo:
        return ZoneInfo(self.timezone)
