"""
Exercise catalog entry.
"""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_MUSCLE_GROUP = "other"


class ExerciseCatalogEntry(BaseModel):
    """Reference data for an exercise, keyed by the exercise key used in logs."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1)
    category: Optional[str] = None
    difficulty: Optional[str] = None
    is_compound: bool = False
    primary_muscles: List[str] = Field(default_factory=list)
    secondary_muscles: List[str] = Field(default_factory=list)
    video_url: Optional[str] = None

    @property
    def muscle_group(self) -> str:
        """The group used for balance analysis: first primary muscle."""
        if self.primary_muscles:
            return self.primary_muscles[0]
        return DEFAULT_MUSCLE_GROUP
