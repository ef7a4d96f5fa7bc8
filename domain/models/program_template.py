"""
Program template aggregate: a reusable plan for one training day.

A template owns an ordered list of planned exercises with their targets.
Templates may be pinned to a weekday (Monday=1 .. Sunday=7) or left floating,
in which case scheduling falls back to the user's pass number.
"""

from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ProgramTemplateExercise(BaseModel):
    """
    A planned exercise inside a template.

    ``target_reps`` is free text as entered by the user ("8-12", "10") and is
    interpreted by ``backend.core.reps.parse_reps``.
    """

    model_config = ConfigDict(frozen=True)

    exercise_key: str = Field(..., min_length=1, description="Exercise catalog ID")
    exercise_name: str = Field(default="", description="Display name")
    muscle_group: Optional[str] = Field(
        default=None,
        description="Primary muscle group, filled from the exercise catalog",
    )
    target_sets: int = Field(..., gt=0, description="Planned number of sets")
    target_reps: str = Field(default="10", description="Rep target, e.g. '8-12'")
    target_weight: Optional[float] = Field(default=None, ge=0)
    required_equipment: List[str] = Field(default_factory=list)
    order_index: int = Field(default=0, ge=0)


class ProgramTemplate(BaseModel):
    """
    Aggregate representing one training day of a program.

    Examples:
        >>> template = ProgramTemplate(
        ...     id="t1",
        ...     user_id="user_1",
        ...     name="Push",
        ...     day_of_week=1,
        ...     exercises=[
        ...         ProgramTemplateExercise(
        ...             exercise_key="bench-press", target_sets=3, target_reps="8-12"
        ...         ),
        ...     ],
        ... )
        >>> template.total_sets
        3
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., min_length=1)
    user_id: str = Field(..., min_length=1)
    gym_id: Optional[str] = None
    name: str = Field(default="")
    day_of_week: Optional[int] = Field(
        default=None,
        ge=1,
        le=7,
        description="Monday=1 .. Sunday=7, or None when not tied to a weekday",
    )
    exercises: List[ProgramTemplateExercise] = Field(default_factory=list)

    @field_validator("exercises")
    @classmethod
    def validate_exercise_order(
        cls, v: List[ProgramTemplateExercise]
    ) -> List[ProgramTemplateExercise]:
        """Order exercises by order_index and reject duplicate indexes."""
        seen = set()
        for exercise in v:
            if exercise.order_index in seen:
                raise ValueError(
                    f"Duplicate order_index {exercise.order_index} in template exercises"
                )
            seen.add(exercise.order_index)
        return sorted(v, key=lambda e: e.order_index)

    @property
    def total_sets(self) -> int:
        return sum(e.target_sets for e in self.exercises)

    @property
    def exercise_keys(self) -> List[str]:
        return [e.exercise_key for e in self.exercises]

    def with_muscle_groups(self, muscle_groups: Dict[str, str]) -> "ProgramTemplate":
        """
        Return a copy whose exercises carry muscle groups from a catalog join.

        Exercises whose key is missing from ``muscle_groups`` keep their
        current value.
        """
        exercises = [
            e.model_copy(update={"muscle_group": muscle_groups[e.exercise_key]})
            if e.exercise_key in muscle_groups
            else e
            for e in self.exercises
        ]
        return self.model_copy(update={"exercises": exercises})
