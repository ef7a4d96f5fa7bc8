"""
Muscle balance analysis over the user's program templates.

Planned sets are summed per muscle group across every template, then ranked.
The least-trained group (last in the ranking) drives the insight shown to the
user; with fewer than two groups there is nothing to compare.
"""
import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence

from application.ports import ExerciseCatalogRepository
from backend.core.schedule import ScheduleService
from domain.models import DEFAULT_MUSCLE_GROUP, ProgramTemplate

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MuscleGroupStats:
    """Planned sets for one muscle group."""
    muscle_group: str
    total_sets: int
    percentage: float

    @property
    def display_percentage(self) -> int:
        return round(self.percentage)


@dataclass(frozen=True)
class MuscleBalanceReport:
    """Muscle groups ranked by planned sets, most trained first."""
    stats: List[MuscleGroupStats] = field(default_factory=list)
    total_sets: int = 0

    @property
    def least_trained(self) -> Optional[MuscleGroupStats]:
        if len(self.stats) > 1:
            return self.stats[-1]
        return None

    @property
    def has_insight(self) -> bool:
        return self.least_trained is not None


def analyze_muscle_balance(templates: Sequence[ProgramTemplate]) -> MuscleBalanceReport:
    """
    Rank muscle groups by planned sets.

    Exercises without a muscle group count toward DEFAULT_MUSCLE_GROUP.
    Ties in set count are ordered by group name.

    Returns:
        MuscleBalanceReport, empty when no sets are planned
    """
    sets_by_group: Dict[str, int] = {}
    for template in templates:
        for exercise in template.exercises:
            group = exercise.muscle_group or DEFAULT_MUSCLE_GROUP
            sets_by_group[group] = sets_by_group.get(group, 0) + exercise.target_sets

    total = sum(sets_by_group.values())
    if total == 0:
        return MuscleBalanceReport()

    ranked = sorted(sets_by_group.items(), key=lambda item: (-item[1], item[0]))
    return MuscleBalanceReport(
        stats=[
            MuscleGroupStats(
                muscle_group=group,
                total_sets=sets,
                percentage=sets / total * 100.0,
            )
            for group, sets in ranked
        ],
        total_sets=total,
    )


class MuscleBalanceService:
    """
    Joins the user's active templates to the exercise catalog and analyzes them.
    """

    def __init__(
        self,
        schedule_service: ScheduleService,
        catalog_repo: ExerciseCatalogRepository,
    ):
        self._schedule = schedule_service
        self._catalog_repo = catalog_repo

    def get_report(self, user_id: str) -> MuscleBalanceReport:
        templates = self._schedule.get_templates(user_id)

        keys = {key for template in templates for key in template.exercise_keys}
        entries = self._catalog_repo.get_many(sorted(keys))
        muscle_groups = {entry.id: entry.muscle_group for entry in entries}

        missing = keys - muscle_groups.keys()
        if missing:
            logger.warning(f"Exercises missing from catalog: {sorted(missing)}")

        report = analyze_muscle_balance(
            [template.with_muscle_groups(muscle_groups) for template in templates]
        )
        logger.info(
            f"Muscle balance for user {user_id}: "
            f"{len(report.stats)} groups, {report.total_sets} sets"
        )
        return report
