"""Unit tests for muscle balance analysis."""
import pytest

from backend.core.muscle_balance import MuscleBalanceService, analyze_muscle_balance
from backend.core.schedule import ScheduleService
from domain.models import DEFAULT_MUSCLE_GROUP, ProgramTemplate, ProgramTemplateExercise
from tests.fakes import TEST_USER_ID, make_catalog_entry, make_template

pytestmark = pytest.mark.unit


def _template(template_id, groups_and_sets):
    return ProgramTemplate(
        id=template_id,
        user_id=TEST_USER_ID,
        name=template_id,
        exercises=[
            ProgramTemplateExercise(
                exercise_key=f"{template_id}-{i}",
                muscle_group=group,
                target_sets=sets,
                order_index=i,
            )
            for i, (group, sets) in enumerate(groups_and_sets)
        ],
    )


class TestAnalyzeMuscleBalance:
    def test_percentages_and_least_trained(self):
        templates = [
            _template("push", [("Chest", 12)]),
            _template("pull", [("Back", 8), ("Legs", 6)]),
            _template("mixed", [("Back", 4)]),
        ]
        report = analyze_muscle_balance(templates)

        assert report.total_sets == 30
        assert [(s.muscle_group, s.total_sets) for s in report.stats] == [
            ("Back", 12), ("Chest", 12), ("Legs", 6),
        ]
        assert [s.percentage for s in report.stats] == pytest.approx([40.0, 40.0, 20.0])
        assert report.least_trained.muscle_group == "Legs"
        assert report.has_insight

    def test_percentages_sum_to_100(self):
        report = analyze_muscle_balance([_template("t", [("A", 1), ("B", 1), ("C", 1)])])
        assert sum(s.percentage for s in report.stats) == pytest.approx(100.0)
        assert [s.display_percentage for s in report.stats] == [33, 33, 33]

    def test_single_group_has_no_insight(self):
        report = analyze_muscle_balance([_template("t", [("Chest", 3)])])
        assert report.least_trained is None
        assert not report.has_insight

    def test_empty(self):
        report = analyze_muscle_balance([])
        assert report.stats == []
        assert report.total_sets == 0
        assert report.least_trained is None

    def test_unknown_group_counts_as_default(self):
        report = analyze_muscle_balance([_template("t", [(None, 3), ("Chest", 6)])])
        assert [s.muscle_group for s in report.stats] == ["Chest", DEFAULT_MUSCLE_GROUP]

    def test_idempotent(self):
        templates = [_template("t", [("Chest", 3), ("Back", 4)])]
        assert analyze_muscle_balance(templates) == analyze_muscle_balance(templates)


class TestMuscleBalanceService:
    def test_joins_catalog(self, fake_template_repo, fake_profile_repo, fake_catalog_repo):
        fake_template_repo.seed([
            make_template("push", exercises=[("bench-press", 4, "8"), ("fly", 2, "12")]),
            make_template("legs", exercises=[("squat", 3, "5"), ("mystery", 1, "10")]),
        ])
        fake_catalog_repo.seed([
            make_catalog_entry("bench-press", ["chest", "triceps"]),
            make_catalog_entry("fly", ["chest"]),
            make_catalog_entry("squat", ["quadriceps"]),
        ])
        service = MuscleBalanceService(
            ScheduleService(fake_template_repo, fake_profile_repo), fake_catalog_repo
        )

        report = service.get_report(TEST_USER_ID)

        assert [(s.muscle_group, s.total_sets) for s in report.stats] == [
            ("chest", 6), ("quadriceps", 3), (DEFAULT_MUSCLE_GROUP, 1),
        ]
        assert report.least_trained.muscle_group == DEFAULT_MUSCLE_GROUP
        assert fake_catalog_repo.requested == [["bench-press", "fly", "mystery", "squat"]]

    def test_no_templates(self, fake_template_repo, fake_profile_repo, fake_catalog_repo):
        service = MuscleBalanceService(
            ScheduleService(fake_template_repo, fake_profile_repo), fake_catalog_repo
        )
        assert service.get_report(TEST_USER_ID).stats == []
