"""
Training schedule: which template is up next, and session start.

Selection priority for the "next" template (first match wins):
1. The template scheduled for today's weekday.
2. The template scheduled soonest later this week.
3. The pass-number fallback: the template list sorted by (weekday, name) is a
   cycle, and position (pass_number - 1) mod count is next.

The pure functions take explicit collections; ScheduleService resolves the
user's profile and templates from the store first.
"""
import logging
import uuid
from datetime import date, datetime, timezone
from typing import List, Optional, Sequence

from application.exceptions import SessionAlreadyActiveError, TemplateNotFoundError
from application.ports import SessionRepository, TemplateRepository, UserProfileRepository
from backend.core.calendar import domain_weekday
from domain.models import ProgramTemplate, SessionStatus, UserProfile, WorkoutSession

logger = logging.getLogger(__name__)


# =============================================================================
# Pure selection
# =============================================================================


def sort_templates(templates: Sequence[ProgramTemplate]) -> List[ProgramTemplate]:
    """Sort by weekday ascending (unscheduled first, as 0), then name."""
    return sorted(templates, key=lambda t: (t.day_of_week or 0, t.name))


def filter_for_gym(
    templates: Sequence[ProgramTemplate],
    gym_id: Optional[str],
) -> List[ProgramTemplate]:
    """
    Restrict templates to the user's active gym.

    With no gym selected only templates without a gym are eligible.
    """
    return [t for t in templates if t.gym_id == gym_id]


def find_today_template(
    templates: Sequence[ProgramTemplate],
    *,
    today_weekday: int,
) -> Optional[ProgramTemplate]:
    """First template in (weekday, name) order scheduled for today."""
    for template in sort_templates(templates):
        if template.day_of_week == today_weekday:
            return template
    return None


def select_next_template(
    templates: Sequence[ProgramTemplate],
    *,
    today_weekday: int,
    pass_number: int,
) -> Optional[ProgramTemplate]:
    """
    Choose the template that is up next.

    Args:
        templates: The user's templates, already filtered to the active gym
        today_weekday: Today's weekday, Monday=1 .. Sunday=7
        pass_number: The profile's current pass number

    Returns:
        The next template, or None when there are no templates
    """
    ordered = sort_templates(templates)
    if not ordered:
        return None

    today = find_today_template(ordered, today_weekday=today_weekday)
    if today is not None:
        return today

    for template in ordered:
        if template.day_of_week is not None and template.day_of_week > today_weekday:
            return template

    # Python's modulo is never negative, so any pass number maps into range
    return ordered[(pass_number - 1) % len(ordered)]


def start_session(
    template: ProgramTemplate,
    *,
    user_id: str,
    now: datetime,
    session_id: Optional[str] = None,
) -> WorkoutSession:
    """Build a new active session for a template."""
    return WorkoutSession(
        id=session_id or str(uuid.uuid4()),
        user_id=user_id,
        template_id=template.id,
        session_name=template.name or None,
        status=SessionStatus.ACTIVE,
        started_at=now,
    )


# =============================================================================
# Schedule Service
# =============================================================================


class ScheduleService:
    """
    Resolves the user's schedule from the store.

    Missing profiles are treated as a default profile (no gym, pass 1, UTC)
    so a new user still gets a next template.
    """

    def __init__(
        self,
        template_repo: TemplateRepository,
        profile_repo: UserProfileRepository,
        session_repo: Optional[SessionRepository] = None,
    ):
        """
        Initialize the schedule service.

        Args:
            template_repo: Repository for program templates
            profile_repo: Repository for user profiles
            session_repo: Repository for sessions, required only for start_session
        """
        self._template_repo = template_repo
        self._profile_repo = profile_repo
        self._session_repo = session_repo

    def get_profile(self, user_id: str) -> UserProfile:
        profile = self._profile_repo.get(user_id)
        if profile is None:
            logger.warning(f"No profile for user {user_id}, using defaults")
            return UserProfile(user_id=user_id)
        return profile

    def get_templates(self, user_id: str) -> List[ProgramTemplate]:
        """The user's templates for their active gym."""
        profile = self.get_profile(user_id)
        templates = self._template_repo.list_for_user(user_id)
        return filter_for_gym(templates, profile.selected_gym_id)

    def get_template(self, user_id: str, template_id: str) -> ProgramTemplate:
        """
        Raises:
            TemplateNotFoundError: The template does not belong to the user
        """
        template = self._template_repo.get(user_id, template_id)
        if template is None:
            raise TemplateNotFoundError(template_id)
        return template

    def get_next_template(
        self,
        user_id: str,
        *,
        today: Optional[date] = None,
    ) -> Optional[ProgramTemplate]:
        """
        Get the template that is up next for the user.

        Args:
            user_id: User ID
            today: Local calendar date, defaults to today in the profile's zone

        Returns:
            The next template, or None when the user has no templates
        """
        profile = self.get_profile(user_id)
        today = today or datetime.now(profile.zone).date()
        templates = filter_for_gym(
            self._template_repo.list_for_user(user_id), profile.selected_gym_id
        )

        selected = select_next_template(
            templates,
            today_weekday=domain_weekday(today),
            pass_number=profile.current_pass_number,
        )
        if selected is None:
            logger.info(f"No templates for user {user_id}")
        else:
            logger.info(
                f"Next template for user {user_id}: '{selected.name}' "
                f"(day {selected.day_of_week}, pass {profile.current_pass_number})"
            )
        return selected

    def get_today_template(
        self,
        user_id: str,
        *,
        today: Optional[date] = None,
    ) -> Optional[ProgramTemplate]:
        """Get the template scheduled for today's weekday, if any."""
        profile = self.get_profile(user_id)
        today = today or datetime.now(profile.zone).date()
        templates = filter_for_gym(
            self._template_repo.list_for_user(user_id), profile.selected_gym_id
        )
        return find_today_template(templates, today_weekday=domain_weekday(today))

    def start_session(
        self,
        user_id: str,
        template_id: str,
        *,
        now: Optional[datetime] = None,
    ) -> WorkoutSession:
        """
        Start a new session from a template.

        Raises:
            TemplateNotFoundError: The template does not belong to the user
            SessionAlreadyActiveError: The user already has an active session
        """
        if self._session_repo is None:
            raise RuntimeError("ScheduleService was created without a session repository")

        template = self._template_repo.get(user_id, template_id)
        if template is None:
            raise TemplateNotFoundError(template_id)

        active = self._session_repo.get_active(user_id)
        if active is not None:
            raise SessionAlreadyActiveError(active.id)

        session = start_session(
            template,
            user_id=user_id,
            now=now or datetime.now(timezone.utc),
        )
        stored = self._session_repo.create(session)
        logger.info(f"Started session {stored.id} from template {template_id} for user {user_id}")
        return stored
