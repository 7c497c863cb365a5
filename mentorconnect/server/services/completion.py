"""
Profile completion scoring.

Two independent measures are computed:

- a percentage over a growing set of fields (basic account fields, then the
  general profile, then mentee learning fields, and a flat bonus once a mentor
  profile exists). Values of 90 and above are reported as 100;
- a role-specific checklist with minimum lengths, used to guide users to the
  fields that still need attention.
"""

from dataclasses import dataclass
from typing import Any, Callable, Mapping, Optional

from mentorconnect.core.database.entities.mentor_profiles import MentorProfile
from mentorconnect.core.database.entities.profiles import Profile
from mentorconnect.core.database.entities.users import User, UserRole

PROFILE_FIELDS = ("bio", "location", "title", "timezone", "company")
MENTEE_FIELDS = ("learning_goals", "skill_level", "areas_of_interest", "career_goals", "education")
MENTOR_PROFILE_BONUS = 3


def _round_half_up(numerator: int, denominator: int) -> int:
    return (numerator * 200 + denominator) // (denominator * 2)


def completion_percentage(user: User, profile: Optional[Profile], mentor_profile: Optional[MentorProfile]) -> int:
    """Percentage of filled profile fields, 0 to 100."""
    completed = sum(bool(value) for value in (user.name, user.email, user.image, user.role, user.onboarding_completed))
    total = 5

    if profile is not None:
        total += len(PROFILE_FIELDS)
        completed += sum(bool(getattr(profile, name)) for name in PROFILE_FIELDS)

        if user.role == UserRole.MENTEE:
            total += len(MENTEE_FIELDS)
            completed += sum(bool(getattr(profile, name)) for name in MENTEE_FIELDS)

    # A mentor profile counts as fully filled
    if mentor_profile is not None:
        total += MENTOR_PROFILE_BONUS
        completed += MENTOR_PROFILE_BONUS

    percentage = _round_half_up(completed, total)
    return 100 if percentage >= 90 else percentage


@dataclass(frozen=True)
class ChecklistRule:
    field: str
    label: str
    is_filled: Callable[[Any], bool]


def _min_length(length: int) -> Callable[[Any], bool]:
    return lambda value: isinstance(value, str) and len(value.strip()) >= length


def _min_items(count: int) -> Callable[[Any], bool]:
    return lambda value: isinstance(value, (list, tuple)) and len([item for item in value if item]) >= count


def _at_least(minimum: float) -> Callable[[Any], bool]:
    return lambda value: isinstance(value, (int, float)) and value >= minimum


MENTOR_CHECKLIST = (
    ChecklistRule("title", "Professional title", _min_length(1)),
    ChecklistRule("bio", "Bio (at least 50 characters)", _min_length(50)),
    ChecklistRule("location", "Location", _min_length(1)),
    ChecklistRule("company", "Company", _min_length(1)),
    ChecklistRule("github_url", "GitHub URL", _min_length(5)),
    ChecklistRule("linkedin_url", "LinkedIn URL", _min_length(5)),
    ChecklistRule("skills", "At least 3 skills", _min_items(3)),
    ChecklistRule("hourly_rate", "Hourly rate (at least 10)", _at_least(10)),
)

MENTEE_CHECKLIST = (
    ChecklistRule("title", "Title", _min_length(1)),
    ChecklistRule("bio", "Bio (at least 25 characters)", _min_length(25)),
    ChecklistRule("learning_goals", "Learning goals", _min_length(1)),
    ChecklistRule("skill_level", "Skill level", _min_length(1)),
    ChecklistRule("areas_of_interest", "Areas of interest", _min_length(1)),
    ChecklistRule("learning_style", "Learning style", _min_length(1)),
    ChecklistRule("career_goals", "Career goals", _min_length(1)),
    ChecklistRule("current_challenges", "Current challenges", _min_length(1)),
    ChecklistRule("education", "Education", _min_length(1)),
)


def build_checklist(role: UserRole, view: Mapping[str, Any]) -> list[dict[str, Any]]:
    """Evaluate the role's checklist against a merged profile view."""
    rules = MENTOR_CHECKLIST if role == UserRole.MENTOR else MENTEE_CHECKLIST
    return [
        {"field": rule.field, "label": rule.label, "completed": rule.is_filled(view.get(rule.field))} for rule in rules
    ]
