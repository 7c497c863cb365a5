"""
Profile I/O models.

The merged profile view combines the user, the general profile and, for
mentors, the mentor profile.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field


class ChecklistItem(BaseModel):
    """One entry of the profile completion checklist."""

    field: str
    label: str
    completed: bool


class ProfileRead(BaseModel):
    """Merged profile of the current user."""

    id: str
    name: Optional[str] = None
    email: str
    image: Optional[str] = None
    role: str
    onboarding_completed: bool

    title: str = ""
    bio: str = ""
    location: str = ""
    company: str = ""
    website: str = ""
    timezone: str = ""

    learning_goals: str = ""
    skill_level: str = ""
    areas_of_interest: str = ""
    learning_style: str = ""
    career_goals: str = ""
    current_challenges: str = ""
    education: str = ""

    is_mentor: bool = False
    github_url: str = ""
    linkedin_url: str = ""
    expertise: list[str] = Field(default_factory=list)
    skills: list[str] = Field(default_factory=list)
    hourly_rate: float = 0
    years_of_experience: int = 0

    completion_status: int = Field(ge=0, le=100)


class ProfileUpdate(BaseModel):
    """Schema for updating the merged profile. Every field is optional."""

    name: Optional[str] = Field(default=None, min_length=1)
    image: Optional[str] = None
    onboarding_completed: Optional[bool] = None

    title: Optional[str] = None
    bio: Optional[str] = None
    location: Optional[str] = None
    company: Optional[str] = None
    website: Optional[str] = None
    timezone: Optional[str] = None

    learning_goals: Optional[str] = None
    skill_level: Optional[str] = None
    areas_of_interest: Optional[str] = None
    learning_style: Optional[str] = None
    career_goals: Optional[str] = None
    current_challenges: Optional[str] = None
    education: Optional[str] = None

    github_url: Optional[str] = None
    linkedin_url: Optional[str] = None
    skills: Optional[list[str]] = None
    hourly_rate: Optional[float] = Field(default=None, ge=0)
    years_of_experience: Optional[int] = Field(default=None, ge=0)


class ProfileCompletionRead(BaseModel):
    completion_status: int
    checklist: list[ChecklistItem]
    missing_fields: list[str]
    is_complete: bool
