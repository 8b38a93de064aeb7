"""Core models, scoring and profile loading."""

from .models import (
    Profile,
    JobPosting,
    MatchResult,
    Skill,
    SkillGap,
    SkillLevel,
    ExperienceLevel,
    EmploymentEntry,
    EducationEntry,
)
from .matcher import JobMatcher, score, compare_skills, find_skill_gaps
from .profile_parser import ProfileParser

__all__ = [
    "Profile",
    "JobPosting",
    "MatchResult",
    "Skill",
    "SkillGap",
    "SkillLevel",
    "ExperienceLevel",
    "EmploymentEntry",
    "EducationEntry",
    "JobMatcher",
    "score",
    "compare_skills",
    "find_skill_gaps",
    "ProfileParser",
]
