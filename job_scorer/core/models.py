"""
Core data models for the job scoring system.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional


def _text(value: Any) -> str:
    """Coerce a loosely-typed field to a string, treating junk as absent."""
    if value is None:
        return ""
    if isinstance(value, (str, int, float)) and not isinstance(value, bool):
        return str(value)
    return ""


def _records(value: Any) -> list:
    """Return only the dict entries of a list-like field."""
    if not isinstance(value, (list, tuple)):
        return []
    return [item for item in value if isinstance(item, dict)]


def _optional_int(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return int(value)
    if isinstance(value, str) and value.strip().isdigit():
        return int(value.strip())
    return None


class SkillLevel(Enum):
    """Proficiency level for a skill."""
    BEGINNER = 1
    INTERMEDIATE = 2
    ADVANCED = 3
    EXPERT = 4

    @classmethod
    def parse(cls, value: Any) -> "SkillLevel":
        """Parse a level name case-insensitively, defaulting to INTERMEDIATE."""
        if isinstance(value, cls):
            return value
        name = _text(value).strip().upper()
        if name in cls.__members__:
            return cls[name]
        return cls.INTERMEDIATE


class ExperienceLevel(Enum):
    """Seniority band a candidate targets."""
    ENTRY = "entry"
    MID = "mid"
    SENIOR = "senior"
    LEAD = "lead"
    EXECUTIVE = "executive"

    @classmethod
    def parse(cls, value: Any) -> Optional["ExperienceLevel"]:
        if isinstance(value, cls):
            return value
        text = _text(value).strip().lower()
        for level in cls:
            if level.value == text:
                return level
        return None


@dataclass
class Skill:
    """Represents a professional skill."""
    name: str
    level: SkillLevel = SkillLevel.INTERMEDIATE

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "level": self.level.name.lower(),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Skill":
        return cls(
            name=_text(data.get("name")),
            level=SkillLevel.parse(data.get("level")),
        )


@dataclass
class EmploymentEntry:
    """Represents one position in the employment history."""
    title: str = ""
    company: str = ""
    description: str = ""

    def to_dict(self) -> dict:
        return {
            "title": self.title,
            "company": self.company,
            "description": self.description,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "EmploymentEntry":
        return cls(
            title=_text(data.get("title")),
            company=_text(data.get("company")),
            description=_text(data.get("description")),
        )


@dataclass
class EducationEntry:
    """Represents an educational credential."""
    degree: str = ""
    field: str = ""
    institution: str = ""

    def to_dict(self) -> dict:
        return {
            "degree": self.degree,
            "field": self.field,
            "institution": self.institution,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "EducationEntry":
        return cls(
            degree=_text(data.get("degree")),
            # Resume exports use field_of_study
            field=_text(data.get("field") or data.get("field_of_study")),
            institution=_text(data.get("institution")),
        )


@dataclass
class Profile:
    """Candidate data used as scoring input."""
    skills: list[Skill] = field(default_factory=list)
    employment_history: list[EmploymentEntry] = field(default_factory=list)
    education: list[EducationEntry] = field(default_factory=list)
    experience_level: Optional[ExperienceLevel] = None
    location: str = ""
    full_name: str = ""

    @property
    def skill_names(self) -> list[str]:
        return [(skill.name or "").lower() for skill in self.skills or []]

    def to_dict(self) -> dict:
        return {
            "full_name": self.full_name,
            "location": self.location,
            "experience_level": self.experience_level.value if self.experience_level else None,
            "skills": [s.to_dict() for s in self.skills],
            "employment_history": [e.to_dict() for e in self.employment_history],
            "education": [e.to_dict() for e in self.education],
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Profile":
        """
        Build a profile from a loosely-typed mapping.

        Skills may be given as plain strings or as {name, level} records.
        Anything that is not understood is dropped rather than raising.
        """
        if not isinstance(data, dict):
            return cls()

        skills = []
        raw_skills = data.get("skills")
        for item in raw_skills if isinstance(raw_skills, (list, tuple)) else []:
            if isinstance(item, str):
                skills.append(Skill(name=item))
            elif isinstance(item, dict):
                skills.append(Skill.from_dict(item))

        return cls(
            skills=skills,
            employment_history=[
                EmploymentEntry.from_dict(e) for e in _records(data.get("employment_history"))
            ],
            education=[EducationEntry.from_dict(e) for e in _records(data.get("education"))],
            experience_level=ExperienceLevel.parse(data.get("experience_level")),
            location=_text(data.get("location")),
            full_name=_text(data.get("full_name")),
        )


@dataclass
class JobPosting:
    """Represents a job posting."""
    job_title: str = ""
    job_description: str = ""
    company_name: str = ""
    location: str = ""

    # Import metadata, not used for scoring
    source_url: str = ""
    salary_min: Optional[int] = None
    salary_max: Optional[int] = None
    job_type: str = ""

    def to_dict(self) -> dict:
        return {
            "job_title": self.job_title,
            "job_description": self.job_description,
            "company_name": self.company_name,
            "location": self.location,
            "source_url": self.source_url,
            "salary_min": self.salary_min,
            "salary_max": self.salary_max,
            "job_type": self.job_type,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "JobPosting":
        if not isinstance(data, dict):
            return cls()
        return cls(
            job_title=_text(data.get("job_title")),
            job_description=_text(data.get("job_description")),
            company_name=_text(data.get("company_name")),
            location=_text(data.get("location")),
            source_url=_text(data.get("source_url")),
            salary_min=_optional_int(data.get("salary_min")),
            salary_max=_optional_int(data.get("salary_max")),
            job_type=_text(data.get("job_type")),
        )


@dataclass(frozen=True)
class SkillGap:
    """A skill the posting asks for that the profile lacks."""
    skill: str
    reason: str

    def to_dict(self) -> dict:
        return {"skill": self.skill, "reason": self.reason}


@dataclass(frozen=True)
class MatchResult:
    """Scoring breakdown for one job/profile pair. All scores are 0-100."""
    overall_score: int = 0
    skills_score: int = 0
    experience_score: int = 0
    education_score: int = 0
    location_score: int = 0
    strengths: tuple[str, ...] = ()
    gaps: tuple[SkillGap, ...] = ()
    recommendations: tuple[str, ...] = ()

    def to_dict(self) -> dict:
        return {
            "overall_score": self.overall_score,
            "skills_score": self.skills_score,
            "experience_score": self.experience_score,
            "education_score": self.education_score,
            "location_score": self.location_score,
            "strengths": list(self.strengths),
            "gaps": [g.to_dict() for g in self.gaps],
            "recommendations": list(self.recommendations),
        }
