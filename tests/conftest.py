"""
Pytest configuration and shared fixtures.
"""

import pytest

from job_scorer.core.models import (
    EducationEntry,
    EmploymentEntry,
    ExperienceLevel,
    JobPosting,
    Profile,
    Skill,
    SkillLevel,
)


@pytest.fixture
def react_profile() -> Profile:
    """Frontend candidate with only skills and a location."""
    return Profile(
        skills=[
            Skill(name="JavaScript", level=SkillLevel.EXPERT),
            Skill(name="React", level=SkillLevel.EXPERT),
            Skill(name="TypeScript", level=SkillLevel.ADVANCED),
        ],
        location="San Francisco, CA",
    )


@pytest.fixture
def react_job() -> JobPosting:
    return JobPosting(
        job_title="Senior React Developer",
        job_description="Looking for expert JavaScript/TypeScript developer with React experience",
        company_name="Acme",
        location="San Francisco, CA",
    )


@pytest.fixture
def python_job() -> JobPosting:
    return JobPosting(
        job_title="Backend Python Engineer",
        job_description="Python, Django, PostgreSQL, Docker",
        company_name="Globex",
        location="New York, NY",
    )


@pytest.fixture
def strong_profile() -> Profile:
    """Candidate that lines up with strong_job on every dimension."""
    return Profile(
        skills=[
            Skill(name="React", level=SkillLevel.EXPERT),
            Skill(name="TypeScript", level=SkillLevel.EXPERT),
            Skill(name="JavaScript", level=SkillLevel.EXPERT),
        ],
        employment_history=[
            EmploymentEntry(
                title="Software Engineer",
                company="Previous Corp",
                description="Developed React applications and TypeScript libraries",
            ),
        ],
        education=[
            EducationEntry(
                degree="Bachelor of Science",
                field="Computer Science",
                institution="University of Technology",
            ),
        ],
        experience_level=ExperienceLevel.SENIOR,
        location="San Francisco, CA",
    )


@pytest.fixture
def strong_job() -> JobPosting:
    return JobPosting(
        job_title="Senior Software Engineer",
        job_description=(
            "We are hiring a senior engineer to build React and TypeScript "
            "applications in JavaScript. A Bachelor of Science in Computer "
            "Science is preferred."
        ),
        company_name="Tech Corp",
        location="San Francisco, CA",
    )


@pytest.fixture
def sample_resume_text() -> str:
    return """Jane Doe
Location: Austin, TX
jane@example.com

Summary
Expert Python developer focused on backend services.

Experience
Senior Software Engineer | Acme Corp 2019 - Present
• Built Django services on AWS
Software Engineer | Beta Inc 2015 - 2019
• Maintained PostgreSQL databases

Education
Bachelor of Science in Computer Science, State University

Skills
Python, Django, PostgreSQL, Docker, basic Kubernetes
"""
