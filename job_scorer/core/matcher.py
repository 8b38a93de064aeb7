"""
Job Matcher - Scoring algorithm for matching job postings to candidate profiles.

Calculates four sub-scores and combines them:
- Skills: profile skills mentioned in the posting, weighted by proficiency
- Experience: seniority terms and prior job titles that line up with the role
- Education: degree and field keywords found in the description
- Location: case-insensitive containment of one location in the other

Matching is plain lowercase substring containment. There is no stemming and
no synonym table, so "node" matches "node.js" but "k8s" does not match
"kubernetes".
"""

import logging
import math
import re
from typing import Iterable

from .models import (
    ExperienceLevel,
    JobPosting,
    MatchResult,
    Profile,
    Skill,
    SkillGap,
    SkillLevel,
)

logger = logging.getLogger(__name__)


SKILL_LEVEL_POINTS = {
    SkillLevel.BEGINNER: 10,
    SkillLevel.INTERMEDIATE: 15,
    SkillLevel.ADVANCED: 25,
    SkillLevel.EXPERT: 35,
}

EXPERIENCE_BASELINE = 40
EXPERIENCE_LEVEL_POINTS = 40
EXPERIENCE_HISTORY_POINTS = 20

EDUCATION_BASELINE = 50
EDUCATION_FIELD_POINTS = 30
EDUCATION_DEGREE_POINTS = 20

LOCATION_MATCH_SCORE = 100

# Weights for overall score calculation, must sum to 1.0
WEIGHTS = {
    "skills": 0.45,
    "experience": 0.25,
    "education": 0.10,
    "location": 0.20,
}

STRENGTH_THRESHOLD = 80
STRONG_MATCH_THRESHOLD = 80
MODERATE_MATCH_THRESHOLD = 50
MAX_GAP_RECOMMENDATIONS = 3
MAX_HIGHLIGHTED_SKILLS = 3

# Terms that signal each seniority band in a posting
EXPERIENCE_LEVEL_TERMS = {
    ExperienceLevel.ENTRY: ["entry", "junior", "associate", "graduate", "intern"],
    ExperienceLevel.MID: ["mid-level", "mid level", "intermediate"],
    ExperienceLevel.SENIOR: ["senior", "sr."],
    ExperienceLevel.LEAD: ["lead", "principal", "staff"],
    ExperienceLevel.EXECUTIVE: ["director", "head of", "vp", "chief"],
}

TITLE_STOP_WORDS = {"and", "the", "for", "with"}

# Keywords scanned for in postings when looking for gaps
SKILL_VOCABULARY = {
    "programming_languages": [
        "Python", "JavaScript", "TypeScript", "Java", "C++", "C#", "Ruby",
        "Golang", "Rust", "Kotlin", "PHP", "Scala", "MATLAB", "SQL",
    ],
    "frameworks": [
        "React", "Angular", "Vue", "Django", "Flask", "FastAPI",
        "Node.js", "Laravel", ".NET", "Next.js", "GraphQL",
    ],
    "databases": [
        "PostgreSQL", "MySQL", "MongoDB", "Redis", "Elasticsearch",
        "DynamoDB", "Cassandra", "SQLite", "SQL Server",
    ],
    "cloud_devops": [
        "AWS", "Azure", "GCP", "Docker", "Kubernetes", "Terraform",
        "Jenkins", "GitHub Actions", "CI/CD", "Ansible", "Linux",
    ],
    "data_science": [
        "Machine Learning", "Deep Learning", "TensorFlow", "PyTorch",
        "Pandas", "NumPy", "scikit-learn", "NLP", "Computer Vision",
    ],
    "soft_skills": [
        "Leadership", "Communication", "Project Management", "Agile",
        "Scrum", "Mentoring",
    ],
}

GAP_REASON = "Mentioned in the job posting but not in your skills"

STRENGTH_LABELS = [
    ("skills_score", "Strong skills alignment"),
    ("experience_score", "Relevant experience level"),
    ("education_score", "Education aligns with the role"),
    ("location_score", "Location match"),
]

SORT_KEYS = {
    "overall": "overall_score",
    "skills": "skills_score",
    "experience": "experience_score",
    "education": "education_score",
    "location": "location_score",
}


def _clamp(value: float) -> int:
    """Round half-up and clamp to the 0-100 score range."""
    return max(0, min(100, int(math.floor(value + 0.5))))


def _lower(value) -> str:
    """Lowercased, stripped text; None counts as empty."""
    return (value or "").strip().lower()


def _job_text(job: JobPosting) -> str:
    return f"{job.job_title or ''} {job.job_description or ''}".lower()


def _has_description(job: JobPosting) -> bool:
    return bool(_lower(job.job_description))


def _title_words(title: str) -> set[str]:
    return {
        word for word in re.findall(r"[a-z]+", _lower(title))
        if len(word) >= 3 and word not in TITLE_STOP_WORDS
    }


def _keyword_pattern(keyword: str) -> re.Pattern:
    return re.compile(r"(?<![a-z0-9])" + re.escape(keyword.lower()) + r"(?![a-z0-9])")


_VOCABULARY_PATTERNS = [
    (keyword, _keyword_pattern(keyword))
    for keywords in SKILL_VOCABULARY.values()
    for keyword in keywords
]


def matched_skills(job: JobPosting, profile: Profile) -> list[Skill]:
    """Profile skills whose name appears in the job title or description."""
    if not _has_description(job):
        return []
    text = _job_text(job)
    return [
        skill for skill in profile.skills or []
        if _lower(skill.name) and _lower(skill.name) in text
    ]


def calculate_skills_score(job: JobPosting, profile: Profile) -> int:
    """Sum level-weighted points for each matched skill, capped at 100."""
    points = sum(
        SKILL_LEVEL_POINTS[SkillLevel.parse(skill.level)]
        for skill in matched_skills(job, profile)
    )
    return _clamp(points)


def calculate_experience_score(job: JobPosting, profile: Profile) -> int:
    """Baseline plus bonuses for seniority terms and overlapping job titles."""
    points = EXPERIENCE_BASELINE
    if not _has_description(job):
        return _clamp(points)

    text = _job_text(job)
    level_terms = EXPERIENCE_LEVEL_TERMS.get(profile.experience_level, [])
    if any(term in text for term in level_terms):
        points += EXPERIENCE_LEVEL_POINTS

    job_words = _title_words(job.job_title)
    if any(_title_words(entry.title) & job_words for entry in profile.employment_history or []):
        points += EXPERIENCE_HISTORY_POINTS

    return _clamp(points)


def calculate_education_score(job: JobPosting, profile: Profile) -> int:
    """Baseline plus bonuses for field and degree keywords in the description."""
    points = EDUCATION_BASELINE
    description = _lower(job.job_description)
    if not description:
        return _clamp(points)

    if _any_keyword(description, (e.field for e in profile.education or [])):
        points += EDUCATION_FIELD_POINTS
    if _any_keyword(description, (e.degree for e in profile.education or [])):
        points += EDUCATION_DEGREE_POINTS

    return _clamp(points)


def _any_keyword(text: str, keywords: Iterable[str]) -> bool:
    return any(_lower(k) and _lower(k) in text for k in keywords)


def calculate_location_score(job: JobPosting, profile: Profile) -> int:
    """100 when either location contains the other, otherwise 0."""
    job_loc = _lower(job.location)
    user_loc = _lower(profile.location)

    if not job_loc or not user_loc:
        return 0
    if user_loc in job_loc or job_loc in user_loc:
        return LOCATION_MATCH_SCORE
    return 0


def compare_skills(
    user_skills: Iterable[str],
    required_skills: Iterable[str],
) -> tuple[list[str], list[str]]:
    """
    Compare two skill name lists case-insensitively.

    Returns:
        Tuple of (user skills that are required, required skills the user lacks)
    """
    user = list(user_skills)
    required = list(required_skills)
    user_lower = {s.lower() for s in user}
    required_lower = {r.lower() for r in required}

    matching = [s for s in user if s.lower() in required_lower]
    missing = [r for r in required if r.lower() not in user_lower]
    return matching, missing


def find_skill_gaps(job: JobPosting, profile: Profile) -> list[SkillGap]:
    """Find vocabulary skills mentioned in the posting but absent from the profile."""
    if not _has_description(job):
        return []

    text = _job_text(job)
    mentioned = []
    for keyword, pattern in _VOCABULARY_PATTERNS:
        if keyword not in mentioned and pattern.search(text):
            mentioned.append(keyword)

    _, missing = compare_skills(profile.skill_names, mentioned)
    return [SkillGap(skill=skill, reason=GAP_REASON) for skill in missing]


def _build_strengths(scores: dict) -> list[str]:
    return [label for key, label in STRENGTH_LABELS if scores[key] >= STRENGTH_THRESHOLD]


def _build_recommendations(
    overall: int,
    highlights: list[Skill],
    gaps: list[SkillGap],
) -> list[str]:
    if overall >= STRONG_MATCH_THRESHOLD:
        top = sorted(highlights, key=lambda s: SkillLevel.parse(s.level).value, reverse=True)
        names = ", ".join(s.name for s in top[:MAX_HIGHLIGHTED_SKILLS]) or "your most relevant experience"
        recommendations = [f"Strong match - tailor your resume to highlight {names}"]
    elif overall >= MODERATE_MATCH_THRESHOLD:
        recommendations = ["Moderate match - address the listed gaps before applying"]
    else:
        recommendations = ["Significant gaps - consider upskilling before applying"]

    for gap in gaps[:MAX_GAP_RECOMMENDATIONS]:
        recommendations.append(f"Build experience with {gap.skill}")

    return recommendations


def score(job: JobPosting, profile: Profile) -> MatchResult:
    """
    Score how well a profile fits a job posting.

    Pure function: no I/O and no state. Missing fields count as absent.

    Args:
        job: Target job posting
        profile: Candidate profile

    Returns:
        MatchResult with overall score, sub-scores, strengths, gaps and
        recommendations
    """
    scores = {
        "skills_score": calculate_skills_score(job, profile),
        "experience_score": calculate_experience_score(job, profile),
        "education_score": calculate_education_score(job, profile),
        "location_score": calculate_location_score(job, profile),
    }

    overall = _clamp(
        scores["skills_score"] * WEIGHTS["skills"] +
        scores["experience_score"] * WEIGHTS["experience"] +
        scores["education_score"] * WEIGHTS["education"] +
        scores["location_score"] * WEIGHTS["location"]
    )

    gaps = find_skill_gaps(job, profile)

    logger.debug(
        "Scored %r at %s: overall=%d %s",
        job.job_title, job.company_name, overall, scores,
    )

    return MatchResult(
        overall_score=overall,
        strengths=tuple(_build_strengths(scores)),
        gaps=tuple(gaps),
        recommendations=tuple(
            _build_recommendations(overall, matched_skills(job, profile), gaps)
        ),
        **scores,
    )


class JobMatcher:
    """Matches one profile against job postings."""

    def __init__(self, profile: Profile):
        self.profile = profile
        self.logger = logging.getLogger(self.__class__.__name__)

    def match_job(self, job: JobPosting) -> MatchResult:
        """Calculate the match result for a single job."""
        return score(job, self.profile)

    def rank_jobs(
        self,
        jobs: list[JobPosting],
        sort_by: str = "overall",
    ) -> list[tuple[JobPosting, MatchResult]]:
        """
        Rank a list of jobs by match score.

        Args:
            jobs: List of jobs to rank
            sort_by: Score to sort by - "overall", "skills", "experience",
                "education" or "location"

        Returns:
            List of (job, result) tuples sorted by the chosen score, highest
            first. Jobs with equal scores keep their input order.
        """
        if sort_by not in SORT_KEYS:
            self.logger.warning(f"Unknown sort key {sort_by!r}, using overall")
            sort_by = "overall"

        attribute = SORT_KEYS[sort_by]
        scored_jobs = [(job, self.match_job(job)) for job in jobs]
        scored_jobs.sort(key=lambda pair: getattr(pair[1], attribute), reverse=True)

        self.logger.info(f"Ranked {len(scored_jobs)} jobs by {sort_by}")
        return scored_jobs
