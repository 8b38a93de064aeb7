"""
Tests for the match scoring algorithm.
"""

import math

import pytest

from job_scorer.core.matcher import (
    EDUCATION_BASELINE,
    EXPERIENCE_BASELINE,
    GAP_REASON,
    MAX_GAP_RECOMMENDATIONS,
    MODERATE_MATCH_THRESHOLD,
    STRENGTH_THRESHOLD,
    STRONG_MATCH_THRESHOLD,
    WEIGHTS,
    JobMatcher,
    _build_recommendations,
    _build_strengths,
    compare_skills,
    find_skill_gaps,
    score,
)
from job_scorer.core.models import (
    EducationEntry,
    EmploymentEntry,
    ExperienceLevel,
    JobPosting,
    Profile,
    Skill,
    SkillGap,
    SkillLevel,
)


SUB_SCORES = ["skills_score", "experience_score", "education_score", "location_score"]


class TestScoreRanges:
    """Every score stays within 0-100."""

    def test_scores_within_bounds(self, react_job, python_job, strong_job, react_profile, strong_profile):
        for job in (react_job, python_job, strong_job, JobPosting()):
            for profile in (react_profile, strong_profile, Profile()):
                result = score(job, profile)
                assert 0 <= result.overall_score <= 100
                for name in SUB_SCORES:
                    assert 0 <= getattr(result, name) <= 100

    def test_skills_capped_at_100(self, strong_job, strong_profile):
        # Three expert skills would be 105 points uncapped
        assert score(strong_job, strong_profile).skills_score == 100

    def test_weights_sum_to_one(self):
        assert math.isclose(sum(WEIGHTS.values()), 1.0)

    def test_overall_is_weighted_sum(self, react_job, react_profile):
        result = score(react_job, react_profile)
        expected = math.floor(
            result.skills_score * WEIGHTS["skills"] +
            result.experience_score * WEIGHTS["experience"] +
            result.education_score * WEIGHTS["education"] +
            result.location_score * WEIGHTS["location"] + 0.5
        )
        assert result.overall_score == expected


class TestLocationScore:
    def test_identical_locations_case_insensitive(self, react_job, react_profile):
        react_profile.location = "san francisco, ca"
        assert score(react_job, react_profile).location_score == 100

    def test_containment_matches(self, react_job, react_profile):
        react_profile.location = "San Francisco"
        assert score(react_job, react_profile).location_score == 100

    def test_disjoint_locations(self, python_job, react_profile):
        assert score(python_job, react_profile).location_score == 0

    def test_missing_location_counts_as_absent(self, react_job, react_profile):
        react_profile.location = ""
        assert score(react_job, react_profile).location_score == 0

        react_job.location = "   "
        react_profile.location = "San Francisco, CA"
        assert score(react_job, react_profile).location_score == 0


class TestSkillsScore:
    def test_empty_skills_score_zero(self, react_job, react_profile):
        react_profile.skills = []
        assert score(react_job, react_profile).skills_score == 0

    def test_level_weighting(self, react_job):
        beginner = Profile(skills=[Skill(name="React", level=SkillLevel.BEGINNER)])
        expert = Profile(skills=[Skill(name="React", level=SkillLevel.EXPERT)])
        assert score(react_job, beginner).skills_score < score(react_job, expert).skills_score

    def test_substring_semantics(self):
        job = JobPosting(job_title="Engineer", job_description="Experience with Node.js required")
        profile = Profile(skills=[Skill(name="node", level=SkillLevel.INTERMEDIATE)])
        assert score(job, profile).skills_score == 15

    def test_no_synonyms(self):
        job = JobPosting(job_title="Platform Engineer", job_description="Run Kubernetes clusters")
        profile = Profile(skills=[Skill(name="k8s", level=SkillLevel.EXPERT)])
        assert score(job, profile).skills_score == 0

    def test_blank_skill_name_ignored(self, react_job):
        profile = Profile(skills=[Skill(name="  ", level=SkillLevel.EXPERT)])
        assert score(react_job, profile).skills_score == 0


class TestExperienceAndEducation:
    def test_baselines_without_matches(self, python_job, react_profile):
        result = score(python_job, react_profile)
        assert result.experience_score == EXPERIENCE_BASELINE
        assert result.education_score == EDUCATION_BASELINE

    def test_level_match_adds_points(self, react_job, react_profile):
        react_profile.experience_level = ExperienceLevel.SENIOR
        assert score(react_job, react_profile).experience_score == 80

    def test_level_mismatch_keeps_baseline(self, react_job, react_profile):
        react_profile.experience_level = ExperienceLevel.ENTRY
        assert score(react_job, react_profile).experience_score == EXPERIENCE_BASELINE

    def test_title_overlap_adds_points(self, react_job, react_profile):
        react_profile.employment_history = [EmploymentEntry(title="React Developer", company="X")]
        assert score(react_job, react_profile).experience_score == 60

    def test_education_keywords(self, strong_job):
        field_only = Profile(education=[EducationEntry(degree="MBA", field="Computer Science")])
        both = Profile(education=[EducationEntry(degree="Bachelor of Science", field="Computer Science")])
        assert score(strong_job, field_only).education_score == 80
        assert score(strong_job, both).education_score == 100

    def test_empty_description_uses_baselines(self, react_job, react_profile):
        react_profile.experience_level = ExperienceLevel.SENIOR
        react_job.job_description = ""
        result = score(react_job, react_profile)
        assert result.skills_score == 0
        assert result.experience_score == EXPERIENCE_BASELINE
        assert result.education_score == EDUCATION_BASELINE
        assert result.location_score == 100
        assert result.gaps == ()


class TestScenarios:
    def test_strong_frontend_match(self, react_job, react_profile):
        result = score(react_job, react_profile)
        assert result.overall_score > 60
        assert result.location_score == 100
        assert "Location match" in result.strengths
        assert "Strong skills alignment" in result.strengths

    def test_backend_job_is_poor_match(self, python_job, react_profile):
        result = score(python_job, react_profile)
        assert result.overall_score < 50
        assert len(result.gaps) > 0
        assert [g.skill for g in result.gaps] == ["Python", "Django", "PostgreSQL", "Docker"]
        assert all(g.reason == GAP_REASON for g in result.gaps)

    def test_full_match(self, strong_job, strong_profile):
        result = score(strong_job, strong_profile)
        assert result.overall_score == 100
        assert result.strengths == (
            "Strong skills alignment",
            "Relevant experience level",
            "Education aligns with the role",
            "Location match",
        )

    def test_idempotent(self, react_job, react_profile):
        assert score(react_job, react_profile) == score(react_job, react_profile)

    def test_inputs_not_modified(self, react_job, react_profile):
        before = (react_job.to_dict(), react_profile.to_dict())
        score(react_job, react_profile)
        assert (react_job.to_dict(), react_profile.to_dict()) == before


class TestRecommendations:
    def test_strong_tier(self, strong_job, strong_profile):
        result = score(strong_job, strong_profile)
        assert result.overall_score >= 80
        assert any("Strong match" in r for r in result.recommendations)
        assert result.recommendations[0] == (
            "Strong match - tailor your resume to highlight React, TypeScript, JavaScript"
        )

    def test_moderate_tier(self, react_job, react_profile):
        result = score(react_job, react_profile)
        assert 50 <= result.overall_score < 80
        assert result.recommendations[0].startswith("Moderate match")

    def test_weak_tier_with_gap_lines(self, python_job, react_profile):
        result = score(python_job, react_profile)
        assert result.recommendations[0].startswith("Significant gaps")
        assert result.recommendations[1:] == (
            "Build experience with Python",
            "Build experience with Django",
            "Build experience with PostgreSQL",
        )
        assert len(result.recommendations) == 1 + MAX_GAP_RECOMMENDATIONS

    def test_exactly_one_primary_tier(self, react_job, python_job, strong_job, react_profile):
        tiers = ("Strong match", "Moderate match", "Significant gaps")
        for job in (react_job, python_job, strong_job):
            recs = score(job, react_profile).recommendations
            assert sum(1 for r in recs if r.startswith(tiers)) == 1

    @pytest.mark.parametrize("overall,tier", [
        (100, "Strong match"),
        (80, "Strong match"),
        (79, "Moderate match"),
        (50, "Moderate match"),
        (49, "Significant gaps"),
        (0, "Significant gaps"),
    ])
    def test_tier_boundaries(self, overall, tier):
        assert STRONG_MATCH_THRESHOLD == 80
        assert MODERATE_MATCH_THRESHOLD == 50
        recs = _build_recommendations(overall, [], [])
        assert recs == [recs[0]]
        assert recs[0].startswith(tier)

    def test_strong_tier_highlights_top_levels(self):
        highlights = [
            Skill(name="SQL", level=SkillLevel.BEGINNER),
            Skill(name="React", level=SkillLevel.EXPERT),
            Skill(name="Docker", level=SkillLevel.ADVANCED),
            Skill(name="Go", level=SkillLevel.EXPERT),
        ]
        recs = _build_recommendations(80, highlights, [])
        assert recs == ["Strong match - tailor your resume to highlight React, Go, Docker"]

    def test_gap_lines_capped(self):
        gaps = [SkillGap(skill=name, reason=GAP_REASON) for name in ("A", "B", "C", "D")]
        recs = _build_recommendations(49, [], gaps)
        assert recs[1:] == ["Build experience with A", "Build experience with B", "Build experience with C"]


class TestStrengths:
    def test_threshold_is_inclusive(self):
        scores = {
            "skills_score": STRENGTH_THRESHOLD,
            "experience_score": STRENGTH_THRESHOLD - 1,
            "education_score": 100,
            "location_score": 0,
        }
        assert STRENGTH_THRESHOLD == 80
        assert _build_strengths(scores) == ["Strong skills alignment", "Education aligns with the role"]

    def test_experience_at_exactly_80_is_a_strength(self, react_job, react_profile):
        react_profile.experience_level = ExperienceLevel.SENIOR
        result = score(react_job, react_profile)
        assert result.experience_score == 80
        assert "Relevant experience level" in result.strengths

    def test_experience_below_80_is_not(self, react_job, react_profile):
        result = score(react_job, react_profile)
        assert result.experience_score == EXPERIENCE_BASELINE
        assert "Relevant experience level" not in result.strengths
        assert result.strengths == ("Strong skills alignment", "Location match")


class TestMissingFields:
    def test_none_job_location(self, react_profile):
        job = JobPosting(job_title="Dev", job_description="React", location=None)
        assert score(job, react_profile).location_score == 0

    def test_none_profile_location(self, react_job, react_profile):
        react_profile.location = None
        result = score(react_job, react_profile)
        assert result.location_score == 0
        assert result.skills_score == 95

    def test_none_description_uses_baselines(self, react_job, react_profile):
        react_job.job_description = None
        result = score(react_job, react_profile)
        assert result.skills_score == 0
        assert result.experience_score == EXPERIENCE_BASELINE
        assert result.education_score == EDUCATION_BASELINE
        assert result.gaps == ()

    def test_none_record_fields(self, strong_job):
        profile = Profile(
            skills=[Skill(name=None), Skill(name="React", level=None)],
            employment_history=[EmploymentEntry(title=None, company="Acme")],
            education=[EducationEntry(degree=None, field=None)],
            location="San Francisco, CA",
        )
        result = score(strong_job, profile)
        assert result.skills_score == 15
        assert result.education_score == EDUCATION_BASELINE
        assert 0 <= result.overall_score <= 100

    def test_none_collections(self, react_job):
        profile = Profile(skills=None, employment_history=None, education=None, location="SF")
        result = score(react_job, profile)
        assert result.skills_score == 0
        assert result.experience_score == EXPERIENCE_BASELINE


class TestSkillGaps:
    def test_compare_skills(self):
        matching, missing = compare_skills(["React", "Python"], ["react", "Go", "PYTHON"])
        assert matching == ["React", "Python"]
        assert missing == ["Go"]

    def test_whole_word_detection(self):
        job = JobPosting(
            job_title="Frontend Engineer",
            job_description="JavaScript and PostgreSQL experience",
        )
        gaps = [g.skill for g in find_skill_gaps(job, Profile())]
        assert "JavaScript" in gaps
        assert "PostgreSQL" in gaps
        # Substrings of longer words are not separate gaps
        assert "Java" not in gaps
        assert "SQL" not in gaps

    def test_gap_check_is_case_insensitive(self):
        job = JobPosting(job_title="Engineer", job_description="We use Docker daily")
        profile = Profile(skills=[Skill(name="docker")])
        assert find_skill_gaps(job, profile) == []


class TestJobMatcher:
    def test_rank_jobs_descending(self, react_profile, react_job, python_job):
        ranked = JobMatcher(react_profile).rank_jobs([python_job, react_job])
        assert [job.company_name for job, _ in ranked] == ["Acme", "Globex"]
        scores = [result.overall_score for _, result in ranked]
        assert scores == sorted(scores, reverse=True)

    def test_rank_ties_keep_input_order(self, react_profile):
        first = JobPosting(job_title="Role", job_description="Nothing relevant", company_name="First")
        second = JobPosting(job_title="Role", job_description="Nothing relevant", company_name="Second")
        ranked = JobMatcher(react_profile).rank_jobs([first, second])
        assert [job.company_name for job, _ in ranked] == ["First", "Second"]

    @pytest.mark.parametrize("sort_by", ["location", "bogus"])
    def test_rank_by_other_keys(self, react_profile, react_job, python_job, sort_by):
        ranked = JobMatcher(react_profile).rank_jobs([python_job, react_job], sort_by=sort_by)
        assert ranked[0][0] is react_job

    def test_match_job_delegates_to_score(self, react_profile, react_job):
        assert JobMatcher(react_profile).match_job(react_job) == score(react_job, react_profile)
