"""
Job Scorer - Job fit scoring for a job search tracker

This package:
1. Loads candidate profiles from JSON exports or resumes (PDF, DOCX, text)
2. Imports job postings from Greenhouse, Lever or any job page
3. Scores profile/job compatibility with a per-dimension breakdown
4. Lists strengths, skill gaps and recommendations for each match
5. Predicts interview success from preparation activity
"""

from job_scorer.core.matcher import score
from job_scorer.core.models import JobPosting, MatchResult, Profile

__version__ = "1.0.0"

__all__ = ["score", "JobPosting", "MatchResult", "Profile"]
