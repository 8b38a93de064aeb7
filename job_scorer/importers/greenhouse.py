"""
Greenhouse ATS importer.

Greenhouse job boards expose a public API that doesn't require
authentication for reading a single posting.
"""

import re

from .base import JobImporter, html_to_text
from job_scorer.core.models import JobPosting
from job_scorer.exceptions import JobImportError


class GreenhouseImporter(JobImporter):
    """Imports postings from Greenhouse job boards."""

    API_URL = "https://boards-api.greenhouse.io/v1/boards"

    URL_PATTERN = re.compile(
        r"https?://(?:boards|job-boards)(?:\.eu)?\.greenhouse\.io/"
        r"(?P<board>[\w-]+)/jobs/(?P<job_id>\d+)",
        re.IGNORECASE,
    )

    @property
    def name(self) -> str:
        return "greenhouse"

    def can_handle(self, url: str) -> bool:
        return bool(self.URL_PATTERN.match(url))

    def fetch_posting(self, url: str) -> JobPosting:
        match = self.URL_PATTERN.match(url)
        if not match:
            raise JobImportError(f"Not a Greenhouse job URL: {url}", url=url)

        board, job_id = match.group("board"), match.group("job_id")
        data = self._get_json(f"{self.API_URL}/{board}/jobs/{job_id}")
        return self._parse_job(data, board)

    def _parse_job(self, data: dict, board: str) -> JobPosting:
        """Parse Greenhouse job data into a JobPosting."""
        location_data = data.get("location") or {}
        location = location_data.get("name", "") if isinstance(location_data, dict) else str(location_data)

        return JobPosting(
            job_title=data.get("title") or "",
            job_description=html_to_text(data.get("content") or ""),
            company_name=data.get("company_name") or board.replace("-", " ").title(),
            location=location,
            source_url=data.get("absolute_url") or "",
        )
