"""
Lever ATS importer.

Lever has a public postings API keyed by company slug and posting id.
"""

import re

from .base import JobImporter, html_to_text
from job_scorer.core.models import JobPosting
from job_scorer.exceptions import JobImportError


class LeverImporter(JobImporter):
    """Imports postings from Lever job boards."""

    API_URL = "https://api.lever.co/v0/postings"

    URL_PATTERN = re.compile(
        r"https?://jobs(?:\.eu)?\.lever\.co/(?P<company>[\w.-]+)/(?P<posting_id>[0-9a-f-]{36})",
        re.IGNORECASE,
    )

    @property
    def name(self) -> str:
        return "lever"

    def can_handle(self, url: str) -> bool:
        return bool(self.URL_PATTERN.match(url))

    def fetch_posting(self, url: str) -> JobPosting:
        match = self.URL_PATTERN.match(url)
        if not match:
            raise JobImportError(f"Not a Lever job URL: {url}", url=url)

        company, posting_id = match.group("company"), match.group("posting_id")
        data = self._get_json(f"{self.API_URL}/{company}/{posting_id}", params={"mode": "json"})
        return self._parse_job(data, company)

    def _parse_job(self, data: dict, company: str) -> JobPosting:
        """Parse Lever posting data into a JobPosting."""
        # Categories contain location, team, commitment, etc.
        categories = data.get("categories") or {}

        # Requirements and responsibilities live in "lists"
        parts = [data.get("descriptionPlain") or html_to_text(data.get("description") or "")]
        for section in data.get("lists") or []:
            heading = section.get("text", "")
            body = html_to_text(section.get("content", ""))
            parts.append(f"{heading}\n{body}".strip())
        parts.append(data.get("additionalPlain") or "")

        salary_min = salary_max = None
        salary_range = data.get("salaryRange") or {}
        if salary_range:
            salary_min = salary_range.get("min")
            salary_max = salary_range.get("max")

        return JobPosting(
            job_title=data.get("text") or "",
            job_description="\n\n".join(p.strip() for p in parts if p and p.strip()),
            company_name=company.replace("-", " ").title(),
            location=categories.get("location") or "",
            source_url=data.get("hostedUrl") or "",
            salary_min=salary_min,
            salary_max=salary_max,
            job_type=(categories.get("commitment") or "").lower(),
        )
