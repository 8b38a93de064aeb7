"""
Generic job page importer.

Downloads any job page and either asks Claude to structure it or falls
back to reading common HTML markers (OpenGraph tags, h1, location blocks).
"""

from typing import Optional
import json
import re

import anthropic
from bs4 import BeautifulSoup
import requests

from .base import JobImporter
from job_scorer.core.models import JobPosting


class HtmlImporter(JobImporter):
    """Imports postings from arbitrary job pages."""

    SYSTEM_PROMPT = (
        "You are a precise job posting parser. Extract ALL available data. "
        "Return ONLY valid JSON with no formatting."
    )

    def __init__(
        self,
        timeout: int = 30,
        user_agent: str = "",
        session: Optional[requests.Session] = None,
        anthropic_api_key: str = "",
        model: str = "claude-sonnet-4-20250514",
        use_ai: bool = True,
        max_html_chars: int = 12000,
        client: Optional[anthropic.Anthropic] = None,
    ):
        super().__init__(timeout=timeout, user_agent=user_agent, session=session)
        self.model = model
        self.max_html_chars = max_html_chars
        self.client = client
        if self.client is None and use_ai and anthropic_api_key:
            self.client = anthropic.Anthropic(api_key=anthropic_api_key)

    @property
    def name(self) -> str:
        return "html"

    def can_handle(self, url: str) -> bool:
        return url.lower().startswith(("http://", "https://"))

    def fetch_posting(self, url: str) -> JobPosting:
        page = self._get(
            url,
            headers={
                "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
                "Accept-Language": "en-US,en;q=0.9",
            },
        ).text
        self.logger.debug(f"Fetched {len(page)} characters from {url}")

        if self.client is not None:
            job = self._extract_with_ai(page, url)
            if job is not None:
                return job

        return self._extract_from_html(page, url)

    def _extract_with_ai(self, page: str, url: str) -> Optional[JobPosting]:
        """Ask Claude to turn the page into posting fields."""
        site = "LinkedIn" if "linkedin.com" in url.lower() else (
            "Indeed" if "indeed.com" in url.lower() else "this"
        )

        prompt = f"""Parse job posting data from {site} HTML.

CRITICAL: Return ONLY valid JSON - no markdown blocks, no explanations.

Required format:
{{
  "job_title": "exact title from posting",
  "company_name": "company name",
  "location": "city, state or Remote",
  "job_description": "full description with key responsibilities and requirements",
  "salary_min": <number or null>,
  "salary_max": <number or null>,
  "job_type": "full-time|part-time|contract|internship|temporary" or null
}}

Extract numeric salary values (convert "$80K" to 80000). If range like "$80K-$120K", split to min/max.

HTML (first {self.max_html_chars // 1000}KB):
{page[:self.max_html_chars]}"""

        try:
            response = self.client.messages.create(
                model=self.model,
                max_tokens=2000,
                system=self.SYSTEM_PROMPT,
                messages=[{"role": "user", "content": prompt}],
            )
        except anthropic.APIError as e:
            self.logger.error(f"AI extraction failed: {e}, using HTML parsing")
            return None

        texts = [getattr(block, "text", None) for block in response.content or []]
        reply = "".join(text for text in texts if isinstance(text, str))
        data = self._parse_json_reply(reply)
        if data is None:
            self.logger.warning("AI reply was not valid JSON, using HTML parsing")
            return None

        job = JobPosting.from_dict(data)
        job.source_url = url
        return job

    @staticmethod
    def _parse_json_reply(content: str) -> Optional[dict]:
        """Parse JSON, tolerating markdown fences or surrounding prose."""
        try:
            data = json.loads(content)
        except json.JSONDecodeError:
            match = re.search(r"\{[\s\S]*\}", content)
            if not match:
                return None
            try:
                data = json.loads(match.group(0))
            except json.JSONDecodeError:
                return None
        return data if isinstance(data, dict) else None

    def _extract_from_html(self, page: str, url: str) -> JobPosting:
        """Best-effort extraction from common page markers."""
        soup = BeautifulSoup(page, "html.parser")
        for tag in soup(["script", "style", "noscript"]):
            tag.decompose()

        title = self._meta(soup, "og:title")
        if not title:
            h1 = soup.find("h1")
            title = h1.get_text(strip=True) if h1 else ""
        if not title and soup.title:
            title = soup.title.get_text(strip=True)

        location = ""
        location_tag = soup.find(class_=re.compile("location", re.IGNORECASE))
        if location_tag:
            location = location_tag.get_text(" ", strip=True)

        for tag in soup(["nav", "footer", "header"]):
            tag.decompose()

        container = soup.find("main") or soup.find("article") or soup.body or soup
        text = container.get_text(separator="\n")
        description = "\n".join(line.strip() for line in text.splitlines() if line.strip())

        salary_min, salary_max = None, None
        salary_match = re.search(r"\$\s?\d[\d,]*[kK]?(?:\s*[-–]\s*\$?\s?\d[\d,]*[kK]?)?", description)
        if salary_match:
            salary_min, salary_max = self._parse_salary(salary_match.group(0))

        return JobPosting(
            job_title=title,
            job_description=description,
            company_name=self._meta(soup, "og:site_name"),
            location=location,
            source_url=url,
            salary_min=salary_min,
            salary_max=salary_max,
        )

    @staticmethod
    def _meta(soup: BeautifulSoup, prop: str) -> str:
        tag = soup.find("meta", attrs={"property": prop})
        return (tag.get("content") or "").strip() if tag else ""
