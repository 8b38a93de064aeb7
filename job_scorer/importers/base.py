"""
Base class for job posting importers.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional
import html
import logging
import re

from bs4 import BeautifulSoup
import requests

from job_scorer.core.models import JobPosting
from job_scorer.exceptions import JobImportError


STATUS_SUCCESS = "success"
STATUS_PARTIAL = "partial"
STATUS_FAILED = "failed"


@dataclass
class ImportResult:
    """Outcome of importing one posting."""
    job: JobPosting
    status: str
    source_url: str = ""
    importer: str = ""

    def to_dict(self) -> dict:
        return {
            "job": self.job.to_dict(),
            "import_status": self.status,
            "source_url": self.source_url,
            "importer": self.importer,
        }


def import_status(job: JobPosting) -> str:
    """failed without title or company, partial without description."""
    if not job.job_title.strip() or not job.company_name.strip():
        return STATUS_FAILED
    if not job.job_description.strip():
        return STATUS_PARTIAL
    return STATUS_SUCCESS


def html_to_text(markup: str) -> str:
    """Strip tags from a (possibly entity-escaped) HTML fragment."""
    if not markup:
        return ""
    soup = BeautifulSoup(html.unescape(markup), "html.parser")
    for tag in soup(["script", "style"]):
        tag.decompose()
    text = soup.get_text(separator="\n")
    lines = (line.strip() for line in text.splitlines())
    return "\n".join(line for line in lines if line)


class JobImporter(ABC):
    """Abstract base class for job posting importers."""

    def __init__(
        self,
        timeout: int = 30,
        user_agent: str = "",
        session: Optional[requests.Session] = None,
    ):
        self.timeout = timeout
        self.session = session or requests.Session()
        if user_agent:
            self.session.headers["User-Agent"] = user_agent
        self.logger = logging.getLogger(self.__class__.__name__)

    @property
    @abstractmethod
    def name(self) -> str:
        """Importer name."""
        pass

    @abstractmethod
    def can_handle(self, url: str) -> bool:
        """Whether this importer understands the URL."""
        pass

    @abstractmethod
    def fetch_posting(self, url: str) -> JobPosting:
        """
        Fetch and parse a posting.

        Raises:
            JobImportError: If the posting cannot be retrieved
        """
        pass

    def fetch(self, url: str) -> ImportResult:
        """Fetch a posting and grade how complete it is."""
        job = self.fetch_posting(url)
        if not job.source_url:
            job.source_url = url

        status = import_status(job)
        self.logger.info(f"Imported {job.job_title!r} from {url} ({status})")
        return ImportResult(job=job, status=status, source_url=url, importer=self.name)

    def _get(self, url: str, **kwargs) -> requests.Response:
        """GET a URL, turning transport and HTTP errors into JobImportError."""
        try:
            response = self.session.get(url, timeout=self.timeout, **kwargs)
        except requests.RequestException as e:
            raise JobImportError(f"Failed to fetch {url}: {e}", url=url) from e

        if response.status_code != 200:
            raise JobImportError(
                f"Failed to fetch {url}: HTTP {response.status_code}", url=url
            )
        return response

    def _get_json(self, url: str, **kwargs):
        response = self._get(url, **kwargs)
        try:
            return response.json()
        except ValueError as e:
            raise JobImportError(f"Invalid JSON from {url}", url=url) from e

    def _parse_salary(self, salary_text: str) -> tuple[Optional[int], Optional[int]]:
        """Parse a salary range such as "$80K - $120K" from text."""
        if not salary_text:
            return None, None

        clean = salary_text.replace('$', '').replace(',', '')
        clean = re.sub(r'(\d+)\s*[kK]\b', r'\g<1>000', clean)

        numbers = re.findall(r'\d+', clean)

        if len(numbers) >= 2:
            return int(numbers[0]), int(numbers[1])
        elif len(numbers) == 1:
            return int(numbers[0]), int(numbers[0])

        return None, None
