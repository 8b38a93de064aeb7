"""
Import dispatcher - routes a posting URL to the importer that understands it.
"""

from typing import Optional
import logging

from .base import ImportResult, JobImporter
from .greenhouse import GreenhouseImporter
from .html import HtmlImporter
from .lever import LeverImporter
from job_scorer.exceptions import JobImportError
from job_scorer.utils.config import Config

logger = logging.getLogger(__name__)


def build_importers(settings: Optional[dict] = None) -> list[JobImporter]:
    """
    Create importers in priority order, ATS APIs before the generic page reader.

    Args:
        settings: Output of Config.get_importer_config()
    """
    settings = settings or {}
    common = {
        "timeout": settings.get("timeout", 30),
        "user_agent": settings.get("user_agent", ""),
    }

    return [
        GreenhouseImporter(**common),
        LeverImporter(**common),
        HtmlImporter(
            **common,
            anthropic_api_key=settings.get("anthropic_api_key", ""),
            model=settings.get("model") or "claude-sonnet-4-20250514",
            use_ai=settings.get("use_ai", True),
            max_html_chars=settings.get("max_html_chars", 12000),
        ),
    ]


def import_job(
    url: str,
    config: Optional[Config] = None,
    importers: Optional[list[JobImporter]] = None,
) -> ImportResult:
    """
    Import a job posting from a URL.

    Raises:
        JobImportError: If no importer accepts the URL or fetching fails
    """
    url = url.strip()
    if importers is None:
        importers = build_importers(config.get_importer_config() if config else None)

    for importer in importers:
        if importer.can_handle(url):
            logger.info(f"Importing {url} with {importer.name}")
            return importer.fetch(url)

    raise JobImportError(f"Unsupported job URL: {url}", url=url)
