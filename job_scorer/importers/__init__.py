"""
Job posting importers for ATS boards and generic job pages.
"""

from .base import ImportResult, JobImporter, import_status
from .greenhouse import GreenhouseImporter
from .lever import LeverImporter
from .html import HtmlImporter
from .aggregator import build_importers, import_job

__all__ = [
    "ImportResult",
    "JobImporter",
    "import_status",
    "GreenhouseImporter",
    "LeverImporter",
    "HtmlImporter",
    "build_importers",
    "import_job",
]
