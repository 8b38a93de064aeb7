"""
Exceptions raised by job_scorer.
"""


class JobScorerError(Exception):
    """Base class for errors the CLI reports to the user."""


class JobImportError(JobScorerError):
    """A job posting could not be fetched or parsed."""

    def __init__(self, message: str, url: str = ""):
        super().__init__(message)
        self.url = url
