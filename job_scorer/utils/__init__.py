"""
Utility modules for the job scorer application.
"""

from .config import Config

__all__ = [
    "Config",
]
