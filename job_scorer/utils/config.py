"""
Settings for the scorer CLI and job importers.

Values come from a JSON file layered over DEFAULT_CONFIG. API keys may
also be supplied through {PROVIDER}_API_KEY environment variables.
"""

from pathlib import Path
from typing import Optional
import copy
import json
import os


SECRET_MARKERS = ("api_key", "key", "secret", "password", "token")


class Config:
    """JSON-backed settings with dot-notation access."""

    DEFAULT_PATH = Path.home() / ".job_scorer" / "config.json"

    DEFAULT_CONFIG = {
        "api_keys": {
            "anthropic": "",
        },
        "importer": {
            "timeout": 30,
            "user_agent": (
                "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
                "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
            ),
            "use_ai": True,
            "model": "claude-sonnet-4-20250514",
            "max_html_chars": 12000,
        },
        "output": {
            "top": 10,
        },
        "logging": {
            "level": "WARNING",
        },
    }

    def __init__(self, config_path: Optional[str] = None):
        """
        Args:
            config_path: Settings file, ~/.job_scorer/config.json when omitted

        Raises:
            ValueError: If the file holds anything but a JSON object
        """
        self.config_path = Path(config_path) if config_path else self.DEFAULT_PATH
        self.config = copy.deepcopy(self.DEFAULT_CONFIG)

        if self.config_path.exists():
            with open(self.config_path, 'r', encoding='utf-8') as f:
                overrides = json.load(f)
            if not isinstance(overrides, dict):
                raise ValueError(f"Config file must contain a JSON object: {self.config_path}")
            _merge_into(self.config, overrides)

    def save(self) -> None:
        self.config_path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.config_path, 'w', encoding='utf-8') as f:
            json.dump(self.config, f, indent=2)

    def get(self, key: str, default=None):
        """Look up a dotted key such as "importer.timeout"."""
        node = self.config
        for part in key.split('.'):
            if not isinstance(node, dict) or part not in node:
                return default
            node = node[part]
        return node

    def set(self, key: str, value) -> None:
        """Assign a dotted key, creating intermediate sections as needed."""
        *sections, leaf = key.split('.')
        node = self.config
        for part in sections:
            if not isinstance(node.get(part), dict):
                node[part] = {}
            node = node[part]
        node[leaf] = value

    def get_api_key(self, provider: str) -> str:
        """{PROVIDER}_API_KEY from the environment wins over the file."""
        return os.environ.get(f"{provider.upper()}_API_KEY") or self.get(f"api_keys.{provider}") or ""

    def set_api_key(self, provider: str, key: str) -> None:
        self.set(f"api_keys.{provider}", key)
        self.save()

    def get_importer_config(self) -> dict:
        """Keyword settings for importers.build_importers()."""
        return {
            "timeout": self.get("importer.timeout", 30),
            "user_agent": self.get("importer.user_agent", ""),
            "use_ai": bool(self.get("importer.use_ai", True)),
            "model": self.get("importer.model", ""),
            "max_html_chars": self.get("importer.max_html_chars", 12000),
            "anthropic_api_key": self.get_api_key("anthropic"),
        }

    def get_log_level(self) -> str:
        return str(self.get("logging.level", "WARNING")).upper()

    def print_config(self) -> None:
        print(json.dumps(self.masked(), indent=2))

    def masked(self) -> dict:
        """Copy of the settings with every secret obscured."""
        return _mask_section(self.config, secret=False)


def _merge_into(target: dict, overrides: dict) -> None:
    for key, value in overrides.items():
        if isinstance(value, dict) and isinstance(target.get(key), dict):
            _merge_into(target[key], value)
        else:
            target[key] = value


def _is_secret(key: str) -> bool:
    return any(marker in key.lower() for marker in SECRET_MARKERS)


def _mask_section(section: dict, secret: bool) -> dict:
    masked = {}
    for key, value in section.items():
        hidden = secret or _is_secret(key)
        if isinstance(value, dict):
            masked[key] = _mask_section(value, hidden)
        else:
            masked[key] = mask_value(value) if hidden else value
    return masked


def mask_value(value) -> str:
    """"sk-ant-1234567890" -> "sk-a...7890"; short values are fully hidden."""
    if not value:
        return "(not set)"
    value = str(value)
    return f"{value[:4]}...{value[-4:]}" if len(value) > 8 else "****"
