"""
Tests for configuration loading.
"""

import json

import pytest

from job_scorer.utils.config import Config


@pytest.fixture
def config_path(tmp_path):
    return tmp_path / "config.json"


class TestConfig:
    def test_defaults_without_file(self, config_path):
        config = Config(str(config_path))
        assert config.get("importer.timeout") == 30
        assert config.get("output.top") == 10
        assert config.get("missing.key", "fallback") == "fallback"

    def test_defaults_not_shared_between_instances(self, config_path):
        first = Config(str(config_path))
        first.set("importer.timeout", 5)
        assert Config(str(config_path)).get("importer.timeout") == 30

    def test_file_deep_merged_over_defaults(self, config_path):
        config_path.write_text(json.dumps({"importer": {"timeout": 10}}))
        config = Config(str(config_path))
        assert config.get("importer.timeout") == 10
        assert config.get("importer.use_ai") is True

    def test_non_object_file_rejected(self, config_path):
        config_path.write_text("[1, 2, 3]")
        with pytest.raises(ValueError):
            Config(str(config_path))

    def test_set_and_save(self, config_path):
        config = Config(str(config_path))
        config.set("output.top", 3)
        config.set("new.nested.key", "value")
        config.save()

        reloaded = Config(str(config_path))
        assert reloaded.get("output.top") == 3
        assert reloaded.get("new.nested.key") == "value"

    def test_env_var_overrides_file(self, config_path, monkeypatch):
        config = Config(str(config_path))
        config.set("api_keys.anthropic", "file-key")

        monkeypatch.delenv("ANTHROPIC_API_KEY", raising=False)
        assert config.get_api_key("anthropic") == "file-key"

        monkeypatch.setenv("ANTHROPIC_API_KEY", "env-key")
        assert config.get_api_key("anthropic") == "env-key"

    def test_importer_config(self, config_path, monkeypatch):
        monkeypatch.setenv("ANTHROPIC_API_KEY", "sk-test")
        settings = Config(str(config_path)).get_importer_config()
        assert settings["anthropic_api_key"] == "sk-test"
        assert settings["timeout"] == 30
        assert settings["use_ai"] is True

    def test_masked_hides_secrets(self, config_path):
        config = Config(str(config_path))
        config.set("api_keys.anthropic", "sk-ant-1234567890")
        masked = config.masked()
        assert masked["api_keys"]["anthropic"] == "sk-a...7890"
        assert masked["importer"]["timeout"] == 30

    def test_masked_unset_key(self, config_path):
        assert Config(str(config_path)).masked()["api_keys"]["anthropic"] == "(not set)"

    def test_log_level(self, config_path):
        config = Config(str(config_path))
        assert config.get_log_level() == "WARNING"
        config.set("logging.level", "debug")
        assert config.get_log_level() == "DEBUG"
