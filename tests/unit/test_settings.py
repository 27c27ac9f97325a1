"""
Unit tests for settings module.
"""

import pytest
from pathlib import Path
from pydantic import ValidationError

from devops_journal.settings import (
    AppSettings,
    DevOpsSettings,
    IntegrationSettings,
    JournalSettings,
    LoggingSettings,
    DEFAULT_FOLLOW_UP_STEPS,
    load_settings
)


def clear_env(monkeypatch, *names):
    """Unset variables and restore them after the test, even if set meanwhile."""
    for name in names:
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)


class TestDevOpsSettings:
    """Test Azure DevOps configuration."""

    def test_default_values(self, monkeypatch):
        """Test default Azure DevOps settings."""
        clear_env(monkeypatch, "AZURE_DEVOPS_MCP_COMMAND", "AZURE_DEVOPS_PROJECTS")
        settings = DevOpsSettings()
        assert settings.projects == ["SCC", "SPOOL"]
        assert settings.work_items_tool == "get-work-items"
        assert settings.top == 50
        assert settings.is_configured is False

    def test_projects_from_environment(self, monkeypatch):
        """Test comma-separated projects from the environment."""
        monkeypatch.setenv("AZURE_DEVOPS_PROJECTS", "Alpha, Beta,,Gamma")
        settings = DevOpsSettings()
        assert settings.projects == ["Alpha", "Beta", "Gamma"]

    def test_mcp_args_from_environment(self, monkeypatch):
        """Test server arguments from the environment."""
        monkeypatch.setenv("AZURE_DEVOPS_MCP_COMMAND", "node")
        monkeypatch.setenv("AZURE_DEVOPS_MCP_ARGS", "dist/index.js")
        settings = DevOpsSettings()
        assert settings.is_configured is True
        assert settings.mcp_args == ["dist/index.js"]

    def test_top_must_be_positive(self):
        """Test validation of the work item limit."""
        with pytest.raises(ValidationError):
            DevOpsSettings(top=0)


class TestJournalSettings:
    """Test journal configuration."""

    def test_default_values(self, monkeypatch):
        """Test default journal settings."""
        clear_env(monkeypatch, "JOURNAL_DIRECTORY", "JOURNAL_EXPORT_HTML")
        settings = JournalSettings()
        assert settings.directory == Path("journal-entries")
        assert settings.file_prefix == "journal-"
        assert settings.export_html is False
        assert settings.follow_up_steps == DEFAULT_FOLLOW_UP_STEPS

    def test_follow_up_steps_are_not_shared(self):
        """Test each instance gets its own follow-up list."""
        first = JournalSettings()
        first.follow_up_steps.append("Extra")
        assert JournalSettings().follow_up_steps == DEFAULT_FOLLOW_UP_STEPS

    def test_directory_expands_home(self):
        """Test home expansion of the journal directory."""
        settings = JournalSettings(directory="~/journals")
        assert settings.directory == Path("~/journals").expanduser()


class TestLoggingSettings:
    """Test logging configuration."""

    def test_default_values(self, monkeypatch):
        """Test default logging settings."""
        clear_env(monkeypatch, "LOG_LEVEL", "LOG_FILE")
        settings = LoggingSettings()
        assert settings.level == "INFO"
        assert settings.file == Path("logs/app.log")

    def test_log_level_validation(self):
        """Test log level validation."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]

        for level in valid_levels:
            settings = LoggingSettings(level=level)
            assert settings.level == level

        # Test case insensitive
        settings = LoggingSettings(level="debug")
        assert settings.level == "DEBUG"

        # Test invalid level
        with pytest.raises(ValidationError):
            LoggingSettings(level="INVALID")


class TestAppSettings:
    """Test main application settings."""

    def test_default_initialization(self, monkeypatch):
        """Test default app settings initialization."""
        clear_env(monkeypatch, "NAME", "VERSION", "DEBUG")
        settings = AppSettings()
        assert settings.name == "DevOpsJournal"
        assert settings.version == "0.1.0"
        assert settings.debug is False

    def test_nested_settings(self):
        """Test nested settings configuration."""
        settings = AppSettings()
        assert isinstance(settings.devops, DevOpsSettings)
        assert isinstance(settings.integrations, IntegrationSettings)
        assert isinstance(settings.journal, JournalSettings)
        assert isinstance(settings.logging, LoggingSettings)


class TestLoadSettings:
    """Test settings loading functionality."""

    def test_load_from_yaml(self, sample_yaml_config):
        """Test loading settings from YAML file."""
        settings = AppSettings.from_yaml(sample_yaml_config)
        assert settings.name == "TestDevOpsJournal"
        assert settings.devops.org_url == "https://dev.azure.com/yaml-org"
        assert settings.devops.projects == ["SCC"]
        assert settings.devops.top == 25
        assert settings.integrations.enable_teams_integration is False
        assert settings.journal.directory == Path("yaml-journals")
        assert settings.journal.follow_up_steps == ["Plan tomorrow"]

    def test_load_nonexistent_yaml(self, temp_dir):
        """Test loading from non-existent YAML file."""
        nonexistent_file = temp_dir / "nonexistent.yaml"
        with pytest.raises(FileNotFoundError):
            AppSettings.from_yaml(nonexistent_file)

    def test_environment_overrides_yaml(self, sample_yaml_config, monkeypatch):
        """Test environment variables take precedence over YAML values."""
        monkeypatch.setenv("AZURE_DEVOPS_ORG_URL", "https://dev.azure.com/env-org")
        clear_env(monkeypatch, "NAME", "AZURE_DEVOPS_PROJECTS", "AZURE_DEVOPS_TOP")

        settings = load_settings(yaml_path=sample_yaml_config)

        assert settings.devops.org_url == "https://dev.azure.com/env-org"  # From environment
        assert settings.devops.projects == ["SCC"]  # From YAML
        assert settings.devops.top == 25  # From YAML
        assert settings.name == "TestDevOpsJournal"  # From YAML

    def test_load_settings_function(self, sample_yaml_config, sample_env_file, monkeypatch):
        """Test load_settings function with multiple sources."""
        clear_env(
            monkeypatch, "NAME", "DEBUG", "AZURE_DEVOPS_ORG_URL", "AZURE_DEVOPS_PROJECTS",
            "JOURNAL_EXPORT_HTML", "LOG_LEVEL"
        )

        settings = load_settings(yaml_path=sample_yaml_config, env_file=sample_env_file)

        assert settings.name == "TestDevOpsJournal"  # From YAML
        assert settings.debug is True  # From YAML
        assert settings.devops.org_url == "https://dev.azure.com/test-org"  # From .env
        assert settings.devops.projects == ["Alpha", "Beta"]  # From .env
        assert settings.journal.export_html is True  # From .env
        assert settings.logging.level == "DEBUG"  # From .env
