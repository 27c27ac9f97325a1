"""
Global application settings and configuration management.

This module provides centralized configuration management using Pydantic Settings
with support for environment variables, YAML configuration files, and validation.
"""

from pathlib import Path
from typing import Annotated, Optional, List, Dict, Any

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict
import yaml
from dotenv import load_dotenv

from .core.exceptions import ConfigurationError


def _split_csv(v: Any) -> Any:
    """Split a comma-separated environment value into a list."""
    if isinstance(v, str):
        return [item.strip() for item in v.split(',') if item.strip()]
    return v


class DevOpsSettings(BaseSettings):
    """Azure DevOps MCP server configuration."""

    org_url: str = Field(default="", description="Azure DevOps organization URL")
    pat: str = Field(default="", description="Personal access token forwarded to the MCP server")
    projects: Annotated[List[str], NoDecode] = Field(
        default=["SCC", "SPOOL"],
        description="Projects to query for work items and pull requests (comma-separated)"
    )
    mcp_command: str = Field(
        default="",
        description="Command that launches the Azure DevOps MCP server (empty uses sample data)"
    )
    mcp_args: Annotated[List[str], NoDecode] = Field(
        default_factory=list,
        description="Arguments for the MCP server command (comma-separated)"
    )
    work_items_tool: str = Field(default="get-work-items", description="MCP tool returning work items")
    pull_requests_tool: str = Field(default="get-pull-requests", description="MCP tool returning pull requests")
    wiql: Optional[str] = Field(default=None, description="Custom WIQL query for work items")
    top: int = Field(default=50, ge=1, description="Maximum work items per project")

    @field_validator('projects', 'mcp_args', mode='before')
    @classmethod
    def parse_lists(cls, v):
        """Parse comma-separated lists from environment variables."""
        return _split_csv(v)

    model_config = SettingsConfigDict(env_prefix="AZURE_DEVOPS_")

    @property
    def is_configured(self) -> bool:
        """Whether a real MCP server can be launched."""
        return bool(self.mcp_command)


class IntegrationSettings(BaseSettings):
    """Optional third-party integrations."""

    enable_teams_integration: bool = Field(
        default=True,
        description="Fetch calendar events from the Teams MCP server"
    )
    teams_mcp_command: str = Field(default="", description="Command that launches the Teams MCP server")
    teams_mcp_args: Annotated[List[str], NoDecode] = Field(default_factory=list, description="Teams MCP server arguments")
    calendar_tool: str = Field(default="get-calendar-events", description="MCP tool returning calendar events")

    @field_validator('teams_mcp_args', mode='before')
    @classmethod
    def parse_args(cls, v):
        """Parse comma-separated arguments from environment variables."""
        return _split_csv(v)

    model_config = SettingsConfigDict(env_prefix="INTEGRATIONS_")


DEFAULT_FOLLOW_UP_STEPS = [
    "Review pending EUDB compliance requirements",
    "Follow up on architecture review feedback",
]


class JournalSettings(BaseSettings):
    """Journal storage and rendering configuration."""

    directory: Path = Field(
        default=Path("journal-entries"),
        description="Directory holding journal files"
    )
    file_prefix: str = Field(default="journal-", description="Journal file name prefix")
    export_html: bool = Field(default=False, description="Also write an HTML copy of each entry")
    follow_up_steps: Annotated[List[str], NoDecode] = Field(
        default_factory=lambda: list(DEFAULT_FOLLOW_UP_STEPS),
        description="Next steps appended when an entry is enhanced"
    )

    model_config = SettingsConfigDict(env_prefix="JOURNAL_")

    @field_validator("directory", mode="before")
    @classmethod
    def validate_directory(cls, v) -> Path:
        """Expand user home in the journal directory."""
        return Path(v).expanduser()


class LoggingSettings(BaseSettings):
    """Logging configuration."""

    level: str = Field(
        default="INFO",
        description="Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)"
    )
    file: Optional[Path] = Field(
        default=Path("logs/app.log"),
        description="Log file path"
    )

    model_config = SettingsConfigDict(env_prefix="LOG_")

    @field_validator("level")
    def validate_log_level(cls, v: str) -> str:
        """Validate log level."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        v = v.upper()
        if v not in valid_levels:
            raise ValueError(f"Log level must be one of {valid_levels}")
        return v


_SECTIONS = {
    "devops": DevOpsSettings,
    "integrations": IntegrationSettings,
    "journal": JournalSettings,
    "logging": LoggingSettings,
}


class AppSettings(BaseSettings):
    """Main application settings."""

    name: str = Field(default="DevOpsJournal", description="Application name")
    version: str = Field(default="0.1.0", description="Application version")
    debug: bool = Field(default=False, description="Debug mode")

    # Sub-configurations
    devops: DevOpsSettings = Field(default_factory=DevOpsSettings)
    integrations: IntegrationSettings = Field(default_factory=IntegrationSettings)
    journal: JournalSettings = Field(default_factory=JournalSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        extra="ignore"
    )

    @classmethod
    def from_yaml(cls, yaml_path: Path) -> "AppSettings":
        """Load settings from YAML file."""
        if not yaml_path.exists():
            raise FileNotFoundError(f"Settings file not found: {yaml_path}")

        with open(yaml_path, "r", encoding="utf-8") as f:
            try:
                data = yaml.safe_load(f) or {}
            except yaml.YAMLError as e:
                raise ConfigurationError(f"Invalid YAML in {yaml_path}: {e}") from e

        if not isinstance(data, dict):
            raise ConfigurationError(f"Settings file must contain a mapping: {yaml_path}")

        # Convert nested dicts to settings objects
        settings_data: Dict[str, Any] = {}
        for key, value in data.items():
            section_cls = _SECTIONS.get(key)
            if section_cls is not None and isinstance(value, dict):
                settings_data[key] = section_cls(**value)
            else:
                settings_data[key] = value

        return cls(**settings_data)


def _merge_env_over_yaml(yaml_settings: AppSettings, env_settings: AppSettings) -> AppSettings:
    """Overlay values explicitly set in the environment onto YAML settings."""
    data = yaml_settings.model_dump()

    for section in _SECTIONS:
        env_section = getattr(env_settings, section)
        data[section].update(env_section.model_dump(include=env_section.model_fields_set))

    for key in env_settings.model_fields_set - set(_SECTIONS):
        data[key] = getattr(env_settings, key)

    return AppSettings(**data)


def load_settings(
    yaml_path: Optional[Path] = None,
    env_file: Optional[Path] = None
) -> AppSettings:
    """
    Load application settings from multiple sources.

    Priority order:
    1. Environment variables
    2. YAML configuration file
    3. Default values

    Args:
        yaml_path: Path to YAML configuration file
        env_file: Path to environment file (.env)

    Returns:
        Configured AppSettings instance
    """
    # Load .env file explicitly
    if env_file and env_file.exists():
        load_dotenv(env_file)
    else:
        # Try to load from default .env location
        load_dotenv()

    # Start with defaults and environment variables
    settings = AppSettings()

    # Override with YAML configuration if provided
    if yaml_path and yaml_path.exists():
        yaml_settings = AppSettings.from_yaml(yaml_path)
        settings = _merge_env_over_yaml(yaml_settings, settings)

    return settings


# Global settings instance
_settings: Optional[AppSettings] = None


def get_settings() -> AppSettings:
    """Get global settings instance (singleton pattern)."""
    global _settings
    if _settings is None:
        # Try to load from default locations
        yaml_path = Path("configs/settings.yaml")
        env_path = Path(".env")
        _settings = load_settings(
            yaml_path=yaml_path if yaml_path.exists() else None,
            env_file=env_path if env_path.exists() else None
        )
    return _settings


def reload_settings(
    yaml_path: Optional[Path] = None,
    env_file: Optional[Path] = None
) -> AppSettings:
    """Reload settings from files (useful for testing or runtime config changes)."""
    global _settings
    _settings = load_settings(yaml_path=yaml_path, env_file=env_file)
    return _settings
