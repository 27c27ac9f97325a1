"""
Journal data source adapter.

This module provides a unified interface over the MCP-backed services and
the built-in sample data.
"""

from datetime import date
from typing import Any, Dict, List

from ..core.logging import get_logger
from ..settings import AppSettings
from ..journal.schemas import Meeting, PullRequest, WorkItem
from .calendar import CalendarService
from .devops import DevOpsService
from .sample import SampleDataSource


logger = get_logger(__name__)


class SourceAdapter:
    """
    Unified journal data source.

    Uses the MCP servers when an Azure DevOps MCP command is configured and
    falls back to sample data otherwise.
    """

    def __init__(self, settings: AppSettings, use_sample: bool = False) -> None:
        """
        Initialize the source adapter.

        Args:
            settings: Application settings
            use_sample: Force sample data even if MCP servers are configured
        """
        self.settings = settings

        if use_sample or not settings.devops.is_configured:
            if not use_sample:
                logger.warning("AZURE_DEVOPS_MCP_COMMAND not set, using sample data")
            self.sample = SampleDataSource()
            self.integration_type = "sample"
        else:
            logger.info(f"Using Azure DevOps MCP server: {settings.devops.mcp_command}")
            self.devops = DevOpsService(settings.devops)
            self.calendar = CalendarService(settings.integrations)
            self.integration_type = "mcp"

    async def fetch_work_items(self) -> List[WorkItem]:
        """Fetch work items from the active source."""
        if self.integration_type == "sample":
            return await self.sample.fetch_work_items()
        return await self.devops.fetch_work_items()

    async def fetch_calendar_events(self, day: date) -> List[Meeting]:
        """Fetch calendar events for a day; empty when Teams integration is disabled."""
        if not self.settings.integrations.enable_teams_integration:
            logger.debug("Teams integration disabled, skipping calendar events")
            return []
        if self.integration_type == "sample":
            return await self.sample.fetch_calendar_events(day)
        return await self.calendar.fetch_events(day)

    async def fetch_pull_requests(self) -> List[PullRequest]:
        """Fetch pull requests from the active source."""
        if self.integration_type == "sample":
            return await self.sample.fetch_pull_requests()
        return await self.devops.fetch_pull_requests()

    def get_integration_info(self) -> Dict[str, Any]:
        """Get information about the current integration."""
        return {
            "type": self.integration_type,
            "projects": list(self.settings.devops.projects),
            "teams_enabled": self.settings.integrations.enable_teams_integration,
            "pat_configured": bool(self.settings.devops.pat),
        }
