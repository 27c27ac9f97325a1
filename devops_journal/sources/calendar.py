"""
Calendar events via the Teams MCP server.
"""

from datetime import date
from typing import Any, List, Optional

from ..core.exceptions import CalendarIntegrationError, DevOpsIntegrationError
from ..settings import IntegrationSettings
from ..journal.schemas import Meeting
from .client import MCPToolClient, unwrap_records


class CalendarService:
    """Fetches a day's calendar events."""

    def __init__(self, settings: IntegrationSettings, client_factory: Optional[Any] = None) -> None:
        self.settings = settings
        self.client_factory = client_factory or self._create_client

    def _create_client(self) -> MCPToolClient:
        return MCPToolClient(
            command=self.settings.teams_mcp_command,
            args=self.settings.teams_mcp_args,
            server_name="teams"
        )

    async def fetch_events(self, day: date) -> List[Meeting]:
        """
        Fetch calendar events for a day.

        Raises:
            CalendarIntegrationError: If the calendar server or tool fails
        """
        if not self.settings.teams_mcp_command:
            raise CalendarIntegrationError("Teams MCP server command is not configured")

        try:
            async with self.client_factory() as client:
                payload = await client.call_tool(self.settings.calendar_tool, {"date": day.isoformat()})
            records = unwrap_records(payload, "events")
        except DevOpsIntegrationError as e:
            raise CalendarIntegrationError(e.message, tool_name=self.settings.calendar_tool)

        return [Meeting.model_validate(record) for record in records]
