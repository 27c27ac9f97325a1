"""Journal data sources: Azure DevOps and calendar MCP servers, plus sample data."""

from .adapter import SourceAdapter
from .calendar import CalendarService
from .client import MCPToolClient
from .devops import DevOpsService
from .sample import SampleDataSource

__all__ = [
    "SourceAdapter",
    "CalendarService",
    "MCPToolClient",
    "DevOpsService",
    "SampleDataSource"
]
