"""
Azure DevOps work items and pull requests via the Azure DevOps MCP server.
"""

from typing import Any, Dict, List, Optional

from ..core.logging import get_logger
from ..settings import DevOpsSettings
from ..journal.schemas import PullRequest, WorkItem
from .client import MCPToolClient, unwrap_records


logger = get_logger(__name__)


class DevOpsService:
    """
    Fetches work items and pull requests for the configured projects.

    One MCP session is opened per fetch, so work items and pull requests can
    be fetched concurrently.
    """

    def __init__(self, settings: DevOpsSettings, client_factory: Optional[Any] = None) -> None:
        """
        Initialize the Azure DevOps service.

        Args:
            settings: Azure DevOps settings
            client_factory: Callable returning a fresh MCPToolClient
        """
        self.settings = settings
        self.client_factory = client_factory or self._create_client

    def _create_client(self) -> MCPToolClient:
        return MCPToolClient(
            command=self.settings.mcp_command,
            args=self.settings.mcp_args,
            env={
                "AZURE_DEVOPS_ORG_URL": self.settings.org_url,
                "AZURE_DEVOPS_PAT": self.settings.pat,
            },
            server_name="azure-devops"
        )

    def _work_item_arguments(self, project: str) -> Dict[str, Any]:
        arguments: Dict[str, Any] = {"project": project, "top": self.settings.top}
        if self.settings.wiql:
            arguments["wiql"] = self.settings.wiql
        return arguments

    async def fetch_work_items(self) -> List[WorkItem]:
        """Fetch work items across all configured projects."""
        work_items: List[WorkItem] = []

        async with self.client_factory() as client:
            for project in self.settings.projects:
                payload = await client.call_tool(
                    self.settings.work_items_tool,
                    self._work_item_arguments(project)
                )
                records = unwrap_records(payload, "workItems")
                work_items.extend(WorkItem.coerce(record) for record in records)
                logger.debug(f"Project {project}: {len(records)} work items")

        return work_items

    async def fetch_pull_requests(self) -> List[PullRequest]:
        """Fetch pull requests across all configured projects."""
        pull_requests: List[PullRequest] = []

        async with self.client_factory() as client:
            for project in self.settings.projects:
                payload = await client.call_tool(self.settings.pull_requests_tool, {"project": project})
                records = unwrap_records(payload, "pullRequests")
                pull_requests.extend(PullRequest.model_validate(record) for record in records)
                logger.debug(f"Project {project}: {len(records)} pull requests")

        return pull_requests
