"""
MCP tool client.

This module provides the MCP (Model Context Protocol) client used to call
tools on the Azure DevOps and calendar MCP servers over stdio.
"""

import json
import os
from contextlib import AsyncExitStack
from typing import Any, Dict, List, Optional

from mcp import ClientSession, StdioServerParameters
from mcp.client.stdio import stdio_client

from ..core.exceptions import DevOpsIntegrationError
from ..core.logging import get_logger


logger = get_logger(__name__)


def parse_tool_result(result: Any, tool_name: str) -> Any:
    """
    Extract the JSON payload of a tool call result.

    Structured content is preferred; otherwise the first text block must hold
    JSON.

    Raises:
        DevOpsIntegrationError: If the tool reported an error or returned no JSON
    """
    text_blocks = [
        block.text for block in (getattr(result, "content", None) or [])
        if getattr(block, "type", None) == "text"
    ]

    if getattr(result, "isError", False):
        raise DevOpsIntegrationError(
            f"Tool {tool_name} failed: {' '.join(text_blocks) or 'no details'}",
            tool_name=tool_name
        )

    structured = getattr(result, "structuredContent", None)
    if structured is not None:
        return structured

    if not text_blocks:
        raise DevOpsIntegrationError(f"Tool {tool_name} returned no content", tool_name=tool_name)

    try:
        return json.loads(text_blocks[0])
    except json.JSONDecodeError as e:
        raise DevOpsIntegrationError(
            f"Tool {tool_name} returned non-JSON content: {e}",
            tool_name=tool_name
        )


def unwrap_records(payload: Any, key: str) -> List[Dict[str, Any]]:
    """Return the record list of a payload that is either a list or ``{key: [...]}``."""
    if isinstance(payload, dict):
        payload = payload.get(key, [])
    if not isinstance(payload, list):
        raise DevOpsIntegrationError(f"Expected a list of {key}, got {type(payload).__name__}")
    return payload


class MCPToolClient:
    """
    Stdio MCP client for a single server.

    Use as an async context manager; the server process lives for the
    duration of the ``async with`` block.
    """

    def __init__(
        self,
        command: str,
        args: Optional[List[str]] = None,
        env: Optional[Dict[str, str]] = None,
        server_name: str = "mcp"
    ) -> None:
        """
        Initialize the MCP client.

        Args:
            command: Executable that starts the server
            args: Server arguments
            env: Extra environment variables for the server process
            server_name: Name used in logs and errors
        """
        self.server_name = server_name
        self.server_params = StdioServerParameters(
            command=command,
            args=list(args or []),
            env={**os.environ, **(env or {})}
        )
        self.session: Optional[ClientSession] = None
        self._exit_stack: Optional[AsyncExitStack] = None

    async def __aenter__(self) -> "MCPToolClient":
        """Async context manager entry."""
        await self.connect()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Async context manager exit."""
        await self.disconnect()

    async def connect(self) -> None:
        """
        Start the server and initialize a session.

        Raises:
            DevOpsIntegrationError: If the server cannot be started
        """
        logger.info(f"Connecting to {self.server_name} MCP server...")
        self._exit_stack = AsyncExitStack()

        try:
            read, write = await self._exit_stack.enter_async_context(stdio_client(self.server_params))
            self.session = await self._exit_stack.enter_async_context(ClientSession(read, write))
            await self.session.initialize()
        except Exception as e:
            await self.disconnect()
            logger.error(f"Failed to connect to {self.server_name} MCP server: {e}")
            raise DevOpsIntegrationError(
                f"MCP server connection failed: {e}",
                server=self.server_name
            )

        logger.info(f"Connected to {self.server_name} MCP server")

    async def disconnect(self) -> None:
        """Close the session and stop the server."""
        if self._exit_stack is not None:
            await self._exit_stack.aclose()
        self._exit_stack = None
        self.session = None
        logger.debug(f"Disconnected from {self.server_name} MCP server")

    async def call_tool(self, tool_name: str, arguments: Optional[Dict[str, Any]] = None) -> Any:
        """
        Call a tool and return its JSON payload.

        Raises:
            DevOpsIntegrationError: If not connected or the tool fails
        """
        if self.session is None:
            raise DevOpsIntegrationError(
                f"Client not connected to {self.server_name} MCP server",
                tool_name=tool_name,
                server=self.server_name
            )

        logger.debug(f"Calling {self.server_name} tool {tool_name} with {arguments}")
        result = await self.session.call_tool(tool_name, arguments=arguments or {})
        return parse_tool_result(result, tool_name)
