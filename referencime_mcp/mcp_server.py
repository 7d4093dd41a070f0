# =============================================================================
# referencime_mcp/mcp_server.py  —  FastMCP Tool Server
# =============================================================================
#
# WHAT THIS FILE DOES:
#   Builds a FastMCP server that advertises every tool of the registry and
#   forwards each call to the Dispatcher.
#
# ONE RegistryTool PER REGISTRY ENTRY:
#   The roster, argument schemas and validation rules live in
#   referencime/registry.py.  Each entry becomes a RegistryTool whose input
#   schema is the tool's strict pydantic model and whose run() goes through
#   the Dispatcher.
#
# ERROR REPORTS:
#   A Report with is_error=True is raised as a ToolError.  FastMCP turns it
#   into a CallToolResult with isError=true and the report text as content,
#   so the client gets an error-flagged text answer rather than a protocol
#   fault.
#
# RUNNING THIS SERVER:
#   Started by main.py (`referencime-mcp start`) over stdio transport.
# =============================================================================

from typing import Any

from fastmcp import FastMCP
from fastmcp.exceptions import ToolError
from fastmcp.tools import Tool
from fastmcp.tools.tool import ToolResult
from mcp.types import TextContent
from pydantic import Field

from referencime.models import ToolDefinition, ToolInvocation
from referencime_mcp.dispatcher import Dispatcher

SERVER_NAME = "referencime-mcp-server"

INSTRUCTIONS = (
    "SEO analytics for websites tracked in Referencime. Call list_websites_by_user "
    "first to discover website IDs, then pass a website_id to the other tools."
)


class RegistryTool(Tool):
    """An MCP tool backed by one registry entry."""

    dispatcher: Any = Field(exclude=True, repr=False)

    @classmethod
    def from_definition(cls, definition: ToolDefinition, dispatcher: Dispatcher) -> "RegistryTool":
        return cls(
            name=definition.name,
            description=definition.description,
            parameters=definition.input_schema(),
            dispatcher=dispatcher,
        )

    async def run(self, arguments: dict[str, Any]) -> ToolResult:
        report = await self.dispatcher.handle(ToolInvocation(name=self.name, arguments=arguments))
        if report.is_error:
            raise ToolError(report.text)
        return ToolResult(content=[TextContent(type="text", text=report.text)])


def build_server(dispatcher: Dispatcher) -> FastMCP:
    """Create the FastMCP server with one tool per registry entry."""
    mcp = FastMCP(SERVER_NAME, instructions=INSTRUCTIONS)
    for definition in dispatcher.registry:
        mcp.add_tool(RegistryTool.from_definition(definition, dispatcher))
    return mcp
