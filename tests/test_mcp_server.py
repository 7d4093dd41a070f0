"""Tests for the FastMCP server, driven through an in-memory client."""

import pytest
from fastmcp import Client
from fastmcp.exceptions import ToolError

from referencime.models import Report, ToolInvocation
from referencime.registry import PATHS
from referencime_mcp.mcp_server import SERVER_NAME, RegistryTool, build_server
from tests.conftest import run
from tests.samples import WEBSITES, envelope


async def _list_tools(server):
    async with Client(server) as client:
        return await client.list_tools()


async def _call(server, name, arguments):
    async with Client(server) as client:
        return await client.call_tool(name, arguments, raise_on_error=False)


class TestToolListing:
    def test_server_name(self, make_dispatcher):
        dispatcher, _ = make_dispatcher()

        assert build_server(dispatcher).name == SERVER_NAME

    def test_every_tool_is_advertised(self, make_dispatcher):
        dispatcher, _ = make_dispatcher()

        tools = run(_list_tools(build_server(dispatcher)))

        assert [tool.name for tool in tools] == list(PATHS)

    def test_input_schema_comes_from_the_registry(self, make_dispatcher):
        dispatcher, _ = make_dispatcher()

        tools = {tool.name: tool for tool in run(_list_tools(build_server(dispatcher)))}

        schema = tools["analyze_keyword_performance"].inputSchema
        assert schema["type"] == "object"
        assert set(schema["required"]) == {"keyword", "website_id"}
        assert tools["detect_ranking_changes"].inputSchema["properties"]["days"]["default"] == 7


class TestToolCalls:
    def test_successful_call(self, make_dispatcher):
        dispatcher, backend = make_dispatcher(body=envelope(WEBSITES))

        result = run(_call(build_server(dispatcher), "list_websites_by_user", {}))

        assert not result.is_error
        assert "a.fr" in result.content[0].text
        assert len(backend.requests) == 1

    def test_invalid_arguments_are_an_error_result(self, make_dispatcher):
        dispatcher, backend = make_dispatcher(body=envelope(WEBSITES))

        result = run(_call(build_server(dispatcher), "detect_ranking_changes", {"days": 7}))

        assert result.is_error
        assert "website_id" in result.content[0].text
        assert backend.requests == []

    def test_backend_failure_is_an_error_result(self, make_dispatcher):
        dispatcher, _ = make_dispatcher(body={"success": False, "message": "Quota exceeded"})

        result = run(_call(build_server(dispatcher), "list_user_websites", {}))

        assert result.is_error
        assert "Quota exceeded" in result.content[0].text


class RecordingDispatcher:
    def __init__(self, report):
        self.report = report
        self.invocations = []

    async def handle(self, invocation):
        self.invocations.append(invocation)
        return self.report


class TestRegistryTool:
    def test_run_hands_an_invocation_to_the_dispatcher(self, registry):
        dispatcher = RecordingDispatcher(Report(text="ok"))
        tool = RegistryTool.from_definition(registry.get("detect_ranking_changes"), dispatcher)

        result = run(tool.run({"website_id": 3}))

        assert dispatcher.invocations == [
            ToolInvocation(name="detect_ranking_changes", arguments={"website_id": 3}),
        ]
        assert result.content[0].text == "ok"

    def test_error_report_is_raised(self, registry):
        dispatcher = RecordingDispatcher(Report.error("Referencime API error: 503"))
        tool = RegistryTool.from_definition(registry.get("list_user_websites"), dispatcher)

        with pytest.raises(ToolError) as excinfo:
            run(tool.run({}))

        assert "503" in str(excinfo.value)
