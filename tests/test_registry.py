"""Tests for the tool registry and advertised schemas."""

import pytest

from referencime.errors import UnknownToolError
from referencime.registry import PATHS, ToolRegistry, default_tools
from tests.samples import MINIMAL_ARGS


class TestToolRegistry:
    def test_roster_order(self, registry):
        assert registry.names() == [
            "analyze_keyword_performance",
            "get_position_evolution",
            "compare_keywords_performance",
            "get_website_performance_summary",
            "detect_ranking_changes",
            "list_user_websites",
            "list_websites_by_user",
            "get_keywords_by_categories",
        ]
        assert len(registry) == 8

    def test_every_tool_has_a_path(self, registry):
        for tool in registry:
            assert tool.path == PATHS[tool.name]
            assert tool.path.startswith("/ai/")

    def test_paths_are_unique(self):
        assert len(set(PATHS.values())) == len(PATHS)

    def test_get_unknown(self, registry):
        with pytest.raises(UnknownToolError) as excinfo:
            registry.get("delete_everything")

        assert "delete_everything" in str(excinfo.value)

    def test_contains(self, registry):
        assert "detect_ranking_changes" in registry
        assert "nope" not in registry

    def test_duplicate_names_rejected(self):
        tools = default_tools()
        with pytest.raises(ValueError):
            ToolRegistry(tools + tools[:1])

    def test_list_tools_is_a_copy(self, registry):
        tools = registry.list_tools()
        tools.clear()

        assert len(registry) == 8


class TestInputSchema:
    def test_schema_is_an_object(self, registry):
        for tool in registry:
            schema = tool.input_schema()
            assert schema["type"] == "object"
            assert "title" not in schema
            assert isinstance(schema["properties"], dict)

    def test_required_fields(self, registry):
        schema = registry.get("compare_keywords_performance").input_schema()

        assert schema["required"] == ["keywords", "website_id"]
        assert schema["properties"]["keywords"]["type"] == "array"

    def test_defaults_are_advertised(self, registry):
        props = registry.get("detect_ranking_changes").input_schema()["properties"]

        assert props["days"]["default"] == 7
        assert props["threshold"]["default"] == 3

    def test_listing_takes_no_arguments(self, registry):
        schema = registry.get("list_websites_by_user").input_schema()

        assert schema["properties"] == {}
        assert not schema.get("required")

    def test_field_specs(self, registry):
        specs = registry.get("get_keywords_by_categories").fields()

        assert [s.name for s in specs] == ["website_id", "include_performance", "days"]
        website_id, include_performance, days = specs
        assert website_id.required and website_id.type == "integer"
        assert include_performance.type == "boolean" and include_performance.default is True
        assert days.default == 30 and not days.required
        assert website_id.description

    def test_optional_dates_report_string_type(self, registry):
        specs = {s.name: s for s in registry.get("get_website_performance_summary").fields()}

        assert specs["start_date"].type == "string"
        assert specs["start_date"].required is False
        assert specs["start_date"].default is None

    def test_minimal_args_cover_every_tool(self, registry):
        assert set(MINIMAL_ARGS) == set(registry.names())
