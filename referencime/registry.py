# =============================================================================
# referencime/registry.py  —  Tool Registry
# =============================================================================
#
# WHAT THIS FILE DOES:
#   Declares every tool the server advertises: its name, the description the
#   LLM reads, its argument model, the backend path it maps to, and the
#   formatter that renders the answer.
#
# THE PATH TABLE IS AN EXTERNAL CONTRACT:
#   Each tool name maps to exactly one path under
#   https://referencime.fr/wp-json/easy-links/v1.  Renaming a tool or a path
#   here must be mirrored on the WordPress side.
#
# TOOL ROSTER:
#   list_user_websites and list_websites_by_user are the same listing under
#   the two names the server has shipped with; both stay advertised so that
#   existing client prompts keep working.
# =============================================================================

from functools import partial
from typing import Iterable, Iterator

from referencime import reports, schemas
from referencime.errors import UnknownToolError
from referencime.models import ToolDefinition

PATHS: dict[str, str] = {
    "analyze_keyword_performance": "/ai/analyze-keyword-performance",
    "get_position_evolution": "/ai/get-position-evolution",
    "compare_keywords_performance": "/ai/compare-keywords-performance",
    "get_website_performance_summary": "/ai/get-website-performance-summary",
    "detect_ranking_changes": "/ai/detect-ranking-changes",
    "list_user_websites": "/ai/list-user-websites",
    "list_websites_by_user": "/ai/list-websites-by-user",
    "get_keywords_by_categories": "/ai/get-keywords-by-categories",
}


def _tool(name: str, description: str, arguments, formatter) -> ToolDefinition:
    return ToolDefinition(
        name=name,
        description=description,
        path=PATHS[name],
        arguments=arguments,
        formatter=formatter,
    )


def default_tools() -> list[ToolDefinition]:
    """The full roster, in advertisement order."""
    return [
        _tool(
            "analyze_keyword_performance",
            "Full performance analysis of one keyword: current position, search "
            "volume, SEO difficulty, estimated traffic and trend.",
            schemas.AnalyzeKeywordArgs,
            reports.format_keyword_analysis,
        ),
        _tool(
            "get_position_evolution",
            "SERP position history of a keyword with clicks, impressions and "
            "trend over the selected period.",
            schemas.PositionEvolutionArgs,
            reports.format_position_evolution,
        ),
        _tool(
            "compare_keywords_performance",
            "Side-by-side comparison of several keywords with optimisation "
            "recommendations and the best performer.",
            schemas.CompareKeywordsArgs,
            reports.format_keyword_comparison,
        ),
        _tool(
            "get_website_performance_summary",
            "SEO dashboard of a website: global metrics, position distribution "
            "and best performing keywords.",
            schemas.WebsiteSummaryArgs,
            reports.format_website_summary,
        ),
        _tool(
            "detect_ranking_changes",
            "Detects significant SERP position changes (improvements, drops, new "
            "entries, disappearances) above a threshold.",
            schemas.RankingChangesArgs,
            reports.format_ranking_changes,
        ),
        _tool(
            "list_user_websites",
            "Lists every website the user can access in their Referencime "
            "account, with IDs and domain names.",
            schemas.ListWebsitesArgs,
            partial(reports.format_website_list, tool="list_user_websites"),
        ),
        _tool(
            "list_websites_by_user",
            "Lists the websites of the account behind the API key, with IDs, "
            "domains, favourites and creation dates.",
            schemas.ListWebsitesArgs,
            reports.format_website_list,
        ),
        _tool(
            "get_keywords_by_categories",
            "All keywords of a website grouped by category, with optional "
            "Google Search Console performance metrics.",
            schemas.KeywordsByCategoriesArgs,
            reports.format_keyword_categories,
        ),
    ]


class ToolRegistry:
    """Ordered, immutable set of tool definitions.

    Built once at startup and handed to the dispatcher and the MCP server.
    """

    def __init__(self, tools: Iterable[ToolDefinition]):
        self._tools: dict[str, ToolDefinition] = {}
        for tool in tools:
            if tool.name in self._tools:
                raise ValueError(f"Duplicate tool name: {tool.name}")
            self._tools[tool.name] = tool

    @classmethod
    def default(cls) -> "ToolRegistry":
        return cls(default_tools())

    def get(self, name: str) -> ToolDefinition:
        try:
            return self._tools[name]
        except KeyError:
            raise UnknownToolError(name) from None

    def list_tools(self) -> list[ToolDefinition]:
        return list(self._tools.values())

    def names(self) -> list[str]:
        return list(self._tools)

    def __contains__(self, name: object) -> bool:
        return name in self._tools

    def __iter__(self) -> Iterator[ToolDefinition]:
        return iter(self._tools.values())

    def __len__(self) -> int:
        return len(self._tools)
