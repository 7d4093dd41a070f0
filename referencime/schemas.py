# =============================================================================
# referencime/schemas.py  —  Argument models, one per tool
# =============================================================================
#
# Each model is both the validator and the advertised input schema of a
# tool (ToolDefinition.input_schema() renders it as JSON Schema).
#
# Every model runs in pydantic STRICT mode:
#   - "5" is not accepted where an integer is expected (no coercion)
#   - True is not accepted as an integer
#   - undeclared fields are silently dropped (extra="ignore")
# =============================================================================

from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

DATE_PATTERN = r"^\d{4}-\d{2}-\d{2}$"

Period = Literal["7days", "30days", "90days"]


class ToolArguments(BaseModel):
    model_config = ConfigDict(strict=True, extra="ignore", frozen=True)


def _website_id():
    return Field(gt=0, description="ID of the website in Referencime")


def _date(description: str):
    return Field(default=None, pattern=DATE_PATTERN, description=description)


class AnalyzeKeywordArgs(ToolArguments):
    keyword: str = Field(min_length=1, description="Keyword to analyse")
    website_id: int = _website_id()


class PositionEvolutionArgs(ToolArguments):
    keyword: str = Field(min_length=1, description="Keyword to analyse")
    website_id: int = _website_id()
    period: Period = Field(default="30days", description="Analysis period (7days, 30days, 90days)")


class CompareKeywordsArgs(ToolArguments):
    keywords: list[str] = Field(min_length=1, description="Keywords to compare")
    website_id: int = _website_id()


class WebsiteSummaryArgs(ToolArguments):
    website_id: int = _website_id()
    period: Period = Field(default="30days", description="Analysis period (7days, 30days, 90days)")
    start_date: Optional[str] = _date("Start date, YYYY-MM-DD")
    end_date: Optional[str] = _date("End date, YYYY-MM-DD")
    compare_start_date: Optional[str] = _date("Comparison start date, YYYY-MM-DD")
    compare_end_date: Optional[str] = _date("Comparison end date, YYYY-MM-DD")


class RankingChangesArgs(ToolArguments):
    website_id: int = _website_id()
    days: int = Field(default=7, ge=1, description="Number of days to analyse")
    threshold: int = Field(default=3, ge=1, description="Minimum position change to report")
    start_date: Optional[str] = _date("Start date, YYYY-MM-DD")
    end_date: Optional[str] = _date("End date, YYYY-MM-DD")


class ListWebsitesArgs(ToolArguments):
    """No arguments: the API key identifies the user."""


class KeywordsByCategoriesArgs(ToolArguments):
    website_id: int = _website_id()
    include_performance: bool = Field(default=True, description="Include Google Search Console metrics")
    days: int = Field(default=30, ge=1, description="Period for the metrics, in days")
