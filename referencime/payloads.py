# =============================================================================
# referencime/payloads.py  —  Backend data shapes, one per tool
# =============================================================================
#
# The backend's ``data`` field is plain JSON.  Each formatter first turns it
# into one of the dataclasses below, so the rendering code works with named,
# typed fields instead of dictionary lookups.
#
# "HAS DATA" VS "NO DATA":
#   Several endpoints answer with a flag (has_data / has_gsc_data) when no
#   Google Search Console property is linked to the site.  Those endpoints
#   get two dataclasses, and the parser returns one or the other:
#
#     parse_website_summary()   -> WebsiteSummaryNoData | WebsiteSummary
#     parse_ranking_changes()   -> RankingChangesNoData | RankingChanges
#     parse_keyword_categories()-> KeywordCategoriesNoGsc | KeywordCategories
#
# Missing REQUIRED keys raise MalformedPayloadError.  Optional keys fall back
# to a neutral default (0, None, empty list).
# =============================================================================

from dataclasses import dataclass, field
from typing import Any, Callable, Mapping, TypeVar

from referencime.errors import MalformedPayloadError

T = TypeVar("T")


# -----------------------------------------------------------------------------
# Coercion helpers
# -----------------------------------------------------------------------------
# WordPress sometimes serializes numbers as strings ("12").  These helpers
# accept both and reject anything else.
# -----------------------------------------------------------------------------
def _opt_number(value: Any) -> int | float | None:
    if value is None or value == "":
        return None
    if isinstance(value, bool):
        raise ValueError(f"expected a number, got {value!r}")
    if isinstance(value, (int, float)):
        number = value
    elif isinstance(value, str):
        number = float(value)
    else:
        raise ValueError(f"expected a number, got {value!r}")
    if isinstance(number, float) and number.is_integer():
        return int(number)
    return number


def _number(value: Any, default: int | float = 0) -> int | float:
    number = _opt_number(value)
    return default if number is None else number


def _opt_position(value: Any) -> int | float | None:
    """A SERP position; 0 and missing both mean "not ranked"."""
    number = _opt_number(value)
    return number if number is not None and number > 0 else None


def _opt_str(value: Any) -> str | None:
    if value is None or value == "":
        return None
    return str(value)


def _list(data: Mapping, key: str) -> list:
    value = data.get(key)
    if value is None:
        return []
    if not isinstance(value, list):
        raise ValueError(f"{key!r} should be a list")
    return value


def _mapping(value: Any, what: str) -> Mapping:
    if not isinstance(value, Mapping):
        raise ValueError(f"{what} should be an object")
    return value


def parse_payload(tool: str, parser: Callable[[Mapping], T], data: Any) -> T:
    """Run ``parser`` on ``data``, turning shape errors into MalformedPayloadError."""
    if not isinstance(data, Mapping):
        raise MalformedPayloadError(tool, "data is not an object")
    try:
        return parser(data)
    except KeyError as exc:
        raise MalformedPayloadError(tool, f"missing field {exc.args[0]!r}") from None
    except (TypeError, ValueError) as exc:
        raise MalformedPayloadError(tool, str(exc)) from None


# -----------------------------------------------------------------------------
# analyze_keyword_performance
# -----------------------------------------------------------------------------
@dataclass
class KeywordAnalysis:
    website_id: Any
    current_position: int | float | None
    search_volume: int | float = 0
    difficulty_score: int | float | None = None
    estimated_traffic: int | float = 0
    competition_level: str | None = None
    trend: str | None = None
    last_updated: str | None = None


def parse_keyword_analysis(data: Mapping) -> KeywordAnalysis:
    return KeywordAnalysis(
        website_id=data["website_id"],
        current_position=_opt_position(data.get("current_position")),
        search_volume=_number(data.get("search_volume")),
        difficulty_score=_opt_number(data.get("difficulty_score")),
        estimated_traffic=_number(data.get("estimated_traffic")),
        competition_level=_opt_str(data.get("competition_level")),
        trend=_opt_str(data.get("trend")),
        last_updated=_opt_str(data.get("last_updated")),
    )


# -----------------------------------------------------------------------------
# get_position_evolution
# -----------------------------------------------------------------------------
@dataclass
class PositionPoint:
    date: str
    position: int | float | None
    clicks: int | float = 0
    impressions: int | float = 0


@dataclass
class PositionEvolution:
    website_id: Any
    period: str
    best_position: int | float | None
    average_position: int | float | None
    position_change: int | float = 0
    history: list[PositionPoint] = field(default_factory=list)


def parse_position_evolution(data: Mapping) -> PositionEvolution:
    history = []
    for raw in _list(data, "historical_positions"):
        point = _mapping(raw, "historical position")
        history.append(PositionPoint(
            date=str(point["date"]),
            position=_opt_position(point.get("position")),
            clicks=_number(point.get("clicks")),
            impressions=_number(point.get("impressions")),
        ))
    return PositionEvolution(
        website_id=data["website_id"],
        period=str(data.get("period") or ""),
        best_position=_opt_position(data.get("best_position")),
        average_position=_opt_position(data.get("average_position")),
        position_change=_number(data.get("position_change")),
        history=history,
    )


# -----------------------------------------------------------------------------
# compare_keywords_performance
# -----------------------------------------------------------------------------
@dataclass
class ComparedKeyword:
    keyword: str
    position: int | float | None
    search_volume: int | float = 0
    estimated_traffic: int | float = 0
    trend_direction: str | None = None
    monthly_change: int | float = 0


@dataclass
class KeywordComparison:
    website_id: Any
    total_analyzed: int
    keywords: list[ComparedKeyword]
    best_performer: str | None = None
    recommendations: list[str] = field(default_factory=list)
    comparison_date: str | None = None


def parse_keyword_comparison(data: Mapping) -> KeywordComparison:
    keywords = []
    for raw in _list(data, "keywords_analysis"):
        item = _mapping(raw, "keyword analysis")
        keywords.append(ComparedKeyword(
            keyword=str(item["keyword"]),
            position=_opt_position(item.get("position")),
            search_volume=_number(item.get("search_volume")),
            estimated_traffic=_number(item.get("estimated_traffic")),
            trend_direction=_opt_str(item.get("trend_direction")),
            monthly_change=_number(item.get("monthly_change")),
        ))
    return KeywordComparison(
        website_id=data["website_id"],
        total_analyzed=int(_number(data.get("total_analyzed"), len(keywords))),
        keywords=keywords,
        best_performer=_opt_str(data.get("best_performer")),
        recommendations=[str(r) for r in _list(data, "recommendations")],
        comparison_date=_opt_str(data.get("comparison_date")),
    )


# -----------------------------------------------------------------------------
# get_website_performance_summary
# -----------------------------------------------------------------------------
@dataclass
class WebsiteSummaryNoData:
    website_id: Any
    period_days: Any
    total_keywords: int | float = 0


@dataclass
class OverallMetrics:
    total_keywords: int | float = 0
    total_clicks: int | float = 0
    total_impressions: int | float = 0
    average_position: int | float | None = None
    average_ctr: int | float | None = None


@dataclass
class PositionDistribution:
    top3: int | float = 0
    top10: int | float = 0
    top20: int | float = 0
    top50: int | float = 0
    top100: int | float = 0


@dataclass
class TopKeyword:
    keyword: str
    position: int | float | None
    clicks: int | float = 0


@dataclass
class WebsiteSummary:
    website_id: Any
    period_days: Any
    metrics: OverallMetrics
    distribution: PositionDistribution
    top_keywords: list[TopKeyword] = field(default_factory=list)


def _overall_metrics(data: Mapping) -> OverallMetrics:
    raw = _mapping(data.get("overall_metrics") or {}, "overall_metrics")
    ctr = _opt_number(raw.get("average_ctr"))
    return OverallMetrics(
        total_keywords=_number(raw.get("total_keywords")),
        total_clicks=_number(raw.get("total_clicks")),
        total_impressions=_number(raw.get("total_impressions")),
        average_position=_opt_position(raw.get("average_position")),
        average_ctr=ctr if ctr else None,
    )


def parse_website_summary(data: Mapping) -> WebsiteSummaryNoData | WebsiteSummary:
    metrics = _overall_metrics(data)
    if not data.get("has_data"):
        return WebsiteSummaryNoData(
            website_id=data["website_id"],
            period_days=data.get("period_days"),
            total_keywords=metrics.total_keywords,
        )

    changes = _mapping(data.get("performance_changes") or {}, "performance_changes")
    dist = _mapping(changes.get("position_distribution") or {}, "position_distribution")
    top_keywords = []
    for raw in _list(data, "top_performing_keywords"):
        item = _mapping(raw, "top performing keyword")
        top_keywords.append(TopKeyword(
            keyword=str(item["keyword"]),
            position=_opt_position(item.get("position")),
            clicks=_number(item.get("clicks")),
        ))
    return WebsiteSummary(
        website_id=data["website_id"],
        period_days=data.get("period_days"),
        metrics=metrics,
        distribution=PositionDistribution(**{
            bucket: _number(dist.get(bucket))
            for bucket in ("top3", "top10", "top20", "top50", "top100")
        }),
        top_keywords=top_keywords,
    )


# -----------------------------------------------------------------------------
# detect_ranking_changes
# -----------------------------------------------------------------------------
@dataclass
class RankingChangesNoData:
    website_id: Any
    period_days: Any
    threshold: Any


@dataclass
class ChangeSummary:
    changes_detected: int | float = 0
    improvements: int | float = 0
    drops: int | float = 0
    major_changes: int | float = 0
    new_entries: int | float = 0
    disappeared: int | float = 0


@dataclass
class RankingChange:
    keyword: str
    change_type: str
    old_position: int | float | None = None
    new_position: int | float | None = None
    change: int | float = 0
    clicks: int | float = 0
    impressions: int | float = 0
    significance: str | None = None

    @property
    def is_major(self) -> bool:
        return self.significance == "major"


@dataclass
class RankingChanges:
    website_id: Any
    period_days: Any
    threshold: Any
    summary: ChangeSummary
    changes: list[RankingChange] = field(default_factory=list)


def parse_ranking_changes(data: Mapping) -> RankingChangesNoData | RankingChanges:
    if not data.get("has_data"):
        return RankingChangesNoData(
            website_id=data["website_id"],
            period_days=data.get("period_days"),
            threshold=data.get("threshold"),
        )

    raw_summary = _mapping(data.get("summary") or {}, "summary")
    changes = []
    for raw in _list(data, "significant_changes"):
        item = _mapping(raw, "ranking change")
        changes.append(RankingChange(
            keyword=str(item["keyword"]),
            change_type=str(item.get("change_type") or ""),
            old_position=_opt_position(item.get("old_position")),
            new_position=_opt_position(item.get("new_position")),
            change=_number(item.get("change")),
            clicks=_number(item.get("clicks")),
            impressions=_number(item.get("impressions")),
            significance=_opt_str(item.get("significance")),
        ))
    return RankingChanges(
        website_id=data["website_id"],
        period_days=data.get("period_days"),
        threshold=data.get("threshold"),
        summary=ChangeSummary(**{
            counter: _number(raw_summary.get(counter))
            for counter in (
                "changes_detected", "improvements", "drops",
                "major_changes", "new_entries", "disappeared",
            )
        }),
        changes=changes,
    )


# -----------------------------------------------------------------------------
# list_user_websites / list_websites_by_user
# -----------------------------------------------------------------------------
@dataclass
class Website:
    id: Any
    domain: str
    is_favorite: bool = False
    created_date: str | None = None


@dataclass
class WebsiteList:
    user_id: Any
    websites_count: int
    websites: list[Website] = field(default_factory=list)


def parse_website_list(data: Mapping) -> WebsiteList:
    websites = []
    for raw in _list(data, "websites"):
        item = _mapping(raw, "website")
        websites.append(Website(
            id=item["id"],
            domain=str(item["domain"]),
            is_favorite=bool(item.get("is_favorite")),
            created_date=_opt_str(item.get("created_date")),
        ))
    return WebsiteList(
        user_id=data.get("user_id"),
        websites_count=int(_number(data.get("websites_count"), len(websites))),
        websites=websites,
    )


# -----------------------------------------------------------------------------
# get_keywords_by_categories
# -----------------------------------------------------------------------------
@dataclass
class KeywordMetrics:
    has_data: bool
    position: int | float | None = None
    clicks: int | float = 0
    impressions: int | float = 0
    ctr: int | float = 0


@dataclass
class CategoryKeyword:
    keyword: str
    search_volume: int | float = 0
    metrics: KeywordMetrics | None = None

    @property
    def position(self) -> int | float | None:
        return self.metrics.position if self.metrics else None


@dataclass
class Category:
    name: str
    keywords_count: int
    keywords: list[CategoryKeyword] = field(default_factory=list)


@dataclass
class KeywordCategoriesNoGsc:
    website_id: Any
    period_days: Any
    total_keywords: int | float
    total_categories: int | float
    categories: list[Category] = field(default_factory=list)


@dataclass
class KeywordCategories:
    website_id: Any
    period_days: Any
    include_performance: bool
    total_keywords: int | float
    total_categories: int | float
    uncategorized_keywords: int | float
    categories: list[Category] = field(default_factory=list)
    last_updated: str | None = None


def _keyword_metrics(raw: Any) -> KeywordMetrics | None:
    if raw is None:
        return None
    perf = _mapping(raw, "performance_metrics")
    return KeywordMetrics(
        has_data=bool(perf.get("has_data")),
        position=_opt_position(perf.get("position")),
        clicks=_number(perf.get("clicks")),
        impressions=_number(perf.get("impressions")),
        ctr=_number(perf.get("ctr")),
    )


def _categories(data: Mapping) -> list[Category]:
    categories = []
    for raw in _list(data, "categories"):
        item = _mapping(raw, "category")
        keywords = []
        for raw_keyword in _list(item, "keywords"):
            kw = _mapping(raw_keyword, "keyword")
            keywords.append(CategoryKeyword(
                keyword=str(kw["keyword"]),
                search_volume=_number(kw.get("search_volume")),
                metrics=_keyword_metrics(kw.get("performance_metrics")),
            ))
        count = int(_number(item.get("keywords_count"), len(keywords)))
        categories.append(Category(
            name=str(item["category_name"]),
            keywords_count=max(count, len(keywords)),
            keywords=keywords,
        ))
    return categories


def parse_keyword_categories(data: Mapping) -> KeywordCategoriesNoGsc | KeywordCategories:
    summary = _mapping(data.get("summary") or {}, "summary")
    categories = _categories(data)
    total_keywords = _number(summary.get("total_keywords"))
    total_categories = _number(summary.get("total_categories"), len(categories))

    if not data.get("has_gsc_data"):
        return KeywordCategoriesNoGsc(
            website_id=data["website_id"],
            period_days=data.get("period_days"),
            total_keywords=total_keywords,
            total_categories=total_categories,
            categories=categories,
        )
    return KeywordCategories(
        website_id=data["website_id"],
        period_days=data.get("period_days"),
        include_performance=bool(data.get("include_performance")),
        total_keywords=total_keywords,
        total_categories=total_categories,
        uncategorized_keywords=_number(summary.get("uncategorized_keywords")),
        categories=categories,
        last_updated=_opt_str(data.get("last_updated")),
    )
