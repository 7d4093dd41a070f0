# =============================================================================
# referencime/reports.py  —  Response Formatters (one per tool)
# =============================================================================
#
# WHAT THIS FILE DOES:
#   Turns the backend's ``data`` into the text report the caller reads.
#   Every formatter has the same signature:
#
#       format_xxx(data, arguments) -> str
#
#   where ``arguments`` is the normalized argument mapping that was sent to
#   the backend (some reports echo the caller's date range back).
#   The website listing also takes ``tool``, bound per tool by the registry.
#
# SHARED RULES:
#   - "no data" variants explain the likely cause instead of printing zeros
#   - long lists stop at a per-tool cap and end with "... and N more"
#   - means computed here only use items that carry the metric
#   - category and keyword order is kept exactly as received
#
# All formatters are pure: no I/O, no logging, no clock.
# =============================================================================

from referencime.formatting import (
    NOT_AVAILABLE,
    bullets,
    count_of,
    fmt_date,
    fmt_datetime,
    fmt_decimal_position,
    fmt_number,
    fmt_percent,
    fmt_position,
    fmt_signed,
    mean_present,
    truncate,
    truncation_note,
)
from referencime.payloads import (
    KeywordCategoriesNoGsc,
    RankingChange,
    RankingChangesNoData,
    WebsiteSummaryNoData,
    parse_keyword_analysis,
    parse_keyword_categories,
    parse_keyword_comparison,
    parse_payload,
    parse_position_evolution,
    parse_ranking_changes,
    parse_website_list,
    parse_website_summary,
)

# -----------------------------------------------------------------------------
# Display caps (not caller-configurable)
# -----------------------------------------------------------------------------
HISTORY_CAP = 20
COMPARISON_CAP = 20
TOP_KEYWORDS_CAP = 10
RANKING_CHANGES_CAP = 20
CATEGORY_KEYWORDS_CAP = 10

NO_GSC_CAUSE = (
    "💡 **Possible cause:** no Google Search Console property is linked to this "
    "website, or GSC has no data for this period."
)


def _or_na(value) -> str:
    return NOT_AVAILABLE if value is None else str(value)


# =============================================================================
# analyze_keyword_performance
# =============================================================================
def format_keyword_analysis(data, arguments: dict) -> str:
    result = parse_payload("analyze_keyword_performance", parse_keyword_analysis, data)
    keyword = str(arguments.get("keyword", "")).upper()
    difficulty = (
        NOT_AVAILABLE if result.difficulty_score is None
        else f"{fmt_number(result.difficulty_score)}/100"
    )
    return (
        f'🔍 **KEYWORD ANALYSIS "{keyword}"**\n\n'
        f"📊 **Current metrics:**\n"
        f"• Current position: {fmt_position(result.current_position, 'not ranked')}\n"
        f"• Search volume: {fmt_number(result.search_volume)} searches/month\n"
        f"• SEO difficulty: {difficulty}\n"
        f"• Estimated traffic: {fmt_number(result.estimated_traffic)} visits/month\n"
        f"• Competition level: {_or_na(result.competition_level)}\n"
        f"• Trend: {_or_na(result.trend)}\n\n"
        f"📅 **Last updated:** {fmt_datetime(result.last_updated)}\n"
        f"🌐 **Website ID:** {result.website_id}"
    )


# =============================================================================
# get_position_evolution
# =============================================================================
def format_position_evolution(data, arguments: dict) -> str:
    result = parse_payload("get_position_evolution", parse_position_evolution, data)
    keyword = str(arguments.get("keyword", "")).upper()

    shown, remaining = truncate(result.history, HISTORY_CAP)
    lines = [
        f"{fmt_date(p.date)}: Position {fmt_position(p.position)} "
        f"({fmt_number(p.clicks)} clicks, {fmt_number(p.impressions)} impressions)"
        for p in shown
    ]
    if remaining:
        lines.append(truncation_note(remaining, "day"))
    history = "\n".join(lines) if lines else "No position recorded for this period"

    return (
        f'📈 **POSITION HISTORY - "{keyword}"**\n\n'
        f"⏱️ **Period analysed:** {result.period or arguments.get('period', NOT_AVAILABLE)}\n"
        f"📊 **Statistics:**\n"
        f"• Best position: {fmt_position(result.best_position)}\n"
        f"• Average position: {fmt_position(result.average_position)}\n"
        f"• Recent change: {fmt_signed(result.position_change)} positions\n\n"
        f"📅 **Detailed history:**\n{history}\n\n"
        f"🌐 **Website ID:** {result.website_id}"
    )


# =============================================================================
# compare_keywords_performance
# =============================================================================
def format_keyword_comparison(data, arguments: dict) -> str:
    result = parse_payload("compare_keywords_performance", parse_keyword_comparison, data)

    shown, remaining = truncate(result.keywords, COMPARISON_CAP)
    lines = [
        f"**{k.keyword}**: Position {fmt_position(k.position)} | "
        f"Volume: {fmt_number(k.search_volume)} | "
        f"Traffic: {fmt_number(k.estimated_traffic)} | "
        f"Trend: {_or_na(k.trend_direction)} ({fmt_signed(k.monthly_change)})"
        for k in shown
    ]
    comparison = bullets(lines) if lines else "• No keyword could be analysed"
    if remaining:
        comparison += "\n" + truncation_note(remaining, "keyword")

    recommendations = (
        bullets(result.recommendations) if result.recommendations
        else "• No recommendation"
    )

    return (
        f"⚖️ **COMPARISON OF {fmt_number(result.total_analyzed)} KEYWORDS**\n\n"
        f"📊 **Side by side:**\n{comparison}\n\n"
        f"🏆 **Best performer:** {_or_na(result.best_performer)}\n\n"
        f"💡 **Recommendations:**\n{recommendations}\n\n"
        f"📅 **Analysis date:** {fmt_date(result.comparison_date)}\n"
        f"🌐 **Website ID:** {result.website_id}"
    )


# =============================================================================
# get_website_performance_summary
# =============================================================================
def _period_line(period_days, arguments: dict) -> str:
    start, end = arguments.get("start_date"), arguments.get("end_date")
    if start and end:
        line = (
            f"📅 **Period analysed:** from {fmt_date(start)} to {fmt_date(end)} "
            f"({period_days} days)"
        )
    else:
        line = f"📅 **Period analysed:** {period_days} days"

    compare_start = arguments.get("compare_start_date")
    compare_end = arguments.get("compare_end_date")
    if compare_start and compare_end:
        line += (
            f"\n🔁 **Compared with:** from {fmt_date(compare_start)} "
            f"to {fmt_date(compare_end)}"
        )
    return line


def format_website_summary(data, arguments: dict) -> str:
    result = parse_payload("get_website_performance_summary", parse_website_summary, data)
    header = f"🌐 **SEO DASHBOARD - WEBSITE #{result.website_id}**\n\n"

    if isinstance(result, WebsiteSummaryNoData):
        return (
            header
            + "⚠️ **No data available**\n\n"
            f"📊 **Period analysed:** {result.period_days} days\n"
            f"📈 **Keywords in the database:** {fmt_number(result.total_keywords)}\n\n"
            + NO_GSC_CAUSE
        )

    metrics, dist = result.metrics, result.distribution
    shown, remaining = truncate(result.top_keywords, TOP_KEYWORDS_CAP)
    if shown:
        top = bullets(
            f"{k.keyword} ({fmt_position(k.position)}, {fmt_number(k.clicks)} clicks)"
            for k in shown
        )
        if remaining:
            top += "\n" + truncation_note(remaining, "keyword")
    else:
        top = "No keyword with clicks"

    return (
        header
        + f"{_period_line(result.period_days, arguments)}\n\n"
        f"📊 **Overall metrics:**\n"
        f"• Tracked keywords: {fmt_number(metrics.total_keywords)}\n"
        f"• Total clicks: {fmt_number(metrics.total_clicks)}\n"
        f"• Total impressions: {fmt_number(metrics.total_impressions)}\n"
        f"• Average position: {fmt_position(metrics.average_position, NOT_AVAILABLE)}\n"
        f"• Average CTR: {fmt_percent(metrics.average_ctr, 2)}\n\n"
        f"📈 **Position distribution:**\n"
        f"• Top 3: {fmt_number(dist.top3)} keywords\n"
        f"• Top 10: {fmt_number(dist.top10)} keywords\n"
        f"• Top 20: {fmt_number(dist.top20)} keywords\n"
        f"• Top 50: {fmt_number(dist.top50)} keywords\n"
        f"• Top 100: {fmt_number(dist.top100)} keywords\n\n"
        f"🏆 **Best performing keywords:**\n{top}"
    )


# =============================================================================
# detect_ranking_changes
# =============================================================================
def _change_line(change: RankingChange) -> str:
    old, new = fmt_position(change.old_position), fmt_position(change.new_position)
    moved = count_of(abs(change.change), "position")

    if change.change_type == "improvement":
        line = f"📈 **{change.keyword}**: {old} → {new} ({moved} up)"
    elif change.change_type == "drop":
        line = f"📉 **{change.keyword}**: {old} → {new} ({moved} down)"
    elif change.change_type == "new_entry":
        line = f"🆕 **{change.keyword}**: new ranking at position {new}"
    elif change.change_type == "disappeared":
        line = f"❌ **{change.keyword}**: dropped out of the rankings (was at position {old})"
    else:
        line = f"🔄 **{change.keyword}**: {old} → {new} ({fmt_signed(change.change)})"

    if change.clicks > 0 or change.impressions > 0:
        line += f" | {fmt_number(change.clicks)} clicks, {fmt_number(change.impressions)} impressions"

    if change.is_major:
        line = f"🚨 {line} **[MAJOR CHANGE]**"
    return line


def format_ranking_changes(data, arguments: dict) -> str:
    result = parse_payload("detect_ranking_changes", parse_ranking_changes, data)
    header = "🔄 **SIGNIFICANT RANKING CHANGES**\n\n"

    if isinstance(result, RankingChangesNoData):
        return (
            header
            + "⚠️ **No data available**\n\n"
            f"📊 **Website ID:** {result.website_id}\n"
            f"📅 **Period:** {result.period_days} days\n"
            f"🎯 **Threshold:** ±{result.threshold} positions\n\n"
            + NO_GSC_CAUSE
        )

    summary = result.summary
    shown, remaining = truncate(result.changes, RANKING_CHANGES_CAP)
    if shown:
        changes = "📋 **Detected changes:**\n" + "\n".join(_change_line(c) for c in shown)
        if remaining:
            changes += "\n" + truncation_note(remaining, "change")
    else:
        changes = "✅ **No significant change detected**"

    return (
        header
        + f"🌐 **Website ID:** {result.website_id}\n"
        f"📅 **Period analysed:** {result.period_days} days\n"
        f"🎯 **Detection threshold:** ±{result.threshold} positions\n\n"
        f"📊 **Summary:**\n"
        f"• Changes detected: {fmt_number(summary.changes_detected)}\n"
        f"• 📈 Improvements: {fmt_number(summary.improvements)}\n"
        f"• 📉 Drops: {fmt_number(summary.drops)}\n"
        f"• 🚨 Major changes: {fmt_number(summary.major_changes)}\n"
        f"• 🆕 New entries: {fmt_number(summary.new_entries)}\n"
        f"• ❌ Disappeared: {fmt_number(summary.disappeared)}\n\n"
        + changes
    )


# =============================================================================
# list_user_websites / list_websites_by_user
# =============================================================================
def format_website_list(data, arguments: dict, tool: str = "list_websites_by_user") -> str:
    """Shared by both listing tools; ``tool`` names the caller in errors."""
    result = parse_payload(tool, parse_website_list, data)

    lines = []
    for site in result.websites:
        line = f"**{site.domain}** (ID: {site.id})"
        if site.is_favorite:
            line += " ⭐"
        if site.created_date:
            line += f" | added {fmt_date(site.created_date)}"
        lines.append(line)
    websites = bullets(lines) if lines else "• No website in this account"

    return (
        f"🌐 **YOUR REFERENCIME WEBSITES**\n\n"
        f"👤 **User ID:** {_or_na(result.user_id)}\n"
        f"📊 **Number of websites:** {result.websites_count}\n\n"
        f"📋 **Websites:**\n{websites}\n\n"
        f"💡 **Usage:** pass a website ID to the other SEO analysis tools."
    )


# =============================================================================
# get_keywords_by_categories
# =============================================================================
def _keyword_line(keyword, include_performance: bool) -> str:
    line = f"   • **{keyword.keyword}**"
    if include_performance and keyword.metrics is not None:
        perf = keyword.metrics
        if perf.has_data:
            line += (
                f" | Pos: {fmt_position(perf.position)} | {fmt_number(perf.clicks)} clicks"
                f" | {fmt_number(perf.impressions)} impr"
            )
            if perf.ctr > 0:
                line += f" | CTR: {fmt_percent(perf.ctr, 1)}"
        else:
            line += " | No GSC data"
    if keyword.search_volume > 0:
        line += f" | Vol: {fmt_number(keyword.search_volume)}"
    return line


def _category_section(category, include_performance: bool) -> str:
    section = (
        f"\n🗂️ **{category.name.upper()}** ({count_of(category.keywords_count, 'keyword')})\n"
        f"{'─' * 50}\n"
    )
    if category.keywords_count == 0:
        return section + "   • No keyword in this category\n"

    # The backend may send fewer keywords than keywords_count, even none.
    shown, remaining = truncate(category.keywords, CATEGORY_KEYWORDS_CAP, category.keywords_count)
    lines = [_keyword_line(k, include_performance) for k in shown]
    if remaining:
        lines.append(truncation_note(remaining, "keyword", indent="   "))
    return section + "\n".join(lines) + "\n"


def format_keyword_categories(data, arguments: dict) -> str:
    result = parse_payload("get_keywords_by_categories", parse_keyword_categories, data)
    header = f"📂 **KEYWORDS BY CATEGORY - WEBSITE #{result.website_id}**\n\n"

    if isinstance(result, KeywordCategoriesNoGsc):
        structure = (
            bullets(f"**{c.name}**: {count_of(c.keywords_count, 'keyword')}" for c in result.categories)
            if result.categories else "• No category"
        )
        return (
            header
            + "⚠️ **Google Search Console data not available**\n\n"
            f"📊 **Period analysed:** {result.period_days} days\n"
            f"📈 **Total keywords:** {fmt_number(result.total_keywords)}\n"
            f"🗂️ **Categories:** {fmt_number(result.total_categories)}\n\n"
            "💡 **Cause:** no Google Search Console property is linked to this website.\n\n"
            f"📋 **Available structure:**\n{structure}"
        )

    every_keyword = [k for c in result.categories for k in c.keywords]
    with_position = sum(1 for k in every_keyword if k.position is not None)
    average = mean_present(every_keyword, lambda k: k.position)

    sections = "".join(
        _category_section(c, result.include_performance) for c in result.categories
    )

    return (
        header
        + f"📅 **Period analysed:** {result.period_days} days\n"
        f"📊 **GSC metrics:** {'included' if result.include_performance else 'disabled'}\n\n"
        f"📈 **Overview:**\n"
        f"• Total keywords: {fmt_number(result.total_keywords)}\n"
        f"• Categories: {fmt_number(result.total_categories)}\n"
        f"• Uncategorized: {fmt_number(result.uncategorized_keywords)}\n"
        f"• With a GSC position: {with_position}\n"
        f"• Average position: {fmt_decimal_position(average)}\n"
        f"\n{sections}\n"
        f"📅 **Last updated:** {fmt_datetime(result.last_updated)}\n\n"
        "💡 **Tip:** use these figures to spot your strongest SEO topics."
    )
