# =============================================================================
# referencime/formatting.py  —  Presentation helpers shared by all reports
# =============================================================================
#
# Small, pure functions.  None of them changes a value used for computation:
# they only turn numbers and dates into display strings.
#
# CONVENTIONS:
#   - integers get thousands separators           12345   -> "12,345"
#   - ratios are multiplied by 100 for display    0.0345  -> "3.45%"
#   - positions are prefixed with "#"             4       -> "#4"
#   - ISO dates are shown day-first (the backend and its users are French)
#                                                 "2024-02-01"          -> "01/02/2024"
#                                                 "2024-02-01T09:30:00" -> "01/02/2024 09:30"
# =============================================================================

from datetime import date, datetime
from typing import Callable, Iterable, Sequence, TypeVar

T = TypeVar("T")

NOT_AVAILABLE = "not available"


def fmt_number(value: int | float | None) -> str:
    """Render a count or volume with thousands separators."""
    if value is None:
        return NOT_AVAILABLE
    if isinstance(value, float) and not value.is_integer():
        return f"{value:,.2f}".rstrip("0").rstrip(".")
    return f"{int(value):,}"


def fmt_signed(value: int | float) -> str:
    """Prefix positive numbers with "+" (negative ones already carry "-")."""
    text = fmt_number(value)
    return f"+{text}" if value > 0 else text


def fmt_position(value: int | float | None, missing: str = "N/A") -> str:
    if value is None:
        return missing
    return f"#{fmt_number(value)}"


def fmt_decimal_position(value: float | None, decimals: int = 1) -> str:
    """A locally computed mean position, e.g. "#4.5"."""
    if value is None:
        return NOT_AVAILABLE
    return f"#{value:.{decimals}f}"


def fmt_percent(ratio: int | float | None, decimals: int = 2) -> str:
    """Render a 0..1 ratio as a percentage."""
    if ratio is None:
        return NOT_AVAILABLE
    return f"{ratio * 100:.{decimals}f}%"


def _parse_iso(value: str) -> date | datetime | None:
    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    if len(text) == 10:
        try:
            return date.fromisoformat(text)
        except ValueError:
            return None
    try:
        return datetime.fromisoformat(text)
    except ValueError:
        return None


def fmt_date(value: str | None) -> str:
    """Day-first date; anything unparsable is returned as received."""
    if not value:
        return NOT_AVAILABLE
    parsed = _parse_iso(value)
    if parsed is None:
        return value
    return parsed.strftime("%d/%m/%Y")


def fmt_datetime(value: str | None) -> str:
    """Day-first date and time (date only when no time was supplied)."""
    if not value:
        return NOT_AVAILABLE
    parsed = _parse_iso(value)
    if parsed is None:
        return value
    if isinstance(parsed, datetime):
        return parsed.strftime("%d/%m/%Y %H:%M")
    return parsed.strftime("%d/%m/%Y")


def mean(values: Iterable[int | float]) -> float | None:
    """Arithmetic mean, or None for an empty input (never 0, never NaN)."""
    total = 0.0
    count = 0
    for value in values:
        total += value
        count += 1
    if count == 0:
        return None
    return total / count


def mean_present(items: Iterable[T], metric: Callable[[T], int | float | None]) -> float | None:
    """Mean of ``metric`` over only the items that carry it (value > 0)."""
    values = []
    for item in items:
        value = metric(item)
        if value is not None and value > 0:
            values.append(value)
    return mean(values)


def truncate(items: Sequence[T], cap: int, total: int | None = None) -> tuple[Sequence[T], int]:
    """First ``cap`` items, and how many were left out.

    ``total`` is the backend's own count when it reports one; it can be larger
    than ``len(items)`` when the backend already trimmed the list.
    """
    total = len(items) if total is None else max(total, len(items))
    shown = items[:cap]
    return shown, max(total - len(shown), 0)


def plural(count: int | float, noun: str) -> str:
    """``noun`` with an "s" unless ``count`` is exactly one."""
    return noun if count == 1 else f"{noun}s"


def count_of(count: int | float, noun: str) -> str:
    """A count and its noun, e.g. "1 keyword", "1,200 keywords"."""
    return f"{fmt_number(count)} {plural(count, noun)}"


def truncation_note(remaining: int, noun: str, indent: str = "") -> str:
    """``noun`` is singular; it is pluralised to match ``remaining``."""
    return f"{indent}... and {fmt_number(remaining)} more {plural(remaining, noun)}"


def bullets(lines: Iterable[str], indent: str = "") -> str:
    return "\n".join(f"{indent}• {line}" for line in lines)
