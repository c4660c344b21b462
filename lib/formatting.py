# =============================================================================
# lib/formatting.py - Display Formatting Helpers
# =============================================================================
# Korean-style number, currency and date formatting used by the view payloads:
# - format_number: compact units (천, 만, 억, 조)
# - format_currency: ₩1,234,567 or 150만원
# - format_date / format_datetime / format_korean_date
# - time_ago: relative time ("3일 전")
#
# Usage:
#   from lib.formatting import format_currency, time_ago
#   format_currency(1_500_000, style="monthly")  # "150만원"
# =============================================================================

from __future__ import annotations

import math
from datetime import datetime, timezone
from decimal import Decimal, ROUND_DOWN, ROUND_HALF_UP
from typing import Literal

# Largest unit first
_UNITS: list[tuple[int, str]] = [
    (1_000_000_000_000, "조"),
    (100_000_000, "억"),
    (10_000, "만"),
    (1_000, "천"),
]

EMPTY = "-"
INVALID_DATE = "날짜 없음"


def _trim(value: Decimal) -> str:
    """Render a Decimal without trailing zeros ("1.50" -> "1.5", "3.0" -> "3")."""
    text = f"{value:f}"
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


def _truncate(value: Decimal, precision: int) -> Decimal:
    exponent = Decimal(1).scaleb(-precision) if precision > 0 else Decimal(1)
    return value.quantize(exponent, rounding=ROUND_DOWN)


def format_number(value: float | int | None, precision: int = 1) -> str:
    """
    Format a number with Korean compact units.

    Digits beyond `precision` are truncated, never rounded up, so a value
    just below a unit boundary never displays as the next unit (9999 -> 9.9천).

    Example:
        format_number(1500) -> "1.5천"
        format_number(150_000_000) -> "1.5억"
        format_number(None) -> "-"
    """
    if value is None:
        return EMPTY
    if isinstance(value, float):
        if math.isnan(value):
            return EMPTY
        if math.isinf(value):
            return "∞" if value > 0 else "-∞"

    sign = "-" if value < 0 else ""
    magnitude = Decimal(str(abs(value)))

    for size, label in _UNITS:
        if magnitude >= size:
            scaled = _truncate(magnitude / size, precision)
            return f"{sign}{_trim(scaled)}{label}"

    return f"{sign}{_trim(magnitude)}"


def format_currency(
    amount: float | int | None,
    style: Literal["default", "monthly"] = "default",
) -> str:
    """
    Format an amount of won.

    Example:
        format_currency(1234567) -> "₩1,234,567"
        format_currency(-15000) -> "-₩15,000"
        format_currency(1_500_000, style="monthly") -> "150만원"
    """
    if amount is None or (isinstance(amount, float) and math.isnan(amount)):
        return EMPTY

    sign = "-" if amount < 0 else ""
    magnitude = Decimal(str(abs(amount)))

    if style == "monthly":
        man = _truncate(magnitude / 10_000, 1)
        return f"{sign}{_trim(man)}만원"

    won = int(magnitude.quantize(Decimal(1), rounding=ROUND_HALF_UP))
    return f"{sign}₩{won:,}"


# =============================================================================
# Dates
# =============================================================================

def parse_timestamp(value: datetime | str | None) -> datetime | None:
    """
    Parse a Supabase timestamp (ISO 8601, possibly with 'Z').

    Naive datetimes are assumed to be UTC. Returns None for unparseable input.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        parsed = value
    else:
        try:
            parsed = datetime.fromisoformat(str(value).replace("Z", "+00:00"))
        except ValueError:
            return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def format_date(value: datetime | str | None) -> str:
    """Format as YYYY.MM.DD."""
    if value is None:
        return EMPTY
    parsed = parse_timestamp(value)
    if parsed is None:
        return INVALID_DATE
    return parsed.strftime("%Y.%m.%d")


def format_datetime(value: datetime | str | None) -> str:
    """Format as YYYY.MM.DD HH:MM."""
    if value is None:
        return EMPTY
    parsed = parse_timestamp(value)
    if parsed is None:
        return INVALID_DATE
    return parsed.strftime("%Y.%m.%d %H:%M")


def format_korean_date(value: datetime | str | None) -> str:
    """Format as 2024년 1월 15일."""
    if value is None:
        return EMPTY
    parsed = parse_timestamp(value)
    if parsed is None:
        return INVALID_DATE
    return f"{parsed.year}년 {parsed.month}월 {parsed.day}일"


def time_ago(value: datetime | str | None, now: datetime | None = None) -> str:
    """
    Describe how long ago a timestamp was.

    Example:
        time_ago(now - timedelta(minutes=30)) -> "30분 전"
        time_ago(now - timedelta(days=3)) -> "3일 전"
        time_ago(now + timedelta(hours=1)) -> "곧"
    """
    if value is None:
        return EMPTY
    parsed = parse_timestamp(value)
    if parsed is None:
        return INVALID_DATE

    current = parse_timestamp(now) if now else datetime.now(timezone.utc)
    seconds = (current - parsed).total_seconds()

    if seconds < 0:
        return "곧"
    if seconds < 60:
        return "방금 전"
    if seconds < 3600:
        return f"{int(seconds // 60)}분 전"
    if seconds < 86400:
        return f"{int(seconds // 3600)}시간 전"

    days = int(seconds // 86400)
    if days < 7:
        return f"{days}일 전"
    if days < 30:
        return f"{days // 7}주 전"
    if days < 365:
        return f"{days // 30}개월 전"
    return f"{days // 365}년 전"
