"""Display Formatting — pure conversions from stored values to dashboard strings.

Invariants:
    - Currency input is integer cents; output is en-US dollars ("$1,234.56")
    - Date input is ISO "YYYY-MM-DD"; output is "Dec 6, 2022"
    - Never mutates inputs; no IO

Design Decisions:
    - Decimal division: cents -> dollars without float rounding drift
    - en-US only: the dashboard ships one locale, other locales fail loudly
"""

import math
from datetime import date
from decimal import Decimal
from typing import Iterable, Literal

from dashboard.core.domain_types import MONTHS, Cents

PageGap = Literal["..."]


def format_currency(amount: Cents | None) -> str:
    """Format an amount in cents as a USD display string."""
    dollars = Decimal(int(amount or 0)) / 100
    sign = "-" if dollars < 0 else ""
    return f"{sign}${abs(dollars):,.2f}"


def format_date_to_local(date_str: str | date, locale: str = "en-US") -> str:
    """Format an ISO date (or date) as a short month/day/year string."""
    if locale != "en-US":
        raise ValueError(f"Unsupported locale: {locale}")
    value = date_str if isinstance(date_str, date) else date.fromisoformat(str(date_str)[:10])
    return f"{MONTHS[value.month - 1]} {value.day}, {value.year}"


def generate_y_axis(revenue: Iterable[int]) -> tuple[list[str], int]:
    """Y-axis labels for the revenue chart, highest first, in $1K steps."""
    highest = max(revenue, default=0)
    top_label = math.ceil(highest / 1000) * 1000
    labels = [f"${i // 1000}K" for i in range(top_label, -1, -1000)]
    return labels, top_label


def generate_pagination(
    current_page: int, total_pages: int,
) -> list[int | PageGap]:
    """Page buttons to render: all pages when few, else ellipsis-collapsed."""
    # Few pages: show them all
    if total_pages <= 7:
        return list(range(1, total_pages + 1))

    if current_page <= 3:
        return [1, 2, 3, "...", total_pages - 1, total_pages]

    if current_page >= total_pages - 2:
        return [1, 2, "...", total_pages - 2, total_pages - 1, total_pages]

    return [
        1, "...",
        current_page - 1, current_page, current_page + 1,
        "...", total_pages,
    ]
