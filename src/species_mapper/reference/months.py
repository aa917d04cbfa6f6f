"""Month lookup used for display and for the month filter."""

from __future__ import annotations

# Index 0 is January; use MONTH_ABBREVIATIONS[month - 1]
MONTH_ABBREVIATIONS: tuple[str, ...] = (
    "Jan",
    "Feb",
    "Mar",
    "Apr",
    "May",
    "Jun",
    "Jul",
    "Aug",
    "Sep",
    "Oct",
    "Nov",
    "Dec",
)
