"""Date manipulation utilities"""

from datetime import date, datetime
from typing import Union

# Fixed English abbreviations so labels don't depend on the process locale
MONTH_ABBREVIATIONS = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)


def month_label(day: Union[date, datetime]) -> str:
    """Render a date as its month bucket label, e.g. "Jan 2024" """
    return f"{MONTH_ABBREVIATIONS[day.month - 1]} {day.year:04d}"


def parse_month_label(label: str) -> date:
    """Inverse of month_label: first day of the labelled month"""
    abbreviation, year = label.split(" ")
    return date(int(year), MONTH_ABBREVIATIONS.index(abbreviation) + 1, 1)


def same_month(day: Union[date, datetime], as_of: Union[date, datetime]) -> bool:
    """True when both dates fall in the same calendar month and year"""
    return day.year == as_of.year and day.month == as_of.month
