"""
Roster Field Extraction Utilities

Centralized accessors for roster entry fields that may be missing.
Each accessor encodes one fallback order so the precedence is a single,
testable contract instead of inline chains.

Usage:
    from utils.roster_field_extractors import extract_trade_value

    value = extract_trade_value(entry)
"""

from datetime import date, datetime
from typing import Optional, Union

from transactions.models import RosterEntry
from transactions.transaction_constants import RosterDefaults


def extract_overall_rating(
    entry: RosterEntry,
    default: int = RosterDefaults.OVERALL_RATING
) -> int:
    """
    Extract overall rating, falling back to default when absent.

    Examples:
        >>> extract_overall_rating(RosterEntry(player_id=1, overall_rating=82))
        82
        >>> extract_overall_rating(RosterEntry(player_id=1))
        75
    """
    if entry.overall_rating is None:
        return default
    return int(entry.overall_rating)


def extract_age(entry: RosterEntry, default: int = RosterDefaults.AGE) -> int:
    """Extract age, falling back to default when absent."""
    if entry.age is None:
        return default
    return int(entry.age)


def extract_trade_value(entry: RosterEntry) -> float:
    """
    Extract the value used to rank and match trade assets.

    Fallback order:
        trade_value -> trade_value_total -> overall rating -> default rating

    Examples:
        >>> extract_trade_value(RosterEntry(player_id=1, trade_value=12.5, trade_value_total=14.0))
        12.5
        >>> extract_trade_value(RosterEntry(player_id=1, trade_value_total=14.0))
        14.0
        >>> extract_trade_value(RosterEntry(player_id=1, overall_rating=80))
        80.0
        >>> extract_trade_value(RosterEntry(player_id=1))
        75.0
    """
    if entry.trade_value is not None:
        return float(entry.trade_value)
    if entry.trade_value_total is not None:
        return float(entry.trade_value_total)
    return float(extract_overall_rating(entry))


def age_from_birth_date(
    birth_date: Union[str, date, None],
    on_date: date,
    default: int = RosterDefaults.AGE
) -> int:
    """
    Whole years between birth_date and on_date.

    Accepts ISO strings (date or datetime) or date objects. Missing or
    unparseable values return default.

    Examples:
        >>> age_from_birth_date("2000-06-15", date(2025, 6, 14))
        24
        >>> age_from_birth_date("2000-06-15", date(2025, 6, 15))
        25
        >>> age_from_birth_date(None, date(2025, 1, 1))
        25
    """
    parsed = _parse_date(birth_date)
    if parsed is None:
        return default

    years = on_date.year - parsed.year
    if (on_date.month, on_date.day) < (parsed.month, parsed.day):
        years -= 1
    return abs(years)


def _parse_date(value: Union[str, date, None]) -> Optional[date]:
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return datetime.fromisoformat(str(value)).date()
    except ValueError:
        return None
