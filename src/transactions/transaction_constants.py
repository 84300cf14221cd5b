"""
Transaction Constants

Centralized constants for the AI trade proposal system to eliminate magic numbers.
All probability rates, modifiers, thresholds, value charts and timing values are
defined here.

Usage:
    from transactions.transaction_constants import (
        TransactionProbability,
        ProbabilityModifiers,
        TradeDeadlineDates
    )

    if days_until_deadline <= TransactionProbability.DEADLINE_MONTH_DAYS:
        # Deadline month boost applies
"""


class TransactionProbability:
    """
    Base probability constants for AI proposal generation.
    """

    BASE_PROPOSAL_PROBABILITY = 0.15
    """
    Per-cycle probability that an eligible AI team attempts a proposal (15%).
    """

    DEADLINE_MONTH_DAYS = 30
    """Days before the deadline (inclusive) treated as the deadline month."""


class ProbabilityModifiers:
    """
    Multipliers applied to the base probability during the deadline month.
    """

    DEADLINE_MONTH = 2.0
    """+100% for ascending and rebuilding teams."""

    DEADLINE_MONTH_CONTENDER = 3.0
    """+200% for title contenders and win-now teams."""


class TradeDeadlineDates:
    """
    Trade deadline calendar.

    The deadline falls in the calendar year after the season's start year
    (2025 season -> January 13, 2026).
    """

    TRADE_DEADLINE_MONTH = 1
    TRADE_DEADLINE_DAY = 13

    WARNING_DAYS_BEFORE = 16
    """Deadline-approaching announcement fires from this many days out."""


class ProposalLifetime:
    """Simulated days a pending proposal stays open."""

    EXPIRATION_DAYS = 3


class CampaignSettingsKeys:
    """One-shot flags stored in the campaign settings map."""

    TRADE_DEADLINE_WARNED = "trade_deadline_warned"
    TRADE_DEADLINE_PASSED = "trade_deadline_passed"


class NeedThresholds:
    """
    Thresholds for need identification and target matching.
    """

    STANDARD_POSITIONS = ("PG", "SG", "SF", "PF", "C")

    STAR_RATING = 80
    """Contenders whose weakest starter is this good look for a star instead."""

    POSITION_UPGRADE_MARGIN = 2
    """Required improvement over the current best player at the weakest position."""

    ASCENDING_MIN_RATING = 72
    """Floor on the position-need rating for ascending teams."""

    YOUNG_MAX_AGE = 24
    YOUNG_MIN_RATING = 70
    MAX_TARGETS = 3


class OfferThresholds:
    """
    Value band and protection rules for offer construction.
    """

    MIN_VALUE_RATIO = 0.5
    MAX_VALUE_RATIO = 1.5

    SWEETENER_RATIO = 0.8
    """Single-player offers below this share of target value get a pick added."""

    VETERAN_MIN_AGE = 28
    PROTECTED_STARS = 3


class RosterDefaults:
    """Fallbacks for incomplete roster rows."""

    OVERALL_RATING = 75
    AGE = 25
    CONTRACT_YEARS_REMAINING = 1


class PickValueCharts:
    """
    Draft pick trade values, comparable to player trade values.

    Indexed by pick position within the round (1-30).
    """

    FIRST_ROUND = {
        1: 30.0, 2: 25.0, 3: 22.0, 4: 18.0, 5: 15.0,
        6: 13.0, 7: 11.0, 8: 10.0, 9: 9.0, 10: 8.0,
        11: 7.0, 12: 6.5, 13: 6.0, 14: 5.5, 15: 5.0,
        16: 4.5, 17: 4.0, 18: 3.8, 19: 3.5, 20: 3.2,
        21: 3.0, 22: 2.8, 23: 2.6, 24: 2.4, 25: 2.2,
        26: 2.0, 27: 1.8, 28: 1.6, 29: 1.4, 30: 1.2,
    }

    SECOND_ROUND = {
        1: 1.0, 2: 0.95, 3: 0.9, 4: 0.85, 5: 0.8,
        6: 0.75, 7: 0.7, 8: 0.65, 9: 0.6, 10: 0.55,
        11: 0.5, 12: 0.48, 13: 0.46, 14: 0.44, 15: 0.42,
        16: 0.4, 17: 0.38, 18: 0.36, 19: 0.34, 20: 0.32,
        21: 0.3, 22: 0.28, 23: 0.26, 24: 0.24, 25: 0.22,
        26: 0.2, 27: 0.18, 28: 0.16, 29: 0.14, 30: 0.12,
    }

    FIRST_ROUND_DEFAULT = 3.0
    SECOND_ROUND_DEFAULT = 0.5

    MIN_POSITION = 1
    MAX_POSITION = 30
    DEFAULT_POSITION = 15
    """Projected position when a team cannot be placed in the standings."""

    YEARLY_DISCOUNT = 0.90
    """Future picks lose 10% per year out."""


class DraftPickGeneration:
    """Pick inventory maintained per team."""

    ROUNDS = (1, 2)
    YEARS_AHEAD = 5


# Backwards compatibility - export key constants at module level
BASE_PROPOSAL_PROBABILITY = TransactionProbability.BASE_PROPOSAL_PROBABILITY
DEADLINE_MONTH_DAYS = TransactionProbability.DEADLINE_MONTH_DAYS

MODIFIER_DEADLINE_MONTH = ProbabilityModifiers.DEADLINE_MONTH
MODIFIER_DEADLINE_MONTH_CONTENDER = ProbabilityModifiers.DEADLINE_MONTH_CONTENDER

PROPOSAL_EXPIRATION_DAYS = ProposalLifetime.EXPIRATION_DAYS
