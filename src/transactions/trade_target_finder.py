"""
Trade Target Finder

Scans the counterparty roster for players that fill a team need and ranks them.
"""

from typing import List, Optional

from transactions.models import (
    Need,
    PositionNeed,
    RosterEntry,
    StarNeed,
    TeamDirection,
    YoungNeed,
)
from transactions.transaction_constants import NeedThresholds
from utils.roster_field_extractors import (
    extract_age,
    extract_overall_rating,
    extract_trade_value,
)


class TradeTargetFinder:
    """
    Ranks counterparty players against a need.

    Ranking is by trade value, highest first. The top-ranked candidate is
    dropped whenever another candidate remains, so the AI does not always ask
    for the other side's best asset. At most MAX_TARGETS are returned.
    """

    def __init__(self, max_targets: int = NeedThresholds.MAX_TARGETS):
        self.max_targets = max_targets

    def find_targets(
        self,
        roster: List[RosterEntry],
        need: Need,
        direction: Optional[TeamDirection] = None
    ) -> List[RosterEntry]:
        """
        Find players on roster that match need.

        Args:
            roster: Counterparty roster
            need: Need to fill
            direction: Proposing team's direction (accepted, not used for filtering)

        Returns:
            Up to max_targets players in ranked order; empty if nothing fits
        """
        targets = [player for player in roster if self.matches_need(player, need)]

        # sorted() is stable, equal values keep roster order
        targets = sorted(targets, key=extract_trade_value, reverse=True)

        if len(targets) > 1:
            targets = targets[1:]

        return targets[:self.max_targets]

    @staticmethod
    def matches_need(player: RosterEntry, need: Need) -> bool:
        """Check one player against the need's own filter."""
        rating = extract_overall_rating(player)

        if isinstance(need, PositionNeed):
            return player.position == need.position and rating >= need.min_rating

        if isinstance(need, StarNeed):
            return rating >= need.min_rating

        if isinstance(need, YoungNeed):
            return (
                extract_age(player) <= need.max_age
                and rating >= NeedThresholds.YOUNG_MIN_RATING
            )

        raise TypeError(f"Unsupported need type: {type(need).__name__}")
