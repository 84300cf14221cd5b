"""
Team Needs Analyzer

Derives the asset a team is short on from its roster and competitive direction.
Used by the AI to decide what to ask for in a trade proposal.
"""

import logging
from typing import List, Optional, Tuple

from transactions.models import (
    Need,
    PositionNeed,
    RosterEntry,
    StarNeed,
    TeamDirection,
    YoungNeed,
)
from transactions.transaction_constants import NeedThresholds
from utils.roster_field_extractors import extract_overall_rating


logger = logging.getLogger(__name__)


class TeamNeedsAnalyzer:
    """
    Identifies a team's single most pressing trade need.

    Rules by direction:
    - title_contender / win_now: weakest starting position below 80 OVR becomes a
      position need (current best + 2); otherwise look for any 80+ star.
    - rebuilding: young talent (age 24 or younger), unconditionally.
    - ascending: weakest starting position, minimum rating floored at 72.

    A position nobody on the roster covers rates 0, so an empty slot is always
    the weakest.
    """

    def __init__(self, positions: Tuple[str, ...] = NeedThresholds.STANDARD_POSITIONS):
        self.positions = positions

    def identify_need(self, direction: TeamDirection, roster: List[RosterEntry]) -> Optional[Need]:
        """
        Identify what the team needs.

        Args:
            direction: Team's competitive direction
            roster: Team's current roster

        Returns:
            PositionNeed, StarNeed or YoungNeed; None when nothing can be derived
        """
        direction = TeamDirection.normalize(direction)

        if direction.is_contending:
            weakest, weakest_rating = self.find_weakest_position(roster)
            if weakest is not None and weakest_rating < NeedThresholds.STAR_RATING:
                return PositionNeed(
                    position=weakest,
                    min_rating=weakest_rating + NeedThresholds.POSITION_UPGRADE_MARGIN
                )
            return StarNeed(min_rating=NeedThresholds.STAR_RATING)

        if direction is TeamDirection.REBUILDING:
            return YoungNeed(max_age=NeedThresholds.YOUNG_MAX_AGE)

        # Ascending: selective position upgrades, no star fallback
        if not roster:
            logger.debug("Empty roster, no position coverage to assess")
            return None

        weakest, weakest_rating = self.find_weakest_position(roster)
        if weakest is None:
            return None

        return PositionNeed(
            position=weakest,
            min_rating=max(
                NeedThresholds.ASCENDING_MIN_RATING,
                weakest_rating + NeedThresholds.POSITION_UPGRADE_MARGIN
            )
        )

    def find_weakest_position(self, roster: List[RosterEntry]) -> Tuple[Optional[str], int]:
        """
        Find the standard position whose best player rates lowest.

        A player counts at a position through primary or secondary position.
        Ties keep the earlier position in PG, SG, SF, PF, C order.

        Returns:
            (position, best rating there); (None, 100) if every slot has a 100 OVR
        """
        weakest = None
        weakest_rating = 100

        for position in self.positions:
            best_rating = self.best_rating_at(position, roster)
            if best_rating < weakest_rating:
                weakest_rating = best_rating
                weakest = position

        return weakest, weakest_rating

    @staticmethod
    def best_rating_at(position: str, roster: List[RosterEntry]) -> int:
        """Best overall rating among players covering position; 0 if nobody does."""
        ratings = [extract_overall_rating(p) for p in roster if p.plays(position)]
        return max(ratings) if ratings else 0
