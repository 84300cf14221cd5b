"""
Trade Offer Builder

Assembles what the proposing team gives up in return for a target:
one roster player near the target's value, or a draft pick when no player
fits, plus a pick sweetener when a lone player comes in light.
"""

import logging
from typing import List, Optional

from transactions.models import AssetReference, PickView, RosterEntry, TeamDirection
from transactions.transaction_constants import OfferThresholds
from utils.roster_field_extractors import (
    extract_age,
    extract_overall_rating,
    extract_trade_value,
)


logger = logging.getLogger(__name__)


class TradeOfferBuilder:
    """
    Builds the giving side of an AI proposal.

    Candidate pool:
    - rebuilding: veterans (age 28+) in rating order, else the whole roster
    - otherwise: roster minus its top 3 rated players, else minus the top 1
    """

    def build_offer(
        self,
        roster: List[RosterEntry],
        target_value: float,
        direction: TeamDirection,
        available_picks: List[PickView]
    ) -> Optional[List[AssetReference]]:
        """
        Build the assets to offer.

        Args:
            roster: Proposing team's roster
            target_value: Trade value of the requested player
            direction: Proposing team's direction
            available_picks: Picks the proposing team may trade

        Returns:
            Assets to give, or None if neither a player nor a pick is available
        """
        direction = TeamDirection.normalize(direction)
        candidates = self.select_candidates(roster, direction)

        assets: List[AssetReference] = []
        offered_player = self.find_matching_player(candidates, target_value)

        if offered_player is not None:
            assets.append(AssetReference.player(offered_player.player_id))
        else:
            best_pick = self.most_valuable_pick(available_picks)
            if best_pick is not None:
                assets.append(AssetReference.pick(best_pick.id))

        if not assets:
            logger.debug("No player in value range and no picks to offer")
            return None

        if offered_player is not None and len(assets) == 1:
            offered_value = extract_trade_value(offered_player)
            if offered_value < target_value * OfferThresholds.SWEETENER_RATIO:
                sweetener = self.most_valuable_pick(available_picks)
                if sweetener is not None:
                    assets.append(AssetReference.pick(sweetener.id))

        return assets

    @staticmethod
    def select_candidates(roster: List[RosterEntry], direction: TeamDirection) -> List[RosterEntry]:
        """Players the team is willing to move, best rated first."""
        by_rating = sorted(roster, key=extract_overall_rating, reverse=True)

        if direction is TeamDirection.REBUILDING:
            veterans = [
                p for p in by_rating
                if extract_age(p) >= OfferThresholds.VETERAN_MIN_AGE
            ]
            return veterans if veterans else by_rating

        candidates = by_rating[OfferThresholds.PROTECTED_STARS:]
        if not candidates:
            candidates = by_rating[1:]
        return candidates

    @staticmethod
    def find_matching_player(candidates: List[RosterEntry], target_value: float) -> Optional[RosterEntry]:
        """First candidate whose value lies within [0.5x, 1.5x] of target_value."""
        low = target_value * OfferThresholds.MIN_VALUE_RATIO
        high = target_value * OfferThresholds.MAX_VALUE_RATIO

        for candidate in candidates:
            if low <= extract_trade_value(candidate) <= high:
                return candidate
        return None

    @staticmethod
    def most_valuable_pick(picks: List[PickView]) -> Optional[PickView]:
        """Highest trade value pick; ties keep the earlier (year, round) pick."""
        best = None
        for pick in picks:
            if best is None or pick.trade_value > best.trade_value:
                best = pick
        return best
