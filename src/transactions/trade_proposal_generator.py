"""
Trade Proposal Generator

Builds one AI team's proposal to the user team: need -> target -> offer ->
self-verification. Any stage that comes up empty ends the attempt quietly;
only a verified offer is returned for persistence.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional

from transactions.interfaces import PickService, TradeEvaluationService
from transactions.models import (
    AssetReference,
    Campaign,
    Need,
    RosterEntry,
    Team,
    TeamDirection,
    TradeOffer,
)
from transactions.team_needs_analyzer import TeamNeedsAnalyzer
from transactions.trade_announcements import proposal_reason
from transactions.trade_offer_builder import TradeOfferBuilder
from transactions.trade_target_finder import TradeTargetFinder
from utils.roster_field_extractors import extract_trade_value


class ProposalOutcome(Enum):
    """Where a proposal attempt ended"""
    PROPOSED = "proposed"
    NO_ROSTER = "no_roster"
    NO_NEED = "no_need"
    NO_TARGET = "no_target"
    NO_OFFER = "no_offer"
    DECLINED = "declined_by_evaluator"


@dataclass
class ProposalAttempt:
    """Result of one team's attempt. offer is set only when PROPOSED."""
    outcome: ProposalOutcome
    need: Optional[Need] = None
    target: Optional[RosterEntry] = None
    offer: Optional[TradeOffer] = None

    @property
    def succeeded(self) -> bool:
        return self.outcome is ProposalOutcome.PROPOSED

    def to_debug_dict(self) -> dict:
        return {
            'outcome': self.outcome.value,
            'need': str(self.need) if self.need else None,
            'target': str(self.target) if self.target else None,
            'offer': self.offer.to_payload() if self.offer else None,
        }


class TradeProposalGenerator:
    """
    Generates a single verified trade proposal for an AI team.

    The generator never persists anything. The evaluation service is asked to
    judge the assembled offer from the proposing team's own side, and only an
    "accept" verdict lets the offer through.
    """

    def __init__(
        self,
        evaluation_service: TradeEvaluationService,
        pick_service: PickService,
        needs_analyzer: Optional[TeamNeedsAnalyzer] = None,
        target_finder: Optional[TradeTargetFinder] = None,
        offer_builder: Optional[TradeOfferBuilder] = None
    ):
        """
        Initialize proposal generator.

        Args:
            evaluation_service: Trade evaluator (also classifies direction upstream)
            pick_service: Source of the proposing team's tradeable picks
            needs_analyzer: Need identification (default: TeamNeedsAnalyzer())
            target_finder: Target matching (default: TradeTargetFinder())
            offer_builder: Offer construction (default: TradeOfferBuilder())
        """
        self.evaluation_service = evaluation_service
        self.pick_service = pick_service
        self.needs_analyzer = needs_analyzer or TeamNeedsAnalyzer()
        self.target_finder = target_finder or TradeTargetFinder()
        self.offer_builder = offer_builder or TradeOfferBuilder()
        self.logger = logging.getLogger("TradeProposalGenerator")

    def generate_proposal(
        self,
        campaign: Campaign,
        ai_team: Team,
        direction: TeamDirection,
        ai_roster: List[RosterEntry],
        user_roster: List[RosterEntry]
    ) -> ProposalAttempt:
        """
        Try to build a proposal from ai_team to the user team.

        Args:
            campaign: Campaign being simulated
            ai_team: Proposing team
            direction: Proposing team's direction
            ai_roster: Proposing team's roster
            user_roster: User team's roster (the counterparty)

        Returns:
            ProposalAttempt; offer is populated only when the evaluator accepts
        """
        direction = TeamDirection.normalize(direction)

        if not ai_roster:
            return self._decline(ai_team, ProposalOutcome.NO_ROSTER)

        need = self.needs_analyzer.identify_need(direction, ai_roster)
        if need is None:
            return self._decline(ai_team, ProposalOutcome.NO_NEED)

        targets = self.target_finder.find_targets(user_roster, need, direction)
        if not targets:
            return self._decline(ai_team, ProposalOutcome.NO_TARGET, need=need)

        target = targets[0]
        available_picks = self.pick_service.get_tradeable_picks(campaign, ai_team.id)
        give = self.offer_builder.build_offer(
            ai_roster,
            extract_trade_value(target),
            direction,
            available_picks
        )
        if not give:
            return self._decline(ai_team, ProposalOutcome.NO_OFFER, need=need, target=target)

        offer = TradeOffer(
            give=tuple(give),
            receive=(AssetReference.player(target.player_id),),
            reason=proposal_reason(direction, target.full_name),
            target=target,
        )

        verdict = self.evaluation_service.evaluate(offer, ai_team, campaign)
        if not verdict.is_accepted():
            return self._decline(ai_team, ProposalOutcome.DECLINED, need=need, target=target)

        return ProposalAttempt(ProposalOutcome.PROPOSED, need=need, target=target, offer=offer)

    def _decline(self, team: Team, outcome: ProposalOutcome, **details) -> ProposalAttempt:
        self.logger.debug(f"{team.abbreviation or team.id}: no proposal ({outcome.value})")
        return ProposalAttempt(outcome, **details)
