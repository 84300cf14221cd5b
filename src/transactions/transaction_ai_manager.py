"""
Transaction AI Manager

Central orchestrator for AI-driven trade proposals to the user team.
Runs once per simulated date advancement for a single campaign: expires
stale proposals, applies the deadline gate, then gives every AI team one
probability roll at building a proposal.
"""

from dataclasses import dataclass, field
from datetime import date, timedelta
from typing import Any, Dict, List, Optional
import logging
import random
import threading
import weakref

from config.trade_ai_settings import TradeAISettings
from database.connection import TradeDatabase
from database.news_api import NewsAPI
from database.player_roster_api import PlayerRosterAPI
from database.team_api import TeamAPI
from database.trade_proposal_api import TradeProposalAPI
from offseason.draft_pick_service import DraftPickService
from transactions import trade_announcements
from transactions.interfaces import (
    PickService,
    RandomSource,
    RosterService,
    TradeEvaluationService,
)
from transactions.models import (
    Campaign,
    NewsEvent,
    RosterEntry,
    Team,
    TeamDirection,
    TradeProposal,
)
from transactions.trade_deadline_manager import (
    TradeDeadlineManager,
    is_before_deadline,
    is_deadline_month,
)
from transactions.trade_proposal_generator import ProposalAttempt, TradeProposalGenerator
from transactions.transaction_constants import (
    BASE_PROPOSAL_PROBABILITY,
    MODIFIER_DEADLINE_MONTH,
    MODIFIER_DEADLINE_MONTH_CONTENDER,
    PROPOSAL_EXPIRATION_DAYS,
)


# Cycles for the same campaign must not interleave: the pending check and
# the insert are not atomic. Entries live only while some cycle holds them.
_campaign_locks: "weakref.WeakValueDictionary[int, threading.RLock]" = weakref.WeakValueDictionary()
_campaign_locks_guard = threading.Lock()


def _lock_for(campaign_id: int) -> threading.RLock:
    with _campaign_locks_guard:
        lock = _campaign_locks.get(campaign_id)
        if lock is None:
            lock = threading.RLock()
            _campaign_locks[campaign_id] = lock
        return lock


@dataclass
class TradeCycleResult:
    """
    Summary of one run_cycle call.

    Attributes:
        campaign_id: Campaign processed
        current_date: Simulated date of the cycle
        halted_reason: Why the cycle stopped before the team loop, if it did
        expired_count: Proposals expired by the stale sweep
        teams_considered: AI teams visited
        teams_skipped_pending: AI teams skipped for an outstanding proposal
        proposals_created: Ids of proposals persisted this cycle
        errors: team_id -> error message for teams whose attempt failed
        debug_data: Per-team diagnostics (debug mode only)
    """

    campaign_id: int
    current_date: date
    halted_reason: Optional[str] = None
    expired_count: int = 0
    teams_considered: int = 0
    teams_skipped_pending: List[int] = field(default_factory=list)
    proposals_created: List[int] = field(default_factory=list)
    errors: Dict[int, str] = field(default_factory=dict)
    debug_data: List[Dict[str, Any]] = field(default_factory=list)

    @property
    def proposal_count(self) -> int:
        return len(self.proposals_created)


@dataclass
class TransactionAIManager:
    """
    Central orchestrator for AI trade proposals.

    Attributes:
        db: TradeDatabase instance
        evaluation_service: Direction classifier and trade evaluator
        roster_service: Roster lookup (default: PlayerRosterAPI)
        pick_service: Tradeable pick inventory (default: DraftPickService)
        proposal_generator: Per-team pipeline (default: TradeProposalGenerator)
        deadline_manager: Expiration sweep and deadline events
        base_probability: Per-team chance of attempting a proposal (default: 0.15)
        seed: Seed for reproducible cycles (default: TradeAISettings.RANDOM_SEED)
        random_source: Explicit random source; takes precedence over seed
        debug_mode: Collect per-team debug data (default: TradeAISettings.DEBUG_MODE)
    """

    db: TradeDatabase
    evaluation_service: TradeEvaluationService

    # Component instances (will be created in __post_init__ if not provided)
    roster_service: Optional[RosterService] = None
    pick_service: Optional[PickService] = None
    proposal_generator: Optional[TradeProposalGenerator] = None
    deadline_manager: Optional[TradeDeadlineManager] = None

    # Configuration
    base_probability: float = BASE_PROPOSAL_PROBABILITY
    seed: Optional[int] = None
    random_source: Optional[RandomSource] = None
    debug_mode: Optional[bool] = None

    # Logger
    logger: Optional[logging.Logger] = field(default=None, init=False)

    def __post_init__(self):
        """Initialize components if not provided."""
        self.logger = logging.getLogger("TransactionAIManager")

        if self.seed is None:
            self.seed = TradeAISettings.RANDOM_SEED
        if self.debug_mode is None:
            self.debug_mode = TradeAISettings.DEBUG_MODE

        if self.roster_service is None:
            self.roster_service = PlayerRosterAPI(self.db)

        if self.pick_service is None:
            self.pick_service = DraftPickService(self.db, random_source=self.random_source, seed=self.seed)

        if self.proposal_generator is None:
            self.proposal_generator = TradeProposalGenerator(
                self.evaluation_service,
                self.pick_service
            )

        if self.deadline_manager is None:
            self.deadline_manager = TradeDeadlineManager(self.db)

        self.team_api = TeamAPI(self.db)
        self.proposal_api = TradeProposalAPI(self.db)
        self.news_api = NewsAPI(self.db)

        if self.debug_mode:
            self.logger.info("[DEBUG_MODE] TransactionAIManager initialized in debug mode")

    # -------------------------------------------------------------------------
    # Entry points
    # -------------------------------------------------------------------------

    def process_day(self, campaign: Campaign) -> Optional[TradeCycleResult]:
        """
        Date-advancement hook: deadline events, then the proposal cycle.

        Returns:
            The cycle result, or None when SKIP_TRANSACTION_AI is set
        """
        with _lock_for(campaign.id):
            if not TradeAISettings.SKIP_DEADLINE_EVENTS:
                self.deadline_manager.process_trade_deadline_events(campaign)

            if TradeAISettings.SKIP_TRANSACTION_AI:
                self.logger.debug(f"Transaction AI skipped for campaign {campaign.id}")
                return None

            return self.run_cycle(campaign)

    def run_cycle(self, campaign: Campaign) -> TradeCycleResult:
        """
        Give each AI team one chance to propose a trade to the user team.

        The expiration sweep and deadline gate run first and are not guarded;
        each team's attempt is isolated so one failure never stops the loop.

        Args:
            campaign: Campaign to process (current_date drives everything)

        Returns:
            TradeCycleResult for the cycle
        """
        with _lock_for(campaign.id):
            result = TradeCycleResult(campaign_id=campaign.id, current_date=campaign.current_date)
            result.expired_count = self.deadline_manager.expire_stale_proposals(campaign)

            if not is_before_deadline(campaign):
                return self._halt(result, "deadline_passed")

            deadline_month = is_deadline_month(campaign)

            if campaign.user_team_id is None or self.team_api.get_team(campaign.user_team_id) is None:
                return self._halt(result, "no_user_team")

            user_roster = self.roster_service.get_roster(campaign, campaign.user_team_id)
            if not user_roster:
                return self._halt(result, "empty_user_roster")

            ai_teams = [
                team for team in self.team_api.get_teams(campaign.id)
                if team.id != campaign.user_team_id
            ]
            rng = self._cycle_random(campaign)

            for team in ai_teams:
                result.teams_considered += 1
                try:
                    self._process_team(campaign, team, user_roster, deadline_month, rng, result)
                except Exception as e:
                    self.logger.warning(
                        f"Trade proposal attempt failed for {team.abbreviation or team.id} "
                        f"(campaign {campaign.id}): {e}",
                        exc_info=True
                    )
                    result.errors[team.id] = str(e)

            return result

    # -------------------------------------------------------------------------
    # Probability System
    # -------------------------------------------------------------------------

    def calculate_proposal_probability(self, direction: TeamDirection, deadline_month: bool) -> float:
        """
        Chance that a team attempts a proposal this cycle.

        Base: 15%. Deadline month: x3 for contenders and win-now teams, x2 for
        everyone else.
        """
        probability = self.base_probability
        if deadline_month:
            if TeamDirection.normalize(direction).is_contending:
                probability *= MODIFIER_DEADLINE_MONTH_CONTENDER
            else:
                probability *= MODIFIER_DEADLINE_MONTH
        return min(probability, 1.0)

    def _cycle_random(self, campaign: Campaign) -> RandomSource:
        if self.random_source is not None:
            return self.random_source
        if self.seed is not None:
            return random.Random(f"{self.seed}:{campaign.id}:{campaign.current_date.isoformat()}")
        return random.Random()

    # -------------------------------------------------------------------------
    # Per-team pipeline
    # -------------------------------------------------------------------------

    def _process_team(
        self,
        campaign: Campaign,
        team: Team,
        user_roster: List[RosterEntry],
        deadline_month: bool,
        rng: RandomSource,
        result: TradeCycleResult
    ) -> None:
        debug_data = {'team_id': team.id, 'team': team.abbreviation} if self.debug_mode else None

        if self.proposal_api.has_pending_proposal(campaign.id, team.id):
            result.teams_skipped_pending.append(team.id)
            if self.debug_mode:
                debug_data['decision'] = 'SKIP_PENDING'
                result.debug_data.append(debug_data)
            return

        context = self.evaluation_service.build_context(campaign, team)
        direction = TeamDirection.normalize(self.evaluation_service.analyze_direction(team, context))

        probability = self.calculate_proposal_probability(direction, deadline_month)
        roll = rng.random()

        if self.debug_mode:
            debug_data['direction'] = direction.value
            debug_data['probability'] = probability
            debug_data['random_roll'] = roll
            result.debug_data.append(debug_data)

        if roll >= probability:
            if self.debug_mode:
                debug_data['decision'] = 'NO_ATTEMPT'
            return

        ai_roster = self.roster_service.get_roster(campaign, team.id)
        attempt = self.proposal_generator.generate_proposal(
            campaign, team, direction, ai_roster, user_roster
        )

        if self.debug_mode:
            debug_data['decision'] = 'ATTEMPT'
            debug_data.update(attempt.to_debug_dict())

        if attempt.succeeded:
            proposal_id = self._store_proposal(campaign, team, attempt)
            result.proposals_created.append(proposal_id)

    def _store_proposal(self, campaign: Campaign, team: Team, attempt: ProposalAttempt) -> int:
        """Persist the proposal and its announcement atomically, then log it."""
        offer = attempt.offer
        proposal = TradeProposal(
            campaign_id=campaign.id,
            proposing_team_id=team.id,
            give=list(offer.give),
            receive=list(offer.receive),
            reason=offer.reason,
            created_at=campaign.current_date,
            expires_at=campaign.current_date + timedelta(days=PROPOSAL_EXPIRATION_DAYS),
        )
        target_name = attempt.target.full_name if attempt.target else ""

        with self.db.transaction():
            proposal_id = self.proposal_api.create_proposal(proposal)
            self.news_api.create_event(NewsEvent(
                campaign_id=campaign.id,
                team_id=team.id,
                event_type=trade_announcements.NEWS_EVENT_TYPE_TRADE,
                headline=trade_announcements.proposal_headline(team.city, team.name),
                body=trade_announcements.proposal_body(team.name, target_name),
                game_date=campaign.current_date,
            ))

        self.logger.info(
            f"AI trade proposal generated (campaign={campaign.id}, "
            f"team={team.abbreviation}, target={target_name})",
            extra={'campaign': campaign.id, 'team': team.abbreviation, 'target': target_name}
        )
        return proposal_id

    def _halt(self, result: TradeCycleResult, reason: str) -> TradeCycleResult:
        self.logger.debug(f"Trade cycle for campaign {result.campaign_id} stopped: {reason}")
        result.halted_reason = reason
        return result
