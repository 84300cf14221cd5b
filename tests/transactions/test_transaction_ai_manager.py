"""
Tests for Transaction AI Manager

Test Coverage:
- Probability system (base rate, deadline month boosts)
- Cycle gating (deadline, user team, user roster)
- Per-team pipeline (pending skip, evaluator veto, failure isolation)
- Persistence side effects (proposal, news, log record)
- Determinism and settings toggles
- Atomic persistence and per-campaign serialization
"""

import gc
import logging
import sqlite3
import threading
from datetime import date, timedelta
from unittest.mock import Mock, patch

import pytest

from config.trade_ai_settings import TradeAISettings
from database.news_api import NewsAPI
from offseason.draft_pick_service import DraftPickService
from transactions.models import (
    AssetReference,
    ProposalStatus,
    TeamDirection,
    TradeDecisionType,
    TradeEvaluation,
    TradeProposal,
)
from transactions.transaction_ai_manager import TransactionAIManager, _campaign_locks, _lock_for


class StubRandom:
    """Random source that always draws the same value."""

    def __init__(self, value):
        self.value = value
        self.calls = 0

    def random(self):
        self.calls += 1
        return self.value


# ============================================================================
# FIXTURES
# ============================================================================

@pytest.fixture
def evaluation_service():
    service = Mock()
    service.build_context.return_value = {}
    service.analyze_direction.return_value = "rebuilding"
    service.evaluate.return_value = TradeEvaluation(decision=TradeDecisionType.ACCEPT)
    return service


@pytest.fixture
def rosters(roster_api, league):
    """
    User team: one 72 OVR 22-year-old guard.
    Each AI team: five 70 OVR 30-year-olds.
    """
    campaign_id = league['campaign_id']
    target_id = roster_api.add_player(
        campaign_id, league['user_team_id'], "Jalen", "Brooks", "PG",
        overall_rating=72, birth_date=date(2003, 6, 1)
    )

    for team_id in league['ai_team_ids']:
        for position in ["PG", "SG", "SF", "PF", "C"]:
            roster_api.add_player(
                campaign_id, team_id, "Vet", position, position,
                overall_rating=70, birth_date=date(1995, 1, 1)
            )

    return {'target_id': target_id}


@pytest.fixture
def manager(trade_db, evaluation_service):
    """Manager that always passes the probability roll."""
    return TransactionAIManager(
        db=trade_db,
        evaluation_service=evaluation_service,
        random_source=StubRandom(0.0),
    )


def add_pending(proposal_api, campaign, team_id):
    return proposal_api.create_proposal(TradeProposal(
        campaign_id=campaign.id,
        proposing_team_id=team_id,
        give=[AssetReference.player(1)],
        receive=[AssetReference.player(2)],
        reason="earlier offer",
        created_at=campaign.current_date,
        expires_at=campaign.current_date + timedelta(days=3),
    ))


# ============================================================================
# PROBABILITY SYSTEM
# ============================================================================

class TestProbabilitySystem:

    def test_base_probability(self, manager):
        assert manager.calculate_proposal_probability(TeamDirection.REBUILDING, False) == pytest.approx(0.15)

    @pytest.mark.parametrize("direction", ["title_contender", "win_now"])
    def test_deadline_month_triples_for_contenders(self, manager, direction):
        assert manager.calculate_proposal_probability(direction, True) == pytest.approx(0.45)

    @pytest.mark.parametrize("direction", ["ascending", "rebuilding"])
    def test_deadline_month_doubles_for_others(self, manager, direction):
        assert manager.calculate_proposal_probability(direction, True) == pytest.approx(0.30)

    def test_failed_roll_skips_attempt(self, trade_db, evaluation_service, campaign, rosters):
        manager = TransactionAIManager(
            db=trade_db,
            evaluation_service=evaluation_service,
            random_source=StubRandom(0.15),
        )
        result = manager.run_cycle(campaign)

        assert result.proposal_count == 0
        evaluation_service.evaluate.assert_not_called()

    def test_one_draw_per_eligible_team(self, trade_db, evaluation_service, campaign, rosters):
        rng = StubRandom(0.99)
        manager = TransactionAIManager(db=trade_db, evaluation_service=evaluation_service, random_source=rng)
        manager.run_cycle(campaign)
        assert rng.calls == 2


# ============================================================================
# CYCLE GATING
# ============================================================================

class TestCycleGating:

    def test_past_deadline_halts_after_sweep(self, manager, proposal_api, evaluation_service, campaign, league):
        proposal_id = add_pending(proposal_api, campaign, league['ai_team_ids'][0])
        campaign.current_date = date(2026, 1, 20)

        result = manager.run_cycle(campaign)

        assert result.halted_reason == "deadline_passed"
        assert result.expired_count == 1
        assert proposal_api.get_proposal(proposal_id).status is ProposalStatus.EXPIRED
        evaluation_service.build_context.assert_not_called()

    def test_no_user_team(self, manager, campaign, rosters):
        campaign.user_team_id = None
        assert manager.run_cycle(campaign).halted_reason == "no_user_team"

    def test_empty_user_roster(self, manager, evaluation_service, campaign):
        result = manager.run_cycle(campaign)
        assert result.halted_reason == "empty_user_roster"
        assert result.teams_considered == 0
        evaluation_service.build_context.assert_not_called()


# ============================================================================
# PER-TEAM PIPELINE
# ============================================================================

class TestPerTeamPipeline:

    def test_rebuilding_end_to_end(self, manager, proposal_api, campaign, league, rosters):
        result = manager.run_cycle(campaign)

        assert result.teams_considered == 2
        assert result.proposal_count == 2

        proposal = proposal_api.get_proposal(result.proposals_created[0])
        assert proposal.proposing_team_id == league['ai_team_ids'][0]
        assert proposal.receive == [AssetReference.player(rosters['target_id'])]
        assert len(proposal.give) == 1 and proposal.give[0].is_player
        assert proposal.status is ProposalStatus.PENDING
        assert proposal.created_at == date(2025, 11, 15)
        assert proposal.expires_at == date(2025, 11, 18)
        assert proposal.reason.startswith("We think Jalen Brooks has the kind of upside")

    def test_never_second_pending_proposal(self, manager, proposal_api, campaign, league, rosters):
        team_a, team_b = league['ai_team_ids']
        add_pending(proposal_api, campaign, team_a)

        result = manager.run_cycle(campaign)
        assert result.teams_skipped_pending == [team_a]

        manager.run_cycle(campaign)
        for team_id in (team_a, team_b):
            pending = proposal_api.find_proposals(campaign.id, ProposalStatus.PENDING, team_id)
            assert len(pending) == 1

    def test_evaluator_reject_leaves_no_trace(self, manager, evaluation_service, proposal_api,
                                              news_api, campaign, rosters):
        evaluation_service.evaluate.return_value = TradeEvaluation(decision=TradeDecisionType.REJECT)

        result = manager.run_cycle(campaign)

        assert result.proposal_count == 0
        assert result.errors == {}
        assert proposal_api.find_proposals(campaign.id) == []
        assert news_api.get_events(campaign.id) == []

    def test_team_failure_does_not_stop_cycle(self, manager, evaluation_service, campaign, league, rosters):
        team_a, team_b = league['ai_team_ids']

        def build_context(campaign_arg, team):
            if team.id == team_a:
                raise RuntimeError("context store unavailable")
            return {}

        evaluation_service.build_context.side_effect = build_context

        result = manager.run_cycle(campaign)

        assert result.errors == {team_a: "context store unavailable"}
        assert result.proposal_count == 1

    def test_invalid_direction_isolated_to_team(self, manager, evaluation_service, campaign, league, rosters):
        evaluation_service.analyze_direction.side_effect = ["tanking", "rebuilding"]

        result = manager.run_cycle(campaign)

        assert list(result.errors) == [league['ai_team_ids'][0]]
        assert result.proposal_count == 1

    def test_user_team_never_proposes(self, manager, evaluation_service, campaign, league, rosters):
        manager.run_cycle(campaign)
        teams_seen = [c.args[1].id for c in evaluation_service.build_context.call_args_list]
        assert league['user_team_id'] not in teams_seen


# ============================================================================
# SIDE EFFECTS
# ============================================================================

class TestSideEffects:

    def test_news_event_per_proposal(self, manager, news_api, campaign, league, rosters):
        manager.run_cycle(campaign)

        events = news_api.get_events(campaign.id, event_type="trade")
        assert [e.headline for e in events] == [
            "The Denver Peaks have proposed a trade",
            "The Miami Tides have proposed a trade",
        ]
        assert events[0].body == (
            "The Peaks are interested in acquiring Jalen Brooks and have sent a formal trade proposal."
        )
        assert events[0].team_id == league['ai_team_ids'][0]
        assert events[0].game_date == date(2025, 11, 15)

    def test_structured_log_record(self, manager, campaign, rosters, caplog):
        with caplog.at_level(logging.INFO, logger="TransactionAIManager"):
            manager.run_cycle(campaign)

        records = [r for r in caplog.records if r.getMessage().startswith("AI trade proposal generated")]
        assert len(records) == 2
        assert records[0].campaign == campaign.id
        assert records[0].team == "DEN"
        assert records[0].target == "Jalen Brooks"

    def test_declines_do_not_log_at_info(self, manager, evaluation_service, campaign, rosters, caplog):
        evaluation_service.evaluate.return_value = TradeEvaluation(decision=TradeDecisionType.REJECT)
        with caplog.at_level(logging.DEBUG):
            manager.run_cycle(campaign)
        assert all(r.levelno < logging.INFO for r in caplog.records)


# ============================================================================
# DETERMINISM AND SETTINGS
# ============================================================================

class TestDeterminismAndSettings:

    def test_seeded_cycles_repeat(self, trade_db, evaluation_service, campaign):
        manager = TransactionAIManager(db=trade_db, evaluation_service=evaluation_service, seed=42)

        first = [manager._cycle_random(campaign).random() for _ in range(2)]
        assert first[0] == first[1]

        campaign.current_date += timedelta(days=1)
        assert manager._cycle_random(campaign).random() != first[0]

    def test_injected_source_beats_seed(self, trade_db, evaluation_service, campaign):
        rng = StubRandom(0.5)
        manager = TransactionAIManager(
            db=trade_db, evaluation_service=evaluation_service, seed=42, random_source=rng
        )
        assert manager._cycle_random(campaign) is rng

    def test_debug_mode_collects_team_data(self, trade_db, evaluation_service, campaign, rosters):
        manager = TransactionAIManager(
            db=trade_db,
            evaluation_service=evaluation_service,
            random_source=StubRandom(0.0),
            debug_mode=True,
        )
        result = manager.run_cycle(campaign)

        assert len(result.debug_data) == 2
        entry = result.debug_data[0]
        assert entry['team'] == "DEN"
        assert entry['direction'] == "rebuilding"
        assert entry['probability'] == pytest.approx(0.15)
        assert entry['outcome'] == "proposed"

    def test_process_day_runs_deadline_events_then_cycle(self, manager, news_api, campaign, rosters):
        campaign.current_date = date(2025, 12, 30)

        result = manager.process_day(campaign)

        headlines = [e.headline for e in news_api.get_events(campaign.id)]
        assert headlines[0] == "Trade deadline approaching"
        assert result.proposal_count == 2

    def test_process_day_skip_transaction_ai(self, manager, evaluation_service, campaign, rosters):
        with patch.object(TradeAISettings, "SKIP_TRANSACTION_AI", True):
            assert manager.process_day(campaign) is None
        evaluation_service.build_context.assert_not_called()

    def test_process_day_skip_deadline_events(self, manager, news_api, campaign, rosters):
        campaign.current_date = date(2025, 12, 30)
        with patch.object(TradeAISettings, "SKIP_DEADLINE_EVENTS", True):
            manager.process_day(campaign)

        headlines = [e.headline for e in news_api.get_events(campaign.id)]
        assert "Trade deadline approaching" not in headlines

    def test_default_pick_service_uses_seed(self, trade_db, evaluation_service, campaign, league):
        manager = TransactionAIManager(db=trade_db, evaluation_service=evaluation_service, seed=11)

        assert manager.pick_service.seed == 11
        order = manager.pick_service.get_standings_sorted(campaign)
        expected = DraftPickService(trade_db, seed=11).get_standings_sorted(campaign)
        assert [s.team_id for s in order.standings] == [s.team_id for s in expected.standings]


# ============================================================================
# ATOMICITY AND SERIALIZATION
# ============================================================================

class TestAtomicityAndSerialization:

    def test_failed_announcement_rolls_back_proposal(self, manager, proposal_api, news_api,
                                                     campaign, league, rosters):
        with patch.object(NewsAPI, "create_event", side_effect=sqlite3.OperationalError("disk I/O error")):
            result = manager.run_cycle(campaign)

        assert set(result.errors) == set(league['ai_team_ids'])
        assert result.proposal_count == 0
        assert proposal_api.find_proposals(campaign.id) == []

        result = manager.run_cycle(campaign)
        assert result.proposal_count == 2
        assert len(news_api.get_events(campaign.id, event_type="trade")) == 2

    def test_second_cycle_waits_for_first(self, manager, evaluation_service, proposal_api,
                                          campaign, league, rosters):
        first_inside = threading.Event()
        release = threading.Event()
        entered = []

        def build_context(campaign_arg, team):
            name = threading.current_thread().name
            entered.append(name)
            if name == "cycle-1" and not first_inside.is_set():
                first_inside.set()
                release.wait(timeout=5)
            return {}

        evaluation_service.build_context.side_effect = build_context
        results = {}

        def run():
            results[threading.current_thread().name] = manager.run_cycle(campaign)

        first = threading.Thread(target=run, name="cycle-1")
        second = threading.Thread(target=run, name="cycle-2")
        first.start()
        assert first_inside.wait(timeout=5)

        second.start()
        second.join(timeout=0.2)
        assert second.is_alive()
        assert entered == ["cycle-1"]

        release.set()
        first.join(timeout=5)
        second.join(timeout=5)

        assert results["cycle-1"].proposal_count == 2
        assert results["cycle-2"].teams_skipped_pending == league['ai_team_ids']
        assert "cycle-2" not in entered
        for team_id in league['ai_team_ids']:
            pending = proposal_api.find_proposals(campaign.id, ProposalStatus.PENDING, team_id)
            assert len(pending) == 1

    def test_lock_shared_while_held_and_released_after(self, manager, campaign, rosters):
        lock = _lock_for(campaign.id)
        assert _lock_for(campaign.id) is lock

        del lock
        manager.run_cycle(campaign)
        gc.collect()

        assert campaign.id not in _campaign_locks
