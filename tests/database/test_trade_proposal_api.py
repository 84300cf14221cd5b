"""
Tests for TradeProposalAPI

Persistence of the offer payload, pending lookup and filtered status updates.
"""

import json
from datetime import date, timedelta

import pytest

from transactions.models import AssetReference, ProposalStatus, TradeProposal


@pytest.fixture
def make_proposal(campaign):
    def _make(team_id, created_at=date(2025, 11, 15), give=None):
        return TradeProposal(
            campaign_id=campaign.id,
            proposing_team_id=team_id,
            give=give or [AssetReference.player(11), AssetReference.pick(5)],
            receive=[AssetReference.player(1)],
            reason="We see Jalen Brooks as a great fit for our team going forward.",
            created_at=created_at,
            expires_at=created_at + timedelta(days=3),
        )
    return _make


class TestCreateAndRead:

    def test_round_trip(self, proposal_api, make_proposal, league):
        proposal = make_proposal(league['ai_team_ids'][0])
        proposal_id = proposal_api.create_proposal(proposal)

        loaded = proposal_api.get_proposal(proposal_id)
        assert proposal.id == proposal_id
        assert loaded.give == [AssetReference.player(11), AssetReference.pick(5)]
        assert loaded.receive == [AssetReference.player(1)]
        assert loaded.status is ProposalStatus.PENDING
        assert loaded.expires_at == date(2025, 11, 18)

    def test_stored_payload_shape(self, proposal_api, trade_db, make_proposal, league):
        proposal_id = proposal_api.create_proposal(make_proposal(league['ai_team_ids'][0]))

        row = trade_db.query_one("SELECT proposal FROM trade_proposals WHERE id = ?", (proposal_id,))
        assert json.loads(row['proposal']) == {
            'aiGives': [{'type': 'player', 'playerId': 11}, {'type': 'pick', 'pickId': 5}],
            'aiReceives': [{'type': 'player', 'playerId': 1}],
        }

    def test_missing_proposal(self, proposal_api):
        assert proposal_api.get_proposal(404) is None


class TestPendingLookup:

    def test_has_pending(self, proposal_api, make_proposal, campaign, league):
        team_a, team_b = league['ai_team_ids']
        proposal_api.create_proposal(make_proposal(team_a))

        assert proposal_api.has_pending_proposal(campaign.id, team_a)
        assert not proposal_api.has_pending_proposal(campaign.id, team_b)

    def test_answered_proposal_is_not_pending(self, proposal_api, make_proposal, campaign, league):
        team_a = league['ai_team_ids'][0]
        proposal_id = proposal_api.create_proposal(make_proposal(team_a))
        proposal_api.update_status(proposal_id, "rejected")

        assert not proposal_api.has_pending_proposal(campaign.id, team_a)

    def test_pending_is_campaign_scoped(self, proposal_api, campaign_api, make_proposal, league):
        proposal_api.create_proposal(make_proposal(league['ai_team_ids'][0]))
        other_campaign = campaign_api.create_campaign(game_year=2025, current_date=date(2025, 11, 15))

        assert not proposal_api.has_pending_proposal(other_campaign, league['ai_team_ids'][0])


class TestStatusUpdates:

    def test_update_where_respects_cutoff(self, proposal_api, make_proposal, campaign, league):
        team_a, team_b = league['ai_team_ids']
        old_id = proposal_api.create_proposal(make_proposal(team_a, created_at=date(2025, 11, 1)))
        new_id = proposal_api.create_proposal(make_proposal(team_b, created_at=date(2025, 11, 14)))

        updated = proposal_api.update_status_where(
            campaign.id, ProposalStatus.EXPIRED, expires_before=date(2025, 11, 15)
        )

        assert updated == 1
        assert proposal_api.get_proposal(old_id).status is ProposalStatus.EXPIRED
        assert proposal_api.get_proposal(new_id).status is ProposalStatus.PENDING

    def test_find_by_status_and_team(self, proposal_api, make_proposal, campaign, league):
        team_a, team_b = league['ai_team_ids']
        a_id = proposal_api.create_proposal(make_proposal(team_a))
        proposal_api.create_proposal(make_proposal(team_b))
        proposal_api.update_status(a_id, ProposalStatus.ACCEPTED)

        accepted = proposal_api.find_proposals(campaign.id, status="accepted")
        assert [p.id for p in accepted] == [a_id]
        assert len(proposal_api.find_proposals(campaign.id, proposing_team_id=team_b)) == 1
        assert len(proposal_api.find_proposals(campaign.id)) == 2
