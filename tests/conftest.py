"""
Pytest configuration for test discovery and imports.

Provides fixtures for testing including:
- In-memory trade database
- A small seeded league (campaign, user team, AI teams)
"""

import sys
from datetime import date
from pathlib import Path

import pytest


# Determine paths
project_root = Path(__file__).parent.parent
src_path = project_root / "src"
tests_path = project_root / "tests"


def pytest_configure(config):
    """Put src/ first on sys.path and keep tests/ off it.

    tests/ mirrors the package names under src/, so leaving it on the path
    would let tests/transactions shadow the transactions package.
    """
    new_path = [p for p in dict.fromkeys(sys.path) if p != str(tests_path)]

    if str(src_path) in new_path:
        new_path.remove(str(src_path))
    new_path.insert(0, str(src_path))

    sys.path[:] = new_path


# ============================================================================
# DATABASE FIXTURES
# ============================================================================

@pytest.fixture
def trade_db():
    """
    In-memory TradeDatabase with schema applied.

    Cleanup:
        Closes the connection after the test
    """
    from database.connection import TradeDatabase

    db = TradeDatabase(":memory:")
    yield db
    db.close()


@pytest.fixture
def campaign_api(trade_db):
    from database.campaign_api import CampaignAPI
    return CampaignAPI(trade_db)


@pytest.fixture
def team_api(trade_db):
    from database.team_api import TeamAPI
    return TeamAPI(trade_db)


@pytest.fixture
def roster_api(trade_db):
    from database.player_roster_api import PlayerRosterAPI
    return PlayerRosterAPI(trade_db)


@pytest.fixture
def proposal_api(trade_db):
    from database.trade_proposal_api import TradeProposalAPI
    return TradeProposalAPI(trade_db)


@pytest.fixture
def news_api(trade_db):
    from database.news_api import NewsAPI
    return NewsAPI(trade_db)


# ============================================================================
# TEST DATA FIXTURES
# ============================================================================

@pytest.fixture
def test_season():
    """Standard season year for testing."""
    return 2025


@pytest.fixture
def league(campaign_api, team_api, test_season):
    """
    Campaign with one user team and two AI teams.

    Returns:
        Dict with campaign_id, user_team_id, ai_team_ids
    """
    campaign_id = campaign_api.create_campaign(
        game_year=test_season,
        current_date=date(2025, 11, 15),
        season_year=test_season,
        name="Test Campaign"
    )
    user_team_id = team_api.create_team(campaign_id, "Boston", "Harbors", "BOS", "east")
    ai_team_ids = [
        team_api.create_team(campaign_id, "Denver", "Peaks", "DEN", "west"),
        team_api.create_team(campaign_id, "Miami", "Tides", "MIA", "east"),
    ]
    campaign_api.set_user_team(campaign_id, user_team_id)

    return {
        'campaign_id': campaign_id,
        'user_team_id': user_team_id,
        'ai_team_ids': ai_team_ids,
    }


@pytest.fixture
def campaign(league, campaign_api):
    """Loaded Campaign for the seeded league."""
    return campaign_api.get_campaign(league['campaign_id'])
