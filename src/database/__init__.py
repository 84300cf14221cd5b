"""
Database Module

SQLite persistence for the trade engine. One narrow API class per table;
every query is scoped by campaign.
"""

from .connection import TradeDatabase
from .campaign_api import CampaignAPI
from .team_api import TeamAPI
from .player_roster_api import PlayerRosterAPI
from .standings_api import StandingsAPI
from .draft_pick_api import DraftPickAPI
from .trade_proposal_api import TradeProposalAPI
from .news_api import NewsAPI

__all__ = [
    'TradeDatabase',
    'CampaignAPI',
    'TeamAPI',
    'PlayerRosterAPI',
    'StandingsAPI',
    'DraftPickAPI',
    'TradeProposalAPI',
    'NewsAPI',
]
