"""
Standings API - Season win/loss records used for draft ordering.
"""

from typing import List

from .connection import TradeDatabase
from transactions.models import TeamStanding


class StandingsAPI:
    """API for standings database operations."""

    def __init__(self, db: TradeDatabase):
        self.db = db

    def upsert_standing(
        self,
        campaign_id: int,
        season_year: int,
        team_id: int,
        wins: int,
        losses: int,
        conference: str = None
    ) -> None:
        """Insert or replace one team's record for a season."""
        self.db.execute(
            """INSERT INTO standings (campaign_id, season_year, team_id, conference, wins, losses)
               VALUES (?, ?, ?, ?, ?, ?)
               ON CONFLICT(campaign_id, season_year, team_id)
               DO UPDATE SET wins = excluded.wins,
                             losses = excluded.losses,
                             conference = excluded.conference""",
            (campaign_id, season_year, team_id, conference, wins, losses)
        )

    def get_standings(self, campaign_id: int, season_year: int) -> List[TeamStanding]:
        """
        All records for the season, conference by conference.

        Returns:
            List of TeamStanding (empty if the season has none yet)
        """
        rows = self.db.query_all(
            """SELECT * FROM standings
               WHERE campaign_id = ? AND season_year = ?
               ORDER BY conference, id""",
            (campaign_id, season_year)
        )
        return [
            TeamStanding(
                team_id=row['team_id'],
                wins=row['wins'] or 0,
                losses=row['losses'] or 0,
                conference=row['conference'],
            )
            for row in rows
        ]
