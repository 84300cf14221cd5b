"""
Team API - Database operations for franchises within a campaign.
"""

from typing import List, Optional

from .connection import TradeDatabase
from transactions.models import Team


class TeamAPI:
    """API for team database operations."""

    def __init__(self, db: TradeDatabase):
        self.db = db

    def create_team(
        self,
        campaign_id: int,
        city: str,
        name: str,
        abbreviation: str,
        conference: Optional[str] = None
    ) -> int:
        """
        Create a team.

        Returns:
            New team id
        """
        cursor = self.db.execute(
            """INSERT INTO teams (campaign_id, city, name, abbreviation, conference)
               VALUES (?, ?, ?, ?, ?)""",
            (campaign_id, city, name, abbreviation, conference)
        )
        return cursor.lastrowid

    def get_team(self, team_id: int) -> Optional[Team]:
        row = self.db.query_one("SELECT * FROM teams WHERE id = ?", (team_id,))
        return self._row_to_team(row) if row else None

    def get_teams(self, campaign_id: int) -> List[Team]:
        """All teams in the campaign, in id order."""
        rows = self.db.query_all(
            "SELECT * FROM teams WHERE campaign_id = ? ORDER BY id",
            (campaign_id,)
        )
        return [self._row_to_team(row) for row in rows]

    @staticmethod
    def _row_to_team(row) -> Team:
        return Team(
            id=row['id'],
            campaign_id=row['campaign_id'],
            city=row['city'] or "",
            name=row['name'] or "",
            abbreviation=row['abbreviation'] or "",
        )
