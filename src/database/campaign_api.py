"""
Campaign API - Database operations for campaign calendar state.

Owns the simulated current date and the settings map holding one-shot flags
(trade_deadline_warned, trade_deadline_passed).
"""

import json
from datetime import date
from typing import Any, Dict, Optional

from .connection import TradeDatabase
from transactions.models import Campaign


class CampaignAPI:
    """API for campaign database operations."""

    def __init__(self, db: TradeDatabase):
        """
        Initialize with database connection.

        Args:
            db: TradeDatabase instance
        """
        self.db = db

    def create_campaign(
        self,
        game_year: int,
        current_date: date,
        user_team_id: Optional[int] = None,
        season_year: Optional[int] = None,
        settings: Optional[Dict[str, Any]] = None,
        name: Optional[str] = None
    ) -> int:
        """
        Create a campaign.

        Returns:
            New campaign id
        """
        cursor = self.db.execute(
            """INSERT INTO campaigns
               (name, user_team_id, game_year, season_year, sim_date, settings)
               VALUES (?, ?, ?, ?, ?, ?)""",
            (
                name,
                user_team_id,
                game_year,
                season_year,
                current_date.isoformat(),
                json.dumps(settings or {}),
            )
        )
        return cursor.lastrowid

    def get_campaign(self, campaign_id: int) -> Optional[Campaign]:
        """Load a campaign, or None if it does not exist."""
        row = self.db.query_one("SELECT * FROM campaigns WHERE id = ?", (campaign_id,))
        if not row:
            return None
        return self._row_to_campaign(row)

    def update_settings(self, campaign_id: int, settings: Dict[str, Any]) -> None:
        """Replace the settings map."""
        self.db.execute(
            "UPDATE campaigns SET settings = ? WHERE id = ?",
            (json.dumps(settings), campaign_id)
        )

    def update_current_date(self, campaign_id: int, current_date: date) -> None:
        self.db.execute(
            "UPDATE campaigns SET sim_date = ? WHERE id = ?",
            (current_date.isoformat(), campaign_id)
        )

    def set_user_team(self, campaign_id: int, team_id: int) -> None:
        self.db.execute(
            "UPDATE campaigns SET user_team_id = ? WHERE id = ?",
            (team_id, campaign_id)
        )

    def update_season(self, campaign_id: int, season_year: Optional[int], game_year: int) -> None:
        self.db.execute(
            "UPDATE campaigns SET season_year = ?, game_year = ? WHERE id = ?",
            (season_year, game_year, campaign_id)
        )

    @staticmethod
    def _row_to_campaign(row) -> Campaign:
        try:
            settings = json.loads(row['settings']) if row['settings'] else {}
        except (json.JSONDecodeError, TypeError):
            settings = {}

        return Campaign(
            id=row['id'],
            user_team_id=row['user_team_id'],
            game_year=row['game_year'],
            current_date=date.fromisoformat(row['sim_date']),
            season_year=row['season_year'],
            settings=settings if isinstance(settings, dict) else {},
            name=row['name'],
        )
