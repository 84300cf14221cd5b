"""
Player Roster Database API

Read-side roster projection for the trade engine. Rows with missing fields
degrade to defaults (rating 75, age 25) rather than failing.
"""

import logging
from datetime import date
from typing import List, Optional

from .connection import TradeDatabase
from transactions.models import Campaign, RosterEntry
from transactions.transaction_constants import RosterDefaults
from utils.roster_field_extractors import age_from_birth_date


class PlayerRosterAPI:
    """Roster lookup backed by the players table."""

    def __init__(self, db: TradeDatabase):
        """
        Initialize player roster API.

        Args:
            db: TradeDatabase instance
        """
        self.db = db
        self.logger = logging.getLogger("PlayerRosterAPI")

    def add_player(
        self,
        campaign_id: int,
        team_id: Optional[int],
        first_name: str,
        last_name: str,
        position: str,
        overall_rating: Optional[int] = None,
        birth_date: Optional[date] = None,
        secondary_position: Optional[str] = None,
        contract_salary: Optional[float] = None,
        contract_years_remaining: Optional[int] = None,
        trade_value: Optional[float] = None,
        trade_value_total: Optional[float] = None
    ) -> int:
        """
        Insert a player.

        Returns:
            New player id
        """
        cursor = self.db.execute(
            """INSERT INTO players
               (campaign_id, team_id, first_name, last_name, position, secondary_position,
                overall_rating, birth_date, contract_salary, contract_years_remaining,
                trade_value, trade_value_total)
               VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)""",
            (
                campaign_id,
                team_id,
                first_name,
                last_name,
                position,
                secondary_position,
                overall_rating,
                birth_date.isoformat() if birth_date else None,
                contract_salary,
                contract_years_remaining,
                trade_value,
                trade_value_total,
            )
        )
        return cursor.lastrowid

    def get_roster(self, campaign: Campaign, team_id: int) -> List[RosterEntry]:
        """
        Get a team's roster.

        Ages are computed against the campaign's simulated date.

        Returns:
            List of RosterEntry (empty if the team has no players)
        """
        rows = self.db.query_all(
            "SELECT * FROM players WHERE campaign_id = ? AND team_id = ? ORDER BY id",
            (campaign.id, team_id)
        )
        return [self._row_to_entry(row, campaign.current_date) for row in rows]

    @staticmethod
    def _row_to_entry(row, on_date: date) -> RosterEntry:
        years_remaining = row['contract_years_remaining']
        return RosterEntry(
            player_id=row['id'],
            first_name=row['first_name'] or "",
            last_name=row['last_name'] or "",
            position=row['position'] or "",
            secondary_position=row['secondary_position'] or None,
            overall_rating=row['overall_rating'],
            age=age_from_birth_date(row['birth_date'], on_date),
            contract_salary=float(row['contract_salary'] or 0.0),
            contract_years_remaining=(
                years_remaining if years_remaining is not None
                else RosterDefaults.CONTRACT_YEARS_REMAINING
            ),
            trade_value=row['trade_value'],
            trade_value_total=row['trade_value_total'],
        )
