"""
Draft Pick API - Database operations for tradeable draft picks.

Pick ownership is only read here; trade execution moves picks elsewhere.
"""

from typing import List, Optional

from .connection import TradeDatabase
from transactions.models import DraftPick


_SELECT_WITH_TEAM = """
    SELECT p.*, t.abbreviation AS original_team_abbreviation, t.name AS original_team_name
    FROM draft_picks p
    LEFT JOIN teams t ON t.id = p.original_team_id
"""


class DraftPickAPI:
    """
    API for draft pick database operations.

    Rules:
    - one pick per (campaign, original team, year, round), enforced by UNIQUE
    - pick_number is written once, only while still NULL
    """

    def __init__(self, db: TradeDatabase):
        self.db = db

    def create_pick(self, pick: DraftPick) -> int:
        """
        Insert a pick.

        Returns:
            New pick id
        """
        cursor = self.db.execute(
            """INSERT INTO draft_picks
               (campaign_id, original_team_id, current_owner_id, year, round, pick_number, player_id)
               VALUES (?, ?, ?, ?, ?, ?, ?)""",
            (
                pick.campaign_id,
                pick.original_team_id,
                pick.current_owner_id,
                pick.year,
                pick.round,
                pick.pick_number,
                pick.player_id,
            )
        )
        pick.id = cursor.lastrowid
        return pick.id

    def create_picks(self, picks: List[DraftPick]) -> int:
        """
        Insert many picks at once (ids are not written back).

        Returns:
            Number of picks inserted
        """
        self.db.executemany(
            """INSERT INTO draft_picks
               (campaign_id, original_team_id, current_owner_id, year, round, pick_number, player_id)
               VALUES (?, ?, ?, ?, ?, ?, ?)""",
            [
                (p.campaign_id, p.original_team_id, p.current_owner_id, p.year, p.round,
                 p.pick_number, p.player_id)
                for p in picks
            ]
        )
        return len(picks)

    def pick_exists(self, campaign_id: int, original_team_id: int, year: int) -> bool:
        """True if the team already has any pick in that draft year."""
        row = self.db.query_one(
            """SELECT 1 FROM draft_picks
               WHERE campaign_id = ? AND original_team_id = ? AND year = ?
               LIMIT 1""",
            (campaign_id, original_team_id, year)
        )
        return row is not None

    def get_pick(self, pick_id: int) -> Optional[DraftPick]:
        row = self.db.query_one(_SELECT_WITH_TEAM + " WHERE p.id = ?", (pick_id,))
        return self._row_to_pick(row) if row else None

    def get_owned_picks(self, campaign_id: int, owner_id: int, unused_only: bool = True) -> List[DraftPick]:
        """
        Picks currently controlled by a team.

        Args:
            campaign_id: Campaign isolation key
            owner_id: Current owner team id
            unused_only: Skip picks already spent on a player

        Returns:
            Picks ordered by year, round, then pick number (unassigned last)
        """
        sql = _SELECT_WITH_TEAM + " WHERE p.campaign_id = ? AND p.current_owner_id = ?"
        if unused_only:
            sql += " AND p.player_id IS NULL"
        sql += " ORDER BY p.year, p.round, p.pick_number IS NULL, p.pick_number, p.id"

        rows = self.db.query_all(sql, (campaign_id, owner_id))
        return [self._row_to_pick(row) for row in rows]

    def get_picks_for_year(self, campaign_id: int, year: int) -> List[DraftPick]:
        rows = self.db.query_all(
            _SELECT_WITH_TEAM + " WHERE p.campaign_id = ? AND p.year = ? ORDER BY p.round, p.id",
            (campaign_id, year)
        )
        return [self._row_to_pick(row) for row in rows]

    def assign_pick_number(
        self,
        campaign_id: int,
        original_team_id: int,
        year: int,
        round_number: int,
        pick_number: int
    ) -> int:
        """
        Write the draft position for one (team, year, round) pick.

        Returns:
            Rows updated (0 if the pick is missing or already numbered)
        """
        cursor = self.db.execute(
            """UPDATE draft_picks SET pick_number = ?
               WHERE campaign_id = ? AND original_team_id = ? AND year = ? AND round = ?
                 AND pick_number IS NULL""",
            (pick_number, campaign_id, original_team_id, year, round_number)
        )
        return cursor.rowcount

    @staticmethod
    def _row_to_pick(row) -> DraftPick:
        return DraftPick(
            id=row['id'],
            campaign_id=row['campaign_id'],
            original_team_id=row['original_team_id'],
            current_owner_id=row['current_owner_id'],
            year=row['year'],
            round=row['round'],
            pick_number=row['pick_number'],
            player_id=row['player_id'],
            original_team_abbreviation=row['original_team_abbreviation'],
        )
