"""
News API - League announcements (trade proposals, deadline notices).
"""

from datetime import date
from typing import List, Optional

from .connection import TradeDatabase
from transactions.models import NewsEvent


class NewsAPI:
    """API for news event database operations."""

    def __init__(self, db: TradeDatabase):
        self.db = db

    def create_event(self, event: NewsEvent) -> int:
        """
        Persist an announcement.

        Returns:
            New event id
        """
        cursor = self.db.execute(
            """INSERT INTO news_events (campaign_id, team_id, event_type, headline, body, game_date)
               VALUES (?, ?, ?, ?, ?, ?)""",
            (
                event.campaign_id,
                event.team_id,
                event.event_type,
                event.headline,
                event.body,
                event.game_date.isoformat(),
            )
        )
        event.id = cursor.lastrowid
        return event.id

    def get_events(self, campaign_id: int, event_type: Optional[str] = None) -> List[NewsEvent]:
        """Announcements for a campaign in creation order."""
        if event_type:
            rows = self.db.query_all(
                """SELECT * FROM news_events
                   WHERE campaign_id = ? AND event_type = ?
                   ORDER BY id""",
                (campaign_id, event_type)
            )
        else:
            rows = self.db.query_all(
                "SELECT * FROM news_events WHERE campaign_id = ? ORDER BY id",
                (campaign_id,)
            )
        return [
            NewsEvent(
                id=row['id'],
                campaign_id=row['campaign_id'],
                team_id=row['team_id'],
                event_type=row['event_type'],
                headline=row['headline'],
                body=row['body'],
                game_date=date.fromisoformat(row['game_date']),
            )
            for row in rows
        ]
