"""
Trade Deadline Manager

Calendar gate and lifecycle sweeps for AI trade proposals.

Milestones (2025 season shown):
- Deadline: January 13 of the following calendar year (2026-01-13)
- Warning window: from 16 days before the deadline (2025-12-28)
- Deadline month: 0-30 days before the deadline, inclusive
- Post-deadline: any date after the deadline; no new proposals

The approaching and passed announcements are one-shot, gated by flags in the
campaign settings map.
"""

import logging
from datetime import date, timedelta

from database.campaign_api import CampaignAPI
from database.connection import TradeDatabase
from database.news_api import NewsAPI
from database.trade_proposal_api import TradeProposalAPI
from transactions import trade_announcements
from transactions.models import Campaign, NewsEvent, ProposalStatus
from transactions.transaction_constants import (
    CampaignSettingsKeys,
    TradeDeadlineDates,
    TransactionProbability,
)


def get_trade_deadline(season_year: int) -> date:
    """
    Trade deadline for a season.

    Examples:
        >>> get_trade_deadline(2025)
        datetime.date(2026, 1, 13)
    """
    return date(
        season_year + 1,
        TradeDeadlineDates.TRADE_DEADLINE_MONTH,
        TradeDeadlineDates.TRADE_DEADLINE_DAY
    )


def campaign_deadline(campaign: Campaign) -> date:
    """Deadline for the campaign's season (2025 when no season is active)."""
    return get_trade_deadline(campaign.effective_season_year)


def is_before_deadline(campaign: Campaign) -> bool:
    """True through the deadline day itself."""
    return campaign.current_date <= campaign_deadline(campaign)


def days_until_deadline(campaign: Campaign) -> int:
    """Signed day count; negative once the deadline has passed."""
    return (campaign_deadline(campaign) - campaign.current_date).days


def is_deadline_month(campaign: Campaign) -> bool:
    return 0 <= days_until_deadline(campaign) <= TransactionProbability.DEADLINE_MONTH_DAYS


class TradeDeadlineManager:
    """
    Runs the expiration sweep and the deadline announcements for a campaign.

    Both operations only move proposals out of pending, so re-running them
    on the same date changes nothing.
    """

    def __init__(self, db: TradeDatabase):
        self.db = db
        self.campaign_api = CampaignAPI(db)
        self.proposal_api = TradeProposalAPI(db)
        self.news_api = NewsAPI(db)
        self.logger = logging.getLogger("TradeDeadlineManager")

    def expire_stale_proposals(self, campaign: Campaign) -> int:
        """
        Expire pending proposals whose expires_at is before the current date.

        Returns:
            Number of proposals expired
        """
        expired = self.proposal_api.update_status_where(
            campaign.id,
            ProposalStatus.EXPIRED,
            current_status=ProposalStatus.PENDING,
            expires_before=campaign.current_date
        )
        if expired:
            self.logger.info(f"Expired {expired} stale trade proposal(s) for campaign {campaign.id}")
        return expired

    def process_trade_deadline_events(self, campaign: Campaign) -> None:
        """
        Fire the approaching and passed announcements when due.

        A campaign that jumps straight past the deadline gets both, in order.
        The campaign's settings map is updated in place and persisted together
        with the announcement; a failed write leaves neither behind.
        """
        deadline = campaign_deadline(campaign)
        current_date = campaign.current_date
        settings = dict(campaign.settings or {})

        warning_date = deadline - timedelta(days=TradeDeadlineDates.WARNING_DAYS_BEFORE)
        if current_date >= warning_date and not settings.get(CampaignSettingsKeys.TRADE_DEADLINE_WARNED):
            days_left = abs((deadline - current_date).days)
            settings[CampaignSettingsKeys.TRADE_DEADLINE_WARNED] = True
            with self.db.transaction():
                self.news_api.create_event(NewsEvent(
                    campaign_id=campaign.id,
                    event_type=trade_announcements.NEWS_EVENT_TYPE_TRADE,
                    headline=trade_announcements.DEADLINE_APPROACHING_HEADLINE,
                    body=trade_announcements.deadline_approaching_body(days_left),
                    game_date=current_date,
                ))
                self._save_settings(campaign, settings)
            self.logger.info(f"Trade deadline approaching for campaign {campaign.id}: {days_left} days left")

        if current_date > deadline and not settings.get(CampaignSettingsKeys.TRADE_DEADLINE_PASSED):
            settings[CampaignSettingsKeys.TRADE_DEADLINE_PASSED] = True
            with self.db.transaction():
                self.news_api.create_event(NewsEvent(
                    campaign_id=campaign.id,
                    event_type=trade_announcements.NEWS_EVENT_TYPE_TRADE,
                    headline=trade_announcements.DEADLINE_PASSED_HEADLINE,
                    body=trade_announcements.DEADLINE_PASSED_BODY,
                    game_date=current_date,
                ))
                expired = self.proposal_api.update_status_where(
                    campaign.id,
                    ProposalStatus.EXPIRED,
                    current_status=ProposalStatus.PENDING
                )
                self._save_settings(campaign, settings)
            self.logger.info(
                f"Trade deadline passed for campaign {campaign.id}; expired {expired} pending proposal(s)"
            )

    def _save_settings(self, campaign: Campaign, settings: dict) -> None:
        self.campaign_api.update_settings(campaign.id, settings)
        campaign.settings = dict(settings)
