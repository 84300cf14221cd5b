"""
Draft Pick Service

Values and orders tradeable draft picks, and maintains each team's rolling
five-year pick inventory.

Draft Order Rules:
1. Teams are ordered worst to best by wins (ascending)
2. Equal wins: more losses picks earlier
3. Round 2 uses the same order as round 1
4. Before any standings exist the order is undetermined; a shuffled
   placeholder is produced but never used to number picks
"""

import logging
import random
from dataclasses import dataclass
from typing import List, Optional, Tuple

from database.connection import TradeDatabase
from database.draft_pick_api import DraftPickAPI
from database.standings_api import StandingsAPI
from database.team_api import TeamAPI
from transactions.interfaces import RandomSource
from transactions.models import Campaign, DraftPick, PickView, TeamStanding
from transactions.transaction_constants import DraftPickGeneration, PickValueCharts


# Configure module logger
logger = logging.getLogger(__name__)


def calculate_pick_value(round_number: int, position: Optional[int], years_out: int) -> float:
    """
    Trade value of a pick.

    Args:
        round_number: 1 or 2 (anything else uses the round 2 chart)
        position: Finalized or projected position; None means mid-round (15)
        years_out: Draft year minus current game year

    Returns:
        Value rounded to 2 decimals, discounted 10% per future year

    Examples:
        >>> calculate_pick_value(1, 1, 0)
        30.0
        >>> calculate_pick_value(1, 999, 0)
        1.2
        >>> calculate_pick_value(1, 1, 2)
        24.3
    """
    if position is None:
        position = PickValueCharts.DEFAULT_POSITION
    position = min(PickValueCharts.MAX_POSITION, max(PickValueCharts.MIN_POSITION, int(position)))

    if round_number == 1:
        value = PickValueCharts.FIRST_ROUND.get(position, PickValueCharts.FIRST_ROUND_DEFAULT)
    else:
        value = PickValueCharts.SECOND_ROUND.get(position, PickValueCharts.SECOND_ROUND_DEFAULT)

    # Past draft years are never inflated
    value *= PickValueCharts.YEARLY_DISCOUNT ** max(0, years_out)

    return round(value, 2)


def order_for_draft(standings: List[TeamStanding]) -> List[TeamStanding]:
    """
    Order standings worst-first for the draft.

    Sort is stable: ascending wins, then descending losses; full ties keep
    their input order.
    """
    return sorted(standings, key=lambda s: (s.wins, -s.losses))


@dataclass
class DraftOrder:
    """Draft order plus whether it reflects real standings."""
    standings: List[TeamStanding]
    determined: bool

    def position_of(self, team_id: int) -> Optional[int]:
        for index, standing in enumerate(self.standings, start=1):
            if standing.team_id == team_id:
                return index
        return None


class DraftPickService:
    """
    Draft pick inventory and valuation for a campaign.

    Responsibilities:
    - Generate the initial five years of picks and roll a new year forward
    - Order teams from standings and write pick numbers once per draft year
    - Project pick positions and annotate owned picks with trade values
    """

    def __init__(
        self,
        db: TradeDatabase,
        random_source: Optional[RandomSource] = None,
        seed: Optional[int] = None
    ):
        """
        Initialize draft pick service.

        Args:
            db: TradeDatabase instance
            random_source: Source for the placeholder shuffle; wins over seed
            seed: Seeds the placeholder shuffle per campaign and simulated date
        """
        self.db = db
        self.random_source = random_source
        self.seed = seed
        self.pick_api = DraftPickAPI(db)
        self.team_api = TeamAPI(db)
        self.standings_api = StandingsAPI(db)

    # ------------------------------------------------------------------
    # Ordering
    # ------------------------------------------------------------------

    def get_standings_sorted(self, campaign: Campaign) -> DraftOrder:
        """
        Current season standings in draft order.

        Returns:
            DraftOrder; determined is False when the season has no standings
            and the order is a shuffled list of 0-0 records
        """
        standings: List[TeamStanding] = []
        if campaign.season_year is not None:
            standings = self.standings_api.get_standings(campaign.id, campaign.season_year)

        if standings:
            return DraftOrder(standings=order_for_draft(standings), determined=True)

        placeholder = [
            TeamStanding(team_id=team.id, wins=0, losses=0)
            for team in self.team_api.get_teams(campaign.id)
        ]
        rng = self._shuffle_random(campaign)
        shuffled = sorted(placeholder, key=lambda _: rng.random())
        return DraftOrder(standings=shuffled, determined=False)

    def _shuffle_random(self, campaign: Campaign) -> RandomSource:
        if self.random_source is not None:
            return self.random_source
        if self.seed is not None:
            return random.Random(f"{self.seed}:{campaign.id}:{campaign.current_date.isoformat()}")
        return random.Random()

    def project_pick_position(self, campaign: Campaign, team_id: int,
                              order: Optional[DraftOrder] = None) -> int:
        """
        Where team_id would pick if the draft were held now.

        Returns:
            1-based position; 15 when the team is not ranked or no real order exists
        """
        if order is None:
            order = self.get_standings_sorted(campaign)

        if not order.determined:
            return PickValueCharts.DEFAULT_POSITION

        position = order.position_of(team_id)
        return position if position is not None else PickValueCharts.DEFAULT_POSITION

    def assign_pick_numbers(self, campaign: Campaign, draft_year: int) -> int:
        """
        Number the round 1 and round 2 picks of draft_year from standings.

        Both rounds of a team get the same number. Picks already numbered are
        left alone.

        Returns:
            Number of picks updated
        """
        order = self.get_standings_sorted(campaign)
        if not order.determined:
            logger.warning(
                f"No standings for campaign {campaign.id}; "
                f"pick numbers for {draft_year} left unassigned"
            )
            return 0

        updated = 0
        for pick_number, standing in enumerate(order.standings, start=1):
            for round_number in DraftPickGeneration.ROUNDS:
                updated += self.pick_api.assign_pick_number(
                    campaign.id, standing.team_id, draft_year, round_number, pick_number
                )

        logger.info(f"Assigned {updated} pick numbers for {draft_year} draft (campaign {campaign.id})")
        return updated

    # ------------------------------------------------------------------
    # Inventory
    # ------------------------------------------------------------------

    def generate_initial_picks(self, campaign: Campaign) -> int:
        """
        Create picks for game_year through game_year + 4 for every team.

        Returns:
            Number of picks created
        """
        teams = self.team_api.get_teams(campaign.id)
        created = 0

        for year_offset in range(DraftPickGeneration.YEARS_AHEAD):
            draft_year = campaign.game_year + year_offset
            for team in teams:
                created += self._create_team_year(campaign.id, team.id, draft_year)

        logger.info(f"Generated {created} draft picks for campaign {campaign.id}")
        return created

    def roll_forward_picks(self, campaign: Campaign) -> int:
        """
        Add the game_year + 5 draft for teams that do not have it yet.

        Returns:
            Number of picks created
        """
        new_year = campaign.game_year + DraftPickGeneration.YEARS_AHEAD
        created = 0

        for team in self.team_api.get_teams(campaign.id):
            if self.pick_api.pick_exists(campaign.id, team.id, new_year):
                continue
            created += self._create_team_year(campaign.id, team.id, new_year)

        return created

    def _create_team_year(self, campaign_id: int, team_id: int, year: int) -> int:
        return self.pick_api.create_picks([
            DraftPick(
                campaign_id=campaign_id,
                original_team_id=team_id,
                current_owner_id=team_id,
                year=year,
                round=round_number,
            )
            for round_number in DraftPickGeneration.ROUNDS
        ])

    def get_team_picks(self, campaign_id: int, team_id: int) -> List[DraftPick]:
        """Unused picks the team currently owns, by year, round, pick number."""
        return self.pick_api.get_owned_picks(campaign_id, team_id)

    def get_tradeable_picks(self, campaign: Campaign, team_id: int) -> List[PickView]:
        """
        Value-annotated picks the team can offer, by year then round.

        Finalized pick numbers win over projections.
        """
        picks = self.pick_api.get_owned_picks(campaign.id, team_id)
        if not picks:
            return []

        order = self.get_standings_sorted(campaign)
        views = []

        for pick, team_name in self._with_team_names(picks):
            position = pick.pick_number
            if position is None:
                position = self.project_pick_position(campaign, pick.original_team_id, order)

            views.append(PickView(
                id=pick.id,
                year=pick.year,
                round=pick.round,
                pick_number=pick.pick_number,
                projected_position=position,
                original_team_id=pick.original_team_id,
                original_team_abbreviation=pick.original_team_abbreviation,
                original_team_name=team_name,
                current_owner_id=pick.current_owner_id,
                is_traded=pick.is_traded,
                display_name=pick.display_name,
                trade_value=calculate_pick_value(pick.round, position, pick.year - campaign.game_year),
            ))

        return views

    def _with_team_names(self, picks: List[DraftPick]) -> List[Tuple[DraftPick, Optional[str]]]:
        names = {}
        result = []
        for pick in picks:
            if pick.original_team_id not in names:
                team = self.team_api.get_team(pick.original_team_id)
                names[pick.original_team_id] = team.name if team else None
            result.append((pick, names[pick.original_team_id]))
        return result
