"""
Trade Engine Data Models

Defines data structures for roster entries, team needs, trade assets,
trade offers, persisted trade proposals, draft picks, and campaign state.
"""

from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple, Union


class TeamDirection(Enum):
    """Competitive posture of a team, supplied by the evaluation service."""
    TITLE_CONTENDER = "title_contender"
    WIN_NOW = "win_now"
    ASCENDING = "ascending"
    REBUILDING = "rebuilding"

    @staticmethod
    def normalize(direction) -> 'TeamDirection':
        """
        Convert string or enum to TeamDirection.

        Raises:
            ValueError: If the value is not a known direction
        """
        if isinstance(direction, TeamDirection):
            return direction
        if isinstance(direction, str):
            return TeamDirection(direction.strip().lower())
        raise ValueError(f"Unknown team direction: {direction!r}")

    @property
    def is_contending(self) -> bool:
        """Title contenders and win-now teams share the aggressive path."""
        return self in (TeamDirection.TITLE_CONTENDER, TeamDirection.WIN_NOW)


@dataclass(frozen=True)
class RosterEntry:
    """
    Read-only projection of a rostered player.

    Optional numeric fields stay None when the source row lacks them;
    use utils.roster_field_extractors to read them with defaults applied.
    """

    player_id: int
    first_name: str = ""
    last_name: str = ""
    position: str = ""
    secondary_position: Optional[str] = None
    overall_rating: Optional[int] = None
    age: Optional[int] = None
    contract_salary: float = 0.0
    contract_years_remaining: int = 1
    trade_value: Optional[float] = None
    trade_value_total: Optional[float] = None

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    def plays(self, position: str) -> bool:
        """True if primary or secondary position matches."""
        return self.position == position or self.secondary_position == position

    def __str__(self) -> str:
        name = self.full_name or f"Player #{self.player_id}"
        rating = self.overall_rating if self.overall_rating is not None else "?"
        return f"{name} ({self.position or 'N/A'}, {rating} OVR)"


# ---------------------------------------------------------------------------
# Needs
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class PositionNeed:
    """Upgrade wanted at one position, at or above min_rating."""
    position: str
    min_rating: int

    def __str__(self) -> str:
        return f"{self.position} upgrade ({self.min_rating}+ OVR)"


@dataclass(frozen=True)
class StarNeed:
    """Any star-caliber player regardless of position."""
    min_rating: int = 80

    def __str__(self) -> str:
        return f"Star ({self.min_rating}+ OVR)"


@dataclass(frozen=True)
class YoungNeed:
    """Young talent at or below max_age."""
    max_age: int = 24

    def __str__(self) -> str:
        return f"Young talent (age {self.max_age} or younger)"


Need = Union[PositionNeed, StarNeed, YoungNeed]


# ---------------------------------------------------------------------------
# Assets and offers
# ---------------------------------------------------------------------------

class AssetType(Enum):
    """Type of trade asset"""
    PLAYER = "player"
    DRAFT_PICK = "pick"


@dataclass(frozen=True)
class AssetReference:
    """Reference to a player or draft pick inside an offer."""

    asset_type: AssetType
    asset_id: int

    @classmethod
    def player(cls, player_id: int) -> 'AssetReference':
        return cls(AssetType.PLAYER, player_id)

    @classmethod
    def pick(cls, pick_id: int) -> 'AssetReference':
        return cls(AssetType.DRAFT_PICK, pick_id)

    @property
    def is_player(self) -> bool:
        return self.asset_type is AssetType.PLAYER

    def to_dict(self) -> Dict[str, Any]:
        """Persisted shape: {"type": "player", "playerId": 7} / {"type": "pick", "pickId": 3}."""
        if self.is_player:
            return {'type': AssetType.PLAYER.value, 'playerId': self.asset_id}
        return {'type': AssetType.DRAFT_PICK.value, 'pickId': self.asset_id}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'AssetReference':
        """
        Parse persisted asset dict.

        Raises:
            ValueError: If the asset type is unknown
        """
        asset_type = data.get('type')
        if asset_type == AssetType.PLAYER.value:
            return cls.player(int(data['playerId']))
        if asset_type == AssetType.DRAFT_PICK.value:
            return cls.pick(int(data['pickId']))
        raise ValueError(f"Unknown asset type: {asset_type!r}")


def assets_to_payload(give: List[AssetReference], receive: List[AssetReference]) -> Dict[str, Any]:
    """Build the persisted offer payload from the proposing team's perspective."""
    return {
        'aiGives': [asset.to_dict() for asset in give],
        'aiReceives': [asset.to_dict() for asset in receive],
    }


@dataclass(frozen=True)
class TradeOffer:
    """
    Assembled offer from the proposing team's perspective, before persistence.

    give: assets the proposing team sends away
    receive: assets the proposing team asks for
    """

    give: Tuple[AssetReference, ...]
    receive: Tuple[AssetReference, ...]
    reason: str = ""
    target: Optional[RosterEntry] = None

    def to_payload(self) -> Dict[str, Any]:
        return assets_to_payload(list(self.give), list(self.receive))


class TradeDecisionType(Enum):
    """Evaluator verdict on a trade"""
    ACCEPT = "accept"
    REJECT = "reject"
    COUNTER = "counter"

    @staticmethod
    def normalize(decision) -> 'TradeDecisionType':
        if isinstance(decision, TradeDecisionType):
            return decision
        return TradeDecisionType(str(decision).strip().lower())


@dataclass
class TradeEvaluation:
    """Result returned by the evaluation service."""
    decision: TradeDecisionType
    reason: Optional[str] = None
    details: Dict[str, Any] = field(default_factory=dict)

    def is_accepted(self) -> bool:
        return self.decision is TradeDecisionType.ACCEPT


# ---------------------------------------------------------------------------
# Persisted proposals
# ---------------------------------------------------------------------------

class ProposalStatus(Enum):
    """Lifecycle status of an AI trade proposal."""
    PENDING = "pending"
    ACCEPTED = "accepted"
    REJECTED = "rejected"
    EXPIRED = "expired"

    @staticmethod
    def normalize(status) -> 'ProposalStatus':
        """
        Convert string or enum to ProposalStatus.

        Raises:
            ValueError: If the value is not a known status
        """
        if isinstance(status, ProposalStatus):
            return status
        return ProposalStatus(str(status).strip().lower())


@dataclass
class TradeProposal:
    """AI-to-user trade proposal record."""

    campaign_id: int
    proposing_team_id: int
    give: List[AssetReference]
    receive: List[AssetReference]
    reason: str
    created_at: date
    expires_at: date
    status: ProposalStatus = ProposalStatus.PENDING
    id: Optional[int] = None

    def __post_init__(self):
        self.status = ProposalStatus.normalize(self.status)
        if self.expires_at < self.created_at:
            raise ValueError(
                f"expires_at ({self.expires_at}) precedes created_at ({self.created_at})"
            )

    def is_pending(self) -> bool:
        return self.status is ProposalStatus.PENDING

    def is_expired(self, on_date: date) -> bool:
        """Expired by status, or by its expiry date already lying in the past."""
        return self.status is ProposalStatus.EXPIRED or self.expires_at < on_date

    def to_payload(self) -> Dict[str, Any]:
        return assets_to_payload(self.give, self.receive)


# ---------------------------------------------------------------------------
# Draft picks
# ---------------------------------------------------------------------------

@dataclass
class DraftPick:
    """Draft pick owned by a team within a campaign."""

    campaign_id: int
    original_team_id: int
    current_owner_id: int
    year: int
    round: int
    pick_number: Optional[int] = None
    player_id: Optional[int] = None
    original_team_abbreviation: Optional[str] = None
    id: Optional[int] = None

    @property
    def is_traded(self) -> bool:
        return self.current_owner_id != self.original_team_id

    @property
    def display_name(self) -> str:
        round_label = "1st" if self.round == 1 else "2nd"
        if self.is_traded:
            team = self.original_team_abbreviation or "UNK"
            return f"{self.year} {round_label} Round ({team})"
        return f"{self.year} {round_label} Round"

    def __str__(self) -> str:
        return self.display_name


@dataclass
class PickView:
    """Value-annotated pick, as offered to trade logic."""

    id: int
    year: int
    round: int
    pick_number: Optional[int]
    projected_position: int
    original_team_id: int
    original_team_abbreviation: Optional[str]
    original_team_name: Optional[str]
    current_owner_id: int
    is_traded: bool
    display_name: str
    trade_value: float


@dataclass
class TeamStanding:
    """Win/loss line used for draft ordering."""
    team_id: int
    wins: int = 0
    losses: int = 0
    conference: Optional[str] = None

    def __str__(self) -> str:
        return f"{self.wins}-{self.losses}"


# ---------------------------------------------------------------------------
# Campaign state
# ---------------------------------------------------------------------------

DEFAULT_SEASON_YEAR = 2025


@dataclass
class Campaign:
    """Campaign calendar state plus the one-shot deadline flags in settings."""

    id: int
    user_team_id: Optional[int]
    game_year: int
    current_date: date
    season_year: Optional[int] = None
    settings: Dict[str, Any] = field(default_factory=dict)
    name: Optional[str] = None

    @property
    def effective_season_year(self) -> int:
        """Season year, falling back to the default when no season is active."""
        return self.season_year if self.season_year is not None else DEFAULT_SEASON_YEAR


@dataclass
class Team:
    """Franchise within a campaign."""
    id: int
    campaign_id: int
    city: str = ""
    name: str = ""
    abbreviation: str = ""

    @property
    def full_name(self) -> str:
        return f"{self.city} {self.name}".strip()


@dataclass
class NewsEvent:
    """League announcement."""
    campaign_id: int
    event_type: str
    headline: str
    body: str
    game_date: date
    team_id: Optional[int] = None
    id: Optional[int] = None
