"""
Collaborator protocols consumed by the trade proposal system.

The evaluation service, roster lookup and pick inventory live outside this
package; anything satisfying these protocols can be plugged into
TransactionAIManager.
"""

from typing import Any, List, Protocol

from transactions.models import (
    Campaign,
    PickView,
    RosterEntry,
    Team,
    TeamDirection,
    TradeEvaluation,
    TradeOffer,
)


class TradeEvaluationService(Protocol):
    """Opaque trade evaluator and direction classifier."""

    def build_context(self, campaign: Campaign, team: Team) -> Any:
        """Return a context blob reused for one team within one cycle."""
        ...

    def analyze_direction(self, team: Team, context: Any) -> TeamDirection:
        """Classify the team's competitive direction (enum or its string value)."""
        ...

    def evaluate(self, offer: TradeOffer, perspective_team: Team, campaign: Campaign) -> TradeEvaluation:
        """Judge the offer from perspective_team's side (give vs receive)."""
        ...


class RosterService(Protocol):
    """Roster lookup."""

    def get_roster(self, campaign: Campaign, team_id: int) -> List[RosterEntry]:
        """Players on the team; an empty list means nothing to do for this team."""
        ...


class PickService(Protocol):
    """Tradeable pick inventory."""

    def get_tradeable_picks(self, campaign: Campaign, team_id: int) -> List[PickView]:
        """Value-annotated picks owned by the team, ordered by year then round."""
        ...


class RandomSource(Protocol):
    """Single uniform draw in [0, 1). random.Random satisfies this."""

    def random(self) -> float:
        ...
