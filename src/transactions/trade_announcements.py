"""
Trade Announcements

Canned headline/body text for trade news and proposal reasons.
"""

from typing import Optional

from transactions.models import TeamDirection


NEWS_EVENT_TYPE_TRADE = "trade"

DEADLINE_APPROACHING_HEADLINE = "Trade deadline approaching"
DEADLINE_APPROACHING_BODY = (
    "The January 13th trade deadline is {days} days away. "
    "Teams are expected to increase activity."
)

DEADLINE_PASSED_HEADLINE = "Trade deadline has passed"
DEADLINE_PASSED_BODY = (
    "The trade deadline has officially passed. "
    "No more trades can be made this season."
)

PROPOSAL_HEADLINE = "The {city} {name} have proposed a trade"
PROPOSAL_BODY = (
    "The {name} are interested in acquiring {target} "
    "and have sent a formal trade proposal."
)

REASON_TEMPLATES = {
    TeamDirection.TITLE_CONTENDER: "We believe {player} is the missing piece for a championship run.",
    TeamDirection.WIN_NOW: "Adding {player} would give us the boost we need to compete this season.",
    TeamDirection.ASCENDING: "{player} fits our timeline perfectly and would help accelerate our build.",
    TeamDirection.REBUILDING: "We think {player} has the kind of upside we're looking for in our rebuild.",
}
DEFAULT_REASON_TEMPLATE = "We see {player} as a great fit for our team going forward."


def proposal_reason(direction: Optional[TeamDirection], player_name: str) -> str:
    """Reason text attached to a proposal, keyed by the proposer's direction."""
    template = REASON_TEMPLATES.get(direction, DEFAULT_REASON_TEMPLATE)
    return template.format(player=player_name)


def proposal_headline(city: str, name: str) -> str:
    return PROPOSAL_HEADLINE.format(city=city, name=name)


def proposal_body(name: str, target_name: str) -> str:
    return PROPOSAL_BODY.format(name=name, target=target_name)


def deadline_approaching_body(days: int) -> str:
    return DEADLINE_APPROACHING_BODY.format(days=days)
