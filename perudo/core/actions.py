"""
actions.py
Defines the base Action type and the concrete moves a Perudo player can submit.
Related modules:
- bid.py: Defines the Bid carried by Outbid.
- engine.py: Consumes Action objects in play_move.
"""

from dataclasses import dataclass
from .bid import Bid


class Action:
    """
    Base class for all moves. Subclassed by Outbid, Calza and Dudo.
    """
    kind = "action"


@dataclass(frozen=True)
class Outbid(Action):
    """
    Raise the standing bid.
    Args:
        bid (Bid): The new bid.
    """
    bid: Bid
    kind = "outbid"

    @classmethod
    def of(cls, count: int, face: int) -> 'Outbid':
        return cls(Bid(count, face))


@dataclass(frozen=True)
class Calza(Action):
    """Claim the standing bid is exactly right."""
    kind = "calza"


@dataclass(frozen=True)
class Dudo(Action):
    """Claim the standing bid overstates the dice in play."""
    kind = "dudo"
