"""
bid.py
Defines the Bid model for Perudo and the rules deciding whether a bid outbids the standing one.
Related modules:
- actions.py: Uses Bid in Outbid.
- engine.py: Checks every proposed bid against the standing bid.
- agents: Enumerate legal raises with legal_outbids.
"""

import math
from dataclasses import dataclass
from typing import Iterator, Tuple

FACES: Tuple[int, ...] = (1, 2, 3, 4, 5, 6)
WILD_FACE = 1


@dataclass(frozen=True)
class Bid:
    """
    A claim that at least `count` dice showing `face` are in play across all hands.
    Bid(0, 0) is the sentinel standing bid of a round in which nobody has bid yet.
    Args:
        count (int): Number of dice claimed.
        face (int): Face value claimed (1-6).
    """
    count: int
    face: int

    @property
    def is_opening(self) -> bool:
        """True for the no-bid-yet sentinel."""
        return self.count == 0 and self.face == 0

    def is_well_formed(self) -> bool:
        return (isinstance(self.count, int) and isinstance(self.face, int)
                and not isinstance(self.count, bool) and not isinstance(self.face, bool)
                and self.face in FACES and self.count >= 1)

    def outbids(self, standing: 'Bid') -> bool:
        """
        Checks whether this bid may replace `standing`.
        Rules, in priority order:
          1. face must be 1-6 and count at least 1;
          2. a round may not open on the wild face;
          3. repeating the standing bid is not a raise;
          4. wild to wild needs a strictly higher count;
          5. switching onto the wild face needs at least half the count, rounded up;
          6. switching off the wild face needs more than double the count;
          7. otherwise one of count/face must go up and the other must not go down.
        Args:
            standing (Bid): The standing bid (Bid(0, 0) when the round is open).
        Returns:
            bool: True if the bid is legal.
        """
        if not self.is_well_formed():
            return False
        if standing.is_opening and self.face == WILD_FACE:
            return False
        if self == standing:
            return False
        if standing.face == WILD_FACE and self.face == WILD_FACE:
            return self.count > standing.count
        if self.face == WILD_FACE:
            return self.count >= math.ceil(standing.count / 2)
        if standing.face == WILD_FACE:
            return self.count >= standing.count * 2 + 1
        return ((self.count >= standing.count and self.face > standing.face)
                or (self.count > standing.count and self.face >= standing.face))

    def __str__(self) -> str:
        if self.is_opening:
            return "no bid"
        return f"{self.count} x {self.face}"


OPENING_BID = Bid(0, 0)


def legal_outbids(standing: Bid, max_count: int) -> Iterator[Bid]:
    """
    Yield every legal raise over `standing` whose count does not exceed `max_count`,
    ordered by count then face.
    """
    for count in range(1, max_count + 1):
        for face in FACES:
            bid = Bid(count, face)
            if bid.outbids(standing):
                yield bid
