"""
hand.py
Defines the Hand model and the dealers that generate dice for it.
The engine never rolls dice itself: it only asks a dealer to deal, reduce or grow a hand.
Related modules:
- engine.py: Calls deal/reduce/grow on the configured dealer.
- state.py: Stores one Hand per remaining player.
"""

import itertools
import random
from dataclasses import dataclass
from typing import Iterable, List, Tuple

from .bid import FACES


@dataclass(frozen=True)
class Hand:
    """
    A player's concealed dice.
    Fields:
        dice (tuple[int]): Face values, one per remaining die.
        remaining_dice (int): Number of dice the player still holds.
    """
    dice: Tuple[int, ...] = ()
    remaining_dice: int = 0


def roll_die(rng: random.Random) -> int:
    """Roll a single six-sided die using the provided random number generator."""
    return rng.randint(1, 6)


def roll_n(n: int, rng: random.Random) -> List[int]:
    """Roll n six-sided dice using the provided RNG."""
    return [roll_die(rng) for _ in range(n)]


class DiceDealer:
    """
    Default Hand collaborator. Every operation returns a new Hand with freshly rolled dice.
    """
    def __init__(self, rng: random.Random = None):
        self.rng = rng or random.Random()

    def roll(self, n: int) -> Tuple[int, ...]:
        return tuple(roll_n(n, self.rng))

    def deal(self, size: int) -> Hand:
        """
        Deal a fresh hand.
        Args:
            size (int): Number of dice in the new hand.
        Returns:
            Hand: A hand holding `size` freshly rolled dice.
        Raises:
            ValueError: If size is negative.
        """
        if size < 0:
            raise ValueError("hand size must not be negative")
        return Hand(dice=self.roll(size), remaining_dice=size)

    def reduce(self, hand: Hand) -> Hand:
        """Take one die away from `hand` and re-roll. An empty hand stays empty."""
        return self.deal(max(0, hand.remaining_dice - 1))

    def grow(self, hand: Hand) -> Hand:
        """Give `hand` one more die and re-roll."""
        return self.deal(hand.remaining_dice + 1)


class ScriptedDealer(DiceDealer):
    """
    Dealer that cycles through a fixed sequence of faces instead of rolling.
    Useful for replaying a recorded game or for tests that need known dice.
    """
    def __init__(self, faces: Iterable[int]):
        faces = tuple(faces)
        if not faces:
            raise ValueError("face script must not be empty")
        if any(f not in FACES for f in faces):
            raise ValueError("face script may only contain faces 1-6")
        super().__init__(rng=None)
        self._faces = itertools.cycle(faces)

    def roll(self, n: int) -> Tuple[int, ...]:
        return tuple(next(self._faces) for _ in range(n))
