from abc import ABC, abstractmethod
from typing import Any, Optional

from ..core.bid import Bid, FACES, WILD_FACE


class Agent(ABC):
    """
    Abstract base class for all Perudo agents.
    Agents must implement choose_action(view), which receives a player-specific view of the game state and returns an Action.
    Common agent utilities can be added here for reuse.
    """

    @abstractmethod
    def choose_action(self, view: Any):
        """
        Given a player-specific view, return the next Action to take.
        Args:
            view (dict): Player view from GameEngine.get_view (keys 'my_dice', 'current_bid', 'total_dice', 'config', ...).
        Returns:
            Action: The action to take (Outbid, Calza or Dudo).
        """
        raise NotImplementedError

    def my_count_of_face(self, my_dice, face: int, ones_wild: bool = False) -> int:
        """
        Count how many dice of a given face the agent holds.
        Args:
            my_dice (iterable): The agent's private dice.
            face (int): The face value to count.
            ones_wild (bool): If True, ones also count for non-one faces.
        Returns:
            int: Number of matching dice.
        """
        return sum(1 for d in my_dice if d == face or (ones_wild and face != WILD_FACE and d == WILD_FACE))

    def expected_count(self, my_dice, face: int, total_dice: int, ones_wild: bool = False) -> float:
        """Expected number of `face` dice in play: own matches plus the mean over the hidden dice."""
        hidden = max(0, total_dice - len(my_dice))
        p = 2 / len(FACES) if ones_wild and face != WILD_FACE else 1 / len(FACES)
        return self.my_count_of_face(my_dice, face, ones_wild) + hidden * p

    def dudo_deterministic(self, my_dice, standing: Optional[Bid], total_dice: int, ones_wild: bool = False) -> bool:
        """
        True if the standing bid cannot be true even if every hidden die matches it.
        """
        if standing is None:
            return False
        hidden = max(0, total_dice - len(my_dice))
        return self.my_count_of_face(my_dice, standing.face, ones_wild) + hidden < standing.count

    @staticmethod
    def ones_wild(view) -> bool:
        return getattr(view.get("config"), "ones_wild", False)
