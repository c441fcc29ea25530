import random

from .base import Agent
from ..core.actions import Calza, Dudo, Outbid
from ..core.bid import Bid, legal_outbids
from . import register_agent


@register_agent("random")
class RandomAgent(Agent):
    """
    A configurable agent that plays Perudo by making random legal raises, calling dudo when the standing bid is impossible,
    and otherwise challenging with fixed probabilities. Parameters control risk and raise style.
    """
    def __init__(self,
                 rng=None,
                 dudo_prob=0.15,
                 calza_prob=0.05,
                 extra_dudo_prob_no_face=0.10,
                 max_dudo_prob=0.9,
                 prob_keep_same_face=0.7,
                 raise_window=3):
        """
        Args:
            rng: Optional random number generator.
            dudo_prob: Base probability to call dudo (float 0-1).
            calza_prob: Probability to call calza when not calling dudo (float 0-1).
            extra_dudo_prob_no_face: Extra dudo probability if the agent holds none of the face in question (float 0-1).
            max_dudo_prob: Maximum probability to call dudo (float 0-1).
            prob_keep_same_face: Probability to raise on the same face when that is legal (float 0-1).
            raise_window: How many of the cheapest legal raises a random raise is drawn from (int >=1).
        """
        self.rng = rng or random.Random()
        self.dudo_prob = dudo_prob
        self.calza_prob = calza_prob
        self.extra_dudo_prob_no_face = extra_dudo_prob_no_face
        self.max_dudo_prob = max_dudo_prob
        self.prob_keep_same_face = prob_keep_same_face
        self.raise_window = raise_window

    def choose_action(self, view):
        """
        Decide the next action based on the current view.
        Opens with a random non-wild bid, calls dudo deterministically if the standing bid is impossible,
        otherwise challenges at random and falls back to a cheap legal raise.
        Args:
            view (dict): Player view from GameEngine.get_view.
        Returns:
            Action: The action to take (Outbid, Calza or Dudo).
        """
        my_dice = tuple(view.get("my_dice", ()))
        last = view.get("current_bid")
        total = max(1, view.get("total_dice", len(my_dice)))
        ones_wild = self.ones_wild(view)

        if last is None:
            q = self.rng.randint(1, max(1, total // 3))
            f = self.rng.randint(2, 6)
            return Outbid(Bid(q, f))

        if self.dudo_deterministic(my_dice, last, total, ones_wild):
            return Dudo()

        dudo_prob = self.dudo_prob
        if self.my_count_of_face(my_dice, last.face, ones_wild) == 0:
            dudo_prob += self.extra_dudo_prob_no_face
        if self.rng.random() < min(self.max_dudo_prob, dudo_prob):
            return Dudo()
        if self.rng.random() < self.calza_prob:
            return Calza()

        candidates = list(legal_outbids(last, total))
        if not candidates:
            return Dudo()
        same_face = [b for b in candidates if b.face == last.face]
        if same_face and self.rng.random() < self.prob_keep_same_face:
            return Outbid(same_face[0])
        return Outbid(self.rng.choice(candidates[:self.raise_window]))


# Example subclasses for different personalities
@register_agent("random_cautious")
class CautiousRandomAgent(RandomAgent):
    """A cautious agent: challenges rarely, always raises on the same face when it can."""
    def __init__(self, rng=None):
        super().__init__(rng=rng, dudo_prob=0.05, calza_prob=0.02, max_dudo_prob=0.5, prob_keep_same_face=1.0, raise_window=1)

@register_agent("random_aggressive")
class AggressiveRandomAgent(RandomAgent):
    """An aggressive agent: challenges often and draws raises from a wider window."""
    def __init__(self, rng=None):
        super().__init__(rng=rng, dudo_prob=0.30, calza_prob=0.10, max_dudo_prob=0.95, prob_keep_same_face=0.4, raise_window=6)
