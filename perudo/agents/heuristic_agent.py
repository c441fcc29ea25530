from collections import Counter

from .base import Agent
from . import register_agent
from ..core.actions import Calza, Dudo, Outbid
from ..core.bid import Bid, WILD_FACE, legal_outbids


class HeuristicAgent(Agent):
    """
    Base class for heuristic agents: agents that implement a deterministic strategy.
    Provides utility methods for subclasses which in turn use them to decide on an action.
    Utility methods:
        - get_my_dice(view): Returns the agent's dice as a tuple.
        - get_last_bid(view): Returns the standing bid (Bid or None at round open).
        - get_num_dice(view): Returns the total number of dice in play.
        - best_opening_face(my_dice): Most common non-wild face in the agent's hand.
    """
    def get_my_dice(self, view):
        return tuple(view["my_dice"])

    def get_last_bid(self, view):
        return view["current_bid"]

    def get_num_dice(self, view):
        return view["total_dice"]

    def best_opening_face(self, my_dice):
        counts = Counter(d for d in my_dice if d != WILD_FACE)
        if not counts:
            return 2
        # highest count first, higher face on ties
        return max(counts, key=lambda f: (counts[f], f))


@register_agent("expected")
class ExpectedValueAgent(HeuristicAgent):
    """
    ExpectedValueAgent:
    - Estimates how many dice of a face are in play: its own matches plus the mean over hidden dice.
    - Calls dudo when the standing bid exceeds that estimate by more than `doubt_margin`.
    - Calls calza when the standing bid is within `calza_margin` of the estimate.
    - Otherwise raises with the legal bid that is most plausible, preferring lower counts.
    """
    def __init__(self, doubt_margin=1.0, calza_margin=0.25):
        self.doubt_margin = doubt_margin
        self.calza_margin = calza_margin

    def choose_action(self, view):
        my_dice = self.get_my_dice(view)
        last = self.get_last_bid(view)
        total = self.get_num_dice(view)
        ones_wild = self.ones_wild(view)

        def slack(bid):
            return self.expected_count(my_dice, bid.face, total, ones_wild) - bid.count

        if last is None:
            face = self.best_opening_face(my_dice)
            count = max(1, int(self.expected_count(my_dice, face, total, ones_wild)))
            return Outbid(Bid(count, face))

        if self.dudo_deterministic(my_dice, last, total, ones_wild) or -slack(last) > self.doubt_margin:
            return Dudo()
        if abs(slack(last)) <= self.calza_margin:
            return Calza()

        candidates = list(legal_outbids(last, total))
        if not candidates:
            return Dudo()
        best = max(candidates, key=lambda b: (slack(b), -b.count))
        if -slack(best) > self.doubt_margin:
            return Dudo()
        return Outbid(best)


@register_agent("conservative")
class ConservativeAgent(HeuristicAgent):
    """
    ConservativeAgent:
    - If no bid has been made, opens with a single die of its most common non-wild face.
    - Raises the count by one on the same face while the agent itself holds that many matching dice.
    - Otherwise calls dudo. This agent is risk-averse and never calls calza.
    """
    def choose_action(self, view):
        my_dice = self.get_my_dice(view)
        last = self.get_last_bid(view)
        ones_wild = self.ones_wild(view)
        if last is None:
            return Outbid(Bid(1, self.best_opening_face(my_dice)))
        raise_bid = Bid(last.count + 1, last.face)
        if raise_bid.outbids(last) and self.my_count_of_face(my_dice, last.face, ones_wild) >= raise_bid.count:
            return Outbid(raise_bid)
        return Dudo()
