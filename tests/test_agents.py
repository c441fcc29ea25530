import random
import unittest
from perudo.agents import AGENT_MAP, create_agent
from perudo.agents.heuristic_agent import ConservativeAgent, ExpectedValueAgent
from perudo.agents.random_agent import RandomAgent
from perudo.core.actions import Calza, Dudo, Outbid
from perudo.core.bid import Bid, OPENING_BID
from perudo.core.engine import GameEngine
from perudo.core.hand import Hand
from perudo.core.state import GameState, PlayerHand


def view_for(hands, player, bid):
    players = tuple(hands)
    state = GameState(
        current_player_id=player,
        all_players=players,
        remaining_players=players,
        current_bid=bid,
        players_hands=tuple(PlayerHand(p, Hand(tuple(d), len(d))) for p, d in hands.items()),
        max_dice=5,
    )
    return GameEngine().get_view(state, player)


class TestRegistry(unittest.TestCase):
    def test_builtin_agents_are_registered(self):
        for name in ("random", "random_cautious", "random_aggressive", "expected", "conservative"):
            self.assertIn(name, AGENT_MAP)

    def test_create_agent_by_name(self):
        self.assertIsInstance(create_agent("Expected"), ExpectedValueAgent)
        with self.assertRaises(ValueError):
            create_agent("nobody")


class TestRandomAgent(unittest.TestCase):
    """
    Guard-rails of the RandomAgent:
      - an impossible standing bid is always challenged with dudo;
      - opening bids are never on the wild face;
      - raises are always legal.
    """

    def test_impossible_bid_calls_dudo(self):
        view = view_for({0: [2, 2], 1: [3, 4, 5]}, 0, Bid(6, 6))
        agent = RandomAgent(rng=random.Random(0))
        for _ in range(20):
            self.assertIsInstance(agent.choose_action(view), Dudo)

    def test_opening_is_legal(self):
        view = view_for({0: [2, 2], 1: [3, 4, 5]}, 0, OPENING_BID)
        agent = RandomAgent(rng=random.Random(0))
        for _ in range(50):
            action = agent.choose_action(view)
            self.assertIsInstance(action, Outbid)
            self.assertTrue(action.bid.outbids(OPENING_BID))

    def test_raises_are_legal_and_capped_at_total(self):
        standing = Bid(2, 4)
        view = view_for({0: [4, 4, 1], 1: [3, 4, 5]}, 0, standing)
        agent = RandomAgent(rng=random.Random(5))
        for _ in range(100):
            action = agent.choose_action(view)
            if isinstance(action, Outbid):
                self.assertTrue(action.bid.outbids(standing))
                self.assertLessEqual(action.bid.count, 6)


class TestHeuristicAgents(unittest.TestCase):
    def test_expected_agent_opens_on_its_best_face(self):
        view = view_for({0: [5, 5, 5, 2, 1], 1: [3, 3, 3, 3, 3]}, 0, OPENING_BID)
        action = ExpectedValueAgent().choose_action(view)
        self.assertEqual(action.bid.face, 5)
        self.assertTrue(action.bid.outbids(OPENING_BID))

    def test_expected_agent_doubts_far_fetched_bid(self):
        view = view_for({0: [2, 3, 4, 5, 6], 1: [3, 3, 3, 3, 3]}, 0, Bid(6, 2))
        self.assertIsInstance(ExpectedValueAgent().choose_action(view), Dudo)

    def test_expected_agent_calls_calza_on_exact_estimate(self):
        # one six in hand plus 6 hidden dice * 1/6 = 2 sixes expected
        view = view_for({0: [6, 2], 1: [3, 3, 3, 3, 3, 3]}, 0, Bid(2, 6))
        self.assertIsInstance(ExpectedValueAgent().choose_action(view), Calza)

    def test_conservative_agent(self):
        agent = ConservativeAgent()
        opening = agent.choose_action(view_for({0: [3, 3, 1], 1: [2]}, 0, OPENING_BID))
        self.assertEqual(opening, Outbid(Bid(1, 3)))
        raised = agent.choose_action(view_for({0: [3, 3, 1], 1: [2]}, 0, Bid(1, 3)))
        self.assertEqual(raised, Outbid(Bid(2, 3)))
        doubted = agent.choose_action(view_for({0: [3, 3, 1], 1: [2]}, 0, Bid(2, 3)))
        self.assertIsInstance(doubted, Dudo)


if __name__ == '__main__':
    unittest.main()
