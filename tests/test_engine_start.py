import unittest
from perudo.core.bid import OPENING_BID
from perudo.core.config import GameConfig
from perudo.core.engine import GameEngine, start
from perudo.core.hand import Hand, ScriptedDealer
from perudo.core.instructions import GameStarted, Move, NewHand, Notification, Winner


class TestStart(unittest.TestCase):
    """
    Tests for GameEngine.start: every player is dealt `max_dice` dice, the game start is
    announced to everyone, each player receives their hand and the first player is prompted.
    """

    def test_two_player_start(self):
        engine = GameEngine(dealer=ScriptedDealer([5]))
        notifications, state = engine.start([1, 2], 5)
        hand = Hand((5, 5, 5, 5, 5), 5)
        self.assertEqual(notifications, [
            Notification(1, GameStarted((1, 2))),
            Notification(2, GameStarted((1, 2))),
            Notification(1, NewHand(hand)),
            Notification(2, NewHand(hand)),
            Notification(1, Move()),
        ])
        self.assertEqual(state.current_player_id, 1)
        self.assertEqual(state.all_players, (1, 2))
        self.assertEqual(state.remaining_players, (1, 2))
        self.assertEqual(state.current_bid, OPENING_BID)
        self.assertEqual(state.total_dice, 10)
        self.assertEqual(state.max_dice, 5)

    def test_max_dice_defaults_to_config(self):
        engine = GameEngine(GameConfig(max_dice=3, rng_seed=1))
        _, state = engine.start(["a", "b", "c"])
        self.assertEqual(state.dice_counts(), {"a": 3, "b": 3, "c": 3})

    def test_empty_roster_is_rejected(self):
        with self.assertRaises(ValueError):
            GameEngine().start([], 5)

    def test_dice_free_game_is_rejected(self):
        # with no dice every hand is empty and the first challenge would knock out everyone
        with self.assertRaises(ValueError):
            GameEngine().start([1, 2, 3], 0)
        with self.assertRaises(ValueError):
            GameEngine(GameConfig(max_dice=0)).start(["a", "b"])
        with self.assertRaises(ValueError):
            start([1, 2], -1)

    def test_single_player_wins_immediately(self):
        notifications, state = GameEngine().start(["solo"], 5)
        self.assertEqual(notifications, [
            Notification("solo", GameStarted(("solo",))),
            Notification("solo", Winner("solo")),
        ])
        self.assertTrue(state.is_over)
        self.assertEqual(state.winner, "solo")
        self.assertIsNone(state.current_bid)

    def test_module_level_start_rolls_random_dice(self):
        notifications, state = start([1, 2], 4)
        self.assertEqual(len(notifications), 5)
        for entry in state.players_hands:
            self.assertEqual(len(entry.hand.dice), 4)
            self.assertTrue(all(1 <= d <= 6 for d in entry.hand.dice))

    def test_view_hides_other_hands(self):
        engine = GameEngine(dealer=ScriptedDealer([3]))
        _, state = engine.start([1, 2], 2)
        view = engine.get_view(state, 2)
        self.assertEqual(view["my_dice"], (3, 3))
        self.assertIsNone(view["current_bid"])
        self.assertEqual(view["dice_counts"], {1: 2, 2: 2})
        self.assertEqual(view["total_dice"], 4)
        self.assertEqual(view["current_player"], 1)
        self.assertNotIn("players_hands", view)


if __name__ == '__main__':
    unittest.main()
