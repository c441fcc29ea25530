import os
import csv
import tempfile
import unittest
from perudo.core.actions import Dudo, Outbid
from perudo.core.bid import Bid
from perudo.core.engine import GameEngine
from perudo.core.hand import ScriptedDealer
from perudo.core.instructions import (
    DudoResult, InvalidBid, LastMove, Loser, NewHand, Notification, Winner,
)
from perudo.core.reward import get_reward
from perudo.persistence import csv_io, serializer
from perudo.persistence.recorder import InMemoryRecorder


class TestSerializer(unittest.TestCase):
    def test_notification_encoding(self):
        encoded = serializer.notification_to_dict(Notification(1, LastMove(2, DudoResult(True))))
        self.assertEqual(encoded, {
            "player_id": 1,
            "instruction": {"type": "last_move", "player_id": 2, "result": {"type": "dudo", "success": True}},
        })
        encoded = serializer.notification_to_dict(Notification(1, LastMove(1, Outbid(Bid(2, 3)))))
        self.assertEqual(encoded["instruction"]["result"], {"type": "outbid", "bid": {"count": 2, "face": 3}})

    def test_state_survives_json_storage_between_moves(self):
        engine = GameEngine(dealer=ScriptedDealer([2, 4, 6]))
        _, state = engine.start([1, 2, 3], 3)
        _, state = engine.play_move(state, 1, Outbid.of(2, 4))
        stored = serializer.dumps(serializer.state_to_dict(state))
        restored = serializer.state_from_dict(serializer.loads(stored))
        self.assertEqual(restored, state)

        # the restored state keeps playing like the original
        expected = engine.play_move(state, 2, Dudo())[1].current_bid
        self.assertEqual(engine.play_move(restored, 2, Dudo())[1].current_bid, expected)

    def test_terminal_state_round_trip(self):
        engine = GameEngine(dealer=ScriptedDealer([3]))
        _, state = engine.start(["x"], 2)
        restored = serializer.state_from_dict(serializer.loads(serializer.dumps(serializer.state_to_dict(state))))
        self.assertEqual(restored, state)
        self.assertTrue(restored.is_over)


class TestReward(unittest.TestCase):
    def test_reward_scheme(self):
        self.assertEqual(get_reward(Winner(1), 1), 1)
        self.assertEqual(get_reward(Winner(1), 2), 0)
        self.assertEqual(get_reward(Loser(2), 2), -1)
        self.assertEqual(get_reward(Loser(2), 1), 0)
        self.assertEqual(get_reward(InvalidBid(), 1), -1)
        self.assertEqual(get_reward(LastMove(1, DudoResult(True)), 1), 0)


class TestRecorderAndCsv(unittest.TestCase):
    def test_recorded_game_written_as_trajectory(self):
        engine = GameEngine(dealer=ScriptedDealer([5]))
        notifications, _ = engine.start([1, 2], 2)
        recorder = InMemoryRecorder()
        recorder.record_notifications("g1", notifications, {1: "Human", 2: "RandomAgent"})

        events = recorder.events()
        self.assertEqual([e.event_type for e in events],
                         ["game_started", "game_started", "new_hand", "new_hand", "move"])
        self.assertEqual(events[2].payload, {"type": "new_hand", "hand": {"dice": [5, 5], "remaining_dice": 2}})
        self.assertEqual(events[3].player_type, "RandomAgent")
        self.assertIsInstance(notifications[2].instruction, NewHand)

        with tempfile.TemporaryDirectory() as tmp:
            path = os.path.join(tmp, "trajectory.csv")
            rows = csv_io.trajectory_rows(events, "2024-01-01T00:00:00")
            csv_io.append_rows_to_csv(rows[:2], path, csv_io.get_trajectory_header())
            csv_io.append_rows_to_csv(rows[2:], path, csv_io.get_trajectory_header())
            with open(path, newline="", encoding="utf-8") as f:
                read = list(csv.DictReader(f))
        self.assertEqual(len(read), 5)
        self.assertEqual(read[4]["event_type"], "move")
        self.assertEqual(read[4]["step"], "4")


if __name__ == '__main__':
    unittest.main()
