import random
import unittest
from perudo.core.hand import DiceDealer, Hand, ScriptedDealer


class TestDiceDealer(unittest.TestCase):
    """
    Tests for the Hand collaborator: dealing, reducing and growing always re-roll,
    and the dice length always matches the remaining count.
    """

    def test_deal_rolls_requested_number_of_dice(self):
        hand = DiceDealer(random.Random(1)).deal(5)
        self.assertEqual(hand.remaining_dice, 5)
        self.assertEqual(len(hand.dice), 5)
        self.assertTrue(all(1 <= d <= 6 for d in hand.dice))

    def test_same_seed_same_dice(self):
        a = DiceDealer(random.Random(7)).deal(6)
        b = DiceDealer(random.Random(7)).deal(6)
        self.assertEqual(a, b)

    def test_reduce_and_grow(self):
        dealer = DiceDealer(random.Random(3))
        hand = dealer.deal(3)
        smaller = dealer.reduce(hand)
        bigger = dealer.grow(hand)
        self.assertEqual((smaller.remaining_dice, len(smaller.dice)), (2, 2))
        self.assertEqual((bigger.remaining_dice, len(bigger.dice)), (4, 4))

    def test_reduce_to_empty(self):
        dealer = DiceDealer(random.Random(3))
        self.assertEqual(dealer.reduce(Hand(dice=(4,), remaining_dice=1)), Hand((), 0))
        self.assertEqual(dealer.reduce(Hand()), Hand((), 0))

    def test_negative_size_is_rejected(self):
        with self.assertRaises(ValueError):
            DiceDealer().deal(-1)


class TestScriptedDealer(unittest.TestCase):
    def test_cycles_through_script(self):
        dealer = ScriptedDealer([1, 2])
        self.assertEqual(dealer.deal(3), Hand((1, 2, 1), 3))
        self.assertEqual(dealer.grow(Hand((5,), 1)), Hand((2, 1), 2))

    def test_rejects_bad_scripts(self):
        with self.assertRaises(ValueError):
            ScriptedDealer([])
        with self.assertRaises(ValueError):
            ScriptedDealer([0, 7])


if __name__ == '__main__':
    unittest.main()
