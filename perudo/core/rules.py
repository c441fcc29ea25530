"""
rules.py
Helper functions for Perudo rules: counting dice that match a face and circular turn rotation.
Related modules:
- engine.py: Uses count_matches to resolve challenges and the rotation helpers to pick actors.
"""

from typing import Any, Collection, Dict, Sequence

from .bid import WILD_FACE


def count_matches(all_dice: Dict[Any, Sequence[int]], face: int, ones_wild: bool = False) -> int:
    """
    Count the number of dice matching a given face across all players.
    Args:
        all_dice (dict): Mapping of player_id to list of dice.
        face (int): Face value to count.
        ones_wild (bool): If True, ones count as wild for non-one faces.
    Returns:
        int: Total count of matching dice.
    """
    count = 0
    for dice in all_dice.values():
        count += sum(1 for d in dice if d == face)
    if ones_wild and face != WILD_FACE:
        for dice in all_dice.values():
            count += sum(1 for d in dice if d == WILD_FACE)
    return count


def next_player(players: Sequence[Any], current: Any) -> Any:
    """Player after `current`, wrapping to the first. A lone player is their own successor."""
    if len(players) == 1:
        return players[0]
    index = list(players).index(current)
    return players[(index + 1) % len(players)]


def previous_player(players: Sequence[Any], current: Any) -> Any:
    """Player before `current`, wrapping to the last."""
    index = list(players).index(current)
    return players[(index - 1 + len(players)) % len(players)]


def first_survivor(players: Sequence[Any], start: Any, eliminated: Collection[Any]) -> Any:
    """
    Walk the rotation from `start` (inclusive) and return the first player not in `eliminated`.
    Args:
        players: Rotation order before elimination.
        start: Player to start from.
        eliminated: Players being removed.
    Returns:
        The first surviving player, or None if every player is eliminated.
    """
    index = list(players).index(start)
    for offset in range(len(players)):
        candidate = players[(index + offset) % len(players)]
        if candidate not in eliminated:
            return candidate
    return None
