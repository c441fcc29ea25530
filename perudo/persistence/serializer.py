"""
serializer.py
Converts notifications and game states to and from JSON-friendly structures.
Callers use it to ship notifications to remote players and to store a GameState between moves.
Player identifiers must themselves be JSON values (str, int, ...).
"""

import json
from dataclasses import fields, is_dataclass
from typing import Any, Dict

from ..core.bid import Bid
from ..core.hand import Hand
from ..core.instructions import Notification
from ..core.state import GameState, PlayerHand


def encode(obj: Any) -> Any:
    """
    Recursively turn dataclasses, tuples and dicts into plain JSON values.
    Dataclasses that carry a `kind` (moves, results, instructions) get a "type" key.
    """
    if is_dataclass(obj) and not isinstance(obj, type):
        data = {f.name: encode(getattr(obj, f.name)) for f in fields(obj)}
        kind = getattr(obj, "kind", None)
        if kind is not None:
            data = {"type": kind, **data}
        return data
    if isinstance(obj, (list, tuple)):
        return [encode(item) for item in obj]
    if isinstance(obj, dict):
        return {key: encode(value) for key, value in obj.items()}
    return obj


def notification_to_dict(notification: Notification) -> Dict[str, Any]:
    return {
        "player_id": notification.player_id,
        "instruction": encode(notification.instruction),
    }


def state_to_dict(state: GameState) -> Dict[str, Any]:
    return encode(state)


def state_from_dict(data: Dict[str, Any]) -> GameState:
    """
    Rebuild a GameState produced by state_to_dict (possibly after a JSON round trip).
    Args:
        data (dict): Encoded state.
    Returns:
        GameState: The decoded state.
    """
    bid = data.get("current_bid")
    return GameState(
        current_player_id=data.get("current_player_id"),
        all_players=tuple(data["all_players"]),
        remaining_players=tuple(data["remaining_players"]),
        current_bid=None if bid is None else Bid(bid["count"], bid["face"]),
        players_hands=tuple(
            PlayerHand(
                entry["player_id"],
                Hand(dice=tuple(entry["hand"]["dice"]), remaining_dice=entry["hand"]["remaining_dice"]),
            )
            for entry in data.get("players_hands", [])
        ),
        max_dice=data["max_dice"],
    )


def dumps(obj: Any) -> str:
    """
    Serialize a Python object (including dataclasses) to a JSON string.
    Args:
        obj: Object to serialize.
    Returns:
        str: JSON string.
    """
    return json.dumps(encode(obj), default=str)


def loads(s: str):
    """Deserialize a JSON string to a Python object (dict/list)."""
    return json.loads(s)
