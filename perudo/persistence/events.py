"""
events.py
Defines the GameEvent dataclass for event-sourced recording of the notifications a game produced.
Used by recorder.py to log every notification for replay, analysis, or persistence.
"""

from dataclasses import dataclass
from typing import Any, Dict


@dataclass
class GameEvent:
    """
    Represents a single delivered notification (e.g., new hand, last move, winner).
    Fields:
        game_id (str): Unique game identifier.
        event_type (str): Instruction kind (e.g., 'last_move').
        payload (dict): Encoded instruction.
        player_id: Recipient of the notification.
        player_type (str|None): Agent class name or 'Human' for the recipient (optional).
        reward (int): Reward the recipient gets for this notification (see core/reward.py).
    """
    game_id: str
    event_type: str
    payload: Dict[str, Any]
    player_id: Any = None
    player_type: str = None
    reward: int = 0
