"""
recorder.py
Implements event recording for Perudo games. Stores a stream of GameEvent objects for replay, analysis, or persistence.
Can be extended for file/DB storage. InMemoryRecorder is used for tests and in-memory analysis.
Related modules:
- events.py: Defines GameEvent type.
- serializer.py: Encodes notifications into event payloads.
"""

from typing import Dict, Iterable, List

from .events import GameEvent
from .serializer import encode
from ..core.instructions import Notification
from ..core.reward import get_reward


class InMemoryRecorder:
    """
    Records GameEvent objects in memory for later retrieval.
    Methods:
        record(event): Add a new event.
        record_notifications(game_id, notifications): Add one event per notification.
        events(): Get all recorded events.
        flush(): No-op for in-memory; used in file/DB recorders.
    """
    def __init__(self):
        self._events: List[GameEvent] = []

    def record(self, event: GameEvent) -> None:
        """Add a new event to the recorder."""
        self._events.append(event)

    def record_notifications(self, game_id: str, notifications: Iterable[Notification],
                             player_types: Dict = None) -> None:
        player_types = player_types or {}
        for n in notifications:
            self.record(GameEvent(
                game_id=game_id,
                event_type=n.instruction.kind,
                payload=encode(n.instruction),
                player_id=n.player_id,
                player_type=player_types.get(n.player_id),
                reward=get_reward(n.instruction, n.player_id),
            ))

    def events(self):
        """Return all recorded events as a list."""
        return list(self._events)

    def flush(self):
        """No-op for in-memory recorder."""
        pass
