"""
instructions.py
Defines the notifications the engine hands back to its caller for delivery to players.
Every engine call returns a list of Notification(player_id, instruction) in delivery order.
Related modules:
- engine.py: Produces notifications.
- persistence/serializer.py: Encodes notifications using each instruction's `kind`.
- reward.py: Scores notifications for trajectory data.
"""

from dataclasses import dataclass
from typing import Any, Tuple, Union

from .actions import Outbid
from .hand import Hand


class Instruction:
    """Base class for everything the engine can tell a player."""
    kind = "instruction"


@dataclass(frozen=True)
class CalzaResult:
    success: bool
    kind = "calza"


@dataclass(frozen=True)
class DudoResult:
    success: bool
    kind = "dudo"


MoveResult = Union[Outbid, CalzaResult, DudoResult]


@dataclass(frozen=True)
class GameStarted(Instruction):
    players: Tuple[Any, ...]
    kind = "game_started"


@dataclass(frozen=True)
class NewHand(Instruction):
    hand: Hand
    kind = "new_hand"


@dataclass(frozen=True)
class Move(Instruction):
    """Prompt: the receiving player is expected to act."""
    kind = "move"


@dataclass(frozen=True)
class LastMove(Instruction):
    player_id: Any
    result: MoveResult
    kind = "last_move"


@dataclass(frozen=True)
class RevealPlayersHands(Instruction):
    """
    Every hand as it stood when the bid was counted, before the loser loses a die and
    the round is re-dealt. (Sending the already re-rolled hands would show dice that
    played no part in the challenge.)
    """
    # PlayerHand entries; typed loosely to keep state.py out of this module's imports
    hands: Tuple[Any, ...]
    kind = "reveal_players_hands"


@dataclass(frozen=True)
class Loser(Instruction):
    player_id: Any
    kind = "loser"


@dataclass(frozen=True)
class Winner(Instruction):
    player_id: Any
    kind = "winner"


@dataclass(frozen=True)
class UnauthorizedMove(Instruction):
    kind = "unauthorized_move"


@dataclass(frozen=True)
class InvalidBid(Instruction):
    kind = "invalid_bid"


@dataclass(frozen=True)
class IllegalMove(Instruction):
    kind = "illegal_move"


REJECTIONS = (UnauthorizedMove, InvalidBid, IllegalMove)


@dataclass(frozen=True)
class Notification:
    """
    A single instruction addressed to a single player.
    Fields:
        player_id: Recipient.
        instruction (Instruction): What to tell them.
    """
    player_id: Any
    instruction: Instruction
