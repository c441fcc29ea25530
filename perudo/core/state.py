"""
state.py
Defines the game state dataclasses for Perudo: PlayerHand and GameState.
States are immutable; the engine returns a new GameState from every call.
Related modules:
- engine.py: Builds and transforms GameState.
- persistence/serializer.py: Converts GameState to and from plain dicts.
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple

from .bid import Bid
from .hand import Hand


@dataclass(frozen=True)
class PlayerHand:
    """
    Pairs a player with the hand they currently hold.
    Fields:
        player_id: Opaque player identifier.
        hand (Hand): The player's dice.
    """
    player_id: Any
    hand: Hand


@dataclass(frozen=True)
class GameState:
    """
    Complete state of one game.
    Fields:
        current_player_id: Player whose move is expected, None once the game is over.
        all_players (tuple): Roster fixed at start; every broadcast goes to these players.
        remaining_players (tuple): Players still in the game, in rotation order.
        current_bid (Bid|None): Standing bid; Bid(0, 0) at round open, None once the game is over.
        players_hands (tuple[PlayerHand]): One entry per remaining player, in rotation order.
        max_dice (int): Dice dealt to each player at start.
    """
    current_player_id: Optional[Any]
    all_players: Tuple[Any, ...]
    remaining_players: Tuple[Any, ...]
    current_bid: Optional[Bid]
    players_hands: Tuple[PlayerHand, ...]
    max_dice: int

    def hand_of(self, player_id) -> Optional[Hand]:
        for entry in self.players_hands:
            if entry.player_id == player_id:
                return entry.hand
        return None

    def dice_by_player(self) -> Dict[Any, Tuple[int, ...]]:
        return {entry.player_id: entry.hand.dice for entry in self.players_hands}

    def dice_counts(self) -> Dict[Any, int]:
        return {entry.player_id: entry.hand.remaining_dice for entry in self.players_hands}

    @property
    def total_dice(self) -> int:
        return sum(entry.hand.remaining_dice for entry in self.players_hands)

    @property
    def is_over(self) -> bool:
        return self.current_player_id is None

    @property
    def winner(self) -> Optional[Any]:
        if self.is_over and len(self.remaining_players) == 1:
            return self.remaining_players[0]
        return None
