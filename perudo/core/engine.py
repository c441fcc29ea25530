"""
engine.py
Implements the GameEngine class, which enforces the Perudo rules.
The engine is a function from (state, actor, move) to (notifications, new state): it holds no game
state of its own, only the configuration and the dealer used to roll dice.
Related modules:
- config.py: GameConfig is used to configure the engine.
- state.py: GameState and PlayerHand hold all game data.
- actions.py: Moves are applied with play_move.
- bid.py: Bid legality.
- rules.py: Counting dice matches and turn rotation.
- instructions.py: Notifications returned to the caller.
"""

import logging
import random
from dataclasses import replace
from typing import Any, Dict, Iterable, List, Tuple

from .actions import Action, Calza, Dudo, Outbid
from .bid import OPENING_BID, Bid
from .config import GameConfig
from .hand import DiceDealer, Hand
from .instructions import (
    CalzaResult, DudoResult, GameStarted, IllegalMove, Instruction, InvalidBid, LastMove, Loser,
    Move, NewHand, Notification, RevealPlayersHands, UnauthorizedMove, Winner,
)
from .rules import count_matches, first_survivor, next_player, previous_player
from .state import GameState, PlayerHand

logger = logging.getLogger(__name__)

MoveOutcome = Tuple[List[Notification], GameState]


class _Outbox:
    """Notifications produced by a single engine call, kept in delivery order."""
    def __init__(self, all_players: Iterable[Any]):
        self._all_players = tuple(all_players)
        self._notifications: List[Notification] = []

    def notify(self, player_id, instruction: Instruction) -> None:
        self._notifications.append(Notification(player_id, instruction))

    def notify_all(self, instruction: Instruction) -> None:
        for player_id in self._all_players:
            self.notify(player_id, instruction)

    def drain(self) -> List[Notification]:
        return list(self._notifications)


class GameEngine:
    """
    Rules engine for Perudo. Manages no game of its own: callers keep the GameState returned by
    start/play_move and pass it back in with the next move.
    """
    def __init__(self, config: GameConfig = None, dealer=None):
        """
        Args:
            config (GameConfig): Game configuration. Defaults to GameConfig().
            dealer: Hand collaborator providing deal/reduce/grow. Defaults to a DiceDealer
                seeded from config.rng_seed.
        """
        self.config = config or GameConfig()
        self.dealer = dealer or DiceDealer(random.Random(self.config.rng_seed))

    def start(self, player_ids: Iterable[Any], max_dice: int = None) -> MoveOutcome:
        """
        Start a game: deal every player `max_dice` dice, announce the game and prompt the first player.
        Args:
            player_ids: Ordered player identifiers; the first one moves first.
            max_dice (int|None): Dice per player. Defaults to config.max_dice.
        Returns:
            tuple: (notifications, state).
        Raises:
            ValueError: If player_ids is empty or max_dice is below one.
        """
        players = tuple(player_ids)
        if not players:
            raise ValueError("a game needs at least one player")
        if max_dice is None:
            max_dice = self.config.max_dice
        if max_dice < 1:
            raise ValueError("every player needs at least one die")

        state = GameState(
            current_player_id=players[0],
            all_players=players,
            remaining_players=players,
            current_bid=OPENING_BID,
            players_hands=tuple(PlayerHand(p, self.dealer.deal(max_dice)) for p in players),
            max_dice=max_dice,
        )
        outbox = _Outbox(players)
        outbox.notify_all(GameStarted(players))
        state = self._start_round(state, players[0], outbox)
        logger.info("Game started with players %s and %d dice each", list(players), max_dice)
        return self._finish(state, outbox)

    def play_move(self, state: GameState, player_id, move: Action) -> MoveOutcome:
        """
        Apply a move for the given player.
        A move by anyone other than the current player, an illegal bid, or a challenge with no
        standing bid is answered with a single notification to the mover and leaves the state as is.
        Args:
            state (GameState): Current state.
            player_id: Player submitting the move.
            move (Action): Outbid, Calza or Dudo.
        Returns:
            tuple: (notifications, state).
        """
        outbox = _Outbox(state.all_players)
        if state.current_player_id is None or player_id != state.current_player_id:
            logger.debug("Rejected move from %r: expected %r", player_id, state.current_player_id)
            return self._reject(state, player_id, UnauthorizedMove(), outbox)

        if isinstance(move, Outbid):
            return self._outbid(state, move, outbox)
        if isinstance(move, (Calza, Dudo)):
            return self._challenge(state, move, outbox)

        logger.debug("Rejected unknown move %r from %r", move, player_id)
        return self._reject(state, player_id, IllegalMove(), outbox)

    def get_view(self, state: GameState, player_id) -> Dict[str, Any]:
        """
        Get a player-specific view of the game (public information plus the player's own dice).
        Args:
            state (GameState): Current state.
            player_id: Viewing player.
        Returns:
            dict: Player view for agent decision-making.
        """
        hand = state.hand_of(player_id) or Hand()
        bid = state.current_bid
        return {
            "player_id": player_id,
            "my_dice": tuple(hand.dice),
            "current_bid": None if bid is None or bid.is_opening else bid,
            "current_player": state.current_player_id,
            "remaining_players": state.remaining_players,
            "dice_counts": state.dice_counts(),
            "total_dice": state.total_dice,
            "max_dice": state.max_dice,
            "config": self.config,
        }

    def _outbid(self, state: GameState, move: Outbid, outbox: _Outbox) -> MoveOutcome:
        actor = state.current_player_id
        if not isinstance(move.bid, Bid) or not move.bid.outbids(state.current_bid):
            logger.debug("Rejected bid %s over %s from %r", move.bid, state.current_bid, actor)
            return self._reject(state, actor, InvalidBid(), outbox)

        outbox.notify_all(LastMove(actor, move))
        state = replace(
            state,
            current_bid=move.bid,
            current_player_id=next_player(state.remaining_players, actor),
        )
        return self._finish(state, outbox)

    def _challenge(self, state: GameState, move: Action, outbox: _Outbox) -> MoveOutcome:
        actor = state.current_player_id
        bid = state.current_bid
        if bid is None or bid.is_opening:
            logger.debug("Rejected %s from %r: no standing bid", move.kind, actor)
            return self._reject(state, actor, IllegalMove(), outbox)

        revealed = state.players_hands
        actual = count_matches(state.dice_by_player(), bid.face, self.config.ones_wild)

        if isinstance(move, Dudo):
            success = actual < bid.count
            # a successful dudo costs the bidder a die, a failed one costs the challenger
            reference = previous_player(state.remaining_players, actor) if success else actor
            state = self._replace_hand(state, reference, self.dealer.reduce(state.hand_of(reference)))
            result = DudoResult(success)
        else:
            success = actual == bid.count
            reference = actor
            hand = state.hand_of(actor)
            hand = self._grow(hand, state.max_dice) if success else self.dealer.reduce(hand)
            state = self._replace_hand(state, actor, hand)
            result = CalzaResult(success)

        logger.info("%s by %r on %s: %d found, success=%s", move.kind, actor, bid, actual, success)
        outbox.notify_all(LastMove(actor, result))
        outbox.notify_all(RevealPlayersHands(revealed))
        state, reference = self._eliminate(state, reference, outbox)
        state = self._start_round(state, reference, outbox)
        return self._finish(state, outbox)

    def _grow(self, hand: Hand, max_dice: int) -> Hand:
        if self.config.cap_dice_at_max and hand.remaining_dice >= max_dice:
            return hand
        return self.dealer.grow(hand)

    @staticmethod
    def _replace_hand(state: GameState, player_id, hand: Hand) -> GameState:
        hands = tuple(
            PlayerHand(entry.player_id, hand) if entry.player_id == player_id else entry
            for entry in state.players_hands
        )
        return replace(state, players_hands=hands)

    def _eliminate(self, state: GameState, reference, outbox: _Outbox):
        out = [entry.player_id for entry in state.players_hands if entry.hand.remaining_dice == 0]
        if not out:
            return state, reference

        for player_id in out:
            logger.info("Player %r eliminated", player_id)
            outbox.notify_all(Loser(player_id))
        reference = first_survivor(state.remaining_players, reference, out)
        state = replace(
            state,
            remaining_players=tuple(p for p in state.remaining_players if p not in out),
            players_hands=tuple(e for e in state.players_hands if e.player_id not in out),
        )
        return state, reference

    def _start_round(self, state: GameState, first_player, outbox: _Outbox) -> GameState:
        if len(state.remaining_players) == 1:
            winner = state.remaining_players[0]
            logger.info("Player %r wins", winner)
            outbox.notify_all(Winner(winner))
            return replace(state, current_player_id=None, players_hands=(), current_bid=None)

        hands = tuple(
            PlayerHand(p, self.dealer.deal(state.hand_of(p).remaining_dice))
            for p in state.remaining_players
        )
        for entry in hands:
            outbox.notify(entry.player_id, NewHand(entry.hand))
        return replace(state, current_player_id=first_player, players_hands=hands, current_bid=OPENING_BID)

    def _reject(self, state: GameState, player_id, instruction: Instruction, outbox: _Outbox) -> MoveOutcome:
        outbox.notify(player_id, instruction)
        return outbox.drain(), state

    def _finish(self, state: GameState, outbox: _Outbox) -> MoveOutcome:
        if state.current_player_id is not None:
            outbox.notify(state.current_player_id, Move())
        return outbox.drain(), state


def start(player_ids: Iterable[Any], max_dice: int) -> MoveOutcome:
    """Start a game with randomly rolled dice. See GameEngine.start."""
    return GameEngine(GameConfig(max_dice=max_dice, rng_seed=None)).start(player_ids, max_dice)


def play_move(state: GameState, player_id, move: Action) -> MoveOutcome:
    """
    Apply a move with randomly rolled dice. See GameEngine.play_move.
    Uses a default GameConfig (exact-match counting, calza growth capped at max_dice).
    Games started on a GameEngine with a custom config should keep calling that
    engine's play_move.
    """
    return GameEngine(GameConfig(max_dice=state.max_dice, rng_seed=None)).play_move(state, player_id, move)
