"""match.py
Play full Perudo games between agents. A game runs from start until a single player is left
(or the configured move limit is reached), feeding every agent the view of its own seat and
tallying what happened from the notifications the engine returns.

Used by scripts/full_game.py, scripts/run_tournament.py and the CLI.
"""
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from .core.actions import Action, Dudo, Outbid
from .core.bid import OPENING_BID, legal_outbids
from .core.config import GameConfig
from .core.engine import GameEngine
from .core.instructions import REJECTIONS, CalzaResult, DudoResult, LastMove, Loser, Notification
from .persistence.recorder import InMemoryRecorder

logger = logging.getLogger(__name__)


@dataclass
class MatchResult:
    """Aggregated outcome of one game."""
    winner: Any = None
    eliminated: List[Any] = field(default_factory=list)
    rounds_played: int = 0
    moves: int = 0
    bids: int = 0
    dudos: int = 0
    calzas: int = 0
    successful_dudos: int = 0
    successful_calzas: int = 0
    rejections: int = 0
    end_reason: Optional[str] = None


def fallback_action(view) -> Action:
    """Replacement for a rejected agent move: dudo on a standing bid, else the cheapest opening bid."""
    if view.get("current_bid") is not None:
        return Dudo()
    return Outbid(next(legal_outbids(OPENING_BID, 1)))


def tally(result: MatchResult, notifications: List[Notification], actor) -> None:
    """Update `result` from the notifications returned by one engine call for `actor`'s move."""
    for n in notifications:
        instruction = n.instruction
        if isinstance(instruction, REJECTIONS) and n.player_id == actor:
            result.rejections += 1
    # broadcasts repeat once per player; count each announcement once
    announced = []
    for n in notifications:
        if n.instruction not in announced:
            announced.append(n.instruction)
    for instruction in announced:
        if isinstance(instruction, LastMove):
            move = instruction.result
            if isinstance(move, Outbid):
                result.bids += 1
            elif isinstance(move, DudoResult):
                result.dudos += 1
                result.successful_dudos += int(move.success)
                result.rounds_played += 1
            elif isinstance(move, CalzaResult):
                result.calzas += 1
                result.successful_calzas += int(move.success)
                result.rounds_played += 1
        elif isinstance(instruction, Loser):
            result.eliminated.append(instruction.player_id)


def run_match(agents: Dict[Any, Any], cfg: GameConfig = None, engine: GameEngine = None,
              game_id: str = "game", recorder: InMemoryRecorder = None) -> MatchResult:
    """
    Run one game until a winner is declared.
    Args:
        agents (dict): Player id to Agent, in seating order; the first player moves first.
        cfg (GameConfig): Configuration; ignored when `engine` is given.
        engine (GameEngine|None): Engine to use, e.g. one built around a ScriptedDealer.
        game_id (str): Identifier written into recorded events.
        recorder (InMemoryRecorder|None): Receives every notification.
    Returns:
        MatchResult: Aggregated statistics of the game.
    """
    engine = engine or GameEngine(cfg or GameConfig())
    cfg = engine.config
    player_types = {pid: type(agent).__name__ for pid, agent in agents.items()}
    result = MatchResult()

    notifications, state = engine.start(list(agents), cfg.max_dice)
    if recorder is not None:
        recorder.record_notifications(game_id, notifications, player_types)

    while not state.is_over and result.moves < cfg.max_turns:
        actor = state.current_player_id
        view = engine.get_view(state, actor)
        action = agents[actor].choose_action(view)
        notifications, state = engine.play_move(state, actor, action)
        if any(isinstance(n.instruction, REJECTIONS) for n in notifications):
            logger.debug("Agent %r move %r rejected; using fallback", actor, action)
            tally(result, notifications, actor)
            if recorder is not None:
                recorder.record_notifications(game_id, notifications, player_types)
            notifications, state = engine.play_move(state, actor, fallback_action(view))
        result.moves += 1
        tally(result, notifications, actor)
        if recorder is not None:
            recorder.record_notifications(game_id, notifications, player_types)

    if state.is_over:
        result.winner = state.winner
        result.end_reason = "winner declared"
    else:
        result.end_reason = "max_turns_reached"
        logger.warning("Game %s stopped after %d moves without a winner", game_id, result.moves)
    return result
