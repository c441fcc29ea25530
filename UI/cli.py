import sys
import argparse
import datetime
import hashlib
import logging
import os
from typing import Optional

from perudo.core.config import GameConfig
from perudo.core.engine import GameEngine
from perudo.core.actions import Action, Calza, Dudo, Outbid
from perudo.core.bid import Bid
from perudo.core.instructions import (
    REJECTIONS, DudoResult, GameStarted, IllegalMove, InvalidBid, LastMove, Loser, Move,
    NewHand, RevealPlayersHands, UnauthorizedMove, Winner,
)
from perudo.agents import AGENT_MAP, create_agent
from perudo.match import fallback_action
from perudo.persistence import csv_io
from perudo.persistence.recorder import InMemoryRecorder

HUMAN_ID = "you"


def describe(instruction) -> Optional[str]:
    """
    Turn an instruction into a line of text for the terminal.
    Args:
        instruction (Instruction): Instruction addressed to the human player.
    Returns:
        str or None: Text to print, None for the move prompt (handled by the loop).
    """
    if isinstance(instruction, GameStarted):
        return f"Game started. Players: {', '.join(map(str, instruction.players))}"
    if isinstance(instruction, NewHand):
        return f"\n=== NEW ROUND ===\nYour dice: {instruction.hand.dice}"
    if isinstance(instruction, LastMove):
        result = instruction.result
        if isinstance(result, Outbid):
            return f"{instruction.player_id} bids {result.bid}"
        verdict = "right" if result.success else "wrong"
        name = "dudo" if isinstance(result, DudoResult) else "calza"
        return f"{instruction.player_id} calls {name}! ...and is {verdict}"
    if isinstance(instruction, RevealPlayersHands):
        return "\n".join(f"  {e.player_id}: {e.hand.dice}" for e in instruction.hands)
    if isinstance(instruction, Loser):
        return f"{instruction.player_id} has no dice left and is out."
    if isinstance(instruction, Winner):
        return f"*** {instruction.player_id} wins the game! ***"
    if isinstance(instruction, UnauthorizedMove):
        return "It is not your turn."
    if isinstance(instruction, InvalidBid):
        return "That bid does not outbid the standing bid."
    if isinstance(instruction, IllegalMove):
        return "Nothing to challenge yet: open the round with a bid."
    return None


def deliver(notifications):
    """Print every notification addressed to the human player."""
    for n in notifications:
        if n.player_id == HUMAN_ID and not isinstance(n.instruction, Move):
            text = describe(n.instruction)
            if text:
                print(text)


def print_state(view):
    """
    Print the public state and the player's dice to the terminal.
    Args:
        view (dict): Player-specific view from engine.get_view().
    """
    print(f"\nYour dice: {view['my_dice']}")
    counts = ", ".join(f"{p}: {n}" for p, n in view["dice_counts"].items())
    print(f"Dice in play ({view['total_dice']}): {counts}")
    last = view["current_bid"]
    print("No bids yet." if last is None else f"Standing bid: {last}")


def prompt_action(view) -> Optional[Action]:
    """
    Prompt the human player for an action (Outbid, Dudo or Calza).
    Args:
        view (dict): Player-specific view from engine.get_view().
    Returns:
        Action or None: The chosen action, or None if input is invalid.
    """
    print("\nChoose action:")
    print("  1) Outbid")
    print("  2) Dudo")
    print("  3) Calza")
    choice = input("Enter choice (1-3): ").strip()
    if choice == "2":
        return Dudo()
    if choice == "3":
        return Calza()
    if choice == "1":
        while True:
            try:
                count = int(input("Enter count (int): ").strip())
                face = int(input("Enter face (1-6): ").strip())
            except ValueError:
                print("Please enter valid integers.")
                continue
            return Outbid(Bid(count, face))
    print("Choice not recognized.")
    return None


def show_rules(config: GameConfig):
    """Print the current game rules and configuration to the terminal."""
    print("\n=== GAME RULES ===")
    print(f"Dice per player: {config.max_dice}")
    print(f"Ones count for every face: {config.ones_wild}")
    print("A round may not open on ones. Raise the count or the face, never lower either.")
    print("Onto ones: at least half the count (rounded up). Off ones: more than double the count.")
    print("Dudo: the bid is too high. Calza: the bid is exact (win a die back).")


def play_against(agent_names, config: GameConfig):
    """
    Play a full game of Perudo as a human (first seat) against agents in the CLI.
    Args:
        agent_names (list[str]): Registered agent names, one per opponent seat.
        config (GameConfig): Game configuration.
    """
    engine = GameEngine(config)
    agents = {f"p{i + 1}:{name}": create_agent(name) for i, name in enumerate(agent_names)}
    player_types = {HUMAN_ID: "Human", **{pid: type(a).__name__ for pid, a in agents.items()}}

    timestamp = datetime.datetime.now(datetime.timezone.utc).isoformat()
    raw_id = f"cli_{timestamp}_{os.getpid()}_{'_'.join(agent_names)}"
    game_id = hashlib.sha256(raw_id.encode()).hexdigest()[:16]
    recorder = InMemoryRecorder()

    notifications, state = engine.start([HUMAN_ID, *agents])
    recorder.record_notifications(game_id, notifications, player_types)
    deliver(notifications)

    while not state.is_over:
        actor = state.current_player_id
        view = engine.get_view(state, actor)
        if actor == HUMAN_ID:
            print_state(view)
            action = None
            while action is None:
                action = prompt_action(view)
        else:
            action = agents[actor].choose_action(view)
        notifications, state = engine.play_move(state, actor, action)
        if actor != HUMAN_ID and any(isinstance(n.instruction, REJECTIONS) for n in notifications):
            # If an agent made an illegal move, it challenges (or opens) instead
            print(f"{actor} made an illegal move and will play {type(fallback_action(view)).__name__} instead.")
            notifications, state = engine.play_move(state, actor, fallback_action(view))
        recorder.record_notifications(game_id, notifications, player_types)
        deliver(notifications)

    data_dir = "data"
    os.makedirs(data_dir, exist_ok=True)
    trajectory_csv = os.path.join(data_dir, "game_trajectory.csv")
    rows = csv_io.trajectory_rows(recorder.events(), timestamp)
    csv_io.append_rows_to_csv(rows, trajectory_csv, csv_io.get_trajectory_header())
    print(f"\n[Game events saved to {trajectory_csv}]")


def main(argv=None):
    parser = argparse.ArgumentParser(description="Play Perudo in the terminal against agents")
    parser.add_argument("agents", nargs="*", default=["random"], help=f"Opponents, one per seat: {sorted(AGENT_MAP)}")
    parser.add_argument("--dice", type=int, default=5, help="Dice per player at start")
    parser.add_argument("--ones-wild", action="store_true", help="Count ones towards every face")
    parser.add_argument("--log-level", type=str, default="WARNING")
    args = parser.parse_args(argv)
    logging.basicConfig(level=args.log_level.upper())

    # rng_seed=None so dice are different each run
    cfg = GameConfig(max_dice=args.dice, ones_wild=args.ones_wild, rng_seed=None)
    print("Welcome to Perudo (CLI)")
    while True:
        print("\nMenu:\n  1) Show rules\n  2) Play\n  3) Quit")
        sel = input("Choose: ").strip()
        if sel == "1":
            show_rules(cfg)
            continue
        if sel == "2":
            try:
                play_against(args.agents, cfg)
            except ValueError as e:
                print(e)
            except KeyboardInterrupt:
                print("\nExiting play loop.")
            break
        if sel == "3":
            print("Goodbye")
            break
        print("Unknown choice")


if __name__ == "__main__":
    sys.exit(main())
