"""full_game.py
Simulate full Perudo games between agents. Each game starts with a fixed number of dice per
player (default 5) and runs until a single player is left.

Every game appends one summary row and its notification trajectory to CSV files.

Usage: python scripts/full_game.py --agents random,expected,conservative --games 10
"""
import argparse
import datetime
import hashlib
import logging
import os
from typing import Any, Dict, List, Tuple

from perudo.agents import AGENT_MAP, create_agent
from perudo.core.config import GameConfig
from perudo.match import MatchResult, run_match
from perudo.persistence import csv_io
from perudo.persistence.recorder import InMemoryRecorder


def generate_game_id(agent_names: List[str], timestamp: str) -> str:
    raw = f"{timestamp}_{'_'.join(agent_names)}"
    return hashlib.sha256(raw.encode()).hexdigest()[:16]


def seat_agents(agent_names: List[str]) -> Dict[str, Any]:
    """Give every agent a unique seat id such as 'p0:random'."""
    return {f"p{i}:{name}": create_agent(name) for i, name in enumerate(agent_names)}


def summary_row(result: MatchResult, agents: Dict[str, Any], cfg: GameConfig, game_index: int,
                game_id: str, timestamp: str) -> Dict[str, Any]:
    return {
        "game_id": game_id,
        "game_index": game_index,
        "timestamp": timestamp,
        "players": "|".join(agents),
        "agents": "|".join(type(a).__name__ for a in agents.values()),
        "winner": result.winner,
        "eliminated": "|".join(str(p) for p in result.eliminated),
        "starting_dice_per_player": cfg.max_dice,
        "rounds_played": result.rounds_played,
        "moves": result.moves,
        "bids": result.bids,
        "dudos": result.dudos,
        "calzas": result.calzas,
        "successful_dudos": result.successful_dudos,
        "successful_calzas": result.successful_calzas,
        "rejections": result.rejections,
        "error": None,
        "end_reason": result.end_reason,
    }


def run_full_game(agent_names: List[str], cfg: GameConfig, game_index: int,
                  timestamp: str) -> Tuple[Dict[str, Any], List[Dict[str, Any]]]:
    """Run one game and return (summary_row, trajectory_rows)."""
    game_id = generate_game_id(agent_names, f"{timestamp}_{game_index}")
    agents = seat_agents(agent_names)
    recorder = InMemoryRecorder()
    result = run_match(agents, cfg, game_id=game_id, recorder=recorder)
    return summary_row(result, agents, cfg, game_index, game_id, timestamp), csv_io.trajectory_rows(recorder.events(), timestamp)


def main():
    parser = argparse.ArgumentParser(description="Simulate full Perudo games between agents")
    parser.add_argument("--agents", type=str, default="random,random", help="Comma-separated agent keys, one per seat")
    parser.add_argument("--games", type=int, default=10, help="Number of games to play")
    parser.add_argument("--dice", type=int, default=5, help="Dice per player at start")
    parser.add_argument("--ones-wild", action="store_true", help="Count ones towards every face")
    parser.add_argument("--data-dir", type=str, default="data", help="Directory to save csv files")
    parser.add_argument("--log-level", type=str, default="WARNING")
    args = parser.parse_args()
    logging.basicConfig(level=args.log_level.upper())

    agent_names = [a.strip() for a in args.agents.split(",") if a.strip()]
    unknown = [a for a in agent_names if a not in AGENT_MAP]
    if unknown:
        raise SystemExit(f"Unknown agents: {unknown}. Supported: {list(AGENT_MAP.keys())}")

    os.makedirs(args.data_dir, exist_ok=True)
    summary_csv = os.path.join(args.data_dir, "game_summary.csv")
    trajectory_csv = os.path.join(args.data_dir, "game_trajectory.csv")
    cfg = GameConfig(max_dice=args.dice, ones_wild=args.ones_wild, rng_seed=None)

    for i in range(args.games):
        timestamp = datetime.datetime.now(datetime.timezone.utc).isoformat()
        print(f"Running game {i+1}/{args.games}...", end=" ")
        summary, trajectory = run_full_game(agent_names, cfg, i, timestamp)
        csv_io.append_row_to_csv(summary, summary_csv, csv_io.get_summary_header())
        csv_io.append_rows_to_csv(trajectory, trajectory_csv, csv_io.get_trajectory_header())
        print(f"winner: {summary['winner']}")

    print(f"All games finished. Data saved to {summary_csv} and {trajectory_csv}")


if __name__ == "__main__":
    main()
