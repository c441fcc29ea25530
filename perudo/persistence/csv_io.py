"""
csv_io.py
Persistence utilities for writing Perudo game summary and trajectory data to CSV files.
"""

import os
import csv
from typing import Dict, List, Any

SUMMARY_HEADER = [
    "game_id", "game_index", "timestamp", "players", "agents", "winner", "eliminated",
    "starting_dice_per_player", "rounds_played", "moves", "bids", "dudos", "calzas",
    "successful_dudos", "successful_calzas", "rejections", "error", "end_reason",
]
TRAJECTORY_HEADER = [
    "game_id", "step", "event_type", "player", "player_type", "payload", "timestamp", "reward",
]


def append_row_to_csv(row: Dict[str, Any], csv_path: str, header: List[str]):
    append_rows_to_csv([row], csv_path, header)


def append_rows_to_csv(rows: List[Dict[str, Any]], csv_path: str, header: List[str]):
    write_header = not os.path.exists(csv_path)
    with open(csv_path, "a", newline='', encoding="utf-8") as f:
        writer = csv.DictWriter(f, fieldnames=header)
        if write_header:
            writer.writeheader()
        for row in rows:
            writer.writerow(row)


def get_summary_header():
    return SUMMARY_HEADER.copy()


def get_trajectory_header():
    return TRAJECTORY_HEADER.copy()


def trajectory_rows(events, timestamp: str) -> List[Dict[str, Any]]:
    """Turn recorded GameEvents into rows matching TRAJECTORY_HEADER."""
    return [{
        "game_id": ev.game_id,
        "step": step,
        "event_type": ev.event_type,
        "player": ev.player_id,
        "player_type": ev.player_type,
        "payload": str(ev.payload),
        "timestamp": timestamp,
        "reward": ev.reward,
    } for step, ev in enumerate(events)]
