"""
run_tournament.py

Run a round-robin tournament where each ordered pairing of agents plays full Perudo games.
Seat 0 always opens the first round. Per-pairing and per-agent statistics are written to CSV
and a win-percentage chart is saved as PNG.

Usage: python scripts/run_tournament.py --agents all --games 10 --data-dir data
"""
import os
import argparse
import datetime
import itertools
import logging
from collections import defaultdict
from typing import Dict, List

import matplotlib
matplotlib.use('Agg')
import matplotlib.pyplot as plt

from perudo.agents import AGENT_MAP
from perudo.core.config import GameConfig
from perudo.persistence import csv_io

from full_game import run_full_game

TOURNAMENT_HEADER = ['timestamp', 'agent0', 'agent1', 'games', 'wins_agent0', 'wins_agent1',
                     'beginner_win_ratio', 'avg_moves', 'avg_rounds', 'total_dudos', 'total_calzas',
                     'successful_dudos', 'successful_calzas', 'unfinished']
AGENT_HEADER = ['agent', 'games', 'wins', 'win_percent', 'wins_as_start', 'wins_as_second']


def aggregate_and_plot(agent_stats: Dict[str, dict], out_path: str):
    agents = sorted(agent_stats.keys())
    wins = [agent_stats[a].get('wins', 0) for a in agents]
    games = [agent_stats[a].get('games', 0) for a in agents]
    win_perc = [(w / g * 100.0) if g > 0 else 0.0 for w, g in zip(wins, games)]

    width = max(6, int(len(agents) * 0.6))
    plt.figure(figsize=(width, 4))
    bars = plt.bar(agents, win_perc, color='C0')
    plt.ylabel('Win percentage (%)')
    plt.ylim(0, 100)
    plt.title('Tournament: win% per agent')
    for rect, val in zip(bars, win_perc):
        plt.text(rect.get_x() + rect.get_width() / 2.0, rect.get_height() + 1.0, f"{val:.1f}%", ha='center', va='bottom', fontsize=8)
    plt.tight_layout()
    plt.savefig(out_path)
    plt.close()


def parse_agent_list(s: str) -> List[str]:
    if s.strip().lower() == 'all':
        return sorted(list(AGENT_MAP.keys()))
    return [x.strip() for x in s.split(',') if x.strip()]


def run_tournament(agent_keys: List[str], games_per_pair: int, data_dir: str, cfg: GameConfig):
    os.makedirs(data_dir, exist_ok=True)
    summary_csv = os.path.join(data_dir, 'game_summary.csv')
    trajectory_csv = os.path.join(data_dir, 'game_trajectory.csv')
    tournament_csv = os.path.join(data_dir, 'tournament_summary.csv')
    agent_csv = os.path.join(data_dir, 'agent_stats.csv')
    chart_png = os.path.join(data_dir, 'win_percentages.png')

    agent_stats = defaultdict(lambda: defaultdict(int))
    tournament_rows = []
    timestamp_base = datetime.datetime.now(datetime.timezone.utc).isoformat()

    pairs = list(itertools.product(agent_keys, agent_keys))
    total_games = len(pairs) * games_per_pair
    game_counter = 0

    for (a0_key, a1_key) in pairs:
        pair = defaultdict(int)
        for i in range(games_per_pair):
            game_counter += 1
            ts = datetime.datetime.now(datetime.timezone.utc).isoformat()
            print(f"Running {game_counter}/{total_games}: {a0_key} (0) vs {a1_key} (1) game {i+1}/{games_per_pair}...", end=' ')
            summary, trajectory = run_full_game([a0_key, a1_key], cfg, i, ts)
            csv_io.append_row_to_csv(summary, summary_csv, csv_io.get_summary_header())
            csv_io.append_rows_to_csv(trajectory, trajectory_csv, csv_io.get_trajectory_header())

            winner = summary['winner']
            if winner is None:
                pair['unfinished'] += 1
            elif winner.startswith('p0:'):
                pair['wins_agent0'] += 1
                agent_stats[a0_key]['wins'] += 1
                agent_stats[a0_key]['wins_as_start'] += 1
            else:
                pair['wins_agent1'] += 1
                agent_stats[a1_key]['wins'] += 1
                agent_stats[a1_key]['wins_as_second'] += 1
            agent_stats[a0_key]['games'] += 1
            agent_stats[a1_key]['games'] += 1

            for key in ('moves', 'rounds_played', 'dudos', 'calzas', 'successful_dudos', 'successful_calzas'):
                pair[key] += int(summary[key] or 0)
            print('done')

        tournament_rows.append({
            'timestamp': timestamp_base,
            'agent0': a0_key,
            'agent1': a1_key,
            'games': games_per_pair,
            'wins_agent0': pair['wins_agent0'],
            'wins_agent1': pair['wins_agent1'],
            'beginner_win_ratio': (pair['wins_agent0'] / games_per_pair) if games_per_pair > 0 else 0.0,
            'avg_moves': (pair['moves'] / games_per_pair) if games_per_pair > 0 else 0.0,
            'avg_rounds': (pair['rounds_played'] / games_per_pair) if games_per_pair > 0 else 0.0,
            'total_dudos': pair['dudos'],
            'total_calzas': pair['calzas'],
            'successful_dudos': pair['successful_dudos'],
            'successful_calzas': pair['successful_calzas'],
            'unfinished': pair['unfinished'],
        })

    csv_io.append_rows_to_csv(tournament_rows, tournament_csv, TOURNAMENT_HEADER)

    agent_rows = []
    for agent in sorted(agent_keys):
        g = agent_stats[agent].get('games', 0)
        w = agent_stats[agent].get('wins', 0)
        win_percent = (w / g * 100.0) if g > 0 else 0.0
        agent_rows.append({
            'agent': agent,
            'games': g,
            'wins': w,
            'win_percent': f"{win_percent:.3f}",
            'wins_as_start': agent_stats[agent].get('wins_as_start', 0),
            'wins_as_second': agent_stats[agent].get('wins_as_second', 0),
        })
    csv_io.append_rows_to_csv(agent_rows, agent_csv, AGENT_HEADER)

    aggregate_and_plot(agent_stats, chart_png)

    print(f"Tournament finished. Game summaries saved to {summary_csv}, trajectories to {trajectory_csv}")
    print(f"Tournament summary: {tournament_csv}")
    print(f"Per-agent stats: {agent_csv}")
    print(f"Win percentage chart: {chart_png}")


def main():
    parser = argparse.ArgumentParser(description='Run a round-robin 1v1 tournament of full Perudo games between agents')
    parser.add_argument('--agents', type=str, default='all', help='Comma-separated list of agent keys from AGENT_MAP or "all"')
    parser.add_argument('--games', type=int, default=10, help='Number of games per ordered pairing')
    parser.add_argument('--dice', type=int, default=5, help='Dice per player at start')
    parser.add_argument('--data-dir', type=str, default='data', help='Directory to save csv and charts')
    parser.add_argument('--log-level', type=str, default='WARNING')
    args = parser.parse_args()
    logging.basicConfig(level=args.log_level.upper())

    agent_keys = parse_agent_list(args.agents)
    unknown = [a for a in agent_keys if a not in AGENT_MAP]
    if unknown:
        raise SystemExit(f"Unknown agents: {unknown}. Supported: {list(AGENT_MAP.keys())}")

    run_tournament(agent_keys, args.games, args.data_dir, GameConfig(max_dice=args.dice, rng_seed=None))


if __name__ == '__main__':
    main()
