"""
reward.py
Defines reward calculation for Perudo trajectory data.
Allows easy modification of reward schemes for different experiments.
"""

from .instructions import REJECTIONS, Loser, Winner


def get_reward(instruction, player_id):
    """
    Returns the reward a player receives for a notification.
    Default scheme:
      - +1 when the player is announced as the winner
      - -1 when the player is announced as a loser
      - -1 for a rejected move (unauthorized move, invalid bid, illegal move)
      - 0 otherwise
    Args:
        instruction (Instruction): The notified instruction.
        player_id: The player receiving the notification.
    Returns:
        int: Reward value.
    """
    if isinstance(instruction, REJECTIONS):
        return -1
    if isinstance(instruction, Winner):
        return 1 if instruction.player_id == player_id else 0
    if isinstance(instruction, Loser):
        return -1 if instruction.player_id == player_id else 0
    return 0
