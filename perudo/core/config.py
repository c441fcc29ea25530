"""
config.py
Defines the GameConfig dataclass, which centralizes the rule options and numeric constraints for the Perudo engine.
Related modules:
- engine.py: Uses GameConfig to build the default dealer and to resolve challenges.
- match.py: Uses max_turns as a safety stop for simulated games.
"""

from dataclasses import dataclass
from typing import Tuple, Optional


@dataclass(frozen=True)
class GameConfig:
    """
    Centralizes all rule options and numeric constraints for a Perudo game.
    Fields:
        max_dice (int): Dice dealt to every player at game start.
        faces (tuple): Allowed die faces.
        ones_wild (bool): If True, ones also count towards every other face when a challenge is resolved.
        cap_dice_at_max (bool): If True, a successful calza never grows a hand past max_dice.
        max_turns (int): Max moves per simulated game.
        rng_seed (int|None): Seed for the default dealer; None for non-deterministic dice.
    """
    max_dice: int = 5
    faces: Tuple[int, ...] = (1, 2, 3, 4, 5, 6)
    ones_wild: bool = False
    cap_dice_at_max: bool = True
    max_turns: int = 1000
    rng_seed: Optional[int] = 69
