"""
Randomness seam for the generator.

All generation randomness flows through a RandomSource; DiceRngAdapter is
the seeded, logged implementation backed by DiceRoller.
"""

from dragonbane.oracle.dice_rng_adapter import (
    DiceRngAdapter,
    RandomSource,
    draw_without_replacement,
    shuffled,
    weighted_choice,
)

__all__ = [
    "DiceRngAdapter",
    "RandomSource",
    "draw_without_replacement",
    "shuffled",
    "weighted_choice",
]
