"""
Weighted kin selection.

Kin are drawn in two stages: first the tier, then a kin within it.
- 97%: common kin, weighted Human 4, Halfling 3, Dwarf 2, Elf/Mallard/Wolfkin 1
- 2%: nightkin, uniform
- 1%: rare kin, uniform
"""

import logging

from dragonbane.data_models import Kin, KinCategory
from dragonbane.kindred.kin_data import KIN_DEFINITIONS, kins_in_category
from dragonbane.oracle.dice_rng_adapter import RandomSource, weighted_choice

logger = logging.getLogger(__name__)

COMMON_THRESHOLD = 0.97
NIGHTKIN_THRESHOLD = 0.99


def select_kin_category(rng: RandomSource) -> KinCategory:
    """Draw the kin tier from a single uniform float."""
    roll = rng.random()
    if roll < COMMON_THRESHOLD:
        return KinCategory.COMMON
    elif roll < NIGHTKIN_THRESHOLD:
        return KinCategory.NIGHTKIN
    return KinCategory.RARE


def select_kin(rng: RandomSource) -> Kin:
    """
    Select a kin using the tiered weighted distribution.

    Stateless: the result depends only on the values drawn from rng.

    Args:
        rng: Random source

    Returns:
        The selected Kin
    """
    category = select_kin_category(rng)
    if category == KinCategory.COMMON:
        options = [
            (kin, KIN_DEFINITIONS[kin].common_weight)
            for kin in kins_in_category(KinCategory.COMMON)
        ]
        kin = weighted_choice(rng, options)
    else:
        kin = rng.choice(kins_in_category(category))

    logger.debug(f"Selected kin {kin.value} ({category.value})")
    return kin
