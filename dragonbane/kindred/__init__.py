"""
Kin (race) system for Dragonbane.

This module provides:
- KinDefinition: Static rules data for a kin
- KIN_DEFINITIONS: The catalog, keyed by Kin
- select_kin: Tiered weighted kin selection

Kin tiers:
- Common: Human, Halfling, Dwarf, Elf, Mallard, Wolfkin
- Nightkin: Goblin, Hobgoblin, Ogre, Orc
- Rare: Cat People, Frog People, Karkion, Lizard People, Satyr
"""

from dragonbane.kindred.kin_data import (
    KIN_DEFINITIONS,
    KinDefinition,
    get_kin_definition,
    innate_abilities,
    kins_in_category,
)
from dragonbane.kindred.kin_selector import select_kin, select_kin_category

__all__ = [
    # Data structures
    "KIN_DEFINITIONS",
    "KinDefinition",
    "get_kin_definition",
    "innate_abilities",
    "kins_in_category",
    # Selection
    "select_kin",
    "select_kin_category",
]
