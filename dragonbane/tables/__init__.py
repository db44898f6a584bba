"""
Random tables for character generation.

Exports the profession gear tables and the flavor wordlists (weaknesses,
mementos, appearance seeds, placeholder names).
"""

from dragonbane.tables.gear_tables import (
    GEAR_TABLES,
    GearPackage,
    GearTable,
    WeaponAlternatives,
    get_gear_table,
    roll_gear,
)
from dragonbane.tables.wordlists import (
    DEFAULT_WORDLIST_DIR,
    NO_APPEARANCE,
    NO_MEMENTO,
    NO_WEAKNESS,
    PLACEHOLDER_NAMES,
    MissingResourceError,
    WordlistLoader,
    appearance_resource,
    select_appearance_seeds,
    select_memento,
    select_placeholder_name,
    select_weakness,
)

__all__ = [
    # Gear
    "GEAR_TABLES",
    "GearPackage",
    "GearTable",
    "WeaponAlternatives",
    "get_gear_table",
    "roll_gear",
    # Wordlists
    "DEFAULT_WORDLIST_DIR",
    "NO_APPEARANCE",
    "NO_MEMENTO",
    "NO_WEAKNESS",
    "PLACEHOLDER_NAMES",
    "MissingResourceError",
    "WordlistLoader",
    "appearance_resource",
    "select_appearance_seeds",
    "select_memento",
    "select_placeholder_name",
    "select_weakness",
]
