"""
Profession system for Dragonbane.

Exports the profession catalog, starting spell lists and the weighted
profession selector.
"""

from dragonbane.classes.profession_data import (
    PROFESSION_DEFINITIONS,
    ProfessionDefinition,
    caster_professions,
    get_profession_definition,
    non_caster_professions,
)
from dragonbane.classes.profession_selector import select_profession
from dragonbane.classes.spells import (
    GENERAL_MAGIC,
    SCHOOL_SPELLS,
    SpellList,
    available_spells,
    select_starting_magic,
)

__all__ = [
    "PROFESSION_DEFINITIONS",
    "ProfessionDefinition",
    "caster_professions",
    "get_profession_definition",
    "non_caster_professions",
    "select_profession",
    "GENERAL_MAGIC",
    "SCHOOL_SPELLS",
    "SpellList",
    "available_spells",
    "select_starting_magic",
]
