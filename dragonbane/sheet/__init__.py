"""
Character sheet projection.

This module provides:
- project_sheet: Character -> CharacterSheetPayload
- CharacterSheetPayload: the sheet record, with normalize() and to_dict()/from_dict()
- Equipment presets and matching used to fill armour, helmet and weapon slots
"""

from dragonbane.sheet.equipment_catalog import (
    ARMOUR_PRESETS,
    HELMET_PRESETS,
    WEAPON_PRESETS,
    ArmourBlock,
    CurrencyAccumulator,
    HelmetBlock,
    WeaponEntry,
    format_grip,
    match_armour,
    match_helmet,
    match_weapon,
    normalize_equipment_string,
)
from dragonbane.sheet.sheet_projector import (
    CharacterSheetPayload,
    InventoryItem,
    SkillEntry,
    SpellEntry,
    agility_movement_modifier,
    default_encumbrance_limit,
    default_movement,
    project_sheet,
)

__all__ = [
    # Equipment
    "ARMOUR_PRESETS",
    "HELMET_PRESETS",
    "WEAPON_PRESETS",
    "ArmourBlock",
    "CurrencyAccumulator",
    "HelmetBlock",
    "WeaponEntry",
    "format_grip",
    "match_armour",
    "match_helmet",
    "match_weapon",
    "normalize_equipment_string",
    # Sheet
    "CharacterSheetPayload",
    "InventoryItem",
    "SkillEntry",
    "SpellEntry",
    "agility_movement_modifier",
    "default_encumbrance_limit",
    "default_movement",
    "project_sheet",
]
