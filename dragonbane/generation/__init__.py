"""
Character generation pipeline.

This module provides:
- generate_attributes / assign_attributes / apply_age_modifiers / roll_age
- assemble_heroic_abilities / select_trained_skills
- CharacterGenerator and generate_character, with optional filtering
"""

from dragonbane.generation.attributes import (
    AGE_MODIFIERS,
    apply_age_modifiers,
    assign_attributes,
    generate_attributes,
    roll_ability_score,
    roll_age,
)
from dragonbane.generation.character_generator import (
    DEFAULT_MAX_ATTEMPTS,
    CharacterGenerator,
    GenerationExhaustedError,
    GenerationFilters,
    generate_character,
)
from dragonbane.generation.skill_assembler import (
    REQUIRED_SKILL_COUNT,
    assemble_heroic_abilities,
    expected_skill_count,
    select_trained_skills,
)

__all__ = [
    # Attributes
    "AGE_MODIFIERS",
    "apply_age_modifiers",
    "assign_attributes",
    "generate_attributes",
    "roll_ability_score",
    "roll_age",
    # Skills and abilities
    "REQUIRED_SKILL_COUNT",
    "assemble_heroic_abilities",
    "expected_skill_count",
    "select_trained_skills",
    # Assembly
    "DEFAULT_MAX_ATTEMPTS",
    "CharacterGenerator",
    "GenerationExhaustedError",
    "GenerationFilters",
    "generate_character",
]
