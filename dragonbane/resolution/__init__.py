"""Skill level derivation for Dragonbane characters."""

from dragonbane.resolution.skill_resolver import (
    SKILL_ATTRIBUTES,
    SkillLevel,
    base_chance,
    describe_skill,
    magic_school_level,
    skill_level,
    skill_levels,
    trained_level,
)

__all__ = [
    "SKILL_ATTRIBUTES",
    "SkillLevel",
    "base_chance",
    "describe_skill",
    "magic_school_level",
    "skill_level",
    "skill_levels",
    "trained_level",
]
