"""
Skill level derivation for Dragonbane.

A skill's level is the base chance of its governing attribute, doubled if
the character is trained in it:

    Attribute  1-5   6-8   9-12   13-15   16-18
    Base        3     4     5      6       7

Levels are always derived from a Character on demand and never stored.
"""

from dataclasses import dataclass
from typing import Any, Optional

from dragonbane.classes.profession_data import get_profession_definition
from dragonbane.data_models import Attribute, Character, Skill

TRAINED_MULTIPLIER = 2

SKILL_ATTRIBUTES: dict[Skill, Attribute] = {
    Skill.ACROBATICS: Attribute.AGILITY,
    Skill.AWARENESS: Attribute.INTELLIGENCE,
    Skill.BARTERING: Attribute.CHARISMA,
    Skill.BEAST_LORE: Attribute.INTELLIGENCE,
    Skill.BLUFFING: Attribute.CHARISMA,
    Skill.BUSHCRAFT: Attribute.INTELLIGENCE,
    Skill.CRAFTING: Attribute.STRENGTH,
    Skill.EVADE: Attribute.AGILITY,
    Skill.HEALING: Attribute.INTELLIGENCE,
    Skill.HUNTING_AND_FISHING: Attribute.AGILITY,
    Skill.LANGUAGE: Attribute.INTELLIGENCE,
    Skill.MYTHS_AND_LEGENDS: Attribute.INTELLIGENCE,
    Skill.PERFORMANCE: Attribute.CHARISMA,
    Skill.PERSUASION: Attribute.CHARISMA,
    Skill.RIDING: Attribute.AGILITY,
    Skill.SEAMANSHIP: Attribute.INTELLIGENCE,
    Skill.SLEIGHT_OF_HAND: Attribute.AGILITY,
    Skill.SNEAKING: Attribute.AGILITY,
    Skill.SPOT_HIDDEN: Attribute.INTELLIGENCE,
    Skill.SWIMMING: Attribute.AGILITY,
    # Weapon skills
    Skill.AXES: Attribute.STRENGTH,
    Skill.BOWS: Attribute.AGILITY,
    Skill.BRAWLING: Attribute.STRENGTH,
    Skill.CROSSBOWS: Attribute.AGILITY,
    Skill.HAMMERS: Attribute.STRENGTH,
    Skill.KNIVES: Attribute.AGILITY,
    Skill.SLINGS: Attribute.AGILITY,
    Skill.SPEARS: Attribute.STRENGTH,
    Skill.STAVES: Attribute.AGILITY,
    Skill.SWORDS: Attribute.STRENGTH,
}

# Magic school skills are rated from the caster's INT
MAGIC_SCHOOL_ATTRIBUTE = Attribute.INTELLIGENCE


@dataclass(frozen=True)
class SkillLevel:
    """One derived skill rating."""
    name: str
    attribute: Attribute
    level: int
    trained: bool

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "attribute": self.attribute.abbreviation,
            "level": self.level,
            "trained": self.trained,
        }


def base_chance(score: int) -> int:
    """Untrained skill level for an attribute score."""
    if score < 6:
        return 3
    elif score <= 8:
        return 4
    elif score <= 12:
        return 5
    elif score <= 15:
        return 6
    return 7


def trained_level(score: int) -> int:
    return base_chance(score) * TRAINED_MULTIPLIER


def skill_level(skill: Skill, character: Character) -> int:
    """
    Derive the level of one skill.

    Args:
        skill: The skill to rate
        character: Supplies the attribute score and trained list

    Returns:
        Base chance of the governing attribute, doubled when trained
    """
    score = character.attribute(SKILL_ATTRIBUTES[skill])
    if character.is_trained(skill):
        return trained_level(score)
    return base_chance(score)


def skill_levels(character: Character) -> dict[Skill, int]:
    """Levels for every skill in catalog order."""
    return {skill: skill_level(skill, character) for skill in Skill}


def describe_skill(skill: Skill, character: Character) -> SkillLevel:
    return SkillLevel(
        name=skill.value,
        attribute=SKILL_ATTRIBUTES[skill],
        level=skill_level(skill, character),
        trained=character.is_trained(skill),
    )


def magic_school_level(character: Character) -> Optional[SkillLevel]:
    """
    The caster's magic school skill, or None for non-casters.

    Every mage is trained in their own school, so the level is always the
    trained level of the governing attribute.
    """
    school = get_profession_definition(character.profession).magic_school
    if school is None:
        return None
    return SkillLevel(
        name=school,
        attribute=MAGIC_SCHOOL_ATTRIBUTE,
        level=trained_level(character.attribute(MAGIC_SCHOOL_ATTRIBUTE)),
        trained=True,
    )
