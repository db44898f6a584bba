"""
Core data structures for Dragonbane professions.

Defines ProfessionDefinition for the 12 professions: Artisan, Bard, Fighter,
Hunter, Knight, the three Mage schools (Animist, Elementalist, Mentalist),
Mariner, Merchant, Scholar and Thief.

Source: Dragonbane Core Rules, Chapter 1 (Professions)
"""

from dataclasses import dataclass
from typing import Optional

from dragonbane.data_models import Attribute, HeroicAbility, Profession, Skill


@dataclass(frozen=True)
class ProfessionDefinition:
    """
    Static rules data for one profession.

    The skill pool is ordered as printed; six of its entries become trained
    skills at creation. A non-empty bonus ability pool grants exactly one
    ability, drawn at random.
    """
    profession: Profession
    key_attribute: Attribute
    skills: tuple[Skill, ...]
    bonus_abilities: tuple[HeroicAbility, ...] = ()
    magic_school: Optional[str] = None  # Secondary skill for mages

    @property
    def name(self) -> str:
        return self.profession.value

    @property
    def is_caster(self) -> bool:
        return self.magic_school is not None


PROFESSION_DEFINITIONS: dict[Profession, ProfessionDefinition] = {
    definition.profession: definition
    for definition in (
        ProfessionDefinition(
            profession=Profession.ARTISAN,
            key_attribute=Attribute.STRENGTH,
            skills=(
                Skill.AXES, Skill.BRAWLING, Skill.CRAFTING, Skill.HAMMERS,
                Skill.KNIVES, Skill.SLEIGHT_OF_HAND, Skill.SPOT_HIDDEN, Skill.SWORDS,
            ),
            bonus_abilities=(
                HeroicAbility.MASTER_BLACKSMITH,
                HeroicAbility.MASTER_CARPENTER,
                HeroicAbility.MASTER_TANNER,
            ),
        ),
        ProfessionDefinition(
            profession=Profession.BARD,
            key_attribute=Attribute.CHARISMA,
            skills=(
                Skill.ACROBATICS, Skill.BLUFFING, Skill.EVADE, Skill.KNIVES,
                Skill.LANGUAGE, Skill.MYTHS_AND_LEGENDS, Skill.PERFORMANCE, Skill.PERSUASION,
            ),
            bonus_abilities=(HeroicAbility.MUSICIAN,),
        ),
        ProfessionDefinition(
            profession=Profession.FIGHTER,
            key_attribute=Attribute.STRENGTH,
            skills=(
                Skill.AXES, Skill.BOWS, Skill.BRAWLING, Skill.CROSSBOWS,
                Skill.EVADE, Skill.HAMMERS, Skill.SPEARS, Skill.SWORDS,
            ),
            bonus_abilities=(HeroicAbility.VETERAN,),
        ),
        ProfessionDefinition(
            profession=Profession.HUNTER,
            key_attribute=Attribute.AGILITY,
            skills=(
                Skill.ACROBATICS, Skill.AWARENESS, Skill.BOWS, Skill.BUSHCRAFT,
                Skill.HUNTING_AND_FISHING, Skill.KNIVES, Skill.SLINGS, Skill.SNEAKING,
            ),
            bonus_abilities=(HeroicAbility.COMPANION,),
        ),
        ProfessionDefinition(
            profession=Profession.KNIGHT,
            key_attribute=Attribute.STRENGTH,
            skills=(
                Skill.BEAST_LORE, Skill.HAMMERS, Skill.MYTHS_AND_LEGENDS, Skill.PERFORMANCE,
                Skill.PERSUASION, Skill.RIDING, Skill.SPEARS, Skill.SWORDS,
            ),
            bonus_abilities=(HeroicAbility.GUARDIAN,),
        ),
        ProfessionDefinition(
            profession=Profession.ANIMIST,
            key_attribute=Attribute.WILLPOWER,
            skills=(
                Skill.BEAST_LORE, Skill.BUSHCRAFT, Skill.EVADE, Skill.HEALING,
                Skill.HUNTING_AND_FISHING, Skill.SNEAKING, Skill.STAVES,
            ),
            magic_school="Animism",
        ),
        ProfessionDefinition(
            profession=Profession.ELEMENTALIST,
            key_attribute=Attribute.WILLPOWER,
            skills=(
                Skill.AWARENESS, Skill.EVADE, Skill.HEALING, Skill.LANGUAGE,
                Skill.MYTHS_AND_LEGENDS, Skill.SPOT_HIDDEN, Skill.STAVES,
            ),
            magic_school="Elementalism",
        ),
        ProfessionDefinition(
            profession=Profession.MENTALIST,
            key_attribute=Attribute.INTELLIGENCE,
            skills=(
                Skill.ACROBATICS, Skill.AWARENESS, Skill.BRAWLING, Skill.EVADE,
                Skill.HEALING, Skill.LANGUAGE, Skill.MYTHS_AND_LEGENDS,
            ),
            magic_school="Mentalism",
        ),
        ProfessionDefinition(
            profession=Profession.MARINER,
            key_attribute=Attribute.AGILITY,
            skills=(
                Skill.ACROBATICS, Skill.AWARENESS, Skill.HUNTING_AND_FISHING, Skill.KNIVES,
                Skill.LANGUAGE, Skill.SEAMANSHIP, Skill.SWIMMING, Skill.SWORDS,
            ),
            bonus_abilities=(HeroicAbility.SEA_LEGS,),
        ),
        ProfessionDefinition(
            profession=Profession.MERCHANT,
            key_attribute=Attribute.CHARISMA,
            skills=(
                Skill.AWARENESS, Skill.BARTERING, Skill.BLUFFING, Skill.EVADE,
                Skill.KNIVES, Skill.PERSUASION, Skill.SLEIGHT_OF_HAND, Skill.SPOT_HIDDEN,
            ),
            bonus_abilities=(HeroicAbility.TREASURE_HUNTER,),
        ),
        ProfessionDefinition(
            profession=Profession.SCHOLAR,
            key_attribute=Attribute.INTELLIGENCE,
            skills=(
                Skill.AWARENESS, Skill.BEAST_LORE, Skill.BUSHCRAFT, Skill.EVADE,
                Skill.HEALING, Skill.LANGUAGE, Skill.MYTHS_AND_LEGENDS, Skill.SPOT_HIDDEN,
            ),
            bonus_abilities=(HeroicAbility.INTUITION,),
        ),
        ProfessionDefinition(
            profession=Profession.THIEF,
            key_attribute=Attribute.AGILITY,
            skills=(
                Skill.ACROBATICS, Skill.AWARENESS, Skill.BLUFFING, Skill.EVADE,
                Skill.KNIVES, Skill.SLEIGHT_OF_HAND, Skill.SNEAKING, Skill.SPOT_HIDDEN,
            ),
            bonus_abilities=(HeroicAbility.BACKSTABBING,),
        ),
    )
}


def get_profession_definition(profession: Profession) -> ProfessionDefinition:
    """Look up the rules data for a profession."""
    return PROFESSION_DEFINITIONS[profession]


def caster_professions() -> list[Profession]:
    return [p for p, d in PROFESSION_DEFINITIONS.items() if d.is_caster]


def non_caster_professions() -> list[Profession]:
    return [p for p, d in PROFESSION_DEFINITIONS.items() if not d.is_caster]
