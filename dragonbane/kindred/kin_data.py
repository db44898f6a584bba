"""
Kin catalog for Dragonbane.

One KinDefinition per Kin: its tier (common, nightkin, rare), the innate
heroic abilities every member starts with, the relative weight used when
drawing among common kin, and the base movement used on the character sheet.

Source: Dragonbane Core Rules, Chapter 1 (Kin)
"""

from dataclasses import dataclass

from dragonbane.data_models import HeroicAbility, Kin, KinCategory


@dataclass(frozen=True)
class KinDefinition:
    """Static rules data for one kin."""
    kin: Kin
    category: KinCategory
    innate_abilities: tuple[HeroicAbility, ...]
    common_weight: float = 0.0  # Only meaningful for common kin
    base_movement: int = 10

    @property
    def name(self) -> str:
        return self.kin.value


KIN_DEFINITIONS: dict[Kin, KinDefinition] = {
    definition.kin: definition
    for definition in (
        # Common kin, weights 4/3/2/1/1/1
        KinDefinition(Kin.HUMAN, KinCategory.COMMON, (HeroicAbility.ADAPTIVE,), 4, 10),
        KinDefinition(Kin.HALFLING, KinCategory.COMMON, (HeroicAbility.HARD_TO_CATCH,), 3, 8),
        KinDefinition(Kin.DWARF, KinCategory.COMMON, (HeroicAbility.UNFORGIVING,), 2, 8),
        KinDefinition(Kin.ELF, KinCategory.COMMON, (HeroicAbility.INNER_PEACE,), 1, 10),
        KinDefinition(
            Kin.MALLARD,
            KinCategory.COMMON,
            (HeroicAbility.ILL_TEMPERED, HeroicAbility.WEBBED_FEET),
            1,
            8,
        ),
        KinDefinition(Kin.WOLFKIN, KinCategory.COMMON, (HeroicAbility.HUNTING_INSTINCT,), 1, 12),
        # Nightkin
        KinDefinition(Kin.GOBLIN, KinCategory.NIGHTKIN, (HeroicAbility.RESILIENT,)),
        KinDefinition(Kin.HOBGOBLIN, KinCategory.NIGHTKIN, (HeroicAbility.FEARLESS,)),
        KinDefinition(Kin.OGRE, KinCategory.NIGHTKIN, (HeroicAbility.BODY_SLAM,)),
        KinDefinition(Kin.ORC, KinCategory.NIGHTKIN, (HeroicAbility.TOUGH,)),
        # Rare kin
        KinDefinition(Kin.CAT_PEOPLE, KinCategory.RARE, (HeroicAbility.NINE_LIVES,)),
        KinDefinition(Kin.FROG_PEOPLE, KinCategory.RARE, (HeroicAbility.LEAPING,)),
        KinDefinition(Kin.KARKION, KinCategory.RARE, (HeroicAbility.WINGS,)),
        KinDefinition(Kin.LIZARD_PEOPLE, KinCategory.RARE, (HeroicAbility.CAMOUFLAGE,)),
        KinDefinition(Kin.SATYR, KinCategory.RARE, (HeroicAbility.RAISE_SPIRITS,)),
    )
}


def get_kin_definition(kin: Kin) -> KinDefinition:
    """Look up the rules data for a kin."""
    return KIN_DEFINITIONS[kin]


def kins_in_category(category: KinCategory) -> list[Kin]:
    """All kin of a tier, in catalog order."""
    return [kin for kin, definition in KIN_DEFINITIONS.items() if definition.category == category]


def innate_abilities(kin: Kin) -> tuple[HeroicAbility, ...]:
    return KIN_DEFINITIONS[kin].innate_abilities
