"""
Dragonbane Starting Gear Tables.

Every profession has three starting loadouts chosen with a d6 (1-2 first,
3-4 second, 5-6 third), plus a profession-specific number of field rations
and silver. Some loadouts let the character pick one weapon from a short
list of alternatives; the generator picks it at random.

Source: Dragonbane Core Rules, Chapter 1 (Gear)
"""

import logging
from dataclasses import dataclass
from typing import Union

from dragonbane.data_models import Profession
from dragonbane.oracle.dice_rng_adapter import RandomSource

logger = logging.getLogger(__name__)

PACKAGE_DIE = 6


@dataclass(frozen=True)
class WeaponAlternatives:
    """A slot in a loadout filled with one of several weapons."""
    options: tuple[str, ...]


GearEntry = Union[str, WeaponAlternatives]


@dataclass(frozen=True)
class GearPackage:
    """One fixed starting loadout."""
    entries: tuple[GearEntry, ...]

    @property
    def has_alternatives(self) -> bool:
        return any(isinstance(entry, WeaponAlternatives) for entry in self.entries)


@dataclass(frozen=True)
class GearTable:
    """
    A profession's gear table.

    Attributes:
        packages: Exactly three loadouts, indexed by d6 band
        ration_die: Field rations are rolled 1..ration_die
        silver_die: Silver is rolled 1..silver_die
    """
    packages: tuple[GearPackage, GearPackage, GearPackage]
    ration_die: int
    silver_die: int

    def package_for_roll(self, roll: int) -> GearPackage:
        """Map a d6 roll onto a loadout."""
        if roll <= 2:
            return self.packages[0]
        elif roll <= 4:
            return self.packages[1]
        return self.packages[2]


def _package(*entries: GearEntry) -> GearPackage:
    return GearPackage(entries=tuple(entries))


def _pick(*options: str) -> WeaponAlternatives:
    return WeaponAlternatives(options=tuple(options))


# =============================================================================
# GEAR TABLES
# =============================================================================

MAGE_GEAR = GearTable(
    packages=(
        _package("Staff", "Orbuculum", "Grimoire", "Torch", "Flint & Tinder"),
        _package("Knife", "Wand", "Grimoire", "Torch", "Flint & Tinder"),
        _package("Amulet", "Sleeping Fur", "Grimoire", "Torch", "Flint & Tinder"),
    ),
    ration_die=6,
    silver_die=8,
)

GEAR_TABLES: dict[Profession, GearTable] = {
    Profession.ARTISAN: GearTable(
        packages=(
            _package(
                "Warhammer, Light", "Leather Armour", "Blacksmithing Tools",
                "Torch", "Flint & Tinder",
            ),
            _package(
                "Handaxe", "Leather Armour", "Carpentry Tools", "Torch",
                "Rope (10 meters)", "Flint & Tinder",
            ),
            _package(
                "Knife", "Leather Armour", "Tanning Tools", "Lantern",
                "Lamp Oil", "Flint & Tinder",
            ),
        ),
        ration_die=8,
        silver_die=8,
    ),
    Profession.BARD: GearTable(
        packages=(
            _package("Lyre", "Knife", "Oil Lamp", "Lamp Oil", "Flint & Tinder"),
            _package("Flute", "Dagger", "Rope (10 meters)", "Torch", "Flint & Tinder"),
            _package("Horn", "Knife", "Torch", "Flint & Tinder"),
        ),
        ration_die=6,
        silver_die=8,
    ),
    Profession.FIGHTER: GearTable(
        packages=(
            _package(
                _pick("Broadsword", "Battleaxe", "Morningstar"),
                "Shield", "Chainmail Armour", "Torch", "Flint & Tinder",
            ),
            _package(
                _pick("Short Sword", "Handaxe", "Short Spear"),
                "Crossbow, Light", "Quiver of Arrows, Iron Head", "Leather Armour",
                "Torch", "Flint & Tinder",
            ),
            _package(
                "Long Spear", "Studded Leather Armour", "Open Helmet",
                "Torch", "Flint & Tinder",
            ),
        ),
        ration_die=6,
        silver_die=6,
    ),
    Profession.HUNTER: GearTable(
        packages=(
            _package(
                "Dagger", "Short Bow", "Quiver of Arrows, Iron Head", "Leather Armour",
                "Sleeping Fur", "Torch", "Flint & Tinder", "Rope (10 meters)", "Snare",
            ),
            _package(
                "Knife", "Longbow", "Quiver of Arrows, Iron Head", "Leather Armour",
                "Sleeping Fur", "Torch", "Flint & Tinder", "Rope (10 meters)", "Fishing Rod",
            ),
            _package(
                "Dagger", "Sling", "Leather Armour", "Sleeping Fur", "Torch",
                "Flint & Tinder", "Rope (10 meters)", "Snare",
            ),
        ),
        ration_die=8,
        silver_die=6,
    ),
    Profession.KNIGHT: GearTable(
        packages=(
            _package(
                _pick("Broadsword", "Morningstar"),
                "Shield, Small", "Plate Armor", "Great Helm", "Torch", "Flint & Tinder",
            ),
            _package(
                _pick("Flail", "Warhammer"),
                "Shield, Small", "Chainmail Armour", "Open Helmet", "Torch", "Flint & Tinder",
            ),
            _package(
                "Short Sword", "Lance", "Shield, Small", "Chainmail Armour",
                "Open Helmet", "Combat Trained Horse",
            ),
        ),
        ration_die=6,
        silver_die=12,
    ),
    Profession.ANIMIST: MAGE_GEAR,
    Profession.ELEMENTALIST: MAGE_GEAR,
    Profession.MENTALIST: MAGE_GEAR,
    Profession.MARINER: GearTable(
        packages=(
            _package(
                "Dagger", "Short Bow", "Quiver of Arrows, Iron Head", "Rope (10 meters)",
                "Grappling Hook", "Sleeping Fur", "Torch", "Flint & Tinder",
            ),
            _package(
                "Scimitar", "Leather Armour", "Rope (10 meters)", "Grappling Hook",
                "Torch", "Flint & Tinder",
            ),
            _package(
                "Trident", "Spyglass", "Rope (10 meters)", "Grappling Hook",
                "Torch", "Flint & Tinder",
            ),
        ),
        ration_die=8,
        silver_die=10,
    ),
    Profession.MERCHANT: GearTable(
        packages=(
            _package(
                "Dagger", "Sleeping Fur", "Torch", "Flint & Tinder",
                "Rope (10 meters)", "Donkey",
            ),
            _package(
                "Knife", "Sleeping Fur", "Lantern", "Lamp Oil", "Flint & Tinder",
                "Field Kitchen", "Donkey", "Cart",
            ),
            _package(
                "Dagger", "Sleeping Fur", "Tent, Large", "Oil Lamp", "Lamp Oil",
                "Flint & Tinder", "Backpack",
            ),
        ),
        ration_die=6,
        silver_die=12,
    ),
    Profession.SCHOLAR: GearTable(
        packages=(
            _package(
                "Staff", "Notebook", "Quill & Ink", "Sleeping Fur", "Torch", "Flint & Tinder",
            ),
            _package(
                "Knife", "Book (any subject)", "Sleeping Fur", "Oil Lamp",
                "Lamp Oil", "Flint & Tinder",
            ),
            _package(
                "Short Sword", "Bandages (10)", "Poison, Sleeping (1 dose)",
                "Sleeping Fur", "Lantern", "Lamp Oil", "Flint & Tinder",
            ),
        ),
        ration_die=6,
        silver_die=10,
    ),
    Profession.THIEF: GearTable(
        packages=(
            _package(
                "Dagger", "Sling", "Rope (10 meters)", "Grappling Hook",
                "Torch", "Flint & Tinder",
            ),
            _package("Knife", "Lockpicks, Simple", "Torch", "Flint & Tinder"),
            _package("2x Dagger", "Marbles", "Rope (10 meters)", "Torch", "Flint & Tinder"),
        ),
        ration_die=6,
        silver_die=10,
    ),
}


# =============================================================================
# ROLLING
# =============================================================================


def get_gear_table(profession: Profession) -> GearTable:
    return GEAR_TABLES[profession]


def roll_gear(profession: Profession, rng: RandomSource) -> list[str]:
    """
    Roll a profession's starting gear.

    Consumes randomness in a fixed order: the package d6, the ration count,
    the silver amount, then the weapon alternative (if the package has one).

    Args:
        profession: The character's profession
        rng: Random source

    Returns:
        Item strings ending with "<n> Field Rations" and "<n> Silver"
    """
    table = GEAR_TABLES[profession]
    package_roll = rng.randint(1, PACKAGE_DIE)
    package = table.package_for_roll(package_roll)
    rations = rng.randint(1, table.ration_die)
    silver = rng.randint(1, table.silver_die)

    gear: list[str] = []
    for entry in package.entries:
        if isinstance(entry, WeaponAlternatives):
            gear.append(rng.choice(entry.options))
        else:
            gear.append(entry)

    gear.append(f"{rations} Field Rations")
    gear.append(f"{silver} Silver")

    logger.debug(
        f"Gear for {profession.value}: package roll {package_roll}, "
        f"{rations} rations, {silver} silver"
    )
    return gear
