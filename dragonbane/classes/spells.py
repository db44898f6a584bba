"""
Starting spell lists for the three mage professions.

Each school has its own magic tricks and rank 1 spells, and every mage also
draws from the general magic lists of the same tier. A new mage knows three
tricks and three rank 1 spells.
"""

import logging
from dataclasses import dataclass

from dragonbane.data_models import Profession
from dragonbane.oracle.dice_rng_adapter import RandomSource, draw_without_replacement

logger = logging.getLogger(__name__)

STARTING_TRICKS = 3
STARTING_RANK_1 = 3


@dataclass(frozen=True)
class SpellList:
    """Tricks and rank 1 spells for one school of magic."""
    school: str
    tricks: tuple[str, ...]
    rank_1: tuple[str, ...]


GENERAL_MAGIC = SpellList(
    school="General Magic",
    tricks=("FETCH", "FLICK", "LIGHT", "OPEN/CLOSE", "REPAIR CLOTHES", "SENSE MAGIC"),
    rank_1=("DISPEL", "PROTECTOR"),
)

SCHOOL_SPELLS: dict[Profession, SpellList] = {
    Profession.ANIMIST: SpellList(
        school="Animism",
        tricks=("BIRDSONG", "CLEAN", "COOK FOOD", "FLORAL TRAIL", "HAIRSTYLE"),
        rank_1=("ANIMAL WHISPERER", "BANISH", "ENSNARING ROOTS", "LIGHTNING FLASH", "TREAT WOUND"),
    ),
    Profession.ELEMENTALIST: SpellList(
        school="Elementalism",
        tricks=("HEAT/CHILL", "IGNITE", "PUFF OF SMOKE"),
        rank_1=("FIREBALL", "FROST", "GUST OF WIND", "PILLAR", "SHATTER"),
    ),
    Profession.MENTALIST: SpellList(
        school="Mentalism",
        tricks=("LOCK/UNLOCK", "MAGIC STOOL", "SLOW FALL"),
        rank_1=("FARSIGHT", "LEVITATE", "LONGSTRIDER", "POWER FIST", "STONE SKIN"),
    ),
}


def available_spells(profession: Profession) -> tuple[list[str], list[str]]:
    """
    The trick and rank 1 pools a profession draws its starting magic from.

    Returns:
        (tricks, rank_1); both empty for non-casters
    """
    school = SCHOOL_SPELLS.get(profession)
    if school is None:
        return [], []
    return (
        list(school.tricks) + list(GENERAL_MAGIC.tricks),
        list(school.rank_1) + list(GENERAL_MAGIC.rank_1),
    )


def select_starting_magic(profession: Profession, rng: RandomSource) -> list[str]:
    """
    Pick the starting spells for a profession.

    Args:
        profession: The character's profession
        rng: Random source

    Returns:
        Three tricks followed by three rank 1 spells, or [] for non-casters
    """
    tricks, rank_1 = available_spells(profession)
    if not tricks and not rank_1:
        return []

    selected = (
        draw_without_replacement(rng, tricks, STARTING_TRICKS)
        + draw_without_replacement(rng, rank_1, STARTING_RANK_1)
    )
    logger.debug(f"Starting magic for {profession.value}: {selected}")
    return selected
