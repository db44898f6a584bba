"""
Heroic ability and trained skill assembly.

Every character gets the innate abilities of their kin plus, when the
profession offers any, one bonus ability. Trained skills are six drawn from
the profession's pool followed by age-dependent extras drawn from every
other skill.
"""

import logging

from dragonbane.classes.profession_data import get_profession_definition
from dragonbane.data_models import Age, HeroicAbility, Kin, Profession, Skill
from dragonbane.kindred.kin_data import innate_abilities
from dragonbane.oracle.dice_rng_adapter import RandomSource, draw_without_replacement

logger = logging.getLogger(__name__)

REQUIRED_SKILL_COUNT = 6


def assemble_heroic_abilities(kin: Kin, profession: Profession, rng: RandomSource) -> list[HeroicAbility]:
    """Kin innate abilities, then one draw from the profession's bonus pool."""
    abilities = list(innate_abilities(kin))
    bonus_pool = get_profession_definition(profession).bonus_abilities
    if bonus_pool:
        bonus = rng.choice(bonus_pool)
        if bonus not in abilities:
            abilities.append(bonus)
    return abilities


def select_trained_skills(profession: Profession, age: Age, rng: RandomSource) -> list[Skill]:
    """
    Pick the trained skills for a new character.

    Args:
        profession: Supplies the skill pool for the six required skills
        age: Supplies the number of additional skills (2/4/6)
        rng: Random source

    Returns:
        Six profession skills followed by the age extras, no duplicates
    """
    pool = get_profession_definition(profession).skills
    required = draw_without_replacement(rng, pool, REQUIRED_SKILL_COUNT)
    complement = [skill for skill in Skill if skill not in required]
    additional = draw_without_replacement(rng, complement, age.bonus_skill_count)
    logger.debug(
        f"Trained skills for {profession.value}: required={[s.value for s in required]}, "
        f"additional={[s.value for s in additional]}"
    )
    return required + additional


def expected_skill_count(age: Age) -> int:
    return REQUIRED_SKILL_COUNT + age.bonus_skill_count
