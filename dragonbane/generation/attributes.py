"""
Attribute and age generation.

Each attribute is rolled as 4d6 keep the highest three. The best of the six
rolls goes to the profession's key attribute, the other five are shuffled
onto the remaining attributes, and age modifiers are applied last.
Scores are not clamped; an old character can end up below 3.
"""

import logging
from typing import Sequence

from dragonbane.classes.profession_data import get_profession_definition
from dragonbane.data_models import Age, Attribute, Profession
from dragonbane.oracle.dice_rng_adapter import RandomSource

logger = logging.getLogger(__name__)

ATTRIBUTE_COUNT = len(Attribute)
DICE_ROLLED = 4
DICE_KEPT = 3

AGE_MODIFIERS: dict[Age, dict[Attribute, int]] = {
    Age.YOUNG: {
        Attribute.AGILITY: 1,
        Attribute.CONSTITUTION: 1,
    },
    Age.ADULT: {},
    Age.OLD: {
        Attribute.STRENGTH: -2,
        Attribute.AGILITY: -2,
        Attribute.CONSTITUTION: -2,
        Attribute.INTELLIGENCE: 1,
        Attribute.WILLPOWER: 1,
    },
}


def roll_age(rng: RandomSource) -> Age:
    """Roll a d6: 1-3 young, 4-5 adult, 6 old."""
    roll = rng.randint(1, 6)
    if roll <= 3:
        return Age.YOUNG
    elif roll <= 5:
        return Age.ADULT
    return Age.OLD


def roll_ability_score(rng: RandomSource) -> int:
    """4d6, sum of the highest three."""
    dice = [rng.randint(1, 6) for _ in range(DICE_ROLLED)]
    return sum(sorted(dice, reverse=True)[:DICE_KEPT])


def assign_attributes(
    rolls: Sequence[int],
    key_attribute: Attribute,
    rng: RandomSource,
) -> dict[Attribute, int]:
    """
    Distribute six raw rolls over the attributes.

    The highest roll (first occurrence on ties) goes to key_attribute. The
    other five are shuffled and handed out to the non-key attributes in
    catalog order.

    Args:
        rolls: Exactly six raw scores
        key_attribute: The profession's key attribute
        rng: Random source for the shuffle

    Returns:
        Mapping of every attribute to its pre-modifier score

    Raises:
        ValueError: If rolls does not hold one score per attribute
    """
    if len(rolls) != ATTRIBUTE_COUNT:
        raise ValueError(f"Expected {ATTRIBUTE_COUNT} rolls, got {len(rolls)}")

    remaining = list(rolls)
    best_index = remaining.index(max(remaining))
    best = remaining.pop(best_index)
    rng.shuffle(remaining)

    scores = {key_attribute: best}
    others = [attribute for attribute in Attribute if attribute != key_attribute]
    for attribute, score in zip(others, remaining):
        scores[attribute] = score

    return {attribute: scores[attribute] for attribute in Attribute}


def apply_age_modifiers(attributes: dict[Attribute, int], age: Age) -> dict[Attribute, int]:
    """Return a copy of attributes with the age band's modifiers applied once."""
    modified = dict(attributes)
    for attribute, delta in AGE_MODIFIERS[age].items():
        modified[attribute] = modified[attribute] + delta
    return modified


def generate_attributes(profession: Profession, age: Age, rng: RandomSource) -> dict[Attribute, int]:
    """
    Roll, assign and age-adjust all six attributes.

    Args:
        profession: Determines the key attribute
        age: Determines the modifiers
        rng: Random source

    Returns:
        Final attribute scores in catalog order
    """
    key_attribute = get_profession_definition(profession).key_attribute
    rolls = [roll_ability_score(rng) for _ in range(ATTRIBUTE_COUNT)]
    assigned = assign_attributes(rolls, key_attribute, rng)
    final = apply_age_modifiers(assigned, age)
    summary = ", ".join(f"{a.abbreviation} {v}" for a, v in final.items())
    logger.debug(f"Attributes for {profession.value} ({age.value}): rolls={rolls}, final: {summary}")
    return final
