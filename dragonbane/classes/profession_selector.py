"""
Profession selection, biased toward non-casters.

Mages make up 10% of generated characters; the school is then uniform.
"""

import logging

from dragonbane.classes.profession_data import caster_professions, non_caster_professions
from dragonbane.data_models import Profession
from dragonbane.oracle.dice_rng_adapter import RandomSource

logger = logging.getLogger(__name__)

CASTER_CHANCE = 0.10


def select_profession(rng: RandomSource) -> Profession:
    """Select a profession: 10% uniform among mages, else uniform among the rest."""
    if rng.random() < CASTER_CHANCE:
        profession = rng.choice(caster_professions())
    else:
        profession = rng.choice(non_caster_professions())
    logger.debug(f"Selected profession {profession.value}")
    return profession
