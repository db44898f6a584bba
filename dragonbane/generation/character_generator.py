"""
Character assembly for Dragonbane.

CharacterGenerator runs the full pipeline (kin, profession, age, attributes,
abilities, skills, magic, flavor, gear) against one injected random source
and returns an immutable Character. Filtered generation simply regenerates
until the requested kin/profession/age come up, within an attempt budget.
"""

import logging
from dataclasses import dataclass
from typing import Any, Optional

from dragonbane.classes.profession_selector import select_profession
from dragonbane.classes.spells import select_starting_magic
from dragonbane.data_models import Age, Attribute, Character, Kin, Profession
from dragonbane.generation.attributes import generate_attributes, roll_age
from dragonbane.generation.skill_assembler import assemble_heroic_abilities, select_trained_skills
from dragonbane.kindred.kin_selector import select_kin
from dragonbane.oracle.dice_rng_adapter import DiceRngAdapter, RandomSource
from dragonbane.tables.gear_tables import roll_gear
from dragonbane.tables.wordlists import (
    WordlistLoader,
    select_appearance_seeds,
    select_memento,
    select_placeholder_name,
    select_weakness,
)

logger = logging.getLogger(__name__)

DEFAULT_MAX_ATTEMPTS = 1000


@dataclass(frozen=True)
class GenerationFilters:
    """Optional kin/profession/age constraints. Unset fields match anything."""
    kin: Optional[Kin] = None
    profession: Optional[Profession] = None
    age: Optional[Age] = None

    @property
    def is_empty(self) -> bool:
        return self.kin is None and self.profession is None and self.age is None

    def matches(self, character: Character) -> bool:
        if self.kin is not None and character.kin != self.kin:
            return False
        if self.profession is not None and character.profession != self.profession:
            return False
        if self.age is not None and character.age != self.age:
            return False
        return True

    def to_dict(self) -> dict[str, Any]:
        return {
            "kin": self.kin.value if self.kin else None,
            "profession": self.profession.value if self.profession else None,
            "age": self.age.value if self.age else None,
        }

    def __str__(self) -> str:
        parts = [f"{k}={v}" for k, v in self.to_dict().items() if v is not None]
        return ", ".join(parts) if parts else "no filters"


class GenerationExhaustedError(Exception):
    """Raised when filtered generation finds no match within its attempt budget."""

    def __init__(self, attempts: int, filters: GenerationFilters):
        self.attempts = attempts
        self.filters = filters
        super().__init__(f"No character matching ({filters}) after {attempts} attempts")


class CharacterGenerator:
    """
    Generates complete Dragonbane characters.

    Usage:
        generator = CharacterGenerator(rng=DiceRngAdapter.seeded(42))
        character = generator.generate()
        fighter = generator.generate_matching(GenerationFilters(profession=Profession.FIGHTER))
    """

    def __init__(
        self,
        rng: Optional[RandomSource] = None,
        wordlists: Optional[WordlistLoader] = None,
        placeholder_names: bool = False,
    ):
        """
        Initialize the generator.

        Args:
            rng: Random source; a fresh unseeded DiceRngAdapter if None
            wordlists: Loader for flavor wordlists; the packaged lists if None
            placeholder_names: Give characters a name from the fixed name list
                instead of leaving it for narrative enrichment
        """
        self.rng = rng if rng is not None else DiceRngAdapter(reason_prefix="CharacterGenerator")
        self.wordlists = wordlists if wordlists is not None else WordlistLoader()
        self.placeholder_names = placeholder_names

    def generate(self) -> Character:
        """Generate one unconstrained character."""
        rng = self.rng

        kin = select_kin(rng)
        profession = select_profession(rng)
        age = roll_age(rng)
        attributes = generate_attributes(profession, age, rng)
        abilities = assemble_heroic_abilities(kin, profession, rng)
        trained_skills = select_trained_skills(profession, age, rng)
        magic = select_starting_magic(profession, rng)
        weakness = select_weakness(self.wordlists, rng)
        memento = select_memento(self.wordlists, rng)
        gear = roll_gear(profession, rng)
        appearance_seeds = select_appearance_seeds(self.wordlists, kin, rng)
        name = select_placeholder_name(rng) if self.placeholder_names else ""

        character = Character(
            name=name,
            kin=kin,
            profession=profession,
            age=age,
            strength=attributes[Attribute.STRENGTH],
            constitution=attributes[Attribute.CONSTITUTION],
            agility=attributes[Attribute.AGILITY],
            intelligence=attributes[Attribute.INTELLIGENCE],
            willpower=attributes[Attribute.WILLPOWER],
            charisma=attributes[Attribute.CHARISMA],
            heroic_abilities=tuple(abilities),
            trained_skills=tuple(trained_skills),
            magic=tuple(magic),
            weakness=weakness,
            memento=memento,
            gear=tuple(gear),
            appearance_seeds=tuple(appearance_seeds),
        )
        logger.info(f"Generated {kin.value} {profession.value} ({age.value})")
        return character

    def generate_matching(
        self,
        filters: Optional[GenerationFilters] = None,
        max_attempts: int = DEFAULT_MAX_ATTEMPTS,
    ) -> Character:
        """
        Regenerate until a character matches every set filter field.

        Args:
            filters: Constraints; None or empty filters accept the first character
            max_attempts: Attempt budget

        Returns:
            The first matching character

        Raises:
            GenerationExhaustedError: If no attempt matched
        """
        filters = filters or GenerationFilters()
        for attempt in range(1, max_attempts + 1):
            candidate = self.generate()
            if filters.matches(candidate):
                if attempt > 1:
                    logger.debug(f"Matched ({filters}) on attempt {attempt}")
                return candidate

        logger.warning(f"Filtered generation exhausted after {max_attempts} attempts ({filters})")
        raise GenerationExhaustedError(max_attempts, filters)


def generate_character(
    rng: Optional[RandomSource] = None,
    filters: Optional[GenerationFilters] = None,
    max_attempts: int = DEFAULT_MAX_ATTEMPTS,
    wordlists: Optional[WordlistLoader] = None,
    placeholder_names: bool = False,
) -> Character:
    """
    Convenience wrapper around CharacterGenerator.

    Without filters this is a single generate() call; with filters it is
    generate_matching() and can raise GenerationExhaustedError.
    """
    generator = CharacterGenerator(rng=rng, wordlists=wordlists, placeholder_names=placeholder_names)
    if filters is None or filters.is_empty:
        return generator.generate()
    return generator.generate_matching(filters, max_attempts=max_attempts)
