"""
Tests for CharacterGenerator, filtered generation and generate_character.

Invariant checks run over many seeds; exact-value checks use ScriptedRng.
"""

import pytest

from dragonbane.classes.profession_data import get_profession_definition
from dragonbane.data_models import Age, Character, Kin, Profession
from dragonbane.generation.character_generator import (
    CharacterGenerator,
    GenerationExhaustedError,
    GenerationFilters,
    generate_character,
)
from dragonbane.generation.skill_assembler import expected_skill_count
from dragonbane.kindred.kin_data import innate_abilities
from dragonbane.oracle.dice_rng_adapter import DiceRngAdapter
from dragonbane.tables.wordlists import PLACEHOLDER_NAMES

from helpers import ScriptedRng


def assert_character_invariants(character: Character) -> None:
    innate = innate_abilities(character.kin)
    assert character.heroic_abilities[:len(innate)] == innate

    assert len(character.trained_skills) == expected_skill_count(character.age)
    assert len(set(character.trained_skills)) == len(character.trained_skills)
    pool = get_profession_definition(character.profession).skills
    assert all(skill in pool for skill in character.trained_skills[:6])

    if character.profession.is_caster:
        assert len(character.magic) == 6
    else:
        assert character.magic == ()

    assert character.gear[-2].endswith("Field Rations")
    assert character.gear[-1].endswith("Silver")
    assert len(character.appearance_seeds) == 2
    assert character.weakness
    assert character.memento


class TestCharacterGenerator:
    """Tests for CharacterGenerator.generate."""

    @pytest.mark.parametrize("seed", range(40))
    def test_invariants(self, seed):
        character = CharacterGenerator(rng=DiceRngAdapter.seeded(seed)).generate()
        assert_character_invariants(character)

    def test_same_seed_same_character(self):
        first = CharacterGenerator(rng=DiceRngAdapter.seeded(1234)).generate()
        second = CharacterGenerator(rng=DiceRngAdapter.seeded(1234)).generate()
        assert first == second

    def test_name_left_blank_by_default(self, seeded_rng):
        character = CharacterGenerator(rng=seeded_rng).generate()
        assert character.name == ""
        assert character.appearance == ""
        assert character.background == ""

    def test_placeholder_names(self, seeded_rng):
        character = CharacterGenerator(rng=seeded_rng, placeholder_names=True).generate()
        assert character.name in PLACEHOLDER_NAMES

    def test_scripted_generation(self, wordlists):
        """All-minimum draws give a young human animist with the first table entries."""
        character = CharacterGenerator(rng=ScriptedRng(), wordlists=wordlists).generate()
        assert character.kin == Kin.HUMAN
        assert character.profession == Profession.ANIMIST
        assert character.age == Age.YOUNG
        # Every die shows 1: 3 per attribute, young adds CON and AGL
        assert character.strength == 3
        assert character.constitution == 4
        assert character.agility == 4
        assert character.weakness == "Afraid of the dark"
        assert character.memento == "A silver locket"
        assert character.appearance_seeds == ("Freckled", "Tall")
        assert character.gear[0] == "Staff"
        assert character.gear[-2:] == ("1 Field Rations", "1 Silver")

    def test_missing_wordlists_fall_back(self, tmp_path, seeded_rng):
        from dragonbane.tables.wordlists import WordlistLoader, NO_APPEARANCE, NO_WEAKNESS

        character = CharacterGenerator(rng=seeded_rng, wordlists=WordlistLoader(tmp_path)).generate()
        assert character.weakness == NO_WEAKNESS
        assert character.appearance_seeds == (NO_APPEARANCE,)


class TestFilteredGeneration:
    """Tests for generate_matching and GenerationFilters."""

    def test_filters_match(self, sample_character):
        assert GenerationFilters().matches(sample_character)
        assert GenerationFilters(kin=Kin.HUMAN).matches(sample_character)
        assert not GenerationFilters(kin=Kin.ELF).matches(sample_character)
        assert not GenerationFilters(profession=Profession.FIGHTER, age=Age.OLD).matches(sample_character)

    def test_filters_describe_themselves(self):
        assert GenerationFilters().is_empty
        assert str(GenerationFilters()) == "no filters"
        assert str(GenerationFilters(kin=Kin.DWARF, age=Age.OLD)) == "kin=Dwarf, age=Old"

    @pytest.mark.parametrize("seed", range(10))
    def test_kin_filter(self, seed):
        generator = CharacterGenerator(rng=DiceRngAdapter.seeded(seed))
        character = generator.generate_matching(GenerationFilters(kin=Kin.HUMAN))
        assert character.kin == Kin.HUMAN
        assert_character_invariants(character)

    def test_combined_filter(self):
        generator = CharacterGenerator(rng=DiceRngAdapter.seeded(8))
        filters = GenerationFilters(profession=Profession.KNIGHT, age=Age.ADULT)
        character = generator.generate_matching(filters)
        assert character.profession == Profession.KNIGHT
        assert character.age == Age.ADULT

    def test_exhaustion(self):
        """Scripted draws always give a human, so a satyr never turns up."""
        generator = CharacterGenerator(rng=ScriptedRng())
        filters = GenerationFilters(kin=Kin.SATYR)
        with pytest.raises(GenerationExhaustedError) as exc_info:
            generator.generate_matching(filters, max_attempts=3)
        assert exc_info.value.attempts == 3
        assert exc_info.value.filters == filters


class TestGenerateCharacter:
    """Tests for the module-level convenience function."""

    def test_unfiltered(self):
        character = generate_character(rng=DiceRngAdapter.seeded(3))
        assert_character_invariants(character)

    def test_filtered(self):
        character = generate_character(
            rng=DiceRngAdapter.seeded(3),
            filters=GenerationFilters(age=Age.OLD),
            placeholder_names=True,
        )
        assert character.age == Age.OLD
        assert character.name in PLACEHOLDER_NAMES

    def test_filtered_exhaustion(self):
        with pytest.raises(GenerationExhaustedError):
            generate_character(rng=ScriptedRng(), filters=GenerationFilters(age=Age.OLD), max_attempts=2)
