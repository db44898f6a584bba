"""
Pytest fixtures for the Dragonbane character generator test suite.

Provides reusable fixtures for random sources, wordlists, a sample
character, LLM mocking and an in-memory character store.
"""

from dataclasses import replace

import pytest

from dragonbane.ai.llm_provider import LLMConfig, LLMManager, LLMProvider
from dragonbane.data_models import Age, Character, HeroicAbility, Kin, Profession, Skill
from dragonbane.oracle.dice_rng_adapter import DiceRngAdapter
from dragonbane.storage.character_store import CharacterStore
from dragonbane.tables.wordlists import WordlistLoader

from helpers import ScriptedRng


# =============================================================================
# RNG FIXTURES
# =============================================================================


@pytest.fixture
def seeded_rng():
    """Seeded adapter for reproducible tests."""
    return DiceRngAdapter.seeded(42, reason_prefix="Test")


@pytest.fixture
def scripted_rng():
    """Scripted source: floats 0.0, ints at their minimum, first choice, no shuffling."""
    return ScriptedRng()


# =============================================================================
# WORDLIST FIXTURES
# =============================================================================


@pytest.fixture
def wordlist_dir(tmp_path):
    """A small wordlist directory with weaknesses, mementos and human appearance seeds."""
    (tmp_path / "weaknesses.txt").write_text(
        "# weaknesses\nAfraid of the dark\n\nGreedy\n", encoding="utf-8"
    )
    (tmp_path / "mementos.txt").write_text(
        "A silver locket\nA broken compass\n", encoding="utf-8"
    )
    (tmp_path / "appearance_human.txt").write_text(
        "Freckled\nTall\nScarred knuckles\n", encoding="utf-8"
    )
    return tmp_path


@pytest.fixture
def wordlists(wordlist_dir):
    return WordlistLoader(wordlist_dir)


# =============================================================================
# CHARACTER FIXTURES
# =============================================================================


@pytest.fixture
def sample_character():
    """An adult human fighter with a fixed loadout."""
    return Character(
        name="Halvard Stone",
        kin=Kin.HUMAN,
        profession=Profession.FIGHTER,
        age=Age.ADULT,
        strength=14,
        constitution=12,
        agility=11,
        intelligence=9,
        willpower=8,
        charisma=7,
        heroic_abilities=(HeroicAbility.ADAPTIVE, HeroicAbility.VETERAN),
        trained_skills=(
            Skill.AXES, Skill.BOWS, Skill.BRAWLING, Skill.EVADE, Skill.SPEARS, Skill.SWORDS,
            Skill.AWARENESS, Skill.HEALING, Skill.SNEAKING, Skill.SWIMMING,
        ),
        magic=(),
        weakness="Greedy",
        memento="A silver locket",
        gear=(
            "Broadsword", "Shield", "Chainmail Armour", "Torch", "Flint & Tinder",
            "3 Field Rations", "5 Silver",
        ),
        appearance_seeds=("Freckled", "Tall"),
    )


@pytest.fixture
def mentalist_character(sample_character):
    """A young mentalist built from the sample character."""
    return replace(
        sample_character,
        name="Mirelle",
        kin=Kin.ELF,
        profession=Profession.MENTALIST,
        age=Age.YOUNG,
        intelligence=14,
        heroic_abilities=(HeroicAbility.INNER_PEACE,),
        trained_skills=(
            Skill.ACROBATICS, Skill.AWARENESS, Skill.BRAWLING, Skill.EVADE,
            Skill.HEALING, Skill.LANGUAGE, Skill.SWIMMING, Skill.RIDING,
        ),
        magic=("LOCK/UNLOCK", "SLOW FALL", "FETCH", "LEVITATE", "FARSIGHT", "DISPEL"),
        gear=("Knife", "Wand", "Grimoire", "Torch", "Flint & Tinder", "2 Field Rations", "4 Silver"),
    )


# =============================================================================
# LLM FIXTURES
# =============================================================================


@pytest.fixture
def mock_llm_config():
    """LLM config using the mock provider."""
    return LLMConfig(provider=LLMProvider.MOCK, model="mock", retry_delay=0.0)


@pytest.fixture
def mock_llm_manager(mock_llm_config):
    """LLM manager backed by MockLLMClient."""
    return LLMManager(mock_llm_config)


# =============================================================================
# STORAGE FIXTURES
# =============================================================================


@pytest.fixture
def store():
    """In-memory character store."""
    character_store = CharacterStore()
    yield character_store
    character_store.close()
