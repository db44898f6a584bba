"""
Tests for the catalogs and the Character value in dragonbane/data_models.py.
"""

from dataclasses import FrozenInstanceError

import pytest

from dragonbane.data_models import (
    Age,
    Attribute,
    Character,
    HeroicAbility,
    InvalidCatalogValueError,
    Kin,
    Profession,
    Skill,
    parse_catalog_value,
)


class TestCatalogs:
    """Tests for the closed catalogs."""

    def test_sizes(self):
        assert len(Kin) == 15
        assert len(Profession) == 12
        assert len(Skill) == 30
        assert len(Attribute) == 6

    def test_weapon_skills(self):
        weapon_skills = [skill for skill in Skill if skill.is_weapon_skill]
        assert len(weapon_skills) == 10
        assert Skill.SWORDS in weapon_skills
        assert Skill.EVADE not in weapon_skills

    def test_kin_slug(self):
        assert Kin.LIZARD_PEOPLE.slug == "lizard_people"
        assert Kin.HUMAN.slug == "human"

    def test_attribute_abbreviations(self):
        assert [a.abbreviation for a in Attribute] == ["STR", "CON", "AGL", "INT", "WIL", "CHA"]

    def test_display_values(self):
        assert Skill.SLEIGHT_OF_HAND.value == "Sleight of Hand"
        assert Skill.HUNTING_AND_FISHING.value == "Hunting & Fishing"
        assert Profession.ANIMIST.value == "Mage (Animist)"


class TestParseCatalogValue:
    """Tests for parse_catalog_value."""

    @pytest.mark.parametrize("raw,expected", [
        ("Cat People", Kin.CAT_PEOPLE),
        ("cat people", Kin.CAT_PEOPLE),
        ("CAT_PEOPLE", Kin.CAT_PEOPLE),
        (" dwarf ", Kin.DWARF),
        (Kin.ORC, Kin.ORC),
    ])
    def test_kin(self, raw, expected):
        assert parse_catalog_value(Kin, raw) == expected

    def test_profession_member_name(self):
        assert parse_catalog_value(Profession, "mentalist") == Profession.MENTALIST

    @pytest.mark.parametrize("raw", ["Dragon", "", None, 3])
    def test_unknown(self, raw):
        with pytest.raises(InvalidCatalogValueError) as exc_info:
            parse_catalog_value(Kin, raw)
        assert exc_info.value.catalog == "Kin"

    def test_is_a_value_error(self):
        with pytest.raises(ValueError):
            parse_catalog_value(Age, "Ancient")


class TestCharacter:
    """Tests for the Character value."""

    def test_frozen(self, sample_character):
        with pytest.raises(FrozenInstanceError):
            sample_character.strength = 18

    def test_attributes(self, sample_character):
        assert sample_character.attribute(Attribute.CONSTITUTION) == 12
        assert list(sample_character.attributes) == list(Attribute)

    def test_with_narrative(self, sample_character):
        updated = sample_character.with_narrative(appearance="Tall")
        assert updated.appearance == "Tall"
        assert updated.name == sample_character.name
        assert sample_character.appearance == ""

    def test_dict_round_trip(self, sample_character):
        data = sample_character.to_dict()
        assert data["kin"] == "Human"
        assert data["trained_skills"][0] == "Axes"
        assert Character.from_dict(data) == sample_character

    def test_from_dict_rejects_unknown_ability(self, sample_character):
        data = sample_character.to_dict()
        data["heroic_abilities"] = ["Teleport"]
        with pytest.raises(InvalidCatalogValueError):
            Character.from_dict(data)

    def test_description(self, sample_character):
        text = sample_character.description()
        assert text.startswith("---- Dragonbane Character ----")
        assert "Name: Halvard Stone" in text
        assert "Trained Skills: Axes, Bows" in text
        assert "  STR: 14" in text
        assert "  Chainmail Armour" in text
        assert "Memento: A silver locket" in text
        assert "Background:" not in text

    def test_is_trained(self, sample_character):
        assert sample_character.is_trained(Skill.SWORDS)
        assert not sample_character.is_trained(Skill.RIDING)
        assert HeroicAbility.VETERAN in sample_character.heroic_abilities

    @pytest.mark.parametrize("key", ["kin", "profession", "age"])
    def test_from_dict_rejects_missing_catalog_field(self, sample_character, key):
        data = sample_character.to_dict()
        del data[key]
        with pytest.raises(InvalidCatalogValueError):
            Character.from_dict(data)
