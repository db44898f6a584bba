"""
Tests for equipment matching and character sheet projection.
"""

from dataclasses import replace

import pytest

from dragonbane.data_models import Kin
from dragonbane.sheet.equipment_catalog import (
    CurrencyAccumulator,
    format_grip,
    match_armour,
    match_helmet,
    match_weapon,
    normalize_equipment_string,
)
from dragonbane.sheet.sheet_projector import (
    CharacterSheetPayload,
    DeathRollTrack,
    InventoryItem,
    SkillEntry,
    SpellEntry,
    WeaponEntry,
    agility_movement_modifier,
    deduplicate_preserving_order,
    default_encumbrance_limit,
    default_movement,
    project_sheet,
)


class TestEquipmentMatching:
    """Tests for the equipment presets."""

    def test_normalize(self):
        assert normalize_equipment_string("  Warhammer, Light ") == "warhammer light"
        assert normalize_equipment_string("Plate Armor") == "plate armour"
        assert normalize_equipment_string("Flint & Tinder") == "flint tinder"
        assert normalize_equipment_string("Two-Handed Axe") == "two handed axe"

    def test_normalize_keeps_non_ascii_letters(self):
        assert normalize_equipment_string("Épée, Rapière") == "épée rapière"
        assert normalize_equipment_string("Großes_Schwert") == "großes schwert"
        assert normalize_equipment_string("Chainmail Armour (ÿ)") == "chainmail armour ÿ"

    @pytest.mark.parametrize("raw,expected", [
        ("1H", "R"), ("2h", "RL"), ("Shield", "L"), ("LH", "L"), ("-", ""), ("STR", "STR"),
    ])
    def test_format_grip(self, raw, expected):
        assert format_grip(raw) == expected

    @pytest.mark.parametrize("raw,armour_type,rating", [
        ("Leather Armour", "Leather Armour", 1),
        ("leather", "Leather Armour", 1),
        ("Studded Leather Armour", "Studded Leather Armour", 2),
        ("Chainmail Armour", "Chainmail", 4),
        ("Plate Armor", "Plate Armour", 6),
    ])
    def test_armour(self, raw, armour_type, rating):
        block = match_armour(raw)
        assert block.armour_type == armour_type
        assert block.rating == rating

    def test_armour_banes(self):
        assert not match_armour("Leather Armour").banes.sneaking
        plate = match_armour("Plate Armour").banes
        assert plate.sneaking and plate.evade and plate.acrobatics

    def test_helmets(self):
        assert match_helmet("Open Helmet").rating == 1
        great = match_helmet("Great Helm")
        assert great.rating == 2
        assert great.banes.ranged_attacks
        assert match_helmet("Torch") is None

    def test_weapons(self):
        hammer = match_weapon("Warhammer, Light")
        assert hammer.name == "Light Warhammer"
        assert hammer.grip == "R"
        assert match_weapon("Crossbow, Light").grip == "RL"
        assert match_weapon("Shield, Small").name == "Small Shield"
        assert match_weapon("2x Dagger").name == "Dagger"
        assert match_weapon("Unarmed").grip == ""

    @pytest.mark.parametrize("raw", ["Shield", "Warhammer", "Torch", "Flint & Tinder", "3 Field Rations", ""])
    def test_unmatched(self, raw):
        assert match_weapon(raw) is None

    def test_currency(self):
        coins = CurrencyAccumulator()
        assert coins.absorb("7 Silver")
        assert coins.absorb("2 silver")
        assert coins.absorb("12 Gold coins")
        assert not coins.absorb("Silver mirror")
        assert not coins.absorb("A few copper")
        assert not coins.absorb("Torch")
        assert (coins.gold, coins.silver, coins.copper) == (12, 9, 0)


class TestDerivedValues:
    """Tests for movement and encumbrance."""

    @pytest.mark.parametrize("agility,modifier", [
        (3, -4), (6, -4), (7, -2), (9, -2), (10, 0), (12, 0), (13, 2), (15, 2), (16, 4), (18, 4),
    ])
    def test_agility_modifier(self, agility, modifier):
        assert agility_movement_modifier(agility) == modifier

    def test_movement(self):
        assert default_movement(Kin.HUMAN, 11) == 10
        assert default_movement(Kin.WOLFKIN, 16) == 16
        assert default_movement(Kin.HALFLING, 4) == 4

    @pytest.mark.parametrize("strength,limit", [(14, 7), (9, 5), (1, 1), (0, 0), (-3, 0)])
    def test_encumbrance(self, strength, limit):
        assert default_encumbrance_limit(strength) == limit

    def test_deduplicate(self):
        assert deduplicate_preserving_order(["Veteran", " Veteran ", "", "Adaptive"]) == ["Veteran", "Adaptive"]


class TestProjectSheet:
    """Tests for project_sheet."""

    def test_header_and_attributes(self, sample_character):
        sheet = project_sheet(sample_character, player_name="Sam")
        assert sheet.character_name == "Halvard Stone"
        assert sheet.player_name == "Sam"
        assert sheet.kin == "Human"
        assert sheet.profession == "Fighter"
        assert sheet.attributes.strength == 14
        assert sheet.movement == 10
        assert sheet.encumbrance_limit == 7

    def test_resource_tracks(self, sample_character):
        sheet = project_sheet(sample_character)
        assert (sheet.hit_points.max, sheet.hit_points.current) == (12, 12)
        assert (sheet.willpower.max, sheet.willpower.current) == (8, 8)
        assert sheet.death_rolls.successes == [False, False, False]

    def test_gear_classification(self, sample_character):
        sheet = project_sheet(sample_character)
        assert sheet.armour.armour_type == "Chainmail"
        assert sheet.helmet.helmet_type == ""
        assert sheet.weapons[0].name == "Broadsword"
        assert sheet.weapons[1].is_empty
        assert len(sheet.weapons) == 3
        assert [item.name for item in sheet.inventory] == [
            "Shield", "Torch", "Flint & Tinder", "3 Field Rations",
        ]
        assert sheet.silver == 5

    def test_at_most_three_weapons(self, sample_character):
        character = replace(sample_character, gear=("Dagger", "Knife", "Staff", "Sling", "Lance"))
        sheet = project_sheet(character)
        assert [w.name for w in sheet.weapons] == ["Dagger", "Knife", "Staff"]
        assert [item.name for item in sheet.inventory] == ["Sling", "Lance"]

    def test_later_armour_replaces_earlier(self, sample_character):
        character = replace(sample_character, gear=("Leather Armour", "Plate Armor"))
        assert project_sheet(character).armour.rating == 6

    def test_skill_sections(self, sample_character):
        sheet = project_sheet(sample_character)
        assert len(sheet.skills.primary) == 20
        assert len(sheet.skills.weapon) == 10
        assert sheet.skills.secondary == []
        swords = next(s for s in sheet.skills.weapon if s.name == "Swords")
        assert swords.level == 12

    def test_caster_sheet(self, mentalist_character):
        sheet = project_sheet(mentalist_character)
        assert [s.name for s in sheet.skills.secondary] == ["Mentalism"]
        assert sheet.skills.secondary[0].level == 12
        assert len(sheet.spells) == 6
        assert all(spell.in_grimoire and not spell.prepared for spell in sheet.spells)
        assert sheet.weapons[0].name == "Knife"
        assert sheet.silver == 4

    def test_abilities(self, sample_character):
        assert project_sheet(sample_character).abilities_and_spells == ["Adaptive", "Veteran"]

    def test_to_dict_uses_camel_case(self, sample_character):
        data = project_sheet(sample_character).to_dict()
        assert data["characterName"] == "Halvard Stone"
        assert data["hitPoints"] == {"max": 12, "current": 12}
        assert data["armour"]["armourType"] == "Chainmail"
        assert data["helmet"]["banes"] == {"awareness": False, "rangedAttacks": False}
        assert len(data["weapons"]) == 3

    def test_from_dict_restores_sheet(self, sample_character):
        sheet = project_sheet(sample_character)
        assert CharacterSheetPayload.from_dict(sheet.to_dict()) == sheet


class TestNormalize:
    """Tests for CharacterSheetPayload.normalize."""

    def test_pads_and_trims(self):
        payload = CharacterSheetPayload(
            weapons=[WeaponEntry(name=f"W{i}") for i in range(5)],
            death_rolls=DeathRollTrack(successes=[True], failures=[True, True, True, True]),
            inventory=[InventoryItem(" Rope ", " 10m ", -2)],
            spells=[SpellEntry(" "), SpellEntry(" FETCH ")],
            abilities_and_spells=["", " Veteran "],
        )
        payload.skills.primary = [SkillEntry(" Evade ", -1)]
        payload.normalize()

        assert [w.name for w in payload.weapons] == ["W0", "W1", "W2"]
        assert payload.death_rolls.successes == [True, False, False]
        assert payload.death_rolls.failures == [True, True, True]
        assert payload.inventory == [InventoryItem("Rope", "10m", 0)]
        assert [s.name for s in payload.spells] == ["FETCH"]
        assert payload.abilities_and_spells == ["Veteran"]
        assert payload.skills.primary == [SkillEntry("Evade", 0)]

    def test_missing_encumbrance_filled_from_strength(self):
        payload = CharacterSheetPayload()
        payload.attributes.strength = 9
        payload.normalize()
        assert payload.encumbrance_limit == 5

    def test_empty_dict(self):
        payload = CharacterSheetPayload.from_dict({})
        assert len(payload.weapons) == 3
        assert payload.encumbrance_limit == 0
        assert payload.death_rolls.failures == [False, False, False]

    def test_null_numbers_fall_back_to_defaults(self):
        payload = CharacterSheetPayload.from_dict({
            "movement": None,
            "gold": None,
            "silver": None,
            "encumbranceLimit": None,
            "attributes": {"strength": None},
            "hitPoints": {"max": None, "current": 3},
            "armour": {"armourType": "Leather Armour", "rating": None},
            "inventory": [{"name": "Rope", "slots": None}],
        })
        assert payload.movement == 0
        assert (payload.gold, payload.silver) == (0, 0)
        assert payload.attributes.strength == 0
        assert payload.encumbrance_limit == 0
        assert (payload.hit_points.max, payload.hit_points.current) == (0, 3)
        assert payload.armour.rating == 0
        assert payload.inventory[0].slots == 1
