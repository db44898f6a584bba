"""
Tests for the kin catalog and weighted kin selection.
"""

from collections import Counter

import pytest

from dragonbane.data_models import HeroicAbility, Kin, KinCategory
from dragonbane.kindred.kin_data import (
    KIN_DEFINITIONS,
    get_kin_definition,
    innate_abilities,
    kins_in_category,
)
from dragonbane.kindred.kin_selector import select_kin, select_kin_category
from dragonbane.oracle.dice_rng_adapter import DiceRngAdapter

from helpers import ScriptedRng


class TestKinData:
    """Tests for the kin catalog."""

    def test_every_kin_has_a_definition(self):
        assert set(KIN_DEFINITIONS) == set(Kin)

    def test_category_sizes(self):
        assert len(kins_in_category(KinCategory.COMMON)) == 6
        assert kins_in_category(KinCategory.NIGHTKIN) == [Kin.GOBLIN, Kin.HOBGOBLIN, Kin.OGRE, Kin.ORC]
        assert len(kins_in_category(KinCategory.RARE)) == 5

    def test_common_weights(self):
        weights = {kin: get_kin_definition(kin).common_weight for kin in kins_in_category(KinCategory.COMMON)}
        assert weights[Kin.HUMAN] == 4
        assert weights[Kin.HALFLING] == 3
        assert weights[Kin.DWARF] == 2
        assert sum(weights.values()) == 12

    def test_mallard_has_two_innate_abilities(self):
        assert innate_abilities(Kin.MALLARD) == (HeroicAbility.ILL_TEMPERED, HeroicAbility.WEBBED_FEET)

    @pytest.mark.parametrize("kin", list(Kin))
    def test_every_kin_has_innate_ability(self, kin):
        assert len(innate_abilities(kin)) >= 1

    def test_base_movement(self):
        assert get_kin_definition(Kin.HUMAN).base_movement == 10
        assert get_kin_definition(Kin.DWARF).base_movement == 8
        assert get_kin_definition(Kin.WOLFKIN).base_movement == 12


class TestKinSelection:
    """Tests for select_kin_category and select_kin."""

    @pytest.mark.parametrize("roll,expected", [
        (0.0, KinCategory.COMMON),
        (0.969, KinCategory.COMMON),
        (0.97, KinCategory.NIGHTKIN),
        (0.985, KinCategory.NIGHTKIN),
        (0.99, KinCategory.RARE),
        (0.999, KinCategory.RARE),
    ])
    def test_category_thresholds(self, roll, expected):
        assert select_kin_category(ScriptedRng(floats=[roll])) == expected

    @pytest.mark.parametrize("point,expected", [
        (0.3, Kin.HUMAN),
        (0.5, Kin.HALFLING),
        (0.7, Kin.DWARF),
        (0.8, Kin.ELF),
        (0.9, Kin.MALLARD),
        (0.99, Kin.WOLFKIN),
    ])
    def test_common_kin_weighting(self, point, expected):
        """The second float walks the 4/3/2/1/1/1 cumulative weights."""
        assert select_kin(ScriptedRng(floats=[0.5, point])) == expected

    def test_nightkin_uniform_choice(self):
        rng = ScriptedRng(floats=[0.98])
        assert select_kin(rng) == Kin.GOBLIN
        assert rng.count("choice") == 1

    def test_rare_uniform_choice(self):
        assert select_kin(ScriptedRng(floats=[0.995])) == Kin.CAT_PEOPLE

    def test_distribution(self):
        """Over many draws, common kin dominate and humans lead."""
        rng = DiceRngAdapter.seeded(2024)
        counts = Counter(select_kin(rng) for _ in range(3000))
        common = sum(counts[kin] for kin in kins_in_category(KinCategory.COMMON))
        assert common / 3000 > 0.93
        assert counts.most_common(1)[0][0] == Kin.HUMAN
        assert counts[Kin.HALFLING] > counts[Kin.ELF]
