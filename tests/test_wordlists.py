"""
Tests for wordlist loading and the flavor selectors.
"""

import logging

import pytest

from dragonbane.data_models import Kin
from dragonbane.tables.wordlists import (
    FALLBACK_NAME,
    MEMENTOS_RESOURCE,
    NO_APPEARANCE,
    NO_MEMENTO,
    NO_WEAKNESS,
    PLACEHOLDER_NAMES,
    WEAKNESSES_RESOURCE,
    MissingResourceError,
    WordlistLoader,
    appearance_resource,
    select_appearance_seeds,
    select_memento,
    select_placeholder_name,
    select_weakness,
)

from helpers import ScriptedRng


class TestWordlistLoader:
    """Tests for WordlistLoader."""

    def test_skips_blank_and_comment_lines(self, wordlists):
        assert wordlists.load_lines(WEAKNESSES_RESOURCE) == ["Afraid of the dark", "Greedy"]

    def test_missing_resource_is_empty(self, wordlists, caplog):
        with caplog.at_level(logging.WARNING):
            assert wordlists.load_lines("appearance_orc") == []
        assert "Wordlist not found" in caplog.text

    def test_strict_missing_raises(self, wordlists):
        with pytest.raises(MissingResourceError) as exc_info:
            wordlists.load_lines("appearance_orc", strict=True)
        assert exc_info.value.resource == "appearance_orc"

    def test_unreadable_resource(self, wordlist_dir):
        (wordlist_dir / "broken.txt").write_bytes(b"\xff\xfe\xfa")
        loader = WordlistLoader(wordlist_dir)
        assert loader.load_lines("broken") == []
        with pytest.raises(MissingResourceError):
            loader.load_lines("broken", strict=True)

    def test_lines_are_cached(self, wordlist_dir):
        loader = WordlistLoader(wordlist_dir)
        loader.load_lines(MEMENTOS_RESOURCE)
        (wordlist_dir / "mementos.txt").write_text("Changed\n", encoding="utf-8")
        assert loader.load_lines(MEMENTOS_RESOURCE) == ["A silver locket", "A broken compass"]

        loader.clear_cache()
        assert loader.load_lines(MEMENTOS_RESOURCE) == ["Changed"]

    def test_returned_list_is_a_copy(self, wordlists):
        lines = wordlists.load_lines(MEMENTOS_RESOURCE)
        lines.clear()
        assert wordlists.load_lines(MEMENTOS_RESOURCE) != []

    def test_appearance_resource_name(self):
        assert appearance_resource(Kin.CAT_PEOPLE) == "appearance_cat_people"


class TestPackagedWordlists:
    """The wordlists shipped with the package."""

    def test_weaknesses_and_mementos(self):
        loader = WordlistLoader()
        assert len(loader.load_lines(WEAKNESSES_RESOURCE, strict=True)) >= 10
        assert len(loader.load_lines(MEMENTOS_RESOURCE, strict=True)) >= 10

    @pytest.mark.parametrize("kin", list(Kin))
    def test_every_kin_has_appearance_seeds(self, kin):
        lines = WordlistLoader().load_lines(appearance_resource(kin), strict=True)
        assert len(lines) >= 2


class TestSelectors:
    """Tests for the flavor selectors."""

    def test_weakness_and_memento(self, wordlists):
        rng = ScriptedRng()
        assert select_weakness(wordlists, rng) == "Afraid of the dark"
        assert select_memento(wordlists, rng) == "A silver locket"

    def test_sentinels_when_missing(self, tmp_path):
        loader = WordlistLoader(tmp_path)
        rng = ScriptedRng()
        assert select_weakness(loader, rng) == NO_WEAKNESS
        assert select_memento(loader, rng) == NO_MEMENTO
        assert select_appearance_seeds(loader, Kin.HUMAN, rng) == [NO_APPEARANCE]
        assert rng.calls == []

    def test_two_distinct_appearance_seeds(self, wordlists, seeded_rng):
        for _ in range(10):
            seeds = select_appearance_seeds(wordlists, Kin.HUMAN, seeded_rng)
            assert len(seeds) == 2
            assert len(set(seeds)) == 2

    def test_placeholder_names(self, seeded_rng):
        assert select_placeholder_name(seeded_rng) in PLACEHOLDER_NAMES
        assert select_placeholder_name(seeded_rng, names=()) == FALLBACK_NAME
        assert select_placeholder_name(ScriptedRng(), names=("Ylva",)) == "Ylva"
