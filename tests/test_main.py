"""
Tests for the command line entry point.
"""

import json
from pathlib import Path

import pytest

from dragonbane.data_models import Age, Kin, Profession
from dragonbane.main import (
    DEFAULT_DB_PATH,
    GeneratorConfig,
    create_config_from_args,
    main,
    parse_arguments,
)
from dragonbane.storage.character_store import CharacterStore


class TestArguments:
    """Tests for parse_arguments and create_config_from_args."""

    def test_defaults(self):
        config = create_config_from_args(parse_arguments([]))
        assert config.count == 1
        assert config.llm_provider == "none"
        assert config.db_path == DEFAULT_DB_PATH
        assert config.save
        assert config.filters.is_empty
        assert not config.enrichment_enabled

    def test_catalog_filters(self):
        args = parse_arguments(["--kin", "cat people", "--profession", "Knight", "--age", "OLD"])
        assert args.kin == Kin.CAT_PEOPLE
        assert args.profession == Profession.KNIGHT
        assert args.age == Age.OLD

    def test_unknown_kin_exits(self, capsys):
        with pytest.raises(SystemExit):
            parse_arguments(["--kin", "Dragon"])
        assert "Unknown Kin value" in capsys.readouterr().err

    def test_llm_options(self):
        args = parse_arguments(["--llm-provider", "openai", "-s", "http://host:1234", "-m", "m1", "-k", "key"])
        config = create_config_from_args(args)
        assert config.enrichment_enabled
        llm_config = config.llm_config()
        assert llm_config.base_url == "http://host:1234"
        assert llm_config.model == "m1"
        assert llm_config.api_key == "key"

    def test_db_path_coerced(self):
        assert GeneratorConfig(db_path="x.db").db_path == Path("x.db")


class TestMain:
    """Tests for main()."""

    def test_prints_character(self, capsys):
        assert main(["--no-save", "--seed", "7"]) == 0
        out = capsys.readouterr().out
        assert "---- Dragonbane Character ----" in out
        assert "Name: (unnamed)" not in out

    def test_json_with_sheet(self, capsys):
        assert main(["--no-save", "--seed", "3", "--json", "--sheet", "--player-name", "Sam"]) == 0
        record = json.loads(capsys.readouterr().out)
        assert record["sheet"]["playerName"] == "Sam"
        assert len(record["sheet"]["weapons"]) == 3
        assert "id" not in record

    def test_saves_to_database(self, tmp_path, capsys):
        db_path = tmp_path / "characters.db"
        assert main(["--db", str(db_path), "--seed", "1", "-c", "2"]) == 0
        assert CharacterStore(db_path).count() == 2
        assert "[SAVED]" in capsys.readouterr().out

    def test_adopts_sheet_when_saving(self, tmp_path, capsys):
        db_path = tmp_path / "characters.db"
        assert main(["--db", str(db_path), "--seed", "4", "--sheet", "--json"]) == 0
        record = json.loads(capsys.readouterr().out)
        sheet = CharacterStore(db_path).get_sheet(record["sheet_token"])
        assert sheet.character_id == record["id"]

    def test_filters(self, capsys):
        assert main(["--no-save", "--seed", "5", "--kin", "Dwarf", "--json"]) == 0
        assert json.loads(capsys.readouterr().out)["kin"] == "Dwarf"

    def test_filter_exhaustion(self, capsys):
        code = main(["--no-save", "--seed", "2", "--kin", "Satyr", "--age", "Old", "--max-attempts", "1"])
        assert code == 1
        assert "[ERROR]" in capsys.readouterr().err

    def test_mock_enrichment(self, capsys):
        assert main(["--no-save", "--seed", "9", "--llm-provider", "mock", "--json"]) == 0
        record = json.loads(capsys.readouterr().out)
        assert record["name"] == "Mock Adventurer"
        assert record["background"]

    def test_random_from_empty_database(self, tmp_path, capsys):
        assert main(["--random", "--db", str(tmp_path / "empty.db")]) == 1
        assert "No characters found" in capsys.readouterr().out

    def test_random_from_database(self, tmp_path, capsys):
        db_path = tmp_path / "characters.db"
        main(["--db", str(db_path), "--seed", "6"])
        capsys.readouterr()
        assert main(["--random", "--db", str(db_path), "--seed", "1", "--json"]) == 0
        assert json.loads(capsys.readouterr().out)["id"] == 1
