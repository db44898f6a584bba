"""
Dragonbane Character Generator - Main Entry Point

Generates random Dragonbane characters from the command line, optionally
asks an LLM to write their name, appearance and background, stores them in
a local SQLite database and projects them onto a character sheet.

Examples:
  dragonbane                                  # One character with a placeholder name
  dragonbane -c 5 --kin Dwarf                 # Five dwarves
  dragonbane --llm-provider openai -s http://localhost:1234
  dragonbane --random                         # Print a random stored character
"""

import argparse
import json
import logging
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional, Sequence

from dragonbane.ai.llm_provider import LLMConfig, LLMManager, LLMProvider, MockLLMClient
from dragonbane.ai.narrative import NarrativeEnricher, NarrativeEnrichmentError
from dragonbane.data_models import (
    Age,
    Character,
    InvalidCatalogValueError,
    Kin,
    Profession,
    parse_catalog_value,
)
from dragonbane.generation.character_generator import (
    DEFAULT_MAX_ATTEMPTS,
    CharacterGenerator,
    GenerationExhaustedError,
    GenerationFilters,
)
from dragonbane.oracle.dice_rng_adapter import DiceRngAdapter
from dragonbane.sheet.sheet_projector import project_sheet
from dragonbane.storage.character_store import CharacterStore


# Configure logging
def setup_logging(verbose: bool = False) -> None:
    """Configure logging based on verbosity level."""
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )


logger = logging.getLogger(__name__)

DEFAULT_DB_PATH = Path("dragonbane_characters.db")
LLM_PROVIDER_CHOICES = ["none", "mock", "openai", "anthropic"]

MOCK_SUMMARY = json.dumps({
    "name": "Mock Adventurer",
    "appearance": "An unremarkable figure in travel-worn clothes.",
    "background": "Left home to seek fortune on the roads of the Misty Vale.",
})


# =============================================================================
# CONFIGURATION
# =============================================================================


@dataclass
class GeneratorConfig:
    """Configuration for one CLI run."""

    count: int = 1
    random_from_store: bool = False

    # Filters
    kin: Optional[Kin] = None
    profession: Optional[Profession] = None
    age: Optional[Age] = None
    max_attempts: int = DEFAULT_MAX_ATTEMPTS

    # Randomness
    seed: Optional[int] = None

    # LLM Configuration
    llm_provider: str = "none"  # none, mock, openai, anthropic
    llm_server: Optional[str] = None
    llm_api_key: Optional[str] = None
    llm_model: Optional[str] = None

    # Storage
    db_path: Path = field(default_factory=lambda: DEFAULT_DB_PATH)
    save: bool = True

    # Output
    sheet: bool = False
    player_name: Optional[str] = None
    json_output: bool = False
    verbose: bool = False

    def __post_init__(self):
        """Ensure paths are Path objects."""
        if isinstance(self.db_path, str):
            self.db_path = Path(self.db_path)

    @property
    def filters(self) -> GenerationFilters:
        return GenerationFilters(kin=self.kin, profession=self.profession, age=self.age)

    @property
    def enrichment_enabled(self) -> bool:
        return self.llm_provider != "none"

    def llm_config(self) -> LLMConfig:
        """Build the LLMConfig; explicit flags win over OPENAI_*/ANTHROPIC_* variables."""
        return LLMConfig.from_env(
            provider=LLMProvider(self.llm_provider),
            server=self.llm_server,
            api_key=self.llm_api_key,
            model=self.llm_model,
        )


def _catalog_argument(enum_cls):
    """argparse type converter for catalog values ("cat people", "Cat People", "CAT_PEOPLE")."""
    def convert(raw: str):
        try:
            return parse_catalog_value(enum_cls, raw)
        except InvalidCatalogValueError as e:
            choices = ", ".join(member.value for member in enum_cls)
            raise argparse.ArgumentTypeError(f"{e}. Choose from: {choices}") from e
    convert.__name__ = enum_cls.__name__.lower()
    return convert


def parse_arguments(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Dragonbane Character Generator - random characters for the Dragonbane RPG",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python -m dragonbane.main                          # One character
  python -m dragonbane.main -c 3 --profession Knight # Three knights
  python -m dragonbane.main --llm-provider openai    # Narrative from OPENAI_SERVER
  python -m dragonbane.main --random                 # Random stored character
        """
    )

    # General options
    parser.add_argument(
        "-c", "--count",
        type=int,
        default=1,
        help="Number of characters to generate (default: 1)",
    )
    parser.add_argument(
        "-r", "--random",
        action="store_true",
        help="Print a random saved character from the database and exit",
    )
    parser.add_argument(
        "--seed",
        type=int,
        help="Seed for reproducible generation",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable verbose logging",
    )

    # Filter options
    filter_group = parser.add_argument_group("Filter Options")
    filter_group.add_argument(
        "--kin",
        type=_catalog_argument(Kin),
        help="Only generate characters of this kin",
    )
    filter_group.add_argument(
        "--profession",
        type=_catalog_argument(Profession),
        help="Only generate characters of this profession",
    )
    filter_group.add_argument(
        "--age",
        type=_catalog_argument(Age),
        help="Only generate characters of this age (Young, Adult, Old)",
    )
    filter_group.add_argument(
        "--max-attempts",
        type=int,
        default=DEFAULT_MAX_ATTEMPTS,
        help=f"Attempt budget for filtered generation (default: {DEFAULT_MAX_ATTEMPTS})",
    )

    # LLM options
    llm_group = parser.add_argument_group("LLM Options")
    llm_group.add_argument(
        "--llm-provider",
        type=str,
        default="none",
        choices=LLM_PROVIDER_CHOICES,
        help="LLM provider for name/appearance/background (default: none)",
    )
    llm_group.add_argument(
        "-s", "--server",
        type=str,
        help="Server address for /v1/chat/completions calls (env: OPENAI_SERVER)",
    )
    llm_group.add_argument(
        "-k", "--api-key",
        type=str,
        help="API key for the LLM provider (env: OPENAI_API_KEY / ANTHROPIC_API_KEY)",
    )
    llm_group.add_argument(
        "-m", "--model",
        type=str,
        help="Model to use (env: OPENAI_MODEL / ANTHROPIC_MODEL)",
    )

    # Database options
    db_group = parser.add_argument_group("Database Options")
    db_group.add_argument(
        "--db",
        type=Path,
        default=DEFAULT_DB_PATH,
        help=f"SQLite database file (default: {DEFAULT_DB_PATH})",
    )
    db_group.add_argument(
        "--no-save",
        action="store_true",
        help="Do not store generated characters",
    )

    # Output options
    output_group = parser.add_argument_group("Output Options")
    output_group.add_argument(
        "--sheet",
        action="store_true",
        help="Also project each character onto a character sheet",
    )
    output_group.add_argument(
        "--player-name",
        type=str,
        help="Player name written on projected sheets",
    )
    output_group.add_argument(
        "--json",
        action="store_true",
        help="Print JSON instead of plain text",
    )

    return parser.parse_args(argv)


def create_config_from_args(args: argparse.Namespace) -> GeneratorConfig:
    """Create GeneratorConfig from parsed arguments."""
    return GeneratorConfig(
        count=max(args.count, 0),
        random_from_store=args.random,
        kin=args.kin,
        profession=args.profession,
        age=args.age,
        max_attempts=args.max_attempts,
        seed=args.seed,
        llm_provider=args.llm_provider,
        llm_server=args.server,
        llm_api_key=args.api_key,
        llm_model=args.model,
        db_path=args.db,
        save=not args.no_save,
        sheet=args.sheet,
        player_name=args.player_name,
        json_output=args.json,
        verbose=args.verbose,
    )


# =============================================================================
# RUNNING
# =============================================================================


def create_enricher(config: GeneratorConfig) -> Optional[NarrativeEnricher]:
    """Build the narrative enricher for the configured provider, if any."""
    if not config.enrichment_enabled:
        return None
    manager = LLMManager(config.llm_config())
    if isinstance(manager.client, MockLLMClient):
        manager.client.set_responses([MOCK_SUMMARY])
    if not manager.is_available():
        logger.warning(f"LLM provider '{config.llm_provider}' is not available")
    return NarrativeEnricher(manager)


def generate_one(
    generator: CharacterGenerator,
    config: GeneratorConfig,
    enricher: Optional[NarrativeEnricher],
    store: Optional[CharacterStore],
) -> dict[str, Any]:
    """
    Generate, enrich, store and project a single character.

    Returns:
        Result record with the character and, where applicable, its id and sheet

    Raises:
        GenerationExhaustedError: If the filters could not be met
        NarrativeEnrichmentError: If the LLM never produced a usable summary
    """
    filters = config.filters
    if filters.is_empty:
        character = generator.generate()
    else:
        character = generator.generate_matching(filters, max_attempts=config.max_attempts)

    if enricher is not None:
        character = enricher.enrich(character)

    result: dict[str, Any] = {"character": character}
    if store is not None:
        result["id"] = store.save(character)

    if config.sheet:
        if store is not None:
            sheet = store.adopt_sheet(result["id"], player_name=config.player_name)
            result["sheet_token"] = sheet.token
            result["sheet"] = sheet.payload
        else:
            result["sheet"] = project_sheet(character, player_name=config.player_name)
    return result


def _print_result(result: dict[str, Any], json_output: bool) -> None:
    character: Character = result["character"]
    if json_output:
        record = character.to_dict()
        if "id" in result:
            record["id"] = result["id"]
        if "sheet" in result:
            record["sheet"] = result["sheet"].to_dict()
        if "sheet_token" in result:
            record["sheet_token"] = result["sheet_token"]
        print(json.dumps(record, indent=2, ensure_ascii=False))
        return

    print(character.description())
    if "id" in result:
        print(f"[SAVED] Character stored with id #{result['id']}")
    if "sheet_token" in result:
        print(f"[SHEET] Character sheet {result['sheet_token']}")
    elif "sheet" in result:
        print(json.dumps(result["sheet"].to_dict(), indent=2, ensure_ascii=False))
    print()


def print_random_character(config: GeneratorConfig, rng: DiceRngAdapter) -> int:
    """Print a random stored character matching the kin/profession filters."""
    store = CharacterStore(config.db_path)
    stored = store.random_character(
        rng,
        kins=[config.kin] if config.kin else None,
        professions=[config.profession] if config.profession else None,
    )
    if stored is None:
        print("No characters found in database.")
        return 1
    _print_result({"character": stored.character, "id": stored.id}, config.json_output)
    return 0


def run(config: GeneratorConfig) -> int:
    """Execute a configured run. Returns the process exit code."""
    rng = (
        DiceRngAdapter.seeded(config.seed, reason_prefix="CLI")
        if config.seed is not None
        else DiceRngAdapter(reason_prefix="CLI")
    )

    if config.random_from_store:
        return print_random_character(config, rng)

    enricher = create_enricher(config)
    store = CharacterStore(config.db_path) if config.save else None
    generator = CharacterGenerator(rng=rng, placeholder_names=enricher is None)

    for index in range(config.count):
        try:
            result = generate_one(generator, config, enricher, store)
        except GenerationExhaustedError as e:
            logger.error(str(e))
            print(f"[ERROR] {e}", file=sys.stderr)
            return 1
        except NarrativeEnrichmentError as e:
            logger.error(f"Character {index + 1}: {e}")
            print(f"[ERROR] {e}", file=sys.stderr)
            return 1
        _print_result(result, config.json_output)

    return 0


# =============================================================================
# MAIN ENTRY POINT
# =============================================================================


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Main entry point for CLI usage."""
    args = parse_arguments(argv)
    setup_logging(args.verbose)
    config = create_config_from_args(args)
    return run(config)


if __name__ == "__main__":
    sys.exit(main())
