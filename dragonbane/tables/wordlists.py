"""
Flavor wordlists for character generation.

Weaknesses, mementos and per-kin appearance seeds live in line-delimited
text files under dragonbane/data/wordlists. A missing or empty file never
stops generation: the tolerant loader logs a warning and the selectors fall
back to fixed sentinel strings.
"""

import logging
from pathlib import Path
from typing import Optional

from dragonbane.data_models import Kin
from dragonbane.oracle.dice_rng_adapter import RandomSource, draw_without_replacement

logger = logging.getLogger(__name__)

DEFAULT_WORDLIST_DIR = Path(__file__).parent.parent / "data" / "wordlists"

WEAKNESSES_RESOURCE = "weaknesses"
MEMENTOS_RESOURCE = "mementos"

NO_WEAKNESS = "No weakness specified"
NO_MEMENTO = "No memento specified"
NO_APPEARANCE = "No appearance specified"

APPEARANCE_SEED_COUNT = 2

# Used when a character is generated without narrative enrichment
PLACEHOLDER_NAMES = (
    "Aragorn", "Baldur", "Celeste", "Darian", "Elora",
    "Fendrel", "Garen", "Helena", "Ivor", "Jora",
)
FALLBACK_NAME = "Hero"


class MissingResourceError(Exception):
    """Raised when a wordlist resource cannot be read in strict mode."""

    def __init__(self, resource: str, path: Path, reason: str = "not found"):
        self.resource = resource
        self.path = path
        super().__init__(f"Wordlist '{resource}' {reason}: {path}")


def appearance_resource(kin: Kin) -> str:
    """Resource name for a kin's appearance seeds, e.g. 'appearance_cat_people'."""
    return f"appearance_{kin.slug}"


class WordlistLoader:
    """
    Reads and caches line-delimited wordlists.

    Lines are stripped; blank lines and lines starting with '#' are skipped.
    Each loader caches what it has read, so one loader per generator keeps
    file access to a single read per resource.
    """

    def __init__(self, base_dir: Optional[Path] = None):
        self.base_dir = Path(base_dir) if base_dir is not None else DEFAULT_WORDLIST_DIR
        self._cache: dict[str, list[str]] = {}

    def path_for(self, resource: str) -> Path:
        return self.base_dir / f"{resource}.txt"

    def load_lines(self, resource: str, strict: bool = False) -> list[str]:
        """
        Load the non-empty lines of a wordlist.

        Args:
            resource: Resource name without extension (e.g. "weaknesses")
            strict: Raise instead of returning an empty list

        Returns:
            The lines, or [] if the resource is missing and strict is False

        Raises:
            MissingResourceError: In strict mode, if the file is missing or unreadable
        """
        if resource in self._cache:
            return list(self._cache[resource])

        file_path = self.path_for(resource)
        if not file_path.exists():
            if strict:
                raise MissingResourceError(resource, file_path)
            logger.warning(f"Wordlist not found: {file_path}")
            return []

        try:
            with open(file_path, "r", encoding="utf-8") as f:
                raw_lines = f.read().splitlines()
        except (OSError, UnicodeDecodeError) as e:
            if strict:
                raise MissingResourceError(resource, file_path, reason=f"unreadable ({e})") from e
            logger.warning(f"Error reading wordlist {file_path}: {e}")
            return []

        lines = [
            line.strip() for line in raw_lines
            if line.strip() and not line.strip().startswith("#")
        ]
        self._cache[resource] = lines
        logger.debug(f"Loaded {len(lines)} lines from {file_path.name}")
        return list(lines)

    def clear_cache(self) -> None:
        self._cache.clear()


# =============================================================================
# SELECTORS
# =============================================================================


def select_weakness(loader: WordlistLoader, rng: RandomSource) -> str:
    lines = loader.load_lines(WEAKNESSES_RESOURCE)
    if not lines:
        return NO_WEAKNESS
    return rng.choice(lines)


def select_memento(loader: WordlistLoader, rng: RandomSource) -> str:
    lines = loader.load_lines(MEMENTOS_RESOURCE)
    if not lines:
        return NO_MEMENTO
    return rng.choice(lines)


def select_appearance_seeds(loader: WordlistLoader, kin: Kin, rng: RandomSource) -> list[str]:
    """Two distinct appearance seeds for a kin, or the sentinel list."""
    lines = loader.load_lines(appearance_resource(kin))
    if not lines:
        return [NO_APPEARANCE]
    return draw_without_replacement(rng, lines, APPEARANCE_SEED_COUNT)


def select_placeholder_name(rng: RandomSource, names: Optional[tuple[str, ...]] = None) -> str:
    pool = PLACEHOLDER_NAMES if names is None else names
    if not pool:
        return FALLBACK_NAME
    return rng.choice(pool)
