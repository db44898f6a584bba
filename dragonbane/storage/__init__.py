"""SQLite storage for characters and adopted character sheets."""

from dragonbane.storage.character_store import (
    DEFAULT_LIST_LIMIT,
    MAX_LIST_LIMIT,
    CharacterNotFoundError,
    CharacterStore,
    SheetNotFoundError,
    StoredCharacter,
    StoredSheet,
    clamp_list_limit,
)

__all__ = [
    "DEFAULT_LIST_LIMIT",
    "MAX_LIST_LIMIT",
    "CharacterNotFoundError",
    "CharacterStore",
    "SheetNotFoundError",
    "StoredCharacter",
    "StoredSheet",
    "clamp_list_limit",
]
