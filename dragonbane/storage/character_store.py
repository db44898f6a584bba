"""
SQLite persistence for generated characters and adopted character sheets.

The store is an explicitly constructed handle: callers create one
CharacterStore (file-backed or in-memory) and pass it to whatever needs it.

Characters are stored one row each; list-valued fields (heroic abilities,
trained skills, magic, gear, appearance seeds) are JSON text columns.
Categorical columns hold catalog display values and are validated on the
way back out, so a corrupted row raises InvalidCatalogValueError instead of
producing a half-valid Character.

A sheet is "adopted" from a stored character: the projected sheet payload is
saved under a random hex token, and can then be fetched and edited by token.
"""

import json
import logging
import sqlite3
import uuid
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Any, Optional, Sequence

from dragonbane.data_models import Character, Kin, Profession
from dragonbane.oracle.dice_rng_adapter import RandomSource
from dragonbane.sheet.sheet_projector import CharacterSheetPayload, project_sheet

logger = logging.getLogger(__name__)

DEFAULT_LIST_LIMIT = 50
MAX_LIST_LIMIT = 200
TOKEN_ATTEMPTS = 10

_CHARACTER_COLUMNS = (
    "id, name, kin, profession, age, strength, constitution, agility, intelligence, "
    "willpower, charisma, heroic_abilities, trained_skills, magic, gear, "
    "appearance_seeds, weakness, memento, appearance, background, created_at"
)


class CharacterNotFoundError(Exception):
    """Raised when no stored character has the requested id."""

    def __init__(self, character_id: int):
        self.character_id = character_id
        super().__init__(f"Character #{character_id} was not found")


class SheetNotFoundError(Exception):
    """Raised when no character sheet has the requested token."""

    def __init__(self, token: str):
        self.token = token
        super().__init__(f"Character sheet {token} was not found")


@dataclass
class StoredCharacter:
    """A character together with its database identity."""
    id: int
    character: Character
    created_at: str = ""

    def to_dict(self) -> dict[str, Any]:
        data = self.character.to_dict()
        data["id"] = self.id
        data["created_at"] = self.created_at
        return data


@dataclass
class StoredSheet:
    """An adopted character sheet."""
    token: str
    character_id: Optional[int]
    payload: CharacterSheetPayload
    created_at: str = ""
    updated_at: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {
            "sheetId": self.token,
            "characterId": self.character_id,
            "createdAt": self.created_at,
            "updatedAt": self.updated_at,
            "data": self.payload.to_dict(),
        }


def clamp_list_limit(limit: Optional[int]) -> int:
    """Listing limit: default 50, clamped to 1..200."""
    if limit is None:
        return DEFAULT_LIST_LIMIT
    return min(max(limit, 1), MAX_LIST_LIMIT)


class CharacterStore:
    """
    SQLite-backed store for characters and sheets.

    Usage:
        store = CharacterStore(Path("characters.db"))
        character_id = store.save(character)
        sheet = store.adopt_sheet(character_id, player_name="Sam")
    """

    def __init__(self, db_path: Optional[Path] = None):
        """
        Initialize the store.

        Args:
            db_path: Path to SQLite database file. If None, uses in-memory database.
        """
        self.db_path = Path(db_path) if db_path is not None else Path(":memory:")
        self._memory_conn: Optional[sqlite3.Connection] = None

        self._init_database()

        logger.info(f"CharacterStore initialized with database: {self.db_path}")

    def _init_database(self) -> None:
        """Initialize the SQLite database schema."""
        with self._get_connection() as conn:
            cursor = conn.cursor()

            cursor.execute("""
                CREATE TABLE IF NOT EXISTS characters (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    name TEXT NOT NULL,
                    kin TEXT NOT NULL,
                    profession TEXT NOT NULL,
                    age TEXT NOT NULL,
                    strength INTEGER NOT NULL,
                    constitution INTEGER NOT NULL,
                    agility INTEGER NOT NULL,
                    intelligence INTEGER NOT NULL,
                    willpower INTEGER NOT NULL,
                    charisma INTEGER NOT NULL,
                    heroic_abilities TEXT NOT NULL,
                    trained_skills TEXT NOT NULL,
                    magic TEXT NOT NULL,
                    gear TEXT NOT NULL,
                    appearance_seeds TEXT NOT NULL,
                    weakness TEXT NOT NULL,
                    memento TEXT NOT NULL,
                    appearance TEXT NOT NULL,
                    background TEXT NOT NULL,
                    created_at TEXT NOT NULL
                )
            """)

            cursor.execute("""
                CREATE TABLE IF NOT EXISTS character_sheets (
                    token TEXT PRIMARY KEY,
                    character_id INTEGER,
                    payload_json TEXT NOT NULL,
                    created_at TEXT NOT NULL,
                    updated_at TEXT NOT NULL,
                    FOREIGN KEY (character_id) REFERENCES characters(id) ON DELETE SET NULL
                )
            """)

            cursor.execute("""
                CREATE INDEX IF NOT EXISTS idx_characters_kin
                ON characters(kin)
            """)
            cursor.execute("""
                CREATE INDEX IF NOT EXISTS idx_characters_profession
                ON characters(profession)
            """)

            conn.commit()

    def _get_connection(self) -> sqlite3.Connection:
        """Get a database connection with foreign key enforcement on."""
        if str(self.db_path) == ":memory:":
            # For in-memory database, maintain a single connection
            if self._memory_conn is None:
                self._memory_conn = self._connect(":memory:")
            return self._memory_conn
        return self._connect(str(self.db_path))

    @staticmethod
    def _connect(database: str) -> sqlite3.Connection:
        conn = sqlite3.connect(database)
        # Off by default in SQLite; needed for ON DELETE SET NULL on sheets
        conn.execute("PRAGMA foreign_keys = ON")
        return conn

    def close(self) -> None:
        if self._memory_conn is not None:
            self._memory_conn.close()
            self._memory_conn = None

    # =========================================================================
    # CHARACTERS
    # =========================================================================

    def save(self, character: Character) -> int:
        """
        Insert a character.

        Returns:
            The new character id
        """
        data = character.to_dict()
        with self._get_connection() as conn:
            cursor = conn.cursor()
            cursor.execute("""
                INSERT INTO characters (
                    name, kin, profession, age, strength, constitution, agility,
                    intelligence, willpower, charisma, heroic_abilities, trained_skills,
                    magic, gear, appearance_seeds, weakness, memento, appearance,
                    background, created_at
                ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
            """, (
                data["name"],
                data["kin"],
                data["profession"],
                data["age"],
                data["strength"],
                data["constitution"],
                data["agility"],
                data["intelligence"],
                data["willpower"],
                data["charisma"],
                json.dumps(data["heroic_abilities"]),
                json.dumps(data["trained_skills"]),
                json.dumps(data["magic"]),
                json.dumps(data["gear"]),
                json.dumps(data["appearance_seeds"]),
                data["weakness"],
                data["memento"],
                data["appearance"],
                data["background"],
                datetime.now().isoformat(),
            ))
            conn.commit()
            character_id = cursor.lastrowid

        logger.debug(f"Saved character #{character_id}: {character.kin.value} {character.profession.value}")
        return character_id

    def get(self, character_id: int) -> Character:
        """
        Fetch a character by id.

        Raises:
            CharacterNotFoundError: If the id is unknown
            InvalidCatalogValueError: If the stored row holds an unknown catalog value
        """
        return self.get_record(character_id).character

    def get_record(self, character_id: int) -> StoredCharacter:
        with self._get_connection() as conn:
            cursor = conn.cursor()
            cursor.execute(
                f"SELECT {_CHARACTER_COLUMNS} FROM characters WHERE id = ?",
                (character_id,),
            )
            row = cursor.fetchone()

        if row is None:
            raise CharacterNotFoundError(character_id)
        return self._row_to_record(row)

    def list_characters(
        self,
        limit: Optional[int] = None,
        kins: Optional[Sequence[Kin]] = None,
        professions: Optional[Sequence[Profession]] = None,
    ) -> list[StoredCharacter]:
        """
        List stored characters, newest first.

        Args:
            limit: Maximum rows (default 50, clamped to 1..200)
            kins: Only these kin, if given
            professions: Only these professions, if given

        Returns:
            Matching characters ordered by id descending
        """
        where, params = self._filter_clause(kins, professions)
        with self._get_connection() as conn:
            cursor = conn.cursor()
            cursor.execute(
                f"SELECT {_CHARACTER_COLUMNS} FROM characters{where} ORDER BY id DESC LIMIT ?",
                (*params, clamp_list_limit(limit)),
            )
            rows = cursor.fetchall()

        return [self._row_to_record(row) for row in rows]

    def random_character(
        self,
        rng: RandomSource,
        kins: Optional[Sequence[Kin]] = None,
        professions: Optional[Sequence[Profession]] = None,
    ) -> Optional[StoredCharacter]:
        """
        Pick a stored character uniformly at random.

        Returns:
            A matching character, or None if nothing matches
        """
        where, params = self._filter_clause(kins, professions)
        with self._get_connection() as conn:
            cursor = conn.cursor()
            cursor.execute(f"SELECT id FROM characters{where} ORDER BY id", params)
            ids = [row[0] for row in cursor.fetchall()]

        if not ids:
            return None
        return self.get_record(rng.choice(ids))

    def update_narrative(
        self,
        character_id: int,
        name: Optional[str] = None,
        appearance: Optional[str] = None,
        background: Optional[str] = None,
    ) -> Character:
        """
        Overwrite the narrative fields of a stored character.

        Raises:
            CharacterNotFoundError: If the id is unknown
        """
        updated = self.get(character_id).with_narrative(
            name=name, appearance=appearance, background=background
        )
        with self._get_connection() as conn:
            cursor = conn.cursor()
            cursor.execute("""
                UPDATE characters SET name = ?, appearance = ?, background = ?
                WHERE id = ?
            """, (updated.name, updated.appearance, updated.background, character_id))
            conn.commit()
        return updated

    def delete(self, character_id: int) -> bool:
        """Delete a character. Returns True if a row was removed."""
        with self._get_connection() as conn:
            cursor = conn.cursor()
            cursor.execute("DELETE FROM characters WHERE id = ?", (character_id,))
            conn.commit()
            deleted = cursor.rowcount > 0

        if deleted:
            logger.debug(f"Deleted character #{character_id}")
        return deleted

    def count(self) -> int:
        with self._get_connection() as conn:
            cursor = conn.cursor()
            cursor.execute("SELECT COUNT(*) FROM characters")
            return cursor.fetchone()[0]

    @staticmethod
    def _filter_clause(
        kins: Optional[Sequence[Kin]],
        professions: Optional[Sequence[Profession]],
    ) -> tuple[str, tuple[Any, ...]]:
        clauses = []
        params: list[Any] = []
        if kins:
            clauses.append(f"kin IN ({', '.join('?' for _ in kins)})")
            params.extend(kin.value for kin in kins)
        if professions:
            clauses.append(f"profession IN ({', '.join('?' for _ in professions)})")
            params.extend(profession.value for profession in professions)
        where = f" WHERE {' AND '.join(clauses)}" if clauses else ""
        return where, tuple(params)

    @staticmethod
    def _row_to_record(row: Sequence[Any]) -> StoredCharacter:
        (
            character_id, name, kin, profession, age, strength, constitution, agility,
            intelligence, willpower, charisma, heroic_abilities, trained_skills, magic,
            gear, appearance_seeds, weakness, memento, appearance, background, created_at,
        ) = row
        character = Character.from_dict({
            "name": name,
            "kin": kin,
            "profession": profession,
            "age": age,
            "strength": strength,
            "constitution": constitution,
            "agility": agility,
            "intelligence": intelligence,
            "willpower": willpower,
            "charisma": charisma,
            "heroic_abilities": json.loads(heroic_abilities),
            "trained_skills": json.loads(trained_skills),
            "magic": json.loads(magic),
            "gear": json.loads(gear),
            "appearance_seeds": json.loads(appearance_seeds),
            "weakness": weakness,
            "memento": memento,
            "appearance": appearance,
            "background": background,
        })
        return StoredCharacter(id=character_id, character=character, created_at=created_at)

    # =========================================================================
    # SHEETS
    # =========================================================================

    def adopt_sheet(self, character_id: int, player_name: Optional[str] = None) -> StoredSheet:
        """
        Project a stored character onto a new sheet and save it under a fresh token.

        Raises:
            CharacterNotFoundError: If the id is unknown
            RuntimeError: If no unused token could be allocated
        """
        character = self.get(character_id)
        payload = project_sheet(character, player_name=player_name)
        token = self._allocate_token()
        now = datetime.now().isoformat()

        with self._get_connection() as conn:
            cursor = conn.cursor()
            cursor.execute("""
                INSERT INTO character_sheets (token, character_id, payload_json, created_at, updated_at)
                VALUES (?, ?, ?, ?, ?)
            """, (token, character_id, json.dumps(payload.to_dict()), now, now))
            conn.commit()

        logger.info(f"Created character sheet {token} for character #{character_id}")
        return StoredSheet(token, character_id, payload, created_at=now, updated_at=now)

    def get_sheet(self, token: str) -> StoredSheet:
        """
        Fetch a sheet by token (case-insensitive).

        Raises:
            SheetNotFoundError: If the token is unknown
        """
        token = token.strip().lower()
        with self._get_connection() as conn:
            cursor = conn.cursor()
            cursor.execute("""
                SELECT token, character_id, payload_json, created_at, updated_at
                FROM character_sheets WHERE token = ?
            """, (token,))
            row = cursor.fetchone()

        if row is None:
            raise SheetNotFoundError(token)
        return StoredSheet(
            token=row[0],
            character_id=row[1],
            payload=CharacterSheetPayload.from_dict(json.loads(row[2])),
            created_at=row[3],
            updated_at=row[4],
        )

    def update_sheet(self, token: str, payload: CharacterSheetPayload) -> StoredSheet:
        """
        Replace a sheet's payload; the payload is normalized before saving.

        Raises:
            SheetNotFoundError: If the token is unknown
        """
        existing = self.get_sheet(token)
        payload.normalize()
        now = datetime.now().isoformat()
        with self._get_connection() as conn:
            cursor = conn.cursor()
            cursor.execute("""
                UPDATE character_sheets SET payload_json = ?, updated_at = ?
                WHERE token = ?
            """, (json.dumps(payload.to_dict()), now, existing.token))
            conn.commit()

        return StoredSheet(
            existing.token, existing.character_id, payload,
            created_at=existing.created_at, updated_at=now,
        )

    def _allocate_token(self) -> str:
        for _ in range(TOKEN_ATTEMPTS):
            token = uuid.uuid4().hex
            with self._get_connection() as conn:
                cursor = conn.cursor()
                cursor.execute("SELECT 1 FROM character_sheets WHERE token = ?", (token,))
                if cursor.fetchone() is None:
                    return token
        raise RuntimeError("Unable to allocate a unique sheet token")
