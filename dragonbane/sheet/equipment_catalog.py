"""
Equipment presets for the character sheet.

Gear lines are free text, so matching is a best-effort alias lookup: both
the gear line and every alias key are normalized, an exact key match wins,
and otherwise the first preset with a key contained in the gear line is
used. Unrecognized gear simply becomes an inventory line.
"""

import re
from dataclasses import dataclass, field
from typing import Any, Optional, Sequence, TypeVar

T = TypeVar("T")

_NON_ALPHANUMERIC = re.compile(r"[^\w ]|_", re.UNICODE)

CURRENCY_TOKENS = ("gold", "silver", "copper")


def coerce_int(value: Any, default: Optional[int] = 0) -> Optional[int]:
    """int(value), or the default when a stored field is missing or null."""
    if value is None:
        return default
    return int(value)


def normalize_equipment_string(value: str) -> str:
    """
    Canonical form used for all equipment matching.

    Lower-cases, turns '-' and ',' into spaces, spells 'armor' as 'armour',
    replaces any other character that is not a letter or digit (in any script)
    with a space and collapses runs of whitespace.
    """
    lowered = value.lower().replace("-", " ").replace(",", " ").replace("armor", "armour")
    cleaned = _NON_ALPHANUMERIC.sub(" ", lowered)
    return " ".join(cleaned.split())


def format_grip(raw: str) -> str:
    """Sheet grip notation: 1H -> R, 2H -> RL, shield/LH -> L, '-' -> blank."""
    value = raw.lower()
    if value == "1h":
        return "R"
    elif value == "2h":
        return "RL"
    elif value in ("shield", "lh"):
        return "L"
    return "" if raw == "-" else raw


# =============================================================================
# SHEET BLOCKS
# =============================================================================


@dataclass
class ArmourBanes:
    sneaking: bool = False
    evade: bool = False
    acrobatics: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {"sneaking": self.sneaking, "evade": self.evade, "acrobatics": self.acrobatics}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ArmourBanes":
        return cls(
            sneaking=bool(data.get("sneaking", False)),
            evade=bool(data.get("evade", False)),
            acrobatics=bool(data.get("acrobatics", False)),
        )


@dataclass
class ArmourBlock:
    """Body armour slot on the sheet."""
    armour_type: str = ""
    rating: int = 0
    banes: ArmourBanes = field(default_factory=ArmourBanes)

    def to_dict(self) -> dict[str, Any]:
        return {
            "armourType": self.armour_type,
            "rating": self.rating,
            "banes": self.banes.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ArmourBlock":
        return cls(
            armour_type=data.get("armourType", ""),
            rating=coerce_int(data.get("rating"), 0),
            banes=ArmourBanes.from_dict(data.get("banes", {})),
        )


@dataclass
class HelmetBanes:
    awareness: bool = False
    ranged_attacks: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {"awareness": self.awareness, "rangedAttacks": self.ranged_attacks}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "HelmetBanes":
        return cls(
            awareness=bool(data.get("awareness", False)),
            ranged_attacks=bool(data.get("rangedAttacks", False)),
        )


@dataclass
class HelmetBlock:
    """Helmet slot on the sheet."""
    helmet_type: str = ""
    rating: int = 0
    banes: HelmetBanes = field(default_factory=HelmetBanes)

    def to_dict(self) -> dict[str, Any]:
        return {
            "helmetType": self.helmet_type,
            "rating": self.rating,
            "banes": self.banes.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "HelmetBlock":
        return cls(
            helmet_type=data.get("helmetType", ""),
            rating=coerce_int(data.get("rating"), 0),
            banes=HelmetBanes.from_dict(data.get("banes", {})),
        )


@dataclass
class WeaponEntry:
    """One of the three weapon rows on the sheet."""
    name: str = ""
    grip: str = ""
    range: str = ""
    damage: str = ""
    durability: int = 0
    features: str = ""

    @property
    def is_empty(self) -> bool:
        return not self.name

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "grip": self.grip,
            "range": self.range,
            "damage": self.damage,
            "durability": self.durability,
            "features": self.features,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "WeaponEntry":
        return cls(
            name=data.get("name", ""),
            grip=data.get("grip", ""),
            range=data.get("range", ""),
            damage=data.get("damage", ""),
            durability=coerce_int(data.get("durability"), 0),
            features=data.get("features", ""),
        )


# =============================================================================
# PRESETS
# =============================================================================


@dataclass(frozen=True)
class ArmourPreset:
    keys: tuple[str, ...]
    armour_type: str
    rating: int
    sneaking: bool = False
    evade: bool = False
    acrobatics: bool = False

    def block(self) -> ArmourBlock:
        return ArmourBlock(
            armour_type=self.armour_type,
            rating=self.rating,
            banes=ArmourBanes(sneaking=self.sneaking, evade=self.evade, acrobatics=self.acrobatics),
        )


@dataclass(frozen=True)
class HelmetPreset:
    keys: tuple[str, ...]
    helmet_type: str
    rating: int
    awareness: bool = False
    ranged_attacks: bool = False

    def block(self) -> HelmetBlock:
        return HelmetBlock(
            helmet_type=self.helmet_type,
            rating=self.rating,
            banes=HelmetBanes(awareness=self.awareness, ranged_attacks=self.ranged_attacks),
        )


@dataclass(frozen=True)
class WeaponPreset:
    keys: tuple[str, ...]
    name: str
    grip: str
    range: str
    damage: str
    durability: int
    features: str

    def entry(self) -> WeaponEntry:
        return WeaponEntry(
            name=self.name,
            grip=format_grip(self.grip),
            range=self.range,
            damage=self.damage,
            durability=max(self.durability, 0),
            features=self.features,
        )


ARMOUR_PRESETS: tuple[ArmourPreset, ...] = (
    ArmourPreset(("leather armour", "leather"), "Leather Armour", 1),
    ArmourPreset(("studded leather armour", "studded leather"), "Studded Leather Armour", 2, sneaking=True),
    ArmourPreset(("chainmail armour", "chainmail"), "Chainmail", 4, sneaking=True, evade=True),
    ArmourPreset(("plate armour", "plate"), "Plate Armour", 6, sneaking=True, evade=True, acrobatics=True),
)

HELMET_PRESETS: tuple[HelmetPreset, ...] = (
    HelmetPreset(("open helmet",), "Open Helmet", 1, awareness=True),
    HelmetPreset(("great helm", "great helmet"), "Great Helm", 2, awareness=True, ranged_attacks=True),
)

WEAPON_PRESETS: tuple[WeaponPreset, ...] = (
    WeaponPreset(("unarmed",), "Unarmed", "-", "1", "D6", 0, "Bludgeoning"),
    WeaponPreset(("blunt object light", "light blunt"), "Light Blunt Object", "1H", "STR", "D8", 3,
                 "Bludgeoning, can be thrown"),
    WeaponPreset(("blunt object heavy", "heavy blunt"), "Heavy Blunt Object", "2H", "2", "2D8", 3, "Bludgeoning"),
    WeaponPreset(("knife",), "Knife", "1H", "STR", "D8", 6, "Subtle, piercing, can be thrown"),
    WeaponPreset(("dagger",), "Dagger", "1H", "STR", "D8", 9, "Subtle, piercing, slashing, can be thrown"),
    WeaponPreset(("parrying dagger",), "Parrying Dagger", "1H", "1", "D6", 12, "Subtle, piercing, slashing"),
    WeaponPreset(("short sword",), "Short Sword", "1H", "2", "D10", 12, "Piercing, slashing"),
    WeaponPreset(("broadsword",), "Broadsword", "1H", "2", "2D6", 15, "Piercing, slashing"),
    WeaponPreset(("longsword",), "Longsword", "1H", "2", "2D8", 15, "Piercing, slashing"),
    WeaponPreset(("greatsword",), "Greatsword", "2H", "2", "2D10", 15, "Piercing, slashing"),
    WeaponPreset(("scimitar",), "Scimitar", "1H", "2", "2D6", 12, "Toppling, slashing"),
    WeaponPreset(("handaxe", "hand axe"), "Handaxe", "1H", "STR", "2D6", 9, "Toppling, slashing, can be thrown"),
    WeaponPreset(("battleaxe", "battle axe"), "Battleaxe", "1H", "2", "2D8", 9, "Toppling, slashing"),
    WeaponPreset(("two handed axe", "great axe"), "Two-Handed Axe", "2H", "2", "2D10", 9, "Toppling, slashing"),
    WeaponPreset(("mace",), "Mace", "1H", "2", "2D4", 12, "Bludgeoning"),
    WeaponPreset(("morningstar",), "Morningstar", "1H", "2", "2D8", 12, "Bludgeoning"),
    WeaponPreset(("flail",), "Flail", "1H", "2", "2D8", 0, "Bludgeoning, toppling, cannot be used for parrying"),
    WeaponPreset(("warhammer light",), "Light Warhammer", "1H", "2", "2D6", 12, "Bludgeoning, toppling"),
    WeaponPreset(("warhammer heavy",), "Heavy Warhammer", "2H", "2", "2D10", 12, "Bludgeoning, toppling"),
    WeaponPreset(("wooden club small", "small club"), "Small Wooden Club", "1H", "2", "D8", 9, "Bludgeoning"),
    WeaponPreset(("wooden club large", "large club"), "Large Wooden Club", "2H", "2", "2D8", 12, "Bludgeoning"),
    WeaponPreset(("staff",), "Staff", "2H", "2", "D8", 9, "Bludgeoning, toppling"),
    WeaponPreset(("short spear",), "Short Spear", "1H", "STR×2", "D10", 9, "Piercing, can be thrown"),
    WeaponPreset(("long spear",), "Long Spear", "2H", "4", "2D8", 9, "Long, piercing"),
    WeaponPreset(("lance",), "Lance", "1H", "4", "2D10", 12, "Long, piercing, requires combat trained mount"),
    WeaponPreset(("halberd",), "Halberd", "2H", "4", "2D8", 12, "Long, toppling, piercing, slashing"),
    WeaponPreset(("trident",), "Trident", "1H", "STR", "2D6", 9, "Toppling, piercing, can be thrown"),
    WeaponPreset(("shield small", "small shield"), "Small Shield", "1H", "2", "D8", 15, "Bludgeoning"),
    WeaponPreset(("shield large", "large shield"), "Large Shield", "1H", "2", "D8", 18, "Bludgeoning"),
    WeaponPreset(("sling",), "Sling", "1H", "20", "D8", 0, "Bludgeoning, tiny item"),
    WeaponPreset(("short bow",), "Short Bow", "2H", "30", "D10", 3, "Piercing, requires quiver"),
    WeaponPreset(("longbow", "long bow"), "Longbow", "2H", "100", "D12", 6, "Piercing, requires quiver"),
    WeaponPreset(("crossbow light", "light crossbow"), "Light Crossbow", "2H", "40", "2D6", 6,
                 "Piercing, requires quiver, no damage bonus"),
    WeaponPreset(("crossbow heavy", "heavy crossbow"), "Heavy Crossbow", "2H", "60", "2D8", 9,
                 "Piercing, requires quiver, no damage bonus"),
    WeaponPreset(("crossbow hand", "hand crossbow"), "Hand Crossbow", "1H", "30", "2D6", 6,
                 "Piercing, requires quiver, no damage bonus"),
)


def _match_preset(raw: str, presets: Sequence[T]) -> Optional[T]:
    """Exact normalized key match first, then first key contained in raw."""
    normalized = normalize_equipment_string(raw)
    if not normalized:
        return None

    for preset in presets:
        if any(normalize_equipment_string(key) == normalized for key in preset.keys):
            return preset
    for preset in presets:
        if any(normalize_equipment_string(key) in normalized for key in preset.keys):
            return preset
    return None


def match_armour(raw: str) -> Optional[ArmourBlock]:
    preset = _match_preset(raw, ARMOUR_PRESETS)
    return preset.block() if preset else None


def match_helmet(raw: str) -> Optional[HelmetBlock]:
    preset = _match_preset(raw, HELMET_PRESETS)
    return preset.block() if preset else None


def match_weapon(raw: str) -> Optional[WeaponEntry]:
    preset = _match_preset(raw, WEAPON_PRESETS)
    return preset.entry() if preset else None


# =============================================================================
# CURRENCY
# =============================================================================


class CurrencyAccumulator:
    """
    Collects coin lines such as "7 Silver" into gold/silver/copper totals.

    A line counts as currency when its first coin word is directly preceded
    by an integer.
    """

    def __init__(self):
        self.gold = 0
        self.silver = 0
        self.copper = 0

    def absorb(self, raw: str) -> bool:
        """
        Try to add a gear line to the totals.

        Returns:
            True if the line was currency and has been counted
        """
        tokens = normalize_equipment_string(raw).split()
        index = next((i for i, token in enumerate(tokens) if token in CURRENCY_TOKENS), None)
        if index is None or index == 0:
            return False
        try:
            amount = int(tokens[index - 1])
        except ValueError:
            return False

        setattr(self, tokens[index], getattr(self, tokens[index]) + amount)
        return True
