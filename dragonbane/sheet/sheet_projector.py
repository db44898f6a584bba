"""
Character sheet projection.

Maps a generated Character onto the printable/editable sheet record:
attributes, conditions, movement, encumbrance, skills in three sections,
spells, abilities, armour, helmet, three weapon rows, inventory, coins and
the HP/WP/death-roll tracks. The mapping of gear is heuristic (see
equipment_catalog); anything unrecognized lands in the inventory.

The record serializes to a camelCase dictionary for storage and UIs.
"""

import logging
import math
from dataclasses import dataclass, field
from typing import Any, Optional

from dragonbane.data_models import Attribute, Character, Kin, Skill
from dragonbane.kindred.kin_data import KIN_DEFINITIONS
from dragonbane.resolution.skill_resolver import magic_school_level, skill_level
from dragonbane.sheet.equipment_catalog import (
    ArmourBlock,
    CurrencyAccumulator,
    HelmetBlock,
    WeaponEntry,
    coerce_int,
    match_armour,
    match_helmet,
    match_weapon,
)

logger = logging.getLogger(__name__)

WEAPON_ROWS = 3
DEATH_ROLL_TOGGLES = 3
DEFAULT_BASE_MOVEMENT = 10


# =============================================================================
# PAYLOAD PARTS
# =============================================================================


@dataclass
class AttributeBlock:
    strength: int = 0
    constitution: int = 0
    agility: int = 0
    intelligence: int = 0
    willpower: int = 0
    charisma: int = 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "strength": self.strength,
            "constitution": self.constitution,
            "agility": self.agility,
            "intelligence": self.intelligence,
            "willpower": self.willpower,
            "charisma": self.charisma,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "AttributeBlock":
        return cls(**{key: coerce_int(data.get(key), 0) for key in cls().to_dict()})


@dataclass
class ConditionFlags:
    exhausted: bool = False
    sickly: bool = False
    dazed: bool = False
    angry: bool = False
    scared: bool = False
    disheartened: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {
            "exhausted": self.exhausted,
            "sickly": self.sickly,
            "dazed": self.dazed,
            "angry": self.angry,
            "scared": self.scared,
            "disheartened": self.disheartened,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ConditionFlags":
        return cls(**{key: bool(data.get(key, False)) for key in cls().to_dict()})


@dataclass
class SkillEntry:
    name: str
    level: int = 0
    needs_improvement: bool = False  # Advancement mark

    def normalized(self) -> "SkillEntry":
        return SkillEntry(self.name.strip(), max(self.level, 0), self.needs_improvement)

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name, "level": self.level, "needsImprovement": self.needs_improvement}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "SkillEntry":
        return cls(
            name=data.get("name", ""),
            level=coerce_int(data.get("level"), 0),
            needs_improvement=bool(data.get("needsImprovement", False)),
        )


@dataclass
class SkillSections:
    """Primary (general) skills, weapon skills and secondary (magic) skills."""
    primary: list[SkillEntry] = field(default_factory=list)
    weapon: list[SkillEntry] = field(default_factory=list)
    secondary: list[SkillEntry] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "primary": [s.to_dict() for s in self.primary],
            "weapon": [s.to_dict() for s in self.weapon],
            "secondary": [s.to_dict() for s in self.secondary],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "SkillSections":
        return cls(
            primary=[SkillEntry.from_dict(s) for s in data.get("primary", [])],
            weapon=[SkillEntry.from_dict(s) for s in data.get("weapon", [])],
            secondary=[SkillEntry.from_dict(s) for s in data.get("secondary", [])],
        )


@dataclass
class InventoryItem:
    name: str
    details: str = ""
    slots: int = 1

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name, "details": self.details, "slots": self.slots}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "InventoryItem":
        return cls(
            name=data.get("name", ""),
            details=data.get("details", ""),
            slots=coerce_int(data.get("slots"), 1),
        )


@dataclass
class SpellEntry:
    name: str
    in_grimoire: bool = True
    prepared: bool = False

    @classmethod
    def learned(cls, name: str) -> "SpellEntry":
        """A spell the character knows but has not prepared."""
        return cls(name=name.strip(), in_grimoire=True, prepared=False)

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name, "inGrimoire": self.in_grimoire, "prepared": self.prepared}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "SpellEntry":
        return cls(
            name=data.get("name", ""),
            in_grimoire=bool(data.get("inGrimoire", False)),
            prepared=bool(data.get("prepared", False)),
        )


@dataclass
class RestFlags:
    round_rest: bool = False
    stretch_rest: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {"roundRest": self.round_rest, "stretchRest": self.stretch_rest}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "RestFlags":
        return cls(
            round_rest=bool(data.get("roundRest", False)),
            stretch_rest=bool(data.get("stretchRest", False)),
        )


@dataclass
class ResourceTrack:
    """HP or WP: maximum and current value."""
    max: int = 0
    current: int = 0

    @classmethod
    def full(cls, value: int) -> "ResourceTrack":
        return cls(max=value, current=value)

    def to_dict(self) -> dict[str, Any]:
        return {"max": self.max, "current": self.current}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ResourceTrack":
        return cls(max=coerce_int(data.get("max"), 0), current=coerce_int(data.get("current"), 0))


def _empty_toggles() -> list[bool]:
    return [False] * DEATH_ROLL_TOGGLES


@dataclass
class DeathRollTrack:
    successes: list[bool] = field(default_factory=_empty_toggles)
    failures: list[bool] = field(default_factory=_empty_toggles)

    def to_dict(self) -> dict[str, Any]:
        return {"successes": list(self.successes), "failures": list(self.failures)}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "DeathRollTrack":
        return cls(
            successes=[bool(v) for v in data.get("successes", [])],
            failures=[bool(v) for v in data.get("failures", [])],
        )


def _normalized_toggles(source: list[bool]) -> list[bool]:
    toggles = list(source[:DEATH_ROLL_TOGGLES])
    toggles.extend([False] * (DEATH_ROLL_TOGGLES - len(toggles)))
    return toggles


def _empty_weapons() -> list[WeaponEntry]:
    return [WeaponEntry() for _ in range(WEAPON_ROWS)]


# =============================================================================
# PAYLOAD
# =============================================================================


@dataclass
class CharacterSheetPayload:
    """The full character sheet record."""
    character_name: str = ""
    player_name: str = ""
    kin: str = ""
    profession: str = ""
    age: str = ""
    weakness: str = ""
    appearance: str = ""
    attributes: AttributeBlock = field(default_factory=AttributeBlock)
    conditions: ConditionFlags = field(default_factory=ConditionFlags)
    movement: int = 0
    encumbrance_limit: Optional[int] = None
    spells: list[SpellEntry] = field(default_factory=list)
    abilities_and_spells: list[str] = field(default_factory=list)
    skills: SkillSections = field(default_factory=SkillSections)
    inventory: list[InventoryItem] = field(default_factory=list)
    gold: int = 0
    silver: int = 0
    copper: int = 0
    memento: str = ""
    tiny_items: str = ""
    armour: ArmourBlock = field(default_factory=ArmourBlock)
    helmet: HelmetBlock = field(default_factory=HelmetBlock)
    weapons: list[WeaponEntry] = field(default_factory=_empty_weapons)
    rests: RestFlags = field(default_factory=RestFlags)
    willpower: ResourceTrack = field(default_factory=ResourceTrack)
    hit_points: ResourceTrack = field(default_factory=ResourceTrack)
    death_rolls: DeathRollTrack = field(default_factory=DeathRollTrack)
    notes: str = ""
    background: str = ""

    def normalize(self) -> None:
        """
        Bring an edited or decoded sheet back into shape, in place.

        Pads or trims weapons to three rows and each death-roll track to three
        toggles, trims names, clamps inventory slots and skill levels at zero,
        drops blank spells and abilities, and fills in a missing encumbrance
        limit from STR.
        """
        self.weapons = list(self.weapons[:WEAPON_ROWS])
        self.weapons.extend(WeaponEntry() for _ in range(WEAPON_ROWS - len(self.weapons)))
        self.death_rolls.successes = _normalized_toggles(self.death_rolls.successes)
        self.death_rolls.failures = _normalized_toggles(self.death_rolls.failures)
        self.inventory = [
            InventoryItem(item.name.strip(), item.details.strip(), max(item.slots, 0))
            for item in self.inventory
        ]
        if self.encumbrance_limit is None:
            self.encumbrance_limit = default_encumbrance_limit(self.attributes.strength)
        self.encumbrance_limit = max(self.encumbrance_limit, 0)
        self.spells = [
            SpellEntry(s.name.strip(), s.in_grimoire, s.prepared)
            for s in self.spells if s.name.strip()
        ]
        self.abilities_and_spells = [a.strip() for a in self.abilities_and_spells if a.strip()]
        self.skills.primary = [s.normalized() for s in self.skills.primary]
        self.skills.weapon = [s.normalized() for s in self.skills.weapon]
        self.skills.secondary = [s.normalized() for s in self.skills.secondary]

    def to_dict(self) -> dict[str, Any]:
        return {
            "characterName": self.character_name,
            "playerName": self.player_name,
            "kin": self.kin,
            "profession": self.profession,
            "age": self.age,
            "weakness": self.weakness,
            "appearance": self.appearance,
            "attributes": self.attributes.to_dict(),
            "conditions": self.conditions.to_dict(),
            "movement": self.movement,
            "encumbranceLimit": self.encumbrance_limit,
            "spells": [s.to_dict() for s in self.spells],
            "abilitiesAndSpells": list(self.abilities_and_spells),
            "skills": self.skills.to_dict(),
            "inventory": [i.to_dict() for i in self.inventory],
            "gold": self.gold,
            "silver": self.silver,
            "copper": self.copper,
            "memento": self.memento,
            "tinyItems": self.tiny_items,
            "armour": self.armour.to_dict(),
            "helmet": self.helmet.to_dict(),
            "weapons": [w.to_dict() for w in self.weapons],
            "rests": self.rests.to_dict(),
            "willpower": self.willpower.to_dict(),
            "hitPoints": self.hit_points.to_dict(),
            "deathRolls": self.death_rolls.to_dict(),
            "notes": self.notes,
            "background": self.background,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "CharacterSheetPayload":
        """Decode a stored sheet. The result is normalized."""
        encumbrance = data.get("encumbranceLimit")
        payload = cls(
            character_name=data.get("characterName", ""),
            player_name=data.get("playerName", ""),
            kin=data.get("kin", ""),
            profession=data.get("profession", ""),
            age=data.get("age", ""),
            weakness=data.get("weakness", ""),
            appearance=data.get("appearance", ""),
            attributes=AttributeBlock.from_dict(data.get("attributes", {})),
            conditions=ConditionFlags.from_dict(data.get("conditions", {})),
            movement=coerce_int(data.get("movement"), 0),
            encumbrance_limit=coerce_int(encumbrance, None),
            spells=[SpellEntry.from_dict(s) for s in data.get("spells", [])],
            abilities_and_spells=list(data.get("abilitiesAndSpells", [])),
            skills=SkillSections.from_dict(data.get("skills", {})),
            inventory=[InventoryItem.from_dict(i) for i in data.get("inventory", [])],
            gold=coerce_int(data.get("gold"), 0),
            silver=coerce_int(data.get("silver"), 0),
            copper=coerce_int(data.get("copper"), 0),
            memento=data.get("memento", ""),
            tiny_items=data.get("tinyItems", ""),
            armour=ArmourBlock.from_dict(data.get("armour", {})),
            helmet=HelmetBlock.from_dict(data.get("helmet", {})),
            weapons=[WeaponEntry.from_dict(w) for w in data.get("weapons", [])],
            rests=RestFlags.from_dict(data.get("rests", {})),
            willpower=ResourceTrack.from_dict(data.get("willpower", {})),
            hit_points=ResourceTrack.from_dict(data.get("hitPoints", {})),
            death_rolls=DeathRollTrack.from_dict(data.get("deathRolls", {})),
            notes=data.get("notes", ""),
            background=data.get("background", ""),
        )
        payload.normalize()
        return payload


# =============================================================================
# DERIVED VALUES
# =============================================================================


def agility_movement_modifier(agility: int) -> int:
    """AGL band modifier to movement: -4, -2, 0, +2 or +4."""
    if agility <= 6:
        return -4
    elif agility <= 9:
        return -2
    elif agility <= 12:
        return 0
    elif agility <= 15:
        return 2
    return 4


def default_movement(kin: Kin, agility: int) -> int:
    """Kin base movement adjusted for AGL, never below zero."""
    definition = KIN_DEFINITIONS.get(kin)
    base = definition.base_movement if definition else DEFAULT_BASE_MOVEMENT
    return max(base + agility_movement_modifier(agility), 0)


def default_encumbrance_limit(strength: int) -> int:
    """Half STR rounded up, never below zero."""
    return max(math.ceil(strength / 2), 0)


def deduplicate_preserving_order(values: list[str]) -> list[str]:
    seen: set[str] = set()
    result = []
    for value in values:
        trimmed = value.strip()
        if trimmed and trimmed not in seen:
            seen.add(trimmed)
            result.append(trimmed)
    return result


# =============================================================================
# PROJECTION
# =============================================================================


def _skill_sections(character: Character) -> SkillSections:
    primary = [
        SkillEntry(skill.value, skill_level(skill, character))
        for skill in Skill if not skill.is_weapon_skill
    ]
    weapon = [
        SkillEntry(skill.value, skill_level(skill, character))
        for skill in Skill if skill.is_weapon_skill
    ]
    secondary = []
    school = magic_school_level(character)
    if school is not None:
        secondary.append(SkillEntry(school.name, school.level))
    return SkillSections(primary=primary, weapon=weapon, secondary=secondary)


def project_sheet(character: Character, player_name: Optional[str] = None) -> CharacterSheetPayload:
    """
    Build the character sheet for a generated character.

    Each gear line is tried, in order, as currency, armour, helmet and (while
    a weapon row is free) weapon; otherwise it becomes a one-slot inventory
    line. A later armour or helmet line replaces an earlier one.

    Args:
        character: The character to project
        player_name: Optional player name for the sheet header

    Returns:
        A normalized CharacterSheetPayload
    """
    armour = ArmourBlock()
    helmet = HelmetBlock()
    weapons = _empty_weapons()
    weapon_index = 0
    inventory: list[InventoryItem] = []
    currency = CurrencyAccumulator()

    for item in character.gear:
        if currency.absorb(item):
            continue
        armour_preset = match_armour(item)
        if armour_preset is not None:
            armour = armour_preset
            continue
        helmet_preset = match_helmet(item)
        if helmet_preset is not None:
            helmet = helmet_preset
            continue
        if weapon_index < WEAPON_ROWS:
            weapon_preset = match_weapon(item)
            if weapon_preset is not None:
                weapons[weapon_index] = weapon_preset
                weapon_index += 1
                continue
        inventory.append(InventoryItem(name=item, details="", slots=1))

    payload = CharacterSheetPayload(
        character_name=character.name,
        player_name=player_name or "",
        kin=character.kin.value,
        profession=character.profession.value,
        age=character.age.value,
        weakness=character.weakness,
        appearance=character.appearance,
        attributes=AttributeBlock(
            strength=character.strength,
            constitution=character.constitution,
            agility=character.agility,
            intelligence=character.intelligence,
            willpower=character.willpower,
            charisma=character.charisma,
        ),
        movement=default_movement(character.kin, character.agility),
        encumbrance_limit=default_encumbrance_limit(character.strength),
        spells=[SpellEntry.learned(name) for name in character.magic],
        abilities_and_spells=deduplicate_preserving_order([a.value for a in character.heroic_abilities]),
        skills=_skill_sections(character),
        inventory=inventory,
        gold=currency.gold,
        silver=currency.silver,
        copper=currency.copper,
        memento=character.memento,
        armour=armour,
        helmet=helmet,
        weapons=weapons,
        willpower=ResourceTrack.full(character.attribute(Attribute.WILLPOWER)),
        hit_points=ResourceTrack.full(character.attribute(Attribute.CONSTITUTION)),
        background=character.background,
    )
    payload.normalize()
    logger.debug(
        f"Projected sheet for {character.name or character.kin.value}: "
        f"{weapon_index} weapons, {len(inventory)} inventory lines"
    )
    return payload
