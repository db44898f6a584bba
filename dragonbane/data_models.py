"""
Shared data structures for the Dragonbane character generator.

Holds the closed catalogs (kin, professions, skills, heroic abilities,
attributes, ages), the centralized dice roller and the Character value
produced by the generation pipeline.
"""

from dataclasses import dataclass, field, replace
from datetime import datetime
from enum import Enum
from typing import Any, Optional, Sequence, TypeVar
import logging
import random

logger = logging.getLogger(__name__)

E = TypeVar("E", bound=Enum)


# =============================================================================
# ENUMS
# =============================================================================


class KinCategory(str, Enum):
    """Kin tiers used by the weighted kin draw."""
    COMMON = "common"
    NIGHTKIN = "nightkin"
    RARE = "rare"


class Kin(str, Enum):
    """Playable kin (races)."""
    HUMAN = "Human"
    HALFLING = "Halfling"
    DWARF = "Dwarf"
    ELF = "Elf"
    MALLARD = "Mallard"
    WOLFKIN = "Wolfkin"
    # Nightkin
    GOBLIN = "Goblin"
    HOBGOBLIN = "Hobgoblin"
    OGRE = "Ogre"
    ORC = "Orc"
    # Rare kin
    CAT_PEOPLE = "Cat People"
    FROG_PEOPLE = "Frog People"
    KARKION = "Karkion"
    LIZARD_PEOPLE = "Lizard People"
    SATYR = "Satyr"

    @property
    def slug(self) -> str:
        """File-friendly identifier, e.g. 'cat_people'."""
        return self.value.lower().replace(" ", "_")


class Profession(str, Enum):
    """Character professions."""
    ARTISAN = "Artisan"
    BARD = "Bard"
    FIGHTER = "Fighter"
    HUNTER = "Hunter"
    KNIGHT = "Knight"
    ANIMIST = "Mage (Animist)"
    ELEMENTALIST = "Mage (Elementalist)"
    MENTALIST = "Mage (Mentalist)"
    MARINER = "Mariner"
    MERCHANT = "Merchant"
    SCHOLAR = "Scholar"
    THIEF = "Thief"

    @property
    def is_caster(self) -> bool:
        return self in CASTER_PROFESSIONS


CASTER_PROFESSIONS = (Profession.ANIMIST, Profession.ELEMENTALIST, Profession.MENTALIST)


class Attribute(str, Enum):
    """The six attributes, in sheet order."""
    STRENGTH = "Strength"
    CONSTITUTION = "Constitution"
    AGILITY = "Agility"
    INTELLIGENCE = "Intelligence"
    WILLPOWER = "Willpower"
    CHARISMA = "Charisma"

    @property
    def abbreviation(self) -> str:
        return ATTRIBUTE_ABBREVIATIONS[self]


ATTRIBUTE_ABBREVIATIONS = {
    Attribute.STRENGTH: "STR",
    Attribute.CONSTITUTION: "CON",
    Attribute.AGILITY: "AGL",
    Attribute.INTELLIGENCE: "INT",
    Attribute.WILLPOWER: "WIL",
    Attribute.CHARISMA: "CHA",
}


class Age(str, Enum):
    """Age bands. Rolled on a d6: 1-3 young, 4-5 adult, 6 old."""
    YOUNG = "Young"
    ADULT = "Adult"
    OLD = "Old"

    @property
    def bonus_skill_count(self) -> int:
        """Trained skills granted on top of the six profession skills."""
        return AGE_BONUS_SKILLS[self]


AGE_BONUS_SKILLS = {
    Age.YOUNG: 2,
    Age.ADULT: 4,
    Age.OLD: 6,
}


class Skill(str, Enum):
    """General and weapon skills."""
    ACROBATICS = "Acrobatics"
    AWARENESS = "Awareness"
    BARTERING = "Bartering"
    BEAST_LORE = "Beast Lore"
    BLUFFING = "Bluffing"
    BUSHCRAFT = "Bushcraft"
    CRAFTING = "Crafting"
    EVADE = "Evade"
    HEALING = "Healing"
    HUNTING_AND_FISHING = "Hunting & Fishing"
    LANGUAGE = "Language"
    MYTHS_AND_LEGENDS = "Myths & Legends"
    PERFORMANCE = "Performance"
    PERSUASION = "Persuasion"
    RIDING = "Riding"
    SEAMANSHIP = "Seamanship"
    SLEIGHT_OF_HAND = "Sleight of Hand"
    SNEAKING = "Sneaking"
    SPOT_HIDDEN = "Spot Hidden"
    SWIMMING = "Swimming"
    # Weapon skills
    AXES = "Axes"
    BOWS = "Bows"
    BRAWLING = "Brawling"
    CROSSBOWS = "Crossbows"
    HAMMERS = "Hammers"
    KNIVES = "Knives"
    SLINGS = "Slings"
    SPEARS = "Spears"
    STAVES = "Staves"
    SWORDS = "Swords"

    @property
    def is_weapon_skill(self) -> bool:
        return self in WEAPON_SKILLS


WEAPON_SKILLS = frozenset({
    Skill.AXES, Skill.BOWS, Skill.BRAWLING, Skill.CROSSBOWS, Skill.HAMMERS,
    Skill.KNIVES, Skill.SLINGS, Skill.SPEARS, Skill.STAVES, Skill.SWORDS,
})


class HeroicAbility(str, Enum):
    """Heroic abilities, including the innate kin abilities."""
    ASSASSIN = "Assassin"
    BACKSTABBING = "Backstabbing"
    BATTLE_CRY = "Battle Cry"
    BERSERK = "Berserk"
    CATLIKE = "Catlike"
    COMPANION = "Companion"
    CONTORTIONIST = "Contortionist"
    DEFENSIVE = "Defensive"
    DEFLECT_ARROW = "Deflect Arrow"
    DISGUISE = "Disguise"
    DOUBLE_SLASH = "Double Slash"
    DRAGONSLAYER = "Dragonslayer"
    DUAL_WIELD = "Dual Wield"
    EAGLE_EYE = "Eagle Eye"
    FAST_FOOTWORK = "Fast Footwork"
    FAST_HEALER = "Fast Healer"
    FEARLESS = "Fearless"
    FOCUSED = "Focused"
    GUARDIAN = "Guardian"
    INSIGHT = "Insight"
    INTUITION = "Intuition"
    IRON_FIST = "Iron Fist"
    IRON_GRIP = "Iron Grip"
    LIGHTNING_FAST = "Lightning Fast"
    LONE_WOLF = "Lone Wolf"
    MAGIC_TALENT = "Magic Talent"
    MASSIVE_BLOW = "Massive Blow"
    MASTER_BLACKSMITH = "Master Blacksmith"
    MASTER_CARPENTER = "Master Carpenter"
    MASTER_CHEF = "Master Chef"
    MASTER_SPELLCASTER = "Master Spellcaster"
    MASTER_TANNER = "Master Tanner"
    MONSTER_HUNTER = "Monster Hunter"
    MUSICIAN = "Musician"
    PATHFINDER = "Pathfinder"
    QUARTERMASTER = "Quartermaster"
    ROBUST = "Robust"
    SEA_LEGS = "Sea Legs"
    SHIELD_BLOCK = "Shield Block"
    THROWING_ARM = "Throwing Arm"
    TREASURE_HUNTER = "Treasure Hunter"
    TWIN_SHOT = "Twin Shot"
    VETERAN = "Veteran"
    WEASEL = "Weasel"
    # Kin abilities
    ADAPTIVE = "Adaptive"
    HARD_TO_CATCH = "Hard to Catch"
    UNFORGIVING = "Unforgiving"
    INNER_PEACE = "Inner Peace"
    ILL_TEMPERED = "Ill-Tempered"
    WEBBED_FEET = "Webbed Feet"
    HUNTING_INSTINCT = "Hunting Instinct"
    RESILIENT = "Resilient"
    BODY_SLAM = "Body Slam"
    TOUGH = "Tough"
    NINE_LIVES = "Nine Lives"
    LEAPING = "Leaping"
    WINGS = "Wings"
    CAMOUFLAGE = "Camouflage"
    RAISE_SPIRITS = "Raise Spirits"


# =============================================================================
# CATALOG VALIDATION
# =============================================================================


class InvalidCatalogValueError(ValueError):
    """Raised when a string does not name a known catalog entry."""

    def __init__(self, catalog: str, value: Any):
        self.catalog = catalog
        self.value = value
        super().__init__(f"Unknown {catalog} value: {value!r}")


def parse_catalog_value(enum_cls: type[E], raw: Any) -> E:
    """
    Map a stored or user-supplied string back onto a catalog enum.

    Accepts the exact display value first, then a case-insensitive match on
    either the display value or the member name ("cat people", "CAT_PEOPLE").

    Raises:
        InvalidCatalogValueError: If nothing matches
    """
    if isinstance(raw, enum_cls):
        return raw
    if not isinstance(raw, str):
        raise InvalidCatalogValueError(enum_cls.__name__, raw)

    try:
        return enum_cls(raw)
    except ValueError:
        pass

    wanted = raw.strip().lower()
    for member in enum_cls:
        if member.value.lower() == wanted or member.name.lower() == wanted:
            return member
    raise InvalidCatalogValueError(enum_cls.__name__, raw)


# =============================================================================
# DICE
# =============================================================================


@dataclass
class DiceResult:
    """Result of a dice roll with full information."""
    notation: str
    rolls: list[int]
    modifier: int
    total: int
    reason: str
    kept: list[int] = field(default_factory=list)
    timestamp: datetime = field(default_factory=datetime.now)

    def __str__(self) -> str:
        shown = self.kept or self.rolls
        if self.modifier > 0:
            return f"{self.notation}: {shown} + {self.modifier} = {self.total}"
        elif self.modifier < 0:
            return f"{self.notation}: {shown} - {abs(self.modifier)} = {self.total}"
        return f"{self.notation}: {shown} = {self.total}"


class DiceRoller:
    """
    Randomization interface for one generation session.

    Every roller owns its own random.Random, so two rollers never share
    state and a seeded roller replays the exact same sequence. Rolls are
    recorded in the roller's log with the reason they were made.
    """

    def __init__(self, seed: Optional[int] = None):
        self._seed = seed
        self._random = random.Random(seed)
        self._roll_log: list[DiceResult] = []

    @property
    def seed(self) -> Optional[int]:
        return self._seed

    def set_seed(self, seed: int) -> None:
        """Reseed for reproducibility."""
        self._seed = seed
        self._random.seed(seed)

    def roll(self, dice: str, reason: str = "") -> DiceResult:
        """
        Roll dice using standard notation (e.g., '2d6', '1d20+5', '3d6-2').

        Args:
            dice: Dice notation string
            reason: Why this roll is being made (for logging)

        Returns:
            DiceResult with individual rolls and total
        """
        modifier = 0
        if '+' in dice:
            dice_part, mod_part = dice.split('+')
            modifier = int(mod_part)
        elif '-' in dice:
            dice_part, mod_part = dice.split('-')
            modifier = -int(mod_part)
        else:
            dice_part = dice

        num_dice, die_size = dice_part.lower().split('d')
        num_dice = int(num_dice) if num_dice else 1
        die_size = int(die_size)

        rolls = [self._random.randint(1, die_size) for _ in range(num_dice)]
        total = sum(rolls) + modifier

        return self._record(DiceResult(
            notation=dice,
            rolls=rolls,
            modifier=modifier,
            total=total,
            reason=reason,
        ))

    def roll_keep_highest(
        self, num_dice: int, die_size: int, keep: int, reason: str = ""
    ) -> DiceResult:
        """
        Roll a dice pool and sum only the highest dice (e.g. 4d6 keep 3).

        Args:
            num_dice: Dice in the pool
            die_size: Sides per die
            keep: How many of the highest dice count
            reason: Why this roll is being made

        Returns:
            DiceResult whose total is the sum of the kept dice
        """
        rolls = [self._random.randint(1, die_size) for _ in range(num_dice)]
        kept = sorted(rolls, reverse=True)[:keep]
        return self._record(DiceResult(
            notation=f"{num_dice}d{die_size}k{keep}",
            rolls=rolls,
            modifier=0,
            total=sum(kept),
            reason=reason,
            kept=kept,
        ))

    def roll_d6(self, num_dice: int = 1, reason: str = "") -> DiceResult:
        """Convenience method for d6 rolls."""
        return self.roll(f"{num_dice}d6", reason)

    def randint(self, a: int, b: int, reason: str = "") -> int:
        """Uniform integer in [a, b], inclusive."""
        value = self._random.randint(a, b)
        self._record(DiceResult(
            notation=f"range({a}-{b})",
            rolls=[value],
            modifier=0,
            total=value,
            reason=reason,
        ))
        return value

    def random_float(self, reason: str = "") -> float:
        """Uniform float in [0.0, 1.0)."""
        value = self._random.random()
        logger.debug(f"random float {value:.4f} ({reason})")
        return value

    def choice(self, options: Sequence[Any], reason: str = "") -> Any:
        """Pick one element uniformly from a non-empty sequence."""
        if not options:
            raise IndexError("Cannot choose from an empty sequence")
        index = self.randint(0, len(options) - 1, reason)
        return options[index]

    def get_roll_log(self) -> list[DiceResult]:
        """Get the complete roll log for this roller."""
        return self._roll_log.copy()

    def clear_roll_log(self) -> None:
        """Clear the roll log."""
        self._roll_log = []

    def _record(self, result: DiceResult) -> DiceResult:
        self._roll_log.append(result)
        logger.debug(f"{result} ({result.reason})")
        return result


# =============================================================================
# CHARACTER
# =============================================================================


@dataclass(frozen=True)
class Character:
    """
    A complete generated character.

    Created whole by the generation pipeline. Only the narrative fields
    (name, appearance, background) can change afterwards, and only through
    with_narrative(), which returns a new value.
    """
    name: str
    kin: Kin
    profession: Profession
    age: Age
    strength: int
    constitution: int
    agility: int
    intelligence: int
    willpower: int
    charisma: int
    heroic_abilities: tuple[HeroicAbility, ...]
    trained_skills: tuple[Skill, ...]
    magic: tuple[str, ...] = ()
    weakness: str = ""
    memento: str = ""
    gear: tuple[str, ...] = ()
    appearance_seeds: tuple[str, ...] = ()
    appearance: str = ""
    background: str = ""

    @property
    def attributes(self) -> dict[Attribute, int]:
        return {
            Attribute.STRENGTH: self.strength,
            Attribute.CONSTITUTION: self.constitution,
            Attribute.AGILITY: self.agility,
            Attribute.INTELLIGENCE: self.intelligence,
            Attribute.WILLPOWER: self.willpower,
            Attribute.CHARISMA: self.charisma,
        }

    def attribute(self, attribute: Attribute) -> int:
        return self.attributes[attribute]

    def is_trained(self, skill: Skill) -> bool:
        return skill in self.trained_skills

    def with_narrative(
        self,
        name: Optional[str] = None,
        appearance: Optional[str] = None,
        background: Optional[str] = None,
    ) -> "Character":
        """Return a copy with the given narrative fields replaced."""
        changes = {}
        if name is not None:
            changes["name"] = name
        if appearance is not None:
            changes["appearance"] = appearance
        if background is not None:
            changes["background"] = background
        return replace(self, **changes)

    def description(self) -> str:
        """Plain-text rendering used by the CLI and as LLM prompt input."""
        lines = [
            "---- Dragonbane Character ----",
            f"Name: {self.name}" if self.name else "Name: (unnamed)",
            f"Kin: {self.kin.value}",
            f"Profession: {self.profession.value}",
            f"Age: {self.age.value}",
            f"Abilities: {', '.join(a.value for a in self.heroic_abilities)}",
            f"Trained Skills: {', '.join(s.value for s in self.trained_skills)}",
            f"Magic: {', '.join(self.magic)}",
            f"Weakness: {self.weakness}",
            "Attributes:",
        ]
        for attribute, score in self.attributes.items():
            lines.append(f"  {attribute.abbreviation}: {score}")
        lines.append("Gear:")
        lines.extend(f"  {item}" for item in self.gear)
        lines.append(f"Memento: {self.memento}")
        lines.append("Appearance Seeds:")
        lines.extend(f"  {seed}" for seed in self.appearance_seeds)
        if self.appearance:
            lines.append(f"Appearance: {self.appearance}")
        if self.background:
            lines.append(f"Background: {self.background}")
        return "\n".join(lines)

    def to_dict(self) -> dict[str, Any]:
        """Convert to a JSON-ready dictionary of catalog display values."""
        return {
            "name": self.name,
            "kin": self.kin.value,
            "profession": self.profession.value,
            "age": self.age.value,
            "strength": self.strength,
            "constitution": self.constitution,
            "agility": self.agility,
            "intelligence": self.intelligence,
            "willpower": self.willpower,
            "charisma": self.charisma,
            "heroic_abilities": [a.value for a in self.heroic_abilities],
            "trained_skills": [s.value for s in self.trained_skills],
            "magic": list(self.magic),
            "weakness": self.weakness,
            "memento": self.memento,
            "gear": list(self.gear),
            "appearance_seeds": list(self.appearance_seeds),
            "appearance": self.appearance,
            "background": self.background,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Character":
        """
        Rebuild a Character from to_dict() output.

        Raises:
            InvalidCatalogValueError: If a categorical field is missing or holds an unknown value
        """
        return cls(
            name=data.get("name", ""),
            kin=parse_catalog_value(Kin, data.get("kin")),
            profession=parse_catalog_value(Profession, data.get("profession")),
            age=parse_catalog_value(Age, data.get("age")),
            strength=int(data["strength"]),
            constitution=int(data["constitution"]),
            agility=int(data["agility"]),
            intelligence=int(data["intelligence"]),
            willpower=int(data["willpower"]),
            charisma=int(data["charisma"]),
            heroic_abilities=tuple(
                parse_catalog_value(HeroicAbility, a) for a in data.get("heroic_abilities", [])
            ),
            trained_skills=tuple(
                parse_catalog_value(Skill, s) for s in data.get("trained_skills", [])
            ),
            magic=tuple(data.get("magic", [])),
            weakness=data.get("weakness", ""),
            memento=data.get("memento", ""),
            gear=tuple(data.get("gear", [])),
            appearance_seeds=tuple(data.get("appearance_seeds", [])),
            appearance=data.get("appearance", ""),
            background=data.get("background", ""),
        )
