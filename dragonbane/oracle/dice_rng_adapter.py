"""
Deterministic RNG adapter for character generation.

The generation pipeline never calls the random module directly. It talks to
a RandomSource: four operations (uniform float, uniform integer, fair
shuffle, uniform choice) that DiceRngAdapter routes through a DiceRoller for:
- Reproducibility via seeding
- Logging for observability
- Replacement with scripted sources in tests
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, MutableSequence, Optional, Protocol, Sequence, runtime_checkable

if TYPE_CHECKING:
    from dragonbane.data_models import DiceRoller


@runtime_checkable
class RandomSource(Protocol):
    """
    The entire RNG surface the generator needs.

    Implementations:
    - DiceRngAdapter for seeded, logged generation
    - random.Random itself (it already has all four methods)
    - scripted sources for tests
    """

    def random(self) -> float:
        """Uniform float in [0.0, 1.0)."""
        ...

    def randint(self, a: int, b: int) -> int:
        """Uniform integer in [a, b], inclusive."""
        ...

    def shuffle(self, x: MutableSequence[Any]) -> None:
        """Fair in-place shuffle."""
        ...

    def choice(self, seq: Sequence[Any]) -> Any:
        """Uniform pick from a non-empty sequence."""
        ...


class DiceRngAdapter:
    """
    Adapter that makes DiceRoller usable wherever a RandomSource is expected.

    Usage:
        from dragonbane.data_models import DiceRoller
        from dragonbane.oracle.dice_rng_adapter import DiceRngAdapter

        rng = DiceRngAdapter(reason_prefix="Generator", dice_roller=DiceRoller(seed=7))
        generator = CharacterGenerator(rng=rng)
    """

    def __init__(
        self,
        reason_prefix: str = "Generator",
        dice_roller: Optional["DiceRoller"] = None,
    ):
        """
        Initialize the adapter.

        Args:
            reason_prefix: Prefix for roll reason logging (e.g., "KinSelector")
            dice_roller: Optional DiceRoller instance. If None, a fresh
                unseeded roller is created and owned by this adapter.
        """
        self._reason_prefix = reason_prefix
        if dice_roller is None:
            from dragonbane.data_models import DiceRoller
            dice_roller = DiceRoller()
        self._dice_roller = dice_roller
        self._roll_count = 0

    @classmethod
    def seeded(cls, seed: int, reason_prefix: str = "Generator") -> "DiceRngAdapter":
        """Build an adapter over a freshly seeded DiceRoller."""
        from dragonbane.data_models import DiceRoller
        return cls(reason_prefix=reason_prefix, dice_roller=DiceRoller(seed=seed))

    @property
    def dice_roller(self) -> "DiceRoller":
        return self._dice_roller

    def _make_reason(self, context: str) -> str:
        """Create a reason string for logging."""
        self._roll_count += 1
        return f"{self._reason_prefix}: {context} (roll #{self._roll_count})"

    def randint(self, a: int, b: int) -> int:
        """
        Return random integer in range [a, b], inclusive.

        Args:
            a: Minimum value (inclusive)
            b: Maximum value (inclusive)

        Returns:
            Random integer in the specified range
        """
        reason = self._make_reason(f"d{b - a + 1}" if a == 1 else f"range({a}-{b})")
        return self._dice_roller.randint(a, b, reason)

    def choice(self, seq: Sequence[Any]) -> Any:
        """
        Choose a random element from a non-empty sequence.

        Raises:
            IndexError: If sequence is empty
        """
        if not seq:
            raise IndexError("Cannot choose from an empty sequence")

        reason = self._make_reason(f"choice from {len(seq)} options")
        return self._dice_roller.choice(list(seq), reason)

    def random(self) -> float:
        """Return a random float in [0.0, 1.0)."""
        reason = self._make_reason("random float")
        return self._dice_roller.random_float(reason)

    def shuffle(self, x: MutableSequence[Any]) -> None:
        """
        Shuffle list x in place.

        Implemented as a Fisher-Yates shuffle over DiceRoller.randint.
        """
        for i in range(len(x) - 1, 0, -1):
            reason = self._make_reason(f"shuffle position {i}")
            j = self._dice_roller.randint(0, i, reason)
            x[i], x[j] = x[j], x[i]

    @property
    def roll_count(self) -> int:
        """Get the number of rolls made through this adapter."""
        return self._roll_count

    def reset_count(self) -> None:
        """Reset the roll counter."""
        self._roll_count = 0


def shuffled(rng: RandomSource, items: Sequence[Any]) -> list[Any]:
    """Return a shuffled copy of items, leaving the input untouched."""
    copy = list(items)
    rng.shuffle(copy)
    return copy


def draw_without_replacement(rng: RandomSource, items: Sequence[Any], count: int) -> list[Any]:
    """Draw up to count distinct positions from items (shuffle, take prefix)."""
    return shuffled(rng, items)[:count]


def weighted_choice(rng: RandomSource, options: Sequence[tuple[Any, float]]) -> Any:
    """
    Pick from (value, weight) pairs by walking cumulative weights.

    A uniform point in [0, total) selects the first option whose cumulative
    weight reaches it.

    Raises:
        ValueError: If options is empty or the weights sum to zero
    """
    total = sum(weight for _, weight in options)
    if not options or total <= 0:
        raise ValueError("weighted_choice needs at least one positive weight")

    point = rng.random() * total
    cumulative = 0.0
    for value, weight in options:
        cumulative += weight
        if point <= cumulative:
            return value
    return options[-1][0]
