"""
Test helpers for the Dragonbane character generator test suite.

Provides ScriptedRng, a RandomSource whose every answer is decided by the
test, so individual pipeline steps can be driven to known outcomes.
"""

from typing import Any, MutableSequence, Optional, Sequence


class ScriptedRng:
    """
    Deterministic RandomSource for tests.

    - random() pops the next queued float, else returns default_float
    - randint(a, b) pops the next queued int, else returns a
    - choice(seq) always returns the first element
    - shuffle(x) leaves x untouched

    Every call is recorded in .calls as (method, args).

    Usage:
        rng = ScriptedRng(floats=[0.98], ints=[6, 1, 5, 4])
        assert select_kin_category(rng) == KinCategory.NIGHTKIN
    """

    def __init__(
        self,
        floats: Optional[Sequence[float]] = None,
        ints: Optional[Sequence[int]] = None,
        default_float: float = 0.0,
    ):
        self.floats = list(floats or [])
        self.ints = list(ints or [])
        self.default_float = default_float
        self.calls: list[tuple[str, tuple[Any, ...]]] = []

    def random(self) -> float:
        self.calls.append(("random", ()))
        if self.floats:
            return self.floats.pop(0)
        return self.default_float

    def randint(self, a: int, b: int) -> int:
        self.calls.append(("randint", (a, b)))
        if self.ints:
            value = self.ints.pop(0)
            if not a <= value <= b:
                raise AssertionError(f"Scripted value {value} outside [{a}, {b}]")
            return value
        return a

    def shuffle(self, x: MutableSequence[Any]) -> None:
        self.calls.append(("shuffle", (len(x),)))

    def choice(self, seq: Sequence[Any]) -> Any:
        self.calls.append(("choice", (len(seq),)))
        if not seq:
            raise IndexError("Cannot choose from an empty sequence")
        return seq[0]

    def count(self, method: str) -> int:
        return sum(1 for name, _ in self.calls if name == method)
