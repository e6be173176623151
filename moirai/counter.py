"""Counter CRDTs: a plain up/down counter and one that can be reset."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional, Union

from moirai.dot import Dot

Number = Union[int, float]


@dataclass(frozen=True)
class Inc:
    """Add ``value`` to the counter."""

    value: Number

    def __str__(self) -> str:
        return f"Inc({self.value})"


@dataclass(frozen=True)
class Dec:
    """Subtract ``value`` from the counter."""

    value: Number

    def __str__(self) -> str:
        return f"Dec({self.value})"


@dataclass(frozen=True)
class Reset:
    """Bring the counter back to zero, discarding what it causally follows."""

    def __str__(self) -> str:
        return "Reset"


CounterOp = Union[Inc, Dec, Reset]


def _step(state: Number, op: CounterOp) -> Number:
    if isinstance(op, Inc):
        return state + op.value
    if isinstance(op, Dec):
        return state - op.value
    return state


class SimpleCounter:
    """An increment/decrement counter whose operations all commute.

    No operation ever makes another redundant, so the stable part is
    simply the accumulated value.
    """

    DISABLE_R_WHEN_R = True
    DISABLE_R_WHEN_NOT_R = True

    @classmethod
    def is_default(cls, state: Number) -> bool:
        return state == 0

    @classmethod
    def apply(cls, state: Number, op: CounterOp) -> Number:
        """Return the stable value after applying ``op``."""
        if not isinstance(op, (Inc, Dec)):
            raise TypeError(f"unsupported counter operation: {op!r}")
        return _step(state, op)

    @classmethod
    def apply_redundant(cls, state: Number, op: CounterOp) -> Number:
        """Check ``op``; nothing is ever redundant, so ``state`` is kept."""
        if not isinstance(op, (Inc, Dec)):
            raise TypeError(f"unsupported counter operation: {op!r}")
        return state

    @classmethod
    def eval(cls, stable: Number, unstable: Iterable[CounterOp]) -> Number:
        """Value of the stable part plus every unstable operation."""
        value = stable
        for op in unstable:
            value = cls.apply(value, op)
        return value


class ResettableCounter:
    """An up/down counter with a reset that wins over what it has seen.

    A reset is redundant by itself and makes every operation that causally
    precedes it redundant; concurrent increments and decrements survive.
    The stable part is a list of operations.
    """

    DISABLE_R_WHEN_R = False
    DISABLE_R_WHEN_NOT_R = True

    @classmethod
    def is_default(cls, state: Number) -> bool:
        return state == 0

    @classmethod
    def apply(cls, state: Number, op: CounterOp) -> Number:
        """Return ``state`` after applying ``op``; a reset alone changes nothing."""
        if not isinstance(op, (Inc, Dec, Reset)):
            raise TypeError(f"unsupported counter operation: {op!r}")
        return _step(state, op)

    @classmethod
    def apply_redundant(cls, state: Number, op: CounterOp) -> Number:
        """A reset clears the state; other operations leave it untouched."""
        if isinstance(op, Reset):
            return 0
        return state

    @classmethod
    def redundant_itself(cls, new_op: CounterOp) -> bool:
        return isinstance(new_op, Reset)

    @classmethod
    def redundant_by_when_redundant(
        cls,
        old_op: CounterOp,
        old_dot: Optional[Dot],
        is_conc: bool,
        new_op: CounterOp,
        new_dot: Dot,
    ) -> bool:
        """An older operation is made redundant by a later reset."""
        return not is_conc and isinstance(new_op, Reset)

    @classmethod
    def eval(
        cls, stable: Iterable[CounterOp], unstable: Iterable[CounterOp]
    ) -> Number:
        """Sum of increments minus decrements over both parts."""
        value: Number = 0
        for part in (stable, unstable):
            for op in part:
                value = _step(value, op)
        return value