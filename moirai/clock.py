"""Version vectors over a membership view."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import TYPE_CHECKING, Iterator, Optional, Sequence

if TYPE_CHECKING:
    from moirai.dot import Dot


@dataclass(frozen=True)
class ViewData:
    """An identified, ordered list of group members."""

    id: int
    members: tuple[str, ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "members", tuple(self.members))

    def member_pos(self, member: str) -> Optional[int]:
        """Index of ``member`` in the view, or ``None`` if absent."""
        try:
            return self.members.index(member)
        except ValueError:
            return None


class Ordering(enum.Enum):
    LESS = -1
    EQUAL = 0
    GREATER = 1


def _opt_le(a: Optional[int], b: Optional[int]) -> bool:
    # A missing entry sorts before any present one.
    if a is None:
        return True
    if b is None:
        return False
    return a <= b


class Clock:
    """A vector clock keyed by member index.

    A full clock has one entry per member and supports causal comparison;
    a partial clock only records dependencies and cannot be ordered.
    """

    __hash__ = None  # type: ignore[assignment]

    def __init__(
        self,
        view: ViewData,
        entries: dict[int, int],
        origin: Optional[int] = None,
        partial: bool = False,
    ) -> None:
        self.view = view
        self.clock = dict(entries)
        self.origin_idx = origin
        self.partial = partial

    # ----- construction -----

    @classmethod
    def full(cls, view: ViewData, origin: Optional[str] = None) -> "Clock":
        """A full clock with every member at zero."""
        origin_idx = cls._position(view, origin) if origin is not None else None
        return cls(view, {i: 0 for i in range(len(view.members))}, origin_idx)

    @classmethod
    def partial(cls, view: ViewData, origin: str) -> "Clock":
        """A dependency clock holding only the origin entry, at zero."""
        origin_idx = cls._position(view, origin)
        return cls(view, {origin_idx: 0}, origin_idx, partial=True)

    @classmethod
    def build(
        cls,
        view: ViewData,
        origin: Optional[str],
        values: Sequence[int],
        partial: bool = False,
    ) -> "Clock":
        """A clock with the given value for each member, in view order."""
        if len(values) != len(view.members):
            raise ValueError(
                f"expected {len(view.members)} values, got {len(values)}"
            )
        origin_idx = cls._position(view, origin) if origin is not None else None
        return cls(view, dict(enumerate(values)), origin_idx, partial=partial)

    @staticmethod
    def _position(view: ViewData, member: str) -> int:
        pos = view.member_pos(member)
        if pos is None:
            raise KeyError(f"Member {member} not found")
        return pos

    def copy(self) -> "Clock":
        return Clock(self.view, self.clock, self.origin_idx, self.partial)

    def _require_full(self) -> None:
        if self.partial:
            raise TypeError("operation requires a full clock")

    # ----- queries -----

    def view_id(self) -> int:
        return self.view.id

    def __iter__(self) -> Iterator[tuple[int, int]]:
        return iter(self.clock.items())

    def is_predecessor(self, dot: "Dot") -> bool:
        """True if this clock has already seen ``dot``."""
        self._require_full()
        if self.view_id() != dot.view.id:
            raise ValueError("clock and dot belong to different views")
        value = self.get_by_idx(dot.origin_idx)
        if value is None:
            raise KeyError(f"no entry for member index {dot.origin_idx}")
        return value >= dot.counter

    def sum(self) -> int:
        self._require_full()
        return sum(self.clock.values())

    def lamport(self) -> int:
        return self.sum()

    def dot_val(self) -> int:
        """Value of the origin member's entry."""
        value = self.get(self.origin())
        if value is None:
            raise KeyError("origin entry is not set")
        return value

    def dim(self) -> int:
        return len(self.clock)

    def get(self, member: str) -> Optional[int]:
        """Entry for ``member``, or ``None`` if absent from view or clock."""
        idx = self.view.member_pos(member)
        if idx is None:
            return None
        return self.clock.get(idx)

    def get_by_idx(self, idx: int) -> Optional[int]:
        return self.clock.get(idx)

    def origin(self) -> str:
        """Name of the origin member; raises if no origin is set."""
        if self.origin_idx is None:
            raise ValueError("Origin not set")
        return self.view.members[self.origin_idx]

    def is_empty(self) -> bool:
        """True if the clock holds no entry or only zeros."""
        return not any(v > 0 for v in self.clock.values())

    def to_dict(self) -> dict[str, int]:
        """Member name to value, with zero for absent entries."""
        return {m: self.clock.get(i, 0) for i, m in enumerate(self.view.members)}

    # ----- updates -----

    def merge(self, other: "Clock") -> None:
        """Raise each entry to the other clock's value where it is larger."""
        if self.view.id != other.view.id:
            raise ValueError("cannot merge clocks from different views")
        for idx in range(len(self.view.members)):
            theirs = other.get_by_idx(idx)
            if theirs is None:
                continue
            ours = self.get_by_idx(idx)
            if ours is None or ours < theirs:
                self.clock[idx] = theirs

    def increment(self) -> int:
        """Advance the origin entry and return its new value."""
        value = self.dot_val() + 1
        self.clock[self.origin_idx] = value  # type: ignore[index]
        return value

    def pointwise_min(self, other: "Clock") -> "Clock":
        """A new clock holding the entry-wise minimum, missing entries as 0."""
        if self.view.id != other.view.id:
            raise ValueError("cannot combine clocks from different views")
        entries = {
            idx: min(self.clock.get(idx, 0), other.clock.get(idx, 0))
            for idx in range(len(self.view.members))
        }
        return Clock(self.view, entries, self.origin_idx, self.partial)

    def remove(self, member: str) -> None:
        self.clock.pop(self._position(self.view, member), None)

    def set(self, member: str, value: int) -> None:
        self.clock[self._position(self.view, member)] = value

    def set_by_idx(self, idx: int, value: int) -> None:
        self.clock[idx] = value

    # ----- comparison -----

    def compare(self, other: "Clock") -> Optional[Ordering]:
        """Causal order of two full clocks; ``None`` when concurrent."""
        self._require_full()
        other._require_full()
        if self.view.id < other.view.id:
            return Ordering.LESS
        if self.view.id > other.view.id:
            return Ordering.GREATER

        if set(self.clock) != set(other.clock):
            raise ValueError(
                "Clocks must behave like vector clocks to be comparable."
            )

        own_origin = self.origin()
        other_origin = other.origin()
        if (
            self.get(own_origin) == other.get(other_origin)
            and self.origin_idx == other.origin_idx
        ):
            return Ordering.EQUAL
        if _opt_le(self.get(own_origin), other.get(own_origin)):
            return Ordering.LESS
        if _opt_le(other.get(other_origin), self.get(other_origin)):
            return Ordering.GREATER

        less = greater = False
        for idx in range(len(self.view.members)):
            ours, theirs = self.clock[idx], other.clock[idx]
            if ours < theirs:
                less = True
            elif ours > theirs:
                greater = True
            if less and greater:
                return None
        if less:
            return Ordering.LESS
        if greater:
            return Ordering.GREATER
        return Ordering.EQUAL

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Clock):
            return NotImplemented
        return self.clock == other.clock

    def __str__(self) -> str:
        parts = ", ".join(
            f"{m}: {self.clock[i]}"
            for i, m in enumerate(self.view.members)
            if i in self.clock
        )
        text = f"{{ {parts} }}"
        if self.origin_idx is not None:
            text += f"@{self.view.members[self.origin_idx]}"
        return text

    def __repr__(self) -> str:
        kind = "partial" if self.partial else "full"
        return f"Clock<{kind}>({self})"