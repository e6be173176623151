"""Dots: unique identifiers of operations."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from moirai.clock import Clock, Ordering, ViewData


@dataclass(frozen=True, eq=False)
class Dot:
    """An (origin, counter) pair that identifies one operation.

    The Lamport timestamp travels with the dot but takes no part in
    equality or hashing.
    """

    origin_idx: int
    counter: int
    lamport: int
    view: ViewData = field(repr=False)

    @property
    def val(self) -> int:
        return self.counter

    def origin_name(self) -> str:
        return self.view.members[self.origin_idx]

    def to_clock(self) -> Clock:
        """A dependency clock holding only this dot's entry."""
        clock = Clock.partial(self.view, self.origin_name())
        clock.set_by_idx(self.origin_idx, self.counter)
        return clock

    def compare(self, other: "Dot") -> Optional[Ordering]:
        """Order by counter for dots of the same origin and view, else ``None``."""
        if self.view.id != other.view.id or self.origin_idx != other.origin_idx:
            return None
        if self.counter < other.counter:
            return Ordering.LESS
        if self.counter > other.counter:
            return Ordering.GREATER
        return Ordering.EQUAL

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Dot):
            return NotImplemented
        return (
            self.view.id == other.view.id
            and self.origin_idx == other.origin_idx
            and self.counter == other.counter
        )

    def __hash__(self) -> int:
        return hash((self.view.id, self.origin_idx, self.counter))

    def __str__(self) -> str:
        return f"({self.origin_name()}{self.counter})"