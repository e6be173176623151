"""Matrix clocks: the last version vector known from every member."""

from __future__ import annotations

import logging
from typing import Iterable, Optional, Sequence

from moirai.clock import Clock, ViewData

_log = logging.getLogger(__name__)


class MatrixClock:
    """A square matrix of version vectors, one row per view member.

    Each row is the last clock known by the local replica from that member.
    The column-wise maximum is the local clock; the column-wise minimum is
    the stable version vector (SVV).
    """

    __hash__ = None  # type: ignore[assignment]

    def __init__(self, view: ViewData, id: int) -> None:
        self.view = view
        self.id = id
        self.clocks: dict[int, Clock] = {
            i: Clock.full(view, member) for i, member in enumerate(view.members)
        }

    @classmethod
    def build(
        cls, view: ViewData, id: int, clocks: Sequence[Sequence[int]]
    ) -> "MatrixClock":
        """A matrix whose rows are the given values, in view order."""
        size = len(view.members)
        if len(clocks) != size or any(len(row) != size for row in clocks):
            raise ValueError(f"expected a {size}x{size} matrix")
        matrix = cls(view, id)
        for i, row in enumerate(clocks):
            matrix.clocks[i] = Clock.build(view, view.members[i], row)
        return matrix

    def change_view(self, new_view: ViewData, id: int) -> None:
        """Move to a new view, keeping entries of members present in both."""
        replacement = MatrixClock(new_view, id)
        for i, row in replacement.clocks.items():
            old_row = self.get(new_view.members[i])
            if old_row is None:
                continue
            for j in list(row.clock):
                old_value = old_row.get(new_view.members[j])
                if old_value is not None:
                    row.clock[j] = old_value
        self.view = replacement.view
        self.id = replacement.id
        self.clocks = replacement.clocks

    def members(self) -> tuple[str, ...]:
        return self.view.members

    def _position(self, member: str) -> int:
        pos = self.view.member_pos(member)
        if pos is None:
            raise KeyError(f"Member {member} not found")
        return pos

    def dot_val(self, member: str) -> int:
        """The member's own entry in its row."""
        return self.clocks[self._position(member)].dot_val()

    def get(self, member: str) -> Optional[Clock]:
        pos = self.view.member_pos(member)
        if pos is None:
            return None
        return self.clocks.get(pos)

    def get_by_idx(self, index: int) -> Optional[Clock]:
        return self.clocks.get(index)

    def merge_clock(self, clock: Clock) -> None:
        """Merge ``clock`` into the row of its origin member."""
        if clock.origin_idx is None:
            raise ValueError("Clock must have an origin")
        self.clocks[clock.origin_idx].merge(clock)

    def clear(self) -> None:
        self.clocks.clear()

    def svv(self, ignore: Iterable[str] = ()) -> Clock:
        """Pointwise minimum of all rows whose member is not ignored."""
        ignored = set(ignore)
        result = self.clocks[self.id].copy()
        for o, row in self.clocks.items():
            if self.view.members[o] not in ignored:
                result = result.pointwise_min(row)
        result.origin_idx = None
        return result

    def incremental_svv(
        self, new_clock: Clock, lsv: Clock, ignore: Iterable[str] = ()
    ) -> Clock:
        """Update the last SVV, recomputing only columns ``new_clock`` raised."""
        if len(self) == 1:
            return self.origin_clock().copy()
        if len(self) == 2:
            other = 1 if self.id == 0 else 0
            return self.clocks[other].copy()

        ignored = set(ignore)
        origin = new_clock.origin_idx
        if origin is None:
            raise ValueError("Clock must have an origin")
        result = lsv.copy()
        for o, new_val in new_clock.clock.items():
            lsv_val = lsv.clock.get(o, 0)
            if new_val <= lsv_val or o == origin:
                continue
            if self.view.members[o] in ignored:
                column: list[int] = []
            else:
                column = [row.clock[o] for row in self.clocks.values() if o in row.clock]
            result.clock[o] = min(column, default=lsv_val)
        return result

    def merge(self, other: "MatrixClock") -> None:
        """Merge every row of ``other`` into the matching row."""
        for k, row in other.clocks.items():
            if k in self.clocks:
                self.clocks[k].merge(row)
            else:
                self.clocks[k] = row.copy()

    def most_update(self, key: str) -> None:
        """Raise ``key``'s row to the column-wise maximum of all rows."""
        pos = self._position(key)
        highest = Clock.full(self.view, key)
        for row in self.clocks.values():
            highest.merge(row)
        self.clocks[pos].merge(highest)

    def is_square(self) -> bool:
        n = len(self.clocks)
        return all(len(row.clock) == n for row in self.clocks.values())

    def __len__(self) -> int:
        return len(self.clocks)

    def is_empty(self) -> bool:
        return not self.clocks

    def origin_clock(self) -> Clock:
        return self.clocks[self.id]

    def _own_entry(self, j: int) -> int:
        value = self.clocks[j].get(self.view.members[j])
        if value is None:
            raise KeyError(f"row {j} has no entry for its own member")
        return value

    def is_valid(self) -> bool:
        """Check squareness, row bounds and the origin row's dominance."""
        square = self.is_square()
        valid_entries = all(
            self._own_entry(j) >= c
            for row in self.clocks.values()
            for j, c in row.clock.items()
        )
        valid_origin = True
        for o, c in self.origin_clock().clock.items():
            own = self._own_entry(o)
            if c < own:
                member = self.view.members[o]
                _log.error(
                    "Origin clock entry %s with value %s is less than clock "
                    "entry %s with value %s",
                    member,
                    c,
                    member,
                    own,
                )
                valid_origin = False
        if not square:
            _log.error("Matrix clock is not square")
        if not valid_entries:
            _log.error("Matrix clock has invalid entries: %s", self)
        if not valid_origin:
            _log.error("Matrix clock has invalid origin entries")
        return square and valid_entries and valid_origin

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, MatrixClock):
            return NotImplemented
        return (
            self.clocks == other.clocks
            and self.view == other.view
            and self.id == other.id
        )

    def __str__(self) -> str:
        lines = [f"  {m}: {self.clocks[i]}" for i, m in enumerate(self.view.members)]
        return "{\n" + "".join(line + "\n" for line in lines) + "}"

    def __repr__(self) -> str:
        return f"MatrixClock(id={self.id}, {self})"