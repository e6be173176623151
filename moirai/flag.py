"""Flag CRDTs: enable-wins and disable-wins booleans."""

from __future__ import annotations

import enum
from typing import Iterable, Optional

from moirai.dot import Dot


class FlagOp(enum.Enum):
    ENABLE = "enable"
    DISABLE = "disable"
    CLEAR = "clear"


def _check(op: object) -> FlagOp:
    if not isinstance(op, FlagOp):
        raise TypeError(f"unsupported flag operation: {op!r}")
    return op


class EnableWinsFlag:
    """A flag where a concurrent enable beats a disable."""

    DISABLE_R_WHEN_R = False
    DISABLE_R_WHEN_NOT_R = False

    @classmethod
    def is_default(cls, state: bool) -> bool:
        return not state

    @classmethod
    def apply(cls, state: bool, op: FlagOp) -> bool:
        return _check(op) is FlagOp.ENABLE

    @classmethod
    def apply_redundant(cls, state: bool, op: FlagOp) -> bool:
        """Check ``op`` and clear the stable flag; it is re-evaluated later."""
        _check(op)
        return False

    @classmethod
    def redundant_itself(cls, new_op: FlagOp) -> bool:
        return _check(new_op) in (FlagOp.DISABLE, FlagOp.CLEAR)

    @classmethod
    def redundant_by_when_redundant(
        cls,
        old_op: FlagOp,
        old_dot: Optional[Dot],
        is_conc: bool,
        new_op: FlagOp,
        new_dot: Dot,
    ) -> bool:
        """Any later operation makes the ones it follows redundant."""
        return not is_conc

    @classmethod
    def redundant_by_when_not_redundant(
        cls,
        old_op: FlagOp,
        old_dot: Optional[Dot],
        is_conc: bool,
        new_op: FlagOp,
        new_dot: Dot,
    ) -> bool:
        return cls.redundant_by_when_redundant(
            old_op, old_dot, is_conc, new_op, new_dot
        )

    @classmethod
    def eval(cls, stable: bool, unstable: Iterable[FlagOp]) -> bool:
        """True if the stable flag is set or any unstable operation enables it."""
        flag = stable
        for op in unstable:
            if _check(op) is FlagOp.ENABLE:
                flag = True
        return flag


class DisableWinsFlag:
    """A flag where a concurrent disable beats an enable."""

    DISABLE_R_WHEN_R = True
    DISABLE_R_WHEN_NOT_R = True

    @classmethod
    def is_default(cls, state: bool) -> bool:
        return not state

    @classmethod
    def apply(cls, state: bool, op: FlagOp) -> bool:
        return _check(op) is FlagOp.ENABLE

    @classmethod
    def apply_redundant(cls, state: bool, op: FlagOp) -> bool:
        """Check ``op``; redundancy leaves the stable flag as it is."""
        _check(op)
        return bool(state)

    @classmethod
    def redundant_itself(cls, new_op: FlagOp) -> bool:
        return _check(new_op) is FlagOp.CLEAR

    @classmethod
    def redundant_by_when_redundant(
        cls,
        old_op: FlagOp,
        old_dot: Optional[Dot],
        is_conc: bool,
        new_op: FlagOp,
        new_dot: Dot,
    ) -> bool:
        """Any later operation makes the ones it follows redundant."""
        return not is_conc

    @classmethod
    def redundant_by_when_not_redundant(
        cls,
        old_op: FlagOp,
        old_dot: Optional[Dot],
        is_conc: bool,
        new_op: FlagOp,
        new_dot: Dot,
    ) -> bool:
        return cls.redundant_by_when_redundant(
            old_op, old_dot, is_conc, new_op, new_dot
        )

    @classmethod
    def eval(cls, stable: bool, unstable: Iterable[FlagOp]) -> bool:
        """Fold the unstable operations; the first disable settles it."""
        flag = stable
        for op in unstable:
            op = _check(op)
            if op is FlagOp.DISABLE:
                return False
            flag = op is FlagOp.ENABLE
        return flag