"""Add-wins multi-directed graph CRDT."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Hashable, Iterable, Optional, Union

import networkx as nx

from moirai.dot import Dot


@dataclass(frozen=True)
class AddVertex:
    """Add ``vertex`` to the graph."""

    vertex: Hashable


@dataclass(frozen=True)
class RemoveVertex:
    """Remove ``vertex`` and, with it, the arcs it has seen."""

    vertex: Hashable


@dataclass(frozen=True)
class AddArc:
    """Add an arc labelled ``label`` from ``source`` to ``target``."""

    source: Hashable
    target: Hashable
    label: Hashable


@dataclass(frozen=True)
class RemoveArc:
    """Remove the arc labelled ``label`` from ``source`` to ``target``."""

    source: Hashable
    target: Hashable
    label: Hashable


GraphOp = Union[AddVertex, RemoveVertex, AddArc, RemoveArc]

_OPS = (AddVertex, RemoveVertex, AddArc, RemoveArc)


def _check(op: object) -> GraphOp:
    if not isinstance(op, _OPS):
        raise TypeError(f"unsupported graph operation: {op!r}")
    return op


class AWMultiDiGraph:
    """A directed multigraph in which concurrent additions win over removals.

    Removals are redundant by themselves: they only make the additions they
    causally follow redundant. An arc is visible only while both of its
    endpoints are; parallel arcs between the same vertices are kept.
    """

    DISABLE_R_WHEN_R = False
    DISABLE_R_WHEN_NOT_R = False

    @classmethod
    def redundant_itself(cls, new_op: GraphOp) -> bool:
        return isinstance(_check(new_op), (RemoveVertex, RemoveArc))

    @classmethod
    def redundant_by_when_redundant(
        cls,
        old_op: GraphOp,
        old_dot: Optional[Dot],
        is_conc: bool,
        new_op: GraphOp,
        new_dot: Dot,
    ) -> bool:
        """True if ``new_op`` makes the causally older ``old_op`` redundant."""
        old_op = _check(old_op)
        new_op = _check(new_op)
        if is_conc:
            return False
        if isinstance(old_op, AddArc):
            if isinstance(new_op, RemoveVertex):
                return new_op.vertex in (old_op.source, old_op.target)
            if isinstance(new_op, (AddArc, RemoveArc)):
                return (
                    old_op.source == new_op.source
                    and old_op.target == new_op.target
                    and old_op.label == new_op.label
                )
            return False
        if isinstance(old_op, AddVertex) and isinstance(
            new_op, (AddVertex, RemoveVertex)
        ):
            return old_op.vertex == new_op.vertex
        return False

    @classmethod
    def redundant_by_when_not_redundant(
        cls,
        old_op: GraphOp,
        old_dot: Optional[Dot],
        is_conc: bool,
        new_op: GraphOp,
        new_dot: Dot,
    ) -> bool:
        return cls.redundant_by_when_redundant(
            old_op, old_dot, is_conc, new_op, new_dot
        )

    @classmethod
    def eval(
        cls, stable: Iterable[GraphOp], unstable: Iterable[GraphOp]
    ) -> nx.MultiDiGraph:
        """Build the graph: every added vertex once, then arcs between them."""
        ops = [_check(op) for part in (stable, unstable) for op in part]
        graph = nx.MultiDiGraph()
        for op in ops:
            if isinstance(op, AddVertex) and op.vertex not in graph:
                graph.add_node(op.vertex)
        for op in ops:
            if isinstance(op, AddArc) and op.source in graph and op.target in graph:
                graph.add_edge(op.source, op.target, label=op.label)
        return graph