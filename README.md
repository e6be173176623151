# moirai

Building blocks for operation-based CRDTs (conflict-free replicated data types)
with customizable conflict resolution: causality tracking, and the pure
semantics of a few CRDTs.

## Modules

- **Causality tracking**
  - `moirai.clock`: `ViewData` (an identified, ordered list of members),
    `Clock` (full and partial vector clocks) and `Ordering`.
  - `moirai.dot`: `Dot`, the `(origin, counter)` identifier of an operation,
    carrying its Lamport timestamp.
  - `moirai.matrix_clock`: `MatrixClock`, one version vector per member, with
    the stable version vector (`svv`, `incremental_svv`), row merging,
    `most_update` and `change_view`.
- **Pure CRDT semantics**
  - `moirai.counter`: `Inc`, `Dec` and `Reset` operations for `SimpleCounter`
    and `ResettableCounter`.
  - `moirai.flag`: `FlagOp` for `EnableWinsFlag` and `DisableWinsFlag`.
  - `moirai.multidigraph`: `AddVertex`, `RemoveVertex`, `AddArc` and
    `RemoveArc` for `AWMultiDiGraph`, an add-wins directed multigraph that
    evaluates to a `networkx.MultiDiGraph`.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Vector clocks

```python
from moirai.clock import Clock, Ordering, ViewData

view = ViewData(id=0, members=["a", "b", "c"])
v1 = Clock.full(view, "a")
v2 = Clock.full(view, "b")
v1.increment()
v2.increment()

assert v1.compare(v2) is None          # concurrent
v2.merge(v1)
v2.increment()
assert v1.compare(v2) is Ordering.LESS
print(v1)                              # { a: 1, b: 0, c: 0 }@a
```

`Clock.partial(view, origin)` makes a dependency clock holding only the
origin's entry. Partial clocks cannot be ordered: `compare`, `sum`, `lamport`
and `is_predecessor` raise `TypeError` on them. Comparing full clocks whose
entry sets differ raises `ValueError`; unknown member names raise `KeyError`.

## Dots

```python
from moirai.clock import ViewData
from moirai.dot import Dot

view = ViewData(id=0, members=["a", "b"])
dot = Dot(origin_idx=1, counter=3, lamport=3, view=view)
print(dot)                   # (b3)
print(dot.to_clock())        # { b: 3 }@b
```

Two dots are equal when their view id, origin and counter agree; the Lamport
timestamp takes no part in equality or hashing.

## Matrix clocks and stability

```python
from moirai.clock import Clock, ViewData
from moirai.matrix_clock import MatrixClock

view = ViewData(id=0, members=["A", "B"])
matrix = MatrixClock.build(view, 0, [[10, 2], [8, 6]])
assert matrix.svv([]) == Clock.build(view, None, [8, 2])
```

Operations that causally precede the stable version vector are stable and can
be folded into the sequential state of a CRDT.

## CRDT semantics

Each CRDT class holds, as class methods, the rules that decide which
operations make others redundant, how an operation changes the stable state,
and an `eval` that computes the current value from the stable state and the
unstable operations:

```python
from moirai.counter import Dec, Inc, ResettableCounter, SimpleCounter
from moirai.flag import EnableWinsFlag, FlagOp

assert SimpleCounter.eval(0, [Inc(5), Dec(2)]) == 3
assert ResettableCounter.eval([Inc(7)], [Dec(15)]) == -8
assert EnableWinsFlag.eval(False, [FlagOp.DISABLE, FlagOp.ENABLE]) is True
```

```python
from moirai.multidigraph import AddArc, AddVertex, AWMultiDiGraph

graph = AWMultiDiGraph.eval([], [AddVertex("A"), AddVertex("B"), AddArc("A", "B", 1)])
assert graph.number_of_nodes() == 2
assert graph.number_of_edges() == 1
```

## What the package does not do

The package has no replication machinery of its own. There is no broadcast or
causal delivery of events, no event log or graph that stores unstable
operations and applies the redundancy rules to them, no membership protocol
that installs views, and no nested containers such as maps or graphs whose
values are themselves CRDTs. The CRDT classes here only state the rules; a
replica that stores operations, tracks their dots and clocks and calls these
rules has to be built on top.