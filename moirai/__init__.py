"""Operation-based CRDT building blocks: clocks, dots and pure CRDT semantics."""

__version__ = "0.1.0"

__all__ = ["clock", "dot", "matrix_clock", "counter", "flag", "multidigraph"]