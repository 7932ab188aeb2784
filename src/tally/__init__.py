"""TALLY

A small consistency kernel for order aggregates. Orders own their line items,
enforce their invariants on every mutation, move through a tiny state machine
and record domain events that callers drain after a successful save.
"""

__all__ = ["__version__"]
__version__ = "0.1.0"
