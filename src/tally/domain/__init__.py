"""Domain layer for TALLY.

Contains business rules: the Order aggregate, value objects, domain events and
the result type returned by aggregate operations. This package is deliberately
technology-agnostic.

Dependency rule: do not import from `tally.adapters` or `tally.entrypoints`.
"""
