"""Service layer for TALLY.

Implements application use-cases: command handlers, event handlers, retry on
optimistic-concurrency conflicts and transaction boundaries. Calls domain
objects and the ports defined in `tally.interfaces`.

Dependency rule: may import `tally.domain` and `tally.interfaces`, but not
`tally.adapters` or `tally.entrypoints`.
"""
