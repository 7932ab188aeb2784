"""Adapters for TALLY.

Concrete implementations of the ports in `tally.interfaces`: order
repositories (in-memory and SQLAlchemy), the in-memory customer directory, ID
generators, database plumbing and the SQLAlchemy unit of work.

Dependency rule: may import `tally.interfaces` and `tally.domain`; never
`tally.service_layer` or `tally.entrypoints`.
"""
