"""Packaged Alembic migration environment for TALLY."""
