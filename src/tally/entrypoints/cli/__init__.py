"""The `tally` command-line interface."""

from .main import tally

__all__ = ["tally"]
