"""ID generators for TALLY."""

import itertools
import threading

from ulid import monotonic

from tally.interfaces.id_generator import IdGenerator

# pylint: disable=too-few-public-methods


class ULIDGenerator(IdGenerator):
    """Thread-safe monotonic ULID generator for order IDs.

    ULIDs sort by creation time, so order IDs minted in one process list in the
    order they were created. Uses the `ulid-py` library.
    """

    def __init__(self, prefix: str = "") -> None:
        self._prefix = prefix
        self._lock = threading.Lock()

    def new_id(self) -> str:
        """Generate a new ULID (serialized across threads)."""
        with self._lock:
            return f"{self._prefix}{monotonic.new()}"


class SimpleIdGenerator(IdGenerator):
    """Sequential IDs such as ``order-0001``.

    Note:
        Not suitable for production use; primarily for testing and demos.
    """

    def __init__(self, prefix: str = "order-", width: int = 4) -> None:
        self._counter = itertools.count(1)
        self._prefix = prefix
        self._width = width

    def new_id(self) -> str:
        return f"{self._prefix}{next(self._counter):0{self._width}d}"
