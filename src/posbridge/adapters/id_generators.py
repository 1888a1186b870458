"""ID generators for POSBRIDGE."""

import itertools
import threading
import uuid

from ulid import monotonic

from posbridge.interfaces.id_generator import IdGenerator

# pylint: disable=too-few-public-methods


class ULIDGenerator(IdGenerator):
    """Thread-safe monotonic ULID generator.

    ULIDs sort by creation time, so integration IDs minted by the CLI list in
    the order they were created. Backed by the `ulid-py` library.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()

    def new_id(self) -> str:
        """Generate a new ULID (serialized across threads)."""
        with self._lock:
            return str(monotonic.new())


class UUIDv4Generator(IdGenerator):
    """Random UUIDv4 generator (no ordering guarantees)."""

    def new_id(self) -> str:
        """Generate a new UUID."""
        return str(uuid.uuid4())


class SimpleIdGenerator(IdGenerator):
    """Sequential, zero-padded IDs with an optional prefix.

    Note:
        Not suitable for production use; primarily for testing and demos.
    """

    def __init__(self, prefix: str = "", length: int = 26) -> None:
        self._counter = itertools.count(1)
        self._prefix = prefix
        self._length = length

    def new_id(self) -> str:
        """Generate the next identifier in sequence."""
        return f"{self._prefix}{next(self._counter):0{self._length}d}"
