"""ID generators for Almanac.

New calendars without a caller-supplied id get one from an `IdGenerator`.
`UUIDv4Generator` is the default; `ULIDGenerator` yields ids that sort by
creation time. Select one by name with `make_id_generator`.
"""

import threading
import uuid

from ulid import monotonic

from almanac.config import DEFAULT_ID_GENERATOR, UnknownIdGeneratorError
from almanac.interfaces.id_generator import IdGenerator

# pylint: disable=too-few-public-methods


class ULIDGenerator(IdGenerator):
    """Thread-safe monotonic ULID generator.

    ULIDs are unique, lexicographically sortable identifiers made of a
    timestamp and a random component. Uses the `ulid-py` library.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()

    def new_id(self) -> str:
        """Generate a new ULID (serialized across threads)."""
        with self._lock:
            return str(monotonic.new())


class UUIDv4Generator(IdGenerator):
    """Random UUIDv4 generator, rendered in the canonical 36-character form."""

    def new_id(self) -> str:
        """Generate a new UUID."""
        return str(uuid.uuid4())


class SimpleIdGenerator(IdGenerator):
    """A simple ID generator that produces sequential, zero-padded IDs.

    Note:
        Not suitable for production use; primarily for testing and demos.
    """

    def __init__(self, length: int = 26) -> None:
        self._counter = 0
        self._length = length

    def new_id(self) -> str:
        """Generate a new unique identifier."""
        self._counter += 1
        return f"{self._counter:0{self._length}d}"


ID_GENERATORS: dict[str, type[IdGenerator]] = {
    "uuid4": UUIDv4Generator,
    "ulid": ULIDGenerator,
}


def make_id_generator(name: str = DEFAULT_ID_GENERATOR) -> IdGenerator:
    """Instantiate the generator registered under `name` (case-insensitive).

    Raises:
        UnknownIdGeneratorError: If no generator is registered under `name`.
    """
    try:
        generator_type = ID_GENERATORS[name.strip().lower()]
    except KeyError as e:
        raise UnknownIdGeneratorError(name) from e
    return generator_type()
