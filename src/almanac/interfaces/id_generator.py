"""Port for minting calendar ids.

A calendar created without an id gets one from the configured generator
(``ALMANAC_ID_GENERATOR``). Generated ids must fit the store's id columns
(64 characters) and never repeat within a process.
"""

import abc

# pylint: disable=too-few-public-methods


class IdGenerator(abc.ABC):
    """Source of fresh calendar ids."""

    @abc.abstractmethod
    def new_id(self) -> str:
        """Return an id no earlier call has returned."""
