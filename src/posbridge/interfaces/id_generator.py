"""Port for minting record identifiers.

The CLI mints integration and config IDs when the operator does not supply
one; the integration store itself never generates IDs.
"""

import abc

# pylint: disable=too-few-public-methods


class IdGenerator(abc.ABC):
    """Source of unique, non-empty string IDs usable as document keys.

    Implementations must be safe to share between threads.
    """

    @abc.abstractmethod
    def new_id(self) -> str:
        """Return an ID never handed out before by this instance."""
