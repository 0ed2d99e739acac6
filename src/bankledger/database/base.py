"""Abstract ledger persistence interface."""

from abc import ABC, abstractmethod

# Import entities directly to avoid circular import through domain/__init__.py
from bankledger.domain.entities import Entry


class LedgerStorageError(OSError):
    """The ledger backend could not be opened, read or written."""


class LedgerRepository(ABC):
    """Abstract persistence for the full ledger.

    Implementations write the whole ledger at once and must never leave a
    partially written ledger behind when saving fails. Backend-specific
    failures surface as ``LedgerStorageError``.
    """

    @abstractmethod
    def exists(self) -> bool:
        """Return True if a ledger has been saved before."""
        pass

    @abstractmethod
    def load(self) -> list[Entry]:
        """Load every persisted entry, in saved order. A missing ledger is empty."""
        pass

    @abstractmethod
    def save(self, entries: list[Entry]) -> None:
        """Replace the persisted ledger with ``entries``."""
        pass
