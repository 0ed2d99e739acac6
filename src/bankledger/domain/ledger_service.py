"""Ledger load/save domain service."""

import logging
from typing import TYPE_CHECKING

from bankledger.domain.format_registry import FormatRegistry
from bankledger.domain.ledger import Ledger

if TYPE_CHECKING:
    from bankledger.database.base import LedgerRepository

logger = logging.getLogger(__name__)


class LedgerService:
    """Service tying the ledger to its persistent storage."""

    def __init__(self, repository: "LedgerRepository", registry: FormatRegistry):
        """Initialize ledger service.

        Args:
            repository: Ledger storage backend
            registry: Configured accounts and formats
        """
        self.repository = repository
        self.registry = registry
        self.ledger = Ledger()

    def load(self) -> Ledger:
        """Load the persisted ledger and reconcile it with the configured accounts.

        Raises:
            ReconciliationError: If persisted entries reference unknown accounts
            OSError: If the ledger cannot be read
        """
        ledger = Ledger(self.repository.load())
        ledger.reconcile_with_accounts(self.registry.accounts)
        self.ledger = ledger
        logger.info("Ledger loaded with %d entries", len(ledger))
        return ledger

    def save(self) -> None:
        """Persist the whole ledger, then mark every entry as no longer new.

        Raises:
            OSError: If the ledger cannot be written
        """
        self.repository.save(list(self.ledger.entries))
        self.ledger.clear_new_flags()
