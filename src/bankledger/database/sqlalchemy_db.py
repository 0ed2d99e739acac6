"""SQLAlchemy ledger storage."""

import logging
from typing import Optional

from sqlalchemy import delete, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from bankledger.database.base import LedgerRepository, LedgerStorageError
from bankledger.database.mappers import entry_to_domain, entry_to_record
from bankledger.database.models import EntryRecord, create_session_factory
from bankledger.domain.entities import Entry

logger = logging.getLogger(__name__)


class SQLAlchemyLedgerRepository(LedgerRepository):
    """SQLAlchemy-based implementation of LedgerRepository."""

    def __init__(self, database_url: str):
        """Initialize SQLAlchemy repository.

        Args:
            database_url: SQLAlchemy database URL (e.g., 'sqlite:///path/to.db')

        Raises:
            LedgerStorageError: If the database cannot be opened or its table created
        """
        self.database_url = database_url
        try:
            self.session_factory = create_session_factory(database_url)
        except SQLAlchemyError as e:
            raise LedgerStorageError(f"Cannot open ledger database {database_url}: {e}") from e
        self._session: Optional[Session] = None

    def _get_session(self) -> Session:
        """Get current session, creating one if needed."""
        if self._session is None:
            self._session = self.session_factory()
        return self._session

    def disconnect(self) -> None:
        """Close the current session."""
        if self._session is not None:
            self._session.close()
            self._session = None

    def exists(self) -> bool:
        session = self._get_session()
        try:
            return session.scalars(select(EntryRecord.id).limit(1)).first() is not None
        except SQLAlchemyError as e:
            raise LedgerStorageError(f"Cannot read ledger database {self.database_url}: {e}") from e

    def load(self) -> list[Entry]:
        """Load entries in saved order.

        Raises:
            LedgerStorageError: If the database cannot be read
            ValidationError: If a stored row is not a valid entry
        """
        session = self._get_session()
        try:
            records = session.scalars(select(EntryRecord).order_by(EntryRecord.position)).all()
        except SQLAlchemyError as e:
            raise LedgerStorageError(f"Cannot read ledger database {self.database_url}: {e}") from e
        entries = [entry_to_domain(record) for record in records]
        logger.info("Loaded %d entries from %s", len(entries), self.database_url)
        return entries

    def save(self, entries: list[Entry]) -> None:
        """Replace all rows inside a single transaction.

        Raises:
            LedgerStorageError: If the write fails; the transaction is rolled back
        """
        session = self._get_session()
        try:
            session.execute(delete(EntryRecord))
            session.add_all(
                entry_to_record(entry, position) for position, entry in enumerate(entries)
            )
            session.commit()
        except SQLAlchemyError as e:
            session.rollback()
            raise LedgerStorageError(
                f"Cannot write ledger database {self.database_url}: {e}"
            ) from e
        logger.info("Saved %d entries to %s", len(entries), self.database_url)
