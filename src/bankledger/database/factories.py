"""Factory functions for creating ledger repositories."""

from pathlib import Path
from typing import Optional

from bankledger.config import resolve_ledger_path
from bankledger.database.base import LedgerRepository
from bankledger.database.json_store import JSONLedgerRepository
from bankledger.database.sqlalchemy_db import SQLAlchemyLedgerRepository

SQLITE_SUFFIXES = {".db", ".sqlite", ".sqlite3"}


def create_sqlite_repository(database_path: str) -> SQLAlchemyLedgerRepository:
    """Create a SQLite-backed repository.

    Args:
        database_path: Path to SQLite database file

    Returns:
        SQLAlchemyLedgerRepository configured for SQLite
    """
    Path(database_path).parent.mkdir(parents=True, exist_ok=True)
    return SQLAlchemyLedgerRepository(f"sqlite:///{database_path}")


def create_repository(ledger_path: Optional[str] = None) -> LedgerRepository:
    """Create the repository for a ledger path.

    Args:
        ledger_path: Path to the ledger. If None, checks BANKLEDGER_LEDGER_PATH
            environment variable, then defaults to ~/.bankledger/ledger.json.
            Paths ending in .db, .sqlite or .sqlite3 use SQLite; anything else
            is a JSON file.

    Returns:
        LedgerRepository instance
    """
    path = resolve_ledger_path(ledger_path)
    if path.suffix.lower() in SQLITE_SUFFIXES:
        return create_sqlite_repository(str(path))
    return JSONLedgerRepository(str(path))
