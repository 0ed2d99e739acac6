"""Persistence layer for bankledger application."""

from bankledger.database.base import LedgerRepository, LedgerStorageError
from bankledger.database.factories import create_repository

__all__ = ["LedgerRepository", "LedgerStorageError", "create_repository"]
