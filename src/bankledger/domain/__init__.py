"""Domain layer for bankledger application."""

from bankledger.domain.format_registry import FormatRegistry
from bankledger.domain.ledger import Ledger
from bankledger.domain.ledger_service import LedgerService
from bankledger.domain.search import SearchService, SearchFilter
from bankledger.domain.statement_import import StatementImportService
from bankledger.domain.summary import SummaryService

__all__ = [
    "FormatRegistry",
    "Ledger",
    "LedgerService",
    "SearchService",
    "SearchFilter",
    "StatementImportService",
    "SummaryService",
]
