"""Statement import domain service."""

import logging
from pathlib import Path

from bankledger.domain.entities import Account, ImportResult
from bankledger.domain.format_registry import FormatRegistry
from bankledger.domain.ledger import Ledger
from bankledger.domain.statement_parser import (
    STATEMENT_PATTERN,
    StatementParser,
    is_processed,
    mark_processed,
    pending_statements,
)

logger = logging.getLogger(__name__)


class StatementImportService:
    """Service for importing statement files into the ledger."""

    def __init__(self, ledger: Ledger, registry: FormatRegistry, statements_dir: Path):
        """Initialize statement import service.

        Args:
            ledger: Ledger receiving imported entries
            registry: Account format registry
            statements_dir: Root directory holding one sub-directory per account
        """
        self.ledger = ledger
        self.registry = registry
        self.statements_dir = Path(statements_dir)

    def account_directory(self, account: Account) -> Path:
        """Directory scanned for an account's statement files."""
        return self.statements_dir / account.name

    def import_account(
        self, account: Account, mark: bool = True, create_directory: bool = True
    ) -> ImportResult:
        """Import every unprocessed statement file of an account.

        Each file is merged into the ledger as soon as it is parsed, so an I/O
        failure on a later file keeps what earlier files contributed.

        Args:
            account: Account to import for
            mark: Rename imported files with the processed marker
            create_directory: Create the account directory if it is missing

        Returns:
            ImportResult with the batch statistics

        Raises:
            ConfigurationError: If the account has no statement format
            FileNotFoundError: If the account directory does not exist and
                ``create_directory`` is False
            OSError: If a statement file cannot be read or renamed
        """
        fmt = self.registry.get_format(account)
        parser = StatementParser(account, fmt)

        directory = self.account_directory(account)
        if create_directory:
            directory.mkdir(parents=True, exist_ok=True)

        pending = pending_statements(directory)
        already = sorted(
            path.name for path in directory.glob(STATEMENT_PATTERN) if is_processed(path)
        )

        processed: list[str] = []
        errors: list[str] = []
        added = 0
        duplicates = 0

        for path in pending:
            parsed = parser.parse_file(path)
            merged = self.ledger.merge(parsed.entries)
            added += len(merged)
            duplicates += sum(1 for entry in merged if entry.duplicate)
            errors.extend(parsed.errors)
            if mark:
                mark_processed(path)
            processed.append(path.name)

        logger.info(
            "Imported %d entries (%d duplicates) from %d files for %s",
            added,
            duplicates,
            len(processed),
            account.label,
        )
        return ImportResult(
            account=account,
            files_processed=tuple(processed),
            files_skipped=tuple(already),
            added=added,
            duplicates=duplicates,
            errors=tuple(errors),
        )

    def import_file(self, account: Account, path: Path, mark: bool = True) -> ImportResult:
        """Import a single statement file.

        A file that already carries the processed marker is skipped without
        being read.

        Raises:
            ConfigurationError: If the account has no statement format
            OSError: If the file cannot be read or renamed
        """
        fmt = self.registry.get_format(account)
        path = Path(path)

        if is_processed(path):
            logger.info("Skipping %s: already processed", path.name)
            return ImportResult(account=account, files_skipped=(path.name,))

        parsed = StatementParser(account, fmt).parse_file(path)
        merged = self.ledger.merge(parsed.entries)
        if mark:
            mark_processed(path)

        return ImportResult(
            account=account,
            files_processed=(path.name,),
            added=len(merged),
            duplicates=sum(1 for entry in merged if entry.duplicate),
            errors=parsed.errors,
        )
