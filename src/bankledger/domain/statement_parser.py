"""Statement file parsing and processed-file tracking."""

import csv
import logging
from pathlib import Path
from typing import Iterable, Sequence

from bankledger.domain.entities import Account, AccountFormat, Entry, ParsedStatement
from bankledger.utils.amount_parser import parse_optional_amount
from bankledger.utils.date_parser import parse_statement_date

logger = logging.getLogger(__name__)

PROCESSED_PREFIX = "ok_"
STATEMENT_PATTERN = "*.csv"


def is_processed(path: Path) -> bool:
    """Return True if the statement file carries the processed marker."""
    return Path(path).name.startswith(PROCESSED_PREFIX)


def processed_path(path: Path) -> Path:
    """Return the name a statement file takes once it has been imported.

    An earlier import of a file with the same name is never overwritten; a
    counter is appended to the stem instead.
    """
    path = Path(path)
    target = path.with_name(f"{PROCESSED_PREFIX}{path.name}")
    counter = 1
    while target.exists():
        target = path.with_name(f"{PROCESSED_PREFIX}{path.stem}.{counter}{path.suffix}")
        counter += 1
    return target


def mark_processed(path: Path) -> Path:
    """Rename a statement file with the processed marker.

    Marking a file that is already marked is a no-op.

    Returns:
        Path of the marked file
    """
    path = Path(path)
    if is_processed(path):
        return path
    target = processed_path(path)
    path.rename(target)
    logger.info("Marked %s as processed (%s)", path.name, target.name)
    return target


def pending_statements(directory: Path) -> list[Path]:
    """List statement files of a directory that have not been imported yet.

    Raises:
        FileNotFoundError: If the directory does not exist
    """
    directory = Path(directory)
    if not directory.is_dir():
        raise FileNotFoundError(f"Statement directory not found: {directory}")
    return sorted(
        path
        for path in directory.glob(STATEMENT_PATTERN)
        if path.is_file() and not is_processed(path)
    )


def _check_decodable(row: Sequence[str], encoding: str) -> None:
    for cell in row:
        try:
            cell.encode("utf-8")
        except UnicodeEncodeError:
            raise ValueError(f"Cell is not valid {encoding} text: {cell!r}") from None


class StatementParser:
    """Turn rows of a statement file into entries of one account."""

    def __init__(self, account: Account, fmt: AccountFormat):
        """Initialize statement parser.

        Args:
            account: Account owning every parsed entry
            fmt: Statement layout of that account
        """
        self.account = account
        self.format = fmt

    def parse_file(self, path: Path) -> ParsedStatement:
        """Parse a statement file.

        Malformed rows are skipped and reported; they never abort the file.

        Raises:
            OSError: If the file cannot be read
        """
        path = Path(path)
        # undecodable bytes survive as surrogates so parse_row can reject just that row
        with open(
            path, "r", encoding=self.format.encoding, errors="surrogateescape", newline=""
        ) as f:
            reader = csv.reader(f, delimiter=self.format.delimiter)
            entries, errors = self.parse_rows(reader, source=path.name)

        logger.info(
            "Parsed %s for %s: %d entries, %d malformed rows",
            path.name,
            self.account.label,
            len(entries),
            len(errors),
        )
        return ParsedStatement(path=str(path), entries=tuple(entries), errors=tuple(errors))

    def parse_rows(
        self, rows: Iterable[Sequence[str]], source: str = "<rows>"
    ) -> tuple[list[Entry], list[str]]:
        """Parse raw rows, the first of which is the header.

        Returns:
            Tuple of (entries, error messages)
        """
        entries: list[Entry] = []
        errors: list[str] = []

        iterator = iter(rows)
        row_num = 0
        while True:
            row_num += 1
            try:
                row = next(iterator)
            except StopIteration:
                break
            except csv.Error as e:
                # csv raises on undecodable lines (e.g. NUL bytes); the reader resumes after them
                if row_num > 1:
                    self._skip(errors, source, row_num, e)
                continue
            if row_num == 1 or not any(cell.strip() for cell in row):
                continue
            try:
                entries.append(self.parse_row(row))
            except (ValueError, IndexError) as e:
                self._skip(errors, source, row_num, e)

        return entries, errors

    @staticmethod
    def _skip(errors: list[str], source: str, row_num: int, error: Exception) -> None:
        message = f"{source} row {row_num}: {error}"
        logger.warning("Skipping malformed row: %s", message)
        errors.append(message)

    def parse_row(self, row: Sequence[str]) -> Entry:
        """Parse a single data row.

        Raises:
            ValueError: If a column is missing or a cell cannot be parsed
        """
        fmt = self.format
        if len(row) <= fmt.max_index:
            raise ValueError(f"Expected at least {fmt.max_index + 1} columns, got {len(row)}")
        _check_decodable(row, fmt.encoding)

        operation_date = parse_statement_date(
            row[fmt.date_operation_index], fmt.date_operation_format
        )
        value_date = parse_statement_date(row[fmt.date_value_index], fmt.date_value_format)
        label = row[fmt.label_index].strip()

        debit = parse_optional_amount(
            row[fmt.debit_index], fmt.decimal_separator, fmt.thousands_separator
        )
        credit = parse_optional_amount(
            row[fmt.credit_index], fmt.decimal_separator, fmt.thousands_separator
        )
        if fmt.negate_debit and debit:
            debit = -debit
        if fmt.negate_credit and credit:
            credit = -credit

        return Entry(
            account=self.account,
            operation_date=operation_date,
            value_date=value_date,
            label=label,
            debit=debit,
            credit=credit,
        )
