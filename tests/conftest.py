"""Shared pytest fixtures for bankledger tests."""

import json
import logging
from datetime import date
from decimal import Decimal
from pathlib import Path

import pytest

from bankledger.domain.entities import Account, AccountFormat, Entry
from bankledger.domain.format_registry import FormatRegistry
from bankledger.domain.ledger import Ledger

STATEMENT_HEADER = "Date operation;Date valeur;Libelle;Debit;Credit\n"

SAMPLE_STATEMENT = (
    STATEMENT_HEADER
    + "05/01/2024;06/01/2024;LOYER JANVIER;750,00;\n"
    + "12/01/2024;12/01/2024;CARREFOUR MARKET;42,35;\n"
    + "28/01/2024;28/01/2024;VIREMENT SALAIRE;;2 150,00\n"
    + "03/02/2024;04/02/2024;LOYER FEVRIER;750,00;\n"
)


@pytest.fixture
def account():
    """The main configured account."""
    return Account(bank="CCF", name="CHEQUE", code="FR7600000000000000000000001")


@pytest.fixture
def savings_account():
    """A second account of the same bank."""
    return Account(
        bank="CCF", name="LIVRET", code="FR7600000000000000000000002",
        initial_balance=Decimal("1000.00"),
    )


@pytest.fixture
def ccf_format():
    """French semicolon-separated statement layout."""
    return AccountFormat(
        date_operation_index=0,
        date_value_index=1,
        label_index=2,
        debit_index=3,
        credit_index=4,
        date_operation_format="%d/%m/%Y",
        date_value_format="%d/%m/%Y",
        decimal_separator=",",
        thousands_separator=" ",
        delimiter=";",
    )


@pytest.fixture
def registry(account, savings_account, ccf_format):
    """Registry holding both accounts with the shared layout."""
    return FormatRegistry([(account, ccf_format), (savings_account, ccf_format)])


@pytest.fixture
def make_entry(account):
    """Factory building entries with sensible defaults."""

    def _make_entry(
        operation_date=date(2024, 1, 15),
        label="PAYMENT",
        debit="0",
        credit="0",
        value_date=None,
        entry_account=None,
        **kwargs,
    ):
        return Entry(
            account=entry_account or account,
            operation_date=operation_date,
            value_date=value_date or operation_date,
            label=label,
            debit=Decimal(debit),
            credit=Decimal(credit),
            **kwargs,
        )

    return _make_entry


@pytest.fixture
def ledger():
    """An empty ledger."""
    return Ledger()


@pytest.fixture
def statements_dir(tmp_path):
    """Root statement directory."""
    path = tmp_path / "statements"
    path.mkdir()
    return path


@pytest.fixture
def write_statement(statements_dir):
    """Write a statement file into an account's folder and return its path."""

    def _write(account_name: str, filename: str, content: str = SAMPLE_STATEMENT) -> Path:
        folder = statements_dir / account_name
        folder.mkdir(parents=True, exist_ok=True)
        path = folder / filename
        path.write_text(content, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def config_data():
    """Configuration document matching the ``registry`` fixture."""
    return {
        "formats": {
            "ccf": {
                "date_operation_index": 0,
                "date_value_index": 1,
                "label_index": 2,
                "debit_index": 3,
                "credit_index": 4,
                "date_operation_format": "%d/%m/%Y",
                "date_value_format": "%d/%m/%Y",
                "decimal_separator": ",",
                "thousands_separator": " ",
                "delimiter": ";",
            }
        },
        "accounts": [
            {"bank": "CCF", "name": "CHEQUE", "code": "FR7600000000000000000000001",
             "initial_balance": "0", "format": "ccf"},
            {"bank": "CCF", "name": "LIVRET", "code": "FR7600000000000000000000002",
             "initial_balance": "1000.00", "format": "ccf"},
        ],
    }


@pytest.fixture
def config_file(tmp_path, config_data):
    """Configuration file on disk."""
    path = tmp_path / "accounts.json"
    path.write_text(json.dumps(config_data), encoding="utf-8")
    return path


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()


@pytest.fixture
def cli_args(config_file, tmp_path, statements_dir):
    """Global CLI options pointing at temporary configuration and ledger."""
    return [
        "--config", str(config_file),
        "--ledger", str(tmp_path / "ledger.json"),
        "--statements-dir", str(statements_dir),
    ]


@pytest.fixture(autouse=True)
def restore_root_logging():
    """Undo handler changes made by the CLI's logging setup."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)
