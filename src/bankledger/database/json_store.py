"""JSON file ledger storage."""

import json
import logging
import os
import tempfile
from datetime import date
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Any

from bankledger.database.base import LedgerRepository
from bankledger.domain.entities import Account, Category, Entry
from bankledger.domain.errors import ValidationError

logger = logging.getLogger(__name__)


def account_to_dict(account: Account) -> dict[str, Any]:
    return {
        "bank": account.bank,
        "name": account.name,
        "code": account.code,
        "initial_balance": str(account.initial_balance),
    }


def entry_to_dict(entry: Entry) -> dict[str, Any]:
    """Encode an entry. Dates are ISO and amounts are exact decimal strings."""
    return {
        "account": account_to_dict(entry.account),
        "operation_date": entry.operation_date.isoformat(),
        "value_date": entry.value_date.isoformat(),
        "label": entry.label,
        "description": entry.description,
        "debit": str(entry.debit),
        "credit": str(entry.credit),
        "category": entry.category.value,
        "new": entry.new,
        "duplicate": entry.duplicate,
    }


def account_from_dict(data: dict[str, Any]) -> Account:
    return Account(
        bank=data["bank"],
        name=data["name"],
        code=data["code"],
        initial_balance=Decimal(str(data.get("initial_balance", "0"))),
    )


def entry_from_dict(data: dict[str, Any]) -> Entry:
    """Decode an entry written by ``entry_to_dict``.

    Raises:
        ValidationError: If a field is missing or malformed
    """
    try:
        return Entry(
            account=account_from_dict(data["account"]),
            operation_date=date.fromisoformat(data["operation_date"]),
            value_date=date.fromisoformat(data["value_date"]),
            label=data["label"],
            description=data.get("description", ""),
            debit=Decimal(str(data.get("debit", "0"))),
            credit=Decimal(str(data.get("credit", "0"))),
            category=Category(data.get("category", Category.MISC.value)),
            new=bool(data.get("new", False)),
            duplicate=bool(data.get("duplicate", False)),
        )
    except ValidationError:
        raise
    except (KeyError, TypeError, InvalidOperation, ValueError) as e:
        raise ValidationError(f"Malformed ledger entry {data!r}: {e!r}") from e


class JSONLedgerRepository(LedgerRepository):
    """Ledger stored as an indented JSON array in a single file."""

    def __init__(self, path: str):
        """Initialize JSON repository.

        Args:
            path: Path to the ledger file
        """
        self.path = Path(path)

    def exists(self) -> bool:
        return self.path.is_file()

    def load(self) -> list[Entry]:
        """Load entries from the ledger file.

        Raises:
            OSError: If the file exists but cannot be read
            ValidationError: If the file is not a valid ledger
        """
        if not self.exists():
            logger.info("No ledger at %s, starting empty", self.path)
            return []

        with open(self.path, "r", encoding="utf-8") as f:
            try:
                data = json.load(f)
            except json.JSONDecodeError as e:
                raise ValidationError(f"Ledger file {self.path} is not valid JSON: {e}") from e

        if not isinstance(data, list):
            raise ValidationError(f"Ledger file {self.path} must contain a JSON array")

        entries = [entry_from_dict(item) for item in data]
        logger.info("Loaded %d entries from %s", len(entries), self.path)
        return entries

    def save(self, entries: list[Entry]) -> None:
        """Write entries atomically: a temporary file replaces the ledger on success.

        Raises:
            OSError: If the ledger cannot be written; the previous file is kept
        """
        self.path.parent.mkdir(parents=True, exist_ok=True)
        payload = [entry_to_dict(entry) for entry in entries]

        fd, tmp_path = tempfile.mkstemp(
            prefix=f".{self.path.name}.", suffix=".tmp", dir=self.path.parent
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(payload, f, indent=2, ensure_ascii=False)
                f.write("\n")
            os.replace(tmp_path, self.path)
        except BaseException:
            if os.path.exists(tmp_path):
                os.unlink(tmp_path)
            raise

        logger.info("Saved %d entries to %s", len(entries), self.path)
