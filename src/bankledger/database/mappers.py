"""Mapper functions to convert between domain entries and SQLAlchemy records."""

from decimal import Decimal, InvalidOperation

from bankledger.domain import entities as domain
from bankledger.domain.errors import ValidationError
from bankledger.database.models import EntryRecord


def entry_to_domain(record: EntryRecord) -> domain.Entry:
    """Convert an EntryRecord row to a domain Entry.

    Raises:
        ValidationError: If the row holds an unknown category or a malformed amount
    """
    try:
        account = domain.Account(
            bank=record.account_bank,
            name=record.account_name,
            code=record.account_code,
            initial_balance=Decimal(record.account_initial_balance),
        )
        return domain.Entry(
            account=account,
            operation_date=record.operation_date,
            value_date=record.value_date,
            label=record.label,
            description=record.description,
            debit=Decimal(record.debit),
            credit=Decimal(record.credit),
            category=domain.Category(record.category),
            new=record.is_new,
            duplicate=record.is_duplicate,
        )
    except ValidationError:
        raise
    except (InvalidOperation, TypeError, ValueError) as e:
        raise ValidationError(f"Malformed ledger row {record.id}: {e!r}") from e


def entry_to_record(entry: domain.Entry, position: int) -> EntryRecord:
    """Convert a domain Entry to an EntryRecord at the given ledger position."""
    return EntryRecord(
        position=position,
        account_bank=entry.account.bank,
        account_name=entry.account.name,
        account_code=entry.account.code,
        account_initial_balance=str(entry.account.initial_balance),
        operation_date=entry.operation_date,
        value_date=entry.value_date,
        label=entry.label,
        description=entry.description,
        debit=str(entry.debit),
        credit=str(entry.credit),
        category=entry.category.value,
        is_new=entry.new,
        is_duplicate=entry.duplicate,
    )
