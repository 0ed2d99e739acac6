"""Domain model entities for bankledger.

These are pure, immutable data classes. Every change to an entry produces a new
value through one of the ``with_*`` helpers; nothing is mutated in place.
"""

import codecs
from dataclasses import dataclass, field, replace
from datetime import date
from decimal import Decimal
from enum import Enum

from bankledger.domain.errors import (
    ValidationError,
    blank_account_field,
    negative_amount,
    negative_initial_balance,
)


class Category(str, Enum):
    """Transaction category tag."""

    AMAZON = "amazon"
    BANK_FEES = "bank_fees"
    CARE_HEALTH = "care_health"
    CLOTHING = "clothing"
    CULTURE = "culture"
    EXTRA = "extra"
    FAMILY = "family"
    GIFTS = "gifts"
    GROCERIES_HOUSEHOLD = "groceries_household"
    HOUSE_WORK = "house_work"
    INCOME = "income"
    INVESTMENT = "investment"
    LUNCH_RESTAURANT = "lunch_restaurant"
    MISC = "misc"
    OUTINGS = "outings"
    SHARED = "shared"
    SNACK_BAKERY = "snack_bakery"
    SPORT = "sport"
    SUBSCRIPTION = "subscription"
    TAXES_FEES = "taxes_fees"
    TRANSPORT = "transport"
    TRAVEL = "travel"
    UNDEFINED = "undefined"
    WITHDRAWAL = "withdrawal"

    @classmethod
    def parse(cls, value: str) -> "Category":
        """Resolve a category from its value or member name, case-insensitively."""
        normalized = value.strip().lower().replace("-", "_").replace(" ", "_")
        for member in cls:
            if member.value == normalized:
                return member
        raise ValidationError(
            f"Unknown category '{value}'. "
            f"Must be one of: {', '.join(m.value for m in cls)}"
        )


DEFAULT_CATEGORY = Category.MISC


@dataclass(frozen=True, order=True)
class Account:
    """Bank account, identified and ordered by (bank, name, code)."""

    bank: str
    name: str
    code: str
    initial_balance: Decimal = field(default=Decimal("0"), compare=False)

    def __post_init__(self):
        for field_name in ("bank", "name", "code"):
            value = getattr(self, field_name)
            if value is None or not str(value).strip():
                raise ValidationError(blank_account_field(field_name))
        if self.initial_balance < 0:
            raise ValidationError(negative_initial_balance(self.initial_balance))

    @property
    def label(self) -> str:
        return f"{self.name} ({self.bank})"

    @property
    def identity(self) -> tuple[str, str, str]:
        return (self.bank, self.name, self.code)


@dataclass(frozen=True)
class AccountFormat:
    """Layout of one account's statement files.

    Column indices are zero-based. Date formats are ``strptime`` patterns.
    """

    date_operation_index: int
    date_value_index: int
    label_index: int
    debit_index: int
    credit_index: int
    date_operation_format: str = "%d/%m/%Y"
    date_value_format: str = "%d/%m/%Y"
    decimal_separator: str = ","
    thousands_separator: str = ""
    delimiter: str = ";"
    negate_debit: bool = False
    negate_credit: bool = False
    encoding: str = "utf-8-sig"

    def __post_init__(self):
        indices = (
            self.date_operation_index,
            self.date_value_index,
            self.label_index,
            self.debit_index,
            self.credit_index,
        )
        if any(index < 0 for index in indices):
            raise ValidationError("Column indices must be zero or positive")
        if len(self.delimiter) != 1:
            raise ValidationError(
                f"Delimiter must be a single character, got '{self.delimiter}'"
            )
        if len(self.decimal_separator) != 1:
            raise ValidationError(
                f"Decimal separator must be a single character, got '{self.decimal_separator}'"
            )
        if self.thousands_separator == self.decimal_separator:
            raise ValidationError("Thousands and decimal separators must differ")
        try:
            codecs.lookup(self.encoding)
        except LookupError:
            raise ValidationError(f"Unknown encoding '{self.encoding}'") from None

    @property
    def max_index(self) -> int:
        return max(
            self.date_operation_index,
            self.date_value_index,
            self.label_index,
            self.debit_index,
            self.credit_index,
        )


@dataclass(frozen=True)
class Entry:
    """One normalized transaction record.

    Equality covers every field; the ledger ordering and duplicate detection use
    ``identity_key`` only, so two entries can be "the same transaction" while
    differing in category, description or flags.
    """

    account: Account
    operation_date: date
    value_date: date
    label: str
    debit: Decimal = Decimal("0")
    credit: Decimal = Decimal("0")
    description: str = ""
    category: Category = DEFAULT_CATEGORY
    new: bool = True
    duplicate: bool = False

    def __post_init__(self):
        if self.account is None or self.operation_date is None or self.value_date is None:
            raise ValidationError("Entry requires an account and both dates")
        if self.label is None or self.description is None:
            raise ValidationError("Entry label and description cannot be None")
        if self.debit < 0:
            raise ValidationError(negative_amount("debit", self.debit))
        if self.credit < 0:
            raise ValidationError(negative_amount("credit", self.credit))

    @property
    def identity_key(self) -> tuple:
        return (
            self.operation_date,
            self.value_date,
            self.label,
            self.debit,
            self.credit,
            self.account.identity,
        )

    @property
    def value(self) -> Decimal:
        """Signed amount: debits count negative and dominate when both are set."""
        if self.debit > 0:
            return -self.debit
        return self.credit

    def with_account(self, account: Account) -> "Entry":
        return replace(self, account=account)

    def with_description(self, description: str) -> "Entry":
        return replace(self, description=description)

    def with_category(self, category: Category) -> "Entry":
        return replace(self, category=category)

    def with_duplicate(self, duplicate: bool) -> "Entry":
        return replace(self, duplicate=duplicate)

    def with_new(self, new: bool) -> "Entry":
        return replace(self, new=new)


@dataclass(frozen=True)
class AccountTotal:
    """Total of signed values for one account label (or the grand total row)."""

    label: str
    total: Decimal


@dataclass(frozen=True)
class MonthlyBalance:
    """Balance point of a monthly series. ``month`` is the first day of the month."""

    month: date
    balance: Decimal

    @property
    def month_key(self) -> str:
        return self.month.strftime("%Y-%m")


@dataclass(frozen=True)
class ParsedStatement:
    """Outcome of parsing one statement file."""

    path: str
    entries: tuple[Entry, ...]
    errors: tuple[str, ...] = ()

    @property
    def malformed_rows(self) -> int:
        return len(self.errors)


@dataclass(frozen=True)
class SearchResult:
    """Entries matching a filter plus the size of the ledger they were drawn from."""

    entries: tuple[Entry, ...]
    total_count: int

    @property
    def match_count(self) -> int:
        return len(self.entries)


@dataclass(frozen=True)
class ImportResult:
    """Statistics of one account import batch."""

    account: Account
    files_processed: tuple[str, ...] = ()
    files_skipped: tuple[str, ...] = ()
    added: int = 0
    duplicates: int = 0
    errors: tuple[str, ...] = ()


class DateField(str, Enum):
    """Which entry date drives month grouping."""

    OPERATION = "operation"
    VALUE = "value"

    def of(self, entry: Entry) -> date:
        if self is DateField.OPERATION:
            return entry.operation_date
        return entry.value_date
