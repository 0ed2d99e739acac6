"""Shared domain error messages and error types."""


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic."""


class NotFoundError(DomainError):
    """Requested domain entity or path does not exist."""


class ConfigurationError(DomainError):
    """Missing or malformed account/format configuration."""


class ReconciliationError(DomainError):
    """Persisted entries reference accounts that are no longer configured."""

    def __init__(self, message: str, orphans=()):
        super().__init__(message)
        self.orphans = tuple(orphans)


def blank_account_field(field_name: str) -> str:
    """Return message for a blank account identity field."""
    return f"Account {field_name} cannot be empty"


def negative_initial_balance(value) -> str:
    """Return message for a negative initial balance."""
    return f"Initial balance cannot be negative: {value}"


def negative_amount(field_name: str, value) -> str:
    """Return message for a negative debit or credit."""
    return f"Entry {field_name} cannot be negative: {value}"


def format_not_found(label: str) -> str:
    """Return message for an account without a statement format."""
    return f"No statement format configured for account {label}"


def account_not_found(account: str) -> str:
    """Return message for missing account."""
    return f"Account '{account}' not found"


def entry_not_in_ledger(entry) -> str:
    """Return message for a selected entry that is not part of the ledger."""
    return (
        f"Entry {entry.operation_date} '{entry.label}' "
        f"({entry.account.label}) is not in the ledger"
    )


def unknown_accounts(labels) -> str:
    """Return message for persisted entries whose account is not configured."""
    names = ", ".join(sorted(set(labels)))
    return f"Ledger references unknown accounts: {names}"
