"""Utility for resolving account names to configured accounts."""

from bankledger.domain.entities import Account
from bankledger.domain.errors import NotFoundError, account_not_found
from bankledger.domain.format_registry import FormatRegistry


def resolve_account(registry: FormatRegistry, account: str) -> Account:
    """Resolve an account name, label or code to the configured account.

    Args:
        registry: Format registry holding the configured accounts
        account: Account name (e.g. "CHEQUE"), label (e.g. "CHEQUE (CCF)") or code

    Returns:
        The canonical Account

    Raises:
        NotFoundError: If no configured account matches
    """
    found = registry.find_account(account.strip())
    if found is None:
        raise NotFoundError(account_not_found(account))
    return found
