"""Account statement format registry."""

from typing import Iterable, Iterator, Optional

from bankledger.domain.entities import Account, AccountFormat
from bankledger.domain.errors import ConfigurationError, format_not_found


class FormatRegistry:
    """Lookup table from configured accounts to their statement formats.

    Built once from static configuration; accounts are kept in their natural
    (bank, name, code) order.
    """

    def __init__(self, formats: Optional[Iterable[tuple[Account, AccountFormat]]] = None):
        """Initialize the registry.

        Args:
            formats: Pairs of (account, format)

        Raises:
            ConfigurationError: If the same account is registered twice
        """
        self._formats: dict[Account, AccountFormat] = {}
        for account, fmt in formats or ():
            self.register(account, fmt)

    def register(self, account: Account, fmt: AccountFormat) -> None:
        """Associate a format with an account.

        Raises:
            ConfigurationError: If the account already has a format
        """
        if account in self._formats:
            raise ConfigurationError(f"Account {account.label} is configured twice")
        self._formats[account] = fmt

    def get_format(self, account: Account) -> AccountFormat:
        """Return the statement format of an account.

        Raises:
            ConfigurationError: If the account has no format
        """
        try:
            return self._formats[account]
        except KeyError:
            raise ConfigurationError(format_not_found(account.label)) from None

    @property
    def accounts(self) -> list[Account]:
        """Configured accounts, sorted."""
        return sorted(self._formats)

    def find_account(self, name_or_label: str) -> Optional[Account]:
        """Find an account by name, label or code."""
        for account in self.accounts:
            if name_or_label in (account.name, account.label, account.code):
                return account
        return None

    def __contains__(self, account: Account) -> bool:
        return account in self._formats

    def __iter__(self) -> Iterator[Account]:
        return iter(self.accounts)

    def __len__(self) -> int:
        return len(self._formats)
