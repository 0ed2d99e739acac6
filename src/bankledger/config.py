"""Static account configuration and path resolution.

The configuration file is a JSON document::

    {
      "formats": {
        "ccf": {"date_operation_index": 0, "date_value_index": 1, "label_index": 2,
                "debit_index": 3, "credit_index": 4,
                "date_operation_format": "%d/%m/%Y", "date_value_format": "%d/%m/%Y",
                "decimal_separator": ",", "delimiter": ";"}
      },
      "accounts": [
        {"bank": "CCF", "name": "CHEQUE", "code": "FR76...", "initial_balance": "0",
         "format": "ccf"}
      ]
    }

An account's ``format`` is either the name of a shared format or an inline
format object.
"""

import json
import logging
import os
from dataclasses import fields
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Any, Optional

from bankledger.domain.entities import Account, AccountFormat
from bankledger.domain.errors import ConfigurationError, DomainError
from bankledger.domain.format_registry import FormatRegistry

logger = logging.getLogger(__name__)

DEFAULT_HOME = Path.home() / ".bankledger"
CONFIG_ENV = "BANKLEDGER_CONFIG"
LEDGER_ENV = "BANKLEDGER_LEDGER_PATH"
STATEMENTS_ENV = "BANKLEDGER_STATEMENTS_DIR"

_FORMAT_FIELDS = {f.name for f in fields(AccountFormat)}
_REQUIRED_FORMAT_FIELDS = {
    "date_operation_index",
    "date_value_index",
    "label_index",
    "debit_index",
    "credit_index",
}
_FORMAT_FIELD_TYPES = {
    **{name: int for name in _REQUIRED_FORMAT_FIELDS},
    "date_operation_format": str,
    "date_value_format": str,
    "decimal_separator": str,
    "thousands_separator": str,
    "delimiter": str,
    "encoding": str,
    "negate_debit": bool,
    "negate_credit": bool,
}
_TYPE_NAMES = {int: "an integer", str: "a string", bool: "true or false"}


def _resolve(explicit: Optional[str], env_var: str, default_name: str) -> Path:
    if explicit is None:
        explicit = os.environ.get(env_var)
    if explicit is None:
        return DEFAULT_HOME / default_name
    return Path(explicit).expanduser()


def resolve_config_path(config_path: Optional[str] = None) -> Path:
    """Explicit path, then BANKLEDGER_CONFIG, then ~/.bankledger/accounts.json."""
    return _resolve(config_path, CONFIG_ENV, "accounts.json")


def resolve_ledger_path(ledger_path: Optional[str] = None) -> Path:
    """Explicit path, then BANKLEDGER_LEDGER_PATH, then ~/.bankledger/ledger.json."""
    return _resolve(ledger_path, LEDGER_ENV, "ledger.json")


def resolve_statements_dir(statements_dir: Optional[str] = None) -> Path:
    """Explicit path, then BANKLEDGER_STATEMENTS_DIR, then ~/.bankledger/statements."""
    return _resolve(statements_dir, STATEMENTS_ENV, "statements")


def build_format(data: Any, where: str) -> AccountFormat:
    """Build an AccountFormat from its configuration object.

    Raises:
        ConfigurationError: If keys are missing, unknown or invalid
    """
    if not isinstance(data, dict):
        raise ConfigurationError(f"{where}: format must be an object")
    missing = _REQUIRED_FORMAT_FIELDS - set(data)
    if missing:
        raise ConfigurationError(f"{where}: missing format keys: {', '.join(sorted(missing))}")
    unknown = set(data) - _FORMAT_FIELDS
    if unknown:
        raise ConfigurationError(f"{where}: unknown format keys: {', '.join(sorted(unknown))}")
    for key, value in data.items():
        expected = _FORMAT_FIELD_TYPES[key]
        # bool is an int subclass
        if not isinstance(value, expected) or (expected is int and isinstance(value, bool)):
            raise ConfigurationError(f"{where}: {key} must be {_TYPE_NAMES[expected]}")
    try:
        return AccountFormat(**data)
    except (DomainError, TypeError) as e:
        raise ConfigurationError(f"{where}: {e}") from e


def build_account(data: Any, where: str) -> Account:
    """Build an Account from its configuration object.

    Raises:
        ConfigurationError: If fields are missing or invalid
    """
    if not isinstance(data, dict):
        raise ConfigurationError(f"{where}: account must be an object")
    try:
        initial_balance = Decimal(str(data.get("initial_balance", "0")))
        return Account(
            bank=data["bank"],
            name=data["name"],
            code=data["code"],
            initial_balance=initial_balance,
        )
    except KeyError as e:
        raise ConfigurationError(f"{where}: missing account key {e}") from e
    except InvalidOperation as e:
        raise ConfigurationError(f"{where}: invalid initial_balance") from e
    except DomainError as e:
        raise ConfigurationError(f"{where}: {e}") from e


def build_registry(data: Any) -> FormatRegistry:
    """Build the format registry from a parsed configuration document.

    Raises:
        ConfigurationError: If the document is malformed
    """
    if not isinstance(data, dict):
        raise ConfigurationError("Configuration must be a JSON object")

    shared = {
        name: build_format(fmt, f"format '{name}'")
        for name, fmt in (data.get("formats") or {}).items()
    }

    accounts = data.get("accounts")
    if not isinstance(accounts, list) or not accounts:
        raise ConfigurationError("Configuration must list at least one account")

    registry = FormatRegistry()
    for position, item in enumerate(accounts, start=1):
        where = f"account #{position}"
        account = build_account(item, where)
        fmt = item.get("format")
        if isinstance(fmt, str):
            if fmt not in shared:
                raise ConfigurationError(f"{where}: undefined format '{fmt}'")
            account_format = shared[fmt]
        else:
            account_format = build_format(fmt, where)
        registry.register(account, account_format)

    return registry


def load_config(config_path: Optional[str] = None) -> FormatRegistry:
    """Load the account configuration file into a FormatRegistry.

    Raises:
        ConfigurationError: If the file is missing or malformed
    """
    path = resolve_config_path(config_path)
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except FileNotFoundError as e:
        raise ConfigurationError(f"Configuration file not found: {path}") from e
    except json.JSONDecodeError as e:
        raise ConfigurationError(f"Configuration file {path} is not valid JSON: {e}") from e

    registry = build_registry(data)
    logger.info("Loaded %d accounts from %s", len(registry), path)
    return registry
