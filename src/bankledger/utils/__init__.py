"""Utility functions for bankledger."""

from bankledger.utils.date_parser import parse_date
from bankledger.utils.amount_parser import parse_amount
from bankledger.utils.account_resolver import resolve_account

__all__ = ["parse_date", "parse_amount", "resolve_account"]
