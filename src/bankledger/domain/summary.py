"""Aggregation over the ledger: account totals and monthly balances."""

from collections import defaultdict
from datetime import date
from decimal import Decimal
from typing import Iterable, Optional, Sequence

from bankledger.domain.entities import (
    Account,
    AccountTotal,
    DateField,
    Entry,
    MonthlyBalance,
)
from bankledger.domain.ledger import Ledger
from bankledger.utils.date_parser import month_start

TOTAL_LABEL = "Total"


class SummaryService:
    """Service for building totals and monthly series from a ledger."""

    def __init__(self, ledger: Ledger):
        """Initialize summary service.

        Args:
            ledger: Ledger to aggregate
        """
        self.ledger = ledger

    def account_totals(self, entries: Optional[Iterable[Entry]] = None) -> list[AccountTotal]:
        """Sum signed values per account label, ignoring duplicate-flagged entries.

        Args:
            entries: Entries to aggregate, typically a search result. Defaults
                to the whole ledger.

        Returns:
            One row per account label in label order, followed by the grand total
            row labelled "Total"
        """
        if entries is None:
            entries = self.ledger

        by_label: dict[str, Decimal] = defaultdict(Decimal)
        for entry in entries:
            if entry.duplicate:
                continue
            by_label[entry.account.label] += entry.value

        rows = [AccountTotal(label, by_label[label]) for label in sorted(by_label)]
        grand_total = sum((row.total for row in rows), Decimal("0"))
        rows.append(AccountTotal(TOTAL_LABEL, grand_total))
        return rows

    def totals(self, entries: Optional[Iterable[Entry]] = None) -> dict[str, Decimal]:
        """Mapping of account label to total, ending with the "Total" key."""
        return {row.label: row.total for row in self.account_totals(entries)}

    def monthly_totals(
        self,
        date_field: DateField = DateField.VALUE,
        account: Optional[Account] = None,
        include_duplicates: bool = False,
        start_month: Optional[date] = None,
        end_month: Optional[date] = None,
    ) -> list[MonthlyBalance]:
        """Net signed value of each month, in chronological order."""
        monthly = group_by_month(self._select(account, include_duplicates), date_field)
        return window(monthly, start_month, end_month)

    def monthly_series(
        self,
        date_field: DateField = DateField.OPERATION,
        account: Optional[Account] = None,
        include_duplicates: bool = False,
        include_initial_balance: bool = False,
        start_month: Optional[date] = None,
        end_month: Optional[date] = None,
    ) -> list[MonthlyBalance]:
        """Cumulative balance at the end of each month.

        Unlike a raw running sum of every recorded entry, duplicate-flagged
        entries are left out by default so the series agrees with
        ``account_totals``. Pass ``include_duplicates=True`` to sum every entry.

        Args:
            date_field: Date used to assign entries to months
            account: Restrict to one account
            include_duplicates: Count duplicate-flagged entries too
            include_initial_balance: Start from the accounts' initial balances
            start_month: First month to return (inclusive); earlier months still
                contribute to the running balance
            end_month: Last month to return (inclusive)
        """
        entries = self._select(account, include_duplicates)

        opening = Decimal("0")
        if include_initial_balance:
            accounts = {account} if account is not None else {e.account for e in entries}
            opening = sum((a.initial_balance for a in accounts), Decimal("0"))

        series = cumulate(group_by_month(entries, date_field), opening)
        return window(series, start_month, end_month)

    def _select(self, account: Optional[Account], include_duplicates: bool) -> list[Entry]:
        return [
            entry
            for entry in self.ledger
            if (account is None or entry.account == account)
            and (include_duplicates or not entry.duplicate)
        ]


def group_by_month(entries: Iterable[Entry], date_field: DateField) -> list[MonthlyBalance]:
    """Sum signed values per calendar month, chronologically."""
    monthly: dict[date, Decimal] = defaultdict(Decimal)
    for entry in entries:
        monthly[month_start(date_field.of(entry))] += entry.value
    return [MonthlyBalance(month, monthly[month]) for month in sorted(monthly)]


def cumulate(
    monthly: Sequence[MonthlyBalance], opening: Decimal = Decimal("0")
) -> list[MonthlyBalance]:
    """Turn per-month nets into a running balance across every month."""
    balance = opening
    series = []
    for point in monthly:
        balance += point.balance
        series.append(MonthlyBalance(point.month, balance))
    return series


def window(
    series: Sequence[MonthlyBalance],
    start_month: Optional[date] = None,
    end_month: Optional[date] = None,
) -> list[MonthlyBalance]:
    """Keep the points between two months, inclusive."""
    start = month_start(start_month) if start_month else None
    end = month_start(end_month) if end_month else None
    return [
        point
        for point in series
        if (start is None or point.month >= start) and (end is None or point.month <= end)
    ]
