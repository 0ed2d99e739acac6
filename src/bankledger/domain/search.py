"""Composable search over the ledger."""

from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Callable, Optional, Union

from bankledger.domain.entities import Account, Category, Entry, SearchResult
from bankledger.domain.errors import ValidationError
from bankledger.domain.identity import sort_key
from bankledger.domain.ledger import Ledger


class AllOf(Enum):
    """Filter values meaning "do not filter on this field".

    Kept apart from ``Category`` so that "any category" never reads as a
    category an entry could carry.
    """

    CATEGORIES = "all categories"
    ACCOUNTS = "all accounts"


ALL_CATEGORIES = AllOf.CATEGORIES
ALL_ACCOUNTS = AllOf.ACCOUNTS

Predicate = Callable[[Entry], bool]


@dataclass(frozen=True)
class SearchFilter:
    """Search criteria; every supplied criterion must match."""

    label: str = ""
    category: Union[Category, AllOf, None] = ALL_CATEGORIES
    account: Union[Account, AllOf, None] = ALL_ACCOUNTS
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    only_new: bool = False
    only_duplicates: bool = False

    def __post_init__(self):
        if self.category is not None and not isinstance(self.category, (Category, AllOf)):
            if not isinstance(self.category, str):
                raise ValidationError(f"Invalid category filter: {self.category!r}")
            object.__setattr__(self, "category", Category.parse(self.category))
        if self.account is not None and not isinstance(self.account, (Account, AllOf)):
            raise ValidationError(f"Invalid account filter: {self.account!r}")
        if self.start_date and self.end_date and self.start_date > self.end_date:
            raise ValidationError(
                f"Start date {self.start_date} is after end date {self.end_date}"
            )

    def predicates(self) -> list[Predicate]:
        """Build one predicate per active criterion."""
        predicates: list[Predicate] = []

        if isinstance(self.account, Account):
            account = self.account
            predicates.append(lambda e: e.account == account)

        needle = self.label.strip().lower()
        if needle:
            predicates.append(lambda e: needle in e.label.lower())

        if isinstance(self.category, Category):
            category = self.category
            predicates.append(lambda e: e.category == category)

        if self.start_date is not None:
            start = self.start_date
            predicates.append(lambda e: e.operation_date >= start)
        if self.end_date is not None:
            end = self.end_date
            predicates.append(lambda e: e.operation_date <= end)

        if self.only_new:
            predicates.append(lambda e: e.new)
        if self.only_duplicates:
            predicates.append(lambda e: e.duplicate)

        return predicates

    def matches(self, entry: Entry) -> bool:
        return all(predicate(entry) for predicate in self.predicates())


class SearchService:
    """Service for querying the ledger."""

    def __init__(self, ledger: Ledger):
        """Initialize search service.

        Args:
            ledger: Ledger to query
        """
        self.ledger = ledger

    def search(self, search_filter: Optional[SearchFilter] = None) -> SearchResult:
        """Return entries matching every criterion, in ledger order.

        Args:
            search_filter: Criteria; no filter returns the whole ledger

        Returns:
            SearchResult with the matches and the ledger size
        """
        search_filter = search_filter or SearchFilter()
        predicates = search_filter.predicates()
        matches = [
            entry for entry in self.ledger if all(predicate(entry) for predicate in predicates)
        ]
        matches.sort(key=sort_key)
        return SearchResult(entries=tuple(matches), total_count=len(self.ledger))
