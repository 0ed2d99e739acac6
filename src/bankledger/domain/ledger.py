"""Ledger store: the ordered, duplicate-aware collection of all entries."""

import logging
from collections import Counter
from typing import Callable, Iterable, Iterator, Optional

from bankledger.domain.entities import Account, Category, Entry
from bankledger.domain.errors import (
    NotFoundError,
    ReconciliationError,
    entry_not_in_ledger,
    unknown_accounts,
)
from bankledger.domain.identity import KeyIndex, sort_key

logger = logging.getLogger(__name__)

EntryMutator = Callable[[Entry], Entry]


def set_description(description: str) -> EntryMutator:
    """Mutator replacing the description."""
    return lambda entry: entry.with_description(description)


def set_category(category: Category) -> EntryMutator:
    """Mutator replacing the category."""
    return lambda entry: entry.with_category(category)


def toggle_duplicate(entry: Entry) -> Entry:
    """Mutator flipping the duplicate flag."""
    return entry.with_duplicate(not entry.duplicate)


def apply_edits(
    description: Optional[str] = None,
    category: Optional[Category] = None,
    force_description: bool = False,
) -> EntryMutator:
    """Build the bulk-edit mutator.

    A non-blank description only fills entries whose description is empty,
    unless ``force_description`` is set. A category, when given, always applies.
    """
    description = (description or "").strip()

    def mutate(entry: Entry) -> Entry:
        if description and (force_description or not entry.description):
            entry = entry.with_description(description)
        if category is not None:
            entry = entry.with_category(category)
        return entry

    return mutate


class Ledger:
    """Sorted collection of entries for every account.

    Every mutating method validates its input first and re-sorts before
    returning, so callers never observe a half-applied change. The ledger is
    not thread-safe; concurrent hosts must serialize mutations.
    """

    def __init__(self, entries: Iterable[Entry] = ()):
        self._entries: list[Entry] = sorted(entries, key=sort_key)
        self._index = KeyIndex(self._entries)

    @property
    def entries(self) -> tuple[Entry, ...]:
        return tuple(self._entries)

    def __iter__(self) -> Iterator[Entry]:
        return iter(tuple(self._entries))

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, entry: Entry) -> bool:
        return entry in self._entries

    def is_duplicate(self, candidate: Entry) -> bool:
        """Return True if an entry with the candidate's identity key is recorded."""
        return candidate in self._index

    def merge(self, candidates: Iterable[Entry]) -> list[Entry]:
        """Add candidates, flagging those whose identity key is already recorded.

        Candidates are matched against the ledger as it was when the merge
        started, so identical rows within one batch do not flag each other.
        Nothing is ever dropped.

        Returns:
            The merged entries with their duplicate flag set
        """
        snapshot = self._index.snapshot()
        merged = [
            candidate.with_duplicate(candidate in snapshot) for candidate in candidates
        ]
        for entry in merged:
            self._entries.append(entry)
            self._index.add(entry)
        self._sort()

        flagged = sum(1 for entry in merged if entry.duplicate)
        logger.debug("Merged %d entries (%d flagged duplicate)", len(merged), flagged)
        return merged

    def reconcile_with_accounts(self, known_accounts: Iterable[Account]) -> None:
        """Point every entry at the canonical configured account and clear ``new``.

        Raises:
            ReconciliationError: If entries reference accounts that are not
                configured. The ledger is left untouched in that case.
        """
        canonical = {account.identity: account for account in known_accounts}

        orphans = [entry for entry in self._entries if entry.account.identity not in canonical]
        if orphans:
            raise ReconciliationError(
                unknown_accounts(entry.account.label for entry in orphans), orphans
            )

        self._entries = [
            entry.with_account(canonical[entry.account.identity]).with_new(False)
            for entry in self._entries
        ]
        self._sort()
        logger.debug("Reconciled %d entries with %d accounts", len(self._entries), len(canonical))

    def update(self, selection: Iterable[Entry], mutator: EntryMutator) -> list[Entry]:
        """Replace each selected entry with ``mutator(entry)``.

        Raises:
            NotFoundError: If a selected entry is not in the ledger

        Returns:
            The replacement entries
        """
        selection = list(selection)
        self._check_selection(selection)

        updated = [mutator(entry) for entry in selection]
        for old in selection:
            self._remove(old)
        for new in updated:
            self._entries.append(new)
            self._index.add(new)
        self._sort()
        return updated

    def toggle_duplicates(self, selection: Iterable[Entry]) -> list[Entry]:
        return self.update(selection, toggle_duplicate)

    def delete(self, selection: Iterable[Entry]) -> int:
        """Remove the selected entries.

        Each selected value removes one matching entry, so deleting a flagged
        duplicate leaves the original in place.

        Raises:
            NotFoundError: If a selected entry is not in the ledger

        Returns:
            Number of entries removed
        """
        selection = list(selection)
        self._check_selection(selection)
        for entry in selection:
            self._remove(entry)
        logger.debug("Deleted %d entries", len(selection))
        return len(selection)

    def clear_new_flags(self) -> None:
        """Mark every entry as persisted."""
        self._entries = [entry.with_new(False) if entry.new else entry for entry in self._entries]

    def _check_selection(self, selection: list[Entry]) -> None:
        available = Counter(self._entries)
        for entry, count in Counter(selection).items():
            if available[entry] < count:
                raise NotFoundError(entry_not_in_ledger(entry))

    def _remove(self, entry: Entry) -> None:
        self._entries.remove(entry)
        self._index.discard(entry)

    def _sort(self) -> None:
        # list.sort is stable, so entries sharing a key keep their merge order
        self._entries.sort(key=sort_key)
