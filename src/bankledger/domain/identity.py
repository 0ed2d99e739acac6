"""Transaction identity: natural key ordering and duplicate detection.

Two entries are the same transaction when their identity keys are equal:
(operation date, value date, label, debit, credit, account). The label is
compared case-sensitively here even though searching by label is not.
"""

from collections import Counter
from typing import Iterable

from bankledger.domain.entities import Entry


def sort_key(entry: Entry) -> tuple:
    """Key used to keep the ledger in its total order."""
    return entry.identity_key


def compare_entries(left: Entry, right: Entry) -> int:
    """Three-way comparison of two entries by identity key.

    Returns a negative number, zero or a positive number. Entries that differ
    only in description, category or flags compare equal.
    """
    left_key, right_key = left.identity_key, right.identity_key
    if left_key < right_key:
        return -1
    if left_key > right_key:
        return 1
    return 0


def same_transaction(left: Entry, right: Entry) -> bool:
    return left.identity_key == right.identity_key


def is_duplicate(ledger: Iterable[Entry], candidate: Entry) -> bool:
    """Return True if an entry with the candidate's identity key exists in ``ledger``.

    ``ledger`` may be any iterable of entries or a ``KeyIndex``, which answers
    without scanning.
    """
    if isinstance(ledger, KeyIndex):
        return candidate in ledger
    key = candidate.identity_key
    return any(entry.identity_key == key for entry in ledger)


class KeyIndex:
    """Multiset of identity keys for constant-time duplicate lookups."""

    def __init__(self, entries: Iterable[Entry] = ()):
        self._counts: Counter = Counter(entry.identity_key for entry in entries)

    def add(self, entry: Entry) -> None:
        self._counts[entry.identity_key] += 1

    def discard(self, entry: Entry) -> None:
        key = entry.identity_key
        if self._counts[key] <= 1:
            self._counts.pop(key, None)
        else:
            self._counts[key] -= 1

    def snapshot(self) -> "KeyIndex":
        """Return an independent copy, frozen against later additions."""
        copy = KeyIndex()
        copy._counts = Counter(self._counts)
        return copy

    def __contains__(self, entry: Entry) -> bool:
        return self._counts.get(entry.identity_key, 0) > 0

    def __len__(self) -> int:
        return sum(self._counts.values())
