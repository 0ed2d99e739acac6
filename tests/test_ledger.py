"""Tests for the ledger store."""

from datetime import date

import pytest

from bankledger.domain.entities import Account, Category
from bankledger.domain.errors import NotFoundError, ReconciliationError
from bankledger.domain.identity import sort_key
from bankledger.domain.ledger import (
    Ledger,
    apply_edits,
    set_category,
    set_description,
    toggle_duplicate,
)


def assert_sorted(ledger):
    keys = [sort_key(entry) for entry in ledger]
    assert keys == sorted(keys)


class TestMerge:
    """Tests for merging parsed entries."""

    def test_new_entries_are_not_flagged(self, ledger, make_entry):
        merged = ledger.merge([make_entry(label="B"), make_entry(label="A")])

        assert len(ledger) == 2
        assert not any(entry.duplicate for entry in merged)
        assert [e.label for e in ledger] == ["A", "B"]

    def test_duplicates_are_flagged_and_kept(self, ledger, make_entry):
        ledger.merge([make_entry(label="RENT", debit="700")])

        merged = ledger.merge([
            make_entry(label="RENT", debit="700"),
            make_entry(label="SALARY", credit="2000"),
        ])

        assert [e.duplicate for e in merged] == [True, False]
        assert len(ledger) == 3
        assert ledger.entries[0].duplicate is False
        assert sum(1 for e in ledger if e.duplicate) == 1

    def test_identical_rows_in_one_batch_do_not_flag_each_other(self, ledger, make_entry):
        twice = [make_entry(label="COFFEE", debit="2"), make_entry(label="COFFEE", debit="2")]

        merged = ledger.merge(twice)

        assert [e.duplicate for e in merged] == [False, False]
        assert len(ledger) == 2

    def test_merge_never_shrinks_and_stays_sorted(self, ledger, make_entry):
        for day in (20, 3, 11):
            before = len(ledger)
            ledger.merge([make_entry(operation_date=date(2024, 1, day))])
            assert len(ledger) == before + 1
        ledger.merge([])

        assert len(ledger) == 3
        assert_sorted(ledger)

    def test_annotated_existing_entry_still_detects_duplicate(self, make_entry):
        existing = make_entry(label="RENT", debit="700").with_category(Category.HOUSE_WORK)
        ledger = Ledger([existing])

        assert ledger.is_duplicate(make_entry(label="RENT", debit="700"))

    def test_merge_returns_flagged_copies(self, ledger, make_entry):
        candidate = make_entry(label="A")
        ledger.merge([candidate])

        [flagged] = ledger.merge([candidate])

        assert flagged.duplicate is True
        assert candidate.duplicate is False


class TestReconcile:
    """Tests for reconciliation with configured accounts."""

    def test_entries_point_at_canonical_accounts(self, make_entry, savings_account):
        stale = Account(savings_account.bank, savings_account.name, savings_account.code)
        ledger = Ledger([make_entry(entry_account=stale)])

        ledger.reconcile_with_accounts([savings_account])

        [entry] = ledger.entries
        assert entry.account is savings_account
        assert entry.account.initial_balance == savings_account.initial_balance
        assert entry.new is False

    def test_unknown_account_raises_and_keeps_ledger(self, make_entry, account):
        ghost = Account("OLD BANK", "GONE", "0000")
        kept = make_entry(label="KEPT")
        orphan = make_entry(label="ORPHAN", entry_account=ghost)
        ledger = Ledger([kept, orphan])

        with pytest.raises(ReconciliationError) as exc_info:
            ledger.reconcile_with_accounts([account])

        assert exc_info.value.orphans == (orphan,)
        assert "GONE (OLD BANK)" in str(exc_info.value)
        assert len(ledger) == 2
        assert all(entry.new for entry in ledger)

    def test_empty_ledger_reconciles(self, ledger, account):
        ledger.reconcile_with_accounts([account])

        assert len(ledger) == 0


class TestUpdate:
    """Tests for updating and deleting entries."""

    def test_update_replaces_selected_entries(self, make_entry):
        rent = make_entry(label="RENT", debit="700")
        food = make_entry(label="FOOD", debit="40")
        ledger = Ledger([rent, food])

        updated = ledger.update([rent], set_category(Category.HOUSE_WORK))

        assert updated[0].category is Category.HOUSE_WORK
        assert rent not in ledger
        assert updated[0] in ledger
        assert food in ledger
        assert len(ledger) == 2
        assert_sorted(ledger)

    def test_update_with_description(self, make_entry):
        rent = make_entry(label="RENT")
        ledger = Ledger([rent])

        ledger.update([rent], set_description("January rent"))

        assert ledger.entries[0].description == "January rent"

    def test_update_rejects_foreign_entry(self, make_entry):
        ledger = Ledger([make_entry(label="RENT")])

        with pytest.raises(NotFoundError):
            ledger.update([make_entry(label="OTHER")], set_description("x"))

        assert ledger.entries[0].description == ""

    def test_delete_rejects_entry_selected_more_times_than_present(self, make_entry):
        rent = make_entry(label="RENT")
        ledger = Ledger([rent])

        with pytest.raises(NotFoundError):
            ledger.delete([rent, rent])

        assert len(ledger) == 1

    def test_toggle_duplicate_twice_restores(self, make_entry):
        rent = make_entry(label="RENT")
        ledger = Ledger([rent])

        [flagged] = ledger.toggle_duplicates([rent])
        assert flagged.duplicate is True
        [restored] = ledger.toggle_duplicates([flagged])

        assert restored == rent
        assert toggle_duplicate(toggle_duplicate(rent)) == rent

    def test_delete_one_of_two_identical_entries(self, ledger, make_entry):
        ledger.merge([make_entry(label="RENT")])
        [duplicate] = ledger.merge([make_entry(label="RENT")])

        removed = ledger.delete([duplicate])

        assert removed == 1
        assert len(ledger) == 1
        assert ledger.entries[0].duplicate is False
        assert ledger.is_duplicate(make_entry(label="RENT"))

    def test_delete_last_entry_clears_index(self, make_entry):
        rent = make_entry(label="RENT")
        ledger = Ledger([rent])

        ledger.delete([rent])

        assert len(ledger) == 0
        assert not ledger.is_duplicate(rent)

    def test_clear_new_flags(self, ledger, make_entry):
        ledger.merge([make_entry(label="A"), make_entry(label="B")])

        ledger.clear_new_flags()

        assert not any(entry.new for entry in ledger)


class TestApplyEdits:
    """Tests for the bulk-edit mutator."""

    def test_description_only_fills_empty(self, make_entry):
        mutate = apply_edits(description="Groceries")

        assert mutate(make_entry()).description == "Groceries"
        assert mutate(make_entry(description="Kept")).description == "Kept"

    def test_forced_description_overwrites(self, make_entry):
        mutate = apply_edits(description="Groceries", force_description=True)

        assert mutate(make_entry(description="Old")).description == "Groceries"

    def test_blank_description_is_ignored(self, make_entry):
        mutate = apply_edits(description="   ", force_description=True)

        assert mutate(make_entry(description="Kept")).description == "Kept"

    def test_category_always_applies(self, make_entry):
        mutate = apply_edits(category=Category.SPORT)

        entry = mutate(make_entry(category=Category.TRAVEL, description="Kept"))

        assert entry.category is Category.SPORT
        assert entry.description == "Kept"
