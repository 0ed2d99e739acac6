"""Tests for domain entities."""

from dataclasses import FrozenInstanceError
from datetime import date
from decimal import Decimal

import pytest

from bankledger.domain.entities import (
    Account,
    AccountFormat,
    Category,
    DateField,
    Entry,
    DEFAULT_CATEGORY,
)
from bankledger.domain.errors import ValidationError


class TestAccount:
    """Tests for Account entity."""

    def test_label(self, account):
        assert account.label == "CHEQUE (CCF)"

    @pytest.mark.parametrize("field_name", ["bank", "name", "code"])
    def test_blank_identity_rejected(self, field_name):
        fields = {"bank": "CCF", "name": "CHEQUE", "code": "FR76"}
        fields[field_name] = "  "
        with pytest.raises(ValidationError, match=field_name):
            Account(**fields)

    def test_negative_initial_balance_rejected(self):
        with pytest.raises(ValidationError, match="negative"):
            Account("CCF", "CHEQUE", "FR76", initial_balance=Decimal("-1"))

    def test_identity_ignores_initial_balance(self):
        a = Account("CCF", "CHEQUE", "FR76", initial_balance=Decimal("0"))
        b = Account("CCF", "CHEQUE", "FR76", initial_balance=Decimal("50"))
        assert a == b
        assert hash(a) == hash(b)

    def test_ordering_by_bank_name_code(self):
        accounts = [
            Account("ZBANK", "A", "1"),
            Account("CCF", "LIVRET", "2"),
            Account("CCF", "CHEQUE", "9"),
            Account("CCF", "CHEQUE", "1"),
        ]
        assert [a.identity for a in sorted(accounts)] == [
            ("CCF", "CHEQUE", "1"),
            ("CCF", "CHEQUE", "9"),
            ("CCF", "LIVRET", "2"),
            ("ZBANK", "A", "1"),
        ]

    def test_immutability(self, account):
        with pytest.raises(FrozenInstanceError):
            account.name = "OTHER"


class TestAccountFormat:
    """Tests for AccountFormat validation."""

    def test_negative_index_rejected(self):
        with pytest.raises(ValidationError):
            AccountFormat(-1, 1, 2, 3, 4)

    def test_multi_character_delimiter_rejected(self):
        with pytest.raises(ValidationError, match="Delimiter"):
            AccountFormat(0, 1, 2, 3, 4, delimiter=";;")

    def test_same_separators_rejected(self):
        with pytest.raises(ValidationError):
            AccountFormat(0, 1, 2, 3, 4, decimal_separator=",", thousands_separator=",")

    def test_max_index(self, ccf_format):
        assert ccf_format.max_index == 4


class TestEntry:
    """Tests for Entry entity."""

    def test_defaults(self, make_entry):
        entry = make_entry()
        assert entry.category is DEFAULT_CATEGORY is Category.MISC
        assert entry.description == ""
        assert entry.new is True
        assert entry.duplicate is False

    def test_negative_debit_rejected(self, make_entry):
        with pytest.raises(ValidationError, match="debit"):
            make_entry(debit="-1")

    def test_negative_credit_rejected(self, make_entry):
        with pytest.raises(ValidationError, match="credit"):
            make_entry(credit="-0.01")

    def test_value_of_debit_and_credit(self, make_entry):
        assert make_entry(debit="30").value == Decimal("-30")
        assert make_entry(credit="100").value == Decimal("100")
        assert make_entry().value == Decimal("0")

    def test_debit_dominates_when_both_set(self, make_entry):
        assert make_entry(debit="10", credit="25").value == Decimal("-10")

    def test_with_helpers_return_new_values(self, make_entry):
        entry = make_entry(label="RENT")
        described = entry.with_description("flat")
        categorized = described.with_category(Category.HOUSE_WORK)
        flagged = categorized.with_duplicate(True).with_new(False)

        assert entry.description == ""
        assert described.description == "flat"
        assert categorized.category is Category.HOUSE_WORK
        assert flagged.duplicate is True and flagged.new is False
        assert flagged.identity_key == entry.identity_key
        assert flagged != entry

    def test_identity_key_components(self, make_entry, account):
        entry = make_entry(
            operation_date=date(2024, 1, 5), value_date=date(2024, 1, 6),
            label="X", debit="1.50",
        )
        assert entry.identity_key == (
            date(2024, 1, 5), date(2024, 1, 6), "X", Decimal("1.50"), Decimal("0"),
            account.identity,
        )

    def test_date_field_selector(self, make_entry):
        entry = make_entry(operation_date=date(2024, 1, 31), value_date=date(2024, 2, 1))
        assert DateField.OPERATION.of(entry) == date(2024, 1, 31)
        assert DateField.VALUE.of(entry) == date(2024, 2, 1)


class TestCategory:
    """Tests for Category parsing."""

    def test_parse_variants(self):
        assert Category.parse("groceries_household") is Category.GROCERIES_HOUSEHOLD
        assert Category.parse("Bank Fees") is Category.BANK_FEES
        assert Category.parse("care-health") is Category.CARE_HEALTH

    def test_all_is_not_a_category(self):
        with pytest.raises(ValidationError):
            Category.parse("all")


def test_format_rejects_unknown_encoding():
    with pytest.raises(ValidationError, match="Unknown encoding"):
        AccountFormat(0, 1, 2, 3, 4, encoding="no-such-codec")
