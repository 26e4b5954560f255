"""
Tests for the cashbook models and schemas.

No database is needed here; store behaviour lives in test_repositories.py.
"""

from decimal import Decimal

import pytest
from pydantic import ValidationError

from cashbook.errors import CashbookError, InsufficientBalanceError
from cashbook.models import Balance, TransactionType
from cashbook.schemas import BalanceRead, ImportResult, TransactionCreate


class TestTransactionCreate:
    """Tests for the single-transaction input model."""

    def test_valid_payload(self):
        payload = TransactionCreate(title="Salary", value="5000", type="income", category="Job")
        assert payload.type is TransactionType.INCOME
        assert payload.value == Decimal("5000.00")

    def test_strips_title_and_category(self):
        payload = TransactionCreate(
            title="  Lunch ", value=12, type="outcome", category="  Food  "
        )
        assert payload.title == "Lunch"
        assert payload.category == "Food"

    def test_rounds_value_to_cents(self):
        payload = TransactionCreate(title="Coffee", value="3.456", type="outcome", category="Food")
        assert payload.value == Decimal("3.46")

    def test_zero_value_is_allowed(self):
        payload = TransactionCreate(title="Refund", value=0, type="income", category="Misc")
        assert payload.value == Decimal("0.00")

    def test_negative_value_rejected(self):
        with pytest.raises(ValidationError):
            TransactionCreate(title="Rent", value="-1", type="outcome", category="Housing")

    def test_unknown_type_rejected(self):
        with pytest.raises(ValidationError):
            TransactionCreate(title="Rent", value="1", type="transfer", category="Housing")

    @pytest.mark.parametrize("field", ["title", "category"])
    def test_blank_text_fields_rejected(self, field):
        data = {"title": "Rent", "value": "1", "type": "outcome", "category": "Housing"}
        data[field] = "   "
        with pytest.raises(ValidationError):
            TransactionCreate(**data)


class TestBalance:
    """Tests for the derived balance value."""

    def test_empty_balance_is_zero(self):
        balance = Balance()
        assert balance.income == Decimal("0")
        assert balance.outcome == Decimal("0")
        assert balance.total == Decimal("0.00")

    def test_total_is_income_minus_outcome(self):
        balance = Balance(income=Decimal("100.50"), outcome=Decimal("40.25"))
        assert balance.total == Decimal("60.25")

    def test_balance_read_includes_total(self):
        balance = Balance(income=Decimal("10.00"), outcome=Decimal("2.50"))
        read = BalanceRead.model_validate(balance)
        assert read.total == Decimal("7.50")


def test_import_result_defaults():
    result = ImportResult()
    assert result.transactions == []
    assert result.skipped_rows == 0
    assert result.source_removed is True


def test_domain_errors_are_bad_requests():
    error = InsufficientBalanceError("Insufficient balance")
    assert isinstance(error, CashbookError)
    assert isinstance(error, ValueError)
    assert error.status_code == 400
    assert error.message == "Insufficient balance"
    assert CashbookError("gone", status_code=404).status_code == 404
