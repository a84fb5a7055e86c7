from datetime import date
from decimal import Decimal

import pytest

from services.errors import ErrorKind
from services.validator import TransactionDraft, validate_create_or_update
from tests.conftest import make_record


def draft(**overrides) -> TransactionDraft:
    fields = dict(text="Lunch", amount="12.50", type="expense", category="Food", date=date(2024, 1, 5))
    fields.update(overrides)
    return TransactionDraft(**fields)


def test_expense_amount_is_stored_negative():
    result = validate_create_or_update(draft())

    assert result.ok
    assert result.command.amount == Decimal("-12.50")
    assert result.command.type == "expense"
    assert result.command.date == date(2024, 1, 5)


def test_income_amount_is_stored_positive():
    result = validate_create_or_update(draft(type="income", category="Salary", amount=100))

    assert result.ok
    assert result.command.amount == Decimal("100.00")


def test_accepts_one_cent():
    result = validate_create_or_update(draft(amount="0.01"))

    assert result.ok
    assert result.command.amount == Decimal("-0.01")


@pytest.mark.parametrize("amount", ["0", 0, "-5", -5, "0.001", "", None, "abc", "NaN", "Infinity"])
def test_rejects_non_positive_or_unparseable_amount(amount):
    result = validate_create_or_update(draft(amount=amount))

    assert not result.ok
    assert result.error.kind is ErrorKind.INVALID_AMOUNT
    assert result.command is None


def test_negative_magnitude_on_create_is_rejected_even_for_expense():
    result = validate_create_or_update(draft(amount="-5", type="expense"))

    assert result.error.kind is ErrorKind.INVALID_AMOUNT
    assert result.error.message == "Amount must be a positive number."


@pytest.mark.parametrize("overrides", [
    {"text": ""},
    {"text": "   "},
    {"date": None},
    {"date": ""},
    {"date": "2024-02-30"},
])
def test_missing_text_or_date(overrides):
    result = validate_create_or_update(draft(**overrides))

    assert result.error.kind is ErrorKind.MISSING_FIELD
    assert result.error.message == "Please fill out all fields."


def test_iso_date_string_is_accepted():
    result = validate_create_or_update(draft(date="2024-03-09"))

    assert result.command.date == date(2024, 3, 9)


def test_category_must_match_type():
    result = validate_create_or_update(draft(type="income", category="Food"))

    assert result.error.kind is ErrorKind.INVALID_CATEGORY


def test_unknown_type_is_an_invalid_category():
    result = validate_create_or_update(draft(type="transfer"))

    assert result.error.kind is ErrorKind.INVALID_CATEGORY


def test_other_is_valid_for_both_types():
    assert validate_create_or_update(draft(category="Other")).ok
    assert validate_create_or_update(draft(type="income", category="Other")).ok


def test_first_failure_wins():
    result = validate_create_or_update(draft(text="", amount="-1", category="Nope"))

    assert result.error.kind is ErrorKind.MISSING_FIELD

    result = validate_create_or_update(draft(amount="-1", category="Nope"))

    assert result.error.kind is ErrorKind.INVALID_AMOUNT


def test_text_passes_through_unchanged():
    result = validate_create_or_update(draft(text="  Bus ticket "))

    assert result.command.text == "  Bus ticket "


@pytest.mark.parametrize("amount", ["1e30", "-1e30", "100000000000000000", Decimal("92233720368547758.08")])
def test_amount_beyond_storable_range_is_invalid(amount):
    result = validate_create_or_update(draft(amount=amount))

    assert result.error.kind is ErrorKind.INVALID_AMOUNT


def test_largest_storable_amount_is_accepted():
    result = validate_create_or_update(draft(amount="92233720368547758.07", type="income", category="Salary"))

    assert result.command.amount == Decimal("92233720368547758.07")


def test_draft_from_record_uses_magnitude():
    record = make_record("7", "-42.10", "expense", "Bills", date(2024, 4, 1), text="Power")

    prefilled = TransactionDraft.from_record(record)

    assert prefilled.amount == Decimal("42.10")
    assert prefilled.type == "expense"
    assert prefilled.category == "Bills"
    assert validate_create_or_update(prefilled).command.amount == Decimal("-42.10")
