"""
Common utilities and shared definitions.
Category enumerations, currency symbols, money arithmetic and month helpers.
Amounts are always handled as Decimal and persisted as integer cents.
"""

import logging
from datetime import date
from decimal import Decimal, ROUND_HALF_UP, InvalidOperation
from enum import Enum
from typing import Tuple, Union

logger = logging.getLogger(__name__)

CENT = Decimal("0.01")

# Largest magnitude whose cents still fit a signed 64-bit INTEGER column
MAX_AMOUNT = Decimal(2 ** 63 - 1) / 100


class TransactionType(str, Enum):
    """Kind of a transaction record."""
    EXPENSE = "expense"
    INCOME = "income"


class TypeFilter(str, Enum):
    """Type filter applied to a transaction listing."""
    ALL = "all"
    INCOME = "income"
    EXPENSE = "expense"


EXPENSE_CATEGORIES = ('Food', 'Transport', 'Bills', 'Gadgets', 'Entertainment', 'Other')
INCOME_CATEGORIES = ('Salary', 'Freelance', 'Investment', 'Other')

CATEGORIES_BY_TYPE = {
    TransactionType.EXPENSE: EXPENSE_CATEGORIES,
    TransactionType.INCOME: INCOME_CATEGORIES,
}

CURRENCY_SYMBOLS = {
    "USD": "$",
    "EUR": "€",
    "GBP": "£",
    "JPY": "¥",
    "INR": "₹",
    "AUD": "A$",
    "CAD": "C$",
    "CHF": "CHF",
    "CNY": "CN¥",
}

DEFAULT_CURRENCY_SYMBOL = "$"


def categories_for(transaction_type: Union[TransactionType, str]) -> Tuple[str, ...]:
    """
    Return the category enumeration for a transaction type.

    Args:
        transaction_type: TransactionType or its string value

    Returns:
        Tuple of category names, empty for an unknown type
    """
    try:
        return CATEGORIES_BY_TYPE[TransactionType(transaction_type)]
    except ValueError:
        return ()


def default_category(transaction_type: Union[TransactionType, str]) -> str:
    """First category offered for a type ('Food' for expenses, 'Salary' for income)."""
    categories = categories_for(transaction_type)
    return categories[0] if categories else "Other"


def currency_symbol(currency_code: str) -> str:
    """Map an ISO currency code to its display symbol, defaulting to '$'."""
    return CURRENCY_SYMBOLS.get((currency_code or "").upper(), DEFAULT_CURRENCY_SYMBOL)


def quantize_amount(amount: Decimal) -> Decimal:
    """Round an amount to cents (half-up)."""
    return amount.quantize(CENT, rounding=ROUND_HALF_UP)


def to_cents(amount: Decimal) -> int:
    """Convert a Decimal amount to signed integer cents."""
    return int(quantize_amount(amount) * 100)


def from_cents(cents: int) -> Decimal:
    """Convert signed integer cents back to a two-place Decimal."""
    return (Decimal(cents) / 100).quantize(CENT)


def parse_decimal(value) -> Decimal:
    """
    Parse user input into a Decimal.

    Args:
        value: str, int, float or Decimal

    Returns:
        Parsed Decimal

    Raises:
        ValueError: If the value is not a finite number
    """
    if isinstance(value, Decimal):
        parsed = value
    elif isinstance(value, float):
        parsed = Decimal(repr(value))
    elif isinstance(value, (int, str)) and not isinstance(value, bool):
        try:
            parsed = Decimal(str(value).strip())
        except InvalidOperation as e:
            raise ValueError(f"Not a number: {value!r}") from e
    else:
        raise ValueError(f"Not a number: {value!r}")

    if not parsed.is_finite():
        raise ValueError(f"Not a finite number: {value!r}")
    return parsed


def format_money(amount: Decimal, symbol: str = DEFAULT_CURRENCY_SYMBOL, signed: bool = False) -> str:
    """
    Format an amount for display with a currency symbol prefix.

    Examples:
        >>> format_money(Decimal("75"), "$")
        '$75.00'
        >>> format_money(Decimal("-20"), "€", signed=True)
        '-€20.00'
        >>> format_money(Decimal("-3.5"), "£")
        '£-3.50'
    """
    if signed:
        sign = "-" if amount < 0 else "+"
        return f"{sign}{symbol}{quantize_amount(abs(amount)):.2f}"
    return f"{symbol}{quantize_amount(amount):.2f}"


def shift_month(year: int, month: int, offset: int) -> Tuple[int, int]:
    """
    Move a (year, month) pair by a number of months.

    Examples:
        >>> shift_month(2024, 1, -1)
        (2023, 12)
        >>> shift_month(2024, 12, 1)
        (2025, 1)
    """
    index = year * 12 + (month - 1) + offset
    return index // 12, index % 12 + 1


def month_label(year: int, month: int) -> str:
    """Human readable month heading, e.g. 'January 2024'."""
    return date(year, month, 1).strftime("%B %Y")
