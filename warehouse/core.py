"""
Core types and pure functions for the basket warehouse.

This module provides the foundational data structures for the warehouse engine:
1. Money helpers: fixed-point Decimal conversion and ROUND_HALF_UP quantization
2. Immutable data structures: Basket, TransactionRecord and operation summaries
3. Enums: TransactionKind
4. Exceptions: WarehouseError and domain-specific error types

Nothing in this module mutates engine state. The Warehouse class in
warehouse.py is the only owner of stock and the transaction log.
"""

from __future__ import annotations
from dataclasses import dataclass
from datetime import date, datetime
from decimal import (
    Decimal, Context, ROUND_HALF_UP,
    DivisionByZero, Inexact, InvalidOperation, Overflow, localcontext,
)
from enum import Enum
from typing import Any, Iterable, NamedTuple, Optional


# ============================================================================
# CONSTANTS
# ============================================================================

# Monetary precision. Every final or displayed value has exactly two places.
MONEY_PLACES = 2
MONEY_QUANTUM = Decimal(10) ** -MONEY_PLACES
MONEY_ROUNDING = ROUND_HALF_UP

# Markup applied on top of the rounded unit cost to derive the sale price.
MARKUP_RATE = Decimal("0.20")

ZERO = Decimal("0")

# ============================================================================
# DECIMAL CONTEXT CONFIGURATION
# ============================================================================
#
# Money arithmetic never runs in the ambient context: its 28 digits and
# ROUND_HALF_EVEN would round large values before the ROUND_HALF_UP quantize,
# silently giving a different cent.
#
#   - _EXACT_CONTEXT: sums, products and divmod. Inexact is trapped, so any
#     result that does not fit in 50 digits raises instead of rounding.
#   - _ROUNDING_CONTEXT: the single ROUND_HALF_UP quantize to cents.
#
# The global context is left untouched.
#
DECIMAL_PRECISION = 50

_EXACT_CONTEXT = Context(
    prec=DECIMAL_PRECISION,
    rounding=ROUND_HALF_UP,
    traps=[InvalidOperation, DivisionByZero, Overflow, Inexact],
)
_ROUNDING_CONTEXT = Context(
    prec=DECIMAL_PRECISION,
    rounding=ROUND_HALF_UP,
    traps=[InvalidOperation, DivisionByZero, Overflow],
)

# Console formats (day/month/year).
DATE_FORMAT = "%d/%m/%Y"
TIMESTAMP_FORMAT = "%d/%m/%Y %H:%M:%S"


# ============================================================================
# MONEY HELPERS
# ============================================================================

def to_decimal(value: Any) -> Decimal:
    """
    Convert a number to Decimal without going through binary floating point.

    Decimals pass through untouched; ints, floats and numeric strings are
    converted through their string form, so 0.1 becomes Decimal("0.1").

    Raises:
        ValueError: If the value cannot be interpreted as a number.
    """
    if isinstance(value, Decimal):
        return value
    if isinstance(value, bool):
        raise ValueError(f"Expected a number, got {value!r}")
    try:
        return Decimal(str(value))
    except InvalidOperation:
        raise ValueError(f"Expected a number, got {value!r}") from None


def round_money(value: Decimal) -> Decimal:
    """
    Quantize a value to two places using ROUND_HALF_UP.

    Raises:
        ArithmeticFailure: If the result needs more than DECIMAL_PRECISION digits.
    """
    try:
        return value.quantize(MONEY_QUANTUM, rounding=MONEY_ROUNDING, context=_ROUNDING_CONTEXT)
    except ArithmeticError as e:
        raise ArithmeticFailure(f"Cannot round {value} to cents: {e!r}") from e


def divide_money(total: Decimal, count: int) -> Decimal:
    """
    Split a positive total over a positive count, rounded half-up to cents.

    The quotient is computed once, exactly: an integer divmod on the total
    scaled to cents, rounded up when twice the remainder reaches the divisor.

    Raises:
        ArithmeticFailure: If count is zero or the quotient does not fit in
                           DECIMAL_PRECISION digits.
    """
    try:
        with localcontext(_EXACT_CONTEXT):
            divisor = Decimal(count)
            cents, remainder = divmod(total.scaleb(MONEY_PLACES), divisor)
            if 2 * remainder >= divisor:
                cents += 1
            return round_money(cents.scaleb(-MONEY_PLACES))
    except ArithmeticError as e:
        raise ArithmeticFailure(f"Cannot divide {total} over {count}: {e!r}") from e


def mark_up(unit_cost: Decimal, rate: Decimal) -> Decimal:
    """Sale price: unit_cost plus unit_cost * rate, rounded half-up to cents."""
    try:
        with localcontext(_EXACT_CONTEXT):
            price = unit_cost + unit_cost * rate
    except ArithmeticError as e:
        raise ArithmeticFailure(f"Cannot mark up {unit_cost} by {rate}: {e!r}") from e
    return round_money(price)


def sum_money(values: Iterable[Decimal]) -> Decimal:
    """
    Exact sum of monetary values, rounded half-up to cents.

    Raises:
        ArithmeticFailure: If the exact sum does not fit in DECIMAL_PRECISION digits.
    """
    try:
        with localcontext(_EXACT_CONTEXT):
            total = sum(values, ZERO)
    except ArithmeticError as e:
        raise ArithmeticFailure(f"Cannot sum amounts exactly: {e!r}") from e
    return round_money(total)


def is_finite_decimal(value: Any) -> bool:
    return isinstance(value, Decimal) and value.is_finite()


# ============================================================================
# ENUMS
# ============================================================================

class TransactionKind(Enum):
    """
    Classification of a logged event.

    RECEIVE: A delivery was paid for and added to stock (cash out).
    SALE: Baskets were sold (cash in).
    DISCARD: Expired baskets were written off (unrealized value lost).
    """
    RECEIVE = "RECEIVE"
    SALE = "SALE"
    DISCARD = "DISCARD"


# ============================================================================
# EXCEPTIONS
# ============================================================================

class WarehouseError(Exception):
    """Base exception for all warehouse engine errors."""
    pass


class InvalidQuantity(WarehouseError):
    """Raised when a receive or sell is asked for a non-positive basket count."""
    pass


class InvalidPrice(WarehouseError):
    """Raised when a delivery price is non-positive or yields a zero sale price."""
    pass


class InsufficientStock(WarehouseError):
    """Raised when a sale asks for more baskets than are in stock."""

    def __init__(self, requested: int, available: int):
        self.requested = requested
        self.available = available
        super().__init__(
            f"Insufficient stock: requested {requested}, available {available}"
        )


class ArithmeticFailure(WarehouseError):
    """Raised when unit cost division or rounding cannot be carried out."""
    pass


# ============================================================================
# CORE DATA STRUCTURES
# ============================================================================

@dataclass(frozen=True, slots=True)
class Basket:
    """
    One unit of perishable stock.

    Attributes:
        expiry_date: Last day the basket may be sold (no time component).
        unit_sale_price: Sale price with markup, two decimal places.

    Baskets carry no identity beyond their attributes: two baskets with the
    same expiry date and price are interchangeable.
    """
    expiry_date: date
    unit_sale_price: Decimal

    def __post_init__(self):
        if isinstance(self.expiry_date, datetime) or not isinstance(self.expiry_date, date):
            raise ValueError(f"Basket expiry_date must be a date, got {type(self.expiry_date)}")
        if not is_finite_decimal(self.unit_sale_price):
            raise ValueError(f"Basket unit_sale_price must be a finite Decimal, got {self.unit_sale_price!r}")
        if self.unit_sale_price < ZERO:
            raise ValueError(f"Basket unit_sale_price cannot be negative, got {self.unit_sale_price}")

    def is_expired(self, today: date) -> bool:
        """Return True if the basket expired strictly before today."""
        return self.expiry_date < today


@dataclass(frozen=True, slots=True)
class TransactionRecord:
    """
    An executed, immutable log entry - represents FACT.

    Attributes:
        timestamp: When the operation was applied (from the engine clock).
        kind: RECEIVE, SALE or DISCARD.
        quantity: Number of baskets involved (always positive).
        amount: Impact on the cash position. Negative for cash out or value
                written off, positive for cash in.
        sequence_number: Monotonic position within the engine's log.
    """
    timestamp: datetime
    kind: TransactionKind
    quantity: int
    amount: Decimal
    sequence_number: int = 0

    def __post_init__(self):
        if not isinstance(self.kind, TransactionKind):
            raise ValueError(f"TransactionRecord kind must be TransactionKind, got {self.kind!r}")
        if isinstance(self.quantity, bool) or not isinstance(self.quantity, int) or self.quantity <= 0:
            raise ValueError(f"TransactionRecord quantity must be a positive int, got {self.quantity!r}")
        if not is_finite_decimal(self.amount):
            raise ValueError(f"TransactionRecord amount must be a finite Decimal, got {self.amount!r}")

    def __repr__(self) -> str:
        return (
            f"TransactionRecord(#{self.sequence_number} {self.kind.value} "
            f"{self.quantity} @ {self.timestamp.isoformat()}: {self.amount})"
        )


# ============================================================================
# OPERATION SUMMARIES
# ============================================================================

class StockSummary(NamedTuple):
    """Basket count and how many of those are past their expiry date."""
    total: int
    expired: int


@dataclass(frozen=True, slots=True)
class ReceiveSummary:
    """
    Result of a successful delivery intake.

    Attributes:
        quantity: Baskets added to stock.
        delivery_price: Total amount paid for the delivery.
        unit_cost: delivery_price / quantity, rounded to two places.
        unit_sale_price: unit_cost plus markup, rounded to two places.
        expiry_date: Expiry date shared by every basket in the delivery.
        already_expired: True if expiry_date was already in the past on arrival.
        record: The RECEIVE entry appended to the log.
    """
    quantity: int
    delivery_price: Decimal
    unit_cost: Decimal
    unit_sale_price: Decimal
    expiry_date: date
    already_expired: bool
    record: TransactionRecord


@dataclass(frozen=True, slots=True)
class SaleSummary:
    """Result of a successful sale: baskets sold, their summed price, and the SALE entry."""
    quantity: int
    sale_value: Decimal
    record: TransactionRecord


@dataclass(frozen=True, slots=True)
class SweepSummary:
    """
    Result of an expiry sweep.

    The empty variant (quantity 0, lost_value 0.00, record None) means there
    was nothing to remove and nothing was logged. It is falsy.
    """
    quantity: int
    lost_value: Decimal
    record: Optional[TransactionRecord] = None

    def __bool__(self) -> bool:
        return self.quantity > 0

    @classmethod
    def empty(cls) -> SweepSummary:
        return cls(quantity=0, lost_value=round_money(ZERO), record=None)
