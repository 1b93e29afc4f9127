"""
warehouse.py - Stateful Basket Inventory and Cash Ledger

The Warehouse class is the central state manager for the basket system.
It is the only module that mutates state, ensuring controlled and auditable changes.

Key responsibilities:
    - Owns the stock collection and the append-only transaction log
    - Derives the cash position from the log (there is no separate cash field)
    - Executes every operation atomically (validate fully, then apply all or nothing)
    - Reads time only through an injected Clock
    - Always logs - exactly one record per successful receive, sell or sweep
"""

from __future__ import annotations
from datetime import date
from decimal import Decimal
from threading import RLock
from typing import List, Optional, Tuple

from .clock import Clock, SystemClock
from .core import (
    # Types
    Basket, TransactionKind, TransactionRecord,
    StockSummary, ReceiveSummary, SaleSummary, SweepSummary,
    # Constants
    MARKUP_RATE, ZERO,
    # Exceptions
    WarehouseError, InvalidQuantity, InvalidPrice, InsufficientStock,
    ArithmeticFailure,
    # Helper functions
    to_decimal, divide_money, mark_up, sum_money,
)


class Warehouse:
    """
    Perishable basket inventory with an append-only cash ledger.

    Design Principles:
        - Always validates: Every operation checks all of its inputs before
          touching stock or the log. A rejected call leaves no trace.
        - Always logs: Every successful receive, sell and non-empty sweep appends
          exactly one TransactionRecord. The cash balance is the rounded sum
          of those records.

    Thread Safety:
        Each public method runs inside one engine-wide lock, so a shared
        instance executes every operation as a single atomic unit.

    Example:
        warehouse = Warehouse(clock=ManualClock(datetime(2025, 1, 1)), verbose=False)
        warehouse.receive(Decimal("100.00"), 10, date(2025, 1, 31))
        warehouse.sell(4)
        warehouse.get_cash_balance()   # Decimal("-52.00")
    """

    def __init__(
        self,
        name: str = "warehouse",
        clock: Optional[Clock] = None,
        markup_rate: Decimal = MARKUP_RATE,
        verbose: bool = True,
    ):
        """
        Create a warehouse.

        Args:
            name: Warehouse identifier
            clock: Time source for log timestamps and expiry checks (default: SystemClock)
            markup_rate: Fraction added to the unit cost to get the sale price (default: 0.20)
            verbose: Print one line per applied or rejected operation (default: True)

        Raises:
            ValueError: If markup_rate is negative or not a finite number
        """
        rate = to_decimal(markup_rate)
        if not rate.is_finite() or rate < ZERO:
            raise ValueError(f"markup_rate must be a non-negative number, got {markup_rate!r}")
        self.name = name
        self.clock: Clock = clock or SystemClock()
        self.markup_rate = rate
        self.verbose = verbose
        self._stock: List[Basket] = []
        self._log: List[TransactionRecord] = []
        self._next_sequence: int = 0
        self._lock = RLock()

    # ========================================================================
    # READ-ONLY ACCESSORS
    # ========================================================================

    def check_stock(self) -> StockSummary:
        """
        Count baskets in stock and how many of them are past their expiry date.

        A basket is expired when its expiry date is strictly before today.
        """
        with self._lock:
            today = self.clock.today()
            expired = sum(1 for basket in self._stock if basket.is_expired(today))
            return StockSummary(total=len(self._stock), expired=expired)

    def get_cash_balance(self) -> Decimal:
        """Return the cash position: the sum of all logged amounts, rounded half-up to cents."""
        with self._lock:
            return sum_money(record.amount for record in self._log)

    def list_transactions(self) -> Tuple[TransactionRecord, ...]:
        """Return every log entry in insertion order."""
        with self._lock:
            return tuple(self._log)

    def list_stock(self) -> Tuple[Basket, ...]:
        """Return the baskets currently in stock, in insertion order."""
        with self._lock:
            return tuple(self._stock)

    # ========================================================================
    # OPERATIONS (Mutating)
    # ========================================================================

    def receive(self, delivery_price, amount: int, expiry_date: date) -> ReceiveSummary:
        """
        Take in a delivery of identical baskets and log what was paid.

        The sale price of each basket is the unit cost (delivery_price / amount,
        rounded to cents) plus the markup, rounded to cents again.

        Args:
            delivery_price: Total paid for the whole delivery (must be > 0)
            amount: Number of baskets delivered (must be > 0)
            expiry_date: Expiry date of every basket in the delivery. Dates in
                         the past are accepted and reported via already_expired.

        Returns:
            ReceiveSummary describing the intake and its RECEIVE record

        Raises:
            InvalidQuantity: If amount is not a positive integer
            InvalidPrice: If delivery_price is not positive, or the resulting
                          sale price rounds to zero
            ArithmeticFailure: If the unit cost or sale price does not fit in
                               DECIMAL_PRECISION digits
        """
        with self._lock:
            self._check_quantity(amount, "receive")
            try:
                price = to_decimal(delivery_price)
            except ValueError as e:
                raise self._reject(InvalidPrice(str(e))) from None
            if not price.is_finite() or price <= ZERO:
                raise self._reject(InvalidPrice(
                    f"Delivery price must be positive, got {delivery_price}"
                ))

            try:
                unit_cost = divide_money(price, amount)
                final_price = mark_up(unit_cost, self.markup_rate)
            except ArithmeticFailure as e:
                raise self._reject(e)

            if final_price <= ZERO:
                raise self._reject(InvalidPrice(
                    f"Delivery price {price} over {amount} baskets gives a zero sale price"
                ))

            basket = Basket(expiry_date=expiry_date, unit_sale_price=final_price)
            already_expired = basket.is_expired(self.clock.today())

            # Validation passed - apply
            self._stock.extend([basket] * amount)
            record = self._append_record(TransactionKind.RECEIVE, amount, -price)

            if self.verbose:
                print(f"✓ APPLIED: RECEIVE {amount} baskets @ {final_price} "
                      f"(expires {expiry_date.isoformat()}, cash {record.amount})")
            return ReceiveSummary(
                quantity=amount,
                delivery_price=price,
                unit_cost=unit_cost,
                unit_sale_price=final_price,
                expiry_date=expiry_date,
                already_expired=already_expired,
                record=record,
            )

    def sell(self, amount: int) -> SaleSummary:
        """
        Sell the cheapest baskets in stock.

        Baskets are picked by lowest sale price; baskets of equal price are
        picked in the order they were received. Exactly the picked positions
        are removed, so other baskets sharing a price stay in stock.

        Args:
            amount: Number of baskets to sell (must be > 0 and <= stock size)

        Returns:
            SaleSummary with the summed sale value and its SALE record

        Raises:
            InvalidQuantity: If amount is not a positive integer
            InsufficientStock: If amount exceeds the baskets in stock
            ArithmeticFailure: If the sale value does not fit in DECIMAL_PRECISION digits
        """
        with self._lock:
            self._check_quantity(amount, "sell")
            available = len(self._stock)
            if amount > available:
                raise self._reject(InsufficientStock(requested=amount, available=available))

            # sorted() is stable: equal prices keep insertion order
            by_price = sorted(range(available), key=lambda i: self._stock[i].unit_sale_price)
            picked = by_price[:amount]
            picked_set = set(picked)
            try:
                sale_value = sum_money(self._stock[i].unit_sale_price for i in picked)
            except ArithmeticFailure as e:
                raise self._reject(e)
            kept = [basket for i, basket in enumerate(self._stock) if i not in picked_set]

            # Validation passed - apply
            self._stock = kept
            record = self._append_record(TransactionKind.SALE, amount, sale_value)

            if self.verbose:
                print(f"✓ APPLIED: SALE {amount} baskets (cash +{sale_value})")
            return SaleSummary(quantity=amount, sale_value=sale_value, record=record)

    def sweep_expired(self) -> SweepSummary:
        """
        Remove every basket whose expiry date is strictly before today.

        The summed sale price of the removed baskets is logged as a DISCARD
        with a negative amount: value that will never be realized.

        Returns:
            SweepSummary for the removed baskets, or the empty (falsy) summary
            if nothing had expired. The empty case logs nothing.
        """
        with self._lock:
            today = self.clock.today()
            expired: List[Basket] = []
            kept: List[Basket] = []
            for basket in self._stock:
                (expired if basket.is_expired(today) else kept).append(basket)

            if not expired:
                if self.verbose:
                    print("✓ NOTHING TO REMOVE: no expired baskets in stock")
                return SweepSummary.empty()

            try:
                lost_value = sum_money(b.unit_sale_price for b in expired)
            except ArithmeticFailure as e:
                raise self._reject(e)

            self._stock = kept
            record = self._append_record(TransactionKind.DISCARD, len(expired), -lost_value)

            if self.verbose:
                print(f"✓ APPLIED: DISCARD {len(expired)} baskets (cash {record.amount})")
            return SweepSummary(quantity=len(expired), lost_value=lost_value, record=record)

    # ========================================================================
    # INTERNALS
    # ========================================================================

    def _check_quantity(self, amount: int, operation: str) -> None:
        if isinstance(amount, bool) or not isinstance(amount, int):
            raise self._reject(InvalidQuantity(
                f"Cannot {operation}: basket count must be an integer, got {amount!r}"
            ))
        if amount <= 0:
            raise self._reject(InvalidQuantity(
                f"Cannot {operation}: basket count must be positive, got {amount}"
            ))

    def _reject(self, error: WarehouseError) -> WarehouseError:
        """Report a rejection in verbose mode and hand the error back for raising."""
        if self.verbose:
            print(f"✗ REJECTED: {error}")
        return error

    def _append_record(self, kind: TransactionKind, quantity: int, amount: Decimal) -> TransactionRecord:
        record = TransactionRecord(
            timestamp=self.clock.now(),
            kind=kind,
            quantity=quantity,
            amount=amount,
            sequence_number=self._next_sequence,
        )
        self._next_sequence += 1
        self._log.append(record)
        return record

    def __repr__(self) -> str:
        return (f"Warehouse({self.name!r}, {len(self._stock)} baskets, "
                f"{len(self._log)} transactions)")
