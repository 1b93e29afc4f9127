"""
warehouse - Perishable Basket Inventory and Cash Ledger

An in-memory engine for receiving, selling and expiring baskets of perishable
goods, with every money-affecting event recorded in an append-only log.

Usage:
    from datetime import date, datetime
    from decimal import Decimal
    from warehouse import Warehouse, ManualClock

    clock = ManualClock(datetime(2025, 1, 1, 9, 0))
    warehouse = Warehouse(clock=clock, verbose=False)

    warehouse.receive(Decimal("100.00"), 10, date(2025, 1, 31))   # 10 baskets @ 12.00
    warehouse.sell(4)                                             # SALE +48.00
    warehouse.get_cash_balance()                                  # Decimal("-52.00")

    clock.advance_days(31)
    warehouse.sweep_expired()                                     # DISCARD -72.00
"""

# Core types
from .core import (
    Basket,
    TransactionKind,
    TransactionRecord,
    StockSummary,
    ReceiveSummary,
    SaleSummary,
    SweepSummary,
    WarehouseError,
    InvalidQuantity,
    InvalidPrice,
    InsufficientStock,
    ArithmeticFailure,
    round_money,
    divide_money,
    mark_up,
    sum_money,
    to_decimal,
    MARKUP_RATE,
    DECIMAL_PRECISION,
    MONEY_PLACES,
    MONEY_QUANTUM,
    MONEY_ROUNDING,
    DATE_FORMAT,
    TIMESTAMP_FORMAT,
)

# Clocks
from .clock import (
    Clock,
    SystemClock,
    ManualClock,
)

# Engine
from .warehouse import Warehouse

__all__ = [
    # Core
    'Basket', 'TransactionKind', 'TransactionRecord',
    'StockSummary', 'ReceiveSummary', 'SaleSummary', 'SweepSummary',
    'WarehouseError', 'InvalidQuantity', 'InvalidPrice', 'InsufficientStock',
    'ArithmeticFailure',
    'round_money', 'divide_money', 'mark_up', 'sum_money', 'to_decimal',
    'MARKUP_RATE', 'DECIMAL_PRECISION', 'MONEY_PLACES', 'MONEY_QUANTUM', 'MONEY_ROUNDING',
    'DATE_FORMAT', 'TIMESTAMP_FORMAT',
    # Clocks
    'Clock', 'SystemClock', 'ManualClock',
    # Engine
    'Warehouse',
]

__version__ = '1.0.0'
