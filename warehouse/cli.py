"""
cli.py - Interactive console front end for the warehouse engine

A thin menu loop: it parses and re-prompts raw input, calls into Warehouse,
and prints results or error messages. It holds no state of its own.

    python -m warehouse

Input conventions:
    - Money accepts "," or "." as decimal separator ("100,00" or "100.00")
    - Dates are DD/MM/YYYY
"""

from __future__ import annotations
import re
from datetime import date, datetime
from decimal import Decimal
from typing import Callable, Iterable, List

from .core import (
    DATE_FORMAT, TIMESTAMP_FORMAT, ZERO,
    TransactionRecord, WarehouseError,
    to_decimal, round_money,
)
from .warehouse import Warehouse


InputFn = Callable[[str], str]
OutputFn = Callable[[str], None]

_DATE_PATTERN = re.compile(r"^\d{2}/\d{2}/\d{4}$")

MENU = """
Select an option:
1 - Check basket stock
2 - Check cash
3 - Receive baskets (new delivery)
4 - Sell baskets
5 - Remove expired baskets
6 - Show transaction log
7 - Exit"""

SEPARATOR = "-" * 42


# ============================================================================
# PARSING
# ============================================================================

def parse_decimal(text: str) -> Decimal:
    """
    Parse a money amount typed at the console.

    A lone "," is the decimal separator. When both "," and "." appear, the one
    that comes last is the decimal separator and the other groups thousands.

    Raises:
        ValueError: If the text is not a finite number
    """
    cleaned = text.strip().replace(" ", "")
    if not cleaned:
        raise ValueError("empty input")
    if "," in cleaned and "." in cleaned:
        if cleaned.rfind(",") > cleaned.rfind("."):
            cleaned = cleaned.replace(".", "").replace(",", ".")
        else:
            cleaned = cleaned.replace(",", "")
    else:
        cleaned = cleaned.replace(",", ".")
    value = to_decimal(cleaned)
    if not value.is_finite():
        raise ValueError(f"not a finite number: {text!r}")
    return value


def parse_date(text: str) -> date:
    """
    Parse a DD/MM/YYYY date.

    Raises:
        ValueError: If the text is not a valid date in that exact format
    """
    cleaned = text.strip()
    if not _DATE_PATTERN.match(cleaned):
        raise ValueError(f"expected DD/MM/YYYY, got {text!r}")
    return datetime.strptime(cleaned, DATE_FORMAT).date()


def parse_positive_int(text: str) -> int:
    """Parse a strictly positive whole number. Raises ValueError otherwise."""
    value = int(text.strip())
    if value <= 0:
        raise ValueError(f"expected a positive number, got {value}")
    return value


# ============================================================================
# FORMATTING
# ============================================================================

def format_money(value: Decimal) -> str:
    return f"{round_money(value)}"


def format_record(record: TransactionRecord) -> str:
    """Render a log entry as "[DD/MM/YYYY HH:MM:SS] - KIND: N baskets, amount: X"."""
    return (
        f"[{record.timestamp.strftime(TIMESTAMP_FORMAT)}] - {record.kind.value}: "
        f"{record.quantity} baskets, amount: {format_money(record.amount)}"
    )


def sorted_for_display(records: Iterable[TransactionRecord]) -> List[TransactionRecord]:
    """Most recent first; records with the same timestamp fall back to log order."""
    return sorted(records, key=lambda r: (r.timestamp, r.sequence_number), reverse=True)


# ============================================================================
# PROMPTS
# ============================================================================

def _ask_money(prompt: str, input_fn: InputFn, output_fn: OutputFn) -> Decimal:
    while True:
        try:
            value = parse_decimal(input_fn(prompt))
        except ValueError:
            output_fn("ERROR: Invalid input. Please type a valid number (e.g. 100,00).")
            continue
        if value < ZERO:
            output_fn("ERROR: The value cannot be negative.")
            continue
        return value


def _ask_positive_int(prompt: str, input_fn: InputFn, output_fn: OutputFn) -> int:
    while True:
        try:
            return parse_positive_int(input_fn(prompt))
        except ValueError:
            output_fn("ERROR: Please type a positive whole number.")


def _ask_date(prompt: str, today: date, input_fn: InputFn, output_fn: OutputFn) -> date:
    while True:
        try:
            value = parse_date(input_fn(f"{prompt} (format DD/MM/YYYY): "))
        except ValueError:
            output_fn("ERROR: Invalid date format. Use DD/MM/YYYY (e.g. 25/12/2025).")
            continue
        if value < today:
            output_fn("WARNING: The expiry date is in the past. Make sure it is correct.")
        return value


# ============================================================================
# MENU ACTIONS
# ============================================================================

def _check_stock(warehouse: Warehouse, input_fn: InputFn, output_fn: OutputFn) -> None:
    total, expired = warehouse.check_stock()
    output_fn(f"There are {total} baskets in stock. Of those, {expired} are past their expiry date.")


def _check_cash(warehouse: Warehouse, input_fn: InputFn, output_fn: OutputFn) -> None:
    output_fn(f"Cash is currently {format_money(warehouse.get_cash_balance())}.")


def _receive(warehouse: Warehouse, input_fn: InputFn, output_fn: OutputFn) -> None:
    output_fn("\n--- RECEIVE BASKETS ---")
    price = _ask_money("Total delivery cost: ", input_fn, output_fn)
    amount = _ask_positive_int("Number of baskets in the delivery: ", input_fn, output_fn)
    expiry = _ask_date("Expiry date", warehouse.clock.today(), input_fn, output_fn)
    summary = warehouse.receive(price, amount, expiry)
    output_fn(
        f"SUCCESS: {summary.quantity} baskets added to stock at a sale price of "
        f"{format_money(summary.unit_sale_price)} (expiry: {expiry.strftime(DATE_FORMAT)})."
    )


def _sell(warehouse: Warehouse, input_fn: InputFn, output_fn: OutputFn) -> None:
    output_fn("\n--- SELL BASKETS ---")
    amount = _ask_positive_int("How many baskets to sell: ", input_fn, output_fn)
    summary = warehouse.sell(amount)
    output_fn(
        f"SUCCESS: Sold {summary.quantity} baskets. "
        f"Total sale value: {format_money(summary.sale_value)}."
    )


def _sweep(warehouse: Warehouse, input_fn: InputFn, output_fn: OutputFn) -> None:
    summary = warehouse.sweep_expired()
    if not summary:
        output_fn("There are no expired baskets in stock.")
        return
    output_fn(
        f"NOTICE: {summary.quantity} expired baskets were discarded. "
        f"Unrealized sale value lost: {format_money(summary.lost_value)}."
    )


def _show_log(warehouse: Warehouse, input_fn: InputFn, output_fn: OutputFn) -> None:
    output_fn("\n--- TRANSACTION LOG ---")
    records = warehouse.list_transactions()
    if not records:
        output_fn("No transactions recorded yet.")
        return
    for record in sorted_for_display(records):
        output_fn(format_record(record))
    output_fn(f"{len(records)} transactions recorded in total.")


# every action takes (warehouse, input_fn, output_fn), used or not
ACTIONS = {
    1: _check_stock,
    2: _check_cash,
    3: _receive,
    4: _sell,
    5: _sweep,
    6: _show_log,
}

EXIT_OPTION = 7


def run(warehouse: Warehouse, input_fn: InputFn = input, output_fn: OutputFn = print) -> None:
    """
    Run the menu loop until the user picks Exit or input runs out.

    Engine rejections (WarehouseError) are printed and the loop continues.
    """
    output_fn("=" * 42)
    output_fn("       Welcome to the Basket Warehouse")
    output_fn("         (with transaction log)")
    output_fn("=" * 42)

    while True:
        output_fn(MENU)
        try:
            raw = input_fn(">> ")
        except EOFError:
            return
        try:
            option = int(raw.strip())
        except ValueError:
            output_fn("ERROR: Invalid input. Please type only the option number.")
            output_fn(SEPARATOR)
            continue

        if option == EXIT_OPTION:
            output_fn("Thank you for using the system. Exiting...")
            return
        action = ACTIONS.get(option)
        if action is None:
            output_fn(f"Invalid option. Please choose between 1 and {EXIT_OPTION}.")
        else:
            try:
                action(warehouse, input_fn, output_fn)
            except WarehouseError as e:
                output_fn(f"ERROR: {e}")
            except EOFError:
                return
        output_fn(SEPARATOR)
