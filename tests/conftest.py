"""
conftest.py - Shared pytest fixtures for warehouse tests

Provides common fixtures used across unit, conformance and functional tests:
- A manual clock pinned to a known instant
- Empty and stocked warehouses driven by that clock
"""

import pytest
from datetime import date, datetime, timedelta
from decimal import Decimal

from warehouse import Warehouse, ManualClock


# =============================================================================
# CONSTANTS
# =============================================================================

START = datetime(2025, 1, 15, 9, 30)
TODAY = START.date()


# =============================================================================
# BASIC FIXTURES
# =============================================================================

@pytest.fixture
def clock():
    """Manual clock at 2025-01-15 09:30."""
    return ManualClock(START)


@pytest.fixture
def warehouse(clock):
    """Empty, quiet warehouse on the manual clock."""
    return Warehouse("test", clock=clock, verbose=False)


@pytest.fixture
def stocked_warehouse(warehouse):
    """
    Warehouse with three deliveries:
    - 10 baskets @ 12.00, expiring in 30 days
    - 3 baskets @ 6.00, expiring in 10 days
    - 2 baskets @ 18.00, expired yesterday
    """
    warehouse.receive(Decimal("100.00"), 10, TODAY + timedelta(days=30))
    warehouse.receive(Decimal("15.00"), 3, TODAY + timedelta(days=10))
    warehouse.receive(Decimal("30.00"), 2, TODAY - timedelta(days=1))
    return warehouse
