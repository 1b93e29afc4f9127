"""
Conformance Test Suite

This suite defines the NORMATIVE behavior of the warehouse engine.

The tests are organized by invariant:
1. test_atomicity.py - Rejected operations leave no trace
2. test_conservation.py - Cash equals the rounded sum of the log
3. test_idempotency.py - Repeated sweeps without time passing are no-ops
4. test_selection.py - Sales take exactly the cheapest baskets

These tests use hypothesis for property-based testing.
"""
