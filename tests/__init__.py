"""
Test suite for the share ledger

Contains:
- tests/unit/          : Unit tests for pricing, domain models, contracts and ledger transitions
"""
