"""
Core domain models, pricing math, contracts and invariants.

This module contains the foundational building blocks of the share ledger
that are independent of the host environment (settlement ledger, account
storage, etc.).
"""
