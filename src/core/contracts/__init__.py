"""
Contract Validation Module

JSON контракты share ledger: входящие инструкции и исходящие квитанции.
"""

from .validators import (
    Contract,
    SchemaLoader,
    contract_errors,
    validate_instruction,
    validate_settlement_receipt,
)

__all__ = [
    # Classes
    "Contract",
    "SchemaLoader",
    # Functions
    "contract_errors",
    "validate_instruction",
    "validate_settlement_receipt",
]
