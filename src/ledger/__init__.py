"""Ledger — переходы ShareAccount и контракты host-окружения.

- Ledger Transition Processor (buy/sell с settle-then-mutate)
- Settlement collaborator контракт и in-memory ledger
- Account store контракт и in-memory store
- Program entrypoint (bytes → store → processor)
"""

from .entrypoint import process_instruction, process_json_instruction
from .processor import (
    LedgerConfig,
    LedgerTransitionProcessor,
    LedgerTransitionResult,
    SettlementReceipt,
    TransitionStatus,
)
from .settlement import InMemorySettlementLedger, SettlementCollaborator
from .store import AccountRecord, AccountStore, InMemoryAccountStore

__all__ = [
    "LedgerConfig",
    "LedgerTransitionProcessor",
    "LedgerTransitionResult",
    "SettlementReceipt",
    "TransitionStatus",
    "SettlementCollaborator",
    "InMemorySettlementLedger",
    "AccountRecord",
    "AccountStore",
    "InMemoryAccountStore",
    "process_instruction",
    "process_json_instruction",
]
