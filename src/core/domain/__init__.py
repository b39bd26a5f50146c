"""
Domain models and value objects.

Contains fundamental share-ledger entities: ShareAccount, MarketSignal,
Instruction variants and the ledger error taxonomy.
"""

from src.core.domain.errors import (
    BalanceOverflow,
    ErrorCode,
    IncorrectOwner,
    InsufficientFunds,
    LedgerError,
    MalformedInstruction,
    SettlementFailure,
)
from src.core.domain.instruction import (
    INSTRUCTION_LEN,
    BuyShares,
    Instruction,
    InstructionKind,
    SellShares,
    decode_instruction,
    encode_instruction,
    instruction_from_contract,
)
from src.core.domain.market_signal import (
    DEFAULT_AVERAGE_VOLUME,
    DEFAULT_CURRENT_VOLUME,
    DEFAULT_TIME_SINCE_LAST_TRADE,
    MarketSignal,
)
from src.core.domain.share_account import (
    PUBKEY_BYTES,
    PUBKEY_PATTERN,
    SHARE_ACCOUNT_LEN,
    AccountDataError,
    Pubkey,
    ShareAccount,
    is_pubkey,
)

__all__ = [
    # Errors
    "ErrorCode",
    "LedgerError",
    "IncorrectOwner",
    "InsufficientFunds",
    "MalformedInstruction",
    "SettlementFailure",
    "BalanceOverflow",
    # Instruction
    "INSTRUCTION_LEN",
    "Instruction",
    "InstructionKind",
    "BuyShares",
    "SellShares",
    "encode_instruction",
    "decode_instruction",
    "instruction_from_contract",
    # Market signal
    "DEFAULT_CURRENT_VOLUME",
    "DEFAULT_AVERAGE_VOLUME",
    "DEFAULT_TIME_SINCE_LAST_TRADE",
    "MarketSignal",
    # Share account
    "PUBKEY_BYTES",
    "PUBKEY_PATTERN",
    "SHARE_ACCOUNT_LEN",
    "AccountDataError",
    "Pubkey",
    "ShareAccount",
    "is_pubkey",
]
