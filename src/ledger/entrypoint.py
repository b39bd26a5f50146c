"""Program entrypoint — инструкция → store → processor → store.

Порядок:
1. Декодирование инструкции (MalformedInstruction до доступа к аккаунту)
2. Загрузка записи аккаунта (controller + ShareAccount) из store
3. Processor.apply
4. Сохранение аккаунта только при SETTLED

Инструкция приходит либо в 9-byte wire format (process_instruction), либо
JSON объектом по контракту instruction.json (process_json_instruction).
"""

from typing import Any, Dict, Optional

from src.core.domain.instruction import (
    Instruction,
    decode_instruction,
    instruction_from_contract,
)
from src.core.domain.market_signal import MarketSignal
from src.core.domain.share_account import Pubkey
from src.ledger.processor import LedgerTransitionProcessor, LedgerTransitionResult
from src.ledger.settlement import SettlementCollaborator
from src.ledger.store import AccountStore


def process_instruction(
    processor: LedgerTransitionProcessor,
    store: AccountStore,
    account_key: str,
    instruction_data: bytes,
    settlement: SettlementCollaborator,
    funding_account: Pubkey,
    signal: Optional[MarketSignal] = None,
) -> LedgerTransitionResult:
    """Обработка одной инструкции от границы программы.

    Args:
        processor: ledger transition processor
        store: хранилище аккаунтов
        account_key: host-level ключ share аккаунта
        instruction_data: байты инструкции (9-byte wire format)
        settlement: внешний settlement ledger
        funding_account: party покупателя/продавца
        signal: сигналы рынка; None → reference defaults

    Returns:
        LedgerTransitionResult

    Raises:
        MalformedInstruction: байты не декодируются
        KeyError: аккаунт отсутствует в store
        LedgerError: rejection от processor (store не изменяется)
    """
    instruction = decode_instruction(instruction_data)
    return _execute(processor, store, account_key, instruction, settlement, funding_account, signal)


def process_json_instruction(
    processor: LedgerTransitionProcessor,
    store: AccountStore,
    account_key: str,
    payload: Dict[str, Any],
    settlement: SettlementCollaborator,
    funding_account: Pubkey,
    signal: Optional[MarketSignal] = None,
) -> LedgerTransitionResult:
    """То же, что process_instruction, для JSON инструкции.

    Raises:
        MalformedInstruction: payload нарушает контракт instruction.json
    """
    instruction = instruction_from_contract(payload)
    return _execute(processor, store, account_key, instruction, settlement, funding_account, signal)


def _execute(
    processor: LedgerTransitionProcessor,
    store: AccountStore,
    account_key: str,
    instruction: Instruction,
    settlement: SettlementCollaborator,
    funding_account: Pubkey,
    signal: Optional[MarketSignal],
) -> LedgerTransitionResult:
    record = store.load(account_key)

    result = processor.apply(
        record.account,
        instruction,
        signal if signal is not None else MarketSignal(),
        settlement,
        funding_account,
        record.controller,
    )

    store.save(account_key, result.account)
    return result
