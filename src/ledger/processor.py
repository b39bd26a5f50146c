"""Ledger Transition Processor — buy/sell переходы ShareAccount.

Последовательность на одну инструкцию:
    controller check → price → validate → settle → mutate

Состояния перехода (на аккаунт, на инструкцию):
- PENDING: идут проверки preconditions
- SETTLED: settlement выполнен, mutation применена
- REJECTED: ни mutation, ни settlement side effect

Partial settlement отсутствует: settle-then-mutate, никогда наоборот.
Входной ShareAccount immutable, результат — новый экземпляр.

Известные особенности ценообразования (сохранены как есть):
- Buy path оценивает price по balance самого покупателя (а не по
  глобальному числу holders).
- Buy применяет dual-phase adjustment, sell использует только base price.
"""

import logging
from dataclasses import dataclass
from enum import Enum

from pydantic import BaseModel, Field

from src.core.contracts import validate_settlement_receipt
from src.core.domain.errors import (
    BalanceOverflow,
    IncorrectOwner,
    InsufficientFunds,
    LedgerError,
    SettlementFailure,
)
from src.core.domain.instruction import Instruction, InstructionKind
from src.core.domain.market_signal import MarketSignal
from src.core.domain.share_account import Pubkey, ShareAccount, is_pubkey
from src.core.math.numerical_safeguards import U64_MAX, truncate_to_units
from src.core.math.pricing import base_price_from_holders, dual_phase_pricing
from src.ledger.settlement import SettlementCollaborator

logger = logging.getLogger(__name__)


class TransitionStatus(str, Enum):
    """Состояние перехода аккаунта в рамках одной инструкции."""

    PENDING = "PENDING"
    SETTLED = "SETTLED"
    REJECTED = "REJECTED"


@dataclass(frozen=True)
class LedgerConfig:
    """Конфигурация processor.

    program_id — ожидаемый controller share аккаунтов (host-level).
    vault — program-controlled party, принимающая оплату buy и
    выплачивающая proceeds sell.
    """

    program_id: Pubkey
    vault: Pubkey

    def __post_init__(self):
        for name in ("program_id", "vault"):
            value = getattr(self, name)
            if not is_pubkey(value):
                raise ValueError(f"{name} must be a 64-char lowercase hex key, got {value!r}")


class SettlementReceipt(BaseModel):
    """Квитанция успешного перехода."""

    kind: InstructionKind = Field(..., description="Вариант инструкции")
    amount: int = Field(..., gt=0, le=U64_MAX, description="Количество shares")
    price_per_share: float = Field(..., ge=0, description="Цена одной share")
    settlement_amount: int = Field(
        ..., ge=0, le=U64_MAX, description="Сумма transfer (целые units)"
    )
    source: Pubkey = Field(..., description="Отправитель средств")
    destination: Pubkey = Field(..., description="Получатель средств")
    balance_before: int = Field(..., ge=0, le=U64_MAX)
    balance_after: int = Field(..., ge=0, le=U64_MAX)

    model_config = {"frozen": True}

    def to_contract(self) -> dict:
        """JSON-представление, проверенное контрактом settlement_receipt."""
        data = self.model_dump(mode="json")
        validate_settlement_receipt(data)
        return data


@dataclass(frozen=True)
class LedgerTransitionResult:
    """Результат перехода: новый аккаунт и квитанция settlement."""

    account: ShareAccount
    receipt: SettlementReceipt
    status: TransitionStatus

    # Для отладки
    details: str


class LedgerTransitionProcessor:
    """Processor buy/sell инструкций против ShareAccount.

    Stateless между вызовами: не держит locks, не делает retries.
    Сериализация вызовов для одного аккаунта — ответственность host.
    """

    def __init__(self, config: LedgerConfig):
        """
        Args:
            config: program authority и vault
        """
        self.config = config

    def apply(
        self,
        account: ShareAccount,
        instruction: Instruction,
        signal: MarketSignal,
        settlement: SettlementCollaborator,
        funding_account: Pubkey,
        controller: Pubkey,
    ) -> LedgerTransitionResult:
        """Применение инструкции к аккаунту.

        Args:
            account: текущий share аккаунт
            instruction: BuyShares или SellShares
            signal: сигналы рыночной активности (buy path)
            settlement: внешний settlement ledger
            funding_account: party покупателя/продавца в settlement ledger
            controller: host-level controller аккаунта (не account.owner)

        Returns:
            LedgerTransitionResult со статусом SETTLED

        Raises:
            IncorrectOwner: controller аккаунта != program_id
            InsufficientFunds: нехватка средств (buy) или shares (sell)
            BalanceOverflow: balance + amount > U64_MAX (buy)
            SettlementFailure: transfer не выполнен
            ValueError: funding_account не hex key (до любых side effects)
        """
        if not is_pubkey(funding_account):
            raise ValueError(f"funding_account must be a 64-char lowercase hex key, got {funding_account!r}")

        try:
            self._check_controller(controller)

            if instruction.kind is InstructionKind.BUY_SHARES:
                result = self._buy(account, instruction.amount, signal, settlement, funding_account)
            else:
                result = self._sell(account, instruction.amount, settlement, funding_account)
        except LedgerError as e:
            logger.warning(
                "%s %s amount=%d balance=%d: code=%d %s",
                TransitionStatus.REJECTED.value,
                instruction.kind.value,
                instruction.amount,
                account.balance,
                e.code.value,
                type(e).__name__,
            )
            raise

        logger.info(
            "%s %s amount=%d settlement=%d balance %d -> %d",
            result.status.value,
            instruction.kind.value,
            instruction.amount,
            result.receipt.settlement_amount,
            result.receipt.balance_before,
            result.receipt.balance_after,
        )
        return result

    def _check_controller(self, controller: Pubkey) -> None:
        if controller != self.config.program_id:
            raise IncorrectOwner(
                f"account controller {controller} does not match program {self.config.program_id}"
            )

    def _buy(
        self,
        account: ShareAccount,
        amount: int,
        signal: MarketSignal,
        settlement: SettlementCollaborator,
        funding_account: Pubkey,
    ) -> LedgerTransitionResult:
        """Buy: dual-phase price по balance покупателя."""
        price_per_share = dual_phase_pricing(
            account.balance,
            signal.current_volume,
            signal.average_volume,
            signal.time_since_last_trade,
        )
        total_cost = truncate_to_units(price_per_share * amount)

        new_balance = account.balance + amount
        if new_balance > U64_MAX:
            raise BalanceOverflow(f"balance {account.balance} + {amount} exceeds u64")

        available = self._available_funds(settlement, funding_account)
        if available < total_cost:
            raise InsufficientFunds(f"available {available} units, cost {total_cost}")

        self._transfer(settlement, funding_account, self.config.vault, total_cost)

        return self._settled(
            account,
            kind=InstructionKind.BUY_SHARES,
            amount=amount,
            price_per_share=price_per_share,
            settlement_amount=total_cost,
            source=funding_account,
            destination=self.config.vault,
            new_balance=new_balance,
        )

    def _sell(
        self,
        account: ShareAccount,
        amount: int,
        settlement: SettlementCollaborator,
        funding_account: Pubkey,
    ) -> LedgerTransitionResult:
        """Sell: только base price, без dual-phase adjustment."""
        if amount > account.balance:
            raise InsufficientFunds(f"balance {account.balance} shares, sell {amount}")

        price_per_share = base_price_from_holders(account.balance)
        total_proceeds = truncate_to_units(price_per_share * amount)

        self._transfer(settlement, self.config.vault, funding_account, total_proceeds)

        return self._settled(
            account,
            kind=InstructionKind.SELL_SHARES,
            amount=amount,
            price_per_share=price_per_share,
            settlement_amount=total_proceeds,
            source=self.config.vault,
            destination=funding_account,
            new_balance=account.balance - amount,
        )

    def _available_funds(self, settlement: SettlementCollaborator, party: Pubkey) -> int:
        try:
            return settlement.balance_of(party)
        except SettlementFailure:
            raise
        except Exception as e:
            raise SettlementFailure(f"balance query for {party} failed: {e}") from e

    def _transfer(
        self,
        settlement: SettlementCollaborator,
        source: Pubkey,
        destination: Pubkey,
        amount: int,
    ) -> None:
        # Ошибка transfer терминальна для инструкции: без retry
        try:
            settlement.transfer(source, destination, amount)
        except SettlementFailure:
            raise
        except Exception as e:
            raise SettlementFailure(f"transfer of {amount} units failed: {e}") from e

    def _settled(
        self,
        account: ShareAccount,
        kind: InstructionKind,
        amount: int,
        price_per_share: float,
        settlement_amount: int,
        source: Pubkey,
        destination: Pubkey,
        new_balance: int,
    ) -> LedgerTransitionResult:
        """Создание результата после успешного settlement."""
        receipt = SettlementReceipt(
            kind=kind,
            amount=amount,
            price_per_share=price_per_share,
            settlement_amount=settlement_amount,
            source=source,
            destination=destination,
            balance_before=account.balance,
            balance_after=new_balance,
        )
        return LedgerTransitionResult(
            account=account.with_balance(new_balance),
            receipt=receipt,
            status=TransitionStatus.SETTLED,
            details=f"{kind.value} {amount} @ {price_per_share:.8f} = {settlement_amount} units",
        )
