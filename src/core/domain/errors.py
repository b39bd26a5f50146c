"""
Ledger Errors — таксономия ошибок share ledger

Каждый вид ошибки имеет стабильный числовой код (ErrorCode), назначенный
явно. Коды не зависят от порядка объявления классов: добавление нового
вида ошибки не перенумеровывает существующие.

Все ошибки — instruction-level rejections: на момент raise ни mutation
balance, ни settlement не применены (кроме SettlementFailure, где сам
transfer не состоялся).
"""

from enum import IntEnum


class ErrorCode(IntEnum):
    """Стабильные числовые коды ошибок (host-visible)."""

    INCORRECT_OWNER = 0
    INSUFFICIENT_FUNDS = 1
    MALFORMED_INSTRUCTION = 2
    SETTLEMENT_FAILURE = 3
    BALANCE_OVERFLOW = 4


class LedgerError(Exception):
    """Базовая ошибка share ledger.

    Абстрактная: raise только конкретных подклассов, у которых задан code.
    """

    code: ErrorCode

    def __init__(self, message: str = ""):
        if not hasattr(self, "code"):
            raise TypeError(f"{type(self).__name__} has no error code, raise a concrete subclass")
        super().__init__(message or self.__class__.__name__)
        self.message = message

    def __str__(self) -> str:
        return f"[{self.code.value}] {self.args[0]}"


class IncorrectOwner(LedgerError):
    """Owner аккаунта не совпадает с ожидаемым program authority."""

    code = ErrorCode.INCORRECT_OWNER


class InsufficientFunds(LedgerError):
    """
    Недостаточно средств (buy) или shares (sell).

    Raise до любого settlement вызова.
    """

    code = ErrorCode.INSUFFICIENT_FUNDS


class MalformedInstruction(LedgerError):
    """Байты инструкции не декодируются в валидный вариант."""

    code = ErrorCode.MALFORMED_INSTRUCTION


class SettlementFailure(LedgerError):
    """Внешний settlement collaborator не выполнил transfer."""

    code = ErrorCode.SETTLEMENT_FAILURE


class BalanceOverflow(LedgerError):
    """balance + amount выходит за пределы u64."""

    code = ErrorCode.BALANCE_OVERFLOW
