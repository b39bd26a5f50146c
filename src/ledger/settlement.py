"""Settlement — контракт внешнего settlement collaborator.

Processor не перемещает средства сам: он запрашивает доступные средства
плательщика и поручает transfer внешнему ledger. Transfer может упасть
независимо от проверок processor (frozen account, нехватка средств и т.п.).

InMemorySettlementLedger — reference реализация на dict для host-окружений
без реального ledger и для тестов.
"""

import logging
from typing import Dict, Optional, Protocol, Set

from src.core.domain.errors import SettlementFailure

logger = logging.getLogger(__name__)


class SettlementCollaborator(Protocol):
    """Контракт внешнего settlement ledger."""

    def balance_of(self, party: str) -> int:
        """Доступные средства party (целые settlement units)."""
        ...

    def transfer(self, source: str, destination: str, amount: int) -> None:
        """Перемещение amount от source к destination. Может raise."""
        ...


class InMemorySettlementLedger:
    """Settlement ledger в памяти.

    Parties адресуются теми же hex ключами, что и аккаунты. Неизвестная
    party имеет нулевой баланс.
    """

    def __init__(self, balances: Optional[Dict[str, int]] = None):
        """
        Args:
            balances: начальные балансы parties
        """
        self._balances: Dict[str, int] = dict(balances or {})
        self._frozen: Set[str] = set()

    def deposit(self, party: str, amount: int) -> None:
        """Зачисление средств party (host-level provisioning)."""
        if amount < 0:
            raise ValueError(f"deposit amount cannot be negative: {amount}")
        self._balances[party] = self._balances.get(party, 0) + amount

    def freeze(self, party: str) -> None:
        """Заморозка party: любой transfer с её участием падает."""
        self._frozen.add(party)

    def thaw(self, party: str) -> None:
        self._frozen.discard(party)

    def balance_of(self, party: str) -> int:
        return self._balances.get(party, 0)

    def transfer(self, source: str, destination: str, amount: int) -> None:
        """Перемещение средств.

        Raises:
            SettlementFailure: отрицательный amount, frozen party или
                недостаточно средств у source
        """
        if amount < 0:
            raise SettlementFailure(f"transfer amount cannot be negative: {amount}")

        frozen = {source, destination} & self._frozen
        if frozen:
            raise SettlementFailure(f"party frozen: {sorted(frozen)[0]}")

        available = self.balance_of(source)
        if available < amount:
            raise SettlementFailure(
                f"source has {available} units, transfer requires {amount}"
            )

        if amount == 0:
            return

        self._balances[source] = available - amount
        self._balances[destination] = self.balance_of(destination) + amount
        logger.debug("Transferred %d units %s -> %s", amount, source, destination)
