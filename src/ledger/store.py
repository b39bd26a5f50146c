"""Account Store — хранение ShareAccount на стороне host.

Store выдаёт запись аккаунта по host-level ключу и сохраняет ShareAccount
обратно после успешной mutation.

Запись несёт два разных ключа:
- controller — программа, которой host доверил аккаунт (host metadata,
  вне данных аккаунта); processor сверяет его с program_id
- account.owner — identity holder'а shares (внутри 40-byte данных)

InMemoryAccountStore хранит данные в packed 40-byte layout, как их хранит
host, а controller отдельно от данных.
"""

from dataclasses import dataclass
from typing import Dict, Protocol

from src.core.domain.share_account import Pubkey, ShareAccount


@dataclass(frozen=True)
class AccountRecord:
    """Аккаунт, как его видит программа: controller + распакованные данные."""

    controller: Pubkey
    account: ShareAccount


class AccountStore(Protocol):
    """Контракт хранилища аккаунтов."""

    def load(self, key: str) -> AccountRecord:
        """Загрузка записи. KeyError если аккаунта нет."""
        ...

    def save(self, key: str, account: ShareAccount) -> None:
        """Перезапись данных аккаунта. Controller не меняется."""
        ...


class InMemoryAccountStore:
    """Хранилище packed ShareAccount записей в памяти."""

    def __init__(self):
        self._records: Dict[str, bytes] = {}
        self._controllers: Dict[str, Pubkey] = {}

    def provision(self, key: str, owner: Pubkey, controller: Pubkey) -> AccountRecord:
        """Создание zero-balance аккаунта holder'а owner под программой controller."""
        account = ShareAccount(owner=owner, balance=0)
        self._controllers[key] = controller
        self._records[key] = account.pack()
        return AccountRecord(controller=controller, account=account)

    def load(self, key: str) -> AccountRecord:
        try:
            record = self._records[key]
        except KeyError:
            raise KeyError(f"account not found: {key}") from None
        return AccountRecord(controller=self._controllers[key], account=ShareAccount.unpack(record))

    def save(self, key: str, account: ShareAccount) -> None:
        if key not in self._records:
            raise KeyError(f"account not found: {key}")
        self._records[key] = account.pack()

    def raw(self, key: str) -> bytes:
        """Packed запись аккаунта (как её видит host)."""
        return self._records[key]

    def __contains__(self, key: str) -> bool:
        return key in self._records
