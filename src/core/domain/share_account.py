"""
ShareAccount — Модель holding shares одного identity

Immutable Pydantic модель. Любое изменение balance создаёт новый экземпляр
(with_balance), исходный аккаунт никогда не мутируется: это гарантирует
отсутствие partial state при rejection.

Бинарный layout (40 bytes):
    [0..32)   owner    — 32-byte key
    [32..40)  balance  — u64 little-endian
"""

import re
import struct
from typing import Annotated, Final

from pydantic import BaseModel, Field

from src.core.math.numerical_safeguards import U64_MAX

# =============================================================================
# KEYS
# =============================================================================

PUBKEY_BYTES: Final[int] = 32

# 32-byte ключ в hex (lowercase, 64 символа)
PUBKEY_PATTERN: Final[str] = r"^[0-9a-f]{64}$"

Pubkey = Annotated[str, Field(pattern=PUBKEY_PATTERN)]

SHARE_ACCOUNT_LEN: Final[int] = PUBKEY_BYTES + 8

_BALANCE_FORMAT: Final[str] = "<Q"


def is_pubkey(value: object) -> bool:
    """Проверка формата ключа вне pydantic моделей (dataclass configs)."""
    return isinstance(value, str) and re.fullmatch(PUBKEY_PATTERN, value) is not None


class AccountDataError(ValueError):
    """Данные аккаунта не соответствуют layout ShareAccount."""


class ShareAccount(BaseModel):
    """
    Holding shares одного identity.

    balance всегда в [0, U64_MAX]: sell не может уйти ниже нуля.
    """

    owner: Pubkey = Field(..., description="Identity holder'а shares (hex key)")
    balance: int = Field(default=0, ge=0, le=U64_MAX, description="Количество shares")

    model_config = {"frozen": True}

    def with_balance(self, balance: int) -> "ShareAccount":
        """Новый экземпляр с тем же owner и новым balance (с валидацией)."""
        return ShareAccount(owner=self.owner, balance=balance)

    def pack(self) -> bytes:
        """Сериализация в 40-byte layout."""
        return bytes.fromhex(self.owner) + struct.pack(_BALANCE_FORMAT, self.balance)

    @classmethod
    def unpack(cls, data: bytes) -> "ShareAccount":
        """
        Десериализация из 40-byte layout.

        Raises:
            AccountDataError: Если длина данных != 40
        """
        if len(data) != SHARE_ACCOUNT_LEN:
            raise AccountDataError(
                f"ShareAccount data must be {SHARE_ACCOUNT_LEN} bytes, got {len(data)}"
            )
        owner = data[:PUBKEY_BYTES].hex()
        (balance,) = struct.unpack(_BALANCE_FORMAT, data[PUBKEY_BYTES:])
        return cls(owner=owner, balance=balance)
