"""
Instruction — запросы BuyShares / SellShares и их wire codec

Одноразовые значения: декодируются на границе программы, обрабатываются
и отбрасываются.

Wire format (Borsh-совместимый enum):
    [0]      variant tag — 0 = BuyShares, 1 = SellShares
    [1..9)   amount      — u64 little-endian

Любая другая длина, неизвестный tag или amount == 0 → MalformedInstruction.

JSON форма ({"kind": "buy_shares", "amount": 10}) проверяется контрактом
instruction.json; нарушение контракта тоже → MalformedInstruction.
"""

import struct
from enum import Enum
from typing import Any, Final, Literal, Union

from pydantic import BaseModel, Field, ValidationError

from src.core.contracts import Contract, contract_errors
from src.core.domain.errors import MalformedInstruction
from src.core.math.numerical_safeguards import U64_MAX

INSTRUCTION_LEN: Final[int] = 9

_WIRE_FORMAT: Final[str] = "<BQ"


class InstructionKind(str, Enum):
    """Вариант инструкции."""

    BUY_SHARES = "buy_shares"
    SELL_SHARES = "sell_shares"


# Variant tag на проводе
_TAG_BY_KIND: Final[dict] = {
    InstructionKind.BUY_SHARES: 0,
    InstructionKind.SELL_SHARES: 1,
}


class BuyShares(BaseModel):
    """Купить amount shares."""

    kind: Literal[InstructionKind.BUY_SHARES] = InstructionKind.BUY_SHARES
    amount: int = Field(..., gt=0, le=U64_MAX, description="Количество shares")

    model_config = {"frozen": True}


class SellShares(BaseModel):
    """Продать amount shares."""

    kind: Literal[InstructionKind.SELL_SHARES] = InstructionKind.SELL_SHARES
    amount: int = Field(..., gt=0, le=U64_MAX, description="Количество shares")

    model_config = {"frozen": True}


Instruction = Union[BuyShares, SellShares]

_MODEL_BY_TAG: Final[dict] = {0: BuyShares, 1: SellShares}


def encode_instruction(instruction: Instruction) -> bytes:
    """Сериализация инструкции в 9-byte wire format."""
    return struct.pack(_WIRE_FORMAT, _TAG_BY_KIND[instruction.kind], instruction.amount)


def decode_instruction(data: bytes) -> Instruction:
    """
    Десериализация инструкции из wire format.

    Args:
        data: Байты инструкции

    Returns:
        BuyShares или SellShares

    Raises:
        MalformedInstruction: Неверная длина, неизвестный tag или amount == 0
    """
    if len(data) != INSTRUCTION_LEN:
        raise MalformedInstruction(
            f"instruction must be {INSTRUCTION_LEN} bytes, got {len(data)}"
        )

    tag, amount = struct.unpack(_WIRE_FORMAT, data)
    model = _MODEL_BY_TAG.get(tag)
    if model is None:
        raise MalformedInstruction(f"unknown instruction tag {tag}")

    try:
        return model(amount=amount)
    except ValidationError as e:
        raise MalformedInstruction(f"invalid {model.__name__} amount {amount}") from e


def instruction_from_contract(data: Any) -> Instruction:
    """
    Инструкция из JSON объекта host.

    Raises:
        MalformedInstruction: data не соответствует контракту instruction.json
    """
    errors = contract_errors(Contract.INSTRUCTION, data)
    if errors:
        raise MalformedInstruction("; ".join(errors))

    if data["kind"] == InstructionKind.BUY_SHARES.value:
        return BuyShares(amount=data["amount"])
    return SellShares(amount=data["amount"])
