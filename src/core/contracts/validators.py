"""
JSON Contracts — проверка JSON представлений на границе с host

Host, который не говорит 9-byte wire format, присылает инструкции как JSON
объект и получает квитанции settlement как JSON. Обе стороны проверяются
Draft 2020-12 схемами из schema/:

- instruction.json        — входящая инструкция ({"kind", "amount"})
- settlement_receipt.json — исходящая квитанция SETTLED перехода

Нарушение контракта возвращается как список читаемых сообщений
("<path>: <message>"), чтобы вызывающий слой сам решал, какую доменную
ошибку поднять.
"""

import json
from enum import Enum
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, List, Optional

import jsonschema
from jsonschema import Draft202012Validator


class Contract(str, Enum):
    """JSON контракты ledger (имя = файл схемы без расширения)."""

    INSTRUCTION = "instruction"
    SETTLEMENT_RECEIPT = "settlement_receipt"


# =============================================================================
# SCHEMA LOADER
# =============================================================================


class SchemaLoader:
    """Загрузчик схем контрактов с кэшем и meta-validation."""

    def __init__(self, schema_dir: Optional[Path] = None):
        self._schema_dir = schema_dir or Path(__file__).parent / "schema"
        if not self._schema_dir.exists():
            raise RuntimeError(f"Schema directory not found: {self._schema_dir}")
        self._schemas: Dict[str, Dict[str, Any]] = {}

    def load_schema(self, schema_name: str) -> Dict[str, Any]:
        """
        Raises:
            FileNotFoundError: Файл схемы отсутствует
            ValueError: Схема не проходит meta-validation
        """
        if schema_name in self._schemas:
            return self._schemas[schema_name]

        schema_path = self._schema_dir / f"{schema_name}.json"
        if not schema_path.exists():
            raise FileNotFoundError(f"Schema not found: {schema_path}")

        with open(schema_path, "r", encoding="utf-8") as f:
            schema = json.load(f)

        try:
            Draft202012Validator.check_schema(schema)
        except jsonschema.SchemaError as e:
            raise ValueError(f"Invalid JSON Schema in {schema_name}.json: {e}") from e

        self._schemas[schema_name] = schema
        return schema


@lru_cache(maxsize=None)
def _validator(contract: Contract) -> Draft202012Validator:
    return Draft202012Validator(SchemaLoader().load_schema(contract.value))


# =============================================================================
# VALIDATION
# =============================================================================


def contract_errors(contract: Contract, data: Any) -> List[str]:
    """
    Все нарушения контракта в стабильном порядке (по пути в документе).

    Returns:
        Пустой список, если data соответствует схеме
    """
    errors = sorted(_validator(contract).iter_errors(data), key=lambda e: e.json_path)
    return [f"{e.json_path}: {e.message}" for e in errors]


def validate_instruction(data: Any) -> None:
    """
    Raises:
        jsonschema.ValidationError: data не соответствует instruction.json
    """
    _validator(Contract.INSTRUCTION).validate(data)


def validate_settlement_receipt(data: Any) -> None:
    """
    Raises:
        jsonschema.ValidationError: data не соответствует settlement_receipt.json
    """
    _validator(Contract.SETTLEMENT_RECEIPT).validate(data)
