"""
JSON Schema Contract Validators

Валидация результатов калькуляторов, переведённых в JSON-совместимый вид
(to_payload), против формальных JSON Schema контрактов.

Схемы (econcurves/core/contracts/schema/):
- market_result.json
- monopoly_result.json
- firm_result.json
- market_firm_result.json
- elasticity_result.json
- iso_benefit_result.json
"""

import dataclasses
import json
from enum import Enum
from pathlib import Path
from typing import Any, Dict

import jsonschema
from jsonschema import Draft202012Validator, ValidationError


# =============================================================================
# SCHEMA LOADER
# =============================================================================


class SchemaLoader:
    """
    Загрузчик JSON Schema файлов.

    Схемы лежат в каталоге schema/ рядом с этим модулем.
    """

    def __init__(self, schema_dir: Path | None = None):
        self._schema_dir = schema_dir or Path(__file__).parent / "schema"
        if not self._schema_dir.exists():
            raise RuntimeError(f"Schema directory not found: {self._schema_dir}")

        # Кэш загруженных схем
        self._schemas: Dict[str, Dict[str, Any]] = {}

    def load_schema(self, schema_name: str) -> Dict[str, Any]:
        """
        Загрузка JSON Schema файла.

        Args:
            schema_name: Имя схемы без расширения (например, 'market_result')

        Returns:
            Загруженная схема как dict

        Raises:
            FileNotFoundError: Если файл схемы не найден
            ValueError: Если файл не является корректной JSON Schema
        """
        if schema_name in self._schemas:
            return self._schemas[schema_name]

        schema_path = self._schema_dir / f"{schema_name}.json"
        if not schema_path.exists():
            raise FileNotFoundError(f"Schema not found: {schema_path}")

        with open(schema_path, "r", encoding="utf-8") as f:
            schema = json.load(f)

        # Валидируем саму схему (meta-validation)
        try:
            Draft202012Validator.check_schema(schema)
        except jsonschema.SchemaError as e:
            raise ValueError(f"Invalid JSON Schema in {schema_name}.json: {e}")

        self._schemas[schema_name] = schema
        return schema


# Глобальный экземпляр загрузчика
_SCHEMA_LOADER = SchemaLoader()


# =============================================================================
# PAYLOAD
# =============================================================================


def to_payload(value: Any) -> Any:
    """
    Перевод результата калькулятора в JSON-совместимые типы.

    dataclass / NamedTuple → dict, Enum → value, tuple/list → list.
    Остальные значения возвращаются как есть.
    """
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return {
            field.name: to_payload(getattr(value, field.name))
            for field in dataclasses.fields(value)
        }
    if isinstance(value, tuple) and hasattr(value, "_asdict"):
        return {key: to_payload(item) for key, item in value._asdict().items()}
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, (tuple, list)):
        return [to_payload(item) for item in value]
    return value


# =============================================================================
# CONTRACT VALIDATORS
# =============================================================================


class ContractValidator:
    """
    Базовый класс для валидаторов контрактов.

    Инкапсулирует логику валидации данных против JSON Schema.
    """

    def __init__(self, schema_name: str):
        self.schema_name = schema_name
        self.schema = _SCHEMA_LOADER.load_schema(schema_name)
        self.validator = Draft202012Validator(self.schema)

    def validate(self, data: Dict[str, Any]) -> None:
        """
        Валидация данных против схемы.

        Raises:
            ValidationError: Если данные не соответствуют схеме
        """
        self.validator.validate(data)

    def is_valid(self, data: Dict[str, Any]) -> bool:
        return self.validator.is_valid(data)

    def iter_errors(self, data: Dict[str, Any]):
        """Итератор по всем ошибкам валидации (ValidationError)."""
        return self.validator.iter_errors(data)


class MarketResultValidator(ContractValidator):
    def __init__(self):
        super().__init__("market_result")


class MonopolyResultValidator(ContractValidator):
    def __init__(self):
        super().__init__("monopoly_result")


class FirmResultValidator(ContractValidator):
    def __init__(self):
        super().__init__("firm_result")


class MarketFirmResultValidator(ContractValidator):
    def __init__(self):
        super().__init__("market_firm_result")


class ElasticityResultValidator(ContractValidator):
    def __init__(self):
        super().__init__("elasticity_result")


class IsoBenefitResultValidator(ContractValidator):
    def __init__(self):
        super().__init__("iso_benefit_result")


# Имя класса результата → валидатор
_VALIDATORS_BY_RESULT = {
    "MarketResult": MarketResultValidator,
    "MonopolyResult": MonopolyResultValidator,
    "FirmResult": FirmResultValidator,
    "MarketFirmResult": MarketFirmResultValidator,
    "ElasticityResult": ElasticityResultValidator,
    "IsoBenefitResult": IsoBenefitResultValidator,
}


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================


def validate_market_result(data: Dict[str, Any]) -> None:
    MarketResultValidator().validate(data)


def validate_monopoly_result(data: Dict[str, Any]) -> None:
    MonopolyResultValidator().validate(data)


def validate_firm_result(data: Dict[str, Any]) -> None:
    FirmResultValidator().validate(data)


def validate_market_firm_result(data: Dict[str, Any]) -> None:
    MarketFirmResultValidator().validate(data)


def validate_elasticity_result(data: Dict[str, Any]) -> None:
    ElasticityResultValidator().validate(data)


def validate_iso_benefit_result(data: Dict[str, Any]) -> None:
    IsoBenefitResultValidator().validate(data)


def validate_result(result: Any) -> Dict[str, Any]:
    """
    Валидация результата калькулятора против его контракта.

    Args:
        result: Результат любого калькулятора (MarketResult, FirmResult, ...)

    Returns:
        Payload результата (dict), прошедший валидацию

    Raises:
        TypeError: Если для типа результата нет контракта
        ValidationError: Если payload не соответствует схеме
    """
    validator_cls = _VALIDATORS_BY_RESULT.get(type(result).__name__)
    if validator_cls is None:
        raise TypeError(f"No contract for result type {type(result).__name__}")

    payload = to_payload(result)
    validator_cls().validate(payload)
    return payload
