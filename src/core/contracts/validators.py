"""
JSON Schema Contract Validators

Модуль для валидации JSON данных, которые движок отдаёт слою
представления (таблица итераций, разметка цифр).
Использует библиотеку jsonschema для проверки соответствия данных схемам.

Схемы:
- pi_table.json (таблица итераций и итоговое приближение)
- digit_presentation.json (проверенный префикс цифр)
"""

import json
from pathlib import Path
from typing import Any, Dict

import jsonschema
from jsonschema import Draft202012Validator


# =============================================================================
# SCHEMA LOADER
# =============================================================================


class SchemaLoader:
    """
    Загрузчик JSON Schema файлов.

    Автоматически находит схемы в contracts/schema/ относительно корня проекта.
    """

    def __init__(self):
        # Определяем корень проекта (4 уровня вверх от этого файла)
        self._schema_dir = Path(__file__).parent.parent.parent.parent / "contracts" / "schema"
        if not self._schema_dir.exists():
            raise RuntimeError(f"Schema directory not found: {self._schema_dir}")

        # Кэш загруженных схем
        self._schemas: Dict[str, Dict[str, Any]] = {}

    @property
    def schema_dir(self) -> Path:
        return self._schema_dir

    def load_schema(self, schema_name: str) -> Dict[str, Any]:
        """
        Загрузка JSON Schema файла.

        Args:
            schema_name: Имя схемы без расширения (например, 'pi_table')

        Returns:
            Загруженная схема как dict

        Raises:
            FileNotFoundError: Если файл схемы не найден
            ValueError: Если файл не является валидной JSON Schema
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
        """Проверка валидности данных без exception."""
        return self.validator.is_valid(data)

    def iter_errors(self, data: Dict[str, Any]):
        """
        Итератор по всем ошибкам валидации.

        Yields:
            ValidationError объекты для каждой найденной ошибки
        """
        return self.validator.iter_errors(data)


class PiTableValidator(ContractValidator):
    """Валидатор для pi_table контракта."""

    def __init__(self):
        super().__init__("pi_table")


class DigitPresentationValidator(ContractValidator):
    """Валидатор для digit_presentation контракта."""

    def __init__(self):
        super().__init__("digit_presentation")


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================


def validate_pi_table(data: Dict[str, Any]) -> None:
    """
    Валидация pi_table данных.

    Args:
        data: Данные для валидации (например, PiTable.to_payload())

    Raises:
        ValidationError: Если данные не соответствуют схеме
    """
    PiTableValidator().validate(data)


def validate_digit_presentation(data: Dict[str, Any]) -> None:
    """
    Валидация digit_presentation данных.

    Raises:
        ValidationError: Если данные не соответствуют схеме
    """
    DigitPresentationValidator().validate(data)
