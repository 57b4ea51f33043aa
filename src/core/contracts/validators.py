"""
JSON Schema Contract Validators

Модуль для валидации JSON запросов к compute-ноде согласно формальным
JSON Schema контрактам (Draft 2020-12). Использует библиотеку jsonschema;
перекрёстные $ref между схемами разрешаются через общий registry.

Схемы:
- attestation_request.json: пул + полис (вход фасада)
- claim_evaluation_request.json: gated запрос (оракул, кворум, proof)
"""

import json
from pathlib import Path
from typing import Any, Dict

import jsonschema
from jsonschema import Draft202012Validator
from referencing import Registry, Resource
from referencing.jsonschema import DRAFT202012

from src.core.domain.claim import AttestationRequest, ClaimEvaluationRequest


# =============================================================================
# SCHEMA LOADER
# =============================================================================


class SchemaLoader:
    """
    Загрузчик JSON Schema файлов.

    Автоматически находит схемы в contracts/schema/ относительно корня проекта.
    """

    def __init__(self):
        # Корень проекта: 4 уровня вверх от этого файла
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
            schema_name: Имя схемы без расширения (например, 'attestation_request')

        Returns:
            Загруженная схема как dict

        Raises:
            FileNotFoundError: Если файл схемы не найден
            ValueError: Если схема не проходит meta-validation
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
            raise ValueError(f"Invalid JSON Schema in {schema_name}.json: {e}")

        self._schemas[schema_name] = schema
        return schema

    def registry(self) -> Registry:
        """Registry всех схем каталога (для разрешения $ref по $id)."""
        resources = []
        for schema_path in sorted(self._schema_dir.glob("*.json")):
            schema = self.load_schema(schema_path.stem)
            resource = Resource.from_contents(schema, default_specification=DRAFT202012)
            resources.append((schema["$id"], resource))
        return Registry().with_resources(resources)


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
        self.validator = Draft202012Validator(self.schema, registry=_SCHEMA_LOADER.registry())

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
        """Итератор по всем ошибкам валидации."""
        return self.validator.iter_errors(data)


class AttestationRequestValidator(ContractValidator):
    """Валидатор для attestation_request контракта."""

    def __init__(self):
        super().__init__("attestation_request")


class ClaimEvaluationRequestValidator(ContractValidator):
    """Валидатор для claim_evaluation_request контракта."""

    def __init__(self):
        super().__init__("claim_evaluation_request")


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================


def validate_attestation_request(data: Dict[str, Any]) -> None:
    """
    Валидация attestation_request данных.

    Raises:
        ValidationError: Если данные не соответствуют схеме
    """
    AttestationRequestValidator().validate(data)


def validate_claim_evaluation_request(data: Dict[str, Any]) -> None:
    """
    Валидация claim_evaluation_request данных.

    Raises:
        ValidationError: Если данные не соответствуют схеме
    """
    ClaimEvaluationRequestValidator().validate(data)


def parse_attestation_request(data: Dict[str, Any]) -> AttestationRequest:
    """
    Контракт → модель: валидация схемы, затем разбор в AttestationRequest.

    Raises:
        jsonschema.ValidationError: Нарушение контракта
        pydantic.ValidationError: Значение вне диапазона UInt256
    """
    validate_attestation_request(data)
    return AttestationRequest.model_validate(data)


def parse_claim_evaluation_request(data: Dict[str, Any]) -> ClaimEvaluationRequest:
    """Контракт → модель для gated запроса."""
    validate_claim_evaluation_request(data)
    return ClaimEvaluationRequest.model_validate(data)
