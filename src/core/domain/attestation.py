"""
Attestation — Аттестации операторов и зашифрованные аттестации с proof

Эфемерные модели: создаются из входа запроса, не сохраняются ядром.
"""

from typing import NamedTuple

from pydantic import BaseModel, Field

from src.core.domain.types import OpaqueBytes
from src.core.math.uint256 import UInt256


class Attestation(BaseModel):
    """Аттестация одного оператора."""

    value: UInt256 = Field(..., description="Аттестованное значение")
    signature: OpaqueBytes = Field(b"", description="Подпись оператора (непрозрачные байты)")
    operator_public_key: OpaqueBytes = Field(
        b"", description="Ключ оператора: 20-байтовый адрес или 64-байтовый public key"
    )

    model_config = {"frozen": True}


class EncryptedAttestation(BaseModel):
    """Зашифрованная аттестация с proof корректности вычисления."""

    encrypted_attestation: OpaqueBytes = Field(b"", description="Шифротекст аттестации")
    proof: OpaqueBytes = Field(b"", description="Proof корректности вычисления")
    public_inputs: list[UInt256] = Field(
        default_factory=list, description="Публичные входы; [0] — заявленный результат"
    )

    model_config = {"frozen": True}


class AggregationResult(NamedTuple):
    """Результат агрегации аттестаций."""

    aggregated_value: UInt256
    quorum_met: bool


class AttestationVerification(NamedTuple):
    """Результат проверки зашифрованной аттестации."""

    is_valid: bool
    computed_value: UInt256
