"""
Claim — Запрос на оценку claim и её результат

AttestationRequest: вход фасада ComputeEngine (пул + полис).
ClaimEvaluationRequest: полный gated-запрос (оракул, кворум, proof).
ClaimResult: итог оценки, immutable после создания.
"""

from typing import NamedTuple, Optional

from pydantic import BaseModel, Field

from src.core.domain.attestation import Attestation, EncryptedAttestation
from src.core.domain.oracle import OracleFeed
from src.core.domain.policy import PolicyParameters
from src.core.domain.pool import PoolSnapshot
from src.core.math.uint256 import UInt256


class AttestationRequest(BaseModel):
    """Запрос на расчёт IL и выплаты по полису."""

    request_id: str = Field("", description="Идентификатор запроса (трассировка)")
    policy: PolicyParameters = Field(..., description="Параметры полиса")
    pool: PoolSnapshot = Field(..., description="Снапшот LP позиции")

    model_config = {"frozen": True}


class ClaimEvaluationRequest(BaseModel):
    """
    Gated запрос: claim оценивается только если все переданные gate-входы
    проходят проверки (оракул → кворум аттестаций → proof).
    """

    request: AttestationRequest = Field(..., description="Пул и полис")
    oracle: Optional[OracleFeed] = Field(None, description="Ценовой ряд оракула")
    attestations: list[Attestation] = Field(
        default_factory=list, description="Аттестации операторов"
    )
    quorum_threshold: UInt256 = Field(
        default_factory=lambda: UInt256.ONE, description="Минимум валидных аттестаций"
    )
    encrypted_attestation: Optional[EncryptedAttestation] = Field(
        None, description="Зашифрованная аттестация с proof"
    )

    model_config = {"frozen": True}


class ClaimResult(NamedTuple):
    """Итог оценки claim."""

    impermanent_loss: UInt256
    has_loss: bool
    payout: UInt256
    is_valid: bool
