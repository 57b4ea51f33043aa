"""Compute Engine — фасад оценки claim по полису

process_attestation_request:
    IL calculator → payout calculator → ClaimResult(is_valid=True)
    Валидность входов (оракул, кворум, proof) — ответственность вызывающего.

evaluate_claim (gated pipeline):
    1. Оракул: ценовой ряд проходит валидацию
    2. Кворум: аттестации операторов агрегируются с достижением кворума
    3. Proof: зашифрованная аттестация проходит проверку
    4. process_attestation_request
    Первый непройденный gate блокирует claim: (0, False, 0, False) + причина.
    Gate пропускается, если его вход не передан и не обязателен по конфигурации.

Каждый результат сопровождается audit hash:
    keccak256(policy_id || impermanent_loss || payout || is_valid)
"""

from dataclasses import dataclass, field
from typing import Optional

from src.compute.aggregation import AggregatorConfig, AttestationAggregator
from src.compute.attestation_verifier import AttestationVerifier
from src.compute.hashing import Keccak256Hash
from src.compute.impermanent_loss import ImpermanentLossCalculator
from src.compute.interfaces import ProofVerifier, SignatureVerifier
from src.compute.oracle_validator import OraclePriceValidator, OracleValidatorConfig
from src.compute.payout import PayoutCalculator
from src.core.domain.attestation import AggregationResult, AttestationVerification
from src.core.domain.claim import AttestationRequest, ClaimEvaluationRequest, ClaimResult
from src.core.domain.oracle import OracleValidationResult
from src.core.logger import get_logger
from src.core.math.uint256 import UInt256

logger = get_logger(__name__)


# =============================================================================
# RESULT
# =============================================================================


@dataclass(frozen=True)
class ClaimEvaluation:
    """Результат gated оценки claim."""

    claim: ClaimResult
    block_reason: str

    # Результаты gates (None: gate не выполнялся)
    oracle_result: Optional[OracleValidationResult]
    aggregation_result: Optional[AggregationResult]
    verification_result: Optional[AttestationVerification]

    audit_hash: UInt256

    @property
    def approved(self) -> bool:
        return self.claim.is_valid


# =============================================================================
# CONFIG
# =============================================================================


@dataclass(frozen=True)
class ComputeEngineConfig:
    """Конфигурация фасада."""

    # Обязательность gate-входов
    require_oracle: bool = False
    require_attestations: bool = False
    require_encrypted_attestation: bool = False

    oracle: OracleValidatorConfig = field(default_factory=OracleValidatorConfig)
    aggregation: AggregatorConfig = field(default_factory=AggregatorConfig)


# =============================================================================
# ENGINE
# =============================================================================


class ComputeEngine:
    """Фасад compute-ядра."""

    def __init__(
        self,
        config: ComputeEngineConfig | None = None,
        signature_verifier: Optional[SignatureVerifier] = None,
        proof_verifier: Optional[ProofVerifier] = None,
    ):
        self.config = config or ComputeEngineConfig()
        self.hasher = Keccak256Hash()

        self.oracle_validator = OraclePriceValidator(self.config.oracle)
        self.il_calculator = ImpermanentLossCalculator()
        self.payout_calculator = PayoutCalculator()
        self.aggregator = AttestationAggregator(signature_verifier, self.config.aggregation)
        self.attestation_verifier = AttestationVerifier(proof_verifier, self.hasher)

    def process_attestation_request(self, request: AttestationRequest) -> ClaimResult:
        """IL → payout по пулу и полису запроса.

        Raises:
            ArithmeticOverflow, DivisionByZero: арифметические ошибки не поглощаются
        """
        il_result = self.il_calculator.compute_for_pool(request.pool)
        payout = self.payout_calculator.compute_for_policy(
            request.policy, il_result.impermanent_loss
        )
        return ClaimResult(
            impermanent_loss=il_result.impermanent_loss,
            has_loss=il_result.has_loss,
            payout=payout,
            is_valid=True,
        )

    async def evaluate_claim(self, request: ClaimEvaluationRequest) -> ClaimEvaluation:
        """Полная оценка claim с gate-проверками входов."""
        policy_id = request.request.policy.policy_id
        log = logger.bind(policy_id=str(policy_id), request_id=request.request.request_id)

        oracle_result: Optional[OracleValidationResult] = None
        aggregation_result: Optional[AggregationResult] = None
        verification_result: Optional[AttestationVerification] = None

        # 1. Оракул
        if request.oracle is not None:
            oracle_result = self.oracle_validator.validate_feed(request.oracle)
            if not oracle_result.is_valid:
                return self._blocked(
                    log, policy_id, "oracle_invalid",
                    oracle_result, aggregation_result, verification_result,
                )
        elif self.config.require_oracle:
            return self._blocked(
                log, policy_id, "oracle_missing",
                oracle_result, aggregation_result, verification_result,
            )

        # 2. Кворум операторов: явно переданные аттестации или порог запускают
        # агрегацию, даже пустой список (0 submissions < threshold → блок)
        quorum_requested = bool(request.attestations) or bool(
            {"attestations", "quorum_threshold"} & request.model_fields_set
        )
        if quorum_requested:
            aggregation_result = await self.aggregator.aggregate_attestations(
                request.attestations, request.quorum_threshold
            )
            if not aggregation_result.quorum_met:
                return self._blocked(
                    log, policy_id, "quorum_not_met",
                    oracle_result, aggregation_result, verification_result,
                )
        elif self.config.require_attestations:
            return self._blocked(
                log, policy_id, "attestations_missing",
                oracle_result, aggregation_result, verification_result,
            )

        # 3. Proof
        if request.encrypted_attestation is not None:
            verification_result = await self.attestation_verifier.verify_bundle(
                request.encrypted_attestation
            )
            if not verification_result.is_valid:
                return self._blocked(
                    log, policy_id, "attestation_unverified",
                    oracle_result, aggregation_result, verification_result,
                )
        elif self.config.require_encrypted_attestation:
            return self._blocked(
                log, policy_id, "encrypted_attestation_missing",
                oracle_result, aggregation_result, verification_result,
            )

        # 4. IL → payout
        claim = self.process_attestation_request(request.request)
        log.info(
            "claim_evaluated",
            impermanent_loss=str(claim.impermanent_loss),
            has_loss=claim.has_loss,
            payout=str(claim.payout),
        )
        return ClaimEvaluation(
            claim=claim,
            block_reason="",
            oracle_result=oracle_result,
            aggregation_result=aggregation_result,
            verification_result=verification_result,
            audit_hash=self.audit_hash(policy_id, claim),
        )

    def audit_hash(self, policy_id: UInt256, claim: ClaimResult) -> UInt256:
        """keccak256(policy_id || impermanent_loss || payout || is_valid)."""
        return self.hasher.digest_words(
            [
                policy_id,
                claim.impermanent_loss,
                claim.payout,
                UInt256.ONE if claim.is_valid else UInt256.ZERO,
            ]
        )

    def _blocked(
        self,
        log,
        policy_id: UInt256,
        reason: str,
        oracle_result: Optional[OracleValidationResult],
        aggregation_result: Optional[AggregationResult],
        verification_result: Optional[AttestationVerification],
    ) -> ClaimEvaluation:
        claim = ClaimResult(
            impermanent_loss=UInt256.ZERO,
            has_loss=False,
            payout=UInt256.ZERO,
            is_valid=False,
        )
        log.info("claim_blocked", block_reason=reason)
        return ClaimEvaluation(
            claim=claim,
            block_reason=reason,
            oracle_result=oracle_result,
            aggregation_result=aggregation_result,
            verification_result=verification_result,
            audit_hash=self.audit_hash(policy_id, claim),
        )
