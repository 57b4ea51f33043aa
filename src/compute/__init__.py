"""Compute — детерминированные вычисления ноды.

- OraclePriceValidator: отклонения и порядок timestamps ценового ряда
- ImpermanentLossCalculator: IL позиции LP
- PayoutCalculator: выплата с франшизой, долей покрытия и лимитом
- AttestationAggregator: агрегация аттестаций операторов с кворумом
- AttestationVerifier: зашифрованная аттестация + proof
- ComputeEngine: фасад оценки claim
"""

from .aggregation import AggregatorConfig, AttestationAggregator
from .attestation_verifier import AttestationVerifier
from .engine import ClaimEvaluation, ComputeEngine, ComputeEngineConfig
from .hashing import Keccak256Hash
from .impermanent_loss import (
    ImpermanentLossBreakdown,
    ImpermanentLossCalculator,
    ImpermanentLossResult,
)
from .interfaces import Hash, ProofVerifier, SignatureVerifier
from .oracle_validator import (
    DEFAULT_DEVIATION_THRESHOLD_BPS,
    OraclePriceValidator,
    OracleValidatorConfig,
)
from .payout import PayoutCalculator
from .verifiers import EcdsaSignatureVerifier, sign_value

__all__ = [
    "AggregatorConfig",
    "AttestationAggregator",
    "AttestationVerifier",
    "ClaimEvaluation",
    "ComputeEngine",
    "ComputeEngineConfig",
    "Keccak256Hash",
    "ImpermanentLossBreakdown",
    "ImpermanentLossCalculator",
    "ImpermanentLossResult",
    "Hash",
    "ProofVerifier",
    "SignatureVerifier",
    "DEFAULT_DEVIATION_THRESHOLD_BPS",
    "OraclePriceValidator",
    "OracleValidatorConfig",
    "PayoutCalculator",
    "EcdsaSignatureVerifier",
    "sign_value",
]
