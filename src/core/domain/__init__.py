"""
Domain models and value objects.

Полис, снапшот пула, ценовой ряд оракула, аттестации операторов, запросы
и результаты оценки claim.
"""

from src.core.domain.attestation import (
    AggregationResult,
    Attestation,
    AttestationVerification,
    EncryptedAttestation,
)
from src.core.domain.claim import (
    AttestationRequest,
    ClaimEvaluationRequest,
    ClaimResult,
)
from src.core.domain.oracle import (
    OracleFeed,
    OracleSample,
    OracleValidationReport,
    OracleValidationResult,
)
from src.core.domain.policy import PolicyParameters
from src.core.domain.pool import PoolSnapshot
from src.core.domain.types import OpaqueBytes

__all__ = [
    # Policy and pool
    "PolicyParameters",
    "PoolSnapshot",
    # Oracle
    "OracleSample",
    "OracleFeed",
    "OracleValidationResult",
    "OracleValidationReport",
    # Attestations
    "Attestation",
    "EncryptedAttestation",
    "AggregationResult",
    "AttestationVerification",
    # Claim
    "AttestationRequest",
    "ClaimEvaluationRequest",
    "ClaimResult",
    # Field types
    "OpaqueBytes",
]
