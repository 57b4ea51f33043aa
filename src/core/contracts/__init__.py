"""
Contract Validation Module

Модуль для валидации JSON контрактов compute-ноды.
"""

from .validators import (
    AttestationRequestValidator,
    ClaimEvaluationRequestValidator,
    ContractValidator,
    SchemaLoader,
    parse_attestation_request,
    parse_claim_evaluation_request,
    validate_attestation_request,
    validate_claim_evaluation_request,
)

__all__ = [
    # Classes
    "SchemaLoader",
    "ContractValidator",
    "AttestationRequestValidator",
    "ClaimEvaluationRequestValidator",
    # Functions
    "validate_attestation_request",
    "validate_claim_evaluation_request",
    "parse_attestation_request",
    "parse_claim_evaluation_request",
]
