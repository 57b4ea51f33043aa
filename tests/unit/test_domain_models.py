"""
Тесты для доменных моделей: полис, пул, оракул, аттестации, запросы

Проверяет:
1. Создание и валидацию моделей Pydantic (UInt256 поля)
2. Immutability (frozen=True)
3. Разбор непрозрачных байтов (bytes / hex)
4. Сериализацию/десериализацию JSON
"""

import json

import pytest
from jsonschema import Draft202012Validator
from pydantic import ValidationError

from src.core.domain import (
    Attestation,
    AttestationRequest,
    ClaimEvaluationRequest,
    EncryptedAttestation,
    OracleFeed,
    OracleSample,
    PolicyParameters,
    PoolSnapshot,
)
from src.core.math import UInt256


@pytest.fixture
def policy() -> PolicyParameters:
    return PolicyParameters(policy_id=42, coverage_amount=500, deductible=100, coverage_ratio=8000)


@pytest.fixture
def pool() -> PoolSnapshot:
    return PoolSnapshot(
        initial_token_a_amount=1000,
        initial_token_b_amount=2000,
        current_token_a_price=100,
        current_token_b_price=50,
        initial_token_a_price=110,
        initial_token_b_price=55,
        pool_fee_rate=30,
    )


# =============================================================================
# POLICY / POOL
# =============================================================================


class TestPolicyParameters:
    """Тесты для модели PolicyParameters"""

    def test_fields_are_uint256(self, policy) -> None:
        assert isinstance(policy.coverage_amount, UInt256)
        assert policy.coverage_ratio == 8000

    def test_frozen(self, policy) -> None:
        with pytest.raises(ValidationError):
            policy.deductible = UInt256(0)

    def test_amplified_ratio_allowed(self) -> None:
        policy = PolicyParameters(policy_id=1, coverage_amount=1, deductible=0, coverage_ratio=20000)
        assert policy.coverage_ratio == 20000

    @pytest.mark.parametrize("raw", [-1, 2**256, True, "abc", 1.5])
    def test_rejects_invalid_uint256(self, raw) -> None:
        with pytest.raises(ValidationError):
            PolicyParameters(policy_id=1, coverage_amount=raw, deductible=0, coverage_ratio=0)

    def test_accepts_strings(self) -> None:
        policy = PolicyParameters(policy_id="0xff", coverage_amount="500", deductible=UInt256(1), coverage_ratio=0)
        assert policy.policy_id == 255
        assert policy.coverage_amount == 500


class TestPoolSnapshot:
    """Тесты для модели PoolSnapshot"""

    def test_missing_field(self) -> None:
        with pytest.raises(ValidationError):
            PoolSnapshot(initial_token_a_amount=1)

    def test_json_roundtrip(self, pool) -> None:
        data = json.loads(pool.model_dump_json())
        assert data["initial_token_a_price"] == "110"
        assert PoolSnapshot.model_validate(data) == pool


# =============================================================================
# ORACLE
# =============================================================================


class TestOracleFeed:
    """Тесты для модели OracleFeed"""

    def test_samples(self) -> None:
        feed = OracleFeed(prices=[100, 105], timestamps=[1, 2])
        assert feed.samples() == [
            OracleSample(UInt256(100), UInt256(1)),
            OracleSample(UInt256(105), UInt256(2)),
        ]

    def test_length_mismatch_is_not_parse_error(self) -> None:
        """Несовпадение длин — решение валидатора, а не модели"""
        feed = OracleFeed(prices=[100, 105], timestamps=[1])
        assert len(feed.prices) == 2
        assert feed.deviation_threshold is None


# =============================================================================
# ATTESTATIONS
# =============================================================================


class TestAttestation:
    """Тесты для моделей аттестаций"""

    def test_hex_bytes(self) -> None:
        attestation = Attestation(value=1, signature="0xDEAD", operator_public_key="beef")
        assert attestation.signature == b"\xde\xad"
        assert attestation.operator_public_key == b"\xbe\xef"

    def test_raw_bytes(self) -> None:
        attestation = Attestation(value=1, signature=bytearray(b"\x01"), operator_public_key=b"\x02")
        assert attestation.signature == b"\x01"

    def test_defaults_empty(self) -> None:
        attestation = Attestation(value=1)
        assert attestation.signature == b""
        assert attestation.operator_public_key == b""

    def test_invalid_hex(self) -> None:
        with pytest.raises(ValidationError):
            Attestation(value=1, signature="0xzz")

    def test_json_dump_hex(self) -> None:
        attestation = Attestation(value=2**200, signature=b"\x01\x02", operator_public_key=b"")
        data = json.loads(attestation.model_dump_json())
        assert data == {"value": str(2**200), "signature": "0x0102", "operator_public_key": "0x"}

    def test_encrypted_attestation(self) -> None:
        bundle = EncryptedAttestation(encrypted_attestation="0x01", proof=b"\x02", public_inputs=["42", 7])
        assert bundle.public_inputs == [UInt256(42), UInt256(7)]


# =============================================================================
# REQUESTS
# =============================================================================


class TestClaimEvaluationRequest:
    """Тесты для gated запроса"""

    def test_defaults(self, policy, pool) -> None:
        request = ClaimEvaluationRequest(request=AttestationRequest(policy=policy, pool=pool))
        assert request.oracle is None
        assert request.attestations == []
        assert request.quorum_threshold == UInt256.ONE
        assert request.encrypted_attestation is None

    def test_frozen(self, policy, pool) -> None:
        request = AttestationRequest(policy=policy, pool=pool)
        with pytest.raises(ValidationError):
            request.request_id = "other"


# =============================================================================
# JSON SCHEMA
# =============================================================================


class TestModelJsonSchema:
    """JSON Schema моделей с UInt256 полями"""

    def test_uint256_field_schema(self) -> None:
        schema = AttestationRequest.model_json_schema()
        coverage = schema["$defs"]["PolicyParameters"]["properties"]["coverage_amount"]
        assert {"type": "integer", "minimum": 0} in coverage["oneOf"]
        assert coverage["description"] == "Лимит выплаты (cap)"

    def test_nested_request_schema(self) -> None:
        schema = ClaimEvaluationRequest.model_json_schema()
        assert "request" in schema["required"]
        assert "quorum_threshold" in schema["properties"]

    def test_dump_matches_generated_schema(self, policy, pool) -> None:
        request = AttestationRequest(request_id="r-1", policy=policy, pool=pool)
        Draft202012Validator(AttestationRequest.model_json_schema()).validate(request.model_dump(mode="json"))
