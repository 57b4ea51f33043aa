"""Attestation Aggregator — агрегация аттестаций операторов с кворумом

Аттестация по индексу i считается валидной, только если:
1. values[i] != 0
2. signatures[i] не пустая
3. operator_keys[i] не пустой
4. SignatureVerifier (если подключён) принимает (value, signature, key)

Результат:
- aggregated_value = среднее валидных значений (усечение к нулю)
- quorum_met = valid_count >= threshold
- кворум не достигнут → aggregated_value = 0

Fail-closed (0, False):
- длины values / signatures / operator_keys различаются
- количество аттестаций < threshold
"""

from dataclasses import dataclass
from typing import Optional, Sequence

from src.compute.interfaces import SignatureVerifier
from src.core.domain.attestation import AggregationResult, Attestation
from src.core.logger import get_logger
from src.core.math.uint256 import UInt256

logger = get_logger(__name__)

_FAILED = AggregationResult(UInt256.ZERO, False)


@dataclass(frozen=True)
class AggregatorConfig:
    """Конфигурация агрегатора."""

    # Повторная аттестация от уже учтённого ключа оператора игнорируется
    reject_duplicate_operators: bool = False


class AttestationAggregator:
    """Агрегатор аттестаций операторов."""

    def __init__(
        self,
        signature_verifier: Optional[SignatureVerifier] = None,
        config: AggregatorConfig | None = None,
    ):
        """
        Args:
            signature_verifier: внешняя проверка подписей; None → только
                проверка наличия подписи и ключа
            config: конфигурация (опционально)
        """
        self.signature_verifier = signature_verifier
        self.config = config or AggregatorConfig()

    async def aggregate(
        self,
        values: Sequence[UInt256],
        signatures: Sequence[bytes],
        operator_keys: Sequence[bytes],
        threshold: UInt256,
    ) -> AggregationResult:
        """Агрегация аттестаций.

        Args:
            values: аттестованные значения
            signatures: подписи операторов
            operator_keys: ключи операторов
            threshold: кворум — минимум валидных аттестаций

        Returns:
            AggregationResult(aggregated_value, quorum_met)

        Raises:
            ArithmeticOverflow: сумма валидных значений вне 256 бит
        """
        values = [UInt256.parse(value) for value in values]
        threshold = UInt256.parse(threshold)

        if not (len(values) == len(signatures) == len(operator_keys)):
            logger.info(
                "attestations_rejected",
                reason="length_mismatch",
                values=len(values),
                signatures=len(signatures),
                operator_keys=len(operator_keys),
            )
            return _FAILED

        if UInt256.from_u64(len(values)) < threshold:
            logger.info(
                "quorum_not_met",
                reason="not_enough_submissions",
                submissions=len(values),
                threshold=str(threshold),
            )
            return _FAILED

        total = UInt256.ZERO
        valid_count = 0
        seen_operators: set[bytes] = set()

        for value, signature, operator_key in zip(values, signatures, operator_keys):
            if value.is_zero() or not signature or not operator_key:
                continue

            operator_key = bytes(operator_key)
            if self.config.reject_duplicate_operators and operator_key in seen_operators:
                logger.warning("duplicate_operator_attestation", operator_key="0x" + operator_key.hex())
                continue

            if self.signature_verifier is not None:
                accepted = await self.signature_verifier.verify(value, bytes(signature), operator_key)
                if not accepted:
                    logger.warning(
                        "attestation_signature_rejected",
                        operator_key="0x" + operator_key.hex(),
                    )
                    continue

            seen_operators.add(operator_key)
            total = total + value
            valid_count += 1

        quorum_met = UInt256.from_u64(valid_count) >= threshold

        if not quorum_met:
            logger.info(
                "quorum_not_met",
                reason="not_enough_valid_attestations",
                valid_attestations=valid_count,
                threshold=str(threshold),
            )
            return AggregationResult(UInt256.ZERO, False)

        if valid_count == 0:
            # threshold == 0: кворум формально достигнут, значения нет
            return AggregationResult(UInt256.ZERO, True)

        return AggregationResult(total // valid_count, True)

    async def aggregate_attestations(
        self,
        attestations: Sequence[Attestation],
        threshold: UInt256,
    ) -> AggregationResult:
        """Агрегация списка моделей Attestation."""
        return await self.aggregate(
            [a.value for a in attestations],
            [a.signature for a in attestations],
            [a.operator_public_key for a in attestations],
            threshold,
        )
