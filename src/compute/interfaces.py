"""Capability interfaces — внешние зависимости compute-ядра.

Ядро не реализует криптографию подписей и proof-систем. Решение о
валидности подписи оператора и proof принимает внешняя capability;
ядро определяет только точку принятия решения и реагирует на вердикт.

Проверки подписей и proof могут приостанавливаться (удалённый verifier,
тяжёлая криптография), поэтому verify — корутины.
"""

from typing import Protocol, Sequence, runtime_checkable

from src.core.math.uint256 import UInt256


@runtime_checkable
class SignatureVerifier(Protocol):
    """Проверка подписи оператора над аттестованным значением."""

    async def verify(
        self,
        value: UInt256,
        signature: bytes,
        operator_key: bytes,
    ) -> bool:
        ...


@runtime_checkable
class ProofVerifier(Protocol):
    """Проверка proof корректности вычисления над зашифрованной аттестацией."""

    async def verify(
        self,
        encrypted_attestation: bytes,
        proof: bytes,
        public_inputs: Sequence[UInt256],
    ) -> bool:
        ...


@runtime_checkable
class Hash(Protocol):
    """Collision-resistant hash, результат приведён к UInt256."""

    def digest(self, data: bytes) -> UInt256:
        ...
