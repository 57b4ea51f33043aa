"""Attestation Verifier — согласованность зашифрованной аттестации и proof

Порядок проверок:
1. Пустой шифротекст или proof → (False, 0)
2. Digest обоих входов (Keccak-256 → UInt256); нулевой digest → (False, 0).
   Это fail-fast проверка вырожденного входа, НЕ проверка proof.
3. Пустые public_inputs → (False, 0)
4. ProofVerifier (если подключён) принимает → (True, public_inputs[0])

Конвенция протокола: заявленный результат вычисления — публичный вход #0.
"""

from typing import Optional, Sequence

from src.compute.hashing import Keccak256Hash
from src.compute.interfaces import Hash, ProofVerifier
from src.core.domain.attestation import AttestationVerification, EncryptedAttestation
from src.core.logger import get_logger
from src.core.math.uint256 import UInt256

logger = get_logger(__name__)

_REJECTED = AttestationVerification(False, UInt256.ZERO)


class AttestationVerifier:
    """Проверка зашифрованной аттестации."""

    def __init__(
        self,
        proof_verifier: Optional[ProofVerifier] = None,
        hasher: Optional[Hash] = None,
    ):
        """
        Args:
            proof_verifier: внешняя проверка proof; None → решение только по
                структурным проверкам
            hasher: hash для fail-fast проверки (default: Keccak-256)
        """
        self.proof_verifier = proof_verifier
        self.hasher = hasher or Keccak256Hash()

    async def verify(
        self,
        encrypted_attestation: bytes,
        proof: bytes,
        public_inputs: Sequence[UInt256],
    ) -> AttestationVerification:
        """Проверка аттестации.

        Returns:
            AttestationVerification(is_valid, computed_value)
        """
        if not encrypted_attestation or not proof:
            logger.info(
                "attestation_rejected",
                reason="empty_input",
                attestation_bytes=len(encrypted_attestation),
                proof_bytes=len(proof),
            )
            return _REJECTED

        attestation_digest = self.hasher.digest(bytes(encrypted_attestation))
        proof_digest = self.hasher.digest(bytes(proof))
        if attestation_digest.is_zero() or proof_digest.is_zero():
            logger.warning("attestation_rejected", reason="degenerate_digest")
            return _REJECTED

        if not public_inputs:
            logger.info("attestation_rejected", reason="no_public_inputs")
            return _REJECTED

        if self.proof_verifier is not None:
            accepted = await self.proof_verifier.verify(
                bytes(encrypted_attestation), bytes(proof), public_inputs
            )
            if not accepted:
                logger.warning(
                    "attestation_rejected",
                    reason="proof_rejected",
                    attestation_digest=hex(attestation_digest.value),
                )
                return _REJECTED

        return AttestationVerification(True, public_inputs[0])

    async def verify_bundle(self, bundle: EncryptedAttestation) -> AttestationVerification:
        """Проверка аттестации из модели запроса."""
        return await self.verify(
            bundle.encrypted_attestation, bundle.proof, bundle.public_inputs
        )
