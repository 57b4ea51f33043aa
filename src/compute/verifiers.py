"""Signature verifier adapters.

EcdsaSignatureVerifier — ECDSA (secp256k1) проверка подписи оператора через
eth_account: оператор подписывает keccak256(value) в формате EIP-191
personal_sign, verifier восстанавливает адрес подписанта и сравнивает его
с ключом оператора.

Ключ оператора:
- 20 байт: Ethereum адрес
- 64 байта: несжатый public key без префикса 0x04 (адрес = keccak(pk)[-20:])
"""

from eth_account import Account
from eth_account.messages import encode_defunct
from eth_keys.exceptions import BadSignature, ValidationError as KeyValidationError
from web3 import Web3

from src.compute.hashing import value_message_hash
from src.core.logger import get_logger
from src.core.math.uint256 import UInt256

logger = get_logger(__name__)

ADDRESS_LENGTH = 20
PUBLIC_KEY_LENGTH = 64


def operator_address(operator_key: bytes) -> bytes | None:
    """
    Адрес оператора из ключа.

    Returns:
        20-байтовый адрес или None при неподдерживаемой длине ключа
    """
    if len(operator_key) == ADDRESS_LENGTH:
        return operator_key
    if len(operator_key) == PUBLIC_KEY_LENGTH:
        return bytes(Web3.keccak(primitive=operator_key))[-ADDRESS_LENGTH:]
    return None


def sign_value(value: UInt256, private_key: bytes | str) -> bytes:
    """Подпись значения ключом оператора (для операторских клиентов и тестов)."""
    message = encode_defunct(primitive=value_message_hash(value))
    signed = Account.sign_message(message, private_key=private_key)
    return bytes(signed.signature)


class EcdsaSignatureVerifier:
    """ECDSA verifier подписей операторов."""

    async def verify(
        self,
        value: UInt256,
        signature: bytes,
        operator_key: bytes,
    ) -> bool:
        expected = operator_address(operator_key)
        if expected is None:
            logger.warning(
                "unsupported_operator_key",
                key_length=len(operator_key),
            )
            return False

        message = encode_defunct(primitive=value_message_hash(value))
        try:
            recovered = Account.recover_message(message, signature=signature)
        except (BadSignature, KeyValidationError, ValueError, TypeError) as exc:
            logger.warning(
                "malformed_operator_signature",
                operator=Web3.to_checksum_address(expected),
                error=str(exc),
            )
            return False

        return bytes.fromhex(recovered[2:]) == expected
