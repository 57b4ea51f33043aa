"""Keccak-256 hash adapter.

Реализация Hash через web3.py. Результат — 32 байта big-endian,
приведённые к UInt256.
"""

from typing import Sequence

from web3 import Web3

from src.core.math.uint256 import UInt256


class Keccak256Hash:
    """Keccak-256 (Ethereum вариант, не NIST SHA3-256)."""

    def digest(self, data: bytes) -> UInt256:
        return UInt256.from_bytes(bytes(Web3.keccak(primitive=data)))

    def digest_words(self, words: Sequence[UInt256]) -> UInt256:
        """
        Hash от конкатенации 32-байтовых слов (аналог abi.encodePacked(uint256...)).

        Args:
            words: Последовательность UInt256

        Returns:
            keccak256(word_0 || word_1 || ...)
        """
        return self.digest(b"".join(word.to_bytes() for word in words))


def value_message_hash(value: UInt256) -> bytes:
    """Сообщение, которое оператор подписывает: keccak256(value как uint256)."""
    return bytes(Web3.keccak(primitive=value.to_bytes()))
