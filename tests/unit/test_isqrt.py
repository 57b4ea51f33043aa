"""
Тесты для integer square root (метод Ньютона)

Проверяет:
1. isqrt(0) = 0
2. isqrt(n)**2 <= n < (isqrt(n) + 1)**2
3. Отсутствие переполнения на UInt256.MAX
"""

import math

import pytest

from src.core.math import UINT256_MAX, UInt256, isqrt


class TestIsqrt:
    """Тесты isqrt"""

    def test_zero(self) -> None:
        assert isqrt(UInt256.ZERO) == UInt256.ZERO

    @pytest.mark.parametrize(
        "n, expected",
        [(1, 1), (2, 1), (3, 1), (4, 2), (15, 3), (16, 4), (17, 4), (99, 9), (100, 10)],
    )
    def test_small_values(self, n: int, expected: int) -> None:
        assert isqrt(UInt256(n)) == expected

    @pytest.mark.parametrize(
        "n",
        [
            10**18,
            10**18 + 1,
            2**128 - 1,
            2**128,
            2**255 + 12345,
            (2**128 - 1) ** 2,
            UINT256_MAX,
        ],
    )
    def test_floor_property(self, n: int) -> None:
        """r**2 <= n < (r + 1)**2"""
        r = isqrt(UInt256(n)).value
        assert r * r <= n < (r + 1) * (r + 1)
        assert r == math.isqrt(n)

    def test_max_does_not_overflow(self) -> None:
        """ceil(v / 2) без v + 1"""
        assert isqrt(UInt256.MAX) == 2**128 - 1

    def test_deterministic(self) -> None:
        value = UInt256(123456789)
        assert isqrt(value) == isqrt(value)
