"""
Integer square root — floor(sqrt(v)) над UInt256

Метод Ньютона (вавилонский) в целых числах:
    x_0 = v
    y_0 = ceil(v / 2)
    y_{n+1} = (y_n + v // y_n) // 2,   пока y_n < x_n

Последовательность строго убывает до стабилизации на floor(sqrt(v)),
поэтому цикл всегда завершается.

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. isqrt(0) = 0 (ранний выход, деления на ноль нет)
2. isqrt(n)**2 <= n < (isqrt(n) + 1)**2
3. Переполнения нет на всём диапазоне, включая UInt256.MAX
"""

from src.core.math.uint256 import UInt256

_TWO = UInt256(2)


def isqrt(value: UInt256) -> UInt256:
    """
    Целочисленный квадратный корень.

    Args:
        value: Неотрицательное значение

    Returns:
        floor(sqrt(value))

    Examples:
        >>> isqrt(UInt256(0))
        UInt256(0)
        >>> isqrt(UInt256(15))
        UInt256(3)
        >>> isqrt(UInt256(16))
        UInt256(4)
    """
    if value.is_zero():
        return UInt256.ZERO

    x = value
    # ceil(v / 2) без формирования v + 1 (иначе переполнение на UInt256.MAX)
    y = value // _TWO + value % _TWO

    while y < x:
        x = y
        y = (y + value // y) // _TWO

    return x
