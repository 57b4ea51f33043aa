"""
Basis Points — доли в единицах 1/10000

Используются для fee rate пула, coverage ratio полиса и порога отклонения
оракула. Значения > BP_SCALE допустимы и означают усиление (amplification),
а не ошибку: тип диапазон не ограничивает.
"""

from typing import Final

from src.core.math.uint256 import UInt256

# Масштаб basis points: 10000 bp = 100%
BP_SCALE: Final[int] = 10_000

# Alias для документирования сигнатур
BasisPoints = UInt256


def apply_bps(amount: UInt256, bps: UInt256) -> UInt256:
    """
    amount * bps // BP_SCALE (усечение к нулю).

    Raises:
        ArithmeticOverflow: Если amount * bps не помещается в 256 бит

    Examples:
        >>> apply_bps(UInt256(220000), UInt256(30))
        UInt256(660)
        >>> apply_bps(UInt256(400), UInt256(8000))
        UInt256(320)
    """
    return (amount * bps) // BP_SCALE


def deviation_bps(previous: UInt256, current: UInt256) -> UInt256:
    """
    Относительное отклонение |current - previous| / previous в basis points.

    Raises:
        DivisionByZero: Если previous == 0 (вызывающий код проверяет заранее)

    Examples:
        >>> deviation_bps(UInt256(100), UInt256(105))
        UInt256(500)
        >>> deviation_bps(UInt256(105), UInt256(98))
        UInt256(666)
    """
    return (previous.abs_diff(current) * BP_SCALE) // previous
