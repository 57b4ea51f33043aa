"""
Core math modules

Целочисленные примитивы compute-ядра: UInt256, isqrt, basis points.
"""

# UInt256
from src.core.math.uint256 import (
    U64_MAX,
    UINT256_BYTES,
    UINT256_MAX,
    ArithmeticOverflow,
    DivisionByZero,
    UInt256,
    UInt256Error,
)

# Integer square root
from src.core.math.isqrt import isqrt

# Basis points
from src.core.math.basis_points import (
    BP_SCALE,
    BasisPoints,
    apply_bps,
    deviation_bps,
)

__all__ = [
    # UInt256: Constants
    "U64_MAX",
    "UINT256_BYTES",
    "UINT256_MAX",
    # UInt256: Exceptions
    "UInt256Error",
    "ArithmeticOverflow",
    "DivisionByZero",
    # UInt256: Types
    "UInt256",
    # Integer square root
    "isqrt",
    # Basis points
    "BP_SCALE",
    "BasisPoints",
    "apply_bps",
    "deviation_bps",
]
