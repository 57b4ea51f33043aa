"""
Oracle — Ценовые точки оракула и результат их валидации
"""

from dataclasses import dataclass, field
from typing import NamedTuple, Optional

from pydantic import BaseModel, Field

from src.core.math.uint256 import UInt256


class OracleSample(NamedTuple):
    """Ценовая точка (price, timestamp)."""

    price: UInt256
    timestamp: UInt256


class OracleFeed(BaseModel):
    """
    Ценовой ряд оракула: параллельные последовательности цен и timestamps.

    Длины не проверяются моделью: несовпадение длин — fail-closed исход
    валидатора, а не ошибка разбора запроса.
    """

    prices: list[UInt256] = Field(default_factory=list, description="Цены по порядку")
    timestamps: list[UInt256] = Field(default_factory=list, description="Timestamps по порядку")
    deviation_threshold: Optional[UInt256] = Field(
        None, description="Порог отклонения (bp); None → порог из конфигурации"
    )

    model_config = {"frozen": True}

    def samples(self) -> list[OracleSample]:
        """Ряд как список OracleSample (по короткой последовательности)."""
        return [OracleSample(p, t) for p, t in zip(self.prices, self.timestamps)]


class OracleValidationResult(NamedTuple):
    """Результат валидации ценового ряда."""

    is_valid: bool
    accepted_prices: list[UInt256]


@dataclass(frozen=True)
class OracleValidationReport:
    """Диагностика валидации: какие пары отклонены и почему."""

    result: OracleValidationResult
    rejected_indices: tuple[int, ...] = field(default_factory=tuple)
    zero_price_indices: tuple[int, ...] = field(default_factory=tuple)
    timestamps_ordered: bool = True
    reason: str = ""
