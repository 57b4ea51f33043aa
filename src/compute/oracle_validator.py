"""Oracle Price Validator — проверка ценового ряда оракула

Проверяет:
- Совпадение длин рядов цен и timestamps, непустоту
- Отклонение соседних цен в basis points: |p[i] - p[i-1]| * 10000 // p[i-1]
- Строгое возрастание timestamps

Поведение:
1. Несовпадение длин / пустой ряд → (False, [])
2. Нулевая предыдущая цена → ряд невалиден, пара пропускается
3. Отклонение > порога → ряд невалиден, сканирование продолжается
   (без short-circuit), иначе текущая цена попадает в accepted_prices
4. Первая пара с timestamps[i] <= timestamps[i-1] → ряд невалиден,
   проверка timestamps прекращается
5. accepted_prices отражает результат проверки отклонений независимо
   от проверки timestamps
"""

from dataclasses import dataclass
from typing import Final, Optional, Sequence

from src.core.domain.oracle import (
    OracleFeed,
    OracleSample,
    OracleValidationReport,
    OracleValidationResult,
)
from src.core.logger import get_logger
from src.core.math.basis_points import deviation_bps
from src.core.math.uint256 import UInt256

logger = get_logger(__name__)


# =============================================================================
# CONSTANTS
# =============================================================================

# 10%: порог отклонения соседних цен по умолчанию
DEFAULT_DEVIATION_THRESHOLD_BPS: Final[int] = 1_000


# =============================================================================
# CONFIG
# =============================================================================


@dataclass(frozen=True)
class OracleValidatorConfig:
    """Конфигурация валидатора оракула."""

    # Порог, если вызывающий код не передал свой
    default_deviation_threshold_bps: int = DEFAULT_DEVIATION_THRESHOLD_BPS


# =============================================================================
# VALIDATOR
# =============================================================================


class OraclePriceValidator:
    """Валидатор ценового ряда оракула."""

    def __init__(self, config: OracleValidatorConfig | None = None):
        self.config = config or OracleValidatorConfig()

    def validate(
        self,
        prices: Sequence[UInt256],
        timestamps: Sequence[UInt256],
        deviation_threshold: Optional[UInt256] = None,
    ) -> OracleValidationResult:
        """Валидация ряда.

        Args:
            prices: цены по порядку
            timestamps: timestamps по порядку (той же длины)
            deviation_threshold: допустимое отклонение соседних цен (bp);
                None → config.default_deviation_threshold_bps

        Returns:
            OracleValidationResult(is_valid, accepted_prices)

        Raises:
            ArithmeticOverflow: если |Δp| * 10000 не помещается в 256 бит
        """
        return self.inspect(prices, timestamps, deviation_threshold).result

    def validate_samples(
        self,
        samples: Sequence[OracleSample],
        deviation_threshold: Optional[UInt256] = None,
    ) -> OracleValidationResult:
        """Валидация ряда, заданного точками (price, timestamp)."""
        prices = [sample.price for sample in samples]
        timestamps = [sample.timestamp for sample in samples]
        return self.validate(prices, timestamps, deviation_threshold)

    def validate_feed(self, feed: OracleFeed) -> OracleValidationResult:
        """Валидация ряда из запроса."""
        return self.validate(feed.prices, feed.timestamps, feed.deviation_threshold)

    def inspect(
        self,
        prices: Sequence[UInt256],
        timestamps: Sequence[UInt256],
        deviation_threshold: Optional[UInt256] = None,
    ) -> OracleValidationReport:
        """Валидация с диагностикой (индексы отклонённых точек, причина)."""
        if deviation_threshold is None:
            threshold = UInt256(self.config.default_deviation_threshold_bps)
        else:
            threshold = UInt256.parse(deviation_threshold)
        prices = [UInt256.parse(price) for price in prices]
        timestamps = [UInt256.parse(ts) for ts in timestamps]

        if len(prices) != len(timestamps):
            logger.info(
                "oracle_series_rejected",
                reason="length_mismatch",
                prices=len(prices),
                timestamps=len(timestamps),
            )
            return OracleValidationReport(
                result=OracleValidationResult(False, []),
                reason=f"length_mismatch: {len(prices)} prices vs {len(timestamps)} timestamps",
            )

        if not prices:
            logger.info("oracle_series_rejected", reason="empty_series")
            return OracleValidationReport(
                result=OracleValidationResult(False, []),
                reason="empty_series",
            )

        is_valid = True
        accepted: list[UInt256] = []
        rejected: list[int] = []
        zero_prices: list[int] = []

        # 1. Отклонения соседних цен
        for i in range(1, len(prices)):
            prev_price = prices[i - 1]
            curr_price = prices[i]

            if prev_price.is_zero():
                is_valid = False
                zero_prices.append(i - 1)
                continue

            deviation = deviation_bps(prev_price, curr_price)
            if deviation > threshold:
                is_valid = False
                rejected.append(i)
            else:
                accepted.append(curr_price)

        # 2. Порядок timestamps
        timestamps_ordered = True
        for i in range(1, len(timestamps)):
            if timestamps[i] <= timestamps[i - 1]:
                is_valid = False
                timestamps_ordered = False
                break

        reasons = []
        if zero_prices:
            reasons.append(f"zero_price_at={zero_prices}")
        if rejected:
            reasons.append(f"deviation_exceeded_at={rejected}")
        if not timestamps_ordered:
            reasons.append("timestamps_not_increasing")

        if not is_valid:
            logger.info(
                "oracle_series_rejected",
                reason=", ".join(reasons),
                points=len(prices),
                accepted=len(accepted),
                threshold_bps=int(threshold),
            )

        return OracleValidationReport(
            result=OracleValidationResult(is_valid, accepted),
            rejected_indices=tuple(rejected),
            zero_price_indices=tuple(zero_prices),
            timestamps_ordered=timestamps_ordered,
            reason=", ".join(reasons),
        )
