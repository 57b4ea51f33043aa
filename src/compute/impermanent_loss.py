"""Impermanent Loss Calculator — IL позиции LP в constant-product пуле

ФОРМУЛЫ (целочисленные, усечение к нулю):
    price_ratio    = (P_a_now * P_b_0) // (P_a_0 * P_b_now)
    initial_value  = A_0 * P_a_0 + B_0 * P_b_0
    hold_value     = A_0 * P_a_now + B_0 * P_b_now
    lp_multiplier  = (2 * isqrt(price_ratio)) // (1 + price_ratio)
    lp_value       = initial_value * lp_multiplier // 1
    fees_earned    = initial_value * fee_rate_bp // 10000
    total_lp_value = lp_value + fees_earned
    IL             = max(hold_value - total_lp_value, 0)

lp_multiplier — грубая целочисленная аппроксимация коэффициента
2*sqrt(r)/(1+r); потеря точности ограничена усечением и ожидаема.

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Нулевая начальная цена любого токена → (0, False), без исключения
2. Переполнение промежуточных произведений → ArithmeticOverflow
3. Нулевой знаменатель price_ratio (P_b_now == 0) → DivisionByZero
"""

from dataclasses import dataclass
from typing import NamedTuple

from src.core.domain.pool import PoolSnapshot
from src.core.logger import get_logger
from src.core.math.basis_points import apply_bps
from src.core.math.isqrt import isqrt
from src.core.math.uint256 import UInt256

logger = get_logger(__name__)


# =============================================================================
# RESULTS
# =============================================================================


class ImpermanentLossResult(NamedTuple):
    """Результат расчёта IL."""

    impermanent_loss: UInt256
    has_loss: bool


@dataclass(frozen=True)
class ImpermanentLossBreakdown:
    """Все промежуточные величины формулы IL (для аудита)."""

    price_ratio: UInt256
    initial_value: UInt256
    hold_value: UInt256
    lp_multiplier: UInt256
    lp_value: UInt256
    fees_earned: UInt256
    total_lp_value: UInt256
    impermanent_loss: UInt256
    has_loss: bool

    def result(self) -> ImpermanentLossResult:
        return ImpermanentLossResult(self.impermanent_loss, self.has_loss)


_NO_LOSS = ImpermanentLossBreakdown(
    price_ratio=UInt256.ZERO,
    initial_value=UInt256.ZERO,
    hold_value=UInt256.ZERO,
    lp_multiplier=UInt256.ZERO,
    lp_value=UInt256.ZERO,
    fees_earned=UInt256.ZERO,
    total_lp_value=UInt256.ZERO,
    impermanent_loss=UInt256.ZERO,
    has_loss=False,
)


# =============================================================================
# CALCULATOR
# =============================================================================


class ImpermanentLossCalculator:
    """Калькулятор impermanent loss."""

    def compute(
        self,
        initial_token_a_amount: UInt256,
        initial_token_b_amount: UInt256,
        current_token_a_price: UInt256,
        current_token_b_price: UInt256,
        initial_token_a_price: UInt256,
        initial_token_b_price: UInt256,
        pool_fee_rate: UInt256,
    ) -> ImpermanentLossResult:
        """Расчёт IL.

        Returns:
            ImpermanentLossResult(impermanent_loss, has_loss)
        """
        return self.breakdown(
            initial_token_a_amount,
            initial_token_b_amount,
            current_token_a_price,
            current_token_b_price,
            initial_token_a_price,
            initial_token_b_price,
            pool_fee_rate,
        ).result()

    def compute_for_pool(self, pool: PoolSnapshot) -> ImpermanentLossResult:
        """Расчёт IL по снапшоту пула."""
        return self.breakdown_for_pool(pool).result()

    def breakdown_for_pool(self, pool: PoolSnapshot) -> ImpermanentLossBreakdown:
        return self.breakdown(
            pool.initial_token_a_amount,
            pool.initial_token_b_amount,
            pool.current_token_a_price,
            pool.current_token_b_price,
            pool.initial_token_a_price,
            pool.initial_token_b_price,
            pool.pool_fee_rate,
        )

    def breakdown(
        self,
        initial_token_a_amount: UInt256,
        initial_token_b_amount: UInt256,
        current_token_a_price: UInt256,
        current_token_b_price: UInt256,
        initial_token_a_price: UInt256,
        initial_token_b_price: UInt256,
        pool_fee_rate: UInt256,
    ) -> ImpermanentLossBreakdown:
        """Расчёт IL со всеми промежуточными величинами.

        Raises:
            ArithmeticOverflow: переполнение произведений
            DivisionByZero: current_token_b_price == 0 при ненулевых начальных ценах
        """
        (
            initial_token_a_amount,
            initial_token_b_amount,
            current_token_a_price,
            current_token_b_price,
            initial_token_a_price,
            initial_token_b_price,
            pool_fee_rate,
        ) = map(
            UInt256.parse,
            (
                initial_token_a_amount,
                initial_token_b_amount,
                current_token_a_price,
                current_token_b_price,
                initial_token_a_price,
                initial_token_b_price,
                pool_fee_rate,
            ),
        )

        if initial_token_a_price.is_zero() or initial_token_b_price.is_zero():
            logger.info("impermanent_loss_undefined", reason="zero_initial_price")
            return _NO_LOSS

        # 1. Кросс-отношение движения цен
        price_ratio = (current_token_a_price * initial_token_b_price) // (
            initial_token_a_price * current_token_b_price
        )

        # 2. Стоимость на входе и стоимость при удержании (без LP)
        initial_value = (
            initial_token_a_amount * initial_token_a_price
            + initial_token_b_amount * initial_token_b_price
        )
        hold_value = (
            initial_token_a_amount * current_token_a_price
            + initial_token_b_amount * current_token_b_price
        )

        # 3. Стоимость LP позиции
        lp_multiplier = (isqrt(price_ratio) * 2) // (price_ratio + 1)
        lp_value = (initial_value * lp_multiplier) // UInt256.ONE

        # 4. Комиссии пула
        fees_earned = apply_bps(initial_value, pool_fee_rate)
        total_lp_value = lp_value + fees_earned

        # 5. IL (saturating)
        impermanent_loss = hold_value - total_lp_value
        has_loss = impermanent_loss > UInt256.ZERO

        return ImpermanentLossBreakdown(
            price_ratio=price_ratio,
            initial_value=initial_value,
            hold_value=hold_value,
            lp_multiplier=lp_multiplier,
            lp_value=lp_value,
            fees_earned=fees_earned,
            total_lp_value=total_lp_value,
            impermanent_loss=impermanent_loss,
            has_loss=has_loss,
        )
