"""Payout Calculator — страховая выплата по impermanent loss

    IL <= deductible           → 0
    covered_loss = IL - deductible
    payout = min(covered_loss * coverage_ratio // 10000, coverage_amount)

policy_id не влияет на арифметику, только на трассировку.
"""

from src.core.domain.policy import PolicyParameters
from src.core.logger import get_logger
from src.core.math.basis_points import apply_bps
from src.core.math.uint256 import UInt256

logger = get_logger(__name__)


class PayoutCalculator:
    """Калькулятор выплаты с франшизой, долей покрытия и лимитом."""

    def compute(
        self,
        policy_id: UInt256,
        impermanent_loss: UInt256,
        coverage_amount: UInt256,
        deductible: UInt256,
        coverage_ratio: UInt256,
    ) -> UInt256:
        """Расчёт выплаты.

        Args:
            policy_id: идентификатор полиса (аудит)
            impermanent_loss: рассчитанный IL
            coverage_amount: лимит выплаты
            deductible: франшиза
            coverage_ratio: доля покрытия сверх франшизы (bp)

        Returns:
            Выплата

        Raises:
            ArithmeticOverflow: covered_loss * coverage_ratio вне 256 бит
        """
        impermanent_loss = UInt256.parse(impermanent_loss)
        coverage_amount = UInt256.parse(coverage_amount)
        deductible = UInt256.parse(deductible)
        coverage_ratio = UInt256.parse(coverage_ratio)

        if impermanent_loss <= deductible:
            return UInt256.ZERO

        covered_loss = impermanent_loss - deductible
        payout_before_cap = apply_bps(covered_loss, coverage_ratio)

        if payout_before_cap > coverage_amount:
            logger.info(
                "payout_capped",
                policy_id=str(policy_id),
                payout_before_cap=str(payout_before_cap),
                coverage_amount=str(coverage_amount),
            )
            return coverage_amount

        return payout_before_cap

    def compute_for_policy(
        self,
        policy: PolicyParameters,
        impermanent_loss: UInt256,
    ) -> UInt256:
        """Расчёт выплаты по параметрам полиса."""
        return self.compute(
            policy.policy_id,
            impermanent_loss,
            policy.coverage_amount,
            policy.deductible,
            policy.coverage_ratio,
        )
