"""
PolicyParameters — Параметры страхового полиса

Immutable Pydantic модель, описывающая один контракт страхования от
impermanent loss. Не изменяется в течение оценки claim.
"""

from pydantic import BaseModel, Field

from src.core.math.uint256 import UInt256


class PolicyParameters(BaseModel):
    """
    Параметры полиса.

    coverage_ratio в basis points; значения > 10000 не запрещены
    (усиление покрытия).
    """

    policy_id: UInt256 = Field(..., description="Идентификатор полиса (только для аудита)")
    coverage_amount: UInt256 = Field(..., description="Лимит выплаты (cap)")
    deductible: UInt256 = Field(..., description="Франшиза: убыток <= deductible не покрывается")
    coverage_ratio: UInt256 = Field(..., description="Доля покрытия сверх франшизы (bp)")

    model_config = {"frozen": True}
