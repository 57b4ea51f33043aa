"""
PoolSnapshot — Снапшот позиции LP

Immutable Pydantic модель: начальные количества токенов A/B, цены на входе
и текущие цены, fee rate пула. Используется для расчёта impermanent loss.
"""

from pydantic import BaseModel, Field

from src.core.math.uint256 import UInt256


class PoolSnapshot(BaseModel):
    """Состояние LP позиции для расчёта IL."""

    # Количества на входе
    initial_token_a_amount: UInt256 = Field(..., description="Начальное количество токена A")
    initial_token_b_amount: UInt256 = Field(..., description="Начальное количество токена B")

    # Цены
    current_token_a_price: UInt256 = Field(..., description="Текущая цена токена A")
    current_token_b_price: UInt256 = Field(..., description="Текущая цена токена B")
    initial_token_a_price: UInt256 = Field(..., description="Цена токена A на входе")
    initial_token_b_price: UInt256 = Field(..., description="Цена токена B на входе")

    # Комиссия пула
    pool_fee_rate: UInt256 = Field(..., description="Fee rate пула (bp)")

    model_config = {"frozen": True}
