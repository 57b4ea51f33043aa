"""
Тесты для OraclePriceValidator

Покрытие:
- Fail-closed на несовпадающих длинах и пустом ряде
- Отклонения соседних цен (граница порога, без short-circuit)
- Нулевая предыдущая цена
- Порядок timestamps
- accepted_prices при невалидном ряде
"""

import pytest

from src.compute import OraclePriceValidator, OracleValidatorConfig
from src.core.domain import OracleFeed, OracleSample
from src.core.math import ArithmeticOverflow, UInt256


def u(*values: int) -> list[UInt256]:
    """Helper: список UInt256."""
    return [UInt256(v) for v in values]


# =============================================================================
# FIXTURES
# =============================================================================


@pytest.fixture
def validator():
    """Валидатор с конфигурацией по умолчанию."""
    return OraclePriceValidator()


# =============================================================================
# FAIL-CLOSED
# =============================================================================


class TestFailClosed:
    """Несовпадение длин и пустой ряд"""

    def test_length_mismatch(self, validator) -> None:
        result = validator.validate(u(100, 101), u(1), UInt256(1000))
        assert result.is_valid is False
        assert result.accepted_prices == []

    def test_empty_series(self, validator) -> None:
        result = validator.validate([], [], UInt256(1000))
        assert result == (False, [])

    def test_length_mismatch_reason(self, validator) -> None:
        report = validator.inspect(u(100), u(1, 2), UInt256(1000))
        assert report.reason.startswith("length_mismatch")


# =============================================================================
# ОТКЛОНЕНИЯ
# =============================================================================


class TestDeviation:
    """Проверка отклонений соседних цен"""

    def test_reference_series(self, validator) -> None:
        """500bp и 666bp <= 1000bp, timestamps возрастают"""
        result = validator.validate(u(100, 105, 98), u(1, 2, 3), UInt256(1000))
        assert result.is_valid is True
        assert result.accepted_prices == u(105, 98)

    def test_single_point_valid(self, validator) -> None:
        """Одна точка: пар нет, ряд валиден"""
        result = validator.validate(u(100), u(1), UInt256(1000))
        assert result == (True, [])

    def test_deviation_at_threshold_accepted(self, validator) -> None:
        """Отклонение ровно на пороге допустимо"""
        result = validator.validate(u(100, 110), u(1, 2), UInt256(1000))
        assert result == (True, u(110))

    def test_deviation_above_threshold_rejected(self, validator) -> None:
        result = validator.validate(u(100, 111), u(1, 2), UInt256(1000))
        assert result == (False, [])

    def test_no_short_circuit(self, validator) -> None:
        """После отклонённой пары сканирование продолжается"""
        # 100→200: 10000bp (reject), 200→210: 500bp (accept)
        report = validator.inspect(u(100, 200, 210), u(1, 2, 3), UInt256(1000))
        assert report.result == (False, u(210))
        assert report.rejected_indices == (1,)

    def test_deviation_truncates(self, validator) -> None:
        """Отклонение усекается к нулю: 105→98 = 666.66 → 666bp"""
        assert validator.validate(u(105, 98), u(1, 2), UInt256(666)).is_valid is True
        assert validator.validate(u(105, 98), u(1, 2), UInt256(665)).is_valid is False

    def test_zero_previous_price(self, validator) -> None:
        """Нулевая предыдущая цена: ряд невалиден, пара пропущена"""
        report = validator.inspect(u(0, 100, 101), u(1, 2, 3), UInt256(1000))
        assert report.result == (False, u(101))
        assert report.zero_price_indices == (0,)

    def test_zero_threshold(self, validator) -> None:
        result = validator.validate(u(100, 100, 101), u(1, 2, 3), UInt256(0))
        assert result == (False, u(100))

    def test_default_threshold_from_config(self) -> None:
        strict = OraclePriceValidator(OracleValidatorConfig(default_deviation_threshold_bps=100))
        assert strict.validate(u(100, 105), u(1, 2)).is_valid is False
        assert OraclePriceValidator().validate(u(100, 105), u(1, 2)).is_valid is True

    def test_overflow_propagates(self, validator) -> None:
        """|Δp| * 10000 вне 256 бит — арифметическая ошибка"""
        with pytest.raises(ArithmeticOverflow):
            validator.validate([UInt256(1), UInt256.MAX], u(1, 2), UInt256(1000))


# =============================================================================
# TIMESTAMPS
# =============================================================================


class TestTimestamps:
    """Строгое возрастание timestamps"""

    def test_equal_timestamps_invalid(self, validator) -> None:
        report = validator.inspect(u(100, 101), u(5, 5), UInt256(1000))
        assert report.result.is_valid is False
        assert report.timestamps_ordered is False

    def test_decreasing_timestamps_invalid(self, validator) -> None:
        result = validator.validate(u(100, 101, 102), u(3, 2, 4), UInt256(1000))
        assert result.is_valid is False

    def test_accepted_prices_independent_of_timestamps(self, validator) -> None:
        """accepted_prices отражает только проверку отклонений"""
        result = validator.validate(u(100, 105, 98), u(3, 2, 1), UInt256(1000))
        assert result == (False, u(105, 98))


# =============================================================================
# ВХОДЫ-МОДЕЛИ
# =============================================================================


class TestModelInputs:
    """OracleSample и OracleFeed"""

    def test_validate_samples(self, validator) -> None:
        samples = [OracleSample(UInt256(p), UInt256(t)) for p, t in [(100, 1), (105, 2)]]
        assert validator.validate_samples(samples, UInt256(1000)) == (True, u(105))

    def test_validate_feed(self, validator) -> None:
        feed = OracleFeed(prices=[100, 105, 98], timestamps=[1, 2, 3], deviation_threshold=1000)
        assert validator.validate_feed(feed) == (True, u(105, 98))

    def test_idempotent(self, validator) -> None:
        args = (u(100, 105, 98), u(1, 2, 3), UInt256(1000))
        assert validator.validate(*args) == validator.validate(*args)

    def test_plain_int_inputs(self, validator) -> None:
        """int цены и timestamps приводятся к UInt256"""
        assert validator.validate([100, 105, 98], [1, 2, 3], 1000) == (True, u(105, 98))

    def test_plain_int_zero_previous_price(self, validator) -> None:
        report = validator.inspect([0, 100], [1, 2], 1000)
        assert report.result == (False, [])
        assert report.zero_price_indices == (0,)
