"""
UInt256 — 256-битное беззнаковое целое с проверкой переполнения

Базовый числовой тип compute-ядра. Все денежные величины, цены, количества
токенов, basis points и timestamps представлены как UInt256.

Модуль обеспечивает:
- Точную арифметику в диапазоне [0, 2**256 - 1]
- Checked сложение и умножение (ArithmeticOverflow вместо wraparound)
- Saturating вычитание (результат < 0 → 0)
- Деление с явной ошибкой DivisionByZero
- Конверсию в/из 64-битного счётчика, big-endian bytes и pydantic-поля

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Значение всегда в [0, UINT256_MAX], никакой молчаливой обрезки старших бит
2. Переполнение → ArithmeticOverflow
3. Деление на ноль → DivisionByZero
4. Тип immutable и hashable, сравнение совместимо с int
"""

from __future__ import annotations

from functools import total_ordering
from typing import Any, Final, Union

from pydantic import GetCoreSchemaHandler, GetJsonSchemaHandler
from pydantic.json_schema import JsonSchemaValue
from pydantic_core import core_schema

# =============================================================================
# CONSTANTS
# =============================================================================

UINT256_BITS: Final[int] = 256
UINT256_BYTES: Final[int] = 32
UINT256_MAX: Final[int] = (1 << UINT256_BITS) - 1

# Верхняя граница для счётчиков (количество операторов, threshold)
U64_MAX: Final[int] = (1 << 64) - 1

# Строковые формы во внешних контрактах (десятичная до 78 цифр, 0x-hex до 64)
UINT256_DECIMAL_PATTERN: Final[str] = "^(0|[1-9][0-9]{0,77})$"
UINT256_HEX_PATTERN: Final[str] = "^0[xX][0-9a-fA-F]{1,64}$"


# =============================================================================
# EXCEPTIONS
# =============================================================================


class UInt256Error(ArithmeticError):
    """Базовая ошибка арифметики UInt256."""


class ArithmeticOverflow(UInt256Error):
    """
    Результат операции вне диапазона [0, 2**256 - 1].

    Никогда не поглощается: продолжение вычисления с обрезанным значением
    исказило бы финансовый результат.
    """


class DivisionByZero(UInt256Error, ZeroDivisionError):
    """Деление или остаток по нулевому делителю."""


IntLike = Union["UInt256", int]


# =============================================================================
# UINT256
# =============================================================================


@total_ordering
class UInt256:
    """
    Immutable 256-битное беззнаковое целое.

    Операнды могут быть UInt256 или неотрицательным int:
        >>> UInt256(2) * 3
        UInt256(6)
        >>> UInt256(5) - 7
        UInt256(0)
        >>> UInt256.MAX + 1  # doctest: +SKIP
        Traceback (most recent call last):
            ...
        ArithmeticOverflow: ...
    """

    __slots__ = ("_value",)

    ZERO: "UInt256"
    ONE: "UInt256"
    MAX: "UInt256"

    def __init__(self, value: int = 0) -> None:
        if isinstance(value, UInt256):
            value = value._value
        if isinstance(value, bool) or not isinstance(value, int):
            raise TypeError(f"UInt256 requires an int, got {type(value).__name__}")
        if value < 0:
            raise ArithmeticOverflow(f"UInt256 underflow: {value} < 0")
        if value > UINT256_MAX:
            raise ArithmeticOverflow(f"UInt256 overflow: {value} exceeds 2**256 - 1")
        object.__setattr__(self, "_value", value)

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError("UInt256 is immutable")

    # -------------------------------------------------------------------------
    # Конверсии
    # -------------------------------------------------------------------------

    @classmethod
    def from_u64(cls, value: int) -> "UInt256":
        """
        Конверсия из 64-битного счётчика.

        Raises:
            ArithmeticOverflow: Если value вне [0, 2**64 - 1]
        """
        if value < 0 or value > U64_MAX:
            raise ArithmeticOverflow(f"value {value} does not fit into u64")
        return cls(value)

    def as_u64(self) -> int:
        """
        Конверсия в 64-битный счётчик (для заведомо малых значений).

        Raises:
            ArithmeticOverflow: Если значение не помещается в 64 бита
        """
        if self._value > U64_MAX:
            raise ArithmeticOverflow(f"UInt256 {self._value} does not fit into u64")
        return self._value

    @classmethod
    def from_bytes(cls, data: bytes) -> "UInt256":
        """
        Big-endian bytes → UInt256 (не более 32 байт).

        Пустая последовательность даёт ноль.
        """
        if len(data) > UINT256_BYTES:
            raise ArithmeticOverflow(
                f"{len(data)} bytes do not fit into UInt256 ({UINT256_BYTES} max)"
            )
        return cls(int.from_bytes(data, "big"))

    def to_bytes(self) -> bytes:
        """UInt256 → 32 байта big-endian."""
        return self._value.to_bytes(UINT256_BYTES, "big")

    @classmethod
    def parse(cls, raw: Any) -> "UInt256":
        """
        Разбор внешнего значения: UInt256, int, десятичная или 0x-hex строка.

        Raises:
            ValueError: Строка не является числом
            TypeError: Неподдерживаемый тип
            ArithmeticOverflow: Значение вне диапазона
        """
        if isinstance(raw, UInt256):
            return raw
        if isinstance(raw, str):
            text = raw.strip()
            if text.lower().startswith("0x"):
                return cls(int(text, 16))
            return cls(int(text, 10))
        return cls(raw)

    @property
    def value(self) -> int:
        """Значение как Python int."""
        return self._value

    def __int__(self) -> int:
        return self._value

    def __bool__(self) -> bool:
        return self._value != 0

    def is_zero(self) -> bool:
        return self._value == 0

    # -------------------------------------------------------------------------
    # Арифметика
    # -------------------------------------------------------------------------

    def __add__(self, other: IntLike) -> "UInt256":
        rhs = _operand(other)
        if rhs is None:
            return NotImplemented
        result = self._value + rhs
        if result > UINT256_MAX:
            raise ArithmeticOverflow(f"UInt256 addition overflow: {self._value} + {rhs}")
        return UInt256(result)

    __radd__ = __add__

    def __sub__(self, other: IntLike) -> "UInt256":
        # Saturating: отрицательный результат → 0
        rhs = _operand(other)
        if rhs is None:
            return NotImplemented
        if rhs >= self._value:
            return UInt256.ZERO
        return UInt256(self._value - rhs)

    def __rsub__(self, other: int) -> "UInt256":
        lhs = _operand(other)
        if lhs is None:
            return NotImplemented
        return UInt256(lhs) - self

    def checked_sub(self, other: IntLike) -> "UInt256":
        """
        Вычитание без насыщения.

        Raises:
            ArithmeticOverflow: Если other > self
        """
        rhs = _require_operand(other)
        if rhs > self._value:
            raise ArithmeticOverflow(f"UInt256 subtraction underflow: {self._value} - {rhs}")
        return UInt256(self._value - rhs)

    def __mul__(self, other: IntLike) -> "UInt256":
        rhs = _operand(other)
        if rhs is None:
            return NotImplemented
        result = self._value * rhs
        if result > UINT256_MAX:
            raise ArithmeticOverflow(
                f"UInt256 multiplication overflow: {self._value} * {rhs}"
            )
        return UInt256(result)

    __rmul__ = __mul__

    def __floordiv__(self, other: IntLike) -> "UInt256":
        rhs = _operand(other)
        if rhs is None:
            return NotImplemented
        if rhs == 0:
            raise DivisionByZero(f"UInt256 division by zero: {self._value} // 0")
        return UInt256(self._value // rhs)

    def __rfloordiv__(self, other: int) -> "UInt256":
        lhs = _operand(other)
        if lhs is None:
            return NotImplemented
        return UInt256(lhs) // self

    def __mod__(self, other: IntLike) -> "UInt256":
        rhs = _operand(other)
        if rhs is None:
            return NotImplemented
        if rhs == 0:
            raise DivisionByZero(f"UInt256 modulo by zero: {self._value} % 0")
        return UInt256(self._value % rhs)

    def abs_diff(self, other: IntLike) -> "UInt256":
        """|self - other| без насыщения."""
        rhs = _require_operand(other)
        if rhs > self._value:
            return UInt256(rhs - self._value)
        return UInt256(self._value - rhs)

    # -------------------------------------------------------------------------
    # Сравнение
    # -------------------------------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if isinstance(other, UInt256):
            return self._value == other._value
        if isinstance(other, int) and not isinstance(other, bool):
            return self._value == other
        return NotImplemented

    def __lt__(self, other: IntLike) -> bool:
        if isinstance(other, UInt256):
            return self._value < other._value
        if isinstance(other, int) and not isinstance(other, bool):
            return self._value < other
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self._value)

    def __repr__(self) -> str:
        return f"UInt256({self._value})"

    def __str__(self) -> str:
        return str(self._value)

    def __reduce__(self):
        return (UInt256, (self._value,))

    # -------------------------------------------------------------------------
    # Pydantic интеграция
    # -------------------------------------------------------------------------

    @classmethod
    def __get_pydantic_core_schema__(
        cls, source_type: Any, handler: GetCoreSchemaHandler
    ) -> core_schema.CoreSchema:
        """
        UInt256 как тип поля pydantic модели.

        Вход: UInt256 | int | "123" | "0x7b". JSON-вывод: десятичная строка
        (uint256 не помещается в JSON number без потери точности).
        """
        return core_schema.no_info_plain_validator_function(
            cls._validate,
            serialization=core_schema.plain_serializer_function_ser_schema(
                str, when_used="json"
            ),
        )

    @classmethod
    def __get_pydantic_json_schema__(
        cls, schema: core_schema.CoreSchema, handler: GetJsonSchemaHandler
    ) -> JsonSchemaValue:
        """JSON Schema поля: как $defs/uint256 в contracts/schema."""
        return {
            "oneOf": [
                {"type": "string", "pattern": UINT256_DECIMAL_PATTERN},
                {"type": "string", "pattern": UINT256_HEX_PATTERN},
                {"type": "integer", "minimum": 0},
            ]
        }

    @classmethod
    def _validate(cls, raw: Any) -> "UInt256":
        if isinstance(raw, bool):
            raise ValueError("boolean is not a valid UInt256")
        try:
            return cls.parse(raw)
        except (ArithmeticOverflow, TypeError) as exc:
            raise ValueError(str(exc)) from exc


def _operand(other: Any) -> int | None:
    if isinstance(other, UInt256):
        return other._value
    if isinstance(other, int) and not isinstance(other, bool):
        if other < 0 or other > UINT256_MAX:
            raise ArithmeticOverflow(f"operand {other} outside UInt256 range")
        return other
    return None


def _require_operand(other: Any) -> int:
    rhs = _operand(other)
    if rhs is None:
        raise TypeError(f"unsupported operand type: {type(other).__name__}")
    return rhs


UInt256.ZERO = UInt256(0)
UInt256.ONE = UInt256(1)
UInt256.MAX = UInt256(UINT256_MAX)
