"""
Общие типы полей для pydantic моделей домена.

OpaqueBytes — непрозрачные байты (подпись, ключ оператора, шифротекст, proof).
На входе принимает bytes или 0x-hex строку, в JSON выводится как 0x-hex.
"""

from typing import Annotated, Any

from pydantic import BeforeValidator, PlainSerializer


def _parse_opaque_bytes(raw: Any) -> Any:
    if isinstance(raw, str):
        text = raw[2:] if raw.lower().startswith("0x") else raw
        try:
            return bytes.fromhex(text)
        except ValueError as exc:
            raise ValueError(f"invalid hex string: {exc}") from exc
    if isinstance(raw, (bytearray, memoryview)):
        return bytes(raw)
    return raw


OpaqueBytes = Annotated[
    bytes,
    BeforeValidator(_parse_opaque_bytes),
    PlainSerializer(lambda b: "0x" + b.hex(), return_type=str, when_used="json"),
]
