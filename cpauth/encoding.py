"""Codecs for unsigned integers travelling between client and server.

Integers are unsigned big-endian byte strings of minimal width, so zero is the
empty string. JSON bodies carry those bytes as hex text.
"""

from __future__ import annotations

from .errors import InvalidArgument


def int_to_bytes(value: int) -> bytes:
    if value < 0:
        raise InvalidArgument("Value must be a non-negative integer")
    return value.to_bytes((value.bit_length() + 7) // 8, "big")


def bytes_to_int(data: bytes) -> int:
    return int.from_bytes(data, "big")


def int_to_hex(value: int) -> str:
    return int_to_bytes(value).hex()


def hex_to_int(text: str, *, field: str = "value") -> int:
    try:
        return bytes_to_int(bytes.fromhex(text))
    except ValueError as exc:
        raise InvalidArgument(f"{field} must be hex encoded bytes") from exc


__all__ = ["bytes_to_int", "hex_to_int", "int_to_bytes", "int_to_hex"]
