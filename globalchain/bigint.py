"""Conversions between hashes, integers and the compact target encoding."""

from __future__ import annotations

from .hashing import Hash

_MANTISSA_MASK = 0x007FFFFF
_MANTISSA_LIMIT = 0x00800000
_U32_MASK = 0xFFFFFFFF


def bigint_from_hash(h: Hash) -> int:
    """Interpret the hash bytes as a little-endian unsigned integer."""
    return int.from_bytes(bytes(h), "little")


def compact_from_bigint(value: int) -> int:
    """Encode ``value`` as an 8-bit exponent and a 23-bit mantissa.

    The exponent counts how many whole bytes were shifted out.
    """
    if value < 0:
        raise ValueError("compact encoding requires a non-negative value")
    mantissa_value = value
    exponent = 0
    while mantissa_value >= _MANTISSA_LIMIT:
        mantissa_value >>= 8
        exponent += 1
    mantissa = mantissa_value if mantissa_value <= _U32_MASK else 0
    if mantissa & _MANTISSA_LIMIT:
        exponent += 1
    return ((exponent << 24) | (mantissa & _MANTISSA_MASK)) & _U32_MASK


def bigint_from_compact(compact: int) -> int:
    """Decode a compact target into an integer."""
    if not 0 <= compact <= _U32_MASK:
        raise ValueError("compact value must fit in 32 unsigned bits")
    mantissa = compact & _MANTISSA_MASK
    exponent = compact >> 24
    if exponent > 3:
        return mantissa << (8 * (exponent - 3))
    return mantissa >> (8 * (3 - exponent))