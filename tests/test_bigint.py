import pytest

from globalchain.bigint import (
    bigint_from_compact,
    bigint_from_hash,
    compact_from_bigint,
)
from globalchain.hashing import Hash


def test_bigint_from_hash_is_little_endian():
    h = Hash.from_bytes(bytes([1]) + bytes(31))
    assert bigint_from_hash(h) == 1
    h_high = Hash.from_bytes(bytes(31) + bytes([1]))
    assert bigint_from_hash(h_high) == 1 << 248


def test_bigint_from_hash_round_trip():
    h = Hash.compute(b"target")
    assert bigint_from_hash(h).to_bytes(32, "little") == bytes(h)


def test_bigint_from_empty_hash_is_zero():
    assert bigint_from_hash(Hash.empty()) == 0


def test_compact_of_small_value_is_unchanged():
    assert compact_from_bigint(0x123456) == 0x123456


def test_compact_at_mantissa_limit():
    assert compact_from_bigint(0x800000) == 0x01008000


@pytest.mark.parametrize("value", [0x8000, 0x123456, 0x7FFFFF])
def test_compact_exponent_grows_by_one_per_byte(value):
    base = compact_from_bigint(value)
    shifted = compact_from_bigint(value << 8)
    assert shifted >> 24 == (base >> 24) + 1
    assert shifted & 0x7FFFFF == base & 0x7FFFFF


@pytest.mark.parametrize("value", [0, 1, 0xFFFFFF, 1 << 200, (1 << 256) - 1])
def test_compact_mantissa_fits_23_bits(value):
    compact = compact_from_bigint(value)
    assert compact & 0x00800000 == 0
    assert 0 <= compact <= 0xFFFFFFFF


def test_compact_rejects_negative():
    with pytest.raises(ValueError):
        compact_from_bigint(-1)


def test_bigint_from_compact_exponent_three_is_mantissa():
    assert bigint_from_compact(0x03123456) == 0x123456


@pytest.mark.parametrize("exponent", [3, 4, 10, 30])
def test_bigint_from_compact_scales_by_256(exponent):
    mantissa = 0x4ABCDE
    low = bigint_from_compact((exponent << 24) | mantissa)
    high = bigint_from_compact(((exponent + 1) << 24) | mantissa)
    assert high == low * 256


def test_bigint_from_compact_ignores_high_mantissa_bit():
    assert bigint_from_compact(0x05123456) == bigint_from_compact(0x05923456)


def test_bigint_from_compact_small_exponent_shifts_right():
    assert bigint_from_compact(0x02123456) == 0x123456 >> 8
    assert bigint_from_compact(0x00123456) == 0


def test_bigint_from_compact_rejects_out_of_range():
    with pytest.raises(ValueError):
        bigint_from_compact(1 << 32)