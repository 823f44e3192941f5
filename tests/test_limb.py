"""Tests for the per-width limb primitives."""

import random

import pytest

from cryptonum.errors import ConfigError, DivisionByZero, LimbValueError, OverflowFault, UnderflowFault
from cryptonum.limb import U8, U16, U32, U64, U128, limb_named

from conftest import weighted_limb

SEED = 0x11B


# ---------------------------------------------------------------------------
# Carry chain vectors (two u8 limbs, written high, low)
# ---------------------------------------------------------------------------


def add2(a: tuple[int, int], b: tuple[int, int]) -> tuple[tuple[int, int], bool]:
    low, c = U8.carrying_add(a[1], b[1], False)
    high, c = U8.carrying_add(a[0], b[0], c)
    return ((high, low), c)


def sub2(a: tuple[int, int], b: tuple[int, int]) -> tuple[tuple[int, int], bool]:
    low, b_ = U8.borrowing_sub(a[1], b[1], False)
    high, b_ = U8.borrowing_sub(a[0], b[0], b_)
    return ((high, low), b_)


def test_carrying_add_vectors():
    first, carry = add2((100, 101), (100, 200))
    assert first == (201, 45)
    assert carry is False
    second, carry = add2(first, (100, 200))
    assert second == (45, 245)
    assert carry is True


def test_borrowing_sub_vectors():
    first, borrow = sub2((100, 200), (100, 101))
    assert first == (0, 99)
    assert borrow is False
    second, borrow = sub2(first, (100, 101))
    assert second == (155, 254)
    assert borrow is True


def test_u128_carrying_add():
    a_high, a_low = 12345678901234567890123456789012345678, 234567890123456789012345678901234567890
    b_high, b_low = 123456789012345678901234567890123456789, 234567890123456789012345678901234567890
    low, c = U128.carrying_add(a_low, b_low, False)
    high, c = U128.carrying_add(a_high, b_high, c)
    total = ((a_high << 128) | a_low) + ((b_high << 128) | b_low)
    assert (high << 128) | low == total & ((1 << 256) - 1)
    assert c == (total >> 256 != 0)


def test_wrapping_edges():
    assert U128.wrapping_add(U128.max() - 55, 55) == U128.max()
    assert U128.wrapping_add(U128.max(), 1) == 0
    assert U8.wrapping_sub(0, 1) == 255
    assert U16.overflowing_add(0xFFFF, 1) == (0, True)
    assert U16.overflowing_sub(0, 1) == (0xFFFF, True)


@pytest.mark.parametrize("limb", [U8, U16, U32, U64, U128], ids=lambda l: l.name)
def test_add_sub_agree_with_int(limb):
    rng = random.Random(SEED)
    fails = 0
    first_failure = ""
    modulus = 1 << limb.bits
    for _ in range(2000):
        a = weighted_limb(rng, limb)
        b = weighted_limb(rng, limb)
        checks = [
            (limb.wrapping_add(a, b), (a + b) % modulus),
            (limb.overflowing_add(a, b), ((a + b) % modulus, a + b >= modulus)),
            (limb.checked_add(a, b), a + b if a + b < modulus else None),
            (limb.saturating_add(a, b), min(a + b, limb.mask)),
            (limb.wrapping_sub(a, b), (a - b) % modulus),
            (limb.overflowing_sub(a, b), ((a - b) % modulus, a < b)),
            (limb.checked_sub(a, b), a - b if a >= b else None),
            (limb.saturating_sub(a, b), max(a - b, 0)),
            (limb.wrapping_mul(a, b), (a * b) % modulus),
            (limb.overflowing_mul(a, b), ((a * b) % modulus, a * b >= modulus)),
        ]
        for k, (got, expected) in enumerate(checks):
            if got != expected:
                fails += 1
                if fails == 1:
                    first_failure = f"check {k} ({a:#x}, {b:#x}): got {got}, expected {expected}"
    assert fails == 0, f"{fails} failures. First: {first_failure}"


def test_unchecked_faults():
    with pytest.raises(OverflowFault):
        U8.unchecked_add(200, 56)
    with pytest.raises(UnderflowFault):
        U8.unchecked_sub(1, 2)
    with pytest.raises(OverflowFault):
        U8.unchecked_mul(16, 16)
    with pytest.raises(OverflowFault):
        U8.unchecked_pow(2, 8)
    assert U8.unchecked_add(200, 55) == 255
    assert U8.unchecked_pow(2, 7) == 128


def test_pow_families():
    assert U8.wrapping_pow(3, 5) == 243
    assert U8.overflowing_pow(3, 6) == (729 % 256, True)
    assert U8.checked_pow(3, 6) is None
    assert U8.saturating_pow(3, 6) == 255
    assert U64.overflowing_pow(2, 63) == (1 << 63, False)
    assert U64.overflowing_pow(2, 64) == (0, True)
    assert U8.overflowing_pow(0, 0) == (1, False)
    with pytest.raises(LimbValueError):
        U8.wrapping_pow(2, -1)


def test_division_by_zero():
    with pytest.raises(DivisionByZero):
        U32.wrapping_div(5, 0)
    with pytest.raises(ZeroDivisionError):
        U32.wrapping_rem(5, 0)
    assert U32.checked_div(5, 0) is None
    assert U32.checked_rem(5, 0) is None
    assert U32.overflowing_div(7, 2) == (3, False)
    assert U32.saturating_div(7, 2) == 3


def test_bit_operations():
    assert U8.wrapping_shl(0b1000_0001, 1) == 0b0000_0010
    assert U8.wrapping_shl(1, 9) == 2
    assert U8.wrapping_shr(0x80, 15) == 1
    assert U8.rotate_left(0b1000_0001, 1) == 0b0000_0011
    assert U8.rotate_right(0b0000_0011, 1) == 0b1000_0001
    assert U16.count_ones(0xF0F0) == 8
    assert U16.count_zeros(0xF0F0) == 8
    assert U128.count_ones(U128.max()) == 128
    assert U64.count_ones(0) == 0
    assert U32.leading_zeros(1) == 31
    assert U32.trailing_zeros(0) == 32
    assert U32.trailing_zeros(8) == 3
    assert U8.leading_ones(0xF0) == 4
    assert U8.trailing_ones(0x0F) == 4
    assert U8.reverse_bits(0b0000_0001) == 0b1000_0000
    assert U32.swap_bytes(0x12345678) == 0x78563412
    assert U32.from_be(U32.to_be(0x12345678)) == 0x12345678
    assert U32.from_le(U32.to_le(0x12345678)) == 0x12345678


def test_conversions():
    assert U8.num(0x1FF) == 0xFF
    assert U16.from_u128((1 << 100) | 0xABCD) == 0xABCD
    assert U128.into_u128(U128.max()) == U128.max()
    assert U16.to_bytes(0x1234, "big") == b"\x12\x34"
    assert U16.from_bytes(b"\x34\x12", "little") == 0x1234
    with pytest.raises(LimbValueError):
        U16.from_bytes(b"\x00", "little")
    assert U64.size_in_bytes() == 8
    assert U64.size_in_bits() == 64
    assert U8.is_odd(3) and U8.is_even(4)


def test_require_rejects_out_of_range():
    assert U8.require(255) == 255
    for bad in (-1, 256, True, 1.0):
        with pytest.raises(LimbValueError):
            U8.require(bad)


def test_limb_named():
    assert limb_named("u64") is U64
    assert limb_named("U32") is U32
    with pytest.raises(ConfigError):
        limb_named("u7")
