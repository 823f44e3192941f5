"""Schoolbook multiplication and power."""

import random

import pytest

from cryptonum.carry import add_assign
from cryptonum.config import LimbOrder
from cryptonum.layout import Layout
from cryptonum.limb import U8, U32
from cryptonum.multiply import mul_assign, mul_limb_assign, pow_assign

from conftest import weighted_array, weighted_limb

SEED = 0x3A1


def test_product_with_zero_limbs(order):
    layout = Layout(U8, 4, order)
    number, _ = layout.from_int(0x0100)
    rhs, _ = layout.from_int(0x0001_0001)
    assert mul_assign(layout, number, rhs) is False
    assert layout.to_int(number) == 0x0100_0100


def test_zero_operands():
    layout = Layout(U8, 2, LimbOrder.LITTLE)
    number = [5, 7]
    assert mul_assign(layout, number, [0, 0]) is False
    assert number == [0, 0]
    assert mul_assign(layout, number, [3, 3]) is False
    assert number == [0, 0]


def test_multiply_matches_repeated_addition(order):
    rng = random.Random(SEED)
    layout = Layout(U8, 3, order)
    for _ in range(200):
        a = weighted_array(rng, U8, 3)
        k = rng.randrange(64)
        product = list(a)
        multiplier, _ = layout.from_int(k)
        overflow = mul_assign(layout, product, multiplier)
        total = layout.zeros()
        carried = False
        for _ in range(k):
            if add_assign(layout, total, a):
                carried = True
        assert product == total
        assert overflow is carried


def test_multiply_agrees_with_int(limb, order, rounds):
    rng = random.Random(SEED)
    n = 3
    layout = Layout(limb, n, order)
    modulus = 1 << layout.bits()
    fails = 0
    first_failure = ""
    for _ in range(rounds):
        a = weighted_array(rng, limb, n)
        b = weighted_array(rng, limb, n)
        v = weighted_limb(rng, limb)
        x = layout.to_int(a)
        y = layout.to_int(b)
        p = list(a)
        overflow = mul_assign(layout, p, b)
        q = list(a)
        overflow_limb = mul_limb_assign(layout, q, v)
        got = (layout.to_int(p), overflow, layout.to_int(q), overflow_limb)
        expected = ((x * y) % modulus, x * y >= modulus, (x * v) % modulus, x * v >= modulus)
        if got != expected:
            fails += 1
            if fails == 1:
                first_failure = f"{x:#x} * {y:#x} / {v:#x}: got {got}, expected {expected}"
    assert fails == 0, f"{fails}/{rounds} failures. First: {first_failure}"


@pytest.mark.parametrize("base, exponent", [(0, 0), (0, 5), (1, 1000), (2, 95), (2, 96), (3, 60), (3, 61), (255, 12)])
def test_pow_vectors(order, base, exponent):
    layout = Layout(U32, 3, order)
    number, _ = layout.from_int(base)
    overflow = pow_assign(layout, number, exponent)
    exact = base**exponent
    assert layout.to_int(number) == exact % (1 << 96)
    assert overflow is (exact >= 1 << 96)


def test_pow_agrees_with_int(order, rounds):
    rng = random.Random(SEED)
    layout = Layout(U32, 2, order)
    modulus = 1 << 64
    fails = 0
    first_failure = ""
    for _ in range(rounds // 4):
        base = rng.choice([rng.randrange(2, 16), rng.getrandbits(20), rng.getrandbits(64)])
        exponent = rng.randrange(40)
        number, _ = layout.from_int(base)
        overflow = pow_assign(layout, number, exponent)
        exact = base**exponent
        got = (layout.to_int(number), overflow)
        expected = (exact % modulus, exact >= modulus)
        if got != expected:
            fails += 1
            if fails == 1:
                first_failure = f"{base:#x} ** {exponent}: got {got}, expected {expected}"
    assert fails == 0, f"{fails} failures. First: {first_failure}"
