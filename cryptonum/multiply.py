"""Schoolbook (double-and-add) multiplication over limb arrays.

The accumulator is doubled once per multiplier bit, most significant bit
first, and the multiplicand is added whenever that bit is set. A zero limb of
the multiplier costs one whole-limb shift instead of ``width`` single steps.
The result wraps modulo 2**(N * width); the return value tells whether the
true product did not fit.
"""

from __future__ import annotations

from typing import Sequence

from .carry import add_assign
from .layout import Layout
from .shift import shl_assign


def _double_and_add(layout: Layout, acc: list[int], adder: Sequence[int], value: int, top: int) -> bool:
    """Feed the bits of one multiplier limb, from bit `top` down to bit 0."""
    overflow = False
    bit_check = 1 << top
    while bit_check != 0:
        if shl_assign(layout, acc, 1):
            overflow = True
        if (value & bit_check) != 0:
            if add_assign(layout, acc, adder):
                overflow = True
        bit_check >>= 1
    return overflow


def mul_assign(layout: Layout, number: list[int], rhs: Sequence[int]) -> bool:
    n = layout.n
    bits = layout.limb.bits
    if layout.is_zero(rhs):
        for i in range(n):
            number[i] = 0
        return False
    if layout.is_zero(number):
        return False

    adder = list(number)
    multiplier = [rhs[i] for i in layout.msb_first()]
    for i in range(n):
        number[i] = 0
    k = 0
    while multiplier[k] == 0:
        k += 1

    seed = multiplier[k]
    overflow = _double_and_add(layout, number, adder, seed, seed.bit_length() - 1)
    for value in multiplier[k + 1 :]:
        if value == 0:
            if shl_assign(layout, number, bits):
                overflow = True
            continue
        if _double_and_add(layout, number, adder, value, bits - 1):
            overflow = True
    return overflow


def mul_limb_assign(layout: Layout, number: list[int], value: int) -> bool:
    """Multiply by a single limb value."""
    rhs = layout.zeros()
    rhs[layout.at(0)] = layout.limb.require(value)
    return mul_assign(layout, number, rhs)


def pow_assign(layout: Layout, number: list[int], exponent: int) -> bool:
    """Raise to a non-negative integer power by square-and-multiply."""
    base = list(number)
    for i in range(layout.n):
        number[i] = 0
    number[layout.at(0)] = 1
    if exponent == 0:
        return False
    overflow = False
    # Once the true base exceeds the range, any further use of it overflows.
    base_overflow = False
    e = exponent
    while True:
        if (e & 1) != 0:
            if base_overflow:
                overflow = True
            if mul_assign(layout, number, base):
                overflow = True
        e >>= 1
        if e == 0:
            return overflow
        square = list(base)
        if mul_assign(layout, square, base):
            base_overflow = True
        base = square
