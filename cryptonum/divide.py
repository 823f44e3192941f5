"""Restoring binary long division over limb arrays."""

from __future__ import annotations

from typing import Sequence

from .carry import compare, sub_assign
from .layout import Layout
from .shift import shl_assign


def divide_assign(layout: Layout, number: list[int], divisor: Sequence[int]) -> list[int]:
    """Replace number with the quotient and return the remainder.

    The divisor must be nonzero and may be number itself.
    """
    dividend = list(number)
    divisor = list(divisor)
    for i in range(layout.n):
        number[i] = 0
    remainder = layout.zeros()
    low = layout.at(0)
    for pos in range(layout.highest_set_bit(dividend), -1, -1):
        # A bit falling off the top means the true remainder is at least
        # 2**bits, so the divisor certainly fits and wrapping subtraction is exact.
        carried = shl_assign(layout, remainder, 1)
        if layout.get_bit(dividend, pos):
            remainder[low] |= 1
        if carried or compare(layout, remainder, divisor) >= 0:
            sub_assign(layout, remainder, divisor)
            layout.set_bit(number, pos)
    return remainder


def divide_limb_assign(layout: Layout, number: list[int], value: int) -> int:
    """Divide by one nonzero limb value; return the remainder limb."""
    divisor = layout.zeros()
    divisor[layout.at(0)] = layout.limb.require(value)
    remainder = divide_assign(layout, number, divisor)
    return remainder[layout.at(0)]
