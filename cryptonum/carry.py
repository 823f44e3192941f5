"""Carry-chain addition and subtraction over limb arrays.

The functions mutate the left operand in place and return the carry or borrow
that survived past the most significant limb. Callers decide what that bit
means (flag, bool, None, fault).
"""

from __future__ import annotations

from typing import Sequence

from .layout import Layout


def add_assign(layout: Layout, lhs: list[int], rhs: Sequence[int], carry: bool = False) -> bool:
    limb = layout.limb
    for i in layout.lsb_first():
        lhs[i], carry = limb.carrying_add(lhs[i], rhs[i], carry)
    return carry


def sub_assign(layout: Layout, lhs: list[int], rhs: Sequence[int], borrow: bool = False) -> bool:
    limb = layout.limb
    for i in layout.lsb_first():
        lhs[i], borrow = limb.borrowing_sub(lhs[i], rhs[i], borrow)
    return borrow


def add_limb_assign(layout: Layout, lhs: list[int], value: int) -> bool:
    """Add one limb value at the least significant end."""
    limb = layout.limb
    carry = False
    addend = value
    for i in layout.lsb_first():
        lhs[i], carry = limb.carrying_add(lhs[i], addend, carry)
        if not carry:
            return False
        addend = 0
    return carry


def sub_limb_assign(layout: Layout, lhs: list[int], value: int) -> bool:
    limb = layout.limb
    borrow = False
    subtrahend = value
    for i in layout.lsb_first():
        lhs[i], borrow = limb.borrowing_sub(lhs[i], subtrahend, borrow)
        if not borrow:
            return False
        subtrahend = 0
    return borrow


def compare(layout: Layout, lhs: Sequence[int], rhs: Sequence[int]) -> int:
    """-1, 0 or 1 as lhs is less than, equal to or greater than rhs."""
    for i in layout.msb_first():
        if lhs[i] != rhs[i]:
            return -1 if lhs[i] < rhs[i] else 1
    return 0


def compare_limb(layout: Layout, lhs: Sequence[int], value: int) -> int:
    low = layout.at(0)
    for i in layout.msb_first():
        if i != low and lhs[i] != 0:
            return 1
    if lhs[low] == value:
        return 0
    return -1 if lhs[low] < value else 1
