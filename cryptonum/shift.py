"""Shifts by any bit distance across limb boundaries.

A distance d splits into ``chunk = d // width`` whole limbs and
``piece = d % width`` bits. The chunk phase moves limbs; the piece phase
sweeps the surviving limbs once, carrying ``piece`` bits from each limb into
its neighbour. Both functions return True when a nonzero bit left the range.
"""

from __future__ import annotations

from .layout import Layout


def shl_assign(layout: Layout, number: list[int], distance: int) -> bool:
    if distance < 0:
        return shr_assign(layout, number, -distance)
    n = layout.n
    bits = layout.limb.bits
    mask = layout.limb.mask
    at = layout.at
    chunk, piece = divmod(distance, bits)
    if chunk >= n:
        lost = not layout.is_zero(number)
        for i in range(n):
            number[i] = 0
        return lost

    lost = False
    if chunk > 0:
        for j in range(n - chunk, n):
            if number[at(j)] != 0:
                lost = True
                break
        for j in range(n - 1, chunk - 1, -1):
            number[at(j)] = number[at(j - chunk)]
        for j in range(chunk):
            number[at(j)] = 0

    if piece == 0:
        return lost
    back = bits - piece
    if (number[at(n - 1)] >> back) != 0:
        lost = True
    carry = 0
    # Limbs below `chunk` are zero after the chunk phase.
    for j in range(chunk, n):
        value = number[at(j)]
        number[at(j)] = ((value << piece) & mask) | carry
        carry = value >> back
    return lost


def shr_assign(layout: Layout, number: list[int], distance: int) -> bool:
    if distance < 0:
        return shl_assign(layout, number, -distance)
    n = layout.n
    bits = layout.limb.bits
    mask = layout.limb.mask
    at = layout.at
    chunk, piece = divmod(distance, bits)
    if chunk >= n:
        lost = not layout.is_zero(number)
        for i in range(n):
            number[i] = 0
        return lost

    lost = False
    if chunk > 0:
        for j in range(chunk):
            if number[at(j)] != 0:
                lost = True
                break
        for j in range(n - chunk):
            number[at(j)] = number[at(j + chunk)]
        for j in range(n - chunk, n):
            number[at(j)] = 0

    if piece == 0:
        return lost
    back = bits - piece
    if ((number[at(0)] << back) & mask) != 0:
        lost = True
    carry = 0
    for j in range(n - chunk - 1, -1, -1):
        value = number[at(j)]
        number[at(j)] = (value >> piece) | carry
        carry = (value << back) & mask
    return lost
