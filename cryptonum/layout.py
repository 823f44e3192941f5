"""Mapping from limb significance to physical array index.

Significance ``j`` counts limbs from the least significant end (j = 0) of the
whole value. Every multi-limb algorithm addresses limbs by significance and
goes through ``Layout.at`` so that it is written once for both orders.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, Sequence

from .config import LimbOrder
from .limb import Limb


@dataclass(frozen=True)
class Layout:
    limb: Limb
    n: int
    order: LimbOrder

    def at(self, j: int) -> int:
        """Physical index of the limb with significance j."""
        if self.order is LimbOrder.LITTLE:
            return j
        return self.n - 1 - j

    def lsb_first(self) -> range:
        """Physical indices from least to most significant limb."""
        if self.order is LimbOrder.LITTLE:
            return range(self.n)
        return range(self.n - 1, -1, -1)

    def msb_first(self) -> range:
        if self.order is LimbOrder.LITTLE:
            return range(self.n - 1, -1, -1)
        return range(self.n)

    def bits(self) -> int:
        return self.n * self.limb.bits

    def zeros(self) -> list[int]:
        return [0] * self.n

    def ones(self) -> list[int]:
        return [self.limb.mask] * self.n

    def get_bit(self, number: Sequence[int], pos: int) -> bool:
        chunk, piece = divmod(pos, self.limb.bits)
        return ((number[self.at(chunk)] >> piece) & 1) != 0

    def set_bit(self, number: list[int], pos: int) -> None:
        chunk, piece = divmod(pos, self.limb.bits)
        number[self.at(chunk)] |= 1 << piece

    def highest_set_bit(self, number: Sequence[int]) -> int:
        """Position of the most significant 1 bit, or -1 for zero."""
        for j in range(self.n - 1, -1, -1):
            value = number[self.at(j)]
            if value != 0:
                return j * self.limb.bits + value.bit_length() - 1
        return -1

    def is_zero(self, number: Sequence[int]) -> bool:
        for value in number:
            if value != 0:
                return False
        return True

    def to_int(self, number: Sequence[int]) -> int:
        """Canonical integer value of a physical limb array."""
        acc = 0
        for i in self.msb_first():
            acc = (acc << self.limb.bits) | number[i]
        return acc

    def from_int(self, value: int) -> tuple[list[int], bool]:
        """Physical limb array for value mod 2**bits(), and whether bits were dropped."""
        number = self.zeros()
        rest = value
        for i in self.lsb_first():
            number[i] = rest & self.limb.mask
            rest >>= self.limb.bits
        return (number, rest != 0)

    def significance_order(self, number: Sequence[int]) -> Iterator[int]:
        """Limb values from least to most significant."""
        for i in self.lsb_first():
            yield number[i]
