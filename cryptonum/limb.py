"""Limb capability contract: fixed-width unsigned primitives over plain ints.

A ``Limb`` describes one unsigned width. Limb values are ``int`` in
``[0, 2**bits)``; every operation here takes and returns such ints, so the
multi-limb code is written once and instantiated for any width.
"""

from __future__ import annotations

from dataclasses import dataclass, field
import sys

from .errors import ConfigError, DivisionByZero, LimbValueError, OverflowFault, UnderflowFault

MASK128: int = (1 << 128) - 1


@dataclass(frozen=True)
class Limb:
    name: str
    bits: int
    mask: int = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "mask", (1 << self.bits) - 1)

    # ---------------------------------------------------------------------------
    # Layer 1: Scalar facts and conversions
    # ---------------------------------------------------------------------------

    def zero(self) -> int:
        return 0

    def one(self) -> int:
        return 1

    def min(self) -> int:
        return 0

    def max(self) -> int:
        return self.mask

    def size_in_bits(self) -> int:
        return self.bits

    def size_in_bytes(self) -> int:
        return self.bits // 8

    def is_valid(self, v: object) -> bool:
        return isinstance(v, int) and not isinstance(v, bool) and 0 <= v <= self.mask

    def require(self, v: int) -> int:
        """Return v unchanged, or raise if it is not a value of this width."""
        if not self.is_valid(v):
            raise LimbValueError(f"{v!r} is not a valid {self.name} value")
        return v

    def num(self, v: int) -> int:
        """Truncating conversion from any integer, like an `as` cast."""
        return v & self.mask

    def from_u128(self, v: int) -> int:
        return v & MASK128 & self.mask

    def into_u128(self, v: int) -> int:
        return v & MASK128

    def is_odd(self, v: int) -> bool:
        return (v & 1) != 0

    def is_even(self, v: int) -> bool:
        return (v & 1) == 0

    def to_bytes(self, v: int, byteorder: str) -> bytes:
        return v.to_bytes(self.size_in_bytes(), byteorder)  # type: ignore[arg-type]

    def from_bytes(self, data: bytes, byteorder: str) -> int:
        if len(data) != self.size_in_bytes():
            raise LimbValueError(
                f"{self.name} needs {self.size_in_bytes()} bytes, got {len(data)}"
            )
        return int.from_bytes(data, byteorder)  # type: ignore[arg-type]

    # ---------------------------------------------------------------------------
    # Layer 2: Carry / borrow primitives
    # ---------------------------------------------------------------------------

    def carrying_add(self, a: int, b: int, carry: bool) -> tuple[int, bool]:
        """(a + b + carry) mod 2**bits, and whether the true sum did not fit."""
        s = a + b + (1 if carry else 0)
        return (s & self.mask, s > self.mask)

    def borrowing_sub(self, a: int, b: int, borrow: bool) -> tuple[int, bool]:
        """(a - b - borrow) mod 2**bits, and whether the true difference is negative."""
        d = a - b - (1 if borrow else 0)
        return (d & self.mask, d < 0)

    # ---------------------------------------------------------------------------
    # Layer 3: Addition and subtraction
    # ---------------------------------------------------------------------------

    def wrapping_add(self, a: int, b: int) -> int:
        return (a + b) & self.mask

    def overflowing_add(self, a: int, b: int) -> tuple[int, bool]:
        return self.carrying_add(a, b, False)

    def checked_add(self, a: int, b: int) -> int | None:
        s = a + b
        if s > self.mask:
            return None
        return s

    def saturating_add(self, a: int, b: int) -> int:
        s = a + b
        if s > self.mask:
            return self.mask
        return s

    def unchecked_add(self, a: int, b: int) -> int:
        s = self.checked_add(a, b)
        if s is None:
            raise OverflowFault(f"attempt to add with overflow ({self.name})")
        return s

    def wrapping_sub(self, a: int, b: int) -> int:
        return (a - b) & self.mask

    def overflowing_sub(self, a: int, b: int) -> tuple[int, bool]:
        return self.borrowing_sub(a, b, False)

    def checked_sub(self, a: int, b: int) -> int | None:
        if b > a:
            return None
        return a - b

    def saturating_sub(self, a: int, b: int) -> int:
        if b > a:
            return 0
        return a - b

    def unchecked_sub(self, a: int, b: int) -> int:
        d = self.checked_sub(a, b)
        if d is None:
            raise UnderflowFault(f"attempt to subtract with overflow ({self.name})")
        return d

    # ---------------------------------------------------------------------------
    # Layer 4: Multiplication and power
    # ---------------------------------------------------------------------------

    def wrapping_mul(self, a: int, b: int) -> int:
        return (a * b) & self.mask

    def overflowing_mul(self, a: int, b: int) -> tuple[int, bool]:
        p = a * b
        return (p & self.mask, p > self.mask)

    def checked_mul(self, a: int, b: int) -> int | None:
        p = a * b
        if p > self.mask:
            return None
        return p

    def saturating_mul(self, a: int, b: int) -> int:
        p = a * b
        if p > self.mask:
            return self.mask
        return p

    def unchecked_mul(self, a: int, b: int) -> int:
        p = self.checked_mul(a, b)
        if p is None:
            raise OverflowFault(f"attempt to multiply with overflow ({self.name})")
        return p

    def _pow_exceeds(self, a: int, exp: int) -> bool:
        if exp < 0:
            raise LimbValueError(f"negative exponent {exp}")
        if a < 2:
            return False
        # a >= 2 doubles every round, so this stops within bits + 1 rounds.
        acc = 1
        for _ in range(exp):
            acc *= a
            if acc > self.mask:
                return True
        return False

    def wrapping_pow(self, a: int, exp: int) -> int:
        if exp < 0:
            raise LimbValueError(f"negative exponent {exp}")
        return pow(a, exp, self.mask + 1)

    def overflowing_pow(self, a: int, exp: int) -> tuple[int, bool]:
        return (self.wrapping_pow(a, exp), self._pow_exceeds(a, exp))

    def checked_pow(self, a: int, exp: int) -> int | None:
        if self._pow_exceeds(a, exp):
            return None
        return self.wrapping_pow(a, exp)

    def saturating_pow(self, a: int, exp: int) -> int:
        if self._pow_exceeds(a, exp):
            return self.mask
        return self.wrapping_pow(a, exp)

    def unchecked_pow(self, a: int, exp: int) -> int:
        p = self.checked_pow(a, exp)
        if p is None:
            raise OverflowFault(f"attempt to raise to a power with overflow ({self.name})")
        return p

    # ---------------------------------------------------------------------------
    # Layer 5: Division and remainder
    # ---------------------------------------------------------------------------

    def _require_divisor(self, b: int) -> None:
        if b == 0:
            raise DivisionByZero(f"attempt to divide by zero ({self.name})")

    def wrapping_div(self, a: int, b: int) -> int:
        self._require_divisor(b)
        return a // b

    def overflowing_div(self, a: int, b: int) -> tuple[int, bool]:
        return (self.wrapping_div(a, b), False)

    def checked_div(self, a: int, b: int) -> int | None:
        if b == 0:
            return None
        return a // b

    def saturating_div(self, a: int, b: int) -> int:
        return self.wrapping_div(a, b)

    def unchecked_div(self, a: int, b: int) -> int:
        return self.wrapping_div(a, b)

    def wrapping_rem(self, a: int, b: int) -> int:
        self._require_divisor(b)
        return a % b

    def overflowing_rem(self, a: int, b: int) -> tuple[int, bool]:
        return (self.wrapping_rem(a, b), False)

    def checked_rem(self, a: int, b: int) -> int | None:
        if b == 0:
            return None
        return a % b

    def unchecked_rem(self, a: int, b: int) -> int:
        return self.wrapping_rem(a, b)

    # ---------------------------------------------------------------------------
    # Layer 6: Bit operations
    # ---------------------------------------------------------------------------

    def wrapping_shl(self, v: int, n: int) -> int:
        """Shift left; the distance is taken modulo the width."""
        return (v << (n % self.bits)) & self.mask

    def wrapping_shr(self, v: int, n: int) -> int:
        return v >> (n % self.bits)

    def rotate_left(self, v: int, n: int) -> int:
        n = n % self.bits
        if n == 0:
            return v
        return ((v << n) | (v >> (self.bits - n))) & self.mask

    def rotate_right(self, v: int, n: int) -> int:
        return self.rotate_left(v, self.bits - (n % self.bits))

    def count_ones(self, v: int) -> int:
        return v.bit_count()

    def count_zeros(self, v: int) -> int:
        return self.bits - self.count_ones(v)

    def leading_zeros(self, v: int) -> int:
        return self.bits - v.bit_length()

    def trailing_zeros(self, v: int) -> int:
        if v == 0:
            return self.bits
        return (v & -v).bit_length() - 1

    def leading_ones(self, v: int) -> int:
        return self.leading_zeros(~v & self.mask)

    def trailing_ones(self, v: int) -> int:
        return self.trailing_zeros(~v & self.mask)

    def reverse_bits(self, v: int) -> int:
        return int(format(v, f"0{self.bits}b")[::-1], 2)

    def swap_bytes(self, v: int) -> int:
        return int.from_bytes(self.to_bytes(v, "little"), "big")

    def to_be(self, v: int) -> int:
        if sys.byteorder == "big":
            return v
        return self.swap_bytes(v)

    def from_be(self, v: int) -> int:
        return self.to_be(v)

    def to_le(self, v: int) -> int:
        if sys.byteorder == "little":
            return v
        return self.swap_bytes(v)

    def from_le(self, v: int) -> int:
        return self.to_le(v)


U8: Limb = Limb("u8", 8)
U16: Limb = Limb("u16", 16)
U32: Limb = Limb("u32", 32)
U64: Limb = Limb("u64", 64)
U128: Limb = Limb("u128", 128)

LIMBS: dict[str, Limb] = {limb.name: limb for limb in (U8, U16, U32, U64, U128)}


def limb_named(name: str) -> Limb:
    limb = LIMBS.get(name.lower())
    if limb is None:
        raise ConfigError(f"unknown limb type '{name}' (expected one of {', '.join(LIMBS)})")
    return limb
