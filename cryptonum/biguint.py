"""Fixed-capacity multi-limb unsigned integers.

``big_uint(limb, n)`` defines a concrete ``BigUInt`` subclass holding exactly
``n`` limbs of one ``Limb`` width. Values wrap modulo ``2**(n * width)``.
Every mutating arithmetic operation clears the status flags first and then
sets OVERFLOW, UNDERFLOW or DIVIDED_BY_ZERO as a side effect; the flags are
never consulted by arithmetic.
"""

from __future__ import annotations

import logging
from typing import Callable, ClassVar, Sequence

from .carry import add_assign, add_limb_assign, compare, sub_assign, sub_limb_assign
from .config import DEFAULT_LIMB_ORDER, LimbOrder
from .divide import divide_assign, divide_limb_assign
from .errors import (
    DivisionByZero,
    IndexOutOfRange,
    LimbValueError,
    OverflowFault,
    UnderflowFault,
)
from .layout import Layout
from .limb import LIMBS, Limb
from .multiply import mul_assign, mul_limb_assign, pow_assign
from .shared import SharedArrays, SharedValues
from .shift import shl_assign, shr_assign

logger = logging.getLogger(__name__)

Engine = Callable[[Layout, list, Sequence[int]], bool]


class BigUInt:
    """N limbs of one width plus a status register.

    Physical limb order follows ``ORDER``; ``get_num``/``set_num`` and the
    array constructors use physical indices.
    """

    LIMB: ClassVar[Limb]
    N: ClassVar[int]
    ORDER: ClassVar[LimbOrder]
    LAYOUT: ClassVar[Layout]

    OVERFLOW: ClassVar[int] = 0b0000_0001
    UNDERFLOW: ClassVar[int] = 0b0000_0010
    INFINITY: ClassVar[int] = 0b0000_0100
    DIVIDED_BY_ZERO: ClassVar[int] = INFINITY

    __slots__ = ("_number", "_flag")

    def __init__(self, number: Sequence[int] | None = None, flag: int = 0):
        layout = getattr(type(self), "LAYOUT", None)
        if layout is None:
            raise TypeError("BigUInt is generic; define a concrete type with big_uint(limb, n)")
        if number is None:
            self._number: list[int] = layout.zeros()
        else:
            self._number = self._checked_array(number)
        self._flag = flag

    # ---------------------------------------------------------------------------
    # Construction
    # ---------------------------------------------------------------------------

    @classmethod
    def _checked_array(cls, array: Sequence[int]) -> list[int]:
        if len(array) != cls.N:
            raise LimbValueError(f"{cls.__name__} needs {cls.N} limbs, got {len(array)}")
        return [cls.LIMB.require(v) for v in array]

    @classmethod
    def new(cls) -> BigUInt:
        return cls()

    @classmethod
    def zero(cls) -> BigUInt:
        return cls()

    @classmethod
    def min(cls) -> BigUInt:
        return cls()

    @classmethod
    def one(cls) -> BigUInt:
        me = cls()
        me._number[cls.LAYOUT.at(0)] = 1
        return me

    @classmethod
    def max(cls) -> BigUInt:
        return cls(cls.LAYOUT.ones())

    @classmethod
    def submax(cls, size_in_bits: int) -> BigUInt:
        """The value whose lowest size_in_bits bits are set."""
        me = cls()
        me.set_submax(size_in_bits)
        return me

    @classmethod
    def generate_check_bits(cls, bit_pos: int) -> BigUInt | None:
        """The value with only bit bit_pos set, or None if the position is out of range."""
        if bit_pos < 0 or bit_pos >= cls.LAYOUT.bits():
            return None
        me = cls()
        me.turn_check_bits(bit_pos)
        return me

    @classmethod
    def from_array(cls, array: Sequence[int]) -> BigUInt:
        return cls(array)

    @classmethod
    def from_int(cls, value: int) -> BigUInt:
        """From a canonical integer; a value wider than the type is truncated and flagged."""
        if value < 0:
            raise LimbValueError(f"{cls.__name__} cannot hold negative value {value}")
        number, dropped = cls.LAYOUT.from_int(value)
        return cls(number, cls.OVERFLOW if dropped else 0)

    @classmethod
    def from_uint(cls, value: int, limb: Limb | None = None) -> BigUInt:
        """From one primitive value of the given width (the narrowest fitting one by default)."""
        src = limb if limb is not None else _narrowest_limb(value)
        layout = cls.LAYOUT
        me = cls()
        share = SharedValues.from_src(cls.LIMB, src, value)
        if cls.LIMB.bits >= src.bits:
            me._number[layout.at(0)] = share.get_des()
            return me
        for pos in range(cls.N):
            chunk = share.into_des(pos)
            if chunk is None:
                return me
            me._number[layout.at(pos)] = chunk
        if share.into_des(cls.N) is not None:
            me._flag = cls.OVERFLOW
        return me

    @classmethod
    def from_biguint(cls, other: BigUInt) -> BigUInt:
        """Copy another multi-limb value, of any limb width, through the array bridge."""
        array = other.get_number()
        if other.ORDER is not cls.ORDER:
            array.reverse()
        bridge = SharedArrays.from_src(cls.LIMB, cls.N, other.LIMB, array, cls.ORDER)
        me = cls(bridge.into_des())
        if (int(other) >> cls.LAYOUT.bits()) != 0:
            me._flag = cls.OVERFLOW
        return me

    def into_biguint(self, target: type[BigUInt]) -> BigUInt:
        return target.from_biguint(self)

    def into_uint(self, limb: Limb) -> int:
        """The lowest limb.bits bits of the value."""
        low = self._number[self.LAYOUT.at(0)]
        if limb.bits <= self.LIMB.bits:
            return SharedValues.from_src(limb, self.LIMB, low).get_des()
        return limb.num(int(self))

    def copy(self) -> BigUInt:
        return type(self)(self._number, self._flag)

    __copy__ = copy

    # ---------------------------------------------------------------------------
    # Limb access
    # ---------------------------------------------------------------------------

    def get_num(self, i: int) -> int | None:
        if 0 <= i < self.N:
            return self._number[i]
        return None

    def get_num_(self, i: int) -> int:
        if 0 <= i < self.N:
            return self._number[i]
        raise IndexOutOfRange(i, self.N)

    def set_num(self, i: int, val: int) -> bool:
        if 0 <= i < self.N:
            self._number[i] = self.LIMB.require(val)
            return True
        return False

    def set_num_(self, i: int, val: int) -> None:
        if not 0 <= i < self.N:
            raise IndexOutOfRange(i, self.N)
        self._number[i] = self.LIMB.require(val)

    def get_number(self) -> list[int]:
        return list(self._number)

    def set_number(self, array: Sequence[int]) -> None:
        self._number = self._checked_array(array)

    # ---------------------------------------------------------------------------
    # Predicates and setters
    # ---------------------------------------------------------------------------

    def is_zero(self) -> bool:
        return self.LAYOUT.is_zero(self._number)

    def is_one(self) -> bool:
        return self.is_uint(1)

    def is_max(self) -> bool:
        mask = self.LIMB.mask
        return all(v == mask for v in self._number)

    def is_uint(self, val: int) -> bool:
        low = self.LAYOUT.at(0)
        for i, v in enumerate(self._number):
            if v != (val if i == low else 0):
                return False
        return True

    def is_odd(self) -> bool:
        return (self._number[self.LAYOUT.at(0)] & 1) != 0

    def is_even(self) -> bool:
        return not self.is_odd()

    def set_zero(self) -> None:
        self._number = self.LAYOUT.zeros()

    def set_one(self) -> None:
        self.set_uint(1)

    def set_max(self) -> None:
        self._number = self.LAYOUT.ones()

    def set_submax(self, size_in_bits: int) -> None:
        layout = self.LAYOUT
        if size_in_bits >= layout.bits():
            self.set_max()
            return
        self.set_zero()
        chunk, piece = divmod(max(size_in_bits, 0), self.LIMB.bits)
        for j in range(chunk):
            self._number[layout.at(j)] = self.LIMB.mask
        self._number[layout.at(chunk)] = (1 << piece) - 1

    def set_uint(self, val: int) -> None:
        self.set_zero()
        self._number[self.LAYOUT.at(0)] = self.LIMB.require(val)

    def turn_check_bits(self, bit_pos: int) -> None:
        self.set_zero()
        self.LAYOUT.set_bit(self._number, bit_pos)

    # ---------------------------------------------------------------------------
    # Status flags
    # ---------------------------------------------------------------------------

    def get_all_flags(self) -> int:
        return self._flag

    def reset_all_flags(self) -> None:
        self._flag = 0

    def set_overflow(self) -> None:
        self._flag |= self.OVERFLOW

    def reset_overflow(self) -> None:
        self._flag &= ~self.OVERFLOW

    def is_overflow(self) -> bool:
        return (self._flag & self.OVERFLOW) != 0

    def set_underflow(self) -> None:
        self._flag |= self.UNDERFLOW

    def reset_underflow(self) -> None:
        self._flag &= ~self.UNDERFLOW

    def is_underflow(self) -> bool:
        return (self._flag & self.UNDERFLOW) != 0

    def set_infinity(self) -> None:
        self._flag |= self.INFINITY

    def reset_infinity(self) -> None:
        self._flag &= ~self.INFINITY

    def is_infinity(self) -> bool:
        return (self._flag & self.INFINITY) != 0

    def set_divided_by_zero(self) -> None:
        self.set_infinity()

    def reset_divided_by_zero(self) -> None:
        self.reset_infinity()

    def is_divided_by_zero(self) -> bool:
        return self.is_infinity()

    def set_untrustable(self) -> None:
        self._flag |= self.OVERFLOW | self.UNDERFLOW

    def reset_untrustable(self) -> None:
        self._flag &= ~(self.OVERFLOW | self.UNDERFLOW)

    def is_untrustable(self) -> bool:
        return (self._flag & (self.OVERFLOW | self.UNDERFLOW)) == (self.OVERFLOW | self.UNDERFLOW)

    # ---------------------------------------------------------------------------
    # Engine plumbing
    # ---------------------------------------------------------------------------

    def _operand(self, rhs: BigUInt | int) -> list[int]:
        if isinstance(rhs, type(self)):
            return rhs._number
        if isinstance(rhs, int) and not isinstance(rhs, bool):
            other = type(self).from_int(rhs)
            if other.is_overflow():
                raise LimbValueError(f"{rhs} does not fit in {type(self).__name__}")
            return other._number
        raise TypeError(f"expected {type(self).__name__} or int, got {type(rhs).__name__}")

    def _run(self, engine: Engine, rhs: BigUInt | int, flag: int) -> bool:
        operand = self._operand(rhs)
        self._flag = 0
        hit = engine(self.LAYOUT, self._number, operand)
        if hit:
            self._flag |= flag
        return hit

    def _fresh(self, method: Callable[..., object], *args: object) -> tuple[BigUInt, object]:
        result = self.copy()
        outcome = method(result, *args)
        return (result, outcome)

    # ---------------------------------------------------------------------------
    # Addition
    # ---------------------------------------------------------------------------

    def carrying_add_assign(self, rhs: BigUInt | int, carry: bool) -> bool:
        operand = self._operand(rhs)
        self._flag = 0
        carry = add_assign(self.LAYOUT, self._number, operand, carry)
        if carry:
            self._flag |= self.OVERFLOW
        return carry

    def carrying_add(self, rhs: BigUInt | int, carry: bool) -> tuple[BigUInt, bool]:
        result, carry_out = self._fresh(BigUInt.carrying_add_assign, rhs, carry)
        return (result, bool(carry_out))

    def wrapping_add_assign(self, rhs: BigUInt | int) -> None:
        self._run(add_assign, rhs, self.OVERFLOW)

    def wrapping_add(self, rhs: BigUInt | int) -> BigUInt:
        return self._fresh(BigUInt.wrapping_add_assign, rhs)[0]

    def overflowing_add_assign(self, rhs: BigUInt | int) -> bool:
        return self._run(add_assign, rhs, self.OVERFLOW)

    def overflowing_add(self, rhs: BigUInt | int) -> tuple[BigUInt, bool]:
        result, overflow = self._fresh(BigUInt.overflowing_add_assign, rhs)
        return (result, bool(overflow))

    def checked_add(self, rhs: BigUInt | int) -> BigUInt | None:
        result, overflow = self.overflowing_add(rhs)
        if overflow:
            return None
        return result

    def saturating_add_assign(self, rhs: BigUInt | int) -> None:
        if self.overflowing_add_assign(rhs):
            self.set_max()
        self._flag = 0

    def saturating_add(self, rhs: BigUInt | int) -> BigUInt:
        return self._fresh(BigUInt.saturating_add_assign, rhs)[0]

    def unchecked_add(self, rhs: BigUInt | int) -> BigUInt:
        result, overflow = self.overflowing_add(rhs)
        if overflow:
            raise OverflowFault(f"attempt to add with overflow ({type(self).__name__})")
        return result

    # ---------------------------------------------------------------------------
    # Subtraction
    # ---------------------------------------------------------------------------

    def borrowing_sub_assign(self, rhs: BigUInt | int, borrow: bool) -> bool:
        operand = self._operand(rhs)
        self._flag = 0
        borrow = sub_assign(self.LAYOUT, self._number, operand, borrow)
        if borrow:
            self._flag |= self.UNDERFLOW
        return borrow

    def borrowing_sub(self, rhs: BigUInt | int, borrow: bool) -> tuple[BigUInt, bool]:
        result, borrow_out = self._fresh(BigUInt.borrowing_sub_assign, rhs, borrow)
        return (result, bool(borrow_out))

    def wrapping_sub_assign(self, rhs: BigUInt | int) -> None:
        self._run(sub_assign, rhs, self.UNDERFLOW)

    def wrapping_sub(self, rhs: BigUInt | int) -> BigUInt:
        return self._fresh(BigUInt.wrapping_sub_assign, rhs)[0]

    def overflowing_sub_assign(self, rhs: BigUInt | int) -> bool:
        return self._run(sub_assign, rhs, self.UNDERFLOW)

    def overflowing_sub(self, rhs: BigUInt | int) -> tuple[BigUInt, bool]:
        result, underflow = self._fresh(BigUInt.overflowing_sub_assign, rhs)
        return (result, bool(underflow))

    def checked_sub(self, rhs: BigUInt | int) -> BigUInt | None:
        result, underflow = self.overflowing_sub(rhs)
        if underflow:
            return None
        return result

    def saturating_sub_assign(self, rhs: BigUInt | int) -> None:
        if self.overflowing_sub_assign(rhs):
            self.set_zero()
        self._flag = 0

    def saturating_sub(self, rhs: BigUInt | int) -> BigUInt:
        return self._fresh(BigUInt.saturating_sub_assign, rhs)[0]

    def unchecked_sub(self, rhs: BigUInt | int) -> BigUInt:
        result, underflow = self.overflowing_sub(rhs)
        if underflow:
            raise UnderflowFault(f"attempt to subtract with overflow ({type(self).__name__})")
        return result

    # ---------------------------------------------------------------------------
    # Multiplication and power
    # ---------------------------------------------------------------------------

    def wrapping_mul_assign(self, rhs: BigUInt | int) -> None:
        self._run(mul_assign, rhs, self.OVERFLOW)

    def wrapping_mul(self, rhs: BigUInt | int) -> BigUInt:
        return self._fresh(BigUInt.wrapping_mul_assign, rhs)[0]

    def overflowing_mul_assign(self, rhs: BigUInt | int) -> bool:
        return self._run(mul_assign, rhs, self.OVERFLOW)

    def overflowing_mul(self, rhs: BigUInt | int) -> tuple[BigUInt, bool]:
        result, overflow = self._fresh(BigUInt.overflowing_mul_assign, rhs)
        return (result, bool(overflow))

    def checked_mul(self, rhs: BigUInt | int) -> BigUInt | None:
        result, overflow = self.overflowing_mul(rhs)
        if overflow:
            return None
        return result

    def saturating_mul_assign(self, rhs: BigUInt | int) -> None:
        if self.overflowing_mul_assign(rhs):
            self.set_max()
        self._flag = 0

    def saturating_mul(self, rhs: BigUInt | int) -> BigUInt:
        return self._fresh(BigUInt.saturating_mul_assign, rhs)[0]

    def unchecked_mul(self, rhs: BigUInt | int) -> BigUInt:
        result, overflow = self.overflowing_mul(rhs)
        if overflow:
            raise OverflowFault(f"attempt to multiply with overflow ({type(self).__name__})")
        return result

    def overflowing_pow_assign(self, exponent: BigUInt | int) -> bool:
        exp = int(exponent)
        if exp < 0:
            raise LimbValueError(f"negative exponent {exp}")
        self._flag = 0
        overflow = pow_assign(self.LAYOUT, self._number, exp)
        if overflow:
            self._flag |= self.OVERFLOW
        return overflow

    def wrapping_pow_assign(self, exponent: BigUInt | int) -> None:
        self.overflowing_pow_assign(exponent)

    def wrapping_pow(self, exponent: BigUInt | int) -> BigUInt:
        return self._fresh(BigUInt.wrapping_pow_assign, exponent)[0]

    def overflowing_pow(self, exponent: BigUInt | int) -> tuple[BigUInt, bool]:
        result, overflow = self._fresh(BigUInt.overflowing_pow_assign, exponent)
        return (result, bool(overflow))

    def checked_pow(self, exponent: BigUInt | int) -> BigUInt | None:
        result, overflow = self.overflowing_pow(exponent)
        if overflow:
            return None
        return result

    def saturating_pow(self, exponent: BigUInt | int) -> BigUInt:
        result, overflow = self.overflowing_pow(exponent)
        if overflow:
            result.set_max()
        result._flag = 0
        return result

    def unchecked_pow(self, exponent: BigUInt | int) -> BigUInt:
        result, overflow = self.overflowing_pow(exponent)
        if overflow:
            raise OverflowFault(f"attempt to raise to a power with overflow ({type(self).__name__})")
        return result

    # ---------------------------------------------------------------------------
    # Division and remainder
    # ---------------------------------------------------------------------------

    def divide_fully(self, rhs: BigUInt | int) -> tuple[BigUInt, BigUInt]:
        """(quotient, remainder).

        A zero divisor gives (max flagged OVERFLOW and DIVIDED_BY_ZERO,
        zero flagged DIVIDED_BY_ZERO) instead of raising.
        """
        divisor = self._operand(rhs)
        cls = type(self)
        if self.LAYOUT.is_zero(divisor):
            quotient = cls.max()
            quotient._flag = self.DIVIDED_BY_ZERO | self.OVERFLOW
            return (quotient, cls(None, self.DIVIDED_BY_ZERO))
        quotient = cls(self._number)
        remainder = divide_assign(self.LAYOUT, quotient._number, divisor)
        return (quotient, cls(remainder))

    def _require_divisor(self, rhs: BigUInt | int) -> None:
        if self.LAYOUT.is_zero(self._operand(rhs)):
            raise DivisionByZero(f"attempt to divide by zero ({type(self).__name__})")

    def wrapping_div(self, rhs: BigUInt | int) -> BigUInt:
        self._require_divisor(rhs)
        return self.divide_fully(rhs)[0]

    def wrapping_div_assign(self, rhs: BigUInt | int) -> None:
        quotient = self.wrapping_div(rhs)
        self._number = quotient._number
        self._flag = 0

    def overflowing_div(self, rhs: BigUInt | int) -> tuple[BigUInt, bool]:
        return (self.wrapping_div(rhs), False)

    def checked_div(self, rhs: BigUInt | int) -> BigUInt | None:
        if self.LAYOUT.is_zero(self._operand(rhs)):
            return None
        return self.divide_fully(rhs)[0]

    saturating_div = wrapping_div
    unchecked_div = wrapping_div

    def wrapping_rem(self, rhs: BigUInt | int) -> BigUInt:
        self._require_divisor(rhs)
        return self.divide_fully(rhs)[1]

    def wrapping_rem_assign(self, rhs: BigUInt | int) -> None:
        remainder = self.wrapping_rem(rhs)
        self._number = remainder._number
        self._flag = 0

    def overflowing_rem(self, rhs: BigUInt | int) -> tuple[BigUInt, bool]:
        return (self.wrapping_rem(rhs), False)

    def checked_rem(self, rhs: BigUInt | int) -> BigUInt | None:
        if self.LAYOUT.is_zero(self._operand(rhs)):
            return None
        return self.divide_fully(rhs)[1]

    unchecked_rem = wrapping_rem

    # ---------------------------------------------------------------------------
    # Single-limb operands
    # ---------------------------------------------------------------------------

    def accumulate(self, rhs: int) -> None:
        """self += rhs for one limb value."""
        self._flag = 0
        if add_limb_assign(self.LAYOUT, self._number, self.LIMB.require(rhs)):
            self._flag |= self.OVERFLOW

    def dissipate(self, rhs: int) -> None:
        self._flag = 0
        if sub_limb_assign(self.LAYOUT, self._number, self.LIMB.require(rhs)):
            self._flag |= self.UNDERFLOW

    def times(self, rhs: int) -> None:
        self._flag = 0
        if mul_limb_assign(self.LAYOUT, self._number, rhs):
            self._flag |= self.OVERFLOW

    def divide_by_uint_fully(self, rhs: int) -> tuple[BigUInt, int]:
        if self.LIMB.require(rhs) == 0:
            quotient = type(self).max()
            quotient._flag = self.DIVIDED_BY_ZERO | self.OVERFLOW
            return (quotient, 0)
        quotient = type(self)(self._number)
        remainder = divide_limb_assign(self.LAYOUT, quotient._number, rhs)
        return (quotient, remainder)

    def quotient(self, rhs: int) -> None:
        """self //= rhs for one limb value."""
        if self.LIMB.require(rhs) == 0:
            raise DivisionByZero(f"attempt to divide by zero ({type(self).__name__})")
        result, _ = self.divide_by_uint_fully(rhs)
        self._number = result._number
        self._flag = 0

    def remainder(self, rhs: int) -> None:
        """self %= rhs for one limb value."""
        if self.LIMB.require(rhs) == 0:
            raise DivisionByZero(f"attempt to divide by zero ({type(self).__name__})")
        _, rem = self.divide_by_uint_fully(rhs)
        self.set_uint(rem)
        self._flag = 0

    def add_uint(self, rhs: int) -> BigUInt:
        return self._fresh(BigUInt.accumulate, rhs)[0]

    def sub_uint(self, rhs: int) -> BigUInt:
        return self._fresh(BigUInt.dissipate, rhs)[0]

    def mul_uint(self, rhs: int) -> BigUInt:
        return self._fresh(BigUInt.times, rhs)[0]

    def div_uint(self, rhs: int) -> BigUInt:
        return self._fresh(BigUInt.quotient, rhs)[0]

    def rem_uint(self, rhs: int) -> BigUInt:
        return self._fresh(BigUInt.remainder, rhs)[0]

    # ---------------------------------------------------------------------------
    # Shifts
    # ---------------------------------------------------------------------------

    def shl_assign(self, distance: int) -> None:
        """Shift left; OVERFLOW is set when a nonzero bit is pushed out."""
        if distance < 0:
            self.shr_assign(-distance)
            return
        self._flag = 0
        if shl_assign(self.LAYOUT, self._number, distance):
            self._flag |= self.OVERFLOW

    def shr_assign(self, distance: int) -> None:
        """Shift right; UNDERFLOW is set when a nonzero bit is pushed out."""
        if distance < 0:
            self.shl_assign(-distance)
            return
        self._flag = 0
        if shr_assign(self.LAYOUT, self._number, distance):
            self._flag |= self.UNDERFLOW

    def shl(self, distance: int) -> BigUInt:
        return self._fresh(BigUInt.shl_assign, distance)[0]

    def shr(self, distance: int) -> BigUInt:
        return self._fresh(BigUInt.shr_assign, distance)[0]

    # ---------------------------------------------------------------------------
    # Bit counting
    # ---------------------------------------------------------------------------

    def length_in_bits(self) -> int:
        return self.LAYOUT.bits()

    def length_in_bytes(self) -> int:
        return self.N * self.LIMB.size_in_bytes()

    def count_ones(self) -> int:
        return sum(self.LIMB.count_ones(v) for v in self._number)

    def count_zeros(self) -> int:
        return self.length_in_bits() - self.count_ones()

    def leading_zeros(self) -> int:
        return self.length_in_bits() - 1 - self.LAYOUT.highest_set_bit(self._number)

    def trailing_zeros(self) -> int:
        count = 0
        for value in self.LAYOUT.significance_order(self._number):
            if value != 0:
                return count + self.LIMB.trailing_zeros(value)
            count += self.LIMB.bits
        return count

    def leading_ones(self) -> int:
        return (~self).leading_zeros()

    def trailing_ones(self) -> int:
        return (~self).trailing_zeros()

    # ---------------------------------------------------------------------------
    # Python protocol
    # ---------------------------------------------------------------------------

    def _bitwise(self, rhs: BigUInt | int, op: Callable[[int, int], int]) -> BigUInt:
        operand = self._operand(rhs)
        return type(self)([op(a, b) for a, b in zip(self._number, operand)])

    def _bitwise_assign(self, rhs: BigUInt | int, op: Callable[[int, int], int]) -> BigUInt:
        operand = self._operand(rhs)
        self._number = [op(a, b) for a, b in zip(self._number, operand)]
        self._flag = 0
        return self

    def _accepts(self, other: object) -> bool:
        return isinstance(other, type(self)) or (isinstance(other, int) and not isinstance(other, bool))

    def __add__(self, rhs: object) -> BigUInt:
        if not self._accepts(rhs):
            return NotImplemented
        return self.wrapping_add(rhs)  # type: ignore[arg-type]

    def __radd__(self, lhs: object) -> BigUInt:
        return self.__add__(lhs)

    def __iadd__(self, rhs: object) -> BigUInt:
        if not self._accepts(rhs):
            return NotImplemented
        self.wrapping_add_assign(rhs)  # type: ignore[arg-type]
        return self

    def __sub__(self, rhs: object) -> BigUInt:
        if not self._accepts(rhs):
            return NotImplemented
        return self.wrapping_sub(rhs)  # type: ignore[arg-type]

    def __rsub__(self, lhs: object) -> BigUInt:
        if not self._accepts(lhs):
            return NotImplemented
        return type(self)(self._operand(lhs)).wrapping_sub(self)  # type: ignore[arg-type]

    def __isub__(self, rhs: object) -> BigUInt:
        if not self._accepts(rhs):
            return NotImplemented
        self.wrapping_sub_assign(rhs)  # type: ignore[arg-type]
        return self

    def __mul__(self, rhs: object) -> BigUInt:
        if not self._accepts(rhs):
            return NotImplemented
        return self.wrapping_mul(rhs)  # type: ignore[arg-type]

    def __rmul__(self, lhs: object) -> BigUInt:
        return self.__mul__(lhs)

    def __imul__(self, rhs: object) -> BigUInt:
        if not self._accepts(rhs):
            return NotImplemented
        self.wrapping_mul_assign(rhs)  # type: ignore[arg-type]
        return self

    def __floordiv__(self, rhs: object) -> BigUInt:
        if not self._accepts(rhs):
            return NotImplemented
        return self.wrapping_div(rhs)  # type: ignore[arg-type]

    def __ifloordiv__(self, rhs: object) -> BigUInt:
        if not self._accepts(rhs):
            return NotImplemented
        self.wrapping_div_assign(rhs)  # type: ignore[arg-type]
        return self

    def __mod__(self, rhs: object) -> BigUInt:
        if not self._accepts(rhs):
            return NotImplemented
        return self.wrapping_rem(rhs)  # type: ignore[arg-type]

    def __imod__(self, rhs: object) -> BigUInt:
        if not self._accepts(rhs):
            return NotImplemented
        self.wrapping_rem_assign(rhs)  # type: ignore[arg-type]
        return self

    def __divmod__(self, rhs: object) -> tuple[BigUInt, BigUInt]:
        if not self._accepts(rhs):
            return NotImplemented
        self._require_divisor(rhs)  # type: ignore[arg-type]
        return self.divide_fully(rhs)  # type: ignore[arg-type]

    def __pow__(self, exponent: object) -> BigUInt:
        if not self._accepts(exponent):
            return NotImplemented
        return self.wrapping_pow(exponent)  # type: ignore[arg-type]

    def __ipow__(self, exponent: object) -> BigUInt:
        if not self._accepts(exponent):
            return NotImplemented
        self.wrapping_pow_assign(exponent)  # type: ignore[arg-type]
        return self

    @staticmethod
    def _is_distance(distance: object) -> bool:
        return isinstance(distance, int) and not isinstance(distance, bool)

    def __lshift__(self, distance: object) -> BigUInt:
        if not self._is_distance(distance):
            return NotImplemented
        return self.shl(distance)  # type: ignore[arg-type]

    def __ilshift__(self, distance: object) -> BigUInt:
        if not self._is_distance(distance):
            return NotImplemented
        self.shl_assign(distance)  # type: ignore[arg-type]
        return self

    def __rshift__(self, distance: object) -> BigUInt:
        if not self._is_distance(distance):
            return NotImplemented
        return self.shr(distance)  # type: ignore[arg-type]

    def __irshift__(self, distance: object) -> BigUInt:
        if not self._is_distance(distance):
            return NotImplemented
        self.shr_assign(distance)  # type: ignore[arg-type]
        return self

    def __and__(self, rhs: object) -> BigUInt:
        if not self._accepts(rhs):
            return NotImplemented
        return self._bitwise(rhs, lambda a, b: a & b)  # type: ignore[arg-type]

    def __iand__(self, rhs: object) -> BigUInt:
        if not self._accepts(rhs):
            return NotImplemented
        return self._bitwise_assign(rhs, lambda a, b: a & b)  # type: ignore[arg-type]

    def __or__(self, rhs: object) -> BigUInt:
        if not self._accepts(rhs):
            return NotImplemented
        return self._bitwise(rhs, lambda a, b: a | b)  # type: ignore[arg-type]

    def __ior__(self, rhs: object) -> BigUInt:
        if not self._accepts(rhs):
            return NotImplemented
        return self._bitwise_assign(rhs, lambda a, b: a | b)  # type: ignore[arg-type]

    def __xor__(self, rhs: object) -> BigUInt:
        if not self._accepts(rhs):
            return NotImplemented
        return self._bitwise(rhs, lambda a, b: a ^ b)  # type: ignore[arg-type]

    def __ixor__(self, rhs: object) -> BigUInt:
        if not self._accepts(rhs):
            return NotImplemented
        return self._bitwise_assign(rhs, lambda a, b: a ^ b)  # type: ignore[arg-type]

    def __invert__(self) -> BigUInt:
        mask = self.LIMB.mask
        return type(self)([v ^ mask for v in self._number])

    def _cmp(self, other: object) -> int | None:
        if isinstance(other, type(self)):
            return compare(self.LAYOUT, self._number, other._number)
        if isinstance(other, BigUInt) or (isinstance(other, int) and not isinstance(other, bool)):
            a = int(self)
            b = int(other)
            return (a > b) - (a < b)
        return None

    def __eq__(self, other: object) -> bool:
        c = self._cmp(other)
        if c is None:
            return NotImplemented
        return c == 0

    def __lt__(self, other: object) -> bool:
        c = self._cmp(other)
        if c is None:
            return NotImplemented
        return c < 0

    def __le__(self, other: object) -> bool:
        c = self._cmp(other)
        if c is None:
            return NotImplemented
        return c <= 0

    def __gt__(self, other: object) -> bool:
        c = self._cmp(other)
        if c is None:
            return NotImplemented
        return c > 0

    def __ge__(self, other: object) -> bool:
        c = self._cmp(other)
        if c is None:
            return NotImplemented
        return c >= 0

    __hash__ = None  # type: ignore[assignment]

    def __bool__(self) -> bool:
        return not self.is_zero()

    def __int__(self) -> int:
        return self.LAYOUT.to_int(self._number)

    def __repr__(self) -> str:
        names = [
            name
            for name, bit in (
                ("OVERFLOW", self.OVERFLOW),
                ("UNDERFLOW", self.UNDERFLOW),
                ("DIVIDED_BY_ZERO", self.DIVIDED_BY_ZERO),
            )
            if self._flag & bit
        ]
        if names:
            return f"{type(self).__name__}({int(self):#x}, flags={'|'.join(names)})"
        return f"{type(self).__name__}({int(self):#x})"


# ---------------------------------------------------------------------------
# Type factory
# ---------------------------------------------------------------------------

_TYPES: dict[tuple[str, int, LimbOrder], type[BigUInt]] = {}

UTYPE_BITS: list[int] = [256, 512, 1024, 2048, 3072, 4096, 5120, 6144, 7168, 8192, 16384]


def _narrowest_limb(value: int) -> Limb:
    for limb in LIMBS.values():
        if limb.is_valid(value):
            return limb
    raise LimbValueError(f"{value!r} does not fit any primitive unsigned width")


def big_uint(limb: Limb, n: int, order: LimbOrder | None = None) -> type[BigUInt]:
    """The BigUInt type with n limbs of the given width.

    Types are cached, so the same arguments always return the same class.
    ``order`` defaults to the process-wide ``DEFAULT_LIMB_ORDER``.
    """
    if n <= 0:
        raise LimbValueError(f"limb count must be positive, got {n}")
    chosen = order if order is not None else DEFAULT_LIMB_ORDER
    key = (limb.name, n, chosen)
    cls = _TYPES.get(key)
    if cls is not None:
        return cls
    name = f"u{n * limb.bits}_with_{limb.name}"
    if chosen is not DEFAULT_LIMB_ORDER:
        name += f"_{chosen.value}"
    cls = type(
        name,
        (BigUInt,),
        {
            "__slots__": (),
            "LIMB": limb,
            "N": n,
            "ORDER": chosen,
            "LAYOUT": Layout(limb, n, chosen),
        },
    )
    _TYPES[key] = cls
    logger.debug("defined %s (%d x %s, %s order)", name, n, limb.name, chosen.value)
    return cls


def utypes_with(limb: Limb, order: LimbOrder | None = None) -> dict[str, type[BigUInt]]:
    """The standard aliases u256 ... u16384 built from the given limb width."""
    return {f"u{bits}": big_uint(limb, bits // limb.bits, order) for bits in UTYPE_BITS}
