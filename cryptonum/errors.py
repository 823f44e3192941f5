"""Exceptions raised by cryptonum.

Overflow and underflow of wrapping arithmetic are recorded as sticky flags on
the value, not raised. Only the unchecked entry points, direct indexing and
division by zero raise.
"""

from __future__ import annotations


class NumberError(Exception):
    """Base error for cryptonum."""

    def __init__(self, msg: str):
        super().__init__(msg)
        self.msg = msg


class IndexOutOfRange(NumberError, IndexError):
    """Limb index outside 0 <= i < N."""

    def __init__(self, index: int, length: int):
        super().__init__(f"limb index {index} out of range for {length} limbs")
        self.index = index
        self.length = length


class DivisionByZero(NumberError, ZeroDivisionError):
    """Divisor is zero."""


class OverflowFault(NumberError, OverflowError):
    """An unchecked operation carried out of the most significant bit."""


class UnderflowFault(NumberError, ArithmeticError):
    """An unchecked operation borrowed past zero."""


class LimbValueError(NumberError, ValueError):
    """Value does not fit the limb or type it was given to."""


class ConfigError(NumberError, ValueError):
    """Invalid configuration value."""
