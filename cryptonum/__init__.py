"""Fixed-width multi-limb unsigned integers for cryptographic arithmetic."""

from .biguint import BigUInt, big_uint, utypes_with
from .config import DEFAULT_LIMB_ORDER, LimbOrder
from .errors import (
    ConfigError,
    DivisionByZero,
    IndexOutOfRange,
    LimbValueError,
    NumberError,
    OverflowFault,
    UnderflowFault,
)
from .limb import LIMBS, U8, U16, U32, U64, U128, Limb, limb_named
from .shared import SharedArrays, SharedValues, Side

__all__ = [
    "BigUInt",
    "ConfigError",
    "DEFAULT_LIMB_ORDER",
    "DivisionByZero",
    "IndexOutOfRange",
    "LIMBS",
    "Limb",
    "LimbOrder",
    "LimbValueError",
    "NumberError",
    "OverflowFault",
    "SharedArrays",
    "SharedValues",
    "Side",
    "U8",
    "U16",
    "U32",
    "U64",
    "U128",
    "UnderflowFault",
    "big_uint",
    "limb_named",
    "utypes_with",
]
