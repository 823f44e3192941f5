"""Reinterpretation of limb values and limb arrays across widths.

``SharedValues`` and ``SharedArrays`` model one piece of storage that can be
read either as destination-width limbs or as source-width limbs. The storage
is owned by exactly one interpretation at a time (its ``Side``); the other
interpretation is produced by an explicit shift-and-copy conversion, so a
value written through one side is never read back through a stale alias.
"""

from __future__ import annotations

from enum import Enum
from typing import Sequence

from .config import DEFAULT_LIMB_ORDER, LimbOrder
from .errors import LimbValueError
from .limb import Limb


class Side(Enum):
    DES = "des"
    SRC = "src"


# ---------------------------------------------------------------------------
# Single value
# ---------------------------------------------------------------------------


class SharedValues:
    """One cell viewed as a ``des``-wide or a ``src``-wide unsigned value.

    ``into_des(pos)`` extracts the pos-th ``des``-wide chunk of the source
    value, counting from the least significant end.
    """

    def __init__(self, des: Limb, src: Limb):
        self.des = des
        self.src = src
        self._side = Side.DES if des.bits >= src.bits else Side.SRC
        self._cell = 0

    @classmethod
    def from_src(cls, des: Limb, src: Limb, value: int) -> SharedValues:
        me = cls(des, src)
        me.set_src(value)
        return me

    @classmethod
    def from_des(cls, des: Limb, src: Limb, value: int) -> SharedValues:
        me = cls(des, src)
        me.set_des(value)
        return me

    @property
    def side(self) -> Side:
        return self._side

    def set_src(self, value: int) -> None:
        self._cell = self.src.require(value)
        self._side = Side.SRC

    def set_des(self, value: int) -> None:
        self._cell = self.des.require(value)
        self._side = Side.DES

    def get_src(self) -> int:
        if self._side is Side.SRC:
            return self._cell
        return self._cell & self.src.mask

    def get_des(self) -> int:
        if self._side is Side.DES:
            return self._cell
        return self._cell & self.des.mask

    def is_src_zero(self) -> bool:
        return self.get_src() == 0

    def into_des(self, pos: int) -> int | None:
        """The pos-th des-wide chunk of the source, or None past its last nonzero bit.

        Chunk 0 always exists. A later chunk is None once every source bit at
        or above its position is zero, which also covers chunks that start
        beyond the source width.
        """
        if pos < 0:
            raise LimbValueError(f"negative chunk position {pos}")
        shifted = self.get_src() >> (pos * self.des.bits)
        if pos > 0 and shifted == 0:
            return None
        return shifted & self.des.mask


# ---------------------------------------------------------------------------
# Arrays
# ---------------------------------------------------------------------------


def _pack(cells: Sequence[int], limb: Limb, order: LimbOrder) -> bytes:
    byteorder = order.value
    return b"".join(limb.to_bytes(v, byteorder) for v in cells)


def _unpack(data: bytes, limb: Limb, order: LimbOrder) -> list[int]:
    size = limb.size_in_bytes()
    byteorder = order.value
    return [limb.from_bytes(data[k : k + size], byteorder) for k in range(0, len(data), size)]


def _resize(data: bytes, size: int, order: LimbOrder) -> bytes:
    """Zero-extend or truncate to size bytes, keeping the least significant bytes."""
    if len(data) == size:
        return data
    if order is LimbOrder.LITTLE:
        if len(data) < size:
            return data + bytes(size - len(data))
        return data[:size]
    if len(data) < size:
        return bytes(size - len(data)) + data
    return data[len(data) - size :]


def reinterpret(
    cells: Sequence[int], src: Limb, des: Limb, n: int, order: LimbOrder
) -> list[int]:
    """Copy a src-limb array into an n-element des-limb array of the same order."""
    data = _resize(_pack(cells, src, order), n * des.size_in_bytes(), order)
    return _unpack(data, des, order)


class SharedArrays:
    """An n-element ``des`` array and an m-element ``src`` array over one storage.

    A wider destination is zero-extended at its most significant end; a
    narrower one keeps the least significant bytes of the source.
    """

    def __init__(
        self,
        des: Limb,
        n: int,
        src: Limb,
        m: int,
        order: LimbOrder | None = None,
    ):
        if n <= 0 or m <= 0:
            raise LimbValueError(f"array lengths must be positive, got {n} and {m}")
        self.des = des
        self.n = n
        self.src = src
        self.m = m
        self.order = order if order is not None else DEFAULT_LIMB_ORDER
        if self.size_of_des() >= self.size_of_src():
            self._side = Side.DES
            self._cells: tuple[int, ...] = (0,) * n
        else:
            self._side = Side.SRC
            self._cells = (0,) * m

    @classmethod
    def from_src(
        cls,
        des: Limb,
        n: int,
        src: Limb,
        array: Sequence[int],
        order: LimbOrder | None = None,
    ) -> SharedArrays:
        me = cls(des, n, src, len(array), order)
        me.set_src(array)
        return me

    @property
    def side(self) -> Side:
        return self._side

    def size_of_des(self) -> int:
        return self.des.size_in_bytes() * self.n

    def size_of_src(self) -> int:
        return self.src.size_in_bytes() * self.m

    def set_src(self, array: Sequence[int]) -> None:
        if len(array) != self.m:
            raise LimbValueError(f"expected {self.m} {self.src.name} limbs, got {len(array)}")
        self._cells = tuple(self.src.require(v) for v in array)
        self._side = Side.SRC

    def set_des(self, array: Sequence[int]) -> None:
        if len(array) != self.n:
            raise LimbValueError(f"expected {self.n} {self.des.name} limbs, got {len(array)}")
        self._cells = tuple(self.des.require(v) for v in array)
        self._side = Side.DES

    def get_src(self) -> list[int]:
        if self._side is Side.SRC:
            return list(self._cells)
        return reinterpret(self._cells, self.des, self.src, self.m, self.order)

    def get_des(self) -> list[int]:
        if self._side is Side.DES:
            return list(self._cells)
        return reinterpret(self._cells, self.src, self.des, self.n, self.order)

    def into_des(self, des: list[int] | None = None) -> list[int]:
        """Destination view of the storage; also copied into des when given."""
        result = self.get_des()
        if des is not None:
            if len(des) != self.n:
                raise LimbValueError(f"destination holds {len(des)} limbs, expected {self.n}")
            des[:] = result
        return result
