"""
Arithmetic mixin for Tensor.

This module defines `TensorMixinArithmetic`. Named methods (`add`, `cmul`,
`addcdiv`, ...) update the receiver in place and return it; the Python
operators (`+`, `-`, `*`, `/`, unary `-`) leave their operands untouched and
return a new contiguous tensor.

Element arithmetic goes through the bound numeric capability, so results are
rounded to the tensor's element type at every step. Operands of tensor-tensor
operations must hold the same number of elements; nothing is broadcast
implicitly (use `expand` / `expand_as` first).
"""

from __future__ import annotations

from abc import ABC
from typing import Any, Callable, Union

import numpy as np
from typing_extensions import Self

from .....domain._tensor import ITensor
from ..._apply import apply1, apply2, apply3
from ._matrix import TensorMixinMatrix

Number = Union[int, float]


def _is_tensor(x: Any) -> bool:
    return isinstance(x, ITensor)


class TensorMixinArithmetic(TensorMixinMatrix, ABC):
    """
    Mixin implementing in-place element arithmetic and the operators.
    """

    # ----------------------------
    # Generic maps
    # ----------------------------
    def apply1(self: ITensor, func: Callable[[Any], Any]) -> Self:
        """Replace every element `x` by `func(x)`."""
        cast = self._numeric.from_float

        def _apply(data: np.ndarray, i: int) -> None:
            data[i] = cast(func(data[i]))

        apply1(self, _apply)
        return self

    def map(self: ITensor, other: ITensor, func: Callable[[Any, Any], Any]) -> Self:
        """
        Replace every element `x` by `func(x, y)`, with `y` the element of
        `other` at the same row-major position.
        """
        cast = self._numeric.from_float

        def _map(d1: np.ndarray, i1: int, d2: np.ndarray, i2: int) -> None:
            d1[i1] = cast(func(d1[i1], d2[i2]))

        apply2(self, other, _map)
        return self

    # ----------------------------
    # In-place arithmetic
    # ----------------------------
    def add(self: ITensor, other: Union[ITensor, Number], value: Number = 1) -> Self:
        """
        In-place addition.

        - `add(s)`        : every element += s
        - `add(y)`        : self += y
        - `add(y, value)` : self += value * y
        """
        ev = self._numeric
        if not _is_tensor(other):
            s = ev.from_float(other)
            return self.apply1(lambda x: ev.plus(x, s))
        v = ev.from_float(value)

        def _add(d1: np.ndarray, i1: int, d2: np.ndarray, i2: int) -> None:
            d1[i1] = ev.plus(d1[i1], ev.times(v, d2[i2]))

        apply2(self, other, _add)
        return self

    def sub(self: ITensor, other: Union[ITensor, Number], value: Number = 1) -> Self:
        """In-place subtraction, mirroring `add`."""
        ev = self._numeric
        if not _is_tensor(other):
            s = ev.from_float(other)
            return self.apply1(lambda x: ev.minus(x, s))
        v = ev.from_float(value)

        def _sub(d1: np.ndarray, i1: int, d2: np.ndarray, i2: int) -> None:
            d1[i1] = ev.minus(d1[i1], ev.times(v, d2[i2]))

        apply2(self, other, _sub)
        return self

    def mul(self: ITensor, value: Number) -> Self:
        """Multiply every element by a scalar."""
        ev = self._numeric
        s = ev.from_float(value)
        return self.apply1(lambda x: ev.times(x, s))

    def div(self: ITensor, value: Number) -> Self:
        """Divide every element by a scalar (IEEE semantics for zero)."""
        ev = self._numeric
        s = ev.from_float(value)
        return self.apply1(lambda x: ev.divide(x, s))

    def cmul(self: ITensor, other: ITensor) -> Self:
        """Element-wise multiplication by `other`."""
        times = self._numeric.times

        def _cmul(d1: np.ndarray, i1: int, d2: np.ndarray, i2: int) -> None:
            d1[i1] = times(d1[i1], d2[i2])

        apply2(self, other, _cmul)
        return self

    def cdiv(self: ITensor, other: ITensor) -> Self:
        """Element-wise division by `other`."""
        divide = self._numeric.divide

        def _cdiv(d1: np.ndarray, i1: int, d2: np.ndarray, i2: int) -> None:
            d1[i1] = divide(d1[i1], d2[i2])

        apply2(self, other, _cdiv)
        return self

    def addcmul(self: ITensor, tensor1: ITensor, tensor2: ITensor, value: Number = 1) -> Self:
        """`self += value * tensor1 * tensor2`, element-wise."""
        ev = self._numeric
        v = ev.from_float(value)

        def _addcmul(d1, i1, d2, i2, d3, i3) -> None:
            d1[i1] = ev.plus(d1[i1], ev.times(ev.times(d2[i2], d3[i3]), v))

        apply3(self, tensor1, tensor2, _addcmul)
        return self

    def addcdiv(self: ITensor, tensor1: ITensor, tensor2: ITensor, value: Number = 1) -> Self:
        """`self += value * tensor1 / tensor2`, element-wise."""
        ev = self._numeric
        v = ev.from_float(value)

        def _addcdiv(d1, i1, d2, i2, d3, i3) -> None:
            d1[i1] = ev.plus(d1[i1], ev.times(ev.divide(d2[i2], d3[i3]), v))

        apply3(self, tensor1, tensor2, _addcdiv)
        return self

    def dot(self: ITensor, other: ITensor) -> Any:
        """Sum of element-wise products, as a scalar of the element type."""
        ev = self._numeric
        acc = [ev.zero]

        def _dot(d1: np.ndarray, i1: int, d2: np.ndarray, i2: int) -> None:
            acc[0] = ev.plus(acc[0], ev.times(d1[i1], d2[i2]))

        apply2(self, other, _dot)
        return acc[0]

    def abs(self: ITensor) -> Self:
        return self.apply1(self._numeric.abs)

    def sqrt(self: ITensor) -> Self:
        return self.apply1(self._numeric.sqrt)

    # ----------------------------
    # Operators (new tensors)
    # ----------------------------
    def __add__(self: ITensor, other: Union[ITensor, Number]) -> ITensor:
        return self.clone().add(other)

    def __radd__(self: ITensor, other: Number) -> ITensor:
        return self.clone().add(other)

    def __sub__(self: ITensor, other: Union[ITensor, Number]) -> ITensor:
        return self.clone().sub(other)

    def __rsub__(self: ITensor, other: Number) -> ITensor:
        ev = self._numeric
        s = ev.from_float(other)
        return self.clone().apply1(lambda x: ev.minus(s, x))

    def __mul__(self: ITensor, other: Union[ITensor, Number]) -> ITensor:
        """Element-wise product with a tensor, or scaling by a scalar."""
        if _is_tensor(other):
            return self.clone().cmul(other)
        return self.clone().mul(other)

    def __rmul__(self: ITensor, other: Number) -> ITensor:
        return self.clone().mul(other)

    def __truediv__(self: ITensor, other: Union[ITensor, Number]) -> ITensor:
        if _is_tensor(other):
            return self.clone().cdiv(other)
        return self.clone().div(other)

    def __rtruediv__(self: ITensor, other: Number) -> ITensor:
        ev = self._numeric
        s = ev.from_float(other)
        return self.clone().apply1(lambda x: ev.divide(s, x))

    def __neg__(self: ITensor) -> ITensor:
        ev = self._numeric
        return self.clone().apply1(lambda x: ev.minus(ev.zero, x))
