"""
Concrete numeric capabilities for FLOAT and DOUBLE tensors.

Each numeric binds:
- a NumPy scalar type (`np.float32` / `np.float64`) used to coerce every
  result back to the element type,
- a relative equality tolerance (from configuration unless overridden),
- a `RandomGenerator` used by `rand`, `randn` and `bernoulli`.

A tensor receives one numeric at construction and never switches on its
element type afterwards; everything type-specific happens here.
"""

from __future__ import annotations

import math
from typing import Any, Optional, Union

import numpy as np

from ...domain.types._data_type import DataType
from .._config import get_config
from ..random._generator import RandomGenerator, default_generator


class _FloatingNumeric:
    """
    Shared implementation of the `TensorNumeric` protocol for IEEE floats.

    Parameters
    ----------
    generator : Optional[RandomGenerator], optional
        Generator used for sampling. Defaults to the process default generator.
    epsilon : Optional[float], optional
        Relative equality tolerance. Defaults to the configured value for the
        element type.
    """

    _DATA_TYPE: DataType
    _SCALAR: type

    __slots__ = ("_generator", "_epsilon", "_tiny")

    def __init__(
        self,
        generator: Optional[RandomGenerator] = None,
        epsilon: Optional[float] = None,
    ) -> None:
        self._generator = generator if generator is not None else default_generator()
        self._epsilon = (
            float(epsilon)
            if epsilon is not None
            else get_config().epsilon_for(self._DATA_TYPE)
        )
        self._tiny = float(np.finfo(self._SCALAR).tiny)

    # ----------------------------
    # Identity
    # ----------------------------
    @property
    def data_type(self) -> DataType:
        return self._DATA_TYPE

    @property
    def dtype(self) -> np.dtype:
        return np.dtype(self._SCALAR)

    @property
    def epsilon(self) -> float:
        return self._epsilon

    @property
    def generator(self) -> RandomGenerator:
        return self._generator

    @property
    def zero(self) -> Any:
        return self._SCALAR(0)

    @property
    def one(self) -> Any:
        return self._SCALAR(1)

    # ----------------------------
    # Conversion
    # ----------------------------
    def from_int(self, value: int) -> Any:
        return self._SCALAR(int(value))

    def from_float(self, value: float) -> Any:
        return self._SCALAR(value)

    def to_double(self, x: Any) -> float:
        return float(x)

    def to_float(self, x: Any) -> float:
        return float(np.float32(x))

    # ----------------------------
    # Arithmetic
    # ----------------------------
    def plus(self, x: Any, y: Any) -> Any:
        return self._SCALAR(x + y)

    def minus(self, x: Any, y: Any) -> Any:
        return self._SCALAR(x - y)

    def times(self, x: Any, y: Any) -> Any:
        return self._SCALAR(x * y)

    def divide(self, x: Any, y: Any) -> Any:
        # IEEE semantics: x / 0 -> +-inf or nan, never an exception
        with np.errstate(divide="ignore", invalid="ignore"):
            return self._SCALAR(self._SCALAR(x) / self._SCALAR(y))

    def is_greater(self, x: Any, y: Any) -> bool:
        return bool(x > y)

    def abs(self, x: Any) -> Any:
        return self._SCALAR(abs(x))

    def sqrt(self, x: Any) -> Any:
        with np.errstate(invalid="ignore"):
            return self._SCALAR(np.sqrt(self._SCALAR(x)))

    # ----------------------------
    # Sampling
    # ----------------------------
    def rand(self) -> Any:
        return self._SCALAR(self._generator.uniform())

    def randn(self) -> Any:
        return self._SCALAR(self._generator.normal())

    def bernoulli(self, p: float) -> Any:
        return self.one if self._generator.bernoulli(p) else self.zero

    # ----------------------------
    # Comparison
    # ----------------------------
    def nearly_equal(self, x: Any, y: Any) -> bool:
        """
        Relative comparison with special handling around zero.

        Values equal bit-for-bit (including equal infinities) compare equal.
        When either side is zero, or the difference is subnormal, the
        difference must be below `epsilon * tiny`; otherwise the difference
        relative to `|x| + |y|` must be below `epsilon`.
        """
        a = float(x)
        b = float(y)
        if a == b:
            return True
        if math.isnan(a) or math.isnan(b):
            return False
        diff = abs(a - b)
        if a == 0.0 or b == 0.0 or diff < self._tiny:
            return diff < self._epsilon * self._tiny
        return diff / (abs(a) + abs(b)) < self._epsilon

    def with_generator(self, generator: RandomGenerator) -> "_FloatingNumeric":
        """Return a numeric of the same type and tolerance bound to `generator`."""
        return type(self)(generator=generator, epsilon=self._epsilon)

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(epsilon={self._epsilon!r}, "
            f"generator={self._generator!r})"
        )


class FloatNumeric(_FloatingNumeric):
    """Numeric capability for 32-bit floating point tensors."""

    _DATA_TYPE = DataType.FLOAT
    _SCALAR = np.float32
    __slots__ = ()


class DoubleNumeric(_FloatingNumeric):
    """Numeric capability for 64-bit floating point tensors."""

    _DATA_TYPE = DataType.DOUBLE
    _SCALAR = np.float64
    __slots__ = ()


Numeric = Union[FloatNumeric, DoubleNumeric]


def numeric_for(
    data_type: Union[DataType, str, None] = None,
    *,
    generator: Optional[RandomGenerator] = None,
    epsilon: Optional[float] = None,
) -> Numeric:
    """
    Build the numeric capability for a data type tag.

    Parameters
    ----------
    data_type : DataType | str | None, optional
        Element type. None selects the configured default.
    generator : Optional[RandomGenerator], optional
        Generator to bind. Defaults to the process default generator.
    epsilon : Optional[float], optional
        Equality tolerance override.

    Returns
    -------
    FloatNumeric | DoubleNumeric
    """
    dt = get_config().default_dtype if data_type is None else DataType.parse(data_type)
    cls = FloatNumeric if dt is DataType.FLOAT else DoubleNumeric
    return cls(generator=generator, epsilon=epsilon)


def numeric_for_dtype(dtype: Any, **kwargs: Any) -> Numeric:
    """
    Build the numeric capability matching a NumPy dtype.

    Raises
    ------
    TypeError
        If `dtype` is not float32 or float64.
    """
    dt = np.dtype(dtype)
    if dt == np.float32:
        return numeric_for(DataType.FLOAT, **kwargs)
    if dt == np.float64:
        return numeric_for(DataType.DOUBLE, **kwargs)
    raise TypeError(f"Unsupported element dtype {dt}; expected float32 or float64")
