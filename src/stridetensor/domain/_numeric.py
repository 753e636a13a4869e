"""
Numeric capability interface.

`TensorNumeric` is the single boundary through which element-type-specific
arithmetic enters the engine. A tensor receives one numeric object at
construction and every operation that needs to add, compare, convert or
sample elements goes through it; the view algebra and the apply engines
never inspect element types themselves.

Concrete numerics live in the infrastructure layer (one per `DataType`).
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

from .types._data_type import DataType


@runtime_checkable
class TensorNumeric(Protocol):
    """
    Per-element-type strategy supplying arithmetic, comparison and sampling.

    Notes
    -----
    - Values passed in and returned are backend scalars of the numeric's
      element type (e.g. `np.float32`).
    - Random primitives draw from the generator bound to the numeric instance;
      `with_generator` returns a copy bound to another generator.
    """

    @property
    def data_type(self) -> DataType:
        """Element type handled by this numeric."""
        ...

    @property
    def dtype(self) -> Any:
        """Backend buffer dtype (e.g. `np.dtype('float32')`)."""
        ...

    @property
    def epsilon(self) -> float:
        """Relative tolerance used for element equality."""
        ...

    @property
    def zero(self) -> Any:
        """Additive identity."""
        ...

    @property
    def one(self) -> Any:
        """Multiplicative identity."""
        ...

    def from_int(self, value: int) -> Any: ...

    def from_float(self, value: float) -> Any: ...

    def plus(self, x: Any, y: Any) -> Any: ...

    def minus(self, x: Any, y: Any) -> Any: ...

    def times(self, x: Any, y: Any) -> Any: ...

    def divide(self, x: Any, y: Any) -> Any: ...

    def is_greater(self, x: Any, y: Any) -> bool:
        """Return True when `x > y`."""
        ...

    def abs(self, x: Any) -> Any: ...

    def sqrt(self, x: Any) -> Any: ...

    def rand(self) -> Any:
        """Draw from Uniform[0, 1)."""
        ...

    def randn(self) -> Any:
        """Draw from the standard normal distribution."""
        ...

    def bernoulli(self, p: float) -> Any:
        """Return `one` with probability `p`, `zero` otherwise."""
        ...

    def to_double(self, x: Any) -> float: ...

    def to_float(self, x: Any) -> float: ...

    def nearly_equal(self, x: Any, y: Any) -> bool:
        """Epsilon-tolerant element equality."""
        ...

    def with_generator(self, generator: Any) -> "TensorNumeric":
        """Return an equivalent numeric bound to `generator`."""
        ...
