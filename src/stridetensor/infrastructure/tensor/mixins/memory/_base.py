"""
Tensor memory / construction mixin.

This module defines `TensorMixinMemory`, which groups factory constructors
(`zeros`, `ones`, `full`, `from_numpy`, `randperm`, `from_export`,
`from_payload`) and
the operations that move element values around: bulk fill, copy between
views, cloning, random initialization and NumPy materialization.

Design intent
-------------
- Writes go through the apply engine so they honor arbitrary strides; the
  contiguous case short-circuits to a single storage-level fill or copy.
- Random fills draw from the numeric capability's generator, or from an
  explicitly passed `RandomGenerator` for reproducible runs.
- `to_numpy` always returns an independent, C-ordered copy; `to_matrix` /
  `to_vector` (interop mixin) are the aliasing counterparts.
"""

from __future__ import annotations

from abc import ABC
from typing import Any, Dict, Optional, Sequence, Type, Union

import numpy as np
from numpy.lib.stride_tricks import as_strided
from typing_extensions import Self

from .....domain._errors import ElementCountMismatchError
from .....domain._tensor import ITensor
from .....domain.types._data_type import DataType
from ....encoding._b64 import export_to_payload, payload_fields
from ....numeric._numeric import Numeric, numeric_for_dtype
from ....random._generator import RandomGenerator
from ..._apply import apply1, apply2, element_offsets
from ..._geometry import is_contiguous, n_element
from ._export import TensorExport

Number = Union[int, float]


class TensorMixinMemory(ABC):
    """
    Mixin implementing construction, filling, copying and materialization.
    """

    # ----------------------------
    # Factories
    # ----------------------------
    @classmethod
    def zeros(
        cls: Type[ITensor],
        shape: Union[int, Sequence[int]],
        *,
        data_type: Union[DataType, str, None] = None,
        numeric: Optional[Numeric] = None,
    ) -> "ITensor":
        """Create a zero-filled contiguous tensor."""
        return cls(shape, data_type=data_type, numeric=numeric)

    @classmethod
    def ones(
        cls: Type[ITensor],
        shape: Union[int, Sequence[int]],
        *,
        data_type: Union[DataType, str, None] = None,
        numeric: Optional[Numeric] = None,
    ) -> "ITensor":
        """Create a contiguous tensor filled with ones."""
        return cls.full(shape, 1, data_type=data_type, numeric=numeric)

    @classmethod
    def full(
        cls: Type[ITensor],
        shape: Union[int, Sequence[int]],
        value: Number,
        *,
        data_type: Union[DataType, str, None] = None,
        numeric: Optional[Numeric] = None,
    ) -> "ITensor":
        """Create a contiguous tensor filled with `value`."""
        t = cls(shape, data_type=data_type, numeric=numeric)
        t.fill(value)
        return t

    @classmethod
    def from_numpy(
        cls: Type[ITensor],
        arr: Any,
        *,
        data_type: Union[DataType, str, None] = None,
        numeric: Optional[Numeric] = None,
    ) -> "ITensor":
        """
        Create a contiguous tensor holding a copy of `arr`.

        Parameters
        ----------
        arr : array_like
            Source values. A 0-d array becomes a 1-element 1-D tensor; an
            array with no elements becomes an empty tensor.
        data_type : DataType | str | None, optional
            Element type. Defaults to the array's type when it is float32 or
            float64, otherwise to the configured default.
        numeric : FloatNumeric | DoubleNumeric, optional
            Numeric capability to bind.
        """
        a = np.asarray(arr)
        if data_type is None and numeric is None and a.dtype in (np.float32, np.float64):
            numeric = numeric_for_dtype(a.dtype)
        if a.size == 0:
            return cls((), data_type=data_type, numeric=numeric)
        shape = a.shape if a.ndim > 0 else (1,)
        t = cls(shape, data_type=data_type, numeric=numeric)
        t.copy_from_numpy(a.reshape(shape))
        return t

    @classmethod
    def randperm(
        cls: Type[ITensor],
        n: int,
        *,
        generator: Optional[RandomGenerator] = None,
        data_type: Union[DataType, str, None] = None,
        numeric: Optional[Numeric] = None,
    ) -> "ITensor":
        """
        Create a 1-D tensor holding a random permutation of 1..n.

        Draws from `generator` when given, otherwise from the bound numeric
        capability's generator.

        Raises
        ------
        ValueError
            If `n < 1`.
        """
        if n < 1:
            raise ValueError(f"randperm requires n >= 1, got {n}")
        t = cls(n, data_type=data_type, numeric=numeric)
        gen = t._numeric.generator if generator is None else generator
        t.copy_from_numpy(gen.randperm(n))
        return t

    @classmethod
    def from_export(
        cls: Type[ITensor],
        export: TensorExport,
        *,
        numeric: Optional[Numeric] = None,
    ) -> "ITensor":
        """
        Rebuild a view from an export record.

        The record's storage array is aliased, not copied. An export of an
        empty tensor rebuilds an empty tensor.
        """
        if not export.size:
            return cls((), data_type=export.data_type, numeric=numeric)
        return cls.with_storage(
            export.storage,
            export.storage_offset,
            export.size,
            export.stride,
            numeric=numeric,
        )

    @classmethod
    def from_payload(
        cls: Type[ITensor],
        payload: Dict[str, Any],
        *,
        numeric: Optional[Numeric] = None,
    ) -> "ITensor":
        """Rebuild a tensor from a payload produced by `to_payload`."""
        return cls.from_export(TensorExport(**payload_fields(payload)), numeric=numeric)

    # ----------------------------
    # Export
    # ----------------------------
    def export(self: ITensor) -> TensorExport:
        """
        Snapshot this view as `(data type, size, stride, storage, offset)`.

        The storage buffer is copied, so later writes to this tensor do not
        affect the export.
        """
        if self._storage is None:
            storage = np.empty(0, dtype=self.dtype)
        else:
            storage = self._storage.array().copy()
        return TensorExport(
            data_type=self.data_type,
            size=tuple(self._size),
            stride=tuple(self._stride),
            storage=storage,
            storage_offset=self._offset + 1,
        )

    def to_payload(self: ITensor) -> Dict[str, Any]:
        """Return a JSON-safe dict (base64 storage) describing this view."""
        return export_to_payload(self.export())

    # ----------------------------
    # Filling and copying
    # ----------------------------
    def fill(self: ITensor, value: Number) -> Self:
        """
        Write `value` into every logical element.

        On a view with zero strides the shared storage elements are simply
        written more than once.
        """
        if not self._size:
            return self
        v = self._numeric.from_float(value)
        if is_contiguous(self):
            self._storage.fill(v, self._offset, n_element(self))
            return self

        def _fill(data: np.ndarray, i: int) -> None:
            data[i] = v

        apply1(self, _fill)
        return self

    def zero(self: ITensor) -> Self:
        return self.fill(0)

    def copy(self: ITensor, src: ITensor) -> Self:
        """
        Copy the elements of `src` into this tensor in row-major order.

        Shapes may differ as long as the element counts match. Values are
        converted to this tensor's element type. When `src` and this tensor
        overlap in memory, the result is as if `src` had been read in full
        before any write.

        Raises
        ------
        ElementCountMismatchError
            If the element counts differ.
        """
        n = n_element(self)
        if n_element(src) != n:
            raise ElementCountMismatchError(n, n_element(src))
        if n == 0:
            return self
        if (
            self.data_type is src.data_type
            and is_contiguous(self)
            and is_contiguous(src)
        ):
            self._storage.copy_from(src._storage, src._offset, self._offset, n)
            return self

        # the strided walk reads and writes element by element
        if np.may_share_memory(self._storage.array(), src._storage.array()):
            src = src.clone()

        scalar = self._numeric.from_float

        def _copy(dst: np.ndarray, i: int, data: np.ndarray, j: int) -> None:
            dst[i] = scalar(data[j])

        apply2(self, src, _copy)
        return self

    def clone(self: ITensor) -> Self:
        """Return a contiguous copy with its own storage."""
        result = self._new(list(self._size))
        return result.copy(self)

    # ----------------------------
    # Random initialization
    # ----------------------------
    def _sampling_numeric(self: ITensor, generator: Optional[RandomGenerator]) -> Numeric:
        if generator is None:
            return self._numeric
        return self._numeric.with_generator(generator)

    def rand(self: ITensor, generator: Optional[RandomGenerator] = None) -> Self:
        """Fill with samples from the uniform distribution on [0, 1)."""
        draw = self._sampling_numeric(generator).rand

        def _rand(data: np.ndarray, i: int) -> None:
            data[i] = draw()

        apply1(self, _rand)
        return self

    def randn(self: ITensor, generator: Optional[RandomGenerator] = None) -> Self:
        """Fill with samples from the standard normal distribution."""
        draw = self._sampling_numeric(generator).randn

        def _randn(data: np.ndarray, i: int) -> None:
            data[i] = draw()

        apply1(self, _randn)
        return self

    def bernoulli(
        self: ITensor, p: float, generator: Optional[RandomGenerator] = None
    ) -> Self:
        """
        Fill with ones (probability `p`) and zeros.

        Raises
        ------
        ValueError
            If `p` is outside [0, 1].
        """
        numeric = self._sampling_numeric(generator)
        if not 0.0 <= p <= 1.0:
            raise ValueError(f"bernoulli probability must be in [0, 1], got {p}")

        def _bernoulli(data: np.ndarray, i: int) -> None:
            data[i] = numeric.bernoulli(p)

        apply1(self, _bernoulli)
        return self

    def uniform(self: ITensor, *args: Number) -> Any:
        """
        Draw one scalar.

        - `uniform()`     : in [0, 1)
        - `uniform(a)`    : in [1, a)
        - `uniform(a, b)` : in [a, b), requires `a <= b`

        Raises
        ------
        TypeError
            If more than two bounds are given.
        ValueError
            If `a > b`.
        """
        ev = self._numeric
        if len(args) > 2:
            raise TypeError(f"uniform takes at most 2 bounds, got {len(args)}")
        if not args:
            return ev.rand()
        if len(args) == 1:
            upper = ev.from_float(args[0])
            return ev.plus(ev.times(ev.rand(), ev.minus(upper, ev.one)), ev.one)
        a = ev.from_float(args[0])
        b = ev.from_float(args[1])
        if ev.to_double(ev.minus(a, b)) > 0.0:
            raise ValueError(f"invalid uniform bounds, expected {args[0]} <= {args[1]}")
        return ev.plus(ev.times(ev.rand(), ev.minus(b, a)), a)

    # ----------------------------
    # NumPy materialization
    # ----------------------------
    def to_numpy(self: ITensor) -> np.ndarray:
        """
        Return a C-ordered NumPy copy of the logical elements.

        An empty tensor yields an array of shape `(0,)`.
        """
        if not self._size:
            return np.empty((0,), dtype=self.dtype)
        data = self._storage.array()
        itemsize = data.dtype.itemsize
        view = as_strided(
            data[self._offset :],
            shape=tuple(self._size),
            strides=tuple(st * itemsize for st in self._stride),
            writeable=False,
        )
        return view.copy()

    def copy_from_numpy(self: ITensor, arr: Any) -> Self:
        """
        Write the values of `arr` (read in C order) into this tensor.

        Raises
        ------
        ElementCountMismatchError
            If `arr` holds a different number of elements.
        """
        flat = np.asarray(arr).reshape(-1)
        n = n_element(self)
        if flat.shape[0] != n:
            raise ElementCountMismatchError(n, int(flat.shape[0]))
        if n == 0:
            return self
        offsets = np.fromiter(element_offsets(self), dtype=np.intp, count=n)
        self._storage.array()[offsets] = flat.astype(self.dtype, copy=False)
        return self
