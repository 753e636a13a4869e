"""
Concrete strided Tensor (NumPy storage backend).

A `Tensor` is a view: a flat `ArrayStorage` shared by reference plus the
geometry `(offset, size[], stride[])` that lays a logical N-dimensional shape
over it. Element arithmetic goes through the numeric capability bound at
construction (`FloatNumeric` / `DoubleNumeric`), never through a process-wide
type switch.

Internal representation
-----------------------
- `_storage` : Optional[ArrayStorage]   (None until something is allocated)
- `_offset`  : int                      (0-based position of the first element)
- `_size`    : list[int]                (one entry per dimension)
- `_stride`  : list[int]                (one entry per dimension, may be 0)
- `_numeric` : FloatNumeric | DoubleNumeric

Rank 0 (empty `_size`) denotes an empty tensor. The public surface is 1-based
and negative-aware; everything below the mixins works on the 0-based fields.

Design notes
------------
- Behavior is composed from focused mixins (view algebra, memory, indexing,
  arithmetic, reductions, comparison, NumPy interop), each of which relies
  only on the fields above and on `_from_view`.
- Views never allocate. Only the constructor and `resize` do, and `resize`
  grows storage only when the new geometry does not fit.
"""

from __future__ import annotations

from typing import Any, List, Optional, Sequence, Union

import numpy as np

from ...domain._errors import DataTypeMismatchError
from ...domain.types._data_type import DataType
from ...domain.utils._indexing import normalize_dim
from ..numeric._numeric import Numeric, numeric_for
from ..storage._array_storage import ArrayStorage
from ._geometry import (
    as_shape,
    bind_storage,
    is_contiguous,
    n_element,
    offset_of,
    raw_resize,
)
from .mixins.arithmetic import TensorMixinArithmetic
from .mixins.comparison import TensorMixinComparison
from .mixins.indexing import TensorMixinIndexing
from .mixins.interop import TensorMixinInterop
from .mixins.memory import TensorMixinMemory
from .mixins.reduction import TensorMixinReduction
from .mixins.view import TensorMixinView

Number = Union[int, float]


def _resolve_numeric(
    data_type: Union[DataType, str, None], numeric: Optional[Numeric]
) -> Numeric:
    if numeric is None:
        return numeric_for(data_type)
    if data_type is not None:
        wanted = DataType.parse(data_type)
        if wanted is not numeric.data_type:
            raise DataTypeMismatchError(numeric.data_type.value, wanted.value)
    return numeric


class Tensor(
    TensorMixinView,
    TensorMixinMemory,
    TensorMixinIndexing,
    TensorMixinArithmetic,
    TensorMixinReduction,
    TensorMixinComparison,
    TensorMixinInterop,
):
    """
    Strided N-dimensional view over a shared flat storage.

    Parameters
    ----------
    shape : int | Sequence[int], optional
        Extents of a freshly allocated, zero-filled, contiguous tensor. An
        empty shape (the default) builds an empty rank-0 tensor without
        storage.
    data_type : DataType | str | None, optional
        Element type tag (`"float"` or `"double"`). Defaults to the configured
        default type, or to the type of `numeric` when one is given.
    numeric : FloatNumeric | DoubleNumeric, optional
        Numeric capability to bind (carries the random generator and the
        equality tolerance).

    Raises
    ------
    InvalidSizeError
        If any extent is not positive.
    DataTypeMismatchError
        If `data_type` and `numeric` disagree.
    """

    def __init__(
        self,
        shape: Union[int, Sequence[int]] = (),
        *,
        data_type: Union[DataType, str, None] = None,
        numeric: Optional[Numeric] = None,
    ) -> None:
        self._numeric = _resolve_numeric(data_type, numeric)
        self._storage: Optional[ArrayStorage] = None
        self._offset: int = 0
        self._size: List[int] = []
        self._stride: List[int] = []
        raw_resize(self, as_shape(shape))

    @classmethod
    def _from_view(
        cls,
        storage: Optional[ArrayStorage],
        offset: int,
        size: List[int],
        stride: List[int],
        numeric: Numeric,
    ) -> "Tensor":
        """
        Build a view over existing storage from 0-based geometry.

        Bypasses `__init__` and performs no validation or allocation; callers
        (the view primitives) are responsible for keeping the geometry inside
        the storage. The size/stride lists are adopted, not copied.
        """
        obj = cls.__new__(cls)
        obj._numeric = numeric
        obj._storage = storage
        obj._offset = int(offset)
        obj._size = size
        obj._stride = stride
        return obj

    @classmethod
    def with_storage(
        cls,
        storage: Union[ArrayStorage, np.ndarray],
        storage_offset: int = 1,
        size: Optional[Sequence[int]] = None,
        stride: Optional[Sequence[int]] = None,
        *,
        numeric: Optional[Numeric] = None,
    ) -> "Tensor":
        """
        Build a view over a caller-supplied storage.

        Parameters
        ----------
        storage : ArrayStorage | np.ndarray
            Storage to alias. A 1-D float32/float64 ndarray is wrapped without
            copying, so writes through the tensor are visible in the array.
        storage_offset : int, optional
            1-based position of the first element. Defaults to 1.
        size : Optional[Sequence[int]]
            Extents. Defaults to a 1-D view over the rest of the storage.
        stride : Optional[Sequence[int]]
            Strides; missing or negative entries become canonical row-major.
        numeric : FloatNumeric | DoubleNumeric, optional
            Numeric capability. Defaults to one matching the storage type.

        Raises
        ------
        IndexOutOfRangeError
            If `storage_offset` is not inside the storage.
        InvalidSizeError
            If the geometry does not fit inside the storage. The storage is
            never reallocated here.
        DataTypeMismatchError
            If `numeric` does not match the storage element type.
        """
        if not isinstance(storage, ArrayStorage):
            storage = ArrayStorage(storage)
        numeric = _resolve_numeric(storage.data_type, numeric)
        obj = cls._from_view(None, 0, [], [], numeric)
        return bind_storage(obj, storage, int(storage_offset) - 1, size, stride)

    # ----------------------------
    # Element typing
    # ----------------------------
    @property
    def numeric(self) -> Numeric:
        return self._numeric

    @property
    def data_type(self) -> DataType:
        return self._numeric.data_type

    @property
    def dtype(self) -> np.dtype:
        """NumPy dtype of the elements (float32 or float64)."""
        return self._numeric.dtype

    # ----------------------------
    # Geometry
    # ----------------------------
    def dim(self) -> int:
        return len(self._size)

    def n_element(self) -> int:
        return n_element(self)

    def size(self, dim: Optional[int] = None) -> Union[int, tuple]:
        """
        Return every extent as a tuple, or the extent of one dimension.

        Parameters
        ----------
        dim : Optional[int]
            1-based dimension; negative values count from the last one.

        Raises
        ------
        DimensionOutOfRangeError
            If `dim` does not name a dimension.
        """
        if dim is None:
            return tuple(self._size)
        return self._size[normalize_dim(dim, len(self._size))]

    def stride(self, dim: Optional[int] = None) -> Union[int, tuple]:
        """Return every stride as a tuple, or the stride of one dimension."""
        if dim is None:
            return tuple(self._stride)
        return self._stride[normalize_dim(dim, len(self._size))]

    @property
    def shape(self) -> tuple:
        return tuple(self._size)

    def storage(self) -> Optional[ArrayStorage]:
        return self._storage

    def storage_offset(self) -> int:
        """1-based position of the first element inside the storage."""
        return self._offset + 1

    def is_contiguous(self) -> bool:
        return is_contiguous(self)

    def _new(self, shape: Union[int, Sequence[int]] = ()) -> "Tensor":
        """Fresh zero-filled tensor of the same class and numeric capability."""
        return type(self)(shape, numeric=self._numeric)

    def _item(self, indices: Sequence[int]) -> Any:
        return self._storage.array()[offset_of(self, indices)]

    # ----------------------------
    # Formatting
    # ----------------------------
    def _type_label(self) -> str:
        return f"{type(self).__name__} ({self.data_type.value})"

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(size={tuple(self._size)}, "
            f"stride={tuple(self._stride)}, storage_offset={self._offset + 1}, "
            f"data_type={self.data_type.value})"
        )

    def __str__(self) -> str:
        n_dim = len(self._size)
        label = self._type_label()
        if n_dim == 0:
            return f"[{label} with no dimension]"

        parts: List[str] = []
        if n_dim == 1:
            for i in range(self._size[0]):
                parts.append(f"{self._item((i,))}\n")
            return "".join(parts) + f"[{label} of size {self._size[0]}]"

        rows, cols = self._size[-2], self._size[-1]
        n_outer = n_dim - 2
        outer = [0] * n_outer
        while True:
            if n_outer:
                header = ",".join(str(i + 1) for i in outer)
                parts.append(f"({header},.,.) =\n")
            for i in range(rows):
                for j in range(cols):
                    parts.append(f"{self._item(outer + [i, j])}\t")
                parts.append("\n")
            if not n_outer:
                break
            parts.append("\n")

            d = n_outer - 1
            while d >= 0:
                outer[d] += 1
                if outer[d] < self._size[d]:
                    break
                outer[d] = 0
                d -= 1
            if d < 0:
                break

        size_text = "x".join(str(s) for s in self._size)
        return "".join(parts) + f"[{label} of size {size_text}]"
