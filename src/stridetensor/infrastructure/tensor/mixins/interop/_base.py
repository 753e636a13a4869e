"""
Dense matrix / vector interop with NumPy.

`to_matrix` and `to_vector` expose the tensor's elements as NumPy arrays that
alias the storage, for handing to dense linear-algebra code. Only layouts a
dense library can describe with a single leading dimension are accepted:

- matrix: 2D, row-major (`stride == (cols, 1)`) or column-major
  (`stride == (1, rows)`);
- vector: 1D with stride 1.

Anything else raises `NotContiguousError`; call `contiguous()` first.
"""

from __future__ import annotations

from abc import ABC

import numpy as np
from numpy.lib.stride_tricks import as_strided

from .....domain._errors import NotContiguousError, TensorValidationError
from .....domain._tensor import ITensor


def _alias(t: ITensor) -> np.ndarray:
    data = t._storage.array()
    itemsize = data.dtype.itemsize
    return as_strided(
        data[t._offset :],
        shape=tuple(t._size),
        strides=tuple(st * itemsize for st in t._stride),
    )


class TensorMixinInterop(ABC):
    """
    Mixin exposing aliasing NumPy views for dense interop.
    """

    def is_row_major(self: ITensor) -> bool:
        if len(self._size) != 2:
            return False
        rows, cols = self._size
        return (cols == 1 or self._stride[1] == 1) and (rows == 1 or self._stride[0] == cols)

    def is_column_major(self: ITensor) -> bool:
        if len(self._size) != 2:
            return False
        rows, cols = self._size
        return (rows == 1 or self._stride[0] == 1) and (cols == 1 or self._stride[1] == rows)

    def to_matrix(self: ITensor) -> np.ndarray:
        """
        Return a 2D NumPy view sharing this tensor's storage.

        Raises
        ------
        TensorValidationError
            If the tensor is not 2D.
        NotContiguousError
            If the layout is neither row-major nor column-major.
        """
        if len(self._size) != 2:
            raise TensorValidationError(
                f"to_matrix expects a 2D tensor, got {len(self._size)}D"
            )
        if not (self.is_row_major() or self.is_column_major()):
            raise NotContiguousError("to_matrix")
        return _alias(self)

    def to_vector(self: ITensor) -> np.ndarray:
        """
        Return a 1D NumPy view sharing this tensor's storage.

        Raises
        ------
        TensorValidationError
            If the tensor is not 1D.
        NotContiguousError
            If the stride is not 1.
        """
        if len(self._size) != 1:
            raise TensorValidationError(
                f"to_vector expects a 1D tensor, got {len(self._size)}D"
            )
        if self._size[0] != 1 and self._stride[0] != 1:
            raise NotContiguousError("to_vector")
        return _alias(self)
