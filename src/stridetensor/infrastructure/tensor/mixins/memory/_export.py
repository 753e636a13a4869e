"""
Export record for moving a tensor across an external boundary.

A `TensorExport` carries exactly what is needed to rebuild a view:
`(data type tag, size, stride, storage, storage offset)`. The storage is the
whole flat buffer, not just the elements the view reaches, so the geometry
(including zero strides and overlapping windows) survives unchanged.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple, Union

import numpy as np

from .....domain._errors import DataTypeMismatchError
from .....domain.types._data_type import DataType
from ....storage._array_storage import data_type_of


@dataclass(frozen=True)
class TensorExport:
    """
    Plain-data snapshot of a tensor view.

    Attributes
    ----------
    data_type : DataType
        Element type tag.
    size : tuple[int, ...]
        Extents.
    stride : tuple[int, ...]
        Element strides.
    storage : np.ndarray
        1-D backing buffer (float32 for FLOAT, float64 for DOUBLE).
    storage_offset : int
        1-based position of the first element in `storage`.
    """

    data_type: Union[DataType, str]
    size: Tuple[int, ...]
    stride: Tuple[int, ...]
    storage: np.ndarray
    storage_offset: int = 1

    def __post_init__(self) -> None:
        dt = DataType.parse(self.data_type)
        object.__setattr__(self, "data_type", dt)
        object.__setattr__(self, "size", tuple(int(s) for s in self.size))
        object.__setattr__(self, "stride", tuple(int(s) for s in self.stride))
        if len(self.size) != len(self.stride):
            raise ValueError(
                f"size and stride must have the same length, got {len(self.size)} "
                f"and {len(self.stride)}"
            )
        arr = np.asarray(self.storage)
        if arr.ndim != 1:
            raise ValueError(f"storage must be 1-D, got {arr.ndim}D")
        got = data_type_of(arr.dtype)
        if got is not dt:
            raise DataTypeMismatchError(dt.value, got.value)
        object.__setattr__(self, "storage", arr)
