"""
Strided operand descriptors for external CPU kernels.

Kernels never see tensors. They receive `StridedOperand`s, i.e. the
`(storage array, offset, sizes, strides)` geometry of a view, and build NumPy
views over the flat buffer with `numpy.lib.stride_tricks.as_strided`. The
engine guarantees the geometry is in bounds; the kernels only compute.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Tuple

import numpy as np
from numpy.lib.stride_tricks import as_strided


@dataclass(frozen=True)
class StridedOperand:
    """
    Geometry of a strided view over a flat buffer.

    Attributes
    ----------
    data : np.ndarray
        1-D backing array.
    offset : int
        Absolute 0-based offset of the first element.
    sizes : tuple[int, ...]
        Extent per dimension.
    strides : tuple[int, ...]
        Step per dimension, in elements (may be 0).
    """

    data: np.ndarray
    offset: int
    sizes: Tuple[int, ...]
    strides: Tuple[int, ...]

    @classmethod
    def of(cls, t: Any) -> "StridedOperand":
        """Describe a tensor view (reads its internal 0-based fields)."""
        return cls(
            data=t._storage.array(),
            offset=int(t._offset),
            sizes=tuple(t._size),
            strides=tuple(t._stride),
        )

    @property
    def ndim(self) -> int:
        return len(self.sizes)

    def overlaps_itself(self) -> bool:
        """True when two logical positions share one storage slot."""
        return any(st == 0 and s > 1 for s, st in zip(self.sizes, self.strides))

    def view(self) -> np.ndarray:
        """
        Return a NumPy view aliasing the operand's elements.

        Writes through the view land in the shared storage.
        """
        itemsize = self.data.dtype.itemsize
        return as_strided(
            self.data[self.offset :],
            shape=self.sizes,
            strides=tuple(st * itemsize for st in self.strides),
        )
