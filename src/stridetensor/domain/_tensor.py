"""
Tensor interface definitions.

This module defines the domain-level interface for strided tensor views using
structural typing. The interface captures the metadata every view exposes
(rank, sizes, strides, storage offset, storage, numeric capability) so that
mixins and engines can be written against the protocol rather than the
concrete NumPy-backed class.

Notes
-----
All dimension and element indices on this surface are 1-based, matching the
public API of the concrete tensor. Internal engines work on the 0-based
fields (`_size`, `_stride`, `_offset`, `_storage`) of the concrete class.
"""

from __future__ import annotations

from typing import Optional, Protocol, Union, runtime_checkable

from ._numeric import TensorNumeric
from ._storage import IStorage
from .types._data_type import DataType

Number = Union[int, float]


@runtime_checkable
class ITensor(Protocol):
    """
    Strided tensor view interface.

    An `ITensor` is a logical N-dimensional shape laid over a flat storage by
    `(offset, size[], stride[])`. Many views may alias the same storage.
    """

    # ---------------------------------------------------------------------
    # Geometry
    # ---------------------------------------------------------------------
    def dim(self) -> int:
        """
        Return the number of active dimensions (0 for an empty tensor).
        """
        ...

    def n_element(self) -> int:
        """
        Return the number of logical elements (0 for an empty tensor).
        """
        ...

    def size(self, dim: Optional[int] = None) -> Union[int, tuple[int, ...]]:
        """
        Return all extents as a tuple, or the extent of one 1-based dimension.
        """
        ...

    def stride(self, dim: Optional[int] = None) -> Union[int, tuple[int, ...]]:
        """
        Return all strides as a tuple, or the stride of one 1-based dimension.
        """
        ...

    def storage_offset(self) -> int:
        """
        Return the 1-based position of the first element inside the storage.
        """
        ...

    def storage(self) -> Optional[IStorage]:
        """
        Return the aliased storage (None for a tensor never allocated).
        """
        ...

    def is_contiguous(self) -> bool:
        """
        Return True when the strides are the canonical row-major strides for
        the current sizes (extent-1 dimensions ignored).
        """
        ...

    # ---------------------------------------------------------------------
    # Element typing
    # ---------------------------------------------------------------------
    @property
    def numeric(self) -> TensorNumeric:
        """
        Return the numeric capability bound to this tensor.
        """
        ...

    @property
    def data_type(self) -> DataType:
        """
        Return the element type tag.
        """
        ...
