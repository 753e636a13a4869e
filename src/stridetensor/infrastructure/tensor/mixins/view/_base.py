"""
View-algebra mixin for Tensor.

This module defines `TensorMixinView`, the public, 1-based face of the view
primitives in `_geometry`. Every method that returns a tensor returns a new
view sharing the same storage; only `resize`, `resize_as`, `squeeze`, `set`
and `set_storage` change the tensor they are called on.

Design notes
------------
- Indices are normalized once (`normalize_index` / `normalize_dim`), then the
  0-based primitive is applied to a copy made with `new_with_tensor`.
- Nothing is clamped: out-of-range arguments raise before any metadata is
  modified.
"""

from __future__ import annotations

from abc import ABC
from typing import Any, List, Optional, Sequence, Union

from typing_extensions import Self

from .....domain._errors import (
    DataTypeMismatchError,
    ElementCountMismatchError,
    EmptyTensorError,
    InvalidSizeError,
    NotContiguousError,
    TensorValidationError,
)
from .....domain._tensor import ITensor
from .....domain.utils._indexing import normalize_dim, normalize_index
from ..._geometry import (
    as_shape,
    bind_storage,
    expand_,
    is_contiguous,
    n_element,
    narrow_,
    new_with_tensor,
    raw_resize,
    raw_set,
    select_,
    squeeze_,
    transpose_,
    unfold_,
)


class TensorMixinView(ABC):
    """
    Mixin implementing view creation and in-place reshaping.
    """

    # ----------------------------
    # In-place geometry
    # ----------------------------
    def resize(
        self: ITensor,
        sizes: Union[int, Sequence[int]],
        strides: Optional[Sequence[int]] = None,
    ) -> Self:
        """
        Change this tensor's geometry in place.

        Storage is reallocated only if the new geometry needs more elements
        than the current storage holds; existing contents are preserved at
        their storage positions. Other views of the old storage keep pointing
        at it.

        Parameters
        ----------
        sizes : int | Sequence[int]
            New extents. An empty sequence makes the tensor empty (rank 0).
        strides : Optional[Sequence[int]]
            Explicit strides; missing or negative entries become canonical.

        Returns
        -------
        Tensor
            `self`.
        """
        raw_resize(self, as_shape(sizes), strides)
        return self

    def resize_as(self: ITensor, other: ITensor) -> Self:
        """Resize to the extents of `other` (canonical strides)."""
        raw_resize(self, list(other._size))
        return self

    def squeeze(self: ITensor, dim: Optional[int] = None) -> Self:
        """
        Remove extent-1 dimensions in place (all of them, or only `dim`).
        """
        if dim is None:
            squeeze_(self)
        else:
            squeeze_(self, normalize_dim(dim, len(self._size)))
        return self

    def set(self: ITensor, other: ITensor) -> Self:
        """Make this tensor an alias of `other` (same storage and geometry)."""
        raw_set(self, other._storage, other._offset, list(other._size), list(other._stride))
        return self

    def set_storage(
        self: ITensor,
        storage: Any,
        storage_offset: int = 1,
        sizes: Optional[Sequence[int]] = None,
        strides: Optional[Sequence[int]] = None,
    ) -> Self:
        """
        Rebind this tensor to `storage` with the given 1-based offset and
        geometry. The storage is never reallocated; a geometry that does not
        fit raises `InvalidSizeError`.

        Raises
        ------
        DataTypeMismatchError
            If the storage element type differs from this tensor's.
        """
        if storage.data_type is not self.data_type:
            raise DataTypeMismatchError(self.data_type.value, storage.data_type.value)
        bind_storage(self, storage, int(storage_offset) - 1, sizes, strides)
        return self

    # ----------------------------
    # New views
    # ----------------------------
    def narrow(self: ITensor, dim: int, index: int, size: int) -> Self:
        """
        Return the view restricted to `size` elements of dimension `dim`
        starting at 1-based `index`.

        Raises
        ------
        DimensionOutOfRangeError
        IndexOutOfRangeError
            If `index` is outside the dimension.
        InvalidSizeError
            If `size` is not positive or runs past the end.
        """
        d = normalize_dim(dim, len(self._size))
        first = normalize_index(index, self._size[d], "first index")
        result = new_with_tensor(self)
        narrow_(result, d, first, int(size))
        return result

    def select(self: ITensor, dim: int, index: int) -> Self:
        """
        Return the slice at 1-based `index` along `dim`, with `dim` removed.

        On a 1-D tensor the selected element is returned as a new 1-element
        tensor (a copy, since a view cannot lose its only dimension).
        """
        if not self._size:
            raise EmptyTensorError("select")
        d = normalize_dim(dim, len(self._size))
        z = normalize_index(index, self._size[d])
        if len(self._size) == 1:
            result = self._new(1)
            result._storage.array()[0] = self._storage.array()[self._offset + z * self._stride[0]]
            return result
        result = new_with_tensor(self)
        select_(result, d, z)
        return result

    def transpose(self: ITensor, dim1: int, dim2: int) -> Self:
        """Return the view with dimensions `dim1` and `dim2` swapped."""
        n_dim = len(self._size)
        result = new_with_tensor(self)
        transpose_(result, normalize_dim(dim1, n_dim), normalize_dim(dim2, n_dim))
        return result

    def t(self: ITensor) -> Self:
        """Transpose of a 2-D tensor."""
        if len(self._size) != 2:
            raise TensorValidationError(
                f"t() is only defined for 2D tensors, got {len(self._size)}D"
            )
        return self.transpose(1, 2)

    def unfold(self: ITensor, dim: int, size: int, step: int) -> Self:
        """
        Return the view of all windows of `size` elements along `dim`, taken
        every `step` elements. The window index replaces `dim` and a trailing
        dimension of extent `size` is appended.

        Windows overlap when `step < size`; writes through one window are
        visible in every other window covering the same element.
        """
        if not self._size:
            raise EmptyTensorError("unfold")
        result = new_with_tensor(self)
        unfold_(result, normalize_dim(dim, len(self._size)), int(size), int(step))
        return result

    def expand(self: ITensor, sizes: Union[int, Sequence[int]]) -> Self:
        """
        Return a view broadcasting extent-1 dimensions to `sizes`.

        Expanded dimensions get stride 0, so every position along them reads
        and writes the same storage element.

        Raises
        ------
        ExpansionError
            If a dimension with extent other than 1 differs from its target.
        """
        result = new_with_tensor(self)
        expand_(result, as_shape(sizes))
        return result

    def expand_as(self: ITensor, template: ITensor) -> Self:
        return self.expand(list(template._size))

    def view(self: ITensor, *sizes: Any) -> Self:
        """
        Reinterpret a contiguous tensor with new extents over the same
        storage and offset.

        Accepts either `view(2, 3)` or `view((2, 3))`.

        Raises
        ------
        NotContiguousError
            If this tensor is not contiguous.
        ElementCountMismatchError
            If the new extents hold a different number of elements.
        """
        if len(sizes) == 1 and not isinstance(sizes[0], int):
            shape = as_shape(sizes[0])
        else:
            shape = as_shape(sizes)
        if not is_contiguous(self):
            raise NotContiguousError("view")
        count = 1
        for s in shape:
            count *= s
        if count != n_element(self):
            raise ElementCountMismatchError(n_element(self), count)
        result = self._from_view(self._storage, self._offset, [], [], self._numeric)
        raw_resize(result, shape)
        return result

    def contiguous(self: ITensor) -> Self:
        """Return `self` if contiguous, otherwise a contiguous clone."""
        if is_contiguous(self):
            return self
        return self.clone()

    def is_same_size_as(self: ITensor, other: ITensor) -> bool:
        return list(self._size) == list(other._size)

    def split(self: ITensor, size: int, dim: int = 1) -> List[Self]:
        """
        Cut dimension `dim` into consecutive views of `size` elements; the
        last one holds the remainder.
        """
        if size <= 0:
            raise InvalidSizeError(f"split size must be positive, got {size}")
        extent = self.size(dim)
        parts = []
        start = 1
        while start <= extent:
            cur = min(size, extent - start + 1)
            parts.append(self.narrow(dim, start, cur))
            start += cur
        return parts

    def repeat_tensor(self: ITensor, sizes: Union[int, Sequence[int]]) -> Self:
        """
        Return a new tensor tiling this one `sizes[d]` times along each
        dimension.

        When `sizes` has more entries than this tensor has dimensions, the
        tensor is treated as having leading extent-1 dimensions.

        Raises
        ------
        InvalidSizeError
            If `sizes` has fewer entries than this tensor has dimensions.
        """
        reps = as_shape(sizes)
        if not self._size:
            raise EmptyTensorError("repeat_tensor")
        if len(reps) < len(self._size):
            raise InvalidSizeError(
                "number of repeat dimensions can not be smaller than the number "
                f"of tensor dimensions ({len(reps)} < {len(self._size)})"
            )
        source = self.clone()
        x_size = [1] * (len(reps) - len(self._size)) + list(self._size)
        dest_size = [x * r for x, r in zip(x_size, reps)]
        source.resize(x_size)

        result = self._new(dest_size)
        blocks = new_with_tensor(result)
        for d, x in enumerate(x_size):
            unfold_(blocks, d, x, x)

        source.resize([1] * (len(blocks._size) - len(x_size)) + x_size)
        blocks.copy(source.expand_as(blocks))
        return result
