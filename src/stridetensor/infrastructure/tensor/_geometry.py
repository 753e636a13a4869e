"""
In-place view-algebra primitives on tensor metadata.

Every function here works on the 0-based internal fields of a concrete
tensor (`_storage`, `_offset`, `_size`, `_stride`) and mutates the tensor it
is given. Public methods build a fresh view with `new_with_tensor` and then
apply one of these primitives to it, so the source view is never modified.

Only `raw_resize` may allocate storage; every other primitive keeps the
storage reference untouched.

Invariant maintained by all primitives: for a tensor of rank > 0,
`offset + sum((size[d] - 1) * stride[d]) < len(storage)`.
"""

from __future__ import annotations

import logging
from typing import Any, List, Optional, Sequence

from ...domain._errors import (
    DimensionOutOfRangeError,
    EmptyTensorError,
    ExpansionError,
    IndexOutOfRangeError,
    InvalidSizeError,
    TensorValidationError,
)
from ..storage._array_storage import ArrayStorage

logger = logging.getLogger(__name__)


def size_to_stride(sizes: Sequence[int]) -> List[int]:
    """
    Return canonical row-major strides for `sizes`.

    The last dimension has stride 1 and every other dimension steps over the
    product of all later extents.
    """
    strides = [0] * len(sizes)
    jump = 1
    for d in range(len(sizes) - 1, -1, -1):
        strides[d] = jump
        jump *= int(sizes[d])
    return strides


def n_element(t: Any) -> int:
    """Number of logical elements (0 for rank 0)."""
    if not t._size:
        return 0
    n = 1
    for s in t._size:
        n *= s
    return n


def required_extent(sizes: Sequence[int], strides: Sequence[int]) -> int:
    """Number of storage slots spanned from the first element, inclusive."""
    total = 1
    for s, st in zip(sizes, strides):
        total += (s - 1) * st
    return total


def is_contiguous(t: Any) -> bool:
    """
    Return True when the strides are canonical row-major for the sizes.

    Dimensions of extent 1 are ignored, so e.g. a `1 x n` row narrowed out of
    a matrix is still contiguous.
    """
    s = 1
    for d in range(len(t._size) - 1, -1, -1):
        if t._size[d] != 1:
            if t._stride[d] != s:
                return False
            s *= t._size[d]
    return True


def check_dim(t: Any, dim: int) -> None:
    """Validate a 0-based dimension index."""
    n_dim = len(t._size)
    if dim < 0 or dim >= n_dim:
        raise DimensionOutOfRangeError(dim + 1, n_dim)


def as_shape(shape: Any) -> List[int]:
    """
    Accept an int, a sequence of ints or another tensor's size tuple and
    return a list of extents.

    Raises
    ------
    TypeError
        If `shape` is neither an int nor an iterable of ints.
    """
    if isinstance(shape, bool):
        raise TypeError("bool is not a valid shape")
    if isinstance(shape, int) or hasattr(shape, "__index__"):
        return [int(shape)]
    try:
        return [int(s) for s in shape]
    except TypeError:
        raise TypeError(f"Unsupported shape type: {type(shape)!r}") from None


def fill_strides(sizes: Sequence[int], strides: Optional[Sequence[int]]) -> List[int]:
    """
    Complete a stride list: missing or negative entries get the canonical
    row-major value, computed from the last dimension backward.
    """
    out = [0] * len(sizes)
    for d in range(len(sizes) - 1, -1, -1):
        if strides is not None and int(strides[d]) >= 0:
            out[d] = int(strides[d])
        elif d == len(sizes) - 1:
            out[d] = 1
        else:
            out[d] = sizes[d + 1] * out[d + 1]
    return out


def _validate_sizes(sizes: Sequence[int]) -> List[int]:
    out = []
    for s in sizes:
        v = int(s)
        if v <= 0:
            raise InvalidSizeError(
                f"invalid size {tuple(int(x) for x in sizes)}: every extent must be "
                "positive"
            )
        out.append(v)
    return out


def raw_resize(t: Any, sizes: Sequence[int], strides: Optional[Sequence[int]] = None) -> Any:
    """
    Reshape `t` to `sizes`, allocating a larger storage only when needed.

    Parameters
    ----------
    t : Tensor
        Tensor to mutate.
    sizes : Sequence[int]
        New extents (0-based order). An empty sequence makes `t` rank 0.
    strides : Optional[Sequence[int]]
        Explicit strides. Entries that are negative (or a missing sequence)
        are replaced by canonical row-major strides computed from `sizes`.

    Returns
    -------
    Tensor
        `t` itself.

    Notes
    -----
    - A call whose rank, sizes and explicit strides already match is a no-op.
    - Storage is never shrunk. When the new geometry needs more slots than the
      current storage holds, a new storage of exactly `offset + extent`
      elements is allocated, the old contents are copied to the same absolute
      offsets, and `t` is rebound. Other views of the old storage are not
      updated.
    """
    new_sizes = _validate_sizes(sizes)
    if strides is not None and len(strides) != len(new_sizes):
        raise InvalidSizeError(
            f"stride arity {len(strides)} does not match size arity {len(new_sizes)}"
        )

    if len(new_sizes) == len(t._size):
        same = all(new_sizes[d] == t._size[d] for d in range(len(new_sizes)))
        if same and strides is not None:
            same = all(
                strides[d] < 0 or int(strides[d]) == t._stride[d]
                for d in range(len(new_sizes))
            )
        if same:
            return t

    if not new_sizes:
        t._size = []
        t._stride = []
        return t

    new_strides = fill_strides(new_sizes, strides)

    t._size = new_sizes
    t._stride = new_strides

    needed = t._offset + required_extent(new_sizes, new_strides)
    old = t._storage
    if old is None or needed > len(old):
        storage = ArrayStorage(needed, t._numeric.data_type)
        if old is not None and len(old) > 0:
            storage.copy_from(old, 0, 0, len(old))
        logger.debug(
            "resize to %s: storage grown from %s to %d elements",
            tuple(new_sizes),
            None if old is None else len(old),
            needed,
        )
        t._storage = storage
    return t


def raw_set(
    t: Any,
    storage: Optional[ArrayStorage],
    offset: int,
    sizes: Sequence[int],
    strides: Optional[Sequence[int]],
) -> Any:
    """
    Rebind `t` to `storage` at `offset` with the given geometry.

    The previous geometry is discarded first so that `raw_resize` never
    treats the rebinding as a no-op.
    """
    if offset < 0:
        raise InvalidSizeError(f"invalid storage offset {offset}")
    t._storage = storage
    t._offset = int(offset)
    t._size = []
    t._stride = []
    return raw_resize(t, sizes, strides)


def bind_storage(
    t: Any,
    storage: ArrayStorage,
    offset: int,
    sizes: Optional[Sequence[int]],
    strides: Optional[Sequence[int]],
) -> Any:
    """
    Point `t` at a caller-supplied storage without ever reallocating it.

    When `sizes` is None the view covers the rest of the storage as a 1-D
    tensor. The geometry is validated first; on failure `t` is untouched.

    Raises
    ------
    IndexOutOfRangeError
        If `offset` is not a position inside `storage`.
    InvalidSizeError
        If the geometry reaches past the end of `storage`.
    """
    length = len(storage)
    if offset < 0 or offset >= length:
        raise IndexOutOfRangeError(offset + 1, length, "storage offset")
    if sizes is None:
        new_sizes = [length - offset]
    else:
        new_sizes = _validate_sizes(sizes)
    if strides is not None and len(strides) != len(new_sizes):
        raise InvalidSizeError(
            f"stride arity {len(strides)} does not match size arity {len(new_sizes)}"
        )
    new_strides = fill_strides(new_sizes, strides)
    if new_sizes and offset + required_extent(new_sizes, new_strides) > length:
        raise InvalidSizeError(
            f"view of size {tuple(new_sizes)} with stride {tuple(new_strides)} at "
            f"offset {offset + 1} exceeds storage of length {length}"
        )
    t._storage = storage
    t._offset = int(offset)
    t._size = new_sizes
    t._stride = new_strides
    return t


def narrow_(t: Any, dim: int, first: int, length: int) -> None:
    """
    Restrict dimension `dim` to `length` elements starting at `first`.

    Raises
    ------
    DimensionOutOfRangeError
        If `dim` is not a dimension of `t`.
    IndexOutOfRangeError
        If `first` is outside `[0, size[dim])`.
    InvalidSizeError
        If `length` is not in `(0, size[dim] - first]`.
    """
    check_dim(t, dim)
    extent = t._size[dim]
    if first < 0 or first >= extent:
        raise IndexOutOfRangeError(first + 1, extent, "first index")
    if length <= 0 or first + length > extent:
        raise InvalidSizeError(
            f"narrow size {length} out of range: dimension {dim + 1} has "
            f"{extent - first} elements from index {first + 1}"
        )
    if first > 0:
        t._offset += first * t._stride[dim]
    t._size[dim] = length


def select_(t: Any, dim: int, index: int) -> None:
    """
    Fix dimension `dim` at `index` and remove it.

    Raises
    ------
    TensorValidationError
        If `t` has rank <= 1 (a vector cannot be reduced to a view; callers
        resolve to a scalar address instead).
    """
    if len(t._size) <= 1:
        raise TensorValidationError("cannot select on a vector")
    check_dim(t, dim)
    if index < 0 or index >= t._size[dim]:
        raise IndexOutOfRangeError(index + 1, t._size[dim])
    narrow_(t, dim, index, 1)
    del t._size[dim]
    del t._stride[dim]


def transpose_(t: Any, dim1: int, dim2: int) -> None:
    """Swap the size and stride entries of two dimensions."""
    check_dim(t, dim1)
    check_dim(t, dim2)
    if dim1 == dim2:
        return
    t._size[dim1], t._size[dim2] = t._size[dim2], t._size[dim1]
    t._stride[dim1], t._stride[dim2] = t._stride[dim2], t._stride[dim1]


def unfold_(t: Any, dim: int, window: int, step: int) -> None:
    """
    Replace dimension `dim` by sliding windows and append a window dimension.

    The windows overlap whenever `step < window`, so one storage slot may be
    reachable from several logical positions afterwards.
    """
    if not t._size:
        raise EmptyTensorError("unfold")
    check_dim(t, dim)
    if window <= 0 or window > t._size[dim]:
        raise InvalidSizeError(
            f"unfold size {window} out of range for dimension {dim + 1} of "
            f"extent {t._size[dim]}"
        )
    if step <= 0:
        raise InvalidSizeError(f"invalid unfold step {step}")

    inner_stride = t._stride[dim]
    t._size[dim] = (t._size[dim] - window) // step + 1
    t._stride[dim] = step * inner_stride
    t._size.append(window)
    t._stride.append(inner_stride)


def expand_(t: Any, sizes: Sequence[int]) -> None:
    """
    Broadcast singleton dimensions of `t` to `sizes` with zero strides.

    Validation happens before any field is written, so a failing call leaves
    `t` untouched.
    """
    if len(sizes) != len(t._size):
        raise InvalidSizeError(
            f"the number of sizes provided ({len(sizes)}) must equal the number "
            f"of dimensions ({len(t._size)})"
        )
    new_size = list(t._size)
    new_stride = list(t._stride)
    for d, target in enumerate(sizes):
        target = int(target)
        if target <= 0:
            raise InvalidSizeError(f"invalid expanded size {target} at dimension {d + 1}")
        if new_size[d] == 1:
            if target != 1:
                new_size[d] = target
                new_stride[d] = 0
        elif new_size[d] != target:
            raise ExpansionError(t._size, sizes)
    t._size = new_size
    t._stride = new_stride


def squeeze_(t: Any, dim: Optional[int] = None) -> None:
    """
    Remove extent-1 dimensions (all of them, or only `dim`).

    Squeezing every dimension of a tensor whose extents are all 1 leaves a
    single dimension of extent 1 so the element stays addressable.
    """
    if dim is not None:
        check_dim(t, dim)
        if t._size[dim] == 1 and len(t._size) > 1:
            del t._size[dim]
            del t._stride[dim]
        return

    if not t._size:
        return
    keep = [d for d in range(len(t._size)) if t._size[d] != 1]
    if not keep:
        t._size = [1]
        t._stride = [1]
        return
    t._size = [t._size[d] for d in keep]
    t._stride = [t._stride[d] for d in keep]


def offset_of(t: Any, indices: Sequence[int]) -> int:
    """Absolute storage offset of a fully specified 0-based position."""
    offset = t._offset
    for d, z in enumerate(indices):
        offset += z * t._stride[d]
    return offset


def new_with_tensor(t: Any) -> Any:
    """
    Return a new view with the same storage and geometry as `t`.

    The metadata lists are copied so primitives applied to the new view do
    not leak back into `t`.
    """
    return t.__class__._from_view(
        t._storage, t._offset, list(t._size), list(t._stride), t._numeric
    )
