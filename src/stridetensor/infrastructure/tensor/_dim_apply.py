"""
Dimension-apply engine.

`dim_apply` walks every combination of indices over all dimensions except a
selected one and, for each combination, hands a kernel one `StridedSlice`
per tensor: the 1-D run along the selected dimension that shares the current
outer coordinate. Reductions (sum/mean/max) and top-k are kernels over these
slices.

All tensors must have the same rank and agree on every extent except along
the selected dimension (outputs typically have extent 1 or `k` there).
"""

from __future__ import annotations

from typing import Any, Callable, NamedTuple, Sequence

from ...domain._errors import EmptyTensorError, TensorValidationError
from ._geometry import check_dim


class StridedSlice(NamedTuple):
    """
    Descriptor of a 1-D strided run inside a flat buffer.

    Attributes
    ----------
    data : np.ndarray
        Backing storage array.
    offset : int
        Absolute offset of element 0.
    stride : int
        Step between consecutive elements.
    size : int
        Number of elements.
    """

    data: Any
    offset: int
    stride: int
    size: int

    def get(self, i: int) -> Any:
        return self.data[self.offset + i * self.stride]

    def set(self, i: int, value: Any) -> None:
        self.data[self.offset + i * self.stride] = value


def dim_apply(
    tensors: Sequence[Any],
    dim: int,
    kernel: Callable[..., None],
) -> None:
    """
    Invoke `kernel(*slices)` for every outer coordinate off dimension `dim`.

    Parameters
    ----------
    tensors : Sequence[Tensor]
        Source first, then outputs. All share the rank of the source.
    dim : int
        0-based dimension the slices run along.
    kernel : Callable[..., None]
        Receives one `StridedSlice` per tensor, in the same order.

    Raises
    ------
    EmptyTensorError
        If the source has rank 0.
    DimensionOutOfRangeError
        If `dim` is not a dimension of the source.
    TensorValidationError
        If ranks differ or any extent other than `dim` differs.
    """
    src = tensors[0]
    if not src._size:
        raise EmptyTensorError("dim_apply")
    check_dim(src, dim)
    n_dim = len(src._size)
    for t in tensors[1:]:
        if len(t._size) != n_dim:
            raise TensorValidationError(
                f"inconsistent tensor rank: {n_dim} vs {len(t._size)}"
            )
        for d in range(n_dim):
            if d != dim and t._size[d] != src._size[d]:
                raise TensorValidationError(
                    f"inconsistent tensor size at dimension {d + 1}: "
                    f"{src._size[d]} vs {t._size[d]}"
                )

    datas = [t._storage.array() for t in tensors]
    offsets = [t._offset for t in tensors]
    counter = [0] * n_dim
    size = src._size

    while True:
        kernel(
            *(
                StridedSlice(datas[k], offsets[k], t._stride[dim], t._size[dim])
                for k, t in enumerate(tensors)
            )
        )

        d = n_dim - 1
        done = True
        while d >= 0:
            if d == dim:
                d -= 1
                continue
            counter[d] += 1
            for k, t in enumerate(tensors):
                offsets[k] += t._stride[d]
            if counter[d] < size[d]:
                done = False
                break
            for k, t in enumerate(tensors):
                offsets[k] -= counter[d] * t._stride[d]
            counter[d] = 0
            d -= 1
        if done:
            return
