"""
Reduction mixin for Tensor.

Without a dimension, `sum`, `mean` and `max` fold every element into one
scalar of the element type. With a (1-based, negative-aware) dimension they
return a new tensor of the same rank whose extent along that dimension is 1;
`max` additionally returns the 1-based position of each maximum.

Dimension reductions run on the dimension-apply engine: one kernel call per
outer coordinate, each receiving the strided slice of the source and the
matching slices of the outputs.
"""

from __future__ import annotations

from abc import ABC
from typing import Any, Optional, Tuple, Union

from .....domain._errors import EmptyTensorError, InvalidSizeError
from .....domain._tensor import ITensor
from .....domain.utils._indexing import normalize_dim
from ..._apply import apply1
from ..._dim_apply import StridedSlice, dim_apply
from ..._geometry import n_element
from ._topk import make_topk_kernel


class TensorMixinReduction(ABC):
    """
    Mixin implementing `sum`, `mean`, `max` and `topk`.
    """

    def _reduced_like(self: ITensor, d: int, extent: int = 1) -> ITensor:
        shape = list(self._size)
        shape[d] = extent
        return self._new(shape)

    def _require_elements(self: ITensor, op: str) -> None:
        if not self._size:
            raise EmptyTensorError(op)

    def sum(self: ITensor, dim: Optional[int] = None) -> Any:
        """
        Sum of all elements (scalar), or along `dim` (tensor).

        The sum of an empty tensor is zero.
        """
        ev = self._numeric
        if dim is None:
            acc = [ev.zero]

            def _sum_all(data, i: int) -> None:
                acc[0] = ev.plus(acc[0], data[i])

            apply1(self, _sum_all)
            return acc[0]

        self._require_elements("sum")
        d = normalize_dim(dim, len(self._size))
        result = self._reduced_like(d)

        def _sum(src: StridedSlice, out: StridedSlice) -> None:
            total = ev.zero
            for i in range(src.size):
                total = ev.plus(total, src.get(i))
            out.set(0, total)

        dim_apply([self, result], d, _sum)
        return result

    def mean(self: ITensor, dim: Optional[int] = None) -> Any:
        """
        Arithmetic mean of all elements (scalar), or along `dim` (tensor).

        Raises
        ------
        EmptyTensorError
            If the tensor has no elements.
        """
        self._require_elements("mean")
        ev = self._numeric
        if dim is None:
            return ev.divide(self.sum(), ev.from_int(n_element(self)))

        d = normalize_dim(dim, len(self._size))
        result = self.sum(dim)
        return result.div(self._size[d])

    def max(self: ITensor, dim: Optional[int] = None) -> Union[Any, Tuple[ITensor, ITensor]]:
        """
        Maximum of all elements, or `(values, indices)` along `dim`.

        Along a dimension the running maximum only moves on a strict
        improvement, so ties report the first position. Indices are 1-based
        and stored in a tensor of the same element type.

        Raises
        ------
        EmptyTensorError
            If the tensor has no elements.
        """
        self._require_elements("max")
        ev = self._numeric
        if dim is None:
            best = [None]

            def _max_all(data, i: int) -> None:
                if best[0] is None or ev.is_greater(data[i], best[0]):
                    best[0] = data[i]

            apply1(self, _max_all)
            return best[0]

        d = normalize_dim(dim, len(self._size))
        values = self._reduced_like(d)
        indices = self._reduced_like(d)

        def _max(src: StridedSlice, v: StridedSlice, idx: StridedSlice) -> None:
            best_value = src.get(0)
            best_index = 1
            for i in range(1, src.size):
                x = src.get(i)
                if ev.is_greater(x, best_value):
                    best_value = x
                    best_index = i + 1
            v.set(0, best_value)
            idx.set(0, ev.from_int(best_index))

        dim_apply([self, values, indices], d, _max)
        return values, indices

    def topk(
        self: ITensor,
        k: int,
        dim: int = -1,
        increasing: bool = True,
        result: Optional[ITensor] = None,
        indices: Optional[ITensor] = None,
    ) -> Tuple[ITensor, ITensor]:
        """
        Select the `k` smallest (or largest) values along `dim`.

        Parameters
        ----------
        k : int
            Number of values per slice, `0 < k <= size(dim)`.
        dim : int, optional
            1-based dimension; defaults to the last one.
        increasing : bool, optional
            True (default) returns the smallest values in ascending order,
            False the largest in descending order.
        result, indices : Optional[Tensor]
            Output tensors to reuse; they are resized to the output shape.

        Returns
        -------
        tuple[Tensor, Tensor]
            Values and their 1-based positions along `dim`. Positions within
            one slice are unique; equal values keep their original order.

        Raises
        ------
        InvalidSizeError
            If `k` is outside `(0, size(dim)]`.
        """
        self._require_elements("topk")
        d = normalize_dim(dim, len(self._size))
        extent = self._size[d]
        if not 0 < k <= extent:
            raise InvalidSizeError(
                f"topk k={k} out of range for dimension {d + 1} of extent {extent}"
            )
        shape = list(self._size)
        shape[d] = k
        if result is None:
            result = self._new(shape)
        else:
            result.resize(shape)
        if indices is None:
            indices = self._new(shape)
        else:
            indices.resize(shape)

        kernel = make_topk_kernel(k, increasing, self._numeric.is_greater)
        dim_apply([self, result, indices], d, kernel)
        return result, indices
