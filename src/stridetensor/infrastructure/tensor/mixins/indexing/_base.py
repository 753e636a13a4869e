"""
Element access and slicing mixin.

Indexing is 1-based and negative-aware throughout:

- `t[i]` on a 1-D tensor returns a new 1-element tensor holding element i;
  on a higher-rank tensor it returns the view with the first dimension
  fixed at i.
- `t[sel1, sel2, ...]` (or `t[[sel1, ...]]`) runs the slice resolver: each
  selector is an int index or a range (`Range(start, end)`, `()`, `(i,)`,
  `(i, j)`), consumed left to right.
- Assignment stores a scalar, fills a sub-view or copies a tensor into it.
"""

from __future__ import annotations

from abc import ABC
from typing import Any, Callable, Iterator, Sequence, Union

import numpy as np
from typing_extensions import Self

from .....domain._errors import (
    ElementCountMismatchError,
    EmptyTensorError,
    TensorValidationError,
)
from .....domain._tensor import ITensor
from .....domain.utils._indexing import normalize_index
from ..._apply import apply1
from ..._geometry import narrow_, new_with_tensor, offset_of, select_
from ..._slice import Range, resolve

Number = Union[int, float]


def _is_index(key: Any) -> bool:
    return not isinstance(key, bool) and isinstance(key, (int, np.integer))


def _selectors(key: Any) -> Sequence[Any]:
    if isinstance(key, Range):
        return [key]
    if isinstance(key, (tuple, list)):
        return list(key)
    raise TypeError(f"Unsupported index type: {type(key)!r}")


class TensorMixinIndexing(ABC):
    """
    Mixin implementing `__getitem__`, `__setitem__` and point access.
    """

    def _first_dim_index(self: ITensor, index: int) -> int:
        if not self._size:
            raise EmptyTensorError("indexing")
        return normalize_index(index, self._size[0])

    def _scalar_tensor(self: ITensor, value: Any) -> ITensor:
        result = self._new(1)
        result._storage.array()[0] = value
        return result

    def __getitem__(self: ITensor, key: Any) -> ITensor:
        if _is_index(key):
            z = self._first_dim_index(int(key))
            if len(self._size) == 1:
                return self._scalar_tensor(
                    self._storage.array()[self._offset + z * self._stride[0]]
                )
            result = new_with_tensor(self)
            select_(result, 0, z)
            return result

        view, offset = resolve(self, _selectors(key))
        if offset is not None:
            return self._scalar_tensor(view._storage.array()[offset])
        return view

    def __iter__(self: ITensor) -> Iterator[ITensor]:
        """Iterate over `t[1], t[2], ...` along the first dimension."""
        if not self._size:
            return
        for i in range(1, self._size[0] + 1):
            yield self[i]

    def __setitem__(self: ITensor, key: Any, value: Union[ITensor, Number]) -> None:
        is_tensor = isinstance(value, ITensor)

        if _is_index(key):
            z = self._first_dim_index(int(key))
            if len(self._size) == 1 and not is_tensor:
                self._storage.array()[self._offset + z * self._stride[0]] = (
                    self._numeric.from_float(value)
                )
                return
            target = new_with_tensor(self)
            narrow_(target, 0, z, 1)
            if is_tensor:
                target.copy(value)
            else:
                target.fill(value)
            return

        view, offset = resolve(self, _selectors(key))
        if offset is not None:
            if is_tensor:
                if value.n_element() != 1:
                    raise ElementCountMismatchError(1, value.n_element())
                scalar = value.to_numpy().reshape(-1)[0]
            else:
                scalar = value
            view._storage.array()[offset] = self._numeric.from_float(scalar)
        elif is_tensor:
            view.copy(value)
        else:
            view.fill(value)

    def _point_offset(self: ITensor, indices: Sequence[int]) -> int:
        if not self._size:
            raise EmptyTensorError("element access")
        if len(indices) != len(self._size):
            raise TensorValidationError(
                f"expected {len(self._size)} indices for a {len(self._size)}D tensor, "
                f"got {len(indices)}"
            )
        zs = [normalize_index(i, self._size[d]) for d, i in enumerate(indices)]
        return offset_of(self, zs)

    def value_at(self: ITensor, *indices: int) -> Any:
        """
        Return the scalar at a fully specified 1-based position.

        Raises
        ------
        TensorValidationError
            If the number of indices differs from the rank.
        IndexOutOfRangeError
            If an index is outside its dimension.
        """
        return self._storage.array()[self._point_offset(indices)]

    def set_value(self: ITensor, *args: Any) -> Self:
        """
        Store a scalar at a fully specified position: `set_value(i, j, v)`.
        """
        if not args:
            raise TypeError("set_value requires the indices followed by a value")
        *indices, value = args
        self._storage.array()[self._point_offset(indices)] = self._numeric.from_float(value)
        return self

    def update_where(
        self: ITensor, predicate: Callable[[Any], bool], value: Number
    ) -> Self:
        """Replace every element for which `predicate(element)` holds."""
        v = self._numeric.from_float(value)

        def _update(data: np.ndarray, i: int) -> None:
            if predicate(data[i]):
                data[i] = v

        apply1(self, _update)
        return self
