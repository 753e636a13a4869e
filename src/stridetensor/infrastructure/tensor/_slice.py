"""
Slice resolver.

A slice spec is an ordered list of per-dimension selectors, each either

- an ``int``: a single 1-based (possibly negative) index, or
- a range: `Range(start, end)` with 1-based inclusive, possibly negative
  bounds where either side may be omitted, or the tuple shorthands
  ``()`` (whole dimension), ``(i,)`` (just element i, kept as a dimension)
  and ``(i, j)``.

Selectors are consumed left to right against the current leading dimension.
An index collapses that dimension with `select` while more than one
dimension remains; when the view is down to one dimension the index resolves
to a scalar storage address instead. A range narrows the dimension and moves
on to the next one.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional, Sequence, Tuple, Union

from ...domain._errors import InvalidSizeError, TensorValidationError
from ...domain.utils._indexing import normalize_index
from ._geometry import narrow_, new_with_tensor, select_


@dataclass(frozen=True)
class Range:
    """
    Inclusive, 1-based range selector.

    Attributes
    ----------
    start : Optional[int]
        First element (defaults to the first element of the dimension).
    end : Optional[int]
        Last element (defaults to the last element of the dimension).
    """

    start: Optional[int] = None
    end: Optional[int] = None


Selector = Union[int, Range, Tuple[int, ...]]


def as_selector(obj: Any) -> Union[int, Range]:
    """
    Normalize a user-supplied selector into an ``int`` or a `Range`.

    Raises
    ------
    TypeError
        If `obj` is not an int, a `Range`, or a tuple/list of at most two ints.
    """
    if isinstance(obj, Range):
        return obj
    if isinstance(obj, bool):
        raise TypeError("bool is not a valid slice selector")
    if isinstance(obj, int):
        return obj
    if isinstance(obj, (tuple, list)):
        if len(obj) == 0:
            return Range()
        if len(obj) == 1:
            return Range(int(obj[0]), int(obj[0]))
        if len(obj) == 2:
            return Range(int(obj[0]), int(obj[1]))
        raise TypeError(f"range selector takes at most two bounds, got {len(obj)}")
    if hasattr(obj, "__index__"):
        return int(obj)
    raise TypeError(f"Unsupported slice selector type: {type(obj)!r}")


def resolve(t: Any, selectors: Sequence[Any]) -> Tuple[Any, Optional[int]]:
    """
    Resolve a slice spec against `t`.

    Parameters
    ----------
    t : Tensor
        Source view (not modified).
    selectors : Sequence
        Slice spec, see module docstring.

    Returns
    -------
    tuple[Tensor, Optional[int]]
        `(view, offset)` where `offset` is the absolute storage offset when
        the selectors pin a single element, or `(view, None)` for a sub-view.

    Raises
    ------
    TensorValidationError
        If more selectors than dimensions are given.
    IndexOutOfRangeError
        If an index or range bound falls outside its dimension.
    InvalidSizeError
        If a range ends before it starts.
    """
    if len(selectors) > len(t._size):
        raise TensorValidationError(
            f"too many indices provided: {len(selectors)} for {len(t._size)}D tensor"
        )
    view = new_with_tensor(t)
    cdim = 0
    for raw in selectors:
        sel = as_selector(raw)
        extent = view._size[cdim]
        if isinstance(sel, int):
            z = normalize_index(sel, extent)
            if len(view._size) == 1:
                return view, view._offset + z * view._stride[0]
            select_(view, cdim, z)
            continue

        start = 0 if sel.start is None else normalize_index(sel.start, extent, "start index")
        end = extent - 1 if sel.end is None else normalize_index(sel.end, extent, "end index")
        if end < start:
            raise InvalidSizeError(
                f"end index {end + 1} must be greater or equal to start index {start + 1}"
            )
        narrow_(view, cdim, start, end - start + 1)
        cdim += 1
    return view, None
