"""
Top-k selection kernel over one strided slice.

The slice's `(value, position)` pairs are sorted with a stable sort whose
ordering comes from the numeric capability's `is_greater`, so equal values
keep their original relative order and the reported positions are unique.
"""

from __future__ import annotations

from functools import cmp_to_key
from typing import Any, Callable, List, Tuple

from ..._dim_apply import StridedSlice


def make_topk_kernel(
    k: int, increasing: bool, is_greater: Callable[[Any, Any], bool]
) -> Callable[[StridedSlice, StridedSlice, StridedSlice], None]:
    """
    Build a `dim_apply` kernel writing the first `k` sorted values and their
    1-based positions.

    Parameters
    ----------
    k : int
        Number of entries to keep (already validated).
    increasing : bool
        True keeps the `k` smallest values in ascending order; False keeps the
        `k` largest in descending order.
    is_greater : Callable
        Strict ordering of two element values.
    """

    def _compare(a: Tuple[Any, int], b: Tuple[Any, int]) -> int:
        if is_greater(a[0], b[0]):
            return 1 if increasing else -1
        if is_greater(b[0], a[0]):
            return -1 if increasing else 1
        return 0

    key = cmp_to_key(_compare)

    def _kernel(src: StridedSlice, values: StridedSlice, indices: StridedSlice) -> None:
        pairs: List[Tuple[Any, int]] = [(src.get(i), i + 1) for i in range(src.size)]
        pairs.sort(key=key)
        for j in range(k):
            value, position = pairs[j]
            values.set(j, value)
            indices.set(j, position)

    return _kernel
