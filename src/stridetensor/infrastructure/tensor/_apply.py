"""
Element-wise apply engine.

`apply1`, `apply2` and `apply3` visit every logical element of one, two or
three tensors in lock-step and hand the callback the backing arrays together
with the absolute storage offsets of the current elements:

    apply1(t, f)          f(data, i)
    apply2(a, b, f)       f(data_a, i_a, data_b, i_b)
    apply3(a, b, c, f)    f(data_a, i_a, data_b, i_b, data_c, i_c)

Operands must hold the same number of elements; their shapes may differ, in
which case each operand is walked in its own row-major order. Broadcasting is
never implied here: callers `expand` first.

Iteration strategy
------------------
- Fast path: when every operand is contiguous, offsets are a linear range
  `offset .. offset + n - 1` per operand.
- Strided path: one counter per dimension per operand; the innermost
  dimension advances every step and overflow carries into the next outer
  dimension until the outermost one overflows. Zero strides simply repeat
  the same slot, which is how expanded dimensions read one value many times.
"""

from __future__ import annotations

from typing import Any, Callable, Iterable, Iterator

from ...domain._errors import ElementCountMismatchError
from ._geometry import is_contiguous, n_element


def strided_offsets(t: Any) -> Iterator[int]:
    """
    Yield the absolute storage offset of every logical element of `t` in
    row-major order, using per-dimension counters with carry.
    """
    size = t._size
    stride = t._stride
    n_dim = len(size)
    if n_dim == 0:
        return
    inner = n_dim - 1
    inner_size = size[inner]
    inner_stride = stride[inner]
    counter = [0] * n_dim
    base = t._offset
    while True:
        o = base
        for _ in range(inner_size):
            yield o
            o += inner_stride
        d = inner - 1
        while d >= 0:
            counter[d] += 1
            base += stride[d]
            if counter[d] < size[d]:
                break
            base -= counter[d] * stride[d]
            counter[d] = 0
            d -= 1
        if d < 0:
            return


def element_offsets(t: Any) -> Iterable[int]:
    """
    Return the storage offsets of `t` in row-major logical order, choosing
    the linear range for contiguous tensors and the counter walk otherwise.
    """
    if not t._size:
        return range(0)
    if is_contiguous(t):
        return range(t._offset, t._offset + n_element(t))
    return strided_offsets(t)


def _check_counts(first: Any, *others: Any) -> int:
    n = n_element(first)
    for o in others:
        m = n_element(o)
        if m != n:
            raise ElementCountMismatchError(n, m)
    return n


def apply1(t: Any, func: Callable[[Any, int], None]) -> None:
    """
    Invoke `func(data, offset)` once per logical element of `t`.
    """
    if not t._size:
        return
    data = t._storage.array()
    for i in element_offsets(t):
        func(data, i)


def apply2(t1: Any, t2: Any, func: Callable[[Any, int, Any, int], None]) -> None:
    """
    Invoke `func(data1, offset1, data2, offset2)` for matching positions.

    Raises
    ------
    ElementCountMismatchError
        If the operands hold different numbers of elements.
    """
    n = _check_counts(t1, t2)
    if n == 0:
        return
    d1 = t1._storage.array()
    d2 = t2._storage.array()
    for i1, i2 in zip(element_offsets(t1), element_offsets(t2)):
        func(d1, i1, d2, i2)


def apply3(
    t1: Any,
    t2: Any,
    t3: Any,
    func: Callable[[Any, int, Any, int, Any, int], None],
) -> None:
    """
    Invoke `func(data1, o1, data2, o2, data3, o3)` for matching positions.

    Raises
    ------
    ElementCountMismatchError
        If the operands hold different numbers of elements.
    """
    n = _check_counts(t1, t2, t3)
    if n == 0:
        return
    d1 = t1._storage.array()
    d2 = t2._storage.array()
    d3 = t3._storage.array()
    for i1, i2, i3 in zip(element_offsets(t1), element_offsets(t2), element_offsets(t3)):
        func(d1, i1, d2, i2, d3, i3)
