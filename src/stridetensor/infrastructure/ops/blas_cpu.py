"""
CPU reference BLAS-style kernels (NumPy backend).

These are the external numeric kernels the tensor engine delegates to for
matrix products. Each kernel receives `StridedOperand` descriptors and
updates its output operand in place:

- `gemm`: C <- beta * C + alpha * (A @ B)
- `gemv`: y <- beta * y + alpha * (A @ x)
- `ger` : A <- beta * A + alpha * outer(x, y)

Design notes
------------
- Operands are NumPy views built from the storage geometry, so any stride
  pattern (transposed, narrowed, column-major) is accepted.
- When `beta == 0` the previous output contents are ignored, so NaN/inf
  garbage in a freshly resized output never leaks into the result.
- An output with zero strides (an expanded view) aliases several logical
  positions to one slot; the kernel still runs but warns, because the result
  in such slots is whichever write lands last.
"""

from __future__ import annotations

import warnings

import numpy as np

from ._strided import StridedOperand


def _check_rank(op: StridedOperand, rank: int, name: str) -> None:
    if op.ndim != rank:
        raise ValueError(f"{name} must be {rank}D, got {op.ndim}D")


def _warn_if_overlapping(out: StridedOperand, kernel: str) -> None:
    if out.overlaps_itself():
        warnings.warn(
            f"{kernel}: output operand has zero strides; overlapping elements "
            "receive the last value written",
            RuntimeWarning,
            stacklevel=3,
        )


def _combine(out_view: np.ndarray, update: np.ndarray, alpha: float, beta: float) -> None:
    if beta == 0:
        result = alpha * update
    else:
        result = beta * out_view + alpha * update
    out_view[...] = result.astype(out_view.dtype, copy=False)


def gemm(
    alpha: float,
    a: StridedOperand,
    b: StridedOperand,
    beta: float,
    c: StridedOperand,
) -> None:
    """
    General matrix-matrix product accumulated into `c`.

    Parameters
    ----------
    alpha : float
        Scale of the product.
    a : StridedOperand
        Left matrix, shape (m, k).
    b : StridedOperand
        Right matrix, shape (k, n).
    beta : float
        Scale of the previous contents of `c`.
    c : StridedOperand
        Output matrix, shape (m, n), updated in place.

    Raises
    ------
    ValueError
        If ranks or inner dimensions do not match.
    """
    _check_rank(a, 2, "gemm: A")
    _check_rank(b, 2, "gemm: B")
    _check_rank(c, 2, "gemm: C")
    m, k = a.sizes
    k2, n = b.sizes
    if k != k2 or c.sizes != (m, n):
        raise ValueError(
            f"gemm: size mismatch, A {a.sizes} @ B {b.sizes} into C {c.sizes}"
        )
    _warn_if_overlapping(c, "gemm")
    cv = c.view()
    _combine(cv, a.view() @ b.view(), alpha, beta)


def gemv(
    alpha: float,
    a: StridedOperand,
    x: StridedOperand,
    beta: float,
    y: StridedOperand,
) -> None:
    """
    General matrix-vector product accumulated into `y`.

    Raises
    ------
    ValueError
        If `a` is not (m, n), `x` not (n,) or `y` not (m,).
    """
    _check_rank(a, 2, "gemv: A")
    _check_rank(x, 1, "gemv: x")
    _check_rank(y, 1, "gemv: y")
    m, n = a.sizes
    if x.sizes != (n,) or y.sizes != (m,):
        raise ValueError(
            f"gemv: size mismatch, A {a.sizes} @ x {x.sizes} into y {y.sizes}"
        )
    _warn_if_overlapping(y, "gemv")
    yv = y.view()
    _combine(yv, a.view() @ x.view(), alpha, beta)


def ger(
    alpha: float,
    x: StridedOperand,
    y: StridedOperand,
    beta: float,
    a: StridedOperand,
) -> None:
    """
    Rank-1 update `a <- beta * a + alpha * outer(x, y)`.

    Raises
    ------
    ValueError
        If `a` is not (len(x), len(y)).
    """
    _check_rank(x, 1, "ger: x")
    _check_rank(y, 1, "ger: y")
    _check_rank(a, 2, "ger: A")
    if a.sizes != (x.sizes[0], y.sizes[0]):
        raise ValueError(
            f"ger: size mismatch, outer({x.sizes}, {y.sizes}) into A {a.sizes}"
        )
    _warn_if_overlapping(a, "ger")
    av = a.view()
    _combine(av, np.outer(x.view(), y.view()), alpha, beta)
