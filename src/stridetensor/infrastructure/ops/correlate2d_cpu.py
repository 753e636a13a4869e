"""
CPU reference 2D correlation / convolution kernels (NumPy backend).

Both kernels take a single-plane input `x` of shape (H, W) and a kernel `k`
of shape (kH, kW) and write into a preallocated output operand:

- mode 'V' (valid): output (H - kH + 1, W - kW + 1), the kernel stays inside
  the input.
- mode 'F' (full):  output (H + kH - 1, W + kW - 1), every partial overlap is
  included (the input is zero-padded by kH - 1 / kW - 1 on each side).

`xcorr2d` slides the kernel as is; `conv2d` flips it along both axes first.

Design notes
------------
- Sliding windows are built with `sliding_window_view` and reduced with one
  `einsum`, so the kernels accept any stride pattern of the operands.
- These favor clarity over speed and serve as the numerical ground truth for
  tests.
"""

from __future__ import annotations

from typing import Tuple

import numpy as np
from numpy.lib.stride_tricks import sliding_window_view

from ._strided import StridedOperand

_MODES = ("V", "F")


def parse_mode(mode: str) -> str:
    """
    Normalize a correlation mode to 'V' or 'F'.

    Raises
    ------
    ValueError
        If `mode` is not valid/full.
    """
    m = str(mode).upper()[:1]
    if m not in _MODES:
        raise ValueError(f"mode must be 'V' (valid) or 'F' (full), got {mode!r}")
    return m


def output_size(
    input_size: Tuple[int, int], kernel_size: Tuple[int, int], mode: str
) -> Tuple[int, int]:
    """
    Compute the (rows, cols) of a 2D correlation result.

    Raises
    ------
    ValueError
        If the kernel is larger than the input in valid mode.
    """
    (h, w), (kh, kw) = input_size, kernel_size
    if parse_mode(mode) == "F":
        return h + kh - 1, w + kw - 1
    if kh > h or kw > w:
        raise ValueError(
            f"kernel {kernel_size} larger than input {input_size} in valid mode"
        )
    return h - kh + 1, w - kw + 1


def _correlate(x: np.ndarray, k: np.ndarray, mode: str) -> np.ndarray:
    kh, kw = k.shape
    if parse_mode(mode) == "F":
        x = np.pad(x, ((kh - 1, kh - 1), (kw - 1, kw - 1)))
    windows = sliding_window_view(x, (kh, kw))
    return np.einsum("ijkl,kl->ij", windows, k)


def _run(x: StridedOperand, k: StridedOperand, out: StridedOperand, mode: str, flip: bool) -> None:
    if x.ndim != 2 or k.ndim != 2 or out.ndim != 2:
        raise ValueError(
            f"2D correlation expects 2D operands, got {x.ndim}D, {k.ndim}D, {out.ndim}D"
        )
    expected = output_size(x.sizes, k.sizes, mode)
    if out.sizes != expected:
        raise ValueError(f"output must be {expected}, got {out.sizes}")
    kv = k.view()
    if flip:
        kv = kv[::-1, ::-1]
    ov = out.view()
    ov[...] = _correlate(x.view(), kv, mode).astype(ov.dtype, copy=False)


def xcorr2d(x: StridedOperand, k: StridedOperand, out: StridedOperand, mode: str = "V") -> None:
    """
    2D cross-correlation `out[i, j] = sum(x[i + a, j + b] * k[a, b])`.
    """
    _run(x, k, out, mode, flip=False)


def conv2d(x: StridedOperand, k: StridedOperand, out: StridedOperand, mode: str = "V") -> None:
    """
    2D convolution: cross-correlation with the kernel flipped on both axes.
    """
    _run(x, k, out, mode, flip=True)
