"""
Normalization of caller-facing indices.

The public tensor API is 1-based and accepts negative indices counted from
the end (`-1` is the last element). The engine underneath is strictly
0-based. Every public accessor funnels its indices through the two helpers
below so the conversion rule lives in exactly one place:

    negative i  ->  extent + i + 1      (then shifted to 0-based)

Index `0` is never valid on the public surface.
"""

from __future__ import annotations

from .._errors import DimensionOutOfRangeError, IndexOutOfRangeError


def normalize_index(index: int, extent: int, what: str = "index") -> int:
    """
    Convert a 1-based, possibly negative index into a 0-based position.

    Parameters
    ----------
    index : int
        Caller-facing index. Positive values count from 1; negative values
        count backward from the end (`-1` is the last element).
    extent : int
        Extent of the dimension being indexed.
    what : str, optional
        Label used in the error message.

    Returns
    -------
    int
        The 0-based position in `[0, extent)`.

    Raises
    ------
    IndexOutOfRangeError
        If the resolved position is outside `[0, extent)`.
    """
    z = int(index) - 1
    if z < 0:
        z = extent + z + 1
    if z < 0 or z >= extent:
        raise IndexOutOfRangeError(index, extent, what)
    return z


def normalize_dim(dim: int, n_dim: int) -> int:
    """
    Convert a 1-based, possibly negative dimension index into a 0-based one.

    Raises
    ------
    DimensionOutOfRangeError
        If the dimension does not exist on a tensor of rank `n_dim`.
    """
    d = int(dim) - 1
    if d < 0:
        d = n_dim + d + 1
    if d < 0 or d >= n_dim:
        raise DimensionOutOfRangeError(dim, n_dim)
    return d
