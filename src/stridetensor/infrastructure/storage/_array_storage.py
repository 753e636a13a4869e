"""
NumPy-backed flat storage.

`ArrayStorage` owns a 1-D NumPy array and is the buffer every tensor view
aliases. It knows nothing about shapes; views translate logical positions to
absolute offsets and read or write through it.

Storages are never resized in place. A tensor that needs more room allocates
a fresh, larger `ArrayStorage` and rebinds itself; other views keep the old
one.
"""

from __future__ import annotations

from typing import Any, Iterator, Union

import numpy as np

from ...domain.types._data_type import DataType

_DTYPES = {
    DataType.FLOAT: np.dtype(np.float32),
    DataType.DOUBLE: np.dtype(np.float64),
}


def dtype_of(data_type: DataType) -> np.dtype:
    """Return the NumPy buffer dtype for a data type tag."""
    return _DTYPES[data_type]


def data_type_of(dtype: Any) -> DataType:
    """
    Return the data type tag for a NumPy dtype.

    Raises
    ------
    TypeError
        If the dtype is neither float32 nor float64.
    """
    dt = np.dtype(dtype)
    for tag, known in _DTYPES.items():
        if dt == known:
            return tag
    raise TypeError(f"Unsupported element dtype {dt}; expected float32 or float64")


class ArrayStorage:
    """
    Flat, mutable element buffer backed by a 1-D NumPy array.

    Parameters
    ----------
    data : int | np.ndarray | sequence
        Either the number of elements to allocate (zero-initialized) or an
        array-like whose values become the buffer. A 1-D ndarray of the right
        dtype is adopted without copying.
    data_type : DataType | str, optional
        Element type. When `data` is an ndarray of float32/float64 and no type
        is given, the array's dtype decides.

    Notes
    -----
    Offsets are absolute and 0-based. Reads and writes are bounds-checked;
    negative offsets are rejected rather than wrapped.
    """

    __slots__ = ("_data", "_data_type")

    def __init__(
        self,
        data: Union[int, np.ndarray, Any],
        data_type: Union[DataType, str, None] = None,
    ) -> None:
        if isinstance(data, (int, np.integer)) and not isinstance(data, bool):
            n = int(data)
            if n < 0:
                raise ValueError(f"storage length must be non-negative, got {n}")
            dt = DataType.FLOAT if data_type is None else DataType.parse(data_type)
            self._data = np.zeros(n, dtype=dtype_of(dt))
            self._data_type = dt
            return

        if data_type is None:
            if isinstance(data, np.ndarray) and data.dtype in _DTYPES.values():
                dt = data_type_of(data.dtype)
            else:
                dt = DataType.FLOAT
        else:
            dt = DataType.parse(data_type)

        arr = np.asarray(data, dtype=dtype_of(dt))
        if arr.ndim != 1:
            arr = arr.reshape(-1)
        if not arr.flags.c_contiguous:
            arr = np.ascontiguousarray(arr)
        self._data = arr
        self._data_type = dt

    @property
    def data_type(self) -> DataType:
        return self._data_type

    @property
    def dtype(self) -> np.dtype:
        return self._data.dtype

    def array(self) -> np.ndarray:
        """
        Return the backing 1-D ndarray (no copy).

        Writes through the returned array are visible to every view aliasing
        this storage.
        """
        return self._data

    def __len__(self) -> int:
        return int(self._data.shape[0])

    @property
    def length(self) -> int:
        return len(self)

    def _check(self, offset: int) -> int:
        o = int(offset)
        if o < 0 or o >= self._data.shape[0]:
            raise IndexError(
                f"storage offset {o} out of range for storage of length {len(self)}"
            )
        return o

    def __getitem__(self, offset: int) -> Any:
        return self._data[self._check(offset)]

    def __setitem__(self, offset: int, value: Any) -> None:
        self._data[self._check(offset)] = value

    def __iter__(self) -> Iterator[Any]:
        return iter(self._data)

    def fill(self, value: Any, offset: int, count: int) -> None:
        """
        Write `value` into `count` consecutive elements starting at `offset`.

        Raises
        ------
        IndexError
            If the range does not fit inside the storage.
        """
        if count <= 0:
            return
        start = int(offset)
        stop = start + int(count)
        if start < 0 or stop > len(self):
            raise IndexError(
                f"fill range [{start}, {stop}) out of range for storage of "
                f"length {len(self)}"
            )
        self._data[start:stop] = value

    def copy_from(
        self, src: "ArrayStorage", src_offset: int, dst_offset: int, count: int
    ) -> None:
        """
        Linear bulk copy of `count` elements from `src` into this storage.

        Overlapping ranges within the same storage are handled (NumPy slice
        assignment buffers the source).

        Raises
        ------
        IndexError
            If either range does not fit inside its storage.
        """
        if count <= 0:
            return
        s0, d0, n = int(src_offset), int(dst_offset), int(count)
        if s0 < 0 or s0 + n > len(src):
            raise IndexError(
                f"source range [{s0}, {s0 + n}) out of range for storage of "
                f"length {len(src)}"
            )
        if d0 < 0 or d0 + n > len(self):
            raise IndexError(
                f"destination range [{d0}, {d0 + n}) out of range for storage "
                f"of length {len(self)}"
            )
        self._data[d0 : d0 + n] = src.array()[s0 : s0 + n]

    def copy(self) -> "ArrayStorage":
        """Return an independent storage holding a copy of the buffer."""
        return ArrayStorage(self._data.copy(), self._data_type)

    def __repr__(self) -> str:
        return f"ArrayStorage(length={len(self)}, data_type={self._data_type.value})"
