"""
Storage interface definitions.

A storage is the flat, shape-less element buffer that tensor views alias.
This protocol captures the operations the engine relies on so that domain
code can type against storages without importing NumPy.
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

from .types._data_type import DataType


@runtime_checkable
class IStorage(Protocol):
    """
    Flat, mutable, single-typed element buffer.

    Offsets are absolute 0-based element positions. Storages carry no shape
    information and are shared by reference between every view built on
    them.
    """

    @property
    def data_type(self) -> DataType:
        """Element type tag of the buffer."""
        ...

    def __len__(self) -> int:
        """Number of addressable elements."""
        ...

    def __getitem__(self, offset: int) -> Any:
        """Bounds-checked read of one element."""
        ...

    def __setitem__(self, offset: int, value: Any) -> None:
        """Bounds-checked write of one element."""
        ...

    def array(self) -> Any:
        """
        Return the backend-native flat buffer (e.g. a 1-D `np.ndarray`).

        Engines use this for hot loops and for handing geometry to external
        kernels; writes through it are visible to every aliasing view.
        """
        ...

    def fill(self, value: Any, offset: int, count: int) -> None:
        """Write `value` into `count` consecutive elements from `offset`."""
        ...

    def copy_from(
        self, src: "IStorage", src_offset: int, dst_offset: int, count: int
    ) -> None:
        """Linear bulk copy of `count` elements from `src` into this storage."""
        ...
