"""
Comparison mixin for Tensor.

Two tensors are equal when they have the same extents and element type and
every pair of elements at the same row-major position is nearly equal under
the receiver's numeric capability (relative tolerance, 1e-5 for FLOAT and
1e-7 for DOUBLE by default). Strides, offsets and storage identity do not
matter. A FLOAT and a DOUBLE tensor are never equal.

Hashing uses only the element type and the extents. Tolerant equality is not
transitive, so no finer hash can agree with it; this one always does.
"""

from __future__ import annotations

import logging
from abc import ABC
from collections import deque
from typing import Any, List, Tuple

from .....domain._tensor import ITensor
from ..._apply import element_offsets

logger = logging.getLogger(__name__)


class TensorMixinComparison(ABC):
    """
    Mixin implementing tolerant `==`, a consistent `__hash__` and `diff`.
    """

    def __eq__(self: ITensor, other: Any) -> Any:
        if not isinstance(other, ITensor):
            return NotImplemented
        if self is other:
            return True
        if list(self._size) != list(other._size):
            return False
        if self.data_type is not other.data_type:
            return False
        if not self._size:
            return True
        nearly_equal = self._numeric.nearly_equal
        d1 = self._storage.array()
        d2 = other._storage.array()
        for i1, i2 in zip(element_offsets(self), element_offsets(other)):
            if not nearly_equal(d1[i1], d2[i2]):
                return False
        return True

    def __hash__(self: ITensor) -> int:
        return hash((self.data_type, tuple(self._size)))

    def diff(self: ITensor, other: ITensor, count: int = 1, reverse: bool = False) -> bool:
        """
        Report where this tensor differs from `other` (exact comparison).

        Shape differences and up to `count` differing elements (the first
        ones, or the last ones when `reverse` is True) are logged at WARNING.

        Returns
        -------
        bool
            True when any difference was found.
        """
        if len(self._size) != len(other._size):
            logger.warning(
                "dimension number is different: %d vs %d",
                len(self._size),
                len(other._size),
            )
            return True
        for d, (a, b) in enumerate(zip(self._size, other._size)):
            if a != b:
                logger.warning(
                    "dimension %d is different, left is %d, right is %d", d + 1, a, b
                )
                return True
        if not self._size:
            return False

        keep = max(int(count), 1)
        found: Any = deque(maxlen=keep) if reverse else []
        total = 0
        d1 = self._storage.array()
        d2 = other._storage.array()
        for pos, (i1, i2) in enumerate(zip(element_offsets(self), element_offsets(other))):
            if d1[i1] != d2[i2]:
                total += 1
                if reverse or len(found) < keep:
                    found.append((d1[i1], d2[i2], pos + 1))

        entries: List[Tuple[Any, Any, int]] = list(found)
        n = self.n_element()
        for left, right, pos in entries:
            logger.warning(
                "found difference => this is %s other is %s position is (%d/%d)",
                left,
                right,
                pos,
                n,
            )
        return total > 0
