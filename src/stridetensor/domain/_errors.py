"""
Validation errors raised by the stridetensor engine.

Every geometry or usage violation detected by the view algebra, the apply
engines or the slice resolver is reported through one of the exceptions in
this module. They all derive from `TensorValidationError` (itself a
`ValueError`), so callers can catch the whole family with a single clause
while tests can still assert on the precise failure.

Nothing in the engine clamps, truncates or silently broadcasts: when one of
these errors is raised, no tensor metadata has been modified.
"""

from __future__ import annotations

from typing import Sequence


class TensorValidationError(ValueError):
    """
    Base class for all tensor geometry and usage violations.
    """


class DimensionOutOfRangeError(TensorValidationError):
    """
    Raised when a dimension index falls outside `[1, rank]`.

    Attributes
    ----------
    dim : int
        The dimension index as supplied by the caller (1-based, possibly
        negative).
    n_dim : int
        Rank of the tensor the dimension was resolved against.
    """

    def __init__(self, dim: int, n_dim: int) -> None:
        """
        Initialize the DimensionOutOfRangeError.

        Parameters
        ----------
        dim : int
            Offending dimension index (caller-facing value).
        n_dim : int
            Rank of the tensor.
        """
        super().__init__(f"dimension {dim} out of range of {n_dim}D tensor")
        self.dim = dim
        self.n_dim = n_dim


class IndexOutOfRangeError(TensorValidationError, IndexError):
    """
    Raised when an element or slice index falls outside a dimension's extent.

    Also an `IndexError`, so code that walks sequences by catching
    `IndexError` treats tensors like any other indexable.

    Attributes
    ----------
    index : int
        The index as supplied by the caller (1-based, possibly negative).
    extent : int
        Extent of the dimension being indexed.
    """

    def __init__(self, index: int, extent: int, what: str = "index") -> None:
        """
        Initialize the IndexOutOfRangeError.

        Parameters
        ----------
        index : int
            Offending index (caller-facing value).
        extent : int
            Extent of the indexed dimension.
        what : str, optional
            Short label used in the message (e.g. "start index").
        """
        super().__init__(f"{what} {index} out of bound, valid range is 1 to {extent}")
        self.index = index
        self.extent = extent


class ElementCountMismatchError(TensorValidationError):
    """
    Raised when operands of an element-wise operation differ in element count.
    """

    def __init__(self, expected: int, got: int) -> None:
        super().__init__(
            f"inconsistent tensor size: expected {expected} elements, got {got}"
        )
        self.expected = expected
        self.got = got


class NotContiguousError(TensorValidationError):
    """
    Raised when an operation requires a contiguous (or canonical-layout) view.

    Attributes
    ----------
    op : str
        Name of the operation that required contiguity.
    """

    def __init__(self, op: str) -> None:
        super().__init__(f"{op} requires a contiguous tensor")
        self.op = op


class ExpansionError(TensorValidationError):
    """
    Raised when `expand` targets a dimension whose extent is neither 1 nor the
    requested size.
    """

    def __init__(self, size: Sequence[int], target: Sequence[int]) -> None:
        super().__init__(
            f"incorrect size {tuple(target)} for tensor of size {tuple(size)}: "
            "only singleton dimensions (size=1) may be expanded"
        )
        self.size = tuple(size)
        self.target = tuple(target)


class InvalidSizeError(TensorValidationError):
    """
    Raised for non-positive or inconsistent sizes (narrow length, unfold
    window/step, top-k `k`, view/resize shapes, stride arity).
    """


class EmptyTensorError(TensorValidationError):
    """
    Raised when an operation needs at least one dimension but the tensor has
    rank 0.
    """

    def __init__(self, op: str) -> None:
        super().__init__(f"{op} is not defined for an empty tensor")
        self.op = op


class DataTypeMismatchError(TensorValidationError):
    """
    Raised when two operands (or a tensor and a storage) carry different
    element types.
    """

    def __init__(self, expected: str, got: str) -> None:
        super().__init__(f"data type mismatch: expected {expected}, got {got}")
        self.expected = expected
        self.got = got
