"""
Backend-agnostic contracts of the stridetensor engine.

The domain layer holds protocols, error types, element type tags and the
caller-facing index normalization rule. It does not import NumPy.
"""

from ._errors import (
    TensorValidationError,
    DimensionOutOfRangeError,
    IndexOutOfRangeError,
    ElementCountMismatchError,
    NotContiguousError,
    ExpansionError,
    InvalidSizeError,
    EmptyTensorError,
    DataTypeMismatchError,
)
from ._numeric import TensorNumeric
from ._storage import IStorage
from ._tensor import ITensor
from .types._data_type import DataType
from .utils._indexing import normalize_dim, normalize_index

__all__ = [
    TensorValidationError.__name__,
    DimensionOutOfRangeError.__name__,
    IndexOutOfRangeError.__name__,
    ElementCountMismatchError.__name__,
    NotContiguousError.__name__,
    ExpansionError.__name__,
    InvalidSizeError.__name__,
    EmptyTensorError.__name__,
    DataTypeMismatchError.__name__,
    TensorNumeric.__name__,
    IStorage.__name__,
    ITensor.__name__,
    DataType.__name__,
    normalize_dim.__name__,
    normalize_index.__name__,
]
