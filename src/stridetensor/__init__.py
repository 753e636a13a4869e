"""
stridetensor: strided N-dimensional tensor views over shared flat storage.

Quick start
-----------
>>> from stridetensor import Tensor, Range
>>> t = Tensor.from_numpy([[1.0, 2.0, 3.0], [4.0, 5.0, 6.0]])
>>> t.narrow(2, 2, 2).size()
(2, 2)
>>> t[2, Range(2, 3)].to_numpy()
array([5., 6.])

The public API is 1-based: dimensions and element indices start at 1, and a
negative value `-k` counts back from the end (`-1` is the last element).
"""

from .domain import (
    DataType,
    DataTypeMismatchError,
    DimensionOutOfRangeError,
    ElementCountMismatchError,
    EmptyTensorError,
    ExpansionError,
    IndexOutOfRangeError,
    InvalidSizeError,
    NotContiguousError,
    TensorValidationError,
)
from .infrastructure._config import TensorConfig, get_config, reset_config
from .infrastructure.numeric import DoubleNumeric, FloatNumeric, numeric_for
from .infrastructure.random import RandomGenerator
from .infrastructure.storage import ArrayStorage
from .infrastructure.tensor import Range, Tensor, TensorExport

__all__ = [
    Tensor.__name__,
    Range.__name__,
    TensorExport.__name__,
    ArrayStorage.__name__,
    FloatNumeric.__name__,
    DoubleNumeric.__name__,
    numeric_for.__name__,
    RandomGenerator.__name__,
    DataType.__name__,
    TensorConfig.__name__,
    get_config.__name__,
    reset_config.__name__,
    TensorValidationError.__name__,
    DimensionOutOfRangeError.__name__,
    IndexOutOfRangeError.__name__,
    ElementCountMismatchError.__name__,
    NotContiguousError.__name__,
    ExpansionError.__name__,
    InvalidSizeError.__name__,
    EmptyTensorError.__name__,
    DataTypeMismatchError.__name__,
]
