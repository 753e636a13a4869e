"""
Strided tensor views and their engines.

- `_geometry`  : in-place 0-based view primitives
- `_apply`     : element-wise apply engine
- `_dim_apply` : dimension-apply engine
- `_slice`     : slice resolver
- `_tensor`    : the concrete `Tensor`
"""

from ._slice import Range
from ._tensor import Tensor
from .mixins.memory import TensorExport

__all__ = [
    Tensor.__name__,
    Range.__name__,
    TensorExport.__name__,
]
